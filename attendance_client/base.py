"""Base HTTP client with retry logic."""

import asyncio

import httpx
from loguru import logger
from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from attendance_client.errors import ApiError
from settings import API_BASE_URL, API_TIMEOUT, MAX_CONCURRENT


def _is_retryable_error(exc: BaseException) -> bool:
    """Check if exception is retryable (network errors + 5xx server errors)."""
    if isinstance(exc, (httpx.ReadError, httpx.ConnectError, httpx.TimeoutException)):
        return True
    return isinstance(exc, httpx.HTTPStatusError) and exc.response.status_code >= 500


def _error_message(resp: httpx.Response) -> str:
    """Pull the server's message out of an error response."""
    fallback = f"HTTP error! status: {resp.status_code}"
    try:
        body = resp.json()
    except ValueError:
        return resp.reason_phrase or fallback
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return fallback


class BaseClient:
    """Base async HTTP client for the attendance API.

    Responses are ``{success, message, data}`` envelopes; ``_get`` returns the
    ``data`` member or raises ``ApiError``.
    """

    def __init__(
        self,
        base_url: str = API_BASE_URL,
        token: str | None = None,
        max_concurrent: int = MAX_CONCURRENT,
        timeout: float = API_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._sem = asyncio.Semaphore(max_concurrent)
        self._request_count = 0
        logger.info("{}: max_concurrent={}", self.__class__.__name__, max_concurrent)

    @property
    def request_count(self) -> int:
        return self._request_count

    def set_token(self, token: str | None) -> None:
        """Replace the bearer token used for subsequent requests."""
        self._token = token

    async def __aenter__(self):
        self._client = httpx.AsyncClient(
            timeout=self._timeout,
            limits=httpx.Limits(max_connections=50, max_keepalive_connections=10),
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *_):
        logger.info("Total API requests: {}", self._request_count)
        if self._client:
            await self._client.aclose()
            self._client = None

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception(_is_retryable_error),
        reraise=True,
    )
    async def _request(self, path: str) -> httpx.Response:
        """GET request with retry logic."""
        if self._client is None:
            raise RuntimeError(f"{self.__class__.__name__} used outside 'async with'")
        async with self._sem:
            self._request_count += 1
            resp = await self._client.get(f"{self._base_url}/{path}", headers=self._headers())
            resp.raise_for_status()
            return resp

    async def _get(self, path: str, failure: str = "Request failed"):
        """GET an envelope and return its ``data``."""
        try:
            resp = await self._request(path)
        except httpx.HTTPStatusError as e:
            raise ApiError(_error_message(e.response), e.response.status_code) from e
        except httpx.TransportError as e:
            raise ApiError(f"Network error: unable to connect to {self._base_url}") from e

        try:
            payload = resp.json()
        except ValueError as e:
            raise ApiError("Invalid JSON response from server", resp.status_code) from e

        if not isinstance(payload, dict) or not payload.get("success") or payload.get("data") is None:
            message = payload.get("message") if isinstance(payload, dict) else None
            raise ApiError(message or failure, resp.status_code)
        return payload["data"]


def as_list(data) -> list:
    """Normalize single-object payloads to a list."""
    return data if isinstance(data, list) else [data]


async def safe_request(coro, default=None):
    """Execute coroutine, return default on failure."""
    try:
        return await coro
    except ApiError as e:
        logger.warning("Request failed: {}", e)
        return default if default is not None else []
