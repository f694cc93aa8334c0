"""API client errors."""


class ApiError(Exception):
    """Remote call failed or returned an unsuccessful envelope."""

    def __init__(self, message: str = "API request failed", status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)
