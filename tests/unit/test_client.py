"""Tests for the attendance API clients."""

import httpx
import pytest
from tenacity import wait_none

from app.models import DomainKey
from app.services.teacher_data import TeacherApi
from attendance_client import ApiError, BaseClient, ClassesClient, TeacherClient, as_list, safe_request

BASE = "http://api.test/api"


def _envelope(data, success=True, message=None):
    return {"success": success, "message": message, "data": data}


def _transport(routes: dict, seen: list | None = None) -> httpx.MockTransport:
    """Serve ``routes`` keyed by path; a value may be ``(status, body)``."""

    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        path = request.url.path.removeprefix("/api/")
        if path not in routes:
            return httpx.Response(404, json={"success": False, "message": f"No route {path}"})
        route = routes[path]
        status, body = route if isinstance(route, tuple) else (200, route)
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, json=body)

    return httpx.MockTransport(handler)


class TestEnvelope:
    @pytest.mark.asyncio
    async def test_data_returned(self):
        transport = _transport({"teachers/dashboard": _envelope({"todayClasses": 3})})
        async with TeacherClient(BASE, transport=transport) as client:
            assert await client.dashboard() == {"todayClasses": 3}

    @pytest.mark.asyncio
    async def test_unsuccessful_envelope_uses_server_message(self):
        transport = _transport({"teachers/profile": _envelope(None, False, "Profile not set up")})
        async with TeacherClient(BASE, transport=transport) as client:
            with pytest.raises(ApiError, match="Profile not set up"):
                await client.profile()

    @pytest.mark.asyncio
    async def test_missing_data_uses_fallback_message(self):
        transport = _transport({"teachers/profile": {"success": True}})
        async with TeacherClient(BASE, transport=transport) as client:
            with pytest.raises(ApiError, match="Failed to fetch teacher profile"):
                await client.profile()

    @pytest.mark.asyncio
    async def test_http_error_carries_status(self):
        transport = _transport({"teachers/dashboard": (403, {"message": "Teacher access required"})})
        async with TeacherClient(BASE, transport=transport) as client:
            with pytest.raises(ApiError) as exc_info:
                await client.dashboard()
        assert exc_info.value.status_code == 403
        assert exc_info.value.message == "Teacher access required"

    @pytest.mark.asyncio
    async def test_http_error_without_json_body(self):
        transport = _transport({"teachers/dashboard": (401, "nope")})
        async with TeacherClient(BASE, transport=transport) as client:
            with pytest.raises(ApiError) as exc_info:
                await client.dashboard()
        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        transport = _transport({"teachers/dashboard": "<html>"})
        async with TeacherClient(BASE, transport=transport) as client:
            with pytest.raises(ApiError, match="Invalid JSON"):
                await client.dashboard()

    @pytest.mark.asyncio
    async def test_bearer_token_sent(self):
        seen = []
        transport = _transport({"teachers/dashboard": _envelope({})}, seen)
        async with TeacherClient(BASE, token="t0k", transport=transport) as client:
            await client.dashboard()
            client.set_token(None)
            await client.dashboard()
        assert seen[0].headers["Authorization"] == "Bearer t0k"
        assert "Authorization" not in seen[1].headers
        assert client.request_count == 2

    @pytest.mark.asyncio
    async def test_server_error_retried(self, monkeypatch):
        monkeypatch.setattr(BaseClient._request.retry, "wait", wait_none())
        responses = iter([httpx.Response(503), httpx.Response(200, json=_envelope({"ok": 1}))])
        transport = httpx.MockTransport(lambda request: next(responses))
        async with TeacherClient(BASE, transport=transport) as client:
            assert await client.dashboard() == {"ok": 1}
            assert client.request_count == 2

    @pytest.mark.asyncio
    async def test_client_error_not_retried(self):
        transport = _transport({"teachers/dashboard": (404, {"message": "Not found"})})
        async with TeacherClient(BASE, transport=transport) as client:
            with pytest.raises(ApiError):
                await client.dashboard()
            assert client.request_count == 1

    @pytest.mark.asyncio
    async def test_used_outside_context(self):
        with pytest.raises(RuntimeError):
            await TeacherClient(BASE).dashboard()


class TestSchemas:
    @pytest.mark.asyncio
    async def test_classes_normalized(self):
        raw = [{"_id": "c1", "name": "5A", "studentIds": ["s1"], "room": "12"}]
        transport = _transport({"teachers/classes": _envelope(raw)})
        async with TeacherClient(BASE, transport=transport) as client:
            classes = await client.assigned_classes()
        assert classes[0]["id"] == "c1"
        assert classes[0]["studentIds"] == ["s1"]
        assert classes[0]["studentCount"] == 0
        assert classes[0]["room"] == "12"

    @pytest.mark.asyncio
    async def test_single_class_becomes_list(self):
        transport = _transport({"teachers/classes": _envelope({"id": "c1", "name": "5A"})})
        async with TeacherClient(BASE, transport=transport) as client:
            classes = await client.assigned_classes()
        assert [c["id"] for c in classes] == ["c1"]

    @pytest.mark.asyncio
    async def test_roster_fills_class_id(self):
        roster = [{"_id": "s1", "name": "Asha"}, {"id": "s2", "classId": "other"}]
        transport = _transport({"classes/c1/students": _envelope(roster)})
        async with ClassesClient(BASE, transport=transport) as client:
            students = await client.students("c1")
        assert [(s["id"], s["classId"]) for s in students] == [("s1", "c1"), ("s2", "other")]
        assert students[1]["name"] == "Unknown Student"

    def test_as_list(self):
        assert as_list([1]) == [1]
        assert as_list({"a": 1}) == [{"a": 1}]


class TestSafeRequest:
    @pytest.mark.asyncio
    async def test_default_on_api_error(self):
        async def failing():
            raise ApiError("down")

        assert await safe_request(failing(), []) == []
        assert await safe_request(failing(), {"fallback": True}) == {"fallback": True}

    @pytest.mark.asyncio
    async def test_other_errors_propagate(self):
        async def broken():
            raise KeyError("id")

        with pytest.raises(KeyError):
            await safe_request(broken())


class TestTeacherApi:
    ROUTES = {
        "teachers/classes": _envelope(
            [{"id": "c1", "name": "5A"}, {"id": "c2", "name": "5B"}, {"id": "c3", "name": "5C"}]
        ),
        "classes/c1/students": _envelope([{"id": "s1", "name": "Asha"}, {"id": "s2", "name": "Ravi"}]),
        "classes/c2/students": _envelope([{"id": "s2", "name": "Ravi"}, {"id": "s3", "name": "Meena"}]),
        "teachers/dashboard": _envelope({"todayClasses": 2}),
        "teachers/profile": _envelope({"name": "Teacher One"}),
    }

    @pytest.mark.asyncio
    async def test_students_across_classes(self):
        # c3 has no roster route and answers 404
        async with TeacherApi(BASE, transport=_transport(self.ROUTES)) as api:
            students = await api.fetch_students()
        assert [s["id"] for s in students] == ["s1", "s2", "s3"]
        assert [s["classId"] for s in students] == ["c1", "c1", "c2"]

    @pytest.mark.asyncio
    async def test_students_without_classes(self):
        routes = {"teachers/classes": _envelope([])}
        async with TeacherApi(BASE, transport=_transport(routes)) as api:
            assert await api.fetch_students() == []

    @pytest.mark.asyncio
    async def test_students_fail_when_class_list_fails(self):
        routes = {"teachers/classes": (403, {"message": "Teacher access required"})}
        async with TeacherApi(BASE, transport=_transport(routes)) as api:
            with pytest.raises(ApiError, match="Teacher access required"):
                await api.fetch_students()

    @pytest.mark.asyncio
    async def test_fetchers_cover_base_domains(self):
        seen = []
        async with TeacherApi(BASE, token="abc", transport=_transport(self.ROUTES, seen)) as api:
            fetchers = api.fetchers()
            assert set(fetchers) == {
                DomainKey.CLASSES,
                DomainKey.STUDENTS,
                DomainKey.DASHBOARD,
                DomainKey.PROFILE,
            }
            assert await fetchers[DomainKey.PROFILE]() == {"name": "Teacher One"}
            assert await fetchers[DomainKey.DASHBOARD]() == {"todayClasses": 2}
        assert all(r.headers["Authorization"] == "Bearer abc" for r in seen)
