import asyncio
import json

import httpx
import pytest

from hrtime.core.exceptions import UpstreamAPIError
from hrtime.schemas.auth import Identity
from hrtime.services.api_client import HRApiClient, unwrap

MANAGER = Identity(id=9, name="Maya", email="maya@example.com", role="MANAGER")
EMPLOYEE = Identity(id=1, name="Ann", email="ann@example.com", role="EMPLOYEE")


def run(handler, call):
    """Run call(client) against a mocked HR backend."""

    async def go():
        client = HRApiClient(httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://hr.test"))
        try:
            return await call(client)
        finally:
            await client.aclose()

    return asyncio.run(go())


def envelope(data, message="ok"):
    return httpx.Response(200, json={"success": True, "message": message, "data": data})


def test_unwrap_envelope_and_bare_payloads():
    assert unwrap({"success": True, "data": [1]}) == [1]
    assert unwrap([1, 2]) == [1, 2]


def test_manager_timesheets_use_manager_endpoint_with_bearer_token():
    seen = []

    def handler(request):
        seen.append(request)
        return envelope([{"id": 1, "date": "2025-09-01"}])

    result = run(handler, lambda c: c.list_timesheets(MANAGER, "tok-1"))
    assert result == [{"id": 1, "date": "2025-09-01"}]
    assert seen[0].url.path == "/api/manager/timesheets"
    assert seen[0].headers["Authorization"] == "Bearer tok-1"


def test_employee_timesheets_use_own_endpoint():
    paths = []

    def handler(request):
        paths.append(request.url.path)
        return envelope([])

    run(handler, lambda c: c.list_timesheets(EMPLOYEE, "tok"))
    assert paths == ["/api/timesheets"]


def test_non_list_data_becomes_empty_list():
    result = run(lambda request: envelope(None), lambda c: c.list_pending_grouped("tok"))
    assert result == []


def test_error_status_raises_with_backend_message():
    def handler(request):
        return httpx.Response(403, json={"success": False, "message": "Access denied"})

    with pytest.raises(UpstreamAPIError) as exc:
        run(handler, lambda c: c.list_timesheets(EMPLOYEE, "tok"))
    assert exc.value.status_code == 403
    assert exc.value.message == "Access denied"


def test_unsuccessful_envelope_raises_even_with_200():
    def handler(request):
        return httpx.Response(200, json={"success": False, "message": "Invalid status"})

    with pytest.raises(UpstreamAPIError) as exc:
        run(handler, lambda c: c.change_status("tok", 4, "APPROVED"))
    assert exc.value.status_code == 400


def test_transport_failure_raises_upstream_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UpstreamAPIError) as exc:
        run(handler, lambda c: c.list_timesheets(EMPLOYEE, "tok"))
    assert exc.value.status_code is None
    assert "unreachable" in exc.value.message


def test_change_status_sends_status_and_comment():
    bodies = []

    def handler(request):
        bodies.append((request.method, request.url.path, json.loads(request.content)))
        return envelope({"id": 42, "status": "REJECTED"})

    run(handler, lambda c: c.change_status("tok", 42, "REJECTED", "late submission"))
    assert bodies == [
        ("PUT", "/api/manager/timesheets/42/status", {"status": "REJECTED", "comment": "late submission"})
    ]


def test_login_returns_token_and_identity():
    def handler(request):
        assert "Authorization" not in request.headers
        return envelope({"token": "jwt", "user": {"id": 9, "name": "Maya", "email": "m@x.io", "role": "MANAGER"}})

    result = run(handler, lambda c: c.login("m@x.io", "secret"))
    assert result["token"] == "jwt"
    assert result["user"].is_manager()


def test_login_without_token_is_an_error():
    with pytest.raises(UpstreamAPIError):
        run(lambda request: envelope({"user": None}), lambda c: c.login("m@x.io", "secret"))
