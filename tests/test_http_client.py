"""
HttpClient tests against a local aiohttp server.
"""

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from educard.core.exceptions import UpstreamAPIError
from educard.core.integrations.http.http_client import HttpClient
from educard.repositories.holiday_repository import HolidayRepository

from fakes import envelope


@pytest.fixture
async def upstream():
    """Local server whose answers the test scripts through ``state``."""
    state = {"answers": [], "requests": []}

    async def handler(request: web.Request) -> web.Response:
        body = await request.json() if request.can_read_body else None
        state["requests"].append({
            "method": request.method,
            "path": request.path,
            "query": dict(request.query),
            "headers": dict(request.headers),
            "json": body,
        })
        status, payload = state["answers"].pop(0) if state["answers"] else (200, envelope({}))
        if payload is None:
            return web.Response(status=status)
        return web.json_response(payload, status=status)

    app = web.Application()
    app.router.add_route("*", "/{tail:.*}", handler)
    server = TestServer(app)
    await server.start_server()
    state["url"] = str(server.make_url("/api/v1"))
    yield state
    await server.close()


@pytest.fixture
async def client(upstream):
    http_client = HttpClient(base_url=upstream["url"], token="secret", max_retries=3, retry_delay=0)
    yield http_client
    await http_client.close()


async def test_get_sends_token_and_params(upstream, client):
    upstream["answers"].append((200, envelope([1, 2])))

    body = await client.get("/attendance/admin/holiday-calendar/", params={"page": 2})

    assert body["data"] == [1, 2]
    request = upstream["requests"][0]
    assert request["path"] == "/api/v1/attendance/admin/holiday-calendar/"
    assert request["query"] == {"page": "2"}
    assert request["headers"]["Authorization"] == "Bearer secret"


async def test_server_errors_are_retried_for_reads(upstream, client):
    upstream["answers"].extend([(503, {"detail": "busy"}), (200, envelope({"ok": True}))])

    body = await client.get("/students/", params={"page": 1})

    assert body["data"] == {"ok": True}
    assert len(upstream["requests"]) == 2
    assert upstream["requests"][1]["query"] == {"page": "1"}


async def test_create_is_sent_once_after_gateway_error(upstream, client):
    upstream["answers"].extend([(502, {"detail": "Bad gateway"}), (200, envelope({"public_id": "h2"}))])
    repository = HolidayRepository(client)

    with pytest.raises(UpstreamAPIError) as exc_info:
        await repository.create({
            "start_date": "2025-01-26",
            "end_date": "2025-01-26",
            "holiday_type": "NATIONAL_HOLIDAY",
            "description": "Republic Day",
        })

    assert exc_info.value.status_code == 502
    posts = [r for r in upstream["requests"] if r["method"] == "POST"]
    assert len(posts) == 1


async def test_update_is_not_retried_on_server_error(upstream, client):
    upstream["answers"].append((503, None))

    with pytest.raises(UpstreamAPIError) as exc_info:
        await client.patch("/students/classes/c1/students/s1/", json={"phone": "9876543210"})

    assert exc_info.value.status_code == 502
    assert len(upstream["requests"]) == 1


async def test_client_errors_are_not_retried(upstream, client):
    upstream["answers"].append((400, {
        "success": False,
        "message": "Validation failed",
        "errors": {"description": ["This field is required."]},
    }))

    with pytest.raises(UpstreamAPIError) as exc_info:
        await client.patch("/attendance/admin/holiday-calendar/h1/", json={})

    assert exc_info.value.status_code == 400
    assert exc_info.value.details == {"description": ["This field is required."]}
    assert len(upstream["requests"]) == 1


async def test_gives_up_after_max_retries(upstream, client):
    upstream["answers"].extend([(502, None)] * 3)

    with pytest.raises(UpstreamAPIError) as exc_info:
        await client.get("/leave/leave-allocations/")

    assert exc_info.value.status_code == 502
    assert len(upstream["requests"]) == 3


async def test_delete_is_attempted_once(upstream, client):
    upstream["answers"].extend([(502, None)] * 3)

    with pytest.raises(UpstreamAPIError):
        await client.delete("/leave/leave-allocations/a1/")

    assert len(upstream["requests"]) == 1


async def test_empty_body_is_none(upstream, client):
    upstream["answers"].append((204, None))

    assert await client.delete("/attendance/calendar-exception/e1/") is None


async def test_unreachable_upstream_maps_to_503():
    http_client = HttpClient(base_url="http://127.0.0.1:9", max_retries=1, retry_delay=0)
    try:
        with pytest.raises(UpstreamAPIError) as exc_info:
            await http_client.get("/students/")
    finally:
        await http_client.close()

    assert exc_info.value.status_code == 503
