import httpx
import pytest

from nps_mcp.core.exceptions import NPSApiError
from nps_mcp.services.nps_client import NPSClient


def _client(handler, api_key="test-key") -> NPSClient:
    return NPSClient(
        api_key=api_key,
        base_url="https://developer.nps.gov/api/v1",
        timeout=5,
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_get_parks_sends_key_and_drops_empty_params():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"total": "0", "data": []})

    async with _client(handler) as client:
        data = await client.get_parks({"stateCode": "CA", "q": None, "limit": 10})

    assert data == {"total": "0", "data": []}
    request = seen[0]
    assert request.url.path == "/api/v1/parks"
    assert dict(request.url.params) == {"stateCode": "CA", "limit": "10"}
    assert request.headers["X-Api-Key"] == "test-key"


@pytest.mark.asyncio
async def test_missing_key_sends_no_header():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"data": []})

    async with _client(handler, api_key="") as client:
        await client.get_alerts({})

    assert "X-Api-Key" not in seen[0].headers


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "method, path",
    [
        ("get_alerts", "/api/v1/alerts"),
        ("get_visitor_centers", "/api/v1/visitorcenters"),
        ("get_campgrounds", "/api/v1/campgrounds"),
        ("get_events", "/api/v1/events"),
    ],
)
async def test_endpoints(method, path):
    paths = []

    def handler(request: httpx.Request) -> httpx.Response:
        paths.append(request.url.path)
        return httpx.Response(200, json={"data": []})

    async with _client(handler) as client:
        await getattr(client, method)({"parkCode": "yose"})

    assert paths == [path]


@pytest.mark.asyncio
async def test_http_error_status_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(403, json={"error": {"code": "API_KEY_INVALID"}})

    async with _client(handler) as client:
        with pytest.raises(NPSApiError) as exc_info:
            await client.get_parks({})

    assert exc_info.value.status_code == 403
    assert "403" in exc_info.value.message


@pytest.mark.asyncio
async def test_transport_error_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with _client(handler) as client:
        with pytest.raises(NPSApiError) as exc_info:
            await client.get_parks({})

    assert exc_info.value.status_code is None


@pytest.mark.asyncio
async def test_non_json_body_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>maintenance</html>")

    async with _client(handler) as client:
        with pytest.raises(NPSApiError):
            await client.get_parks({})


@pytest.mark.asyncio
async def test_client_requires_context_manager():
    client = _client(lambda request: httpx.Response(200, json={}))

    with pytest.raises(RuntimeError):
        await client.get_parks({})
