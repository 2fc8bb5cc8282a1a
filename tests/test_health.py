import pytest

from helpers import url_prefix


@pytest.mark.asyncio
async def test_health(ac_client):
    resp = await ac_client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "UP", "message": "Service is healthy"}


@pytest.mark.asyncio
async def test_request_id_is_echoed(ac_client):
    resp = await ac_client.get("/health", headers={"X-Request-ID": "req-123"})
    assert resp.headers["X-Request-ID"] == "req-123"

    resp = await ac_client.get("/health")
    assert resp.headers.get("X-Request-ID")


@pytest.mark.asyncio
async def test_openapi_served_at_swagger_json(ac_client):
    resp = await ac_client.get("/swagger.json")
    assert resp.status_code == 200
    paths = resp.json()["paths"]
    assert f"{url_prefix}/auth/register" in paths
    assert f"{url_prefix}/products/{{store_id}}" in paths

    resp = await ac_client.get("/docs")
    assert resp.status_code == 200


@pytest.mark.asyncio
async def test_unknown_route_uses_error_envelope(ac_client):
    resp = await ac_client.get(f"{url_prefix}/nope")
    assert resp.status_code == 404
    body = resp.json()
    assert body["status"] == "error"
    assert body["error"]["code"] == "NOT_FOUND"
