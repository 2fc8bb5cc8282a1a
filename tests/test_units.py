import pytest

from helpers import data_of, error_of, url_prefix


@pytest.mark.asyncio
async def test_unit_crud_and_filters(ac_client, owner):
    headers, store_id = owner
    base = f"{url_prefix}/units/{store_id}"

    resp = await ac_client.post(base, headers=headers, json={"name": " Kilogram "})
    assert resp.status_code == 201
    kilo = data_of(resp)["unit"]
    assert (kilo["name"], kilo["status"]) == ("Kilogram", "active")
    await ac_client.post(base, headers=headers, json={"name": "Dozen", "status": "inactive"})

    resp = await ac_client.get(base, headers=headers, params={"status": "inactive"})
    assert [u["name"] for u in data_of(resp)["items"]] == ["Dozen"]
    resp = await ac_client.get(base, headers=headers, params={"search": "kilo"})
    assert [u["name"] for u in data_of(resp)["items"]] == ["Kilogram"]
    resp = await ac_client.get(base, headers=headers, params={"status": "archived"})
    assert resp.status_code == 400

    url = f"{base}/{kilo['id']}"
    resp = await ac_client.put(url, headers=headers, json={"status": "inactive"})
    assert data_of(resp)["unit"]["status"] == "inactive"
    assert data_of(resp)["unit"]["name"] == "Kilogram"
    resp = await ac_client.put(url, headers=headers, json={"name": ""})
    assert resp.status_code == 400

    resp = await ac_client.get(f"{base}/all", headers=headers)
    assert len(data_of(resp)["items"]) == 2
    resp = await ac_client.get(f"{base}/export", headers=headers)
    assert resp.text.splitlines()[0] == "id,name,status,createdAt"

    resp = await ac_client.delete(url, headers=headers)
    assert resp.status_code == 200
    resp = await ac_client.get(url, headers=headers)
    assert error_of(resp)["message"] == "Unit not found"


@pytest.mark.asyncio
async def test_unit_of_another_store_is_not_found(ac_client, make_store):
    headers_a, store_a = await make_store(email="a@shopmail.com", store_url="store-a")
    headers_b, store_b = await make_store(email="b@shopmail.com", store_url="store-b")
    resp = await ac_client.post(f"{url_prefix}/units/{store_a}", headers=headers_a, json={"name": "Litre"})
    unit_id = data_of(resp)["unit"]["id"]

    resp = await ac_client.put(f"{url_prefix}/units/{store_b}/{unit_id}", headers=headers_b, json={"name": "Mine"})
    assert resp.status_code == 404
    resp = await ac_client.get(f"{url_prefix}/units/{store_a}/{unit_id}", headers=headers_a)
    assert data_of(resp)["unit"]["name"] == "Litre"
