import pytest

from helpers import data_of, error_of, url_prefix

MAIN = {"name": "Ikeja Main", "address": "4 Allen Ave", "city": "Lagos", "country": "Nigeria", "zipCode": "100271"}


@pytest.mark.asyncio
async def test_warehouse_crud(ac_client, owner):
    headers, store_id = owner
    base = f"{url_prefix}/warehouses/{store_id}"

    resp = await ac_client.post(base, headers=headers, json=MAIN)
    assert resp.status_code == 201
    warehouse = data_of(resp)["warehouse"]
    assert warehouse["zipCode"] == "100271"
    assert warehouse["isActive"] is True

    url = f"{base}/{warehouse['id']}"
    resp = await ac_client.put(url, headers=headers, json={"phone": "+2348011111111", "isActive": False})
    updated = data_of(resp)["warehouse"]
    assert updated["phone"] == "+2348011111111"
    assert updated["isActive"] is False
    assert updated["city"] == "Lagos"

    resp = await ac_client.put(url, headers=headers, json={"name": "  "})
    assert resp.status_code == 400
    resp = await ac_client.put(url, headers=headers, json={"capacity": 10})
    assert resp.status_code == 400

    resp = await ac_client.delete(url, headers=headers)
    assert resp.status_code == 200
    resp = await ac_client.get(url, headers=headers)
    assert resp.status_code == 404
    assert error_of(resp)["message"] == "Warehouse not found"


@pytest.mark.asyncio
async def test_warehouse_listing(ac_client, owner):
    headers, store_id = owner
    base = f"{url_prefix}/warehouses/{store_id}"
    await ac_client.post(base, headers=headers, json=MAIN)
    await ac_client.post(base, headers=headers, json={"name": "Abuja Annex", "city": "Abuja", "isActive": False})

    resp = await ac_client.get(base, headers=headers, params={"search": "abuja"})
    assert [w["name"] for w in data_of(resp)["items"]] == ["Abuja Annex"]

    resp = await ac_client.get(base, headers=headers, params={"isActive": "true"})
    assert [w["name"] for w in data_of(resp)["items"]] == ["Ikeja Main"]

    resp = await ac_client.get(base, headers=headers, params={"page": 1, "limit": 1})
    page = data_of(resp)
    assert page["meta"]["totalCount"] == 2
    assert page["meta"]["totalPages"] == 2
    assert len(page["items"]) == 1

    resp = await ac_client.get(f"{base}/all", headers=headers)
    assert [w["name"] for w in data_of(resp)["items"]] == ["Ikeja Main"]

    resp = await ac_client.get(f"{base}/export", headers=headers)
    lines = resp.text.strip().splitlines()
    assert lines[0] == "id,name,address,city,state,country,zipCode,phone,isActive,createdAt"
    assert len(lines) == 3


@pytest.mark.asyncio
async def test_warehouses_are_store_scoped(ac_client, make_store):
    headers_a, store_a = await make_store(email="a@shopmail.com", store_url="store-a")
    headers_b, store_b = await make_store(email="b@shopmail.com", store_url="store-b")
    resp = await ac_client.post(f"{url_prefix}/warehouses/{store_a}", headers=headers_a, json=MAIN)
    warehouse_id = data_of(resp)["warehouse"]["id"]

    resp = await ac_client.get(f"{url_prefix}/warehouses/{store_b}/{warehouse_id}", headers=headers_b)
    assert resp.status_code == 404
    resp = await ac_client.get(f"{url_prefix}/warehouses/{store_a}/{warehouse_id}", headers=headers_b)
    assert resp.status_code == 403
