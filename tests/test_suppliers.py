import pytest

from helpers import data_of, error_of, url_prefix

SUPPLIER = {
    "name": "Lagos Leather Works",
    "supplierCode": "LLW-01",
    "emails": [{"email": "Sales@LagosLeather.com"}],
    "phones": [{"phone": "+2348000000000", "type": "WORK"}],
    "addresses": [{"title": "Warehouse", "address": "12 Creek Rd", "city": "Lagos"}],
}


@pytest.mark.asyncio
async def test_supplier_create_and_replace_children(ac_client, owner):
    headers, store_id = owner
    base = f"{url_prefix}/suppliers/{store_id}"

    resp = await ac_client.post(base, headers=headers, json=SUPPLIER)
    assert resp.status_code == 201
    supplier = data_of(resp)["supplier"]
    assert supplier["emails"][0]["email"] == "sales@lagosleather.com"
    assert supplier["emails"][0]["type"] == "PRIMARY"
    assert supplier["isActive"] is True

    url = f"{base}/{supplier['id']}"
    resp = await ac_client.put(url, headers=headers, json={"phones": [], "notes": "Net 30"})
    updated = data_of(resp)["supplier"]
    assert updated["phones"] == []
    assert len(updated["emails"]) == 1
    assert len(updated["addresses"]) == 1
    assert updated["notes"] == "Net 30"

    resp = await ac_client.put(url, headers=headers, json={"emails": [{"email": "not-an-email"}]})
    assert resp.status_code == 400
    resp = await ac_client.get(url, headers=headers)
    assert data_of(resp)["supplier"]["emails"][0]["email"] == "sales@lagosleather.com"


@pytest.mark.asyncio
async def test_supplier_listing(ac_client, owner):
    headers, store_id = owner
    base = f"{url_prefix}/suppliers/{store_id}"
    await ac_client.post(base, headers=headers, json=SUPPLIER)
    await ac_client.post(base, headers=headers, json={"name": "Abuja Beads", "isActive": False})

    resp = await ac_client.get(base, headers=headers, params={"search": "llw"})
    assert [s["name"] for s in data_of(resp)["items"]] == ["Lagos Leather Works"]

    resp = await ac_client.get(base, headers=headers, params={"isActive": "false"})
    assert [s["name"] for s in data_of(resp)["items"]] == ["Abuja Beads"]

    resp = await ac_client.get(f"{base}/all", headers=headers)
    assert data_of(resp)["items"] == [{"id": 1, "name": "Lagos Leather Works", "supplierCode": "LLW-01"}]

    resp = await ac_client.get(f"{base}/export", headers=headers)
    lines = resp.text.strip().splitlines()
    assert lines[0] == "id,name,supplierCode,isActive,emails,phones,addresses,notes,createdAt"
    assert len(lines) == 3


@pytest.mark.asyncio
async def test_supplier_delete_and_scope(ac_client, make_store):
    headers_a, store_a = await make_store(email="a@shopmail.com", store_url="store-a")
    headers_b, store_b = await make_store(email="b@shopmail.com", store_url="store-b")
    resp = await ac_client.post(f"{url_prefix}/suppliers/{store_a}", headers=headers_a, json=SUPPLIER)
    supplier_id = data_of(resp)["supplier"]["id"]

    resp = await ac_client.delete(f"{url_prefix}/suppliers/{store_b}/{supplier_id}", headers=headers_b)
    assert resp.status_code == 404
    assert error_of(resp)["message"] == "Supplier not found"

    resp = await ac_client.delete(f"{url_prefix}/suppliers/{store_a}/{supplier_id}", headers=headers_a)
    assert resp.status_code == 200
    resp = await ac_client.get(f"{url_prefix}/suppliers/{store_a}", headers=headers_a)
    assert data_of(resp)["items"] == []
