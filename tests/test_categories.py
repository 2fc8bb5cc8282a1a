import pytest

from helpers import data_of, error_of, url_prefix


@pytest.mark.asyncio
async def test_category_crud(ac_client, owner):
    headers, store_id = owner
    base = f"{url_prefix}/categories/{store_id}"

    resp = await ac_client.post(base, headers=headers, json={"name": "  Shoes ", "description": "Footwear"})
    assert resp.status_code == 201
    category = data_of(resp)["category"]
    assert category["name"] == "Shoes"
    assert category["productIds"] == []

    await ac_client.post(base, headers=headers, json={"name": "Bags"})
    resp = await ac_client.get(base, headers=headers, params={"categoryName": "sho"})
    data = data_of(resp)
    assert [c["name"] for c in data["items"]] == ["Shoes"]
    assert data["meta"]["totalCount"] == 1

    resp = await ac_client.put(f"{base}/{category['id']}", headers=headers, json={"description": ""})
    assert data_of(resp)["category"]["description"] == ""
    assert data_of(resp)["category"]["name"] == "Shoes"

    resp = await ac_client.get(f"{base}/{category['id']}", headers=headers)
    assert data_of(resp)["category"]["description"] == ""

    resp = await ac_client.put(f"{base}/{category['id']}", headers=headers, json={"name": "  "})
    assert resp.status_code == 400

    resp = await ac_client.delete(f"{base}/{category['id']}", headers=headers)
    assert resp.status_code == 200
    resp = await ac_client.get(f"{base}/{category['id']}", headers=headers)
    assert resp.status_code == 404
    assert error_of(resp)["code"] == "NOT_FOUND"


@pytest.mark.asyncio
async def test_category_export_csv(ac_client, owner):
    headers, store_id = owner
    base = f"{url_prefix}/categories/{store_id}"
    await ac_client.post(base, headers=headers, json={"name": "Hats", "description": "Caps, berets"})

    resp = await ac_client.get(f"{base}/export", headers=headers)
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    assert "attachment" in resp.headers["content-disposition"]
    lines = resp.text.strip().splitlines()
    assert lines[0] == "id,name,description,image,productCount,createdAt"
    assert '"Caps, berets"' in lines[1]


@pytest.mark.asyncio
async def test_categories_are_tenant_scoped(ac_client, make_store):
    headers_a, store_a = await make_store(email="a@shopmail.com", store_url="store-a")
    headers_b, store_b = await make_store(email="b@shopmail.com", store_url="store-b")

    resp = await ac_client.post(f"{url_prefix}/categories/{store_a}", headers=headers_a, json={"name": "Private"})
    category_id = data_of(resp)["category"]["id"]

    resp = await ac_client.get(f"{url_prefix}/categories/{store_b}/{category_id}", headers=headers_b)
    assert resp.status_code == 404

    resp = await ac_client.get(f"{url_prefix}/categories/{store_a}/{category_id}", headers=headers_b)
    assert resp.status_code == 403
