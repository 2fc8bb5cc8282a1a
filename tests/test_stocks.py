import pytest

from helpers import adjust_stock, data_of, make_plain_product, make_warehouse, url_prefix


async def make_category(ac_client, headers, store_id, name):
    resp = await ac_client.post(f"{url_prefix}/categories/{store_id}", headers=headers, json={"name": name})
    return data_of(resp)["category"]["id"]


@pytest.mark.asyncio
async def test_stock_view_filters(ac_client, owner):
    headers, store_id = owner
    bags = await make_category(ac_client, headers, store_id, "Bags")
    ikeja = await make_warehouse(ac_client, headers, store_id, "Ikeja Main")
    abuja = await make_warehouse(ac_client, headers, store_id, "Abuja Annex")
    tote = await make_plain_product(ac_client, headers, store_id, "Tote", categories=[bags])
    anklet = await make_plain_product(ac_client, headers, store_id, "Anklet")

    await adjust_stock(ac_client, headers, store_id, ikeja, tote, 3, "INCREASE")
    await adjust_stock(ac_client, headers, store_id, abuja, tote, 7, "INCREASE")
    await adjust_stock(ac_client, headers, store_id, ikeja, anklet, 1, "INCREASE")
    base = f"{url_prefix}/stocks/{store_id}"

    resp = await ac_client.get(base, headers=headers)
    page = data_of(resp)
    assert page["meta"]["totalCount"] == 3

    resp = await ac_client.get(base, headers=headers, params={"warehouseId": ikeja})
    assert sorted(s["product"]["name"] for s in data_of(resp)["items"]) == ["Anklet", "Tote"]

    resp = await ac_client.get(base, headers=headers, params={"categoryId": bags})
    items = data_of(resp)["items"]
    assert sorted(s["quantity"] for s in items) == [3, 7]
    assert items[0]["product"]["categories"] == ["Bags"]

    resp = await ac_client.get(base, headers=headers, params={"search": "ank"})
    assert [s["warehouse"]["name"] for s in data_of(resp)["items"]] == ["Ikeja Main"]

    resp = await ac_client.get(f"{base}/product/{tote}", headers=headers)
    assert [s["quantity"] for s in data_of(resp)["items"]] == [3, 7]

    resp = await ac_client.get(f"{base}/product/{anklet}/warehouse/{abuja}", headers=headers)
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_stock_export_and_cleanup(ac_client, owner):
    headers, store_id = owner
    ikeja = await make_warehouse(ac_client, headers, store_id)
    tote = await make_plain_product(ac_client, headers, store_id, "Tote")
    await adjust_stock(ac_client, headers, store_id, ikeja, tote, 3, "INCREASE")

    resp = await ac_client.get(f"{url_prefix}/stocks/{store_id}/export", headers=headers)
    lines = resp.text.strip().splitlines()
    assert lines[0] == "id,productId,product,warehouseId,warehouse,quantity,categories,updatedAt"
    assert len(lines) == 2

    resp = await ac_client.delete(f"{url_prefix}/products/{store_id}/{tote}", headers=headers)
    assert resp.status_code == 200
    resp = await ac_client.get(f"{url_prefix}/stocks/{store_id}/all", headers=headers)
    assert data_of(resp)["items"] == []
    resp = await ac_client.get(f"{url_prefix}/stock-adjustments/{store_id}/all", headers=headers)
    assert data_of(resp)["items"] == []
