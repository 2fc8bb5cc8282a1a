import pytest

from helpers import data_of, url_prefix


@pytest.mark.asyncio
async def test_variant_options_lifecycle(ac_client, owner):
    headers, store_id = owner
    base = f"{url_prefix}/product-variants/{store_id}"

    resp = await ac_client.post(base, headers=headers, json={
        "name": "Size", "hasMultipleOptions": True, "options": [" S ", "M", "L"]})
    assert resp.status_code == 201
    variant = data_of(resp)["variant"]
    assert [o["name"] for o in variant["options"]] == ["S", "M", "L"]

    url = f"{base}/{variant['id']}"
    resp = await ac_client.put(url, headers=headers, json={"name": "Shoe size"})
    updated = data_of(resp)["variant"]
    assert updated["name"] == "Shoe size"
    assert len(updated["options"]) == 3

    resp = await ac_client.put(url, headers=headers, json={"options": ["40", "41"]})
    assert [o["name"] for o in data_of(resp)["variant"]["options"]] == ["40", "41"]

    resp = await ac_client.put(url, headers=headers, json={"options": ["  "]})
    assert resp.status_code == 400

    resp = await ac_client.get(f"{base}/export", headers=headers)
    lines = resp.text.strip().splitlines()
    assert '"40, 41"' in lines[1]

    resp = await ac_client.delete(url, headers=headers)
    assert resp.status_code == 200
    resp = await ac_client.get(base, headers=headers)
    assert data_of(resp)["items"] == []


@pytest.mark.asyncio
async def test_variant_search(ac_client, owner):
    headers, store_id = owner
    base = f"{url_prefix}/product-variants/{store_id}"
    await ac_client.post(base, headers=headers, json={"name": "Color", "options": ["Red"]})
    await ac_client.post(base, headers=headers, json={"name": "Material"})

    resp = await ac_client.get(base, headers=headers, params={"search": "col"})
    assert [v["name"] for v in data_of(resp)["items"]] == ["Color"]
