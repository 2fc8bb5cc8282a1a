import pytest

from helpers import data_of, error_of, png_bytes, url_prefix


@pytest.mark.asyncio
async def test_product_group_crud(ac_client, owner):
    headers, store_id = owner
    base = f"{url_prefix}/product-groups/{store_id}"

    resp = await ac_client.post(base, headers=headers, json={"name": "Summer Edit", "description": "Light fabrics"})
    assert resp.status_code == 201
    group = data_of(resp)["group"]
    await ac_client.post(base, headers=headers, json={"name": "Gift Ideas"})

    resp = await ac_client.get(base, headers=headers, params={"search": "fabric"})
    assert [g["name"] for g in data_of(resp)["items"]] == ["Summer Edit"]

    url = f"{base}/{group['id']}"
    resp = await ac_client.put(url, headers=headers, json={"description": ""})
    assert data_of(resp)["group"]["description"] == ""
    resp = await ac_client.get(url, headers=headers)
    assert data_of(resp)["group"]["description"] == ""
    assert data_of(resp)["group"]["name"] == "Summer Edit"

    resp = await ac_client.post(base, headers=headers, json={"name": "   "})
    assert resp.status_code == 400
    assert error_of(resp)["message"] == "Product group name is required"

    resp = await ac_client.get(f"{base}/export", headers=headers)
    lines = resp.text.strip().splitlines()
    assert lines[0] == "id,name,description,imageUrl,createdAt"
    assert len(lines) == 3

    resp = await ac_client.delete(url, headers=headers)
    assert resp.status_code == 200
    resp = await ac_client.get(url, headers=headers)
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_product_group_image(ac_client, owner, uploaded):
    headers, store_id = owner
    base = f"{url_prefix}/product-groups/{store_id}"
    group = data_of(await ac_client.post(base, headers=headers, json={"name": "Summer Edit"}))["group"]

    resp = await ac_client.post(f"{base}/{group['id']}/image", headers=headers,
                                files={"image": ("cover.png", png_bytes(), "image/png")})
    assert resp.status_code == 200
    assert data_of(resp)["group"]["imageUrl"].startswith("https://res.cloudinary.com/")
    assert uploaded[-1]["folder"].endswith(f"stores/{store_id}/product-groups")
