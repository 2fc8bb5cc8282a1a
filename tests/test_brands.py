import pytest

from helpers import data_of, png_bytes, url_prefix


@pytest.mark.asyncio
async def test_brand_crud_and_search(ac_client, owner):
    headers, store_id = owner
    base = f"{url_prefix}/brands/{store_id}"

    resp = await ac_client.post(base, headers=headers, json={"name": " Nike ", "description": "Sportswear"})
    assert resp.status_code == 201
    brand = data_of(resp)["brand"]
    assert brand["name"] == "Nike"
    await ac_client.post(base, headers=headers, json={"name": "Adire Co", "description": "Hand dyed fabric"})

    resp = await ac_client.get(base, headers=headers, params={"search": "dyed"})
    assert [b["name"] for b in data_of(resp)["items"]] == ["Adire Co"]

    resp = await ac_client.put(f"{base}/{brand['id']}", headers=headers, json={"description": None})
    assert data_of(resp)["brand"]["description"] is None

    resp = await ac_client.put(f"{base}/{brand['id']}", headers=headers, json={"name": "   "})
    assert resp.status_code == 400

    resp = await ac_client.delete(f"{base}/{brand['id']}", headers=headers)
    assert resp.status_code == 200
    resp = await ac_client.get(f"{base}/{brand['id']}", headers=headers)
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_brand_image_upload(ac_client, owner, uploaded):
    headers, store_id = owner
    base = f"{url_prefix}/brands/{store_id}"
    brand = data_of(await ac_client.post(base, headers=headers, json={"name": "Nike"}))["brand"]

    resp = await ac_client.post(f"{base}/{brand['id']}/image", headers=headers,
                                files={"image": ("logo.png", png_bytes(), "image/png")})
    assert resp.status_code == 200
    assert data_of(resp)["brand"]["imageUrl"].startswith("https://res.cloudinary.com/")
    assert uploaded[-1]["folder"].endswith(f"stores/{store_id}/brands")


@pytest.mark.asyncio
async def test_brand_export(ac_client, owner):
    headers, store_id = owner
    await ac_client.post(f"{url_prefix}/brands/{store_id}", headers=headers, json={"name": "Nike"})
    resp = await ac_client.get(f"{url_prefix}/brands/{store_id}/export", headers=headers)
    lines = resp.text.strip().splitlines()
    assert lines[0] == "id,name,description,imageUrl,createdAt"
    assert ",Nike," in lines[1]
