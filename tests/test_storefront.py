import pytest

from backoffice.stores import storefront
from helpers import STRONG_PASSWORD, data_of, error_of, url_prefix


async def stock_store(ac_client, headers, store_id):
    resp = await ac_client.post(f"{url_prefix}/categories/{store_id}", headers=headers, json={"name": "Bags"})
    bags = data_of(resp)["category"]["id"]
    for name, hidden in (("Tote", False), ("Secret Clutch", True)):
        resp = await ac_client.post(f"{url_prefix}/products/{store_id}", headers=headers, json={
            "name": name, "hideFromHomepage": hidden, "categories": [bags],
            "pricings": [{"currencyCode": "NGN", "sellingPrice": 100}]})
        assert resp.status_code == 201
    await ac_client.post(f"{url_prefix}/brands/{store_id}", headers=headers, json={"name": "Adire Co"})
    await ac_client.put(f"{url_prefix}/store/settings", headers=headers, json={"tagline": "Hand made"})


@pytest.mark.asyncio
async def test_storefront_unknown_and_unlaunched(ac_client, make_store):
    resp = await ac_client.get(f"{url_prefix}/store/storefront/nowhere")
    assert resp.status_code == 404

    await make_store()
    resp = await ac_client.get(f"{url_prefix}/store/storefront/ada-goods")
    assert resp.status_code == 403
    assert error_of(resp)["message"] == "Store is not live yet"


@pytest.mark.asyncio
async def test_storefront_projection(ac_client, make_store):
    headers, store_id = await make_store(launch=True)
    await stock_store(ac_client, headers, store_id)

    resp = await ac_client.get(f"{url_prefix}/store/storefront/ada-goods")
    assert resp.status_code == 200
    data = data_of(resp)
    assert data["store"]["storeUrl"] == "ada-goods"
    assert [p["name"] for p in data["products"]] == ["Tote"]
    assert "seoDescription" not in data["products"][0]
    assert [p["name"] for p in data["categories"][0]["products"]] == ["Tote"]
    assert [b["name"] for b in data["brands"]] == ["Adire Co"]
    assert data["settings"]["tagline"] == "Hand made"
    assert data["shipping"] is None
    assert data["shippingMethods"] == []

    resp = await ac_client.get(f"{url_prefix}/store/storefront/ADA-Goods")
    assert data_of(resp)["store"]["id"] == store_id


@pytest.mark.asyncio
async def test_storefront_optional_parts_are_best_effort(ac_client, make_store, monkeypatch):
    headers, store_id = await make_store(launch=True)
    await stock_store(ac_client, headers, store_id)

    async def broken(session, store_id):
        raise RuntimeError("settings table unavailable")

    monkeypatch.setattr(storefront, "fetch_settings", broken)
    resp = await ac_client.get(f"{url_prefix}/store/storefront/ada-goods")
    assert resp.status_code == 200
    data = data_of(resp)
    assert data["settings"] is None
    assert [p["name"] for p in data["products"]] == ["Tote"]


@pytest.mark.asyncio
async def test_merchant_onboarding_end_to_end(ac_client, outbox):
    email = "founder@shopmail.com"
    resp = await ac_client.post(f"{url_prefix}/auth/register", json={
        "email": email, "firstName": "Funmi", "lastName": "Bello", "password": STRONG_PASSWORD})
    assert resp.status_code == 201

    resp = await ac_client.post(f"{url_prefix}/auth/login", json={"email": email, "password": STRONG_PASSWORD})
    assert resp.status_code == 403

    resp = await ac_client.post(f"{url_prefix}/auth/verify-email",
                                json={"email": email, "code": outbox.last_code(email)})
    assert resp.status_code == 200

    resp = await ac_client.post(f"{url_prefix}/auth/login", json={"email": email, "password": STRONG_PASSWORD})
    headers = {"Authorization": f"Bearer {data_of(resp)['accessToken']}"}

    resp = await ac_client.put(f"{url_prefix}/kyc/personal", headers=headers, json={
        "countryOfResidency": "Nigeria", "contactAddress": "3 Awolowo Rd"})
    assert data_of(resp)["profile"]["status"] == "IN_PROGRESS"

    resp = await ac_client.post(f"{url_prefix}/kyc/submit", headers=headers)
    assert data_of(resp)["profile"]["status"] == "SUBMITTED"

    resp = await ac_client.post(f"{url_prefix}/store/setup", headers=headers, data={
        "businessName": "Bello Crafts", "storeUrl": "bello-crafts", "country": "Nigeria"})
    assert resp.status_code == 201
    resp = await ac_client.post(f"{url_prefix}/store/launch", headers=headers)
    assert resp.status_code == 200

    resp = await ac_client.get(f"{url_prefix}/store/storefront/bello-crafts")
    assert data_of(resp)["store"]["isLaunched"] is True

    resp = await ac_client.get(f"{url_prefix}/user/profile", headers=headers)
    profile = data_of(resp)
    assert profile["kyc"]["status"] == "SUBMITTED"
    assert profile["store"]["storeUrl"] == "bello-crafts"
