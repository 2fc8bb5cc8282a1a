import pytest

from backoffice.stores import services as store_services
from helpers import data_of, error_of, png_bytes, url_prefix


async def setup_store(ac_client, headers, store_url="ada-goods", **fields):
    form = {"businessName": "Ada Goods", "storeUrl": store_url, "country": "Nigeria", **fields}
    return await ac_client.post(f"{url_prefix}/store/setup", headers=headers, data=form)


@pytest.mark.asyncio
async def test_setup_store_defaults_currency(ac_client, make_user):
    headers, _ = await make_user()
    resp = await setup_store(ac_client, headers)
    assert resp.status_code == 201
    store = data_of(resp)["store"]
    assert store["storeUrl"] == "ada-goods"
    assert store["currency"] == "USD"
    assert store["isLaunched"] is False


@pytest.mark.asyncio
async def test_setup_store_uploads_logo(ac_client, make_user, uploaded):
    headers, _ = await make_user()
    resp = await ac_client.post(
        f"{url_prefix}/store/setup", headers=headers,
        data={"businessName": "Ada Goods", "storeUrl": "ada-goods", "country": "Nigeria", "currency": "eur"},
        files={"logo": ("logo.png", png_bytes(), "image/png")},
    )
    assert resp.status_code == 201
    store = data_of(resp)["store"]
    assert store["currency"] == "EUR"
    assert store["logoUrl"].startswith("https://res.cloudinary.com/")
    assert len(uploaded) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("store_url", ["ab", "-ada", "ada-", "Ada-Goods", "ada_goods", "a" * 64])
async def test_setup_store_rejects_bad_slugs(ac_client, make_user, store_url):
    headers, _ = await make_user()
    resp = await setup_store(ac_client, headers, store_url=store_url)
    assert resp.status_code == 400


@pytest.mark.asyncio
@pytest.mark.parametrize("store_url", ["abc", "a1-b2", "a" * 63])
async def test_setup_store_accepts_valid_slugs(ac_client, make_user, store_url):
    headers, _ = await make_user()
    resp = await setup_store(ac_client, headers, store_url=store_url)
    assert resp.status_code == 201


@pytest.mark.asyncio
async def test_one_store_per_user_and_unique_url(ac_client, make_user):
    headers, _ = await make_user()
    assert (await setup_store(ac_client, headers)).status_code == 201

    resp = await setup_store(ac_client, headers, store_url="other-goods")
    assert resp.status_code == 409
    assert error_of(resp)["message"] == "User already has a store"

    other_headers, _ = await make_user(email="second@shopmail.com")
    resp = await setup_store(ac_client, other_headers)
    assert resp.status_code == 409
    assert error_of(resp)["message"] == "Store URL already taken"


@pytest.mark.asyncio
async def test_setup_race_reports_the_constraint_that_failed(ac_client, make_user, monkeypatch):
    headers, _ = await make_user()
    assert (await setup_store(ac_client, headers)).status_code == 201

    real_store_by_user = store_services.store_by_user
    calls = []

    async def stale_first_read(session, user_id):
        calls.append(user_id)
        if len(calls) == 1:
            return None
        return await real_store_by_user(session, user_id)

    monkeypatch.setattr(store_services, "store_by_user", stale_first_read)
    resp = await setup_store(ac_client, headers, store_url="other-goods")
    assert resp.status_code == 409
    assert error_of(resp)["message"] == "User already has a store"
    assert len(calls) == 2

    async def never_taken(session, store_url):
        return False

    calls.clear()
    monkeypatch.setattr(store_services, "store_url_taken", never_taken)
    other_headers, _ = await make_user(email="second@shopmail.com")
    resp = await setup_store(ac_client, other_headers)
    assert resp.status_code == 409
    assert error_of(resp)["message"] == "Store URL already taken"


@pytest.mark.asyncio
async def test_setup_requires_business_name(ac_client, make_user):
    headers, _ = await make_user()
    resp = await setup_store(ac_client, headers, businessName="  ")
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_update_store_sparse(ac_client, owner):
    headers, _ = owner
    resp = await ac_client.put(f"{url_prefix}/store", headers=headers,
                               json={"contactEmail": "hello@adagoods.com", "currency": "gbp"})
    assert resp.status_code == 200
    store = data_of(resp)["store"]
    assert store["currency"] == "GBP"
    assert store["contactEmail"] == "hello@adagoods.com"
    assert store["businessName"] == "Ada Goods"

    resp = await ac_client.put(f"{url_prefix}/store", headers=headers, json={"businessName": "   "})
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_launch_store_once(ac_client, owner):
    headers, _ = owner
    resp = await ac_client.post(f"{url_prefix}/store/launch", headers=headers)
    assert resp.status_code == 200
    assert data_of(resp)["store"]["isLaunched"] is True
    assert data_of(resp)["store"]["launchedAt"]

    resp = await ac_client.post(f"{url_prefix}/store/launch", headers=headers)
    assert resp.status_code == 409


@pytest.mark.asyncio
async def test_get_store_without_one(ac_client, make_user):
    headers, _ = await make_user()
    resp = await ac_client.get(f"{url_prefix}/store", headers=headers)
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_login_returns_store_summary(ac_client, owner):
    resp = await ac_client.post(f"{url_prefix}/auth/login",
                                json={"email": "owner@shopmail.com", "password": "S3cure-pass"})
    assert data_of(resp)["store"]["storeUrl"] == "ada-goods"


@pytest.mark.asyncio
async def test_shipping_upsert_replaces_methods(ac_client, owner):
    headers, _ = owner
    resp = await ac_client.get(f"{url_prefix}/store/shipping", headers=headers)
    assert data_of(resp) == {"config": None, "methods": []}

    resp = await ac_client.put(f"{url_prefix}/store/shipping", headers=headers, json={
        "flatRate": 1500, "methods": [{"name": "Standard", "price": 1500}, {"name": "Express", "price": 4000}]})
    assert resp.status_code == 200
    assert [m["name"] for m in data_of(resp)["methods"]] == ["Standard", "Express"]

    # methods absent: left alone
    resp = await ac_client.put(f"{url_prefix}/store/shipping", headers=headers, json={"processingDays": 2})
    data = data_of(resp)
    assert data["config"]["processingDays"] == 2
    assert data["config"]["flatRate"] == 1500
    assert len(data["methods"]) == 2

    resp = await ac_client.put(f"{url_prefix}/store/shipping", headers=headers, json={"methods": []})
    assert data_of(resp)["methods"] == []


@pytest.mark.asyncio
async def test_settings_upsert(ac_client, owner):
    headers, _ = owner
    resp = await ac_client.put(f"{url_prefix}/store/settings", headers=headers,
                               json={"tagline": "Fresh every day", "showOutOfStock": False})
    assert resp.status_code == 200
    assert data_of(resp)["settings"]["tagline"] == "Fresh every day"

    resp = await ac_client.get(f"{url_prefix}/store/settings", headers=headers)
    assert data_of(resp)["settings"]["showOutOfStock"] is False


@pytest.mark.asyncio
async def test_locations_single_primary(ac_client, owner):
    headers, store_id = owner
    base = f"{url_prefix}/locations/{store_id}"
    first = data_of(await ac_client.post(base, headers=headers, json={
        "locationName": "HQ", "address": "1 Marina", "country": "Nigeria", "isPrimary": True}))["location"]
    second = data_of(await ac_client.post(base, headers=headers, json={
        "locationName": "Depot", "address": "2 Ring Rd", "country": "Nigeria", "isPrimary": True}))["location"]

    items = data_of(await ac_client.get(base, headers=headers))["items"]
    primary = [loc["id"] for loc in items if loc["isPrimary"]]
    assert primary == [second["id"]]

    resp = await ac_client.delete(f"{base}/{first['id']}", headers=headers)
    assert resp.status_code == 200
    resp = await ac_client.get(f"{base}/{first['id']}", headers=headers)
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_store_routes_are_owner_only(ac_client, owner, make_user):
    _, store_id = owner
    stranger, _ = await make_user(email="stranger@shopmail.com")
    resp = await ac_client.get(f"{url_prefix}/categories/{store_id}", headers=stranger)
    assert resp.status_code == 403

    resp = await ac_client.get(f"{url_prefix}/categories/999", headers=stranger)
    assert resp.status_code == 403
