import pytest

from backoffice.common.custom_exceptions import UpstreamError
from backoffice.notifications import mailer
from helpers import STRONG_PASSWORD, data_of, error_of, url_prefix

SHOPPER = "shopper@buyers.com"


@pytest.mark.asyncio
async def test_customer_crud_mirrors_billing(ac_client, owner):
    headers, store_id = owner
    base = f"{url_prefix}/customers/{store_id}"

    resp = await ac_client.post(base, headers=headers, json={
        "firstName": "Chidi", "lastName": "Eze", "email": "Chidi@Buyers.com",
        "shippingAddress": "4 Allen Ave", "shippingCity": "Ikeja", "sameAsShippingAddress": True})
    assert resp.status_code == 201
    customer = data_of(resp)["customer"]
    assert customer["email"] == "chidi@buyers.com"
    assert customer["billingAddress"] == "4 Allen Ave"
    assert customer["billingCity"] == "Ikeja"

    resp = await ac_client.post(base, headers=headers, json={
        "firstName": "Other", "lastName": "Chidi", "email": "chidi@buyers.com"})
    assert resp.status_code == 409
    assert error_of(resp)["message"] == "Customer with this email already exists"

    url = f"{base}/{customer['id']}"
    resp = await ac_client.put(url, headers=headers, json={"shippingCity": "Yaba", "subscribedToNewsletter": True})
    updated = data_of(resp)["customer"]
    assert updated["billingCity"] == "Yaba"
    assert updated["subscribedToNewsletter"] is True

    resp = await ac_client.put(url, headers=headers, json={"firstName": "  "})
    assert resp.status_code == 400

    resp = await ac_client.get(base, headers=headers, params={"search": "eze"})
    assert data_of(resp)["meta"]["totalCount"] == 1

    resp = await ac_client.get(f"{base}/stats", headers=headers)
    assert data_of(resp) == {"totalCustomers": 1, "newsletterSubscribers": 1}

    resp = await ac_client.get(f"{base}/export", headers=headers)
    assert resp.text.splitlines()[0].startswith("id,")

    resp = await ac_client.delete(url, headers=headers)
    assert resp.status_code == 200
    resp = await ac_client.get(f"{base}/stats", headers=headers)
    assert data_of(resp)["totalCustomers"] == 0


@pytest.mark.asyncio
async def test_welcome_email_failure_does_not_fail_create(ac_client, owner, outbox, monkeypatch):
    headers, store_id = owner
    resp = await ac_client.post(f"{url_prefix}/customers/{store_id}", headers=headers, json={
        "firstName": "Ngozi", "lastName": "Ade", "email": "ngozi@buyers.com", "sendWelcomeEmail": True})
    assert resp.status_code == 201
    assert outbox[-1]["to"] == "ngozi@buyers.com"
    assert outbox[-1]["subject"] == "Welcome to Ada Goods"

    async def broken(to, subject, html):
        raise UpstreamError("mail provider down")

    monkeypatch.setattr(mailer, "send_email", broken)
    resp = await ac_client.post(f"{url_prefix}/customers/{store_id}", headers=headers, json={
        "firstName": "Tolu", "lastName": "Ade", "email": "tolu@buyers.com", "sendWelcomeEmail": True})
    assert resp.status_code == 201


async def register_shopper(ac_client, outbox, store_url="ada-goods", email=SHOPPER):
    base = f"{url_prefix}/storefront/{store_url}/auth"
    resp = await ac_client.post(f"{base}/register", json={
        "email": email, "firstName": "Bisi", "lastName": "Lawal", "password": STRONG_PASSWORD})
    assert resp.status_code == 201, resp.text
    resp = await ac_client.post(f"{base}/verify-email", json={"email": email, "code": outbox.last_code(email)})
    assert resp.status_code == 200, resp.text
    return data_of(resp)


@pytest.mark.asyncio
async def test_shopper_account_flow(ac_client, owner, outbox):
    base = f"{url_prefix}/storefront/ada-goods"
    session = await register_shopper(ac_client, outbox)
    assert session["customer"]["isVerified"] is True
    shopper_headers = {"Authorization": f"Bearer {session['accessToken']}"}

    resp = await ac_client.post(f"{base}/auth/register", json={
        "email": SHOPPER, "firstName": "B", "lastName": "L", "password": STRONG_PASSWORD})
    assert resp.status_code == 409

    resp = await ac_client.post(f"{base}/auth/login", json={"email": SHOPPER, "password": "wrong-pass-1"})
    assert resp.status_code == 401
    resp = await ac_client.post(f"{base}/auth/login", json={"email": SHOPPER, "password": STRONG_PASSWORD})
    assert resp.status_code == 200
    refresh_token = data_of(resp)["refreshToken"]

    resp = await ac_client.post(f"{base}/auth/refresh-token", json={"refreshToken": refresh_token})
    assert data_of(resp)["accessToken"]

    resp = await ac_client.put(f"{base}/customer/profile", headers=shopper_headers,
                               json={"shippingAddress": "9 Broad St", "sameAsShippingAddress": True})
    assert data_of(resp)["customer"]["billingAddress"] == "9 Broad St"
    resp = await ac_client.put(f"{base}/customer/profile", headers=shopper_headers, json={"email": "x@y.com"})
    assert resp.status_code == 400

    resp = await ac_client.get(f"{base}/customer/profile", headers=shopper_headers)
    assert data_of(resp)["customer"]["email"] == SHOPPER

    resp = await ac_client.post(f"{base}/auth/logout", headers=shopper_headers)
    assert resp.status_code == 200


@pytest.mark.asyncio
async def test_shopper_password_reset(ac_client, owner, outbox):
    base = f"{url_prefix}/storefront/ada-goods/auth"
    await register_shopper(ac_client, outbox)

    resp = await ac_client.post(f"{base}/forgot-password", json={"email": SHOPPER})
    assert resp.status_code == 200
    code = outbox.last_code(SHOPPER)

    resp = await ac_client.post(f"{base}/verify-reset-code", json={"email": SHOPPER, "code": code})
    assert resp.status_code == 200
    resp = await ac_client.post(f"{base}/reset-password",
                                json={"email": SHOPPER, "code": code, "newPassword": "N3w-secret"})
    assert resp.status_code == 200

    resp = await ac_client.post(f"{base}/login", json={"email": SHOPPER, "password": "N3w-secret"})
    assert resp.status_code == 200


@pytest.mark.asyncio
async def test_signup_with_merchant_created_email_is_rejected(ac_client, owner, outbox):
    headers, store_id = owner
    resp = await ac_client.post(f"{url_prefix}/customers/{store_id}", headers=headers, json={
        "firstName": "Walk", "lastName": "In", "email": SHOPPER, "phone": "+2347000000000"})
    customer_id = data_of(resp)["customer"]["id"]

    resp = await ac_client.post(f"{url_prefix}/storefront/ada-goods/auth/register", json={
        "email": SHOPPER, "firstName": "Someone", "lastName": "Else", "password": STRONG_PASSWORD})
    assert resp.status_code == 409
    assert error_of(resp)["message"] == "Email already registered"

    resp = await ac_client.get(f"{url_prefix}/customers/{store_id}/{customer_id}", headers=headers)
    stored = data_of(resp)["customer"]
    assert (stored["firstName"], stored["lastName"]) == ("Walk", "In")
    assert stored["phone"] == "+2347000000000"
    assert stored["isVerified"] is False

    resp = await ac_client.post(f"{url_prefix}/storefront/ada-goods/auth/login",
                                json={"email": SHOPPER, "password": STRONG_PASSWORD})
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_shopper_tokens_are_store_scoped(ac_client, make_store, outbox):
    await make_store(email="a@shopmail.com", store_url="store-a")
    owner_headers, _ = await make_store(email="b@shopmail.com", store_url="store-b")

    session = await register_shopper(ac_client, outbox, store_url="store-a")
    shopper_headers = {"Authorization": f"Bearer {session['accessToken']}"}

    resp = await ac_client.get(f"{url_prefix}/storefront/store-b/customer/profile", headers=shopper_headers)
    assert resp.status_code == 403

    resp = await ac_client.post(f"{url_prefix}/storefront/store-b/auth/refresh-token",
                                json={"refreshToken": session["refreshToken"]})
    assert resp.status_code == 401

    resp = await ac_client.get(f"{url_prefix}/storefront/store-a/customer/profile", headers=owner_headers)
    assert resp.status_code == 401

    resp = await ac_client.get(f"{url_prefix}/storefront/nowhere/customer/profile", headers=shopper_headers)
    assert resp.status_code == 404
