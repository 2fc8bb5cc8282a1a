from datetime import timedelta

import pytest
from sqlalchemy import select

from backoffice.schema.full_schema import Users
from helpers import STRONG_PASSWORD, data_of, error_of, url_prefix

EMAIL = "owner@shopmail.com"


async def register(ac_client, email=EMAIL, password=STRONG_PASSWORD, **extra):
    payload = {"email": email, "firstName": "Ada", "lastName": "Obi", "password": password, **extra}
    return await ac_client.post(f"{url_prefix}/auth/register", json=payload)


@pytest.mark.asyncio
async def test_register_sends_code_and_normalizes_email(ac_client, outbox, db_session):
    resp = await register(ac_client, email="Owner@ShopMail.com", phone="+2348000000000")
    assert resp.status_code == 201
    assert data_of(resp)["userId"]

    assert len(outbox) == 1
    assert outbox[0]["to"] == EMAIL
    assert len(outbox.last_code(EMAIL)) == 6

    user = (await db_session.execute(select(Users).where(Users.email == EMAIL))).scalar_one()
    assert user.full_name == "Ada Obi"
    assert user.username.startswith("adaobi")
    assert user.password_hash != STRONG_PASSWORD
    assert user.is_verified is False


@pytest.mark.asyncio
@pytest.mark.parametrize("payload_patch, message", [
    ({"password": "short"}, "Password must be at least 8 characters"),
    ({"email": "not-an-email"}, "Invalid email"),
    ({"firstName": "   "}, "First name is required"),
])
async def test_register_rejects_bad_input(ac_client, payload_patch, message):
    payload = {"email": EMAIL, "firstName": "Ada", "lastName": "Obi", "password": STRONG_PASSWORD, **payload_patch}
    resp = await ac_client.post(f"{url_prefix}/auth/register", json=payload)
    assert resp.status_code == 400
    assert message in error_of(resp)["message"]


@pytest.mark.asyncio
async def test_register_duplicate_email_conflicts(ac_client):
    assert (await register(ac_client)).status_code == 201
    resp = await register(ac_client, email=EMAIL.upper())
    assert resp.status_code == 409
    assert error_of(resp)["message"] == "Email already registered"


@pytest.mark.asyncio
async def test_verify_email_flow(ac_client, outbox):
    await register(ac_client)
    code = outbox.last_code(EMAIL)

    resp = await ac_client.post(f"{url_prefix}/auth/verify-email", json={"email": EMAIL, "code": "000000"})
    assert resp.status_code == 400

    resp = await ac_client.post(f"{url_prefix}/auth/verify-email", json={"email": EMAIL, "code": code})
    assert resp.status_code == 200
    data = data_of(resp)
    assert data["accessToken"] and data["refreshToken"]
    assert data["user"]["isVerified"] is True
    assert data["store"] is None

    resp = await ac_client.post(f"{url_prefix}/auth/verify-email", json={"email": EMAIL, "code": code})
    assert resp.status_code == 409

    resp = await ac_client.post(f"{url_prefix}/auth/verify-email", json={"email": "ghost@shopmail.com", "code": code})
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_expired_verification_code(ac_client, outbox, db_session):
    await register(ac_client)
    code = outbox.last_code(EMAIL)

    user = (await db_session.execute(select(Users).where(Users.email == EMAIL))).scalar_one()
    user.verification_code_expires = user.verification_code_expires - timedelta(hours=1)
    await db_session.commit()

    resp = await ac_client.post(f"{url_prefix}/auth/verify-email", json={"email": EMAIL, "code": code})
    assert resp.status_code == 400
    assert error_of(resp)["message"] == "Verification code has expired"


@pytest.mark.asyncio
async def test_resend_verification(ac_client, outbox):
    await register(ac_client)
    resp = await ac_client.post(f"{url_prefix}/auth/resend-verification", json={"email": EMAIL})
    assert resp.status_code == 200
    assert len(outbox) == 2

    resp = await ac_client.post(f"{url_prefix}/auth/verify-email",
                                json={"email": EMAIL, "code": outbox.last_code(EMAIL)})
    assert resp.status_code == 200

    resp = await ac_client.post(f"{url_prefix}/auth/resend-verification", json={"email": EMAIL})
    assert resp.status_code == 409


@pytest.mark.asyncio
async def test_login_requires_verified_email(ac_client, outbox):
    await register(ac_client)

    resp = await ac_client.post(f"{url_prefix}/auth/login", json={"email": EMAIL, "password": STRONG_PASSWORD})
    assert resp.status_code == 403
    assert error_of(resp)["message"] == "Please verify your email first"

    await ac_client.post(f"{url_prefix}/auth/verify-email", json={"email": EMAIL, "code": outbox.last_code(EMAIL)})
    resp = await ac_client.post(f"{url_prefix}/auth/login", json={"email": EMAIL, "password": STRONG_PASSWORD})
    assert resp.status_code == 200
    assert data_of(resp)["user"]["email"] == EMAIL


@pytest.mark.asyncio
async def test_login_bad_credentials_share_message(ac_client, make_user):
    await make_user(email=EMAIL)

    wrong_password = await ac_client.post(f"{url_prefix}/auth/login", json={"email": EMAIL, "password": "nope-nope"})
    unknown_email = await ac_client.post(f"{url_prefix}/auth/login",
                                         json={"email": "ghost@shopmail.com", "password": STRONG_PASSWORD})
    assert wrong_password.status_code == unknown_email.status_code == 401
    assert error_of(wrong_password)["message"] == error_of(unknown_email)["message"] == "Invalid credentials"


@pytest.mark.asyncio
async def test_refresh_token_round(ac_client, make_user):
    _, session = await make_user(email=EMAIL)

    resp = await ac_client.post(f"{url_prefix}/auth/refresh-token", json={"refreshToken": session["refreshToken"]})
    assert resp.status_code == 200
    access = data_of(resp)["accessToken"]

    resp = await ac_client.get(f"{url_prefix}/user/profile", headers={"Authorization": f"Bearer {access}"})
    assert resp.status_code == 200

    # an access token is not a refresh token
    resp = await ac_client.post(f"{url_prefix}/auth/refresh-token", json={"refreshToken": session["accessToken"]})
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_logout_is_idempotent_and_revokes_refresh(ac_client, make_user):
    headers, session = await make_user(email=EMAIL)

    for _ in range(2):
        resp = await ac_client.post(f"{url_prefix}/auth/logout", headers=headers)
        assert resp.status_code == 200

    resp = await ac_client.post(f"{url_prefix}/auth/refresh-token", json={"refreshToken": session["refreshToken"]})
    assert resp.status_code == 401
    assert error_of(resp)["message"] == "Invalid or expired refresh token"


@pytest.mark.asyncio
async def test_password_reset_flow(ac_client, make_user, outbox):
    await make_user(email=EMAIL)

    resp = await ac_client.post(f"{url_prefix}/auth/forgot-password", json={"email": EMAIL})
    assert resp.status_code == 200
    code = outbox.last_code(EMAIL)

    resp = await ac_client.post(f"{url_prefix}/auth/verify-reset-code", json={"email": EMAIL, "code": code})
    assert resp.status_code == 200

    resp = await ac_client.post(f"{url_prefix}/auth/reset-password",
                                json={"email": EMAIL, "code": code, "newPassword": "short"})
    assert resp.status_code == 400

    resp = await ac_client.post(f"{url_prefix}/auth/reset-password",
                                json={"email": EMAIL, "code": code, "newPassword": "brand-new-pass"})
    assert resp.status_code == 200

    # the code is single use
    resp = await ac_client.post(f"{url_prefix}/auth/reset-password",
                                json={"email": EMAIL, "code": code, "newPassword": "another-pass"})
    assert resp.status_code == 400

    resp = await ac_client.post(f"{url_prefix}/auth/login", json={"email": EMAIL, "password": "brand-new-pass"})
    assert resp.status_code == 200


@pytest.mark.asyncio
async def test_set_password_requires_auth(ac_client, make_user):
    resp = await ac_client.post(f"{url_prefix}/auth/set-password", json={"newPassword": "whatever-pass"})
    assert resp.status_code == 401

    headers, _ = await make_user(email=EMAIL)
    resp = await ac_client.post(f"{url_prefix}/auth/set-password", json={"newPassword": "whatever-pass"},
                                headers=headers)
    assert resp.status_code == 200

    resp = await ac_client.post(f"{url_prefix}/auth/login", json={"email": EMAIL, "password": "whatever-pass"})
    assert resp.status_code == 200


@pytest.mark.asyncio
async def test_garbage_bearer_token_rejected(ac_client):
    resp = await ac_client.get(f"{url_prefix}/user/profile", headers={"Authorization": "Bearer not.a.jwt"})
    assert resp.status_code == 401
