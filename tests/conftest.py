import os

# configure the app for an isolated in-memory database before anything imports it
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ENV"] = "dev"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ["MAIL_API_URL"] = ""

import cloudinary.uploader
import pytest
from asgi_lifespan import LifespanManager
from httpx import ASGITransport, AsyncClient
from backoffice.db.connection import async_engine, async_session
from backoffice.db.schema import create_all_tables, drop_all_tables
from backoffice.main import app
from backoffice.notifications import mailer

from helpers import CODE_RE, STRONG_PASSWORD, url_prefix


@pytest.fixture(autouse=True)
async def tables():
    await create_all_tables(async_engine)
    yield
    await drop_all_tables(async_engine)


@pytest.fixture
async def ac_client():
    async with LifespanManager(app):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            yield ac


@pytest.fixture
async def db_session():
    async with async_session() as session:
        yield session


class Outbox(list):
    def last_code(self, to: str) -> str:
        for msg in reversed(self):
            if msg["to"] == to:
                match = CODE_RE.search(msg["html"])
                if match:
                    return match.group(1)
        raise AssertionError(f"no code mailed to {to}")


@pytest.fixture(autouse=True)
def outbox(monkeypatch):
    sent = Outbox()

    async def fake_send_email(to, subject, html):
        sent.append({"to": to, "subject": subject, "html": html})
        return True

    monkeypatch.setattr(mailer, "send_email", fake_send_email)
    return sent


@pytest.fixture(autouse=True)
def uploaded(monkeypatch):
    """Replace the cloudinary call; records each upload's folder."""
    calls = []

    def fake_upload(content, **kwargs):
        calls.append(kwargs)
        n = len(calls)
        return {"secure_url": f"https://res.cloudinary.com/demo/upload/{n}.png", "public_id": f"demo/{n}"}

    monkeypatch.setattr(cloudinary.uploader, "upload", fake_upload)
    return calls


@pytest.fixture
def make_user(ac_client, outbox):
    """Register and verify a user; returns (auth headers, session payload)."""

    async def _make(email="owner@shopmail.com", password=STRONG_PASSWORD, first_name="Ada", last_name="Obi"):
        resp = await ac_client.post(f"{url_prefix}/auth/register", json={
            "email": email, "firstName": first_name, "lastName": last_name, "password": password})
        assert resp.status_code == 201, resp.text
        resp = await ac_client.post(f"{url_prefix}/auth/verify-email",
                                    json={"email": email, "code": outbox.last_code(email)})
        assert resp.status_code == 200, resp.text
        data = resp.json()["data"]
        return {"Authorization": f"Bearer {data['accessToken']}"}, data

    return _make


@pytest.fixture
def make_store(ac_client, make_user):
    """A verified owner with a store; returns (auth headers, store id)."""

    async def _make(email="owner@shopmail.com", store_url="ada-goods", launch=False):
        headers, _ = await make_user(email=email)
        resp = await ac_client.post(f"{url_prefix}/store/setup", headers=headers, data={
            "businessName": "Ada Goods", "storeUrl": store_url, "country": "Nigeria", "currency": "ngn"})
        assert resp.status_code == 201, resp.text
        if launch:
            resp = await ac_client.post(f"{url_prefix}/store/launch", headers=headers)
            assert resp.status_code == 200, resp.text
        return headers, resp.json()["data"]["store"]["id"]

    return _make


@pytest.fixture
async def owner(make_store):
    return await make_store()
