"""
Shared fixtures: the real app wired to a fresh in-memory SQLite database.

Environment overrides are applied before ``app`` is imported because the
settings are read at import time.
"""

from __future__ import annotations

import itertools
import os
from types import SimpleNamespace

os.environ.setdefault("TASKHUB_DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("TASKHUB_SECRET_KEY", "test-secret-key")
os.environ.setdefault("TASKHUB_BCRYPT_ROUNDS", "4")
os.environ.setdefault("TASKHUB_JSON_LOGS", "false")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import build_engine, get_session, init_db
from app.main import app

PASSWORD = "secret-pw"


@pytest.fixture
async def db_engine():
    engine = build_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await init_db(bind=engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def client(session_factory):
    async def override_get_session():
        async with session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(client):
    """Register a fresh user; returns id, email, token and auth headers."""
    counter = itertools.count(1)

    async def _make(name: str | None = None) -> SimpleNamespace:
        name = name or f"user{next(counter)}"
        email = f"{name}@example.com"
        resp = await client.post(
            "/auth/register",
            json={"email": email, "name": name, "password": PASSWORD},
        )
        assert resp.status_code == 201, resp.text
        body = resp.json()
        return SimpleNamespace(
            id=body["user"]["id"],
            email=email,
            password=PASSWORD,
            token=body["token"],
            headers={"Authorization": f"Bearer {body['token']}"},
        )

    return _make


@pytest.fixture
def make_org(client):
    async def _make(owner: SimpleNamespace, name: str = "Acme") -> dict:
        resp = await client.post("/organisations", json={"name": name}, headers=owner.headers)
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _make


@pytest.fixture
def make_project(client):
    async def _make(owner: SimpleNamespace, org_id: int, name: str = "Website") -> dict:
        resp = await client.post(
            f"/organisations/{org_id}/projects", json={"name": name}, headers=owner.headers
        )
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _make


@pytest.fixture
def make_todo(client):
    async def _make(owner: SimpleNamespace, project_id: int, title: str = "Ship it") -> dict:
        resp = await client.post(
            f"/projects/{project_id}/todos",
            json={"title": title, "description": "before friday"},
            headers=owner.headers,
        )
        assert resp.status_code == 201, resp.text
        created = resp.json()
        assert len(created) == 1
        return created[0]

    return _make


@pytest.fixture
def add_member(client):
    async def _add(admin: SimpleNamespace, org_id: int, user: SimpleNamespace, role: str = "USER"):
        resp = await client.post(
            f"/organisations/{org_id}/members",
            json={"user_id": user.id, "role": role},
            headers=admin.headers,
        )
        assert resp.status_code == 201, resp.text

    return _add
