from __future__ import annotations

import asyncio
import os
from collections.abc import Iterator
from typing import Any

# must be in place before config.settings is built
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JWT_SECRET", "test-only-signing-key-0123456789abcdef")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from main import app
from services.db import get_session, init_models


@pytest.fixture
def client(tmp_path) -> Iterator[TestClient]:
    """App wired to a throw-away SQLite file; one connection per request."""
    eng = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'portal.db'}", poolclass=NullPool
    )
    asyncio.run(init_models(eng))
    factory = async_sessionmaker(eng, expire_on_commit=False)

    async def _session():
        async with factory() as s:
            yield s

    app.dependency_overrides[get_session] = _session
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
        asyncio.run(eng.dispose())


def register(client: TestClient, **body: Any) -> dict[str, Any]:
    r = client.post("/api/auth/register", json=body)
    assert r.status_code == 201, r.text
    return r.json()


def bearer(user: dict[str, Any]) -> dict[str, str]:
    return {"Authorization": f"Bearer {user['token']}"}


@pytest.fixture
def patient(client: TestClient) -> dict[str, Any]:
    return register(
        client, name="A", email="a@x.com", password="secret1", role="patient"
    )


@pytest.fixture
def other_patient(client: TestClient) -> dict[str, Any]:
    return register(
        client, name="B", email="b@x.com", password="secret2", role="patient"
    )


@pytest.fixture
def provider(client: TestClient) -> dict[str, Any]:
    return register(
        client,
        name="Dr. C",
        email="c@x.com",
        password="secret3",
        role="provider",
        specialization="Cardiology",
        licenseNumber="LIC-42",
        yearsOfExperience=12,
    )
