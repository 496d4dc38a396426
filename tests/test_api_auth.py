"""
Registration, login and the three distinct authentication failures.
"""
from __future__ import annotations

import pytest
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.v1.deps import get_store
from conftest import bearer, register
from main import app
from services.auth import create_token
from services.db import DocumentStore, get_session


def test_register_patient(client):
    body = register(client, name="A", email="a@x.com", password="secret1", role="patient")
    assert body["role"] == "patient"
    assert body["profileComplete"] is False
    assert body["_id"]
    assert body["token"]
    assert "password" not in body and "passwordHash" not in body


def test_duplicate_email_conflict(client, patient):
    r = client.post(
        "/api/auth/register",
        json={"name": "A2", "email": "A@x.com", "password": "p", "role": "patient"},
    )
    assert r.status_code == 409
    assert r.json()["kind"] == "conflict"


def test_provider_without_license_never_persisted(client):
    r = client.post(
        "/api/auth/register",
        json={"name": "D", "email": "d@x.com", "password": "p", "role": "provider",
              "specialization": "Derm"},
    )
    assert r.status_code == 400
    assert r.json()["kind"] == "validation_error"

    # same email is still free, so nothing was written
    register(client, name="D", email="d@x.com", password="p", role="patient")


def test_invalid_role_rejected(client):
    r = client.post(
        "/api/auth/register",
        json={"name": "D", "email": "d@x.com", "password": "p", "role": "doctor"},
    )
    assert r.status_code == 400
    assert r.json()["message"] == "Invalid role. Must be patient or provider"


def test_login_roundtrip(client, provider):
    r = client.post("/api/auth/login", json={"email": "c@x.com", "password": "secret3"})
    assert r.status_code == 200
    data = r.json()
    assert data["user"] == {"id": provider["_id"], "name": "Dr. C", "role": "provider"}

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {data['token']}"})
    assert me.status_code == 200
    assert me.json()["licenseNumber"] == "LIC-42"


def test_login_wrong_password(client, patient):
    r = client.post("/api/auth/login", json={"email": "a@x.com", "password": "nope"})
    assert r.status_code == 401
    assert r.json()["kind"] == "invalid_credential"


def test_missing_vs_invalid_vs_forbidden(client, provider):
    missing = client.get("/api/data/goals")
    assert missing.status_code == 401
    assert missing.json()["kind"] == "missing_credential"

    invalid = client.get("/api/data/goals", headers={"Authorization": "Bearer garbage"})
    assert invalid.status_code == 401
    assert invalid.json()["kind"] == "invalid_credential"

    forbidden = client.get("/api/data/goals", headers=bearer(provider))
    assert forbidden.status_code == 403
    assert forbidden.json()["kind"] == "forbidden"


def test_expired_token_is_invalid(client, patient):
    stale = create_token(patient["_id"], "patient", ttl_minutes=-1)
    r = client.get("/api/data/profile", headers={"Authorization": f"Bearer {stale}"})
    assert r.status_code == 401
    assert r.json()["kind"] == "invalid_credential"


def test_meta_routes(client):
    assert client.get("/").json() == {"message": "Wellness API is running"}
    assert client.get("/health").json()["status"] == "ok"


class _UnseenUsersStore(DocumentStore):
    """Never sees an existing user, as when two registrations interleave."""

    async def find_one(self, collection, **filters):
        if collection == "users":
            return None
        return await super().find_one(collection, **filters)


def test_concurrent_duplicate_is_conflict(client, patient):
    async def _store(db: AsyncSession = Depends(get_session)):
        return _UnseenUsersStore(db)

    app.dependency_overrides[get_store] = _store
    r = client.post(
        "/api/auth/register",
        json={"name": "A2", "email": "a@x.com", "password": "p", "role": "patient"},
    )
    assert r.status_code == 409
    assert r.json() == {"message": "User already exists", "kind": "conflict"}


@pytest.mark.parametrize("field", ["name", "email"])
def test_blank_name_or_email_rejected(client, field):
    body = {"name": "A", "email": "a@x.com", "password": "secret1", "role": "patient"}
    body[field] = "   "
    r = client.post("/api/auth/register", json=body)
    assert r.status_code == 400
    assert r.json()["kind"] == "validation_error"


def test_name_and_email_stored_trimmed(client):
    body = register(client, name="  Ann  ", email="  Ann@X.com ", password="secret1", role="patient")
    assert body["name"] == "Ann"
    assert body["email"] == "ann@x.com"
