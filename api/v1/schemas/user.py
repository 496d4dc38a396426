from __future__ import annotations
from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from .base import CamelModel


# ───────────────────────── auth bodies ──────────────────────────
class RegisterIn(CamelModel):
    model_config = ConfigDict(str_strip_whitespace=False)

    # everything optional here; core.registration produces the messages
    name: str | None = None
    email: str | None = None
    password: str | None = None
    role: str | None = None
    specialization: str | None = None
    license_number: str | None = None
    years_of_experience: int | None = Field(None, ge=0)
    bio: str | None = None


class LoginIn(CamelModel):
    model_config = ConfigDict(str_strip_whitespace=False)

    email: str
    password: str


class RegisterOut(CamelModel):
    id: str = Field(alias="_id")
    name: str
    email: str
    role: str
    profile_complete: bool
    token: str


class SessionUser(BaseModel):
    id: str
    name: str
    role: str


class LoginOut(BaseModel):
    token: str
    user: SessionUser


# ───────────────────────── profile ──────────────────────────────
class ProfileUpdate(CamelModel):
    """Unknown keys (role, email, licenseNumber …) are dropped."""

    name: str | None = None
    # patient
    age: int | None = Field(None, ge=0)
    gender: str | None = None
    health_conditions: list[str] | None = None
    # provider
    specialization: str | None = None
    years_of_experience: int | None = Field(None, ge=0)
    bio: str | None = None


class _UserOut(CamelModel):
    id: str = Field(alias="_id")
    name: str
    email: str
    profile_complete: bool = False


class PatientOut(_UserOut):
    role: Literal["patient"]
    age: int | None = None
    gender: str | None = None
    health_conditions: list[str] = []
    assigned_provider: str | None = None


class ProviderOut(_UserOut):
    role: Literal["provider"]
    specialization: str | None = None
    license_number: str | None = None
    years_of_experience: int | None = None
    bio: str | None = None


# the Literal role on each side keeps the union unambiguous
UserOut = Union[PatientOut, ProviderOut]


def user_out(row: Any) -> PatientOut | ProviderOut:
    """Only the fields that belong to the user's role are exposed."""
    model = PatientOut if row.role == "patient" else ProviderOut
    return model.model_validate(row)


class ProviderListing(CamelModel):
    user_id: str
    name: str
