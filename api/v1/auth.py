from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError

from core.access import Action, AccessPolicy, Caller
from core.errors import ConflictError, InvalidCredentialError, NotFoundError
from core.models.user import Role
from core.registration import check_registration
from services.auth import check_password, create_token, get_caller, hash_password
from services.db import DocumentStore
from api.v1.deps import get_policy, get_store
from api.v1.schemas import LoginIn, LoginOut, RegisterIn, RegisterOut, UserOut, user_out

router = APIRouter()
_LOG = logging.getLogger(__name__)


# ───────────────────────── register ────────────────────────
@router.post(
    "/register",
    response_model=RegisterOut,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    body: RegisterIn,
    store: DocumentStore = Depends(get_store),
) -> RegisterOut:
    fields = body.model_dump()
    fields["name"] = (body.name or "").strip()
    fields["email"] = (body.email or "").strip().lower()
    role = check_registration(fields)
    email = fields["email"]

    if await store.find_one("users", email=email):
        raise ConflictError("User already exists")

    doc = {
        "name": fields["name"],
        "email": email,
        "password_hash": hash_password(body.password),
        "role": role.value,
        "profile_complete": False,
    }
    if role is Role.provider:
        doc.update(
            specialization=body.specialization,
            license_number=body.license_number,
            years_of_experience=body.years_of_experience,
            bio=body.bio,
        )

    try:
        user = await store.insert("users", doc)
    except IntegrityError:
        # lost a race with another registration for the same email
        raise ConflictError("User already exists") from None
    _LOG.info("registered %s %s", user.role, user.id)
    return RegisterOut(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role,
        profile_complete=user.profile_complete,
        token=create_token(user.id, user.role),
    )


# ───────────────────────── login ───────────────────────────
@router.post("/login", response_model=LoginOut)
async def login(
    body: LoginIn,
    store: DocumentStore = Depends(get_store),
) -> LoginOut:
    user = await store.find_one("users", email=body.email.strip().lower())
    if user is None or not check_password(body.password, user.password_hash):
        raise InvalidCredentialError("Invalid credentials")

    return LoginOut(
        token=create_token(user.id, user.role),
        user={"id": user.id, "name": user.name, "role": user.role},
    )


# ───────────────────────── me ──────────────────────────────
@router.get("/me", response_model=UserOut)
async def me(
    caller: Caller = Depends(get_caller),
    store: DocumentStore = Depends(get_store),
    policy: AccessPolicy = Depends(get_policy),
):
    policy.enforce(caller, Action.read_profile, owner_id=caller.id)
    user = await store.find_by_id("users", caller.id)
    if user is None:
        raise NotFoundError("User not found")
    return user_out(user)
