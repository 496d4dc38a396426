from __future__ import annotations

from fastapi import APIRouter, Depends

from core.access import Action, AccessPolicy, Caller
from core.errors import NotFoundError
from core.models.user import PATIENT_FIELDS, PROVIDER_FIELDS, REQUIRED_FIELDS
from core.profile import ProfileCompletenessEvaluator
from services.auth import get_caller
from services.db import DocumentStore
from api.v1.deps import get_policy, get_store
from api.v1.schemas import ProfileUpdate, UserOut, user_out

router = APIRouter()
_evaluator = ProfileCompletenessEvaluator()

_PROFILE_COLUMNS = {
    *PATIENT_FIELDS,
    *PROVIDER_FIELDS,
    *(f for req in REQUIRED_FIELDS.values() for f in req),
    "profile_complete",
}


def _current_fields(user) -> dict:
    return {f: getattr(user, f) for f in _PROFILE_COLUMNS}


async def _load_self(store: DocumentStore, caller: Caller):
    user = await store.find_by_id("users", caller.id)
    if user is None:
        raise NotFoundError("User not found")
    return user


@router.get("/profile", response_model=UserOut)
async def get_profile(
    caller: Caller = Depends(get_caller),
    store: DocumentStore = Depends(get_store),
    policy: AccessPolicy = Depends(get_policy),
):
    policy.enforce(caller, Action.read_profile, owner_id=caller.id)
    return user_out(await _load_self(store, caller))


@router.put("/profile", response_model=UserOut)
async def update_profile(
    body: ProfileUpdate,
    caller: Caller = Depends(get_caller),
    store: DocumentStore = Depends(get_store),
    policy: AccessPolicy = Depends(get_policy),
):
    policy.enforce(caller, Action.update_profile, owner_id=caller.id)
    user = await _load_self(store, caller)

    changes = _evaluator.apply(user.role, _current_fields(user), body.model_dump())
    updated = await store.update_by_id("users", user.id, changes)
    if updated is None:
        raise NotFoundError("User not found")
    return user_out(updated)
