from __future__ import annotations

from fastapi import APIRouter, Depends

from core.access import Action, AccessPolicy, Caller
from core.errors import NotFoundError
from core.models.user import Role
from services.auth import get_caller
from services.db import DocumentStore
from api.v1.deps import get_policy, get_store
from api.v1.schemas import ProviderListing, ProviderOut

router = APIRouter()


@router.get("/providers", response_model=list[ProviderOut])
async def list_providers(
    caller: Caller = Depends(get_caller),
    store: DocumentStore = Depends(get_store),
    policy: AccessPolicy = Depends(get_policy),
) -> list[ProviderOut]:
    policy.enforce(caller, Action.list_providers)
    rows = await store.find("users", {"role": Role.provider.value})
    return [ProviderOut.model_validate(p) for p in rows]


@router.get("/providers/{provider_id}", response_model=ProviderOut)
async def get_provider(
    provider_id: str,
    caller: Caller = Depends(get_caller),
    store: DocumentStore = Depends(get_store),
    policy: AccessPolicy = Depends(get_policy),
) -> ProviderOut:
    policy.enforce(caller, Action.get_provider)
    provider = await store.find_one("users", id=provider_id, role=Role.provider.value)
    if provider is None:
        raise NotFoundError("Provider not found")
    return ProviderOut.model_validate(provider)


@router.get("/getProviders", response_model=list[ProviderListing])
async def provider_directory(
    caller: Caller = Depends(get_caller),
    store: DocumentStore = Depends(get_store),
    policy: AccessPolicy = Depends(get_policy),
) -> list[ProviderListing]:
    """Just id + name, for the provider picker."""
    policy.enforce(caller, Action.list_provider_directory)
    rows = await store.find("users", {"role": Role.provider.value})
    return [ProviderListing(user_id=p.id, name=p.name) for p in rows]
