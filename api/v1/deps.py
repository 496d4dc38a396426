from __future__ import annotations

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from core.access import AccessPolicy, default_rules
from services.db import DocumentStore, get_session


async def get_store(db: AsyncSession = Depends(get_session)) -> DocumentStore:
    return DocumentStore(db)


@lru_cache
def get_policy() -> AccessPolicy:
    return AccessPolicy(
        default_rules(settings.restrict_patient_management_to_providers)
    )
