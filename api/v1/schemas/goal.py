from __future__ import annotations
from datetime import datetime
from typing import Any

from pydantic import Field

from core.models.goal import GoalCategory, GoalStatus
from .base import CamelModel

# a PUT may null these out; anything else sent as null is ignored
_NULLABLE = {"description", "target_value", "end_date"}


class GoalCreate(CamelModel):
    title: str | None = None
    description: str | None = None
    category: GoalCategory = GoalCategory.other
    target_value: float | None = None
    current_value: float = 0
    unit: str = ""
    start_date: datetime | None = None
    end_date: datetime | None = None
    status: GoalStatus = GoalStatus.active


class GoalUpdate(CamelModel):
    title: str | None = None
    description: str | None = None
    category: GoalCategory | None = None
    target_value: float | None = None
    current_value: float | None = None
    unit: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    status: GoalStatus | None = None

    def patch(self) -> dict[str, Any]:
        """Fields the client actually sent, keyed by column name."""
        sent = self.model_dump(exclude_unset=True)
        return {
            k: (v.value if hasattr(v, "value") else v)
            for k, v in sent.items()
            if v is not None or k in _NULLABLE
        }


class GoalOut(CamelModel):
    id: str = Field(alias="_id")
    user_id: str = Field(alias="user")
    title: str
    description: str | None = None
    category: GoalCategory
    target_value: float | None = None
    current_value: float
    unit: str
    start_date: datetime
    end_date: datetime | None = None
    status: GoalStatus
    progress: float
    created_at: datetime
    updated_at: datetime
