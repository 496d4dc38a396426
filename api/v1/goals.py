from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status

from core.access import Action, AccessPolicy, Caller
from core.errors import NotFoundError, ValidationError
from core.progress import ProgressCalculator
from services.auth import get_caller
from services.db import DocumentStore
from api.v1.deps import get_policy, get_store
from api.v1.schemas import GoalCreate, GoalOut, GoalUpdate, MessageOut

router = APIRouter()
_LOG = logging.getLogger(__name__)
_calc = ProgressCalculator()

# progress follows these two; nothing else triggers a recompute
_PROGRESS_INPUTS = ("current_value", "target_value")


async def _load_owned(
    store: DocumentStore,
    policy: AccessPolicy,
    caller: Caller,
    action: Action,
    goal_id: str,
):
    # role first, then existence, then ownership (403, not 404, for a
    # goal that exists but belongs to someone else)
    policy.enforce(caller, action)
    goal = await store.find_by_id("goals", goal_id)
    if goal is None:
        raise NotFoundError("Goal not found")
    policy.enforce(caller, action, owner_id=goal.user_id)
    return goal


# ───────────────────────── list ────────────────────────────
@router.get("/goals", response_model=list[GoalOut])
async def list_goals(
    caller: Caller = Depends(get_caller),
    store: DocumentStore = Depends(get_store),
    policy: AccessPolicy = Depends(get_policy),
) -> list[GoalOut]:
    policy.enforce(caller, Action.list_goals)
    rows = await store.find("goals", {"user_id": caller.id}, sort=[("created_at", -1)])
    return [GoalOut.model_validate(g) for g in rows]


# ───────────────────────── create ──────────────────────────
@router.post(
    "/goals",
    response_model=GoalOut,
    status_code=status.HTTP_201_CREATED,
)
async def create_goal(
    body: GoalCreate,
    caller: Caller = Depends(get_caller),
    store: DocumentStore = Depends(get_store),
    policy: AccessPolicy = Depends(get_policy),
) -> GoalOut:
    policy.enforce(caller, Action.create_goal)
    if not body.title:
        raise ValidationError("Please provide a goal title")

    doc = body.model_dump(exclude_none=True)
    doc["category"] = body.category.value
    doc["status"] = body.status.value
    doc["user_id"] = caller.id
    doc["progress"] = _calc.compute(body.current_value, body.target_value, 0.0)

    goal = await store.insert("goals", doc)
    _LOG.info("goal %s created for %s", goal.id, caller.id)
    return GoalOut.model_validate(goal)


# ───────────────────────── update ──────────────────────────
@router.put("/goals/{goal_id}", response_model=GoalOut)
async def update_goal(
    goal_id: str,
    body: GoalUpdate,
    caller: Caller = Depends(get_caller),
    store: DocumentStore = Depends(get_store),
    policy: AccessPolicy = Depends(get_policy),
) -> GoalOut:
    goal = await _load_owned(store, policy, caller, Action.update_goal, goal_id)

    changes = body.patch()
    if "title" in changes and not changes["title"]:
        raise ValidationError("Please provide a goal title")

    # field update and progress recompute go out as one write
    if any(k in changes for k in _PROGRESS_INPUTS):
        merged = {
            "current_value": goal.current_value,
            "target_value": goal.target_value,
            "progress": goal.progress,
            **changes,
        }
        changes["progress"] = _calc.for_goal(merged)

    updated = await store.update_by_id("goals", goal.id, changes)
    if updated is None:
        raise NotFoundError("Goal not found")
    return GoalOut.model_validate(updated)


# ───────────────────────── delete ──────────────────────────
@router.delete("/goals/{goal_id}", response_model=MessageOut)
async def delete_goal(
    goal_id: str,
    caller: Caller = Depends(get_caller),
    store: DocumentStore = Depends(get_store),
    policy: AccessPolicy = Depends(get_policy),
) -> MessageOut:
    goal = await _load_owned(store, policy, caller, Action.delete_goal, goal_id)
    await store.delete_by_id("goals", goal.id)
    _LOG.info("goal %s removed by %s", goal.id, caller.id)
    return MessageOut(message="Goal removed")
