"""
Provider-facing patient management.

Who may call these is decided by the access policy
(`RESTRICT_PATIENT_MANAGEMENT_TO_PROVIDERS`); by default any signed-in
user can.
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from core.access import Action, AccessPolicy, Caller
from core.errors import ConflictError, NotFoundError, ValidationError
from core.models.user import Role
from services.auth import get_caller
from services.db import DocumentStore
from api.v1.deps import get_policy, get_store
from api.v1.schemas import (
    AssignIn,
    AssignOut,
    GoalOut,
    IllnessIn,
    IllnessOut,
    PatientDataOut,
    PatientLookup,
)

router = APIRouter()
_LOG = logging.getLogger(__name__)


async def _find_patient(store: DocumentStore, patient_id: str):
    patient = await store.find_one("users", id=patient_id, role=Role.patient.value)
    if patient is None:
        raise NotFoundError("Patient not found")
    return patient


@router.post("/getPatientData", response_model=PatientDataOut)
async def get_patient_data(
    body: PatientLookup,
    caller: Caller = Depends(get_caller),
    store: DocumentStore = Depends(get_store),
    policy: AccessPolicy = Depends(get_policy),
) -> PatientDataOut:
    policy.enforce(caller, Action.get_patient_data)
    if not body.user_id:
        raise ValidationError("Please provide userId")

    patient = await _find_patient(store, body.user_id)
    goals = await store.find("goals", {"user_id": patient.id}, sort=[("created_at", -1)])

    return PatientDataOut(
        id=patient.id,
        name=patient.name,
        email=patient.email,
        age=patient.age,
        gender=patient.gender,
        health_conditions=patient.health_conditions or [],
        assigned_provider=patient.assigned_provider,
        profile_complete=patient.profile_complete,
        goals=[GoalOut.model_validate(g) for g in goals],
    )


@router.post("/addPatientIllness", response_model=IllnessOut)
async def add_patient_illness(
    body: IllnessIn,
    caller: Caller = Depends(get_caller),
    store: DocumentStore = Depends(get_store),
    policy: AccessPolicy = Depends(get_policy),
) -> IllnessOut:
    policy.enforce(caller, Action.add_patient_illness)
    if not body.user_id or not body.illness:
        raise ValidationError("Please provide userId and illness")

    patient = await _find_patient(store, body.user_id)
    conditions = list(patient.health_conditions or [])
    if body.illness in conditions:
        raise ConflictError("Illness already exists in health conditions")

    # new list object so the JSON column is flagged dirty
    conditions.append(body.illness)
    await store.update_by_id("users", patient.id, {"health_conditions": conditions})
    return IllnessOut(message="Illness added successfully", health_conditions=conditions)


@router.post("/assignProvider", response_model=AssignOut)
async def assign_provider(
    body: AssignIn,
    caller: Caller = Depends(get_caller),
    store: DocumentStore = Depends(get_store),
    policy: AccessPolicy = Depends(get_policy),
) -> AssignOut:
    policy.enforce(caller, Action.assign_provider)
    if not body.patient_id or not body.provider_id:
        raise ValidationError("Please provide patientId and providerId")

    patient = await _find_patient(store, body.patient_id)
    provider = await store.find_one("users", id=body.provider_id, role=Role.provider.value)
    if provider is None:
        raise NotFoundError("Provider not found")

    await store.update_by_id("users", patient.id, {"assigned_provider": provider.id})
    _LOG.info("provider %s assigned to patient %s", provider.id, patient.id)
    return AssignOut(
        message="Provider assigned successfully",
        patient={
            "_id": patient.id,
            "name": patient.name,
            "assignedProvider": provider.id,
            "assignedProviderName": provider.name,
        },
    )
