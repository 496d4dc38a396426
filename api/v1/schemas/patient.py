from __future__ import annotations

from pydantic import Field

from .base import CamelModel
from .goal import GoalOut


class PatientLookup(CamelModel):
    user_id: str | None = None


class IllnessIn(CamelModel):
    user_id: str | None = None
    illness: str | None = None


class IllnessOut(CamelModel):
    message: str
    health_conditions: list[str]


class AssignIn(CamelModel):
    patient_id: str | None = None
    provider_id: str | None = None


class AssignedPatient(CamelModel):
    id: str = Field(alias="_id")
    name: str
    assigned_provider: str
    assigned_provider_name: str


class AssignOut(CamelModel):
    message: str
    patient: AssignedPatient


class PatientDataOut(CamelModel):
    id: str = Field(alias="_id")
    name: str
    email: str
    age: int | None = None
    gender: str | None = None
    health_conditions: list[str] = []
    assigned_provider: str | None = None
    profile_complete: bool
    goals: list[GoalOut]
