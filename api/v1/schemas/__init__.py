"""Re-export individual schema modules for easy imports."""

from .base import MessageOut
from .user import (
    LoginIn,
    LoginOut,
    PatientOut,
    ProfileUpdate,
    ProviderListing,
    ProviderOut,
    RegisterIn,
    RegisterOut,
    SessionUser,
    UserOut,
    user_out,
)
from .goal import GoalCreate, GoalOut, GoalUpdate
from .patient import (
    AssignedPatient,
    AssignIn,
    AssignOut,
    IllnessIn,
    IllnessOut,
    PatientDataOut,
    PatientLookup,
)

__all__ = [
    "MessageOut",
    "LoginIn",
    "LoginOut",
    "PatientOut",
    "ProfileUpdate",
    "ProviderListing",
    "ProviderOut",
    "RegisterIn",
    "RegisterOut",
    "SessionUser",
    "UserOut",
    "user_out",
    "GoalCreate",
    "GoalOut",
    "GoalUpdate",
    "AssignedPatient",
    "AssignIn",
    "AssignOut",
    "IllnessIn",
    "IllnessOut",
    "PatientDataOut",
    "PatientLookup",
]
