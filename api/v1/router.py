# api/v1/router.py
from fastapi import APIRouter

from . import auth, goals, patients, profile, providers

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["Auth"])

# everything a signed-in user touches lives under /data
api_router.include_router(profile.router, prefix="/data", tags=["Profile"])
api_router.include_router(goals.router, prefix="/data", tags=["Goals"])
api_router.include_router(providers.router, prefix="/data", tags=["Providers"])
api_router.include_router(patients.router, prefix="/data", tags=["Patients"])
