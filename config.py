"""
Centralised settings loader.

Values come from the environment (or a local `.env`), field name in
upper case, e.g. `JWT_SECRET`, `DATABASE_URL`.
"""

from __future__ import annotations
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# ------------------------------------------------------------------ #
#  Master settings model
# ------------------------------------------------------------------ #
class _Settings(BaseSettings):
    # ─── runtime / DB ───────────────────────────────────────────────
    env_name: str = "local"
    database_url: str | None = None
    cloud_sql_connection_name: str | None = None
    db_user: str | None = None
    db_pass: str | None = None
    db_name: str | None = None
    create_tables: bool = True

    # ─── HTTP / auth ────────────────────────────────────────────────
    api_prefix: str = "/api"
    jwt_secret: str = "changeme"
    jwt_ttl_minutes: int = Field(60 * 24 * 30, gt=0)
    bcrypt_rounds: int = Field(12, ge=4, le=31)
    log_level: str = "INFO"

    # getPatientData / addPatientIllness / assignProvider are open to any
    # signed-in user unless this is switched on
    restrict_patient_management_to_providers: bool = False

    # allow other teammates’ env-vars without crashing
    model_config = SettingsConfigDict(
        extra="ignore", env_file=".env", env_file_encoding="utf-8"
    )


# ------------------------------------------------------------------ #
#  Cached singleton accessor
# ------------------------------------------------------------------ #
@lru_cache
def _cached() -> _Settings:  # pragma: no cover
    return _Settings()  # type: ignore[call-arg]


settings: _Settings = _cached()
