from datetime import datetime, timedelta, timezone

import bcrypt
import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from config import settings
from core.access import Caller
from core.errors import InvalidCredentialError, MissingCredentialError
from core.models.user import Role

_ALGO = "HS256"

# auto_error=False so a missing header reaches us and can be told apart
# from a bad token
_bearer = HTTPBearer(auto_error=False)


def _secret(password: str) -> bytes:
    # bcrypt only looks at the first 72 bytes
    return password.encode("utf-8")[:72]


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(_secret(password), salt).decode("utf-8")


def check_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(_secret(password), hashed.encode("utf-8"))
    except ValueError:
        # malformed hash in storage
        return False


def create_token(user_id: str, role: str, ttl_minutes: int | None = None) -> str:
    ttl = ttl_minutes if ttl_minutes is not None else settings.jwt_ttl_minutes
    exp = datetime.now(timezone.utc) + timedelta(minutes=ttl)
    payload = {"sub": user_id, "role": role, "exp": exp}
    return jwt.encode(payload, settings.jwt_secret, algorithm=_ALGO)


def verify_token(token: str) -> Caller:
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[_ALGO])
        return Caller(id=str(payload["sub"]), role=Role(payload["role"]))
    except (jwt.PyJWTError, KeyError, ValueError):
        raise InvalidCredentialError("Token is not valid") from None


def get_caller(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> Caller:
    if credentials is None or not credentials.credentials:
        raise MissingCredentialError("No token, authorization denied")
    return verify_token(credentials.credentials)
