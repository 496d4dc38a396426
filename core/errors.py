"""
core/errors.py
────────────────────────────────────────────────────────────────────────
Failure kinds raised by the portal.  Each carries the HTTP status it maps
to and a stable `kind` string so callers can tell them apart even when
the message text is generic.
"""

from __future__ import annotations


class PortalError(Exception):
    status_code: int = 500
    kind: str = "unexpected_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def as_dict(self) -> dict[str, str]:
        return {"message": self.message, "kind": self.kind}


class ValidationError(PortalError):
    """Missing or malformed input; never retried."""

    status_code = 400
    kind = "validation_error"


class ConflictError(PortalError):
    """Duplicate email, or a value already present in a set-like field."""

    status_code = 409
    kind = "conflict"


class AuthenticationError(PortalError):
    status_code = 401
    kind = "authentication_error"


class MissingCredentialError(AuthenticationError):
    kind = "missing_credential"


class InvalidCredentialError(AuthenticationError):
    kind = "invalid_credential"


class AuthorizationError(PortalError):
    """Valid identity, but wrong role or not the owner."""

    status_code = 403
    kind = "forbidden"


class NotFoundError(PortalError):
    status_code = 404
    kind = "not_found"


class UnexpectedError(PortalError):
    pass
