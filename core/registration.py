"""
Registration input rules, checked before anything touches the store.
"""

from __future__ import annotations

from typing import Any, Mapping

from core.errors import ValidationError
from core.models.user import Role


def check_registration(fields: Mapping[str, Any]) -> Role:
    """Return the requested role, or raise `ValidationError`."""
    if not all(fields.get(k) for k in ("name", "email", "password", "role")):
        raise ValidationError("Please provide all required fields")

    try:
        role = Role(fields["role"])
    except ValueError:
        raise ValidationError("Invalid role. Must be patient or provider") from None

    if role is Role.provider and not (
        fields.get("specialization") and fields.get("license_number")
    ):
        raise ValidationError(
            "Providers must provide specialization and license number"
        )
    return role
