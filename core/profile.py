"""
core/profile.py
────────────────────────────────────────────────────────────────────────
Profile merge + "profile complete" flag.

Merge rule (per role-mutable field)
-----------------------------------
    merged = incoming if incoming else current

so a falsy incoming value (0, "", [], None) never overwrites what is
stored.  Setting age to 0 or clearing a bio is therefore impossible
through a profile update.

Completeness
------------
patient  → age and gender both set
provider → specialization and license_number both set

The flag only ever moves from False to True.  Once complete, a profile
stays complete.
"""

from __future__ import annotations

from typing import Any, Mapping

from core.models.user import PATIENT_FIELDS, PROVIDER_FIELDS, REQUIRED_FIELDS, Role

_MUTABLE = {
    Role.patient: PATIENT_FIELDS,
    Role.provider: PROVIDER_FIELDS,
}


class ProfileCompletenessEvaluator:
    def merge(
        self,
        role: Role | str,
        current: Mapping[str, Any],
        incoming: Mapping[str, Any],
    ) -> dict[str, Any]:
        """Return the merged values of the fields `role` may update."""
        fields = _MUTABLE[Role(role)]
        merged = {f: incoming.get(f) or current.get(f) for f in fields}
        if merged.get("health_conditions"):
            # a set on the wire; keep first-seen order
            merged["health_conditions"] = list(dict.fromkeys(merged["health_conditions"]))
        return merged

    def is_complete(self, role: Role | str, fields: Mapping[str, Any]) -> bool:
        return all(fields.get(f) for f in REQUIRED_FIELDS[Role(role)])

    def evaluate(
        self,
        role: Role | str,
        current: Mapping[str, Any],
        incoming: Mapping[str, Any],
    ) -> bool:
        merged = {**current, **self.merge(role, current, incoming)}
        if current.get("profile_complete"):
            return True
        return self.is_complete(role, merged)

    def apply(
        self,
        role: Role | str,
        current: Mapping[str, Any],
        incoming: Mapping[str, Any],
    ) -> dict[str, Any]:
        """Merged field values plus the derived flag, ready for one write."""
        changes = self.merge(role, current, incoming)
        changes["profile_complete"] = self.evaluate(role, current, incoming)
        return changes
