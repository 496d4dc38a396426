"""
core/access.py
────────────────────────────────────────────────────────────────────────
Per-request allow/deny decisions.

Every route names an `Action`; the policy table maps it to a `Rule`
(which roles may call it, and whether the caller must own the resource).
Checks run in a fixed order and stop at the first failure:

1. no caller                → authentication failure
2. role outside the rule    → forbidden
3. owner-only, owner known,
   owner != caller          → forbidden

Owner-only rules evaluated with `owner_id=None` stop after step 2, which
lets a route gate on role before it loads the resource and check
ownership once it has it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from core.errors import AuthorizationError, MissingCredentialError, PortalError
from core.models.user import Role

_LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class Caller:
    id: str
    role: Role


class Action(str, Enum):
    read_profile = "read_profile"
    update_profile = "update_profile"
    list_goals = "list_goals"
    create_goal = "create_goal"
    update_goal = "update_goal"
    delete_goal = "delete_goal"
    list_providers = "list_providers"
    get_provider = "get_provider"
    list_provider_directory = "list_provider_directory"
    get_patient_data = "get_patient_data"
    add_patient_illness = "add_patient_illness"
    assign_provider = "assign_provider"


@dataclass(frozen=True)
class Rule:
    roles: frozenset[Role] | None = None   # None → any signed-in role
    owner_only: bool = False
    denied: str = "Not authorized"


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: str = ""
    error: type[PortalError] | None = None

    def raise_for_denial(self) -> None:
        if not self.allowed and self.error is not None:
            raise self.error(self.reason)


ALLOW = Decision(True)

_PATIENT = frozenset({Role.patient})
_PROVIDER = frozenset({Role.provider})

# patient-management actions; open to any signed-in caller unless restricted
PATIENT_MANAGEMENT = (
    Action.get_patient_data,
    Action.add_patient_illness,
    Action.assign_provider,
)


def default_rules(restrict_patient_management: bool = False) -> dict[Action, Rule]:
    rules = {
        Action.read_profile: Rule(owner_only=True),
        Action.update_profile: Rule(owner_only=True),
        Action.list_goals: Rule(roles=_PATIENT),
        Action.create_goal: Rule(roles=_PATIENT),
        Action.update_goal: Rule(
            roles=_PATIENT, owner_only=True, denied="Not authorized to update this goal"
        ),
        Action.delete_goal: Rule(
            roles=_PATIENT, owner_only=True, denied="Not authorized to delete this goal"
        ),
        Action.list_providers: Rule(),
        Action.get_provider: Rule(),
        Action.list_provider_directory: Rule(),
    }
    for action in PATIENT_MANAGEMENT:
        rules[action] = Rule(roles=_PROVIDER if restrict_patient_management else None)
    return rules


class AccessPolicy:
    def __init__(self, rules: dict[Action, Rule] | None = None) -> None:
        self._rules = rules if rules is not None else default_rules()

    def rule(self, action: Action) -> Rule:
        return self._rules[action]

    def authorize(
        self,
        caller: Caller | None,
        action: Action,
        owner_id: str | None = None,
    ) -> Decision:
        if caller is None:
            return Decision(False, "No token, authorization denied", MissingCredentialError)

        rule = self._rules[action]
        if rule.roles is not None and caller.role not in rule.roles:
            allowed = ", ".join(sorted(r.value for r in rule.roles))
            return Decision(
                False, f"Access denied: allowed roles: {allowed}", AuthorizationError
            )

        if rule.owner_only and owner_id is not None and str(owner_id) != caller.id:
            return Decision(False, rule.denied, AuthorizationError)

        return ALLOW

    def enforce(
        self,
        caller: Caller | None,
        action: Action,
        owner_id: str | None = None,
    ) -> Caller:
        decision = self.authorize(caller, action, owner_id)
        if not decision.allowed:
            _LOG.warning(
                "denied %s for %s: %s",
                action.value,
                caller.id if caller else "<anonymous>",
                decision.reason,
            )
            decision.raise_for_denial()
        if caller is None:
            raise MissingCredentialError("No token, authorization denied")
        return caller
