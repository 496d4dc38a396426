"""
core/progress.py
────────────────────────────────────────────────────────────────────────
Goal completion percentage.

    progress = min(current / target * 100, 100)

A goal without a usable target (missing, zero or negative) keeps whatever
progress it already had; that is different from a met target, which is
capped at 100.  There is no lower clamp, so a negative current value gives
a negative progress.
"""

from __future__ import annotations

import logging

_LOG = logging.getLogger(__name__)

CAP = 100.0


class ProgressCalculator:
    """Stateless; one shared instance is fine."""

    def compute(
        self,
        current_value: float,
        target_value: float | None,
        previous: float = 0.0,
    ) -> float:
        if not target_value or target_value <= 0:
            _LOG.debug("no usable target (%r), progress stays %s", target_value, previous)
            return previous
        return min((current_value / target_value) * 100, CAP)

    def for_goal(self, goal: dict) -> float:
        """Convenience for a merged goal dict (snake_case keys)."""
        return self.compute(
            goal.get("current_value") or 0,
            goal.get("target_value"),
            goal.get("progress") or 0.0,
        )
