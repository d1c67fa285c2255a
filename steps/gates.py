"""
Declarative gating rules.

A gate names the step it blocks and the field it watches. Rules are data;
evaluation lives in ``orchestrator.gating``.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

from orchestrator.exceptions import IntakeConfigurationError
from steps.base import Condition


class GateKind(str, Enum):
    MODE_MISMATCH = "mode_mismatch"  # answer contradicts the selected intake mode
    DEFINITE_BOOLEAN = "definite_boolean"  # answered, but not with a yes/no
    ITEM_COUNT = "item_count"  # more repeatable items than the declared count


class GateRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: GateKind
    step: str
    field: str
    reason: str
    blocked_when: Condition | None = None
    suggested_mode: str | None = None

    @model_validator(mode="after")
    def _check_kind(self) -> "GateRule":
        if self.kind is GateKind.MODE_MISMATCH and self.blocked_when is None:
            raise IntakeConfigurationError(f"Mode-mismatch gate on '{self.field}' needs a blocked_when condition")
        return self


def mode_mismatch_gate(
    step: str,
    field: str,
    value: Any,
    reason: str,
    suggested_mode: str | None = None,
) -> GateRule:
    return GateRule(
        kind=GateKind.MODE_MISMATCH,
        step=step,
        field=field,
        reason=reason,
        blocked_when=Condition(when=field, operator="==", value=value),
        suggested_mode=suggested_mode,
    )


def definite_boolean_gate(step: str, field: str, reason: str | None = None) -> GateRule:
    return GateRule(
        kind=GateKind.DEFINITE_BOOLEAN,
        step=step,
        field=field,
        reason=reason or f"A definite yes or no is required for '{field}' before continuing.",
    )


def item_count_gate(step: str, array_field: str, reason: str) -> GateRule:
    """``reason`` may use ``{declared}`` and ``{listed}`` placeholders."""
    return GateRule(kind=GateKind.ITEM_COUNT, step=step, field=array_field, reason=reason)
