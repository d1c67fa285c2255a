"""
Legal Intake - Step Map Configuration

Static, frozen configuration for every intake mode: ordered schema steps
(the unit completion is computed on), UI steps (sidebar grouping only),
repeatable groups and declarative gating rules.

All configuration objects are Pydantic models with ``frozen=True`` and are
validated when the mode modules are imported, so an inconsistent table fails
at process start rather than mid-intake.
"""

# Base configuration models
from steps.base import (
    Condition,
    ConditionalRequirement,
    FieldDef,
    FieldFormat,
    RepeatableGroup,
    SchemaStep,
    StepMap,
    UiStep,
    format_label,
)

# Gating rules
from steps.gates import (
    GateKind,
    GateRule,
    definite_boolean_gate,
    item_count_gate,
    mode_mismatch_gate,
)

__all__ = [
    "Condition",
    "ConditionalRequirement",
    "FieldDef",
    "FieldFormat",
    "RepeatableGroup",
    "SchemaStep",
    "StepMap",
    "UiStep",
    "format_label",
    "GateKind",
    "GateRule",
    "definite_boolean_gate",
    "item_count_gate",
    "mode_mismatch_gate",
]
