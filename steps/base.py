"""
Base configuration models for intake step maps.

A step map is static, frozen data: an ordered list of schema steps (the unit
completion is computed on) and UI steps (presentation grouping only). Each
mode gets its own StepMap instance; nothing here knows about other modes.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from orchestrator.exceptions import IntakeConfigurationError


class FieldFormat(str, Enum):
    """Value formats a field can declare; each maps to a validator."""
    TEXT = "text"
    DATE = "date"
    BOOLEAN = "boolean"
    NUMBER = "number"
    COUNT = "count"
    ENUM = "enum"
    EMAIL = "email"
    PHONE = "phone"
    ZIP = "zip"
    ADDRESS = "address"  # free text ending in a valid ZIP
    LOOSE_ADDRESS = "loose_address"  # free text, ZIP optional


ConditionOperator = Literal["==", "!=", ">", "<", "truthy"]


def format_label(path: str) -> str:
    """``client_first_name`` -> ``Client First Name`` (last path segment only)."""
    key = path.split(".")[-1].split("[")[0]
    return " ".join(part.capitalize() for part in key.split("_") if part)


class FieldDef(BaseModel):
    """A single snapshot field owned by a step (or by a repeatable item)."""

    model_config = ConfigDict(frozen=True)

    path: str
    label: str | None = None
    format: FieldFormat = FieldFormat.TEXT
    required: bool = False
    choices: tuple[str, ...] = ()
    minimum: int | None = Field(default=None, description="Lower bound for COUNT fields")
    maximum: int | None = Field(default=None, description="Upper bound for COUNT fields")
    help_text: str | None = None
    error_message: str | None = Field(default=None, description="Overrides the format's default message")

    @model_validator(mode="after")
    def _check_choices(self) -> "FieldDef":
        if self.format is FieldFormat.ENUM and not self.choices:
            raise IntakeConfigurationError(f"Enum field '{self.path}' declares no choices")
        if self.minimum is not None and self.maximum is not None and self.maximum < self.minimum:
            raise IntakeConfigurationError(f"Field '{self.path}' has maximum below its minimum")
        return self

    @property
    def display_label(self) -> str:
        return self.label or format_label(self.path)


class Condition(BaseModel):
    """
    Minimal predicate over one snapshot field.

    Keep this mechanical. A condition whose field is absent never holds.
    With ``compare_to`` the field is compared against another field's
    answer instead of ``value``; if that field is absent it never holds either.
    """

    model_config = ConfigDict(frozen=True)

    when: str
    operator: ConditionOperator = "=="
    value: Any | None = None
    compare_to: str | None = None

    @model_validator(mode="after")
    def _check_operand(self) -> "Condition":
        if self.operator == "truthy":
            if self.value is not None or self.compare_to is not None:
                raise IntakeConfigurationError(f"Truthy condition on '{self.when}' takes no operand")
        elif self.compare_to is not None and self.value is not None:
            raise IntakeConfigurationError(
                f"Condition on '{self.when}' compares against both a value and '{self.compare_to}'"
            )
        return self

    @property
    def fields(self) -> tuple[str, ...]:
        """Every snapshot field this condition reads."""
        if self.compare_to is None:
            return (self.when,)
        return (self.when, self.compare_to)


class ConditionalRequirement(Condition):
    """When the condition holds, ``then_require`` joins the step's required set."""

    then_require: tuple[str, ...] = ()


class RepeatableGroup(BaseModel):
    """
    Count-driven list of sub-records (children, assets, debts).

    The array at ``array_field`` must hold exactly ``count_field`` items, each
    with every required item field and a definite ``status_field``.
    """

    model_config = ConfigDict(frozen=True)

    array_field: str
    count_field: str
    item_label: str
    item_fields: tuple[FieldDef, ...]
    status_field: str
    active_when: Condition | None = None

    @model_validator(mode="after")
    def _check_status_field(self) -> "RepeatableGroup":
        status = next((f for f in self.item_fields if f.path == self.status_field), None)
        if status is None or not status.required:
            raise IntakeConfigurationError(
                f"Group '{self.array_field}' status field '{self.status_field}' must be a required item field"
            )
        return self

    def item_path(self, index: int, field_path: str) -> str:
        return f"{self.array_field}[{index}].{field_path}"

    def item_field_label(self, index: int, field: FieldDef) -> str:
        return f"{self.item_label} {index + 1}: {field.display_label}"


class SchemaStep(BaseModel):
    """Backend-meaningful group of fields; the unit step status is computed for."""

    model_config = ConfigDict(frozen=True)

    key: str
    label: str
    fields: tuple[FieldDef, ...] = ()
    conditional_requirements: tuple[ConditionalRequirement, ...] = ()
    repeatable_group: RepeatableGroup | None = None

    @model_validator(mode="after")
    def _check_references(self) -> "SchemaStep":
        paths = {f.path for f in self.fields}
        if len(paths) != len(self.fields):
            raise IntakeConfigurationError(f"Step '{self.key}' declares a field twice")
        for rule in self.conditional_requirements:
            unknown = [p for p in rule.then_require if p not in paths]
            if unknown:
                raise IntakeConfigurationError(f"Step '{self.key}' conditionally requires undeclared fields: {unknown}")
        if self.repeatable_group:
            count_field = self.get_field(self.repeatable_group.count_field)
            if count_field is None:
                raise IntakeConfigurationError(
                    f"Step '{self.key}' group count field '{self.repeatable_group.count_field}' is not declared"
                )
            # Items are enumerated up to the declared count, so the count must be capped.
            if count_field.format is not FieldFormat.COUNT or count_field.maximum is None:
                raise IntakeConfigurationError(
                    f"Step '{self.key}' group count field '{count_field.path}' must be a count with a maximum"
                )
        return self

    @property
    def required_fields(self) -> list[str]:
        return [f.path for f in self.fields if f.required]

    def get_field(self, path: str) -> FieldDef | None:
        return next((f for f in self.fields if f.path == path), None)


class UiStep(BaseModel):
    """Sidebar grouping of one or more schema steps."""

    model_config = ConfigDict(frozen=True)

    key: str
    label: str
    schema_steps: tuple[str, ...]


class StepMap(BaseModel):
    """Ordered schema and UI steps for a single intake mode."""

    model_config = ConfigDict(frozen=True)

    mode: str
    schema_steps: tuple[SchemaStep, ...]
    ui_steps: tuple[UiStep, ...]

    @model_validator(mode="after")
    def _check_map(self) -> "StepMap":
        keys = [s.key for s in self.schema_steps]
        if len(set(keys)) != len(keys):
            raise IntakeConfigurationError(f"[{self.mode}] duplicate schema step keys")

        seen: list[str] = []
        for ui_step in self.ui_steps:
            for key in ui_step.schema_steps:
                if key not in keys:
                    raise IntakeConfigurationError(f"[{self.mode}] UI step '{ui_step.key}' references unknown step '{key}'")
                seen.append(key)
        if sorted(seen) != sorted(keys):
            raise IntakeConfigurationError(f"[{self.mode}] every schema step must belong to exactly one UI step")

        declared = self.field_paths()
        for step in self.schema_steps:
            conditions: list[Condition] = list(step.conditional_requirements)
            if step.repeatable_group and step.repeatable_group.active_when:
                conditions.append(step.repeatable_group.active_when)
            for condition in conditions:
                for path in condition.fields:
                    if path not in declared:
                        raise IntakeConfigurationError(
                            f"[{self.mode}] step '{step.key}' has a condition on undeclared field '{path}'"
                        )
        return self

    def field_paths(self) -> set[str]:
        """Every top-level field path and group array this map declares."""
        paths: set[str] = set()
        for step in self.schema_steps:
            paths.update(f.path for f in step.fields)
            if step.repeatable_group:
                paths.add(step.repeatable_group.array_field)
        return paths

    def get_schema_step_config(self, key: str) -> SchemaStep | None:
        return next((s for s in self.schema_steps if s.key == key), None)

    def get_ui_step_config(self, key: str) -> UiStep | None:
        return next((s for s in self.ui_steps if s.key == key), None)

    def step_index(self, key: str) -> int:
        """Position of a schema step, or -1."""
        return next((i for i, s in enumerate(self.schema_steps) if s.key == key), -1)

    def ui_step_order(self, key: str) -> int:
        """Position of a UI step, or -1."""
        return next((i for i, s in enumerate(self.ui_steps) if s.key == key), -1)

    def ui_step_for_schema_step(self, schema_step_key: str) -> UiStep | None:
        return next((u for u in self.ui_steps if schema_step_key in u.schema_steps), None)
