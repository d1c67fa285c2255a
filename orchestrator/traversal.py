"""Field lookup and step completion helpers for StepOrchestrator."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable

from orchestrator.results import FieldIssue, FieldRef
from steps.base import Condition, FieldDef, FieldFormat, RepeatableGroup, SchemaStep, StepMap
from utils.paths import LookupState, PathLookup, resolve_path
from utils.validators import (
    validate_address,
    validate_count,
    validate_definite_boolean,
    validate_email,
    validate_iso_date,
    validate_loose_address,
    validate_number,
    validate_phone,
    validate_zip9,
)

FORMAT_CHECKS: dict[FieldFormat, Callable[[Any, FieldDef], bool]] = {
    FieldFormat.TEXT: lambda value, field: isinstance(value, str),
    FieldFormat.DATE: lambda value, field: validate_iso_date(value),
    FieldFormat.BOOLEAN: lambda value, field: validate_definite_boolean(value),
    FieldFormat.NUMBER: lambda value, field: validate_number(value),
    FieldFormat.COUNT: lambda value, field: validate_count(value, field.minimum or 0, field.maximum),
    FieldFormat.ENUM: lambda value, field: isinstance(value, str) and value in field.choices,
    FieldFormat.EMAIL: lambda value, field: validate_email(value),
    FieldFormat.PHONE: lambda value, field: validate_phone(value),
    FieldFormat.ZIP: lambda value, field: validate_zip9(value),
    FieldFormat.ADDRESS: lambda value, field: validate_address(value),
    FieldFormat.LOOSE_ADDRESS: lambda value, field: validate_loose_address(value),
}

FORMAT_MESSAGES: dict[FieldFormat, str] = {
    FieldFormat.TEXT: "Please enter a text answer.",
    FieldFormat.DATE: "Please enter a valid date (YYYY-MM-DD).",
    FieldFormat.BOOLEAN: "Please answer yes or no.",
    FieldFormat.NUMBER: "Please enter a number.",
    FieldFormat.COUNT: "Please enter a whole number.",
    FieldFormat.ENUM: "Please choose one of the listed options.",
    FieldFormat.EMAIL: "Please enter a valid email address.",
    FieldFormat.PHONE: "Please enter a valid phone number.",
    FieldFormat.ZIP: "Please enter a valid 5-digit ZIP code.",
    FieldFormat.ADDRESS: "Please enter a valid 5-digit ZIP code.",
    FieldFormat.LOOSE_ADDRESS: "If including a ZIP code, please ensure it is a valid 5-digit format.",
}


def _strip(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


class TraversalMixin:
    """Mixin providing field lookup, condition evaluation and step completion logic."""

    step_map: StepMap

    def _lookup_field(self, snapshot: Mapping[str, Any], path: str) -> PathLookup:
        """Tagged lookup where blank strings count as unanswered (False/0/{} are valid)."""
        lookup = resolve_path(snapshot, path)
        if lookup.present and isinstance(lookup.value, str) and not lookup.value.strip():
            return PathLookup(LookupState.MISSING)
        return lookup

    def _eval_condition(self, value: Any, operator: str, expected: Any) -> bool:
        """Evaluate a minimal conditional requirement."""
        try:
            if operator == "truthy":
                return bool(value)
            if operator == "==":
                return value == expected
            if operator == "!=":
                return value != expected
            if operator == ">":
                return value > expected
            if operator == "<":
                return value < expected
        except TypeError:
            return False
        return False

    def _condition_holds(self, snapshot: Mapping[str, Any], condition: Condition) -> bool:
        lookup = self._lookup_field(snapshot, condition.when)
        if not lookup.present:
            return False
        actual, expected = lookup.value, condition.value
        if condition.compare_to is not None:
            other = self._lookup_field(snapshot, condition.compare_to)
            if not other.present:
                return False
            actual, expected = _strip(actual), _strip(other.value)
        # True == 1 in Python; yes/no answers and numbers never satisfy each other's conditions.
        if condition.operator != "truthy" and isinstance(expected, bool) != isinstance(actual, bool):
            return False
        return self._eval_condition(actual, condition.operator, expected)

    def _effective_required_fields(self, step: SchemaStep, snapshot: Mapping[str, Any]) -> list[FieldDef]:
        """Declared required fields plus any pulled in by a satisfied condition, in field order."""
        pulled: set[str] = set()
        for rule in step.conditional_requirements:
            if self._condition_holds(snapshot, rule):
                pulled.update(rule.then_require)
        return [f for f in step.fields if f.required or f.path in pulled]

    def _group_is_active(self, group: RepeatableGroup, snapshot: Mapping[str, Any]) -> bool:
        if group.active_when is None:
            return True
        return self._condition_holds(snapshot, group.active_when)

    def _value_matches_format(self, field: FieldDef, value: Any) -> bool:
        return FORMAT_CHECKS[field.format](value, field)

    def _format_message(self, field: FieldDef) -> str:
        if field.format is FieldFormat.COUNT and field.maximum is not None:
            return f"Please enter a whole number from {field.minimum or 0} to {field.maximum}."
        return FORMAT_MESSAGES[field.format]

    def _check_field(
        self,
        snapshot: Mapping[str, Any],
        field: FieldDef,
        step_key: str,
        path: str | None = None,
        label: str | None = None,
    ) -> tuple[bool, FieldRef | None]:
        """
        Check one field value.

        Returns ``(present, issue)``. A format-invalid value is present (the
        user did answer) but still produces an issue; a malformed path is
        treated as absent.
        """
        path = path or field.path
        label = label or field.display_label
        lookup = self._lookup_field(snapshot, path)

        if lookup.state is LookupState.MALFORMED:
            return False, FieldRef(
                path=path,
                step=step_key,
                label=label,
                format=field.format,
                reason=FieldIssue.MALFORMED,
                message=f"{label} could not be read. Please enter it again.",
            )
        if lookup.state is LookupState.MISSING:
            return False, FieldRef(
                path=path,
                step=step_key,
                label=label,
                format=field.format,
                reason=FieldIssue.MISSING,
                message=f"{label} is required.",
            )
        if not self._value_matches_format(field, lookup.value):
            reason = FieldIssue.INDEFINITE if field.format is FieldFormat.BOOLEAN else FieldIssue.INVALID
            return True, FieldRef(
                path=path,
                step=step_key,
                label=label,
                format=field.format,
                reason=reason,
                message=field.error_message or self._format_message(field),
            )
        return True, None

    def _declared_count(self, snapshot: Mapping[str, Any], step: SchemaStep) -> int | None:
        """The group's count field value, or None when it is absent or not a valid count."""
        group = step.repeatable_group
        if group is None:
            return None
        count_field = step.get_field(group.count_field)
        lookup = self._lookup_field(snapshot, group.count_field)
        if not lookup.present or not self._value_matches_format(count_field, lookup.value):
            return None
        return lookup.value

    def _check_group(
        self,
        snapshot: Mapping[str, Any],
        step: SchemaStep,
    ) -> tuple[list[FieldRef], bool, int | None, int | None]:
        """
        Check the first ``count`` items of an active repeatable group.

        Returns ``(issues, any_present, items_required, items_complete)``.
        Without a valid count nothing is checked here; the count field itself
        is reported by the step's own required fields.
        """
        group = step.repeatable_group
        count = self._declared_count(snapshot, step)
        if group is None or count is None:
            return [], False, None, None

        issues: list[FieldRef] = []
        any_present = False
        items_complete = 0
        for index in range(count):
            item_ok = True
            for field in group.item_fields:
                if not field.required:
                    continue
                present, issue = self._check_field(
                    snapshot,
                    field,
                    step.key,
                    path=group.item_path(index, field.path),
                    label=group.item_field_label(index, field),
                )
                any_present = any_present or present
                if issue:
                    issues.append(issue)
                    item_ok = False
            if item_ok:
                items_complete += 1
        return issues, any_present, count, items_complete
