"""Gating rule evaluation for StepOrchestrator."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from orchestrator.results import GateEvaluation, GateViolation
from steps.gates import GateKind, GateRule


class GatingMixin:
    """
    Mixin providing gate evaluation.

    Gates are additive: every violated rule is reported, ordered by the
    blocked step's position in the map and then by rule declaration order.
    """

    gating_rules: tuple[GateRule, ...]

    def evaluate_gates(self, snapshot: Mapping[str, Any]) -> GateEvaluation:
        ordered = sorted(
            enumerate(self.gating_rules),
            key=lambda pair: (self.step_map.step_index(pair[1].step), pair[0]),
        )
        violations: list[GateViolation] = []
        for _, rule in ordered:
            violation = self._check_gate(rule, snapshot)
            if violation is not None:
                violations.append(violation)

        affected_steps: list[str] = []
        for violation in violations:
            if violation.step not in affected_steps:
                affected_steps.append(violation.step)

        return GateEvaluation(
            blocked=bool(violations),
            reason=violations[0].reason if violations else None,
            affected_steps=affected_steps,
            violations=violations,
        )

    def unresolved_gate_fields(self, snapshot: Mapping[str, Any]) -> list[str]:
        """Yes/no gate fields that do not yet hold a definite boolean."""
        unresolved: list[str] = []
        for rule in self.gating_rules:
            if rule.kind is GateKind.ITEM_COUNT or rule.field in unresolved:
                continue
            lookup = self._lookup_field(snapshot, rule.field)
            if not (lookup.present and isinstance(lookup.value, bool)):
                unresolved.append(rule.field)
        return unresolved

    def _check_gate(self, rule: GateRule, snapshot: Mapping[str, Any]) -> GateViolation | None:
        if rule.kind is GateKind.MODE_MISMATCH:
            if self._condition_holds(snapshot, rule.blocked_when):
                return self._violation(rule, rule.reason)
            return None

        if rule.kind is GateKind.DEFINITE_BOOLEAN:
            # Unset is not a block; the field is simply prompted.
            lookup = self._lookup_field(snapshot, rule.field)
            if lookup.present and not isinstance(lookup.value, bool):
                return self._violation(rule, rule.reason)
            return None

        step = self.step_map.get_schema_step_config(rule.step)
        group = step.repeatable_group
        if not self._group_is_active(group, snapshot):
            return None
        declared = self._declared_count(snapshot, step)
        lookup = self._lookup_field(snapshot, group.array_field)
        if declared is None or not lookup.present or not isinstance(lookup.value, list):
            return None
        listed = len(lookup.value)
        if listed > declared:
            return self._violation(rule, rule.reason.format(declared=declared, listed=listed))
        return None

    @staticmethod
    def _violation(rule: GateRule, reason: str) -> GateViolation:
        return GateViolation(
            kind=rule.kind,
            step=rule.step,
            field=rule.field,
            reason=reason,
            suggested_mode=rule.suggested_mode,
        )
