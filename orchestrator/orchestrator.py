"""
StepOrchestrator - deterministic step engine for legal intake.

One generic algorithm, instantiated once per mode with that mode's step map,
gating table and consistency rules. Modes never share an instance, so a field
that only exists in one mode's map can never be evaluated or prompted under
another.

Flow (per call):
snapshot -> evaluate_gates -> per-step status -> current step -> next fields
snapshot -> check_consistency -> warnings (never blocking)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from orchestrator.consistency import ConsistencyMixin
from orchestrator.exceptions import IntakeConfigurationError
from orchestrator.gating import GatingMixin
from orchestrator.results import (
    FieldRef,
    OrchestratorResult,
    StepResult,
    StepStatus,
    UiStepResult,
)
from orchestrator.traversal import TraversalMixin
from steps.base import SchemaStep, StepMap
from steps.consistency import ConsistencyRule
from steps.gates import GateKind, GateRule

logger = logging.getLogger(__name__)


class StepOrchestrator(TraversalMixin, GatingMixin, ConsistencyMixin):
    """
    Step orchestrator for a single intake mode.

    API:
    - orchestrate(snapshot) -> OrchestratorResult
    - evaluate_gates(snapshot) -> GateEvaluation
    - unresolved_gate_fields(snapshot) -> list[str]
    - check_consistency(snapshot) -> list[ConsistencyWarning]

    Never raises on snapshot shape; wrongly-typed values are reported as
    field issues in the result.
    """

    def __init__(
        self,
        step_map: StepMap,
        gating_rules: Iterable[GateRule] = (),
        consistency_rules: Iterable[ConsistencyRule] = (),
    ):
        self.step_map = step_map
        self.gating_rules = tuple(gating_rules)
        self.consistency_rules = tuple(consistency_rules)
        self._validate_gating_rules()
        self._validate_consistency_rules()

    @property
    def mode(self) -> str:
        return self.step_map.mode

    def _validate_gating_rules(self) -> None:
        """Every gate must point at a step and field declared by this mode's map."""
        for rule in self.gating_rules:
            step = self.step_map.get_schema_step_config(rule.step)
            if step is None:
                raise IntakeConfigurationError(
                    f"[{self.mode}] gate on '{rule.field}' references unknown step '{rule.step}'"
                )
            if rule.kind is GateKind.ITEM_COUNT:
                if step.repeatable_group is None or step.repeatable_group.array_field != rule.field:
                    raise IntakeConfigurationError(
                        f"[{self.mode}] item-count gate '{rule.field}' has no repeatable group on '{rule.step}'"
                    )
            elif step.get_field(rule.field) is None:
                raise IntakeConfigurationError(
                    f"[{self.mode}] gate field '{rule.field}' is not declared on step '{rule.step}'"
                )
            if rule.blocked_when is None:
                continue
            for path in rule.blocked_when.fields:
                if path not in self.step_map.field_paths():
                    raise IntakeConfigurationError(
                        f"[{self.mode}] gate condition references undeclared field '{path}'"
                    )

    def _validate_consistency_rules(self) -> None:
        """Consistency rules may only read fields this mode's map declares."""
        declared = self.step_map.field_paths()
        keys = [rule.key for rule in self.consistency_rules]
        if len(set(keys)) != len(keys):
            raise IntakeConfigurationError(f"[{self.mode}] duplicate consistency rule keys")
        for rule in self.consistency_rules:
            undeclared = [path for path in rule.paths if path not in declared]
            if undeclared:
                raise IntakeConfigurationError(
                    f"[{self.mode}] consistency rule '{rule.key}' reads undeclared fields: {undeclared}"
                )

    def orchestrate(self, snapshot: Mapping[str, Any] | None) -> OrchestratorResult:
        if not isinstance(snapshot, Mapping):
            snapshot = {}

        gates = self.evaluate_gates(snapshot)
        step_block_reasons: dict[str, str] = {}
        for violation in gates.violations:
            step_block_reasons.setdefault(violation.step, violation.reason)

        steps = [
            self._evaluate_step(step, snapshot, step_block_reasons.get(step.key))
            for step in self.step_map.schema_steps
        ]

        blocked_steps = [s for s in steps if s.status is StepStatus.BLOCKED]
        blocked = bool(blocked_steps)
        current = next((s for s in steps if s.status is not StepStatus.COMPLETE), None)
        next_fields: list[FieldRef] = [] if blocked or current is None else list(current.missing_fields)

        current_ui_step = None
        if current is not None:
            ui_step = self.step_map.ui_step_for_schema_step(current.key)
            current_ui_step = ui_step.key if ui_step else None

        complete = sum(1 for s in steps if s.status is StepStatus.COMPLETE)
        suggested_mode = next((v.suggested_mode for v in gates.violations if v.suggested_mode), None)

        result = OrchestratorResult(
            mode=self.mode,
            steps=steps,
            blocked=blocked,
            block_reason=blocked_steps[0].block_reason if blocked else None,
            next_fields=next_fields,
            current_step=current.key if current else None,
            current_ui_step=current_ui_step,
            ui_steps=self._summarize_ui_steps(steps),
            completion_percent=round(100 * complete / len(steps)) if steps else 100,
            ready_for_submission=not blocked and current is None,
            suggested_mode=suggested_mode,
            warnings=self.check_consistency(snapshot),
        )
        logger.debug(
            f"[{self.mode}] orchestrated: current={result.current_step} "
            f"blocked={result.blocked} next_fields={[f.path for f in next_fields]}"
        )
        return result

    def _evaluate_step(
        self,
        step: SchemaStep,
        snapshot: Mapping[str, Any],
        block_reason: str | None,
    ) -> StepResult:
        required = self._effective_required_fields(step, snapshot)
        issues: list[FieldRef] = []
        any_present = False
        for field in required:
            present, issue = self._check_field(snapshot, field, step.key)
            any_present = any_present or present
            if issue:
                issues.append(issue)

        items_required = items_complete = None
        group = step.repeatable_group
        if group is not None and self._group_is_active(group, snapshot):
            group_issues, group_present, items_required, items_complete = self._check_group(snapshot, step)
            issues.extend(group_issues)
            any_present = any_present or group_present

        # Gate precedence: a flagged step is blocked even when every field is present.
        if block_reason:
            status = StepStatus.BLOCKED
        elif not issues:
            status = StepStatus.COMPLETE
        elif not any_present:
            status = StepStatus.NOT_STARTED
        else:
            status = StepStatus.INCOMPLETE

        return StepResult(
            key=step.key,
            label=step.label,
            status=status,
            required_fields=[f.path for f in required],
            missing_fields=issues,
            block_reason=block_reason,
            items_required=items_required,
            items_complete=items_complete,
        )

    def _summarize_ui_steps(self, steps: list[StepResult]) -> list[UiStepResult]:
        by_key = {s.key: s for s in steps}
        summaries: list[UiStepResult] = []
        for ui_step in self.step_map.ui_steps:
            members = [by_key[key] for key in ui_step.schema_steps]
            statuses = {m.status for m in members}
            if StepStatus.BLOCKED in statuses:
                status = StepStatus.BLOCKED
            elif statuses == {StepStatus.COMPLETE}:
                status = StepStatus.COMPLETE
            elif statuses == {StepStatus.NOT_STARTED}:
                status = StepStatus.NOT_STARTED
            else:
                status = StepStatus.INCOMPLETE
            complete = sum(1 for m in members if m.status is StepStatus.COMPLETE)
            summaries.append(
                UiStepResult(
                    key=ui_step.key,
                    label=ui_step.label,
                    schema_steps=list(ui_step.schema_steps),
                    status=status,
                    completion_percent=round(100 * complete / len(members)),
                )
            )
        return summaries
