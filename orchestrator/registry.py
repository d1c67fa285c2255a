"""
Orchestrator facade - mode dispatch for intake callers.

A read-only table maps every IntakeMode to its step map, gating table,
consistency rules and orchestrator instance. The table is built once at import; an inconsistent
mode configuration fails here, at process start.

Callers (chat UI, resume flow, submit validator) go through these functions
rather than touching a mode's orchestrator directly.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from orchestrator.exceptions import UnknownModeError
from orchestrator.modes import IntakeMode
from orchestrator.orchestrator import StepOrchestrator
from orchestrator.results import (
    ConsistencyWarning,
    FieldPrompt,
    FieldRef,
    GateEvaluation,
    OrchestratorResult,
    PostureCheck,
    SidebarStep,
    StepStatus,
)
from steps import custody_unmarried, divorce_no_children, divorce_with_children, generic
from steps.base import FieldDef, FieldFormat, StepMap
from steps.consistency import ConsistencyRule
from steps.gates import GateKind, GateRule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModeBinding:
    """Everything needed to evaluate one mode."""
    step_map: StepMap
    gating_rules: tuple[GateRule, ...]
    consistency_rules: tuple[ConsistencyRule, ...]
    orchestrator: StepOrchestrator


def _bind(module) -> ModeBinding:
    return ModeBinding(
        step_map=module.STEP_MAP,
        gating_rules=module.GATING_RULES,
        consistency_rules=module.CONSISTENCY_RULES,
        orchestrator=StepOrchestrator(module.STEP_MAP, module.GATING_RULES, module.CONSISTENCY_RULES),
    )


MODE_BINDINGS: Mapping[IntakeMode, ModeBinding] = MappingProxyType({
    IntakeMode.GENERIC: _bind(generic),
    IntakeMode.DIVORCE_NO_CHILDREN: _bind(divorce_no_children),
    IntakeMode.DIVORCE_WITH_CHILDREN: _bind(divorce_with_children),
    IntakeMode.CUSTODY_UNMARRIED: _bind(custody_unmarried),
})


def resolve_mode(mode: IntakeMode | str | None) -> IntakeMode:
    """Resolve a mode tag; unknown or missing tags are a configuration error, never a default."""
    try:
        resolved = IntakeMode(mode)
    except ValueError:
        logger.warning(f"Unknown intake mode requested: {mode!r}")
        raise UnknownModeError(
            f"Unknown intake mode: {mode!r}",
            data={"mode": mode if isinstance(mode, str) else None, "valid_modes": list_modes()},
        ) from None
    if resolved not in MODE_BINDINGS:
        raise UnknownModeError(f"No configuration bound for intake mode: {resolved.value}")
    return resolved


def is_valid_mode(mode: Any) -> bool:
    try:
        return IntakeMode(mode) in MODE_BINDINGS
    except ValueError:
        return False


def list_modes() -> list[str]:
    return [mode.value for mode in MODE_BINDINGS]


def _binding(mode: IntakeMode | str | None) -> ModeBinding:
    return MODE_BINDINGS[resolve_mode(mode)]


def get_step_map(mode: IntakeMode | str) -> StepMap:
    return _binding(mode).step_map


def first_schema_step(mode: IntakeMode | str) -> str:
    return _binding(mode).step_map.schema_steps[0].key


def orchestrate_intake(mode: IntakeMode | str, snapshot: Mapping[str, Any] | None) -> OrchestratorResult:
    binding = _binding(mode)
    logger.debug(f"Dispatching intake snapshot to {binding.step_map.mode} orchestrator")
    result = binding.orchestrator.orchestrate(snapshot)
    if result.blocked:
        logger.info(f"[{result.mode}] intake blocked at {result.current_step}: {result.block_reason}")
    return result


def evaluate_gates(mode: IntakeMode | str, snapshot: Mapping[str, Any] | None) -> GateEvaluation:
    return _binding(mode).orchestrator.evaluate_gates(snapshot if isinstance(snapshot, Mapping) else {})


def unresolved_gate_fields(mode: IntakeMode | str, snapshot: Mapping[str, Any] | None) -> list[str]:
    return _binding(mode).orchestrator.unresolved_gate_fields(snapshot if isinstance(snapshot, Mapping) else {})


def needs_gating_resolution(mode: IntakeMode | str, snapshot: Mapping[str, Any] | None) -> bool:
    """True while a gate field lacks a definite answer or any gate is violated."""
    if unresolved_gate_fields(mode, snapshot):
        return True
    return evaluate_gates(mode, snapshot).blocked


def _field_def_for(step_map: StepMap, ref: FieldRef) -> FieldDef | None:
    step = step_map.get_schema_step_config(ref.step)
    if step is None:
        return None
    field = step.get_field(ref.path)
    if field is not None or step.repeatable_group is None:
        return field
    item_path = ref.path.split("].", 1)[-1]
    return next((f for f in step.repeatable_group.item_fields if f.path == item_path), None)


def get_chat_prompt_fields(mode: IntakeMode | str, snapshot: Mapping[str, Any] | None) -> list[FieldPrompt]:
    """Next fields relabeled for a conversational front-end; no extra business logic."""
    binding = _binding(mode)
    result = binding.orchestrator.orchestrate(snapshot)
    prompts: list[FieldPrompt] = []
    for ref in result.next_fields:
        field = _field_def_for(binding.step_map, ref)
        prompts.append(
            FieldPrompt(
                path=ref.path,
                step=ref.step,
                label=ref.label,
                format=ref.format,
                is_toggle=ref.format is FieldFormat.BOOLEAN,
                choices=list(field.choices) if field else [],
                reason=ref.reason,
                message=ref.message,
                help_text=field.help_text if field else None,
            )
        )
    return prompts


def check_mode_posture(mode: IntakeMode | str, snapshot: Mapping[str, Any] | None) -> PostureCheck:
    """Report whether answers contradict the selected mode, and which mode fits instead."""
    resolved = resolve_mode(mode)
    gates = evaluate_gates(resolved, snapshot)
    mismatch = next((v for v in gates.violations if v.kind is GateKind.MODE_MISMATCH), None)
    if mismatch is None:
        return PostureCheck(valid=True, mode=resolved.value)
    return PostureCheck(
        valid=False,
        mode=resolved.value,
        reason=mismatch.reason,
        suggested_mode=mismatch.suggested_mode,
    )


def check_consistency(mode: IntakeMode | str, snapshot: Mapping[str, Any] | None) -> list[ConsistencyWarning]:
    return _binding(mode).orchestrator.check_consistency(snapshot if isinstance(snapshot, Mapping) else {})


def sidebar_from_result(result: OrchestratorResult) -> list[SidebarStep]:
    return [
        SidebarStep(
            key=ui_step.key,
            label=ui_step.label,
            status=ui_step.status,
            completed=ui_step.status is StepStatus.COMPLETE,
            active=ui_step.key == result.current_ui_step,
        )
        for ui_step in result.ui_steps
    ]


def is_submittable(result: OrchestratorResult) -> bool:
    """Not blocked and every step complete. Warnings do not count."""
    return not result.blocked and all(s.status is StepStatus.COMPLETE for s in result.steps)


def build_sidebar_steps(mode: IntakeMode | str, snapshot: Mapping[str, Any] | None) -> list[SidebarStep]:
    return sidebar_from_result(orchestrate_intake(mode, snapshot))


def can_submit(mode: IntakeMode | str, snapshot: Mapping[str, Any] | None) -> bool:
    """Final submit check."""
    return is_submittable(orchestrate_intake(mode, snapshot))
