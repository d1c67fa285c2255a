"""
Result models returned by the step orchestrator and its facade.

Everything here is derived data, recomputed on every call and never stored.
Field names serialize to camelCase (``blockReason``, ``nextFields``) because
front-ends read these payloads directly.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from steps.base import FieldFormat
from steps.gates import GateKind


class ResultModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class StepStatus(str, Enum):
    NOT_STARTED = "not_started"
    INCOMPLETE = "incomplete"
    BLOCKED = "blocked"
    COMPLETE = "complete"


class FieldIssue(str, Enum):
    """Why a field still needs attention."""
    MISSING = "missing"
    INVALID = "invalid"  # present but fails its format
    MALFORMED = "malformed"  # wrong container shape somewhere along the path
    INDEFINITE = "indefinite"  # yes/no question answered with something else


class FieldRef(ResultModel):
    """A field that must be supplied or corrected before its step completes."""
    path: str
    step: str
    label: str
    format: FieldFormat
    reason: FieldIssue
    message: str


class StepResult(ResultModel):
    key: str
    label: str
    status: StepStatus
    required_fields: list[str] = Field(default_factory=list, description="Effective required set, in order")
    missing_fields: list[FieldRef] = Field(default_factory=list)
    block_reason: str | None = None
    items_required: int | None = Field(default=None, description="Declared repeatable item count")
    items_complete: int | None = None


class UiStepResult(ResultModel):
    key: str
    label: str
    schema_steps: list[str]
    status: StepStatus
    completion_percent: int


class GateViolation(ResultModel):
    kind: GateKind
    step: str
    field: str
    reason: str
    suggested_mode: str | None = None


class GateEvaluation(ResultModel):
    blocked: bool
    reason: str | None = None
    affected_steps: list[str] = Field(default_factory=list)
    violations: list[GateViolation] = Field(default_factory=list)


class ConsistencyWarning(ResultModel):
    """Non-blocking notice raised by a consistency rule."""
    key: str
    message: str
    paths: list[str]


class OrchestratorResult(ResultModel):
    """
    Full derived state of one intake snapshot under one mode.

    ``next_fields`` comes from the first step that is not complete, and is
    empty whenever the flow is blocked. ``warnings`` are informational and
    do not affect ``ready_for_submission``.
    """
    mode: str
    steps: list[StepResult]
    blocked: bool
    block_reason: str | None = None
    next_fields: list[FieldRef] = Field(default_factory=list)
    current_step: str | None = None
    current_ui_step: str | None = None
    ui_steps: list[UiStepResult] = Field(default_factory=list)
    completion_percent: int = 0
    ready_for_submission: bool = False
    suggested_mode: str | None = None
    warnings: list[ConsistencyWarning] = Field(default_factory=list)

    def step(self, key: str) -> StepResult | None:
        return next((s for s in self.steps if s.key == key), None)


class FieldPrompt(ResultModel):
    """Presentation-ready version of a FieldRef for conversational front-ends."""
    path: str
    step: str
    label: str
    format: FieldFormat
    is_toggle: bool
    choices: list[str] = Field(default_factory=list)
    reason: FieldIssue
    message: str
    help_text: str | None = None


class SidebarStep(ResultModel):
    key: str
    label: str
    status: StepStatus
    completed: bool
    active: bool


class PostureCheck(ResultModel):
    """Whether the snapshot's answers are consistent with the selected mode."""
    valid: bool
    mode: str
    reason: str | None = None
    suggested_mode: str | None = None
