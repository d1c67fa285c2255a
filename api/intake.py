"""Intake orchestration endpoints.

Thin adapter over ``orchestrator.registry``: every route takes the selected
mode plus the latest snapshot and returns derived state. Nothing is stored.
"""
import logging

from fastapi import APIRouter, status

from api.schemas import ApiResponse, IntakeRequest, ModeInfo
from config import settings
from orchestrator import registry

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/modes",
    response_model=ApiResponse,
    status_code=status.HTTP_200_OK,
    summary="List intake modes",
)
async def list_modes():
    """List every configured intake mode with its schema step order."""
    modes = []
    for mode in registry.list_modes():
        step_map = registry.get_step_map(mode)
        modes.append(
            ModeInfo(
                mode=mode,
                first_step=registry.first_schema_step(mode),
                steps=[step.key for step in step_map.schema_steps],
            ).model_dump()
        )
    return ApiResponse(success=True, message="Intake modes", data={"modes": modes})


@router.post(
    "/orchestrate",
    response_model=ApiResponse,
    status_code=status.HTTP_200_OK,
    summary="Compute step status for an intake snapshot",
)
async def orchestrate(request: IntakeRequest):
    """
    Compute per-step status, blocking state and the next fields to prompt.

    The result mirrors the orchestrator's camelCase payload
    (``steps``, ``blocked``, ``blockReason``, ``nextFields``) so front-ends can
    render it directly. Always re-request after an edit; results are never cached.
    """
    result = registry.orchestrate_intake(request.mode, request.snapshot)
    if settings.LOG_RESULTS:
        logger.info(
            f"[{result.mode}] current={result.current_step} blocked={result.blocked} "
            f"completion={result.completion_percent}%"
        )
    return ApiResponse(
        success=True,
        message="Intake blocked" if result.blocked else "Intake evaluated",
        data=result.model_dump(by_alias=True, mode="json"),
    )


@router.post(
    "/prompt-fields",
    response_model=ApiResponse,
    status_code=status.HTTP_200_OK,
    summary="Next fields for a conversational front-end",
)
async def prompt_fields(request: IntakeRequest):
    prompts = registry.get_chat_prompt_fields(request.mode, request.snapshot)
    return ApiResponse(
        success=True,
        message=f"{len(prompts)} field(s) to prompt",
        data={"fields": [p.model_dump(by_alias=True, mode="json") for p in prompts]},
    )


@router.post(
    "/gating",
    response_model=ApiResponse,
    status_code=status.HTTP_200_OK,
    summary="Gate evaluation and mode posture",
)
async def gating(request: IntakeRequest):
    gates = registry.evaluate_gates(request.mode, request.snapshot)
    unresolved = registry.unresolved_gate_fields(request.mode, request.snapshot)
    posture = registry.check_mode_posture(request.mode, request.snapshot)
    return ApiResponse(
        success=True,
        message="Gates evaluated",
        data={
            "needsResolution": bool(unresolved) or gates.blocked,
            "unresolvedFields": unresolved,
            "gates": gates.model_dump(by_alias=True, mode="json"),
            "posture": posture.model_dump(by_alias=True, mode="json"),
        },
    )


@router.post(
    "/submit-check",
    response_model=ApiResponse,
    status_code=status.HTTP_200_OK,
    summary="Final check before an intake is submitted",
)
async def submit_check(request: IntakeRequest):
    """Refuse submission unless nothing is blocked and every step is complete."""
    result = registry.orchestrate_intake(request.mode, request.snapshot)
    can_submit = registry.is_submittable(result)
    return ApiResponse(
        success=True,
        message="Ready to submit" if can_submit else "Intake is not ready to submit",
        data={
            "canSubmit": can_submit,
            "blocked": result.blocked,
            "blockReason": result.block_reason,
            "currentStep": result.current_step,
            "sidebar": [s.model_dump(by_alias=True, mode="json") for s in registry.sidebar_from_result(result)],
            "warnings": [w.model_dump(by_alias=True, mode="json") for w in result.warnings],
        },
    )
