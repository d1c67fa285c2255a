"""
Declarative consistency rules.

A rule fires when all of its conditions hold. Firing never blocks a step or
submission; it adds a warning for the client and the reviewing attorney.
Evaluation lives in ``orchestrator.consistency``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, model_validator

from orchestrator.exceptions import IntakeConfigurationError
from steps.base import Condition


class ConsistencyRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    message: str
    all_of: tuple[Condition, ...]

    @model_validator(mode="after")
    def _check_conditions(self) -> "ConsistencyRule":
        if not self.all_of:
            raise IntakeConfigurationError(f"Consistency rule '{self.key}' has no conditions")
        return self

    @property
    def paths(self) -> tuple[str, ...]:
        """Fields the rule reads, in condition order."""
        paths: list[str] = []
        for condition in self.all_of:
            for path in condition.fields:
                if path not in paths:
                    paths.append(path)
        return tuple(paths)


IMMEDIATE_SAFETY = ConsistencyRule(
    key="immediate_safety",
    message=(
        "If you are in immediate danger, call 911 now. If you are safe to do so, you can contact the "
        "National Domestic Violence Hotline at 1-800-799-SAFE (7233) or text \"START\" to 88788."
    ),
    all_of=(Condition(when="immediate_safety_concerns", value=True),),
)

COHABITATING_WITH_SEPARATION = ConsistencyRule(
    key="cohabitating_with_separation",
    message="You said you still live together, but a separation date is provided.",
    all_of=(
        Condition(when="currently_cohabitating", value=True),
        Condition(when="date_of_separation", operator="truthy"),
    ),
)

CUSTODY_WITHOUT_CHILDREN = ConsistencyRule(
    key="custody_without_children",
    message="A custody type is selected, but you said there are no minor children.",
    all_of=(
        Condition(when="custody_type_requested", operator="truthy"),
        Condition(when="has_minor_children", value=False),
    ),
)

PROTECTIVE_ORDER_WITHOUT_DV = ConsistencyRule(
    key="protective_order_without_dv",
    message="A protective order is marked Yes, but domestic violence is marked No.",
    all_of=(
        Condition(when="dv_present", value=False),
        Condition(when="protective_order_exists", value=True),
    ),
)

COUNTY_MISMATCH = ConsistencyRule(
    key="county_mismatch",
    message=(
        "You selected a different county for filing than your current county. That can be okay, "
        "but it may affect where the case is filed. If you are unsure, keep your best guess; "
        "your attorney will review it."
    ),
    all_of=(Condition(when="client_county", operator="!=", compare_to="county_of_filing"),),
)

LOW_RESIDENCY = ConsistencyRule(
    key="residency_low",
    message=(
        "You entered less than 6 months of residency. This may affect filing requirements. "
        "Please continue; your attorney will review."
    ),
    all_of=(
        Condition(when="residency_duration_months", operator=">", value=0),
        Condition(when="residency_duration_months", operator="<", value=6),
    ),
)
