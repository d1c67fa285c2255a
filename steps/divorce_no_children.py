"""
Divorce without minor children.

The children question is asked only so that a "yes" can be caught and routed
to the with-children intake; no child details are collected here.
"""

from steps import common, consistency
from steps.base import StepMap, UiStep
from steps.gates import definite_boolean_gate, item_count_gate, mode_mismatch_gate

MODE = "divorce_no_children"

STEP_MAP = StepMap(
    mode=MODE,
    schema_steps=(
        common.intake_metadata_step(),
        common.client_identity_step(),
        common.opposing_party_step("opposing_party", "Spouse", "spouse"),
        common.marriage_details_step(),
        common.separation_grounds_step(),
        common.children_flag_step(),
        common.assets_step(),
        common.debts_step(),
        common.income_support_step(common.SUPPORT_WITHOUT_CHILDREN),
        common.safety_risk_step(),
        common.jurisdiction_venue_step(),
        common.prior_legal_actions_step(),
        common.desired_outcomes_step(common.PRIMARY_GOALS_WITHOUT_CHILDREN),
        common.evidence_documents_step(),
    ),
    ui_steps=(
        UiStep(key="basics", label="Basics", schema_steps=("intake_metadata",)),
        UiStep(key="client", label="About You", schema_steps=("client_identity",)),
        UiStep(key="other_party", label="Spouse", schema_steps=("opposing_party",)),
        UiStep(key="marriage", label="Marriage", schema_steps=("marriage_details",)),
        UiStep(key="grounds", label="Grounds", schema_steps=("separation_grounds",)),
        UiStep(key="children_gate", label="Children", schema_steps=("children_gate",)),
        UiStep(key="assets", label="Assets", schema_steps=("assets_property",)),
        UiStep(key="debts", label="Debts", schema_steps=("liabilities_debts",)),
        UiStep(key="income_support", label="Income & Support", schema_steps=("income_support",)),
        UiStep(key="safety", label="Safety", schema_steps=("safety_risk",)),
        UiStep(key="venue", label="Venue", schema_steps=("jurisdiction_venue",)),
        UiStep(key="legal_history", label="Legal History", schema_steps=("prior_legal_actions",)),
        UiStep(key="goals", label="Goals", schema_steps=("desired_outcomes",)),
        UiStep(key="documents", label="Documents", schema_steps=("evidence_documents",)),
    ),
)

GATING_RULES = (
    mode_mismatch_gate(
        step="children_gate",
        field="has_minor_children",
        value=True,
        reason=(
            "This intake is for divorces without minor children. "
            "We will route you to the correct intake for matters involving children."
        ),
        suggested_mode="divorce_with_children",
    ),
    definite_boolean_gate("children_gate", "has_minor_children"),
    definite_boolean_gate(
        "assets_property",
        "has_marital_assets",
        "Please answer yes or no about marital assets before continuing.",
    ),
    item_count_gate(
        "assets_property",
        "assets",
        "You told us about {declared} assets but listed {listed}. Please remove the extra entries or update the count.",
    ),
    definite_boolean_gate(
        "liabilities_debts",
        "has_marital_debts",
        "Please answer yes or no about marital debts before continuing.",
    ),
    item_count_gate(
        "liabilities_debts",
        "debts",
        "You told us about {declared} debts but listed {listed}. Please remove the extra entries or update the count.",
    ),
)

CONSISTENCY_RULES = (
    consistency.IMMEDIATE_SAFETY,
    consistency.COHABITATING_WITH_SEPARATION,
    consistency.PROTECTIVE_ORDER_WITHOUT_DV,
    consistency.COUNTY_MISMATCH,
    consistency.LOW_RESIDENCY,
)
