"""
Divorce with minor children: divorce, custody, support, assets and debts.

The children step requires exactly ``num_children`` child records, each with
a definite current residence. A "no" to the minor-children question is a
mode mismatch.
"""

from steps import common, consistency
from steps.base import StepMap, UiStep
from steps.gates import definite_boolean_gate, item_count_gate, mode_mismatch_gate

MODE = "divorce_with_children"

STEP_MAP = StepMap(
    mode=MODE,
    schema_steps=(
        common.intake_metadata_step(),
        common.client_identity_step(),
        common.opposing_party_step("opposing_party", "Spouse", "spouse"),
        common.marriage_details_step(),
        common.separation_grounds_step(),
        common.children_step(),
        common.custody_preferences_step(),
        common.assets_step(),
        common.debts_step(),
        common.income_support_step(common.SUPPORT_WITH_CHILDREN),
        common.safety_risk_step(),
        common.jurisdiction_venue_step(),
        common.prior_legal_actions_step(),
        common.desired_outcomes_step(),
        common.evidence_documents_step(),
    ),
    ui_steps=(
        UiStep(key="basics", label="Basics", schema_steps=("intake_metadata",)),
        UiStep(key="client", label="About You", schema_steps=("client_identity",)),
        UiStep(key="other_party", label="Spouse", schema_steps=("opposing_party",)),
        UiStep(key="marriage", label="Marriage", schema_steps=("marriage_details",)),
        UiStep(key="grounds", label="Grounds", schema_steps=("separation_grounds",)),
        UiStep(key="children", label="Children", schema_steps=("children",)),
        UiStep(key="custody", label="Custody", schema_steps=("custody_preferences",)),
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
        step="children",
        field="has_minor_children",
        value=False,
        reason=(
            "This intake is for divorces with minor children. "
            "We will route you to the correct intake."
        ),
        suggested_mode="divorce_no_children",
    ),
    definite_boolean_gate("children", "has_minor_children"),
    item_count_gate(
        "children",
        "children",
        "You told us about {declared} children but listed {listed}. Please remove the extra entries or update the count.",
    ),
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
