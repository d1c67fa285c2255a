"""
Custody between unmarried parents.

No marriage, grounds or marital property steps. The parents' living
arrangement and paternity are collected instead, and the client's address
may omit the ZIP code.
"""

from steps import common, consistency
from steps.base import ConditionalRequirement, FieldDef, FieldFormat, SchemaStep, StepMap, UiStep
from steps.gates import definite_boolean_gate, item_count_gate, mode_mismatch_gate

MODE = "custody_unmarried"

PARENT_RELATIONSHIP = SchemaStep(
    key="parent_relationship",
    label="Relationship",
    fields=(
        FieldDef(
            path="currently_cohabitating",
            format=FieldFormat.BOOLEAN,
            required=True,
            label="Do you currently live with the other parent?",
        ),
        FieldDef(
            path="paternity_established",
            format=FieldFormat.BOOLEAN,
            required=True,
            label="Has paternity been legally established?",
        ),
        FieldDef(
            path="legitimation_requested",
            format=FieldFormat.BOOLEAN,
            label="Do you want to ask the court to establish paternity?",
        ),
    ),
    conditional_requirements=(
        ConditionalRequirement(when="paternity_established", value=False, then_require=("legitimation_requested",)),
    ),
)

STEP_MAP = StepMap(
    mode=MODE,
    schema_steps=(
        common.intake_metadata_step(),
        common.client_identity_step(zip_optional=True),
        common.opposing_party_step("other_parent", "Other Parent", "other parent"),
        PARENT_RELATIONSHIP,
        common.children_step(),
        common.custody_preferences_step(),
        common.safety_risk_step(),
        common.jurisdiction_venue_step(),
        common.prior_legal_actions_step(),
        common.desired_outcomes_step(),
        common.evidence_documents_step(),
    ),
    ui_steps=(
        UiStep(key="basics", label="Basics", schema_steps=("intake_metadata",)),
        UiStep(key="client", label="About You", schema_steps=("client_identity",)),
        UiStep(key="other_parent", label="Other Parent", schema_steps=("other_parent", "parent_relationship")),
        UiStep(key="children", label="Children", schema_steps=("children",)),
        UiStep(key="custody", label="Custody", schema_steps=("custody_preferences",)),
        UiStep(key="safety", label="Safety", schema_steps=("safety_risk",)),
        UiStep(key="venue", label="Venue", schema_steps=("jurisdiction_venue",)),
        UiStep(key="legal_history", label="Legal History", schema_steps=("prior_legal_actions",)),
        UiStep(key="goals", label="Goals", schema_steps=("desired_outcomes",)),
        UiStep(key="documents", label="Documents", schema_steps=("evidence_documents",)),
    ),
)

GATING_RULES = (
    definite_boolean_gate(
        "parent_relationship",
        "currently_cohabitating",
        "Please answer yes or no about whether you live with the other parent.",
    ),
    mode_mismatch_gate(
        step="children",
        field="has_minor_children",
        value=False,
        reason="This intake requires children. If no children, use a different intake type.",
    ),
    definite_boolean_gate("children", "has_minor_children"),
    item_count_gate(
        "children",
        "children",
        "You told us about {declared} children but listed {listed}. Please remove the extra entries or update the count.",
    ),
)

# No separation date in this intake, so cohabitation has nothing to contradict.
CONSISTENCY_RULES = (
    consistency.IMMEDIATE_SAFETY,
    consistency.PROTECTIVE_ORDER_WITHOUT_DV,
    consistency.COUNTY_MISMATCH,
    consistency.LOW_RESIDENCY,
)
