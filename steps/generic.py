"""
Generic divorce/custody intake, used when the matter type is not yet known.

Children, assets and debts are all optional branches driven by yes/no
answers; each answer must be definite before its branch can be resolved.
"""

from steps import common, consistency
from steps.base import Condition, ConditionalRequirement, FieldDef, FieldFormat, SchemaStep, StepMap, UiStep
from steps.gates import definite_boolean_gate, item_count_gate

MODE = "generic"

_HAS_CHILDREN = Condition(when="has_minor_children", value=True)

CHILDREN_CUSTODY = SchemaStep(
    key="children_custody",
    label="Children & Custody",
    fields=(
        FieldDef(
            path="has_minor_children",
            format=FieldFormat.BOOLEAN,
            required=True,
            label="Do you have minor children?",
        ),
        FieldDef(
            path="num_children",
            format=FieldFormat.COUNT,
            minimum=1,
            maximum=common.MAX_CHILDREN,
            label="How many minor children?",
        ),
        FieldDef(path="custody_type_requested", format=FieldFormat.ENUM, choices=common.CUSTODY_TYPES),
        FieldDef(path="parenting_plan_exists", format=FieldFormat.BOOLEAN, label="Is there a parenting plan?"),
    ),
    conditional_requirements=(
        ConditionalRequirement(
            when="has_minor_children",
            value=True,
            then_require=("num_children", "custody_type_requested", "parenting_plan_exists"),
        ),
    ),
    repeatable_group=common.children_group(active_when=_HAS_CHILDREN, include_home_state=False),
)

STEP_MAP = StepMap(
    mode=MODE,
    schema_steps=(
        common.intake_metadata_step(include_matter_type=True),
        common.client_identity_step(),
        common.opposing_party_step("opposing_party", "Other Party", "other party"),
        common.marriage_details_step(),
        common.separation_grounds_step(),
        CHILDREN_CUSTODY,
        common.assets_step(),
        common.income_support_step(common.SUPPORT_WITH_CHILDREN),
        common.debts_step(),
        common.safety_risk_step(),
        common.jurisdiction_venue_step(),
        common.prior_legal_actions_step(),
        common.desired_outcomes_step(),
        common.evidence_documents_step(),
    ),
    ui_steps=(
        UiStep(key="basics", label="Basics", schema_steps=("matter_metadata",)),
        UiStep(key="about_you", label="About You", schema_steps=("client_identity",)),
        UiStep(key="other_party", label="Other Party", schema_steps=("opposing_party",)),
        UiStep(key="marriage", label="Marriage", schema_steps=("marriage_details", "separation_grounds")),
        UiStep(key="children_custody", label="Children & Custody", schema_steps=("children_custody",)),
        UiStep(
            key="assets_finances",
            label="Assets & Finances",
            schema_steps=("assets_property", "income_support", "liabilities_debts"),
        ),
        UiStep(key="safety", label="Safety", schema_steps=("safety_risk",)),
        UiStep(key="legal", label="Legal", schema_steps=("jurisdiction_venue", "prior_legal_actions")),
        UiStep(key="goals", label="Goals", schema_steps=("desired_outcomes",)),
        UiStep(key="documents", label="Documents", schema_steps=("evidence_documents",)),
    ),
)

GATING_RULES = (
    definite_boolean_gate("children_custody", "has_minor_children"),
    item_count_gate(
        "children_custody",
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
    consistency.CUSTODY_WITHOUT_CHILDREN,
    consistency.PROTECTIVE_ORDER_WITHOUT_DV,
    consistency.COUNTY_MISMATCH,
    consistency.LOW_RESIDENCY,
)
