"""
Shared schema-step builders.

Every mode map is assembled from these functions. Each call returns a new
frozen SchemaStep, so maps stay statically distinct even where they look
alike; mode-specific wording and choices are passed in, never looked up.
"""

from __future__ import annotations

from steps.base import (
    Condition,
    ConditionalRequirement,
    FieldDef,
    FieldFormat,
    RepeatableGroup,
    SchemaStep,
)

URGENCY_LEVELS = ("routine", "urgent", "emergency")
INTAKE_CHANNELS = ("web", "referral", "phone")
MATTER_TYPES = ("divorce", "custody", "support", "other")
DIVORCE_GROUNDS = (
    "irretrievable_breakdown",
    "irreconcilable_differences",
    "adultery",
    "desertion",
    "cruelty",
    "separation",
    "other",
)
CHILD_RESIDENCES = ("with_client", "with_other_parent", "split", "third_party", "other")
BIOLOGICAL_RELATIONS = ("biological", "adoptive", "step", "other")
CUSTODY_TYPES = ("sole", "joint", "primary", "unsure")
ASSET_TYPES = (
    "real_estate",
    "bank_account",
    "retirement",
    "vehicle",
    "business",
    "personal_property",
    "investment",
    "other",
)
DEBT_TYPES = (
    "mortgage",
    "car_loan",
    "credit_card",
    "student_loan",
    "personal_loan",
    "medical_debt",
    "tax_debt",
    "other",
)
PARTIES = ("client", "spouse", "joint", "unknown")
SUPPORT_WITH_CHILDREN = ("none", "child_support_only", "alimony_only", "both", "unsure")
SUPPORT_WITHOUT_CHILDREN = ("none", "alimony_only", "unsure")
PRIMARY_GOALS = (
    "quick_resolution",
    "fair_custody",
    "primary_custody",
    "fair_asset_division",
    "child_support",
    "alimony",
    "protect_children",
    "other",
)
PRIMARY_GOALS_WITHOUT_CHILDREN = ("quick_resolution", "fair_asset_division", "alimony", "other")
SETTLEMENT_PREFERENCES = ("negotiation", "mediation", "litigation", "unsure")
LITIGATION_TOLERANCES = ("low", "medium", "high")

# Upper bounds for declared item counts; larger counts are rejected as invalid answers.
MAX_CHILDREN = 20
MAX_LISTED_ITEMS = 100


def _required(path: str, fmt: FieldFormat = FieldFormat.TEXT, **kwargs) -> FieldDef:
    return FieldDef(path=path, format=fmt, required=True, **kwargs)


def _optional(path: str, fmt: FieldFormat = FieldFormat.TEXT, **kwargs) -> FieldDef:
    return FieldDef(path=path, format=fmt, required=False, **kwargs)


def _when(field: str, value, *then_require: str) -> ConditionalRequirement:
    return ConditionalRequirement(when=field, value=value, then_require=then_require)


def intake_metadata_step(include_matter_type: bool = False) -> SchemaStep:
    fields = []
    if include_matter_type:
        fields.append(_required("matter_type", FieldFormat.ENUM, choices=MATTER_TYPES))
    fields += [
        _required("urgency_level", FieldFormat.ENUM, choices=URGENCY_LEVELS),
        _required("intake_channel", FieldFormat.ENUM, choices=INTAKE_CHANNELS),
    ]
    key = "matter_metadata" if include_matter_type else "intake_metadata"
    return SchemaStep(key=key, label="Intake Basics", fields=tuple(fields))


def client_identity_step(zip_optional: bool = False) -> SchemaStep:
    if zip_optional:
        address = _required(
            "client_address",
            FieldFormat.LOOSE_ADDRESS,
            label="Home Address",
            error_message="If including a ZIP code, please ensure it is a valid 5-digit format.",
        )
    else:
        address = _required("client_address", FieldFormat.ADDRESS, label="Home Address")
    return SchemaStep(
        key="client_identity",
        label="About You",
        fields=(
            _required("client_first_name", label="First Name"),
            _required("client_last_name", label="Last Name"),
            _required("client_dob", FieldFormat.DATE, label="Date of Birth"),
            _required("client_phone", FieldFormat.PHONE, label="Phone Number"),
            _required("client_email", FieldFormat.EMAIL, label="Email Address"),
            address,
            _required("client_county", label="County"),
        ),
    )


def opposing_party_step(key: str, label: str, party_noun: str) -> SchemaStep:
    return SchemaStep(
        key=key,
        label=label,
        fields=(
            _required("opposing_first_name", label=f"{party_noun.title()} First Name"),
            _required("opposing_last_name", label=f"{party_noun.title()} Last Name"),
            _required("opposing_address_known", FieldFormat.BOOLEAN, label=f"Do you know the {party_noun}'s address?"),
            _required("service_concerns", FieldFormat.BOOLEAN, label="Any concerns about serving papers?"),
            _optional(
                "opposing_last_known_address",
                FieldFormat.ADDRESS,
                label=f"{party_noun.title()} Last Known Address",
                error_message=f"Please enter a valid 5-digit ZIP code for {party_noun} address.",
            ),
        ),
        conditional_requirements=(_when("opposing_address_known", True, "opposing_last_known_address"),),
    )


def marriage_details_step() -> SchemaStep:
    return SchemaStep(
        key="marriage_details",
        label="Marriage",
        fields=(
            _required("date_of_marriage", FieldFormat.DATE),
            _required("place_of_marriage"),
            _required("currently_cohabitating", FieldFormat.BOOLEAN, label="Are you still living together?"),
            _optional("date_of_separation", FieldFormat.DATE),
        ),
        conditional_requirements=(_when("currently_cohabitating", False, "date_of_separation"),),
    )


def separation_grounds_step() -> SchemaStep:
    return SchemaStep(
        key="separation_grounds",
        label="Grounds",
        fields=(_required("grounds_for_divorce", FieldFormat.ENUM, choices=DIVORCE_GROUNDS),),
    )


def children_flag_step() -> SchemaStep:
    """Minor-children question on its own, for modes that only need the answer."""
    return SchemaStep(
        key="children_gate",
        label="Children",
        fields=(
            _required("has_minor_children", FieldFormat.BOOLEAN, label="Do you have minor children?"),
        ),
    )


def child_item_fields(include_home_state: bool = True) -> tuple[FieldDef, ...]:
    fields = [
        _required("full_name", label="Full Name"),
        _required("dob", FieldFormat.DATE, label="Date of Birth"),
        _required("current_residence", FieldFormat.ENUM, label="Lives With", choices=CHILD_RESIDENCES),
        _required("biological_relation", FieldFormat.ENUM, label="Relationship", choices=BIOLOGICAL_RELATIONS),
    ]
    if include_home_state:
        fields += [
            _required("home_state", label="Home State"),
            _required("time_in_home_state_months", FieldFormat.COUNT, label="Months in Home State", minimum=0),
        ]
    return tuple(fields)


def children_group(active_when: Condition | None = None, include_home_state: bool = True) -> RepeatableGroup:
    return RepeatableGroup(
        array_field="children",
        count_field="num_children",
        item_label="Child",
        item_fields=child_item_fields(include_home_state),
        status_field="current_residence",
        active_when=active_when,
    )


def children_step(include_home_state: bool = True) -> SchemaStep:
    """Children details for modes that require at least one child."""
    return SchemaStep(
        key="children",
        label="Children",
        fields=(
            _required("has_minor_children", FieldFormat.BOOLEAN, label="Do you have minor children?"),
            _required(
                "num_children",
                FieldFormat.COUNT,
                label="How many minor children?",
                minimum=1,
                maximum=MAX_CHILDREN,
            ),
        ),
        repeatable_group=children_group(include_home_state=include_home_state),
    )


def custody_preferences_step() -> SchemaStep:
    return SchemaStep(
        key="custody_preferences",
        label="Custody",
        fields=(
            _required("existing_order", FieldFormat.BOOLEAN, label="Is there an existing custody order?"),
            _optional("seeking_modification", FieldFormat.BOOLEAN, label="Are you seeking to modify it?"),
            _required("custody_type_requested", FieldFormat.ENUM, choices=CUSTODY_TYPES),
            _required("parenting_plan_exists", FieldFormat.BOOLEAN, label="Is there a parenting plan?"),
        ),
        conditional_requirements=(_when("existing_order", True, "seeking_modification"),),
    )


def _enumerated_step(
    key: str,
    label: str,
    flag_field: str,
    flag_label: str,
    count_field: str,
    array_field: str,
    item_label: str,
    item_fields: tuple[FieldDef, ...],
    status_field: str,
) -> SchemaStep:
    """Existence flag, then a count and the listed items when the flag is yes."""
    return SchemaStep(
        key=key,
        label=label,
        fields=(
            _required(flag_field, FieldFormat.BOOLEAN, label=flag_label),
            _optional(
                count_field,
                FieldFormat.COUNT,
                minimum=1,
                maximum=MAX_LISTED_ITEMS,
                label=f"How many {label.lower()}?",
            ),
        ),
        conditional_requirements=(_when(flag_field, True, count_field),),
        repeatable_group=RepeatableGroup(
            array_field=array_field,
            count_field=count_field,
            item_label=item_label,
            item_fields=item_fields,
            status_field=status_field,
            active_when=Condition(when=flag_field, value=True),
        ),
    )


def assets_step() -> SchemaStep:
    return _enumerated_step(
        key="assets_property",
        label="Assets",
        flag_field="has_marital_assets",
        flag_label="Do you and your spouse have marital assets?",
        count_field="num_assets",
        array_field="assets",
        item_label="Asset",
        item_fields=(
            _required("asset_type", FieldFormat.ENUM, choices=ASSET_TYPES),
            _required("ownership", FieldFormat.ENUM, choices=PARTIES),
            _required("estimated_value", FieldFormat.NUMBER),
            _required("title_holder"),
            _required("acquired_pre_marriage", FieldFormat.BOOLEAN, label="Acquired Before Marriage"),
        ),
        status_field="acquired_pre_marriage",
    )


def debts_step() -> SchemaStep:
    return _enumerated_step(
        key="liabilities_debts",
        label="Debts",
        flag_field="has_marital_debts",
        flag_label="Do you and your spouse have marital debts?",
        count_field="num_debts",
        array_field="debts",
        item_label="Debt",
        item_fields=(
            _required("debt_type", FieldFormat.ENUM, choices=DEBT_TYPES),
            _required("amount", FieldFormat.NUMBER),
            _required("responsible_party", FieldFormat.ENUM, choices=PARTIES),
            _required("incurred_during_marriage", FieldFormat.BOOLEAN),
        ),
        status_field="incurred_during_marriage",
    )


def income_support_step(support_choices: tuple[str, ...]) -> SchemaStep:
    return SchemaStep(
        key="income_support",
        label="Income & Support",
        fields=(
            _required("client_income_monthly", FieldFormat.NUMBER, label="Your Monthly Income"),
            _required("opposing_income_known", FieldFormat.BOOLEAN, label="Do you know your spouse's income?"),
            _optional("opposing_income_monthly", FieldFormat.NUMBER, label="Spouse Monthly Income"),
            _required("support_requested", FieldFormat.ENUM, choices=support_choices),
        ),
        conditional_requirements=(_when("opposing_income_known", True, "opposing_income_monthly"),),
    )


def safety_risk_step() -> SchemaStep:
    return SchemaStep(
        key="safety_risk",
        label="Safety",
        fields=(
            _required("dv_present", FieldFormat.BOOLEAN, label="Has there been domestic violence?"),
            _required("immediate_safety_concerns", FieldFormat.BOOLEAN, label="Are you in immediate danger?"),
            _optional("protective_order_exists", FieldFormat.BOOLEAN, label="Is there a protective order?"),
        ),
        conditional_requirements=(_when("dv_present", True, "protective_order_exists"),),
    )


def jurisdiction_venue_step() -> SchemaStep:
    return SchemaStep(
        key="jurisdiction_venue",
        label="Venue",
        fields=(
            _required("county_of_filing"),
            _required("residency_duration_months", FieldFormat.COUNT, minimum=0),
        ),
    )


def prior_legal_actions_step() -> SchemaStep:
    return SchemaStep(
        key="prior_legal_actions",
        label="Legal History",
        fields=(
            _required("prior_divorce_filings", FieldFormat.BOOLEAN),
            _required("prior_custody_orders", FieldFormat.BOOLEAN),
            _required("existing_attorney", FieldFormat.BOOLEAN, label="Do you already have an attorney?"),
        ),
    )


def desired_outcomes_step(goal_choices: tuple[str, ...] = PRIMARY_GOALS) -> SchemaStep:
    return SchemaStep(
        key="desired_outcomes",
        label="Goals",
        fields=(
            _required("primary_goal", FieldFormat.ENUM, choices=goal_choices),
            _required("settlement_preference", FieldFormat.ENUM, choices=SETTLEMENT_PREFERENCES),
            _required("litigation_tolerance", FieldFormat.ENUM, choices=LITIGATION_TOLERANCES),
        ),
    )


def evidence_documents_step() -> SchemaStep:
    return SchemaStep(
        key="evidence_documents",
        label="Documents",
        fields=(
            _required(
                "documents_reviewed_ack",
                FieldFormat.BOOLEAN,
                label="I have reviewed the document checklist",
            ),
        ),
    )
