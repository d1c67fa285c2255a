"""Complete intake snapshots per mode, used as starting points by the tests."""

import copy

METADATA = {"urgency_level": "routine", "intake_channel": "web"}

CLIENT = {
    "client_first_name": "Dana",
    "client_last_name": "Reyes",
    "client_dob": "1985-04-12",
    "client_phone": "555-123-4567",
    "client_email": "dana@example.com",
    "client_address": "12 Oak St, Springfield, IL 62704",
    "client_county": "Sangamon",
}

OPPOSING = {
    "opposing_first_name": "Sam",
    "opposing_last_name": "Reyes",
    "opposing_address_known": False,
    "service_concerns": False,
}

MARRIAGE = {
    "date_of_marriage": "2010-06-05",
    "place_of_marriage": "Springfield, IL",
    "currently_cohabitating": True,
    "grounds_for_divorce": "irreconcilable_differences",
}

CHILD = {
    "full_name": "Alex Reyes",
    "dob": "2015-09-01",
    "current_residence": "with_client",
    "biological_relation": "biological",
    "home_state": "IL",
    "time_in_home_state_months": 96,
}

CUSTODY = {
    "existing_order": False,
    "custody_type_requested": "joint",
    "parenting_plan_exists": False,
}

NO_PROPERTY = {"has_marital_assets": False, "has_marital_debts": False}

SAFETY_VENUE_HISTORY = {
    "dv_present": False,
    "immediate_safety_concerns": False,
    "county_of_filing": "Sangamon",
    "residency_duration_months": 48,
    "prior_divorce_filings": False,
    "prior_custody_orders": False,
    "existing_attorney": False,
    "documents_reviewed_ack": True,
}

GOALS = {"settlement_preference": "mediation", "litigation_tolerance": "low"}


def _merge(*parts: dict) -> dict:
    snapshot: dict = {}
    for part in parts:
        snapshot.update(copy.deepcopy(part))
    return snapshot


def with_children() -> dict:
    return _merge(
        METADATA,
        CLIENT,
        OPPOSING,
        MARRIAGE,
        {"has_minor_children": True, "num_children": 1, "children": [CHILD]},
        CUSTODY,
        NO_PROPERTY,
        {"client_income_monthly": 4200, "opposing_income_known": False, "support_requested": "child_support_only"},
        SAFETY_VENUE_HISTORY,
        GOALS,
        {"primary_goal": "fair_custody"},
    )


def no_children() -> dict:
    return _merge(
        METADATA,
        CLIENT,
        OPPOSING,
        MARRIAGE,
        {"has_minor_children": False},
        NO_PROPERTY,
        {"client_income_monthly": 4200, "opposing_income_known": False, "support_requested": "none"},
        SAFETY_VENUE_HISTORY,
        GOALS,
        {"primary_goal": "quick_resolution"},
    )


def custody_unmarried() -> dict:
    return _merge(
        METADATA,
        CLIENT,
        {"client_address": "12 Oak St, Springfield, IL"},
        OPPOSING,
        {"currently_cohabitating": False, "paternity_established": True},
        {"has_minor_children": True, "num_children": 1, "children": [CHILD]},
        CUSTODY,
        SAFETY_VENUE_HISTORY,
        GOALS,
        {"primary_goal": "primary_custody"},
    )


def generic() -> dict:
    return _merge(
        {"matter_type": "divorce"},
        METADATA,
        CLIENT,
        OPPOSING,
        MARRIAGE,
        {"has_minor_children": False},
        NO_PROPERTY,
        {"client_income_monthly": 4200, "opposing_income_known": False, "support_requested": "none"},
        SAFETY_VENUE_HISTORY,
        GOALS,
        {"primary_goal": "fair_asset_division"},
    )


def asset(**overrides) -> dict:
    item = {
        "asset_type": "real_estate",
        "ownership": "joint",
        "estimated_value": 250000,
        "title_holder": "Dana and Sam Reyes",
        "acquired_pre_marriage": False,
    }
    item.update(overrides)
    return item


def child(**overrides) -> dict:
    item = copy.deepcopy(CHILD)
    item.update(overrides)
    return item
