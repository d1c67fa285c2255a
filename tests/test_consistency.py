import unittest


import intake_snapshots as snapshots
from orchestrator.orchestrator import StepOrchestrator
from steps import custody_unmarried, divorce_no_children, divorce_with_children, generic


def _orchestrator(module) -> StepOrchestrator:
    return StepOrchestrator(module.STEP_MAP, module.GATING_RULES, module.CONSISTENCY_RULES)


def _warning_keys(module, snapshot: dict) -> list[str]:
    return [w.key for w in _orchestrator(module).orchestrate(snapshot).warnings]


class TestConsistencyWarnings(unittest.TestCase):
    def test_complete_snapshots_raise_no_warnings(self):
        cases = [
            (generic, snapshots.generic()),
            (divorce_no_children, snapshots.no_children()),
            (divorce_with_children, snapshots.with_children()),
            (custody_unmarried, snapshots.custody_unmarried()),
        ]
        for module, snapshot in cases:
            with self.subTest(mode=module.MODE):
                self.assertEqual(_warning_keys(module, snapshot), [])

    def test_contradictions_are_reported_without_blocking(self):
        snapshot = snapshots.with_children()
        snapshot["date_of_separation"] = "2023-01-15"
        snapshot["protective_order_exists"] = True

        result = _orchestrator(divorce_with_children).orchestrate(snapshot)

        self.assertFalse(result.blocked)
        self.assertTrue(result.ready_for_submission)
        self.assertEqual(
            [w.key for w in result.warnings],
            ["cohabitating_with_separation", "protective_order_without_dv"],
        )
        self.assertEqual(result.warnings[0].paths, ["currently_cohabitating", "date_of_separation"])
        self.assertEqual(result.warnings[1].paths, ["dv_present", "protective_order_exists"])

    def test_separation_date_alone_is_consistent(self):
        snapshot = snapshots.with_children()
        snapshot["currently_cohabitating"] = False
        snapshot["date_of_separation"] = "2023-01-15"
        self.assertEqual(_warning_keys(divorce_with_children, snapshot), [])

    def test_county_mismatch(self):
        snapshot = snapshots.no_children()
        snapshot["county_of_filing"] = "Cook"
        self.assertEqual(_warning_keys(divorce_no_children, snapshot), ["county_mismatch"])

        snapshot["county_of_filing"] = " Sangamon "
        self.assertEqual(_warning_keys(divorce_no_children, snapshot), [])

        del snapshot["county_of_filing"]
        self.assertEqual(_warning_keys(divorce_no_children, snapshot), [])

    def test_low_residency(self):
        snapshot = snapshots.custody_unmarried()
        for months, expected in ((3, ["residency_low"]), (0, []), (6, []), ("3", [])):
            with self.subTest(months=months):
                snapshot["residency_duration_months"] = months
                self.assertEqual(_warning_keys(custody_unmarried, snapshot), expected)

    def test_immediate_safety_comes_first(self):
        snapshot = snapshots.no_children()
        snapshot["immediate_safety_concerns"] = True
        snapshot["residency_duration_months"] = 2

        warnings = _orchestrator(divorce_no_children).orchestrate(snapshot).warnings

        self.assertEqual([w.key for w in warnings], ["immediate_safety", "residency_low"])
        self.assertIn("call 911", warnings[0].message)

    def test_custody_without_children_in_generic_mode(self):
        snapshot = snapshots.generic()
        snapshot["custody_type_requested"] = "joint"
        self.assertEqual(_warning_keys(generic, snapshot), ["custody_without_children"])

        snapshot["has_minor_children"] = "unknown"
        self.assertEqual(_warning_keys(generic, snapshot), [])

    def test_rules_missing_from_a_mode_never_fire(self):
        snapshot = snapshots.custody_unmarried()
        snapshot["currently_cohabitating"] = True
        snapshot["date_of_separation"] = "2023-01-15"
        self.assertEqual(_warning_keys(custody_unmarried, snapshot), [])

    def test_warnings_are_computed_while_blocked(self):
        snapshot = snapshots.no_children()
        snapshot["has_minor_children"] = True
        snapshot["immediate_safety_concerns"] = True

        result = _orchestrator(divorce_no_children).orchestrate(snapshot)

        self.assertTrue(result.blocked)
        self.assertEqual(result.next_fields, [])
        self.assertEqual([w.key for w in result.warnings], ["immediate_safety"])

    def test_warnings_serialize_with_the_result(self):
        snapshot = snapshots.with_children()
        snapshot["residency_duration_months"] = 4

        payload = _orchestrator(divorce_with_children).orchestrate(snapshot).model_dump(by_alias=True, mode="json")

        self.assertEqual(payload["warnings"][0]["key"], "residency_low")
        self.assertEqual(payload["warnings"][0]["paths"], ["residency_duration_months"])


if __name__ == "__main__":
    unittest.main()
