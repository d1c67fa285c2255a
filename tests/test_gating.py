import unittest


import intake_snapshots as snapshots
from orchestrator.orchestrator import StepOrchestrator
from steps import custody_unmarried, divorce_no_children, divorce_with_children
from steps.gates import GateKind


class TestModeMismatchGates(unittest.TestCase):
    def test_children_in_no_children_mode(self):
        orchestrator = StepOrchestrator(divorce_no_children.STEP_MAP, divorce_no_children.GATING_RULES)

        gates = orchestrator.evaluate_gates({"has_minor_children": True})

        self.assertTrue(gates.blocked)
        self.assertEqual(gates.affected_steps, ["children_gate"])
        self.assertEqual(len(gates.violations), 1)
        violation = gates.violations[0]
        self.assertIs(violation.kind, GateKind.MODE_MISMATCH)
        self.assertEqual(violation.suggested_mode, "divorce_with_children")
        self.assertIn("without minor children", gates.reason)

    def test_no_children_in_with_children_mode(self):
        orchestrator = StepOrchestrator(divorce_with_children.STEP_MAP, divorce_with_children.GATING_RULES)
        gates = orchestrator.evaluate_gates({"has_minor_children": False})
        self.assertTrue(gates.blocked)
        self.assertEqual(gates.violations[0].suggested_mode, "divorce_no_children")

    def test_custody_requires_children(self):
        orchestrator = StepOrchestrator(custody_unmarried.STEP_MAP, custody_unmarried.GATING_RULES)
        gates = orchestrator.evaluate_gates({"has_minor_children": False})
        self.assertTrue(gates.blocked)
        self.assertIn("requires children", gates.reason)

    def test_matching_answer_does_not_block(self):
        orchestrator = StepOrchestrator(divorce_no_children.STEP_MAP, divorce_no_children.GATING_RULES)
        self.assertFalse(orchestrator.evaluate_gates({"has_minor_children": False}).blocked)

    def test_truthy_non_boolean_is_not_a_mismatch(self):
        # 1 == True in Python, but only a real yes/no answer can contradict a mode
        orchestrator = StepOrchestrator(divorce_no_children.STEP_MAP, divorce_no_children.GATING_RULES)
        gates = orchestrator.evaluate_gates({"has_minor_children": 1})
        self.assertEqual([v.kind for v in gates.violations], [GateKind.DEFINITE_BOOLEAN])


class TestDefiniteBooleanGates(unittest.TestCase):
    def setUp(self):
        self.orchestrator = StepOrchestrator(divorce_with_children.STEP_MAP, divorce_with_children.GATING_RULES)

    def test_unset_flag_is_not_a_block(self):
        gates = self.orchestrator.evaluate_gates({})
        self.assertFalse(gates.blocked)
        self.assertIsNone(gates.reason)
        self.assertEqual(
            self.orchestrator.unresolved_gate_fields({}),
            ["has_minor_children", "has_marital_assets", "has_marital_debts"],
        )

    def test_unknown_answer_blocks(self):
        gates = self.orchestrator.evaluate_gates({"has_marital_debts": "unknown"})
        self.assertTrue(gates.blocked)
        self.assertEqual(gates.affected_steps, ["liabilities_debts"])
        self.assertIn("marital debts", gates.reason)
        self.assertIn("has_marital_debts", self.orchestrator.unresolved_gate_fields({"has_marital_debts": "unknown"}))

    def test_explicit_no_resolves_the_flag(self):
        snapshot = {"has_minor_children": True, "has_marital_assets": False, "has_marital_debts": False}
        self.assertFalse(self.orchestrator.evaluate_gates(snapshot).blocked)
        self.assertEqual(self.orchestrator.unresolved_gate_fields(snapshot), [])


class TestItemCountGates(unittest.TestCase):
    def setUp(self):
        self.orchestrator = StepOrchestrator(divorce_with_children.STEP_MAP, divorce_with_children.GATING_RULES)

    def test_more_items_than_declared_blocks(self):
        snapshot = {"has_marital_assets": True, "num_assets": 1, "assets": [snapshots.asset(), snapshots.asset()]}
        gates = self.orchestrator.evaluate_gates(snapshot)
        self.assertTrue(gates.blocked)
        self.assertIs(gates.violations[0].kind, GateKind.ITEM_COUNT)
        self.assertIn("1 assets but listed 2", gates.reason)

    def test_fewer_items_than_declared_is_not_a_block(self):
        snapshot = {"has_marital_assets": True, "num_assets": 3, "assets": [snapshots.asset()]}
        self.assertFalse(self.orchestrator.evaluate_gates(snapshot).blocked)

    def test_inactive_group_is_ignored(self):
        snapshot = {"has_marital_assets": False, "num_assets": 1, "assets": [snapshots.asset(), snapshots.asset()]}
        self.assertFalse(self.orchestrator.evaluate_gates(snapshot).blocked)

    def test_invalid_count_or_non_list_is_ignored(self):
        self.assertFalse(self.orchestrator.evaluate_gates(
            {"has_marital_assets": True, "num_assets": "two", "assets": [snapshots.asset()] * 3}
        ).blocked)
        self.assertFalse(self.orchestrator.evaluate_gates(
            {"has_marital_assets": True, "num_assets": 1, "assets": {"0": snapshots.asset()}}
        ).blocked)


class TestGateOrdering(unittest.TestCase):
    def test_violations_in_step_then_declaration_order(self):
        orchestrator = StepOrchestrator(divorce_with_children.STEP_MAP, divorce_with_children.GATING_RULES)
        snapshot = {
            "has_minor_children": False,
            "num_children": 1,
            "children": [snapshots.child(), snapshots.child()],
            "has_marital_debts": "maybe",
        }

        gates = orchestrator.evaluate_gates(snapshot)

        self.assertEqual(
            [(v.step, v.kind) for v in gates.violations],
            [
                ("children", GateKind.MODE_MISMATCH),
                ("children", GateKind.ITEM_COUNT),
                ("liabilities_debts", GateKind.DEFINITE_BOOLEAN),
            ],
        )
        self.assertEqual(gates.affected_steps, ["children", "liabilities_debts"])
        self.assertEqual(gates.reason, gates.violations[0].reason)

    def test_step_order_wins_over_table_order(self):
        reversed_rules = tuple(reversed(divorce_with_children.GATING_RULES))
        orchestrator = StepOrchestrator(divorce_with_children.STEP_MAP, reversed_rules)

        gates = orchestrator.evaluate_gates({"has_minor_children": False, "has_marital_debts": "maybe"})

        self.assertEqual(gates.violations[0].step, "children")
        self.assertEqual(gates.violations[-1].step, "liabilities_debts")


if __name__ == "__main__":
    unittest.main()
