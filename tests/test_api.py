import unittest
from unittest import mock

from fastapi.testclient import TestClient

import intake_snapshots as snapshots
from api.main import app
from config import settings
from orchestrator import registry
from orchestrator.modes import IntakeMode

INTAKE = f"{settings.API_PREFIX}/intake"


class TestIntakeApi(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)

    def test_root_health(self):
        response = self.client.get("/")
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["success"])

    def test_list_modes(self):
        response = self.client.get(f"{INTAKE}/modes")

        self.assertEqual(response.status_code, 200)
        modes = response.json()["data"]["modes"]
        self.assertEqual([m["mode"] for m in modes][:2], ["generic", "divorce_no_children"])
        self.assertEqual(modes[0]["first_step"], "matter_metadata")

    def test_orchestrate_uses_camel_case_payload(self):
        response = self.client.post(
            f"{INTAKE}/orchestrate",
            json={"mode": "divorce_no_children", "snapshot": {"has_minor_children": True}},
        )

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body["success"])
        data = body["data"]
        self.assertTrue(data["blocked"])
        self.assertIn("without minor children", data["blockReason"])
        self.assertEqual(data["nextFields"], [])
        self.assertEqual(data["suggestedMode"], "divorce_with_children")

    def test_unknown_mode_is_a_client_error(self):
        response = self.client.post(f"{INTAKE}/orchestrate", json={"mode": "divorce", "snapshot": {}})

        self.assertEqual(response.status_code, 400)
        body = response.json()
        self.assertFalse(body["success"])
        self.assertIn("Unknown intake mode", body["message"])
        self.assertIn("divorce_with_children", body["data"]["valid_modes"])

    def test_missing_mode_is_a_validation_error(self):
        response = self.client.post(f"{INTAKE}/orchestrate", json={"snapshot": {}})

        self.assertEqual(response.status_code, 422)
        body = response.json()
        self.assertFalse(body["success"])
        self.assertEqual(body["data"]["validation_errors"][0]["field"], "mode")

    def test_prompt_fields(self):
        response = self.client.post(f"{INTAKE}/prompt-fields", json={"mode": "custody_unmarried", "snapshot": {}})

        self.assertEqual(response.status_code, 200)
        fields = response.json()["data"]["fields"]
        self.assertEqual(fields[0]["path"], "urgency_level")
        self.assertFalse(fields[0]["isToggle"])
        self.assertEqual(fields[0]["choices"], ["routine", "urgent", "emergency"])

    def test_gating(self):
        response = self.client.post(
            f"{INTAKE}/gating",
            json={"mode": "divorce_with_children", "snapshot": {"has_minor_children": False}},
        )

        data = response.json()["data"]
        self.assertTrue(data["needsResolution"])
        self.assertTrue(data["gates"]["blocked"])
        self.assertEqual(data["gates"]["affectedSteps"], ["children"])
        self.assertFalse(data["posture"]["valid"])
        self.assertEqual(data["posture"]["suggestedMode"], "divorce_no_children")

    def test_submit_check(self):
        ready = self.client.post(
            f"{INTAKE}/submit-check",
            json={"mode": "divorce_with_children", "snapshot": snapshots.with_children()},
        ).json()["data"]
        self.assertTrue(ready["canSubmit"])
        self.assertTrue(all(step["completed"] for step in ready["sidebar"]))

        incomplete = self.client.post(
            f"{INTAKE}/submit-check",
            json={"mode": "divorce_with_children", "snapshot": {}},
        ).json()["data"]
        self.assertFalse(incomplete["canSubmit"])
        self.assertEqual(incomplete["currentStep"], "intake_metadata")
        self.assertTrue(incomplete["sidebar"][0]["active"])

    def test_submit_check_evaluates_the_snapshot_once(self):
        orchestrator = registry.MODE_BINDINGS[IntakeMode.DIVORCE_WITH_CHILDREN].orchestrator
        snapshot = snapshots.with_children()
        snapshot["residency_duration_months"] = 3

        with mock.patch.object(orchestrator, "orchestrate", wraps=orchestrator.orchestrate) as orchestrate:
            data = self.client.post(
                f"{INTAKE}/submit-check",
                json={"mode": "divorce_with_children", "snapshot": snapshot},
            ).json()["data"]

        self.assertEqual(orchestrate.call_count, 1)
        self.assertTrue(data["canSubmit"])
        self.assertEqual([w["key"] for w in data["warnings"]], ["residency_low"])

    def test_orchestrate_reports_warnings(self):
        snapshot = snapshots.no_children()
        snapshot["county_of_filing"] = "Cook"

        data = self.client.post(
            f"{INTAKE}/orchestrate",
            json={"mode": "divorce_no_children", "snapshot": snapshot},
        ).json()["data"]

        self.assertTrue(data["readyForSubmission"])
        self.assertEqual(data["warnings"][0]["key"], "county_mismatch")
        self.assertEqual(data["warnings"][0]["paths"], ["client_county", "county_of_filing"])

    def test_nested_validation_field_is_named(self):
        response = self.client.post(f"{INTAKE}/orchestrate", json={"mode": "generic", "snapshot": "text"})

        self.assertEqual(response.status_code, 422)
        self.assertEqual(response.json()["data"]["validation_errors"][0]["field"], "snapshot")

    def test_unexpected_errors_keep_the_envelope(self):
        client = TestClient(app, raise_server_exceptions=False)
        with mock.patch.object(registry, "orchestrate_intake", side_effect=RuntimeError("boom")):
            with self.assertLogs("api.handler", level="ERROR"):
                response = client.post(f"{INTAKE}/orchestrate", json={"mode": "generic", "snapshot": {}})

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"success": False, "message": "Internal server error", "data": None})


if __name__ == "__main__":
    unittest.main()
