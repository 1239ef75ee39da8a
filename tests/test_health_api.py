# -*- coding: utf-8 -*-

from __future__ import annotations

import os
import shutil
import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock
from uuid import uuid4

from fastapi.testclient import TestClient


class TestHealthApi(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls._tmp = Path(tempfile.mkdtemp(prefix="vitapulse-test-"))
        data_root = cls._tmp / "data"
        os.environ["VITAPULSE_DATA_ROOT"] = str(data_root)
        os.environ["VITAPULSE_DB_PATH"] = str(data_root / "vitapulse.db")
        os.environ["VITAPULSE_JWT_SECRET"] = "test-secret"

        # Ensure settings/app reflect the env vars above.
        for name in list(sys.modules.keys()):
            if name.startswith("vitapulse."):
                sys.modules.pop(name, None)

        from vitapulse.api import app  # noqa: WPS433 (import inside test for env control)

        cls.client = TestClient(app)

    @classmethod
    def tearDownClass(cls) -> None:
        cls.client.close()
        shutil.rmtree(cls._tmp, ignore_errors=True)

    def _register(self, name: str = "Test User") -> dict:
        email = f"{uuid4().hex[:10]}@example.com"
        resp = self.client.post(
            "/api/auth/register", json={"email": email, "password": "password123", "full_name": name}
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        # Keep requests explicit: every call below passes its own bearer header.
        self.client.cookies.clear()
        return {"email": email, "headers": {"Authorization": f"Bearer {resp.json()['token']}"}}

    def test_health_endpoint(self) -> None:
        resp = self.client.get("/api/health")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["status"], "ok")

    def test_auth_flow(self) -> None:
        email = "Flow.User@Example.com"
        resp = self.client.post(
            "/api/auth/register", json={"email": email, "password": "password123", "full_name": "Flow User"}
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()["user"]["email"], "flow.user@example.com")
        self.assertEqual(resp.json()["user"]["role"], "user")

        # Cookie session works for /me.
        resp = self.client.get("/api/auth/me")
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()["full_name"], "Flow User")

        resp = self.client.post("/api/auth/logout")
        self.assertEqual(resp.status_code, 200)
        self.client.cookies.clear()
        self.assertEqual(self.client.get("/api/auth/me").status_code, 401)

        resp = self.client.post(
            "/api/auth/register", json={"email": email.lower(), "password": "password123", "full_name": "Again"}
        )
        self.assertEqual(resp.status_code, 409)

        resp = self.client.post("/api/auth/login", json={"email": email, "password": "wrong-password"})
        self.assertEqual(resp.status_code, 401)

        resp = self.client.post("/api/auth/login", json={"email": email, "password": "password123"})
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertTrue(resp.json()["token"])
        self.client.cookies.clear()

    def test_concurrent_duplicate_registration_is_conflict(self) -> None:
        email = f"{uuid4().hex[:10]}@example.com"
        payload = {"email": email, "password": "password123", "full_name": "Racer"}
        self.assertEqual(self.client.post("/api/auth/register", json=payload).status_code, 200)
        self.client.cookies.clear()

        # The second request passed the existence check before the first one inserted.
        with mock.patch("vitapulse.auth.api.get_user_by_email", return_value=None):
            resp = self.client.post("/api/auth/register", json=payload)
        self.assertEqual(resp.status_code, 409, resp.text)
        self.assertEqual(resp.json()["detail"], "Email already registered")

    def test_invalid_token_is_rejected_even_on_public_routes(self) -> None:
        resp = self.client.post(
            "/api/calculators/bmi",
            json={"weight_kg": 70, "height_cm": 175},
            headers={"Authorization": "Bearer not-a-token"},
        )
        self.assertEqual(resp.status_code, 401)

    def test_calculators_are_public(self) -> None:
        resp = self.client.post("/api/calculators/bmi", json={"weight_kg": 70, "height_cm": 175})
        self.assertEqual(resp.status_code, 200, resp.text)
        body = resp.json()
        self.assertEqual(body["calculator"], "bmi")
        self.assertEqual(body["result"]["bmi"], 22.9)
        self.assertIsNone(body["reward"])

        resp = self.client.post("/api/calculators/bmi", json={"weight_kg": -1, "height_cm": 175})
        self.assertIn(resp.status_code, (400, 422))

        resp = self.client.get("/api/calculators")
        self.assertEqual(resp.status_code, 200)
        names = {c["name"] for c in resp.json()["calculators"]}
        self.assertIn("heart-rate", names)

    def test_calculator_rewards_and_progress(self) -> None:
        user = self._register()
        resp = self.client.post(
            "/api/calculators/bmi", json={"weight_kg": 70, "height_cm": 175}, headers=user["headers"]
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        reward = resp.json()["reward"]
        self.assertEqual(reward["points_awarded"], 10)
        self.assertEqual(reward["achievements_unlocked"], ["first-calc"])

        # Same calculator again: points, but no second first-calc bonus.
        resp = self.client.post(
            "/api/calculators/bmi", json={"weight_kg": 71, "height_cm": 175}, headers=user["headers"]
        )
        self.assertEqual(resp.json()["reward"]["achievements_unlocked"], [])

        resp = self.client.get("/api/gamification/progress", headers=user["headers"])
        self.assertEqual(resp.status_code, 200, resp.text)
        progress = resp.json()
        self.assertEqual(progress["total_points"], 30)
        self.assertEqual(progress["level"], 1)
        self.assertEqual(progress["counts"]["calculations"], 2)
        self.assertEqual(progress["counts"]["distinct_calculators"], 1)
        self.assertEqual(progress["streak"]["current"], 1)
        first_calc = next(a for a in progress["achievements"] if a["id"] == "first-calc")
        self.assertTrue(first_calc["unlocked"])

        resp = self.client.get("/api/gamification/events", headers=user["headers"])
        types = [e["event_type"] for e in resp.json()["events"]]
        self.assertIn("achievement_unlocked", types)
        self.assertIn("user_signup", types)

    def test_stress_and_sleep_endpoints(self) -> None:
        answers = {
            "sleep_quality": 3,
            "work_pressure": 3,
            "relationships": 1,
            "financial_stress": 2,
            "physical_symptoms": 2,
            "emotional_state": 2,
            "coping_mechanisms": 2,
            "time_management": 2,
        }
        resp = self.client.post("/api/calculators/stress", json={"answers": answers})
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()["result"]["score"], 9)
        self.assertEqual(resp.json()["result"]["category"], "Moderate Stress")

        resp = self.client.post("/api/calculators/stress", json={"answers": {"sleep_quality": 3}})
        self.assertEqual(resp.status_code, 400)

        resp = self.client.post(
            "/api/calculators/sleep-analysis", json={"bedtime": "22:30", "wake_time": "06:30", "age": 40}
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()["result"]["duration_hours"], 8.0)

    def test_unit_conversion(self) -> None:
        resp = self.client.post("/api/calculators/convert", json={"value": 10, "from_unit": "kg", "to_unit": "lbs"})
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertAlmostEqual(resp.json()["value"], 22.0462)

        resp = self.client.post("/api/calculators/convert", json={"value": 10, "from_unit": "kg", "to_unit": "km"})
        self.assertEqual(resp.status_code, 400)

    def test_food_search_and_lookup(self) -> None:
        resp = self.client.get("/api/food/search", params={"q": "mac"})
        self.assertEqual(resp.status_code, 200, resp.text)
        names = [f["name"] for f in resp.json()["foods"]]
        self.assertIn("Big Mac", names)

        resp = self.client.get("/api/food/search", params={"brand": "kfc"})
        self.assertTrue(all(f["brand"] == "KFC" for f in resp.json()["foods"]))

        resp = self.client.get("/api/food/nutrition", params={"food": "banana", "quantity": 2})
        body = resp.json()
        self.assertTrue(body["matched"])
        self.assertEqual(body["nutrition"]["calories"], 210)

        resp = self.client.get("/api/food/nutrition", params={"food": "dragonfruit smoothie"})
        self.assertFalse(resp.json()["matched"])
        self.assertEqual(resp.json()["nutrition"]["calories"], 150)

    def test_food_log_and_summary(self) -> None:
        user = self._register()
        h = user["headers"]

        self.assertEqual(self.client.get("/api/food/entries").status_code, 401)

        resp = self.client.post(
            "/api/food/entries",
            json={"food_id": "chicken-breast", "quantity": 2, "meal_type": "lunch", "consumed_at": "2024-03-05T12:00:00Z"},
            headers=h,
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()["nutrition"]["calories"], 330)

        resp = self.client.post(
            "/api/food/entries",
            json={
                "name": "Homemade Granola",
                "nutrition": {"calories": 200, "protein_g": 5, "carbs_g": 30, "fat_g": 7},
                "meal_type": "breakfast",
                "consumed_at": "2024-03-05T07:30:00Z",
            },
            headers=h,
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        granola_id = resp.json()["entry_id"]

        resp = self.client.post(
            "/api/food/entries",
            json={"food_id": "apple", "meal_type": "snack", "consumed_at": "2024-03-06T15:00:00Z"},
            headers=h,
        )
        self.assertEqual(resp.status_code, 200, resp.text)

        resp = self.client.post("/api/food/entries", json={"food_id": "nope", "meal_type": "snack"}, headers=h)
        self.assertEqual(resp.status_code, 404)
        resp = self.client.post("/api/food/entries", json={"name": "Mystery", "meal_type": "snack"}, headers=h)
        self.assertEqual(resp.status_code, 422)

        resp = self.client.get("/api/food/entries", params={"date": "2024-03-05"}, headers=h)
        body = resp.json()
        self.assertEqual(body["count"], 2)
        self.assertEqual(body["totals"]["calories"], 530)

        resp = self.client.get("/api/food/summary", params={"start": "2024-03-05", "end": "2024-03-06"}, headers=h)
        self.assertEqual(resp.status_code, 200, resp.text)
        summary = resp.json()
        self.assertEqual([d["date"] for d in summary["days"]], ["2024-03-05", "2024-03-06"])
        self.assertEqual(summary["totals"]["calories"], 625)
        self.assertEqual(summary["meals"]["breakfast"]["calories"], 200)

        resp = self.client.get("/api/food/summary", params={"start": "2024-03-06", "end": "2024-03-05"}, headers=h)
        self.assertEqual(resp.status_code, 400)

        resp = self.client.delete(f"/api/food/entries/{granola_id}", headers=h)
        self.assertEqual(resp.status_code, 200)
        resp = self.client.delete(f"/api/food/entries/{granola_id}", headers=h)
        self.assertEqual(resp.status_code, 404)

        progress = self.client.get("/api/gamification/progress", headers=h).json()
        self.assertEqual(progress["counts"]["meals_logged"], 3)
        first_meal = next(a for a in progress["achievements"] if a["id"] == "first-meal")
        self.assertTrue(first_meal["unlocked"])
        self.assertEqual(progress["total_points"], 3 * 5 + 25)

    def test_timestamps_are_validated_and_stored_in_utc(self) -> None:
        headers = self._register("Clock Watcher")["headers"]

        resp = self.client.post(
            "/api/food/entries",
            json={"food_id": "apple", "meal_type": "snack", "consumed_at": "yesterday"},
            headers=headers,
        )
        self.assertEqual(resp.status_code, 422)
        resp = self.client.post("/api/profile/water", json={"amount_ml": 250, "logged_at": "soon"}, headers=headers)
        self.assertEqual(resp.status_code, 422)

        resp = self.client.post(
            "/api/food/entries",
            json={"food_id": "apple", "meal_type": "snack", "consumed_at": "2024-05-01T22:30:00-05:00"},
            headers=headers,
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()["consumed_at"], "2024-05-02T03:30:00Z")
        resp = self.client.get("/api/food/entries", params={"date": "2024-05-02"}, headers=headers)
        self.assertEqual(resp.json()["count"], 1)
        resp = self.client.get("/api/food/entries", params={"date": "2024-05-01"}, headers=headers)
        self.assertEqual(resp.json()["count"], 0)

        resp = self.client.post(
            "/api/food/entries",
            json={"food_id": "apple", "meal_type": "snack", "consumed_at": "2024-05-03T08:00:00"},
            headers=headers,
        )
        self.assertEqual(resp.json()["consumed_at"], "2024-05-03T08:00:00Z")

        resp = self.client.post(
            "/api/profile/water",
            json={"amount_ml": 300, "logged_at": "2024-05-01T23:00:00-02:00"},
            headers=headers,
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()["entry"]["logged_at"], "2024-05-02T01:00:00Z")
        self.assertEqual(resp.json()["summary"]["date"], "2024-05-02")
        self.assertEqual(resp.json()["summary"]["current_intake_ml"], 300.0)

    def test_entries_are_private(self) -> None:
        owner = self._register()
        other = self._register()
        resp = self.client.post(
            "/api/food/entries",
            json={"food_id": "egg", "meal_type": "breakfast", "consumed_at": "2024-04-01T08:00:00Z"},
            headers=owner["headers"],
        )
        entry_id = resp.json()["entry_id"]

        resp = self.client.get("/api/food/entries", params={"date": "2024-04-01"}, headers=other["headers"])
        self.assertEqual(resp.json()["count"], 0)
        resp = self.client.delete(f"/api/food/entries/{entry_id}", headers=other["headers"])
        self.assertEqual(resp.status_code, 404)

    def test_preferences_water_and_dashboard(self) -> None:
        user = self._register("Dash Board")
        h = user["headers"]

        prefs = self.client.get("/api/profile/preferences", headers=h).json()
        self.assertEqual(prefs["water_target_ml"], 2000)
        self.assertEqual(prefs["theme"], "system")

        resp = self.client.put(
            "/api/profile/preferences", json={"theme": "dark", "calorie_goal": 1800}, headers=h
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()["theme"], "dark")
        self.assertEqual(resp.json()["water_target_ml"], 2000)

        resp = self.client.post("/api/profile/water", json={"amount_ml": 500}, headers=h)
        self.assertEqual(resp.status_code, 200, resp.text)
        resp = self.client.post("/api/profile/water", json={"amount_ml": 1000}, headers=h)
        summary = resp.json()["summary"]
        self.assertEqual(summary["current_intake_ml"], 1500)
        self.assertEqual(summary["percentage"], 75.0)
        self.assertEqual(summary["status"], "Adequately Hydrated")

        resp = self.client.post("/api/profile/water", json={"amount_ml": 0}, headers=h)
        self.assertEqual(resp.status_code, 422)

        resp = self.client.post("/api/food/entries", json={"food_id": "banana", "meal_type": "snack"}, headers=h)
        self.assertEqual(resp.status_code, 200, resp.text)

        resp = self.client.get("/api/profile/dashboard", headers=h)
        self.assertEqual(resp.status_code, 200, resp.text)
        dash = resp.json()
        self.assertEqual(dash["calories"], {"eaten": 105.0, "goal": 1800, "remaining": 1695.0})
        self.assertEqual(dash["water"]["current_intake_ml"], 1500)
        self.assertEqual(dash["points"], 30)
        self.assertTrue(dash["recent_activity"])


if __name__ == "__main__":
    unittest.main()
