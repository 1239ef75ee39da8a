# -*- coding: utf-8 -*-

from __future__ import annotations

import os
import shutil
import sys
import tempfile
import unittest
from pathlib import Path

from fastapi.testclient import TestClient

from vitapulse.meals.generator import generate_meal_plan
from vitapulse.symptoms.analyzer import analyze_symptoms, duration_in_days, suggest_symptoms


class TestMealPlanGenerator(unittest.TestCase):
    def test_slot_shares_add_up_to_target(self) -> None:
        plan = generate_meal_plan(2000)
        day = plan["days"][0]
        self.assertEqual([m["meal"] for m in day["meals"]], ["breakfast", "lunch", "dinner", "snacks"])
        self.assertEqual([m["calories"] for m in day["meals"]], [500, 700, 600, 200])
        self.assertEqual(day["totals"]["calories"], 2000)

    def test_three_and_five_meal_layouts(self) -> None:
        three = generate_meal_plan(1800, meals_per_day=3)["days"][0]["meals"]
        self.assertEqual([m["share_percent"] for m in three], [30, 40, 30])
        five = generate_meal_plan(1800, meals_per_day=5)["days"][0]["meals"]
        self.assertEqual([m["meal"] for m in five][1], "morning_snack")
        self.assertEqual(sum(m["share_percent"] for m in five), 100)

    def test_allergen_substitution(self) -> None:
        plain = generate_meal_plan(2000)
        self.assertEqual(plain["days"][0]["meals"][0]["name"], "Oatmeal with Berries")

        plan = generate_meal_plan(2000, allergies=["Tree Nuts"])
        self.assertEqual(plan["allergies"], ["nuts"])
        breakfast = plan["days"][0]["meals"][0]
        self.assertNotEqual(breakfast["name"], "Oatmeal with Berries")
        sub = plan["substitutions"][0]
        self.assertEqual((sub["meal"], sub["original"]), ("breakfast", "Oatmeal with Berries"))
        self.assertEqual(sub["replacement"], breakfast["name"])
        self.assertEqual(sub["allergens"], ["nuts"])

    def test_preferences_rank_first(self) -> None:
        plan = generate_meal_plan(2000, preferences=["salmon"])
        dinner = next(m for m in plan["days"][0]["meals"] if m["meal"] == "dinner")
        self.assertIn("Salmon", dinner["name"])

    def test_days_rotate_and_shopping_list(self) -> None:
        plan = generate_meal_plan(2200, diet_type="vegan", days=3)
        self.assertEqual(len(plan["days"]), 3)
        breakfasts = {d["meals"][0]["name"] for d in plan["days"] if d["meals"]}
        self.assertGreater(len(breakfasts), 1)
        self.assertTrue(plan["shopping_list"])
        for items in plan["shopping_list"].values():
            for item in items:
                self.assertGreaterEqual(item["meals"], 1)

    def test_invalid_inputs(self) -> None:
        with self.assertRaises(ValueError):
            generate_meal_plan(500)
        with self.assertRaises(ValueError):
            generate_meal_plan(2000, diet_type="carnivore")
        with self.assertRaises(ValueError):
            generate_meal_plan(2000, meals_per_day=6)
        with self.assertRaises(ValueError):
            generate_meal_plan(2000, days=8)


class TestSymptomAnalyzer(unittest.TestCase):
    def test_conditions_ranked_by_match(self) -> None:
        res = analyze_symptoms(["Runny nose", "sneezing", "congestion"])
        names = [c["name"] for c in res["possible_conditions"]]
        self.assertEqual(names[0], "Seasonal Allergies")
        self.assertIn("Common Cold", names)
        probs = [c["probability"] for c in res["possible_conditions"]]
        self.assertEqual(probs, sorted(probs, reverse=True))
        self.assertEqual(res["urgency_level"], "low")
        self.assertTrue(res["disclaimer"])

    def test_fragments_do_not_match_conditions(self) -> None:
        self.assertEqual(analyze_symptoms(["e"])["possible_conditions"], [])
        self.assertEqual(analyze_symptoms(["pain"])["possible_conditions"], [])

    def test_reported_symptom_counts_once_per_condition(self) -> None:
        res = analyze_symptoms(["back pain and joint pain"])
        strain = next(c for c in res["possible_conditions"] if c["name"] == "Muscle Strain")
        self.assertEqual(strain["matched_symptoms"], ["back pain"])
        self.assertEqual(strain["probability"], 33)

        res = analyze_symptoms(["Severe  BACK pain", "joint pain"])
        strain = next(c for c in res["possible_conditions"] if c["name"] == "Muscle Strain")
        self.assertEqual(strain["matched_symptoms"], ["back pain", "joint pain"])
        self.assertEqual(strain["probability"], 67)

    def test_emergency_symptom_is_high_urgency(self) -> None:
        res = analyze_symptoms(["chest pain", "anxiety"])
        self.assertEqual(res["urgency_level"], "high")
        self.assertEqual(res["recommendations"][0], "Seek immediate medical attention")

    def test_severity_or_duration_is_moderate(self) -> None:
        self.assertEqual(analyze_symptoms(["cough"], severity=8)["urgency_level"], "moderate")
        res = analyze_symptoms(["cough"], duration="2 weeks")
        self.assertEqual(res["urgency_level"], "moderate")
        self.assertEqual(res["patient_info"]["duration_days"], 14)

    def test_duration_parsing(self) -> None:
        self.assertEqual(duration_in_days(3), 3.0)
        self.assertEqual(duration_in_days("1 month"), 30.0)
        self.assertIsNone(duration_in_days("a while"))
        self.assertIsNone(duration_in_days(None))

    def test_requires_symptoms(self) -> None:
        with self.assertRaises(ValueError):
            analyze_symptoms([])
        with self.assertRaises(ValueError):
            analyze_symptoms(["  "])
        with self.assertRaises(ValueError):
            analyze_symptoms(["cough"], severity=11)

    def test_suggestions(self) -> None:
        res = suggest_symptoms("pain")
        self.assertTrue(res["symptoms"])
        self.assertTrue(all("pain" in s.lower() for s in res["symptoms"]))
        self.assertEqual(len(suggest_symptoms(limit=5)["symptoms"]), 5)


class TestMealsAndSymptomsApi(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls._tmp = Path(tempfile.mkdtemp(prefix="vitapulse-test-"))
        data_root = cls._tmp / "data"
        os.environ["VITAPULSE_DATA_ROOT"] = str(data_root)
        os.environ["VITAPULSE_DB_PATH"] = str(data_root / "vitapulse.db")
        os.environ["VITAPULSE_JWT_SECRET"] = "test-secret"

        for name in list(sys.modules.keys()):
            if name.startswith("vitapulse."):
                sys.modules.pop(name, None)

        from vitapulse.api import app  # noqa: WPS433 (import inside test for env control)

        cls.client = TestClient(app)
        resp = cls.client.post(
            "/api/auth/register",
            json={"email": "planner@example.com", "password": "password123", "full_name": "Meal Planner"},
        )
        cls.headers = {"Authorization": f"Bearer {resp.json()['token']}"}
        cls.client.cookies.clear()

    @classmethod
    def tearDownClass(cls) -> None:
        cls.client.close()
        shutil.rmtree(cls._tmp, ignore_errors=True)

    def test_generate_plan(self) -> None:
        resp = self.client.post("/api/meals/generate", json={"calories": 2000, "diet_type": "keto"})
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()["diet_type"], "keto")

        resp = self.client.post("/api/meals/generate", json={"diet_type": "balanced"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["detail"], "Daily calorie target is required")

        resp = self.client.post("/api/meals/generate", json={"calories": 2000, "diet_type": "paleo"})
        self.assertEqual(resp.status_code, 400)

    def test_saved_plans(self) -> None:
        self.assertEqual(self.client.get("/api/meals/plans").status_code, 401)

        resp = self.client.post(
            "/api/meals/plans",
            json={"title": "Week one", "plan_date": "2024-06-01", "request": {"calories": 1800, "days": 2}},
            headers=self.headers,
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        saved = resp.json()
        self.assertEqual(saved["plan_date"], "2024-06-01")
        self.assertEqual(len(saved["plan"]["days"]), 2)

        resp = self.client.post("/api/meals/plans", json={"title": "empty"}, headers=self.headers)
        self.assertEqual(resp.status_code, 400)

        resp = self.client.get("/api/meals/plans", headers=self.headers)
        self.assertEqual(resp.json()["count"], 1)

        plan_id = saved["plan_id"]
        resp = self.client.get(f"/api/meals/plans/{plan_id}", headers=self.headers)
        self.assertEqual(resp.json()["title"], "Week one")

        self.assertEqual(self.client.delete(f"/api/meals/plans/{plan_id}", headers=self.headers).status_code, 200)
        self.assertEqual(self.client.get(f"/api/meals/plans/{plan_id}", headers=self.headers).status_code, 404)

    def test_symptom_endpoints(self) -> None:
        resp = self.client.post("/api/symptoms/analyze", json={"symptoms": ["fever", "cough", "muscle aches"]})
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()["possible_conditions"][0]["name"], "Influenza")

        resp = self.client.post("/api/symptoms/analyze", json={"symptoms": []})
        self.assertEqual(resp.status_code, 400)

        resp = self.client.get("/api/symptoms/suggestions", params={"search": "head"})
        self.assertIn("headache", [s.lower() for s in resp.json()["symptoms"]])

    def test_symptom_reports(self) -> None:
        resp = self.client.post(
            "/api/symptoms/reports", json={"symptoms": ["headache", "nausea"], "severity": 8}, headers=self.headers
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()["urgency"], "moderate")

        resp = self.client.post("/api/symptoms/reports", json={"symptoms": []}, headers=self.headers)
        self.assertEqual(resp.status_code, 400)

        resp = self.client.get("/api/symptoms/reports", headers=self.headers)
        self.assertEqual(resp.json()["count"], 1)


if __name__ == "__main__":
    unittest.main()
