# -*- coding: utf-8 -*-

from __future__ import annotations

import os
import shutil
import sys
import tempfile
import unittest
from pathlib import Path

from fastapi.testclient import TestClient

from vitapulse.progress.analysis import analyze_progress, metric_change, progress_category

JANUARY = {
    "entry_date": "2024-01-01",
    "weight_kg": 80,
    "body_fat_pct": 20,
    "bench_press_kg": 60,
    "squat_kg": 80,
    "deadlift_kg": 100,
    "run_5k_minutes": 30,
    "waist_cm": 90,
    "chest_cm": 100,
}
MARCH = {
    "entry_date": "2024-03-01",
    "weight_kg": 78,
    "body_fat_pct": 18,
    "bench_press_kg": 66,
    "squat_kg": 88,
    "deadlift_kg": 110,
    "run_5k_minutes": 27,
    "waist_cm": 86,
    "chest_cm": 103,
}


class TestProgressAnalysis(unittest.TestCase):
    def test_categories(self) -> None:
        self.assertEqual(progress_category(10.1), "Excellent")
        self.assertEqual(progress_category(10), "Great")
        self.assertEqual(progress_category(0.5), "Good")
        self.assertEqual(progress_category(0), "Maintain")
        self.assertEqual(progress_category(-5), "Needs Focus")

    def test_full_analysis(self) -> None:
        res = analyze_progress([MARCH, JANUARY])
        self.assertEqual((res["start_date"], res["end_date"], res["days_tracked"]), ("2024-01-01", "2024-03-01", 60))
        self.assertEqual(res["body"]["weight_kg"], -2.5)
        self.assertEqual(res["body"]["body_fat_pct"], -10.0)
        self.assertEqual(res["strength"]["total"], 10.0)
        self.assertEqual(res["endurance"]["run_5k_minutes"], 10.0)
        self.assertEqual(res["measurements"]["waist_cm"], -4.4)
        self.assertEqual(res["categories"], {"weight": "Good", "strength": "Great", "body_fat": "Great"})
        self.assertEqual(res["overall_progress"], "Excellent Progress")
        self.assertEqual(
            res["achievements"],
            [
                "Great strength improvements!",
                "Excellent cardiovascular improvement!",
                "Significant body fat reduction!",
                "Great waist reduction!",
                "Excellent muscle building progress!",
            ],
        )
        self.assertEqual(res["recommendations"][0], "Consider updating your workout routine for continued progress")

    def test_metric_uses_first_and_last_entry_that_has_it(self) -> None:
        entries = [
            {"entry_date": "2024-01-01", "weight_kg": 80},
            {"entry_date": "2024-01-08", "waist_cm": 90},
            {"entry_date": "2024-01-15", "weight_kg": 76},
        ]
        self.assertEqual(metric_change(entries, "weight_kg"), -5.0)
        self.assertEqual(metric_change(entries, "waist_cm"), 0.0)

    def test_declining_strength(self) -> None:
        res = analyze_progress(
            [{"entry_date": "2024-01-01", "bench_press_kg": 100}, {"entry_date": "2024-01-10", "bench_press_kg": 90}]
        )
        self.assertEqual(res["strength"]["total"], -10.0)
        self.assertEqual(res["categories"]["strength"], "Needs Focus")
        self.assertIn("Focus on progressive overload in strength training", res["recommendations"])
        self.assertEqual(res["overall_progress"], "Needs Improvement")

    def test_needs_two_entries(self) -> None:
        with self.assertRaises(ValueError):
            analyze_progress([JANUARY])


class TestProgressApi(unittest.TestCase):
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
        cls.headers = cls._register("lifter@example.com")
        cls.other = cls._register("runner@example.com")

    @classmethod
    def tearDownClass(cls) -> None:
        cls.client.close()
        shutil.rmtree(cls._tmp, ignore_errors=True)

    @classmethod
    def _register(cls, email: str) -> dict:
        resp = cls.client.post("/api/auth/register", json={"email": email, "password": "password123", "full_name": "Gym Goer"})
        assert resp.status_code == 200, resp.text
        cls.client.cookies.clear()
        return {"Authorization": f"Bearer {resp.json()['token']}"}

    def test_log_list_analyze_and_delete(self) -> None:
        self.assertEqual(self.client.get("/api/fitness-progress/entries").status_code, 401)

        resp = self.client.post("/api/fitness-progress/entries", json={"notes": "nothing measured"}, headers=self.headers)
        self.assertEqual(resp.status_code, 422)
        resp = self.client.post("/api/fitness-progress/entries", json={"weight_kg": -3}, headers=self.headers)
        self.assertEqual(resp.status_code, 422)

        first = self.client.post("/api/fitness-progress/entries", json=MARCH, headers=self.headers)
        self.assertEqual(first.status_code, 200, first.text)
        self.assertEqual(first.json()["bench_press_kg"], 66)
        resp = self.client.post("/api/fitness-progress/entries", json=JANUARY, headers=self.headers)
        self.assertEqual(resp.status_code, 200, resp.text)

        resp = self.client.get("/api/fitness-progress/entries", headers=self.headers)
        self.assertEqual(resp.json()["count"], 2)
        self.assertEqual([e["entry_date"] for e in resp.json()["entries"]], ["2024-01-01", "2024-03-01"])

        resp = self.client.get("/api/fitness-progress/analysis", headers=self.headers)
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()["overall_progress"], "Excellent Progress")

        resp = self.client.get("/api/fitness-progress/analysis", params={"end": "2024-01-31"}, headers=self.headers)
        self.assertEqual(resp.status_code, 400)
        resp = self.client.get(
            "/api/fitness-progress/analysis", params={"start": "2024-03-01", "end": "2024-01-01"}, headers=self.headers
        )
        self.assertEqual(resp.status_code, 400)

        # Other users see none of it.
        self.assertEqual(self.client.get("/api/fitness-progress/entries", headers=self.other).json()["count"], 0)
        entry_id = first.json()["entry_id"]
        self.assertEqual(self.client.delete(f"/api/fitness-progress/entries/{entry_id}", headers=self.other).status_code, 404)

        progress = self.client.get("/api/gamification/progress", headers=self.headers).json()
        self.assertEqual(progress["total_points"], 10)

        self.assertEqual(self.client.delete(f"/api/fitness-progress/entries/{entry_id}", headers=self.headers).status_code, 200)
        self.assertEqual(self.client.delete(f"/api/fitness-progress/entries/{entry_id}", headers=self.headers).status_code, 404)


if __name__ == "__main__":
    unittest.main()
