# -*- coding: utf-8 -*-

from __future__ import annotations

import os
import shutil
import sys
import tempfile
import unittest
from pathlib import Path

from fastapi.testclient import TestClient

from vitapulse.clinical.catalog import GUIDELINES, list_categories, search_guidelines


class TestGuidelineSearch(unittest.TestCase):
    def test_filters_narrow_results(self) -> None:
        self.assertEqual(len(search_guidelines()), len(GUIDELINES))
        self.assertEqual([g.id for g in search_guidelines(organization="aha")], ["hypertension-2024"])
        self.assertEqual([g.id for g in search_guidelines(evidence_level="b")], ["pediatric-nutrition-2024"])
        self.assertEqual(search_guidelines(category="Cardiovascular", organization="ADA"), [])

    def test_text_search(self) -> None:
        ids = [g.id for g in search_guidelines("HYPERTENSION")]
        self.assertIn("hypertension-2024", ids)
        self.assertEqual(search_guidelines("zzz-no-match"), [])

    def test_categories(self) -> None:
        cats = list_categories()
        self.assertIn("Cardiovascular", cats["categories"])
        self.assertEqual(cats["evidence_levels"], ["A", "B", "C", "D"])


class TestClinicalApi(unittest.TestCase):
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

    @classmethod
    def tearDownClass(cls) -> None:
        cls.client.close()
        shutil.rmtree(cls._tmp, ignore_errors=True)

    def test_guideline_endpoints(self) -> None:
        resp = self.client.get("/api/clinical/guidelines", params={"specialty": "psychiatry"})
        self.assertEqual(resp.status_code, 200, resp.text)
        body = resp.json()
        self.assertEqual(body["count"], len(body["guidelines"]))

        resp = self.client.get("/api/clinical/guidelines/diabetes-2024")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["organization"], "ADA")
        self.assertEqual(self.client.get("/api/clinical/guidelines/unknown").status_code, 404)

        resp = self.client.get("/api/clinical/guidelines", params={"evidence_level": "Z"})
        self.assertEqual(resp.status_code, 422)

    def test_calculator_reference(self) -> None:
        resp = self.client.get("/api/clinical/calculators")
        self.assertEqual(resp.json()["count"], 5)

        resp = self.client.get("/api/clinical/calculators/cha2ds2-vasc")
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertTrue(resp.json()["inputs"])
        self.assertEqual(self.client.get("/api/clinical/calculators/nope").status_code, 404)


if __name__ == "__main__":
    unittest.main()
