# -*- coding: utf-8 -*-

from __future__ import annotations

import os
import shutil
import sys
import tempfile
import unittest
from pathlib import Path

from fastapi.testclient import TestClient


class TestTranslationCore(unittest.TestCase):
    def test_translate_with_fallback(self) -> None:
        from vitapulse.i18n.core import translate

        self.assertEqual(translate("es", "common.save"), "Guardar")
        self.assertEqual(translate("es", "dashboard.greeting", name="Ana"), "Hola, Ana")
        # Missing in Spanish, so English is used.
        self.assertEqual(translate("es", "gamification.pointsEarned", points=10), "You earned 10 points!")
        self.assertEqual(translate("en", "no.such.key"), "no.such.key")
        self.assertEqual(translate("xx", "common.save"), "Save")

    def test_interpolate_both_placeholder_styles(self) -> None:
        from vitapulse.i18n.core import interpolate

        self.assertEqual(interpolate("Hi {{ name }} / {name}", {"name": "Sam"}), "Hi Sam / Sam")
        self.assertEqual(interpolate("Hi {name}", {}), "Hi {name}")

    def test_detect_language(self) -> None:
        from vitapulse.i18n.core import detect_language

        self.assertEqual(detect_language("fr-CH, fr;q=0.9, en;q=0.8"), "fr")
        self.assertEqual(detect_language("pt-BR, de;q=0.5"), "de")
        self.assertEqual(detect_language("en;q=0.3, ja;q=0.9"), "ja")
        self.assertEqual(detect_language("de", stored="ar"), "ar")
        self.assertEqual(detect_language(None), "en")

    def test_format_number(self) -> None:
        from vitapulse.i18n.core import format_number

        self.assertEqual(format_number(1234567.891, "en"), "1,234,567.891")
        self.assertEqual(format_number(1234567.891, "de"), "1.234.567,891")
        self.assertEqual(format_number(1234.5, "fr"), "1\u202f234,5")
        self.assertEqual(format_number(1234567, "hi"), "12,34,567")
        self.assertEqual(format_number(1234.5, "ar"), "١٬٢٣٤٫٥")
        self.assertEqual(format_number(2.5, "en", decimals=2), "2.50")
        self.assertEqual(format_number(-1000, "en"), "-1,000")

    def test_direction_and_pluralize(self) -> None:
        from vitapulse.i18n.core import pluralize, text_direction

        self.assertEqual(text_direction("ar"), "rtl")
        self.assertEqual(text_direction("en"), "ltr")
        self.assertEqual(pluralize(1, "day"), "day")
        self.assertEqual(pluralize(3, "day"), "days")
        self.assertEqual(pluralize(0, "child", "children"), "children")


class TestI18nApi(unittest.TestCase):
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

    def test_languages_and_detection(self) -> None:
        resp = self.client.get("/api/i18n/languages", headers={"Accept-Language": "zh-CN,zh;q=0.9"})
        self.assertEqual(resp.status_code, 200, resp.text)
        body = resp.json()
        self.assertEqual(len(body["languages"]), 8)
        self.assertEqual(body["detected"], "zh")

    def test_translations_bundle(self) -> None:
        resp = self.client.get("/api/i18n/translations/ar")
        self.assertEqual(resp.status_code, 200, resp.text)
        body = resp.json()
        self.assertEqual(body["direction"], "rtl")
        self.assertEqual(body["locale"], "ar-SA")
        self.assertEqual(body["translations"]["common"]["save"], "حفظ")
        # English keys are merged in underneath.
        self.assertIn("gamification", body["translations"])

        self.assertEqual(self.client.get("/api/i18n/translations/xx").status_code, 404)

    def test_translate_endpoint(self) -> None:
        resp = self.client.get("/api/i18n/translate", params={"key": "auth.welcomeBack", "lang": "de", "name": "Jo"})
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()["text"], "Willkommen zurück, Jo!")

        resp = self.client.get(
            "/api/i18n/translate", params={"key": "common.save"}, headers={"Accept-Language": "es-MX"}
        )
        self.assertEqual(resp.json(), {"language": "es", "key": "common.save", "text": "Guardar"})

    def test_stored_language_beats_header(self) -> None:
        resp = self.client.post(
            "/api/auth/register",
            json={"email": "polyglot@example.com", "password": "password123", "full_name": "Poly Glot"},
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        headers = {"Authorization": f"Bearer {resp.json()['token']}"}
        self.client.cookies.clear()

        resp = self.client.put("/api/profile/preferences", json={"language": "ja"}, headers=headers)
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()["language"], "ja")

        resp = self.client.get("/api/i18n/languages", headers={**headers, "Accept-Language": "fr"})
        self.assertEqual(resp.json()["detected"], "ja")

        resp = self.client.put("/api/profile/preferences", json={"language": "klingon"}, headers=headers)
        self.assertEqual(resp.status_code, 422)


if __name__ == "__main__":
    unittest.main()
