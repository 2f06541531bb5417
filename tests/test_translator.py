"""Tests for translation lookup."""

import unittest

from mentor_client.i18n.translator import Translator, is_rtl


class TranslatorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.translator = Translator()

    def test_lookup_follows_active_language(self) -> None:
        self.assertEqual(self.translator.t("nav.home"), "Home")
        self.translator.change_language("ar")
        self.assertEqual(self.translator.t("nav.home"), "الرئيسية")

    def test_missing_key_falls_back_to_english_then_default(self) -> None:
        self.translator.change_language("ar")
        self.assertEqual(
            self.translator.t("auth.sessionExpired"),
            "Your session has expired. Please log in again.",
        )
        self.assertEqual(self.translator.t("missing.key", "Fallback"), "Fallback")
        self.assertEqual(self.translator.t("missing.key"), "missing.key")

    def test_interpolation(self) -> None:
        self.assertEqual(self.translator.t("auth.welcomeBack", name="Eve"), "Welcome back, Eve!")

    def test_unsupported_language_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            self.translator.change_language("fr")
        self.assertEqual(self.translator.language, "en")

    def test_missing_bundle_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            Translator({"en": {}})

    def test_rtl_table(self) -> None:
        self.assertTrue(is_rtl("ar"))
        self.assertTrue(is_rtl("he-IL"))
        self.assertFalse(is_rtl("en"))


if __name__ == "__main__":
    unittest.main()
