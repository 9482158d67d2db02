"""Tests for the UI label table."""

import re
from pathlib import Path
from typing import get_args

from finance_tracker.config import TRANSLATIONS, Preferences, translate, translator
from finance_tracker.config.preferences import Language


class TestTranslations:
    """Tests for label lookup."""

    def test_languages_have_same_keys(self):
        assert set(TRANSLATIONS["en"]) == set(TRANSLATIONS["bn"])
        assert all(TRANSLATIONS["bn"].values())

    def test_every_preference_language_has_labels(self):
        assert set(get_args(Language)) <= set(TRANSLATIONS)

    def test_translate(self):
        assert translate("bn", "dashboard") == "ড্যাশবোর্ড"
        assert translate("en", "dashboard") == "Dashboard"

    def test_unknown_language_falls_back_to_english(self):
        assert translate("fr", "logout") == "Logout"

    def test_unknown_key_is_returned_as_is(self):
        assert translate("bn", "noSuchLabel") == "noSuchLabel"

    def test_translator_follows_preferences(self):
        t = translator(Preferences(language="en").language)
        assert t("logout") == "Logout"
        assert translator(Preferences().language)("logout") == "লগ আউট"

    def test_frontend_labels_exist(self):
        source = (Path(__file__).parent.parent / "app" / "main.py").read_text(encoding="utf-8")
        used = set(re.findall(r"\bt\(['\"](\w+)['\"]\)", source))
        assert used
        assert used <= set(TRANSLATIONS["en"])
