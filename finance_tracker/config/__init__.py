"""Configuration package."""

from finance_tracker.config.settings import (
    AppSettings,
    GeminiSettings,
    GoogleSheetsSettings,
    Settings,
    get_settings,
    validate_all_settings,
)
from finance_tracker.config.preferences import (
    CURRENCY_SYMBOLS,
    Preferences,
    PreferencesStore,
)
from finance_tracker.config.i18n import TRANSLATIONS, translate, translator

__all__ = [
    "AppSettings",
    "CURRENCY_SYMBOLS",
    "GeminiSettings",
    "GoogleSheetsSettings",
    "Preferences",
    "PreferencesStore",
    "Settings",
    "TRANSLATIONS",
    "get_settings",
    "translate",
    "translator",
    "validate_all_settings",
]
