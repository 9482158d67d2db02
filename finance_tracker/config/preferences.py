"""
Display Preferences

Theme, currency and language are chosen per browser/user and survive
restarts. They are held in an explicit ``Preferences`` object that is
passed to whoever needs it, never in module-level state.

Policy:
- ``PreferencesStore.load()`` initializes from the JSON file once;
  a missing or unreadable file yields the defaults.
- Every setter on ``PreferencesStore`` writes the whole object back to the
  file immediately (write-through).
"""

import json
from pathlib import Path
from typing import Literal, Optional, Union

from pydantic import BaseModel, ValidationError

from finance_tracker.log import get_logger

Theme = Literal["light", "dark"]
Currency = Literal["USD", "BDT", "INR"]
Language = Literal["en", "bn"]

CURRENCY_SYMBOLS: dict[str, str] = {
    "USD": "$",
    "BDT": "৳",
    "INR": "₹",
}

logger = get_logger(__name__)


class Preferences(BaseModel):
    theme: Theme = "light"
    currency: Currency = "BDT"
    language: Language = "bn"

    @property
    def currency_symbol(self) -> str:
        return CURRENCY_SYMBOLS[self.currency]


class PreferencesStore:
    """
    File-backed holder of the current ``Preferences``.

    Usage:
        store = PreferencesStore.load(path)
        store.set_currency("USD")   # persisted immediately
        symbol = store.preferences.currency_symbol
    """

    def __init__(self, path: Union[str, Path], preferences: Optional[Preferences] = None):
        self._path = Path(path)
        self._preferences = preferences or Preferences()

    @classmethod
    def load(cls, path: Union[str, Path]) -> "PreferencesStore":
        path = Path(path)
        preferences = Preferences()
        if path.exists():
            try:
                preferences = Preferences.model_validate_json(path.read_text(encoding="utf-8"))
            except (ValidationError, ValueError, OSError) as e:
                logger.warning(
                    "preferences_load_failed",
                    path=str(path),
                    error=str(e),
                )
        return cls(path, preferences)

    @property
    def preferences(self) -> Preferences:
        return self._preferences

    @property
    def path(self) -> Path:
        return self._path

    def set_theme(self, theme: Theme) -> Preferences:
        return self._apply(theme=theme)

    def toggle_theme(self) -> Preferences:
        return self._apply(theme="dark" if self._preferences.theme == "light" else "light")

    def set_currency(self, currency: Currency) -> Preferences:
        return self._apply(currency=currency)

    def set_language(self, language: Language) -> Preferences:
        return self._apply(language=language)

    def _apply(self, **changes) -> Preferences:
        # Round-trip through validation so bad values never reach the file
        updated = Preferences.model_validate({**self._preferences.model_dump(), **changes})
        self._preferences = updated
        self._write()
        return updated

    def _write(self) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(
                json.dumps(self._preferences.model_dump(), indent=2),
                encoding="utf-8",
            )
        except OSError as e:
            # In-memory value stays current; only persistence is lost
            logger.error("preferences_write_failed", path=str(self._path), error=str(e))
