from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class TranslationStore:
    """
    Localized site strings keyed by language code.

    Loaded once at startup; an unreadable file leaves the store empty so pages
    keep serving.
    """

    def __init__(
        self, translations: dict[str, Any] | None = None, *, default_language: str = "pt"
    ) -> None:
        self._translations: dict[str, Any] = dict(translations or {})
        self.default_language = default_language

    @classmethod
    def load(cls, path: Path, *, default_language: str = "pt") -> "TranslationStore":
        try:
            raw = path.read_text(encoding="utf-8")
            data = json.loads(raw)
            if not isinstance(data, dict):
                raise ValueError(
                    f"translations root must be an object, got {type(data).__name__}"
                )
        except (OSError, ValueError) as exc:
            logger.error("Error loading translations from %s: %s", path, exc)
            data = {}
        return cls(data, default_language=default_language)

    def all(self) -> dict[str, Any]:
        return self._translations

    def languages(self) -> list[str]:
        return list(self._translations.keys())

    def for_language(self, lang: str | None) -> dict[str, Any]:
        code = (lang or "").strip() or self.default_language
        found = self._translations.get(code)
        if isinstance(found, dict):
            return found
        fallback = self._translations.get(self.default_language)
        if isinstance(fallback, dict):
            return fallback
        return {}

    def translate(self, key: str, lang: str | None = None) -> str:
        # Dotted path lookup ("nav.about"); unresolved keys echo back.
        value: Any = self._translations.get((lang or "").strip() or self.default_language)
        for part in key.split("."):
            if not isinstance(value, dict):
                return key
            value = value.get(part)
        if isinstance(value, str) and value:
            return value
        return key
