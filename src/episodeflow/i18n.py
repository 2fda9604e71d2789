"""Localization collaborator used for caption labels.

The converter never looks up strings globally. A ``Localizer`` is passed in
by the caller; ``DefaultLocalizer`` is used when none is given.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

# Keys the converter asks the localizer to translate
AUTOMATICALLY_GENERATED = "automatically generated"
UNDEFINED_CAPTION = "Undefined caption"
UNKNOWN_LANGUAGE = "Unknown language"

# English display names for common ISO 639-1 codes
LANGUAGE_NAMES: dict[str, str] = {
    "af": "Afrikaans",
    "ar": "Arabic",
    "az": "Azerbaijani",
    "be": "Belarusian",
    "bg": "Bulgarian",
    "bn": "Bangla",
    "bs": "Bosnian",
    "ca": "Catalan",
    "cs": "Czech",
    "cy": "Welsh",
    "da": "Danish",
    "de": "German",
    "el": "Greek",
    "en": "English",
    "eo": "Esperanto",
    "es": "Spanish",
    "et": "Estonian",
    "eu": "Basque",
    "fa": "Persian",
    "fi": "Finnish",
    "fr": "French",
    "ga": "Irish",
    "gl": "Galician",
    "he": "Hebrew",
    "hi": "Hindi",
    "hr": "Croatian",
    "hu": "Hungarian",
    "hy": "Armenian",
    "id": "Indonesian",
    "is": "Icelandic",
    "it": "Italian",
    "ja": "Japanese",
    "ka": "Georgian",
    "kk": "Kazakh",
    "ko": "Korean",
    "la": "Latin",
    "lb": "Luxembourgish",
    "lt": "Lithuanian",
    "lv": "Latvian",
    "mk": "Macedonian",
    "ms": "Malay",
    "mt": "Maltese",
    "nb": "Norwegian Bokmål",
    "nl": "Dutch",
    "nn": "Norwegian Nynorsk",
    "no": "Norwegian",
    "pl": "Polish",
    "pt": "Portuguese",
    "ro": "Romanian",
    "ru": "Russian",
    "sk": "Slovak",
    "sl": "Slovenian",
    "sq": "Albanian",
    "sr": "Serbian",
    "sv": "Swedish",
    "sw": "Swahili",
    "ta": "Tamil",
    "th": "Thai",
    "tl": "Tagalog",
    "tr": "Turkish",
    "uk": "Ukrainian",
    "ur": "Urdu",
    "va": "Valencian",
    "vi": "Vietnamese",
    "zh": "Chinese",
}


@runtime_checkable
class Localizer(Protocol):
    """Synchronous, read-only string lookup."""

    def translate(self, key: str) -> str:
        """Return the localized label for ``key``."""
        ...

    def language_name(self, code: str) -> str | None:
        """Return a display name for a language code, or None if unknown."""
        ...


class DefaultLocalizer:
    """Localizer returning keys as-is and English language names.

    The built-in table covers common ISO 639-1 codes only; codes outside it
    resolve to None and are labelled "Unknown language". Pass
    ``language_names`` to extend it, or inject a different ``Localizer``
    for full locale data.

    Args:
        translations: Optional mapping of key to localized label.
        language_names: Optional mapping overriding the built-in names.
    """

    def __init__(
        self,
        translations: dict[str, str] | None = None,
        language_names: dict[str, str] | None = None,
    ) -> None:
        self._translations = dict(translations or {})
        self._language_names = {**LANGUAGE_NAMES, **(language_names or {})}

    def translate(self, key: str) -> str:
        return self._translations.get(key, key)

    def language_name(self, code: str) -> str | None:
        if not code:
            return None
        normalized = code.strip().replace("_", "-").lower()
        if normalized in self._language_names:
            return self._language_names[normalized]

        # "en-US" -> "English (US)"
        base, _, region = normalized.partition("-")
        name = self._language_names.get(base)
        if name is None:
            return None
        return f"{name} ({region.upper()})" if region else name
