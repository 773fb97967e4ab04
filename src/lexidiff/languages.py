from __future__ import annotations

from typing import Dict

DEFAULT_LANGUAGE = "en"

# ISO 639-1 code -> NLTK Snowball algorithm name.
SNOWBALL_LANGUAGES: Dict[str, str] = {
    "ar": "arabic",
    "da": "danish",
    "de": "german",
    "en": "english",
    "es": "spanish",
    "fi": "finnish",
    "fr": "french",
    "hu": "hungarian",
    "it": "italian",
    "nb": "norwegian",
    "nl": "dutch",
    "nn": "norwegian",
    "no": "norwegian",
    "pt": "portuguese",
    "ro": "romanian",
    "ru": "russian",
    "sv": "swedish",
}

# ISO 639-1 code -> NLTK Punkt model name.
PUNKT_LANGUAGES: Dict[str, str] = {
    "cs": "czech",
    "da": "danish",
    "de": "german",
    "el": "greek",
    "en": "english",
    "es": "spanish",
    "et": "estonian",
    "fi": "finnish",
    "fr": "french",
    "it": "italian",
    "ml": "malayalam",
    "nb": "norwegian",
    "nl": "dutch",
    "nn": "norwegian",
    "no": "norwegian",
    "pl": "polish",
    "pt": "portuguese",
    "ru": "russian",
    "sl": "slovene",
    "sv": "swedish",
    "tr": "turkish",
}


def normalize_language_code(code: str | None) -> str:
    """Reduce a locale tag such as ``fr-FR`` or ``pt_BR`` to its primary subtag."""
    if not code:
        return ""
    primary = code.strip().replace("_", "-").split("-", 1)[0]
    return primary.lower()


def snowball_language(code: str | None) -> str | None:
    """Return the Snowball algorithm for a locale tag, or None when unsupported."""
    return SNOWBALL_LANGUAGES.get(normalize_language_code(code))


def punkt_language(code: str | None) -> str | None:
    """Return the Punkt model name for a locale tag, or None when unsupported."""
    return PUNKT_LANGUAGES.get(normalize_language_code(code))
