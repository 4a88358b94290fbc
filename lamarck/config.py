"""Configuration constants, language mappings, and .env loading.

WHY: Centralizes all configurable values so they are easy to find,
update, and override. The language table and API defaults are plain data
structures, not buried in logic, so they can be edited confidently.

HOW: python-dotenv loads the .env file on import. Constants are defined
as module-level dicts and strings. The load_api_key() function provides a
clear error when the key is missing.

RULES:
- LANGUAGE_MAP maps user-facing codes ("en_gb") to Deepgram locales ("en-GB")
- Unknown codes fall back to "en"; no code at all means "en-US"
- The API key is loaded from the environment or .env, never hardcoded
- All defaults can be overridden via environment variables
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Load .env from the working directory (where the command is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Language mapping: CLI code → Deepgram locale
# ---------------------------------------------------------------------------

LANGUAGE_MAP: dict[str, str] = {
    "zh": "zh",
    "zh_cn": "zh-CN",
    "zh_tw": "zh-TW",
    "nl": "nl",
    "en": "en",
    "en_au": "en-AU",
    "en_gb": "en-GB",
    "en_in": "en-IN",
    "en_nz": "en-NZ",
    "en_us": "en-US",
    "fr": "fr",
    "fr_ca": "fr-CA",
    "de": "de",
    "hi": "hi",
    "hi_latn": "hi-Latn",
    "id": "id",
    "it": "it",
    "ja": "ja",
    "ko": "ko",
    "pt": "pt",
    "pt_br": "pt-BR",
    "ru": "ru",
    "es": "es",
    "es_419": "es-419",
    "sv": "sv",
    "tr": "tr",
    "uk": "uk",
}

FALLBACK_LANGUAGE = "en"
"""Locale used for codes missing from LANGUAGE_MAP."""

DEFAULT_LANGUAGE = "en-US"
"""Locale used when the user gives no language at all."""


def map_language(code: str | None) -> str:
    """Map a CLI language code to a Deepgram locale.

    RULES:
    - Known codes map to their Deepgram locale
    - None maps to DEFAULT_LANGUAGE ("en-US")
    - Anything else maps to FALLBACK_LANGUAGE ("en")
    """
    if code is None:
        return DEFAULT_LANGUAGE
    return LANGUAGE_MAP.get(code, FALLBACK_LANGUAGE)


# ---------------------------------------------------------------------------
# API configuration defaults
# ---------------------------------------------------------------------------

DEEPGRAM_BASE_URL = os.getenv("DEEPGRAM_BASE_URL", "https://api.deepgram.com/v1")
DEFAULT_OUTPUT_PATH = os.getenv("LAMARCK_OUTPUT_PATH", "transcript.srt")


def load_api_key() -> str:
    """Load the Deepgram API key from the environment.

    RULES:
    - Reads DEEPGRAM_API_KEY (populated from .env by python-dotenv)
    - Raises ValueError if the key is missing or empty
    """
    key = os.getenv("DEEPGRAM_API_KEY", "").strip()
    if not key:
        raise ValueError(
            "Deepgram API key not configured. "
            "Set DEEPGRAM_API_KEY, add it to a .env file, or pass --deepgram-api-key."
        )
    return key
