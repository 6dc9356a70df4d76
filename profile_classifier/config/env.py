"""
Environment variable loading for the profile classifier.

- PROFILE_DETECTOR_ENABLED: 1/0, true/false (default: enabled)
- PROFILE_SENSITIVITY: low | medium | high (default: medium)
- PROFILE_TEST_MODE: flag names starting with 'A' instead of classifying (default: off)
- PROFILE_CUSTOM_PATTERNS: extra suspicious regexes, separated by "||"
- PROFILE_WHITELIST: comma-separated display names never labelled suspicious
- PROFILE_MANY_CONNECTIONS: connection count for the "many connections" signal (default: 500)
- PROFILE_CATALOG_PATH: JSON pattern catalog override
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Project root: config is profile_classifier/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_PACKAGE_DIR = _CONFIG_DIR.parent
_ROOT = _PACKAGE_DIR.parent
_ENV_PATH = _ROOT / ".env"

CUSTOM_PATTERN_SEPARATOR = "||"

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


def load_profile_env() -> None:
    """Load .env from project root. Existing variables win; safe to call repeatedly."""
    load_dotenv(_ENV_PATH, override=False)


def parse_flag(raw: str | None, default: bool) -> bool:
    """Interpret 1/true/yes/on and 0/false/no/off; anything else gives default."""
    value = (raw or "").strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    return default


def is_detector_enabled() -> bool:
    load_profile_env()
    return parse_flag(os.getenv("PROFILE_DETECTOR_ENABLED"), True)


def get_sensitivity_name() -> str:
    """Raw PROFILE_SENSITIVITY value, lowercased; validated by the settings layer."""
    load_profile_env()
    return (os.getenv("PROFILE_SENSITIVITY") or "medium").strip().lower()


def is_test_mode() -> bool:
    load_profile_env()
    return parse_flag(os.getenv("PROFILE_TEST_MODE"), False)


def get_custom_patterns() -> list[str]:
    load_profile_env()
    raw = os.getenv("PROFILE_CUSTOM_PATTERNS") or ""
    return [p.strip() for p in raw.split(CUSTOM_PATTERN_SEPARATOR) if p.strip()]


def get_whitelist() -> list[str]:
    load_profile_env()
    raw = os.getenv("PROFILE_WHITELIST") or ""
    return [n.strip() for n in raw.split(",") if n.strip()]


def get_many_connections_raw() -> str | None:
    """Raw PROFILE_MANY_CONNECTIONS value; None when unset."""
    load_profile_env()
    raw = (os.getenv("PROFILE_MANY_CONNECTIONS") or "").strip()
    return raw or None


def get_catalog_path() -> Path | None:
    """PROFILE_CATALOG_PATH, resolved relative to the project root; None when unset."""
    load_profile_env()
    raw = (os.getenv("PROFILE_CATALOG_PATH") or "").strip()
    if not raw:
        return None
    path = Path(raw)
    return path if path.is_absolute() else _ROOT / path
