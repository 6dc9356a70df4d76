"""
Free-text signal parsers: "joined" strings and connection counts.

Profile pages only expose coarse text ("Joined LinkedIn in 2020",
"September 2022", "Joined 2 months ago", "500+ connections"). These helpers
turn that text into approximate numbers so the downstream thresholds stay
meaningful. They never raise; unrecognized text yields None.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Any, Mapping

from profile_classifier.analysis_engine.models import ProfileAttributes

MONTH_NAMES = (
    "january",
    "february",
    "march",
    "april",
    "may",
    "june",
    "july",
    "august",
    "september",
    "october",
    "november",
    "december",
)

# Relative-phrase approximations (days)
DAYS_PER_MONTH = 30
THIS_MONTH_DAYS = 15
THIS_YEAR_DAYS = 180

_JOINED_YEAR_RE = re.compile(r"joined linkedin in (\d{4})", re.IGNORECASE)
_MONTH_YEAR_RE = re.compile(r"(" + "|".join(MONTH_NAMES) + r")\s+(\d{4})", re.IGNORECASE)
_MONTHS_AGO_RE = re.compile(r"joined (\d+)\s*months? ago", re.IGNORECASE)
_DAYS_AGO_RE = re.compile(r"joined (\d+)\s*days? ago", re.IGNORECASE)

_CONNECTIONS_RE = re.compile(r"(\d[\d,]*)\s*connections?", re.IGNORECASE)
_PLUS_COUNT_RE = re.compile(r"(\d[\d,]*)\+")


def _days_since(year: int, month: int, now: datetime) -> int | None:
    """Whole days from the 1st of month/year to now; None if that date is invalid or in the future."""
    try:
        joined = datetime(year, month, 1, tzinfo=now.tzinfo)
    except ValueError:
        return None
    days = (now - joined).days
    if days < 0:
        return None
    return days


def parse_profile_age(text: str | None, now: datetime) -> int | None:
    """
    Convert a "joined" string into an approximate profile age in days.

    Patterns, first match wins:
      1. "joined linkedin in YYYY"  -> days since Jan 1 of YYYY
      2. "<Month> YYYY"             -> days since the 1st of that month
      3. "joined N months ago"      -> N * 30
      4. "joined N days ago"        -> N
      5. contains "this month"      -> 15
      6. contains "this year"       -> 180

    now is the reference instant and must be passed by the caller; join
    dates are built in now's timezone. Returns None when nothing matches or
    the resolved join date lies after now.
    """
    if not text:
        return None

    year_match = _JOINED_YEAR_RE.search(text)
    if year_match:
        return _days_since(int(year_match.group(1)), 1, now)

    month_year_match = _MONTH_YEAR_RE.search(text)
    if month_year_match:
        month = MONTH_NAMES.index(month_year_match.group(1).lower()) + 1
        return _days_since(int(month_year_match.group(2)), month, now)

    months_match = _MONTHS_AGO_RE.search(text)
    if months_match:
        return int(months_match.group(1)) * DAYS_PER_MONTH

    days_match = _DAYS_AGO_RE.search(text)
    if days_match:
        return int(days_match.group(1))

    lowered = text.lower()
    if "this month" in lowered:
        return THIS_MONTH_DAYS
    if "this year" in lowered:
        return THIS_YEAR_DAYS

    return None


def parse_connection_count(text: str | None) -> int | None:
    """
    Extract a connection count from text like "42 connections" or "500+".

    "N connections" is tried before "N+". Thousands separators are ignored.
    Returns None when neither pattern matches.
    """
    if not text:
        return None
    for pattern in (_CONNECTIONS_RE, _PLUS_COUNT_RE):
        match = pattern.search(text)
        if match:
            return int(match.group(1).replace(",", ""))
    return None


_AGE_KEYS = ("profile_age_days", "profileAgeDays")
_JOINED_TEXT_KEYS = ("joined_text", "joinedText")
_CONNECTION_KEYS = ("connection_count", "connectionCount")
_CONNECTIONS_TEXT_KEYS = ("connections_text", "connectionsText")


def _first_present(record: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        if record.get(key) is not None:
            return record[key]
    return None


def attrs_from_raw(record: Mapping[str, Any], now: datetime) -> ProfileAttributes:
    """
    Build ProfileAttributes from a raw extraction record.

    Numeric fields given directly win. Otherwise joined_text / joinedText is
    parsed into profile_age_days (relative to now) and connections_text /
    connectionsText into connection_count. Unrecognized text stays unknown.
    """
    dropped = _AGE_KEYS + _JOINED_TEXT_KEYS + _CONNECTION_KEYS + _CONNECTIONS_TEXT_KEYS
    data = {k: v for k, v in record.items() if k not in dropped}

    age = _first_present(record, _AGE_KEYS)
    if age is None:
        joined = _first_present(record, _JOINED_TEXT_KEYS)
        age = parse_profile_age(str(joined), now) if joined is not None else None
    data["profile_age_days"] = age

    connections = _first_present(record, _CONNECTION_KEYS)
    if connections is None:
        text = _first_present(record, _CONNECTIONS_TEXT_KEYS)
        connections = parse_connection_count(str(text)) if text is not None else None
    data["connection_count"] = connections

    return ProfileAttributes.model_validate(data)
