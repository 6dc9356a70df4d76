"""
Data models for analysis engine input and output.

ProfileAttributes is the record the extraction side hands in; Signal is one
explainable observation about it; Verdict is the three-way label plus the
reasons that produced it. None of these hold state across calls.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from profile_classifier.analysis_engine.location import normalize_location

_DIGITS_RE = re.compile(r"^\d[\d,]*$")


def coerce_count(value: Any) -> int | float | None:
    """
    Normalize an optional non-negative count (days, connections).

    Returns None for anything that is not a finite, non-negative number:
    None, booleans, NaN/inf, negatives, and unparseable strings. Fractional
    values are kept (365.9 days is older than 365); whole floats become int.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value) or value < 0:
            return None
        return int(value) if value.is_integer() else value
    if isinstance(value, str):
        text = value.strip()
        if _DIGITS_RE.match(text):
            return int(text.replace(",", ""))
        try:
            return coerce_count(float(text))
        except ValueError:
            return None
    return None


class ProfileAttributes(BaseModel):
    """
    Already-extracted profile summary, as supplied by the extraction side.

    Text fields are always strings (empty when unknown) so pattern matching
    is total. Numeric fields are None when unknown, never NaN or negative.
    Accepts snake_case names and the camelCase keys used by the extension
    (profileAgeDays, connectionCount, ...).
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    name: str = Field("", description="Display name")
    title: str = Field("", description="Headline / occupation text")
    description: str = Field("", description="Secondary bio text")
    profile_age_days: int | float | None = Field(None, description="Days since the profile was created")
    connection_count: int | float | None = Field(None, description="Declared connection count")
    profile_location: str = Field("", description="Location declared on the profile")
    company_location: str = Field("", description="Location of the current employer")
    company_name: str = Field("", description="Current employer name")

    @field_validator(
        "name",
        "title",
        "description",
        "profile_location",
        "company_location",
        "company_name",
        mode="before",
    )
    @classmethod
    def _text_or_empty(cls, value: Any) -> str:
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)

    @field_validator("profile_age_days", "connection_count", mode="before")
    @classmethod
    def _count_or_unknown(cls, value: Any) -> int | float | None:
        return coerce_count(value)

    @property
    def has_both_locations(self) -> bool:
        """Both locations carry at least one word character once normalized."""
        return bool(normalize_location(self.profile_location)) and bool(
            normalize_location(self.company_location)
        )


class SignalKind(str, Enum):
    AGE_TOO_YOUNG = "age_too_young"
    FEW_CONNECTIONS = "few_connections"
    LOCATION_MISMATCH = "location_mismatch"
    SUSPICIOUS_TEXT = "suspicious_text"
    AGE_VERY_OLD = "age_very_old"
    MANY_CONNECTIONS = "many_connections"
    LOCATION_CONSISTENT = "location_consistent"
    PROFESSIONAL_TEXT = "professional_text"

    @property
    def is_suspicious(self) -> bool:
        return self in SUSPICIOUS_KINDS

    @property
    def is_verified(self) -> bool:
        return self in VERIFIED_KINDS


SUSPICIOUS_KINDS = frozenset(
    {
        SignalKind.AGE_TOO_YOUNG,
        SignalKind.FEW_CONNECTIONS,
        SignalKind.LOCATION_MISMATCH,
        SignalKind.SUSPICIOUS_TEXT,
    }
)
VERIFIED_KINDS = frozenset(
    {
        SignalKind.AGE_VERY_OLD,
        SignalKind.MANY_CONNECTIONS,
        SignalKind.LOCATION_CONSISTENT,
        SignalKind.PROFESSIONAL_TEXT,
    }
)


@dataclass(frozen=True)
class Signal:
    """
    Single explainable observation about a profile.

    Produced fresh on every aggregation; never cached or mutated.
    """

    kind: SignalKind
    reason: str
    """Human-readable explanation, interpolating the triggering values."""
    details: dict[str, Any] = field(default_factory=dict)
    """Thresholds and actual values used; for auditing and explainability."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "reason": self.reason,
            "details": dict(self.details),
        }


class VerdictLabel(str, Enum):
    SUSPICIOUS = "suspicious"
    VERIFIED = "verified"
    UNDETERMINED = "undetermined"


@dataclass(frozen=True)
class Verdict:
    """
    Final classification of one profile.

    reasons keeps the order the contributing signals were discovered in;
    it is empty for UNDETERMINED.
    """

    label: VerdictLabel
    reasons: tuple[str, ...] = ()
    test_mode: bool = False
    """True when the test-mode name override produced this verdict."""

    @property
    def is_suspicious(self) -> bool:
        return self.label is VerdictLabel.SUSPICIOUS

    @property
    def is_verified(self) -> bool:
        return self.label is VerdictLabel.VERIFIED

    def to_dict(self) -> dict[str, Any]:
        return {
            "label": self.label.value,
            "reasons": list(self.reasons),
            "test_mode": self.test_mode,
        }


UNDETERMINED = Verdict(label=VerdictLabel.UNDETERMINED)
