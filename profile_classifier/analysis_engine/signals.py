"""
Signal aggregation: named observations from a profile record.

Runs the parsers' outputs, the location matcher and the text scanner over
one ProfileAttributes record and returns the signals that hold, in a fixed
order: the four suspicious checks first, then the four legitimacy checks.
Unknown inputs (None counts, empty locations) contribute nothing.
"""

from __future__ import annotations

from dataclasses import dataclass

from profile_classifier.analysis_engine.location import locations_match
from profile_classifier.analysis_engine.models import ProfileAttributes, Signal, SignalKind
from profile_classifier.analysis_engine.patterns import PatternCatalog, text_findings


@dataclass(frozen=True)
class SignalConfig:
    """
    Thresholds for the count-based signals.

    many_connections is the single canonical cutoff for the "many
    connections" signal (>= this value).
    """

    young_profile_days: int = 30
    """AGE_TOO_YOUNG when profile_age_days < this."""
    old_profile_days: int = 365
    """AGE_VERY_OLD when profile_age_days > this."""
    few_connections: int = 10
    """FEW_CONNECTIONS when connection_count < this."""
    many_connections: int = 500
    """MANY_CONNECTIONS when connection_count >= this."""


def _check_age_too_young(attrs: ProfileAttributes, config: SignalConfig) -> Signal | None:
    age = attrs.profile_age_days
    if age is None or age >= config.young_profile_days:
        return None
    return Signal(
        kind=SignalKind.AGE_TOO_YOUNG,
        reason=f"Profile created {age} days ago",
        details={"profile_age_days": age, "threshold": config.young_profile_days},
    )


def _check_few_connections(attrs: ProfileAttributes, config: SignalConfig) -> Signal | None:
    count = attrs.connection_count
    if count is None or count >= config.few_connections:
        return None
    return Signal(
        kind=SignalKind.FEW_CONNECTIONS,
        reason=f"Only {count} connections",
        details={"connection_count": count, "threshold": config.few_connections},
    )


def _check_location_mismatch(attrs: ProfileAttributes) -> Signal | None:
    if not attrs.has_both_locations:
        return None
    if locations_match(attrs.profile_location, attrs.company_location):
        return None
    return Signal(
        kind=SignalKind.LOCATION_MISMATCH,
        reason=(
            f"Location mismatch: Profile ({attrs.profile_location}) "
            f"vs Company ({attrs.company_location})"
        ),
        details={
            "profile_location": attrs.profile_location,
            "company_location": attrs.company_location,
        },
    )


def _check_suspicious_text(attrs: ProfileAttributes, catalog: PatternCatalog) -> Signal | None:
    findings = text_findings(attrs.name, attrs.title, attrs.description, catalog=catalog)
    if not findings:
        return None
    return Signal(
        kind=SignalKind.SUSPICIOUS_TEXT,
        reason="Suspicious profile patterns detected",
        details={"findings": findings},
    )


def _check_age_very_old(attrs: ProfileAttributes, config: SignalConfig) -> Signal | None:
    age = attrs.profile_age_days
    if age is None or age <= config.old_profile_days:
        return None
    return Signal(
        kind=SignalKind.AGE_VERY_OLD,
        reason=f"Profile older than 1 year ({age} days)",
        details={"profile_age_days": age, "threshold": config.old_profile_days},
    )


def _check_many_connections(attrs: ProfileAttributes, config: SignalConfig) -> Signal | None:
    count = attrs.connection_count
    if count is None or count < config.many_connections:
        return None
    return Signal(
        kind=SignalKind.MANY_CONNECTIONS,
        reason=f"High connection count ({count} connections)",
        details={"connection_count": count, "threshold": config.many_connections},
    )


def _check_location_consistent(attrs: ProfileAttributes) -> Signal | None:
    if not attrs.has_both_locations:
        return None
    if not locations_match(attrs.profile_location, attrs.company_location):
        return None
    return Signal(
        kind=SignalKind.LOCATION_CONSISTENT,
        reason=f"Location consistency: {attrs.profile_location}",
        details={
            "profile_location": attrs.profile_location,
            "company_location": attrs.company_location,
        },
    )


def _check_professional_text(attrs: ProfileAttributes, catalog: PatternCatalog) -> Signal | None:
    if not catalog.has_professional_indicators(attrs.title, attrs.description):
        return None
    return Signal(
        kind=SignalKind.PROFESSIONAL_TEXT,
        reason="Professional indicators in title or description",
        details={"title": attrs.title},
    )


def aggregate_signals(
    attrs: ProfileAttributes,
    config: SignalConfig | None = None,
    catalog: PatternCatalog | None = None,
) -> list[Signal]:
    """
    Evaluate every signal check over one profile, in fixed order.

    Order: AGE_TOO_YOUNG, FEW_CONNECTIONS, LOCATION_MISMATCH, SUSPICIOUS_TEXT,
    AGE_VERY_OLD, MANY_CONNECTIONS, LOCATION_CONSISTENT, PROFESSIONAL_TEXT.
    Only checks whose condition holds produce a signal.
    """
    cfg = config or SignalConfig()
    cat = catalog or PatternCatalog.default()
    candidates = (
        _check_age_too_young(attrs, cfg),
        _check_few_connections(attrs, cfg),
        _check_location_mismatch(attrs),
        _check_suspicious_text(attrs, cat),
        _check_age_very_old(attrs, cfg),
        _check_many_connections(attrs, cfg),
        _check_location_consistent(attrs),
        _check_professional_text(attrs, cat),
    )
    return [s for s in candidates if s is not None]
