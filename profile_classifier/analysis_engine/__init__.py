"""
Analysis engine package: profile signals and verdicts.

Consumes already-extracted profile attributes, derives explainable signals
(age, connections, location consistency, text patterns), and applies
threshold rules to label each profile suspicious, verified, or undetermined.
Pure functions throughout: no I/O, no state across calls.
"""

from profile_classifier.analysis_engine.models import (
    SUSPICIOUS_KINDS,
    UNDETERMINED,
    VERIFIED_KINDS,
    ProfileAttributes,
    Signal,
    SignalKind,
    Verdict,
    VerdictLabel,
)
from profile_classifier.analysis_engine.parsers import (
    attrs_from_raw,
    parse_connection_count,
    parse_profile_age,
)
from profile_classifier.analysis_engine.location import (
    locations_match,
    normalize_location,
)
from profile_classifier.analysis_engine.patterns import (
    DEFAULT_CATALOG,
    PatternCatalog,
    PatternEntry,
    has_professional_indicators,
    has_repeated_patterns,
    load_catalog,
    scan_profile_text,
    text_findings,
)
from profile_classifier.analysis_engine.signals import (
    SignalConfig,
    aggregate_signals,
)
from profile_classifier.analysis_engine.classifier import (
    SENSITIVITY_THRESHOLDS,
    ClassifierThresholds,
    Sensitivity,
    classify_profile,
    classify_signals,
    is_test_mode_profile,
    suspicious_indicators,
)

__all__ = [
    "SUSPICIOUS_KINDS",
    "UNDETERMINED",
    "VERIFIED_KINDS",
    "ProfileAttributes",
    "Signal",
    "SignalKind",
    "Verdict",
    "VerdictLabel",
    "attrs_from_raw",
    "parse_connection_count",
    "parse_profile_age",
    "locations_match",
    "normalize_location",
    "DEFAULT_CATALOG",
    "PatternCatalog",
    "PatternEntry",
    "has_professional_indicators",
    "has_repeated_patterns",
    "load_catalog",
    "scan_profile_text",
    "text_findings",
    "SignalConfig",
    "aggregate_signals",
    "SENSITIVITY_THRESHOLDS",
    "ClassifierThresholds",
    "Sensitivity",
    "classify_profile",
    "classify_signals",
    "is_test_mode_profile",
    "suspicious_indicators",
]
