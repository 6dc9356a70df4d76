"""
Tests for the classifier: threshold rules, sensitivity levels, test-mode
override, whitelist, and the end-to-end scenarios.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from profile_classifier.analysis_engine.classifier import (
    SENSITIVITY_THRESHOLDS,
    TEST_MODE_REASON,
    ClassifierThresholds,
    Sensitivity,
    classify_profile,
    classify_signals,
    is_test_mode_profile,
    suspicious_indicators,
)
from profile_classifier.analysis_engine.models import (
    ProfileAttributes,
    Signal,
    SignalKind,
    Verdict,
    VerdictLabel,
)
from profile_classifier.analysis_engine.patterns import DEFAULT_CATALOG
from profile_classifier.analysis_engine.signals import aggregate_signals
from profile_classifier.config.settings import DetectorSettings

SUSPICIOUS_REASONS = (
    "Profile created 5 days ago",
    "Only 3 connections",
    "Location mismatch: Profile (New York) vs Company (San Francisco)",
)
VERIFIED_REASONS = (
    "Profile older than 1 year (730 days)",
    "High connection count (750 connections)",
    "Location consistency: Seattle",
    "Professional indicators in title or description",
)


def _two_suspicious_profile(**overrides):
    """Young, few connections, one professional keyword, no locations."""
    data = {
        "name": "Jordan Miller",
        "title": "Marketing Coordinator",
        "profile_age_days": 5,
        "connection_count": 3,
    }
    data.update(overrides)
    return ProfileAttributes(**data)


def test_suspicious_scenario(suspicious_profile):
    verdict = classify_profile(suspicious_profile, DetectorSettings())
    assert verdict.label is VerdictLabel.SUSPICIOUS
    assert verdict.reasons == SUSPICIOUS_REASONS
    assert verdict.test_mode is False


def test_verified_scenario(verified_profile):
    verdict = classify_profile(verified_profile, DetectorSettings())
    assert verdict.label is VerdictLabel.VERIFIED
    assert verdict.reasons == VERIFIED_REASONS


def test_undetermined_scenario(empty_profile):
    verdict = classify_profile(empty_profile, DetectorSettings())
    assert verdict == Verdict(label=VerdictLabel.UNDETERMINED)
    assert verdict.reasons == ()


def test_default_settings_used_when_omitted(suspicious_profile):
    assert classify_profile(suspicious_profile).label is VerdictLabel.SUSPICIOUS


def test_classification_is_idempotent(suspicious_profile, verified_profile, empty_profile):
    settings = DetectorSettings()
    for attrs in (suspicious_profile, verified_profile, empty_profile):
        assert classify_profile(attrs, settings) == classify_profile(attrs, settings)


def test_suspicious_rule_wins_over_verified():
    """Two suspicious signals short-circuit even when three legitimacy signals hold."""
    attrs = ProfileAttributes(
        name="Test User",
        title="Senior Manager",
        profile_age_days=5,
        connection_count=800,
        profile_location="Denver",
        company_location="Denver, CO",
    )
    kinds = [s.kind for s in aggregate_signals(attrs)]
    assert kinds.count(SignalKind.MANY_CONNECTIONS) == 1
    assert SignalKind.LOCATION_CONSISTENT in kinds
    assert SignalKind.PROFESSIONAL_TEXT in kinds

    verdict = classify_profile(attrs, DetectorSettings())
    assert verdict.label is VerdictLabel.SUSPICIOUS
    assert verdict.reasons == ("Profile created 5 days ago", "Suspicious profile patterns detected")


def test_reasons_never_mix_families(suspicious_profile, verified_profile, empty_profile, test_mode_profile):
    """A verdict only ever carries reasons from the family that decided it."""
    suspicious_reasons = set()
    verified_reasons = set()
    for attrs in (suspicious_profile, verified_profile, empty_profile, test_mode_profile):
        for s in aggregate_signals(attrs):
            (suspicious_reasons if s.kind.is_suspicious else verified_reasons).add(s.reason)
        for sensitivity in Sensitivity:
            verdict = classify_profile(attrs, DetectorSettings(sensitivity=sensitivity))
            assert verdict.label in VerdictLabel
            if verdict.is_suspicious:
                assert set(verdict.reasons) <= suspicious_reasons
            elif verdict.is_verified:
                assert set(verdict.reasons) <= verified_reasons
            else:
                assert verdict.reasons == ()


def test_classify_signals_directly():
    young = Signal(SignalKind.AGE_TOO_YOUNG, "young")
    few = Signal(SignalKind.FEW_CONNECTIONS, "few")
    old = Signal(SignalKind.AGE_VERY_OLD, "old")
    assert classify_signals([]).label is VerdictLabel.UNDETERMINED
    assert classify_signals([young]).label is VerdictLabel.UNDETERMINED
    assert classify_signals([young, old, few]) == Verdict(VerdictLabel.SUSPICIOUS, ("young", "few"))


def test_classify_signals_without_suspicious_rule():
    young = Signal(SignalKind.AGE_TOO_YOUNG, "young")
    few = Signal(SignalKind.FEW_CONNECTIONS, "few")
    assert classify_signals([young, few], allow_suspicious=False).label is VerdictLabel.UNDETERMINED


@pytest.mark.parametrize(
    ("sensitivity", "expected"),
    [
        (Sensitivity.LOW, VerdictLabel.UNDETERMINED),
        (Sensitivity.MEDIUM, VerdictLabel.SUSPICIOUS),
        (Sensitivity.HIGH, VerdictLabel.SUSPICIOUS),
    ],
)
def test_sensitivity_two_suspicious_signals(sensitivity, expected):
    attrs = _two_suspicious_profile()
    assert classify_profile(attrs, DetectorSettings(sensitivity=sensitivity)).label is expected


def test_low_sensitivity_still_flags_three_signals(suspicious_profile):
    verdict = classify_profile(suspicious_profile, DetectorSettings(sensitivity=Sensitivity.LOW))
    assert verdict.label is VerdictLabel.SUSPICIOUS


def test_high_sensitivity_single_signal(empty_profile):
    verdict = classify_profile(empty_profile, DetectorSettings(sensitivity=Sensitivity.HIGH))
    assert verdict.label is VerdictLabel.SUSPICIOUS
    assert verdict.reasons == ("Suspicious profile patterns detected",)


def test_high_sensitivity_verifies_with_two_signals(test_mode_profile):
    """Boston/Boston + Product Manager: two legitimacy signals."""
    assert classify_profile(test_mode_profile, DetectorSettings()).label is VerdictLabel.UNDETERMINED
    verdict = classify_profile(test_mode_profile, DetectorSettings(sensitivity=Sensitivity.HIGH))
    assert verdict.label is VerdictLabel.VERIFIED
    assert verdict.reasons == ("Location consistency: Boston", "Professional indicators in title or description")


def test_low_sensitivity_needs_all_four_verified_signals(verified_profile):
    assert classify_profile(verified_profile, DetectorSettings(sensitivity="low")).label is VerdictLabel.VERIFIED
    three = verified_profile.model_copy(update={"connection_count": 100})
    assert classify_profile(three, DetectorSettings(sensitivity="low")).label is VerdictLabel.UNDETERMINED
    assert classify_profile(three, DetectorSettings()).label is VerdictLabel.VERIFIED


def test_test_mode_flags_names_starting_with_a(test_mode_profile):
    verdict = classify_profile(test_mode_profile, DetectorSettings(test_mode=True))
    assert verdict.label is VerdictLabel.SUSPICIOUS
    assert verdict.reasons == (TEST_MODE_REASON,)
    assert verdict.test_mode is True


def test_test_mode_overrides_verified_signals(verified_profile):
    andrew = verified_profile.model_copy(update={"name": "  andrew Wilson"})
    assert classify_profile(andrew, DetectorSettings(test_mode=True)).test_mode is True


def test_test_mode_falls_through_for_other_names(verified_profile):
    ben = verified_profile.model_copy(update={"name": "Ben Wilson"})
    verdict = classify_profile(ben, DetectorSettings(test_mode=True))
    assert verdict.label is VerdictLabel.VERIFIED
    assert verdict.test_mode is False


def test_test_mode_off_ignores_name(test_mode_profile):
    assert classify_profile(test_mode_profile, DetectorSettings()).test_mode is False


def test_is_test_mode_profile():
    assert is_test_mode_profile(ProfileAttributes(name="Andrew Wilson"))
    assert is_test_mode_profile(ProfileAttributes(name=" alice"))
    assert not is_test_mode_profile(ProfileAttributes(name="Ben Wilson"))
    assert not is_test_mode_profile(ProfileAttributes())


def test_fake_company_name_does_not_tip_the_verdict():
    attrs = ProfileAttributes(
        name="Maria Garcia",
        title="Marketing Director",
        profile_age_days=5,
        company_name="Demo Corp",
    )
    assert classify_profile(attrs, DetectorSettings()) == Verdict(VerdictLabel.UNDETERMINED)


def test_whitelisted_profile_is_never_suspicious(suspicious_profile):
    settings = DetectorSettings(whitelist=("  jordan   MILLER ",))
    verdict = classify_profile(suspicious_profile, settings)
    assert verdict.label is VerdictLabel.UNDETERMINED


def test_whitelisted_profile_can_still_be_verified(verified_profile):
    settings = DetectorSettings(whitelist=("Sarah Johnson",))
    assert classify_profile(verified_profile, settings).label is VerdictLabel.VERIFIED


def test_disabled_detector_is_undetermined(suspicious_profile):
    settings = DetectorSettings(enabled=False, test_mode=True)
    assert classify_profile(suspicious_profile, settings) == Verdict(VerdictLabel.UNDETERMINED)


def test_custom_patterns_from_settings():
    attrs = _two_suspicious_profile(profile_age_days=400, title="Crypto Guru")
    plain = classify_profile(attrs, DetectorSettings())
    custom = classify_profile(attrs, DetectorSettings(custom_patterns=(r"crypto\s+guru",)))
    assert plain.label is VerdictLabel.UNDETERMINED
    assert custom.label is VerdictLabel.SUSPICIOUS
    assert custom.reasons == ("Only 3 connections", "Suspicious profile patterns detected")


def test_explicit_catalog_gets_custom_patterns():
    attrs = _two_suspicious_profile(profile_age_days=400, title="Crypto Guru")
    settings = DetectorSettings(custom_patterns=(r"crypto\s+guru",))
    verdict = classify_profile(attrs, settings, catalog=DEFAULT_CATALOG)
    assert verdict.label is VerdictLabel.SUSPICIOUS


def test_injected_observer_receives_events(suspicious_profile):
    observer = MagicMock()
    classify_profile(suspicious_profile, DetectorSettings(), observer=observer)
    observer.debug.assert_called_once()
    args, kwargs = observer.debug.call_args
    assert args == ("profile_classified",)
    assert kwargs["label"] == "suspicious"
    assert kwargs["reasons"] == list(SUSPICIOUS_REASONS)


def test_suspicious_indicators(suspicious_profile, verified_profile):
    """Indicator list ignores thresholds and the verified family."""
    assert suspicious_indicators(suspicious_profile) == list(SUSPICIOUS_REASONS)
    assert suspicious_indicators(verified_profile) == []
    assert suspicious_indicators(_two_suspicious_profile()) == ["Profile created 5 days ago", "Only 3 connections"]


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("HIGH", Sensitivity.HIGH),
        (" low ", Sensitivity.LOW),
        (Sensitivity.MEDIUM, Sensitivity.MEDIUM),
        ("extreme", Sensitivity.MEDIUM),
        (None, Sensitivity.MEDIUM),
    ],
)
def test_sensitivity_parse(raw, expected):
    assert Sensitivity.parse(raw) is expected


def test_threshold_table():
    assert SENSITIVITY_THRESHOLDS[Sensitivity.MEDIUM] == ClassifierThresholds(2, 3)
    assert ClassifierThresholds.for_sensitivity("low") == ClassifierThresholds(3, 4)
    assert ClassifierThresholds.for_sensitivity("high") == ClassifierThresholds(1, 2)


def test_thresholds_must_be_positive():
    with pytest.raises(ValueError):
        ClassifierThresholds(suspicious_min=0)
