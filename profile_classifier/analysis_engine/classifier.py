"""
Profile classification: threshold rules over aggregated signals.

Rules, first applicable wins:
  1. at least `suspicious_min` suspicious-family signals -> SUSPICIOUS
  2. at least `verified_min` legitimacy-family signals   -> VERIFIED
  3. otherwise                                           -> UNDETERMINED

Rule 1 short-circuits, so a profile is never both. The two minimums come
from the sensitivity level (low / medium / high). classify_profile wraps the
whole pipeline: enabled switch, test-mode name override, whitelist, signal
aggregation, and the rules above. It always returns a Verdict.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Iterable

from profile_classifier.analysis_engine.models import (
    UNDETERMINED,
    ProfileAttributes,
    Signal,
    Verdict,
    VerdictLabel,
)
from profile_classifier.analysis_engine.patterns import PatternCatalog
from profile_classifier.analysis_engine.signals import SignalConfig, aggregate_signals
from profile_classifier.profile_logging import Observer, get_logger, resolve_observer

if TYPE_CHECKING:
    from profile_classifier.config.settings import DetectorSettings

logger = get_logger(__name__)

TEST_MODE_REASON = "Test mode: name starts with 'A'"


class Sensitivity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def parse(cls, value: Any, default: Sensitivity | None = None) -> Sensitivity:
        """Case-insensitive lookup; unknown values fall back to default (medium)."""
        fallback = default or cls.MEDIUM
        if isinstance(value, cls):
            return value
        raw = str(value or "").strip().lower()
        for member in cls:
            if member.value == raw:
                return member
        if raw:
            logger.warning("sensitivity_unknown", value=raw, fallback=fallback.value)
        return fallback


@dataclass(frozen=True)
class ClassifierThresholds:
    """Minimum signal counts for each verdict."""

    suspicious_min: int = 2
    """SUSPICIOUS when this many suspicious-family signals hold."""
    verified_min: int = 3
    """VERIFIED when this many legitimacy-family signals hold."""

    def __post_init__(self) -> None:
        if self.suspicious_min < 1 or self.verified_min < 1:
            raise ValueError(
                f"Classifier thresholds must be >= 1, got "
                f"suspicious_min={self.suspicious_min} verified_min={self.verified_min}"
            )

    @classmethod
    def for_sensitivity(cls, sensitivity: Sensitivity | str) -> ClassifierThresholds:
        return SENSITIVITY_THRESHOLDS[Sensitivity.parse(sensitivity)]


# Higher sensitivity flags with fewer suspicious signals and verifies more easily
SENSITIVITY_THRESHOLDS = {
    Sensitivity.LOW: ClassifierThresholds(suspicious_min=3, verified_min=4),
    Sensitivity.MEDIUM: ClassifierThresholds(suspicious_min=2, verified_min=3),
    Sensitivity.HIGH: ClassifierThresholds(suspicious_min=1, verified_min=2),
}


def classify_signals(
    signals: Iterable[Signal],
    thresholds: ClassifierThresholds | None = None,
    *,
    allow_suspicious: bool = True,
) -> Verdict:
    """
    Apply the threshold rules to an ordered signal list.

    Reasons are those of the contributing signals only, in discovery order.
    allow_suspicious=False skips rule 1 (whitelisted profiles).
    """
    t = thresholds or SENSITIVITY_THRESHOLDS[Sensitivity.MEDIUM]
    signals = list(signals)

    suspicious = [s.reason for s in signals if s.kind.is_suspicious]
    if allow_suspicious and len(suspicious) >= t.suspicious_min:
        return Verdict(label=VerdictLabel.SUSPICIOUS, reasons=tuple(suspicious))

    verified = [s.reason for s in signals if s.kind.is_verified]
    if len(verified) >= t.verified_min:
        return Verdict(label=VerdictLabel.VERIFIED, reasons=tuple(verified))

    return UNDETERMINED


def is_test_mode_profile(attrs: ProfileAttributes) -> bool:
    """Test-mode rule: display name starts with 'a' (case-insensitive)."""
    return attrs.name.strip().lower().startswith("a")


def suspicious_indicators(
    attrs: ProfileAttributes,
    config: SignalConfig | None = None,
    catalog: PatternCatalog | None = None,
) -> list[str]:
    """Reasons of every suspicious-family signal, regardless of thresholds."""
    return [s.reason for s in aggregate_signals(attrs, config, catalog) if s.kind.is_suspicious]


def classify_profile(
    attrs: ProfileAttributes,
    settings: DetectorSettings | None = None,
    *,
    catalog: PatternCatalog | None = None,
    observer: Observer | None = None,
) -> Verdict:
    """
    Classify one profile under the given detector settings.

    Order: disabled detector -> UNDETERMINED; test-mode override (name starts
    with 'a') -> SUSPICIOUS; otherwise aggregate signals and apply the
    sensitivity thresholds, skipping the SUSPICIOUS rule for whitelisted
    names. catalog overrides the settings' catalog; custom patterns from the
    settings are applied on top of it. observer receives the classification
    events; the module logger is used when omitted.
    """
    if settings is None:
        from profile_classifier.config.settings import DetectorSettings

        settings = DetectorSettings()
    log = resolve_observer(observer, logger)

    if not settings.enabled:
        log.debug("profile_classification_skipped", profile_name=attrs.name, reason="detector_disabled")
        return UNDETERMINED

    if settings.test_mode and is_test_mode_profile(attrs):
        verdict = Verdict(
            label=VerdictLabel.SUSPICIOUS,
            reasons=(TEST_MODE_REASON,),
            test_mode=True,
        )
        log.debug("profile_classified", profile_name=attrs.name, label=verdict.label.value, test_mode=True)
        return verdict

    if catalog is not None:
        active_catalog = catalog.with_custom_patterns(settings.custom_patterns)
    else:
        active_catalog = settings.effective_catalog

    whitelisted = settings.is_whitelisted(attrs.name)
    signals = aggregate_signals(attrs, settings.signal_config, active_catalog)
    verdict = classify_signals(
        signals,
        ClassifierThresholds.for_sensitivity(settings.sensitivity),
        allow_suspicious=not whitelisted,
    )
    log.debug(
        "profile_classified",
        profile_name=attrs.name,
        label=verdict.label.value,
        reasons=list(verdict.reasons),
        signal_kinds=[s.kind.value for s in signals],
        sensitivity=settings.sensitivity.value,
        whitelisted=whitelisted,
    )
    return verdict
