"""
Detector settings and their sources.

Responsibilities:
- Define DetectorSettings, the single settings object the classifier reads.
- Build it from environment variables / .env (get_settings) or from a
  settings payload stored by the caller (settings_from_mapping).
- Load the pattern catalog once and attach the custom patterns to it.

Malformed individual values fall back to defaults with a warning; a payload
that is not a mapping at all raises SettingsError.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from functools import lru_cache
from typing import Any, Mapping

from profile_classifier.analysis_engine.classifier import Sensitivity
from profile_classifier.analysis_engine.models import coerce_count
from profile_classifier.analysis_engine.patterns import (
    DEFAULT_CATALOG,
    PatternCatalog,
    compilable_patterns,
    load_catalog,
)
from profile_classifier.analysis_engine.signals import SignalConfig
from profile_classifier.config import env
from profile_classifier.core.exceptions import SettingsError
from profile_classifier.profile_logging import get_logger

logger = get_logger(__name__)


def _normalize_name(name: str) -> str:
    return " ".join(name.split()).lower()


@dataclass(frozen=True)
class DetectorSettings:
    """
    Everything the classifier needs besides the profile itself.

    Immutable once built; share one instance across threads.
    """

    enabled: bool = True
    """When False, every profile is UNDETERMINED and nothing is computed."""
    sensitivity: Sensitivity = Sensitivity.MEDIUM
    test_mode: bool = False
    """Flag any name starting with 'a' instead of running the classifier."""
    custom_patterns: tuple[str, ...] = ()
    """Extra suspicious regexes matched against name/title/description."""
    whitelist: tuple[str, ...] = ()
    """Display names never labelled SUSPICIOUS (trimmed, case-insensitive)."""
    signal_config: SignalConfig = field(default_factory=SignalConfig)
    catalog: PatternCatalog = DEFAULT_CATALOG
    _effective_catalog: PatternCatalog = field(init=False, repr=False, compare=False, default=DEFAULT_CATALOG)
    _whitelist_keys: frozenset[str] = field(init=False, repr=False, compare=False, default=frozenset())

    def __post_init__(self) -> None:
        object.__setattr__(self, "sensitivity", Sensitivity.parse(self.sensitivity))
        object.__setattr__(self, "custom_patterns", compilable_patterns(self.custom_patterns))
        object.__setattr__(self, "whitelist", tuple(n for n in self.whitelist if n and n.strip()))
        object.__setattr__(
            self,
            "_effective_catalog",
            self.catalog.with_custom_patterns(self.custom_patterns),
        )
        object.__setattr__(
            self,
            "_whitelist_keys",
            frozenset(_normalize_name(n) for n in self.whitelist),
        )

    @property
    def effective_catalog(self) -> PatternCatalog:
        """Catalog with the custom patterns appended."""
        return self._effective_catalog

    def is_whitelisted(self, name: str) -> bool:
        return bool(name) and _normalize_name(name) in self._whitelist_keys

    def to_dict(self) -> dict[str, Any]:
        return {
            "enabled": self.enabled,
            "sensitivity": self.sensitivity.value,
            "test_mode": self.test_mode,
            "custom_patterns": list(self.custom_patterns),
            "whitelist": list(self.whitelist),
            "many_connections": self.signal_config.many_connections,
            "catalog_source": self.catalog.source,
        }


def _many_connections(raw: Any, default: int) -> int:
    value = coerce_count(raw)
    if value is None or value < 1:
        logger.warning("many_connections_invalid", value=raw, fallback=default)
        return default
    return int(value)


def get_catalog() -> PatternCatalog:
    """Built-in catalog, or the PROFILE_CATALOG_PATH override when set."""
    path = env.get_catalog_path()
    if path is None:
        return DEFAULT_CATALOG
    return load_catalog(path)


@lru_cache(maxsize=1)
def get_settings() -> DetectorSettings:
    """
    Return detector settings from the environment, loaded once per process.

    Call get_settings.cache_clear() to pick up environment changes.
    """
    signal_config = SignalConfig()
    many_raw = env.get_many_connections_raw()
    if many_raw is not None:
        signal_config = replace(
            signal_config,
            many_connections=_many_connections(many_raw, signal_config.many_connections),
        )
    settings = DetectorSettings(
        enabled=env.is_detector_enabled(),
        sensitivity=Sensitivity.parse(env.get_sensitivity_name()),
        test_mode=env.is_test_mode(),
        custom_patterns=tuple(env.get_custom_patterns()),
        whitelist=tuple(env.get_whitelist()),
        signal_config=signal_config,
        catalog=get_catalog(),
    )
    logger.info("settings_loaded", **settings.to_dict())
    return settings


def _as_bool(raw: Any, default: bool) -> bool:
    if isinstance(raw, bool):
        return raw
    if raw is None:
        return default
    return env.parse_flag(str(raw), default)


def _as_str_list(raw: Any, separator: str = ",") -> tuple[str, ...]:
    if raw is None:
        return ()
    if isinstance(raw, str):
        return tuple(p.strip() for p in raw.split(separator) if p.strip())
    if isinstance(raw, (list, tuple)):
        return tuple(str(p).strip() for p in raw if p is not None and str(p).strip())
    logger.warning("settings_list_invalid", value=repr(raw))
    return ()


def _first(payload: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in payload:
            return payload[key]
    return None


def settings_from_mapping(
    payload: Mapping[str, Any],
    *,
    catalog: PatternCatalog | None = None,
) -> DetectorSettings:
    """
    Build settings from a stored settings payload.

    Accepts the extension's keys (enabled, detectionSensitivity, testMode,
    customPatterns, whitelist) and their snake_case equivalents, plus
    many_connections / manyConnections. Missing keys keep the defaults.
    """
    if not isinstance(payload, Mapping):
        raise SettingsError(f"Settings payload must be a mapping, got {type(payload).__name__}")

    defaults = DetectorSettings()
    signal_config = defaults.signal_config
    many_raw = _first(payload, "many_connections", "manyConnections")
    if many_raw is not None:
        signal_config = replace(
            signal_config,
            many_connections=_many_connections(many_raw, signal_config.many_connections),
        )

    return DetectorSettings(
        enabled=_as_bool(_first(payload, "enabled"), defaults.enabled),
        sensitivity=Sensitivity.parse(_first(payload, "detectionSensitivity", "sensitivity")),
        test_mode=_as_bool(_first(payload, "testMode", "test_mode"), defaults.test_mode),
        custom_patterns=_as_str_list(
            _first(payload, "customPatterns", "custom_patterns"),
            separator=env.CUSTOM_PATTERN_SEPARATOR,
        ),
        whitelist=_as_str_list(_first(payload, "whitelist")),
        signal_config=signal_config,
        catalog=catalog or DEFAULT_CATALOG,
    )
