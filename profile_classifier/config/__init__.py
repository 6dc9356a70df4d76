"""
Configuration management for the profile classifier.

Loads detector settings (enabled switch, sensitivity, test mode, custom
patterns, whitelist, thresholds, catalog override) from environment
variables and .env, or from a settings payload handed over by the caller.
"""

from profile_classifier.config.settings import (  # noqa: F401
    DetectorSettings,
    get_settings,
    settings_from_mapping,
)

__all__ = ["DetectorSettings", "get_settings", "settings_from_mapping"]
