"""
Core utilities: shared exceptions and cross-cutting concerns.

Used by the configuration layer and the analysis engine.
"""

from profile_classifier.core.exceptions import (
    CatalogError,
    ProfileClassifierError,
    SettingsError,
)

__all__ = ["CatalogError", "ProfileClassifierError", "SettingsError"]
