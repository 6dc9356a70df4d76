"""
Application-level exceptions.

Only configuration loading raises these. Classification itself never raises
for a validated ProfileAttributes record: unknown inputs simply contribute no
signal.
"""

from __future__ import annotations


class ProfileClassifierError(Exception):
    """Base class for all profile classifier errors."""


class CatalogError(ProfileClassifierError):
    """Pattern catalog override could not be compiled (bad regex, wrong shape)."""

    def __init__(self, message: str, *, source: str | None = None) -> None:
        super().__init__(message)
        self.source = source


class SettingsError(ProfileClassifierError):
    """Settings payload is not a mapping or cannot be interpreted at all."""
