"""
Pytest fixtures for profile classifier tests: fixed clock, scenario profiles,
and a clean PROFILE_* environment for every test.
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from profile_classifier.analysis_engine.models import ProfileAttributes

FIXED_NOW = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)

_PROFILE_ENV_VARS = (
    "PROFILE_DETECTOR_ENABLED",
    "PROFILE_SENSITIVITY",
    "PROFILE_TEST_MODE",
    "PROFILE_CUSTOM_PATTERNS",
    "PROFILE_WHITELIST",
    "PROFILE_MANY_CONNECTIONS",
    "PROFILE_CATALOG_PATH",
)


@pytest.fixture(autouse=True)
def clean_profile_env(monkeypatch):
    """Unset detector env vars and drop cached settings so tests don't leak config."""
    for name in _PROFILE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)

    from profile_classifier.config.settings import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def now():
    """Fixed reference instant for date parsing."""
    return FIXED_NOW


@pytest.fixture
def suspicious_profile():
    """New account, almost no connections, profile/company locations disagree."""
    return ProfileAttributes(
        name="Jordan Miller",
        title="Software Engineer",
        profile_age_days=5,
        connection_count=3,
        profile_location="New York",
        company_location="San Francisco",
        company_name="StartupCorp",
    )


@pytest.fixture
def verified_profile():
    """Old account, large network, consistent location, professional headline."""
    return ProfileAttributes(
        name="Sarah Johnson",
        title="Senior Software Engineer",
        profile_age_days=730,
        connection_count=750,
        profile_location="Seattle",
        company_location="Seattle",
        company_name="Microsoft",
    )


@pytest.fixture
def empty_profile():
    """Nothing could be extracted."""
    return ProfileAttributes()


@pytest.fixture
def test_mode_profile():
    """Name starting with 'A'; otherwise unremarkable."""
    return ProfileAttributes(
        name="Andrew Wilson",
        title="Product Manager",
        profile_age_days=365,
        connection_count=200,
        profile_location="Boston",
        company_location="Boston",
        company_name="Google",
    )
