"""Tests for runtime configuration."""

import pytest

from speaker_resolver.config import Settings, get_settings, reload_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    """Reset the cached settings around each test."""
    reload_settings()
    yield
    reload_settings()


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self, monkeypatch):
        for name in (
            "SPEAKER_RESOLVER_TIMELINE_TOLERANCE_MS",
            "SPEAKER_RESOLVER_MIN_TIMELINE_VOTES",
            "SPEAKER_RESOLVER_HIGH_CONFIDENCE_VOTES",
            "SPEAKER_RESOLVER_INCLUDE_ORGANIZER",
        ):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.timeline_tolerance_ms == 2000
        assert settings.min_timeline_votes == 2
        assert settings.high_confidence_votes == 5
        assert settings.include_organizer is True

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("SPEAKER_RESOLVER_TIMELINE_TOLERANCE_MS", "500")
        monkeypatch.setenv("SPEAKER_RESOLVER_INCLUDE_ORGANIZER", "false")

        settings = reload_settings()

        assert settings.timeline_tolerance_ms == 500
        assert settings.include_organizer is False
        assert get_settings() is settings

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_rejects_negative_tolerance(self):
        with pytest.raises(ValueError):
            Settings(timeline_tolerance_ms=-1)
