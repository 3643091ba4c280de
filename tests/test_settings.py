"""Tests for environment-driven settings."""

import pytest

from tufan.infra.settings import (
    DEFAULT_CURRENCY_SYMBOL,
    ResortSettings,
    SettingsError,
    load_settings,
)


class TestLoadSettings:
    def test_defaults(self):
        settings = load_settings()

        assert settings == ResortSettings()
        assert settings.timezone is None
        assert settings.tzinfo is None
        assert settings.currency_symbol == DEFAULT_CURRENCY_SYMBOL
        assert settings.number_grouping == "south_asian"

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("TUFAN_TIMEZONE", "Asia/Dhaka")
        monkeypatch.setenv("TUFAN_CURRENCY_SYMBOL", "Tk ")
        monkeypatch.setenv("TUFAN_NUMBER_GROUPING", "Western")

        settings = load_settings()

        assert settings.timezone == "Asia/Dhaka"
        assert str(settings.tzinfo) == "Asia/Dhaka"
        assert settings.currency_symbol == "Tk "
        assert settings.number_grouping == "western"

    def test_blank_timezone_means_machine_local(self, monkeypatch):
        monkeypatch.setenv("TUFAN_TIMEZONE", "   ")

        assert load_settings().timezone is None

    def test_unknown_timezone_raises(self, monkeypatch):
        monkeypatch.setenv("TUFAN_TIMEZONE", "Mars/Olympus_Mons")

        with pytest.raises(SettingsError, match="TUFAN_TIMEZONE"):
            load_settings()

    def test_unknown_grouping_raises(self, monkeypatch):
        monkeypatch.setenv("TUFAN_NUMBER_GROUPING", "chinese")

        with pytest.raises(SettingsError, match="TUFAN_NUMBER_GROUPING"):
            load_settings()

    def test_settings_error_is_value_error(self):
        assert issubclass(SettingsError, ValueError)

    def test_cached_until_cleared(self, monkeypatch):
        first = load_settings()
        monkeypatch.setenv("TUFAN_CURRENCY_SYMBOL", "$")

        assert load_settings() is first

        load_settings.cache_clear()
        assert load_settings().currency_symbol == "$"
