"""Tests for environment configuration."""

from __future__ import annotations

import logging

import pytest

from themejson.core.environment import (
    THEMEJSON_DEBUG_VAR,
    THEMEJSON_ENV_VAR,
    ThemeJSONEnv,
    get_environment_info,
    get_themejson_env,
    is_debug,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv(THEMEJSON_ENV_VAR, raising=False)
    monkeypatch.delenv(THEMEJSON_DEBUG_VAR, raising=False)


class TestGetThemeJSONEnv:
    def test_default_is_development(self):
        assert get_themejson_env() == ThemeJSONEnv.DEVELOPMENT

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("production", ThemeJSONEnv.PRODUCTION),
            ("prod", ThemeJSONEnv.PRODUCTION),
            ("TEST", ThemeJSONEnv.TEST),
            ("testing", ThemeJSONEnv.TEST),
            ("dev", ThemeJSONEnv.DEVELOPMENT),
            (" development ", ThemeJSONEnv.DEVELOPMENT),
        ],
    )
    def test_aliases(self, monkeypatch, value, expected):
        monkeypatch.setenv(THEMEJSON_ENV_VAR, value)
        assert get_themejson_env() == expected

    def test_unknown_value_warns(self, monkeypatch, caplog):
        monkeypatch.setenv(THEMEJSON_ENV_VAR, "staging")
        with caplog.at_level(logging.WARNING, logger="themejson.core.environment"):
            assert get_themejson_env() == ThemeJSONEnv.DEVELOPMENT
        assert "staging" in caplog.text


class TestIsDebug:
    def test_default_false(self):
        assert is_debug() is False

    @pytest.mark.parametrize("value", ["1", "true", "YES", "on"])
    def test_truthy(self, monkeypatch, value):
        monkeypatch.setenv(THEMEJSON_DEBUG_VAR, value)
        assert is_debug() is True

    @pytest.mark.parametrize("value", ["0", "false", "no", "off", ""])
    def test_falsy(self, monkeypatch, value):
        monkeypatch.setenv(THEMEJSON_DEBUG_VAR, value)
        assert is_debug() is False

    def test_override_wins(self, monkeypatch):
        monkeypatch.setenv(THEMEJSON_DEBUG_VAR, "1")
        assert is_debug(False) is False
        monkeypatch.setenv(THEMEJSON_DEBUG_VAR, "0")
        assert is_debug(True) is True

    def test_unknown_value_warns(self, monkeypatch, caplog):
        monkeypatch.setenv(THEMEJSON_DEBUG_VAR, "maybe")
        with caplog.at_level(logging.WARNING, logger="themejson.core.environment"):
            assert is_debug() is False
        assert "maybe" in caplog.text


def test_environment_info(monkeypatch):
    monkeypatch.setenv(THEMEJSON_ENV_VAR, "production")
    monkeypatch.setenv(THEMEJSON_DEBUG_VAR, "true")
    assert get_environment_info() == {"env": "production", "debug": True}
