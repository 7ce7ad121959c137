import re

import pytest

from src import settings as settings_module
from src.settings import Settings, combine_regex_patterns, get_cors_settings

ENV_VARS = (
    "CORS_ALLOW_ORIGINS",
    "CORS_ALLOW_ORIGIN_REGEXES",
    "PORT",
    "LOG_LEVEL",
    "LOG_FORMAT",
    "RATE_LIMIT_PER_MINUTE",
    "MONGODB_URI",
    "MONGODB_DB",
    "MONGODB_TIMEOUT_MS",
    "SEED_REFERENCE_DATA",
)


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    """Ensure each test starts without configuration environment variables."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults_include_localhost_and_vercel():
    explicit, regex = get_cors_settings()

    assert "http://localhost" in explicit
    assert settings_module.DEFAULT_REGEX_ORIGINS[0] in regex


def test_blank_regex_env_falls_back_to_default(monkeypatch):
    monkeypatch.setenv("CORS_ALLOW_ORIGIN_REGEXES", "   ")

    _, regex = get_cors_settings()

    assert regex == list(settings_module.DEFAULT_REGEX_ORIGINS)


def test_custom_cors_values_override_defaults(monkeypatch):
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "https://example.com, https://api.example.com")
    monkeypatch.setenv("CORS_ALLOW_ORIGIN_REGEXES", "https://(.+\\.)?example\\.com, *")

    explicit, regex = get_cors_settings()

    assert explicit == ["https://example.com", "https://api.example.com"]
    assert regex == ["https://(.+\\.)?example\\.com"]


def test_combine_regex_patterns():
    combined = combine_regex_patterns([r"https://a\.com", r"https://(.+\.)?b\.dev"])

    assert combine_regex_patterns([]) is None
    assert re.fullmatch(combined, "https://a.com")
    assert re.fullmatch(combined, "https://preview.b.dev")
    assert not re.fullmatch(combined, "https://c.com")


def test_settings_defaults():
    settings = Settings.from_env()

    assert settings.port == 8000
    assert settings.log_format == "json"
    assert settings.rate_limit_per_minute == 120
    assert settings.mongodb_uri is None
    assert settings.use_mongodb is False
    assert settings.mongodb_db == "airline-analyzer"
    assert settings.seed_reference_data is True


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("PORT", "9001")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("LOG_FORMAT", "TEXT")
    monkeypatch.setenv("RATE_LIMIT_PER_MINUTE", "30")
    monkeypatch.setenv("MONGODB_URI", "mongodb://localhost:27017")
    monkeypatch.setenv("MONGODB_DB", "routes-test")
    monkeypatch.setenv("MONGODB_TIMEOUT_MS", "750")
    monkeypatch.setenv("SEED_REFERENCE_DATA", "no")

    settings = Settings.from_env()

    assert settings.port == 9001
    assert settings.log_level == "DEBUG"
    assert settings.log_format == "text"
    assert settings.rate_limit_per_minute == 30
    assert settings.use_mongodb is True
    assert settings.mongodb_db == "routes-test"
    assert settings.mongodb_timeout_ms == 750
    assert settings.seed_reference_data is False


@pytest.mark.parametrize("raw", ["abc", "0", "-5"])
def test_invalid_integers_fall_back(monkeypatch, raw):
    monkeypatch.setenv("RATE_LIMIT_PER_MINUTE", raw)

    assert Settings.from_env().rate_limit_per_minute == 120


def test_unknown_log_format_defaults_to_json(monkeypatch):
    monkeypatch.setenv("LOG_FORMAT", "xml")

    assert Settings.from_env().log_format == "json"
