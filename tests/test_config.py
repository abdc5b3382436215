import pytest
from pydantic import ValidationError

from clearspeak.core.config import Settings


def test_provider_order_is_cleaned():
    settings = Settings(providers=" Gemini, openai,gemini,, mistral ")
    assert settings.providers == ("gemini", "openai")


def test_empty_provider_order_is_allowed():
    assert Settings(providers="").providers == ()


def test_provider_order_from_environment(monkeypatch):
    monkeypatch.setenv("CLEARSPEAK_PROVIDERS", "anthropic,openai")
    monkeypatch.setenv("CLEARSPEAK_TIMEOUT_MS", "2500")

    settings = Settings()

    assert settings.providers == ("anthropic", "openai")
    assert settings.timeout_ms == 2500


def test_generation_defaults(monkeypatch):
    for var in ("CLEARSPEAK_ANTHROPIC_MODEL", "CLEARSPEAK_ANTHROPIC_MAX_TOKENS", "CLEARSPEAK_ANTHROPIC_TEMPERATURE"):
        monkeypatch.delenv(var, raising=False)

    params = Settings().generation_params("anthropic")

    assert params.model == "claude-3-5-sonnet-20240620"
    assert params.max_tokens == 400
    assert params.temperature == 0.3


def test_generation_params_unknown_provider():
    with pytest.raises(ValueError):
        Settings().generation_params("mistral")


def test_api_key_lookup():
    settings = Settings(gemini_api_key="g-key", openai_api_key="")
    assert settings.api_key_for("gemini") == "g-key"
    assert settings.api_key_for("openai") is None
    assert settings.api_key_for("mistral") is None


def test_timeout_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(timeout_ms=0)


def test_settings_are_frozen():
    settings = Settings()
    with pytest.raises(ValidationError):
        settings.timeout_ms = 1


def test_allowed_origins_include_frontend():
    settings = Settings(cors_origins="http://a.test", frontend_origin="https://app.test")
    assert settings.allowed_origins == ["http://a.test", "https://app.test"]
