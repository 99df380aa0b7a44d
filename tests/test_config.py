"""
Tests for configuration loading and the provider catalog.
"""

from ascii_studio.integrations.llm import build_provider_specs, configured_providers
from ascii_studio.utils import config as app_config


def test_testing_config_has_no_provider_keys():
    config = app_config.get_config('testing')

    assert config.TESTING is True
    assert config.LOG_LEVEL == 'CRITICAL'
    assert config.RETRY_BACKOFF_SECONDS == 0.0
    assert configured_providers(build_provider_specs(config)) == ()


def test_temperature_is_clamped():
    assert app_config.TestingConfig(GENERATION_TEMPERATURE=0.1).generation_temperature == 0.3
    assert app_config.TestingConfig(GENERATION_TEMPERATURE=0.9).generation_temperature == 0.8
    assert app_config.TestingConfig(GENERATION_TEMPERATURE=0.5).generation_temperature == 0.5


def test_provider_catalog_defaults():
    config = app_config.TestingConfig(
        ARK_API_KEY="ark-key",
        ARK_MODEL=None,
        ARK_BASE_URL=None,
        ARK_FALLBACK_MODEL=None,
        GEMINI_API_KEY="gemini-key",
        GEMINI_MODEL=None,
        GEMINI_FALLBACK_MODEL=None
    )

    ark, gemini, openai = build_provider_specs(config)

    assert ark.model_candidates == ("deepseek-v3-2-251201",)
    assert ark.base_url == "https://ark.cn-beijing.volces.com/api/v3"
    assert ark.timeout == 30
    assert ark.litellm_model("deepseek-v3-2-251201") == "openai/deepseek-v3-2-251201"
    assert gemini.model_candidates == ("gemini-2.5-flash", "gemini-2.0-flash-lite")
    assert not openai.is_configured
    assert [spec.name for spec in configured_providers((ark, gemini, openai))] == ["ark", "gemini"]


def test_duplicate_fallback_model_is_dropped():
    config = app_config.TestingConfig(
        OPENAI_API_KEY="k",
        OPENAI_MODEL="gpt-4o-mini",
        OPENAI_FALLBACK_MODEL="gpt-4o-mini"
    )
    openai = build_provider_specs(config)[2]
    assert openai.model_candidates == ("gpt-4o-mini",)


def test_api_key_hidden_from_repr():
    spec = build_provider_specs(app_config.TestingConfig(OPENAI_API_KEY="secret-value"))[2]
    assert "secret-value" not in repr(spec)


def test_validate_config_reports_missing_keys():
    problems = app_config.validate_config(app_config.TestingConfig(GENERATION_TEMPERATURE=2.0))

    assert any("API_KEY" in problem for problem in problems)
    assert any("GENERATION_TEMPERATURE" in problem for problem in problems)
