"""Unit tests for settings and tagged provider configs."""

import pytest
from pydantic import SecretStr, ValidationError

from backend.travelgpt.config import Settings
from backend.travelgpt.llm.providers import (
    AnthropicConfig,
    OpenAIConfig,
    StubConfig,
    parse_provider_config,
)


def _settings(**overrides: object) -> Settings:
    return Settings(_env_file=None, **overrides)


class TestSettingsLLMConfig:
    """Test Settings.llm_config provider selection."""

    def test_openai_with_key(self) -> None:
        """Test that an OpenAI key selects the OpenAI config with settings values."""
        config = _settings(
            llm_provider="openai", openai_api_key="sk-test", openai_model="gpt-4o-mini",
            llm_temperature=0.2,
        ).llm_config()

        assert isinstance(config, OpenAIConfig)
        assert config.provider == "openai"
        assert config.model == "gpt-4o-mini"
        assert config.temperature == 0.2
        assert config.api_key.get_secret_value() == "sk-test"

    def test_anthropic_with_key(self) -> None:
        """Test that the Anthropic provider uses its own key and model."""
        config = _settings(llm_provider="anthropic", anthropic_api_key="sk-ant").llm_config()

        assert isinstance(config, AnthropicConfig)
        assert config.model == "claude-3-5-sonnet-latest"

    def test_missing_key_falls_back_to_stub(self) -> None:
        """Test that a provider without a key gives the stub config."""
        assert isinstance(
            _settings(llm_provider="openai", openai_api_key=None).llm_config(), StubConfig
        )
        assert isinstance(
            _settings(
                llm_provider="anthropic", openai_api_key="sk-test", anthropic_api_key=None
            ).llm_config(),
            StubConfig,
        )

    def test_stub_provider(self) -> None:
        """Test that the stub provider ignores configured keys."""
        config = _settings(llm_provider="stub", openai_api_key="sk-test").llm_config()

        assert isinstance(config, StubConfig)

    def test_settings_values_validated_by_provider_config(self) -> None:
        """Test that llm_config applies the provider config's own validation."""
        with pytest.raises(ValidationError, match="api_key must not be empty"):
            _settings(llm_provider="openai", openai_api_key="   ").llm_config()
        with pytest.raises(ValidationError):
            _settings(
                llm_provider="anthropic", anthropic_api_key="sk-ant", llm_temperature=3.0
            ).llm_config()

    def test_unknown_provider_rejected(self) -> None:
        """Test that llm_provider is a closed set."""
        with pytest.raises(ValidationError):
            _settings(llm_provider="mistral")

    def test_api_key_not_in_repr(self) -> None:
        """Test that keys are kept secret."""
        settings = _settings(openai_api_key="sk-very-secret")

        assert "sk-very-secret" not in repr(settings)


class TestProviderConfigs:
    """Test validation of the tagged provider variants."""

    def test_parse_by_tag(self) -> None:
        """Test that the provider field selects the variant."""
        assert isinstance(parse_provider_config({"provider": "stub"}), StubConfig)
        config = parse_provider_config({"provider": "anthropic", "api_key": "k"})
        assert isinstance(config, AnthropicConfig)
        assert config.max_tokens == 4000

    def test_unknown_tag_rejected(self) -> None:
        """Test that unknown providers fail validation."""
        with pytest.raises(ValidationError):
            parse_provider_config({"provider": "mistral", "api_key": "k"})

    def test_blank_key_rejected(self) -> None:
        """Test that empty keys are rejected at construction."""
        with pytest.raises(ValidationError, match="api_key must not be empty"):
            OpenAIConfig(api_key=SecretStr("   "))

    def test_temperature_range(self) -> None:
        """Test that temperature is bounded."""
        with pytest.raises(ValidationError):
            OpenAIConfig(api_key=SecretStr("k"), temperature=3.0)

    def test_timeout_must_be_positive(self) -> None:
        """Test that a zero timeout is rejected."""
        with pytest.raises(ValidationError):
            AnthropicConfig(api_key=SecretStr("k"), timeout_s=0)
