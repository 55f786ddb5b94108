"""Per-provider LLM configuration, one tagged variant per provider."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field, SecretStr, TypeAdapter, field_validator


class StubConfig(BaseModel):
    """Deterministic offline client, used when no API key is configured."""

    provider: Literal["stub"] = "stub"


class _HostedConfig(BaseModel):
    api_key: SecretStr
    model: str = Field(..., min_length=1)
    temperature: float = Field(0.7, ge=0.0, le=2.0)
    timeout_s: float = Field(60.0, gt=0)
    max_tokens: int = Field(4000, gt=0)

    @field_validator("api_key")
    @classmethod
    def validate_key_not_blank(cls, v: SecretStr) -> SecretStr:
        """Reject empty or whitespace-only keys."""
        if not v.get_secret_value().strip():
            raise ValueError("api_key must not be empty")
        return v


class OpenAIConfig(_HostedConfig):
    """OpenAI chat completions."""

    provider: Literal["openai"] = "openai"
    model: str = Field("gpt-4o", min_length=1)


class AnthropicConfig(_HostedConfig):
    """Anthropic messages API."""

    provider: Literal["anthropic"] = "anthropic"
    model: str = Field("claude-3-5-sonnet-latest", min_length=1)


ProviderConfig = Annotated[
    StubConfig | OpenAIConfig | AnthropicConfig, Field(discriminator="provider")
]

provider_config_adapter: TypeAdapter[ProviderConfig] = TypeAdapter(ProviderConfig)


def parse_provider_config(data: dict[str, object]) -> ProviderConfig:
    """Validate a raw mapping into the matching provider config."""
    return provider_config_adapter.validate_python(data)
