"""Typed settings configuration - single source of truth."""

from functools import lru_cache
from typing import Literal

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from backend.travelgpt.llm.providers import ProviderConfig, parse_provider_config


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite+aiosqlite:///./travelgpt.db"

    # LLM provider
    llm_provider: Literal["stub", "openai", "anthropic"] = "openai"
    openai_api_key: SecretStr | None = None
    openai_model: str = "gpt-4o"
    anthropic_api_key: SecretStr | None = None
    anthropic_model: str = "claude-3-5-sonnet-latest"
    llm_temperature: float = 0.7
    llm_timeout_s: float = 60.0

    # Single seed user (no auth)
    seed_user_id: str = "omar-unique-id"
    seed_user_name: str = "Omar"
    welcome_message: str = "Welcome to the Travel Agent! Tell me about your travel plans."

    # Run Base.metadata.create_all on startup (use alembic for real databases)
    auto_create_tables: bool = True

    # Calendar
    calendar_split_overnight: bool = True

    # UI
    backend_url: str = "http://localhost:8000"

    def llm_config(self) -> ProviderConfig:
        """Tagged provider config; falls back to the stub when the chosen key is missing."""
        credentials = {
            "openai": (self.openai_api_key, self.openai_model),
            "anthropic": (self.anthropic_api_key, self.anthropic_model),
        }
        api_key, model = credentials.get(self.llm_provider, (None, None))
        if not api_key:
            return parse_provider_config({"provider": "stub"})
        return parse_provider_config(
            {
                "provider": self.llm_provider,
                "api_key": api_key,
                "model": model,
                "temperature": self.llm_temperature,
                "timeout_s": self.llm_timeout_s,
            }
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
