"""LLM clients for the travel agent.

Security: API keys come from settings only, never hardcoded.
Without a key the deterministic stub client is used, which needs no network.
"""

import json
import logging
from datetime import date
from typing import Protocol

import anthropic
import openai
from anthropic import AsyncAnthropic
from openai import AsyncOpenAI

from backend.travelgpt.config import get_settings
from backend.travelgpt.llm.providers import (
    AnthropicConfig,
    OpenAIConfig,
    ProviderConfig,
    StubConfig,
)
from backend.travelgpt.schedule.samples import sample_schedule

logger = logging.getLogger(__name__)


class LLMError(RuntimeError):
    """Raised when a provider call fails or returns nothing usable."""


class LLMClient(Protocol):
    """Protocol for LLM client implementations."""

    async def complete(self, *, system_prompt: str, user_message: str) -> str:
        """Send one system + user exchange and return the raw reply text."""
        ...


class DeterministicStubClient:
    """Deterministic stub client for testing (no API key required)."""

    def __init__(self, today: date | None = None) -> None:
        self.today = today

    async def complete(self, *, system_prompt: str, user_message: str) -> str:
        """Return a fixed Paris/Rome plan as a well-formed agent reply."""
        today = self.today or date.today()
        plan = sample_schedule(today)
        reply = {
            "conversation": (
                "Here is a starting point: a night in Paris with a visit to the Eiffel Tower, "
                "then a morning flight to Rome for the Colosseum. "
                "Tell me what you would like to change."
            ),
            "travelDetails": {
                "destination": "Paris, Rome",
                "startDate": today.isoformat(),
                "endDate": plan[-1].final_datetime.date().isoformat(),
                "days": 2,
            },
            "plan": [activity.to_wire() for activity in plan],
        }
        return json.dumps(reply)


class OpenAIClient:
    """OpenAI-backed client."""

    def __init__(self, config: OpenAIConfig) -> None:
        self.config = config
        self.client = AsyncOpenAI(
            api_key=config.api_key.get_secret_value(), timeout=config.timeout_s
        )

    async def complete(self, *, system_prompt: str, user_message: str) -> str:
        try:
            response = await self.client.chat.completions.create(
                model=self.config.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_message},
                ],
                temperature=self.config.temperature,
                max_tokens=self.config.max_tokens,
                response_format={"type": "json_object"},
            )
        except openai.OpenAIError as e:
            logger.error(f"OpenAI API call failed: {e}")
            raise LLMError(f"OpenAI request failed: {e}") from e

        content = response.choices[0].message.content or ""
        if not content.strip():
            raise LLMError("OpenAI returned an empty response")
        return content


class AnthropicClient:
    """Anthropic-backed client."""

    def __init__(self, config: AnthropicConfig) -> None:
        self.config = config
        self.client = AsyncAnthropic(
            api_key=config.api_key.get_secret_value(), timeout=config.timeout_s
        )

    async def complete(self, *, system_prompt: str, user_message: str) -> str:
        try:
            response = await self.client.messages.create(
                model=self.config.model,
                system=system_prompt,
                messages=[{"role": "user", "content": user_message}],
                temperature=self.config.temperature,
                max_tokens=self.config.max_tokens,
            )
        except anthropic.AnthropicError as e:
            logger.error(f"Anthropic API call failed: {e}")
            raise LLMError(f"Anthropic request failed: {e}") from e

        content = "".join(block.text for block in response.content if block.type == "text")
        if not content.strip():
            raise LLMError("Anthropic returned an empty response")
        return content


def create_llm_client(config: ProviderConfig) -> LLMClient:
    """Build the client matching a provider config."""
    if isinstance(config, OpenAIConfig):
        logger.info(f"Using OpenAI client ({config.model})")
        return OpenAIClient(config)
    if isinstance(config, AnthropicConfig):
        logger.info(f"Using Anthropic client ({config.model})")
        return AnthropicClient(config)
    if isinstance(config, StubConfig):
        logger.warning("No LLM API key configured, using deterministic stub client")
        return DeterministicStubClient()
    raise TypeError(f"Unsupported provider config: {type(config).__name__}")


async def get_llm_client() -> LLMClient:
    """FastAPI dependency: client for the configured provider."""
    return create_llm_client(get_settings().llm_config())
