"""Travel agent - one LLM round trip per user message."""

from backend.travelgpt.llm.client import LLMClient
from backend.travelgpt.llm.prompts import build_system_prompt
from backend.travelgpt.llm.replies import parse_agent_reply
from backend.travelgpt.models.activity import AgentReply


class TravelAgent:
    """Turns conversation context into an AgentReply via an LLM client."""

    def __init__(self, client: LLMClient) -> None:
        self.client = client

    async def generate_travel_plan(self, context: str) -> AgentReply:
        """Ask the LLM for the next reply and normalize it.

        Args:
            context: User message combined with history (see build_context)

        Returns:
            Parsed reply with a canonical activity plan

        Raises:
            LLMError: If the provider call fails
            FormatError: If the reply cannot be parsed
        """
        raw = await self.client.complete(system_prompt=build_system_prompt(), user_message=context)
        return parse_agent_reply(raw)
