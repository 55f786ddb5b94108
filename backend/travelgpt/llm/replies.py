"""Parsing of raw agent replies into AgentReply objects."""

import json
import re

from pydantic import ValidationError

from backend.travelgpt.models.activity import AgentReply, TravelDetails
from backend.travelgpt.schedule.normalizer import (
    FormatError,
    normalize_records,
    summarize_validation_error,
)

_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


def strip_code_fences(raw: str) -> str:
    """Remove a surrounding Markdown code fence, if present."""
    text = raw.strip()
    match = _FENCE_RE.match(text)
    return match.group(1) if match else text


def parse_agent_reply(raw: str) -> AgentReply:
    """Decode an agent reply object and normalize its plan.

    Raises:
        FormatError: If the reply is not a JSON object with a string "conversation"
            or its plan fails normalization
    """
    try:
        data = json.loads(strip_code_fences(raw))
    except json.JSONDecodeError as e:
        raise FormatError(str(e)) from e

    if not isinstance(data, dict):
        raise FormatError("agent reply is not an object")

    conversation = data.get("conversation")
    if not isinstance(conversation, str):
        raise FormatError("agent reply has no conversation text")

    try:
        details = TravelDetails.model_validate(data.get("travelDetails") or {})
    except ValidationError as e:
        raise FormatError(f"travelDetails: {summarize_validation_error(e)}") from e

    records = data.get("plan")
    plan = normalize_records([] if records is None else records)
    return AgentReply(conversation=conversation, travel_details=details, plan=plan)
