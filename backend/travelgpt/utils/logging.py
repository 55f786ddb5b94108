"""Structured logging for agent turns."""

import logging
from typing import Any

logger = logging.getLogger(__name__)


class StructuredAgentLogger:
    """Structured logger for /agent/send turns."""

    def log_turn(
        self,
        *,
        chat_id: str | None,
        outcome: str,
        latency_ms: float,
        activities: int = 0,
        error_reason: str | None = None,
    ) -> None:
        """Log one agent turn with structured data."""
        log_data: dict[str, Any] = {
            "chat_id": chat_id,
            "outcome": outcome,
            "latency_ms": round(latency_ms, 2),
            "activities": activities,
        }

        if error_reason:
            log_data["error_reason"] = error_reason

        log_msg = f"Agent turn: {outcome}"

        if outcome == "success":
            logger.info(log_msg, extra={"structured": log_data})
        else:
            logger.warning(log_msg, extra={"structured": log_data})
