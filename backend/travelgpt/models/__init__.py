"""Models package - re-exports for convenience."""

from backend.travelgpt.models.activity import (
    Activity,
    ActivityType,
    AgentReply,
    ExtraScalar,
    TravelDetails,
)

__all__ = [
    "Activity",
    "ActivityType",
    "AgentReply",
    "ExtraScalar",
    "TravelDetails",
]
