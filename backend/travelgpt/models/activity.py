"""Activity models - the atomic schedulable unit of a travel plan."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

ExtraScalar = str | int | float | bool | None


class ActivityType(str, Enum):
    """Closed set of activity types."""

    stay = "Stay"
    flight = "Flight"
    transportation = "Transportation"
    attraction = "Attraction"
    meal = "Meal"
    other = "Other"


class Activity(BaseModel):
    """Single scheduled travel event.

    Wire names are camelCase (``initialDatetime``, ``activityType``, ...); attributes are
    snake_case. Keys outside the known field set are kept as extra attributes so they
    survive a parse/serialize round trip.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="allow",
    )

    initial_datetime: datetime
    final_datetime: datetime
    city: str
    activity_name: str
    activity_type: ActivityType
    price: float | None = None
    provider_company: str | None = None
    extra_details: str | None = None
    extra_fields: dict[str, ExtraScalar] | None = None
    link_to_buy: str | None = None
    purchased: bool

    @field_validator("initial_datetime", "final_datetime")
    @classmethod
    def normalize_to_utc(cls, v: datetime) -> datetime:
        """Treat naive timestamps as UTC and convert aware ones to UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)

    @model_validator(mode="after")
    def validate_span(self) -> "Activity":
        """Ensure initialDatetime <= finalDatetime."""
        if self.initial_datetime > self.final_datetime:
            raise ValueError("initialDatetime must be <= finalDatetime")
        return self

    @property
    def is_stay(self) -> bool:
        return self.activity_type is ActivityType.stay

    def to_wire(self) -> dict[str, Any]:
        """JSON-ready dict using the camelCase wire names."""
        return self.model_dump(mode="json", by_alias=True)


class TravelDetails(BaseModel):
    """Trip summary the agent extracts from the conversation."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    destination: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    days: int | None = None


class AgentReply(BaseModel):
    """One agent turn: conversational text plus the full proposed plan."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    conversation: str
    travel_details: TravelDetails = Field(default_factory=TravelDetails)
    plan: list[Activity] = Field(default_factory=list)
