"""Schedule normalizer - raw generated text to canonical Activity lists.

Pure functions: no logging, no I/O. Every failure surfaces as FormatError with the
underlying cause in its message.
"""

import json
from collections.abc import Sequence

from pydantic import ValidationError

from backend.travelgpt.models.activity import Activity

ERROR_PREFIX = "Invalid schedule output format"


class FormatError(ValueError):
    """Raised when schedule text is malformed or not a list of activities."""

    def __init__(self, cause: str) -> None:
        self.cause = cause
        super().__init__(f"{ERROR_PREFIX}: {cause}")


def summarize_validation_error(error: ValidationError) -> str:
    """Flatten a pydantic ValidationError into a single readable line."""
    parts = []
    for err in error.errors():
        loc = ".".join(str(part) for part in err["loc"])
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts)


def normalize_records(records: object) -> list[Activity]:
    """Validate already-decoded records into Activity objects.

    Args:
        records: Decoded JSON value, expected to be a list of objects

    Returns:
        Activities in input order

    Raises:
        FormatError: If records is not a list or an item fails validation
    """
    if not isinstance(records, list):
        raise FormatError("schedule output is not a list")

    activities: list[Activity] = []
    for i, item in enumerate(records):
        if not isinstance(item, dict):
            raise FormatError(f"item {i} is not an object")
        try:
            activities.append(Activity.model_validate(item))
        except ValidationError as e:
            raise FormatError(f"item {i}: {summarize_validation_error(e)}") from e
    return activities


def parse_schedule(raw: str) -> list[Activity]:
    """Parse a JSON array of raw activity records.

    Example input::

        [{"initialDatetime": "2025-06-01T08:00:00Z",
          "finalDatetime": "2025-06-01T10:00:00Z",
          "city": "New York", "activityName": "Flight to LA",
          "activityType": "Flight", "price": 250, "purchased": false}]

    Raises:
        FormatError: On invalid JSON, a non-list top level, or an invalid item
    """
    try:
        decoded = json.loads(raw)
    except json.JSONDecodeError as e:
        raise FormatError(str(e)) from e
    return normalize_records(decoded)


def serialize_schedule(activities: Sequence[Activity]) -> str:
    """Serialize activities to the JSON array format parse_schedule accepts."""
    return json.dumps([activity.to_wire() for activity in activities])
