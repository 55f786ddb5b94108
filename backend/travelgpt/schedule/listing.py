"""Flat list view of a plan, shared by the UI table and the spreadsheet list sheet."""

from collections.abc import Sequence

from backend.travelgpt.models.activity import Activity, ExtraScalar
from backend.travelgpt.schedule.dates import format_elapsed

EXTRA_PREFIX = "Extra: "

LIST_COLUMNS: list[tuple[str, int]] = [
    ("Initial Datetime", 20),
    ("Final Datetime", 20),
    ("Time Elapsed", 12),
    ("Weekday", 15),
    ("City", 15),
    ("Activity Name", 30),
    ("Activity Type", 20),
    ("Price", 10),
    ("Provider", 20),
    ("Extra Details", 30),
    ("Purchased", 15),
    ("Link to Buy", 30),
]

ListValue = ExtraScalar


def extra_field_keys(activities: Sequence[Activity]) -> list[str]:
    """Sorted union of extraFields keys across the plan."""
    keys: set[str] = set()
    for activity in activities:
        if activity.extra_fields:
            keys.update(activity.extra_fields)
    return sorted(keys)


def list_headers(activities: Sequence[Activity]) -> list[str]:
    """Fixed column headers followed by one "Extra: <key>" header per extra key."""
    return [name for name, _ in LIST_COLUMNS] + [
        f"{EXTRA_PREFIX}{key}" for key in extra_field_keys(activities)
    ]


def _blank(value: ListValue) -> ListValue:
    return "" if value is None else value


def list_row(activity: Activity, extra_keys: Sequence[str]) -> dict[str, ListValue]:
    """One row keyed by header; absent optional values become empty strings."""
    extras = activity.extra_fields or {}
    row: dict[str, ListValue] = {
        "Initial Datetime": activity.initial_datetime.isoformat(),
        "Final Datetime": activity.final_datetime.isoformat(),
        "Time Elapsed": format_elapsed(activity.initial_datetime, activity.final_datetime),
        "Weekday": activity.initial_datetime.strftime("%A"),
        "City": activity.city,
        "Activity Name": activity.activity_name,
        "Activity Type": activity.activity_type.value,
        "Price": _blank(activity.price),
        "Provider": _blank(activity.provider_company),
        "Extra Details": _blank(activity.extra_details),
        "Purchased": "Yes" if activity.purchased else "No",
        "Link to Buy": _blank(activity.link_to_buy),
    }
    for key in extra_keys:
        row[f"{EXTRA_PREFIX}{key}"] = _blank(extras.get(key))
    return row


def list_rows(activities: Sequence[Activity]) -> list[dict[str, ListValue]]:
    """Rows for every activity, in plan order."""
    keys = extra_field_keys(activities)
    return [list_row(activity, keys) for activity in activities]
