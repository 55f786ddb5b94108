"""Activity type to display color, shared by the UI and the spreadsheet export."""

from backend.travelgpt.models.activity import ActivityType

DEFAULT_COLOR = "FFE7E6E6"  # light gray

ACTIVITY_COLORS: dict[ActivityType, str] = {
    ActivityType.stay: "FFD9E1F2",
    ActivityType.flight: "FFFFC7CE",
    ActivityType.transportation: "FFFFFFCC",
    ActivityType.attraction: "FFC6EFCE",
    ActivityType.meal: "FFDDEBF7",
}


def activity_color(activity_type: ActivityType | str) -> str:
    """ARGB hex color for an activity type; Other and unknown types get DEFAULT_COLOR."""
    try:
        key = ActivityType(activity_type)
    except ValueError:
        return DEFAULT_COLOR
    return ACTIVITY_COLORS.get(key, DEFAULT_COLOR)


def css_color(argb: str) -> str:
    """Convert an ARGB hex string to a CSS "#RRGGBB" color."""
    return f"#{argb[-6:]}"
