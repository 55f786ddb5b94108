"""Helper functions for the UI - backend client calls and pure calendar/list renderers."""

import html
from typing import Any

import httpx

from backend.travelgpt.models.activity import Activity
from backend.travelgpt.schedule.colors import css_color
from backend.travelgpt.schedule.layout import (
    STAYS_LABEL,
    TIME_HEADER,
    CalendarLayout,
    SpanCell,
    day_header,
)
from backend.travelgpt.schedule.listing import ListValue, list_headers, list_rows
from backend.travelgpt.schedule.normalizer import normalize_records

REQUEST_TIMEOUT_S = 120.0  # the agent call can be slow


def start_chat(backend_url: str) -> str:
    """POST /agent/chat and return the chat id.

    Raises:
        httpx.HTTPStatusError: If request fails
    """
    response = httpx.post(f"{backend_url}/agent/chat", timeout=REQUEST_TIMEOUT_S)
    response.raise_for_status()
    chat_id: str = response.json()["chat_id"]
    return chat_id


def fetch_chat(backend_url: str, chat_id: str) -> dict[str, Any]:
    """GET /agent/chat for the plan and message history of a chat."""
    response = httpx.get(
        f"{backend_url}/agent/chat", params={"chat_id": chat_id}, timeout=REQUEST_TIMEOUT_S
    )
    response.raise_for_status()
    result: dict[str, Any] = response.json()
    return result


def send_query(backend_url: str, query: str) -> dict[str, Any]:
    """POST /agent/send with a user message.

    Returns:
        Dict with chat_id, conversation, travelDetails and plan

    Raises:
        httpx.HTTPStatusError: If request fails (502 when the agent reply is unusable)
    """
    response = httpx.post(
        f"{backend_url}/agent/send", json={"query": query}, timeout=REQUEST_TIMEOUT_S
    )
    response.raise_for_status()
    result: dict[str, Any] = response.json()
    return result


def fetch_excel(backend_url: str, chat_id: str) -> bytes:
    """GET /agent/export-excel for a chat."""
    response = httpx.get(
        f"{backend_url}/agent/export-excel",
        params={"chat_id": chat_id},
        timeout=REQUEST_TIMEOUT_S,
    )
    response.raise_for_status()
    return response.content


def error_detail(error: Exception) -> str:
    """Readable message for a failed backend call."""
    if isinstance(error, httpx.HTTPStatusError):
        try:
            detail = error.response.json().get("detail")
        except ValueError:
            detail = None
        return f"HTTP {error.response.status_code}: {detail or error.response.text}"
    return str(error)


def plan_from_wire(plan: list[dict[str, Any]]) -> list[Activity]:
    """Canonical activities from the JSON plan returned by the backend."""
    return normalize_records(plan)


# --- Renderers ---


def plan_table(activities: list[Activity]) -> tuple[list[str], list[dict[str, ListValue]]]:
    """Headers and rows of the list view."""
    return list_headers(activities), list_rows(activities)


def _td(cell: SpanCell, attr: str) -> str:
    title = html.escape(f"{cell.activity.activity_name} ({cell.activity.city})")
    span = f' {attr}="{cell.span}"' if cell.span > 1 else ""
    return (
        f'<td{span} title="{title}" style="background:{css_color(cell.color)};'
        f'text-align:center;vertical-align:middle">{html.escape(cell.label)}</td>'
    )


def render_calendar_html(layout: CalendarLayout) -> str:
    """Paint a layout as an HTML table.

    Positions covered by a merged region are skipped; the anchor carries the
    rowspan/colspan from the layout.
    """
    parts = ['<table class="travel-calendar">', "<thead><tr>"]
    parts.append(f"<th>{TIME_HEADER}</th>")
    parts.extend(f"<th>{html.escape(day_header(d))}</th>" for d in layout.days)
    parts.append("</tr>")

    for row in range(layout.stay_depth):
        parts.append("<tr>")
        if row == 0:
            rowspan = f' rowspan="{layout.stay_depth}"' if layout.stay_depth > 1 else ""
            parts.append(f"<td{rowspan}><b>{STAYS_LABEL}</b></td>")
        for d, cell in enumerate(layout.stay_rows[row]):
            if cell is None:
                parts.append("<td></td>")
            elif cell.start == d:
                parts.append(_td(cell, "colspan"))
        parts.append("</tr>")
    parts.append("</thead><tbody>")

    for hour in range(24):
        parts.append(f"<tr><td>{hour:02d}:00</td>")
        for d in range(len(layout.days)):
            cell = layout.cell_at(d, hour)
            if cell is None:
                parts.append("<td></td>")
            elif layout.is_anchor(d, hour):
                parts.append(_td(cell, "rowspan"))
        parts.append("</tr>")
    parts.append("</tbody></table>")
    return "".join(parts)


def unplaced_caption(layout: CalendarLayout) -> str | None:
    """Note for activities the calendar could not draw, or None when all are shown."""
    count = len(layout.unplaced)
    if not count:
        return None
    noun = "activity" if count == 1 else "activities"
    return f"{count} {noun} not shown in the calendar; see the list view"
