"""Unit tests for UI helper functions."""

from datetime import date, datetime, timezone
from unittest.mock import MagicMock, patch

import httpx
import pytest

from backend.travelgpt.models.activity import ActivityType
from backend.travelgpt.schedule.layout import build_layout
from backend.travelgpt.schedule.normalizer import FormatError
from backend.travelgpt.schedule.samples import sample_schedule
from ui.helpers import (
    error_detail,
    plan_from_wire,
    plan_table,
    render_calendar_html,
    send_query,
    start_chat,
    unplaced_caption,
)

SUNDAY = date(2025, 6, 1)


def _rows(html: str) -> list[str]:
    return html.split("<tr>")[1:]


class TestRenderCalendarHtml:
    """Test painting of a layout as an HTML table."""

    def test_header_and_row_count(self) -> None:
        """Test the day headers and one row per Stay row and hour."""
        html = render_calendar_html(build_layout(sample_schedule(SUNDAY)))

        rows = _rows(html)
        assert "<th>Time</th><th>Sun, Jun 1</th><th>Mon, Jun 2</th>" in rows[0]
        assert len(rows) == 1 + 1 + 24

    def test_stay_spans_columns(self) -> None:
        """Test that the Stay is one cell with colspan over both days."""
        stay_row = _rows(render_calendar_html(build_layout(sample_schedule(SUNDAY))))[1]

        assert "<b>Stays</b>" in stay_row
        assert 'colspan="2"' in stay_row
        assert "background:#D9E1F2" in stay_row
        assert "Paris, Hotel Parisian" in stay_row

    def test_hourly_cells_span_rows_and_skip_covered_positions(self) -> None:
        """Test rowspans and that covered positions emit no cell."""
        rows = _rows(render_calendar_html(build_layout(sample_schedule(SUNDAY))))

        def hour(h: int) -> str:
            return rows[2 + h]

        assert hour(0).count("<td") == 3
        assert 'rowspan="4"' in hour(8) and "Flight to Rome" in hour(8)
        # 09:00: Eiffel anchor on day 1, flight covers day 2
        assert hour(9).count("<td") == 2
        assert 'rowspan="2"' in hour(9) and "Eiffel Tower Visit" in hour(9)
        # 10:00: both columns covered
        assert hour(10).count("<td") == 1

    def test_single_hour_cell_has_no_rowspan(self, make_activity) -> None:
        """Test that one-hour regions are plain cells."""
        coffee = make_activity(
            datetime(2025, 6, 1, 9, tzinfo=timezone.utc),
            datetime(2025, 6, 1, 9, tzinfo=timezone.utc),
            ActivityType.meal,
            activity_name="Fish & Chips",
        )

        rows = _rows(render_calendar_html(build_layout([coffee])))

        # No Stay rows: hour h follows the header directly
        nine = rows[1 + 9]
        assert nine.startswith("<td>09:00</td>")
        assert "rowspan" not in nine
        assert "Fish &amp; Chips" in nine
        assert "background:#DDEBF7" in nine
        assert "Fish" not in rows[1 + 10]

    def test_empty_layout(self) -> None:
        """Test that an empty plan renders the time column only."""
        rows = _rows(render_calendar_html(build_layout([])))

        assert "<th>Time</th></tr>" in rows[0]
        assert len(rows) == 1 + 24
        assert "Stays" not in "".join(rows)


class TestUnplacedCaption:
    """Test the note shown under the calendar for activities it leaves out."""

    def test_no_caption_when_everything_is_drawn(self) -> None:
        """Test that a fully placed plan gets no caption."""
        assert unplaced_caption(build_layout(sample_schedule(SUNDAY))) is None

    def test_caption_counts_stays_and_overnight_activities(self, make_activity) -> None:
        """Test that the wording fits both left-out stays and overnight activities."""
        long_stay = make_activity(
            datetime(2025, 6, 1, 15, tzinfo=timezone.utc),
            datetime(2025, 6, 5, 11, tzinfo=timezone.utc),
            ActivityType.stay,
        )
        short_a = make_activity(
            datetime(2025, 6, 2, 15, tzinfo=timezone.utc),
            datetime(2025, 6, 2, 20, tzinfo=timezone.utc),
            ActivityType.stay,
        )
        short_b = make_activity(
            datetime(2025, 6, 3, 15, tzinfo=timezone.utc),
            datetime(2025, 6, 3, 20, tzinfo=timezone.utc),
            ActivityType.stay,
        )
        night_train = make_activity(
            datetime(2025, 6, 1, 22, tzinfo=timezone.utc),
            datetime(2025, 6, 2, 7, tzinfo=timezone.utc),
            ActivityType.transportation,
        )

        stays_only = build_layout([long_stay, short_a, short_b])
        both = build_layout([long_stay, short_a, short_b, night_train], split_overnight=False)

        assert unplaced_caption(stays_only) == (
            "1 activity not shown in the calendar; see the list view"
        )
        assert unplaced_caption(both) == (
            "2 activities not shown in the calendar; see the list view"
        )
        assert "overnight" not in unplaced_caption(both)


class TestPlanHelpers:
    """Test wire decoding and the list table."""

    def test_plan_from_wire_round_trip(self) -> None:
        """Test that backend JSON becomes activities."""
        wire = [a.to_wire() for a in sample_schedule(SUNDAY)]

        assert plan_from_wire(wire) == sample_schedule(SUNDAY)

    def test_plan_from_wire_rejects_bad_plan(self) -> None:
        """Test that malformed backend data raises FormatError."""
        with pytest.raises(FormatError):
            plan_from_wire([{"city": "Paris"}])

    def test_plan_table(self) -> None:
        """Test headers include the extra columns and rows follow the plan."""
        headers, rows = plan_table(sample_schedule(SUNDAY))

        assert headers[-2:] == ["Extra: baggageIncluded", "Extra: flightNumber"]
        assert len(rows) == 5
        assert rows[3]["Extra: flightNumber"] == "AF123"


class TestBackendCalls:
    """Test the httpx calls with a mocked transport."""

    @patch("ui.helpers.httpx.post")
    def test_start_chat(self, mock_post: MagicMock) -> None:
        """Test that the chat id is read from the response."""
        mock_post.return_value = httpx.Response(
            200, json={"chat_id": "abc"}, request=httpx.Request("POST", "http://test/agent/chat")
        )

        assert start_chat("http://test") == "abc"
        mock_post.assert_called_once()
        assert mock_post.call_args.args[0] == "http://test/agent/chat"

    @patch("ui.helpers.httpx.post")
    def test_send_query_raises_on_error(self, mock_post: MagicMock) -> None:
        """Test that a 502 surfaces as HTTPStatusError with a readable detail."""
        mock_post.return_value = httpx.Response(
            502,
            json={"detail": "Invalid schedule output format: schedule output is not a list"},
            request=httpx.Request("POST", "http://test/agent/send"),
        )

        with pytest.raises(httpx.HTTPStatusError) as exc_info:
            send_query("http://test", "Plan Paris")

        assert mock_post.call_args.kwargs["json"] == {"query": "Plan Paris"}
        assert error_detail(exc_info.value) == (
            "HTTP 502: Invalid schedule output format: schedule output is not a list"
        )

    def test_error_detail_for_transport_errors(self) -> None:
        """Test that non-HTTP errors fall back to their message."""
        assert error_detail(httpx.ConnectError("connection refused")) == "connection refused"
