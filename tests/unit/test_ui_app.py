"""Tests for the Streamlit page, run headless with AppTest."""

from datetime import date
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from streamlit.testing.v1 import AppTest

from backend.travelgpt.schedule.samples import sample_schedule

APP_PATH = Path(__file__).resolve().parents[2] / "ui" / "app.py"


@pytest.fixture
def backend():
    """Patch the backend calls the page makes; yields the fetch_excel mock."""
    chat = {
        "plan": [a.to_wire() for a in sample_schedule(date(2025, 6, 1))],
        "messages": [{"sender": "agent", "message": "Welcome!"}],
    }
    with (
        patch("ui.helpers.start_chat", return_value="chat-1"),
        patch("ui.helpers.fetch_chat", return_value=chat),
        patch("ui.helpers.fetch_excel", return_value=b"xlsx-bytes") as fetch_excel,
    ):
        yield fetch_excel


def test_render_does_not_export(backend: MagicMock) -> None:
    """Test that showing the plan never asks the backend for a workbook."""
    at = AppTest.from_file(str(APP_PATH)).run(timeout=30)

    assert not at.exception
    assert at.session_state["chat_id"] == "chat-1"
    assert at.button(key="generate_excel").label == "📥 Generate Excel"
    backend.assert_not_called()

    at.run(timeout=30)
    backend.assert_not_called()


def test_generate_button_fetches_once_per_chat(backend: MagicMock) -> None:
    """Test that the workbook is fetched on click and reused on later reruns."""
    at = AppTest.from_file(str(APP_PATH)).run(timeout=30)

    at.button(key="generate_excel").click().run(timeout=30)
    at.run(timeout=30)

    assert not at.exception
    backend.assert_called_once()
    assert backend.call_args.args[1] == "chat-1"
    assert at.session_state["excel"] == ("chat-1", b"xlsx-bytes")
