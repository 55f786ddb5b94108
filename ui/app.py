"""Streamlit UI for TravelGPT - chat with the agent, view the plan as a list or a calendar.

Run with: streamlit run ui/app.py
"""

# Add project root to sys.path for imports to work when run via streamlit
import sys
from pathlib import Path

_ROOT = Path(__file__).resolve().parents[1]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import httpx  # noqa: E402
import streamlit as st  # noqa: E402

from backend.travelgpt.config import get_settings  # noqa: E402
from backend.travelgpt.export.excel import EXPORT_FILENAME, XLSX_MEDIA_TYPE  # noqa: E402
from backend.travelgpt.schedule.layout import build_layout  # noqa: E402
from backend.travelgpt.schedule.normalizer import FormatError  # noqa: E402
from ui.helpers import (  # noqa: E402
    error_detail,
    fetch_chat,
    fetch_excel,
    plan_from_wire,
    plan_table,
    render_calendar_html,
    send_query,
    start_chat,
    unplaced_caption,
)

# Configuration
settings = get_settings()
BACKEND_URL = settings.backend_url

CALENDAR_CSS = """
<style>
table.travel-calendar { border-collapse: collapse; width: 100%; font-size: 0.8rem; }
table.travel-calendar th, table.travel-calendar td { border: 1px solid #ccc; padding: 2px 4px; }
table.travel-calendar th { background: #f0f2f6; }
</style>
"""

# Page config
st.set_page_config(
    page_title="TravelGPT",
    page_icon="✈️",
    layout="wide",
)

# Initialize session state
if "chat_id" not in st.session_state:
    st.session_state.chat_id = None
if "messages" not in st.session_state:
    st.session_state.messages = []
if "plan" not in st.session_state:
    st.session_state.plan = []
if "error" not in st.session_state:
    st.session_state.error = None
if "excel" not in st.session_state:
    st.session_state.excel = None  # (chat_id, workbook bytes)


def load_chat() -> None:
    """Fetch the current chat from the backend into session state."""
    chat_id = start_chat(BACKEND_URL)
    chat = fetch_chat(BACKEND_URL, chat_id)
    st.session_state.chat_id = chat_id
    st.session_state.plan = chat["plan"]
    st.session_state.messages = [
        {"sender": m["sender"], "message": m["message"]} for m in chat["messages"]
    ]


if st.session_state.chat_id is None:
    try:
        load_chat()
    except httpx.HTTPError as e:
        st.session_state.error = f"Backend unavailable: {error_detail(e)}"

# Title
st.title("✈️ TravelGPT")
st.divider()

col_chat, col_plan = st.columns([1, 2])

# =============================================================================
# LEFT COLUMN - CHAT
# =============================================================================
with col_chat:
    st.subheader("💬 Chat")

    for message in st.session_state.messages:
        role = "user" if message["sender"] == "user" else "assistant"
        with st.chat_message(role):
            st.markdown(message["message"])

    query = st.chat_input("Where do you want to go?")
    if query:
        st.session_state.messages.append({"sender": "user", "message": query})
        try:
            with st.spinner("Planning your trip..."):
                reply = send_query(BACKEND_URL, query)
            st.session_state.chat_id = reply["chat_id"]
            st.session_state.plan = reply["plan"]
            st.session_state.messages.append({"sender": "agent", "message": reply["conversation"]})
            st.session_state.error = None
        except httpx.HTTPError as e:
            st.session_state.error = error_detail(e)
        st.rerun()

    if st.session_state.error:
        st.error(f"❌ {st.session_state.error}")

# =============================================================================
# RIGHT COLUMN - PLAN (LIST / CALENDAR)
# =============================================================================
with col_plan:
    st.subheader("🗺️ Your Plan")

    try:
        activities = plan_from_wire(st.session_state.plan)
    except FormatError as e:
        activities = []
        st.error(str(e))

    if not activities:
        st.info("👈 Tell the agent about your trip to see the plan here.")
    else:
        view = st.radio("View", options=["List", "Calendar"], horizontal=True)

        if view == "List":
            headers, rows = plan_table(activities)
            st.dataframe(
                rows,
                column_order=headers,
                use_container_width=True,
                hide_index=True,
            )
        else:
            layout = build_layout(activities, split_overnight=settings.calendar_split_overnight)
            st.markdown(CALENDAR_CSS + render_calendar_html(layout), unsafe_allow_html=True)
            caption = unplaced_caption(layout)
            if caption:
                st.caption(caption)

        chat_id = st.session_state.chat_id
        export = st.session_state.excel
        if chat_id and export and export[0] == chat_id:
            st.download_button(
                "📥 Download Excel",
                data=export[1],
                file_name=EXPORT_FILENAME,
                mime=XLSX_MEDIA_TYPE,
            )
        elif chat_id and st.button("📥 Generate Excel", key="generate_excel"):
            try:
                st.session_state.excel = (chat_id, fetch_excel(BACKEND_URL, chat_id))
            except httpx.HTTPError as e:
                st.caption(f"Export unavailable: {error_detail(e)}")
            else:
                st.rerun()
