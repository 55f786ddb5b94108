"""Agent endpoints - chat bootstrap/history, send message, calendar layout, Excel export."""

import logging
import time
import uuid
from datetime import date, datetime
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.ext.asyncio import AsyncSession

from backend.travelgpt.config import Settings, get_settings
from backend.travelgpt.db.engine import get_session
from backend.travelgpt.db.models import Plan
from backend.travelgpt.db.plans import (
    append_message,
    create_plan,
    get_latest_plan,
    get_plan,
    list_messages,
    list_plan_activities,
    save_activities,
    upsert_seed_user,
)
from backend.travelgpt.export.excel import EXPORT_FILENAME, XLSX_MEDIA_TYPE, export_combined_workbook
from backend.travelgpt.llm.agent import TravelAgent
from backend.travelgpt.llm.client import LLMClient, LLMError, get_llm_client
from backend.travelgpt.llm.prompts import build_context
from backend.travelgpt.models.activity import Activity, AgentReply
from backend.travelgpt.schedule.layout import build_layout
from backend.travelgpt.schedule.normalizer import FormatError, serialize_schedule
from backend.travelgpt.schedule.samples import sample_schedule
from backend.travelgpt.utils.logging import StructuredAgentLogger
from backend.travelgpt.utils.metrics import PrometheusAgentMetrics

router = APIRouter(prefix="/agent", tags=["agent"])
logger = logging.getLogger(__name__)
agent_logger = StructuredAgentLogger()
agent_metrics = PrometheusAgentMetrics()


class SendRequest(BaseModel):
    """Request body for POST /agent/send."""

    query: str = ""


class SendResponse(BaseModel):
    """Response for POST /agent/send."""

    model_config = ConfigDict(populate_by_name=True)

    chat_id: str
    conversation: str
    travel_details: dict[str, Any] = Field(default_factory=dict, alias="travelDetails")
    plan: list[dict[str, Any]] = Field(default_factory=list)


class ChatCreatedResponse(BaseModel):
    """Response for POST /agent/chat."""

    chat_id: str


class MessageOut(BaseModel):
    """Single chat message."""

    id: str
    time: datetime
    message: str
    message_type: str
    sender: str
    plan_id: str | None = None


class ChatResponse(BaseModel):
    """Response for GET /agent/chat."""

    chat_id: str
    plan: list[dict[str, Any]]
    messages: list[MessageOut]


def _parse_chat_id(chat_id: str) -> uuid.UUID:
    try:
        return uuid.UUID(chat_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Chat not found") from e


def _plan_summary(reply: AgentReply) -> str:
    details = reply.travel_details
    where = details.destination or "Trip"
    when = ""
    if details.start_date and details.end_date:
        when = f" {details.start_date} to {details.end_date}"
    return f"{where}{when}: {len(reply.plan)} activities"


async def _resolve_plan(session: AsyncSession, settings: Settings, chat_id: str | None) -> Plan:
    """Plan named by chat_id, or the seed user's latest plan."""
    if chat_id:
        plan = await get_plan(session, _parse_chat_id(chat_id))
    else:
        plan = await get_latest_plan(session, settings.seed_user_id)
    if plan is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Chat not found")
    return plan


@router.post("/chat", response_model=ChatCreatedResponse)
async def start_chat(
    session: Annotated[AsyncSession, Depends(get_session)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> ChatCreatedResponse:
    """Return the seed user's latest chat, creating an empty one with a welcome message."""
    user = await upsert_seed_user(session, settings.seed_user_id, settings.seed_user_name)
    plan = await get_latest_plan(session, user.user_id)

    if plan is None:
        plan = await create_plan(session, user.user_id)
        await append_message(
            session,
            user.user_id,
            settings.welcome_message,
            message_type="outgoing",
            sender="agent",
            plan_id=plan.id,
        )
        logger.info(f"Created chat {plan.id} for {user.user_id}")

    await session.commit()
    return ChatCreatedResponse(chat_id=str(plan.id))


@router.get("/chat", response_model=ChatResponse)
async def get_chat(
    session: Annotated[AsyncSession, Depends(get_session)],
    chat_id: Annotated[str | None, Query()] = None,
) -> ChatResponse:
    """Plan activities and conversation messages of one chat."""
    if not chat_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="chat_id is required")

    plan = await get_plan(session, _parse_chat_id(chat_id))
    if plan is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Chat not found")

    activities = await list_plan_activities(session, plan.id)
    messages = await list_messages(session, plan.user_id)

    return ChatResponse(
        chat_id=str(plan.id),
        plan=[activity.to_wire() for activity in activities],
        messages=[
            MessageOut(
                id=str(m.id),
                time=m.time,
                message=m.message,
                message_type=m.message_type,
                sender=m.sender,
                plan_id=str(m.plan_id) if m.plan_id else None,
            )
            for m in messages
        ],
    )


@router.post("/send", response_model=SendResponse)
async def send_message(
    request: SendRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
    settings: Annotated[Settings, Depends(get_settings)],
    client: Annotated[LLMClient, Depends(get_llm_client)],
) -> SendResponse:
    """Send a user message to the agent and store the resulting plan version.

    Raises:
        HTTPException: 400 on an empty query, 502 when the LLM call fails or its
            reply cannot be parsed
    """
    query = request.query.strip()
    if not query:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Query is required")

    started = time.perf_counter()
    user = await upsert_seed_user(session, settings.seed_user_id, settings.seed_user_name)

    previous = await list_messages(session, user.user_id)
    last_plan = await get_latest_plan(session, user.user_id)
    await append_message(
        session,
        user.user_id,
        query,
        message_type="incoming",
        sender="user",
        plan_id=last_plan.id if last_plan else None,
    )

    last_plan_summary = None
    if last_plan is not None:
        last_activities = await list_plan_activities(session, last_plan.id)
        if last_activities:
            last_plan_summary = serialize_schedule(last_activities)

    context = build_context(query, [m.message for m in previous], last_plan_summary)

    try:
        reply = await TravelAgent(client).generate_travel_plan(context)
    except (LLMError, FormatError) as e:
        # Keep the user's message even when the agent fails
        await session.commit()
        latency_ms = (time.perf_counter() - started) * 1000
        agent_metrics.record_turn("error", latency_ms)
        agent_metrics.inc_error("llm_error" if isinstance(e, LLMError) else "format_error")
        agent_logger.log_turn(
            chat_id=str(last_plan.id) if last_plan else None,
            outcome="error",
            latency_ms=latency_ms,
            error_reason=str(e),
        )
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e)) from e

    outgoing = await append_message(
        session, user.user_id, reply.conversation, message_type="outgoing", sender="agent"
    )
    travel_details = reply.travel_details.model_dump(mode="json", by_alias=True, exclude_none=True)
    plan = await create_plan(
        session,
        user.user_id,
        context=travel_details,
        message_id_created=outgoing.id,
        summary=_plan_summary(reply),
    )
    outgoing.plan_id = plan.id
    await save_activities(session, plan.id, reply.plan)
    await session.commit()

    latency_ms = (time.perf_counter() - started) * 1000
    agent_metrics.record_turn("success", latency_ms, activities=len(reply.plan))
    agent_logger.log_turn(
        chat_id=str(plan.id),
        outcome="success",
        latency_ms=latency_ms,
        activities=len(reply.plan),
    )

    return SendResponse(
        chat_id=str(plan.id),
        conversation=reply.conversation,
        travel_details=travel_details,
        plan=[activity.to_wire() for activity in reply.plan],
    )


async def _plan_activities(
    session: AsyncSession, settings: Settings, chat_id: str | None, sample: bool
) -> list[Activity]:
    if sample:
        return sample_schedule(date.today())
    plan = await _resolve_plan(session, settings, chat_id)
    return await list_plan_activities(session, plan.id)


@router.get("/calendar")
async def get_calendar(
    session: Annotated[AsyncSession, Depends(get_session)],
    settings: Annotated[Settings, Depends(get_settings)],
    chat_id: Annotated[str | None, Query()] = None,
    sample: Annotated[bool, Query()] = False,
) -> dict[str, Any]:
    """Calendar layout of a plan (latest plan when chat_id is omitted)."""
    activities = await _plan_activities(session, settings, chat_id, sample)
    layout = build_layout(activities, split_overnight=settings.calendar_split_overnight)
    return {"plan": [a.to_wire() for a in activities], "layout": layout.to_dict()}


@router.get("/export-excel")
async def export_excel(
    session: Annotated[AsyncSession, Depends(get_session)],
    settings: Annotated[Settings, Depends(get_settings)],
    chat_id: Annotated[str | None, Query()] = None,
    sample: Annotated[bool, Query()] = False,
) -> Response:
    """Download a plan as travel_schedule.xlsx (list sheet + calendar sheet)."""
    activities = await _plan_activities(session, settings, chat_id, sample)
    content = export_combined_workbook(
        activities, split_overnight=settings.calendar_split_overnight
    )
    agent_metrics.inc_export("sample" if sample else "chat")
    logger.info(f"Exported {len(activities)} activities to {EXPORT_FILENAME}")
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )
