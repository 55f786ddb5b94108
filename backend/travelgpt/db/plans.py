"""Repository functions for users, messages, plans and activities."""

import uuid
from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any, Literal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.travelgpt.db.models import ActivityRow, Message, Plan, User
from backend.travelgpt.models.activity import Activity

MessageType = Literal["incoming", "outgoing"]
Sender = Literal["user", "agent"]


def _now() -> datetime:
    return datetime.now(timezone.utc)


async def upsert_seed_user(session: AsyncSession, user_id: str, name: str) -> User:
    """Return the seed user, creating it on first use."""
    user = await session.get(User, user_id)
    if user is None:
        user = User(user_id=user_id, name=name, summary=f"Seed user {name}", preferences={})
        session.add(user)
        await session.flush()
    return user


async def append_message(
    session: AsyncSession,
    user_id: str,
    text: str,
    *,
    message_type: MessageType,
    sender: Sender,
    plan_id: uuid.UUID | None = None,
) -> Message:
    """Store one chat message.

    Args:
        session: Database session
        user_id: Owner of the conversation
        text: Message body
        message_type: "incoming" (from the user) or "outgoing" (from the agent)
        sender: "user" or "agent"
        plan_id: Plan the message belongs to, if known

    Returns:
        The flushed Message row
    """
    message = Message(
        id=uuid.uuid4(),
        user_id=user_id,
        plan_id=plan_id,
        time=_now(),
        message=text,
        message_type=message_type,
        sender=sender,
    )
    session.add(message)
    await session.flush()
    return message


async def list_messages(session: AsyncSession, user_id: str) -> list[Message]:
    """All messages of a user, oldest first."""
    result = await session.execute(
        select(Message).where(Message.user_id == user_id).order_by(Message.time.asc())
    )
    return list(result.scalars().all())


async def get_latest_plan(session: AsyncSession, user_id: str) -> Plan | None:
    result = await session.execute(
        select(Plan)
        .where(Plan.user_id == user_id)
        .order_by(Plan.time_creation.desc(), Plan.version_number.desc())
        .limit(1)
    )
    return result.scalar_one_or_none()


async def get_plan(session: AsyncSession, plan_id: uuid.UUID) -> Plan | None:
    return await session.get(Plan, plan_id)


async def create_plan(
    session: AsyncSession,
    user_id: str,
    *,
    context: dict[str, Any] | None = None,
    message_id_created: uuid.UUID | None = None,
    summary: str = "",
) -> Plan:
    """Create the next plan version for a user (1 for the first plan)."""
    latest = await get_latest_plan(session, user_id)
    plan = Plan(
        id=uuid.uuid4(),
        user_id=user_id,
        time_creation=_now(),
        version_number=latest.version_number + 1 if latest else 1,
        message_id_created=message_id_created,
        context=context or {},
        summary_of_plan=summary,
    )
    session.add(plan)
    await session.flush()
    return plan


def activity_to_row(plan_id: uuid.UUID, position: int, activity: Activity) -> ActivityRow:
    return ActivityRow(
        id=uuid.uuid4(),
        plan_id=plan_id,
        position=position,
        initial_datetime=activity.initial_datetime,
        final_datetime=activity.final_datetime,
        city=activity.city,
        activity_name=activity.activity_name,
        activity_type=activity.activity_type.value,
        price=activity.price,
        provider_company=activity.provider_company,
        extra_details=activity.extra_details,
        extra_fields=activity.extra_fields,
        link_to_buy=activity.link_to_buy,
        purchased=activity.purchased,
    )


def activity_from_row(row: ActivityRow) -> Activity:
    """Rebuild the canonical Activity; naive timestamps from SQLite are read as UTC."""
    return Activity(
        initial_datetime=row.initial_datetime,
        final_datetime=row.final_datetime,
        city=row.city,
        activity_name=row.activity_name,
        activity_type=row.activity_type,
        price=row.price,
        provider_company=row.provider_company,
        extra_details=row.extra_details,
        extra_fields=row.extra_fields,
        link_to_buy=row.link_to_buy,
        purchased=row.purchased,
    )


async def save_activities(
    session: AsyncSession, plan_id: uuid.UUID, activities: Sequence[Activity]
) -> None:
    """Store a plan's activities, keeping their order."""
    session.add_all(
        activity_to_row(plan_id, position, activity) for position, activity in enumerate(activities)
    )
    await session.flush()


async def list_plan_activities(session: AsyncSession, plan_id: uuid.UUID) -> list[Activity]:
    """Canonical activities of a plan in their original order."""
    result = await session.execute(
        select(ActivityRow)
        .where(ActivityRow.plan_id == plan_id)
        .order_by(ActivityRow.position.asc())
    )
    return [activity_from_row(row) for row in result.scalars().all()]
