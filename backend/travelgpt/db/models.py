"""SQLAlchemy ORM models - users, messages, plans and their activities."""

import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    Text,
    Uuid,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
from sqlalchemy.sql import func


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class User(Base):
    """User table - the app runs with a single seed user."""

    __tablename__ = "user"

    user_id: Mapped[str] = mapped_column(Text, primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    summary: Mapped[str] = mapped_column(Text, nullable=False, default="")
    preferences: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    # Relationships
    messages: Mapped[list["Message"]] = relationship("Message", back_populates="user")
    plans: Mapped[list["Plan"]] = relationship("Plan", back_populates="user")


class Message(Base):
    """Chat message, incoming from the user or outgoing from the agent."""

    __tablename__ = "message"
    __table_args__ = (Index("idx_message_user_time", "user_id", "time"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[str] = mapped_column(Text, ForeignKey("user.user_id"), nullable=False)
    plan_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("plan.id"), nullable=True
    )
    time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    message_type: Mapped[str] = mapped_column(Text, nullable=False)
    sender: Mapped[str] = mapped_column(Text, nullable=False)

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="messages")


class Plan(Base):
    """Plan table - one row per plan version; activities hang off it."""

    __tablename__ = "plan"
    __table_args__ = (Index("idx_plan_user_created", "user_id", "time_creation"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[str] = mapped_column(Text, ForeignKey("user.user_id"), nullable=False)
    time_creation: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    version_number: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    message_id_created: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    context: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    summary_of_plan: Mapped[str] = mapped_column(Text, nullable=False, default="")

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="plans")
    activities: Mapped[list["ActivityRow"]] = relationship(
        "ActivityRow",
        back_populates="plan",
        cascade="all, delete-orphan",
        order_by="ActivityRow.position",
    )


class ActivityRow(Base):
    """Activity table - one canonical Activity, ordered within its plan."""

    __tablename__ = "activity"
    __table_args__ = (Index("idx_activity_plan_position", "plan_id", "position"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    plan_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("plan.id", ondelete="CASCADE"), nullable=False
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    initial_datetime: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    final_datetime: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    city: Mapped[str] = mapped_column(Text, nullable=False)
    activity_name: Mapped[str] = mapped_column(Text, nullable=False)
    activity_type: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[float | None] = mapped_column(Float, nullable=True)
    provider_company: Mapped[str | None] = mapped_column(Text, nullable=True)
    extra_details: Mapped[str | None] = mapped_column(Text, nullable=True)
    extra_fields: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    link_to_buy: Mapped[str | None] = mapped_column(Text, nullable=True)
    purchased: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Relationships
    plan: Mapped["Plan"] = relationship("Plan", back_populates="activities")
