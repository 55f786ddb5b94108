"""Shared pytest fixtures for all test suites."""

from collections.abc import AsyncGenerator, Callable, Iterator
from datetime import datetime
from pathlib import Path
from typing import Any

import pytest
import pytest_asyncio
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import NullPool

from backend.travelgpt.db.models import Base
from backend.travelgpt.models.activity import Activity, ActivityType

ActivityFactory = Callable[..., Activity]


@pytest.fixture
def make_activity() -> ActivityFactory:
    """Factory for activities with sensible defaults.

    Usage:
        make_activity(datetime(2025, 6, 1, 9), datetime(2025, 6, 1, 10), activity_name="Museum")
    """

    def _make(
        start: datetime,
        end: datetime,
        activity_type: ActivityType = ActivityType.attraction,
        **fields: Any,
    ) -> Activity:
        fields.setdefault("city", "Paris")
        fields.setdefault("activity_name", f"{activity_type.value} at {start:%H:%M}")
        fields.setdefault("purchased", False)
        return Activity(
            initial_datetime=start,
            final_datetime=end,
            activity_type=activity_type,
            **fields,
        )

    return _make


@pytest.fixture
def sqlite_url(tmp_path: Path) -> Iterator[str]:
    """File-backed SQLite database with all tables created.

    A file is used instead of :memory: so every connection sees the same schema.
    """
    db_path = tmp_path / "travelgpt-test.db"
    sync_engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(sync_engine)
    sync_engine.dispose()
    yield f"sqlite+aiosqlite:///{db_path}"


@pytest_asyncio.fixture
async def sqlite_engine(sqlite_url: str) -> AsyncGenerator[AsyncEngine, None]:
    """Async engine over the test database."""
    engine = create_async_engine(sqlite_url, poolclass=NullPool, echo=False)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(sqlite_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Async session for repository tests.

    Usage:
        @pytest.mark.asyncio
        async def test_something(db_session):
            await create_plan(db_session, "user-1")
    """
    async with AsyncSession(sqlite_engine, expire_on_commit=False) as session:
        yield session
        await session.rollback()
