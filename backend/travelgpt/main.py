"""FastAPI application."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from backend.travelgpt.api.routes.agent import router as agent_router
from backend.travelgpt.api.routes.health import router as health_router
from backend.travelgpt.api.routes.metrics import router as metrics_router
from backend.travelgpt.config import get_settings
from backend.travelgpt.db.engine import get_async_engine
from backend.travelgpt.db.models import Base

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create tables on startup when enabled (local SQLite development)."""
    if get_settings().auto_create_tables:
        async with get_async_engine().begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ensured")
    yield


app = FastAPI(title="TravelGPT API", version="0.1.0", lifespan=lifespan)

# Register routes
app.include_router(health_router, tags=["health"])
app.include_router(metrics_router, tags=["metrics"])
app.include_router(agent_router, tags=["agent"])


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": "TravelGPT API", "version": "0.1.0"}
