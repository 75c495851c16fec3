"""
Reorder service FastAPI application.

Entry point for the API server.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from reorder_backend import db
from reorder_backend.config import settings
from reorder_backend.routes import admin as admin_routes
from reorder_backend.routes import sections as section_routes
from reorder_backend.routes import ws as ws_routes

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI application.

    Opens the database pool on startup and closes it on shutdown. The memory
    backend needs neither.
    """
    if settings.STORE_BACKEND == "postgres":
        await db.init_pool()
        logger.info("Database pool initialized")

    yield

    if settings.STORE_BACKEND == "postgres":
        await db.close_pool()
        logger.info("Database pool closed")


app = FastAPI(
    title="Filtered Reorder",
    docs_url=None,
    redoc_url=None,
    lifespan=lifespan,
)

# Register routes
app.include_router(section_routes.router)
app.include_router(admin_routes.router)
app.include_router(ws_routes.router)


@app.get("/health")
async def health():
    """Health check endpoint for uptime monitoring."""
    return {"status": "ok", "store": settings.STORE_BACKEND}
