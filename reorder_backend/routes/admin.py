"""Export and demo-reset routes."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from reorder_backend import repos
from reorder_backend.config import settings
from reorder_backend.models.order import ExportResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["admin"])


@router.get("/export", status_code=200)
async def export_orders() -> ExportResponse:
    """Every section, question and order row as JSON."""
    sections, questions, rows = await repos.order_repo.export()
    return ExportResponse(sections=sections, questions=questions, section_question_order=rows)


@router.post("/reset", status_code=200)
async def reset_demo_data() -> dict[str, str]:
    """Wipe the ordering tables and reseed the demo data. Refused in production."""
    if settings.ENVIRONMENT == "production":
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Reset is disabled in production.")
    await repos.order_repo.reset()
    logger.info("admin: demo data reset")
    return {"status": "ok"}
