"""Section order routes — list, read (full + filtered), save, move."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Query, status

from reorder_backend import repos
from reorder_backend.config import settings
from reorder_backend.models.order import (
    Country,
    Filters,
    MoveRequest,
    MoveResponse,
    ParticipantType,
    ReviewType,
    SaveOrderRequest,
    SaveOrderResponse,
    SectionOrderResponse,
    SectionResponse,
)
from reorder_engine.kernel.controller import commit_reorder
from reorder_engine.kernel.store import InvalidOrder, OrderSaveError, SectionNotFound

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/sections", tags=["sections"])


def _not_found(section_id: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Section {section_id} not found.")


@router.get("", status_code=200)
async def list_sections() -> list[SectionResponse]:
    """List all sections with their question counts."""
    sections = await repos.order_repo.list_sections()
    result = []
    for section in sections:
        questions = await repos.order_repo.list_questions(section.id)
        result.append(SectionResponse(id=section.id, title=section.title, question_count=len(questions)))
    return result


@router.get("/{section_id}/order", status_code=200)
async def get_section_order(
    section_id: str,
    review_type: ReviewType | None = Query(default=None, alias="reviewType"),
    participant_type: ParticipantType | None = Query(default=None, alias="participantType"),
    country: Country | None = Query(default=None),
) -> SectionOrderResponse:
    """
    Full order and filtered view of one section.

    The full order is always returned so the client can show the final
    order alongside the filtered list it is editing.
    """
    predicate = Filters(review_type=review_type, participant_type=participant_type, country=country).to_predicate()
    try:
        full_order = await repos.order_repo.get_full_order(section_id)
        filtered_order = await repos.order_repo.get_filtered(section_id, predicate)
        questions = {q.id: q for q in await repos.order_repo.list_questions(section_id)}
    except SectionNotFound:
        raise _not_found(section_id)

    return SectionOrderResponse(
        section_id=section_id,
        filters=predicate.to_dict(),
        filtered=not predicate.is_empty,
        full_order=full_order,
        filtered_order=filtered_order,
        questions=[questions[q] for q in full_order if q in questions],
    )


@router.post("/{section_id}/reorder", status_code=200)
async def save_section_order(section_id: str, req: SaveOrderRequest) -> SaveOrderResponse:
    """Replace a section's full order. The whole list is written or nothing is."""
    try:
        async with repos.order_repo.lock(section_id):
            await repos.order_repo.save_order(section_id, req.question_ids_in_order)
    except SectionNotFound:
        raise _not_found(section_id)
    except InvalidOrder as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    except OrderSaveError:
        logger.exception("sections: save failed for section %s", section_id)
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Failed to save order. Try again.")

    return SaveOrderResponse(section_id=section_id, full_order=req.question_ids_in_order)


@router.post("/{section_id}/move", status_code=200)
async def move_question(section_id: str, req: MoveRequest) -> MoveResponse:
    """
    Drop `dragged` onto `target` in the filtered view and persist the result.

    The reconciliation policy comes from the request, else from the screen's
    configured policy. Confirmation is the client's job; a request here is
    already confirmed.
    """
    policy = req.policy or settings.policy_for(req.screen)
    try:
        result = await commit_reorder(
            repos.order_repo,
            section_id,
            req.dragged,
            req.target,
            predicate=req.filters.to_predicate(),
            policy=policy,
        )
    except SectionNotFound:
        raise _not_found(section_id)
    except OrderSaveError:
        logger.exception("sections: move failed for section %s", section_id)
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Failed to save order. Try again.")

    return MoveResponse(
        section_id=section_id,
        policy=policy,
        changed=result.plan.changed,
        full_order=result.full_order,
        filtered_order=result.filtered_order,
        plan=result.plan.to_dict(),
    )
