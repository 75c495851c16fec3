"""
WebSocket endpoint for drag-and-drop reordering.

Accepts connections at /ws/sections?screen=question_order|section_order.
Each connection owns one DragController; the browser forwards its drag
events and the server answers with the drag state, the confirmation gate,
and the committed orders.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from reorder_backend import repos
from reorder_backend.config import settings
from reorder_engine.kernel.controller import DragController
from reorder_engine.kernel.drag import DROP, EFFECT_COMMIT, AwaitingConfirmation, Transition, state_to_dict
from reorder_engine.kernel.events import event_from_message
from reorder_engine.kernel.store import OrderLoadError, OrderSaveError, SectionNotFound
from reorder_engine.kernel.types import SHIFT, SWAP, FilterPredicate

logger = logging.getLogger(__name__)

router = APIRouter(tags=["websocket"])

_CONFIRM_TEXT = {
    SWAP: (
        "You are reordering questions while filters are active. This action will change the final "
        "order of ALL questions, not just the filtered ones. The questions not currently visible "
        "will be repositioned to maintain relative ordering."
    ),
    SHIFT: (
        "You are shifting questions while filters are active. This action will shift the final "
        "order of ALL questions, not just the filtered ones. The dragged question will be inserted "
        "at the new position, and all other questions will shift accordingly."
    ),
}


def _state_message(result: Transition) -> dict[str, Any]:
    msg: dict[str, Any] = {"type": "drag.state", "accepted": result.accepted, **state_to_dict(result.state)}
    if result.reason:
        msg["reason"] = result.reason
    return msg


def _load_error(section_id: str | None, e: Exception) -> dict[str, Any]:
    error = "Section not found" if isinstance(e, SectionNotFound) else "Failed to load order. Try again."
    return {"type": "order.error", "section_id": section_id, "error": error}


async def _send(websocket: WebSocket, payload: dict[str, Any]) -> None:
    await websocket.send_text(json.dumps(payload))


async def _send_orders(websocket: WebSocket, controller: DragController, msg_type: str, section_id: str) -> None:
    full_order, filtered_order = await controller.load(section_id)
    await _send(
        websocket,
        {
            "type": msg_type,
            "section_id": section_id,
            "filters": controller.predicate.to_dict(),
            "full_order": full_order,
            "filtered_order": filtered_order,
        },
    )


async def _handle_filter_set(websocket: WebSocket, controller: DragController, msg: dict[str, Any]) -> None:
    predicate = FilterPredicate.from_dict(msg.get("filters"))
    if not controller.set_filter(predicate):
        await _send(websocket, {"type": "filter.rejected", "reason": "BUSY", **state_to_dict(controller.state)})
        return
    await _send(websocket, {"type": "filter.applied", "filters": predicate.to_dict()})
    section_id = msg.get("section") or msg.get("section_id")
    if section_id:
        try:
            await _send_orders(websocket, controller, "order.loaded", section_id)
        except (SectionNotFound, OrderLoadError) as e:
            await _send(websocket, _load_error(section_id, e))


async def _handle_drag_event(websocket: WebSocket, controller: DragController, msg: dict[str, Any]) -> None:
    try:
        event = event_from_message(msg)
    except ValueError as e:
        await _send(websocket, {"type": "drag.error", "error": str(e)})
        return

    section_id = getattr(controller.state, "section", None) or event.section
    try:
        result = await controller.dispatch(event)
    except (OrderSaveError, OrderLoadError, SectionNotFound) as e:
        logger.warning("ws: commit failed for section %s: %s", section_id, e)
        error: dict[str, Any] = {
            "type": "order.error",
            "section_id": section_id,
            "error": "Failed to save order. Try again.",
        }
        # The persisted order was not changed; hand back the last known-good one
        try:
            full_order, filtered_order = await controller.load(section_id)
            error.update(full_order=full_order, filtered_order=filtered_order)
        except (OrderLoadError, SectionNotFound):
            logger.warning("ws: could not reload section %s after failed commit", section_id)
        await _send(websocket, error)
        await _send(websocket, {"type": "drag.state", "accepted": False, "reason": "COMMIT_FAILED", **state_to_dict(controller.state)})
        return

    await _send(websocket, _state_message(result))

    if event.type == DROP and result.accepted and isinstance(result.state, AwaitingConfirmation):
        await _send(
            websocket,
            {
                "type": "confirm.required",
                "item": result.state.item,
                "target": result.state.target,
                "section_id": result.state.section,
                "policy": controller.policy,
                "message": _CONFIRM_TEXT.get(controller.policy, _CONFIRM_TEXT[SWAP]),
            },
        )

    if result.effect == EFFECT_COMMIT and controller.last_result is not None:
        await _send(websocket, {"type": "order.committed", **controller.last_result.to_dict()})


@router.websocket("/ws/sections")
async def sections_websocket(websocket: WebSocket) -> None:
    """
    Drive drag-and-drop reordering over WebSocket.

    Protocol:
      Client → Server:  {"type": "drag.start", "item": "...", "section": "..."}
                        {"type": "drag.over", "item": "...", "section": "..."}
                        {"type": "drag.leave"}
                        {"type": "drop", "target": "...", "section": "..."}
                        {"type": "confirm"} | {"type": "cancel"} | {"type": "drag.end"}
                        {"type": "filter.set", "filters": {...}, "section": "..."}
                        {"type": "section.load", "section": "..."}
      Server → Client:  drag.state | confirm.required | order.committed | order.error
                        | order.loaded | filter.applied | filter.rejected | drag.error
    """
    await websocket.accept()
    screen = websocket.query_params.get("screen")
    controller = DragController(repos.order_repo, policy=settings.policy_for(screen))
    logger.info("ws: accepted screen=%s policy=%s", screen, controller.policy)

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                logger.warning("ws: malformed message from client: %r", raw[:200])
                continue
            if not isinstance(msg, dict):
                continue

            msg_type = msg.get("type")

            # ── filter.set ───────────────────────────────────────────
            if msg_type == "filter.set":
                await _handle_filter_set(websocket, controller, msg)
                continue

            # ── section.load ─────────────────────────────────────────
            if msg_type == "section.load":
                section_id = msg.get("section") or msg.get("section_id")
                try:
                    await _send_orders(websocket, controller, "order.loaded", section_id or "")
                except (SectionNotFound, OrderLoadError) as e:
                    await _send(websocket, _load_error(section_id, e))
                continue

            await _handle_drag_event(websocket, controller, msg)

    except WebSocketDisconnect:
        logger.info("ws: disconnected in state %s", controller.state.name)
