"""
Reorder Kernel — Event Construction

Factory functions for creating well-formed drag events.
Used by the WebSocket route to turn client messages into events for the
drag state machine, and by tests to build gestures concisely.
"""

from __future__ import annotations

from typing import Any

from reorder_engine.kernel.drag import (
    DRAG_END,
    DRAG_OVER,
    DRAG_START,
    DROP,
    EVENT_TYPES,
    DragEvent,
)

# Message keys that may carry the event's item, in lookup order
_ITEM_KEYS = ("item", "target", "candidate", "question_id", "questionId")
_SECTION_KEYS = ("section", "section_id", "sectionId")


def make_event(type: str, item: str | None = None, section: str | None = None) -> DragEvent:
    """
    Build a DragEvent from minimal inputs.

    Raises ValueError for an unknown event type.
    """
    if type not in EVENT_TYPES:
        raise ValueError(f"Unknown drag event type: {type!r}")
    return DragEvent(type=type, item=item, section=section)


def event_from_message(msg: dict[str, Any]) -> DragEvent:
    """
    Parse a client message like {"type": "drop", "target": "q3", "section": "sec-1"}.

    Accepts the snake_case and camelCase spellings the UI sends.
    """
    item = next((msg[k] for k in _ITEM_KEYS if msg.get(k)), None)
    section = next((msg[k] for k in _SECTION_KEYS if msg.get(k)), None)
    return make_event(msg.get("type", ""), item=str(item) if item is not None else None, section=section)


def drag_gesture(item: str, target: str, section: str, *, hover: bool = True) -> list[DragEvent]:
    """
    The events a browser raises for dragging `item` onto `target`:
    dragstart, dragover, drop, dragend.
    """
    events = [make_event(DRAG_START, item, section)]
    if hover:
        events.append(make_event(DRAG_OVER, target, section))
    events.append(make_event(DROP, target, section))
    events.append(make_event(DRAG_END))
    return events
