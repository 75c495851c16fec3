"""
Reorder Kernel — Drag State Machine

Pure function: (state, event) → Transition

Sequences drag/drop gestures into at most one pending reorder at a time.

States:
  Idle
  Dragging(item, section)
  HoveringTarget(item, section, candidate)
  AwaitingConfirmation(item, section, target)   — filtered drop, needs confirm
  Committing(item, section, target)             — reconcile + save in progress

A drop under an active filter never commits directly: it parks in
AwaitingConfirmation until confirm(). drag.end clears hover state but
leaves a pending confirmation alone, so the dialog outlives the gesture.

Never throws — rejected events come back with accepted=False and a reason.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Event types
# ---------------------------------------------------------------------------

DRAG_START = "drag.start"
DRAG_OVER = "drag.over"
DRAG_LEAVE = "drag.leave"
DROP = "drop"
CONFIRM = "confirm"
CANCEL = "cancel"
DRAG_END = "drag.end"
COMMIT_DONE = "commit.done"
COMMIT_FAILED = "commit.failed"

EVENT_TYPES: set[str] = {
    DRAG_START,
    DRAG_OVER,
    DRAG_LEAVE,
    DROP,
    CONFIRM,
    CANCEL,
    DRAG_END,
    COMMIT_DONE,
    COMMIT_FAILED,
}

# Effect the caller must carry out after a transition
EFFECT_COMMIT = "commit"


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Idle:
    name: str = field(default="idle", init=False)


@dataclass(frozen=True)
class Dragging:
    item: str
    section: str
    name: str = field(default="dragging", init=False)


@dataclass(frozen=True)
class HoveringTarget:
    item: str
    section: str
    candidate: str
    name: str = field(default="hovering", init=False)


@dataclass(frozen=True)
class AwaitingConfirmation:
    item: str
    section: str
    target: str
    name: str = field(default="awaiting_confirmation", init=False)


@dataclass(frozen=True)
class Committing:
    item: str
    section: str
    target: str
    name: str = field(default="committing", init=False)


DragState = Idle | Dragging | HoveringTarget | AwaitingConfirmation | Committing

IDLE = Idle()


def state_to_dict(state: DragState) -> dict[str, Any]:
    """Wire form of a state: its name plus whichever fields it carries."""
    d: dict[str, Any] = {"state": state.name}
    for key in ("item", "section", "candidate", "target"):
        if hasattr(state, key):
            d[key] = getattr(state, key)
    return d


# ---------------------------------------------------------------------------
# Events and transitions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DragEvent:
    """
    One UI gesture. `item` is the dragged item for drag.start, the hovered
    candidate for drag.over, and the drop target for drop.
    """

    type: str
    item: str | None = None
    section: str | None = None


class Transition:
    """
    Result of applying one event to a drag state.
    Never throws — always returns one of these.
    """

    __slots__ = ("state", "accepted", "reason", "effect")

    def __init__(
        self,
        state: DragState,
        accepted: bool,
        reason: str | None = None,
        effect: str | None = None,
    ) -> None:
        self.state = state
        self.accepted = accepted
        self.reason = reason
        self.effect = effect  # EFFECT_COMMIT when the caller must reconcile + save

    def __repr__(self) -> str:  # pragma: no cover
        if self.accepted:
            return f"Transition(state={self.state.name}, effect={self.effect!r})"
        return f"Transition(state={self.state.name}, accepted=False, reason={self.reason!r})"


def _ok(state: DragState, effect: str | None = None) -> Transition:
    return Transition(state=state, accepted=True, effect=effect)


def _reject(state: DragState, reason: str) -> Transition:
    return Transition(state=state, accepted=False, reason=reason)


def _active_drag(state: DragState) -> Dragging | HoveringTarget | None:
    if isinstance(state, (Dragging, HoveringTarget)):
        return state
    return None


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def _handle_drag_start(state: DragState, event: DragEvent, filtered: bool) -> Transition:
    if isinstance(state, Committing):
        return _reject(state, "COMMIT_IN_FLIGHT")
    if not isinstance(state, Idle):
        return _reject(state, "BUSY")
    if not event.item or not event.section:
        return _reject(state, "MISSING_ITEM")
    return _ok(Dragging(item=event.item, section=event.section))


def _handle_drag_over(state: DragState, event: DragEvent, filtered: bool) -> Transition:
    drag = _active_drag(state)
    if drag is None:
        return _reject(state, "NO_DRAG")
    # Other sections and the dragged item itself never highlight
    if event.section != drag.section or not event.item or event.item == drag.item:
        return _ok(Dragging(item=drag.item, section=drag.section))
    return _ok(HoveringTarget(item=drag.item, section=drag.section, candidate=event.item))


def _handle_drag_leave(state: DragState, event: DragEvent, filtered: bool) -> Transition:
    if isinstance(state, HoveringTarget):
        return _ok(Dragging(item=state.item, section=state.section))
    return _ok(state)


def _handle_drop(state: DragState, event: DragEvent, filtered: bool) -> Transition:
    drag = _active_drag(state)
    if drag is None:
        return _reject(state, "NO_DRAG")
    if event.section != drag.section:
        logger.info("drag: cross-section drop %s -> %s ignored", drag.section, event.section)
        return _ok(IDLE)
    if not event.item or event.item == drag.item:
        return _ok(IDLE)
    if filtered:
        return _ok(AwaitingConfirmation(item=drag.item, section=drag.section, target=event.item))
    return _ok(Committing(item=drag.item, section=drag.section, target=event.item), effect=EFFECT_COMMIT)


def _handle_confirm(state: DragState, event: DragEvent, filtered: bool) -> Transition:
    if not isinstance(state, AwaitingConfirmation):
        return _reject(state, "NOT_AWAITING_CONFIRMATION")
    return _ok(Committing(item=state.item, section=state.section, target=state.target), effect=EFFECT_COMMIT)


def _handle_cancel(state: DragState, event: DragEvent, filtered: bool) -> Transition:
    if isinstance(state, Committing):
        return _reject(state, "COMMIT_IN_FLIGHT")
    return _ok(IDLE)


def _handle_drag_end(state: DragState, event: DragEvent, filtered: bool) -> Transition:
    if isinstance(state, (Dragging, HoveringTarget)):
        return _ok(IDLE)
    return _ok(state)


def _handle_commit_finished(state: DragState, event: DragEvent, filtered: bool) -> Transition:
    if not isinstance(state, Committing):
        return _reject(state, "NOT_COMMITTING")
    return _ok(IDLE)


_HANDLERS: dict[str, Callable[[DragState, DragEvent, bool], Transition]] = {
    DRAG_START: _handle_drag_start,
    DRAG_OVER: _handle_drag_over,
    DRAG_LEAVE: _handle_drag_leave,
    DROP: _handle_drop,
    CONFIRM: _handle_confirm,
    CANCEL: _handle_cancel,
    DRAG_END: _handle_drag_end,
    COMMIT_DONE: _handle_commit_finished,
    COMMIT_FAILED: _handle_commit_finished,
}


def transition(state: DragState, event: DragEvent, *, filtered: bool) -> Transition:
    """
    Apply one drag event.

    `filtered` is whether a non-empty filter predicate is active; it only
    matters for drop, where it decides between confirmation and commit.
    """
    handler = _HANDLERS.get(event.type)
    if handler is None:
        return _reject(state, "UNKNOWN_EVENT")
    return handler(state, event, filtered)


def run(events: list[DragEvent], *, filtered: bool, state: DragState = IDLE) -> Transition:
    """Fold a sequence of events. Rejected events leave the state as it was."""
    result = _ok(state)
    for event in events:
        result = transition(result.state, event, filtered=filtered)
    return result
