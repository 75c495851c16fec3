"""
Reorder Kernel — Reconciliation Engine

Pure functions: (full order, old filtered order, new filtered order) → new full order.

A user reorders a filtered view; these functions map that edit back onto
the complete ordering of the section. Two policies:

  swap   — apply_filtered_reorder: the dragged item and the item it was
           dropped on trade places, every other slot is untouched.
  shift  — apply_filtered_shift: the dragged item is removed and
           re-inserted next to the target; items in between (hidden ones
           included) slide by one.

Examples (full order [1..9]):
  swap,  filtered [1, 3, 4, 5] → [5, 1, 3, 4]  ⇒  [5, 2, 3, 4, 1, 6, 7, 8, 9]
  shift, filtered [4, 7, 8]    → [8, 4, 7]     ⇒  [1, 2, 3, 8, 4, 5, 6, 7, 9]

Never throws on data. Mismatched or stale inputs return the full order
unchanged and are logged.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from reorder_engine.kernel.types import SHIFT, SWAP, Move, ReorderPlan

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Move identification
# ---------------------------------------------------------------------------


def find_move(old_filtered: Sequence[str], new_filtered: Sequence[str]) -> Move | None:
    """
    Identify the dragged and target items between two filtered orders.

    The dragged item is the one whose index changed the most; on a tie the
    first one encountered while scanning `new_filtered` wins. The target is
    whatever occupied the dragged item's new slot before the drag.

    Returns None when the lists differ in length, are empty, do not hold
    the same ids, or nothing moved.
    """
    if len(old_filtered) != len(new_filtered) or not old_filtered:
        return None

    old_index = {item_id: i for i, item_id in enumerate(old_filtered)}
    if len(old_index) != len(old_filtered) or any(item_id not in old_index for item_id in new_filtered):
        logger.warning(
            "reconcile: filtered orders hold different ids (old=%d, new=%d); ignoring",
            len(old_filtered),
            len(new_filtered),
        )
        return None

    dragged: str | None = None
    old_pos = new_pos = -1
    max_movement = 0

    for i, item_id in enumerate(new_filtered):
        movement = abs(i - old_index[item_id])
        if movement > max_movement:
            max_movement = movement
            dragged = item_id
            old_pos = old_index[item_id]
            new_pos = i

    if dragged is None:
        return None

    return Move(dragged=dragged, target=old_filtered[new_pos], old_index=old_pos, new_index=new_pos)


def _locate(full_order: Sequence[str], move: Move) -> tuple[int, int] | None:
    """Positions of the dragged and target items in the full order."""
    try:
        return full_order.index(move.dragged), full_order.index(move.target)
    except ValueError:
        logger.warning(
            "reconcile: dragged=%s or target=%s not in full order; store out of sync",
            move.dragged,
            move.target,
        )
        return None


# ---------------------------------------------------------------------------
# Policies
# ---------------------------------------------------------------------------


def apply_filtered_reorder(
    full_order: Sequence[str],
    old_filtered: Sequence[str],
    new_filtered: Sequence[str],
) -> list[str]:
    """Swap policy: the dragged and target items exchange their two slots."""
    result = list(full_order)
    move = find_move(old_filtered, new_filtered)
    if move is None:
        return result

    positions = _locate(result, move)
    if positions is None:
        return result

    dragged_pos, target_pos = positions
    result[dragged_pos], result[target_pos] = move.target, move.dragged
    return result


def apply_filtered_shift(
    full_order: Sequence[str],
    old_filtered: Sequence[str],
    new_filtered: Sequence[str],
) -> list[str]:
    """
    Shift-insert policy: remove the dragged item and re-insert it at the
    target's position in the shortened list.

    Moving toward the front lands immediately before the target. Moving
    toward the back lands immediately after it, so the re-filtered result
    equals `new_filtered` in both directions.
    """
    result = list(full_order)
    move = find_move(old_filtered, new_filtered)
    if move is None:
        return result

    positions = _locate(result, move)
    if positions is None:
        return result

    dragged_pos, _ = positions
    del result[dragged_pos]

    insert_at = result.index(move.target)
    # Toward the back lands after the target, not before it; insert-before would
    # leave the dragged item one slot short in the re-filtered view.
    if not move.toward_front:
        insert_at += 1
    result.insert(insert_at, move.dragged)
    return result


_POLICIES: dict[str, Callable[[Sequence[str], Sequence[str], Sequence[str]], list[str]]] = {
    SWAP: apply_filtered_reorder,
    SHIFT: apply_filtered_shift,
}


def reconcile(
    policy: str,
    full_order: Sequence[str],
    old_filtered: Sequence[str],
    new_filtered: Sequence[str],
) -> list[str]:
    """Dispatch to a reconciliation policy by name."""
    handler = _POLICIES.get(policy)
    if handler is None:
        raise ValueError(f"Unknown reconciliation policy: {policy!r}")
    return handler(full_order, old_filtered, new_filtered)


# ---------------------------------------------------------------------------
# View-side helpers
# ---------------------------------------------------------------------------


def move_item(items: Sequence[str], source: str, target: str) -> list[str]:
    """
    Plain list reorder: take `source` out and put it at `target`'s index.

    This is what the view does to its own list on drop. Unknown ids return
    the list unchanged.
    """
    result = list(items)
    try:
        from_index = result.index(source)
        to_index = result.index(target)
    except ValueError:
        return result

    removed = result.pop(from_index)
    result.insert(to_index, removed)
    return result


def plan_reorder(
    full_order: Sequence[str],
    filtered_order: Sequence[str],
    dragged: str,
    target: str,
    *,
    policy: str,
    filtered_view: bool,
) -> ReorderPlan:
    """
    Compute everything for one drop of `dragged` onto `target`.

    Unfiltered views reorder the full order directly, so both policies give
    the same answer there. Filtered views go through the chosen policy.
    """
    if policy not in _POLICIES:
        raise ValueError(f"Unknown reconciliation policy: {policy!r}")

    if not filtered_view:
        new_full = move_item(full_order, dragged, target)
        return ReorderPlan(
            old_full=list(full_order),
            new_full=new_full,
            old_filtered=list(full_order),
            new_filtered=list(new_full),
            policy=policy,
            move=find_move(full_order, new_full),
        )

    new_filtered = move_item(filtered_order, dragged, target)
    new_full = reconcile(policy, full_order, filtered_order, new_filtered)

    return ReorderPlan(
        old_full=list(full_order),
        new_full=new_full,
        old_filtered=list(filtered_order),
        new_filtered=new_filtered,
        policy=policy,
        move=find_move(filtered_order, new_filtered),
    )


def moved_items(original: Sequence[str], current: Sequence[str]) -> set[str]:
    """Ids whose rank in `current` differs from their rank in `original`."""
    original_rank = {item_id: i for i, item_id in enumerate(original)}
    return {item_id for i, item_id in enumerate(current) if original_rank.get(item_id) != i}
