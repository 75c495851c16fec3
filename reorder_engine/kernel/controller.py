"""
Reorder Kernel — Drag Controller

Sits between the pure functions (drag, reconcile) and a store. Feeds UI
gestures through the drag state machine and, when a transition asks for a
commit, runs reconcile + save inside the section's lock.

This is where IO happens. drag and reconcile are pure.
"""

from __future__ import annotations

import logging

from reorder_engine.kernel.drag import (
    CANCEL,
    COMMIT_DONE,
    COMMIT_FAILED,
    CONFIRM,
    DRAG_END,
    DRAG_LEAVE,
    DRAG_OVER,
    DRAG_START,
    DROP,
    EFFECT_COMMIT,
    IDLE,
    Committing,
    DragEvent,
    DragState,
    Idle,
    Transition,
    transition,
)
from reorder_engine.kernel.reconcile import moved_items, plan_reorder
from reorder_engine.kernel.store import OrderStore
from reorder_engine.kernel.types import POLICIES, SWAP, CommitResult, FilterPredicate

logger = logging.getLogger(__name__)


class DragController:
    """
    One consuming view's drag session over a shared store.

    The reconciliation policy is fixed per controller (per screen). The
    filter predicate may change between gestures.
    """

    def __init__(
        self,
        store: OrderStore,
        *,
        policy: str = SWAP,
        predicate: FilterPredicate | None = None,
    ) -> None:
        if policy not in POLICIES:
            raise ValueError(f"Unknown reconciliation policy: {policy!r}")
        self._store = store
        self.policy = policy
        self.predicate = predicate or FilterPredicate()
        self.state: DragState = IDLE
        self.last_result: CommitResult | None = None
        self._original: dict[str, list[str]] = {}

    @property
    def filtered(self) -> bool:
        return not self.predicate.is_empty

    def set_filter(self, predicate: FilterPredicate) -> bool:
        """Change the active filter. Only allowed while no gesture is in progress."""
        if not isinstance(self.state, Idle):
            logger.info("drag: filter change ignored in state %s", self.state.name)
            return False
        self.predicate = predicate
        return True

    async def load(self, section_id: str) -> tuple[list[str], list[str]]:
        """Current (full order, filtered view) for a section."""
        full_order = await self._store.get_full_order(section_id)
        self._original.setdefault(section_id, full_order)
        filtered = await self._store.get_filtered(section_id, self.predicate)
        return full_order, filtered

    # -- gestures --

    async def drag_start(self, item: str, section: str) -> Transition:
        return await self.dispatch(DragEvent(DRAG_START, item, section))

    async def drag_over(self, candidate: str, section: str) -> Transition:
        return await self.dispatch(DragEvent(DRAG_OVER, candidate, section))

    async def drag_leave(self) -> Transition:
        return await self.dispatch(DragEvent(DRAG_LEAVE))

    async def drop(self, target: str, section: str) -> Transition:
        return await self.dispatch(DragEvent(DROP, target, section))

    async def confirm(self) -> Transition:
        return await self.dispatch(DragEvent(CONFIRM))

    async def cancel(self) -> Transition:
        return await self.dispatch(DragEvent(CANCEL))

    async def drag_end(self) -> Transition:
        return await self.dispatch(DragEvent(DRAG_END))

    async def dispatch(self, event: DragEvent) -> Transition:
        """
        Apply one event. Runs the commit when the transition asks for it.

        Raises OrderSaveError / OrderLoadError / SectionNotFound from the commit, after the
        machine has returned to Idle.
        """
        result = self._apply(event)
        if result.effect == EFFECT_COMMIT:
            self.last_result = await self._commit()
            result = Transition(state=self.state, accepted=True, effect=EFFECT_COMMIT)
        return result

    def _apply(self, event: DragEvent) -> Transition:
        result = transition(self.state, event, filtered=self.filtered)
        if not result.accepted:
            logger.debug("drag: %s rejected in state %s: %s", event.type, self.state.name, result.reason)
        self.state = result.state
        return result

    # -- commit --

    async def _commit(self) -> CommitResult:
        state = self.state
        if not isinstance(state, Committing):
            raise RuntimeError(f"commit requested in state {state.name}")

        try:
            result = await commit_reorder(
                self._store,
                state.section,
                state.item,
                state.target,
                predicate=self.predicate,
                policy=self.policy,
            )
        except Exception:
            self._apply(DragEvent(COMMIT_FAILED))
            logger.warning("drag: commit of %s onto %s in section %s failed", state.item, state.target, state.section)
            raise

        self._apply(DragEvent(COMMIT_DONE))
        original = self._original.setdefault(state.section, result.plan.old_full)
        result.moved = moved_items(original, result.full_order)
        return result


async def commit_reorder(
    store: OrderStore,
    section_id: str,
    dragged: str,
    target: str,
    *,
    predicate: FilterPredicate,
    policy: str,
) -> CommitResult:
    """
    Read, reconcile and save one drop inside the section's lock.

    Nothing is written when the drop changes nothing. Raises whatever the
    store raises (SectionNotFound, OrderLoadError, OrderSaveError); the persisted order is
    then unchanged.
    """
    async with store.lock(section_id):
        full_order = await store.get_full_order(section_id)
        filtered = await store.get_filtered(section_id, predicate)
        plan = plan_reorder(
            full_order,
            filtered,
            dragged,
            target,
            policy=policy,
            filtered_view=not predicate.is_empty,
        )
        if plan.changed:
            await store.save_order(section_id, plan.new_full)
        filtered_after = await store.get_filtered(section_id, predicate)

    logger.info(
        "drag: committed %s onto %s in section %s (policy=%s, changed=%s)",
        dragged,
        target,
        section_id,
        policy,
        plan.changed,
    )
    return CommitResult(
        section_id=section_id,
        full_order=plan.new_full,
        filtered_order=filtered_after,
        plan=plan,
        moved=moved_items(plan.old_full, plan.new_full),
    )
