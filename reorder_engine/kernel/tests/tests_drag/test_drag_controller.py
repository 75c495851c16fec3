"""
Drag Controller -- Commit Tests

The controller drives the state machine against a MemoryOrderStore.

Covers:
  - Unfiltered drop saves immediately
  - Filtered drop does not save until confirm()
  - cancel() leaves the store untouched
  - Swap vs shift controllers on the same gesture
  - Save failure: back to Idle, last known-good order kept, error raised
  - A second gesture is refused while a commit is in flight
  - Concurrent commits on one section are serialised
"""

import asyncio

import pytest

from reorder_engine.kernel.controller import DragController
from reorder_engine.kernel.drag import IDLE, AwaitingConfirmation, Committing
from reorder_engine.kernel.store import OrderSaveError
from reorder_engine.kernel.tests.conftest import PERIODIC, XY
from reorder_engine.kernel.types import SHIFT, SWAP, FilterPredicate


async def _drag(controller, item, target, section="sec-1"):
    await controller.drag_start(item, section)
    await controller.drag_over(target, section)
    result = await controller.drop(target, section)
    await controller.drag_end()
    return result


@pytest.mark.asyncio
class TestUnfilteredCommit:
    async def test_drop_saves_immediately(self, store):
        controller = DragController(store, policy=SWAP)

        result = await _drag(controller, "7", "2")

        assert result.effect == "commit"
        assert controller.state == IDLE
        assert await store.get_full_order("sec-1") == ["1", "7", "2", "3", "4", "5", "6", "8", "9"]
        assert controller.last_result.moved == {"2", "3", "4", "5", "6", "7"}

    async def test_policies_agree_without_filter(self, two_section_store):
        swap = DragController(two_section_store, policy=SWAP)
        await _drag(swap, "a", "c", section="sec-2")
        assert await two_section_store.get_full_order("sec-2") == ["b", "c", "a", "d"]

        shift = DragController(two_section_store, policy=SHIFT)
        await _drag(shift, "a", "d", section="sec-2")
        assert await two_section_store.get_full_order("sec-2") == ["b", "c", "d", "a"]


@pytest.mark.asyncio
class TestConfirmationGate:
    async def test_filtered_drop_does_not_save(self, store):
        controller = DragController(store, policy=SWAP, predicate=XY)

        await _drag(controller, "5", "1")

        assert controller.state == AwaitingConfirmation(item="5", section="sec-1", target="1")
        assert store.save_calls == []

    async def test_confirm_saves_swap(self, store):
        controller = DragController(store, policy=SWAP, predicate=XY)
        await _drag(controller, "5", "1")

        await controller.confirm()

        assert controller.state == IDLE
        assert await store.get_full_order("sec-1") == ["5", "2", "3", "4", "1", "6", "7", "8", "9"]
        assert controller.last_result.filtered_order == ["5", "3", "4", "1"]

    async def test_confirm_saves_shift(self, store):
        controller = DragController(store, policy=SHIFT, predicate=PERIODIC)
        await _drag(controller, "8", "4")

        await controller.confirm()

        assert await store.get_full_order("sec-1") == ["1", "2", "3", "8", "4", "5", "6", "7", "9"]
        assert controller.last_result.filtered_order == ["8", "4", "7"]
        assert controller.last_result.plan.new_filtered == ["8", "4", "7"]

    async def test_cancel_leaves_store_untouched(self, store, nine):
        controller = DragController(store, policy=SHIFT, predicate=PERIODIC)
        await _drag(controller, "8", "4")

        await controller.cancel()

        assert controller.state == IDLE
        assert store.save_calls == []
        assert await store.get_full_order("sec-1") == nine

    async def test_cross_section_drop_is_noop(self, two_section_store):
        controller = DragController(two_section_store, policy=SWAP, predicate=XY)
        await controller.drag_start("5", "sec-1")
        result = await controller.drop("a", "sec-2")

        assert result.accepted
        assert controller.state == IDLE
        assert two_section_store.save_calls == []

    async def test_filter_change_refused_mid_gesture(self, store):
        controller = DragController(store, policy=SWAP, predicate=XY)
        await _drag(controller, "5", "1")

        assert not controller.set_filter(FilterPredicate())
        assert controller.predicate == XY

        await controller.cancel()
        assert controller.set_filter(FilterPredicate())
        assert not controller.filtered


@pytest.mark.asyncio
class TestSaveFailure:
    async def test_failure_returns_to_idle_and_raises(self, store, nine):
        controller = DragController(store, policy=SWAP, predicate=XY)
        await _drag(controller, "5", "1")
        store.fail_saves = True

        with pytest.raises(OrderSaveError):
            await controller.confirm()

        assert controller.state == IDLE
        assert await store.get_full_order("sec-1") == nine

    async def test_retry_after_failure(self, store):
        controller = DragController(store, policy=SWAP, predicate=XY)
        await _drag(controller, "5", "1")
        store.fail_saves = True
        with pytest.raises(OrderSaveError):
            await controller.confirm()

        store.fail_saves = False
        await _drag(controller, "5", "1")
        await controller.confirm()

        assert (await store.get_full_order("sec-1"))[0] == "5"


@pytest.mark.asyncio
class TestCommitSerialisation:
    async def test_drag_start_refused_while_committing(self, store):
        controller = DragController(store, policy=SWAP)
        controller.state = Committing(item="7", section="sec-1", target="2")

        result = await controller.drag_start("3", "sec-1")

        assert not result.accepted
        assert result.reason == "COMMIT_IN_FLIGHT"

    async def test_concurrent_controllers_do_not_lose_moves(self, store):
        first = DragController(store, policy=SHIFT)
        second = DragController(store, policy=SHIFT)

        await asyncio.gather(_drag(first, "9", "1"), _drag(second, "8", "1"))

        order = await store.get_full_order("sec-1")
        assert sorted(order) == sorted(str(i) for i in range(1, 10))
        assert set(order[:2]) == {"8", "9"}

    async def test_unknown_policy(self, store):
        with pytest.raises(ValueError):
            DragController(store, policy="rotate")

    async def test_commit_outside_committing_state_raises(self, store):
        controller = DragController(store, policy=SWAP)

        with pytest.raises(RuntimeError):
            await controller._commit()

        assert controller.state == IDLE
        assert store.save_calls == []
