"""
Reconciliation Engine -- Guard Tests

Inputs that must come back as the unchanged full order, never an exception.
A filter or data change racing a drag gesture produces these.

Covers:
  - Empty filtered lists
  - Length mismatch between old and new filtered orders
  - Identical old and new filtered orders
  - New filtered order holding ids the old one does not
  - Dragged or target item missing from the full order
"""

import logging

import pytest

from reorder_engine.kernel.reconcile import apply_filtered_reorder, apply_filtered_shift, find_move

POLICIES = [apply_filtered_reorder, apply_filtered_shift]


@pytest.mark.parametrize("policy", POLICIES)
class TestShapeGuards:
    def test_empty_old_filtered(self, policy, nine):
        assert policy(nine, [], ["1"]) == nine

    def test_both_empty(self, policy, nine):
        assert policy(nine, [], []) == nine

    def test_length_mismatch(self, policy, nine):
        assert policy(nine, ["1", "3", "4"], ["3", "1"]) == nine

    def test_same_order_is_noop(self, policy, nine):
        same = ["1", "3", "4", "5"]
        assert policy(nine, same, list(same)) == nine

    def test_foreign_id_in_new_filtered(self, policy, nine):
        assert policy(nine, ["1", "3"], ["9", "1"]) == nine

    def test_returns_a_copy(self, policy, nine):
        result = policy(nine, [], [])
        result.append("x")
        assert "x" not in nine


@pytest.mark.parametrize("policy", POLICIES)
class TestMissingIdentifiers:
    def test_dragged_missing_from_full_order(self, policy):
        full = ["1", "2", "3"]
        assert policy(full, ["3", "7"], ["7", "3"]) == full

    def test_target_missing_from_full_order(self, policy):
        full = ["1", "2", "3"]
        assert policy(full, ["7", "1", "2"], ["2", "7", "1"]) == full

    def test_desync_is_logged(self, policy, caplog):
        with caplog.at_level(logging.WARNING, logger="reorder_engine.kernel.reconcile"):
            policy(["1", "2"], ["1", "7"], ["7", "1"])
        assert "not in full order" in caplog.text


class TestFindMoveGuards:
    def test_duplicate_ids_rejected(self):
        assert find_move(["a", "a", "b"], ["b", "a", "a"]) is None

    def test_mismatch_returns_none(self):
        assert find_move(["a"], ["a", "b"]) is None
