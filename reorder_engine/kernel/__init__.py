"""
Reorder Kernel — filtered-view order reconciliation.

Components:
  filters     — filter predicate + filtered view projector (pure)
  reconcile   — (full, old filtered, new filtered) → full  (pure, swap | shift)
  drag        — (state, event) → transition  (pure drag/drop state machine)
  store       — OrderStore protocol + in-memory store
  controller  — coordinates drag + reconcile + store IO
"""

from reorder_engine.kernel.controller import DragController, commit_reorder
from reorder_engine.kernel.drag import transition
from reorder_engine.kernel.filters import matches, project
from reorder_engine.kernel.reconcile import (
    apply_filtered_reorder,
    apply_filtered_shift,
    find_move,
    move_item,
    plan_reorder,
    reconcile,
)
from reorder_engine.kernel.store import MemoryOrderStore, OrderLoadError, OrderSaveError, OrderStore
from reorder_engine.kernel.types import SHIFT, SWAP, FilterPredicate, ItemAttributes

__all__ = [
    "project",
    "matches",
    "find_move",
    "apply_filtered_reorder",
    "apply_filtered_shift",
    "reconcile",
    "move_item",
    "plan_reorder",
    "transition",
    "OrderStore",
    "MemoryOrderStore",
    "OrderSaveError",
    "OrderLoadError",
    "DragController",
    "commit_reorder",
    "FilterPredicate",
    "ItemAttributes",
    "SWAP",
    "SHIFT",
]
