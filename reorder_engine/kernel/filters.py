"""
Reorder Kernel — Filtered View Projector

Pure functions: the filtered view is the ordered subsequence of the full
order whose items satisfy the active predicate. Never persisted, never
throws.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from reorder_engine.kernel.types import DIMENSION_VALUES, FilterPredicate, ItemAttributes


def matches(attributes: ItemAttributes | None, predicate: FilterPredicate) -> bool:
    """True if every constraint in the predicate is satisfied."""
    if predicate.is_empty:
        return True
    if attributes is None:
        return False
    return all(getattr(attributes, name) == value for name, value in predicate.constraints().items())


def project(
    full_order: Sequence[str],
    items: Mapping[str, ItemAttributes],
    predicate: FilterPredicate,
) -> list[str]:
    """
    Derive the filtered view of a full order.

    An empty predicate returns the full order unchanged. An id with no
    entry in `items` is treated as filtered out.
    """
    if predicate.is_empty:
        return list(full_order)
    return [item_id for item_id in full_order if matches(items.get(item_id), predicate)]


def is_subsequence(view: Sequence[str], full_order: Sequence[str]) -> bool:
    """True if `view` appears in `full_order` in the same relative order."""
    it = iter(full_order)
    return all(item_id in it for item_id in view)


def is_satisfiable(predicate: FilterPredicate) -> bool:
    """False if any constraint names a value no item can carry; such a view is always empty."""
    return all(value in DIMENSION_VALUES[name] for name, value in predicate.constraints().items())
