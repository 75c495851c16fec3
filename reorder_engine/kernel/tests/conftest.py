"""
Reorder kernel test configuration.

Kernel tests use MemoryOrderStore and need no database or network.
"""

from __future__ import annotations

import pytest

from reorder_engine.kernel.store import MemoryOrderStore
from reorder_engine.kernel.types import FilterPredicate, ItemAttributes

NINE = [str(i) for i in range(1, 10)]

XY_DD = ItemAttributes(review_type="Due Diligence", participant_type="XY", country="USA")
PQR_DD = ItemAttributes(review_type="Due Diligence", participant_type="PQR", country="UK")
PQR_PR = ItemAttributes(review_type="Periodic Review", participant_type="PQR", country="India")

# Items 1, 3, 4, 5 are XY; the rest PQR. 4, 7, 8 are Periodic Review.
NINE_ATTRIBUTES: dict[str, ItemAttributes] = {
    "1": XY_DD,
    "2": PQR_DD,
    "3": XY_DD,
    "4": ItemAttributes(review_type="Periodic Review", participant_type="XY", country="India"),
    "5": XY_DD,
    "6": PQR_DD,
    "7": PQR_PR,
    "8": PQR_PR,
    "9": PQR_DD,
}

XY = FilterPredicate(participant_type="XY")
PERIODIC = FilterPredicate(review_type="Periodic Review")


@pytest.fixture
def nine():
    """Full order 1..9 as string ids."""
    return list(NINE)


@pytest.fixture
def store():
    """One section "sec-1" holding items 1..9 in order."""
    return MemoryOrderStore.from_orders({"sec-1": NINE}, NINE_ATTRIBUTES)


@pytest.fixture
def two_section_store():
    """Sections "sec-1" (1..9) and "sec-2" (a..d)."""
    attributes = dict(NINE_ATTRIBUTES)
    for item_id in "abcd":
        attributes[item_id] = PQR_PR
    return MemoryOrderStore.from_orders({"sec-1": NINE, "sec-2": list("abcd")}, attributes)
