"""
Reorder Kernel — Order Store

The only shared mutable resource: per section, the authoritative full
order of item ids. All mutation goes through save_order, which replaces
the whole list or nothing.

OrderStore is the interface; MemoryOrderStore backs tests and the demo.
The Postgres and HTTP implementations live in reorder_backend.repos and
reorder_engine.kernel.http_store.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from reorder_engine.kernel.filters import project
from reorder_engine.kernel.types import FilterPredicate, ItemAttributes

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class SectionNotFound(Exception):
    """Section does not exist in the store."""

    pass


class OrderSaveError(Exception):
    """Persisting a full order failed. The previous order is still in place."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class OrderLoadError(Exception):
    """Reading an order failed for a reason other than a missing section."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class InvalidOrder(OrderSaveError):
    """The order to save is not a permutation of the section's items."""

    pass


def complete_order(order: Sequence[str], item_ids: set[str]) -> list[str]:
    """
    Persisted order restricted to the section's current items, with items
    that were never ordered appended sorted by id.
    """
    kept = [item_id for item_id in order if item_id in item_ids]
    return kept + sorted(item_ids - set(kept))


def check_permutation(section_id: str, order: Sequence[str], item_ids: set[str]) -> None:
    """Raise InvalidOrder unless `order` holds every item of the section exactly once."""
    if len(order) != len(set(order)):
        raise InvalidOrder(f"Order for section {section_id} contains duplicate ids")
    missing = item_ids - set(order)
    unknown = set(order) - item_ids
    if missing or unknown:
        raise InvalidOrder(
            f"Order for section {section_id} is not a permutation: "
            f"missing={sorted(missing)} unknown={sorted(unknown)}"
        )


# ---------------------------------------------------------------------------
# Storage protocol
# ---------------------------------------------------------------------------


class OrderStore:
    """
    Abstract order store.
    Implement with Postgres for production, or in-memory for tests.
    """

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}

    def lock(self, section_id: str) -> asyncio.Lock:
        """Per-section lock serialising read-plan-save within this process."""
        if section_id not in self._locks:
            self._locks[section_id] = asyncio.Lock()
        return self._locks[section_id]

    async def get_full_order(self, section_id: str) -> list[str]:
        """Full order of a section. Raises SectionNotFound."""
        raise NotImplementedError

    async def get_attributes(self, section_id: str) -> dict[str, ItemAttributes]:
        """Attribute lookup for every item in a section. Raises SectionNotFound."""
        raise NotImplementedError

    async def get_filtered(self, section_id: str, predicate: FilterPredicate) -> list[str]:
        """Filtered view of a section's full order."""
        full_order = await self.get_full_order(section_id)
        if predicate.is_empty:
            return full_order
        return project(full_order, await self.get_attributes(section_id), predicate)

    async def save_order(self, section_id: str, order: Sequence[str]) -> None:
        """Replace the section's full order atomically. Raises OrderSaveError."""
        raise NotImplementedError


@dataclass
class MemorySection:
    """One section held by MemoryOrderStore."""

    items: dict[str, ItemAttributes]
    order: list[str] = field(default_factory=list)
    title: str = ""


class MemoryOrderStore(OrderStore):
    """In-memory store for testing and local demos."""

    def __init__(self, sections: Mapping[str, MemorySection] | None = None) -> None:
        super().__init__()
        self.sections: dict[str, MemorySection] = dict(sections or {})
        self.save_calls: list[tuple[str, list[str]]] = []
        self.fail_saves = False

    @classmethod
    def from_orders(
        cls,
        orders: Mapping[str, Sequence[str]],
        attributes: Mapping[str, ItemAttributes] | None = None,
    ) -> MemoryOrderStore:
        """Build a store from {section_id: full order} and a shared attribute lookup."""
        attributes = attributes or {}
        sections = {
            section_id: MemorySection(
                items={item_id: attributes.get(item_id, ItemAttributes()) for item_id in order},
                order=list(order),
            )
            for section_id, order in orders.items()
        }
        return cls(sections)

    def _section(self, section_id: str) -> MemorySection:
        section = self.sections.get(section_id)
        if section is None:
            raise SectionNotFound(section_id)
        return section

    async def get_full_order(self, section_id: str) -> list[str]:
        section = self._section(section_id)
        return complete_order(section.order, set(section.items))

    async def get_attributes(self, section_id: str) -> dict[str, ItemAttributes]:
        return dict(self._section(section_id).items)

    async def save_order(self, section_id: str, order: Sequence[str]) -> None:
        section = self._section(section_id)
        self.save_calls.append((section_id, list(order)))
        if self.fail_saves:
            raise OrderSaveError(f"Failed to save order for section {section_id}")
        check_permutation(section_id, order, set(section.items))
        section.order = list(order)
