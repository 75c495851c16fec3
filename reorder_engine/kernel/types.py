"""
Reorder Kernel — Shared Types

Data classes used across filters, reconcile, drag, and the stores.
These are the contracts that bind the kernel together.

Items are opaque string ids. Attributes are used only for filtering,
never for ordering.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# ---------------------------------------------------------------------------
# Attribute value sets
# ---------------------------------------------------------------------------

REVIEW_TYPES: set[str] = {"Due Diligence", "Periodic Review"}

PARTICIPANT_TYPES: set[str] = {"XY", "PQR"}

COUNTRIES: set[str] = {"USA", "UK", "India", "Canada"}

QUESTION_STATUSES: set[str] = {"APPROVED", "REVIEW", "CANCELLED"}

# Filter dimensions: attribute name -> wire key
DIMENSIONS: dict[str, str] = {
    "review_type": "reviewType",
    "participant_type": "participantType",
    "country": "country",
}

# Filter dimensions: attribute name -> values an item can carry
DIMENSION_VALUES: dict[str, set[str]] = {
    "review_type": REVIEW_TYPES,
    "participant_type": PARTICIPANT_TYPES,
    "country": COUNTRIES,
}

# Reconciliation policies
SWAP = "swap"
SHIFT = "shift"
POLICIES: set[str] = {SWAP, SHIFT}


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ItemAttributes:
    """Categorical dimensions of one item. Any may be absent."""

    review_type: str | None = None
    participant_type: str | None = None
    country: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {wire: getattr(self, name) for name, wire in DIMENSIONS.items()}

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> ItemAttributes:
        return cls(**{name: d.get(wire, d.get(name)) for name, wire in DIMENSIONS.items()})


@dataclass(frozen=True)
class FilterPredicate:
    """
    Conjunction of attribute-equality constraints.

    A None field places no constraint on that dimension. The empty
    predicate (all None) matches everything and means "no filter".
    """

    review_type: str | None = None
    participant_type: str | None = None
    country: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.constraints()

    def constraints(self) -> dict[str, str]:
        """Active constraints as {dimension: required value}."""
        return {name: getattr(self, name) for name in DIMENSIONS if getattr(self, name) is not None}

    def to_dict(self) -> dict[str, str]:
        """Wire form with camelCase keys, absent constraints omitted."""
        return {DIMENSIONS[name]: value for name, value in self.constraints().items()}

    @classmethod
    def from_dict(cls, d: dict[str, Any] | None) -> FilterPredicate:
        """Accepts camelCase or snake_case keys. Blank strings count as absent."""
        if not d:
            return cls()
        values: dict[str, str | None] = {}
        for name, wire in DIMENSIONS.items():
            raw = d.get(wire, d.get(name))
            values[name] = raw if raw else None
        return cls(**values)


@dataclass(frozen=True)
class Move:
    """The dragged/target pair identified from two filtered orders."""

    dragged: str
    target: str
    old_index: int
    new_index: int

    @property
    def toward_front(self) -> bool:
        return self.new_index < self.old_index


@dataclass
class ReorderPlan:
    """Everything computed for one drop, before it is persisted."""

    old_full: list[str]
    new_full: list[str]
    old_filtered: list[str]
    new_filtered: list[str]
    policy: str
    move: Move | None = None

    @property
    def changed(self) -> bool:
        return self.new_full != self.old_full

    def to_dict(self) -> dict[str, Any]:
        return {
            "policy": self.policy,
            "changed": self.changed,
            "dragged": self.move.dragged if self.move else None,
            "target": self.move.target if self.move else None,
            "old_full": self.old_full,
            "new_full": self.new_full,
            "old_filtered": self.old_filtered,
            "new_filtered": self.new_filtered,
        }


@dataclass
class CommitResult:
    """Outcome of a committed drop, returned by the drag controller."""

    section_id: str
    full_order: list[str]
    filtered_order: list[str]
    plan: ReorderPlan
    moved: set[str] = field(default_factory=set)

    def to_dict(self) -> dict[str, Any]:
        return {
            "section_id": self.section_id,
            "full_order": self.full_order,
            "filtered_order": self.filtered_order,
            "moved": sorted(self.moved),
            "plan": self.plan.to_dict(),
        }
