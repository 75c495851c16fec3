"""
Repository layer for the reorder service.

All SQL lives here and ONLY here. No database access outside this module.
"""

from reorder_backend.config import settings
from reorder_backend.repos.memory_repo import MemorySectionRepo
from reorder_backend.repos.order_repo import SectionOrderRepo

SectionRepo = SectionOrderRepo | MemorySectionRepo


def make_order_repo() -> SectionRepo:
    """The repository selected by STORE_BACKEND."""
    if settings.STORE_BACKEND == "memory":
        return MemorySectionRepo()
    return SectionOrderRepo()


# Shared instance. The memory backend holds state, so every route uses this one.
order_repo: SectionRepo = make_order_repo()

__all__ = [
    "SectionOrderRepo",
    "MemorySectionRepo",
    "SectionRepo",
    "make_order_repo",
    "order_repo",
]
