"""
Pydantic models for the reorder service.

All data shapes defined here. No imports from db, repos, or routes.
"""

from reorder_backend.models.order import (
    ExportResponse,
    Filters,
    MoveRequest,
    MoveResponse,
    OrderRow,
    Question,
    SaveOrderRequest,
    SaveOrderResponse,
    Section,
    SectionOrderResponse,
    SectionResponse,
)

__all__ = [
    # Catalog
    "Section",
    "Question",
    "OrderRow",
    "SectionResponse",
    "ExportResponse",
    # Ordering
    "Filters",
    "SectionOrderResponse",
    "SaveOrderRequest",
    "SaveOrderResponse",
    "MoveRequest",
    "MoveResponse",
]
