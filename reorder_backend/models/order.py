"""Section, question and ordering models."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

from reorder_engine.kernel.types import FilterPredicate, ItemAttributes

ReviewType = Literal["Due Diligence", "Periodic Review"]
ParticipantType = Literal["XY", "PQR"]
Country = Literal["USA", "UK", "India", "Canada"]
QuestionStatus = Literal["APPROVED", "REVIEW", "CANCELLED"]
Policy = Literal["swap", "shift"]
Screen = Literal["question_order", "section_order"]


class Section(BaseModel):
    """Represents a row in the sections table."""

    id: str
    title: str


class Question(BaseModel):
    """Represents a row in the questions table. Only the three dimensions drive filtering."""

    id: str
    section_id: str
    text: str
    review_type: ReviewType | None = None
    participant_type: ParticipantType | None = None
    country: Country | None = None
    status: QuestionStatus = "REVIEW"
    created_by: str | None = None
    created_at: datetime | None = None

    def attributes(self) -> ItemAttributes:
        return ItemAttributes(
            review_type=self.review_type,
            participant_type=self.participant_type,
            country=self.country,
        )


class OrderRow(BaseModel):
    """Represents a row in the section_question_order table. order_index is 1-based."""

    section_id: str
    question_id: str
    order_index: int = Field(ge=1)


class Filters(BaseModel):
    """The active filter as sent by the client. Omitted fields place no constraint."""

    model_config = {"extra": "forbid", "populate_by_name": True}

    review_type: ReviewType | None = Field(default=None, alias="reviewType")
    participant_type: ParticipantType | None = Field(default=None, alias="participantType")
    country: Country | None = None

    def to_predicate(self) -> FilterPredicate:
        return FilterPredicate(
            review_type=self.review_type,
            participant_type=self.participant_type,
            country=self.country,
        )


class SectionResponse(BaseModel):
    """One entry of GET /api/sections."""

    id: str
    title: str
    question_count: int


class SectionOrderResponse(BaseModel):
    """What GET /api/sections/{id}/order returns."""

    section_id: str
    filters: dict[str, str] = Field(default_factory=dict)
    filtered: bool
    full_order: list[str]
    filtered_order: list[str]
    questions: list[Question]


class SaveOrderRequest(BaseModel):
    """What the client sends to replace a section's full order."""

    model_config = {"extra": "forbid", "populate_by_name": True}

    question_ids_in_order: list[str] = Field(alias="questionIdsInOrder")


class SaveOrderResponse(BaseModel):
    """What the save endpoint returns."""

    status: Literal["SUCCESS"] = "SUCCESS"
    section_id: str
    full_order: list[str]


class MoveRequest(BaseModel):
    """A drop performed server-side: `dragged` dropped onto `target` in the filtered view."""

    model_config = {"extra": "forbid"}

    dragged: str = Field(min_length=1)
    target: str = Field(min_length=1)
    filters: Filters = Field(default_factory=Filters)
    policy: Policy | None = None
    screen: Screen | None = None


class MoveResponse(BaseModel):
    """What the move endpoint returns."""

    section_id: str
    policy: Policy
    changed: bool
    full_order: list[str]
    filtered_order: list[str]
    plan: dict[str, Any]


class ExportResponse(BaseModel):
    """Everything in the ordering tables, for download."""

    sections: list[Section]
    questions: list[Question]
    section_question_order: list[OrderRow]
