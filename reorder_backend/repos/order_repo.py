"""Repository for sections, questions, and their persisted order."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import asyncpg

from reorder_backend.db import system_conn
from reorder_backend.models.order import OrderRow, Question, Section
from reorder_backend.services.seed import demo_data
from reorder_engine.kernel.store import (
    OrderSaveError,
    OrderStore,
    SectionNotFound,
    check_permutation,
    complete_order,
)
from reorder_engine.kernel.types import ItemAttributes

logger = logging.getLogger(__name__)


def _row_to_question(row: asyncpg.Record) -> Question:
    """Convert a database row to a Question model."""
    return Question(
        id=row["id"],
        section_id=row["section_id"],
        text=row["text"],
        review_type=row["review_type"],
        participant_type=row["participant_type"],
        country=row["country"],
        status=row["status"],
        created_by=row["created_by"],
        created_at=row["created_at"],
    )


async def _require_section(conn: asyncpg.Connection, section_id: str) -> None:
    exists = await conn.fetchval("SELECT 1 FROM sections WHERE id = $1", section_id)
    if not exists:
        raise SectionNotFound(section_id)


class SectionOrderRepo(OrderStore):
    """All ordering-related database operations. Implements OrderStore over Postgres."""

    async def list_sections(self) -> list[Section]:
        """All sections ordered by id."""
        async with system_conn() as conn:
            rows = await conn.fetch("SELECT id, title FROM sections ORDER BY id")
            return [Section(id=row["id"], title=row["title"]) for row in rows]

    async def list_questions(self, section_id: str) -> list[Question]:
        """
        Questions belonging to a section, ordered by id.

        Raises:
            SectionNotFound: no such section
        """
        async with system_conn() as conn:
            await _require_section(conn, section_id)
            rows = await conn.fetch("SELECT * FROM questions WHERE section_id = $1 ORDER BY id", section_id)
            return [_row_to_question(row) for row in rows]

    async def get_full_order(self, section_id: str) -> list[str]:
        """
        Full order of a section.

        Questions with no order row yet (new, or never reordered) are
        appended sorted by id.
        """
        async with system_conn() as conn:
            await _require_section(conn, section_id)
            ordered = await conn.fetch(
                "SELECT question_id FROM section_question_order WHERE section_id = $1 ORDER BY order_index",
                section_id,
            )
            question_ids = await conn.fetch("SELECT id FROM questions WHERE section_id = $1", section_id)
            return complete_order([r["question_id"] for r in ordered], {r["id"] for r in question_ids})

    async def get_attributes(self, section_id: str) -> dict[str, ItemAttributes]:
        async with system_conn() as conn:
            await _require_section(conn, section_id)
            rows = await conn.fetch(
                "SELECT id, review_type, participant_type, country FROM questions WHERE section_id = $1",
                section_id,
            )
            return {
                row["id"]: ItemAttributes(
                    review_type=row["review_type"],
                    participant_type=row["participant_type"],
                    country=row["country"],
                )
                for row in rows
            }

    async def save_order(self, section_id: str, order: Sequence[str]) -> None:
        """
        Replace a section's full order in one transaction.

        Concurrent writers to the same section queue on an advisory lock;
        the last one wins.

        Raises:
            SectionNotFound: no such section
            InvalidOrder: order is not a permutation of the section's questions
            OrderSaveError: the database rejected the write
        """
        try:
            async with system_conn() as conn:
                await conn.execute("SELECT pg_advisory_xact_lock(hashtext($1))", section_id)
                await _require_section(conn, section_id)
                rows = await conn.fetch("SELECT id FROM questions WHERE section_id = $1", section_id)
                check_permutation(section_id, order, {r["id"] for r in rows})

                await conn.execute("DELETE FROM section_question_order WHERE section_id = $1", section_id)
                await conn.executemany(
                    """
                    INSERT INTO section_question_order (section_id, question_id, order_index)
                    VALUES ($1, $2, $3)
                    """,
                    [(section_id, question_id, i + 1) for i, question_id in enumerate(order)],
                )
        except (asyncpg.PostgresError, OSError) as e:
            logger.warning("order_repo: save failed for section %s: %s", section_id, e)
            raise OrderSaveError(f"Failed to save order for section {section_id}") from e

        logger.info("order_repo: saved %d questions for section %s", len(order), section_id)

    async def export(self) -> tuple[list[Section], list[Question], list[OrderRow]]:
        """Every section, question and order row."""
        async with system_conn() as conn:
            sections = await conn.fetch("SELECT id, title FROM sections ORDER BY id")
            questions = await conn.fetch("SELECT * FROM questions ORDER BY id")
            rows = await conn.fetch(
                "SELECT section_id, question_id, order_index FROM section_question_order ORDER BY section_id, order_index"
            )
            return (
                [Section(id=r["id"], title=r["title"]) for r in sections],
                [_row_to_question(r) for r in questions],
                [OrderRow(section_id=r["section_id"], question_id=r["question_id"], order_index=r["order_index"]) for r in rows],
            )

    async def reset(self) -> None:
        """Wipe the ordering tables and reseed the demo data."""
        sections, questions, rows = demo_data()
        async with system_conn() as conn:
            await conn.execute("DELETE FROM section_question_order")
            await conn.execute("DELETE FROM questions")
            await conn.execute("DELETE FROM sections")
            await conn.executemany(
                "INSERT INTO sections (id, title) VALUES ($1, $2)",
                [(s.id, s.title) for s in sections],
            )
            await conn.executemany(
                """
                INSERT INTO questions (id, section_id, text, review_type, participant_type, country, status, created_by)
                VALUES ($1, $2, $3, $4, $5, $6, $7, $8)
                """,
                [
                    (q.id, q.section_id, q.text, q.review_type, q.participant_type, q.country, q.status, q.created_by)
                    for q in questions
                ],
            )
            await conn.executemany(
                "INSERT INTO section_question_order (section_id, question_id, order_index) VALUES ($1, $2, $3)",
                [(r.section_id, r.question_id, r.order_index) for r in rows],
            )
        logger.info("order_repo: reset to %d sections, %d questions", len(sections), len(questions))
