"""Tests for SectionOrderRepo against Postgres. Skipped without DATABASE_URL."""

from __future__ import annotations

import asyncio
import os

import pytest
import pytest_asyncio

from reorder_backend import db
from reorder_backend.repos.order_repo import SectionOrderRepo
from reorder_backend.tests.conftest import SECTION_1, SECTION_1_XY, SECTION_2
from reorder_engine.kernel.controller import commit_reorder
from reorder_engine.kernel.store import InvalidOrder, SectionNotFound
from reorder_engine.kernel.types import SWAP, FilterPredicate

pytestmark = [
    pytest.mark.asyncio,
    pytest.mark.skipif(not os.environ.get("DATABASE_URL"), reason="DATABASE_URL not set"),
]


@pytest_asyncio.fixture
async def pg_repo():
    """A freshly seeded Postgres repository."""
    await db.init_pool()
    repo = SectionOrderRepo()
    await repo.reset()
    yield repo
    await db.close_pool()


async def test_seeded_order(pg_repo):
    assert await pg_repo.get_full_order("sec-1") == SECTION_1
    assert await pg_repo.get_full_order("sec-2") == SECTION_2


async def test_filtered_view(pg_repo):
    assert await pg_repo.get_filtered("sec-1", FilterPredicate(participant_type="XY")) == SECTION_1_XY


async def test_save_replaces_whole_order(pg_repo):
    new_order = list(reversed(SECTION_2))
    await pg_repo.save_order("sec-2", new_order)
    assert await pg_repo.get_full_order("sec-2") == new_order


async def test_invalid_order_writes_nothing(pg_repo):
    with pytest.raises(InvalidOrder):
        await pg_repo.save_order("sec-2", SECTION_2[:3])
    assert await pg_repo.get_full_order("sec-2") == SECTION_2


async def test_unknown_section(pg_repo):
    with pytest.raises(SectionNotFound):
        await pg_repo.get_full_order("nope")
    with pytest.raises(SectionNotFound):
        await pg_repo.save_order("nope", [])


async def test_unordered_questions_appended(pg_repo):
    """Questions with no order row land at the end, sorted by id."""
    async with db.system_conn() as conn:
        await conn.execute(
            "DELETE FROM section_question_order WHERE section_id = $1 AND question_id = ANY($2::text[])",
            "sec-2",
            ["sec-2-pqr-q1", "sec-2-pqr-q3"],
        )
    assert await pg_repo.get_full_order("sec-2") == [
        "sec-2-pqr-q2",
        "sec-2-pqr-q4",
        "sec-2-pqr-q1",
        "sec-2-pqr-q3",
    ]


async def test_concurrent_commits_both_land(pg_repo):
    xy = FilterPredicate(participant_type="XY")
    await asyncio.gather(
        commit_reorder(pg_repo, "sec-1", "sec-1-xy-q4", "sec-1-xy-q1", predicate=xy, policy=SWAP),
        commit_reorder(pg_repo, "sec-1", "sec-1-xy-q5", "sec-1-xy-q2", predicate=xy, policy=SWAP),
    )
    full_order = await pg_repo.get_full_order("sec-1")
    assert sorted(full_order) == sorted(SECTION_1)
    assert full_order[0] == "sec-1-xy-q4"
