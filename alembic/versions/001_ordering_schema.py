"""Sections, questions and the per-section question order.

Revision ID: 001
Revises:
Create Date: 2026-10-18
"""

from alembic import op


# revision identifiers, used by Alembic.
revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.execute("""
        CREATE TABLE sections (
            id TEXT PRIMARY KEY,
            title TEXT NOT NULL
        );
    """)

    # Only review_type, participant_type and country drive filtering
    op.execute("""
        CREATE TABLE questions (
            id TEXT PRIMARY KEY,
            section_id TEXT NOT NULL REFERENCES sections(id) ON DELETE CASCADE,
            text TEXT NOT NULL,
            review_type TEXT CHECK (review_type IN ('Due Diligence', 'Periodic Review')),
            participant_type TEXT CHECK (participant_type IN ('XY', 'PQR')),
            country TEXT CHECK (country IN ('USA', 'UK', 'India', 'Canada')),
            status TEXT NOT NULL DEFAULT 'REVIEW' CHECK (status IN ('APPROVED', 'REVIEW', 'CANCELLED')),
            created_by TEXT,
            created_at TIMESTAMPTZ DEFAULT now()
        );
    """)

    op.execute("""
        CREATE INDEX idx_questions_section ON questions(section_id);
    """)

    # One row per (section, question); order_index is 1-based and dense
    op.execute("""
        CREATE TABLE section_question_order (
            section_id TEXT NOT NULL REFERENCES sections(id) ON DELETE CASCADE,
            question_id TEXT NOT NULL REFERENCES questions(id) ON DELETE CASCADE,
            order_index INTEGER NOT NULL CHECK (order_index >= 1),
            PRIMARY KEY (section_id, question_id),
            UNIQUE (section_id, order_index)
        );
    """)


def downgrade():
    op.execute("DROP TABLE IF EXISTS section_question_order;")
    op.execute("DROP TABLE IF EXISTS questions;")
    op.execute("DROP TABLE IF EXISTS sections;")
