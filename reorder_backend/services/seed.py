"""
Demo data for the question order screens.

Two sections. "Customer Onboarding" interleaves XY and PQR questions so
that filtering by participant type hides items between the visible ones.
"""

from __future__ import annotations

from reorder_backend.models.order import OrderRow, Question, Section

COUNTRIES = ["USA", "UK", "India", "Canada"]

SECTIONS = [
    Section(id="sec-1", title="Customer Onboarding"),
    Section(id="sec-2", title="Risk Review"),
]

_SECTION_1_XY = [
    "Describe the current onboarding workflow.",
    "Which systems are used for onboarding?",
    "What is the average onboarding time?",
    "Who approves onboarding steps?",
    "List any onboarding bottlenecks.",
]

_SECTION_1_PQR = [
    "What documentation is required for PQR onboarding?",
    "How is PQR identity verification performed?",
    "What is the approval hierarchy for PQR onboarding?",
    "What compliance checks are mandatory for PQR?",
    "How long does PQR onboarding typically take?",
    "What follow-up actions are required after PQR onboarding?",
]

_SECTION_2_PQR = [
    "How often are risk reviews conducted?",
    "Who signs off on risk findings?",
    "What is the escalation path for risks?",
    "Which tools are used for risk tracking?",
]


def _questions(section_id: str, texts: list[str], review_type: str, participant_type: str, prefix: str) -> list[Question]:
    return [
        Question(
            id=f"{section_id}-{prefix}-q{i + 1}",
            section_id=section_id,
            text=text,
            review_type=review_type,
            participant_type=participant_type,
            country=COUNTRIES[i % len(COUNTRIES)],
            status="APPROVED" if i % 2 == 0 else "REVIEW",
            created_by="System",
        )
        for i, text in enumerate(texts)
    ]


def demo_data() -> tuple[list[Section], list[Question], list[OrderRow]]:
    """
    Sections, questions and initial order rows.

    Customer Onboarding order: 2 XY, 2 PQR, 1 XY, 1 PQR, 2 PQR, 2 XY, remaining PQR.
    Risk Review is ordered as created.
    """
    sec1_xy = _questions("sec-1", _SECTION_1_XY, "Due Diligence", "XY", "xy")
    sec1_pqr = _questions("sec-1", _SECTION_1_PQR, "Due Diligence", "PQR", "pqr")
    sec2 = _questions("sec-2", _SECTION_2_PQR, "Periodic Review", "PQR", "pqr")

    sec1_ordered = sec1_xy[0:2] + sec1_pqr[0:2] + sec1_xy[2:3] + sec1_pqr[2:3] + sec1_pqr[3:5] + sec1_xy[3:5] + sec1_pqr[5:]

    rows = [OrderRow(section_id="sec-1", question_id=q.id, order_index=i + 1) for i, q in enumerate(sec1_ordered)]
    rows += [OrderRow(section_id="sec-2", question_id=q.id, order_index=i + 1) for i, q in enumerate(sec2)]

    return list(SECTIONS), sec1_xy + sec1_pqr + sec2, rows
