"""In-memory section repository — the demo/mock backend. No database needed."""

from __future__ import annotations

from reorder_backend.models.order import OrderRow, Question, Section
from reorder_backend.services.seed import demo_data
from reorder_engine.kernel.store import MemoryOrderStore, MemorySection, SectionNotFound


class MemorySectionRepo(MemoryOrderStore):
    """
    Same surface as SectionOrderRepo, held in process memory.

    Seeded with the demo data on construction and on reset().
    """

    def __init__(self) -> None:
        super().__init__()
        self.catalog: dict[str, Section] = {}
        self.questions: dict[str, Question] = {}
        self._load(*demo_data())

    def _load(self, sections: list[Section], questions: list[Question], rows: list[OrderRow]) -> None:
        self.catalog = {s.id: s for s in sections}
        self.questions = {q.id: q for q in questions}
        self.sections = {
            s.id: MemorySection(
                items={q.id: q.attributes() for q in questions if q.section_id == s.id},
                title=s.title,
            )
            for s in sections
        }
        for row in sorted(rows, key=lambda r: r.order_index):
            self.sections[row.section_id].order.append(row.question_id)

    async def list_sections(self) -> list[Section]:
        return sorted(self.catalog.values(), key=lambda s: s.id)

    async def list_questions(self, section_id: str) -> list[Question]:
        if section_id not in self.catalog:
            raise SectionNotFound(section_id)
        return sorted((q for q in self.questions.values() if q.section_id == section_id), key=lambda q: q.id)

    async def export(self) -> tuple[list[Section], list[Question], list[OrderRow]]:
        rows: list[OrderRow] = []
        for section_id in sorted(self.sections):
            order = await self.get_full_order(section_id)
            rows += [OrderRow(section_id=section_id, question_id=q, order_index=i + 1) for i, q in enumerate(order)]
        return await self.list_sections(), sorted(self.questions.values(), key=lambda q: q.id), rows

    async def reset(self) -> None:
        self.save_calls.clear()
        self._load(*demo_data())
