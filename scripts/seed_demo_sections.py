#!/usr/bin/env python3
"""
Seed the demo sections, questions and question order.

Usage:
    python scripts/seed_demo_sections.py

Wipes sections, questions and section_question_order, then inserts the
"Customer Onboarding" and "Risk Review" demo data. Needs DATABASE_URL.
"""

import asyncio
import sys

# Add project root to path
sys.path.insert(0, ".")

from reorder_backend.db import close_pool, init_pool
from reorder_backend.repos.order_repo import SectionOrderRepo


async def main():
    await init_pool()

    try:
        repo = SectionOrderRepo()
        await repo.reset()
        for section in await repo.list_sections():
            order = await repo.get_full_order(section.id)
            print(f"Seeded {section.id} ({section.title}): {len(order)} questions")
    finally:
        await close_pool()


if __name__ == "__main__":
    asyncio.run(main())
