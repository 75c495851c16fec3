"""
HttpOrderStore adapter for the reorder kernel.

Implements the OrderStore protocol against the reorder_backend HTTP API,
so a DragController can run in a separate process from the database.
"""

from __future__ import annotations

from collections.abc import Sequence

import httpx

from reorder_engine.kernel.filters import is_satisfiable
from reorder_engine.kernel.store import OrderLoadError, OrderSaveError, OrderStore, SectionNotFound
from reorder_engine.kernel.types import FilterPredicate, ItemAttributes


class HttpOrderStore(OrderStore):
    """
    HTTP-backed order store.

    Reads:  GET  /api/sections/{section_id}/order[?reviewType=&participantType=&country=]
    Writes: POST /api/sections/{section_id}/reorder  {"questionIdsInOrder": [...]}
    """

    def __init__(self, base_url: str = "", *, client: httpx.AsyncClient | None = None, timeout: float = 30.0):
        super().__init__()
        self.base_url = base_url.rstrip("/")
        self.client = client or httpx.AsyncClient(base_url=self.base_url, timeout=timeout)

    async def _get_order(self, section_id: str, predicate: FilterPredicate | None = None) -> dict:
        try:
            res = await self.client.get(
                f"/api/sections/{section_id}/order",
                params=predicate.to_dict() if predicate else {},
            )
        except httpx.HTTPError as e:
            raise OrderLoadError(f"Failed to load order: {e}") from e

        if res.status_code == 404:
            raise SectionNotFound(section_id)
        if res.is_error:
            raise OrderLoadError(f"Failed to load order ({res.status_code})", status_code=res.status_code)
        return res.json()

    async def get_full_order(self, section_id: str) -> list[str]:
        data = await self._get_order(section_id)
        return list(data["full_order"])

    async def get_attributes(self, section_id: str) -> dict[str, ItemAttributes]:
        data = await self._get_order(section_id)
        return {q["id"]: ItemAttributes.from_dict(q) for q in data["questions"]}

    async def get_filtered(self, section_id: str, predicate: FilterPredicate) -> list[str]:
        # The API rejects values outside the catalog; no item carries one, so the view is empty
        if not is_satisfiable(predicate):
            await self._get_order(section_id)
            return []
        data = await self._get_order(section_id, predicate)
        return list(data["filtered_order"])

    async def save_order(self, section_id: str, order: Sequence[str]) -> None:
        try:
            res = await self.client.post(
                f"/api/sections/{section_id}/reorder",
                json={"questionIdsInOrder": list(order)},
            )
        except httpx.HTTPError as e:
            raise OrderSaveError(f"Failed to save order: {e}") from e

        if res.status_code == 404:
            raise SectionNotFound(section_id)
        if res.is_error:
            raise OrderSaveError(f"Failed to save order ({res.status_code})", status_code=res.status_code)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.aclose()
