"""Record store protocol consumed by the entity query adapters (DIP)."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.application.dtos.predicate import Condition, OrderBy
    from app.application.dtos.search import RawRecord


class IRecordStore(Protocol):
    """Generic "find records matching predicates, ordered by field" per collection."""

    async def query_collection(
        self,
        name: str,
        predicates: Sequence["Condition"],
        order_by: "OrderBy | None" = None,
        limit: int | None = None,
    ) -> list["RawRecord"]:
        """Return records of collection ``name`` matching every condition, in order.

        Raises StoreError on transport or auth failure.
        """

    async def get_record(
        self, name: str, record_id: str, select: str = "*"
    ) -> "RawRecord | None":
        """Return one record by id, or None when missing. Raises StoreError."""
