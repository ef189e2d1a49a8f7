"""Entity query adapters: one per searchable collection.

Each adapter is built with an injected record store, applies its own
predicates and default ordering, and skips the store entirely when the
content tab excludes its type.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.application.dtos.predicate import OrderBy
from app.application.dtos.search import RawRecord, SearchFilters
from app.application.services.predicate_builder import build_predicates
from app.domain.enums import ResultType
from app.infrastructure.supabase.collections import (
    AUTHOR_PROFILE_EMBED,
    COLLECTION_EVENTS,
    COLLECTION_LOST_FOUND,
    COLLECTION_NOTES,
)

if TYPE_CHECKING:
    from app.application.interfaces.record_store import IRecordStore

logger = logging.getLogger(__name__)


class EntityQueryAdapter:
    """Query one collection for search hits of a single result type."""

    result_type: ResultType
    collection: str
    default_order: OrderBy

    def __init__(self, store: "IRecordStore", limit: int | None = None) -> None:
        self.store = store
        self.limit = limit

    def applies_to(self, filters: SearchFilters) -> bool:
        return filters.includes(self.result_type)

    async def fetch(self, query: str, filters: SearchFilters) -> list[RawRecord]:
        """Matching records in default order; [] without a store call when excluded.

        Raises:
            StoreError: The record store request failed.
        """
        if not self.applies_to(filters):
            return []
        predicates = build_predicates(self.result_type, query, filters)
        logger.debug(
            "Querying %s with %d condition(s)", self.collection, len(predicates)
        )
        return await self.store.query_collection(
            self.collection,
            predicates,
            order_by=self.default_order,
            limit=self.limit,
        )

    async def get(self, record_id: str) -> RawRecord | None:
        """Single record with its author's profile embedded, or None."""
        return await self.store.get_record(
            self.collection, record_id, select=f"*,{AUTHOR_PROFILE_EMBED}"
        )


class NotesAdapter(EntityQueryAdapter):
    """Study notes, most recent first."""

    result_type = ResultType.NOTE
    collection = COLLECTION_NOTES
    default_order = OrderBy("created_at", descending=True)


class EventsAdapter(EntityQueryAdapter):
    """Campus events, soonest first."""

    result_type = ResultType.EVENT
    collection = COLLECTION_EVENTS
    default_order = OrderBy("event_date", descending=False)


class LostFoundAdapter(EntityQueryAdapter):
    """Lost & found posts, most recent first."""

    result_type = ResultType.LOST_FOUND
    collection = COLLECTION_LOST_FOUND
    default_order = OrderBy("created_at", descending=True)


def build_adapters(
    store: "IRecordStore", limit: int | None = None
) -> tuple[EntityQueryAdapter, ...]:
    """All adapters in output order: Notes, Events, LostFound."""
    return (
        NotesAdapter(store, limit),
        EventsAdapter(store, limit),
        LostFoundAdapter(store, limit),
    )
