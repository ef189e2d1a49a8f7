"""Search adapters over the record store collections."""

from app.infrastructure.search.adapters import (
    EntityQueryAdapter,
    EventsAdapter,
    LostFoundAdapter,
    NotesAdapter,
    build_adapters,
)

__all__ = [
    "EntityQueryAdapter",
    "EventsAdapter",
    "LostFoundAdapter",
    "NotesAdapter",
    "build_adapters",
]
