"""Application DTOs (no transport or store dependency)."""

from app.application.dtos.predicate import (
    AnyOf,
    Condition,
    OrderBy,
    Predicate,
    PredicateOp,
)
from app.application.dtos.search import (
    EventResult,
    LostFoundResult,
    NoteResult,
    RawRecord,
    SearchFilters,
    SearchOutcome,
    SearchResult,
    SearchState,
)

__all__ = [
    "AnyOf",
    "Condition",
    "EventResult",
    "LostFoundResult",
    "NoteResult",
    "OrderBy",
    "Predicate",
    "PredicateOp",
    "RawRecord",
    "SearchFilters",
    "SearchOutcome",
    "SearchResult",
    "SearchState",
]
