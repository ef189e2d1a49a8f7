"""Translate a free-text query plus filters into per-collection predicates.

The text predicate is a case-insensitive substring match ORed across the
text-bearing fields of one result type. It is omitted entirely for an empty
query. Each populated refinement of that type adds one ANDed condition.
"""

from __future__ import annotations

from collections.abc import Callable

from app.application.dtos.predicate import AnyOf, Condition, Predicate, PredicateOp
from app.application.dtos.search import SearchFilters
from app.domain.enums import ResultType

TEXT_FIELDS: dict[ResultType, tuple[str, ...]] = {
    ResultType.NOTE: ("title", "content", "subject", "course"),
    ResultType.EVENT: ("title", "description", "location"),
    ResultType.LOST_FOUND: ("title", "description", "location"),
}


def build_text_predicate(result_type: ResultType, query: str) -> AnyOf | None:
    """OR-group of substring matches over the type's text fields; None for an empty query."""
    term = query.strip()
    if not term:
        return None
    return AnyOf(
        tuple(
            Predicate(field, PredicateOp.SUBSTRING, term)
            for field in TEXT_FIELDS[result_type]
        )
    )


def _with_text(result_type: ResultType, query: str) -> list[Condition]:
    text = build_text_predicate(result_type, query)
    return [text] if text is not None else []


def build_note_predicates(query: str, filters: SearchFilters) -> list[Condition]:
    """Text group, then subject, course, semester substring refinements."""
    conditions = _with_text(ResultType.NOTE, query)
    for field in ("subject", "course", "semester"):
        value = getattr(filters, field)
        if value:
            conditions.append(Predicate(field, PredicateOp.SUBSTRING, value))
    return conditions


def build_event_predicates(query: str, filters: SearchFilters) -> list[Condition]:
    """Text group, then event_date range bounds."""
    conditions = _with_text(ResultType.EVENT, query)
    if filters.event_date_from is not None:
        conditions.append(
            Predicate("event_date", PredicateOp.GTE, filters.event_date_from)
        )
    if filters.event_date_to is not None:
        conditions.append(
            Predicate("event_date", PredicateOp.LTE, filters.event_date_to)
        )
    return conditions


def build_lost_found_predicates(query: str, filters: SearchFilters) -> list[Condition]:
    """Text group, then exact type/status and substring location."""
    conditions = _with_text(ResultType.LOST_FOUND, query)
    if filters.lost_found_type is not None:
        conditions.append(
            Predicate("type", PredicateOp.EQ, filters.lost_found_type.value)
        )
    if filters.lost_found_status is not None:
        conditions.append(
            Predicate("status", PredicateOp.EQ, filters.lost_found_status.value)
        )
    if filters.location:
        conditions.append(Predicate("location", PredicateOp.SUBSTRING, filters.location))
    return conditions


_BUILDERS: dict[ResultType, Callable[[str, SearchFilters], list[Condition]]] = {
    ResultType.NOTE: build_note_predicates,
    ResultType.EVENT: build_event_predicates,
    ResultType.LOST_FOUND: build_lost_found_predicates,
}


def build_predicates(
    result_type: ResultType, query: str, filters: SearchFilters
) -> list[Condition]:
    """Ordered conditions for one collection; reads only that type's filter fields."""
    return _BUILDERS[result_type](query, filters)
