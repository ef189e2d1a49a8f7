"""Encode predicates and ordering into PostgREST query parameters."""

from collections.abc import Sequence
from datetime import date, datetime
from typing import Any

from app.application.dtos.predicate import (
    AnyOf,
    Condition,
    OrderBy,
    Predicate,
    PredicateOp,
)

_PG_OPS: dict[PredicateOp, str] = {
    PredicateOp.SUBSTRING: "ilike",
    PredicateOp.EQ: "eq",
    PredicateOp.GTE: "gte",
    PredicateOp.LTE: "lte",
}


def _format_value(v: Any) -> str:
    if isinstance(v, bool):
        return "true" if v else "false"
    if isinstance(v, (datetime, date)):
        return v.isoformat()
    return str(v)


def escape_like(term: str) -> str:
    """Escape ILIKE wildcards so the term matches literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _operand(predicate: Predicate) -> str:
    if predicate.op is PredicateOp.SUBSTRING:
        return f"%{escape_like(str(predicate.value))}%"
    return _format_value(predicate.value)


def _quote(value: str) -> str:
    """Double-quote a value inside an or=(...) list; PostgREST unescapes \\ and \"."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def encode_predicate(predicate: Predicate) -> tuple[str, str]:
    """Top-level filter: ``field=op.value``."""
    return predicate.field, f"{_PG_OPS[predicate.op]}.{_operand(predicate)}"


def encode_any_of(group: AnyOf) -> tuple[str, str]:
    """OR group: ``or=(f1.op."v1",f2.op."v2")``."""
    members = ",".join(
        f"{p.field}.{_PG_OPS[p.op]}.{_quote(_operand(p))}" for p in group.predicates
    )
    return "or", f"({members})"


def encode_order(order_by: OrderBy) -> tuple[str, str]:
    direction = "desc" if order_by.descending else "asc"
    return "order", f"{order_by.field}.{direction}"


def encode_query(
    predicates: Sequence[Condition],
    order_by: OrderBy | None = None,
    limit: int | None = None,
    select: str = "*",
) -> list[tuple[str, str]]:
    """Build the ordered PostgREST query parameters for one collection request.

    A list of pairs, not a dict: the same column may appear twice
    (e.g. event_date=gte... and event_date=lte...).
    """
    params: list[tuple[str, str]] = [("select", select)]
    for condition in predicates:
        if isinstance(condition, AnyOf):
            if condition.predicates:
                params.append(encode_any_of(condition))
        else:
            params.append(encode_predicate(condition))
    if order_by is not None:
        params.append(encode_order(order_by))
    if limit is not None:
        params.append(("limit", str(limit)))
    return params
