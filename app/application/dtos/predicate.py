"""DTOs describing a record store query (filter conditions and ordering)."""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Union


class PredicateOp(str, Enum):
    """Comparison applied by a single predicate."""

    SUBSTRING = "substring"  # case-insensitive contains
    EQ = "eq"
    GTE = "gte"
    LTE = "lte"


PredicateValue = Union[str, int, float, bool, date]


@dataclass(frozen=True)
class Predicate:
    """One condition (field, op, value) applied to a collection query."""

    field: str
    op: PredicateOp
    value: PredicateValue


@dataclass(frozen=True)
class AnyOf:
    """Predicates ORed together; the group as a whole is ANDed with its siblings."""

    predicates: tuple[Predicate, ...]


Condition = Union[Predicate, AnyOf]


@dataclass(frozen=True)
class OrderBy:
    """Sort order requested from the record store."""

    field: str
    descending: bool = False
