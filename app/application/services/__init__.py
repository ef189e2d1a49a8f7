"""Application services: predicate building and result normalization."""

from app.application.services.predicate_builder import (
    TEXT_FIELDS,
    build_predicates,
    build_text_predicate,
)
from app.application.services.result_normalizer import normalize, normalize_many

__all__ = [
    "TEXT_FIELDS",
    "build_predicates",
    "build_text_predicate",
    "normalize",
    "normalize_many",
]
