"""Pydantic request/response schemas for the API."""

from app.schemas.health import HealthResponse
from app.schemas.search import (
    RecordDetailResponse,
    SearchResponse,
    SearchResultResponse,
)

__all__ = [
    "HealthResponse",
    "RecordDetailResponse",
    "SearchResponse",
    "SearchResultResponse",
]
