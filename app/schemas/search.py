"""Search API schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from app.application.dtos.search import SearchOutcome, SearchResult
from app.domain.enums import ResultType, SearchStatus


class SearchResultResponse(BaseModel):
    """Single search hit (note, event, or lost & found post)."""

    id: str
    type: ResultType = Field(..., description="note | event | lost_found")
    label: str = Field(..., description="Display badge, e.g. 'Lost & Found'")
    title: str
    description: str | None = None
    created_at: datetime | None = None
    tags: list[str] = Field(default_factory=list)
    data: dict[str, Any] = Field(
        default_factory=dict, description="All native fields of the source record"
    )

    @classmethod
    def from_result(cls, result: SearchResult) -> "SearchResultResponse":
        return cls(
            id=result.id,
            type=result.type,
            label=result.type.label,
            title=result.title,
            description=result.description,
            created_at=result.created_at,
            tags=list(result.tags),
            data=dict(result.raw),
        )


class SearchResponse(BaseModel):
    """Merged search response: notes, then events, then lost & found."""

    results: list[SearchResultResponse]
    is_loading: bool = False
    status: SearchStatus
    failed_types: list[ResultType] = Field(
        default_factory=list,
        description="Result types whose collection query failed and contributed nothing",
    )

    @classmethod
    def from_outcome(cls, outcome: SearchOutcome) -> "SearchResponse":
        return cls(
            results=[SearchResultResponse.from_result(r) for r in outcome.results],
            status=outcome.status,
            failed_types=list(outcome.failed_types),
        )


class RecordDetailResponse(SearchResultResponse):
    """Single record for detail pages, with the author's profile when available."""

    author_name: str | None = None

    @classmethod
    def from_result(cls, result: SearchResult) -> "RecordDetailResponse":
        base = SearchResultResponse.from_result(result)
        profile = result.get("profiles")
        author = None
        if isinstance(profile, dict):
            author = profile.get("full_name") or profile.get("username")
        return cls(**base.model_dump(), author_name=author)
