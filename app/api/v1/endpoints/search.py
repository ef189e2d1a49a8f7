"""Search API: faceted search across notes, events, and lost & found posts."""

from collections.abc import Callable
from datetime import date
from typing import Annotated, TypeVar

from fastapi import APIRouter, Depends, Query

from app.api.v1.dependencies import get_search_service
from app.application.dtos.search import SearchFilters
from app.application.use_cases.search import SearchService
from app.domain.enums import ContentType, LostFoundStatus, LostFoundType, ResultType
from app.domain.exceptions import ValidationException
from app.schemas.search import RecordDetailResponse, SearchResponse

router = APIRouter()

T = TypeVar("T")


def _parse_optional(parse: Callable[[str], T], value: str | None, field: str) -> T | None:
    # Blank form fields arrive as "" and mean "no refinement".
    if not value or not value.strip():
        return None
    try:
        return parse(value.strip())
    except ValueError as e:
        raise ValidationException(f"Invalid value for {field}: {value!r}", field=field) from e


def get_search_filters(
    content_type: ContentType = Query(ContentType.ALL, description="Content tab"),
    subject: str | None = Query(None, max_length=200),
    course: str | None = Query(None, max_length=200),
    semester: str | None = Query(None, max_length=100),
    event_date_from: str | None = Query(
        None, description="Earliest event date (YYYY-MM-DD)"
    ),
    event_date_to: str | None = Query(
        None, description="Latest event date (YYYY-MM-DD)"
    ),
    lost_found_type: str | None = Query(None, description="lost | found"),
    lost_found_status: str | None = Query(None, description="active | resolved"),
    location: str | None = Query(None, max_length=200),
) -> SearchFilters:
    """Build SearchFilters from query parameters; blank values mean "no refinement"."""
    return SearchFilters(
        content_type=content_type,
        subject=subject,
        course=course,
        semester=semester,
        event_date_from=_parse_optional(
            date.fromisoformat, event_date_from, "event_date_from"
        ),
        event_date_to=_parse_optional(date.fromisoformat, event_date_to, "event_date_to"),
        lost_found_type=_parse_optional(LostFoundType, lost_found_type, "lost_found_type"),
        lost_found_status=_parse_optional(
            LostFoundStatus, lost_found_status, "lost_found_status"
        ),
        location=location,
    )


@router.get("", response_model=SearchResponse)
async def search(
    search_svc: Annotated[SearchService, Depends(get_search_service)],
    filters: Annotated[SearchFilters, Depends(get_search_filters)],
    q: str = Query("", max_length=500, description="Free-text query"),
) -> SearchResponse:
    """Search notes, events and lost & found posts.

    An empty query on the "all" tab returns no results (nothing searched);
    on a specific tab it lists that collection subject to refinements.
    """
    outcome = await search_svc.search(q, filters)
    return SearchResponse.from_outcome(outcome)


@router.get("/{result_type}/{record_id}", response_model=RecordDetailResponse)
async def get_record(
    result_type: ResultType,
    record_id: str,
    search_svc: Annotated[SearchService, Depends(get_search_service)],
) -> RecordDetailResponse:
    """Single note, event or lost & found post with its author's profile."""
    result = await search_svc.get_record(result_type, record_id)
    return RecordDetailResponse.from_result(result)
