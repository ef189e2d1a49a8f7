"""DTOs for campus search: filters, normalized results and published state.

Results are a tagged union (NoteResult | EventResult | LostFoundResult)
discriminated by ``type``. The shared projection (id, title, description,
created_at, tags) is available on every variant; type-specific fields are
read after narrowing on ``type``. ``raw`` keeps every native field for
rendering.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from datetime import date, datetime
from typing import Any, Literal, Union

from app.domain.enums import (
    ContentType,
    LostFoundStatus,
    LostFoundType,
    ResultType,
    SearchStatus,
)

RawRecord = Mapping[str, Any]


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


@dataclass(frozen=True)
class SearchFilters:
    """Content tab plus per-type refinements.

    Refinements of other tabs may stay populated; each adapter reads only
    its own fields. Blank strings mean "no refinement".
    """

    content_type: ContentType = ContentType.ALL
    # notes
    subject: str | None = None
    course: str | None = None
    semester: str | None = None
    # events
    event_date_from: date | None = None
    event_date_to: date | None = None
    # lost & found
    lost_found_type: LostFoundType | None = None
    lost_found_status: LostFoundStatus | None = None
    location: str | None = None

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            normalized = _blank_to_none(value)
            if normalized is not value:
                object.__setattr__(self, f.name, normalized)
        object.__setattr__(
            self, "content_type", ContentType(self.content_type or ContentType.ALL)
        )
        if self.lost_found_type is not None:
            object.__setattr__(self, "lost_found_type", LostFoundType(self.lost_found_type))
        if self.lost_found_status is not None:
            object.__setattr__(
                self, "lost_found_status", LostFoundStatus(self.lost_found_status)
            )

    @classmethod
    def cleared(cls) -> "SearchFilters":
        """Default filters: "all" tab, no refinements."""
        return cls()

    def includes(self, result_type: ResultType) -> bool:
        """True when the content tab selects results of ``result_type``."""
        return self.content_type in (ContentType.ALL, result_type.content_type)


@dataclass(frozen=True)
class _ResultBase:
    id: str
    title: str
    description: str | None
    created_at: datetime | None
    tags: tuple[str, ...]
    raw: Mapping[str, Any] = field(repr=False, compare=False)

    def get(self, key: str, default: Any = None) -> Any:
        """Read any native field of the source record."""
        return self.raw.get(key, default)

    @property
    def key(self) -> tuple[str, str]:
        """(type, id): unique across all result types."""
        return (self.type.value, self.id)  # type: ignore[attr-defined]


@dataclass(frozen=True)
class NoteResult(_ResultBase):
    """Study note hit. ``description`` is the note content."""

    subject: str | None = None
    course: str | None = None
    semester: str | None = None
    file_url: str | None = None
    downloads: int | None = None
    likes: int | None = None
    type: Literal[ResultType.NOTE] = ResultType.NOTE


@dataclass(frozen=True)
class EventResult(_ResultBase):
    """Campus event hit."""

    location: str | None = None
    event_date: datetime | None = None
    current_attendees: int | None = None
    max_attendees: int | None = None
    type: Literal[ResultType.EVENT] = ResultType.EVENT


@dataclass(frozen=True)
class LostFoundResult(_ResultBase):
    """Lost & found post hit."""

    item_type: LostFoundType | None = None
    status: LostFoundStatus | None = None
    location: str | None = None
    image_url: str | None = None
    contact_info: str | None = None
    type: Literal[ResultType.LOST_FOUND] = ResultType.LOST_FOUND


SearchResult = Union[NoteResult, EventResult, LostFoundResult]


@dataclass(frozen=True)
class SearchOutcome:
    """Complete output of one search round."""

    results: tuple[SearchResult, ...] = ()
    failed_types: tuple[ResultType, ...] = ()
    searched: bool = False  # False when the round short-circuited

    @property
    def partial(self) -> bool:
        return bool(self.failed_types)

    @property
    def status(self) -> SearchStatus:
        if not self.searched:
            return SearchStatus.IDLE
        return SearchStatus.PARTIAL if self.partial else SearchStatus.READY


@dataclass(frozen=True)
class SearchState:
    """Snapshot published by the orchestrator; replaced as a whole, never mutated."""

    results: tuple[SearchResult, ...] = ()
    is_loading: bool = False
    status: SearchStatus = SearchStatus.IDLE
    failed_types: tuple[ResultType, ...] = ()
    round_id: int = 0
