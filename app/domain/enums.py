"""Domain enumerations for the campus search engine.

Enums represent fixed sets of domain values (content tabs, result kinds,
lost & found classification).
"""

from enum import Enum


class ContentType(str, Enum):
    """Content tab selected in search; decides which collections are queried."""

    ALL = "all"
    NOTES = "notes"
    EVENTS = "events"
    LOST_FOUND = "lost_found"


class ResultType(str, Enum):
    """Discriminant of a search result (which collection it came from)."""

    NOTE = "note"
    EVENT = "event"
    LOST_FOUND = "lost_found"

    @property
    def content_type(self) -> ContentType:
        """Content tab that selects this result type."""
        return _CONTENT_TYPE_BY_RESULT[self]

    @property
    def label(self) -> str:
        """Human-readable badge label for result lists."""
        return _LABELS[self]


_CONTENT_TYPE_BY_RESULT: dict[ResultType, ContentType] = {
    ResultType.NOTE: ContentType.NOTES,
    ResultType.EVENT: ContentType.EVENTS,
    ResultType.LOST_FOUND: ContentType.LOST_FOUND,
}

_LABELS: dict[ResultType, str] = {
    ResultType.NOTE: "Note",
    ResultType.EVENT: "Event",
    ResultType.LOST_FOUND: "Lost & Found",
}


class LostFoundType(str, Enum):
    """Whether a lost & found post reports a lost or a found item."""

    LOST = "lost"
    FOUND = "found"


class LostFoundStatus(str, Enum):
    """Lifecycle of a lost & found post."""

    ACTIVE = "active"
    RESOLVED = "resolved"


class SearchStatus(str, Enum):
    """Published state of the search orchestrator.

    IDLE: nothing searched yet (or empty query on the "all" tab).
    LOADING: a round is in flight.
    READY: the last round completed with every adapter answering.
    PARTIAL: the last round completed but at least one adapter failed.
    """

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    PARTIAL = "partial"
