"""Map raw collection records into the shared SearchResult shape."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import date, datetime, time
from types import MappingProxyType
from typing import Any

from app.application.dtos.search import (
    EventResult,
    LostFoundResult,
    NoteResult,
    RawRecord,
    SearchResult,
)
from app.domain.enums import LostFoundStatus, LostFoundType, ResultType
from app.domain.exceptions import ValidationException


def _parse_timestamp(value: Any) -> datetime | None:
    """ISO-8601 string (``Z`` or offset) or datetime/date to datetime; anything else None."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if isinstance(value, str) and value:
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    return None


def _tags(value: Any) -> tuple[str, ...]:
    if not value:
        return ()
    if isinstance(value, str):
        return (value,)
    if not isinstance(value, Iterable) or isinstance(value, Mapping):
        return ()
    return tuple(str(tag) for tag in value)


def _enum_or_none(enum_cls: type, value: Any) -> Any:
    try:
        return enum_cls(value) if value else None
    except ValueError:
        return None


def normalize(raw: RawRecord, result_type: ResultType) -> SearchResult:
    """Build the tagged result for one raw record.

    Copies every native field into ``raw`` (read-only). ``description`` is
    the note content for notes and the native description otherwise.

    Raises:
        ValidationException: The record has no id.
    """
    record_id = raw.get("id")
    if record_id is None or record_id == "":
        raise ValidationException(
            f"{result_type.value} record has no id", field="id"
        )
    base: dict[str, Any] = {
        "id": str(record_id),
        "title": raw.get("title") or "",
        "created_at": _parse_timestamp(raw.get("created_at")),
        "tags": _tags(raw.get("tags")),
        "raw": MappingProxyType(dict(raw)),
    }
    if result_type is ResultType.NOTE:
        return NoteResult(
            **base,
            description=raw.get("content"),
            subject=raw.get("subject"),
            course=raw.get("course"),
            semester=raw.get("semester"),
            file_url=raw.get("file_url"),
            downloads=raw.get("downloads"),
            likes=raw.get("likes"),
        )
    if result_type is ResultType.EVENT:
        return EventResult(
            **base,
            description=raw.get("description"),
            location=raw.get("location"),
            event_date=_parse_timestamp(raw.get("event_date")),
            current_attendees=raw.get("current_attendees"),
            max_attendees=raw.get("max_attendees"),
        )
    return LostFoundResult(
        **base,
        description=raw.get("description"),
        item_type=_enum_or_none(LostFoundType, raw.get("type")),
        status=_enum_or_none(LostFoundStatus, raw.get("status")),
        location=raw.get("location"),
        image_url=raw.get("image_url"),
        contact_info=raw.get("contact_info"),
    )


def normalize_many(
    records: Iterable[Mapping[str, Any]], result_type: ResultType
) -> list[SearchResult]:
    """Normalize records of one type, preserving order."""
    return [normalize(record, result_type) for record in records]
