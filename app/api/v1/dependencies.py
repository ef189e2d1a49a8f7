"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the record store and the search use case.
Routes depend only on these dependencies, never on infrastructure
singletons directly; tests override get_record_store with a fake store.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from app.application.interfaces.record_store import IRecordStore
from app.application.use_cases.search import SearchService
from app.core.config import get_settings
from app.domain.exceptions import StoreNotConfiguredException
from app.infrastructure.search.adapters import build_adapters
from app.infrastructure.supabase.client import get_supabase_client


def get_record_store() -> IRecordStore:
    """Record store client initialized at startup; 503 when not configured."""
    client = get_supabase_client()
    if client is None:
        raise StoreNotConfiguredException()
    return client


def get_search_service(
    store: Annotated[IRecordStore, Depends(get_record_store)],
) -> SearchService:
    """Search use case over the three collection adapters."""
    settings = get_settings()
    return SearchService(
        build_adapters(store, limit=settings.search_result_limit),
        timeout=settings.search_adapter_timeout_seconds,
    )
