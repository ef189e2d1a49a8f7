"""Supabase record store client (PostgREST over httpx, no supabase-py).

Initialized at app startup from SUPABASE_URL and SUPABASE_KEY. Routes get
the client through a FastAPI dependency and pass it to the search adapters;
nothing reaches for it from module scope.
"""

import logging

from app.core.config import get_settings
from app.infrastructure.supabase._rest_client import SupabaseRESTClient

logger = logging.getLogger(__name__)

_supabase_client: SupabaseRESTClient | None = None


def init_supabase() -> bool:
    """Initialize the PostgREST client from settings.

    Safe to call when SUPABASE_URL is not set (no-op). Idempotent if
    already initialized.

    Returns:
        True if the client is available, False if not configured.
    """
    global _supabase_client
    if _supabase_client is not None:
        return True
    settings = get_settings()
    if not settings.store_configured:
        logger.warning("SUPABASE_URL not set; search endpoints will return 503")
        return False
    _supabase_client = SupabaseRESTClient(
        settings.supabase_url,
        settings.supabase_key.get_secret_value(),
        timeout=settings.supabase_timeout_seconds,
    )
    logger.info("Supabase client initialized for %s", settings.supabase_url)
    return True


def get_supabase_client() -> SupabaseRESTClient | None:
    """Return the record store client, or None if not configured."""
    return _supabase_client


async def close_supabase() -> None:
    """Close the client's HTTP connection pool. Call from app shutdown."""
    global _supabase_client
    if _supabase_client is not None:
        await _supabase_client.aclose()
        _supabase_client = None
        logger.info("Supabase HTTP client closed")
