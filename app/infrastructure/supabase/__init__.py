"""Supabase (PostgREST) record store integration."""

from app.infrastructure.supabase._rest_client import SupabaseRESTClient
from app.infrastructure.supabase.client import (
    close_supabase,
    get_supabase_client,
    init_supabase,
)

__all__ = [
    "SupabaseRESTClient",
    "close_supabase",
    "get_supabase_client",
    "init_supabase",
]
