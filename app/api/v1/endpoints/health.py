"""Health check endpoint. No dependencies; used for liveness probes."""

from fastapi import APIRouter

from app.infrastructure.supabase.client import get_supabase_client
from app.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return ok status and whether the record store client is up."""
    return HealthResponse(store_configured=get_supabase_client() is not None)
