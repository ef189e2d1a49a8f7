"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic. Wires infrastructure only
(logging, telemetry, record store client); no business logic.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.core.config import get_settings
from app.infrastructure.supabase.client import close_supabase, init_supabase
from app.shared.telemetry.logging import setup_logging
from app.shared.telemetry.telemetry import (
    TelemetryConfig,
    get_telemetry,
    set_telemetry,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: logging, telemetry (if enabled), record store client.
    Shutdown order: record store client close, telemetry shutdown.
    """
    settings = get_settings()

    # ---- Startup ----
    setup_logging()

    if settings.telemetry_enabled:
        telemetry = TelemetryConfig.from_settings(settings)
        if telemetry.setup() is not None:
            telemetry.instrument(app)
            set_telemetry(telemetry)

    init_supabase()

    yield

    # ---- Shutdown ----
    await close_supabase()
    telemetry = get_telemetry()
    if telemetry is not None:
        telemetry.shutdown()
        set_telemetry(None)
