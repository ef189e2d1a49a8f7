"""Core: config, lifespan, and exception handlers.

Single place for settings and application bootstrap.
"""

from app.core.config import get_settings

__all__ = ["get_settings"]
