"""Use cases (application orchestration)."""

from app.application.use_cases.search import (
    SearchOrchestrator,
    SearchService,
    execute_search,
)

__all__ = ["SearchOrchestrator", "SearchService", "execute_search"]
