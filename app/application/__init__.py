"""Application layer: DTOs, interfaces, services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (record store, adapters).
"""

from app.application.interfaces import IRecordStore
from app.application.use_cases.search import (
    SearchOrchestrator,
    SearchService,
    execute_search,
)

__all__ = [
    "IRecordStore",
    "SearchOrchestrator",
    "SearchService",
    "execute_search",
]
