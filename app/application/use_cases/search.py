"""Multi-entity search use case: run adapters concurrently and merge results.

``execute_search`` runs one stateless round. ``SearchOrchestrator`` wraps it
with the published state consumers read (results + is_loading) and discards
rounds superseded by a newer trigger.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from app.application.dtos.search import (
    SearchFilters,
    SearchOutcome,
    SearchResult,
    SearchState,
)
from app.application.services.result_normalizer import normalize, normalize_many
from app.domain.enums import ContentType, ResultType, SearchStatus
from app.domain.exceptions import (
    ResourceNotFoundException,
    StoreError,
    ValidationException,
)
from app.shared.telemetry.tracing import add_span_attributes, traced

if TYPE_CHECKING:
    from app.infrastructure.search.adapters import EntityQueryAdapter

logger = logging.getLogger(__name__)


async def _settle(
    adapter: "EntityQueryAdapter",
    query: str,
    filters: SearchFilters,
    timeout: float | None,
) -> tuple[list[SearchResult], bool]:
    """Run one adapter; any failure or timeout yields ([], True) instead of raising.

    Cancellation still propagates.
    """
    try:
        records = await asyncio.wait_for(adapter.fetch(query, filters), timeout)
        return normalize_many(records, adapter.result_type), False
    except (StoreError, ValidationException) as e:
        logger.warning(
            "Search adapter %s failed: %s", adapter.result_type.value, e.message
        )
    except asyncio.TimeoutError:
        logger.warning(
            "Search adapter %s timed out after %ss", adapter.result_type.value, timeout
        )
    except Exception:
        logger.exception("Search adapter %s raised", adapter.result_type.value)
    return [], True


@traced("search.execute")
async def execute_search(
    query: str,
    filters: SearchFilters,
    adapters: Sequence["EntityQueryAdapter"],
    timeout: float | None = None,
) -> SearchOutcome:
    """Run one search round.

    An empty query on the "all" tab short-circuits without touching any
    adapter. Otherwise every adapter selected by the content tab runs
    concurrently and results are concatenated in the adapters' sequence
    order (Notes, Events, LostFound), independent of completion order.
    """
    query = query.strip()
    if not query and filters.content_type == ContentType.ALL:
        return SearchOutcome()

    active = [adapter for adapter in adapters if filters.includes(adapter.result_type)]
    add_span_attributes(
        **{
            "search.content_type": filters.content_type.value,
            "search.adapters": len(active),
        }
    )
    settled = await asyncio.gather(
        *(_settle(adapter, query, filters, timeout) for adapter in active)
    )

    results: list[SearchResult] = []
    failed: list[ResultType] = []
    for adapter, (items, failed_flag) in zip(active, settled):
        results.extend(items)
        if failed_flag:
            failed.append(adapter.result_type)
    add_span_attributes(
        **{
            "search.results": len(results),
            "search.failed_types": ",".join(t.value for t in failed),
        }
    )
    logger.debug(
        "Search round finished: %d results, failed=%s",
        len(results),
        [t.value for t in failed],
    )
    return SearchOutcome(
        results=tuple(results), failed_types=tuple(failed), searched=True
    )


class SearchService:
    """Stateless search entry point used by the HTTP API."""

    def __init__(
        self,
        adapters: Sequence["EntityQueryAdapter"],
        timeout: float | None = None,
    ) -> None:
        self.adapters = tuple(adapters)
        self.timeout = timeout

    async def search(self, query: str, filters: SearchFilters) -> SearchOutcome:
        return await execute_search(query, filters, self.adapters, timeout=self.timeout)

    async def get_record(self, result_type: ResultType, record_id: str) -> SearchResult:
        """One record (with author profile) normalized as a search result.

        Raises:
            ResourceNotFoundException: No record of that type has this id.
            StoreError: The record store request failed.
        """
        adapter = next(a for a in self.adapters if a.result_type is result_type)
        raw = await adapter.get(record_id)
        if raw is None:
            raise ResourceNotFoundException(result_type.value, record_id)
        return normalize(raw, result_type)


class SearchOrchestrator:
    """Publishes the result list of the most recent search round.

    Each call to ``search`` starts a new round with a fresh token. The state
    is replaced in a single assignment once the round settles, and only if
    no newer round has started meanwhile; stale rounds are dropped.
    """

    def __init__(
        self,
        adapters: Sequence["EntityQueryAdapter"],
        timeout: float | None = None,
    ) -> None:
        self.adapters = tuple(adapters)
        self.timeout = timeout
        self._state = SearchState()
        self._round = 0

    @property
    def state(self) -> SearchState:
        return self._state

    @property
    def results(self) -> tuple[SearchResult, ...]:
        return self._state.results

    @property
    def is_loading(self) -> bool:
        return self._state.is_loading

    def _is_current(self, round_id: int) -> bool:
        return round_id == self._round

    async def search(self, query: str, filters: SearchFilters) -> SearchState:
        """Trigger a round for (query, filters) and return the state after it settles."""
        self._round += 1
        round_id = self._round
        previous = self._state
        self._state = SearchState(
            results=previous.results,
            is_loading=True,
            status=SearchStatus.LOADING,
            failed_types=previous.failed_types,
            round_id=round_id,
        )
        try:
            outcome = await execute_search(
                query, filters, self.adapters, timeout=self.timeout
            )
        except BaseException:
            # Errors and cancellation alike: the current round must not stay loading.
            if self._is_current(round_id):
                self._state = SearchState(
                    results=previous.results,
                    is_loading=False,
                    status=(
                        SearchStatus.IDLE
                        if previous.status is SearchStatus.LOADING
                        else previous.status
                    ),
                    failed_types=previous.failed_types,
                    round_id=round_id,
                )
            raise

        if not self._is_current(round_id):
            logger.debug("Discarding superseded search round %d", round_id)
            return self._state

        self._state = SearchState(
            results=outcome.results,
            is_loading=False,
            status=outcome.status,
            failed_types=outcome.failed_types,
            round_id=round_id,
        )
        return self._state
