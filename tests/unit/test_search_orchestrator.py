"""Search use case: concurrent adapters, merge order, failures and stale rounds."""

import asyncio
from datetime import date

import httpx
import pytest

from app.application.dtos.search import SearchFilters
from app.application.use_cases.search import (
    SearchOrchestrator,
    SearchService,
    execute_search,
)
from app.domain.enums import ContentType, ResultType, SearchStatus
from app.domain.exceptions import ResourceNotFoundException
from app.infrastructure.search.adapters import build_adapters
from tests.fakes import FakeRecordStore, campus_records, text_terms


def _keys(results) -> list[tuple[str, str]]:
    return [r.key for r in results]


async def test_empty_query_on_all_tab_touches_no_adapter(fake_store, adapters) -> None:
    """Blank query with the 'all' tab returns idle and issues no store call."""
    outcome = await execute_search("   ", SearchFilters(), adapters)
    assert outcome.results == ()
    assert outcome.status is SearchStatus.IDLE
    assert fake_store.calls == []


async def test_empty_query_on_specific_tab_lists_that_collection(
    fake_store, adapters
) -> None:
    """Blank query on the notes tab lists notes only, newest first."""
    outcome = await execute_search(
        "", SearchFilters(content_type=ContentType.NOTES), adapters
    )
    assert [r.id for r in outcome.results] == ["n3", "n1", "n2"]
    assert outcome.status is SearchStatus.READY
    assert [call[0] for call in fake_store.calls] == ["notes"]


async def test_results_grouped_by_type_regardless_of_completion_order() -> None:
    """Notes come first, then events, then lost & found, even if notes answer last."""
    delays = {"notes": 0.06, "events": 0.03, "lost_found": 0.0}
    store = FakeRecordStore(campus_records(), delay=lambda name, _: delays[name])
    outcome = await execute_search("math", SearchFilters(), build_adapters(store))
    assert store.completed == ["lost_found", "events", "notes"]
    assert _keys(outcome.results) == [
        ("note", "n3"),
        ("note", "n1"),
        ("event", "e1"),
        ("lost_found", "l2"),
    ]


@pytest.mark.parametrize(
    ("content_type", "expected", "collection"),
    [
        (ContentType.NOTES, ResultType.NOTE, "notes"),
        (ContentType.EVENTS, ResultType.EVENT, "events"),
        (ContentType.LOST_FOUND, ResultType.LOST_FOUND, "lost_found"),
    ],
)
async def test_content_tab_limits_adapters(
    fake_store, adapters, content_type, expected, collection
) -> None:
    """A specific tab queries only its collection and yields only its type."""
    outcome = await execute_search(
        "a", SearchFilters(content_type=content_type), adapters
    )
    assert outcome.results
    assert all(r.type is expected for r in outcome.results)
    assert [call[0] for call in fake_store.calls] == [collection]


async def test_refinements_combine_with_text(adapters) -> None:
    """Refinements are ANDed with the text match."""
    filters = SearchFilters(content_type=ContentType.NOTES, course="MATH101")
    outcome = await execute_search("math", filters, adapters)
    assert [r.id for r in outcome.results] == ["n3"]


async def test_event_date_upper_bound_compares_timestamps(adapters) -> None:
    """An event later on the 'to' day falls outside the range."""
    filters = SearchFilters(
        content_type=ContentType.EVENTS,
        event_date_from=date(2024, 11, 1),
        event_date_to=date(2024, 12, 1),
    )
    outcome = await execute_search("", filters, adapters)
    assert [r.id for r in outcome.results] == ["e1"]


async def test_failing_adapter_yields_partial_outcome() -> None:
    """A store error in one collection drops only that type and marks it failed."""
    store = FakeRecordStore(campus_records(), fail={"events"})
    outcome = await execute_search("math", SearchFilters(), build_adapters(store))
    assert _keys(outcome.results) == [
        ("note", "n3"),
        ("note", "n1"),
        ("lost_found", "l2"),
    ]
    assert outcome.failed_types == (ResultType.EVENT,)
    assert outcome.status is SearchStatus.PARTIAL


async def test_slow_adapter_times_out() -> None:
    """An adapter exceeding the timeout contributes nothing and is marked failed."""
    store = FakeRecordStore(
        campus_records(), delay=lambda name, _: 1.0 if name == "notes" else 0.0
    )
    outcome = await execute_search(
        "library", SearchFilters(), build_adapters(store), timeout=0.05
    )
    assert _keys(outcome.results) == [("event", "e2"), ("lost_found", "l1")]
    assert outcome.failed_types == (ResultType.NOTE,)


async def test_malformed_record_fails_only_its_type() -> None:
    """A record without an id fails its adapter's contribution, not the round."""
    records = campus_records()
    records["events"].append({"title": "Math without id", "location": "Hall B"})
    outcome = await execute_search(
        "math", SearchFilters(), build_adapters(FakeRecordStore(records))
    )
    assert outcome.failed_types == (ResultType.EVENT,)
    assert [r.id for r in outcome.results] == ["n3", "n1", "l2"]


async def test_orchestrator_publishes_loading_then_results() -> None:
    """While a round runs is_loading is True and previous results stay visible."""
    store = FakeRecordStore(campus_records())
    orchestrator = SearchOrchestrator(build_adapters(store))
    await orchestrator.search("chess", SearchFilters())
    assert [r.id for r in orchestrator.results] == ["e3"]

    store.delay = lambda name, _: 0.05
    task = asyncio.create_task(orchestrator.search("library", SearchFilters()))
    await asyncio.sleep(0.01)
    assert orchestrator.is_loading
    assert orchestrator.state.status is SearchStatus.LOADING
    assert [r.id for r in orchestrator.results] == ["e3"]

    state = await task
    assert not state.is_loading
    assert state.status is SearchStatus.READY
    assert [r.id for r in state.results] == ["e2", "l1"]


async def test_newer_round_wins_when_older_finishes_last() -> None:
    """A slow earlier round must not overwrite a later round's results."""
    store = FakeRecordStore(
        campus_records(),
        delay=lambda name, preds: 0.1 if "algebra" in text_terms(preds) else 0.0,
    )
    orchestrator = SearchOrchestrator(build_adapters(store))
    older = asyncio.create_task(orchestrator.search("algebra", SearchFilters()))
    newer = asyncio.create_task(orchestrator.search("chess", SearchFilters()))
    await asyncio.gather(older, newer)
    assert [r.id for r in orchestrator.results] == ["e3"]
    assert orchestrator.state.round_id == 2
    assert not orchestrator.is_loading


async def test_stale_round_finishing_first_is_discarded() -> None:
    """An earlier round finishing first does not publish; loading persists."""
    store = FakeRecordStore(
        campus_records(),
        delay=lambda name, preds: 0.1 if "algebra" in text_terms(preds) else 0.0,
    )
    orchestrator = SearchOrchestrator(build_adapters(store))
    older = asyncio.create_task(orchestrator.search("chess", SearchFilters()))
    newer = asyncio.create_task(orchestrator.search("algebra", SearchFilters()))
    await older
    assert orchestrator.is_loading
    assert orchestrator.results == ()

    await newer
    assert _keys(orchestrator.results) == [("note", "n1"), ("event", "e1")]
    assert not orchestrator.is_loading


async def test_unexpected_adapter_error_fails_only_its_type() -> None:
    """A non-store exception in one adapter is contained; other types still publish."""
    store = FakeRecordStore(
        campus_records(), raises={"events": httpx.InvalidURL("bad url")}
    )
    orchestrator = SearchOrchestrator(build_adapters(store))
    state = await orchestrator.search("math", SearchFilters())
    assert _keys(state.results) == [
        ("note", "n3"),
        ("note", "n1"),
        ("lost_found", "l2"),
    ]
    assert state.failed_types == (ResultType.EVENT,)
    assert not orchestrator.is_loading


async def test_scalar_tags_do_not_break_the_round() -> None:
    """A row with a non-iterable tags value still normalizes with every other type."""
    records = campus_records()
    records["events"].append({"id": "ex", "title": "math party", "tags": 5})
    outcome = await execute_search(
        "math", SearchFilters(), build_adapters(FakeRecordStore(records))
    )
    assert outcome.failed_types == ()
    assert ("event", "ex") in _keys(outcome.results)
    assert [r.id for r in outcome.results if r.type is ResultType.NOTE] == ["n3", "n1"]


async def test_orchestrator_failing_adapter_resolves_loading() -> None:
    """A store error in one collection publishes a partial state with loading cleared."""
    store = FakeRecordStore(campus_records(), fail={"events"})
    orchestrator = SearchOrchestrator(build_adapters(store))
    state = await orchestrator.search("math", SearchFilters())
    assert _keys(state.results) == [
        ("note", "n3"),
        ("note", "n1"),
        ("lost_found", "l2"),
    ]
    assert state.status is SearchStatus.PARTIAL
    assert not orchestrator.is_loading


async def test_cancelled_round_clears_loading() -> None:
    """Cancelling the current round restores the previous results, not loading."""
    store = FakeRecordStore(campus_records())
    orchestrator = SearchOrchestrator(build_adapters(store))
    await orchestrator.search("chess", SearchFilters())

    store.delay = lambda name, _: 0.2
    task = asyncio.create_task(orchestrator.search("math", SearchFilters()))
    await asyncio.sleep(0.01)
    assert orchestrator.is_loading
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
    assert not orchestrator.is_loading
    assert orchestrator.state.status is SearchStatus.READY
    assert [r.id for r in orchestrator.results] == ["e3"]


async def test_cancelled_first_round_returns_to_idle() -> None:
    """Cancelling the very first round leaves an idle, empty state."""
    store = FakeRecordStore(campus_records(), delay=lambda name, _: 0.2)
    orchestrator = SearchOrchestrator(build_adapters(store))
    task = asyncio.create_task(orchestrator.search("math", SearchFilters()))
    await asyncio.sleep(0.01)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
    assert not orchestrator.is_loading
    assert orchestrator.state.status is SearchStatus.IDLE
    assert orchestrator.results == ()


async def test_clear_returns_to_idle(adapters) -> None:
    """After results, an empty query on the 'all' tab publishes an idle empty list."""
    orchestrator = SearchOrchestrator(adapters)
    await orchestrator.search("math", SearchFilters())
    assert orchestrator.results
    state = await orchestrator.search("", SearchFilters.cleared())
    assert state.results == ()
    assert state.status is SearchStatus.IDLE


async def test_service_get_record(adapters) -> None:
    """get_record normalizes the stored row for the requested type."""
    service = SearchService(adapters)
    result = await service.get_record(ResultType.NOTE, "n1")
    assert result.title == "Linear Algebra Notes"
    assert result.get("profiles") == {"full_name": "Ada Okafor", "username": "ada"}


async def test_service_get_record_missing(adapters) -> None:
    """Unknown id raises ResourceNotFoundException."""
    service = SearchService(adapters)
    with pytest.raises(ResourceNotFoundException):
        await service.get_record(ResultType.EVENT, "nope")
