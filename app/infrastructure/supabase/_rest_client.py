"""Thin Supabase PostgREST client (no supabase-py).

Implements IRecordStore over the PostgREST endpoint at ``<url>/rest/v1``.
All HTTP calls use httpx.AsyncClient so they do not block the event loop.
Transport failures and non-2xx responses surface as StoreError.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import httpx

from app.application.dtos.predicate import Condition, OrderBy
from app.application.dtos.search import RawRecord
from app.domain.exceptions import StoreError
from app.infrastructure.supabase._rest_encoding import encode_query
from app.shared.telemetry.tracing import traced

# PostgreSQL "invalid_text_representation": e.g. a malformed uuid in id=eq.<value>
_PG_INVALID_TEXT = "22P02"


def _error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text or resp.reason_phrase
    if isinstance(body, dict):
        return str(body.get("message") or body)
    return str(body)


def _error_code(resp: httpx.Response) -> str | None:
    try:
        body = resp.json()
    except ValueError:
        return None
    return body.get("code") if isinstance(body, dict) else None


class SupabaseRESTClient:
    """Lightweight record store client using the PostgREST API."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._rest_url = f"{base_url.rstrip('/')}/rest/v1"
        self._headers = {
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
            "Accept": "application/json",
        }
        self._http = (
            http_client if http_client is not None else httpx.AsyncClient(timeout=timeout)
        )
        self._owns_http = http_client is None

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it (do not close injected client)."""
        if self._owns_http:
            await self._http.aclose()

    async def _get(
        self, collection: str, params: list[tuple[str, str]]
    ) -> httpx.Response:
        url = f"{self._rest_url}/{collection}"
        try:
            return await self._http.get(url, params=params, headers=self._headers)
        except httpx.HTTPError as e:
            raise StoreError(
                f"Request to {collection} failed: {e}", collection=collection
            ) from e

    @staticmethod
    def _rows(collection: str, resp: httpx.Response) -> list[dict[str, Any]]:
        if resp.status_code != 200:
            raise StoreError(
                f"Query on {collection} failed: {_error_message(resp)}",
                collection=collection,
                status_code=resp.status_code,
            )
        try:
            rows = resp.json()
        except ValueError as e:
            raise StoreError(
                f"Query on {collection} returned invalid JSON",
                collection=collection,
                status_code=resp.status_code,
            ) from e
        if not isinstance(rows, list):
            raise StoreError(
                f"Query on {collection} returned {type(rows).__name__}, expected a list",
                collection=collection,
                status_code=resp.status_code,
            )
        return rows

    @traced("supabase.query_collection")
    async def query_collection(
        self,
        name: str,
        predicates: Sequence[Condition],
        order_by: OrderBy | None = None,
        limit: int | None = None,
    ) -> list[RawRecord]:
        """Return rows of ``name`` matching every condition, in the requested order."""
        params = encode_query(predicates, order_by=order_by, limit=limit)
        resp = await self._get(name, params)
        return self._rows(name, resp)

    @traced("supabase.get_record")
    async def get_record(
        self, name: str, record_id: str, select: str = "*"
    ) -> RawRecord | None:
        """Return the row with ``id == record_id`` or None.

        A malformed id (rejected by the column type) counts as missing.
        """
        params = [("select", select), ("id", f"eq.{record_id}"), ("limit", "1")]
        resp = await self._get(name, params)
        if resp.status_code == 400 and _error_code(resp) == _PG_INVALID_TEXT:
            return None
        rows = self._rows(name, resp)
        return rows[0] if rows else None
