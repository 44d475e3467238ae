"""
ReserBot Backend — Supabase Record Store
==========================================

What:  RecordStore backed by a Supabase project's REST interface (PostgREST).
Why:   The reservations table is hosted by Supabase; its REST endpoint needs
       only the project URL and the anon key, no database driver.
How:   One httpx.AsyncClient per store (connection pooling, keep-alive),
       created with the application and closed at shutdown.

PostgREST mapping:
    select_all  → GET    /rest/v1/<table>?select=*&order=<col>.asc
    insert      → POST   /rest/v1/<table>   Prefer: return=representation
    delete      → DELETE /rest/v1/<table>?id=eq.<id>
    count       → HEAD   /rest/v1/<table>?select=*   Prefer: count=exact
                  (total read from the Content-Range header, e.g. "*/42")

Error translation:
    Non-2xx answer   → RecordStoreError(<PostgREST "message">)   → 400
    httpx.HTTPError  → propagated unchanged                       → 500
    Missing settings → StoreConfigurationError                    → 500
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from reserbot.exceptions import RecordStoreError, StoreConfigurationError
from reserbot.services.store_base import Record, RecordId, RecordStore

logger = logging.getLogger(__name__)


class SupabaseRecordStore(RecordStore):
    """
    Reservations stored in a Supabase table, reached through PostgREST.

    Args:
        url: Project URL, e.g. https://abcd.supabase.co
        api_key: anon (public) API key, sent as `apikey` and bearer token
        table: Table name under /rest/v1
        timeout: Seconds before a request is abandoned by httpx
        transport: Optional httpx transport (tests use httpx.MockTransport)
    """

    def __init__(
        self,
        url: str,
        api_key: str,
        table: str = "reservas",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = (url or "").rstrip("/")
        self.api_key = api_key or ""
        self.table = table
        self.endpoint = f"{self.url}/rest/v1/{table}"
        self._client = httpx.AsyncClient(
            headers={
                "apikey": self.api_key,
                "Authorization": f"Bearer {self.api_key}",
                "Accept": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    # ── RecordStore operations ────────────────────────────────────────────

    async def select_all(self, order_by: str = "fecha", ascending: bool = True) -> List[Record]:
        direction = "asc" if ascending else "desc"
        response = await self._request(
            "GET",
            params={"select": "*", "order": f"{order_by}.{direction}"},
        )
        rows = response.json()
        if not isinstance(rows, list):
            raise ValueError(f"Unexpected select payload from record store: {type(rows).__name__}")
        return rows

    async def insert(self, record: Record) -> Record:
        response = await self._request(
            "POST",
            json=[record],
            headers={"Prefer": "return=representation"},
        )
        rows = response.json()
        if not isinstance(rows, list) or not rows:
            raise ValueError("Record store did not return the inserted row")
        return rows[0]

    async def delete(self, record_id: RecordId) -> None:
        await self._request("DELETE", params={"id": f"eq.{record_id}"})

    async def count(self) -> int:
        # HEAD: PostgREST answers with the Content-Range header only, no rows
        response = await self._request(
            "HEAD",
            params={"select": "*"},
            headers={"Prefer": "count=exact"},
        )
        content_range = response.headers.get("content-range", "")
        _, _, total = content_range.rpartition("/")
        if not total.isdigit():
            raise ValueError(f"Unexpected Content-Range from record store: {content_range!r}")
        return int(total)

    async def close(self) -> None:
        await self._client.aclose()

    # ── Internals ─────────────────────────────────────────────────────────

    async def _request(
        self,
        method: str,
        params: Optional[Dict[str, str]] = None,
        json: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        if not self.url or not self.api_key:
            raise StoreConfigurationError(
                context={"url_set": bool(self.url), "key_set": bool(self.api_key)},
            )

        response = await self._client.request(
            method,
            self.endpoint,
            params=params,
            json=json,
            headers=headers,
        )
        logger.debug("%s %s -> %d", method, self.endpoint, response.status_code)

        if response.is_error:
            raise self._store_error(response)
        return response

    @staticmethod
    def _store_error(response: httpx.Response) -> RecordStoreError:
        """Build a RecordStoreError from a PostgREST error response."""
        code = None
        message = ""
        try:
            payload = response.json()
        except ValueError:
            payload = None

        if isinstance(payload, dict):
            code = payload.get("code")
            message = (
                payload.get("message")
                or payload.get("error_description")
                or payload.get("error")
                or payload.get("msg")
                or ""
            )

        if not message:
            message = response.text.strip() or response.reason_phrase or "record store error"

        return RecordStoreError(
            message=str(message),
            code=str(code) if code is not None else None,
            context={"status_code": response.status_code},
        )
