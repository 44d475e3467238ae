"""
ReserBot Backend — Supabase Record Store Tests
================================================

What:  Checks the PostgREST requests SupabaseRecordStore sends and how it
       translates responses and errors.
How:   httpx.MockTransport records each request and answers with canned
       PostgREST payloads; nothing leaves the process.
"""

import json

import httpx
import pytest

from reserbot.exceptions import RecordStoreError, StoreConfigurationError
from reserbot.services.supabase_store import SupabaseRecordStore

URL = "https://test-project.supabase.co"
KEY = "anon-key"


def make_store(handler, url=URL, key=KEY) -> SupabaseRecordStore:
    return SupabaseRecordStore(
        url=url,
        api_key=key,
        table="reservas",
        transport=httpx.MockTransport(handler),
    )


class Recorder:
    """MockTransport handler that remembers requests and replays one response."""

    def __init__(self, response: httpx.Response):
        self.response = response
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.response


class TestRequests:

    @pytest.mark.asyncio
    async def test_select_all_orders_by_fecha(self):
        rows = [{"id": 1, "fecha": "2099-01-01"}, {"id": 2, "fecha": "2099-02-01"}]
        recorder = Recorder(httpx.Response(200, json=rows))
        store = make_store(recorder)

        assert await store.select_all() == rows

        request = recorder.requests[0]
        assert request.method == "GET"
        assert request.url.path == "/rest/v1/reservas"
        assert request.url.params["select"] == "*"
        assert request.url.params["order"] == "fecha.asc"
        assert request.headers["apikey"] == KEY
        assert request.headers["Authorization"] == f"Bearer {KEY}"
        await store.close()

    @pytest.mark.asyncio
    async def test_select_all_descending(self):
        recorder = Recorder(httpx.Response(200, json=[]))
        store = make_store(recorder)

        await store.select_all(order_by="hora", ascending=False)

        assert recorder.requests[0].url.params["order"] == "hora.desc"

    @pytest.mark.asyncio
    async def test_insert_returns_first_row(self):
        stored = {"id": 10, "nombre": "Juan Perez", "fecha": "2099-01-01",
                  "hora": "10:00:00", "servicio": "Corte"}
        recorder = Recorder(httpx.Response(201, json=[stored]))
        store = make_store(recorder)

        result = await store.insert(
            {"nombre": "Juan Perez", "fecha": "2099-01-01", "hora": "10:00", "servicio": "Corte"}
        )

        assert result == stored
        request = recorder.requests[0]
        assert request.method == "POST"
        assert request.headers["Prefer"] == "return=representation"
        assert json.loads(request.content) == [
            {"nombre": "Juan Perez", "fecha": "2099-01-01", "hora": "10:00", "servicio": "Corte"}
        ]

    @pytest.mark.asyncio
    async def test_insert_without_returned_row_is_unexpected(self):
        store = make_store(Recorder(httpx.Response(201, json=[])))
        with pytest.raises(ValueError):
            await store.insert({"nombre": "Juan"})

    @pytest.mark.asyncio
    async def test_delete_filters_by_id(self):
        recorder = Recorder(httpx.Response(204))
        store = make_store(recorder)

        await store.delete(5)

        request = recorder.requests[0]
        assert request.method == "DELETE"
        assert request.url.params["id"] == "eq.5"

    @pytest.mark.asyncio
    async def test_count_reads_content_range(self):
        recorder = Recorder(httpx.Response(200, headers={"Content-Range": "*/42"}))
        store = make_store(recorder)

        assert await store.count() == 42
        request = recorder.requests[0]
        assert request.method == "HEAD"
        assert request.url.params["select"] == "*"
        assert "limit" not in request.url.params
        assert request.headers["Prefer"] == "count=exact"

    @pytest.mark.asyncio
    async def test_count_of_empty_table(self):
        store = make_store(Recorder(httpx.Response(200, headers={"Content-Range": "*/0"})))
        assert await store.count() == 0

    @pytest.mark.asyncio
    async def test_count_without_total_is_unexpected(self):
        store = make_store(Recorder(httpx.Response(200)))
        with pytest.raises(ValueError):
            await store.count()

    @pytest.mark.asyncio
    async def test_trailing_slash_in_url(self):
        recorder = Recorder(httpx.Response(200, json=[]))
        store = make_store(recorder, url=URL + "/")

        await store.select_all()

        assert recorder.requests[0].url.path == "/rest/v1/reservas"


class TestErrors:

    @pytest.mark.asyncio
    async def test_postgrest_error_message(self):
        payload = {
            "code": "22007",
            "message": 'invalid input syntax for type date: "mañana"',
            "details": None,
            "hint": None,
        }
        store = make_store(Recorder(httpx.Response(400, json=payload)))

        with pytest.raises(RecordStoreError) as exc_info:
            await store.select_all()

        assert exc_info.value.message == 'invalid input syntax for type date: "mañana"'
        assert exc_info.value.code == "22007"
        assert exc_info.value.context["status_code"] == 400

    @pytest.mark.asyncio
    async def test_auth_error_uses_message_field(self):
        store = make_store(Recorder(httpx.Response(401, json={"message": "Invalid API key"})))
        with pytest.raises(RecordStoreError, match="Invalid API key"):
            await store.select_all()

    @pytest.mark.asyncio
    async def test_bodyless_count_error_uses_reason_phrase(self):
        store = make_store(Recorder(httpx.Response(401)))
        with pytest.raises(RecordStoreError, match="Unauthorized"):
            await store.count()

    @pytest.mark.asyncio
    async def test_non_json_error_body(self):
        store = make_store(Recorder(httpx.Response(502, text="Bad Gateway upstream")))
        with pytest.raises(RecordStoreError, match="Bad Gateway upstream"):
            await store.delete(1)

    @pytest.mark.asyncio
    async def test_transport_error_is_not_wrapped(self):
        def handler(request):
            raise httpx.ConnectError("name resolution failed", request=request)

        store = make_store(handler)
        with pytest.raises(httpx.ConnectError):
            await store.select_all()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("url,key", [("", KEY), (URL, ""), ("", "")])
    async def test_missing_configuration(self, url, key):
        recorder = Recorder(httpx.Response(200, json=[]))
        store = make_store(recorder, url=url, key=key)

        with pytest.raises(StoreConfigurationError):
            await store.select_all()
        assert recorder.requests == []
