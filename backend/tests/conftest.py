"""
ReserBot Backend — Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Overview:
    ├── fake_store:     In-memory RecordStore (no Supabase, no database)
    ├── mock_store:     AsyncMock with the RecordStore interface
    ├── test_settings:  Settings with test credentials and a temp static dir
    ├── app:            create_app() wired to fake_store
    └── test_client:    HTTPX AsyncClient talking to `app` through ASGITransport
"""

import os
import tempfile
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient


# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Set BEFORE reserbot is imported: reserbot.main builds a default app at import
os.environ["RECORD_STORE_BACKEND"] = "supabase"
os.environ["SUPABASE_URL"] = "https://test-project.supabase.co"
os.environ["SUPABASE_ANON_KEY"] = "test-key-not-real"
os.environ["STATIC_DIR"] = tempfile.mkdtemp(prefix="reserbot_static_")
os.environ["LOG_LEVEL"] = "WARNING"

from reserbot.config import Settings  # noqa: E402
from reserbot.main import create_app  # noqa: E402
from reserbot.services.store_base import RecordStore  # noqa: E402


class FakeRecordStore(RecordStore):
    """
    In-memory RecordStore.

    Assigns sequential ids and a created_at timestamp like the real table.
    Set `fail_with` to an exception instance to make every call raise it.
    """

    def __init__(self, rows: Optional[List[Dict[str, Any]]] = None):
        self.rows: List[Dict[str, Any]] = []
        self.next_id = 1
        self.fail_with: Optional[Exception] = None
        self.closed = False
        for row in rows or []:
            self._store(dict(row))

    def _check(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    def _store(self, record: Dict[str, Any]) -> Dict[str, Any]:
        stored = {
            "id": self.next_id,
            **record,
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        self.next_id += 1
        self.rows.append(stored)
        return stored

    async def select_all(self, order_by: str = "fecha", ascending: bool = True):
        self._check()
        return sorted(
            (dict(row) for row in self.rows),
            key=lambda row: row[order_by],
            reverse=not ascending,
        )

    async def insert(self, record):
        self._check()
        return dict(self._store(dict(record)))

    async def delete(self, record_id) -> None:
        self._check()
        self.rows = [row for row in self.rows if str(row["id"]) != str(record_id)]

    async def count(self) -> int:
        self._check()
        return len(self.rows)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_store():
    return FakeRecordStore()


@pytest.fixture
def mock_store():
    """
    AsyncMock standing in for a RecordStore.

    Usage:
        mock_store.insert.return_value = {"id": 1, ...}
    """
    store = AsyncMock(spec=RecordStore)
    store.select_all = AsyncMock(return_value=[])
    store.insert = AsyncMock()
    store.delete = AsyncMock(return_value=None)
    store.count = AsyncMock(return_value=0)
    return store


@pytest.fixture
def static_dir(tmp_path):
    directory = tmp_path / "public"
    directory.mkdir()
    return directory


@pytest.fixture
def test_settings(static_dir):
    return Settings(
        _env_file=None,
        supabase_url="https://test-project.supabase.co",
        supabase_anon_key="test-key-not-real",
        static_dir=str(static_dir),
        log_level="WARNING",
    )


@pytest.fixture
def valid_payload():
    return {
        "nombre": "Juan Perez",
        "fecha": "2099-01-01",
        "hora": "10:00",
        "servicio": "Corte",
    }


@pytest.fixture
def app(test_settings, fake_store):
    return create_app(settings=test_settings, record_store=fake_store)


@pytest_asyncio.fixture
async def test_client(app):
    """
    Async HTTP client routed straight into the ASGI app.

    App exceptions are re-raised into the test (ASGITransport default), so an
    error that escapes the app instead of becoming a 500 response fails loudly.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
