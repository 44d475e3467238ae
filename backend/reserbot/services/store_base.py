"""
ReserBot Backend — Abstract Record Store Interface
====================================================

What:  Abstract base class defining the contract every reservation store honours.
Why:   ReservaService depends on this interface only, so the managed Supabase
       table, a direct Postgres connection, or an in-memory fake for tests can
       be swapped without touching validation or routing code.
How:   Concrete implementations inherit from RecordStore and implement the
       four data operations plus close().

Implementations:
    - SupabaseRecordStore: PostgREST over HTTP (default)
    - DatabaseRecordStore: async SQLAlchemy on the same table
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Union

Record = Dict[str, Any]
RecordId = Union[int, str]


class RecordStore(ABC):
    """
    Contract:
        - Records are plain dicts keyed by column name.
        - A store that answers with an error raises RecordStoreError carrying
          the store's message.
        - Transport failures propagate unchanged; the API maps them to 500.
        - Stores hold no per-request state and are shared by all requests.
    """

    @abstractmethod
    async def select_all(self, order_by: str = "fecha", ascending: bool = True) -> List[Record]:
        """Return every record, sorted by `order_by`."""
        ...

    @abstractmethod
    async def insert(self, record: Record) -> Record:
        """
        Insert one record and return it as stored.

        The returned dict includes the store-assigned `id` and any
        server-side defaults.
        """
        ...

    @abstractmethod
    async def delete(self, record_id: RecordId) -> None:
        """
        Delete the record with `record_id`.

        Deleting an id that does not exist is not an error.
        """
        ...

    @abstractmethod
    async def count(self) -> int:
        """Return the total number of records (used by the connectivity probe)."""
        ...

    async def close(self) -> None:
        """Release connections held by the store. Called once at shutdown."""
        return None
