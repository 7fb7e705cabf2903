from __future__ import annotations

from typing import List, Protocol, Sequence

from .models import RecordId, WalletRecord


class RecordStore(Protocol):
    """
    Remote collection of named phrase records.

    Every call is awaited and raises `common.supabase.RecordStoreError` on
    failure. None of them is idempotent: two `insert_record` calls create two
    records, so callers only issue them on explicit user action.
    """

    async def list_records(self) -> List[WalletRecord]:
        """All records, newest first (created_at descending)."""
        ...

    async def insert_record(self, device_id: str, name: str, words: Sequence[str]) -> None:
        ...

    async def update_record(self, record_id: RecordId, words: Sequence[str]) -> None:
        """Replace the whole words payload; fails if the id no longer exists."""
        ...

    async def delete_record(self, record_id: RecordId) -> None:
        ...
