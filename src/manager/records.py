from __future__ import annotations

import logging
from typing import List, Optional

from common.notifications import NotificationChannel
from common.supabase import RecordStoreError
from state.models import RecordId, WalletRecord
from state.store import RecordStore


logger = logging.getLogger(__name__)


class RecordBook:
    """
    Client-side view of the remote collection, shared by all panels.

    - `records`: last applied listing, newest first.
    - `selected_id`: the record the in-memory phrase mirrors, or None.

    Refreshes are tagged with an increasing token; a response that arrives
    after a newer refresh was issued is dropped rather than applied.
    """

    def __init__(self, store: RecordStore, notifier: NotificationChannel) -> None:
        self._store = store
        self._notifier = notifier
        self.records: List[WalletRecord] = []
        self.selected_id: Optional[RecordId] = None
        self._latest_token = 0

    @property
    def selected(self) -> Optional[WalletRecord]:
        if self.selected_id is None:
            return None
        return self.get(self.selected_id)

    def get(self, record_id: RecordId) -> Optional[WalletRecord]:
        for rec in self.records:
            if str(rec.id) == str(record_id):
                return rec
        return None

    def select(self, record_id: RecordId) -> None:
        self.selected_id = record_id

    def deselect(self) -> None:
        self.selected_id = None

    def next_default_name(self) -> str:
        # Best effort only: two clients saving at once can pick the same n.
        return f"Wallet {len(self.records) + 1}"

    async def refresh(self) -> bool:
        """Reload the listing. Returns True when the response was applied."""
        self._latest_token += 1
        token = self._latest_token
        try:
            records = await self._store.list_records()
        except RecordStoreError as exc:
            logger.warning("Failed to load wallet records: %s", exc)
            if token == self._latest_token:
                self._notifier.notify("Failed to load saved wallets.", "error")
            return False

        if token != self._latest_token:
            logger.debug("Discarding stale wallet listing (token %s < %s)", token, self._latest_token)
            return False
        self.records = list(records)
        return True
