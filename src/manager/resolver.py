from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, List, Optional, Sequence, Set

from common.notifications import NotificationChannel
from common.supabase import RecordStoreError
from common.words import is_pristine
from state.models import RecordId
from state.store import RecordStore

from .records import RecordBook


logger = logging.getLogger(__name__)


class ResolverState(str, Enum):
    IDLE = "idle"
    AWAITING_CHOICE = "awaiting_choice"
    AWAITING_DELETE_CONFIRM = "awaiting_delete_confirm"


class SaveConflictResolver:
    """
    Decides what a save or delete request does against the record store.

    - Save with nothing selected inserts a new "Wallet {n}" record directly.
    - Save with a record selected waits for the user: update that record,
      save as a new one, or cancel. The resolver never guesses.
    - Delete needs a selection and an explicit confirmation.

    Each request is single shot: leaving AWAITING_CHOICE or
    AWAITING_DELETE_CONFIRM always returns to IDLE, and a new request
    discards whatever decision was pending. While an action is running,
    from its store call through the listing refresh that follows, repeated
    triggers of that action are ignored.
    """

    def __init__(
        self,
        store: RecordStore,
        book: RecordBook,
        notifier: NotificationChannel,
        device_id: Callable[[], str],
    ) -> None:
        self._store = store
        self._book = book
        self._notifier = notifier
        self._device_id = device_id
        self._state = ResolverState.IDLE
        self._pending_words: List[str] = []
        self._pending_id: Optional[RecordId] = None
        self._in_flight: Set[str] = set()

    @property
    def state(self) -> ResolverState:
        return self._state

    @property
    def pending_id(self) -> Optional[RecordId]:
        return self._pending_id

    def busy(self, action: str) -> bool:
        return action in self._in_flight

    # -------- Save --------
    async def request_save(self, words: Sequence[str]) -> ResolverState:
        if self.busy("save"):
            logger.debug("Ignoring save request while a save is in flight")
            return self._state
        self._reset()

        if is_pristine(words):
            self._notifier.notify("Nothing to save.", "info")
            return self._state

        if self._book.selected_id is None:
            await self._insert(words)
            return self._state

        self._pending_words = list(words)
        self._pending_id = self._book.selected_id
        self._state = ResolverState.AWAITING_CHOICE
        return self._state

    async def choose_update(self, words: Optional[Sequence[str]] = None) -> bool:
        """Write the pending choice as an update of the selected record.

        `words` are the panel's words at the moment of the choice; without
        them the snapshot taken by `request_save` is used.
        """
        if self._state is not ResolverState.AWAITING_CHOICE or self._pending_id is None:
            return False
        record_id = self._pending_id
        words = self._pending_words if words is None else list(words)
        self._reset()
        if is_pristine(words):
            self._notifier.notify("Nothing to save.", "info")
            return False
        return await self._update(record_id, words)

    async def choose_save_new(self, words: Optional[Sequence[str]] = None) -> bool:
        if self._state is not ResolverState.AWAITING_CHOICE:
            return False
        words = self._pending_words if words is None else list(words)
        self._reset()
        if is_pristine(words):
            self._notifier.notify("Nothing to save.", "info")
            return False
        return await self._insert(words)

    def cancel_choice(self) -> None:
        if self._state is ResolverState.AWAITING_CHOICE:
            self._reset()

    # -------- Delete --------
    def request_delete(self) -> ResolverState:
        if self.busy("delete"):
            logger.debug("Ignoring delete request while a delete is in flight")
            return self._state
        self._reset()

        if self._book.selected_id is None:
            self._notifier.notify("Select a saved wallet to delete.", "info")
            return self._state

        self._pending_id = self._book.selected_id
        self._state = ResolverState.AWAITING_DELETE_CONFIRM
        return self._state

    async def confirm_delete(self) -> bool:
        if self._state is not ResolverState.AWAITING_DELETE_CONFIRM or self._pending_id is None:
            return False
        record_id = self._pending_id
        self._reset()

        name = self._display_name(record_id)
        self._in_flight.add("delete")
        try:
            try:
                await self._store.delete_record(record_id)
            except RecordStoreError as exc:
                logger.warning("Delete of wallet record %s failed: %s", record_id, exc)
                self._notifier.notify("Failed to delete wallet.", "error")
                return False

            if self._book.selected_id is not None and str(self._book.selected_id) == str(record_id):
                self._book.deselect()
            self._notifier.notify(f"Deleted {name}.", "success")
            await self._book.refresh()
            return True
        finally:
            # Released only once the follow-up listing has been applied
            self._in_flight.discard("delete")

    def cancel_delete(self) -> None:
        if self._state is ResolverState.AWAITING_DELETE_CONFIRM:
            self._reset()

    # --------------- Internal ---------------
    def _reset(self) -> None:
        self._state = ResolverState.IDLE
        self._pending_words = []
        self._pending_id = None

    def _display_name(self, record_id: RecordId) -> str:
        rec = self._book.get(record_id)
        return rec.name if rec is not None and rec.name else "wallet"

    async def _insert(self, words: Sequence[str]) -> bool:
        name = self._book.next_default_name()
        self._in_flight.add("save")
        try:
            try:
                await self._store.insert_record(self._device_id(), name, list(words))
            except RecordStoreError as exc:
                logger.warning("Insert of %r failed: %s", name, exc)
                self._notifier.notify("Failed to save wallet.", "error")
                return False

            # The new id is not surfaced back, so the phrase is no longer tied to a record.
            self._book.deselect()
            self._notifier.notify(f"Saved as {name}.", "success")
            await self._book.refresh()
            return True
        finally:
            self._in_flight.discard("save")

    async def _update(self, record_id: RecordId, words: Sequence[str]) -> bool:
        name = self._display_name(record_id)
        self._in_flight.add("save")
        try:
            try:
                await self._store.update_record(record_id, list(words))
            except RecordStoreError as exc:
                logger.warning("Update of wallet record %s failed: %s", record_id, exc)
                self._notifier.notify("Failed to update wallet.", "error")
                return False

            self._notifier.notify(f"Updated {name}.", "success")
            await self._book.refresh()
            return True
        finally:
            self._in_flight.discard("save")
