from __future__ import annotations

import logging
from typing import Callable, List, Optional, Protocol

from common.notifications import Notification, NotificationChannel
from common.qr import DEFAULT_ERROR_CORRECTION, DEFAULT_MARGIN, DEFAULT_WIDTH, QrExportError, QrImage, encode_qr
from common.words import TOTAL_WORDS
from state.models import RecordId
from state.phrase import PhraseState
from state.store import RecordStore

from .records import RecordBook
from .resolver import ResolverState, SaveConflictResolver


logger = logging.getLogger(__name__)


class ClipboardError(RuntimeError):
    """Raised by clipboard collaborators when a write fails."""


class Clipboard(Protocol):
    def write_text(self, text: str) -> None:
        ...


Exporter = Callable[..., QrImage]


class WalletSession:
    """
    One interactive client: one or two phrase panels over a shared record list.

    - Single mode has one panel, dual mode two. Panels never sync with each
      other; only the record list and the selection are shared.
    - Every collaborator failure (store, clipboard, QR export) is turned into
      an error notification here; panel state is left as it was.
    """

    def __init__(
        self,
        store: RecordStore,
        *,
        device_id: Callable[[], str],
        dual: bool = False,
        notifier: Optional[NotificationChannel] = None,
        clipboard: Optional[Clipboard] = None,
        exporter: Exporter = encode_qr,
    ) -> None:
        self.notifier = notifier or NotificationChannel()
        self.book = RecordBook(store, self.notifier)
        self.resolver = SaveConflictResolver(store, self.book, self.notifier, device_id)
        self.panels: List[PhraseState] = [PhraseState() for _ in range(2 if dual else 1)]
        self._clipboard = clipboard
        self._exporter = exporter
        self._refreshing = 0
        self._save_panel = 0

    @property
    def dual(self) -> bool:
        return len(self.panels) == 2

    @property
    def notification(self) -> Optional[Notification]:
        return self.notifier.current()

    def panel(self, index: int = 0) -> PhraseState:
        if not 0 <= index < len(self.panels):
            raise IndexError(f"no panel {index} in {'dual' if self.dual else 'single'} mode")
        return self.panels[index]

    def busy(self, action: str) -> bool:
        if action == "refresh":
            return self._refreshing > 0
        return self.resolver.busy(action)

    async def start(self) -> bool:
        return await self.refresh()

    async def refresh(self) -> bool:
        self._refreshing += 1
        try:
            return await self.book.refresh()
        finally:
            self._refreshing -= 1

    # -------- Editing --------
    def type_word(self, panel: int, index: int, raw: str) -> None:
        self.panel(panel).set_word(index, raw)

    def paste(self, panel: int, index: int, text: str) -> None:
        self.panel(panel).paste(text, index)

    def clear(self, panel: int = 0) -> None:
        self.panel(panel).clear()
        self.book.deselect()

    def load(self, panel: int, record_id: RecordId) -> bool:
        target = self.panel(panel)
        rec = self.book.get(record_id)
        if rec is None:
            self.notifier.notify("That wallet is no longer available.", "error")
            return False
        target.load(rec.words)
        self.book.select(rec.id)
        self.notifier.notify(f"Loaded {rec.name or 'wallet'}.", "info")
        return True

    # -------- Export --------
    def copied(self, panel: int = 0) -> bool:
        """True while the panel shows its "Copied!" confirmation."""
        return self.panel(panel).is_copied(self.notifier.now())

    def copy(self, panel: int = 0) -> bool:
        target = self.panel(panel)
        if target.is_copied(self.notifier.now()):
            return False
        if not target.is_complete:
            self.notifier.notify(f"Enter all {TOTAL_WORDS} words first.", "info")
            return False
        if self._clipboard is None:
            self.notifier.notify("Clipboard is not available.", "error")
            return False
        try:
            self._clipboard.write_text(target.phrase)
        except ClipboardError as exc:
            logger.warning("Clipboard write failed: %s", exc)
            self.notifier.notify("Failed to copy seed phrase.", "error")
            return False
        target.mark_copied(self.notifier.now())
        self.notifier.notify("Seed phrase copied.", "success")
        return True

    def export_qr(self, panel: int = 0) -> Optional[QrImage]:
        target = self.panel(panel)
        if not target.is_complete:
            self.notifier.notify(f"Enter all {TOTAL_WORDS} words first.", "info")
            return None
        try:
            image = self._exporter(
                target.phrase,
                width=DEFAULT_WIDTH,
                margin=DEFAULT_MARGIN,
                error_correction=DEFAULT_ERROR_CORRECTION,
            )
        except QrExportError as exc:
            logger.warning("QR export failed: %s", exc)
            target.export = None
            self.notifier.notify("Failed to generate QR code.", "error")
            return None
        target.export = image
        return image

    def clear_qr(self, panel: int = 0) -> None:
        self.panel(panel).export = None

    # -------- Store-backed actions --------
    async def save(self, panel: int = 0) -> ResolverState:
        target = self.panel(panel)
        self._save_panel = panel
        return await self.resolver.request_save(target.snapshot())

    async def choose_update(self) -> bool:
        return await self.resolver.choose_update(self._pending_words())

    async def choose_save_new(self) -> bool:
        return await self.resolver.choose_save_new(self._pending_words())

    def cancel_choice(self) -> None:
        self.resolver.cancel_choice()

    def delete(self) -> ResolverState:
        return self.resolver.request_delete()

    async def confirm_delete(self) -> bool:
        return await self.resolver.confirm_delete()

    def cancel_delete(self) -> None:
        self.resolver.cancel_delete()

    def _pending_words(self) -> List[str]:
        # A choice writes the requesting panel as it is now, not as it was at request time
        return self.panel(self._save_panel).snapshot()
