from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

from common.notifications import DISMISS_AFTER_SECONDS
from common.words import (
    TOTAL_WORDS,
    distribute,
    empty_slots,
    first_token,
    is_complete,
    is_pristine,
    join_phrase,
    sanitize,
)


# The "Copied!" confirmation reverts on the same schedule as the toast
COPIED_SECONDS = DISMISS_AFTER_SECONDS


@dataclass
class PhraseState:
    """
    The 12-slot phrase held by one panel, plus its derived display state.

    - `words` never changes length; every mutation goes through the methods below.
    - `copied_at` is when the phrase was last copied; the "Copied!" state
      lasts `COPIED_SECONDS` from then and ends early on any edit.
    - `export` holds the last rendered QR image; it is dropped on any edit,
      since it would no longer match the words.
    """

    words: List[str] = field(default_factory=empty_slots)
    copied_at: Optional[float] = None
    export: Optional[Any] = None

    # -------- Derived predicates --------
    @property
    def is_complete(self) -> bool:
        return is_complete(self.words)

    @property
    def is_pristine(self) -> bool:
        return is_pristine(self.words)

    @property
    def phrase(self) -> str:
        return join_phrase(self.words)

    def snapshot(self) -> List[str]:
        return list(self.words)

    def is_copied(self, now: float) -> bool:
        return self.copied_at is not None and now - self.copied_at < COPIED_SECONDS

    def mark_copied(self, now: float) -> None:
        self.copied_at = now

    # -------- Mutations --------
    def set_word(self, index: int, raw_value: str) -> None:
        """Keystroke edit: only the first whitespace token of `raw_value` is kept."""
        if not 0 <= index < TOTAL_WORDS:
            raise IndexError(f"slot index out of range: {index}")
        self.words[index] = sanitize(first_token(raw_value))
        self._touched()

    def paste(self, text: str, focused_index: int) -> None:
        new_words = distribute(text, focused_index, self.words)
        if new_words == self.words:
            return
        self.words = new_words
        self._touched()

    def load(self, snapshot: Sequence[str]) -> None:
        """Copy a stored snapshot in as-is; short snapshots are padded with empty words."""
        head = [str(w) for w in list(snapshot)[:TOTAL_WORDS]]
        self.words = head + [""] * (TOTAL_WORDS - len(head))
        self._touched()

    def clear(self) -> None:
        self.words = empty_slots()
        self.copied_at = None
        self.export = None

    def _touched(self) -> None:
        self.copied_at = None
        self.export = None
