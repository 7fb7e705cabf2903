from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Literal, Optional


logger = logging.getLogger(__name__)

Variant = Literal["success", "error", "info"]

DISMISS_AFTER_SECONDS = 2.5


@dataclass(frozen=True)
class Notification:
    message: str
    variant: Variant
    issued_at: float


class NotificationChannel:
    """
    Single-slot, auto-dismissing status message (a toast).

    - At most one notification is visible; `notify` replaces the current one
      and restarts its dismissal window.
    - Dismissal is purely time driven: `current()` returns None once
      `dismiss_after` seconds have elapsed on the injected clock.
    """

    def __init__(
        self,
        *,
        dismiss_after: float = DISMISS_AFTER_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if dismiss_after <= 0:
            raise ValueError("dismiss_after must be > 0")
        self._dismiss_after = dismiss_after
        self._clock = clock
        self._current: Optional[Notification] = None

    def notify(self, message: str, variant: Variant = "info") -> Notification:
        if variant not in ("success", "error", "info"):
            raise ValueError(f"unknown notification variant: {variant!r}")
        note = Notification(message=message, variant=variant, issued_at=self._clock())
        self._current = note
        logger.debug("notification [%s]: %s", variant, message)
        return note

    def now(self) -> float:
        return self._clock()

    def current(self) -> Optional[Notification]:
        note = self._current
        if note is None:
            return None
        if self._clock() - note.issued_at >= self._dismiss_after:
            self._current = None
            return None
        return note

    def remaining(self) -> float:
        """Seconds until the visible notification auto-dismisses (0 if none)."""
        note = self.current()
        if note is None:
            return 0.0
        return max(0.0, note.issued_at + self._dismiss_after - self._clock())


__all__ = [
    "DISMISS_AFTER_SECONDS",
    "Notification",
    "NotificationChannel",
    "Variant",
]
