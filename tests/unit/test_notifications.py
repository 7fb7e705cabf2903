from __future__ import annotations

import pytest

from common.notifications import DISMISS_AFTER_SECONDS, NotificationChannel


def test_notification_auto_dismisses(clock):
    ch = NotificationChannel(clock=clock)
    ch.notify("Saved as Wallet 1.", "success")

    clock.advance(DISMISS_AFTER_SECONDS - 0.1)
    note = ch.current()
    assert note is not None and note.variant == "success"
    assert ch.remaining() == pytest.approx(0.1)

    clock.advance(0.2)
    assert ch.current() is None
    assert ch.remaining() == 0.0


def test_new_notification_replaces_and_restarts_timer(clock):
    ch = NotificationChannel(clock=clock)
    ch.notify("first", "info")
    clock.advance(2.0)
    ch.notify("second", "error")

    clock.advance(2.0)
    note = ch.current()
    assert note is not None
    assert note.message == "second"
    assert note.variant == "error"


def test_rejects_unknown_variant(clock):
    ch = NotificationChannel(clock=clock)
    with pytest.raises(ValueError):
        ch.notify("x", "warning")  # type: ignore[arg-type]
    assert ch.current() is None


def test_rejects_non_positive_interval():
    with pytest.raises(ValueError):
        NotificationChannel(dismiss_after=0)
