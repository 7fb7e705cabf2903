from __future__ import annotations

import logging
from pathlib import Path

import pytest

from common.device import DeviceIdentity
from common.logging_config import PhraseRedactionFilter
from common.supabase import SupabaseRecordStore
from manager import handler


def test_build_session_from_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    monkeypatch.setenv("SEED_SUPABASE_URL", "https://demo.supabase.co")
    monkeypatch.setenv("SEED_SUPABASE_ANON_KEY", "anon")
    monkeypatch.setenv("SEED_DEVICE_FILE", str(tmp_path / "device.json"))
    monkeypatch.setenv("SEED_DUAL_MODE", "true")

    session = handler.build_session()

    assert session.dual is True
    assert isinstance(session.book._store, SupabaseRecordStore)


def test_build_session_missing_config(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("SEED_SUPABASE_URL", raising=False)
    monkeypatch.delenv("SEED_SUPABASE_ANON_KEY", raising=False)
    with pytest.raises(RuntimeError, match="Missing required configuration"):
        handler.build_session()


@pytest.mark.asyncio
async def test_open_session_tags_inserts_with_device_id(store, phrase, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("SEED_DUAL_MODE", raising=False)
    device = DeviceIdentity(tmp_path / "device.json")
    store.add("Wallet 1", phrase)

    session = await handler.open_session(configure_logging=False, store=store, device=device)
    assert session.dual is False
    assert [r.name for r in session.book.records] == ["Wallet 1"]

    session.paste(0, 0, " ".join(phrase))
    await session.save(0)
    inserts = [args for op, args in store.calls if op == "insert"]
    assert inserts == [(device.get(), "Wallet 2", phrase)]


@pytest.mark.parametrize(
    "msg,args,redacted",
    [
        ("words=%s", ("abandon ability",), True),
        ("anon key=%s", ("xyz",), True),
        ("Inserted wallet record %r", ("Wallet 2",), False),
    ],
)
def test_redaction_filter(msg, args, redacted):
    record = logging.LogRecord("x", logging.INFO, __file__, 1, msg, args, None)
    assert PhraseRedactionFilter().filter(record) is True
    assert ("REDACTED" in record.getMessage()) is redacted
