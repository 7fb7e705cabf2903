import os
import sys
from datetime import datetime, timedelta, timezone
from typing import Any, List, Optional, Tuple

import pytest


def pytest_configure():
    # Ensure `src/` is importable as top-level for `common.*`, `state.*`, `manager.*`
    root = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
    src_path = os.path.join(root, "src")
    if src_path not in sys.path:
        sys.path.insert(0, src_path)


PHRASE = [
    "Abandon", "Ability", "Able", "About", "Above", "Absent",
    "Absorb", "Abstract", "Absurd", "Abuse", "Access", "Accident",
]


class FakeClock:
    def __init__(self, t: float = 0.0) -> None:
        self.t = t

    def __call__(self) -> float:  # acts like time.monotonic
        return self.t

    def advance(self, dt: float) -> None:
        self.t += dt


class FakeStore:
    """In-memory RecordStore that records every call it receives."""

    def __init__(self) -> None:
        self.rows: List[dict] = []
        self.calls: List[Tuple[str, Any]] = []
        self.fail_on: set[str] = set()
        self._next_id = 1
        self._base = datetime(2024, 9, 1, tzinfo=timezone.utc)

    def add(self, name: str, words: List[str]) -> dict:
        row = {
            "id": self._next_id,
            "name": name,
            "words": list(words),
            "created_at": self._base + timedelta(minutes=self._next_id),
            "device_id": "dev-0",
        }
        self._next_id += 1
        self.rows.append(row)
        return row

    def _maybe_fail(self, op: str) -> None:
        if op in self.fail_on:
            from common.supabase import RecordStoreApiError

            raise RecordStoreApiError(f"{op} rejected")

    def count(self, op: str) -> int:
        return sum(1 for name, _ in self.calls if name == op)

    async def list_records(self):
        from state.models import WalletRecord

        self.calls.append(("list", None))
        self._maybe_fail("list")
        rows = sorted(self.rows, key=lambda r: r["created_at"], reverse=True)
        return [WalletRecord.model_validate(r) for r in rows]

    async def insert_record(self, device_id: str, name: str, words):
        self.calls.append(("insert", (device_id, name, list(words))))
        self._maybe_fail("insert")
        self.add(name, list(words))

    async def update_record(self, record_id, words):
        self.calls.append(("update", (record_id, list(words))))
        self._maybe_fail("update")
        for row in self.rows:
            if str(row["id"]) == str(record_id):
                row["words"] = list(words)
                return
        from common.supabase import RecordStoreApiError

        raise RecordStoreApiError(f"Wallet record {record_id} no longer exists")

    async def delete_record(self, record_id):
        self.calls.append(("delete", record_id))
        self._maybe_fail("delete")
        before = len(self.rows)
        self.rows = [r for r in self.rows if str(r["id"]) != str(record_id)]
        if len(self.rows) == before:
            from common.supabase import RecordStoreApiError

            raise RecordStoreApiError(f"Wallet record {record_id} no longer exists")


class FakeClipboard:
    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.text: Optional[str] = None

    def write_text(self, text: str) -> None:
        if self.fail:
            from manager.session import ClipboardError

            raise ClipboardError("clipboard denied")
        self.text = text


@pytest.fixture
def phrase() -> List[str]:
    return list(PHRASE)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def clipboard() -> FakeClipboard:
    return FakeClipboard()


@pytest.fixture
def failing_clipboard() -> FakeClipboard:
    return FakeClipboard(fail=True)
