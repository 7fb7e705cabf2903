from __future__ import annotations

import os
from typing import Optional

from common.device import DeviceIdentity
from common.logging_config import setup_logging
from common.supabase import SupabaseRecordStore
from state.store import RecordStore

from .session import Clipboard, WalletSession


# Environment configuration
ENV_DUAL_MODE = "SEED_DUAL_MODE"

_TRUE_VALUES = ("1", "true", "yes", "on")


def _getenv(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.environ.get(name)
    return v if v not in (None, "") else default


def _parse_bool(raw: Optional[str]) -> bool:
    return bool(raw) and raw.strip().lower() in _TRUE_VALUES


def build_session(
    *,
    store: Optional[RecordStore] = None,
    device: Optional[DeviceIdentity] = None,
    clipboard: Optional[Clipboard] = None,
    dual: Optional[bool] = None,
) -> WalletSession:
    """
    Wire a WalletSession from the environment.

    - SEED_SUPABASE_URL, SEED_SUPABASE_ANON_KEY (required unless `store` is given)
    - SEED_SUPABASE_TABLE (default: wallets)
    - SEED_DEVICE_FILE / SEED_CACHE_DIR for the device id file
    - SEED_DUAL_MODE to show two independent panels

    Raises RuntimeError when required configuration is missing.
    """
    store = store or SupabaseRecordStore.from_env()
    device = device or DeviceIdentity()
    if dual is None:
        dual = _parse_bool(_getenv(ENV_DUAL_MODE))
    return WalletSession(store, device_id=device.get, dual=dual, clipboard=clipboard)


async def open_session(*, configure_logging: bool = True, **kwargs) -> WalletSession:
    """Build a session and load the saved wallet list once."""
    if configure_logging:
        setup_logging()
    session = build_session(**kwargs)
    await session.start()
    return session
