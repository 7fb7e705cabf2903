from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional
from uuid import uuid4


logger = logging.getLogger(__name__)

ENV_DEVICE_FILE = "SEED_DEVICE_FILE"
ENV_CACHE_DIR = "SEED_CACHE_DIR"


def _default_device_file() -> Path:
    # Explicit file wins, then cache dir, then project-local .cache folder
    explicit = os.environ.get(ENV_DEVICE_FILE)
    if explicit:
        return Path(explicit)
    base = os.environ.get(ENV_CACHE_DIR)
    if base:
        return Path(base) / "device.json"
    return Path(".cache") / "device.json"


class DeviceIdentity:
    """
    Locally persisted device identifier used to tag inserted records.

    - Backed by a single JSON file: {"device_id": "<hex>"}.
    - Loaded on first access; a missing or corrupt file is healed by
      generating a fresh id and writing it back.
    - If the write fails the generated id is still kept for this process.
    """

    def __init__(self, path: Optional[os.PathLike[str] | str] = None) -> None:
        self._path = Path(path) if path else _default_device_file()
        self._device_id: Optional[str] = None

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> Optional[str]:
        try:
            if not self._path.exists():
                return None
            with self._path.open("r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, ValueError):
            logger.warning("Ignoring unreadable device file %s", self._path)
            return None
        if isinstance(raw, dict):
            val = raw.get("device_id")
            if isinstance(val, str) and val.strip():
                return val.strip()
        return None

    def _save(self, device_id: str) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("w", encoding="utf-8") as f:
                json.dump({"device_id": device_id}, f, indent=2, sort_keys=True)
        except OSError as exc:
            logger.warning("Could not persist device id to %s: %s", self._path, exc)

    def get(self) -> str:
        if self._device_id is not None:
            return self._device_id
        device_id = self._read()
        if device_id is None:
            device_id = uuid4().hex
            self._save(device_id)
            logger.info("Generated new device id")
        self._device_id = device_id
        return device_id


__all__ = ["DeviceIdentity"]
