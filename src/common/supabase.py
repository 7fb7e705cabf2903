from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional, Sequence

import httpx
from pydantic import ValidationError

from state.models import RecordId, WalletRecord


logger = logging.getLogger(__name__)

# Environment variable names
ENV_URL = "SEED_SUPABASE_URL"
ENV_ANON_KEY = "SEED_SUPABASE_ANON_KEY"
ENV_TABLE = "SEED_SUPABASE_TABLE"

DEFAULT_TABLE = "wallets"


class RecordStoreError(RuntimeError):
    """Base error for the record store client."""


class RecordStoreApiError(RecordStoreError):
    """Store rejected the request or returned an unexpected structure."""


class RecordStoreTransportError(RecordStoreError):
    """Network failure or timeout talking to the store."""


def _getenv(name: str, default: Optional[str] = None) -> Optional[str]:
    val = os.environ.get(name)
    return val if val not in (None, "") else default


def _require(v: Optional[str], what: str) -> str:
    if not v:
        raise RuntimeError(f"Missing required configuration: {what}")
    return v


class SupabaseRecordStore:
    """
    Wallet record store backed by a Supabase table (PostgREST API).

    Notes
    - Row shape: {id, name, words, created_at, device_id}.
    - Listing is ordered newest first by `created_at`.
    - No retries: insert is not idempotent, and a failed write is reported
      to the caller, who decides whether the user tries again.
    - Accepts an injected `httpx.AsyncClient` (e.g. with a MockTransport);
      only a client created here is closed by `aclose()`.
    """

    def __init__(
        self,
        url: str,
        anon_key: str,
        *,
        table: str = DEFAULT_TABLE,
        timeout: float = 15.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        if not url:
            raise ValueError("url is required")
        if not anon_key:
            raise ValueError("anon_key is required")
        self._base_url = url.rstrip("/")
        self._table = table
        self._timeout = timeout
        self._owns_client = client is None
        self._headers = {
            "apikey": anon_key,
            "Authorization": f"Bearer {anon_key}",
        }
        self._client = client or httpx.AsyncClient(timeout=self._timeout)

    # -------- Construction helpers --------
    @classmethod
    def from_env(cls) -> "SupabaseRecordStore":
        url = _require(_getenv(ENV_URL), ENV_URL)
        key = _require(_getenv(ENV_ANON_KEY), ENV_ANON_KEY)
        return cls(url, key, table=_getenv(ENV_TABLE) or DEFAULT_TABLE)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "SupabaseRecordStore":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    # --------------- Public API ---------------
    async def list_records(self) -> List[WalletRecord]:
        data = await self._request(
            "GET",
            params={"select": "*", "order": "created_at.desc"},
        )
        if not isinstance(data, list):
            raise RecordStoreApiError("Malformed list response from record store")
        try:
            return [WalletRecord.model_validate(row) for row in data]
        except ValidationError as ve:
            raise RecordStoreApiError(f"Failed to parse wallet records: {ve}") from ve

    async def insert_record(self, device_id: str, name: str, words: Sequence[str]) -> None:
        payload = {"device_id": device_id, "name": name, "words": list(words)}
        await self._request("POST", json_body=payload, prefer="return=minimal")
        logger.info("Inserted wallet record %r", name)

    async def update_record(self, record_id: RecordId, words: Sequence[str]) -> None:
        data = await self._request(
            "PATCH",
            params={"id": f"eq.{record_id}"},
            json_body={"words": list(words)},
            prefer="return=representation",
        )
        if not data:
            raise RecordStoreApiError(f"Wallet record {record_id} no longer exists")
        logger.info("Updated wallet record %s", record_id)

    async def delete_record(self, record_id: RecordId) -> None:
        data = await self._request(
            "DELETE",
            params={"id": f"eq.{record_id}"},
            prefer="return=representation",
        )
        if not data:
            raise RecordStoreApiError(f"Wallet record {record_id} no longer exists")
        logger.info("Deleted wallet record %s", record_id)

    # --------------- Internal ---------------
    async def _request(
        self,
        method: str,
        *,
        params: Optional[Dict[str, str]] = None,
        json_body: Optional[Dict[str, Any]] = None,
        prefer: Optional[str] = None,
    ) -> Any:
        headers = dict(self._headers)
        if prefer:
            headers["Prefer"] = prefer
        url = f"{self._base_url}/rest/v1/{self._table}"
        try:
            resp = await self._client.request(
                method, url, params=params, json=json_body, headers=headers
            )
        except (httpx.TimeoutException, httpx.TransportError) as exc:
            logger.warning("Record store %s failed: %s", method, exc)
            raise RecordStoreTransportError(f"{method} {self._table} failed: {exc}") from exc

        if resp.status_code >= 400:
            # PostgREST error envelope: {message, code, details, hint}
            detail = resp.text[:200]
            try:
                body = resp.json()
                if isinstance(body, dict) and body.get("message"):
                    detail = str(body["message"])
            except Exception:
                pass
            logger.warning("Record store %s returned HTTP %s", method, resp.status_code)
            raise RecordStoreApiError(f"HTTP {resp.status_code} from record store: {detail}")

        if resp.status_code == 204 or not resp.content:
            return None
        try:
            return resp.json()
        except Exception as exc:  # JSON decode error
            raise RecordStoreApiError("Failed to parse JSON from record store") from exc


__all__ = [
    "SupabaseRecordStore",
    "RecordStoreError",
    "RecordStoreApiError",
    "RecordStoreTransportError",
]
