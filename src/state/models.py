from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, Field, field_validator

from common.words import TOTAL_WORDS


RecordId = Union[int, str]


class WalletRecord(BaseModel):
    """
    A persisted, named phrase snapshot as stored in the remote collection.

    Fields
    - id: store-assigned identifier (numeric or uuid, depending on the table).
    - name: display name, e.g. "Wallet 3". Immutable from the client side.
    - words: up to 12 slot words in phrase order.
    - created_at: creation timestamp, used for newest-first listing.
    - device_id: tag of the client that inserted the record (never used for filtering).

    Notes
    - Update replaces the whole `words` payload; there is no field-level merge.
    """

    id: RecordId
    name: str = ""
    words: List[str] = Field(default_factory=list, description="Phrase words in slot order")
    created_at: Optional[datetime] = None
    device_id: Optional[str] = None

    @field_validator("words", mode="before")
    @classmethod
    def _clip_words(cls, value):
        if value is None:
            return []
        if not isinstance(value, (list, tuple)):
            raise ValueError("words must be a list of strings")
        return [str(w) if w is not None else "" for w in list(value)[:TOTAL_WORDS]]
