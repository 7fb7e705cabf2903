"""
Phrase and record models.

This package defines the in-memory 12-slot phrase, the persisted
wallet record schema, and the abstract remote record store contract.
"""

from .models import RecordId, WalletRecord
from .phrase import PhraseState
from .store import RecordStore

__all__ = ["PhraseState", "RecordId", "RecordStore", "WalletRecord"]
