"""
Session orchestration: shared record list and selection, the save/delete
decision flow, and the panel-level actions built on top of them.
"""

from .records import RecordBook
from .resolver import ResolverState, SaveConflictResolver
from .session import Clipboard, ClipboardError, WalletSession

__all__ = [
    "Clipboard",
    "ClipboardError",
    "RecordBook",
    "ResolverState",
    "SaveConflictResolver",
    "WalletSession",
]
