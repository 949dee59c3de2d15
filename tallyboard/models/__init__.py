"""Database models and enums for Tally Board."""

from .document import StoredDocument
from .enums import MutationKind, SyncState

__all__ = [
    "StoredDocument",
    "MutationKind",
    "SyncState",
]
