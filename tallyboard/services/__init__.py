"""Services for Tally Board."""

from .civil_clock import CivilDayClock
from .document_store import (
    DocumentStore,
    SQLDocumentStore,
    get_document_store,
    reset_document_store,
)
from .day_snapshot import DaySnapshot
from .global_settings_service import GlobalSettingsService
from .tally_service import BoardEntry, TallyService
from .history_service import HistoryService
from .midnight_watcher import MidnightWatcher

__all__ = [
    "CivilDayClock",
    "DocumentStore",
    "SQLDocumentStore",
    "get_document_store",
    "reset_document_store",
    "DaySnapshot",
    "GlobalSettingsService",
    "BoardEntry",
    "TallyService",
    "HistoryService",
    "MidnightWatcher",
]
