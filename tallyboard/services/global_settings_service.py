"""Service for the globally shared custom tally list and display order."""

from typing import List, Optional

from tallyboard.services.civil_clock import CivilDayClock
from tallyboard.services.document_store import DocumentStore
from tallyboard.utils.logger import logger

GLOBAL_SETTINGS_COLLECTION = "globalSettings"
CUSTOM_TYPES_DOCUMENT = "customTallyTypes"
TALLY_ORDER_DOCUMENT = "tallyOrder"


class GlobalSettingsService:
    """
    Reads and writes the two global settings documents.

    Both documents are shared by every client and every day; writes are
    last-write-wins overwrites.
    """

    def __init__(self, store: DocumentStore, clock: CivilDayClock):
        self.store = store
        self.clock = clock

    def fetch_custom_types(self) -> Optional[List[str]]:
        """
        Get the global custom tally list.

        Returns:
            List of custom names, or None if the document has never been written
        """
        data = self.store.get(GLOBAL_SETTINGS_COLLECTION, CUSTOM_TYPES_DOCUMENT)
        if data is None:
            return None
        return list(data.get(CUSTOM_TYPES_DOCUMENT) or [])

    def save_custom_types(self, types: List[str]) -> None:
        self.store.set(
            GLOBAL_SETTINGS_COLLECTION,
            CUSTOM_TYPES_DOCUMENT,
            {
                CUSTOM_TYPES_DOCUMENT: list(types),
                "updatedAt": self.clock.timestamp(),
            },
        )
        logger.info(f"Saved global custom tally types: {types}")

    def fetch_tally_order(self) -> List[str]:
        """Get the saved display order; empty when none has been saved."""
        data = self.store.get(GLOBAL_SETTINGS_COLLECTION, TALLY_ORDER_DOCUMENT)
        if data is None:
            return []
        return list(data.get(TALLY_ORDER_DOCUMENT) or [])

    def save_tally_order(self, order: List[str]) -> None:
        self.store.set(
            GLOBAL_SETTINGS_COLLECTION,
            TALLY_ORDER_DOCUMENT,
            {
                TALLY_ORDER_DOCUMENT: list(order),
                "updatedAt": self.clock.timestamp(),
            },
        )
        logger.info(f"Saved global tally order: {order}")
