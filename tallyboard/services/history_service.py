"""History service for archived day snapshots and spreadsheet export."""

import io
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Sequence

import pandas as pd
from openpyxl.utils import get_column_letter

from tallyboard.exceptions import StoreUnavailable
from tallyboard.services.civil_clock import CivilDayClock, parse_date_key
from tallyboard.services.counter_set import DEFAULT_TALLY_TYPES
from tallyboard.services.day_snapshot import TALLIES_COLLECTION, DaySnapshot
from tallyboard.services.document_store import DocumentStore
from tallyboard.utils.logger import logger

EXPORT_SHEET_NAME = "Historical Data"
DAY_OF_WEEK_COLUMN = "Day of Week"
DATE_COLUMN = "Date"


def _long_date(date_key: str) -> str:
    day = parse_date_key(date_key)
    return f"{day.strftime('%B')} {day.day}, {day.year}"


class HistoryService:
    """
    Projects archived day snapshots for display and export.

    Screens list days newest first; exports list them oldest first.
    """

    def __init__(
        self,
        store: DocumentStore,
        clock: CivilDayClock,
        builtin_types: Sequence[str] = DEFAULT_TALLY_TYPES,
    ):
        self.store = store
        self.clock = clock
        self.builtin_types = tuple(builtin_types)

    def load_all(self) -> List[DaySnapshot]:
        """
        Fetch every day snapshot, newest first.

        Documents whose id is not a ``YYYY-MM-DD`` key are skipped.

        Raises:
            StoreUnavailable: If the collection cannot be read
        """
        try:
            documents = self.store.list_documents(TALLIES_COLLECTION)
        except StoreUnavailable as e:
            logger.error(f"Error loading historical data: {e}")
            raise

        snapshots = []
        for date_key, data in documents:
            try:
                parse_date_key(date_key)
            except ValueError:
                logger.warning(f"Skipping tallies document with invalid id: {date_key}")
                continue
            tallies = data.get("tallies") or {}
            customs = data.get("customTallyTypes") or []
            if not isinstance(tallies, Mapping) or not isinstance(customs, list):
                logger.warning(f"Skipping malformed tallies document: {date_key}")
                continue
            # Keep every count the day recorded, even for since-removed tallies
            custom_types = list(customs) + list(tallies.keys())
            snapshots.append(
                DaySnapshot.from_document(
                    date_key,
                    data,
                    custom_types=custom_types,
                    builtin_types=self.builtin_types,
                )
            )

        # YYYY-MM-DD keys sort chronologically as strings
        snapshots.sort(key=lambda s: s.date_key, reverse=True)
        logger.debug(f"Loaded {len(snapshots)} historical days")
        return snapshots

    def format_created_at(self, created_at: Optional[str]) -> str:
        """Render a stored ISO timestamp in the fixed zone, or "Never"."""
        if not created_at:
            return "Never"
        try:
            moment = datetime.fromisoformat(created_at)
        except ValueError:
            return created_at
        if moment.tzinfo is not None:
            moment = moment.astimezone(self.clock.zone)
        return moment.strftime("%b %d, %Y, %I:%M:%S %p")

    def to_history_rows(self, snapshots: Sequence[DaySnapshot]) -> List[Dict[str, Any]]:
        """On-screen rows, in the order given (newest first from load_all)."""
        rows = []
        for snapshot in snapshots:
            day = parse_date_key(snapshot.date_key)
            rows.append(
                {
                    "id": snapshot.date_key,
                    "formatted_date": f"{day.strftime('%A')}, {_long_date(snapshot.date_key)}",
                    "display_time": self.format_created_at(snapshot.created_at),
                    "tallies": dict(snapshot.counters.counts),
                    "custom_types": snapshot.custom_types,
                }
            )
        return rows

    def to_export_rows(
        self, snapshots: Sequence[DaySnapshot], all_names: Sequence[str]
    ) -> List[Dict[str, Any]]:
        """
        Flatten snapshots into spreadsheet rows, oldest first.

        Args:
            snapshots: Day snapshots in any order
            all_names: Tally names currently known; one column each

        Returns:
            Rows keyed by "Day of Week", "Date" and each tally name. A tally
            missing from an older day counts as 0.
        """
        rows = []
        for snapshot in sorted(snapshots, key=lambda s: s.date_key):
            day = parse_date_key(snapshot.date_key)
            row: Dict[str, Any] = {
                DAY_OF_WEEK_COLUMN: day.strftime("%A"),
                DATE_COLUMN: _long_date(snapshot.date_key),
            }
            for name in all_names:
                row[name] = snapshot.counters.counts.get(name, 0)
            rows.append(row)
        return rows

    def export_file_name(self, product: Optional[str] = None) -> str:
        """``<product>_History_<MM>-<DD>-<YYYY>.xlsx`` for today's civil date."""
        if product is None:
            from tallyboard.config import settings

            product = settings.product_name
        today = self.clock.now_in_zone()
        return f"{product}_History_{today.strftime('%m-%d-%Y')}.xlsx"

    def export_to_excel(
        self, rows: Sequence[Dict[str, Any]], all_names: Sequence[str]
    ) -> bytes:
        """
        Render export rows into an .xlsx workbook.

        Returns:
            Workbook bytes
        """
        columns = [DAY_OF_WEEK_COLUMN, DATE_COLUMN] + list(all_names)
        df = pd.DataFrame(list(rows), columns=columns)

        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
            df.to_excel(writer, index=False, sheet_name=EXPORT_SHEET_NAME)
            worksheet = writer.sheets[EXPORT_SHEET_NAME]
            widths = [15, 20] + [20] * len(all_names)
            for index, width in enumerate(widths, start=1):
                worksheet.column_dimensions[get_column_letter(index)].width = width

        logger.info(f"Exported {len(rows)} days of tally history")
        return buffer.getvalue()
