"""Tally history page."""

from typing import Any, Dict, List

import pandas as pd
import streamlit as st

from tallyboard.exceptions import TallyError
from tallyboard.services.history_service import HistoryService
from tallyboard.services.tally_service import TallyService
from tallyboard.utils.logger import logger


@st.cache_data(show_spinner=False, max_entries=8)
def build_workbook(
    _history_service: HistoryService, rows: List[Dict[str, Any]], names: List[str]
) -> bytes:
    """Workbook bytes for the export rows, rebuilt only when the rows change."""
    return _history_service.export_to_excel(rows, names)


def show(service: TallyService, history_service: HistoryService):
    """Display archived days, newest first, with an Excel export."""
    st.title("📅 History")

    try:
        snapshots = history_service.load_all()
    except TallyError as e:
        logger.error(f"Error loading historical data: {e}")
        st.error("Error loading historical data")
        return

    if not snapshots:
        st.info("No tally history yet.")
        return

    names = service.ordered_types()
    rows = history_service.to_export_rows(snapshots, names)
    st.download_button(
        label="📥 Export to Excel",
        data=build_workbook(history_service, rows, names),
        file_name=history_service.export_file_name(),
        mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    )

    for index, day in enumerate(history_service.to_history_rows(snapshots)):
        with st.expander(day["formatted_date"], expanded=index == 0):
            st.caption(f"Last updated: {day['display_time']}")
            df = pd.DataFrame(
                [{"Tally": name, "Count": count} for name, count in day["tallies"].items()]
            )
            st.dataframe(df, hide_index=True, use_container_width=True)
