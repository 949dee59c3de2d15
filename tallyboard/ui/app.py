"""Main Streamlit application for Tally Board."""

import streamlit as st

from tallyboard.config import settings
from tallyboard.database import init_db
from tallyboard.exceptions import TallyError
from tallyboard.models.enums import SyncState
from tallyboard.services.civil_clock import CivilDayClock
from tallyboard.services.document_store import get_document_store
from tallyboard.services.history_service import HistoryService
from tallyboard.services.tally_service import TallyService
from tallyboard.ui.components.notifications import flash, show_flash
from tallyboard.ui.components.sidebar import render_sidebar
from tallyboard.ui.pages import board, history
from tallyboard.utils.logger import logger


@st.cache_resource
def bootstrap() -> CivilDayClock:
    """Create tables once per server process and build the shared clock."""
    init_db()
    return CivilDayClock(settings.timezone)


def init_session_state(clock: CivilDayClock):
    """Initialize session state variables."""
    if "tally_service" not in st.session_state:
        st.session_state.tally_service = TallyService(
            get_document_store(),
            clock,
            builtin_types=settings.builtin_tally_types,
        )
    if "history_service" not in st.session_state:
        st.session_state.history_service = HistoryService(
            get_document_store(),
            clock,
            builtin_types=settings.builtin_tally_types,
        )


@st.fragment(run_every=settings.midnight_check_interval)
def midnight_check(service: TallyService):
    """Poll for the day boundary while the page is open."""
    try:
        if service.check_midnight():
            flash("Tallies have been automatically reset for the new day.", "info")
            st.rerun(scope="app")
    except TallyError as e:
        logger.error(f"Midnight check failed: {e}")
        st.toast(f"Error resetting tallies: {e}", icon="❌")


def main():
    """Main application entry point."""
    st.set_page_config(
        page_title=settings.app_name,
        page_icon="🧮",
        layout="centered",
    )

    clock = bootstrap()
    init_session_state(clock)
    service = st.session_state.tally_service

    if service.state is SyncState.UNINITIALIZED:
        try:
            service.load()
        except TallyError as e:
            logger.error(f"Error loading tallies: {e}")
            st.error("Error loading data from the store")
            if st.button("Retry"):
                st.rerun()
            return

    show_flash()
    midnight_check(service)

    selected_page = render_sidebar(service)

    page_routes = {
        "Tally Board": lambda: board.show(service),
        "History": lambda: history.show(service, st.session_state.history_service),
    }

    # Display selected page
    if selected_page in page_routes:
        try:
            page_routes[selected_page]()
        except TallyError as e:
            logger.error(f"Error displaying page {selected_page}: {e}")
            st.error(f"An error occurred: {str(e)}")
    else:
        st.error(f"Page not found: {selected_page}")


if __name__ == "__main__":
    logger.info("Starting Tally Board")
    main()
