"""Sidebar navigation component."""

import streamlit as st

from tallyboard.config import settings
from tallyboard.services.tally_service import TallyService


def render_sidebar(service: TallyService) -> str:
    """Render the sidebar navigation and return selected page."""
    with st.sidebar:
        st.title(f"🧮 {settings.app_name}")

        if service.snapshot:
            st.write(f"📅 {service.snapshot.date_key}")
        st.write(f"🕛 {service.clock.zone_name}")
        st.caption(service.clock.now_in_zone().strftime("%I:%M %p"))
        st.divider()

        # Navigation menu
        st.subheader("Navigation")

        pages = {
            "Tally Board": "📋",
            "History": "📅",
        }

        selected_page = st.radio(
            "Select Page",
            options=list(pages.keys()),
            format_func=lambda x: f"{pages[x]} {x}",
            label_visibility="collapsed",
        )

    return selected_page
