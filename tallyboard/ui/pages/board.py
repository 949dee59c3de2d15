"""Tally board page."""

from typing import Callable

import streamlit as st

from tallyboard.config import settings
from tallyboard.exceptions import TallyError
from tallyboard.services.tally_service import TallyService
from tallyboard.ui.components.notifications import flash
from tallyboard.utils.logger import logger


def _run(action: Callable, *args, success: str = None) -> None:
    """Run a service action, queue its notification and rerun."""
    try:
        action(*args)
        if success:
            flash(success, "success")
    except TallyError as e:
        logger.error(f"Tally action failed: {e}")
        flash(str(e), "error")
    st.rerun()


def show(service: TallyService):
    """Display the tally board page."""
    st.title("📋 Daily Tallies")
    today = service.clock.now_in_zone()
    st.write(f"{today.strftime('%A, %B')} {today.day}, {today.year}")

    entries = service.board()
    for index, entry in enumerate(entries):
        with st.container(border=True):
            col_name, col_up, col_down, col_minus, col_count, col_plus, col_remove = st.columns(
                [6, 1, 1, 1, 1, 1, 1]
            )

            with col_name:
                st.markdown(f"**{entry.name}**")

            with col_up:
                if st.button("⬆️", key=f"up_{entry.name}", disabled=index == 0):
                    _run(service.move, entry.name, entries[index - 1].name)

            with col_down:
                if st.button("⬇️", key=f"down_{entry.name}", disabled=index == len(entries) - 1):
                    _run(service.move, entry.name, entries[index + 1].name)

            with col_minus:
                if st.button("➖", key=f"dec_{entry.name}", disabled=entry.count == 0):
                    _run(service.decrement, entry.name)

            with col_count:
                st.markdown(f"### {entry.count}")

            with col_plus:
                if st.button("➕", key=f"inc_{entry.name}"):
                    _run(service.increment, entry.name)

            with col_remove:
                if not entry.builtin:
                    if st.button("🗑️", key=f"remove_{entry.name}"):
                        _run(
                            service.remove_custom,
                            entry.name,
                            success="Tally type removed successfully.",
                        )

    st.divider()
    col1, col2 = st.columns(2)
    with col1:
        add_tally_form(service)
    with col2:
        clear_tallies_form(service)


def add_tally_form(service: TallyService):
    """Form to add a custom tally type."""
    with st.expander("➕ Add Tally Type"):
        with st.form("add_tally_form", clear_on_submit=True):
            name = st.text_input("Tally name")
            if st.form_submit_button("Add"):
                _run(service.add_custom, name, success="New tally type added successfully.")


def clear_tallies_form(service: TallyService):
    """Form to zero every tally for today, gated by a confirmation phrase."""
    phrase = settings.clear_confirmation_phrase
    with st.expander("🧹 Clear All Tallies"):
        st.warning("This resets every tally for today to zero.")
        with st.form("clear_tallies_form", clear_on_submit=True):
            confirmation = st.text_input(f'Type "{phrase}" to confirm')
            if st.form_submit_button("Clear All", type="primary"):
                _run(
                    service.clear_all,
                    confirmation,
                    success="All tallies have been cleared successfully.",
                )
