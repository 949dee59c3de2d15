"""Transient notifications that survive a Streamlit rerun."""

import streamlit as st

_FLASH_KEY = "flash_messages"

_ICONS = {
    "success": "✅",
    "info": "ℹ️",
    "warning": "⚠️",
    "error": "❌",
}


def flash(message: str, severity: str = "success") -> None:
    """Queue a notification for the next rerun."""
    st.session_state.setdefault(_FLASH_KEY, []).append((message, severity))


def show_flash() -> None:
    """Show and clear queued notifications."""
    for message, severity in st.session_state.pop(_FLASH_KEY, []):
        st.toast(message, icon=_ICONS.get(severity, "ℹ️"))
