"""
Activity Log UI Component

Collects user-facing activity messages (saves, checkpoint edits, rejected
settings) in session state and renders them in a collapsible area.
"""

import logging
import streamlit as st
from typing import List, Dict
from datetime import datetime

logger = logging.getLogger(__name__)

MAX_ENTRIES = 50


class LogCollector:
    """Collects activity messages for display in a dedicated log area."""

    def __init__(self, session_key: str = "planner_activity"):
        self.session_key = session_key
        if session_key not in st.session_state:
            st.session_state[session_key] = []

    def add_info(self, message: str, icon: str = "ℹ️"):
        self._add_log("info", message, icon)

    def add_success(self, message: str, icon: str = "✅"):
        self._add_log("success", message, icon)

    def add_warning(self, message: str, icon: str = "⚠️"):
        self._add_log("warning", message, icon)

    def add_error(self, message: str, icon: str = "❌"):
        self._add_log("error", message, icon)

    def _add_log(self, level: str, message: str, icon: str):
        log_entry = {
            "timestamp": datetime.now().strftime("%H:%M:%S"),
            "level": level,
            "message": message,
            "icon": icon
        }
        entries = st.session_state[self.session_key]
        entries.append(log_entry)
        # Oldest entries drop off first
        del entries[:-MAX_ENTRIES]
        logger.debug(f"Activity [{level}]: {message}")

    def clear(self):
        st.session_state[self.session_key] = []

    def get_logs(self) -> List[Dict]:
        return st.session_state.get(self.session_key, [])


def render_compact_log_area(log_collector: LogCollector):
    """
    Render a compact, collapsible activity log (newest first).

    Args:
        log_collector: LogCollector instance with messages
    """
    logs = log_collector.get_logs()

    if not logs:
        return

    color_map = {
        "success": "🟢",
        "warning": "🟡",
        "error": "🔴",
        "info": "🔵"
    }

    with st.expander(f"📋 Activity Log ({len(logs)} messages)", expanded=False):
        for log in reversed(logs):
            color_icon = color_map.get(log.get("level", "info"), "⚪")
            st.markdown(
                f"{color_icon} `[{log.get('timestamp', '')}]` {log.get('icon', '')} {log.get('message', '')}"
            )

        if st.button("Clear Log", key="clear_activity_log_button"):
            log_collector.clear()
            st.rerun()
