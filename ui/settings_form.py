"""
Shift Settings UI Component

Form for the shift window, breaks, control points, order target, average
speeds and last-hour staffing. Settings are validated before they are saved.
"""

import streamlit as st
import logging
from datetime import time
from typing import List, Optional

from config import Config
from core.calculations.time_parser import format_time, parse_time
from core.shift.models import BreakInterval, ControlPoint, ShiftConfig
from core.storage.store import LocalStore, load_settings, save_settings
from ui.log_display import LogCollector
from ui.update_data import forget_session_actuals
from utils.formatting import last_hour_interval_label, validate_shift_settings

logger = logging.getLogger(__name__)

UPDATE_PAGE = "🔄 Update Data"


def _time_value(text: str) -> Optional[time]:
    """Stored time string -> widget value (None when blank or invalid)"""
    if not text:
        return None
    try:
        hours, minutes = parse_time(text)
    except ValueError:
        return None
    return time(hours, minutes)


def _time_text(value: Optional[time]) -> str:
    """Widget value -> stored HH:MM string"""
    if value is None:
        return ""
    return format_time(value.hour, value.minute)


def _next_row_id() -> int:
    st.session_state.settings_row_seq = st.session_state.get("settings_row_seq", 0) + 1
    return st.session_state.settings_row_seq


def _init_form_state(config: ShiftConfig):
    """Copy stored break/control point rows into session state once"""
    if "settings_breaks" not in st.session_state:
        st.session_state.settings_breaks = [
            {"id": _next_row_id(), "start": b.start, "end": b.end} for b in config.breaks
        ]
    if "settings_control_points" not in st.session_state:
        st.session_state.settings_control_points = [
            {"id": _next_row_id(), "time": cp.time} for cp in config.control_points
        ]


def _render_break_rows() -> List[BreakInterval]:
    breaks = []
    rows = st.session_state.settings_breaks

    for row in list(rows):
        col1, col2, col3 = st.columns([2, 2, 1])
        with col1:
            start = st.time_input(
                "Start", value=_time_value(row["start"]), key=f"break_start_{row['id']}", step=300
            )
        with col2:
            end = st.time_input(
                "End", value=_time_value(row["end"]), key=f"break_end_{row['id']}", step=300
            )
        with col3:
            st.write("")
            if st.button("Delete", key=f"break_delete_{row['id']}"):
                st.session_state.settings_breaks = [r for r in rows if r["id"] != row["id"]]
                st.rerun()

        row["start"] = _time_text(start)
        row["end"] = _time_text(end)
        breaks.append(BreakInterval(row["start"], row["end"]))

    if st.button("Add Break", key="break_add"):
        rows.append({"id": _next_row_id(), "start": "", "end": ""})
        st.rerun()

    return breaks


def _render_control_point_rows() -> List[ControlPoint]:
    points = []
    rows = st.session_state.settings_control_points

    for row in list(rows):
        col1, col2 = st.columns([4, 1])
        with col1:
            value = st.time_input(
                "Control Point Time", value=_time_value(row["time"]), key=f"cp_time_{row['id']}", step=300
            )
        with col2:
            st.write("")
            if st.button("Delete", key=f"cp_delete_{row['id']}"):
                st.session_state.settings_control_points = [r for r in rows if r["id"] != row["id"]]
                st.rerun()

        row["time"] = _time_text(value)
        points.append(ControlPoint(row["time"]))

    if st.button("Add Control Point", key="cp_add"):
        rows.append({"id": _next_row_id(), "time": ""})
        st.rerun()

    return points


def render_settings_page(store: LocalStore, log_collector: LogCollector):
    """
    Render the shift settings form.

    Args:
        store: Local store holding the ``settings`` record
        log_collector: Activity log for save/validation messages
    """
    st.header("⚙️ Shift Settings")

    stored = load_settings(store)
    config = stored or ShiftConfig(
        shift_start=Config.DEFAULT_SHIFT_START,
        shift_end=Config.DEFAULT_SHIFT_END,
    )
    _init_form_state(config)

    col1, col2 = st.columns(2)
    with col1:
        shift_start = st.time_input(
            "Shift Start Time", value=_time_value(config.shift_start), key="shift_start", step=300
        )
    with col2:
        shift_end = st.time_input(
            "Shift End Time", value=_time_value(config.shift_end), key="shift_end", step=300
        )

    st.divider()
    col1, col2 = st.columns(2)
    with col1:
        st.markdown("**Breaks:**")
        breaks = _render_break_rows()
    with col2:
        st.markdown("**Control Points:**")
        control_points = _render_control_point_rows()

    st.divider()
    col1, col2, col3 = st.columns(3)
    with col1:
        expected_orders = st.number_input(
            "Expected Number of Orders",
            min_value=0,
            value=int(config.expected_orders),
            step=10,
            key="expected_orders"
        )
    with col2:
        avg_speed = st.number_input(
            "Average Speed (one worker per hour)",
            min_value=0.0,
            value=float(config.avg_speed),
            step=1.0,
            key="avg_speed"
        )
    with col3:
        end_text = _time_text(shift_end)
        interval = last_hour_interval_label(end_text)
        staff_for_last_period = st.number_input(
            f"Number of staff in the last hour ({interval})" if interval else "Number of staff in the last hour",
            min_value=0,
            value=int(config.staff_for_last_period),
            step=1,
            key="staff_for_last_period"
        )

    separate = st.checkbox(
        "Separate picking and packing speeds",
        value=config.avg_picking_speed is not None or config.avg_packing_speed is not None,
        key="separate_speeds",
        help="Plan picking and packing with their own average worker speed"
    )
    avg_picking_speed = None
    avg_packing_speed = None
    if separate:
        col1, col2 = st.columns(2)
        with col1:
            avg_picking_speed = st.number_input(
                "Average Picking Speed (one worker per hour)",
                min_value=0.0,
                value=float(config.picking_speed),
                step=1.0,
                key="avg_picking_speed"
            )
        with col2:
            avg_packing_speed = st.number_input(
                "Average Packing Speed (one worker per hour)",
                min_value=0.0,
                value=float(config.packing_speed),
                step=1.0,
                key="avg_packing_speed"
            )

    new_config = ShiftConfig(
        shift_start=_time_text(shift_start),
        shift_end=end_text,
        breaks=breaks,
        control_points=control_points,
        expected_orders=float(expected_orders),
        avg_speed=float(avg_speed),
        staff_for_last_period=float(staff_for_last_period),
        avg_picking_speed=avg_picking_speed,
        avg_packing_speed=avg_packing_speed,
    )

    errors, warnings, is_valid = validate_shift_settings(new_config)
    for warning in warnings:
        st.warning(warning)

    st.write("")
    if st.button("💾 Save Settings", type="primary", use_container_width=True):
        if not is_valid:
            for error in errors:
                st.error(f"❌ {error}")
                log_collector.add_error(f"Settings not saved: {error}")
            return

        save_settings(store, new_config)
        forget_session_actuals(st.session_state)
        log_collector.add_success("Settings saved!")
        st.session_state.pending_page = UPDATE_PAGE
        st.rerun()
