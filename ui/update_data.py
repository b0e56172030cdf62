"""
Update Data UI Component

Entry of live actuals and checkpoint figures, with pace indicators that the
view itself refreshes on a fixed interval while it is displayed.
"""

import streamlit as st
import logging
from datetime import time

from config import Config
from core.calculations.control_points import (
    checkpoint_deviations,
    delete_checkpoint,
    seed_checkpoints,
    update_checkpoint_actual,
    update_checkpoint_time,
)
from core.calculations.deviations import compute_deviations
from core.calculations.recommendations import (
    compute_last_hour_indicators,
    compute_main_indicators,
    compute_recommendations,
)
from core.calculations.shift_clock import local_now
from core.calculations.time_parser import format_time, parse_time
from core.shift.models import ActualsState, ShiftConfig
from core.storage.store import LocalStore, load_actuals, load_settings, save_actuals
from ui.log_display import LogCollector
from utils.formatting import format_number, format_saved_at, validate_shift_settings

logger = logging.getLogger(__name__)

ACTUALS_KEY = "actuals"


def load_session_actuals(store: LocalStore, config: ShiftConfig, session_state) -> ActualsState:
    """
    Actuals for this session.

    Read from the store on first use (or after ``forget_session_actuals``)
    and seeded from the control points when no checkpoint records exist.
    """
    if ACTUALS_KEY not in session_state:
        actuals = load_actuals(store)
        seeded = seed_checkpoints(config, actuals)
        if seeded is not actuals:
            save_actuals(store, seeded)
        session_state[ACTUALS_KEY] = seeded
    return session_state[ACTUALS_KEY]


def _clear_checkpoint_widgets(session_state):
    for key in list(session_state.keys()):
        if isinstance(key, str) and key.startswith("cpdata_"):
            del session_state[key]


def forget_session_actuals(session_state):
    """Drop the cached actuals so the next load picks up new settings"""
    session_state.pop(ACTUALS_KEY, None)
    _clear_checkpoint_widgets(session_state)


def _commit(store: LocalStore, actuals: ActualsState):
    """Keep the session copy and the store in step (auto-save)"""
    st.session_state[ACTUALS_KEY] = actuals
    save_actuals(store, actuals)


@st.fragment(run_every=Config.REFRESH_INTERVAL_SECONDS)
def render_live_indicators(config: ShiftConfig, actuals: ActualsState):
    """
    Pace indicators, recomputed against the current time.

    Runs as a fragment with ``run_every``: it refreshes on its own while the
    update view is on screen and stops once another view is shown.
    """
    now = local_now()
    deviations = compute_deviations(config, actuals, now)
    main = compute_main_indicators(deviations, config, actuals)
    last_hour = compute_last_hour_indicators(deviations, config)
    recommendations = compute_recommendations(deviations, config, last_hour)

    st.caption(f"Calculated at {now.strftime('%H:%M:%S')} "
               f"(refreshes every {Config.REFRESH_INTERVAL_SECONDS}s)")

    st.subheader("Main Indicators")
    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Hours worked", format_number(deviations.hours_passed))
    with col2:
        st.metric("Effective shift hours", format_number(deviations.total_work_time))
    with col3:
        st.metric("Packing progress", f"{main.packing_progress_percent:.0f}%")
    st.progress(min(int(main.packing_progress_percent), 100))

    col1, col2 = st.columns(2)
    with col1:
        st.markdown("**Picking**")
        st.write(f"Expected processed by now: {format_number(deviations.expected_processed_picking)}")
        st.write(f"Required speed: {format_number(deviations.required_speed_picking)} orders/hour")
        st.write(f"Actual speed: {format_number(main.actual_speed_picking)} orders/hour")
        st.write(f"Recommended staff today: {format_number(main.recommended_staff_picking)}")
    with col2:
        st.markdown("**Packing**")
        st.write(f"Expected processed by now: {format_number(deviations.expected_processed_packing)}")
        st.write(f"Required speed: {format_number(deviations.required_speed_packing)} orders/hour")
        st.write(f"Actual speed: {format_number(main.actual_speed_packing)} orders/hour")
        st.write(f"Recommended staff today: {format_number(main.recommended_staff_packing)}")

    st.subheader("Last Hour Indicators")
    st.write(f"Remaining orders for Picking (last hour): {round(last_hour.remaining_picking)} orders")
    st.write(f"Remaining orders for Packing (last hour): {round(last_hour.remaining_packing)} orders")
    if last_hour.will_meet_plan:
        st.success(f"Total remaining unprocessed orders (last hour): {last_hour.message}")
    else:
        st.error(f"Total remaining unprocessed orders (last hour): {last_hour.message}")

    st.subheader("Deviations and Recommendations")
    col1, col2 = st.columns(2)
    with col1:
        st.metric("Deviation (Picking)", format_number(deviations.picking_deviation))
        st.write(recommendations.picking)
    with col2:
        st.metric("Deviation (Packing)", format_number(deviations.packing_deviation))
        st.write(recommendations.packing)


def _render_control_points(
    store: LocalStore,
    config: ShiftConfig,
    actuals: ActualsState,
    log_collector: LogCollector
):
    st.subheader("Control Points")

    if not actuals.cp_data:
        st.info("No control point data available")
        return

    for index, record in enumerate(actuals.cp_data):
        if not record.time:
            continue

        figures = checkpoint_deviations(config, record)
        with st.container(border=True):
            try:
                hours, minutes = parse_time(record.time)
                current = time(hours, minutes)
            except ValueError:
                current = None

            new_time = st.time_input(
                "Control Point Time", value=current, key=f"cpdata_time_{index}", step=300
            )
            new_time_text = format_time(new_time.hour, new_time.minute) if new_time else ""
            if new_time_text and new_time_text != record.time:
                _commit(store, ActualsState(
                    actuals.picked_actual,
                    actuals.packed_actual,
                    update_checkpoint_time(config, actuals.cp_data, index, new_time_text),
                ))
                log_collector.add_info(f"Control point {record.time} moved to {new_time_text}")
                st.rerun()

            col1, col2 = st.columns(2)
            with col1:
                st.write(f"**Planned (Picking):** {figures['planned_picking']:.0f}")
                picked = st.number_input(
                    "Actual (Picking)", min_value=0, value=int(record.actual_picked),
                    step=1, key=f"cpdata_picked_{index}"
                )
                st.write(f"**Deviation (Picking):** {figures['picking_deviation']:.2f}")
            with col2:
                st.write(f"**Planned (Packing):** {figures['planned_packing']:.0f}")
                packed = st.number_input(
                    "Actual (Packing)", min_value=0, value=int(record.actual_packed),
                    step=1, key=f"cpdata_packed_{index}"
                )
                st.write(f"**Deviation (Packing):** {figures['packing_deviation']:.2f}")

            if picked != record.actual_picked or packed != record.actual_packed:
                cp_data = update_checkpoint_actual(actuals.cp_data, index, "actual_picked", picked)
                cp_data = update_checkpoint_actual(cp_data, index, "actual_packed", packed)
                _commit(store, ActualsState(actuals.picked_actual, actuals.packed_actual, cp_data))
                st.rerun()

            if st.button("Delete Control Point", key=f"cpdata_delete_{index}"):
                _commit(store, ActualsState(
                    actuals.picked_actual,
                    actuals.packed_actual,
                    delete_checkpoint(actuals.cp_data, index),
                ))
                _clear_checkpoint_widgets(st.session_state)
                logger.info(f"Deleted control point {record.time}")
                log_collector.add_warning(f"Control point {record.time} deleted")
                st.rerun()


def render_update_page(store: LocalStore, log_collector: LogCollector):
    """
    Render the update screen.

    Args:
        store: Local store with ``settings`` and ``updateData`` records
        log_collector: Activity log for saves and checkpoint edits
    """
    st.header("🔄 Update Process Data")

    config = load_settings(store)
    if config is None or not config.is_configured:
        st.info("No data available - configure the shift on the Settings page first.")
        return

    errors, _, is_valid = validate_shift_settings(config)
    if not is_valid:
        logger.error(f"Stored settings could not be used: {errors}")
        for error in errors:
            st.error(f"❌ {error}")
        st.info("Please correct and re-save the shift on the Settings page.")
        return

    actuals = load_session_actuals(store, config, st.session_state)

    col1, col2 = st.columns(2)
    with col1:
        picked = st.number_input(
            "Actual number of orders picked", min_value=0,
            value=int(actuals.picked_actual), step=1, key="picked_actual"
        )
    with col2:
        packed = st.number_input(
            "Actual number of orders packed", min_value=0,
            value=int(actuals.packed_actual), step=1, key="packed_actual"
        )

    if picked != actuals.picked_actual or packed != actuals.packed_actual:
        actuals = ActualsState(int(picked), int(packed), actuals.cp_data)
        _commit(store, actuals)

    st.divider()
    render_live_indicators(config, actuals)

    if config.control_points or actuals.cp_data:
        st.divider()
        _render_control_points(store, config, actuals, log_collector)

    st.divider()
    if st.button("💾 Save All Data", type="primary", use_container_width=True):
        save_actuals(store, st.session_state[ACTUALS_KEY])
        st.success("All data has been updated and saved!")
        log_collector.add_success("All data has been updated and saved!")

    saved_at = store.saved_at(Config.UPDATE_DATA_KEY)
    if saved_at:
        st.caption(f"Last saved: {format_saved_at(saved_at)}")
