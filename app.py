"""
Warehouse Shift Planner - Main Application

Tracks a single warehouse shift against plan:
- Settings: shift window, breaks, control points, target, speeds, last-hour staff
- Update Data: live actuals, deviations and staffing recommendations
- Analytics: planned vs. actual progress at control points
"""

import streamlit as st
import logging

from config import Config
from core.storage.store import LocalStore
from ui.analytics import render_analytics_page
from ui.log_display import LogCollector, render_compact_log_area
from ui.settings_form import render_settings_page
from ui.update_data import render_update_page

# Configure logging
logging.basicConfig(
    level=getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

PAGES = ["⚙️ Settings", "🔄 Update Data", "📈 Analytics"]

# Streamlit page config
st.set_page_config(
    page_title="Warehouse Shift Planner",
    layout="wide",
    initial_sidebar_state="expanded"
)

st.title("📦 Warehouse Shift Planner")
st.markdown("**Shift pace tracking** - are picking and packing on plan?")

store = LocalStore(Config.STORE_PATH)
log_collector = LogCollector()

# A page switch requested by the previous run (e.g. after saving settings)
if "pending_page" in st.session_state:
    st.session_state.nav_page = st.session_state.pop("pending_page")

with st.sidebar:
    page = st.radio("Navigation", PAGES, key="nav_page")
    st.markdown("---")
    st.info(f"**Timezone:** {Config.TIMEZONE}")
    st.caption(f"💾 Data file: {Config.STORE_PATH}")

if page == PAGES[0]:
    render_settings_page(store, log_collector)
elif page == PAGES[1]:
    render_update_page(store, log_collector)
else:
    render_analytics_page(store)

st.markdown("---")
render_compact_log_area(log_collector)
