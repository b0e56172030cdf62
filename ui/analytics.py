"""
Analytics Display

Planned vs. actual progress at the recorded control points, drawn over the
planned cumulative curve for the whole shift.
"""

import streamlit as st
import pandas as pd
import plotly.graph_objects as go
import logging

from core.calculations.control_points import build_checkpoint_frame, build_plan_curve
from core.shift.models import ShiftConfig
from core.storage.store import LocalStore, load_actuals, load_settings

logger = logging.getLogger(__name__)

SERIES = [
    ('planned_packing', 'Planned Packing', '#9966ff', 'dash'),
    ('actual_packed', 'Actual Packing', '#4bc0c0', 'solid'),
    ('planned_picking', 'Planned Picking', '#ff9f40', 'dash'),
    ('actual_picked', 'Actual Picking', '#ff6384', 'solid'),
]


def build_progress_figure(checkpoints_df: pd.DataFrame, plan_df: pd.DataFrame) -> go.Figure:
    """
    Line chart of checkpoint figures, with the planned curve behind them.

    Args:
        checkpoints_df: DataFrame from build_checkpoint_frame
        plan_df: DataFrame from build_plan_curve (may be empty)
    """
    fig = go.Figure()

    if not plan_df.empty:
        fig.add_trace(go.Scatter(
            x=plan_df['time'],
            y=plan_df['planned_packing'],
            name='Plan (Packing, full shift)',
            mode='lines',
            line=dict(color='#d0d0d0', width=1),
            hovertemplate='%{x}<br>%{y:.0f} planned<extra></extra>'
        ))

    for column, label, color, dash in SERIES:
        fig.add_trace(go.Scatter(
            x=checkpoints_df['time'],
            y=checkpoints_df[column],
            name=label,
            mode='lines+markers',
            line=dict(color=color, dash=dash, shape='spline'),
            hovertemplate='%{x}<br>%{y:.0f} ' + label + '<extra></extra>'
        ))

    fig.update_layout(
        xaxis_title='Control point',
        yaxis_title='Orders',
        height=450,
        hovermode='x unified',
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
        xaxis=dict(type='category', categoryorder='category ascending')
    )
    return fig


def render_analytics_page(store: LocalStore):
    """Render the analytics screen from stored checkpoint records"""
    st.header("📈 Analytics & Reports")

    config = load_settings(store) or ShiftConfig()
    actuals = load_actuals(store)

    checkpoints_df = build_checkpoint_frame(actuals.cp_data, config.expected_orders)
    if checkpoints_df.empty:
        st.info("No data available for chart display")
        return

    plan_df = build_plan_curve(config)

    logger.info(f"Charting {len(checkpoints_df)} control points")
    st.plotly_chart(build_progress_figure(checkpoints_df, plan_df), use_container_width=True)

    st.dataframe(
        checkpoints_df.rename(columns={
            'time': 'Time',
            'planned_picking': 'Planned Picking',
            'actual_picked': 'Actual Picking',
            'planned_packing': 'Planned Packing',
            'actual_packed': 'Actual Packing',
            'picking_deviation': 'Deviation (Picking)',
            'packing_deviation': 'Deviation (Packing)',
        }).round(2),
        use_container_width=True,
        hide_index=True
    )
