"""
fund_waterfall/ui.py
Shared Streamlit UI components.
"""
from __future__ import annotations

import pandas as pd
import streamlit as st

from fund_waterfall.waterfall.models import WaterfallDistribution
from fund_waterfall.waterfall.multi_level import MultiLevelDistribution, sub_fund_summary_frame
from fund_waterfall.waterfall.reporting import (
    format_currency,
    format_percent,
    gp_allocation_frame,
    investor_allocation_frame,
    tier_summary_frame,
)


def inject_global_style() -> None:
    """Injects the shared CSS for metric cards, tier cards and section headers."""
    st.markdown("""
    <style>
    @import url('https://fonts.googleapis.com/css2?family=Inter:wght@300;400;500;600;700&display=swap');

    html, body, [class*="css"] {
        font-family: 'Inter', sans-serif !important;
    }

    /* Headers */
    h1 { color: #1e40af !important; border-bottom: 2px solid #3b82f6; padding-bottom: 8px; }
    h2 { color: #1e293b !important; border-bottom: 1px solid #e2e8f0; padding-bottom: 4px; margin-top: 2rem; }
    h3 { color: #475569 !important; margin-top: 1.5rem; }

    /* Metric cards */
    .metric-card { background: #f8fafc; border: 1px solid #e2e8f0; border-radius: 12px; padding: 1rem 1.2rem; text-align: center; }
    .metric-card .label { color: #64748b; font-size: 0.75rem; text-transform: uppercase; letter-spacing: 0.5px; margin-bottom: 0.3rem; }
    .metric-card .value { color: #1e293b; font-size: 1.5rem; font-weight: 700; }
    .metric-card .sub { color: #94a3b8; font-size: 0.7rem; margin-top: 0.1rem; }

    /* Tier cards */
    .tier-card { background: #f8fafc; border: 1px solid #e2e8f0; border-left: 4px solid #3b82f6; border-radius: 8px; padding: 12px 16px; margin-bottom: 10px; }
    .tier-card.empty { border-left-color: #cbd5e1; opacity: 0.7; }
    .tier-card .tier-name { font-weight: 600; color: #1e293b; }
    .tier-card .tier-type { font-size: 0.72rem; color: #64748b; text-transform: uppercase; letter-spacing: 0.5px; }
    .tier-card .tier-amount { font-size: 1.2rem; font-weight: 700; color: #1e40af; float: right; }
    .tier-card .tier-split { font-size: 0.85rem; color: #475569; margin-top: 4px; }

    /* Section headers */
    .section-header { color: #334155; font-size: 1.1rem; font-weight: 600; border-bottom: 1px solid #e2e8f0; padding-bottom: 0.4rem; margin: 1.5rem 0 1rem 0; }

    .info-box { background: #f1f5f9; border-left: 4px solid #3b82f6; border-radius: 0 8px 8px 0; padding: 0.8rem 1rem; color: #475569; font-size: 0.9rem; }
    </style>
    """, unsafe_allow_html=True)


def section_header(title: str) -> None:
    st.markdown(f'<div class="section-header">{title}</div>', unsafe_allow_html=True)


def metric_card(label: str, value: str, sub: str = "") -> None:
    sub_html = f'<div class="sub">{sub}</div>' if sub else ""
    st.markdown(
        f"""<div class="metric-card">
            <div class="label">{label}</div>
            <div class="value">{value}</div>
            {sub_html}
        </div>""",
        unsafe_allow_html=True,
    )


def render_summary(result: WaterfallDistribution) -> None:
    """Four KPI cards: distributable, to LPs, to GP, undistributed."""
    total = result.total_distributable
    lp = result.total_lp_amount
    gp = result.gp_allocation.total_amount

    def _share(x: float) -> str:
        return f"{format_percent(x / total * 100)} of total" if total > 0 else ""

    k1, k2, k3, k4 = st.columns(4)
    with k1:
        metric_card("Distributable", format_currency(total))
    with k2:
        metric_card("To Limited Partners", format_currency(lp), _share(lp))
    with k3:
        metric_card("To General Partner", format_currency(gp), _share(gp))
    with k4:
        metric_card("Undistributed", format_currency(result.undistributed), "left after last tier")


def render_tier_cards(result: WaterfallDistribution) -> None:
    for t in result.tier_distributions:
        css = "tier-card" if t.amount_distributed > 0 else "tier-card empty"
        st.markdown(
            f"""<div class="{css}">
                <span class="tier-amount">{format_currency(t.amount_distributed)}</span>
                <div class="tier-name">{t.tier_name}</div>
                <div class="tier-type">{t.tier_type.replace('_', ' ')}</div>
                <div class="tier-split">LP {format_currency(t.lp_amount)} · GP {format_currency(t.gp_amount)}
                · Remaining {format_currency(t.remaining_after_tier)}</div>
            </div>""",
            unsafe_allow_html=True,
        )


def _money_columns(df: pd.DataFrame, skip: tuple[str, ...]) -> dict:
    return {
        col: st.column_config.NumberColumn(col, format="$%.0f")
        for col in df.columns
        if col not in skip and pd.api.types.is_numeric_dtype(df[col])
    }


def render_tier_table(result: WaterfallDistribution) -> None:
    df = tier_summary_frame(result)
    st.dataframe(df, use_container_width=True, hide_index=True, column_config=_money_columns(df, ("Tier", "Type")))


def render_investor_table(result: WaterfallDistribution) -> None:
    df = investor_allocation_frame(result)
    config = _money_columns(df, ("Investor ID", "Investor", "Ownership %"))
    config["Ownership %"] = st.column_config.NumberColumn("Ownership %", format="%.2f%%")
    st.dataframe(df, use_container_width=True, hide_index=True, column_config=config)


def render_gp_table(result: WaterfallDistribution) -> None:
    df = gp_allocation_frame(result)
    st.dataframe(df, use_container_width=True, hide_index=True, column_config=_money_columns(df, ("Tier",)))


def render_sub_fund_table(result: MultiLevelDistribution) -> None:
    df = sub_fund_summary_frame(result)
    config = _money_columns(df, ("Sub-Fund", "Ownership %"))
    config["Ownership %"] = st.column_config.NumberColumn("Ownership %", format="%.0f%%")
    st.dataframe(df, use_container_width=True, hide_index=True, column_config=config)
