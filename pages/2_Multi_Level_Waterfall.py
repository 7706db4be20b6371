"""
pages/2_Multi_Level_Waterfall.py
A project-level distribution flows through two sub-funds, each with its own
waterfall, and the after-tax proceeds roll up to the parent fund.
"""

from __future__ import annotations

import datetime
import logging
import sys

import streamlit as st

st.set_page_config(page_title="Multi-Level Waterfall", page_icon="🏢", layout="wide")

from fund_waterfall.capital_accounts import DEMO_SUB_FUNDS
from fund_waterfall.config import settings
from fund_waterfall.ui import (
    inject_global_style,
    metric_card,
    render_investor_table,
    render_sub_fund_table,
    render_tier_cards,
    section_header,
)
from fund_waterfall.waterfall import WaterfallValidationError, calculate_multi_level
from fund_waterfall.waterfall.multi_level import collect_multi_level_errors
from fund_waterfall.waterfall.reporting import estimate_tax_impact, format_currency, format_percent

logging.basicConfig(
    stream=sys.stdout,
    level=settings.get_log_level(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("fund_waterfall.pages.multi_level")

inject_global_style()

st.title("🏢 Multi-Level Waterfall")
st.markdown(
    "A project-level distribution is split between the sub-funds that own it. "
    "Each sub-fund runs the standard waterfall for its own investors, pays tax "
    "on everything except return of capital, and passes the rest up to the parent fund."
)

c1, c2, c3 = st.columns(3)
with c1:
    amount = st.number_input(
        "Project distribution ($)",
        min_value=0.0,
        value=settings.default_distribution_amount,
        step=100_000.0,
        format="%.0f",
    )
with c2:
    distribution_date = st.date_input("Distribution date", value=datetime.date.today())
with c3:
    tax_rate = st.slider("Tax rate (%)", min_value=0, max_value=50, value=21)

section_header("🧭 Ownership")
ownership = {}
cols = st.columns(len(DEMO_SUB_FUNDS))
for col, fund in zip(cols, DEMO_SUB_FUNDS):
    with col:
        ownership[fund.id] = st.number_input(
            f"{fund.name} (%)",
            min_value=0.0,
            max_value=100.0,
            value=float(fund.ownership_percent),
            step=5.0,
        )
sub_funds = [f.model_copy(update={"ownership_percent": ownership[f.id]}) for f in DEMO_SUB_FUNDS]

errors = collect_multi_level_errors(amount, sub_funds, distribution_date.isoformat(), tax_rate)
if errors:
    st.error("Please fix the inputs below before calculating:")
    for err in errors:
        st.markdown(f"- {err}")
    st.stop()

try:
    result = calculate_multi_level(amount, sub_funds, distribution_date.isoformat(), tax_rate)
except WaterfallValidationError as exc:
    logger.error("Multi-level calculation rejected: %s", exc)
    st.error(f"❌ {exc}")
    st.stop()

section_header("📊 Roll-up")
k1, k2, k3, k4 = st.columns(4)
with k1:
    metric_card("Project Distribution", format_currency(result.project_distribution))
with k2:
    metric_card("Tax", format_currency(result.total_tax), f"effective {format_percent(result.effective_tax_rate)}")
with k3:
    metric_card("To Parent Fund", format_currency(result.total_to_parent), "after tax")
with k4:
    metric_card("Unallocated", format_currency(result.unallocated), "not owned by a sub-fund")

render_sub_fund_table(result)

for sub in result.sub_fund_results:
    section_header(f"🏦 {sub.sub_fund_name} ({sub.ownership_percent:g}%)")
    left, right = st.columns([3, 2])
    with left:
        render_tier_cards(sub.distribution)
    with right:
        st.dataframe(
            estimate_tax_impact(sub.distribution, tax_rate),
            use_container_width=True,
            hide_index=True,
        )
        st.markdown(
            f"**Tax:** {format_currency(sub.tax_amount)} · "
            f"**After tax:** {format_currency(sub.after_tax_amount)}"
        )
    if sub.distribution.investor_allocations:
        render_investor_table(sub.distribution)
