"""
pages/1_Structure_Comparison.py
Runs the Standard and American presets over the same capital accounts
and compares what the LPs and the GP end up with.
"""

from __future__ import annotations

import datetime
import logging
import sys

import pandas as pd
import streamlit as st

st.set_page_config(page_title="Structure Comparison", page_icon="⚖️", layout="wide")

from fund_waterfall.capital_accounts import SAMPLE_ACCOUNTS, accounts_from_frame, accounts_to_frame
from fund_waterfall.config import settings
from fund_waterfall.ui import inject_global_style, metric_card, section_header
from fund_waterfall.waterfall import (
    AMERICAN_WATERFALL,
    STANDARD_WATERFALL,
    WaterfallValidationError,
    calculate_waterfall,
    validate_waterfall_inputs,
)
from fund_waterfall.waterfall.reporting import format_currency

logging.basicConfig(
    stream=sys.stdout,
    level=settings.get_log_level(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("fund_waterfall.pages.comparison")

inject_global_style()

st.title("⚖️ Standard vs. American Waterfall")
st.markdown(
    "Same distribution, same investors. The only difference is the GP catch-up tier."
)

accounts_df = st.session_state.get("edited_accounts_df")
if accounts_df is None:
    accounts_df = accounts_to_frame(SAMPLE_ACCOUNTS)

c1, c2, c3 = st.columns(3)
with c1:
    amount = st.number_input(
        "Distribution amount ($)",
        min_value=0.0,
        value=max(settings.default_distribution_amount, 10_000_000.0),
        step=1_000_000.0,
        format="%.0f",
    )
with c2:
    start = st.date_input("Fund start date", value=datetime.date.fromisoformat(settings.default_fund_start_date))
with c3:
    end = st.date_input("Distribution date", value=datetime.date.today())

try:
    accounts = accounts_from_frame(accounts_df)
    for preset in (STANDARD_WATERFALL, AMERICAN_WATERFALL):
        validate_waterfall_inputs(preset, amount, accounts, start.isoformat(), end.isoformat())
except WaterfallValidationError as exc:
    st.error("Please fix the inputs below before comparing:")
    for err in exc.errors:
        st.markdown(f"- {err}")
    st.stop()
except ValueError as exc:
    logger.error("Could not read capital accounts: %s", exc)
    st.error(f"❌ Could not read capital accounts: {exc}")
    st.stop()

standard = calculate_waterfall(STANDARD_WATERFALL, amount, accounts, start.isoformat(), end.isoformat())
american = calculate_waterfall(AMERICAN_WATERFALL, amount, accounts, start.isoformat(), end.isoformat())

section_header("Headline")
k1, k2, k3 = st.columns(3)
with k1:
    metric_card("GP — Standard", format_currency(standard.gp_allocation.total_amount))
with k2:
    metric_card("GP — American", format_currency(american.gp_allocation.total_amount))
with k3:
    diff = standard.gp_allocation.total_amount - american.gp_allocation.total_amount
    metric_card("Catch-up effect", format_currency(diff), "moved from LPs to GP")

section_header("By tier")
left, right = st.columns(2)
for col, res, struct in ((left, standard, STANDARD_WATERFALL), (right, american, AMERICAN_WATERFALL)):
    with col:
        st.markdown(f"**{struct.name}**")
        st.table(pd.DataFrame(
            [
                {
                    "Tier": t.tier_name,
                    "Distributed": format_currency(t.amount_distributed),
                    "LP": format_currency(t.lp_amount),
                    "GP": format_currency(t.gp_amount),
                }
                for t in res.tier_distributions
            ]
        ))

section_header("By investor")
rows = []
for inv in standard.investor_allocations:
    other = american.get_investor(inv.investor_id)
    american_total = other.total_allocation if other else 0.0
    rows.append(
        {
            "Investor": inv.investor_name or inv.investor_id,
            "Standard": format_currency(inv.total_allocation),
            "American": format_currency(american_total),
            "Difference": format_currency(inv.total_allocation - american_total),
        }
    )
if rows:
    st.table(pd.DataFrame(rows))
else:
    st.caption("No investors entered on the calculator page.")
