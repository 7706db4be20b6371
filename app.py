# app.py
"""
Fund Waterfall Calculator — Streamlit Frontend

Run with:
    streamlit run app.py
"""

from __future__ import annotations

import datetime
import logging
import sys
from typing import Optional

import streamlit as st

# ── Page config (must be first Streamlit call) ────────────────────────────────
st.set_page_config(
    page_title="Waterfall Calculator",
    page_icon="💧",
    layout="wide",
    initial_sidebar_state="expanded",
)

# ── Imports (after page config) ───────────────────────────────────────────────
from fund_waterfall.capital_accounts import SAMPLE_ACCOUNTS, accounts_from_frame, accounts_to_frame
from fund_waterfall.config import settings
from fund_waterfall.ui import (
    inject_global_style,
    render_gp_table,
    render_investor_table,
    render_summary,
    render_tier_cards,
    render_tier_table,
    section_header,
)
from fund_waterfall.waterfall import (
    WaterfallDistribution,
    WaterfallStructure,
    WaterfallValidationError,
    calculate_waterfall,
    get_preset,
    validate_waterfall_inputs,
)
from fund_waterfall.waterfall.presets import build_structure
from fund_waterfall.waterfall.reporting import estimate_tax_impact, format_currency, result_to_csv_bytes

# ── Logging ───────────────────────────────────────────────────────────────────
logging.basicConfig(
    stream=sys.stdout,
    level=settings.get_log_level(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("fund_waterfall.app")

inject_global_style()

st.title("💧 Distribution Waterfall Calculator")
st.markdown(
    "Model how a distribution flows through return of capital, preferred return, "
    "GP catch-up and carried interest, and what each investor receives."
)

# ── Session state ─────────────────────────────────────────────────────────────
if "accounts_df" not in st.session_state:
    st.session_state.accounts_df = accounts_to_frame(SAMPLE_ACCOUNTS)

# ── Sidebar ───────────────────────────────────────────────────────────────────
with st.sidebar:
    st.subheader("⚙️ Waterfall Structure")
    structure_choice = st.radio(
        "Structure",
        ["Standard (European)", "American", "Custom"],
        index=0,
        help="Standard includes a GP catch-up tier; American goes straight to the split.",
    )

    structure: WaterfallStructure
    if structure_choice == "Custom":
        hurdle = st.number_input("Hurdle rate (%)", min_value=0.0, max_value=100.0, value=settings.default_hurdle_rate, step=0.5)
        with_catch_up = st.checkbox("Include GP catch-up", value=True)
        catch_up = st.number_input(
            "Catch-up to (%)",
            min_value=0.0,
            max_value=99.0,
            value=settings.default_catch_up_percent,
            step=1.0,
            disabled=not with_catch_up,
        )
        gp_split = st.slider("GP carry split (%)", min_value=0, max_value=100, value=int(settings.default_gp_split))
        structure = build_structure(
            hurdle_rate=hurdle,
            catch_up_percent=catch_up if with_catch_up else None,
            lp_split=100.0 - gp_split,
            gp_split=float(gp_split),
        )
    else:
        structure = get_preset("american" if structure_choice == "American" else "standard")
    st.caption(structure.description)

    st.divider()
    st.subheader("💸 Distribution")
    distribution_amount = st.number_input(
        "Distribution amount ($)",
        min_value=0.0,
        value=settings.default_distribution_amount,
        step=100_000.0,
        format="%.0f",
    )
    fund_start = st.date_input("Fund start date", value=datetime.date.fromisoformat(settings.default_fund_start_date))
    distribution_date = st.date_input("Distribution date", value=datetime.date.today())

    st.divider()
    tax_rate = st.slider("Estimated tax rate (%)", min_value=0, max_value=50, value=21)

# ── Capital accounts ──────────────────────────────────────────────────────────
section_header("🏦 Investor Capital Accounts")
st.caption("Edit the snapshot used for this calculation. Rows without an Investor ID are ignored.")
edited_df = st.data_editor(
    st.session_state.accounts_df,
    num_rows="dynamic",
    use_container_width=True,
    hide_index=True,
    key="accounts_editor",
)
st.session_state.edited_accounts_df = edited_df

# ── Run ───────────────────────────────────────────────────────────────────────
result: Optional[WaterfallDistribution] = None
try:
    accounts = accounts_from_frame(edited_df)
    validate_waterfall_inputs(
        structure,
        distribution_amount,
        accounts,
        fund_start.isoformat(),
        distribution_date.isoformat(),
    )
    result = calculate_waterfall(
        structure,
        distribution_amount,
        accounts,
        fund_start.isoformat(),
        distribution_date.isoformat(),
    )
except WaterfallValidationError as exc:
    st.error("Please fix the inputs below before calculating:")
    for err in exc.errors:
        st.markdown(f"- {err}")
except ValueError as exc:
    logger.error("Could not read capital accounts: %s", exc)
    st.error(f"❌ Could not read capital accounts: {exc}")

# ── Results ───────────────────────────────────────────────────────────────────
if result is not None:
    section_header("📊 Results Summary")
    render_summary(result)

    col_tiers, col_gp = st.columns([3, 2])
    with col_tiers:
        section_header("🪜 Tier Breakdown")
        render_tier_cards(result)
    with col_gp:
        section_header("🧑‍💼 General Partner")
        render_gp_table(result)
        st.markdown(f"**GP total:** {format_currency(result.gp_allocation.total_amount)}")

    with st.expander("Tier detail table"):
        render_tier_table(result)

    section_header("👥 Investor Allocations")
    if result.investor_allocations:
        render_investor_table(result)
    else:
        st.markdown(
            '<div class="info-box">No investors entered. Everything distributed goes to the GP.</div>',
            unsafe_allow_html=True,
        )

    section_header(f"🧾 Tax Impact ({tax_rate}%)")
    tax_df = estimate_tax_impact(result, tax_rate)
    st.dataframe(tax_df, use_container_width=True, hide_index=True)
    st.caption(
        f"Estimated tax {format_currency(tax_df['Tax'].sum())}, "
        f"after tax {format_currency(tax_df['After Tax'].sum())}. Return of capital is not taxed."
    )

    section_header("⬇️ Export")
    st.download_button(
        "📥 Download CSV",
        data=result_to_csv_bytes(result),
        file_name=f"waterfall_{structure.id}_{distribution_date.isoformat()}.csv",
        mime="text/csv",
        type="secondary",
    )
