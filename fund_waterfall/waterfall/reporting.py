"""
Presentation helpers for WaterfallDistribution results.

Rounding happens here and only here; the calculator works in unrounded floats.
"""

from __future__ import annotations

from typing import Iterable, Optional

import pandas as pd

from fund_waterfall.waterfall.models import TierType, WaterfallDistribution


def format_currency(value: Optional[float]) -> str:
    """USD with no decimals, e.g. 1234567.8 -> '$1,234,568'."""
    if value is None:
        return "—"
    rounded = round(value)
    if rounded < 0:
        return f"-${abs(rounded):,.0f}"
    return f"${rounded:,.0f}"


def format_percent(value: Optional[float]) -> str:
    if value is None:
        return "—"
    return f"{value:.2f}%"


def tier_summary_frame(result: WaterfallDistribution) -> pd.DataFrame:
    """One row per tier, in evaluation order."""
    rows = []
    for t in result.tier_distributions:
        rows.append(
            {
                "Tier": t.tier_name,
                "Type": t.tier_type,
                "Distributed": t.amount_distributed,
                "LP": t.lp_amount,
                "GP": t.gp_amount,
                "Remaining": t.remaining_after_tier,
            }
        )
    return pd.DataFrame(rows, columns=["Tier", "Type", "Distributed", "LP", "GP", "Remaining"])


def investor_allocation_frame(result: WaterfallDistribution, include_gp: bool = True) -> pd.DataFrame:
    """
    One row per investor (plus a trailing GP row), one column per tier and a Total.
    """
    tier_names = [t.tier_name for t in result.tier_distributions]
    tier_ids = [t.tier_id for t in result.tier_distributions]
    columns = ["Investor ID", "Investor", "Ownership %"] + tier_names + ["Total"]

    rows = []
    for a in result.investor_allocations:
        row = {
            "Investor ID": a.investor_id,
            "Investor": a.investor_name,
            "Ownership %": a.ownership_percent,
        }
        for tid, name in zip(tier_ids, tier_names):
            row[name] = a.amount_for_tier(tid)
        row["Total"] = a.total_allocation
        rows.append(row)

    if include_gp:
        gp = result.gp_allocation
        row = {"Investor ID": gp.investor_id, "Investor": "General Partner", "Ownership %": None}
        for tid, name in zip(tier_ids, tier_names):
            row[name] = gp.amount_for_tier(tid)
        row["Total"] = gp.total_amount
        rows.append(row)

    return pd.DataFrame(rows, columns=columns)


def gp_allocation_frame(result: WaterfallDistribution) -> pd.DataFrame:
    rows = [{"Tier": a.tier_name, "Amount": a.amount} for a in result.gp_allocation.tier_allocations]
    return pd.DataFrame(rows, columns=["Tier", "Amount"])


def estimate_tax_impact(
    result: WaterfallDistribution,
    tax_rate_percent: float,
    exempt_types: Iterable[TierType] = (TierType.RETURN_OF_CAPITAL,),
) -> pd.DataFrame:
    """
    Rough per-tier tax estimate at a flat rate.

    Return of capital is not income, so it is exempt by default; every other
    tier is taxed on its full distributed amount.
    """
    exempt = {t.value if isinstance(t, TierType) else str(t) for t in exempt_types}
    rate = tax_rate_percent / 100.0

    rows = []
    for t in result.tier_distributions:
        taxable = t.tier_type not in exempt
        tax = t.amount_distributed * rate if taxable else 0.0
        rows.append(
            {
                "Tier": t.tier_name,
                "Distributed": t.amount_distributed,
                "Taxable": taxable,
                "Tax": tax,
                "After Tax": t.amount_distributed - tax,
            }
        )
    return pd.DataFrame(rows, columns=["Tier", "Distributed", "Taxable", "Tax", "After Tax"])


def result_to_csv_bytes(result: WaterfallDistribution) -> bytes:
    return investor_allocation_frame(result).to_csv(index=False).encode("utf-8")
