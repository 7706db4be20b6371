# fund_waterfall/capital_accounts.py
"""
Capital-account snapshots for the calculator UI: demo investors plus
conversion to and from the editable pandas table.
"""

from __future__ import annotations

import logging

import pandas as pd

from fund_waterfall.waterfall.models import InvestorCapitalAccount
from fund_waterfall.waterfall.multi_level import SubFund

logger = logging.getLogger(__name__)

# Column label -> InvestorCapitalAccount field
ACCOUNT_COLUMNS: dict[str, str] = {
    "Investor ID": "investor_id",
    "Investor": "investor_name",
    "Contributed": "capital_contributed",
    "Capital Returned": "capital_returned",
    "Pref Accrued": "preferred_return_accrued",
    "Pref Paid": "preferred_return_paid",
    "Distributions Received": "distributions_received",
}

# Share of historic distributions assumed to have been capital / preferred return
# when only a lifetime distribution total is known.
RETURNED_CAPITAL_SHARE = 0.3
PREF_PAID_SHARE = 0.2


def account_from_totals(
    investor_id: str,
    investor_name: str,
    called_capital: float,
    total_distributed: float = 0.0,
) -> InvestorCapitalAccount:
    """Approximate a capital account from called capital and lifetime distributions."""
    return InvestorCapitalAccount(
        investor_id=investor_id,
        investor_name=investor_name,
        capital_contributed=called_capital,
        capital_returned=total_distributed * RETURNED_CAPITAL_SHARE,
        preferred_return_accrued=0.0,
        preferred_return_paid=total_distributed * PREF_PAID_SHARE,
        distributions_received=total_distributed,
    )


SAMPLE_ACCOUNTS: list[InvestorCapitalAccount] = [
    account_from_totals("inv-001", "Acme Capital Partners", 11_500_000, 850_000),
    account_from_totals("inv-002", "Global Wealth Management", 6_400_000, 0),
    account_from_totals("inv-003", "Pacific Tech Ventures", 18_000_000, 2_100_000),
    account_from_totals("inv-004", "Meridian Family Office", 4_250_000, 310_000),
]


# Multi-level demo: parent-fund LPs that invest through two sub-funds
PARENT_FUND_COMMITMENT = 100_000_000
PARENT_INVESTORS: list[tuple[str, str, float]] = [
    ("inv-001", "Pension Fund Alpha", 50_000_000),
    ("inv-002", "Family Office Beta", 30_000_000),
    ("inv-003", "Endowment Gamma", 20_000_000),
]


def sub_fund_accounts(
    deployed: float,
    investors: list[tuple[str, str, float]] = PARENT_INVESTORS,
    commitment: float = PARENT_FUND_COMMITMENT,
) -> list[InvestorCapitalAccount]:
    """Fresh capital accounts for a sub-fund, each LP contributing pro rata to its parent commitment."""
    return [
        InvestorCapitalAccount(
            investor_id=inv_id,
            investor_name=name,
            capital_contributed=committed / commitment * deployed,
        )
        for inv_id, name, committed in investors
    ]


DEMO_SUB_FUNDS: list[SubFund] = [
    SubFund(
        id="sub-fund-a-001",
        name="Real Estate Opportunities A",
        ownership_percent=55,
        fund_start_date="2023-01-15",
        capital_accounts=sub_fund_accounts(30_000_000),
    ),
    SubFund(
        id="sub-fund-b-001",
        name="Infrastructure Growth B",
        ownership_percent=45,
        fund_start_date="2023-02-01",
        capital_accounts=sub_fund_accounts(25_000_000),
    ),
]


def accounts_to_frame(accounts: list[InvestorCapitalAccount]) -> pd.DataFrame:
    rows = [
        {label: getattr(a, fname) for label, fname in ACCOUNT_COLUMNS.items()}
        for a in accounts
    ]
    return pd.DataFrame(rows, columns=list(ACCOUNT_COLUMNS))


def accounts_from_frame(df: pd.DataFrame) -> list[InvestorCapitalAccount]:
    """
    Build capital accounts from an edited table. Rows without an investor id
    are skipped; blank numeric cells count as zero.
    """
    accounts = []
    for _, row in df.iterrows():
        inv_id = row.get("Investor ID")
        if pd.isna(inv_id) or not str(inv_id).strip():
            logger.debug("Skipping capital account row without an investor id")
            continue
        data = {"investor_id": str(inv_id).strip()}
        name = row.get("Investor")
        data["investor_name"] = "" if pd.isna(name) else str(name)
        for label, fname in ACCOUNT_COLUMNS.items():
            if fname in ("investor_id", "investor_name"):
                continue
            val = row.get(label)
            data[fname] = 0.0 if pd.isna(val) else float(val)
        accounts.append(InvestorCapitalAccount(**data))
    return accounts
