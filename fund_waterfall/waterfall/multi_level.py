"""
Multi-level distributions: a project-level amount is split across sub-funds
by ownership, each sub-fund runs its own waterfall over its own capital
accounts, per-tier tax is taken out, and the after-tax proceeds roll up to
the parent fund.
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field

from fund_waterfall.waterfall.allocation import DateLike
from fund_waterfall.waterfall.calculator import _check_amount, calculate_waterfall
from fund_waterfall.waterfall.models import InvestorCapitalAccount, WaterfallDistribution, WaterfallStructure
from fund_waterfall.waterfall.presets import STANDARD_WATERFALL
from fund_waterfall.waterfall.reporting import estimate_tax_impact
from fund_waterfall.waterfall.validation import (
    WaterfallValidationError,
    check_distribution_amount,
    collect_validation_errors,
)

logger = logging.getLogger(__name__)


class SubFund(BaseModel):
    """A sub-fund holding a share of the project and running its own waterfall."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    ownership_percent: float = Field(..., description="Share of the project-level distribution, in percent")
    fund_start_date: str = Field(..., description="ISO date preferred return accrues from")
    capital_accounts: List[InvestorCapitalAccount] = Field(default_factory=list)
    structure: WaterfallStructure = STANDARD_WATERFALL


class SubFundResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    sub_fund_id: str
    sub_fund_name: str
    ownership_percent: float
    allocated_amount: float
    distribution: WaterfallDistribution
    tax_amount: float = 0.0
    after_tax_amount: float = 0.0

    @property
    def effective_tax_rate(self) -> float:
        return self.tax_amount / self.allocated_amount * 100 if self.allocated_amount > 0 else 0.0


class MultiLevelDistribution(BaseModel):
    """
    Result of one multi-level run. ``total_to_parent`` is what reaches the
    parent fund once every sub-fund has paid tax on its taxable tiers.
    """
    model_config = ConfigDict(frozen=True)

    project_distribution: float
    tax_rate_percent: float
    sub_fund_results: List[SubFundResult] = Field(default_factory=list)

    @property
    def total_allocated(self) -> float:
        return sum(r.allocated_amount for r in self.sub_fund_results)

    @property
    def unallocated(self) -> float:
        """Project cash not owned by any listed sub-fund."""
        return max(0.0, self.project_distribution - self.total_allocated)

    @property
    def total_tax(self) -> float:
        return sum(r.tax_amount for r in self.sub_fund_results)

    @property
    def total_to_parent(self) -> float:
        return sum(r.after_tax_amount for r in self.sub_fund_results)

    @property
    def effective_tax_rate(self) -> float:
        """Tax as a percent of everything allocated to sub-funds."""
        allocated = self.total_allocated
        return self.total_tax / allocated * 100 if allocated > 0 else 0.0

    def get_sub_fund(self, sub_fund_id: str) -> Optional[SubFundResult]:
        for r in self.sub_fund_results:
            if r.sub_fund_id == sub_fund_id:
                return r
        return None


def _check_ownership(sub_funds: Sequence[SubFund], tax_rate_percent: float) -> List[str]:
    errors: List[str] = []
    seen = set()
    for fund in sub_funds:
        if fund.id in seen:
            errors.append(f"Sub-fund {fund.id!r}: duplicate sub-fund id")
        seen.add(fund.id)
        if not 0 <= fund.ownership_percent <= 100:
            errors.append(f"Sub-fund {fund.id!r}: ownership percent must be between 0 and 100")
    total = sum(f.ownership_percent for f in sub_funds)
    if total > 100 and not math.isclose(total, 100.0):
        errors.append(f"Sub-fund ownership adds up to {total:g}%, more than 100%")
    if not 0 <= tax_rate_percent <= 100:
        errors.append("Tax rate must be between 0 and 100")
    return errors


def collect_multi_level_errors(
    project_distribution,
    sub_funds: Sequence[SubFund],
    distribution_date: DateLike,
    tax_rate_percent: float = 0.0,
) -> List[str]:
    """Every problem with a multi-level run, including each sub-fund's own waterfall inputs."""
    errors = check_distribution_amount(project_distribution)
    errors.extend(_check_ownership(sub_funds, tax_rate_percent))
    for fund in sub_funds:
        # amount already checked once above
        fund_errors = collect_validation_errors(
            fund.structure, 0.0, fund.capital_accounts, fund.fund_start_date, distribution_date
        )
        errors.extend(f"{fund.name}: {err}" for err in fund_errors)
    return errors


def calculate_multi_level(
    project_distribution: float,
    sub_funds: Sequence[SubFund],
    distribution_date: DateLike,
    tax_rate_percent: float = 0.0,
) -> MultiLevelDistribution:
    """
    Split ``project_distribution`` across ``sub_funds`` by ownership percent,
    run each sub-fund's waterfall on its share and deduct tax at
    ``tax_rate_percent`` on every tier except return of capital.

    Ownership above 100% in total, or outside 0-100 for one sub-fund, raises
    WaterfallValidationError since it would distribute more than the project
    paid out. Ownership below 100% leaves the rest in ``unallocated``.
    """
    total = _check_amount(project_distribution)
    errors = _check_ownership(sub_funds, tax_rate_percent)
    if errors:
        logger.warning("Multi-level input validation failed with %d error(s)", len(errors))
        raise WaterfallValidationError(errors)

    logger.info(
        "Multi-level: distributing %.2f across %d sub-funds at %.1f%% tax",
        total, len(sub_funds), tax_rate_percent,
    )
    results: List[SubFundResult] = []
    for fund in sub_funds:
        allocated = max(0.0, total) * fund.ownership_percent / 100.0
        distribution = calculate_waterfall(
            fund.structure, allocated, fund.capital_accounts, fund.fund_start_date, distribution_date
        )
        tax = float(estimate_tax_impact(distribution, tax_rate_percent)["Tax"].sum())
        logger.debug("Sub-fund %s: allocated=%.2f tax=%.2f", fund.id, allocated, tax)
        results.append(SubFundResult(
            sub_fund_id=fund.id,
            sub_fund_name=fund.name,
            ownership_percent=fund.ownership_percent,
            allocated_amount=allocated,
            distribution=distribution,
            tax_amount=tax,
            after_tax_amount=allocated - tax,
        ))

    result = MultiLevelDistribution(
        project_distribution=total,
        tax_rate_percent=tax_rate_percent,
        sub_fund_results=results,
    )
    logger.info(
        "Multi-level: %.2f to parent after %.2f tax (effective %.2f%%)",
        result.total_to_parent, result.total_tax, result.effective_tax_rate,
    )
    return result


def sub_fund_summary_frame(result: MultiLevelDistribution) -> pd.DataFrame:
    """One row per sub-fund plus a parent-fund total row."""
    rows = [
        {
            "Sub-Fund": r.sub_fund_name,
            "Ownership %": r.ownership_percent,
            "Allocated": r.allocated_amount,
            "LP": r.distribution.total_lp_amount,
            "GP": r.distribution.gp_allocation.total_amount,
            "Tax": r.tax_amount,
            "After Tax": r.after_tax_amount,
        }
        for r in result.sub_fund_results
    ]
    if rows:
        rows.append({
            "Sub-Fund": "Parent Fund",
            "Ownership %": sum(r.ownership_percent for r in result.sub_fund_results),
            "Allocated": result.total_allocated,
            "LP": sum(r.distribution.total_lp_amount for r in result.sub_fund_results),
            "GP": sum(r.distribution.gp_allocation.total_amount for r in result.sub_fund_results),
            "Tax": result.total_tax,
            "After Tax": result.total_to_parent,
        })
    return pd.DataFrame(rows, columns=["Sub-Fund", "Ownership %", "Allocated", "LP", "GP", "Tax", "After Tax"])
