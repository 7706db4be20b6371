from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from numbers import Real
from typing import Callable, Dict, List, Sequence

from fund_waterfall.config import settings
from fund_waterfall.waterfall.allocation import DateLike, allocate_proportionally, years_between
from fund_waterfall.waterfall.models import (
    GPAllocation,
    InvestorAllocation,
    InvestorCapitalAccount,
    TierAllocation,
    TierDistributionResult,
    TierType,
    WaterfallDistribution,
    WaterfallStructure,
    WaterfallTier,
)

logger = logging.getLogger(__name__)


@dataclass
class _RunState:
    """Running totals threaded through the tier loop of a single calculation."""
    accounts: Sequence[InvestorCapitalAccount]
    years_elapsed: float
    remaining: float
    ownership_weights: Dict[int, float]
    pref_paid: Dict[int, float] = field(default_factory=dict)  # per account position, this run only
    pref_total: float = 0.0
    gp_catchup_total: float = 0.0


@dataclass
class _TierOutcome:
    amount: float = 0.0
    lp_amount: float = 0.0
    gp_amount: float = 0.0
    investor_amounts: Dict[int, float] = field(default_factory=dict)  # keyed by account position


def _ownership_weights(accounts: Sequence[InvestorCapitalAccount]) -> Dict[int, float]:
    """Carry weights: explicit ownership when every account has one, else contributed capital."""
    if accounts and all(a.ownership_percent is not None for a in accounts):
        return {i: a.ownership_percent for i, a in enumerate(accounts)}
    return {i: a.capital_contributed for i, a in enumerate(accounts)}


def _return_of_capital(tier: WaterfallTier, state: _RunState) -> _TierOutcome:
    weights = {i: a.unreturned_capital for i, a in enumerate(state.accounts)}
    capacity = sum(weights.values())
    amount = min(state.remaining, capacity)
    return _TierOutcome(
        amount=amount,
        lp_amount=amount,
        investor_amounts=allocate_proportionally(amount, weights),
    )


def _preferred_return(tier: WaterfallTier, state: _RunState) -> _TierOutcome:
    rate = tier.hurdle_rate if tier.hurdle_rate is not None else settings.default_hurdle_rate
    owed: Dict[int, float] = {}
    for i, a in enumerate(state.accounts):
        accrued = a.unreturned_capital * (rate / 100.0) * state.years_elapsed
        owed[i] = max(0.0, accrued - a.preferred_return_paid - state.pref_paid.get(i, 0.0))
    capacity = sum(owed.values())
    amount = min(state.remaining, capacity)
    shares = allocate_proportionally(amount, owed)

    for i, share in shares.items():
        state.pref_paid[i] = state.pref_paid.get(i, 0.0) + share
    state.pref_total += amount
    return _TierOutcome(amount=amount, lp_amount=amount, investor_amounts=shares)


def _gp_catchup(tier: WaterfallTier, state: _RunState) -> _TierOutcome:
    pct = tier.catch_up_percent if tier.catch_up_percent is not None else settings.default_catch_up_percent
    if pct >= 100:
        needed = state.remaining
    elif pct <= 0:
        needed = 0.0
    else:
        # gp / (pref + gp) = pct  =>  gp = pref * pct / (100 - pct)
        target = state.pref_total * pct / (100.0 - pct)
        needed = max(0.0, target - state.gp_catchup_total)
    amount = min(state.remaining, needed)
    state.gp_catchup_total += amount
    return _TierOutcome(amount=amount, gp_amount=amount)


def _carried_interest_split(tier: WaterfallTier, state: _RunState) -> _TierOutcome:
    lp_split = tier.lp_split if tier.lp_split is not None else settings.default_lp_split
    gp_split = tier.gp_split if tier.gp_split is not None else settings.default_gp_split
    if not math.isclose(lp_split + gp_split, 100.0):
        logger.warning(
            "Tier %s splits sum to %s, not 100; using them as given", tier.id, lp_split + gp_split
        )

    lp_amount = state.remaining * lp_split / 100.0
    gp_amount = state.remaining * gp_split / 100.0
    shares = allocate_proportionally(lp_amount, state.ownership_weights)
    if lp_amount and not any(shares.values()):
        # No LP to receive it, the GP pool takes the LP side
        gp_amount += lp_amount
        lp_amount = 0.0
    return _TierOutcome(
        amount=lp_amount + gp_amount,
        lp_amount=lp_amount,
        gp_amount=gp_amount,
        investor_amounts=shares,
    )


_TIER_HANDLERS: Dict[TierType, Callable[[WaterfallTier, _RunState], _TierOutcome]] = {
    TierType.RETURN_OF_CAPITAL: _return_of_capital,
    TierType.PREFERRED_RETURN: _preferred_return,
    TierType.GP_CATCHUP: _gp_catchup,
    TierType.CARRIED_INTEREST_SPLIT: _carried_interest_split,
}


def _check_amount(distribution_amount) -> float:
    if isinstance(distribution_amount, bool) or not isinstance(distribution_amount, Real):
        raise TypeError(
            f"distribution_amount must be a number, got {type(distribution_amount).__name__}"
        )
    return float(distribution_amount)


class WaterfallCalculator:
    """
    Allocates a cash distribution through an ordered list of waterfall tiers,
    then across investors and the GP.

    The calculation is pure: capital accounts and the structure are only read,
    and each call builds a new WaterfallDistribution.
    """

    @staticmethod
    def calculate_waterfall(
        structure: WaterfallStructure,
        distribution_amount: float,
        capital_accounts: Sequence[InvestorCapitalAccount],
        fund_start_date: DateLike,
        distribution_date: DateLike,
    ) -> WaterfallDistribution:
        total = _check_amount(distribution_amount)
        accounts = list(capital_accounts)
        state = _RunState(
            accounts=accounts,
            years_elapsed=years_between(fund_start_date, distribution_date),
            remaining=max(0.0, total),
            ownership_weights=_ownership_weights(accounts),
        )
        logger.info(
            "WaterfallCalculator: distributing %.2f through %r (%d tiers, %d investors, %.3f years)",
            total, structure.name, len(structure.tiers), len(accounts), state.years_elapsed,
        )

        tier_results: List[TierDistributionResult] = []
        # One list per account position, so accounts sharing an id never share an allocation
        investor_tiers: List[List[TierAllocation]] = [[] for _ in accounts]
        gp_tiers: List[TierAllocation] = []

        for tier in structure.tiers:
            handler = _TIER_HANDLERS.get(tier.type) if tier.is_known_type else None
            if handler is None:
                logger.warning("Tier %s has unsupported type %r; passing through", tier.id, tier.type_name)
                outcome = _TierOutcome()
            elif state.remaining <= 0:
                outcome = _TierOutcome()
            else:
                outcome = handler(tier, state)

            state.remaining = max(0.0, state.remaining - outcome.amount)
            logger.debug(
                "Tier %s (%s): distributed=%.2f lp=%.2f gp=%.2f remaining=%.2f",
                tier.id, tier.type_name, outcome.amount, outcome.lp_amount, outcome.gp_amount, state.remaining,
            )

            tier_results.append(TierDistributionResult(
                tier_id=tier.id,
                tier_name=tier.name,
                tier_type=tier.type_name,
                amount_distributed=outcome.amount,
                lp_amount=outcome.lp_amount,
                gp_amount=outcome.gp_amount,
                remaining_after_tier=state.remaining,
            ))
            for i, allocations in enumerate(investor_tiers):
                allocations.append(TierAllocation(
                    tier_id=tier.id,
                    tier_name=tier.name,
                    amount=outcome.investor_amounts.get(i, 0.0),
                ))
            gp_tiers.append(TierAllocation(tier_id=tier.id, tier_name=tier.name, amount=outcome.gp_amount))

        ownership = allocate_proportionally(100.0, state.ownership_weights)
        investor_allocations = [
            InvestorAllocation(
                investor_id=a.investor_id,
                investor_name=a.investor_name,
                ownership_percent=ownership.get(i, 0.0),
                tier_allocations=investor_tiers[i],
                total_allocation=sum(t.amount for t in investor_tiers[i]),
            )
            for i, a in enumerate(accounts)
        ]
        gp_allocation = GPAllocation(
            tier_allocations=gp_tiers,
            total_amount=sum(t.amount for t in gp_tiers),
        )
        result = WaterfallDistribution(
            total_distributable=total,
            tier_distributions=tier_results,
            investor_allocations=investor_allocations,
            gp_allocation=gp_allocation,
        )
        logger.info(
            "WaterfallCalculator: distributed %.2f (LP %.2f, GP %.2f, undistributed %.2f)",
            result.total_distributed, result.total_lp_amount, gp_allocation.total_amount, result.undistributed,
        )
        return result


def calculate_waterfall(
    structure: WaterfallStructure,
    distribution_amount: float,
    capital_accounts: Sequence[InvestorCapitalAccount],
    fund_start_date: DateLike,
    distribution_date: DateLike,
) -> WaterfallDistribution:
    """Module-level shortcut for WaterfallCalculator.calculate_waterfall."""
    return WaterfallCalculator.calculate_waterfall(
        structure, distribution_amount, capital_accounts, fund_start_date, distribution_date
    )
