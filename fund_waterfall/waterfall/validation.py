"""
Boundary checks for waterfall inputs.

The calculator never raises on odd configurations; it falls back to defined
behaviour instead. Callers that want to reject bad input up front (the UI,
anything issuing a live distribution notice) run these checks first.
"""

from __future__ import annotations

import logging
import math
from numbers import Real
from typing import List, Sequence

from fund_waterfall.waterfall.allocation import DateLike, parse_iso_date
from fund_waterfall.waterfall.models import InvestorCapitalAccount, WaterfallStructure

logger = logging.getLogger(__name__)


class WaterfallValidationError(ValueError):
    """Raised when waterfall inputs fail boundary validation. ``errors`` lists every problem found."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


def _check_structure(structure: WaterfallStructure) -> List[str]:
    errors: List[str] = []
    if not structure.tiers:
        errors.append(f"Structure {structure.id!r} has no tiers")

    seen = set()
    for tier in structure.tiers:
        label = f"Tier {tier.id!r}"
        if tier.id in seen:
            errors.append(f"{label}: duplicate tier id")
        seen.add(tier.id)

        if not tier.is_known_type:
            errors.append(f"{label}: unsupported tier type {tier.type_name!r}")

        if tier.hurdle_rate is not None and tier.hurdle_rate < 0:
            errors.append(f"{label}: hurdle rate cannot be negative")
        if tier.catch_up_percent is not None and not 0 <= tier.catch_up_percent < 100:
            errors.append(f"{label}: catch-up percent must be between 0 and 100")

        for split_name in ("lp_split", "gp_split"):
            split = getattr(tier, split_name)
            if split is not None and not 0 <= split <= 100:
                errors.append(f"{label}: {split_name} must be between 0 and 100")
        if tier.lp_split is not None and tier.gp_split is not None:
            if not math.isclose(tier.lp_split + tier.gp_split, 100.0):
                errors.append(
                    f"{label}: lp_split + gp_split must equal 100 "
                    f"(got {tier.lp_split:g} + {tier.gp_split:g})"
                )
    return errors


def _check_accounts(accounts: Sequence[InvestorCapitalAccount]) -> List[str]:
    errors: List[str] = []
    seen = set()
    for a in accounts:
        label = f"Investor {a.investor_id!r}"
        if a.investor_id in seen:
            errors.append(f"{label}: duplicate investor id")
        seen.add(a.investor_id)

        for fname in (
            "capital_contributed",
            "capital_returned",
            "preferred_return_accrued",
            "preferred_return_paid",
            "distributions_received",
        ):
            if getattr(a, fname) < 0:
                errors.append(f"{label}: {fname} cannot be negative")
        if a.capital_returned > a.capital_contributed:
            errors.append(f"{label}: capital returned exceeds capital contributed")
        if a.ownership_percent is not None and not 0 <= a.ownership_percent <= 100:
            errors.append(f"{label}: ownership percent must be between 0 and 100")
    return errors


def check_distribution_amount(distribution_amount) -> List[str]:
    if isinstance(distribution_amount, bool) or not isinstance(distribution_amount, Real):
        return [f"Distribution amount must be a number, got {type(distribution_amount).__name__}"]
    if not math.isfinite(distribution_amount):
        return ["Distribution amount must be finite"]
    if distribution_amount < 0:
        return ["Distribution amount cannot be negative"]
    return []


def collect_validation_errors(
    structure: WaterfallStructure,
    distribution_amount,
    capital_accounts: Sequence[InvestorCapitalAccount],
    fund_start_date: DateLike,
    distribution_date: DateLike,
) -> List[str]:
    """Return every problem found with the inputs. An empty list means they are valid."""
    errors = check_distribution_amount(distribution_amount)

    start = end = None
    try:
        start = parse_iso_date(fund_start_date)
    except ValueError as exc:
        errors.append(f"Fund start date: {exc}")
    try:
        end = parse_iso_date(distribution_date)
    except ValueError as exc:
        errors.append(f"Distribution date: {exc}")
    if start is not None and end is not None and end < start:
        errors.append(f"Distribution date {end.isoformat()} precedes fund start date {start.isoformat()}")

    errors.extend(_check_structure(structure))
    errors.extend(_check_accounts(capital_accounts))
    return errors


def validate_waterfall_inputs(
    structure: WaterfallStructure,
    distribution_amount,
    capital_accounts: Sequence[InvestorCapitalAccount],
    fund_start_date: DateLike,
    distribution_date: DateLike,
) -> None:
    """Raise WaterfallValidationError if the inputs are not fit for a live calculation."""
    errors = collect_validation_errors(
        structure, distribution_amount, capital_accounts, fund_start_date, distribution_date
    )
    if errors:
        logger.warning("Waterfall input validation failed with %d error(s)", len(errors))
        raise WaterfallValidationError(errors)
