from typing import Optional, List, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator
from enum import Enum


class TierType(str, Enum):
    RETURN_OF_CAPITAL = "RETURN_OF_CAPITAL"
    PREFERRED_RETURN = "PREFERRED_RETURN"
    GP_CATCHUP = "GP_CATCHUP"
    CARRIED_INTEREST_SPLIT = "CARRIED_INTEREST_SPLIT"


# Older structure definitions name the last two tiers differently
TIER_TYPE_ALIASES = {
    "CATCH_UP": TierType.GP_CATCHUP,
    "CARRIED_INTEREST": TierType.CARRIED_INTEREST_SPLIT,
}


def coerce_tier_type(value: Union[TierType, str]) -> Union[TierType, str]:
    """Map a raw tier type onto TierType, leaving unrecognised names as plain strings."""
    if isinstance(value, TierType):
        return value
    if isinstance(value, str):
        key = value.strip().upper()
        if key in TIER_TYPE_ALIASES:
            return TIER_TYPE_ALIASES[key]
        try:
            return TierType(key)
        except ValueError:
            return value
    return value


class WaterfallTier(BaseModel):
    """
    One rule in a distribution waterfall.

    Which of the optional parameters matter depends on the tier type:
    PREFERRED_RETURN reads hurdle_rate, GP_CATCHUP reads catch_up_percent and
    CARRIED_INTEREST_SPLIT reads lp_split / gp_split. All values are percents (8 = 8%).
    """
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    type: Union[TierType, str] = Field(union_mode="left_to_right", description="Tier behaviour. Unknown names are kept and treated as pass-through.")

    hurdle_rate: Optional[float] = Field(None, description="Annual preferred return rate in percent")
    lp_split: Optional[float] = Field(None, description="Limited Partner share of the tier in percent")
    gp_split: Optional[float] = Field(None, description="General Partner share of the tier in percent")
    catch_up_percent: Optional[float] = Field(None, description="GP target share of profits once caught up, in percent")

    @field_validator("type", mode="before")
    @classmethod
    def _normalise_type(cls, v):
        return coerce_tier_type(v)

    @property
    def is_known_type(self) -> bool:
        return isinstance(self.type, TierType)

    @property
    def type_name(self) -> str:
        return self.type.value if isinstance(self.type, TierType) else str(self.type)


class WaterfallStructure(BaseModel):
    """
    A named, ordered template of tiers. Tiers are evaluated strictly in list order.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str = ""
    tiers: List[WaterfallTier] = Field(default_factory=list)

    def has_tier(self, tier_type: TierType) -> bool:
        return any(t.type == tier_type for t in self.tiers)

    def get_tier(self, tier_id: str) -> Optional[WaterfallTier]:
        for t in self.tiers:
            if t.id == tier_id:
                return t
        return None


class InvestorCapitalAccount(BaseModel):
    """
    One investor's capital-account snapshot as of the distribution date.
    Read-only input to the calculator.
    """
    model_config = ConfigDict(frozen=True)

    investor_id: str
    investor_name: str = ""
    capital_contributed: float = 0.0
    capital_returned: float = 0.0
    preferred_return_accrued: float = 0.0
    preferred_return_paid: float = 0.0
    distributions_received: float = 0.0

    # Explicit share of the LP pool in percent. Only used when every account has one.
    ownership_percent: Optional[float] = None

    @property
    def unreturned_capital(self) -> float:
        return max(0.0, self.capital_contributed - self.capital_returned)


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


class TierAllocation(BaseModel):
    model_config = ConfigDict(frozen=True)

    tier_id: str
    tier_name: str
    amount: float = 0.0


class TierDistributionResult(BaseModel):
    """Outcome of a single tier: how much it consumed and who got it."""
    model_config = ConfigDict(frozen=True)

    tier_id: str
    tier_name: str
    tier_type: str
    amount_distributed: float = 0.0
    lp_amount: float = 0.0
    gp_amount: float = 0.0
    remaining_after_tier: float = 0.0


class InvestorAllocation(BaseModel):
    model_config = ConfigDict(frozen=True)

    investor_id: str
    investor_name: str = ""
    ownership_percent: float = 0.0
    tier_allocations: List[TierAllocation] = Field(default_factory=list)
    total_allocation: float = 0.0

    def amount_for_tier(self, tier_id: str) -> float:
        return sum(a.amount for a in self.tier_allocations if a.tier_id == tier_id)


class GPAllocation(BaseModel):
    model_config = ConfigDict(frozen=True)

    investor_id: str = "GP"
    tier_allocations: List[TierAllocation] = Field(default_factory=list)
    total_amount: float = 0.0

    def amount_for_tier(self, tier_id: str) -> float:
        return sum(a.amount for a in self.tier_allocations if a.tier_id == tier_id)


class WaterfallDistribution(BaseModel):
    """
    Result of one waterfall calculation. Built fresh per call and never mutated.
    """
    model_config = ConfigDict(frozen=True)

    total_distributable: float
    tier_distributions: List[TierDistributionResult] = Field(default_factory=list)
    investor_allocations: List[InvestorAllocation] = Field(default_factory=list)
    gp_allocation: GPAllocation = Field(default_factory=GPAllocation)

    @property
    def total_distributed(self) -> float:
        return sum(t.amount_distributed for t in self.tier_distributions)

    @property
    def total_lp_amount(self) -> float:
        return sum(a.total_allocation for a in self.investor_allocations)

    @property
    def undistributed(self) -> float:
        """Cash left on the table after the last tier."""
        return max(0.0, self.total_distributable - self.total_distributed)

    def get_investor(self, investor_id: str) -> Optional[InvestorAllocation]:
        for a in self.investor_allocations:
            if a.investor_id == investor_id:
                return a
        return None
