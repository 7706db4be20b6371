# fund_waterfall/waterfall/__init__.py
from fund_waterfall.waterfall.calculator import WaterfallCalculator, calculate_waterfall
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
from fund_waterfall.waterfall.multi_level import MultiLevelDistribution, SubFund, calculate_multi_level
from fund_waterfall.waterfall.presets import AMERICAN_WATERFALL, PRESETS, STANDARD_WATERFALL, get_preset
from fund_waterfall.waterfall.validation import WaterfallValidationError, validate_waterfall_inputs

__all__ = [
    "WaterfallCalculator",
    "calculate_waterfall",
    "GPAllocation",
    "InvestorAllocation",
    "InvestorCapitalAccount",
    "TierAllocation",
    "TierDistributionResult",
    "TierType",
    "WaterfallDistribution",
    "WaterfallStructure",
    "WaterfallTier",
    "MultiLevelDistribution",
    "SubFund",
    "calculate_multi_level",
    "AMERICAN_WATERFALL",
    "PRESETS",
    "STANDARD_WATERFALL",
    "get_preset",
    "WaterfallValidationError",
    "validate_waterfall_inputs",
]
