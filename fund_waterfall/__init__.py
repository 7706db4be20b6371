# fund_waterfall/__init__.py

from fund_waterfall.waterfall import (
    AMERICAN_WATERFALL,
    STANDARD_WATERFALL,
    InvestorCapitalAccount,
    SubFund,
    WaterfallDistribution,
    WaterfallStructure,
    calculate_multi_level,
    calculate_waterfall,
)

__all__ = [
    "AMERICAN_WATERFALL",
    "STANDARD_WATERFALL",
    "InvestorCapitalAccount",
    "SubFund",
    "WaterfallDistribution",
    "WaterfallStructure",
    "calculate_multi_level",
    "calculate_waterfall",
]
