import pytest

from fund_waterfall.config import settings
from fund_waterfall.waterfall.models import InvestorCapitalAccount


def make_account(investor_id, contributed, returned=0.0, pref_paid=0.0, **kwargs):
    return InvestorCapitalAccount(
        investor_id=investor_id,
        investor_name=kwargs.pop("investor_name", f"Investor {investor_id}"),
        capital_contributed=contributed,
        capital_returned=returned,
        preferred_return_paid=pref_paid,
        **kwargs,
    )


@pytest.fixture
def exact_years(monkeypatch):
    """365-day years so that 2022-01-01 -> 2024-01-01 is exactly 2.0 years."""
    monkeypatch.setattr(settings, "days_per_year", 365.0)


@pytest.fixture
def two_equal_investors():
    return [
        make_account("lp-1", 1_000_000),
        make_account("lp-2", 1_000_000),
    ]


@pytest.fixture
def single_investor():
    return [make_account("lp-1", 1_000_000)]


@pytest.fixture
def uneven_investors():
    return [
        make_account("lp-a", 3_000_000, returned=1_000_000),
        make_account("lp-b", 1_000_000),
        make_account("lp-c", 500_000, returned=500_000),
    ]


@pytest.fixture
def fractional_investors():
    amounts = [
        123_456.78, 987_654.32, 55_555.55, 1_000_000.01, 333_333.33,
        250_000.49, 71_234.56, 640_000.07, 12_345.67, 899_999.99,
    ]
    return [
        make_account(f"lp-{i:02d}", amt, returned=amt * 0.1, pref_paid=amt * 0.01)
        for i, amt in enumerate(amounts)
    ]
