"""Tests for boundary validation of waterfall inputs."""

import pytest

from conftest import make_account
from fund_waterfall.waterfall.models import TierType, WaterfallStructure, WaterfallTier
from fund_waterfall.waterfall.presets import STANDARD_WATERFALL
from fund_waterfall.waterfall.validation import (
    WaterfallValidationError,
    collect_validation_errors,
    validate_waterfall_inputs,
)


def errors_for(structure=STANDARD_WATERFALL, amount=1_000_000, accounts=None,
               start="2022-01-01", end="2024-01-01"):
    if accounts is None:
        accounts = [make_account("lp-1", 1_000_000)]
    return collect_validation_errors(structure, amount, accounts, start, end)


def split_structure(lp, gp):
    return WaterfallStructure(
        id="s", name="s",
        tiers=[WaterfallTier(id="t1", name="Split", type=TierType.CARRIED_INTEREST_SPLIT, lp_split=lp, gp_split=gp)],
    )


class TestValidInputs:

    def test_presets_and_sample_accounts_are_valid(self, two_equal_investors):
        assert errors_for(accounts=two_equal_investors) == []
        validate_waterfall_inputs(STANDARD_WATERFALL, 0, two_equal_investors, "2022-01-01", "2022-01-01")

    def test_no_investors_is_valid(self):
        assert errors_for(accounts=[]) == []


class TestAmountAndDates:

    @pytest.mark.parametrize("amount", ["100", None, True, float("nan"), float("inf"), -1])
    def test_bad_amounts(self, amount):
        assert len(errors_for(amount=amount)) == 1

    def test_distribution_before_start(self):
        errors = errors_for(start="2024-01-01", end="2023-12-31")
        assert len(errors) == 1
        assert "precedes" in errors[0]

    def test_malformed_dates(self):
        errors = errors_for(start="01/01/2022", end="soon")
        assert len(errors) == 2


class TestStructureChecks:

    def test_empty_structure(self):
        errors = errors_for(structure=WaterfallStructure(id="empty", name="Empty"))
        assert any("no tiers" in e for e in errors)

    def test_splits_must_sum_to_100(self):
        errors = errors_for(structure=split_structure(70, 20))
        assert any("must equal 100" in e for e in errors)

    def test_split_out_of_range(self):
        errors = errors_for(structure=split_structure(120, -20))
        assert any("lp_split must be between" in e for e in errors)
        assert any("gp_split must be between" in e for e in errors)

    def test_unknown_tier_type(self):
        structure = WaterfallStructure(
            id="s", name="s", tiers=[WaterfallTier(id="t1", name="Fee", type="MANAGEMENT_FEE")]
        )
        errors = errors_for(structure=structure)
        assert any("unsupported tier type" in e for e in errors)

    def test_duplicate_tier_ids(self):
        structure = WaterfallStructure(
            id="s", name="s",
            tiers=[
                WaterfallTier(id="t1", name="ROC", type=TierType.RETURN_OF_CAPITAL),
                WaterfallTier(id="t1", name="ROC again", type=TierType.RETURN_OF_CAPITAL),
            ],
        )
        assert any("duplicate tier id" in e for e in errors_for(structure=structure))

    def test_negative_hurdle_and_bad_catch_up(self):
        structure = WaterfallStructure(
            id="s", name="s",
            tiers=[
                WaterfallTier(id="t1", name="Pref", type=TierType.PREFERRED_RETURN, hurdle_rate=-1),
                WaterfallTier(id="t2", name="CU", type=TierType.GP_CATCHUP, catch_up_percent=100),
            ],
        )
        errors = errors_for(structure=structure)
        assert len(errors) == 2


class TestAccountChecks:

    def test_returned_exceeds_contributed(self):
        errors = errors_for(accounts=[make_account("lp-1", 100, returned=200)])
        assert errors == ["Investor 'lp-1': capital returned exceeds capital contributed"]

    def test_negative_figures(self):
        errors = errors_for(accounts=[make_account("lp-1", -100, pref_paid=-5)])
        assert any("capital_contributed cannot be negative" in e for e in errors)
        assert any("preferred_return_paid cannot be negative" in e for e in errors)

    def test_duplicate_investor_ids(self):
        errors = errors_for(accounts=[make_account("lp-1", 100), make_account("lp-1", 200)])
        assert any("duplicate investor id" in e for e in errors)

    def test_ownership_out_of_range(self):
        errors = errors_for(accounts=[make_account("lp-1", 100, ownership_percent=150)])
        assert any("ownership percent" in e for e in errors)


class TestValidateRaises:

    def test_raises_with_all_errors(self):
        with pytest.raises(WaterfallValidationError) as exc_info:
            validate_waterfall_inputs(
                split_structure(70, 20), -5, [make_account("lp-1", 100, returned=200)],
                "2024-01-01", "2023-01-01",
            )
        assert len(exc_info.value.errors) == 4

    def test_is_a_value_error(self):
        with pytest.raises(ValueError):
            validate_waterfall_inputs(STANDARD_WATERFALL, -1, [], "2022-01-01", "2024-01-01")
