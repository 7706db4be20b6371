"""Tests for capital-account snapshots and their table form."""

import numpy as np
import pandas as pd
import pytest

from fund_waterfall.capital_accounts import (
    ACCOUNT_COLUMNS,
    SAMPLE_ACCOUNTS,
    account_from_totals,
    accounts_from_frame,
    accounts_to_frame,
)
from fund_waterfall.waterfall.validation import collect_validation_errors
from fund_waterfall.waterfall.presets import STANDARD_WATERFALL


class TestAccountFromTotals:

    def test_splits_historic_distributions(self):
        a = account_from_totals("inv-9", "Test LP", 2_000_000, 100_000)
        assert a.capital_contributed == 2_000_000
        assert a.capital_returned == pytest.approx(30_000)
        assert a.preferred_return_paid == pytest.approx(20_000)
        assert a.distributions_received == 100_000
        assert a.unreturned_capital == pytest.approx(1_970_000)

    def test_sample_accounts_pass_validation(self):
        assert collect_validation_errors(
            STANDARD_WATERFALL, 1_000_000, SAMPLE_ACCOUNTS, "2022-01-01", "2025-06-30"
        ) == []


class TestFrameConversion:

    def test_columns(self):
        df = accounts_to_frame(SAMPLE_ACCOUNTS)
        assert list(df.columns) == list(ACCOUNT_COLUMNS)
        assert len(df) == len(SAMPLE_ACCOUNTS)

    def test_round_trip(self):
        assert accounts_from_frame(accounts_to_frame(SAMPLE_ACCOUNTS)) == SAMPLE_ACCOUNTS

    def test_blank_rows_and_cells(self):
        df = pd.DataFrame([
            {"Investor ID": "inv-1", "Investor": "One", "Contributed": 500.0, "Capital Returned": np.nan},
            {"Investor ID": None, "Investor": "No id", "Contributed": 100.0},
            {"Investor ID": "  ", "Investor": "Blank id", "Contributed": 100.0},
        ], columns=list(ACCOUNT_COLUMNS))
        accounts = accounts_from_frame(df)
        assert len(accounts) == 1
        assert accounts[0].investor_id == "inv-1"
        assert accounts[0].capital_returned == 0.0
        assert accounts[0].preferred_return_paid == 0.0

    def test_non_numeric_cell_raises(self):
        df = pd.DataFrame([{"Investor ID": "inv-1", "Contributed": "lots"}], columns=list(ACCOUNT_COLUMNS))
        with pytest.raises(ValueError):
            accounts_from_frame(df)
