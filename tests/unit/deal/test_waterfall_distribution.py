# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Tests for the investor distribution waterfall.

All investors contribute on 2025-01-01 and, unless noted, receive a single
distribution on 2026-01-01 (exactly one year of pref accrual) through the
standard tiers: return of capital, 8% pref, 20% catch-up, 20/80 split.
"""

from datetime import date

import pytest
from pydantic import ValidationError

from proforma.core.primitives import WaterfallTierEnum
from proforma.deal import (
    WaterfallCalculator,
    WaterfallInput,
    WaterfallTierConfig,
    calculate_waterfall,
    standard_tiers,
)

DISTRIBUTION_DATE = date(2026, 1, 1)


def run(total, investors, tiers=None, distribution_date=DISTRIBUTION_DATE):
    return calculate_waterfall(
        WaterfallInput(
            distribution_date=distribution_date,
            total_distributable=total,
            investors=investors,
            tiers=standard_tiers() if tiers is None else tiers,
        )
    )


class TestLPOnlyFund:
    """Two $500K LPs, $1.2M distributed."""

    def test_return_of_capital_pro_rata(self, lp_a, lp_b):
        result = run(1_200_000, [lp_a, lp_b])
        assert result.investor("lp-a").return_of_capital == 500_000
        assert result.investor("lp-b").return_of_capital == 500_000

    def test_preferred_return(self, lp_a, lp_b):
        """$500K x 8% x 365/365."""
        result = run(1_200_000, [lp_a, lp_b])
        assert result.investor("lp-a").preferred_return == 40_000
        assert result.investor("lp-b").preferred_return == 40_000

    def test_no_catch_up_without_gp(self, lp_a, lp_b):
        result = run(1_200_000, [lp_a, lp_b])
        assert result.tier_total(WaterfallTierEnum.CATCH_UP) == 0

    def test_gp_pool_stays_undistributed(self, lp_a, lp_b):
        """$120K left for the split: LP pool $96K, GP pool $24K has no recipients."""
        result = run(1_200_000, [lp_a, lp_b])
        assert result.investor("lp-a").profit_split == 48_000
        assert result.investor("lp-b").profit_split == 48_000
        assert result.remaining_undistributed == 24_000

    def test_investor_totals_reconcile(self, lp_a, lp_b):
        result = run(1_200_000, [lp_a, lp_b])
        assert sum(s.total for s in result.investors) == result.total_distributed
        assert all(item.amount >= 0 for item in result.line_items)


class TestGPCatchUp:
    """$100K GP and $900K LP, $1.5M distributed."""

    @pytest.fixture
    def investors(self, gp_investor, investor_factory):
        return [gp_investor, investor_factory("lp-large", 900_000)]

    def test_return_of_capital(self, investors):
        result = run(1_500_000, investors)
        assert result.investor("gp-1").return_of_capital == 100_000
        assert result.investor("lp-large").return_of_capital == 900_000

    def test_pref_to_lp_only(self, investors):
        result = run(1_500_000, investors)
        assert result.investor("gp-1").preferred_return == 0
        assert result.investor("lp-large").preferred_return == 72_000

    def test_catch_up(self, investors):
        """GP target = $72K x 0.2 / 0.8."""
        result = run(1_500_000, investors)
        assert result.investor("gp-1").catch_up == 18_000

    def test_profit_split(self, investors):
        """$410K remaining split 20/80."""
        result = run(1_500_000, investors)
        assert result.investor("gp-1").profit_split == 82_000
        assert result.investor("lp-large").profit_split == 328_000

    def test_everything_distributed(self, investors):
        result = run(1_500_000, investors)
        assert result.total_distributed == 1_500_000
        assert result.remaining_undistributed == 0


class TestGPsWithoutCalledCapital:
    """GPs with no called capital share the catch-up and GP pool equally."""

    def test_two_gps_split_evenly(self, investor_factory):
        """$1M LP, $1.2M distributed: $20K catch-up and $20K GP pool, halved."""
        investors = [
            investor_factory("gp-1", 0, is_gp=True),
            investor_factory("gp-2", 0, is_gp=True),
            investor_factory("lp-1", 1_000_000),
        ]
        result = run(1_200_000, investors)
        for gp in ("gp-1", "gp-2"):
            assert result.investor(gp).return_of_capital == 0
            assert result.investor(gp).catch_up == 10_000
            assert result.investor(gp).profit_split == 10_000
        assert result.investor("lp-1").profit_split == 80_000
        assert result.total_distributed == 1_200_000

    def test_residual_goes_to_first_gp(self, investor_factory):
        """$20K catch-up over three GPs: 6,666.66 / 6,666.67 / 6,666.67."""
        investors = [investor_factory(f"gp-{i}", 0, is_gp=True) for i in range(3)]
        investors.append(investor_factory("lp-1", 1_000_000))
        result = run(1_100_000, investors)
        amounts = [result.investor(f"gp-{i}").catch_up for i in range(3)]
        assert amounts == [6_666.66, 6_666.67, 6_666.67]
        assert result.tier_total(WaterfallTierEnum.CATCH_UP) == 20_000
        assert result.remaining_undistributed == 0


class TestPartialDistribution:
    def test_capital_returned_pro_rata(self, lp_a, lp_b):
        result = run(800_000, [lp_a, lp_b])
        assert result.investor("lp-a").return_of_capital == 400_000
        assert result.investor("lp-b").return_of_capital == 400_000
        assert result.investor("lp-a").preferred_return == 0
        assert result.investor("lp-a").profit_split == 0
        assert result.total_distributed == 800_000
        assert result.remaining_undistributed == 0

    def test_later_tiers_not_reported(self, lp_a, lp_b):
        result = run(800_000, [lp_a, lp_b])
        assert [t.tier_name for t in result.tier_breakdown] == [
            WaterfallTierEnum.RETURN_OF_CAPITAL
        ]


class TestMultiRound:
    def test_second_round_picks_up_where_first_stopped(
        self, lp_a, lp_b, investor_factory
    ):
        round1 = run(800_000, [lp_a, lp_b], distribution_date=date(2025, 7, 1))

        round2_investors = [
            investor_factory(
                inv.investment_id,
                inv.called_amount,
                prior_return_of_capital=round1.investor(inv.investment_id).return_of_capital,
                prior_preferred_return=round1.investor(inv.investment_id).preferred_return,
                prior_profit_split=round1.investor(inv.investment_id).profit_split,
            )
            for inv in (lp_a, lp_b)
        ]
        round2 = run(600_000, round2_investors)

        assert round2.investor("lp-a").return_of_capital == 100_000
        assert round2.investor("lp-b").return_of_capital == 100_000
        assert round2.investor("lp-a").preferred_return > 0
        assert round2.total_distributed == 536_000
        assert round2.remaining_undistributed == 64_000

    def test_prior_pref_is_netted(self, investor_factory):
        investor = investor_factory(
            "lp-a", 500_000, prior_return_of_capital=500_000, prior_preferred_return=30_000
        )
        result = run(10_000, [investor])
        assert result.investor("lp-a").preferred_return == 10_000


class TestEdgeCases:
    def test_zero_distributable(self, lp_a):
        result = run(0, [lp_a])
        assert result.total_distributed == 0
        assert result.remaining_undistributed == 0
        assert result.line_items == []

    def test_single_lp(self, lp_a):
        result = run(700_000, [lp_a])
        summary = result.investor("lp-a")
        assert summary.return_of_capital == 500_000
        assert summary.preferred_return == 40_000
        assert result.total_distributed == 668_000
        assert result.remaining_undistributed == 32_000

    def test_all_gp_fund(self, investor_factory):
        gp = investor_factory("gp-only", 500_000, is_gp=True)
        result = run(800_000, [gp])
        summary = result.investor("gp-only")
        assert summary.return_of_capital == 500_000
        assert summary.preferred_return == 0
        assert all(item.amount >= 0 for item in result.line_items)

    def test_no_investors(self):
        result = run(100_000, [])
        assert result.total_distributed == 0
        assert result.remaining_undistributed == 100_000
        assert result.investors == []

    def test_no_tiers(self, lp_a):
        result = run(100_000, [lp_a], tiers=[])
        assert result.total_distributed == 0
        assert result.remaining_undistributed == 100_000
        assert result.investor("lp-a").total == 0

    def test_rounding_residual_goes_to_first_item(self, investor_factory):
        """$100 across three equal LPs: 33.34 / 33.33 / 33.33."""
        investors = [investor_factory(f"lp-{i}", 300) for i in range(3)]
        result = run(100, investors)
        amounts = [result.investor(f"lp-{i}").return_of_capital for i in range(3)]
        assert amounts == [33.34, 33.33, 33.33]
        assert result.total_distributed == 100

    def test_unknown_investment_raises(self, lp_a):
        with pytest.raises(KeyError):
            run(100_000, [lp_a]).investor("nobody")


class TestTierConfig:
    def test_tiers_processed_by_order(self, lp_a):
        tiers = list(reversed(standard_tiers()))
        result = run(700_000, [lp_a], tiers=tiers)
        assert result.total_distributed == 668_000

    def test_split_cannot_exceed_100_percent(self):
        with pytest.raises(ValidationError, match="must not exceed 100%"):
            WaterfallTierConfig(
                tier_name=WaterfallTierEnum.PROFIT_SPLIT,
                tier_order=4,
                gp_split_pct=0.3,
                lp_split_pct=0.8,
            )

    def test_catch_up_below_100_percent(self):
        with pytest.raises(ValidationError):
            WaterfallTierConfig(
                tier_name=WaterfallTierEnum.CATCH_UP, tier_order=3, catch_up_pct=1.0
            )


class TestDataFrameViews:
    def test_investors_df(self, lp_a, lp_b):
        df = run(1_200_000, [lp_a, lp_b]).investors_df()
        assert list(df.index) == ["lp-a", "lp-b"]
        assert df.loc["lp-a", "total"] == 588_000

    def test_line_items_df(self, lp_a, lp_b):
        df = run(1_200_000, [lp_a, lp_b]).line_items_df()
        assert len(df) == 6
        assert df["amount"].sum() == 1_176_000

    def test_calculator_directly(self, lp_a):
        calculator = WaterfallCalculator(investors=[lp_a], tiers=standard_tiers())
        assert calculator.lp_investors == [lp_a]
        assert calculator.gp_investors == []
