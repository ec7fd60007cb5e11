# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Tests for the two-phase community development pro forma.
"""

import pytest

from proforma.development import (
    CommunityProformaInputs,
    calculate_community_proforma,
)


@pytest.fixture
def community_inputs() -> CommunityProformaInputs:
    """10-lot community: $70K lots into $400K homes."""
    return CommunityProformaInputs(
        total_lots=10,
        land_value_per_lot=20_000,
        horizontal_dev_per_lot=30_000,
        ae_per_lot=1_000,
        amenity_package=40_000,
        monument_sign=10_000,
        contingency_pct=0.05,
        developer_fee_per_lot=2_000,
        lot_sales_price=70_000,
        bank_ltc=0.65,
        bank_interest_rate=0.08,
        home_sales_price=400_000,
        selling_costs_pct=0.06,
        vertical_cost=250_000,
        construction_interest_rate=0.08,
        construction_months=6,
        lp_accruing_return_rate=0.12,
        lp_investment_period_months=12,
        gp_split_pct=0.5,
    )


class TestPhase1:
    def test_sources_and_uses(self, community_inputs):
        phase1 = calculate_community_proforma(community_inputs).phase1
        assert phase1.land_acquisition == 200_000
        assert phase1.subtotal_hard == 560_000
        assert phase1.total_hard_plus_contingency == pytest.approx(588_000)
        assert phase1.interest_reserve == pytest.approx(23_520)
        assert phase1.total_uses == pytest.approx(631_520)
        assert phase1.senior_debt == pytest.approx(410_488)
        assert phase1.lp_equity == pytest.approx(221_032)

    def test_gross_margin(self, community_inputs):
        phase1 = calculate_community_proforma(community_inputs).phase1
        assert phase1.lot_sales_proceeds == 700_000
        assert phase1.gross_margin == pytest.approx(68_480)


class TestPhase2:
    def test_per_home(self, community_inputs):
        per_home = calculate_community_proforma(community_inputs).phase2_per_home
        assert per_home.lot_cost == 70_000
        assert per_home.construction_interest == pytest.approx(5_000)
        assert per_home.total_cost_per_home == pytest.approx(349_000)
        assert per_home.per_home_profit == pytest.approx(51_000)
        assert per_home.per_home_margin == pytest.approx(0.1275)

    def test_project_totals(self, community_inputs):
        totals = calculate_community_proforma(community_inputs).phase2_totals
        assert totals.total_revenue == 4_000_000
        assert totals.total_profit == pytest.approx(510_000)


class TestLPWaterfall:
    def test_waterfall(self, community_inputs):
        wf = calculate_community_proforma(community_inputs).waterfall
        assert wf.gp_rolled_equity == pytest.approx(68_480)
        assert wf.fund_lp_capital == pytest.approx(631_520)
        assert wf.lp_accrued_return == pytest.approx(75_782.40)
        assert wf.total_lp_payout == pytest.approx(707_302.40)
        assert wf.remaining_to_gps == pytest.approx(434_217.60)
        assert wf.gp_share == pytest.approx(217_108.80)

    def test_negative_margin_rolls_no_equity(self, community_inputs, caplog):
        inputs = community_inputs.model_copy(update={"lot_sales_price": 50_000})
        with caplog.at_level("WARNING", logger="proforma.development.community"):
            result = calculate_community_proforma(inputs)
        assert result.phase1.gross_margin < 0
        assert result.waterfall.gp_rolled_equity == 0
        assert result.waterfall.fund_lp_capital == 500_000
        assert "no GP equity rolls" in caplog.text
