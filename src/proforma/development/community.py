# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Community Development Pro Forma

Two-phase model of a community built by the same sponsor:

- Phase 1 (horizontal): land, site development, A&E, amenities and carry are
  funded by senior debt and LP equity; finished lots are sold into phase 2 at
  ``lot_sales_price``.
- Phase 2 (vertical): homes are built on those lots and sold. Per-home
  economics are scaled by the lot count for project totals.

The LP waterfall rolls the phase 1 margin forward as GP equity; a fund LP
supplies the rest of the lot takedown capital and earns an accruing return.
"""

from __future__ import annotations

import logging

from pydantic import Field

from ..core.calculations import FinancialCalculations
from ..core.primitives import FloatBetween0And1, Model, PositiveFloat, PositiveInt
from ._sources_uses import build_capital_stack

logger = logging.getLogger(__name__)

# Construction loans are half drawn on average
CONSTRUCTION_AVERAGE_DRAW = 0.5


class CommunityProformaInputs(Model):
    """Assumptions for a community development."""

    # Phase 1 - horizontal development
    total_lots: PositiveInt
    land_value_per_lot: PositiveFloat
    horizontal_dev_per_lot: PositiveFloat
    ae_per_lot: PositiveFloat = Field(default=0.0, description="Architecture & engineering")
    amenity_package: PositiveFloat = 0.0
    monument_sign: PositiveFloat = 0.0
    carry_costs_per_lot: PositiveFloat = 0.0
    contingency_pct: FloatBetween0And1 = 0.0
    cm_fee_per_lot: PositiveFloat = 0.0
    developer_fee_per_lot: PositiveFloat = 0.0
    lot_sales_price: PositiveFloat
    bank_ltc: FloatBetween0And1
    bank_interest_rate: PositiveFloat
    lp_pref_return: PositiveFloat = 0.0
    lp_buyout_irr: PositiveFloat = 0.0

    # Phase 2 - vertical construction
    home_sales_price: PositiveFloat
    selling_costs_pct: FloatBetween0And1 = 0.0
    seller_concession: PositiveFloat = 0.0
    vertical_cost: PositiveFloat
    construction_interest_rate: PositiveFloat = 0.0
    construction_months: PositiveFloat = 0.0
    lp_accruing_return_rate: PositiveFloat = 0.0
    lp_investment_period_months: PositiveFloat = 0.0
    gp_split_pct: FloatBetween0And1 = 0.0


class Phase1Results(Model):
    land_acquisition: float
    horizontal_dev: float
    ae: float
    carry_costs: float
    subtotal_hard: float
    contingency: float
    total_hard_plus_contingency: float
    cm_fee: float
    developer_fee: float
    interest_reserve: float
    total_uses: float
    senior_debt: float
    lp_equity: float
    lot_sales_proceeds: float
    gross_margin: float


class Phase2PerHome(Model):
    lot_cost: float
    construction_interest: float
    selling_costs: float
    total_cost_per_home: float
    per_home_profit: float
    per_home_margin: float


class Phase2ProjectTotals(Model):
    total_revenue: float
    total_costs: float
    total_profit: float


class LPWaterfall(Model):
    gp_rolled_equity: float
    total_lot_cost: float
    fund_lp_capital: float
    lp_accrued_return: float
    total_lp_payout: float
    gross_profit_from_sales: float
    remaining_to_gps: float
    gp_share: float


class CommunityProformaResults(Model):
    phase1: Phase1Results
    phase2_per_home: Phase2PerHome
    phase2_totals: Phase2ProjectTotals
    waterfall: LPWaterfall


def calculate_community_proforma(inputs: CommunityProformaInputs) -> CommunityProformaResults:
    """
    Calculate the two-phase community development pro forma.

    Args:
        inputs: Horizontal, vertical and LP assumptions

    Returns:
        CommunityProformaResults with phase 1 sources & uses, phase 2 per-home
        and project economics, and the LP waterfall
    """
    p = inputs

    # Phase 1 - horizontal development
    land_acquisition = p.total_lots * p.land_value_per_lot
    horizontal_dev = p.total_lots * p.horizontal_dev_per_lot
    ae = p.total_lots * p.ae_per_lot
    carry_costs = p.total_lots * p.carry_costs_per_lot
    subtotal_hard = (
        land_acquisition
        + horizontal_dev
        + ae
        + p.amenity_package
        + p.monument_sign
        + carry_costs
    )
    stack = build_capital_stack(
        subtotal_hard=subtotal_hard,
        contingency_pct=p.contingency_pct,
        cm_fee=p.total_lots * p.cm_fee_per_lot,
        developer_fee=p.total_lots * p.developer_fee_per_lot,
        bank_interest_rate=p.bank_interest_rate,
        bank_ltc=p.bank_ltc,
    )
    lot_sales_proceeds = p.total_lots * p.lot_sales_price
    gross_margin = lot_sales_proceeds - stack.total_uses

    # Phase 2 - per-home economics
    lot_cost = p.lot_sales_price
    construction_interest = (
        p.vertical_cost
        * CONSTRUCTION_AVERAGE_DRAW
        * p.construction_interest_rate
        * (p.construction_months / 12)
    )
    selling_costs = p.home_sales_price * p.selling_costs_pct
    total_cost_per_home = (
        lot_cost + p.vertical_cost + construction_interest + selling_costs + p.seller_concession
    )
    per_home_profit = p.home_sales_price - total_cost_per_home
    per_home_margin = FinancialCalculations.safe_ratio(per_home_profit, p.home_sales_price)

    # Phase 2 - project totals
    total_revenue = p.total_lots * p.home_sales_price
    total_costs = p.total_lots * total_cost_per_home
    total_profit = total_revenue - total_costs

    # LP waterfall
    gp_rolled_equity = max(gross_margin, 0.0)
    total_lot_cost = p.total_lots * p.lot_sales_price
    fund_lp_capital = total_lot_cost - gp_rolled_equity
    lp_accrued_return = (
        fund_lp_capital * p.lp_accruing_return_rate * (p.lp_investment_period_months / 12)
    )
    remaining_to_gps = total_profit - lp_accrued_return

    if gross_margin < 0:
        logger.warning(
            f"Phase 1 lot sales (${lot_sales_proceeds:,.0f}) do not cover total uses "
            f"(${stack.total_uses:,.0f}); no GP equity rolls into phase 2"
        )

    return CommunityProformaResults(
        phase1=Phase1Results(
            land_acquisition=land_acquisition,
            horizontal_dev=horizontal_dev,
            ae=ae,
            carry_costs=carry_costs,
            subtotal_hard=stack.subtotal_hard,
            contingency=stack.contingency,
            total_hard_plus_contingency=stack.total_hard_plus_contingency,
            cm_fee=stack.cm_fee,
            developer_fee=stack.developer_fee,
            interest_reserve=stack.interest_reserve,
            total_uses=stack.total_uses,
            senior_debt=stack.senior_debt,
            lp_equity=stack.lp_equity,
            lot_sales_proceeds=lot_sales_proceeds,
            gross_margin=gross_margin,
        ),
        phase2_per_home=Phase2PerHome(
            lot_cost=lot_cost,
            construction_interest=construction_interest,
            selling_costs=selling_costs,
            total_cost_per_home=total_cost_per_home,
            per_home_profit=per_home_profit,
            per_home_margin=per_home_margin,
        ),
        phase2_totals=Phase2ProjectTotals(
            total_revenue=total_revenue,
            total_costs=total_costs,
            total_profit=total_profit,
        ),
        waterfall=LPWaterfall(
            gp_rolled_equity=gp_rolled_equity,
            total_lot_cost=total_lot_cost,
            fund_lp_capital=fund_lp_capital,
            lp_accrued_return=lp_accrued_return,
            total_lp_payout=fund_lp_capital + lp_accrued_return,
            gross_profit_from_sales=total_profit,
            remaining_to_gps=remaining_to_gps,
            gp_share=remaining_to_gps * p.gp_split_pct,
        ),
    )
