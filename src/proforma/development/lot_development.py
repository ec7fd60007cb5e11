# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Lot Development Pro Forma

Raw land is entitled and developed into finished lots that are sold to
builders. The model sizes the capital stack, computes returns on LP equity
and derives an absorption schedule with the breakeven lot count.
"""

from __future__ import annotations

import logging

from ..core.calculations import FinancialCalculations
from ..core.primitives import FloatBetween0And1, Model, PositiveFloat, PositiveInt
from ._sources_uses import build_capital_stack

logger = logging.getLogger(__name__)


class LotDevProformaInputs(Model):
    """Assumptions for a lot development."""

    total_lots: PositiveInt
    phases: PositiveInt = 1
    lots_per_phase: PositiveInt = 0
    land_acquisition_cost: PositiveFloat
    horizontal_dev_per_lot: PositiveFloat
    entitlement_costs: PositiveFloat = 0.0
    amenity_costs: PositiveFloat = 0.0
    carry_costs_per_lot: PositiveFloat = 0.0
    contingency_pct: FloatBetween0And1 = 0.0
    developer_fee_per_lot: PositiveFloat = 0.0
    cm_fee_per_lot: PositiveFloat = 0.0
    lot_sales_price: PositiveFloat
    bank_ltc: FloatBetween0And1
    bank_interest_rate: PositiveFloat
    lp_pref_return: PositiveFloat = 0.0
    absorption_lots_per_month: PositiveFloat = 0.0


class LotDevSourcesUses(Model):
    horizontal_dev: float
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


class LotDevReturns(Model):
    total_revenue: float
    gross_profit: float
    profit_margin: float
    equity_multiple: float


class LotDevAbsorption(Model):
    absorption_months: int
    breakeven_lots: int
    breakeven_month: int


class LotDevProformaResults(Model):
    sources_uses: LotDevSourcesUses
    returns: LotDevReturns
    absorption: LotDevAbsorption


def calculate_lot_development_proforma(inputs: LotDevProformaInputs) -> LotDevProformaResults:
    """
    Calculate the lot development pro forma.

    Args:
        inputs: Land, development, financing and absorption assumptions

    Returns:
        LotDevProformaResults with sources & uses, returns and absorption
    """
    p = inputs
    calc = FinancialCalculations

    # Sources & uses
    horizontal_dev = p.total_lots * p.horizontal_dev_per_lot
    carry_costs = p.total_lots * p.carry_costs_per_lot
    subtotal_hard = (
        p.land_acquisition_cost
        + horizontal_dev
        + p.entitlement_costs
        + p.amenity_costs
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

    # Returns
    total_revenue = p.total_lots * p.lot_sales_price
    gross_profit = total_revenue - stack.total_uses
    profit_margin = calc.safe_ratio(gross_profit, total_revenue)
    equity_multiple = calc.equity_multiple(stack.lp_equity, gross_profit)

    # Absorption schedule
    absorption_months = calc.ceil_div(p.total_lots, p.absorption_lots_per_month)
    breakeven_lots = (
        calc.ceil_div(stack.total_uses, p.lot_sales_price) if stack.total_uses > 0 else 0
    )
    breakeven_month = calc.ceil_div(breakeven_lots, p.absorption_lots_per_month)

    if breakeven_lots > p.total_lots:
        logger.warning(
            f"Breakeven requires {breakeven_lots} lot sales but only "
            f"{p.total_lots} lots are planned"
        )

    return LotDevProformaResults(
        sources_uses=LotDevSourcesUses(
            horizontal_dev=horizontal_dev,
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
        ),
        returns=LotDevReturns(
            total_revenue=total_revenue,
            gross_profit=gross_profit,
            profit_margin=profit_margin,
            equity_multiple=equity_multiple,
        ),
        absorption=LotDevAbsorption(
            absorption_months=absorption_months,
            breakeven_lots=breakeven_lots,
            breakeven_month=breakeven_month,
        ),
    )
