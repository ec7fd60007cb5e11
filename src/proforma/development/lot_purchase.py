# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Lot Purchase Pro Forma

Finished lots are bought from a developer in takedown tranches and a home is
built and sold on each. Construction interest is charged on the financed
share of per-home cost over the build duration (actual/360).
"""

from __future__ import annotations

import logging
from typing import List

import pandas as pd

from ..core.calculations import FinancialCalculations
from ..core.primitives import FloatBetween0And1, Model, PositiveFloat, PositiveInt

logger = logging.getLogger(__name__)


class LotPurchaseProformaInputs(Model):
    """Assumptions for a lot purchase (takedown) program."""

    total_lots: PositiveInt
    takedown_tranches: PositiveInt = 1
    lots_per_tranche: PositiveInt = 0
    lot_cost_per_lot: PositiveFloat
    deposit_per_lot: PositiveFloat = 0.0
    vertical_cost: PositiveFloat
    upgrades: PositiveFloat = 0.0
    municipality_soft_costs: PositiveFloat = 0.0
    fixed_per_house_fees: PositiveFloat = 0.0
    asp_per_home: PositiveFloat
    selling_cost_pct: FloatBetween0And1 = 0.0
    seller_concession: PositiveFloat = 0.0
    ltc_ratio: FloatBetween0And1
    interest_rate: PositiveFloat
    project_duration_days: PositiveFloat
    absorption_homes_per_month: PositiveFloat = 0.0


class TakedownTranche(Model):
    tranche: int
    lots: int
    total_cost: float
    deposit: float


class PerHomeEconomics(Model):
    total_cost_per_home: float
    selling_costs: float
    construction_interest: float
    total_all_in_cost: float
    profit_per_home: float
    margin_per_home: float


class ProjectSummary(Model):
    total_equity: float
    total_revenue: float
    total_costs: float
    total_profit: float
    project_roi: float
    equity_multiple: float
    sellout_months: int


class LotPurchaseProformaResults(Model):
    tranches: List[TakedownTranche]
    per_home: PerHomeEconomics
    project: ProjectSummary

    def tranches_df(self) -> pd.DataFrame:
        """Takedown schedule as a DataFrame indexed by tranche number."""
        df = pd.DataFrame([t.model_dump() for t in self.tranches])
        if df.empty:
            return df
        return df.set_index("tranche")


def build_takedown_schedule(inputs: LotPurchaseProformaInputs) -> List[TakedownTranche]:
    """
    Split the lot count into takedown tranches.

    Every tranche takes ``lots_per_tranche`` lots except the last, which takes
    whatever remains; a tranche never takes a negative number of lots.
    """
    p = inputs
    tranches = []
    for i in range(p.takedown_tranches):
        is_last = i == p.takedown_tranches - 1
        lots = p.total_lots - p.lots_per_tranche * i if is_last else p.lots_per_tranche
        lots = max(0, lots)
        tranches.append(
            TakedownTranche(
                tranche=i + 1,
                lots=lots,
                total_cost=lots * p.lot_cost_per_lot,
                deposit=lots * p.deposit_per_lot,
            )
        )
    scheduled = sum(t.lots for t in tranches)
    if scheduled != p.total_lots:
        logger.warning(
            f"Takedown schedule covers {scheduled} lots but the program has {p.total_lots}"
        )
    return tranches


def calculate_lot_purchase_proforma(
    inputs: LotPurchaseProformaInputs,
) -> LotPurchaseProformaResults:
    """
    Calculate the lot purchase pro forma.

    Args:
        inputs: Lot, construction, sales, financing and absorption assumptions

    Returns:
        LotPurchaseProformaResults with the takedown schedule, per-home
        economics and project summary
    """
    p = inputs
    calc = FinancialCalculations

    # Per-home economics
    total_cost_per_home = (
        p.lot_cost_per_lot
        + p.vertical_cost
        + p.upgrades
        + p.municipality_soft_costs
        + p.fixed_per_house_fees
    )
    selling_costs = p.asp_per_home * p.selling_cost_pct
    construction_interest = calc.simple_interest(
        total_cost_per_home * p.ltc_ratio, p.interest_rate, p.project_duration_days
    )
    total_all_in_cost = (
        total_cost_per_home + selling_costs + p.seller_concession + construction_interest
    )
    profit_per_home = p.asp_per_home - total_all_in_cost
    margin_per_home = calc.safe_ratio(profit_per_home, p.asp_per_home)

    # Project totals
    total_equity = p.total_lots * total_cost_per_home * (1 - p.ltc_ratio)
    total_revenue = p.total_lots * p.asp_per_home
    total_costs = p.total_lots * total_all_in_cost
    total_profit = total_revenue - total_costs

    return LotPurchaseProformaResults(
        tranches=build_takedown_schedule(p),
        per_home=PerHomeEconomics(
            total_cost_per_home=total_cost_per_home,
            selling_costs=selling_costs,
            construction_interest=construction_interest,
            total_all_in_cost=total_all_in_cost,
            profit_per_home=profit_per_home,
            margin_per_home=margin_per_home,
        ),
        project=ProjectSummary(
            total_equity=total_equity,
            total_revenue=total_revenue,
            total_costs=total_costs,
            total_profit=total_profit,
            project_roi=calc.safe_ratio(total_profit, total_equity),
            equity_multiple=calc.equity_multiple(total_equity, total_profit),
            sellout_months=calc.ceil_div(p.total_lots, p.absorption_homes_per_month),
        ),
    )
