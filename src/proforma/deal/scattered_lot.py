# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Scattered Lot Deal Analyzer

Pure computation engine for single scattered-lot deals: one lot, one house,
one sale. Community developments, lot developments and lot purchase
agreements are handled by ``proforma.development``.

Calculation blocks, in order:

1. Total lot basis (price plus closing, commission, diligence, other)
2. Contract cost (sticks & bricks, site-specific, soft costs, builder fee)
3. Upgrades
4. Municipality soft costs
5. Additional site work
6. Fixed per-house costs (utilities prorated by month of duration)
7. Total project cost
8. Financing carry on an actual/360 basis (debt interest + cost of equity)
9. Sale proceeds, net profit, margin and land cost ratings
10. Breakeven sales prices

Cost vintage: September 2025 DM budget (see ``ScatteredLotSettings``).
"""

from __future__ import annotations

import logging
import math
from typing import Dict, Literal, Optional

import pandas as pd
from pydantic import Field, field_validator

from ..core.calculations import FinancialCalculations
from ..core.primitives import (
    LandCostRatingEnum,
    Model,
    NPMRatingEnum,
    PositiveFloat,
    ScatteredLotSettings,
)

logger = logging.getLogger(__name__)


# =============================================================================
# INPUTS
# =============================================================================


class ScatteredLotInputs(Model):
    """
    Inputs of a scattered-lot deal sheet.

    Optional cost and financing fields left as None fall back to
    ``ScatteredLotSettings`` defaults at calculation time, so the same inputs
    can be re-run against updated organization defaults.
    """

    # Property
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[Literal["SC", "NC"]] = None
    zip: Optional[str] = None
    municipality: Optional[str] = None
    floor_plan_name: Optional[str] = None
    heated_sqft: Optional[float] = Field(default=None, ge=500, le=5000)

    # Lot basis
    lot_purchase_price: float = Field(..., gt=0, description="Lot purchase price")
    closing_costs: PositiveFloat = 0.0
    acquisition_commission: PositiveFloat = 0.0
    due_diligence_costs: PositiveFloat = 0.0
    other_lot_costs: PositiveFloat = 0.0

    # Construction
    sticks_bricks: float = Field(..., gt=0, description="Sticks & bricks contract cost")
    site_specific: Optional[PositiveFloat] = None
    soft_costs: Optional[PositiveFloat] = None

    # Upgrades
    exterior_upgrades: PositiveFloat = 0.0
    interior_package: PositiveFloat = 0.0
    misc_options: PositiveFloat = 0.0

    # Municipality & site
    municipality_soft_costs: PositiveFloat = 0.0
    additional_site_work: PositiveFloat = 0.0

    # Financing
    project_duration_days: Optional[int] = Field(default=None, ge=30, le=730)
    interest_rate: Optional[float] = Field(default=None, ge=0, le=0.25)
    cost_of_capital_rate: Optional[float] = Field(default=None, ge=0, le=0.30)
    ltc_ratio: Optional[float] = Field(default=None, ge=0, le=1)

    # Sales
    asset_sales_price: float = Field(..., gt=0, description="Anticipated sales price")
    selling_cost_rate: Optional[float] = Field(default=None, ge=0, le=0.20)
    selling_concessions: PositiveFloat = 0.0

    @field_validator("zip")
    @classmethod
    def validate_zip(cls, v: Optional[str]) -> Optional[str]:
        """ZIP codes are five digits."""
        if v is not None and not (len(v) == 5 and v.isdigit()):
            raise ValueError(f"Must be 5-digit ZIP, got {v!r}")
        return v


# =============================================================================
# RESULTS
# =============================================================================


class FixedPerHouseCosts(Model):
    """Fixed per-house cost block of a scattered-lot deal."""

    builder_warranty: float
    builders_risk: float
    po_fee: float
    pm_fee: float
    am_fee: float
    utility_charges: float
    contingency: float

    @property
    def total(self) -> float:
        return sum(self.model_dump().values())


class ScatteredLotResults(Model):
    """Full cost stack, financing carry and profitability of a scattered-lot deal."""

    # Lot
    total_lot_basis: float

    # Contract
    sticks_bricks: float
    site_specific: float
    soft_costs: float
    builder_fee: float
    total_contract_cost: float

    # Upgrades
    exterior_upgrades: float
    interior_package: float
    misc_options: float
    total_upgrade_cost: float

    # Municipality & site
    total_municipality_soft_costs: float
    total_additional_site_work: float

    # Fixed per-house
    fixed_per_house: FixedPerHouseCosts
    total_fixed_per_house: float

    total_project_cost: float

    # Financing
    loan_amount: float
    equity_required: float
    interest: float
    cost_of_capital: float
    total_carry: float

    # Revenue
    asp: float
    selling_costs: float
    selling_concessions: float
    net_sales_proceeds: float

    # Bottom line
    total_all_in_cost: float
    net_profit: float
    net_profit_margin: float
    npm_rating: NPMRatingEnum
    land_cost_ratio: float
    land_cost_rating: LandCostRatingEnum

    # Breakeven
    breakeven_asp: float
    minimum_asp_5pct: float

    # Assumptions actually applied
    duration_days: int
    ltc_ratio: float
    interest_rate: float
    cost_of_capital_rate: float
    selling_cost_rate: float


# =============================================================================
# RATINGS
# =============================================================================


def rate_npm(
    npm: float, settings: Optional[ScatteredLotSettings] = None
) -> NPMRatingEnum:
    """Rate a net profit margin against the organization thresholds."""
    s = settings or ScatteredLotSettings()
    if npm >= s.npm_strong:
        return NPMRatingEnum.STRONG
    if npm >= s.npm_good:
        return NPMRatingEnum.GOOD
    if npm >= s.npm_marginal:
        return NPMRatingEnum.MARGINAL
    return NPMRatingEnum.NO_GO


def rate_land_cost(
    ratio: float, settings: Optional[ScatteredLotSettings] = None
) -> LandCostRatingEnum:
    """Rate a land cost ratio (lot basis / ASP); lower is better."""
    s = settings or ScatteredLotSettings()
    if ratio < s.land_cost_strong:
        return LandCostRatingEnum.STRONG
    if ratio < s.land_cost_acceptable:
        return LandCostRatingEnum.ACCEPTABLE
    if ratio < s.land_cost_caution:
        return LandCostRatingEnum.CAUTION
    return LandCostRatingEnum.OVERPAYING


# =============================================================================
# CORE CALCULATION
# =============================================================================


def _or_default(value, default):
    return default if value is None else value


def calculate_scattered_lot_deal(
    inputs: ScatteredLotInputs, settings: Optional[ScatteredLotSettings] = None
) -> ScatteredLotResults:
    """
    Calculate a scattered-lot deal sheet.

    Args:
        inputs: Lot, construction, financing and sales inputs
        settings: Organization defaults for omitted inputs; built-in defaults when None

    Returns:
        ScatteredLotResults with every intermediate block and the ratings
    """
    s = settings or ScatteredLotSettings()
    calc = FinancialCalculations

    # 1. Total lot basis
    total_lot_basis = (
        inputs.lot_purchase_price
        + inputs.closing_costs
        + inputs.acquisition_commission
        + inputs.due_diligence_costs
        + inputs.other_lot_costs
    )

    # 2. Contract cost
    sticks_bricks = inputs.sticks_bricks
    site_specific = _or_default(inputs.site_specific, s.site_specific)
    soft_costs = _or_default(inputs.soft_costs, s.soft_costs)
    builder_fee = s.builder_fee
    total_contract_cost = sticks_bricks + site_specific + soft_costs + builder_fee

    # 3. Upgrades
    total_upgrade_cost = (
        inputs.exterior_upgrades + inputs.interior_package + inputs.misc_options
    )

    # 4-5. Municipality soft costs and additional site work
    total_municipality_soft_costs = inputs.municipality_soft_costs
    total_additional_site_work = inputs.additional_site_work

    # 6. Fixed per-house costs; utilities billed per started month
    duration_days = _or_default(inputs.project_duration_days, s.project_duration_days)
    fixed_per_house = FixedPerHouseCosts(
        builder_warranty=s.builder_warranty,
        builders_risk=s.builders_risk,
        po_fee=s.po_fee,
        pm_fee=s.pm_fee,
        am_fee=s.am_fee,
        utility_charges=math.ceil(duration_days / 30) * s.utility_rate_per_month,
        contingency=s.contingency,
    )
    total_fixed_per_house = fixed_per_house.total

    # 7. Total project cost
    total_project_cost = (
        total_lot_basis
        + total_contract_cost
        + total_upgrade_cost
        + total_municipality_soft_costs
        + total_additional_site_work
        + total_fixed_per_house
    )

    # 8. Financing (actual/360)
    ltc_ratio = _or_default(inputs.ltc_ratio, s.ltc_ratio)
    interest_rate = _or_default(inputs.interest_rate, s.interest_rate)
    cost_of_capital_rate = _or_default(inputs.cost_of_capital_rate, s.cost_of_capital_rate)

    loan_amount = total_project_cost * ltc_ratio
    equity_required = total_project_cost - loan_amount
    interest = calc.simple_interest(
        loan_amount, interest_rate, duration_days, s.day_count_basis
    )
    cost_of_capital = calc.simple_interest(
        equity_required, cost_of_capital_rate, duration_days, s.day_count_basis
    )
    total_carry = interest + cost_of_capital

    # 9. Results
    asp = inputs.asset_sales_price
    selling_cost_rate = _or_default(inputs.selling_cost_rate, s.selling_cost_rate)
    selling_costs = asp * selling_cost_rate
    net_sales_proceeds = asp - selling_costs - inputs.selling_concessions

    total_all_in_cost = total_project_cost + total_carry
    net_profit = net_sales_proceeds - total_all_in_cost
    net_profit_margin = calc.safe_ratio(net_profit, asp)
    land_cost_ratio = calc.safe_ratio(total_lot_basis, asp)

    # 10. Breakeven
    breakeven_asp = total_all_in_cost / (1 - selling_cost_rate)
    minimum_asp_5pct = total_all_in_cost / (1 - selling_cost_rate - s.minimum_margin)

    logger.debug(
        f"Scattered lot: all-in ${total_all_in_cost:,.0f}, net profit ${net_profit:,.0f} "
        f"({net_profit_margin:.1%}), land ratio {land_cost_ratio:.1%}"
    )

    return ScatteredLotResults(
        total_lot_basis=total_lot_basis,
        sticks_bricks=sticks_bricks,
        site_specific=site_specific,
        soft_costs=soft_costs,
        builder_fee=builder_fee,
        total_contract_cost=total_contract_cost,
        exterior_upgrades=inputs.exterior_upgrades,
        interior_package=inputs.interior_package,
        misc_options=inputs.misc_options,
        total_upgrade_cost=total_upgrade_cost,
        total_municipality_soft_costs=total_municipality_soft_costs,
        total_additional_site_work=total_additional_site_work,
        fixed_per_house=fixed_per_house,
        total_fixed_per_house=total_fixed_per_house,
        total_project_cost=total_project_cost,
        loan_amount=loan_amount,
        equity_required=equity_required,
        interest=interest,
        cost_of_capital=cost_of_capital,
        total_carry=total_carry,
        asp=asp,
        selling_costs=selling_costs,
        selling_concessions=inputs.selling_concessions,
        net_sales_proceeds=net_sales_proceeds,
        total_all_in_cost=total_all_in_cost,
        net_profit=net_profit,
        net_profit_margin=net_profit_margin,
        npm_rating=rate_npm(net_profit_margin, s),
        land_cost_ratio=land_cost_ratio,
        land_cost_rating=rate_land_cost(land_cost_ratio, s),
        breakeven_asp=breakeven_asp,
        minimum_asp_5pct=minimum_asp_5pct,
        duration_days=duration_days,
        ltc_ratio=ltc_ratio,
        interest_rate=interest_rate,
        cost_of_capital_rate=cost_of_capital_rate,
        selling_cost_rate=selling_cost_rate,
    )


# =============================================================================
# SENSITIVITY ANALYSIS
# =============================================================================


class SensitivityScenario(Model):
    """Bottom line of one stressed scenario."""

    net_profit: float
    net_profit_margin: float
    npm_rating: NPMRatingEnum
    total_all_in_cost: float
    asp: float


class SensitivityResults(Model):
    """Base case plus five standard stress scenarios."""

    base: SensitivityScenario
    best_case: SensitivityScenario
    worst_case: SensitivityScenario
    cost_overrun_10: SensitivityScenario
    asp_decline_10: SensitivityScenario
    delay_30_days: SensitivityScenario

    def to_dataframe(self) -> pd.DataFrame:
        """One row per scenario, indexed by scenario name."""
        rows: Dict[str, dict] = {
            name: getattr(self, name).model_dump(mode="json")
            for name in type(self).model_fields
        }
        df = pd.DataFrame.from_dict(rows, orient="index")
        df.index.name = "scenario"
        return df


# (cost multiplier on sticks & bricks, ASP multiplier, extra days)
SENSITIVITY_SCENARIOS: Dict[str, tuple[float, float, int]] = {
    "base": (1.0, 1.0, 0),
    "best_case": (0.95, 1.05, 0),
    "worst_case": (1.10, 0.90, 30),
    "cost_overrun_10": (1.10, 1.0, 0),
    "asp_decline_10": (1.0, 0.90, 0),
    "delay_30_days": (1.0, 1.0, 30),
}


def _run_scenario(
    base: ScatteredLotInputs,
    settings: ScatteredLotSettings,
    cost_multiplier: float,
    asp_multiplier: float,
    extra_days: int,
) -> SensitivityScenario:
    # model_copy skips validation so stressed durations may exceed the form limits
    adjusted = base.model_copy(
        update={
            "sticks_bricks": base.sticks_bricks * cost_multiplier,
            "asset_sales_price": base.asset_sales_price * asp_multiplier,
            "project_duration_days": _or_default(
                base.project_duration_days, settings.project_duration_days
            )
            + extra_days,
        }
    )
    results = calculate_scattered_lot_deal(adjusted, settings)
    return SensitivityScenario(
        net_profit=results.net_profit,
        net_profit_margin=results.net_profit_margin,
        npm_rating=results.npm_rating,
        total_all_in_cost=results.total_all_in_cost,
        asp=results.asp,
    )


def run_sensitivity_analysis(
    inputs: ScatteredLotInputs, settings: Optional[ScatteredLotSettings] = None
) -> SensitivityResults:
    """
    Re-run a scattered-lot deal under the standard stress scenarios.

    Scenarios: best case (cost -5%, ASP +5%), worst case (cost +10%, ASP -10%,
    30-day delay), a 10% cost overrun, a 10% ASP decline and a 30-day delay.
    Cost stress applies to sticks & bricks only.
    """
    s = settings or ScatteredLotSettings()
    scenarios = {
        name: _run_scenario(inputs, s, *params)
        for name, params in SENSITIVITY_SCENARIOS.items()
    }
    return SensitivityResults(**scenarios)
