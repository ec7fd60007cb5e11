# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Deal Sheet Calculator

Pure calculation of deal-sheet profitability: a flat set of acquisition,
construction and financing assumptions goes in, cost breakdown, loan sizing,
profit, margins, equity returns and a verdict come out. No side effects;
callers persist the outputs next to the inputs.

Example:
    ```python
    inputs = DealInputs(
        purchase_price=80_000,
        site_work=15_000,
        base_build_cost=180_000,
        upgrade_package=25_000,
        asp=450_000,
        concessions=5_000,
        duration_months=8,
        interest_rate=0.10,
        ltc_ratio=0.75,
    )
    result = calculate_deal(inputs)
    result.verdict  # DealVerdictEnum.STRONG_BUY
    ```
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

from pydantic import Field

from ..core.calculations import FinancialCalculations
from ..core.primitives import (
    DealSettings,
    DealVerdictEnum,
    FloatBetween0And1,
    Model,
    PositiveFloat,
)
from .fees import DealFees

logger = logging.getLogger(__name__)


class DealInputs(Model):
    """Acquisition, construction and financing assumptions for one deal sheet."""

    # Acquisition & construction
    purchase_price: PositiveFloat = Field(..., description="Land purchase price")
    site_work: PositiveFloat = Field(default=0.0, description="Site work budget")
    base_build_cost: PositiveFloat = Field(..., description="Base build cost")
    upgrade_package: PositiveFloat = Field(default=0.0, description="Upgrade package")

    # Revenue
    asp: PositiveFloat = Field(..., description="Anticipated sales price")
    concessions: PositiveFloat = Field(default=0.0, description="Seller concessions")

    # Financing
    duration_months: PositiveFloat = Field(..., description="Project duration in months")
    interest_rate: PositiveFloat = Field(
        ..., description="Annual interest rate as decimal (0.10 for 10%)"
    )
    ltc_ratio: FloatBetween0And1 = Field(
        ..., description="Loan-to-cost ratio as decimal (0.75 for 75%)"
    )


class DealOutputs(Model):
    """Derived profitability metrics of a deal sheet."""

    # Cost breakdown
    land_cost: float
    hard_costs: float
    fixed_costs: float
    total_project_cost: float

    # Financing
    loan_amount: float
    equity_required: float
    interest_expense: float

    # Revenue
    gross_revenue: float
    net_revenue: float

    # Profit
    gross_profit: float
    net_profit: float

    # Margins & returns
    gross_margin: float
    net_margin: float
    roi: float
    annualized_roi: float

    # Verdict
    verdict: DealVerdictEnum
    verdict_color: str


def classify_verdict(
    annualized_roi: float, settings: Optional[DealSettings] = None
) -> tuple[DealVerdictEnum, str]:
    """
    Map annualized ROI to a verdict and its display color.

    Args:
        annualized_roi: Annualized return on equity as decimal
        settings: Thresholds and colors; organization defaults when None

    Returns:
        Tuple of (verdict, hex color)
    """
    settings = settings or DealSettings()
    if annualized_roi >= settings.strong_buy_threshold:
        verdict = DealVerdictEnum.STRONG_BUY
    elif annualized_roi >= settings.buy_threshold:
        verdict = DealVerdictEnum.BUY
    elif annualized_roi >= settings.hold_threshold:
        verdict = DealVerdictEnum.HOLD
    else:
        verdict = DealVerdictEnum.PASS
    return verdict, settings.verdict_colors[verdict]


def calculate_deal(
    inputs: DealInputs,
    fees: Optional[Union[DealFees, Mapping[str, Any]]] = None,
    settings: Optional[DealSettings] = None,
) -> DealOutputs:
    """
    Calculate deal-sheet profitability.

    Args:
        inputs: Deal assumptions
        fees: Fixed-cost schedule, or a partial mapping of overrides applied on
            top of the defaults (e.g. ``{"builder_fee": 20_000}``)
        settings: Verdict thresholds; organization defaults when None

    Returns:
        DealOutputs with costs, financing, profit, margins, ROI and verdict
    """
    f = DealFees.with_overrides(fees)
    calc = FinancialCalculations

    # Costs
    land_cost = inputs.purchase_price
    hard_costs = inputs.site_work + inputs.base_build_cost + inputs.upgrade_package
    fixed_costs = f.total
    total_project_cost = land_cost + hard_costs + fixed_costs

    # Financing
    loan_amount = total_project_cost * inputs.ltc_ratio
    equity_required = total_project_cost - loan_amount
    interest_expense = loan_amount * inputs.interest_rate * (inputs.duration_months / 12)

    # Revenue
    gross_revenue = inputs.asp
    net_revenue = gross_revenue - inputs.concessions

    # Profit
    gross_profit = net_revenue - total_project_cost
    net_profit = gross_profit - interest_expense

    # Margins
    gross_margin = calc.safe_ratio(gross_profit, gross_revenue)
    net_margin = calc.safe_ratio(net_profit, gross_revenue)

    # ROI on equity
    roi = calc.safe_ratio(net_profit, equity_required)
    annualized_roi = calc.annualize(roi, inputs.duration_months)

    verdict, verdict_color = classify_verdict(annualized_roi, settings)

    logger.debug(
        f"Deal sheet: TPC ${total_project_cost:,.0f}, net profit ${net_profit:,.0f}, "
        f"annualized ROI {annualized_roi:.1%} -> {verdict.value}"
    )

    return DealOutputs(
        land_cost=land_cost,
        hard_costs=hard_costs,
        fixed_costs=fixed_costs,
        total_project_cost=total_project_cost,
        loan_amount=loan_amount,
        equity_required=equity_required,
        interest_expense=interest_expense,
        gross_revenue=gross_revenue,
        net_revenue=net_revenue,
        gross_profit=gross_profit,
        net_profit=net_profit,
        gross_margin=gross_margin,
        net_margin=net_margin,
        roi=roi,
        annualized_roi=annualized_roi,
        verdict=verdict,
        verdict_color=verdict_color,
    )
