#!/usr/bin/env python3
# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Scattered Lot Underwriting Example

Underwrites a single spec home on a scattered lot end to end:

1. **Deal sheet**: quick go/no-go on annualized ROI with the default fee schedule
2. **Scattered-lot analyzer**: full cost stack, actual/360 carry, margin and
   land ratio ratings, breakeven sales prices
3. **Sensitivity**: best/worst case, cost overrun, ASP decline and delay
4. **Distribution**: the sale proceeds run through a GP/LP waterfall
5. **Export**: the waterfall summary written to CSV

### Deal Assumptions

- Lot: $60K in Greenville, SC, plus $2K closing costs
- Build: $200K sticks & bricks, $12K of upgrades
- Sale: $400K ASP, 8.5% selling costs
- Capital: $50K GP and $450K LP commitments contributed 2025-01-01
"""

import logging
import sys
from datetime import date
from pathlib import Path

from proforma.deal import (
    DealInputs,
    ScatteredLotInputs,
    WaterfallInput,
    WaterfallInvestor,
    calculate_deal,
    calculate_scattered_lot_deal,
    calculate_waterfall,
    run_sensitivity_analysis,
    standard_tiers,
)
from proforma.reporting import export_to_csv, format_currency, format_percent


def underwrite_deal_sheet() -> None:
    result = calculate_deal(
        DealInputs(
            purchase_price=62_000,
            base_build_cost=200_000,
            upgrade_package=12_000,
            asp=400_000,
            duration_months=4,
            interest_rate=0.10,
            ltc_ratio=0.85,
        )
    )
    print("DEAL SHEET")
    print(f"  Total project cost: {format_currency(result.total_project_cost)}")
    print(f"  Net profit:         {format_currency(result.net_profit)}")
    print(f"  Annualized ROI:     {format_percent(result.annualized_roi)}")
    print(f"  Verdict:            {result.verdict.value}")
    print()


def underwrite_scattered_lot() -> float:
    inputs = ScatteredLotInputs(
        address="104 Palmetto Ln",
        city="Greenville",
        state="SC",
        zip="29601",
        lot_purchase_price=60_000,
        closing_costs=2_000,
        sticks_bricks=200_000,
        interior_package=12_000,
        asset_sales_price=400_000,
    )
    result = calculate_scattered_lot_deal(inputs)
    print("SCATTERED LOT")
    print(f"  All-in cost:     {format_currency(result.total_all_in_cost)}")
    print(f"  Net profit:      {format_currency(result.net_profit)}")
    print(f"  Margin:          {format_percent(result.net_profit_margin)} ({result.npm_rating.value})")
    print(f"  Land ratio:      {format_percent(result.land_cost_ratio)} ({result.land_cost_rating.value})")
    print(f"  Breakeven ASP:   {format_currency(result.breakeven_asp)}")
    print()

    print("SENSITIVITY")
    print(run_sensitivity_analysis(inputs).to_dataframe()[["net_profit", "npm_rating"]])
    print()
    return result.net_sales_proceeds - result.loan_amount - result.interest


def distribute(cash: float, output_dir: Path) -> Path:
    investors = [
        WaterfallInvestor(
            investment_id="gp-1",
            investor_name="Sponsor GP",
            is_gp=True,
            called_amount=5_000,
            contribution_date=date(2025, 1, 1),
        ),
        WaterfallInvestor(
            investment_id="lp-1",
            investor_name="Palmetto Fund I",
            called_amount=45_000,
            contribution_date=date(2025, 1, 1),
        ),
    ]
    result = calculate_waterfall(
        WaterfallInput(
            distribution_date=date(2025, 5, 1),
            total_distributable=round(cash, 2),
            investors=investors,
            tiers=standard_tiers(),
        )
    )
    print("WATERFALL")
    print(result.investors_df()[["return_of_capital", "preferred_return", "catch_up", "profit_split", "total"]])
    print(f"  Undistributed: {format_currency(result.remaining_undistributed)}")
    print()

    return export_to_csv(
        result.investors,
        [
            ("Investor", "investor_name"),
            ("Return of Capital", "return_of_capital"),
            ("Preferred Return", "preferred_return"),
            ("Catch-Up", "catch_up"),
            ("Profit Split", "profit_split"),
            ("Total", "total"),
        ],
        output_dir / "distribution",
    )


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    output_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else Path.cwd()

    underwrite_deal_sheet()
    cash = underwrite_scattered_lot()
    path = distribute(cash, output_dir)
    print(f"Distribution summary written to {path}")


if __name__ == "__main__":
    main()
