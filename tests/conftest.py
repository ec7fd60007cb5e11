# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Shared fixtures for proforma tests.

Fixtures build the canonical inputs used across test modules so that expected
values documented in one place stay consistent everywhere.
"""

from __future__ import annotations

from datetime import date

import pytest

from proforma.deal import DealInputs, ScatteredLotInputs, WaterfallInvestor


# Deal sheet
@pytest.fixture
def base_deal_inputs() -> DealInputs:
    """Reference deal: $339,400 total project cost at 75% LTC over 8 months."""
    return DealInputs(
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


# Scattered lot
@pytest.fixture
def scattered_lot_inputs() -> ScatteredLotInputs:
    """$60K lot, $200K sticks & bricks, $400K ASP, organization defaults elsewhere."""
    return ScatteredLotInputs(
        address="104 Palmetto Ln",
        city="Greenville",
        state="SC",
        zip="29601",
        lot_purchase_price=60_000,
        sticks_bricks=200_000,
        asset_sales_price=400_000,
    )


# Waterfall investors, all contributed 2025-01-01
CONTRIBUTION_DATE = date(2025, 1, 1)
DISTRIBUTION_DATE = date(2026, 1, 1)


def make_investor(
    investment_id: str,
    called_amount: float,
    is_gp: bool = False,
    **priors,
) -> WaterfallInvestor:
    """Create a waterfall investor contributed on 2025-01-01."""
    return WaterfallInvestor(
        investment_id=investment_id,
        investor_name=investment_id.upper(),
        is_gp=is_gp,
        called_amount=called_amount,
        contribution_date=CONTRIBUTION_DATE,
        **priors,
    )


@pytest.fixture
def lp_a() -> WaterfallInvestor:
    return make_investor("lp-a", 500_000)


@pytest.fixture
def lp_b() -> WaterfallInvestor:
    return make_investor("lp-b", 500_000)


@pytest.fixture
def gp_investor() -> WaterfallInvestor:
    return make_investor("gp-1", 100_000, is_gp=True)


@pytest.fixture
def investor_factory():
    """Factory for waterfall investors contributed on 2025-01-01."""
    return make_investor
