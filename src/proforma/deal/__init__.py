# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Proforma Deal Models
Public API for the proforma.deal subpackage.

Deal-level calculators for a single home or a single distribution: the
deal-sheet profitability model, the scattered-lot analyzer with its
sensitivity scenarios, per-house fee schedules and the investor waterfall.
"""

from .calculator import DealInputs, DealOutputs, calculate_deal, classify_verdict
from .fees import (
    DealFees,
    FixedPerHouseFees,
    compute_builder_fee,
    compute_contingency,
)
from .scattered_lot import (
    ScatteredLotInputs,
    ScatteredLotResults,
    SensitivityResults,
    SensitivityScenario,
    calculate_scattered_lot_deal,
    rate_land_cost,
    rate_npm,
    run_sensitivity_analysis,
)
from .waterfall import (
    WaterfallCalculator,
    WaterfallInput,
    WaterfallInvestor,
    WaterfallOutput,
    WaterfallTierConfig,
    calculate_waterfall,
    standard_tiers,
)

__all__ = [
    # Deal sheet
    "DealInputs",
    "DealOutputs",
    "calculate_deal",
    "classify_verdict",
    # Fees
    "DealFees",
    "FixedPerHouseFees",
    "compute_builder_fee",
    "compute_contingency",
    # Scattered lot
    "ScatteredLotInputs",
    "ScatteredLotResults",
    "SensitivityResults",
    "SensitivityScenario",
    "calculate_scattered_lot_deal",
    "rate_land_cost",
    "rate_npm",
    "run_sensitivity_analysis",
    # Waterfall
    "WaterfallCalculator",
    "WaterfallInput",
    "WaterfallInvestor",
    "WaterfallOutput",
    "WaterfallTierConfig",
    "calculate_waterfall",
    "standard_tiers",
]
