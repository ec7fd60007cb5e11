# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import Dict

from pydantic import Field, model_validator

from .enums import DealVerdictEnum
from .model import Model
from .types import FloatBetween0And1, PositiveFloat, PositiveInt


class DealSettings(Model):
    """
    Verdict thresholds and display colors for the deal-sheet calculator.

    A deal's verdict is the first threshold its annualized ROI meets, checked
    from ``strong_buy_threshold`` down. Anything below ``hold_threshold``
    is a Pass.

    Usage Examples:
        # Organization defaults
        settings = DealSettings()

        # Tighter underwriting
        settings = DealSettings(strong_buy_threshold=0.30, buy_threshold=0.20)
    """

    strong_buy_threshold: float = Field(
        default=0.25, description="Minimum annualized ROI for a Strong Buy."
    )
    buy_threshold: float = Field(
        default=0.15, description="Minimum annualized ROI for a Buy."
    )
    hold_threshold: float = Field(
        default=0.08, description="Minimum annualized ROI for a Hold."
    )
    verdict_colors: Dict[DealVerdictEnum, str] = Field(
        default_factory=lambda: {
            DealVerdictEnum.STRONG_BUY: "#4A7A5B",
            DealVerdictEnum.BUY: "#48BB78",
            DealVerdictEnum.HOLD: "#C4841D",
            DealVerdictEnum.PASS: "#B84040",
        },
        description="Hex color shown next to each verdict.",
    )

    @model_validator(mode="after")
    def validate_threshold_order(self) -> "DealSettings":
        """Thresholds must descend from Strong Buy to Hold."""
        if not (
            self.strong_buy_threshold >= self.buy_threshold >= self.hold_threshold
        ):
            raise ValueError(
                "Verdict thresholds must satisfy strong_buy >= buy >= hold, got "
                f"{self.strong_buy_threshold}, {self.buy_threshold}, {self.hold_threshold}"
            )
        missing = set(DealVerdictEnum) - set(self.verdict_colors)
        if missing:
            raise ValueError(
                f"verdict_colors is missing entries for: {sorted(v.value for v in missing)}"
            )
        return self


class ScatteredLotSettings(Model):
    """
    Organization defaults for scattered-lot deals (one lot, one house, one sale).

    Cost vintage: September 2025 DM budget. Contingency is a flat amount,
    never a percentage.
    """

    # Contract defaults
    site_specific: PositiveFloat = 10_875.0
    soft_costs: PositiveFloat = 2_650.0
    builder_fee: PositiveFloat = 15_000.0

    # Fixed per-house costs
    builder_warranty: PositiveFloat = 5_000.0
    builders_risk: PositiveFloat = 1_500.0
    po_fee: PositiveFloat = 3_000.0
    pm_fee: PositiveFloat = 3_500.0
    am_fee: PositiveFloat = 5_000.0
    contingency: PositiveFloat = 11_000.0
    utility_rate_per_month: PositiveFloat = 350.0

    # Financing defaults (actual/360)
    ltc_ratio: FloatBetween0And1 = 0.85
    interest_rate: FloatBetween0And1 = 0.10
    cost_of_capital_rate: FloatBetween0And1 = 0.16
    project_duration_days: PositiveInt = 120
    day_count_basis: PositiveInt = 360

    # Sales defaults
    selling_cost_rate: FloatBetween0And1 = 0.085

    # Net profit margin thresholds
    npm_strong: float = 0.10
    npm_good: float = 0.07
    npm_marginal: float = 0.05

    # Land cost ratio thresholds
    land_cost_strong: float = 0.20
    land_cost_acceptable: float = 0.25
    land_cost_caution: float = 0.30

    # Target margin used for the minimum-ASP breakeven
    minimum_margin: float = 0.05


class GlobalSettings(Model):
    """Global settings

    Groups the configurable defaults of every engine. Engines take the
    relevant section (``settings.deal``, ``settings.scattered_lot``) and fall
    back to its defaults when none is given.
    """

    deal: DealSettings = Field(default_factory=DealSettings)
    scattered_lot: ScatteredLotSettings = Field(default_factory=ScatteredLotSettings)
