# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Per-house fee schedules for deal sheets.

This module holds the fixed, per-house fees the builder charges on every
home, along with the contract-budget formulas for the builder fee and
contingency lines:

- ``DealFees``: the seven fixed costs that the deal-sheet calculator adds to
  land and hard costs. Any subset can be overridden; the rest keep their
  organization defaults.
- ``FixedPerHouseFees``: the full per-house schedule used on contract
  budgets, where the asset-management fee only applies to related-party
  entities.
- ``compute_builder_fee`` / ``compute_contingency``: Section 6 and Section 7
  of the contract budget, both driven by the Sections 1-5 subtotal.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import Field

from ..core.primitives.model import Model
from ..core.primitives.types import PositiveFloat

logger = logging.getLogger(__name__)

# Contract budget formula constants
BUILDER_FEE_FLOOR = 25_000.0
BUILDER_FEE_RATE = 0.10
CONTINGENCY_CAP = 10_000.0
CONTINGENCY_RATE = 0.05


class DealFees(Model):
    """
    Fixed costs added to every deal sheet.

    Usage Examples:
        # Organization defaults ($39,400 total)
        fees = DealFees()

        # Override the builder fee only
        fees = DealFees.with_overrides({"builder_fee": 20_000})
    """

    builder_fee: PositiveFloat = Field(default=15_000.0, description="Builder fee")
    warranty: PositiveFloat = Field(default=5_000.0, description="Builder warranty")
    builders_risk: PositiveFloat = Field(
        default=1_500.0, description="Builder's risk insurance"
    )
    po_fee: PositiveFloat = Field(default=3_000.0, description="Purchase order fee")
    pm_fee: PositiveFloat = Field(default=3_500.0, description="Project management fee")
    utility: PositiveFloat = Field(default=1_400.0, description="Utilities during build")
    contingency: PositiveFloat = Field(
        default=10_000.0, description="Contingency (capped amount)"
    )

    @property
    def total(self) -> float:
        """Sum of all fixed costs."""
        return (
            self.builder_fee
            + self.warranty
            + self.builders_risk
            + self.po_fee
            + self.pm_fee
            + self.utility
            + self.contingency
        )

    @classmethod
    def with_overrides(
        cls, overrides: Optional[Union["DealFees", Mapping[str, Any]]] = None
    ) -> "DealFees":
        """
        Build a fee schedule from partial overrides.

        Args:
            overrides: Either a complete ``DealFees`` (returned unchanged), a
                mapping of fee name to amount, or None for the defaults.

        Returns:
            DealFees with defaults for every fee not overridden
        """
        if overrides is None:
            return cls()
        if isinstance(overrides, DealFees):
            return overrides
        logger.debug(f"Applying fee overrides: {dict(overrides)}")
        return cls(**dict(overrides))


class FixedPerHouseFees(Model):
    """
    Full per-house fee schedule from the contract budget.

    Total per house is $35,900 for related-party entities and $30,900 for
    third parties, who do not pay the asset-management fee.
    """

    builder_fee: PositiveFloat = 15_000.0
    am_fee: PositiveFloat = 5_000.0  # related-party entities only
    builder_warranty: PositiveFloat = 5_000.0
    builders_risk: PositiveFloat = 1_500.0
    po_fee: PositiveFloat = 3_000.0
    bookkeeping: PositiveFloat = 1_500.0
    pm_fee: PositiveFloat = 3_500.0
    utilities: PositiveFloat = 1_400.0

    def applicable(self, is_related_party: bool) -> Dict[str, float]:
        """Fees charged for the given relationship, keyed by fee name."""
        fees = self.model_dump()
        if not is_related_party:
            fees.pop("am_fee")
        return fees

    def total(self, is_related_party: bool) -> float:
        """Total per-house fees for the given relationship."""
        return sum(self.applicable(is_related_party).values())


def compute_builder_fee(sections_1_to_5: float) -> float:
    """Builder fee (Section 6): the GREATER of $25K or 10% of Sections 1-5."""
    return max(BUILDER_FEE_FLOOR, sections_1_to_5 * BUILDER_FEE_RATE)


def compute_contingency(sections_1_to_5: float) -> float:
    """Contingency (Section 7): the LOWER of $10K or 5% of Sections 1-5."""
    return min(CONTINGENCY_CAP, sections_1_to_5 * CONTINGENCY_RATE)
