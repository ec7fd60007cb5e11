# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Financial calculation functions.

Contains static methods for the small set of arithmetic rules every engine
shares: cent rounding, guarded ratios, day counts and simple-interest carry.
These functions are pure (math-only); engines delegate to them so that each
rule has a single source of truth.
"""

from __future__ import annotations

import math
from datetime import date


class FinancialCalculations:
    """
    Pure mathematical helpers for pro forma calculations.

    Static methods only, independent of any input model.
    """

    @staticmethod
    def round_currency(value: float) -> float:
        """
        Round a dollar amount to cents, halves rounding up.

        Python's ``round`` uses banker's rounding; distributions must round
        half-cents up so that allocations are reproducible across systems.

        Example:
            ```python
            FinancialCalculations.round_currency(0.125)   # 0.13
            FinancialCalculations.round_currency(2.5e-3)  # 0.0
            ```
        """
        return math.floor(value * 100 + 0.5) / 100

    @staticmethod
    def safe_ratio(numerator: float, denominator: float) -> float:
        """Return ``numerator / denominator``, or 0.0 when the denominator is not positive."""
        return numerator / denominator if denominator > 0 else 0.0

    @staticmethod
    def equity_multiple(equity: float, profit: float) -> float:
        """(equity + profit) / equity, 0.0 when no equity is invested."""
        return (equity + profit) / equity if equity > 0 else 0.0

    @staticmethod
    def annualize(rate: float, months: float) -> float:
        """Scale a holding-period return to a 12-month basis (0.0 for zero duration)."""
        return rate * (12 / months) if months > 0 else 0.0

    @staticmethod
    def simple_interest(
        principal: float, annual_rate: float, days: float, basis: int = 360
    ) -> float:
        """
        Simple interest on ``principal`` for ``days`` using an actual/``basis`` day count.

        Args:
            principal: Outstanding balance
            annual_rate: Annual rate as decimal (0.10 for 10%)
            days: Number of days outstanding
            basis: Day count denominator (360 or 365)
        """
        return principal * (annual_rate / basis) * days

    @staticmethod
    def days_between(start: date, end: date) -> int:
        """Whole days from ``start`` to ``end``, floored at zero."""
        return max(0, (end - start).days)

    @staticmethod
    def ceil_div(numerator: float, denominator: float) -> int:
        """Ceiling of ``numerator / denominator``, 0 when the denominator is not positive."""
        if denominator <= 0:
            return 0
        return math.ceil(numerator / denominator)
