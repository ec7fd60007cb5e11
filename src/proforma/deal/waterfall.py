# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Investor Distribution Waterfall

This module implements the American-style, tier-ordered waterfall used to
allocate a single distribution among a fund's investors. Each tier consumes
from the cash the previous tiers left over:

1. Return of capital: pro-rata to each investor's unreturned called capital
2. Preferred return: LPs only, accrued on called capital from the
   contribution date (actual/365) less pref already paid
3. GP catch-up: GPs receive until they hold ``catch_up_pct`` of the profits
   distributed so far
4. Profit split: the remainder is split between the GP and LP pools, each
   pool allocated by called capital

Prior-round amounts carried on each investor make the calculation
re-entrant: feeding the totals of one distribution into the next picks up
exactly where the last one stopped.

Example:
    ```python
    result = calculate_waterfall(
        WaterfallInput(
            distribution_date=date(2026, 1, 1),
            total_distributable=1_200_000,
            investors=[lp_a, lp_b],
            tiers=standard_tiers(),
        )
    )
    result.remaining_undistributed  # GP pool with no GP investors stays undistributed
    ```
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional

import pandas as pd
from pydantic import Field, model_validator

from ..core.calculations import FinancialCalculations
from ..core.primitives import (
    FloatBetween0And1,
    Model,
    PositiveFloat,
    WaterfallTierEnum,
)

logger = logging.getLogger(__name__)

round_currency = FinancialCalculations.round_currency


# =============================================================================
# INPUT MODELS
# =============================================================================


class WaterfallInvestor(Model):
    """An investment position with its called capital and prior distributions."""

    investment_id: str
    investor_name: str
    is_gp: bool = False
    called_amount: PositiveFloat
    contribution_date: date

    # Totals received in earlier distributions, by tier
    prior_return_of_capital: PositiveFloat = 0.0
    prior_preferred_return: PositiveFloat = 0.0
    prior_catch_up: PositiveFloat = 0.0
    prior_profit_split: PositiveFloat = 0.0


class WaterfallTierConfig(Model):
    """
    One tier of the waterfall and its parameters.

    Only the parameter relevant to ``tier_name`` is read: ``pref_rate`` for
    the preferred return, ``catch_up_pct`` for the catch-up and the split
    percentages for the profit split.
    """

    tier_name: WaterfallTierEnum
    tier_order: int
    pref_rate: Optional[PositiveFloat] = None
    catch_up_pct: Optional[float] = Field(default=None, ge=0, lt=1)
    gp_split_pct: Optional[FloatBetween0And1] = None
    lp_split_pct: Optional[FloatBetween0And1] = None

    @model_validator(mode="after")
    def validate_split(self) -> "WaterfallTierConfig":
        """GP and LP split percentages cannot exceed 100% combined."""
        gp = self.gp_split_pct or 0.0
        lp = 1.0 if self.lp_split_pct is None else self.lp_split_pct
        if self.tier_name == WaterfallTierEnum.PROFIT_SPLIT and gp + lp > 1.0 + 1e-9:
            raise ValueError(
                f"Profit split percentages sum to {gp + lp:.2%}; must not exceed 100%"
            )
        return self


class WaterfallInput(Model):
    """A single distribution event."""

    distribution_date: date
    total_distributable: float
    investors: List[WaterfallInvestor] = Field(default_factory=list)
    tiers: List[WaterfallTierConfig] = Field(default_factory=list)


# =============================================================================
# OUTPUT MODELS
# =============================================================================


class WaterfallLineItem(Model):
    """Amount one investment receives from one tier."""

    investment_id: str
    investor_name: str
    is_gp: bool
    tier_name: WaterfallTierEnum
    tier_order: int
    amount: float


class WaterfallInvestorSummary(Model):
    """Per-investment totals across all tiers of one distribution."""

    investment_id: str
    investor_name: str
    is_gp: bool
    return_of_capital: float = 0.0
    preferred_return: float = 0.0
    catch_up: float = 0.0
    profit_split: float = 0.0
    total: float = 0.0


class TierBreakdown(Model):
    """Total consumed by one tier."""

    tier_name: WaterfallTierEnum
    tier_order: int
    total: float


class WaterfallOutput(Model):
    """Result of a waterfall distribution."""

    total_distributed: float
    remaining_undistributed: float
    tier_breakdown: List[TierBreakdown]
    investors: List[WaterfallInvestorSummary]
    line_items: List[WaterfallLineItem]

    def investor(self, investment_id: str) -> WaterfallInvestorSummary:
        """Summary for ``investment_id``; raises KeyError if unknown."""
        for summary in self.investors:
            if summary.investment_id == investment_id:
                return summary
        raise KeyError(f"No investment with id {investment_id!r} in this distribution")

    def tier_total(self, tier_name: WaterfallTierEnum) -> float:
        """Total consumed by ``tier_name`` (0.0 if the tier never ran)."""
        return sum(t.total for t in self.tier_breakdown if t.tier_name == tier_name)

    def investors_df(self) -> pd.DataFrame:
        """Per-investor summaries as a DataFrame indexed by investment id."""
        df = pd.DataFrame([s.model_dump(mode="json") for s in self.investors])
        if df.empty:
            return df
        return df.set_index("investment_id")

    def line_items_df(self) -> pd.DataFrame:
        """Line items as a DataFrame, one row per (investment, tier)."""
        return pd.DataFrame([item.model_dump(mode="json") for item in self.line_items])


# =============================================================================
# CALCULATOR
# =============================================================================


@dataclass
class _Allocation:
    """Mutable working line item; rounding residuals are applied in place."""

    investor: WaterfallInvestor
    amount: float


@dataclass
class _TierResult:
    allocations: List[_Allocation] = field(default_factory=list)
    consumed: float = 0.0


def _capital_weights(investors: List[WaterfallInvestor]) -> List[float]:
    """Called-capital weights, equal weights when no capital was called."""
    total = sum(inv.called_amount for inv in investors)
    if total > 0:
        return [inv.called_amount / total for inv in investors]
    return [1 / len(investors)] * len(investors)


def _settle_residual(result: _TierResult, available: float) -> _TierResult:
    """Assign the rounding residual of a tier to its first line item."""
    residual = round_currency(available - result.consumed)
    if residual != 0 and result.allocations:
        first = result.allocations[0]
        first.amount = round_currency(first.amount + residual)
        result.consumed = available
    result.consumed = round_currency(result.consumed)
    return result


def _allocate_pro_rata(needs: List[tuple], available: float) -> _TierResult:
    """Allocate ``available`` across (investor, need) pairs in proportion to need."""
    result = _TierResult()
    total_need = sum(need for _, need in needs)
    for investor, need in needs:
        if need <= 0:
            continue
        share = round_currency((need / total_need) * available)
        if share > 0:
            result.allocations.append(_Allocation(investor, share))
            result.consumed += share
    return _settle_residual(result, available)


@dataclass
class WaterfallCalculator:
    """
    Allocates one distribution through the configured tiers.

    Attributes:
        investors: Investment positions participating in the distribution
        tiers: Tier configuration (any order; processed by ``tier_order``)
    """

    investors: List[WaterfallInvestor]
    tiers: List[WaterfallTierConfig]

    @property
    def gp_investors(self) -> List[WaterfallInvestor]:
        return [inv for inv in self.investors if inv.is_gp]

    @property
    def lp_investors(self) -> List[WaterfallInvestor]:
        return [inv for inv in self.investors if not inv.is_gp]

    def _return_of_capital(self, remaining: float) -> _TierResult:
        if remaining <= 0:
            return _TierResult()
        needs = [
            (inv, max(0.0, inv.called_amount - inv.prior_return_of_capital))
            for inv in self.investors
        ]
        total_need = sum(need for _, need in needs)
        if total_need <= 0:
            return _TierResult()
        return _allocate_pro_rata(needs, min(remaining, total_need))

    def _preferred_return(
        self, remaining: float, pref_rate: float, distribution_date: date
    ) -> _TierResult:
        if remaining <= 0 or pref_rate <= 0:
            return _TierResult()
        needs = []
        for inv in self.lp_investors:
            days = FinancialCalculations.days_between(
                inv.contribution_date, distribution_date
            )
            accrued = inv.called_amount * pref_rate * (days / 365)
            needs.append(
                (inv, max(0.0, round_currency(accrued - inv.prior_preferred_return)))
            )
        total_need = sum(need for _, need in needs)
        if total_need <= 0:
            return _TierResult()
        return _allocate_pro_rata(needs, min(remaining, total_need))

    def _catch_up(
        self, remaining: float, catch_up_pct: float, profits_so_far: float
    ) -> _TierResult:
        if remaining <= 0 or catch_up_pct <= 0:
            return _TierResult()
        gps = self.gp_investors
        if not gps:
            return _TierResult()

        # GP share of profits reaches catch_up_pct once it holds
        # profits * pct / (1 - pct) on top of the LP profits so far
        prior = sum(inv.prior_catch_up for inv in gps)
        target = round_currency((profits_so_far * catch_up_pct) / (1 - catch_up_pct))
        need = max(0.0, round_currency(target - prior))
        if need <= 0:
            return _TierResult()

        available = min(remaining, need)
        result = _TierResult()
        for inv, weight in zip(gps, _capital_weights(gps)):
            share = round_currency(weight * available)
            if share > 0:
                result.allocations.append(_Allocation(inv, share))
                result.consumed += share
        return _settle_residual(result, available)

    def _profit_split(
        self, remaining: float, gp_split_pct: float, lp_split_pct: float
    ) -> _TierResult:
        if remaining <= 0:
            return _TierResult()
        gps, lps = self.gp_investors, self.lp_investors

        # Pools without recipients stay undistributed
        gp_pool = round_currency(remaining * gp_split_pct) if gps else 0.0
        lp_pool = round_currency(remaining * lp_split_pct) if lps else 0.0

        result = _TierResult()
        for pool, members in ((gp_pool, gps), (lp_pool, lps)):
            if not members:
                continue
            for inv, weight in zip(members, _capital_weights(members)):
                share = round_currency(weight * pool)
                if share > 0:
                    result.allocations.append(_Allocation(inv, share))

        target = gp_pool + lp_pool
        allocated = sum(a.amount for a in result.allocations)
        residual = round_currency(target - allocated)
        if residual != 0 and result.allocations:
            first = result.allocations[0]
            first.amount = round_currency(first.amount + residual)
        result.consumed = round_currency(target)
        return result

    def calculate(
        self, distribution_date: date, total_distributable: float
    ) -> WaterfallOutput:
        """
        Run the distribution through every tier.

        Args:
            distribution_date: Date the cash is distributed (pref accrual end)
            total_distributable: Cash available for distribution

        Returns:
            WaterfallOutput with tier totals, per-investor summaries and line items
        """
        if total_distributable <= 0 or not self.investors or not self.tiers:
            logger.debug("Nothing to distribute: no cash, investors or tiers")
            return WaterfallOutput(
                total_distributed=0.0,
                remaining_undistributed=total_distributable,
                tier_breakdown=[],
                investors=[self._empty_summary(inv) for inv in self.investors],
                line_items=[],
            )

        line_items: List[WaterfallLineItem] = []
        breakdown: List[TierBreakdown] = []
        remaining = total_distributable
        # Profits distributed in earlier tiers drive the catch-up target
        profits_so_far = 0.0

        for tier in sorted(self.tiers, key=lambda t: t.tier_order):
            if remaining <= 0:
                break

            if tier.tier_name == WaterfallTierEnum.RETURN_OF_CAPITAL:
                result = self._return_of_capital(remaining)
            elif tier.tier_name == WaterfallTierEnum.PREFERRED_RETURN:
                result = self._preferred_return(
                    remaining, tier.pref_rate or 0.0, distribution_date
                )
                profits_so_far += result.consumed
            elif tier.tier_name == WaterfallTierEnum.CATCH_UP:
                result = self._catch_up(
                    remaining, tier.catch_up_pct or 0.0, profits_so_far
                )
                profits_so_far += result.consumed
            else:
                result = self._profit_split(
                    remaining,
                    tier.gp_split_pct or 0.0,
                    1.0 if tier.lp_split_pct is None else tier.lp_split_pct,
                )

            line_items.extend(
                WaterfallLineItem(
                    investment_id=a.investor.investment_id,
                    investor_name=a.investor.investor_name,
                    is_gp=a.investor.is_gp,
                    tier_name=tier.tier_name,
                    tier_order=tier.tier_order,
                    amount=a.amount,
                )
                for a in result.allocations
            )
            remaining = round_currency(remaining - result.consumed)
            breakdown.append(
                TierBreakdown(
                    tier_name=tier.tier_name,
                    tier_order=tier.tier_order,
                    total=result.consumed,
                )
            )
            logger.debug(
                f"Tier {tier.tier_order} ({tier.tier_name.value}): "
                f"${result.consumed:,.2f} distributed, ${remaining:,.2f} remaining"
            )

        return WaterfallOutput(
            total_distributed=round_currency(total_distributable - remaining),
            remaining_undistributed=round_currency(remaining),
            tier_breakdown=breakdown,
            investors=self._summarize(line_items),
            line_items=line_items,
        )

    @staticmethod
    def _empty_summary(inv: WaterfallInvestor) -> WaterfallInvestorSummary:
        return WaterfallInvestorSummary(
            investment_id=inv.investment_id,
            investor_name=inv.investor_name,
            is_gp=inv.is_gp,
        )

    def _summarize(
        self, line_items: List[WaterfallLineItem]
    ) -> List[WaterfallInvestorSummary]:
        totals: Dict[str, Dict[str, float]] = {
            inv.investment_id: {tier.value: 0.0 for tier in WaterfallTierEnum}
            | {"total": 0.0}
            for inv in self.investors
        }
        for item in line_items:
            bucket = totals.get(item.investment_id)
            if bucket is None:
                continue
            bucket[item.tier_name.value] = round_currency(
                bucket[item.tier_name.value] + item.amount
            )
            bucket["total"] = round_currency(bucket["total"] + item.amount)

        summaries: Dict[str, WaterfallInvestorSummary] = {}
        for inv in self.investors:
            summaries[inv.investment_id] = WaterfallInvestorSummary(
                investment_id=inv.investment_id,
                investor_name=inv.investor_name,
                is_gp=inv.is_gp,
                **totals[inv.investment_id],
            )
        return list(summaries.values())


def calculate_waterfall(waterfall_input: WaterfallInput) -> WaterfallOutput:
    """Allocate ``waterfall_input.total_distributable`` through its tiers."""
    calculator = WaterfallCalculator(
        investors=list(waterfall_input.investors), tiers=list(waterfall_input.tiers)
    )
    return calculator.calculate(
        waterfall_input.distribution_date, waterfall_input.total_distributable
    )


def standard_tiers(
    pref_rate: float = 0.08,
    catch_up_pct: float = 0.20,
    gp_split_pct: float = 0.20,
    lp_split_pct: float = 0.80,
) -> List[WaterfallTierConfig]:
    """
    The standard four-tier American waterfall (8% pref, 20% catch-up, 80/20 split).
    """
    return [
        WaterfallTierConfig(tier_name=WaterfallTierEnum.RETURN_OF_CAPITAL, tier_order=1),
        WaterfallTierConfig(
            tier_name=WaterfallTierEnum.PREFERRED_RETURN, tier_order=2, pref_rate=pref_rate
        ),
        WaterfallTierConfig(
            tier_name=WaterfallTierEnum.CATCH_UP, tier_order=3, catch_up_pct=catch_up_pct
        ),
        WaterfallTierConfig(
            tier_name=WaterfallTierEnum.PROFIT_SPLIT,
            tier_order=4,
            gp_split_pct=gp_split_pct,
            lp_split_pct=lp_split_pct,
        ),
    ]
