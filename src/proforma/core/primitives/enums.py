# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from enum import Enum


class ProjectTypeEnum(str, Enum):
    """Project types a deal sheet or workflow template can target."""

    SCATTERED_LOT = "Scattered Lot"
    COMMUNITY_DEVELOPMENT = "Community Development"
    LOT_DEVELOPMENT = "Lot Development"
    LOT_PURCHASE = "Lot Purchase"

    @property
    def code(self) -> str:
        """Snake-case code used by workflow templates (e.g. ``scattered_lot``)."""
        return self.value.lower().replace(" ", "_")


class DealVerdictEnum(str, Enum):
    """
    Deal-sheet verdict derived from annualized ROI on equity.

    Thresholds live in ``DealSettings`` so they can be tuned per organization.
    """

    STRONG_BUY = "Strong Buy"
    BUY = "Buy"
    HOLD = "Hold"
    PASS = "Pass"


class NPMRatingEnum(str, Enum):
    """Net profit margin rating for scattered-lot deals."""

    STRONG = "STRONG"  # >= 10%
    GOOD = "GOOD"  # 7-10%
    MARGINAL = "MARGINAL"  # 5-7%
    NO_GO = "NO_GO"  # < 5%


class LandCostRatingEnum(str, Enum):
    """Land cost ratio (lot basis / ASP) rating for scattered-lot deals."""

    STRONG = "STRONG"  # < 20%
    ACCEPTABLE = "ACCEPTABLE"  # 20-25%
    CAUTION = "CAUTION"  # 25-30%
    OVERPAYING = "OVERPAYING"  # >= 30%


class WaterfallTierEnum(str, Enum):
    """
    Distribution tiers of an American-style investor waterfall.

    Tiers are processed in ``tier_order``; each consumes from the cash that
    the previous tiers left over.
    """

    RETURN_OF_CAPITAL = "return_of_capital"
    PREFERRED_RETURN = "preferred_return"
    CATCH_UP = "catch_up"
    PROFIT_SPLIT = "profit_split"


class AccountTypeEnum(str, Enum):
    """Root account types of the general ledger."""

    ASSET = "Asset"
    LIABILITY = "Liability"
    EQUITY = "Equity"
    REVENUE = "Revenue"
    EXPENSE = "Expense"


class TaskStatusEnum(str, Enum):
    """Lifecycle status of a workflow task instance."""

    ACTIVE = "active"
    BLOCKED = "blocked"
    COMPLETED = "completed"
    SKIPPED = "skipped"


class RecordTypeEnum(str, Enum):
    """Record types that can trigger workflow instantiation."""

    OPPORTUNITY = "opportunity"
    PROJECT = "project"
    JOB = "job"
    DISPOSITION = "disposition"
