# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Ledger reports on pandas DataFrames.

General-ledger postings are expected as a DataFrame with columns
``account_number``, ``account_name``, ``account_type``, ``debit`` and
``credit`` (blank amounts are zero). Payables and receivables for aging are
expected with ``counterparty``, ``due_date``, ``amount`` and optionally
``paid``.

Sign conventions:
- Asset and Expense accounts carry debit balances (debit - credit)
- Liability, Equity and Revenue accounts carry credit balances (credit - debit)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

import numpy as np
import pandas as pd

from ..core.primitives import AccountTypeEnum
from .journal import is_balanced

logger = logging.getLogger(__name__)

# ==============================================================================
# AGING
# ==============================================================================

AGING_BUCKETS = ["current", "days_1_30", "days_31_60", "days_61_plus"]

UNKNOWN_COUNTERPARTY = "Unknown"

POSTING_COLUMNS = ["account_number", "account_name", "account_type", "debit", "credit"]

DEBIT_NORMAL_TYPES = [AccountTypeEnum.ASSET.value, AccountTypeEnum.EXPENSE.value]


def aging_report(items: pd.DataFrame, as_of: Optional[date] = None) -> pd.DataFrame:
    """
    Bucket outstanding payables or receivables by days overdue.

    Items with no due date, or not yet due, are current. Overdue items fall
    into 1-30, 31-60 or 61+ day buckets. Fully paid items drop out; items
    without a counterparty are grouped under ``"Unknown"``.

    Args:
        items: One row per bill/invoice (``counterparty``, ``due_date``,
            ``amount``, optional ``paid``)
        as_of: Aging date (defaults to today)

    Returns:
        DataFrame indexed by counterparty with one column per bucket and a
        ``total`` column, sorted by total descending
    """
    as_of = as_of or date.today()
    df = items.copy()
    if not df.empty:
        paid = df["paid"].fillna(0.0) if "paid" in df.columns else 0.0
        df["outstanding"] = df["amount"].fillna(0.0) - paid
        df = df[df["outstanding"] > 0].copy()
    if df.empty:
        return pd.DataFrame(
            columns=AGING_BUCKETS + ["total"],
            index=pd.Index([], name="counterparty"),
            dtype=float,
        )

    df["counterparty"] = df["counterparty"].fillna(UNKNOWN_COUNTERPARTY)
    due = pd.to_datetime(df["due_date"])
    days_overdue = (pd.Timestamp(as_of) - due).dt.days
    df["bucket"] = np.select(
        [
            days_overdue.isna() | (days_overdue <= 0),
            days_overdue <= 30,
            days_overdue <= 60,
        ],
        AGING_BUCKETS[:3],
        default=AGING_BUCKETS[3],
    )

    report = (
        df.pivot_table(
            index="counterparty",
            columns="bucket",
            values="outstanding",
            aggfunc="sum",
            fill_value=0.0,
        )
        .reindex(columns=AGING_BUCKETS, fill_value=0.0)
    )
    report["total"] = report[AGING_BUCKETS].sum(axis=1)
    report.columns.name = None
    logger.debug(f"Aged {len(df)} open items across {len(report)} counterparties as of {as_of}")
    return report.sort_values("total", ascending=False)


# ==============================================================================
# TRIAL BALANCE
# ==============================================================================


@dataclass(frozen=True, slots=True)
class TrialBalanceTotals:
    total_debits: float
    total_credits: float
    is_balanced: bool


def _normalize_postings(postings: pd.DataFrame) -> pd.DataFrame:
    missing = [c for c in POSTING_COLUMNS if c not in postings.columns]
    if missing:
        raise ValueError(f"Postings are missing required columns: {missing}")
    df = postings[POSTING_COLUMNS].copy()
    df["account_name"] = df["account_name"].fillna("")
    df["debit"] = df["debit"].fillna(0.0).astype(float)
    df["credit"] = df["credit"].fillna(0.0).astype(float)
    df["account_type"] = df["account_type"].map(
        lambda t: t.value if isinstance(t, AccountTypeEnum) else str(t)
    )
    return df


def trial_balance(postings: pd.DataFrame) -> pd.DataFrame:
    """
    Per-account debit and credit totals.

    Returns:
        DataFrame indexed by account number with ``account_name``,
        ``account_type``, ``debit``, ``credit`` and ``balance`` (in the
        account's normal direction)
    """
    df = _normalize_postings(postings)
    tb = df.groupby(
        ["account_number", "account_name", "account_type"], as_index=False, dropna=False
    )[["debit", "credit"]].sum()
    tb["balance"] = np.where(
        tb["account_type"].isin(DEBIT_NORMAL_TYPES),
        tb["debit"] - tb["credit"],
        tb["credit"] - tb["debit"],
    )
    return tb.set_index("account_number").sort_index()


def trial_balance_totals(tb: pd.DataFrame) -> TrialBalanceTotals:
    total_debits = float(tb["debit"].sum())
    total_credits = float(tb["credit"].sum())
    balanced = is_balanced(total_debits, total_credits)
    if not balanced:
        logger.warning(
            f"Trial balance out of balance by ${total_debits - total_credits:,.2f}"
        )
    return TrialBalanceTotals(
        total_debits=total_debits, total_credits=total_credits, is_balanced=balanced
    )


# ==============================================================================
# FINANCIAL STATEMENTS
# ==============================================================================


@dataclass(frozen=True, slots=True)
class IncomeStatement:
    revenue: pd.DataFrame
    expenses: pd.DataFrame

    @property
    def total_revenue(self) -> float:
        return float(self.revenue["amount"].sum())

    @property
    def total_expenses(self) -> float:
        return float(self.expenses["amount"].sum())

    @property
    def net_income(self) -> float:
        return self.total_revenue - self.total_expenses


@dataclass(frozen=True, slots=True)
class BalanceSheet:
    assets: pd.DataFrame
    liabilities: pd.DataFrame
    equity: pd.DataFrame

    @property
    def total_assets(self) -> float:
        return float(self.assets["amount"].sum())

    @property
    def total_liabilities(self) -> float:
        return float(self.liabilities["amount"].sum())

    @property
    def total_equity(self) -> float:
        return float(self.equity["amount"].sum())


def _section(tb: pd.DataFrame, account_type: AccountTypeEnum) -> pd.DataFrame:
    rows = tb[tb["account_type"] == account_type.value]
    return rows[["account_name"]].assign(amount=rows["balance"])


def income_statement(postings: pd.DataFrame) -> IncomeStatement:
    """Revenue and expense accounts with their period activity."""
    tb = trial_balance(postings)
    return IncomeStatement(
        revenue=_section(tb, AccountTypeEnum.REVENUE),
        expenses=_section(tb, AccountTypeEnum.EXPENSE),
    )


def balance_sheet(postings: pd.DataFrame) -> BalanceSheet:
    """
    Asset, liability and equity sections.

    Net income of the period is not closed into equity here; post the
    closing entry first for a balance sheet that ties out.
    """
    tb = trial_balance(postings)
    return BalanceSheet(
        assets=_section(tb, AccountTypeEnum.ASSET),
        liabilities=_section(tb, AccountTypeEnum.LIABILITY),
        equity=_section(tb, AccountTypeEnum.EQUITY),
    )
