# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Accounting: journal-entry validation, chart-of-accounts templates and
ledger reports.
"""

from .coa import (
    COATemplateItem,
    PopulatedAccount,
    accounts_to_dataframe,
    populate_template,
    substitute_variables,
    template_name_for_entity_type,
)
from .journal import (
    JournalEntry,
    JournalLine,
    LineTotals,
    compute_line_totals,
    is_balanced,
)
from .reports import (
    AGING_BUCKETS,
    BalanceSheet,
    IncomeStatement,
    TrialBalanceTotals,
    aging_report,
    balance_sheet,
    income_statement,
    trial_balance,
    trial_balance_totals,
)

__all__ = [
    "AGING_BUCKETS",
    "BalanceSheet",
    "COATemplateItem",
    "IncomeStatement",
    "JournalEntry",
    "JournalLine",
    "LineTotals",
    "PopulatedAccount",
    "TrialBalanceTotals",
    "accounts_to_dataframe",
    "aging_report",
    "balance_sheet",
    "compute_line_totals",
    "income_statement",
    "is_balanced",
    "populate_template",
    "substitute_variables",
    "template_name_for_entity_type",
    "trial_balance",
    "trial_balance_totals",
]
