# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Journal entry validation.

A journal entry balances when total debits equal total credits within a
one-cent tolerance. Each line posts to one side only.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional

from pydantic import Field

from ..core.primitives import Model, PositiveFloat

logger = logging.getLogger(__name__)

BALANCE_TOLERANCE = 0.01


def is_balanced(debits: float, credits: float) -> bool:
    """True when ``debits`` and ``credits`` differ by less than one cent."""
    return abs(debits - credits) < BALANCE_TOLERANCE


@dataclass(frozen=True, slots=True)
class LineTotals:
    total_debits: float
    total_credits: float
    is_balanced: bool

    @property
    def difference(self) -> float:
        return self.total_debits - self.total_credits


class JournalLine(Model):
    """One side of a posting; ``None`` means the column is blank."""

    account_number: str
    account_name: Optional[str] = None
    debit: Optional[PositiveFloat] = None
    credit: Optional[PositiveFloat] = None
    memo: Optional[str] = None

    @property
    def is_two_sided(self) -> bool:
        return bool(self.debit) and bool(self.credit)


def compute_line_totals(lines: Iterable) -> LineTotals:
    """
    Sum the debit and credit columns of journal lines.

    Accepts ``JournalLine`` models or mappings with ``debit``/``credit`` keys;
    blank (``None``) amounts count as zero.
    """
    total_debits = 0.0
    total_credits = 0.0
    for line in lines:
        if isinstance(line, JournalLine):
            debit, credit = line.debit, line.credit
        else:
            debit, credit = line.get("debit"), line.get("credit")
        total_debits += debit or 0.0
        total_credits += credit or 0.0
    return LineTotals(
        total_debits=total_debits,
        total_credits=total_credits,
        is_balanced=is_balanced(total_debits, total_credits),
    )


class JournalEntry(Model):
    """A dated, multi-line journal entry."""

    entry_date: date
    memo: Optional[str] = None
    reference: Optional[str] = None
    lines: List[JournalLine] = Field(default_factory=list)

    @property
    def totals(self) -> LineTotals:
        return compute_line_totals(self.lines)

    def validate_entry(self) -> LineTotals:
        """
        Check that the entry can be posted.

        Returns:
            The entry's line totals

        Raises:
            ValueError: If a line carries both a debit and a credit, or if the
                entry does not balance
        """
        for i, line in enumerate(self.lines, start=1):
            if line.is_two_sided:
                raise ValueError(
                    f"Line {i} ({line.account_number}) has both a debit and a credit"
                )
        totals = self.totals
        if not totals.is_balanced:
            raise ValueError(
                f"Journal entry is out of balance: debits ${totals.total_debits:,.2f} "
                f"vs credits ${totals.total_credits:,.2f}"
            )
        logger.debug(
            f"Journal entry {self.reference or self.entry_date} balanced at "
            f"${totals.total_debits:,.2f}"
        )
        return totals
