# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Display formatting for currency and percentages.
"""

from __future__ import annotations

import math
from datetime import date, datetime
from typing import Optional, Union


def format_currency(value: Optional[float]) -> str:
    """
    Whole-dollar US currency string, halves rounded away from zero.

    Example:
        ```python
        format_currency(1234.5)   # "$1,235"
        format_currency(-9800)    # "-$9,800"
        format_currency(-0.4)     # "-$0"
        format_currency(None)     # "$0.00"
        ```
    """
    if value is None:
        return "$0.00"
    dollars = math.floor(abs(value) + 0.5)
    sign = "-" if value < 0 else ""
    return f"{sign}${dollars:,}"


def format_percent(value: Optional[float]) -> str:
    """Decimal ratio as a percentage with one decimal (0.0826 -> "8.3%")."""
    if value is None:
        return "0%"
    return f"{value * 100:.1f}%"


def format_date(value: Union[str, date, datetime, None]) -> str:
    """``"Mar 5, 2026"`` style date; blank for missing values."""
    if not value:
        return ""
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    return f"{value:%b} {value.day}, {value.year}"
