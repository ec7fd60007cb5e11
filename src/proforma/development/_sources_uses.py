# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Horizontal development capital stack shared by the community and
lot-development pro formas.
"""

from __future__ import annotations

from ..core.primitives import Model

# Interest reserve assumes the loan is half drawn on average
INTEREST_RESERVE_AVERAGE_DRAW = 0.5


class HorizontalCapitalStack(Model):
    """Uses above the hard-cost subtotal and the senior debt / LP equity split."""

    subtotal_hard: float
    contingency: float
    total_hard_plus_contingency: float
    cm_fee: float
    developer_fee: float
    interest_reserve: float
    total_uses: float
    senior_debt: float
    lp_equity: float


def build_capital_stack(
    subtotal_hard: float,
    contingency_pct: float,
    cm_fee: float,
    developer_fee: float,
    bank_interest_rate: float,
    bank_ltc: float,
) -> HorizontalCapitalStack:
    """
    Layer contingency, fees and the interest reserve on top of hard costs and
    size senior debt at ``bank_ltc`` of total uses.
    """
    contingency = subtotal_hard * contingency_pct
    total_hard_plus_contingency = subtotal_hard + contingency
    interest_reserve = (
        total_hard_plus_contingency * bank_interest_rate * INTEREST_RESERVE_AVERAGE_DRAW
    )
    total_uses = total_hard_plus_contingency + cm_fee + developer_fee + interest_reserve
    senior_debt = total_uses * bank_ltc
    return HorizontalCapitalStack(
        subtotal_hard=subtotal_hard,
        contingency=contingency,
        total_hard_plus_contingency=total_hard_plus_contingency,
        cm_fee=cm_fee,
        developer_fee=developer_fee,
        interest_reserve=interest_reserve,
        total_uses=total_uses,
        senior_debt=senior_debt,
        lp_equity=total_uses - senior_debt,
    )
