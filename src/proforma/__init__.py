# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Proforma - Homebuilder Deal Analysis and Back-Office Calculations

Deal underwriting for a residential homebuilder, from a single spec home on a
scattered lot to multi-lot development programs, plus the accounting and
workflow rules the back office runs on.

Key Entry Points:
- proforma.deal.calculate_deal() - Deal sheet: costs, financing, ROI, verdict
- proforma.deal.calculate_scattered_lot_deal() - Scattered-lot analyzer
- proforma.deal.calculate_waterfall() - Investor distribution waterfall
- proforma.development.* - Community, lot development and lot purchase pro formas
- proforma.accounting.* - Journal entries, chart of accounts, ledger reports
- proforma.workflow.WorkflowEngine - Workflow launch on record status changes

Example Usage:
    ```python
    from proforma.deal import DealInputs, calculate_deal

    result = calculate_deal(
        DealInputs(
            purchase_price=80_000,
            site_work=15_000,
            base_build_cost=180_000,
            upgrade_package=25_000,
            asp=450_000,
            concessions=5_000,
            duration_months=8,
            interest_rate=0.10,
            ltc_ratio=0.75,
        )
    )
    print(f"{result.verdict.value}: {result.annualized_roi:.1%} annualized")
    ```
"""

import importlib
import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())


# Public API surface (lazy-loaded on first attribute access)
__all__ = [  # noqa: F822 - lazy loading
    "accounting",
    "core",
    "deal",
    "development",
    "reporting",
    "workflow",
]


_LAZY_MODULES = {
    "accounting": "proforma.accounting",
    "core": "proforma.core",
    "deal": "proforma.deal",
    "development": "proforma.development",
    "reporting": "proforma.reporting",
    "workflow": "proforma.workflow",
}


def __getattr__(name: str):
    module_path = _LAZY_MODULES.get(name)
    if module_path is None:
        raise AttributeError(f"module 'proforma' has no attribute '{name}'")
    module = importlib.import_module(module_path)
    globals()[name] = module
    return module
