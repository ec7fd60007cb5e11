# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Multi-lot development pro formas: community development, lot development
and lot purchase (takedown) programs.
"""

from ._sources_uses import HorizontalCapitalStack, build_capital_stack
from .community import (
    CommunityProformaInputs,
    CommunityProformaResults,
    LPWaterfall,
    Phase1Results,
    Phase2PerHome,
    Phase2ProjectTotals,
    calculate_community_proforma,
)
from .lot_development import (
    LotDevAbsorption,
    LotDevProformaInputs,
    LotDevProformaResults,
    LotDevReturns,
    LotDevSourcesUses,
    calculate_lot_development_proforma,
)
from .lot_purchase import (
    LotPurchaseProformaInputs,
    LotPurchaseProformaResults,
    PerHomeEconomics,
    ProjectSummary,
    TakedownTranche,
    build_takedown_schedule,
    calculate_lot_purchase_proforma,
)

__all__ = [
    "CommunityProformaInputs",
    "CommunityProformaResults",
    "HorizontalCapitalStack",
    "LPWaterfall",
    "LotDevAbsorption",
    "LotDevProformaInputs",
    "LotDevProformaResults",
    "LotDevReturns",
    "LotDevSourcesUses",
    "LotPurchaseProformaInputs",
    "LotPurchaseProformaResults",
    "PerHomeEconomics",
    "Phase1Results",
    "Phase2PerHome",
    "Phase2ProjectTotals",
    "ProjectSummary",
    "TakedownTranche",
    "build_capital_stack",
    "build_takedown_schedule",
    "calculate_community_proforma",
    "calculate_lot_development_proforma",
    "calculate_lot_purchase_proforma",
]
