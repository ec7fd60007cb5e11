# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Chart-of-accounts templates.

Template items carry ``{{KEY}}`` placeholders (``{{ABBR}}``,
``{{MEMBER_1_NAME}}``...) that are filled per entity when a chart of
accounts is provisioned. An entity's type selects which template applies.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, Iterable, List, Optional

import pandas as pd

from ..core.primitives import AccountTypeEnum, Model

logger = logging.getLogger(__name__)

_VARIABLE_PATTERN = re.compile(r"\{\{(\w+)\}\}")
_SEPARATOR_PATTERN = re.compile(r"[_\s-]+")

OPERATING_COMPANY = "Operating Company"
SPE_SCATTERED_LOT = "SPE - Scattered Lot"
SPE_COMMUNITY_DEVELOPMENT = "SPE - Community Development"
SPE_LOT_DEVELOPMENT = "SPE - Lot Development"
SPE_LOT_PURCHASE = "SPE - Lot Purchase Only"


class COATemplateItem(Model):
    """An account line in a chart-of-accounts template."""

    account_number: str
    account_name: str
    account_type: AccountTypeEnum
    parent_account: Optional[str] = None
    root_type: Optional[AccountTypeEnum] = None
    is_group: bool = False
    is_required: bool = False
    description: Optional[str] = None
    sort_order: int = 0


class PopulatedAccount(Model):
    """A template item with its placeholders substituted."""

    account_number: str
    account_name: str
    account_type: AccountTypeEnum
    parent_account: Optional[str] = None
    root_type: Optional[AccountTypeEnum] = None
    is_group: bool = False
    is_required: bool = False
    description: Optional[str] = None


def substitute_variables(text: str, variables: Dict[str, str]) -> str:
    """Replace ``{{KEY}}`` tokens with ``variables[KEY]``; unknown keys stay as-is."""

    def _replace(match: re.Match) -> str:
        key = match.group(1)
        value = variables.get(key)
        if value is None:
            logger.debug(f"No value for template variable {key}; leaving placeholder")
            return match.group(0)
        return value

    return _VARIABLE_PATTERN.sub(_replace, text)


def populate_template(
    items: Iterable[COATemplateItem], variables: Dict[str, str]
) -> List[PopulatedAccount]:
    """
    Fill a template's account names and descriptions for one entity.

    Args:
        items: Template account lines
        variables: Placeholder values keyed by token name (``ABBR`` etc.)

    Returns:
        Populated accounts in template order
    """
    return [
        PopulatedAccount(
            account_number=item.account_number,
            account_name=substitute_variables(item.account_name, variables),
            account_type=item.account_type,
            parent_account=item.parent_account,
            root_type=item.root_type,
            is_group=item.is_group,
            is_required=item.is_required,
            description=(
                substitute_variables(item.description, variables)
                if item.description
                else None
            ),
        )
        for item in items
    ]


def accounts_to_dataframe(accounts: Iterable[PopulatedAccount]) -> pd.DataFrame:
    """Populated accounts as a DataFrame indexed by account number."""
    df = pd.DataFrame([a.model_dump(mode="json") for a in accounts])
    if df.empty:
        return df
    return df.set_index("account_number")


def template_name_for_entity_type(entity_type: str) -> str:
    """
    Pick the chart-of-accounts template for an entity type.

    Operating companies (and plain LLCs/corporations) use the operating
    template; special-purpose entities use the template of their project
    type, defaulting to the scattered-lot SPE template. Anything else falls
    back to the operating template.
    """
    normalized = _SEPARATOR_PATTERN.sub("_", entity_type.lower())

    if "operating" in normalized or normalized in ("llc", "corp"):
        return OPERATING_COMPANY
    if "scattered" in normalized:
        return SPE_SCATTERED_LOT
    if "community" in normalized:
        return SPE_COMMUNITY_DEVELOPMENT
    if "lot_dev" in normalized:
        return SPE_LOT_DEVELOPMENT
    if "lot_purchase" in normalized:
        return SPE_LOT_PURCHASE
    if "spe" in normalized:
        return SPE_SCATTERED_LOT
    return OPERATING_COMPANY
