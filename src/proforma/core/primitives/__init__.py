# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Proforma Core Primitives

Essential building blocks shared by every engine: the immutable base model,
constrained numeric types, enums and configurable settings.
"""

from .enums import (
    AccountTypeEnum,
    DealVerdictEnum,
    LandCostRatingEnum,
    NPMRatingEnum,
    ProjectTypeEnum,
    RecordTypeEnum,
    TaskStatusEnum,
    WaterfallTierEnum,
)
from .model import Model
from .settings import DealSettings, GlobalSettings, ScatteredLotSettings
from .types import FloatBetween0And1, PositiveFloat, PositiveInt

__all__ = [
    # Core models
    "Model",
    # Settings
    "GlobalSettings",
    "DealSettings",
    "ScatteredLotSettings",
    # Enums
    "AccountTypeEnum",
    "DealVerdictEnum",
    "LandCostRatingEnum",
    "NPMRatingEnum",
    "ProjectTypeEnum",
    "RecordTypeEnum",
    "TaskStatusEnum",
    "WaterfallTierEnum",
    # Types
    "PositiveFloat",
    "PositiveInt",
    "FloatBetween0And1",
]
