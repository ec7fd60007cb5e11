# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Model(BaseModel):
    """Base Pydantic model with common configuration.

    Immutable models for inputs, fee schedules and engine results. Engines
    never mutate their inputs; overrides go through ``model_copy(update=...)``.
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        frozen=True,  # Immutable models; engines return new instances
        extra="forbid",  # Catches typos and missing field definitions immediately
    )
