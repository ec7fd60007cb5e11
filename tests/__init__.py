# Proforma Test Suite
# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Proforma test suite.

Unit tests are organized by subpackage under ``tests/unit``.
"""
