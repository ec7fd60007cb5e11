# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Report export and display formatting.
"""

from .export import csv_filename, export_to_csv, rows_to_dataframe
from .formatting import format_currency, format_date, format_percent

__all__ = [
    "csv_filename",
    "export_to_csv",
    "format_currency",
    "format_date",
    "format_percent",
    "rows_to_dataframe",
]
