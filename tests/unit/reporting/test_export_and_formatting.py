# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Tests for CSV export and display formatting.
"""

import io
from dataclasses import dataclass
from datetime import date

import pandas as pd
import pytest

from proforma.reporting import (
    csv_filename,
    export_to_csv,
    format_currency,
    format_date,
    format_percent,
)

COLUMNS = [("Vendor", "vendor"), ("Amount", "amount")]


class TestExportToCsv:
    def test_header_then_rows(self):
        buffer = io.StringIO()
        export_to_csv(
            [{"vendor": "Acme", "amount": 100}, {"vendor": "Blue Ridge", "amount": 250}],
            COLUMNS,
            buffer,
        )
        assert buffer.getvalue() == "Vendor,Amount\nAcme,100\nBlue Ridge,250\n"

    def test_quoting(self):
        buffer = io.StringIO()
        export_to_csv(
            [
                {"vendor": "Smith, J", "amount": 1},
                {"vendor": 'The "Best" Lumber', "amount": 2},
            ],
            COLUMNS,
            buffer,
        )
        lines = buffer.getvalue().splitlines()
        assert lines[1] == '"Smith, J",1'
        assert lines[2] == '"The ""Best"" Lumber",2'

    def test_missing_values_are_blank(self):
        buffer = io.StringIO()
        export_to_csv([{"vendor": "Acme"}], COLUMNS, buffer)
        assert buffer.getvalue().splitlines()[1] == "Acme,"

    def test_callable_and_attribute_accessors(self):
        @dataclass
        class Bill:
            vendor: str
            amount: float

        buffer = io.StringIO()
        export_to_csv(
            [Bill("Acme", 1234.5)],
            [("Vendor", "vendor"), ("Amount", lambda b: format_currency(b.amount))],
            buffer,
        )
        assert buffer.getvalue().splitlines()[1] == 'Acme,"$1,235"'

    def test_suffix_added_to_file_name(self, tmp_path):
        path = export_to_csv([{"vendor": "Acme", "amount": 5}], COLUMNS, tmp_path / "ap-aging")
        assert path == tmp_path / "ap-aging.csv"
        df = pd.read_csv(path)
        assert list(df.columns) == ["Vendor", "Amount"]

    def test_csv_filename(self):
        assert csv_filename("report.csv").name == "report.csv"
        assert csv_filename("report").name == "report.csv"

    def test_no_rows(self):
        buffer = io.StringIO()
        export_to_csv([], COLUMNS, buffer)
        assert buffer.getvalue() == "Vendor,Amount\n"


class TestFormatting:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (450_000, "$450,000"),
            (1234.5, "$1,235"),
            (-9_800, "-$9,800"),
            (0, "$0"),
            (-0.4, "-$0"),
            (-0.5, "-$1"),
            (None, "$0.00"),
        ],
    )
    def test_format_currency(self, value, expected):
        assert format_currency(value) == expected

    @pytest.mark.parametrize(
        "value, expected",
        [(0.0826, "8.3%"), (1.5668, "156.7%"), (0, "0.0%"), (None, "0%")],
    )
    def test_format_percent(self, value, expected):
        assert format_percent(value) == expected

    def test_format_date(self):
        assert format_date(date(2026, 3, 5)) == "Mar 5, 2026"
        assert format_date("2026-12-25") == "Dec 25, 2026"
        assert format_date(None) == ""
