# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
CSV export of report rows.

Columns are declared as ``(header, accessor)`` pairs where the accessor is a
key, attribute name or callable applied to each row. Quoting follows
RFC 4180 (pandas/csv), with ``\\n`` line endings.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Iterable, List, Sequence, TextIO, Tuple, Union

import pandas as pd

logger = logging.getLogger(__name__)

Accessor = Union[str, Callable[[Any], Any]]
Column = Tuple[str, Accessor]

CSV_SUFFIX = ".csv"


def _resolve(row: Any, accessor: Accessor) -> Any:
    if callable(accessor):
        return accessor(row)
    if isinstance(row, dict):
        return row.get(accessor)
    return getattr(row, accessor, None)


def csv_filename(filename: Union[str, Path]) -> Path:
    """Append ``.csv`` unless the name already ends with it."""
    path = Path(filename)
    return path if path.name.endswith(CSV_SUFFIX) else path.with_name(path.name + CSV_SUFFIX)


def rows_to_dataframe(rows: Iterable[Any], columns: Sequence[Column]) -> pd.DataFrame:
    """Evaluate each column accessor over ``rows``; headers become column names."""
    headers = [header for header, _ in columns]
    records: List[List[Any]] = [
        [_resolve(row, accessor) for _, accessor in columns] for row in rows
    ]
    return pd.DataFrame(records, columns=headers, dtype=object)


def export_to_csv(
    rows: Iterable[Any],
    columns: Sequence[Column],
    path_or_buffer: Union[str, Path, TextIO],
) -> Union[Path, TextIO]:
    """
    Write ``rows`` as CSV: a header row, then one line per row.

    Missing values are written as empty fields.

    Args:
        rows: Mappings or objects to export
        columns: ``(header, accessor)`` pairs
        path_or_buffer: Destination file name (``.csv`` appended when
            missing) or an open text buffer

    Returns:
        The path written, or the buffer passed in
    """
    df = rows_to_dataframe(rows, columns)
    target = path_or_buffer
    if isinstance(path_or_buffer, (str, Path)):
        target = csv_filename(path_or_buffer)
    df.to_csv(target, index=False, lineterminator="\n")
    logger.debug(f"Exported {len(df)} rows x {len(columns)} columns to CSV")
    return target
