"""Conversion of projected rows into polars DataFrames."""

from __future__ import annotations

from typing import TYPE_CHECKING

import polars as pl

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from icetime.output.rows import Row


def to_frames(rows: Mapping[str, Sequence[Row]]) -> dict[str, pl.DataFrame]:
    """Build one DataFrame per table.

    The schema of each table is inferred from all of its rows, so
    columns that are ``None`` for early rows (e.g. shootout events)
    still get their proper dtype. Empty tables become empty frames.

    Args:
        rows: Output of :func:`~icetime.output.rows.project_rows`.

    Returns:
        Mapping of table name to DataFrame, in the same order.
    """
    return {
        table: pl.DataFrame(list(table_rows), infer_schema_length=None)
        if table_rows
        else pl.DataFrame()
        for table, table_rows in rows.items()
    }


def concat_frames(
    matches: Sequence[Mapping[str, pl.DataFrame]],
) -> dict[str, pl.DataFrame]:
    """Stack the per-match frames of several matches table by table.

    Empty frames are skipped; a table empty for every match stays
    empty.

    Args:
        matches: Outputs of :func:`to_frames`.

    Returns:
        Mapping of table name to the combined DataFrame.
    """
    tables: dict[str, list[pl.DataFrame]] = {}
    for frames in matches:
        for table, frame in frames.items():
            parts = tables.setdefault(table, [])
            if frame.height:
                parts.append(frame)
    return {
        table: pl.concat(parts, how="diagonal_relaxed") if parts else pl.DataFrame()
        for table, parts in tables.items()
    }
