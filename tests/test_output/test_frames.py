"""Tests for converting table rows into polars DataFrames."""

from __future__ import annotations

from typing import Any

import polars as pl

from icetime.output.frames import concat_frames, to_frames
from icetime.output.rows import TABLES

Rows = dict[str, list[dict[str, Any]]]


class TestToFrames:
    """One frame per table, with inferred dtypes."""

    def test_standard_game(self, standard_rows: Rows) -> None:
        frames = to_frames(standard_rows)
        assert tuple(frames) == TABLES
        for table, frame in frames.items():
            assert frame.height == len(standard_rows[table]), table

    def test_late_values_set_dtype(self) -> None:
        rows = {"game_events": [{"loc_x": None}] * 200 + [{"loc_x": 12.5}]}
        frame = to_frames(rows)["game_events"]
        assert frame.schema["loc_x"] == pl.Float64
        assert frame["loc_x"][-1] == 12.5

    def test_list_columns(self, standard_rows: Rows) -> None:
        frame = to_frames(standard_rows)["game_shifts"]
        assert frame.schema["shifts"] == pl.List(pl.List(pl.Int64))

    def test_empty_table(self) -> None:
        frame = to_frames({"game_events": []})["game_events"]
        assert frame.is_empty()


class TestConcatFrames:
    """Per-match frames are stacked table by table."""

    def test_stack(self, standard_rows: Rows) -> None:
        frames = to_frames(standard_rows)
        combined = concat_frames([frames, frames])
        assert combined["games"].height == 2
        assert combined["game_events"].height == 2 * frames["game_events"].height

    def test_mismatched_columns(self) -> None:
        first = {"t": pl.DataFrame({"a": [1], "b": [None]})}
        second = {"t": pl.DataFrame({"a": [2], "b": ["x"], "c": [1.5]})}
        combined = concat_frames([first, second])["t"]
        assert combined.columns == ["a", "b", "c"]
        assert combined["b"].to_list() == [None, "x"]
        assert combined["c"].to_list() == [None, 1.5]

    def test_empty_frames_skipped(self) -> None:
        first = {"t": pl.DataFrame(), "u": pl.DataFrame()}
        second = {"t": pl.DataFrame({"a": [1]}), "u": pl.DataFrame()}
        combined = concat_frames([first, second])
        assert combined["t"].to_series().to_list() == [1]
        assert combined["u"].is_empty()
