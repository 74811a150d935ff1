"""Summarize skater production over all transformed games.

Loads every ``{game_id}.json`` written by ``transform_games.py``,
stacks the tables with polars and writes one skater summary CSV per
configured situation filter.

Usage::

    python scripts/summarize_skaters.py
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path

import orjson
import polars as pl
from tqdm import tqdm

# ---------------------------------------------------------------------------
# Ensure the src package is importable when running as a standalone script.
# ---------------------------------------------------------------------------
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(_PROJECT_ROOT / "src"))

from icetime.analysis import summarize_skaters  # noqa: E402
from icetime.output import concat_frames, to_frames  # noqa: E402

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)

OUTPUT_DIR = _PROJECT_ROOT / "data" / "output"
SUMMARY_DIR = OUTPUT_DIR / "summaries"


@dataclass(frozen=True, slots=True)
class SummaryFilter:
    """One skater summary to produce.

    Attributes:
        label: File stem of the summary CSV.
        strength_sits: Strength situations to include, ``None`` for all.
        score_sits: Score situations to include, ``None`` for all.
        playoffs: ``"only"`` or ``"exclude"``, ``None`` for every game.
        start: First game date (``YYYY-MM-DD``), ``None`` for no bound.
        end: Last game date (``YYYY-MM-DD``), ``None`` for no bound.
    """

    label: str
    strength_sits: tuple[str, ...] | None = None
    score_sits: tuple[int, ...] | None = None
    playoffs: str | None = None
    start: str | None = None
    end: str | None = None


FILTERS: tuple[SummaryFilter, ...] = (
    SummaryFilter("all"),
    SummaryFilter("ev5", strength_sits=("ev5",)),
    SummaryFilter("ev5_close", strength_sits=("ev5",), score_sits=(-1, 0, 1)),
    SummaryFilter("pp", strength_sits=("pp54", "pp53", "pp43")),
    SummaryFilter("ev5_playoffs", strength_sits=("ev5",), playoffs="only"),
    SummaryFilter("2016_17", start="2016-10-01", end="2017-06-30"),
)


def _load_frames(output_dir: Path) -> dict[str, pl.DataFrame]:
    paths = sorted(output_dir.glob("*.json"))
    logger.info("Loading %d transformed games from %s", len(paths), output_dir)
    per_game = [
        to_frames(orjson.loads(path.read_bytes()))
        for path in tqdm(paths, desc="Loading", unit="game")
    ]
    return concat_frames(per_game)


def main() -> None:
    """Write every configured skater summary."""
    frames = _load_frames(OUTPUT_DIR)
    if frames.get("game_player_stats", pl.DataFrame()).height == 0:
        logger.warning("No player stats found in %s", OUTPUT_DIR)
        return

    SUMMARY_DIR.mkdir(parents=True, exist_ok=True)
    for summary_filter in FILTERS:
        summary = summarize_skaters(
            frames,
            strength_sits=summary_filter.strength_sits,
            score_sits=summary_filter.score_sits,
            playoffs=summary_filter.playoffs,
            start=summary_filter.start,
            end=summary_filter.end,
        )
        out_path = SUMMARY_DIR / f"skaters_{summary_filter.label}.csv"
        summary.with_columns(pl.col("teams", "positions").list.join(",")).write_csv(
            out_path
        )
        logger.info(
            "%-12s %5d skaters -> %s", summary_filter.label, summary.height, out_path
        )


if __name__ == "__main__":
    main()
