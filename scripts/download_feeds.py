"""Download and cache NHL play-by-play and shift-chart feeds.

Downloads both documents for every game of the configured game ranges
and logs a per-range summary. Games that fail to download are logged
and skipped; rerunning the script only fetches what is still missing.

Usage::

    python scripts/download_feeds.py
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from tqdm import tqdm

# ---------------------------------------------------------------------------
# Ensure the src package is importable when running as a standalone script.
# ---------------------------------------------------------------------------
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(_PROJECT_ROOT / "src"))

from icetime.adapters import NhlFeedAdapter, game_ids  # noqa: E402
from icetime.exceptions import AdapterError  # noqa: E402

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)

CACHE_DIR = _PROJECT_ROOT / "data" / "raw"


# ------------------------------------------------------------------
# Dataset definitions
# ------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class GameRange:
    """A range of games in one season to download.

    Attributes:
        label: Human-readable label for log output.
        season: Year in which the season started.
        first: First game number.
        last: Last game number (inclusive).
    """

    label: str
    season: int
    first: int
    last: int


DATASETS: tuple[GameRange, ...] = (
    GameRange("2016-17 regular season, opening week", 2016, 20001, 20050),
    GameRange("2016-17 playoffs, first round series A", 2016, 30111, 30117),
)


# ------------------------------------------------------------------
# Per-range statistics
# ------------------------------------------------------------------


@dataclass(slots=True)
class RangeStats:
    """Mutable accumulator for one range's download statistics.

    Attributes:
        label: Human-readable range label.
        requested: Number of games requested.
        cached: Games already cached before this run.
        downloaded: Games fetched during this run.
        failed: Games whose download failed.
    """

    label: str
    requested: int = 0
    cached: int = 0
    downloaded: int = 0
    failed: int = 0


def _download_range(adapter: NhlFeedAdapter, game_range: GameRange) -> RangeStats:
    """Download every game of one range.

    Args:
        adapter: Configured NHL adapter (with cache).
        game_range: Range to download.

    Returns:
        Accumulated statistics for this range.
    """
    ids = game_ids(game_range.season, game_range.first, game_range.last)
    stats = RangeStats(label=game_range.label, requested=len(ids))

    for gid in tqdm(ids, desc=game_range.label, unit="game"):
        if adapter.cache.exists(gid, "pbp") and adapter.cache.exists(gid, "shifts"):
            stats.cached += 1
            continue
        try:
            adapter.load_feeds(gid)
        except AdapterError as exc:
            logger.warning("Game %d: %s", gid, exc)
            stats.failed += 1
            continue
        stats.downloaded += 1

    return stats


# ------------------------------------------------------------------
# Summary log
# ------------------------------------------------------------------

_HEADER = f"{'Range':<45} {'Games':>6} {'Cached':>7} {'New':>6} {'Failed':>7}"
_SEPARATOR = "-" * len(_HEADER)


def _print_summary(all_stats: list[RangeStats]) -> None:
    """Log a formatted download summary table."""
    logger.info("")
    logger.info("=" * len(_HEADER))
    logger.info("DOWNLOAD SUMMARY")
    logger.info("=" * len(_HEADER))
    logger.info(_HEADER)
    logger.info(_SEPARATOR)
    for rs in all_stats:
        logger.info(
            "%-45s %6d %7d %6d %7d",
            rs.label,
            rs.requested,
            rs.cached,
            rs.downloaded,
            rs.failed,
        )
    logger.info(_SEPARATOR)
    logger.info(
        "%-45s %6d %7d %6d %7d",
        "TOTAL",
        sum(rs.requested for rs in all_stats),
        sum(rs.cached for rs in all_stats),
        sum(rs.downloaded for rs in all_stats),
        sum(rs.failed for rs in all_stats),
    )
    logger.info("=" * len(_HEADER))
    logger.info("Cache directory: %s", CACHE_DIR)


# ------------------------------------------------------------------
# Entry point
# ------------------------------------------------------------------


def main() -> None:
    """Download and cache all configured game ranges."""
    adapter = NhlFeedAdapter(cache_dir=CACHE_DIR)
    all_stats = [_download_range(adapter, game_range) for game_range in DATASETS]
    _print_summary(all_stats)


if __name__ == "__main__":
    main()
