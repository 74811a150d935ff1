"""Transform every cached game into storage-table rows.

Runs the engine on each game found in the feed cache and writes one
orjson-encoded ``{game_id}.json`` file of table rows per game to the
output directory. Non-final and malformed games are skipped; games
that violate a timeline invariant are logged as failures.

Usage::

    python scripts/transform_games.py
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import orjson
from tqdm import tqdm

# ---------------------------------------------------------------------------
# Ensure the src package is importable when running as a standalone script.
# ---------------------------------------------------------------------------
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(_PROJECT_ROOT / "src"))

from icetime.adapters import FeedCache  # noqa: E402
from icetime.config import PipelineConfig  # noqa: E402
from icetime.exceptions import TimelineError  # noqa: E402
from icetime.pipeline import transform_match  # noqa: E402

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)

CONFIG = PipelineConfig(
    cache_dir=_PROJECT_ROOT / "data" / "raw",
    output_dir=_PROJECT_ROOT / "data" / "output",
)


def main() -> None:
    """Transform all cached games and log a summary."""
    cache = FeedCache(CONFIG.cache_dir)
    CONFIG.output_dir.mkdir(parents=True, exist_ok=True)

    ids = cache.game_ids()
    logger.info("Found %d cached games in %s", len(ids), CONFIG.cache_dir)

    written = skipped = failed = 0
    row_counts: dict[str, int] = {}
    for gid in tqdm(ids, desc="Transforming", unit="game"):
        pbp = cache.get(gid, "pbp")
        shifts = cache.get(gid, "shifts")
        if pbp is None or shifts is None:
            skipped += 1
            continue
        try:
            tables = transform_match(pbp, shifts, CONFIG.engine)
        except TimelineError:
            logger.exception("Game %d failed", gid)
            failed += 1
            continue
        if tables is None:
            skipped += 1
            continue

        out_path = CONFIG.output_dir / f"{gid}.json"
        out_path.write_bytes(orjson.dumps(tables))
        for table, rows in tables.items():
            row_counts[table] = row_counts.get(table, 0) + len(rows)
        written += 1

    logger.info("")
    logger.info("Written: %d  Skipped: %d  Failed: %d", written, skipped, failed)
    for table, count in row_counts.items():
        logger.info("  %-20s %9d rows", table, count)
    logger.info("Output directory: %s", CONFIG.output_dir)


if __name__ == "__main__":
    main()
