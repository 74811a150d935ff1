"""Disk-based cache for raw feed documents.

Stores each decoded JSON document as an orjson-encoded file keyed by
game id and feed kind. Writes are atomic (write to a temporary file,
then rename) to prevent corruption if the process is interrupted
mid-write.
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from typing import Any

import orjson

logger = logging.getLogger(__name__)

FEED_KINDS: tuple[str, ...] = ("pbp", "shifts")


class FeedCache:
    """Disk-based cache for raw feed documents.

    Attributes:
        _cache_dir: Root directory where cache files are stored.
    """

    __slots__ = ("_cache_dir",)

    def __init__(self, cache_dir: Path) -> None:
        """Initialize the cache and ensure the directory exists.

        Args:
            cache_dir: Directory for storing cached documents.
        """
        self._cache_dir = cache_dir
        self._cache_dir.mkdir(parents=True, exist_ok=True)

    def cache_path(self, game_id: int, kind: str) -> Path:
        """Return the file path for a game's feed document.

        Args:
            game_id: Identifier of the match.
            kind: Feed kind, one of :data:`FEED_KINDS`.

        Returns:
            Path to the JSON file for this document.

        Raises:
            ValueError: If *kind* is not a known feed kind.
        """
        if kind not in FEED_KINDS:
            msg = f"kind must be one of {FEED_KINDS}, got {kind!r}"
            raise ValueError(msg)
        return self._cache_dir / f"{game_id}-{kind}.json"

    def exists(self, game_id: int, kind: str) -> bool:
        """Check whether a cached document exists."""
        return self.cache_path(game_id, kind).is_file()

    def game_ids(self) -> list[int]:
        """Return sorted ids of games with every feed kind cached."""
        found: dict[int, set[str]] = {}
        for path in self._cache_dir.glob("*-*.json"):
            gid, _, kind = path.stem.partition("-")
            if gid.isdigit():
                found.setdefault(int(gid), set()).add(kind)
        return sorted(gid for gid, kinds in found.items() if kinds >= set(FEED_KINDS))

    def get(self, game_id: int, kind: str) -> dict[str, Any] | None:
        """Load a cached document.

        Args:
            game_id: Identifier of the match.
            kind: Feed kind.

        Returns:
            The decoded document, or ``None`` on a cache miss.
        """
        path = self.cache_path(game_id, kind)
        if not path.is_file():
            logger.debug("Cache miss for %s feed of game %s", kind, game_id)
            return None

        logger.debug("Cache hit for %s feed of game %s", kind, game_id)
        result: dict[str, Any] = orjson.loads(path.read_bytes())
        return result

    def put(self, game_id: int, kind: str, document: dict[str, Any]) -> None:
        """Save a document using an atomic write.

        Args:
            game_id: Identifier of the match.
            kind: Feed kind.
            document: Decoded JSON document to cache.
        """
        path = self.cache_path(game_id, kind)
        fd, tmp_path_str = tempfile.mkstemp(dir=self._cache_dir, suffix=".tmp")
        tmp_path = Path(tmp_path_str)
        try:
            with open(fd, "wb") as f:
                f.write(orjson.dumps(document))
            tmp_path.replace(path)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise
        logger.debug("Cached %s feed of game %s at %s", kind, game_id, path)
