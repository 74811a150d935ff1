"""NHL feed adapter for the icetime engine.

Implements the :class:`~icetime.adapters.base.FeedAdapter` protocol by
fetching a match's play-by-play and shift-chart documents over HTTP
with ``requests`` and caching both to disk. Retries are left to the
caller: a failed request raises :class:`~icetime.exceptions.AdapterError`.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import requests

from icetime.adapters.cache import FeedCache
from icetime.config import FetchConfig
from icetime.exceptions import AdapterError

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

_MIN_SEASON: int = 2010
_MAX_SEASON: int = 2030
_MIN_GAME_NUMBER: int = 20000
_MAX_GAME_NUMBER: int = 40000


def game_ids(season: int, first: int, last: int | None = None) -> list[int]:
    """Build full game ids for a range of game numbers in one season.

    Game numbers are the five trailing digits of a game id: ``2xxxx``
    for regular season games, ``3rsgg`` for playoffs (round, series,
    game).

    Args:
        season: Year in which the season started (2016 for 2016-17).
        first: First game number.
        last: Last game number (inclusive); defaults to *first*.

    Returns:
        Sorted list of game ids.

    Raises:
        ValueError: If the season or a game number is out of range.
    """
    if not _MIN_SEASON <= season <= _MAX_SEASON:
        msg = f"season must be in [{_MIN_SEASON}, {_MAX_SEASON}], got {season}"
        raise ValueError(msg)
    last = first if last is None else last
    for number in (first, last):
        if not _MIN_GAME_NUMBER < number < _MAX_GAME_NUMBER:
            msg = f"Invalid game number {number}"
            raise ValueError(msg)
    if last < first:
        msg = f"Game range is reversed: {first}-{last}"
        raise ValueError(msg)
    return [season * 1_000_000 + n for n in range(first, last + 1)]


class NhlFeedAdapter:
    """Adapter for loading raw NHL feed documents.

    Satisfies the :class:`~icetime.adapters.base.FeedAdapter` protocol.
    Checks the disk cache first and fetches missing documents over
    HTTP.

    Attributes:
        _cache: Disk-based cache for raw documents.
        _config: URL templates and request timeout.
        _session: HTTP session used for requests.
    """

    __slots__ = ("_cache", "_config", "_session")

    def __init__(
        self,
        cache_dir: Path,
        config: FetchConfig | None = None,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize the adapter with a cache directory.

        Args:
            cache_dir: Directory for caching raw documents.
            config: Fetch configuration; defaults to ``FetchConfig()``.
            session: Optional pre-configured HTTP session.
        """
        self._cache = FeedCache(cache_dir)
        self._config = config or FetchConfig()
        self._session = session or requests.Session()

    @property
    def cache(self) -> FeedCache:
        """The underlying document cache."""
        return self._cache

    def load_feeds(self, game_id: int) -> tuple[dict[str, Any], dict[str, Any]]:
        """Return the play-by-play and shift-chart documents for a match.

        Both documents are served from the cache when present; a miss
        on either fetches it and stores it.

        Args:
            game_id: Identifier of the match.

        Returns:
            ``(pbp, shifts)`` decoded JSON documents.

        Raises:
            AdapterError: If a request fails or the shift data is empty.
        """
        pbp = self._load(game_id, "pbp", self._config.pbp_url)
        shifts = self._load(game_id, "shifts", self._config.shift_url)
        return pbp, shifts

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _load(self, game_id: int, kind: str, url_template: str) -> dict[str, Any]:
        cached = self._cache.get(game_id, kind)
        if cached is not None:
            return cached

        document = self._fetch(url_template.format(game_id=game_id))
        if kind == "shifts" and not document.get("data"):
            msg = f"Shift data is empty for game {game_id}"
            raise AdapterError(msg)
        self._cache.put(game_id, kind, document)
        return document

    def _fetch(self, url: str) -> dict[str, Any]:
        logger.info("Downloading %s", url)
        try:
            response = self._session.get(url, timeout=self._config.timeout_seconds)
        except requests.RequestException as exc:
            msg = f"Request to {url} failed: {exc}"
            raise AdapterError(msg) from exc

        if response.status_code != 200:
            msg = f"Unexpected status code {response.status_code} from {url}"
            raise AdapterError(msg)

        try:
            document: dict[str, Any] = response.json()
        except ValueError as exc:
            msg = f"Response from {url} is not JSON"
            raise AdapterError(msg) from exc
        return document
