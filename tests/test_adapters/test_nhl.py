"""Tests for the NHL feed adapter.

Validates game id construction, cache-first loading and HTTP failure
handling for :class:`icetime.adapters.nhl.NhlFeedAdapter`.

All tests use a mocked ``requests`` session to avoid real API calls.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from unittest.mock import MagicMock

import pytest
import requests

from icetime.adapters.base import FeedAdapter
from icetime.adapters.nhl import NhlFeedAdapter, game_ids
from icetime.config import FetchConfig
from icetime.exceptions import AdapterError

if TYPE_CHECKING:
    from pathlib import Path

_PBP: dict[str, Any] = {"gamePk": 2016020001, "liveData": {}}
_SHIFTS: dict[str, Any] = {"data": [{"playerId": 11}], "total": 1}


def _response(status: int = 200, payload: Any = None) -> MagicMock:
    response = MagicMock()
    response.status_code = status
    if isinstance(payload, Exception):
        response.json.side_effect = payload
    else:
        response.json.return_value = payload
    return response


def _session(*responses: MagicMock) -> MagicMock:
    session = MagicMock(spec=requests.Session)
    session.get.side_effect = list(responses)
    return session


# ------------------------------------------------------------------
# game_ids
# ------------------------------------------------------------------


class TestGameIds:
    """Full game ids are built from season and game numbers."""

    def test_single(self) -> None:
        assert game_ids(2016, 20001) == [2016020001]

    def test_range(self) -> None:
        assert game_ids(2016, 30111, 30113) == [2016030111, 2016030112, 2016030113]

    @pytest.mark.parametrize("season", [2009, 2031])
    def test_bad_season(self, season: int) -> None:
        with pytest.raises(ValueError, match="season"):
            game_ids(season, 20001)

    @pytest.mark.parametrize("number", [20000, 40000, 10001])
    def test_bad_game_number(self, number: int) -> None:
        with pytest.raises(ValueError, match="Invalid game number"):
            game_ids(2016, number)

    def test_reversed_range(self) -> None:
        with pytest.raises(ValueError, match="reversed"):
            game_ids(2016, 20010, 20001)


# ------------------------------------------------------------------
# Adapter
# ------------------------------------------------------------------


class TestProtocol:
    """The adapter satisfies the FeedAdapter protocol."""

    def test_is_feed_adapter(self, tmp_path: Path) -> None:
        adapter = NhlFeedAdapter(tmp_path, session=_session())
        assert isinstance(adapter, FeedAdapter)


class TestLoadFeeds:
    """Documents are fetched once, then served from the cache."""

    def test_fetch_and_cache(self, tmp_path: Path) -> None:
        session = _session(_response(payload=_PBP), _response(payload=_SHIFTS))
        adapter = NhlFeedAdapter(tmp_path, session=session)

        pbp, shifts = adapter.load_feeds(2016020001)

        assert pbp == _PBP
        assert shifts == _SHIFTS
        assert session.get.call_count == 2
        first_url = session.get.call_args_list[0].args[0]
        assert "2016020001" in first_url
        assert adapter.cache.exists(2016020001, "pbp")
        assert adapter.cache.exists(2016020001, "shifts")

    def test_cache_hit_skips_http(self, tmp_path: Path) -> None:
        session = _session()
        adapter = NhlFeedAdapter(tmp_path, session=session)
        adapter.cache.put(2016020001, "pbp", _PBP)
        adapter.cache.put(2016020001, "shifts", _SHIFTS)

        assert adapter.load_feeds(2016020001) == (_PBP, _SHIFTS)
        session.get.assert_not_called()

    def test_timeout_passed(self, tmp_path: Path) -> None:
        session = _session(_response(payload=_PBP), _response(payload=_SHIFTS))
        config = FetchConfig(timeout_seconds=5.0)
        NhlFeedAdapter(tmp_path, config=config, session=session).load_feeds(1)
        assert session.get.call_args_list[0].kwargs["timeout"] == 5.0


class TestFailures:
    """HTTP problems surface as AdapterError and nothing is cached."""

    def test_bad_status(self, tmp_path: Path) -> None:
        adapter = NhlFeedAdapter(tmp_path, session=_session(_response(status=404)))
        with pytest.raises(AdapterError, match="404"):
            adapter.load_feeds(2016020001)
        assert not adapter.cache.exists(2016020001, "pbp")

    def test_request_exception(self, tmp_path: Path) -> None:
        session = MagicMock(spec=requests.Session)
        session.get.side_effect = requests.ConnectionError("down")
        adapter = NhlFeedAdapter(tmp_path, session=session)
        with pytest.raises(AdapterError, match="failed"):
            adapter.load_feeds(2016020001)

    def test_not_json(self, tmp_path: Path) -> None:
        session = _session(_response(payload=ValueError("no json")))
        adapter = NhlFeedAdapter(tmp_path, session=session)
        with pytest.raises(AdapterError, match="not JSON"):
            adapter.load_feeds(2016020001)

    def test_empty_shift_data(self, tmp_path: Path) -> None:
        session = _session(_response(payload=_PBP), _response(payload={"data": []}))
        adapter = NhlFeedAdapter(tmp_path, session=session)
        with pytest.raises(AdapterError, match="Shift data is empty"):
            adapter.load_feeds(2016020001)
        assert adapter.cache.exists(2016020001, "pbp")
        assert not adapter.cache.exists(2016020001, "shifts")
