"""Data adapter layer for the icetime engine.

Re-exports the canonical schemas, the adapter protocol, the NHL feed
adapter, the raw-document parsers and the disk-based feed cache so that
downstream code can import everything from :mod:`icetime.adapters`.
"""

from icetime.adapters.base import FeedAdapter
from icetime.adapters.cache import FeedCache
from icetime.adapters.feed import (
    game_status,
    parse_clock,
    parse_game_feed,
    parse_shift_feed,
)
from icetime.adapters.nhl import NhlFeedAdapter, game_ids
from icetime.adapters.schemas import (
    SHOT_EVENT_TYPES,
    VENUES,
    GameFeed,
    NormalizedEvent,
    Period,
    PlayerInfo,
    PlayerRole,
    RawEvent,
    RawShift,
    Shift,
    TeamInfo,
)

__all__ = [
    "SHOT_EVENT_TYPES",
    "VENUES",
    "FeedAdapter",
    "FeedCache",
    "GameFeed",
    "NhlFeedAdapter",
    "NormalizedEvent",
    "Period",
    "PlayerInfo",
    "PlayerRole",
    "RawEvent",
    "RawShift",
    "Shift",
    "TeamInfo",
    "game_ids",
    "game_status",
    "parse_clock",
    "parse_game_feed",
    "parse_shift_feed",
]
