"""End-to-end processing of a single match.

Wires the stages together: event normalization, period orientation,
the per-second timeline, event attribution, stat aggregation and
situation compression, followed by projection into storage-table rows.

Public API
----------
.. function:: process_match

    Run every engine stage on a parsed feed and its shifts.

.. function:: transform_match

    Turn the two raw JSON documents of a match into table rows, or
    ``None`` when the match cannot be transformed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from icetime.adapters.feed import game_status, parse_game_feed, parse_shift_feed
from icetime.config import EngineConfig
from icetime.events.normalizer import normalize_events
from icetime.events.periods import (
    assign_zones,
    attribute_icings,
    build_periods,
    resolve_orientation,
)
from icetime.exceptions import FeedFormatError
from icetime.output.rows import project_rows
from icetime.stats.aggregator import aggregate_stats
from icetime.timeline.compression import compress_situations
from icetime.timeline.intervals import build_timeline, prepare_shifts

if TYPE_CHECKING:
    from collections.abc import Sequence

    from icetime.adapters.schemas import (
        GameFeed,
        NormalizedEvent,
        Period,
        RawShift,
        Shift,
    )
    from icetime.output.rows import Row
    from icetime.stats.counters import SituationCounters
    from icetime.timeline.compression import SituationRanges
    from icetime.timeline.intervals import Timeline

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ProcessedMatch:
    """Everything the engine derives from one match.

    Attributes:
        feed: The parsed play-by-play feed.
        periods: Periods with orientation resolved.
        events: Normalized and attributed events in feed order.
        shifts: Validated shifts.
        timeline: Per-second timeline.
        team_stats: Team counters keyed by venue.
        player_stats: Player counters keyed by player id.
        situations: Compressed situation time ranges.
    """

    feed: GameFeed
    periods: tuple[Period, ...]
    events: tuple[NormalizedEvent, ...]
    shifts: tuple[Shift, ...]
    timeline: Timeline
    team_stats: dict[str, SituationCounters]
    player_stats: dict[int, SituationCounters]
    situations: tuple[SituationRanges, ...]


def parse_feeds(
    pbp: dict[str, Any],
    shifts: dict[str, Any],
) -> tuple[GameFeed, list[RawShift]]:
    """Parse both raw documents of a match.

    Raises:
        FeedFormatError: If either document is malformed.
    """
    return parse_game_feed(pbp), parse_shift_feed(shifts)


def process_match(
    feed: GameFeed,
    raw_shifts: Sequence[RawShift],
    config: EngineConfig | None = None,
) -> ProcessedMatch:
    """Run every engine stage on one match.

    Args:
        feed: Parsed play-by-play feed.
        raw_shifts: Parsed shift-chart rows.
        config: Engine configuration. Defaults to ``EngineConfig()``.

    Returns:
        The :class:`ProcessedMatch`.

    Raises:
        TimelineError: If an event cannot be placed on the timeline.
    """
    if config is None:
        config = EngineConfig()

    events = normalize_events(feed.events, feed.away.team_id, feed.home.team_id)
    periods = build_periods(events, feed.game_id, config)
    periods = resolve_orientation(periods, events, feed.game_id, config)
    events = assign_zones(events, periods, feed.game_id, config)
    events = attribute_icings(events, feed.teams)

    shifts = prepare_shifts(raw_shifts, feed, periods)
    timeline = build_timeline(periods, shifts, events, feed.players)
    events = timeline.attribute_events(events)

    stats = aggregate_stats(feed, timeline, events, shifts)
    situations = compress_situations(timeline, feed.teams)

    logger.debug(
        "Game %s: %d periods, %d events, %d shifts, %d intervals",
        feed.game_id,
        len(periods),
        len(events),
        len(shifts),
        len(timeline),
    )
    return ProcessedMatch(
        feed=feed,
        periods=tuple(periods),
        events=tuple(events),
        shifts=tuple(shifts),
        timeline=timeline,
        team_stats=stats.teams,
        player_stats=stats.players,
        situations=tuple(situations),
    )


def transform_match(
    pbp: dict[str, Any],
    shifts: dict[str, Any],
    config: EngineConfig | None = None,
) -> dict[str, list[Row]] | None:
    """Transform the raw documents of one match into table rows.

    Args:
        pbp: Decoded play-by-play document.
        shifts: Decoded shift-chart document.
        config: Engine configuration. Defaults to ``EngineConfig()``.

    Returns:
        Mapping of table name to rows, or ``None`` when the game is
        not final or a document is malformed.

    Raises:
        TimelineError: If an event cannot be placed on the timeline.
    """
    game_id = pbp.get("gamePk") if isinstance(pbp, dict) else None
    try:
        status = game_status(pbp)
        if status != "final":
            logger.info("Game %s is not final (status %r), skipping", game_id, status)
            return None
        feed, raw_shifts = parse_feeds(pbp, shifts)
    except FeedFormatError as exc:
        logger.warning("Game %s not transformed: %s", game_id, exc)
        return None

    return project_rows(process_match(feed, raw_shifts, config))
