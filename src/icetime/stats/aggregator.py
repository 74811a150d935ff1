"""Attribution of ice time and events to team and player counters.

Walks the timeline and the attributed events of one match and fills a
:class:`~icetime.stats.counters.SituationCounters` per team and per
rostered player. Every increment is recorded at the side's own
``(strength, score)`` situation pair.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from icetime.adapters.schemas import VENUES, venue_index
from icetime.stats.counters import SituationCounters

if TYPE_CHECKING:
    from collections.abc import Sequence

    from icetime.adapters.schemas import GameFeed, NormalizedEvent, Shift
    from icetime.timeline.intervals import Timeline

logger = logging.getLogger(__name__)

# ------------------------------------------------------------------
# Constants
# ------------------------------------------------------------------

TRACKED_EVENT_TYPES: frozenset[str] = frozenset(
    {
        "goal",
        "shot",
        "missed_shot",
        "blocked_shot",
        "faceoff",
        "penalty",
        "hit",
        "takeaway",
        "giveaway",
    }
)

# Event type -> prefix of its "for"/"against" counter pair.
_FOR_AGAINST_PREFIX: dict[str, str] = {
    "goal": "g",
    "shot": "s",
    "missed_shot": "ms",
    "blocked_shot": "bs",
    "hit": "h",
}

# Counted for the acting side only.
_ACTING_SIDE_STAT: dict[str, str] = {
    "giveaway": "give",
    "takeaway": "take",
}

ROLE_STATS: dict[str, tuple[str, ...]] = {
    "scorer": ("ig", "isog"),
    "assist1": ("ia1",),
    "assist2": ("ia2",),
    "blocker": ("i_blocked",),
    "hitter": ("ihf",),
    "hittee": ("iha",),
    "giver": ("i_give",),
    "taker": ("i_take",),
    "penaltyon": ("i_pen_taken",),
    "drewby": ("i_pen_drawn",),
}

_EFFECTIVE_PENALTY_ROLE_STATS: dict[str, str] = {
    "penaltyon": "i_eff_pen_taken",
    "drewby": "i_eff_pen_drawn",
}

_SHOOTER_STATS: dict[str, str] = {
    "shot": "isog",
    "blocked_shot": "ibs",
    "missed_shot": "ims",
}

_FACEOFF_ROLE_RESULT: dict[str, str] = {
    "winner": "won",
    "loser": "lost",
}


@dataclass(frozen=True, slots=True)
class MatchStats:
    """Accumulated counters for one match.

    Attributes:
        teams: Counters keyed by venue.
        players: Counters keyed by player id, one per rostered player.
    """

    teams: dict[str, SituationCounters]
    players: dict[int, SituationCounters]


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------


def is_tracked(event: NormalizedEvent) -> bool:
    """Whether an event feeds the on-ice counters."""
    return event.event_type in TRACKED_EVENT_TYPES or event.is_icing


def on_ice_stats(event: NormalizedEvent) -> tuple[list[str], list[str]]:
    """Return the ``(away, home)`` on-ice counters an event increments.

    Args:
        event: A tracked, attributed event with a venue.

    Returns:
        Stat names for the away side and for the home side.
    """
    acting = venue_index(event.venue)  # type: ignore[arg-type]
    stats: tuple[list[str], list[str]] = ([], [])

    for side in (0, 1):
        is_actor = side == acting
        if event.event_type in _FOR_AGAINST_PREFIX:
            suffix = "f" if is_actor else "a"
            stats[side].append(f"{_FOR_AGAINST_PREFIX[event.event_type]}{suffix}")
            if event.event_type == "goal":
                stats[side].append(f"s{suffix}")
        elif event.event_type == "penalty":
            suffix = "taken" if is_actor else "drawn"
            stats[side].append(f"pen_{suffix}")
            if event.pen_is_effective:
                stats[side].append(f"eff_pen_{suffix}")
        elif event.event_type == "faceoff":
            if event.zones is not None:
                result = "won" if is_actor else "lost"
                stats[side].append(f"{event.zones[side]}fo_{result}")
        elif event.event_type in _ACTING_SIDE_STAT:
            if is_actor:
                stats[side].append(_ACTING_SIDE_STAT[event.event_type])
        elif event.is_icing:
            stats[side].append("icing_taken" if is_actor else "icing_drawn")
    return stats


def role_stats(event: NormalizedEvent, role: str, side: int) -> list[str]:
    """Return the individual counters a role on an event increments.

    Args:
        event: An attributed event.
        role: Normalized role label.
        side: The role player's side index.

    Returns:
        Stat names (possibly empty).
    """
    if role in _FACEOFF_ROLE_RESULT:
        if event.zones is None:
            return []
        return [f"i_{event.zones[side]}fo_{_FACEOFF_ROLE_RESULT[role]}"]
    if role == "shooter":
        stat = _SHOOTER_STATS.get(event.event_type)
        return [stat] if stat else []

    stats = list(ROLE_STATS.get(role, ()))
    if event.pen_is_effective and role in _EFFECTIVE_PENALTY_ROLE_STATS:
        stats.append(_EFFECTIVE_PENALTY_ROLE_STATS[role])
    return stats


def _count_toi(
    timeline: Timeline,
    teams: dict[str, SituationCounters],
    players: dict[int, SituationCounters],
) -> None:
    for interval in timeline:
        for side, venue in enumerate(VENUES):
            strength = interval.strength_sits[side]
            score = interval.score_sits[side]
            teams[venue].increment(strength, score, "toi")
            for pid in interval.on_ice(side):
                players[pid].increment(strength, score, "toi")


def _count_on_ice(
    events: Sequence[NormalizedEvent],
    teams: dict[str, SituationCounters],
    players: dict[int, SituationCounters],
) -> None:
    for event in events:
        if event.strength_sits is None or not is_tracked(event):
            continue
        if event.venue is None:
            logger.debug(
                "Event %d (%s) has no team and is not counted",
                event.event_id,
                event.event_type,
            )
            continue
        skaters, goalies = event.skaters, event.goalies
        for side, stats in enumerate(on_ice_stats(event)):
            strength = event.strength_sits[side]
            score = event.score_sits[side]  # type: ignore[index]
            on_ice = skaters[side] + goalies[side]  # type: ignore[index]
            for stat in stats:
                teams[VENUES[side]].increment(strength, score, stat)
                for pid in on_ice:
                    players[pid].increment(strength, score, stat)


def _count_individual(
    events: Sequence[NormalizedEvent],
    feed: GameFeed,
    players: dict[int, SituationCounters],
) -> None:
    for event in events:
        if event.strength_sits is None or event.score_sits is None:
            continue
        for player_role in event.roles:
            info = feed.players.get(player_role.player_id)
            if info is None:
                # e.g. a player serving a coach's misconduct
                logger.debug(
                    "Game %s: role player %s on event %d is not rostered",
                    feed.game_id,
                    player_role.player_id,
                    event.event_id,
                )
                continue
            side = venue_index(info.venue)
            for stat in role_stats(event, player_role.role, side):
                players[info.player_id].increment(
                    event.strength_sits[side], event.score_sits[side], stat
                )


def _count_otf(
    shifts: Sequence[Shift],
    events: Sequence[NormalizedEvent],
    timeline: Timeline,
    players: dict[int, SituationCounters],
) -> None:
    faceoffs = {(e.period, e.time) for e in events if e.event_type == "faceoff"}
    for shift in shifts:
        if (shift.period, shift.start) in faceoffs:
            continue
        interval = timeline.starting_at(shift.period, shift.start)
        if interval is None:
            continue
        side = venue_index(shift.venue)
        players[shift.player_id].increment(
            interval.strength_sits[side], interval.score_sits[side], "i_otf"
        )


# ------------------------------------------------------------------
# Public API
# ------------------------------------------------------------------


def aggregate_stats(
    feed: GameFeed,
    timeline: Timeline,
    events: Sequence[NormalizedEvent],
    shifts: Sequence[Shift],
) -> MatchStats:
    """Accumulate team and player counters for one match.

    Args:
        feed: Parsed play-by-play feed (roster).
        timeline: The match timeline.
        events: Attributed events (shootout events are ignored).
        shifts: Validated shifts.

    Returns:
        The filled :class:`MatchStats`.
    """
    teams = {venue: SituationCounters() for venue in VENUES}
    players = {pid: SituationCounters() for pid in feed.players}

    _count_toi(timeline, teams, players)
    _count_on_ice(events, teams, players)
    _count_individual(events, feed, players)
    _count_otf(shifts, events, timeline, players)

    return MatchStats(teams=teams, players=players)
