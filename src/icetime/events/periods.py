"""Period construction and rink-orientation resolution.

The play-by-play feed does not say which half of the rink each team
defended, so it is inferred per period from shot locations: a team
shoots mostly at the goal in its offensive half. Known-bad periods are
corrected from the override tables in
:class:`~icetime.config.EngineConfig`.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING

import numpy as np

from icetime.adapters.schemas import VENUES, NormalizedEvent, Period, venue_index

if TYPE_CHECKING:
    from collections.abc import Sequence

    from icetime.adapters.schemas import TeamInfo
    from icetime.config import EngineConfig

logger = logging.getLogger(__name__)

_FLIP_ZONE: dict[str, str] = {"o": "d", "d": "o", "n": "n"}


# ------------------------------------------------------------------
# Periods
# ------------------------------------------------------------------


def build_periods(
    events: Sequence[NormalizedEvent],
    game_id: int,
    config: EngineConfig,
) -> list[Period]:
    """Derive the match's periods from ``period_end`` markers.

    Some feeds carry two markers for one period; the first wins.
    Duration corrections from ``config.period_fixes`` are applied
    afterwards.

    Args:
        events: Normalized events.
        game_id: Identifier of the match.
        config: Engine configuration.

    Returns:
        Periods sorted by number, orientation unresolved.
    """
    periods: dict[int, Period] = {}
    for event in events:
        if event.event_type == "period_end" and event.period not in periods:
            periods[event.period] = Period(
                period=event.period,
                duration=event.time,
                period_type=event.period_type,
            )

    for fix in config.period_fixes.get(game_id, ()):
        logger.debug(
            "Game %s: period %d duration fixed to %d", game_id, fix.period, fix.duration
        )
        existing = periods.get(fix.period)
        if existing is None:
            periods[fix.period] = Period(
                period=fix.period,
                duration=fix.duration,
                period_type=fix.period_type,
            )
        else:
            periods[fix.period] = replace(existing, duration=fix.duration)

    return [periods[number] for number in sorted(periods)]


def home_defends_negative_x(shots: Sequence[NormalizedEvent]) -> bool:
    """Infer from one period's shot attempts whether home defended x < 0.

    Uses the venue that shot more in the period. When both venues have
    the same count the away side is used. That tie-break is arbitrary:
    real feeds almost never tie.

    Args:
        shots: Shot-class events of a single period.

    Returns:
        ``True`` if the home team's defensive half has negative x.
    """
    by_venue = {venue: [s for s in shots if s.venue == venue] for venue in VENUES}
    shooter = "home" if len(by_venue["home"]) > len(by_venue["away"]) else "away"
    xs = np.array(
        [s.location[0] for s in by_venue[shooter] if s.location is not None],
        dtype=float,
    )
    if xs.size == 0:
        return False

    pos_minus_neg = int(np.count_nonzero(xs > 0) - np.count_nonzero(xs < 0))
    return (shooter == "home" and pos_minus_neg > 0) or (
        shooter == "away" and pos_minus_neg < 0
    )


def resolve_orientation(
    periods: Sequence[Period],
    events: Sequence[NormalizedEvent],
    game_id: int,
    config: EngineConfig,
) -> list[Period]:
    """Set ``home_def_zone_neg`` on every non-shootout period.

    Args:
        periods: Periods from :func:`build_periods`.
        events: Normalized events.
        game_id: Identifier of the match.
        config: Engine configuration with the override table.

    Returns:
        New list of periods with orientation resolved.
    """
    overrides = config.orientation_fixes.get(game_id, {})
    resolved: list[Period] = []
    for period in periods:
        if period.is_shootout:
            resolved.append(period)
            continue

        shots = [e for e in events if e.period == period.period and e.is_shot_attempt]
        flag = home_defends_negative_x(shots)
        if period.period in overrides:
            logger.debug(
                "Game %s: period %d orientation overridden", game_id, period.period
            )
            flag = overrides[period.period]
        resolved.append(replace(period, home_def_zone_neg=flag))
    return resolved


# ------------------------------------------------------------------
# Zones
# ------------------------------------------------------------------


def home_zone(home_def_zone_neg: bool, x: float, neutral_half_width: float) -> str:
    """Return the home team's zone (``o``, ``d`` or ``n``) at *x*.

    Centre ice is ``x = 0`` and the blue lines sit at
    ``±neutral_half_width``.
    """
    if -neutral_half_width <= x <= neutral_half_width:
        return "n"
    in_negative_half = x < -neutral_half_width
    return "d" if in_negative_half == home_def_zone_neg else "o"


def assign_zones(
    events: Sequence[NormalizedEvent],
    periods: Sequence[Period],
    game_id: int,
    config: EngineConfig,
) -> list[NormalizedEvent]:
    """Add zone and defensive-side pairs to located non-shootout events.

    For periods in which the teams changed ends mid-period, events in
    the second half of the period have both pairs reversed.

    Args:
        events: Normalized events.
        periods: Periods with orientation resolved.
        game_id: Identifier of the match.
        config: Engine configuration.

    Returns:
        New list of events.
    """
    by_number = {p.period: p for p in periods}
    end_changes = config.end_change_periods.get(game_id, frozenset())

    result: list[NormalizedEvent] = []
    for event in events:
        period = by_number.get(event.period)
        if (
            event.location is None
            or event.is_shootout
            or period is None
            or period.home_def_zone_neg is None
        ):
            result.append(event)
            continue

        h_zone = home_zone(
            period.home_def_zone_neg, event.location[0], config.neutral_zone_half_width
        )
        zones = (_FLIP_ZONE[h_zone], h_zone)
        def_sides = (1, -1) if period.home_def_zone_neg else (-1, 1)
        if event.period in end_changes and event.time > period.duration / 2:
            zones = (zones[1], zones[0])
            def_sides = (def_sides[1], def_sides[0])
        result.append(replace(event, zones=zones, def_sides=def_sides))
    return result


def attribute_icings(
    events: Sequence[NormalizedEvent],
    teams: tuple[TeamInfo, TeamInfo],
) -> list[NormalizedEvent]:
    """Attribute each icing stoppage to the team that iced the puck.

    The faceoff after an icing is in the offending team's defensive
    zone. Icings whose next faceoff has no zone stay unattributed.

    Args:
        events: Events with zones assigned, in feed order.
        teams: ``(away, home)`` team metadata.

    Returns:
        New list of events.
    """
    result = list(events)
    pending: int | None = None
    for i, event in enumerate(result):
        if event.is_icing:
            pending = i
        elif pending is not None and event.event_type == "faceoff":
            if event.zones is not None:
                venue = "away" if event.zones[0] == "d" else "home"
                team = teams[venue_index(venue)]
                result[pending] = replace(
                    result[pending], venue=venue, team_id=team.team_id
                )
            else:
                logger.debug(
                    "Icing event %d left unattributed: next faceoff has no zone",
                    result[pending].event_id,
                )
            pending = None
    return result
