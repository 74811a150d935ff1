"""Dense one-second timeline of on-ice personnel and score.

Every non-shootout period is cut into one :class:`Interval` per second
of ``[0, duration)``. Shifts place players on the intervals they fully
cover and goals raise the running score from their second onwards.
Strength and score situations are then derived per interval, and
discrete events are attributed to the interval in which they happened.
"""

from __future__ import annotations

import logging
from bisect import bisect_right
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from icetime.adapters.schemas import Shift, venue_index
from icetime.exceptions import TimelineError
from icetime.timeline.situations import (
    PEN_SHOT,
    score_situations,
    strength_situations,
)

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from icetime.adapters.schemas import (
        GameFeed,
        NormalizedEvent,
        Period,
        PlayerInfo,
        RawShift,
    )

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Interval:
    """One second of one period.

    Attributes:
        period: Period number.
        start: Inclusive start second.
        end: Exclusive end second (``start + 1``).
        skaters: ``(away, home)`` sorted skater ids on the ice.
        goalies: ``(away, home)`` sorted goalie ids on the ice.
        score: ``(away, home)`` goals scored before this second ends.
        score_sits: ``(away, home)`` score situations.
        strength_sits: ``(away, home)`` strength situations.
    """

    period: int
    start: int
    end: int
    skaters: tuple[tuple[int, ...], tuple[int, ...]]
    goalies: tuple[tuple[int, ...], tuple[int, ...]]
    score: tuple[int, int]
    score_sits: tuple[int, int]
    strength_sits: tuple[str, str]

    def on_ice(self, side: int) -> tuple[int, ...]:
        """Return every player (skaters then goalies) on the ice for *side*."""
        return self.skaters[side] + self.goalies[side]


class Timeline:
    """The intervals of every non-shootout period of a match.

    Intervals are addressed by ``(period, second)``; each period's list
    is ordered so that index ``t`` holds the interval ``[t, t + 1)``.
    """

    __slots__ = ("_by_period", "_periods")

    def __init__(
        self,
        periods: Sequence[Period],
        by_period: dict[int, list[Interval]],
    ) -> None:
        self._periods = tuple(periods)
        self._by_period = by_period

    @property
    def periods(self) -> tuple[Period, ...]:
        """Non-shootout periods covered by the timeline."""
        return self._periods

    def intervals(self, period: int | None = None) -> list[Interval]:
        """Return one period's intervals, or all of them in order."""
        if period is not None:
            return list(self._by_period.get(period, ()))
        return [d for p in self._periods for d in self._by_period[p.period]]

    def __iter__(self) -> Iterator[Interval]:
        for p in self._periods:
            yield from self._by_period[p.period]

    def __len__(self) -> int:
        return sum(len(v) for v in self._by_period.values())

    def starting_at(self, period: int, second: int) -> Interval | None:
        """Return the interval ``[second, second + 1)`` of *period*."""
        intervals = self._by_period.get(period, [])
        if 0 <= second < len(intervals):
            return intervals[second]
        return None

    def ending_at(self, period: int, second: int) -> Interval | None:
        """Return the interval ``[second - 1, second)`` of *period*."""
        intervals = self._by_period.get(period, [])
        if 1 <= second <= len(intervals):
            return intervals[second - 1]
        return None

    # ------------------------------------------------------------------
    # Event attribution
    # ------------------------------------------------------------------

    def interval_for(self, event: NormalizedEvent) -> Interval:
        """Return the interval an event is attributed to.

        Events at the period's first second and faceoffs use the
        interval that starts at the event's time; events at the
        period's last second and every other event use the interval
        that ends at it (a shot at 0:05 happened during 0:04-0:05).

        Raises:
            TimelineError: If no such interval exists.
        """
        intervals = self._by_period.get(event.period)
        if not intervals:
            msg = (
                f"Event {event.event_id} ({event.event_type}) is in period "
                f"{event.period}, which has no intervals"
            )
            raise TimelineError(msg)

        duration = len(intervals)
        if event.time == 0:
            interval = self.starting_at(event.period, 0)
        elif event.time == duration:
            interval = self.ending_at(event.period, duration)
        elif event.event_type == "faceoff":
            interval = self.starting_at(event.period, event.time)
        else:
            interval = self.ending_at(event.period, event.time)

        if interval is None:
            msg = (
                f"Event {event.event_id} ({event.event_type}) at period "
                f"{event.period}, second {event.time} has no matching interval"
            )
            raise TimelineError(msg)
        return interval

    def attribute(self, event: NormalizedEvent) -> NormalizedEvent:
        """Stamp an event with its interval's rosters and strength."""
        interval = self.interval_for(event)
        strength = (PEN_SHOT, PEN_SHOT) if event.is_pen_shot else interval.strength_sits
        return replace(
            event,
            skaters=interval.skaters,
            goalies=interval.goalies,
            strength_sits=strength,
        )

    def attribute_events(
        self,
        events: Sequence[NormalizedEvent],
    ) -> list[NormalizedEvent]:
        """Attribute every non-shootout event; shootout events pass through."""
        return [e if e.is_shootout else self.attribute(e) for e in events]


# ------------------------------------------------------------------
# Construction
# ------------------------------------------------------------------


def prepare_shifts(
    raw_shifts: Sequence[RawShift],
    feed: GameFeed,
    periods: Sequence[Period],
) -> list[Shift]:
    """Validate raw shifts and resolve each player's side.

    Dropped shifts: players missing from the roster, zero or negative
    length, unknown or shootout periods, shifts that start after the
    period ended, and exact repeats of an earlier shift.

    Args:
        raw_shifts: Shifts from the shift-chart feed.
        feed: Parsed play-by-play feed (for the roster).
        periods: Periods of the match.

    Returns:
        Valid shifts in feed order.
    """
    by_number = {p.period: p for p in periods}
    seen: set[tuple[int, int, int, int]] = set()
    shifts: list[Shift] = []
    for raw in raw_shifts:
        player = feed.players.get(raw.player_id)
        if player is None:
            logger.debug(
                "Game %s: shift for unrostered player %s dropped",
                feed.game_id,
                raw.player_id,
            )
            continue
        if raw.start >= raw.end:
            continue
        period = by_number.get(raw.period)
        if period is None or period.is_shootout or raw.start >= period.duration:
            continue
        key = (raw.player_id, raw.period, raw.start, raw.end)
        if key in seen:
            continue
        seen.add(key)
        shifts.append(
            Shift(
                player_id=raw.player_id,
                team_id=raw.team_id,
                venue=player.venue,
                period=raw.period,
                start=raw.start,
                end=raw.end,
            )
        )
    return shifts


def _goal_keys(
    events: Sequence[NormalizedEvent],
) -> tuple[list[tuple[int, int]], list[tuple[int, int]]]:
    """Return sorted ``(period, time)`` of non-shootout goals per side."""
    keys: tuple[list[tuple[int, int]], list[tuple[int, int]]] = ([], [])
    for event in events:
        if event.event_type == "goal" and not event.is_shootout and event.venue:
            keys[venue_index(event.venue)].append((event.period, event.time))
    for side_keys in keys:
        side_keys.sort()
    return keys


def build_timeline(
    periods: Sequence[Period],
    shifts: Sequence[Shift],
    events: Sequence[NormalizedEvent],
    roster: dict[int, PlayerInfo],
) -> Timeline:
    """Build the per-second timeline of a match.

    Args:
        periods: Periods of the match (shootouts are skipped).
        shifts: Validated shifts from :func:`prepare_shifts`.
        events: Normalized events (goals drive the score).
        roster: Match roster keyed by player id.

    Returns:
        The populated :class:`Timeline`.
    """
    played = [p for p in periods if not p.is_shootout]

    # period -> second -> side -> ids; sets make duplicate shifts idempotent
    skaters: dict[int, list[tuple[set[int], set[int]]]] = {
        p.period: [(set(), set()) for _ in range(p.duration)] for p in played
    }
    goalies: dict[int, list[tuple[set[int], set[int]]]] = {
        p.period: [(set(), set()) for _ in range(p.duration)] for p in played
    }

    for shift in shifts:
        seconds = skaters.get(shift.period)
        if seconds is None:
            continue
        target = goalies if roster[shift.player_id].is_goalie else skaters
        side = venue_index(shift.venue)
        for t in range(shift.start, min(shift.end, len(seconds))):
            target[shift.period][t][side].add(shift.player_id)

    goal_keys = _goal_keys(events)

    by_period: dict[int, list[Interval]] = {}
    for p in played:
        intervals: list[Interval] = []
        for t in range(p.duration):
            sk = tuple(tuple(sorted(s)) for s in skaters[p.period][t])
            gl = tuple(tuple(sorted(s)) for s in goalies[p.period][t])
            score = (
                bisect_right(goal_keys[0], (p.period, t)),
                bisect_right(goal_keys[1], (p.period, t)),
            )
            intervals.append(
                Interval(
                    period=p.period,
                    start=t,
                    end=t + 1,
                    skaters=(sk[0], sk[1]),
                    goalies=(gl[0], gl[1]),
                    score=score,
                    score_sits=score_situations(score),
                    strength_sits=strength_situations(
                        (len(gl[0]), len(gl[1])), (len(sk[0]), len(sk[1]))
                    ),
                )
            )
        by_period[p.period] = intervals

    return Timeline(played, by_period)
