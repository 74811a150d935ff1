"""Run-length compression of per-second situations into time ranges.

For each team, every ``(strength, score, period)`` combination held at
some point in the match is described by the maximal contiguous
``[start, end)`` ranges during which it held.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from icetime.timeline.situations import SCORE_SITUATIONS, STRENGTH_SITUATIONS

if TYPE_CHECKING:
    from collections.abc import Sequence

    from icetime.adapters.schemas import TeamInfo
    from icetime.timeline.intervals import Interval, Timeline

TimeRange = tuple[int, int]


@dataclass(frozen=True, slots=True)
class SituationRanges:
    """The time ranges one team spent in one situation in one period.

    Attributes:
        team_id: Identifier of the team.
        venue: ``"away"`` or ``"home"``.
        strength_sit: Strength situation label.
        score_sit: Score situation label.
        period: Period number.
        timeranges: Ordered, non-overlapping ``[start, end)`` pairs.
    """

    team_id: int
    venue: str
    strength_sit: str
    score_sit: int
    period: int
    timeranges: tuple[TimeRange, ...]


def compress_ranges(starts: Sequence[int], ends: Sequence[int]) -> list[TimeRange]:
    """Merge ordered ``[start, end)`` intervals into maximal ranges.

    A new range begins whenever an interval's start differs from the
    previous interval's end.

    Args:
        starts: Interval starts, ascending.
        ends: Matching interval ends.

    Returns:
        List of ``(start, end)`` ranges.
    """
    starts_arr = np.asarray(starts, dtype=np.int64)
    ends_arr = np.asarray(ends, dtype=np.int64)
    if starts_arr.size == 0:
        return []

    breaks = np.flatnonzero(starts_arr[1:] != ends_arr[:-1]) + 1
    range_starts = np.concatenate(([0], breaks))
    range_ends = np.concatenate((breaks - 1, [starts_arr.size - 1]))
    return [
        (int(starts_arr[i]), int(ends_arr[j]))
        for i, j in zip(range_starts, range_ends)
    ]


def compress_situations(
    timeline: Timeline,
    teams: tuple[TeamInfo, TeamInfo],
) -> list[SituationRanges]:
    """Compress each team's per-second situations into time ranges.

    Output is ordered by venue, strength label, score label and period.
    Combinations that never occur are omitted.

    Args:
        timeline: The match timeline.
        teams: ``(away, home)`` team metadata.

    Returns:
        List of :class:`SituationRanges`.
    """
    result: list[SituationRanges] = []
    for side, team in enumerate(teams):
        # (strength, score, period) -> intervals in start order
        groups: dict[tuple[str, int, int], list[Interval]] = {}
        for interval in timeline:
            key = (
                interval.strength_sits[side],
                interval.score_sits[side],
                interval.period,
            )
            groups.setdefault(key, []).append(interval)

        for strength in STRENGTH_SITUATIONS:
            for score in SCORE_SITUATIONS:
                for period in timeline.periods:
                    intervals = groups.get((strength, score, period.period))
                    if not intervals:
                        continue
                    ranges = compress_ranges(
                        [d.start for d in intervals], [d.end for d in intervals]
                    )
                    result.append(
                        SituationRanges(
                            team_id=team.team_id,
                            venue=team.venue,
                            strength_sit=strength,
                            score_sit=score,
                            period=period.period,
                            timeranges=tuple(ranges),
                        )
                    )
    return result
