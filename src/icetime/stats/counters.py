"""Fixed stat enumerations and situation-keyed counters.

Every team and player accumulates the same counter set for each
``(strength situation, score situation)`` pair. Counters are stored in a
zero-initialised ``strength x score x stat`` integer array, so every
combination exists from the start and totals are plain sums.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import numpy as np

from icetime.exceptions import AggregationError
from icetime.timeline.situations import SCORE_SITUATIONS, STRENGTH_SITUATIONS

if TYPE_CHECKING:
    from collections.abc import Iterator

    from numpy.typing import NDArray

# ------------------------------------------------------------------
# Stat enumerations
# ------------------------------------------------------------------

# Counted for a team and for every player on the ice.
ON_ICE_STATS: tuple[str, ...] = (
    "toi",
    "gf",
    "ga",
    "sf",
    "sa",
    "bsf",
    "bsa",
    "msf",
    "msa",
    "ofo_won",
    "ofo_lost",
    "dfo_won",
    "dfo_lost",
    "nfo_won",
    "nfo_lost",
    "pen_taken",
    "pen_drawn",
    "eff_pen_taken",
    "eff_pen_drawn",
    "hf",
    "ha",
    "give",
    "take",
    "icing_taken",
    "icing_drawn",
)

# Counted only for the player credited with a role.
INDIVIDUAL_STATS: tuple[str, ...] = (
    "ig",
    "isog",
    "ibs",
    "ims",
    "ia1",
    "ia2",
    "i_blocked",
    "i_ofo_won",
    "i_ofo_lost",
    "i_dfo_won",
    "i_dfo_lost",
    "i_nfo_won",
    "i_nfo_lost",
    "i_otf",
    "i_pen_taken",
    "i_pen_drawn",
    "i_eff_pen_taken",
    "i_eff_pen_drawn",
    "ihf",
    "iha",
    "i_give",
    "i_take",
)

ALL_STATS: tuple[str, ...] = ON_ICE_STATS + INDIVIDUAL_STATS

_STRENGTH_INDEX: dict[str, int] = {s: i for i, s in enumerate(STRENGTH_SITUATIONS)}
_SCORE_INDEX: dict[int, int] = {s: i for i, s in enumerate(SCORE_SITUATIONS)}
_STAT_INDEX: dict[str, int] = {s: i for i, s in enumerate(ALL_STATS)}


def _index(table: dict[Any, int], key: Any, kind: str) -> int:
    try:
        return table[key]
    except KeyError:
        msg = f"Unknown {kind} {key!r}"
        raise AggregationError(msg) from None


class SituationCounters:
    """Counters for one team or player, keyed by situation pair.

    Example::

        counters = SituationCounters()
        counters.increment("ev5", 0, "sf")
        counters.get("ev5", 0, "sf")  # 1
    """

    __slots__ = ("_counts",)

    def __init__(self) -> None:
        self._counts: NDArray[np.int64] = np.zeros(
            (len(STRENGTH_SITUATIONS), len(SCORE_SITUATIONS), len(ALL_STATS)),
            dtype=np.int64,
        )

    def increment(
        self,
        strength_sit: str,
        score_sit: int,
        stat: str,
        amount: int = 1,
    ) -> None:
        """Add *amount* to one counter.

        Raises:
            AggregationError: If a label or the stat name is unknown.
        """
        self._counts[
            _index(_STRENGTH_INDEX, strength_sit, "strength situation"),
            _index(_SCORE_INDEX, score_sit, "score situation"),
            _index(_STAT_INDEX, stat, "stat"),
        ] += amount

    def get(self, strength_sit: str, score_sit: int, stat: str) -> int:
        """Return one counter's value."""
        return int(
            self._counts[
                _index(_STRENGTH_INDEX, strength_sit, "strength situation"),
                _index(_SCORE_INDEX, score_sit, "score situation"),
                _index(_STAT_INDEX, stat, "stat"),
            ]
        )

    def line(self, strength_sit: str, score_sit: int) -> dict[str, int]:
        """Return every counter of one situation pair."""
        values = self._counts[
            _index(_STRENGTH_INDEX, strength_sit, "strength situation"),
            _index(_SCORE_INDEX, score_sit, "score situation"),
        ]
        return {stat: int(v) for stat, v in zip(ALL_STATS, values)}

    def total(self, stat: str) -> int:
        """Return a stat summed over every situation pair."""
        return int(self._counts[:, :, _index(_STAT_INDEX, stat, "stat")].sum())

    def situations(self) -> Iterator[tuple[str, int]]:
        """Yield every situation pair in enumeration order."""
        for strength in STRENGTH_SITUATIONS:
            for score in SCORE_SITUATIONS:
                yield strength, score
