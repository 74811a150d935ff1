"""Tests for situation-keyed counters and the stat enumerations."""

from __future__ import annotations

import pytest

from icetime.exceptions import AggregationError
from icetime.stats.counters import (
    ALL_STATS,
    INDIVIDUAL_STATS,
    ON_ICE_STATS,
    SituationCounters,
)
from icetime.timeline.situations import SCORE_SITUATIONS, STRENGTH_SITUATIONS


class TestEnumerations:
    """Stat names are unique and partitioned."""

    def test_unique(self) -> None:
        assert len(set(ALL_STATS)) == len(ALL_STATS)

    def test_partition(self) -> None:
        assert ALL_STATS == ON_ICE_STATS + INDIVIDUAL_STATS
        assert ON_ICE_STATS[0] == "toi"
        assert all(s.startswith("i") for s in INDIVIDUAL_STATS)


class TestSituationCounters:
    """Every combination starts at zero and is addressed by label."""

    def test_zero_initialised(self) -> None:
        counters = SituationCounters()
        pairs = list(counters.situations())
        assert len(pairs) == len(STRENGTH_SITUATIONS) * len(SCORE_SITUATIONS)
        assert pairs[0] == ("ev5", -3)
        assert all(v == 0 for s, c in pairs for v in counters.line(s, c).values())

    def test_increment_and_get(self) -> None:
        counters = SituationCounters()
        counters.increment("pp54", 1, "sf")
        counters.increment("pp54", 1, "sf")
        counters.increment("pp54", -1, "sf", amount=3)
        assert counters.get("pp54", 1, "sf") == 2
        assert counters.get("pp54", -1, "sf") == 3
        assert counters.get("ev5", 1, "sf") == 0
        assert counters.total("sf") == 5

    def test_line(self) -> None:
        counters = SituationCounters()
        counters.increment("other", 0, "i_otf")
        line = counters.line("other", 0)
        assert list(line) == list(ALL_STATS)
        assert line["i_otf"] == 1
        assert type(line["i_otf"]) is int

    @pytest.mark.parametrize(
        ("strength", "score", "stat", "kind"),
        [
            ("ev6", 0, "sf", "strength situation"),
            ("ev5", 4, "sf", "score situation"),
            ("ev5", 0, "corsi", "stat"),
        ],
    )
    def test_unknown_labels(
        self, strength: str, score: int, stat: str, kind: str
    ) -> None:
        counters = SituationCounters()
        with pytest.raises(AggregationError, match=f"Unknown {kind}"):
            counters.increment(strength, score, stat)
        with pytest.raises(AggregationError):
            counters.get(strength, score, stat)
