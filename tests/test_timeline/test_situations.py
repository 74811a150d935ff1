"""Tests for the strength and score situation lookups."""

from __future__ import annotations

import pytest

from icetime.timeline.situations import (
    SCORE_SITUATIONS,
    STRENGTH_SITUATIONS,
    score_situations,
    strength_situations,
)


class TestEnumerations:
    """Label sets are fixed and ordered."""

    def test_strength_labels(self) -> None:
        assert STRENGTH_SITUATIONS == (
            "ev5",
            "ev4",
            "ev3",
            "pp54",
            "pp53",
            "pp43",
            "sh45",
            "sh35",
            "sh34",
            "penShot",
            "noOwnG",
            "noOppG",
            "other",
        )

    def test_score_labels(self) -> None:
        assert SCORE_SITUATIONS == (-3, -2, -1, 0, 1, 2, 3)


class TestStrengthSituations:
    """Goalie and skater counts map onto (away, home) labels."""

    @pytest.mark.parametrize(
        ("skaters", "expected"),
        [
            ((5, 5), ("ev5", "ev5")),
            ((4, 4), ("ev4", "ev4")),
            ((3, 3), ("ev3", "ev3")),
            ((5, 4), ("pp54", "sh45")),
            ((5, 3), ("pp53", "sh35")),
            ((4, 3), ("pp43", "sh34")),
            ((4, 5), ("sh45", "pp54")),
            ((3, 5), ("sh35", "pp53")),
            ((3, 4), ("sh34", "pp43")),
        ],
    )
    def test_both_goalies(
        self, skaters: tuple[int, int], expected: tuple[str, str]
    ) -> None:
        assert strength_situations((1, 1), skaters) == expected

    def test_away_net_empty(self) -> None:
        assert strength_situations((0, 1), (6, 5)) == ("noOwnG", "noOppG")

    def test_home_net_empty(self) -> None:
        assert strength_situations((1, 0), (5, 6)) == ("noOppG", "noOwnG")

    @pytest.mark.parametrize(
        ("goalies", "skaters"),
        [
            ((1, 1), (6, 5)),
            ((1, 1), (2, 5)),
            ((1, 1), (0, 0)),
            ((0, 0), (5, 5)),
            ((2, 1), (5, 5)),
        ],
    )
    def test_other(self, goalies: tuple[int, int], skaters: tuple[int, int]) -> None:
        assert strength_situations(goalies, skaters) == ("other", "other")


class TestScoreSituations:
    """Score differentials are clamped and mirrored."""

    @pytest.mark.parametrize(
        ("score", "expected"),
        [
            ((0, 0), (0, 0)),
            ((2, 2), (0, 0)),
            ((1, 0), (1, -1)),
            ((0, 2), (-2, 2)),
            ((3, 0), (3, -3)),
            ((7, 1), (3, -3)),
            ((0, 5), (-3, 3)),
        ],
    )
    def test_values(self, score: tuple[int, int], expected: tuple[int, int]) -> None:
        assert score_situations(score) == expected

    @pytest.mark.parametrize("score", [(a, h) for a in range(6) for h in range(6)])
    def test_antisymmetric(self, score: tuple[int, int]) -> None:
        away, home = score_situations(score)
        assert away == -home
        assert away in SCORE_SITUATIONS
