"""Strength and score situation lookup tables.

The strength lookup is the single source of truth for classifying
on-ice personnel. Every skater/goalie combination that does not match
one of its rows is ``other``.
"""

from __future__ import annotations

# ------------------------------------------------------------------
# Constants
# ------------------------------------------------------------------

PEN_SHOT: str = "penShot"
NO_OWN_GOALIE: str = "noOwnG"
NO_OPP_GOALIE: str = "noOppG"
OTHER: str = "other"

STRENGTH_SITUATIONS: tuple[str, ...] = (
    "ev5",
    "ev4",
    "ev3",
    "pp54",
    "pp53",
    "pp43",
    "sh45",
    "sh35",
    "sh34",
    PEN_SHOT,
    NO_OWN_GOALIE,
    NO_OPP_GOALIE,
    OTHER,
)

SCORE_SITUATIONS: tuple[int, ...] = (-3, -2, -1, 0, 1, 2, 3)

_MIN_SKATERS: int = 3
_MAX_SKATERS: int = 5
_SCORE_CAP: int = 3


def _build_skater_table() -> dict[tuple[int, int], tuple[str, str]]:
    table: dict[tuple[int, int], tuple[str, str]] = {}
    for away in range(_MIN_SKATERS, _MAX_SKATERS + 1):
        for home in range(_MIN_SKATERS, _MAX_SKATERS + 1):
            if away == home:
                table[(away, home)] = (f"ev{away}", f"ev{home}")
            elif away > home:
                table[(away, home)] = (f"pp{away}{home}", f"sh{home}{away}")
            else:
                table[(away, home)] = (f"sh{away}{home}", f"pp{home}{away}")
    return table


# (away skaters, home skaters) -> labels, when both sides have one goalie.
_SKATER_TABLE: dict[tuple[int, int], tuple[str, str]] = _build_skater_table()

# (away goalies, home goalies) -> labels, regardless of skaters.
_EMPTY_NET_TABLE: dict[tuple[int, int], tuple[str, str]] = {
    (0, 1): (NO_OWN_GOALIE, NO_OPP_GOALIE),
    (1, 0): (NO_OPP_GOALIE, NO_OWN_GOALIE),
}


def strength_situations(
    goalies: tuple[int, int],
    skaters: tuple[int, int],
) -> tuple[str, str]:
    """Classify ``(away, home)`` on-ice counts into strength labels.

    Args:
        goalies: Number of goalies on the ice for each side.
        skaters: Number of skaters on the ice for each side.

    Returns:
        ``(away, home)`` strength situation labels.
    """
    if goalies == (1, 1):
        return _SKATER_TABLE.get(skaters, (OTHER, OTHER))
    return _EMPTY_NET_TABLE.get(goalies, (OTHER, OTHER))


def score_situations(score: tuple[int, int]) -> tuple[int, int]:
    """Clamp an ``(away, home)`` score into score situation labels.

    The home label is the negation of the away label, except that a
    tied game is ``(0, 0)`` rather than carrying a signed zero.

    Args:
        score: ``(away goals, home goals)``.

    Returns:
        ``(away, home)`` score situations in ``[-3, 3]``.
    """
    away_sit = max(-_SCORE_CAP, min(_SCORE_CAP, score[0] - score[1]))
    home_sit = 0 if away_sit == 0 else -away_sit
    return (away_sit, home_sit)
