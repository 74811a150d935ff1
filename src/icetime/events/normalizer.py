"""Play-by-play event normalization.

Turns the feed's raw events into :class:`NormalizedEvent` instances.
Labels are lower-cased and roles are made specific. Every event gets a
venue and a pre-event score, and two cross-event passes flag penalty
shots and penalty effectiveness.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING

from icetime.adapters.schemas import SHOOTOUT, NormalizedEvent, PlayerRole
from icetime.timeline.situations import score_situations

if TYPE_CHECKING:
    from collections.abc import Sequence

    from icetime.adapters.schemas import RawEvent

logger = logging.getLogger(__name__)

# ------------------------------------------------------------------
# Constants
# ------------------------------------------------------------------

PENALTY_SHOT_SEVERITY: str = "penalty shot"

_TURNOVER_ROLES: dict[str, str] = {
    "giveaway": "giver",
    "takeaway": "taker",
}


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------


def _normalize_roles(
    event_type: str,
    raw_roles: Sequence[PlayerRole],
) -> tuple[PlayerRole, ...]:
    """Lower-case role labels and make the generic ones specific.

    Goal assists become ``assist1``/``assist2`` from their position in
    the ``[scorer, assist1, assist2]`` listing, and the generic
    ``playerid`` role of giveaways/takeaways becomes ``giver``/``taker``.
    """
    roles: list[PlayerRole] = []
    for i, raw in enumerate(raw_roles):
        role = raw.role.lower()
        if event_type == "goal" and role == "assist":
            role = f"assist{i}"
        elif event_type in _TURNOVER_ROLES and role == "playerid":
            role = _TURNOVER_ROLES[event_type]
        roles.append(PlayerRole(player_id=raw.player_id, role=role))
    return tuple(roles)


def _normalize_one(raw: RawEvent, away_id: int, home_id: int) -> NormalizedEvent:
    event_type = raw.event_type.lower()
    period_type = raw.period_type.lower()

    team_id = raw.team_id
    venue: str | None = None
    if team_id is not None:
        venue = "away" if team_id == away_id else "home"
        # The feed credits blocked shots to the blocker's team.
        if event_type == "blocked_shot":
            venue = "home" if venue == "away" else "away"
            team_id = home_id if team_id == away_id else away_id

    # Non-shootout goals are already included in the running score.
    away_score, home_score = raw.score
    if period_type != SHOOTOUT and event_type == "goal":
        if venue == "away":
            away_score -= 1
        elif venue == "home":
            home_score -= 1
    score = (away_score, home_score)

    return NormalizedEvent(
        event_id=raw.event_id,
        period=raw.period,
        period_type=period_type,
        time=raw.time,
        event_type=event_type,
        subtype=raw.subtype.lower(),
        description=raw.description,
        location=raw.location,
        team_id=team_id,
        venue=venue,
        roles=_normalize_roles(event_type, raw.roles),
        score=score,
        score_sits=None if period_type == SHOOTOUT else score_situations(score),
        pen_severity=raw.pen_severity.lower() if raw.pen_severity else None,
        pen_minutes=raw.pen_minutes,
    )


def flag_penalty_shots(events: list[NormalizedEvent]) -> list[NormalizedEvent]:
    """Flag the shot attempt that follows each penalty-shot penalty.

    Args:
        events: Events in feed (temporal) order.

    Returns:
        New list with ``is_pen_shot`` set on the flagged attempts.
    """
    pending = False
    result: list[NormalizedEvent] = []
    for event in events:
        is_penalty = event.event_type == "penalty"
        if is_penalty and event.pen_severity == PENALTY_SHOT_SEVERITY:
            pending = True
        elif pending and event.is_shot_attempt:
            pending = False
            event = replace(event, is_pen_shot=True)
        result.append(event)
    return result


def flag_penalty_effectiveness(
    events: list[NormalizedEvent],
) -> list[NormalizedEvent]:
    """Decide whether each penalty gave the drawing team an advantage.

    A penalty is ineffective when it is a misconduct, or when the
    player who drew it took an equally severe penalty at the same
    period and time (coincidental penalties, fights).

    Args:
        events: Normalized events.

    Returns:
        New list with ``pen_is_effective`` set on every penalty.
    """
    # (period, time, severity) -> players penalised at that moment
    penalised: dict[tuple[int, int, str | None], set[int]] = {}
    for event in events:
        if event.event_type != "penalty":
            continue
        taker = event.player_with_role("penaltyon")
        if taker is not None:
            key = (event.period, event.time, event.pen_severity)
            penalised.setdefault(key, set()).add(taker)

    result: list[NormalizedEvent] = []
    for event in events:
        if event.event_type == "penalty":
            effective = True
            drawer = event.player_with_role("drewby")
            key = (event.period, event.time, event.pen_severity)
            if drawer is not None and drawer in penalised.get(key, ()):
                effective = False
            if "misconduct" in (event.pen_severity or ""):
                effective = False
            event = replace(event, pen_is_effective=effective)
        result.append(event)
    return result


# ------------------------------------------------------------------
# Public API
# ------------------------------------------------------------------


def normalize_events(
    raw_events: Sequence[RawEvent],
    away_id: int,
    home_id: int,
) -> list[NormalizedEvent]:
    """Normalize a match's raw play-by-play events.

    Args:
        raw_events: Raw events in feed order.
        away_id: Identifier of the away team.
        home_id: Identifier of the home team.

    Returns:
        Normalized events in feed order.
    """
    events = [_normalize_one(raw, away_id, home_id) for raw in raw_events]
    events = flag_penalty_shots(events)
    events = flag_penalty_effectiveness(events)
    logger.debug("Normalized %d events", len(events))
    return events
