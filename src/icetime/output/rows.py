"""Projection of a processed match into storage-table rows.

Each table is a list of plain ``dict`` rows whose keys are the table's
column names, ready for JSON encoding or bulk insertion. Tables are
returned in dependency order (``games`` before the tables that
reference it).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from icetime.stats.counters import ALL_STATS, ON_ICE_STATS

if TYPE_CHECKING:
    from icetime.adapters.schemas import NormalizedEvent
    from icetime.pipeline import ProcessedMatch
    from icetime.stats.counters import SituationCounters

Row = dict[str, Any]

TABLES: tuple[str, ...] = (
    "games",
    "teams",
    "game_teams",
    "players",
    "game_players",
    "game_team_stats",
    "game_player_stats",
    "game_events",
    "game_event_players",
    "game_shifts",
    "game_situations",
)

# Game-type digits of a game id for playoff games.
_PLAYOFF_GAME_TYPE: str = "03"


# ------------------------------------------------------------------
# Match-level tables
# ------------------------------------------------------------------


def _game_rows(match: ProcessedMatch) -> list[Row]:
    gid = str(match.feed.game_id)
    return [
        {
            "game_id": match.feed.game_id,
            "season": int(gid[:4]),
            "game_date": match.feed.game_date,
            "periods": max((p.period for p in match.periods), default=0),
            "has_shootout": any(p.is_shootout for p in match.periods),
            "is_playoff": gid[4:6] == _PLAYOFF_GAME_TYPE,
        }
    ]


def _team_rows(match: ProcessedMatch) -> list[Row]:
    return [
        {
            "team_id": team.team_id,
            "abbreviation": team.abbreviation,
            "team_name": team.name,
        }
        for team in match.feed.teams
    ]


def _game_team_rows(match: ProcessedMatch) -> list[Row]:
    return [
        {
            "venue": team.venue,
            "game_id": match.feed.game_id,
            "team_id": team.team_id,
            "score": team.goals,
        }
        for team in match.feed.teams
    ]


def _player_rows(match: ProcessedMatch) -> list[Row]:
    return [
        {
            "player_id": p.player_id,
            "first_name": p.first_name,
            "last_name": p.last_name,
        }
        for p in match.feed.players.values()
    ]


def _game_player_rows(match: ProcessedMatch) -> list[Row]:
    return [
        {
            "game_id": match.feed.game_id,
            "player_id": p.player_id,
            "team_id": p.team_id,
            "jersey": p.jersey,
            "position": p.position,
        }
        for p in match.feed.players.values()
    ]


# ------------------------------------------------------------------
# Stat tables
# ------------------------------------------------------------------


def _stat_rows(
    game_id: int,
    key_column: str,
    key: int,
    counters: SituationCounters,
    stats: tuple[str, ...],
) -> list[Row]:
    """Return one row per situation pair with at least one non-zero stat."""
    rows: list[Row] = []
    for strength, score in counters.situations():
        line = counters.line(strength, score)
        values = {stat: line[stat] for stat in stats}
        if not any(values.values()):
            continue
        rows.append(
            {
                "game_id": game_id,
                key_column: key,
                "strength_sit": strength,
                "score_sit": score,
                **values,
            }
        )
    return rows


def _game_team_stat_rows(match: ProcessedMatch) -> list[Row]:
    rows: list[Row] = []
    for team in match.feed.teams:
        rows.extend(
            _stat_rows(
                match.feed.game_id,
                "team_id",
                team.team_id,
                match.team_stats[team.venue],
                ON_ICE_STATS,
            )
        )
    return rows


def _game_player_stat_rows(match: ProcessedMatch) -> list[Row]:
    rows: list[Row] = []
    for pid, counters in match.player_stats.items():
        rows.extend(
            _stat_rows(match.feed.game_id, "player_id", pid, counters, ALL_STATS)
        )
    return rows


# ------------------------------------------------------------------
# Event tables
# ------------------------------------------------------------------


def _pair(values: tuple[Any, Any] | None, side: int) -> Any:
    return values[side] if values is not None else None


def _count(
    groups: tuple[tuple[int, ...], tuple[int, ...]] | None, side: int
) -> int | None:
    return len(groups[side]) if groups is not None else None


def _event_row(game_id: int, event: NormalizedEvent) -> Row:
    is_penalty = event.event_type == "penalty"
    row: Row = {
        "game_id": game_id,
        "event_id": event.event_id,
        "period": event.period,
        "period_type": event.period_type,
        "event_time": event.time,
        "event_desc": event.description,
        "event_type": event.event_type,
        "event_subtype": event.subtype,
        "pen_severity": event.pen_severity if is_penalty else None,
        "pen_mins": event.pen_minutes if is_penalty else None,
        "pen_is_effective": event.pen_is_effective if is_penalty else None,
        "team_id": event.team_id,
        "venue": event.venue,
        "loc_x": _pair(event.location, 0),
        "loc_y": _pair(event.location, 1),
    }
    for side, prefix in enumerate(("a", "h")):
        row[f"{prefix}_zone"] = _pair(event.zones, side)
        row[f"{prefix}_def_side"] = _pair(event.def_sides, side)
        row[f"{prefix}_strength_sit"] = _pair(event.strength_sits, side)
        row[f"{prefix}_score"] = event.score[side]
        row[f"{prefix}_score_sit"] = _pair(event.score_sits, side)
        row[f"{prefix}_skaters"] = _count(event.skaters, side)
        row[f"{prefix}_goalies"] = _count(event.goalies, side)
    return row


def _event_player_rows(match: ProcessedMatch, event: NormalizedEvent) -> list[Row]:
    """On-ice players of an event, with role players merged in."""
    game_id = match.feed.game_id
    rows: dict[int, Row] = {}
    skaters = event.skaters or ((), ())
    goalies = event.goalies or ((), ())
    for pid in skaters[0] + skaters[1] + goalies[0] + goalies[1]:
        rows[pid] = {
            "game_id": game_id,
            "event_id": event.event_id,
            "player_id": pid,
            "on_ice": True,
            "role": None,
        }

    for player_role in event.roles:
        pid = player_role.player_id
        if pid in rows:
            rows[pid]["role"] = player_role.role
        elif pid in match.feed.players:
            rows[pid] = {
                "game_id": game_id,
                "event_id": event.event_id,
                "player_id": pid,
                "on_ice": False,
                "role": player_role.role,
            }
    return list(rows.values())


def _shift_rows(match: ProcessedMatch) -> list[Row]:
    # player -> period -> [start, end] pairs
    by_player: dict[int, dict[int, list[list[int]]]] = {}
    for shift in match.shifts:
        by_player.setdefault(shift.player_id, {}).setdefault(shift.period, []).append(
            [shift.start, shift.end]
        )

    rows: list[Row] = []
    for pid in match.feed.players:
        periods = by_player.get(pid, {})
        for period in match.periods:
            pairs = periods.get(period.period)
            if not pairs:
                continue
            rows.append(
                {
                    "game_id": match.feed.game_id,
                    "player_id": pid,
                    "period": period.period,
                    "shifts": sorted(pairs),
                }
            )
    return rows


def _situation_rows(match: ProcessedMatch) -> list[Row]:
    return [
        {
            "game_id": match.feed.game_id,
            "team_id": s.team_id,
            "strength_sit": s.strength_sit,
            "score_sit": s.score_sit,
            "period": s.period,
            "timeranges": [list(r) for r in s.timeranges],
        }
        for s in match.situations
    ]


# ------------------------------------------------------------------
# Public API
# ------------------------------------------------------------------


def project_rows(match: ProcessedMatch) -> dict[str, list[Row]]:
    """Project a processed match into storage-table rows.

    Args:
        match: Output of :func:`icetime.pipeline.process_match`.

    Returns:
        Mapping of table name to rows, in :data:`TABLES` order.
    """
    game_id = match.feed.game_id
    event_players: list[Row] = []
    for event in match.events:
        if not event.is_shootout:
            event_players.extend(_event_player_rows(match, event))

    tables: dict[str, list[Row]] = {
        "games": _game_rows(match),
        "teams": _team_rows(match),
        "game_teams": _game_team_rows(match),
        "players": _player_rows(match),
        "game_players": _game_player_rows(match),
        "game_team_stats": _game_team_stat_rows(match),
        "game_player_stats": _game_player_stat_rows(match),
        "game_events": [_event_row(game_id, e) for e in match.events],
        "game_event_players": event_players,
        "game_shifts": _shift_rows(match),
        "game_situations": _situation_rows(match),
    }
    return tables
