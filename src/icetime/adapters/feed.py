"""Parsing of raw play-by-play and shift-chart documents.

Converts the two JSON documents published for a match into the
canonical schemas of :mod:`icetime.adapters.schemas`. Values are kept
as the feed reports them (labels are not lower-cased, roles are not
renamed); interpreting them is the job of the event normalizer. Clock
strings are the exception and become elapsed seconds here.

Any structural problem in a document is reported as a
:class:`~icetime.exceptions.FeedFormatError`.
"""

from __future__ import annotations

import logging
from typing import Any

from icetime.adapters.schemas import (
    VENUES,
    GameFeed,
    PlayerInfo,
    PlayerRole,
    RawEvent,
    RawShift,
    TeamInfo,
)
from icetime.exceptions import FeedFormatError

logger = logging.getLogger(__name__)


def parse_clock(mmss: str) -> int:
    """Convert an ``"mm:ss"`` clock string to elapsed seconds.

    Args:
        mmss: Clock string such as ``"12:05"``.

    Returns:
        Total seconds as an integer.

    Raises:
        FeedFormatError: If the string is not in ``mm:ss`` form.
    """
    try:
        minutes, seconds = mmss.split(":")
        return 60 * int(minutes) + int(seconds)
    except (AttributeError, ValueError) as exc:
        msg = f"Invalid clock value {mmss!r}"
        raise FeedFormatError(msg) from exc


def game_status(pbp: dict[str, Any]) -> str:
    """Return the lower-case abstract game state of a play-by-play document.

    Raises:
        FeedFormatError: If the status is missing.
    """
    try:
        return str(pbp["gameData"]["status"]["abstractGameState"]).lower()
    except (KeyError, TypeError) as exc:
        msg = "Play-by-play document has no game status"
        raise FeedFormatError(msg) from exc


def parse_game_feed(pbp: dict[str, Any]) -> GameFeed:
    """Parse a play-by-play document.

    Args:
        pbp: Decoded play-by-play JSON document.

    Returns:
        The parsed :class:`GameFeed`.

    Raises:
        FeedFormatError: If a required field is missing or mistyped.
    """
    try:
        game_data = pbp["gameData"]
        live_data = pbp["liveData"]
        linescore = live_data["linescore"]["teams"]
        teams = {
            venue: TeamInfo(
                team_id=int(game_data["teams"][venue]["id"]),
                venue=venue,
                name=str(game_data["teams"][venue]["name"]),
                abbreviation=str(game_data["teams"][venue]["abbreviation"]).lower(),
                goals=int(linescore[venue]["goals"]),
            )
            for venue in VENUES
        }
        players = _parse_roster(
            game_data["players"], live_data["boxscore"]["teams"], teams
        )
        events = tuple(_parse_play(play) for play in live_data["plays"]["allPlays"])
        return GameFeed(
            game_id=int(pbp["gamePk"]),
            status=game_status(pbp),
            game_date=str(game_data["datetime"]["dateTime"]),
            away=teams["away"],
            home=teams["home"],
            players=players,
            events=events,
        )
    except (KeyError, TypeError, ValueError) as exc:
        msg = f"Malformed play-by-play document: {exc!r}"
        raise FeedFormatError(msg) from exc


def parse_shift_feed(shifts: dict[str, Any]) -> list[RawShift]:
    """Parse a shift-chart document.

    Rows without start or end times (goal markers in some seasons) are
    skipped.

    Args:
        shifts: Decoded shift-chart JSON document.

    Returns:
        List of :class:`RawShift` in feed order.

    Raises:
        FeedFormatError: If a required field is missing or mistyped.
    """
    try:
        rows = shifts["data"]
        result: list[RawShift] = []
        for row in rows:
            if row.get("startTime") is None or row.get("endTime") is None:
                logger.debug("Skipping shift row without times: %r", row.get("id"))
                continue
            result.append(
                RawShift(
                    player_id=int(row["playerId"]),
                    team_id=int(row["teamId"]),
                    period=int(row["period"]),
                    start=parse_clock(row["startTime"]),
                    end=parse_clock(row["endTime"]),
                )
            )
        return result
    except (KeyError, TypeError, ValueError) as exc:
        msg = f"Malformed shift document: {exc!r}"
        raise FeedFormatError(msg) from exc


# ------------------------------------------------------------------
# Private helpers
# ------------------------------------------------------------------


def _parse_roster(
    raw_players: dict[str, Any],
    box_teams: dict[str, Any],
    teams: dict[str, TeamInfo],
) -> dict[int, PlayerInfo]:
    """Build the match roster from game data and the box score.

    A player's side is the box-score team listing them. Scratched
    players report position ``N/A`` (stored as ``na``) and may have no
    jersey number.
    """
    roster: dict[int, PlayerInfo] = {}
    for key, raw in raw_players.items():
        venue = "away" if key in box_teams["away"]["players"] else "home"
        box_entry = box_teams[venue]["players"][key]
        jersey = box_entry.get("jerseyNumber")
        player_id = int(raw["id"])
        roster[player_id] = PlayerInfo(
            player_id=player_id,
            first_name=str(raw["firstName"]),
            last_name=str(raw["lastName"]),
            team_id=teams[venue].team_id,
            venue=venue,
            position=str(box_entry["position"]["code"]).lower().replace("/", ""),
            jersey=int(jersey) if jersey not in (None, "") else None,
        )
    return roster


def _parse_play(play: dict[str, Any]) -> RawEvent:
    """Convert one ``allPlays`` entry to a :class:`RawEvent`."""
    about = play["about"]
    result = play["result"]

    coords = play.get("coordinates") or {}
    location: tuple[float, float] | None = None
    if "x" in coords and "y" in coords:
        location = (float(coords["x"]), float(coords["y"]))

    team = play.get("team")
    roles = tuple(
        PlayerRole(player_id=int(p["player"]["id"]), role=str(p["playerType"]))
        for p in play.get("players", ())
    )

    pen_minutes = result.get("penaltyMinutes")
    return RawEvent(
        event_id=int(about["eventIdx"]),
        period=int(about["period"]),
        period_type=str(about["periodType"]),
        time=parse_clock(about["periodTime"]),
        event_type=str(result["eventTypeId"]),
        subtype=str(result.get("secondaryType", "")),
        description=str(result.get("description", "")),
        location=location,
        team_id=int(team["id"]) if team else None,
        roles=roles,
        score=(int(about["goals"]["away"]), int(about["goals"]["home"])),
        pen_severity=result.get("penaltySeverity"),
        pen_minutes=int(pen_minutes) if pen_minutes is not None else None,
    )
