"""Internal data schemas for the icetime engine.

Defines the canonical data structures shared by the feed adapters and
every downstream stage. Every schema is a frozen, slotted dataclass;
later stages enrich events with :func:`dataclasses.replace` instead of
mutating them.

Side-indexed pairs (scores, zones, strength situations, on-ice rosters)
are always ordered ``(away, home)``.
"""

from __future__ import annotations

from dataclasses import dataclass

VENUES: tuple[str, str] = ("away", "home")

SHOT_EVENT_TYPES: frozenset[str] = frozenset(
    {"goal", "shot", "missed_shot", "blocked_shot"}
)

SHOOTOUT: str = "shootout"


def venue_index(venue: str) -> int:
    """Return ``0`` for the away side and ``1`` for the home side."""
    return VENUES.index(venue)


@dataclass(frozen=True, slots=True)
class PlayerRole:
    """A player's involvement in a single event.

    Attributes:
        player_id: Identifier of the player.
        role: Role label (e.g. ``"scorer"``, ``"hitter"``,
            ``"drewby"``).
    """

    player_id: int
    role: str


@dataclass(frozen=True, slots=True)
class RawEvent:
    """A single play-by-play entry exactly as reported by the feed.

    Attributes:
        event_id: Feed event index, unique within the match.
        period: Period number.
        period_type: Feed period type (``"REGULAR"``, ``"OVERTIME"``,
            ``"SHOOTOUT"``).
        time: Elapsed seconds in the period.
        event_type: Feed event type id (e.g. ``"BLOCKED_SHOT"``).
        subtype: Secondary type, or ``""``.
        description: Free-text description.
        location: ``(x, y)`` rink coordinates, or ``None``.
        team_id: Team the feed attributes the event to, or ``None``.
        roles: Players involved, with the feed's role labels.
        score: Running ``(away, home)`` score reported with the event.
        pen_severity: Penalty severity for penalties, else ``None``.
        pen_minutes: Penalty minutes for penalties, else ``None``.
    """

    event_id: int
    period: int
    period_type: str
    time: int
    event_type: str
    subtype: str
    description: str
    location: tuple[float, float] | None
    team_id: int | None
    roles: tuple[PlayerRole, ...]
    score: tuple[int, int]
    pen_severity: str | None = None
    pen_minutes: int | None = None


@dataclass(frozen=True, slots=True)
class RawShift:
    """One continuous on-ice interval for one player.

    Attributes:
        player_id: Identifier of the player.
        team_id: Identifier of the player's team.
        period: Period number.
        start: Start second within the period.
        end: End second within the period.
    """

    player_id: int
    team_id: int
    period: int
    start: int
    end: int


@dataclass(frozen=True, slots=True)
class Shift:
    """A validated shift with its side resolved.

    Attributes:
        player_id: Identifier of the player.
        team_id: Identifier of the player's team.
        venue: ``"away"`` or ``"home"``.
        period: Period number.
        start: Start second within the period.
        end: End second within the period.
    """

    player_id: int
    team_id: int
    venue: str
    period: int
    start: int
    end: int


@dataclass(frozen=True, slots=True)
class TeamInfo:
    """One team's metadata for a single match.

    Attributes:
        team_id: Identifier of the team.
        venue: ``"away"`` or ``"home"``.
        name: Display name.
        abbreviation: Lower-case abbreviation.
        goals: Final goals, including the shootout result.
    """

    team_id: int
    venue: str
    name: str
    abbreviation: str
    goals: int


@dataclass(frozen=True, slots=True)
class PlayerInfo:
    """A rostered player for a single match.

    Attributes:
        player_id: Identifier of the player.
        first_name: Given name.
        last_name: Family name.
        team_id: Identifier of the player's team.
        venue: ``"away"`` or ``"home"``.
        position: Lower-case position code without ``/`` (``"c"``,
            ``"d"``, ``"g"``, ``"na"`` for scratches, ...).
        jersey: Jersey number, or ``None`` when the feed omits it.
    """

    player_id: int
    first_name: str
    last_name: str
    team_id: int
    venue: str
    position: str
    jersey: int | None

    @property
    def is_goalie(self) -> bool:
        """Whether the player dressed as a goaltender."""
        return self.position == "g"


@dataclass(frozen=True, slots=True)
class GameFeed:
    """A parsed play-by-play document.

    Attributes:
        game_id: Identifier of the match.
        status: Lower-case abstract game state (``"final"``, ...).
        game_date: Scheduled start as an ISO 8601 UTC string.
        away: Away team metadata.
        home: Home team metadata.
        players: Roster keyed by player id.
        events: Raw events in feed order.
    """

    game_id: int
    status: str
    game_date: str
    away: TeamInfo
    home: TeamInfo
    players: dict[int, PlayerInfo]
    events: tuple[RawEvent, ...]

    @property
    def teams(self) -> tuple[TeamInfo, TeamInfo]:
        """The ``(away, home)`` team pair."""
        return (self.away, self.home)


@dataclass(frozen=True, slots=True)
class Period:
    """A played period.

    Attributes:
        period: Period number.
        duration: Length in seconds.
        period_type: ``"regular"``, ``"overtime"`` or ``"shootout"``.
        home_def_zone_neg: Whether the home team defended the
            negative-x half, or ``None`` before orientation is
            resolved and for shootouts.
    """

    period: int
    duration: int
    period_type: str
    home_def_zone_neg: bool | None = None

    @property
    def is_shootout(self) -> bool:
        """Whether this is a shootout period."""
        return self.period_type == SHOOTOUT


@dataclass(frozen=True, slots=True)
class NormalizedEvent:
    """A play-by-play event enriched by the pipeline stages.

    The normalizer fills the raw-derived fields; the orientation
    resolver adds ``zones`` and ``def_sides``; the timeline adds the
    on-ice rosters and ``strength_sits``. Shootout events keep those
    later fields as ``None``.

    Attributes:
        event_id: Feed event index.
        period: Period number.
        period_type: Lower-case period type.
        time: Elapsed seconds in the period.
        event_type: Lower-case event type (e.g. ``"blocked_shot"``).
        subtype: Lower-case secondary type, or ``""``.
        description: Free-text description.
        location: ``(x, y)`` rink coordinates, or ``None``.
        team_id: Attributed team (the shooter's for blocked shots).
        venue: ``"away"``/``"home"`` of ``team_id``, or ``None``.
        roles: Players involved, with normalized role labels.
        score: ``(away, home)`` score before the event.
        score_sits: Clamped score situations, ``None`` in shootouts.
        pen_severity: Lower-case penalty severity, or ``None``.
        pen_minutes: Penalty minutes, or ``None``.
        pen_is_effective: Penalty effectiveness, ``None`` for
            non-penalties.
        is_pen_shot: Whether this shot attempt was a penalty shot.
        zones: ``(away, home)`` zone labels (``o``/``d``/``n``).
        def_sides: ``(away, home)`` sign of each side's defended half.
        strength_sits: ``(away, home)`` strength labels.
        skaters: ``(away, home)`` on-ice skater ids.
        goalies: ``(away, home)`` on-ice goalie ids.
    """

    event_id: int
    period: int
    period_type: str
    time: int
    event_type: str
    subtype: str
    description: str
    location: tuple[float, float] | None
    team_id: int | None
    venue: str | None
    roles: tuple[PlayerRole, ...]
    score: tuple[int, int]
    score_sits: tuple[int, int] | None
    pen_severity: str | None = None
    pen_minutes: int | None = None
    pen_is_effective: bool | None = None
    is_pen_shot: bool = False
    zones: tuple[str, str] | None = None
    def_sides: tuple[int, int] | None = None
    strength_sits: tuple[str, str] | None = None
    skaters: tuple[tuple[int, ...], tuple[int, ...]] | None = None
    goalies: tuple[tuple[int, ...], tuple[int, ...]] | None = None

    @property
    def is_shootout(self) -> bool:
        """Whether the event happened in a shootout."""
        return self.period_type == SHOOTOUT

    @property
    def is_shot_attempt(self) -> bool:
        """Whether the event is a goal, shot, missed or blocked shot."""
        return self.event_type in SHOT_EVENT_TYPES

    @property
    def is_icing(self) -> bool:
        """Whether the event is an icing stoppage."""
        return self.event_type == "stop" and self.description.lower() == "icing"

    def player_with_role(self, role: str) -> int | None:
        """Return the first player holding *role*, or ``None``."""
        for player_role in self.roles:
            if player_role.role == role:
                return player_role.player_id
        return None
