"""Tests for the internal data schemas.

Validates immutability and the derived properties of the frozen
dataclasses defined in :mod:`icetime.adapters.schemas`.
"""

from __future__ import annotations

import dataclasses

import pytest
from builders import make_event

from icetime.adapters.schemas import (
    Period,
    PlayerInfo,
    PlayerRole,
    venue_index,
)


@pytest.fixture()
def goalie() -> PlayerInfo:
    """Return a rostered goaltender."""
    return PlayerInfo(
        player_id=10,
        first_name="First10",
        last_name="Last10",
        team_id=1,
        venue="away",
        position="g",
        jersey=10,
    )


class TestImmutability:
    """Schemas are frozen; stages enrich with ``replace``."""

    def test_event_frozen(self) -> None:
        event = make_event()
        with pytest.raises(dataclasses.FrozenInstanceError):
            event.time = 5  # type: ignore[misc]

    def test_replace(self) -> None:
        event = make_event()
        zoned = dataclasses.replace(event, zones=("o", "d"))
        assert event.zones is None
        assert zoned.zones == ("o", "d")

    def test_slots(self, goalie: PlayerInfo) -> None:
        assert not hasattr(goalie, "__dict__")


class TestProperties:
    """Derived flags and lookups."""

    def test_venue_index(self) -> None:
        assert venue_index("away") == 0
        assert venue_index("home") == 1

    def test_goalie(self, goalie: PlayerInfo) -> None:
        assert goalie.is_goalie
        assert not dataclasses.replace(goalie, position="d").is_goalie

    def test_shootout_period(self) -> None:
        assert Period(5, 0, "shootout").is_shootout
        assert not Period(4, 300, "overtime").is_shootout

    @pytest.mark.parametrize(
        ("event_type", "expected"),
        [
            ("goal", True),
            ("shot", True),
            ("missed_shot", True),
            ("blocked_shot", True),
            ("hit", False),
        ],
    )
    def test_shot_attempt(self, event_type: str, expected: bool) -> None:
        assert make_event(event_type=event_type).is_shot_attempt is expected

    def test_icing(self) -> None:
        assert make_event(event_type="stop", description="Icing").is_icing
        assert not make_event(event_type="stop", description="Offside").is_icing
        assert not make_event(event_type="shot", description="Icing").is_icing

    def test_player_with_role(self) -> None:
        event = make_event(roles=[(11, "shooter"), (20, "goalie"), (21, "goalie")])
        assert event.player_with_role("goalie") == 20
        assert event.player_with_role("blocker") is None
        assert event.roles[0] == PlayerRole(player_id=11, role="shooter")
