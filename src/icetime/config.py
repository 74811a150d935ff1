"""Configuration dataclasses for the icetime engine.

All configuration containers are frozen (immutable) and slotted. Each
dataclass provides sensible defaults so that a zero-argument
``PipelineConfig()`` is always valid.

The feed-defect tables below describe known problems in historical
play-by-play feeds. They are passed into the engine through
:class:`EngineConfig` rather than branched on in code, so callers can
extend or replace them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True, slots=True)
class PeriodFix:
    """A manual correction to a period's duration.

    If the period already exists its duration is replaced; otherwise a
    new period is appended with ``period_type``.

    Attributes:
        period: Period number to correct.
        duration: Corrected duration in seconds.
        period_type: Type used when the period has to be created.
    """

    period: int
    duration: int
    period_type: str = "overtime"


_OT_MISSING: tuple[PeriodFix, ...] = (PeriodFix(period=4, duration=300),)

# Games with missing or inaccurate ``period_end`` markers.
KNOWN_PERIOD_FIXES: dict[int, tuple[PeriodFix, ...]] = {
    **{
        gid: _OT_MISSING
        for gid in (
            2015020904,
            2014021118,
            2013020083,
            2013020274,
            2013020644,
            2013020868,
            2015021188,
            2014020833,
            2014020886,
            2013020115,
            2012020179,
            2011020259,
        )
    },
    2014030231: (PeriodFix(period=1, duration=1200, period_type="regular"),),
    2012020288: (PeriodFix(period=3, duration=1200, period_type="regular"),),
}

# Periods whose automatic orientation is wrong. For periods that are also
# listed in KNOWN_END_CHANGES the flag describes the first half.
KNOWN_ORIENTATION_FIXES: dict[int, dict[int, bool]] = {
    2013020610: {3: True, 4: False},
    2010020566: {3: False},
}

# Periods where the teams switched ends mid-period.
KNOWN_END_CHANGES: dict[int, frozenset[int]] = {
    2013020610: frozenset({3, 4}),
    2010020566: frozenset({3}),
}


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Configuration for the per-match reconstruction engine.

    Attributes:
        neutral_zone_half_width: Distance from centre ice (in feed
            coordinate units) that is still the neutral zone.
        period_fixes: Game id to period-duration corrections.
        orientation_fixes: Game id to ``{period: home_def_zone_neg}``
            overrides, applied after the shot heuristic.
        end_change_periods: Game id to the periods in which the teams
            changed ends mid-period.

    Raises:
        ValueError: If any configuration invariant is violated.
    """

    neutral_zone_half_width: float = 25.0
    period_fixes: dict[int, tuple[PeriodFix, ...]] = field(
        default_factory=lambda: dict(KNOWN_PERIOD_FIXES)
    )
    orientation_fixes: dict[int, dict[int, bool]] = field(
        default_factory=lambda: dict(KNOWN_ORIENTATION_FIXES)
    )
    end_change_periods: dict[int, frozenset[int]] = field(
        default_factory=lambda: dict(KNOWN_END_CHANGES)
    )

    def __post_init__(self) -> None:
        """Validate configuration invariants after initialization."""
        if self.neutral_zone_half_width < 0.0:
            msg = (
                f"neutral_zone_half_width must be non-negative, "
                f"got {self.neutral_zone_half_width}"
            )
            raise ValueError(msg)

        for gid, fixes in self.period_fixes.items():
            for fix in fixes:
                if fix.duration < 0:
                    msg = (
                        f"period fix for game {gid} period {fix.period} "
                        f"has negative duration {fix.duration}"
                    )
                    raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class FetchConfig:
    """Configuration for the raw-feed fetch collaborator.

    Attributes:
        pbp_url: Play-by-play URL template with a ``{game_id}`` field.
        shift_url: Shift-chart URL template with a ``{game_id}`` field.
        timeout_seconds: Per-request timeout.
    """

    pbp_url: str = "https://statsapi.web.nhl.com/api/v1/game/{game_id}/feed/live"
    shift_url: str = (
        "https://api.nhle.com/stats/rest/en/shiftcharts?cayenneExp=gameId={game_id}"
    )
    timeout_seconds: float = 30.0

    def __post_init__(self) -> None:
        """Validate configuration invariants after initialization."""
        for name in ("pbp_url", "shift_url"):
            template = getattr(self, name)
            if "{game_id}" not in template:
                msg = f"{name} must contain a '{{game_id}}' field, got {template!r}"
                raise ValueError(msg)
        if self.timeout_seconds <= 0.0:
            msg = f"timeout_seconds must be positive, got {self.timeout_seconds}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class PipelineConfig:
    """Master configuration for batch processing.

    Attributes:
        cache_dir: Directory for caching raw feed documents.
        output_dir: Directory for transformed row collections.
        engine: Per-match engine configuration.
        fetch: Fetch collaborator configuration.
    """

    cache_dir: Path = field(default_factory=lambda: Path("data/raw"))
    output_dir: Path = field(default_factory=lambda: Path("data/output"))
    engine: EngineConfig = field(default_factory=EngineConfig)
    fetch: FetchConfig = field(default_factory=FetchConfig)
