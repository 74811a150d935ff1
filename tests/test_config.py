"""Tests for icetime.config dataclasses.

Verifies frozen/slotted invariants, default values, the known feed
defect tables and validation logic.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from icetime.config import (
    KNOWN_END_CHANGES,
    KNOWN_ORIENTATION_FIXES,
    KNOWN_PERIOD_FIXES,
    EngineConfig,
    FetchConfig,
    PeriodFix,
    PipelineConfig,
)

ALL_CONFIGS = [EngineConfig, FetchConfig, PipelineConfig]


# ---------------------------------------------------------------------------
# Structural invariants
# ---------------------------------------------------------------------------


class TestFrozenSlottedInvariants:
    """All config dataclasses must be frozen and slotted."""

    @pytest.mark.parametrize("cls", ALL_CONFIGS)
    def test_frozen(self, cls: type) -> None:
        """Assigning to a field on a frozen dataclass must raise."""
        instance = cls()
        first_field = next(iter(instance.__dataclass_fields__))
        with pytest.raises(AttributeError):
            setattr(instance, first_field, None)

    @pytest.mark.parametrize("cls", ALL_CONFIGS)
    def test_no_instance_dict(self, cls: type) -> None:
        """Slotted instances must not have a __dict__."""
        assert not hasattr(cls(), "__dict__")


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------


class TestEngineConfigDefaults:
    """EngineConfig should expose the standard rink and defect tables."""

    def test_defaults(self) -> None:
        cfg = EngineConfig()
        assert cfg.neutral_zone_half_width == 25.0

    def test_known_tables_are_defaults(self) -> None:
        cfg = EngineConfig()
        assert cfg.period_fixes == KNOWN_PERIOD_FIXES
        assert cfg.orientation_fixes == KNOWN_ORIENTATION_FIXES
        assert cfg.end_change_periods == KNOWN_END_CHANGES

    def test_default_tables_are_copies(self) -> None:
        """Each instance gets its own table, not the module constant."""
        assert EngineConfig().period_fixes is not KNOWN_PERIOD_FIXES

    def test_missing_overtime_fix(self) -> None:
        fixes = KNOWN_PERIOD_FIXES[2015020904]
        assert fixes == (PeriodFix(period=4, duration=300, period_type="overtime"),)

    def test_end_change_games_have_orientation_fixes(self) -> None:
        for gid, periods in KNOWN_END_CHANGES.items():
            assert periods <= set(KNOWN_ORIENTATION_FIXES[gid])


class TestPipelineConfigDefaults:
    """PipelineConfig nests valid sub-configurations."""

    def test_defaults(self) -> None:
        cfg = PipelineConfig()
        assert cfg.cache_dir == Path("data/raw")
        assert cfg.output_dir == Path("data/output")
        assert isinstance(cfg.engine, EngineConfig)
        assert isinstance(cfg.fetch, FetchConfig)

    def test_fetch_templates_format(self) -> None:
        cfg = FetchConfig()
        assert "2016020001" in cfg.pbp_url.format(game_id=2016020001)
        assert "2016020001" in cfg.shift_url.format(game_id=2016020001)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class TestEngineConfigValidation:
    """Invalid engine settings are rejected at construction."""

    def test_negative_half_width(self) -> None:
        with pytest.raises(ValueError, match="neutral_zone_half_width"):
            EngineConfig(neutral_zone_half_width=-1.0)

    def test_zero_half_width_allowed(self) -> None:
        assert EngineConfig(neutral_zone_half_width=0.0).neutral_zone_half_width == 0.0

    def test_score_cap_not_configurable(self) -> None:
        # Score labels are the fixed range -3..3.
        with pytest.raises(TypeError):
            EngineConfig(score_sit_cap=4)  # type: ignore[call-arg]

    def test_negative_fix_duration(self) -> None:
        with pytest.raises(ValueError, match="negative duration"):
            EngineConfig(period_fixes={1: (PeriodFix(period=4, duration=-5),)})

    def test_custom_tables_replace_defaults(self) -> None:
        cfg = EngineConfig(period_fixes={}, orientation_fixes={}, end_change_periods={})
        assert cfg.period_fixes == {}
        assert cfg.orientation_fixes == {}


class TestFetchConfigValidation:
    """URL templates must be formattable with a game id."""

    def test_missing_placeholder(self) -> None:
        with pytest.raises(ValueError, match="pbp_url"):
            FetchConfig(pbp_url="https://example.com/game")

    def test_non_positive_timeout(self) -> None:
        with pytest.raises(ValueError, match="timeout_seconds"):
            FetchConfig(timeout_seconds=0.0)
