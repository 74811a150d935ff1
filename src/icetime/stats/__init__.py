"""Situation-keyed stat accumulation for the icetime engine."""

from icetime.stats.aggregator import (
    ROLE_STATS,
    TRACKED_EVENT_TYPES,
    MatchStats,
    aggregate_stats,
    is_tracked,
    on_ice_stats,
    role_stats,
)
from icetime.stats.counters import (
    ALL_STATS,
    INDIVIDUAL_STATS,
    ON_ICE_STATS,
    SituationCounters,
)

__all__ = [
    "ALL_STATS",
    "INDIVIDUAL_STATS",
    "ON_ICE_STATS",
    "ROLE_STATS",
    "TRACKED_EVENT_TYPES",
    "MatchStats",
    "SituationCounters",
    "aggregate_stats",
    "is_tracked",
    "on_ice_stats",
    "role_stats",
]
