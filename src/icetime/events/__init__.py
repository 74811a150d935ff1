"""Event normalization and period orientation for the icetime engine."""

from icetime.events.normalizer import (
    PENALTY_SHOT_SEVERITY,
    flag_penalty_effectiveness,
    flag_penalty_shots,
    normalize_events,
)
from icetime.events.periods import (
    assign_zones,
    attribute_icings,
    build_periods,
    home_defends_negative_x,
    home_zone,
    resolve_orientation,
)

__all__ = [
    "PENALTY_SHOT_SEVERITY",
    "assign_zones",
    "attribute_icings",
    "build_periods",
    "flag_penalty_effectiveness",
    "flag_penalty_shots",
    "home_defends_negative_x",
    "home_zone",
    "normalize_events",
    "resolve_orientation",
]
