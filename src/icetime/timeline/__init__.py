"""Per-second situational timeline for the icetime engine.

Provides the strength/score lookup tables, the interval timeline
builder and the run-length situation compressor.
"""

from icetime.timeline.compression import (
    SituationRanges,
    TimeRange,
    compress_ranges,
    compress_situations,
)
from icetime.timeline.intervals import (
    Interval,
    Timeline,
    build_timeline,
    prepare_shifts,
)
from icetime.timeline.situations import (
    SCORE_SITUATIONS,
    STRENGTH_SITUATIONS,
    score_situations,
    strength_situations,
)

__all__ = [
    "SCORE_SITUATIONS",
    "STRENGTH_SITUATIONS",
    "Interval",
    "SituationRanges",
    "TimeRange",
    "Timeline",
    "build_timeline",
    "compress_ranges",
    "compress_situations",
    "prepare_shifts",
    "score_situations",
    "strength_situations",
]
