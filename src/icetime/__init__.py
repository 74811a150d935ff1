"""icetime: situational reconstruction of hockey play-by-play and shift feeds.

Builds a per-second on-ice timeline from a match's event feed and shift
feed, and attributes every event and every second of ice time to a
strength and score situation.
"""

from icetime.config import EngineConfig, PipelineConfig
from icetime.exceptions import IcetimeError
from icetime.pipeline import process_match, transform_match

__version__ = "0.1.0"

__all__ = [
    "EngineConfig",
    "IcetimeError",
    "PipelineConfig",
    "__version__",
    "process_match",
    "transform_match",
]
