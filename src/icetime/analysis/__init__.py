"""Cross-match analysis of transformed tables."""

from icetime.analysis.skaters import CA_WEIGHTS, CF_WEIGHTS, summarize_skaters

__all__ = ["CA_WEIGHTS", "CF_WEIGHTS", "summarize_skaters"]
