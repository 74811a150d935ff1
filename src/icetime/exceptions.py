"""Custom exceptions for the icetime engine.

All exceptions inherit from :class:`IcetimeError` so callers can catch
the full family with a single ``except IcetimeError`` clause.
"""


class IcetimeError(Exception):
    """Base exception for all icetime errors."""


class AdapterError(IcetimeError):
    """Raised when a feed adapter fails to fetch or cache a document."""


class FeedFormatError(AdapterError):
    """Raised when a raw feed document does not have the expected shape."""


class TimelineError(IcetimeError):
    """Raised when an event cannot be attributed to an interval."""


class AggregationError(IcetimeError):
    """Raised when a counter is addressed with an unknown label or stat."""
