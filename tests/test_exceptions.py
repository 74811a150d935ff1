"""Tests for icetime.exceptions custom exception hierarchy.

Verifies inheritance relationships, catch semantics and message
propagation.
"""

from __future__ import annotations

import pytest

from icetime.exceptions import (
    AdapterError,
    AggregationError,
    FeedFormatError,
    IcetimeError,
    TimelineError,
)

# ---------------------------------------------------------------------------
# Hierarchy
# ---------------------------------------------------------------------------

SUBCLASSES = [
    AdapterError,
    FeedFormatError,
    TimelineError,
    AggregationError,
]


class TestExceptionHierarchy:
    """All custom exceptions must inherit from IcetimeError."""

    @pytest.mark.parametrize("cls", SUBCLASSES)
    def test_inherits_from_icetime_error(self, cls: type) -> None:
        """Each subclass must be a subclass of IcetimeError."""
        assert issubclass(cls, IcetimeError)

    def test_icetime_error_is_exception(self) -> None:
        """IcetimeError itself must inherit from Exception."""
        assert issubclass(IcetimeError, Exception)

    def test_feed_format_error_is_adapter_error(self) -> None:
        """Malformed feeds are a kind of adapter failure."""
        assert issubclass(FeedFormatError, AdapterError)

    def test_timeline_error_is_not_adapter_error(self) -> None:
        """Timeline invariant violations are not input errors."""
        assert not issubclass(TimelineError, AdapterError)


# ---------------------------------------------------------------------------
# Catch semantics
# ---------------------------------------------------------------------------


class TestCatchSemantics:
    """Catching IcetimeError must catch all subclasses."""

    @pytest.mark.parametrize("cls", SUBCLASSES)
    def test_catch_via_base(self, cls: type) -> None:
        """Raising a subclass must be catchable as IcetimeError."""
        with pytest.raises(IcetimeError):
            raise cls("test message")

    def test_sibling_not_caught(self) -> None:
        """TimelineError must not be caught as AggregationError."""
        with pytest.raises(TimelineError):
            try:
                raise TimelineError("no interval")
            except AggregationError:
                pytest.fail("TimelineError should not be caught as AggregationError")


# ---------------------------------------------------------------------------
# Message propagation
# ---------------------------------------------------------------------------


class TestMessagePropagation:
    """Exception messages must be preserved through str() and args."""

    @pytest.mark.parametrize("cls", [IcetimeError, *SUBCLASSES])
    def test_message_in_str(self, cls: type) -> None:
        """The message passed at construction must appear in str()."""
        msg = f"test error from {cls.__name__}"
        assert str(cls(msg)) == msg

    @pytest.mark.parametrize("cls", [IcetimeError, *SUBCLASSES])
    def test_has_docstring(self, cls: type) -> None:
        """Each exception class must define a non-empty docstring."""
        assert cls.__doc__ is not None
        assert cls.__doc__.strip()
