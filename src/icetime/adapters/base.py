"""Abstract adapter protocol for raw-feed providers.

Defines the :class:`FeedAdapter` structural interface that every
concrete provider must satisfy. Adapters only retrieve the two raw
documents for a match; parsing and every later stage are
provider-independent.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class FeedAdapter(Protocol):
    """Structural interface for match-feed providers.

    Any class that implements the method below is a valid
    ``FeedAdapter`` without needing to inherit from this class.
    """

    def load_feeds(self, game_id: int) -> tuple[dict[str, Any], dict[str, Any]]:
        """Return the play-by-play and shift-chart documents for a match.

        Args:
            game_id: Identifier of the match.

        Returns:
            ``(pbp, shifts)`` decoded JSON documents.
        """
        ...
