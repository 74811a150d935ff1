"""Shared test fixtures for the icetime engine.

Provides reusable fixtures used across multiple test modules:

* :func:`engine_config` -- a default :class:`EngineConfig`.
* :func:`standard_docs` -- raw ``(pbp, shifts)`` documents of the
  two-period game from :func:`builders.standard_game`.
* :func:`standard_match` -- that game run through every engine stage.
* :func:`standard_rows` -- that game projected into table rows.

Document builders for custom scenarios live in :mod:`builders`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest
from builders import standard_game

from icetime.config import EngineConfig
from icetime.output.rows import project_rows
from icetime.pipeline import parse_feeds, process_match

if TYPE_CHECKING:
    from icetime.pipeline import ProcessedMatch


@pytest.fixture()
def engine_config() -> EngineConfig:
    """Default engine configuration."""
    return EngineConfig()


@pytest.fixture()
def standard_docs() -> tuple[dict[str, Any], dict[str, Any]]:
    """Raw play-by-play and shift documents of the standard game."""
    return standard_game()


@pytest.fixture()
def standard_match(
    standard_docs: tuple[dict[str, Any], dict[str, Any]],
    engine_config: EngineConfig,
) -> ProcessedMatch:
    """The standard game run through every engine stage."""
    feed, raw_shifts = parse_feeds(*standard_docs)
    return process_match(feed, raw_shifts, engine_config)


@pytest.fixture()
def standard_rows(standard_match: ProcessedMatch) -> dict[str, list[dict[str, Any]]]:
    """Table rows of the standard game."""
    return project_rows(standard_match)
