"""Per-skater summaries over one or more transformed matches.

Aggregates the ``game_player_stats`` table across matches, optionally
restricted to a game-date window and to a set of strength and score
situations. Adds the score-adjusted shot-attempt totals (Corsi), games
played, the player's usual position, every position they dressed at and
the teams they played for. Goaltenders are removed.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import polars as pl

if TYPE_CHECKING:
    import datetime
    from collections.abc import Iterable, Mapping

logger = logging.getLogger(__name__)

# Weight of a shot attempt for the shooting team, by its score situation.
CF_WEIGHTS: dict[int, float] = {
    -3: 0.841,
    -2: 0.884,
    -1: 0.932,
    0: 1.0,
    1: 1.068,
    2: 1.116,
    3: 1.159,
}

# The team shot against sees the mirrored situation.
CA_WEIGHTS: dict[int, float] = {s: CF_WEIGHTS[-s] for s in CF_WEIGHTS}

PLAYOFF_FILTERS: frozenset[str] = frozenset({"only", "exclude"})

REQUIRED_TABLES: tuple[str, ...] = (
    "game_player_stats",
    "game_players",
    "players",
    "teams",
)


def _sum(*columns: str) -> pl.Expr:
    expr = pl.col(columns[0])
    for column in columns[1:]:
        expr = expr + pl.col(column)
    return expr.sum()


def _weighted(weights: dict[int, float], *columns: str) -> pl.Expr:
    attempts = pl.sum_horizontal(*(pl.col(c) for c in columns))
    weight = pl.col("score_sit").replace_strict(weights, return_dtype=pl.Float64)
    return (attempts * weight).sum()


def _check_tables(
    frames: Mapping[str, pl.DataFrame],
    playoffs: str | None,
    needs_games: bool,
) -> None:
    required = REQUIRED_TABLES + (("games",) if needs_games else ())
    missing = [t for t in required if t not in frames]
    if missing:
        msg = f"Missing tables for the skater summary: {missing}"
        raise ValueError(msg)
    if playoffs is not None and playoffs not in PLAYOFF_FILTERS:
        msg = (
            f"Unknown playoffs filter '{playoffs}'. "
            f"Must be one of {sorted(PLAYOFF_FILTERS)}."
        )
        raise ValueError(msg)


def _stat_totals(stats: pl.DataFrame) -> pl.DataFrame:
    """Sum one player's situational stat rows."""
    return stats.group_by("player_id").agg(
        _sum("toi").alias("toi"),
        _sum("ig").alias("ig"),
        _sum("isog").alias("isog"),
        _sum("isog", "ibs", "ims").alias("ic"),
        _sum("ia1").alias("ia1"),
        _sum("ia2").alias("ia2"),
        _sum("i_blocked").alias("i_blocked"),
        _sum("i_ofo_won", "i_dfo_won", "i_nfo_won").alias("i_fo_won"),
        _sum("i_ofo_lost", "i_dfo_lost", "i_nfo_lost").alias("i_fo_lost"),
        _sum("i_eff_pen_drawn").alias("i_eff_pen_drawn"),
        _sum("i_eff_pen_taken").alias("i_eff_pen_taken"),
        _sum("gf").alias("gf"),
        _sum("ga").alias("ga"),
        _sum("sf").alias("sf"),
        _sum("sa").alias("sa"),
        _sum("sf", "bsf", "msf").alias("cf"),
        _sum("sa", "bsa", "msa").alias("ca"),
        _weighted(CF_WEIGHTS, "sf", "msf", "bsf").alias("adj_cf"),
        _weighted(CA_WEIGHTS, "sa", "msa", "bsa").alias("adj_ca"),
        _sum("i_otf").alias("otf"),
        _sum("nfo_won", "nfo_lost").alias("nfo"),
        _sum("ofo_won", "ofo_lost").alias("ofo"),
        _sum("dfo_won", "dfo_lost").alias("dfo"),
    )


def _positions(game_players: pl.DataFrame) -> pl.DataFrame:
    """Games played, most common position and every position played.

    ``na`` entries (scratches) are ignored. ``positions`` lists each
    position once, in game order.
    """
    dressed = game_players.filter(pl.col("position") != "na").sort("game_id")
    counts = dressed.group_by("player_id", "position").agg(pl.len().alias("n"))
    position = (
        counts.sort(["player_id", "n", "position"], descending=[False, True, False])
        .group_by("player_id", maintain_order=True)
        .first()
        .select("player_id", "position")
    )
    gp = dressed.group_by("player_id", maintain_order=True).agg(
        pl.len().cast(pl.Int64).alias("gp"),
        pl.col("position").unique(maintain_order=True).alias("positions"),
    )
    return gp.join(position, on="player_id", how="left")


def _teams(game_players: pl.DataFrame, teams: pl.DataFrame) -> pl.DataFrame:
    abbreviations = teams.unique(subset="team_id").select("team_id", "abbreviation")
    return (
        game_players.sort("game_id")
        .join(abbreviations, on="team_id", how="left")
        .group_by("player_id", maintain_order=True)
        .agg(pl.col("abbreviation").unique(maintain_order=True).alias("teams"))
    )


def _game_window(
    games: pl.DataFrame,
    start: datetime.date | str | None,
    end: datetime.date | str | None,
    playoffs: str | None,
) -> pl.DataFrame:
    """Ids of the games inside the date window and playoff filter.

    Bounds are inclusive and compared on the ``YYYY-MM-DD`` part of
    ``game_date``.
    """
    day = pl.col("game_date").str.slice(0, 10)
    if start is not None:
        games = games.filter(day >= str(start))
    if end is not None:
        games = games.filter(day <= str(end))
    if playoffs is not None:
        games = games.filter(pl.col("is_playoff") == (playoffs == "only"))
    return games.select("game_id")


def summarize_skaters(
    frames: Mapping[str, pl.DataFrame],
    strength_sits: Iterable[str] | None = None,
    score_sits: Iterable[int] | None = None,
    playoffs: str | None = None,
    start: datetime.date | str | None = None,
    end: datetime.date | str | None = None,
) -> pl.DataFrame:
    """Summarize skater production across transformed matches.

    Args:
        frames: Table frames (see :func:`icetime.output.to_frames`),
            with at least ``game_player_stats``, ``game_players``,
            ``players`` and ``teams``; ``games`` is also needed when
            filtering on playoffs or game dates.
        strength_sits: Strength situations to include, or ``None`` for
            all of them.
        score_sits: Score situations to include, or ``None`` for all.
        playoffs: ``"only"`` or ``"exclude"`` to filter on playoff
            games, ``None`` to keep every game.
        start: First game date to include (``YYYY-MM-DD`` or a
            :class:`datetime.date`), ``None`` for no lower bound.
        end: Last game date to include, ``None`` for no upper bound.

    Returns:
        One row per skater, sorted by player id.

    Raises:
        ValueError: If a table is missing or *playoffs* is unknown.
    """
    needs_games = playoffs is not None or start is not None or end is not None
    _check_tables(frames, playoffs, needs_games)

    stats = frames["game_player_stats"]
    game_players = frames["game_players"]
    if needs_games:
        games = _game_window(frames["games"], start, end, playoffs)
        stats = stats.join(games, on="game_id", how="semi")
        game_players = game_players.join(games, on="game_id", how="semi")
    if strength_sits is not None:
        stats = stats.filter(pl.col("strength_sit").is_in(list(strength_sits)))
    if score_sits is not None:
        stats = stats.filter(pl.col("score_sit").is_in(list(score_sits)))

    players = frames["players"].unique(subset="player_id", keep="first")
    summary = (
        players.select("player_id", "first_name", "last_name")
        .join(_stat_totals(stats), on="player_id", how="inner")
        .join(_positions(game_players), on="player_id", how="left")
        .join(_teams(game_players, frames["teams"]), on="player_id", how="left")
        .with_columns(pl.col("gp").fill_null(0))
        .filter(pl.col("position").is_null() | (pl.col("position") != "g"))
        .sort("player_id")
    )
    logger.debug("Summarized %d skaters", summary.height)
    return summary
