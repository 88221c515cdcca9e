"""
Transform database models to tournament_core structure representation.

This module provides functions to convert Django ORM models from
pgntour.tournament into the clean tournament_core structures used for
standings and crosstable calculations.
"""

from typing import List, Optional

from pgntour.tournament_core.crosstable import Crosstable, build_crosstable
from pgntour.tournament_core.fields import parse_result
from pgntour.tournament_core.scoring import STANDARD_SCORING, ScoringSystem
from pgntour.tournament_core.standings import (
    Standing,
    compute_standings,
    players_by_rank,
)
from pgntour.tournament_core.structure import (
    GameResult,
    RosterPlayer,
    TournamentGame as CoreTournamentGame,
)


def _result_to_game_result(result: Optional[str]) -> GameResult:
    """Convert a stored result string to a GameResult; unknown values are unfinished."""
    return parse_result(result)


def players_from_db(tournament) -> List[RosterPlayer]:
    """Return the tournament roster in registration order."""
    entrants = (
        tournament.tournamentplayer_set.select_related("player")
        .order_by("seed_number", "id")
    )
    return [
        RosterPlayer(
            fide_id=entrant.player.fide_id,
            name=entrant.player.full_name,
            rating=entrant.starting_rating,
            title=entrant.player.title or None,
        )
        for entrant in entrants
    ]


def games_from_db(tournament) -> List[CoreTournamentGame]:
    """Return linked games in playing order (round, board, insertion)."""
    games = tournament.tournamentgame_set.select_related("round").order_by(
        "round__round_number", "board_number", "id"
    )
    return [
        CoreTournamentGame(
            game_id=game.pk,
            round_number=game.round.round_number,
            white_fide_id=game.white_fide_id,
            black_fide_id=game.black_fide_id,
            result=_result_to_game_result(game.result),
            board_number=game.board_number,
        )
        for game in games
    ]


def tournament_standings(
    tournament, scoring: ScoringSystem = STANDARD_SCORING
) -> List[Standing]:
    """Compute standings from the stored roster and games."""
    return compute_standings(players_from_db(tournament), games_from_db(tournament), scoring)


def tournament_crosstable(
    tournament, scoring: ScoringSystem = STANDARD_SCORING
) -> Crosstable:
    """Build the crosstable with rows in rank order."""
    players = players_from_db(tournament)
    games = games_from_db(tournament)
    standings = compute_standings(players, games, scoring)
    return build_crosstable(players_by_rank(players, standings), games)
