"""
Standings calculation for individual tournaments.

Scores are summed from linked games; ranks use standard competition ranking
("1224"): competitors tied on score and on the tiebreak key share a rank, and
the next rank skips by the size of the tied group.
"""

from typing import Dict, Iterable, List, Optional, Sequence, Tuple
from dataclasses import dataclass

from pgntour.tournament_core.scoring import ScoringSystem, STANDARD_SCORING
from pgntour.tournament_core.structure import (
    GameResult,
    RosterPlayer,
    TournamentGame,
)


@dataclass(frozen=True)
class Standing:
    """Final score and rank of one player."""

    fide_id: str
    name: str
    score: float
    rank: int
    rating: Optional[int] = None
    games_played: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0


@dataclass
class _Tally:
    score: float = 0.0
    games_played: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0

    def add(self, points: float, result: GameResult, as_white: bool):
        self.score += points
        if not result.is_finished:
            return
        self.games_played += 1
        if result is GameResult.DRAW:
            self.draws += 1
        elif (result is GameResult.WHITE_WIN) == as_white:
            self.wins += 1
        else:
            self.losses += 1


def calculate_scores(
    players: Iterable[RosterPlayer],
    games: Iterable[TournamentGame],
    scoring: ScoringSystem = STANDARD_SCORING,
) -> Dict[str, float]:
    """Sum each player's game points over the games they took part in."""
    return {fide_id: tally.score for fide_id, tally in _tally(players, games, scoring).items()}


def _tally(
    players: Iterable[RosterPlayer],
    games: Iterable[TournamentGame],
    scoring: ScoringSystem,
) -> Dict[str, _Tally]:
    tallies = {player.fide_id: _Tally() for player in players}
    for game in games:
        white_points, black_points = game.points(scoring)
        if game.white_fide_id in tallies:
            tallies[game.white_fide_id].add(white_points, game.result, as_white=True)
        if game.black_fide_id in tallies:
            tallies[game.black_fide_id].add(black_points, game.result, as_white=False)
    return tallies


def tiebreak_key(player: RosterPlayer) -> Tuple[int, int]:
    """Secondary sort key: higher pre-tournament rating first, unrated last."""
    if player.rating is None:
        return (0, 0)
    return (1, player.rating)


def compute_standings(
    players: Sequence[RosterPlayer],
    games: Iterable[TournamentGame],
    scoring: ScoringSystem = STANDARD_SCORING,
) -> List[Standing]:
    """
    Compute the final standings of a tournament.

    Args:
        players: The tournament roster; its order settles complete ties
        games: Every game linked to the tournament
        scoring: How a game result converts to points

    Returns:
        Standings sorted by rank
    """
    tallies = _tally(players, games, scoring)

    # sorted() is stable, so fully tied players keep roster order
    ordered = sorted(
        players,
        key=lambda p: (tallies[p.fide_id].score, tiebreak_key(p)),
        reverse=True,
    )

    standings = []
    previous_key = None
    rank = 0
    for position, player in enumerate(ordered, 1):
        tally = tallies[player.fide_id]
        key = (tally.score, tiebreak_key(player))
        if key != previous_key:
            rank = position
            previous_key = key
        standings.append(
            Standing(
                fide_id=player.fide_id,
                name=player.name,
                score=tally.score,
                rank=rank,
                rating=player.rating,
                games_played=tally.games_played,
                wins=tally.wins,
                draws=tally.draws,
                losses=tally.losses,
            )
        )
    return standings


def players_by_rank(
    players: Sequence[RosterPlayer], standings: Sequence[Standing]
) -> List[RosterPlayer]:
    """Reorder a roster to follow the given standings."""
    by_id = {player.fide_id: player for player in players}
    return [by_id[standing.fide_id] for standing in standings if standing.fide_id in by_id]
