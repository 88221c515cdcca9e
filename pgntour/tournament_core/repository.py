"""
Persistence interface for imported tournaments.

The import pipeline talks to storage only through ``TournamentRepository``,
so parsing and standings stay testable without a database. The Django
implementation lives in ``pgntour.tournament.structure_to_db``.
"""

from typing import Dict, List, Optional, Protocol, Tuple
from dataclasses import dataclass, field

from pgntour.tournament_core.scoring import ScoringSystem, STANDARD_SCORING
from pgntour.tournament_core.standings import Standing, compute_standings
from pgntour.tournament_core.structure import (
    GameResult,
    ParsedTournament,
    RosterPlayer,
    TournamentGame,
)


class TournamentRepository(Protocol):
    """Storage capabilities needed to import a tournament."""

    def create_tournament(self, tournament: ParsedTournament) -> object:
        """Store the tournament row and return its id."""

    def upsert_player(self, player: RosterPlayer) -> None:
        """Create or update a player by FIDE ID."""

    def add_player_to_tournament(
        self, tournament_id: object, fide_id: str, rating: Optional[int]
    ) -> None:
        """Register a player as a participant with their starting rating."""

    def create_round(self, tournament_id: object, round_number: int) -> object:
        """Create a round and return its id."""

    def link_game(
        self,
        tournament_id: object,
        round_id: object,
        white_fide_id: str,
        black_fide_id: str,
        result: GameResult,
        board_number: Optional[int] = None,
        game_date: Optional[str] = None,
        pgn: str = "",
    ) -> object:
        """Link a game to a tournament round and return the game id."""

    def record_analysis(self, game_id: object, analysis_id: str) -> None:
        """Attach an external analysis reference to a linked game."""

    def load_players(self, tournament_id: object) -> List[RosterPlayer]:
        """Return the tournament roster."""

    def load_games(self, tournament_id: object) -> List[TournamentGame]:
        """Return linked games ordered by round, then board."""

    def compute_standings(self, tournament_id: object) -> List[Standing]:
        """Compute, store and return the tournament standings."""


@dataclass
class _StoredTournament:
    tournament: ParsedTournament
    entrants: Dict[str, Optional[int]] = field(default_factory=dict)
    rounds: Dict[int, int] = field(default_factory=dict)
    games: List[TournamentGame] = field(default_factory=list)
    standings: List[Standing] = field(default_factory=list)


class InMemoryTournamentRepository:
    """Dictionary-backed repository, used by tests and dry runs."""

    def __init__(self, scoring: ScoringSystem = STANDARD_SCORING):
        self.scoring = scoring
        self.players: Dict[str, RosterPlayer] = {}
        self.tournaments: Dict[int, _StoredTournament] = {}
        self.analyses: Dict[object, str] = {}
        self.pgn: Dict[object, str] = {}
        self._round_index: Dict[int, Tuple[int, int]] = {}
        self._next_id = 1

    def _new_id(self) -> int:
        new_id = self._next_id
        self._next_id += 1
        return new_id

    def create_tournament(self, tournament: ParsedTournament) -> int:
        tournament_id = self._new_id()
        self.tournaments[tournament_id] = _StoredTournament(tournament)
        return tournament_id

    def upsert_player(self, player: RosterPlayer) -> None:
        self.players[player.fide_id] = player

    def add_player_to_tournament(
        self, tournament_id: int, fide_id: str, rating: Optional[int]
    ) -> None:
        self.tournaments[tournament_id].entrants[fide_id] = rating

    def create_round(self, tournament_id: int, round_number: int) -> int:
        stored = self.tournaments[tournament_id]
        if round_number not in stored.rounds:
            round_id = self._new_id()
            stored.rounds[round_number] = round_id
            self._round_index[round_id] = (tournament_id, round_number)
        return stored.rounds[round_number]

    def link_game(
        self,
        tournament_id: int,
        round_id: int,
        white_fide_id: str,
        black_fide_id: str,
        result: GameResult,
        board_number: Optional[int] = None,
        game_date: Optional[str] = None,
        pgn: str = "",
    ) -> int:
        _, round_number = self._round_index[round_id]
        game_id = self._new_id()
        self.tournaments[tournament_id].games.append(
            TournamentGame(
                game_id=game_id,
                round_number=round_number,
                white_fide_id=white_fide_id,
                black_fide_id=black_fide_id,
                result=result,
                board_number=board_number,
            )
        )
        self.pgn[game_id] = pgn
        return game_id

    def record_analysis(self, game_id: object, analysis_id: str) -> None:
        self.analyses[game_id] = analysis_id

    def load_players(self, tournament_id: int) -> List[RosterPlayer]:
        entrants = self.tournaments[tournament_id].entrants
        return [
            RosterPlayer(
                fide_id=fide_id,
                name=self.players[fide_id].name,
                rating=rating,
                title=self.players[fide_id].title,
            )
            for fide_id, rating in entrants.items()
        ]

    def load_games(self, tournament_id: int) -> List[TournamentGame]:
        games = self.tournaments[tournament_id].games
        return sorted(
            games,
            key=lambda g: (g.round_number, g.board_number or 0, g.game_id),
        )

    def compute_standings(self, tournament_id: int) -> List[Standing]:
        standings = compute_standings(
            self.load_players(tournament_id),
            self.load_games(tournament_id),
            self.scoring,
        )
        self.tournaments[tournament_id].standings = standings
        return standings
