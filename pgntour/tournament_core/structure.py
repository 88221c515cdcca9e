"""
Tournament structures produced by the PGN import.

This module provides the plain data types shared by the import pipeline and
the derived views:
- Structured games parsed from individual PGN records
- Roster players identified by their FIDE ID
- The parsed tournament aggregate handed to persistence
- The linked-game view consumed by standings and crosstables
"""

from typing import Dict, List, Tuple, Optional
from dataclasses import dataclass, field
from enum import Enum

from pgntour.tournament_core.scoring import ScoringSystem, STANDARD_SCORING


UNKNOWN_PLAYER_NAME = "Unknown"
UNKNOWN_TOURNAMENT_NAME = "Unknown Tournament"


class GameResult(Enum):
    """Result of a single game, from white's point of view."""

    WHITE_WIN = "1-0"
    BLACK_WIN = "0-1"
    DRAW = "1/2-1/2"
    UNFINISHED = "*"

    @property
    def is_finished(self) -> bool:
        return self is not GameResult.UNFINISHED

    def symbol(self, as_white: bool = True) -> str:
        """Return the crosstable symbol for this result from one side's view."""
        if self is GameResult.DRAW:
            return "½"
        if self is GameResult.UNFINISHED:
            return "*"
        white_won = self is GameResult.WHITE_WIN
        return "1" if white_won == as_white else "0"


class TournamentFormat(Enum):
    """Pairing system of a tournament."""

    ROUND_ROBIN = "round_robin"
    SWISS = "swiss"
    KNOCKOUT = "knockout"
    OTHER = "other"


@dataclass(frozen=True)
class StructuredGame:
    """One game record after tag normalization."""

    tags: Dict[str, str]
    raw_text: str
    round: int = 1
    white_name: str = UNKNOWN_PLAYER_NAME
    black_name: str = UNKNOWN_PLAYER_NAME
    white_rating: Optional[int] = None
    black_rating: Optional[int] = None
    white_fide_id: Optional[str] = None
    black_fide_id: Optional[str] = None
    white_title: Optional[str] = None
    black_title: Optional[str] = None
    result: GameResult = GameResult.UNFINISHED
    date: Optional[str] = None

    @property
    def has_fide_ids(self) -> bool:
        """Whether both sides carry a FIDE identifier."""
        return bool(self.white_fide_id) and bool(self.black_fide_id)

    def points(self, scoring: ScoringSystem = STANDARD_SCORING) -> Tuple[float, float]:
        """Return (white_points, black_points) for this game."""
        return scoring.result_points(self.result.value)


@dataclass(frozen=True)
class RosterPlayer:
    """A tournament participant keyed by FIDE ID."""

    fide_id: str
    name: str
    rating: Optional[int] = None
    title: Optional[str] = None


@dataclass(frozen=True)
class ParsedTournament:
    """Everything recovered from one PGN import."""

    name: str
    total_rounds: int
    format: TournamentFormat
    games: Tuple[StructuredGame, ...] = field(default_factory=tuple)
    players: Tuple[RosterPlayer, ...] = field(default_factory=tuple)
    location: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    time_control: Optional[str] = None
    country_code: Optional[str] = None
    # Name of the inference strategy that chose the format
    format_source: Optional[str] = None

    @property
    def identified_games(self) -> List[StructuredGame]:
        """Games that can be linked to roster entries."""
        return [game for game in self.games if game.has_fide_ids]

    def round_numbers(self) -> List[int]:
        """Distinct round numbers seen across all games, ascending."""
        return sorted({game.round for game in self.games})


@dataclass(frozen=True)
class TournamentGame:
    """A game linked to a tournament, as stored by persistence.

    ``game_id`` is whatever reference the owner of the game uses: a database
    primary key, or a sequence number for in-memory tournaments.
    """

    game_id: object
    round_number: int
    white_fide_id: str
    black_fide_id: str
    result: GameResult
    board_number: Optional[int] = None

    def points(self, scoring: ScoringSystem = STANDARD_SCORING) -> Tuple[float, float]:
        """Return (white_points, black_points) for this game."""
        return scoring.result_points(self.result.value)


def tournament_games(tournament: ParsedTournament) -> List[TournamentGame]:
    """Convert the identified games of a parsed tournament to linked games.

    Games keep their import order; the reference is the 1-based position
    among the identified games, which also serves as the board/sequence number.
    """
    linked = []
    for sequence, game in enumerate(tournament.identified_games, 1):
        linked.append(
            TournamentGame(
                game_id=sequence,
                round_number=game.round,
                white_fide_id=game.white_fide_id,
                black_fide_id=game.black_fide_id,
                result=game.result,
                board_number=sequence,
            )
        )
    return linked
