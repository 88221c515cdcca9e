"""
Tournament import pipeline.

Sequences parse -> validate -> persist -> standings, then per-game analysis.
Structural and validation failures stop the import before anything is
stored. Storing and analysing are separate steps so callers can commit the
stored tournament before making the slow calls to the analysis service.
Analysis failures are per game: the game stays linked and is listed in
``ImportResult.games_needing_analysis``.
"""

from typing import List, Optional, Protocol, Tuple
from dataclasses import dataclass, field
import logging

from pgntour.tournament_core.assembler import (
    TournamentParseError,
    ValidationResult,
    parse_tournament,
    validate_tournament,
)
from pgntour.tournament_core.repository import TournamentRepository
from pgntour.tournament_core.standings import Standing
from pgntour.tournament_core.structure import ParsedTournament, StructuredGame

logger = logging.getLogger(__name__)


class AnalysisError(Exception):
    """The external analysis service could not analyse a game."""


class GameAnalyzer(Protocol):
    """External engine analysis of a single game."""

    def analyze(self, pgn: str) -> str:
        """Analyse one game and return a reference to the stored analysis.

        Raises:
            AnalysisError: if the game could not be analysed
        """


class TournamentImportError(Exception):
    """The PGN text was rejected before any data was stored."""

    def __init__(self, message: str, validation: Optional[ValidationResult] = None):
        super().__init__(message)
        self.validation = validation or ValidationResult(errors=[message])


@dataclass
class ImportResult:
    """Summary of one import."""

    tournament_id: object
    tournament: ParsedTournament
    players_imported: int = 0
    rounds_created: int = 0
    linked_games: List[Tuple[object, StructuredGame]] = field(default_factory=list)
    games_analyzed: int = 0
    games_needing_analysis: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    suggestions: List[str] = field(default_factory=list)
    standings: List[Standing] = field(default_factory=list)

    @property
    def games_linked(self) -> int:
        return len(self.linked_games)


def _describe(game: StructuredGame) -> str:
    return f"Round {game.round}: {game.white_name} vs {game.black_name}"


class TournamentImporter:
    """Import PGN tournaments through a repository."""

    def __init__(
        self,
        repository: TournamentRepository,
        analyzer: Optional[GameAnalyzer] = None,
    ):
        self.repository = repository
        self.analyzer = analyzer

    def prepare(self, pgn_text: str) -> Tuple[ParsedTournament, ValidationResult]:
        """Parse and validate without storing anything.

        Returns the tournament along with its validation so the warnings and
        suggestions can be carried into the import result.

        Raises:
            TournamentImportError: on structural failure or validation errors
        """
        try:
            tournament = parse_tournament(pgn_text)
        except TournamentParseError as e:
            raise TournamentImportError(str(e)) from e

        validation = validate_tournament(tournament)
        if not validation.is_valid:
            raise TournamentImportError(
                "Tournament validation failed: " + "; ".join(validation.errors),
                validation,
            )
        return tournament, validation

    def import_pgn(self, pgn_text: str) -> ImportResult:
        """Import a tournament from PGN text, then analyse its games."""
        result = self.store_pgn(pgn_text)
        self.analyze_games(result)
        return result

    def store_pgn(self, pgn_text: str) -> ImportResult:
        """Parse, validate and store a tournament without analysing it."""
        tournament, validation = self.prepare(pgn_text)
        return self.store_tournament(tournament, validation)

    def store_tournament(
        self,
        tournament: ParsedTournament,
        validation: Optional[ValidationResult] = None,
    ) -> ImportResult:
        """Store an already validated tournament and compute its standings."""
        validation = validation or ValidationResult()
        repo = self.repository

        tournament_id = repo.create_tournament(tournament)
        result = ImportResult(
            tournament_id=tournament_id,
            tournament=tournament,
            warnings=list(validation.warnings),
            suggestions=list(validation.suggestions),
        )
        logger.info("Importing tournament %s as %s", tournament.name, tournament_id)

        for player in tournament.players:
            repo.upsert_player(player)
            repo.add_player_to_tournament(tournament_id, player.fide_id, player.rating)
            result.players_imported += 1

        round_ids = {}
        for round_number in range(1, tournament.total_rounds + 1):
            round_ids[round_number] = repo.create_round(tournament_id, round_number)
            result.rounds_created += 1

        for sequence, game in enumerate(tournament.identified_games, 1):
            game_id = repo.link_game(
                tournament_id,
                round_ids[game.round],
                game.white_fide_id,
                game.black_fide_id,
                game.result,
                board_number=sequence,
                game_date=game.date,
                pgn=game.raw_text,
            )
            result.linked_games.append((game_id, game))

        result.standings = repo.compute_standings(tournament_id)
        logger.info(
            "Imported %s: %d players, %d rounds, %d games",
            tournament.name,
            result.players_imported,
            result.rounds_created,
            result.games_linked,
        )
        return result

    def analyze_games(self, result: ImportResult):
        """Send each linked game to the analyzer, if one is configured.

        Failures are collected on the result; the games stay linked.
        """
        if self.analyzer is None:
            return

        for game_id, game in result.linked_games:
            self._analyze(game, game_id, result)

        if result.games_needing_analysis:
            result.warnings.append(
                f"{len(result.games_needing_analysis)} game(s) failed to analyze"
            )

    def _analyze(self, game: StructuredGame, game_id: object, result: ImportResult):
        try:
            analysis_id = self.analyzer.analyze(game.raw_text)
        except AnalysisError as e:
            logger.warning("Failed to analyze %s: %s", _describe(game), e)
            result.games_needing_analysis.append(_describe(game))
            return
        self.repository.record_analysis(game_id, analysis_id)
        result.games_analyzed += 1
