"""
Assemble and validate a tournament from PGN text.

``parse_tournament`` composes the parser, roster builder and format inference
into a ParsedTournament and fails fast on structural problems.
``validate_tournament`` reports data-quality issues as errors, warnings and
suggestions without raising.
"""

from typing import List, Optional
from dataclasses import dataclass, field
import logging

from pgntour.tournament_core.fields import parse_optional, parse_positive_int
from pgntour.tournament_core.inference import (
    FormatEvidence,
    find_format_hint,
    infer_format,
)
from pgntour.tournament_core.pgn import PGNParser
from pgntour.tournament_core.roster import build_roster
from pgntour.tournament_core.structure import (
    GameResult,
    ParsedTournament,
    StructuredGame,
    TournamentFormat,
    UNKNOWN_TOURNAMENT_NAME,
)

logger = logging.getLogger(__name__)


NO_GAMES_MESSAGE = "Import failed: no valid games found in the PGN text"
NO_PLAYERS_MESSAGE = (
    "Import failed: no players with FIDE identifiers found. "
    "Tournament import requires FIDE identifiers for both players of a game."
)


class TournamentParseError(ValueError):
    """The PGN text cannot produce a usable tournament."""


@dataclass
class ValidationResult:
    """Outcome of validating a parsed tournament."""

    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    suggestions: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


@dataclass
class AssemblyResult:
    """A parsed tournament (when parsing succeeded) and its validation."""

    tournament: Optional[ParsedTournament]
    validation: ValidationResult

    @property
    def is_valid(self) -> bool:
        return self.tournament is not None and self.validation.is_valid


def _total_rounds(games: List[StructuredGame], declared: Optional[int]) -> int:
    """Highest observed round, unless a declared count covers it."""
    max_round = max(game.round for game in games)
    if declared is not None and declared >= max_round:
        return declared
    if declared is not None:
        logger.info(
            "Ignoring EventRounds %s: games go up to round %s", declared, max_round
        )
    return max_round


def _end_date(games: List[StructuredGame]) -> Optional[str]:
    dates = [game.date for game in games if game.date]
    return max(dates) if dates else None


def parse_tournament(pgn_text: str) -> ParsedTournament:
    """Parse multi-game PGN text into a ParsedTournament.

    Raises:
        TournamentParseError: if no game record is found, or if no game has
            FIDE identifiers for both players.
    """
    parser = PGNParser(pgn_text)
    games = parser.parse_games()
    if not games:
        raise TournamentParseError(NO_GAMES_MESSAGE)

    players = build_roster(games)
    if not players:
        raise TournamentParseError(NO_PLAYERS_MESSAGE)

    first_tags = next((game.tags for game in games if game.tags), {})
    inference = infer_format(
        FormatEvidence(
            game_count=len(games),
            player_count=len(players),
            hint=find_format_hint(games),
        )
    )

    tournament = ParsedTournament(
        name=parse_optional(first_tags.get("Event")) or UNKNOWN_TOURNAMENT_NAME,
        location=parse_optional(first_tags.get("Site")),
        start_date=(
            parse_optional(first_tags.get("EventDate"))
            or parse_optional(first_tags.get("Date"))
        ),
        end_date=_end_date(games),
        total_rounds=_total_rounds(
            games, parse_positive_int(first_tags.get("EventRounds"))
        ),
        format=inference.format,
        format_source=inference.source,
        time_control=parse_optional(first_tags.get("TimeControl")),
        country_code=parse_optional(first_tags.get("EventCountry")),
        games=tuple(games),
        players=tuple(players),
    )

    logger.debug(
        "Parsed %s: %d games, %d players, %s via %s",
        tournament.name,
        len(tournament.games),
        len(tournament.players),
        tournament.format.value,
        tournament.format_source,
    )
    return tournament


def _duplicate_pairings(games: List[StructuredGame]) -> List[str]:
    seen = set()
    duplicates = []
    for game in games:
        if not game.has_fide_ids:
            continue
        key = (game.round, frozenset((game.white_fide_id, game.black_fide_id)))
        if key in seen:
            duplicates.append(
                f"Round {game.round}: {game.white_name} vs {game.black_name}"
            )
        seen.add(key)
    return duplicates


def validate_tournament(tournament: ParsedTournament) -> ValidationResult:
    """Check a parsed tournament before it is imported."""
    result = ValidationResult()
    games = list(tournament.games)
    player_count = len(tournament.players)

    if not tournament.name or tournament.name == UNKNOWN_TOURNAMENT_NAME:
        result.warnings.append("Tournament name is missing or generic")

    if player_count < 2:
        result.errors.append("Tournament must have at least 2 players")

    if not games:
        result.errors.append("Tournament must have at least 1 game")

    missing_ids = [game for game in games if not game.has_fide_ids]
    if missing_ids:
        result.warnings.append(
            f"{len(missing_ids)} game(s) missing FIDE IDs for one or both players "
            "will not be linked"
        )

    duplicates = _duplicate_pairings(games)
    if duplicates:
        result.warnings.append(f"Possible duplicate games: {', '.join(duplicates)}")

    unique_rounds = tournament.round_numbers()
    if len(unique_rounds) != tournament.total_rounds:
        result.warnings.append(
            f"Expected {tournament.total_rounds} rounds but found "
            f"{len(unique_rounds)} unique rounds in games"
        )

    unfinished = [game for game in games if game.result is GameResult.UNFINISHED]
    if unfinished:
        result.warnings.append(
            f"{len(unfinished)} game(s) with unfinished results (*)"
        )

    if tournament.format is TournamentFormat.ROUND_ROBIN:
        expected = player_count * (player_count - 1) // 2
        if len(games) not in (expected, expected * 2):
            result.suggestions.append(
                f"Round-robin with {player_count} players should have {expected} "
                f"(single) or {expected * 2} (double) games. "
                f"Found {len(games)} games."
            )

    if not tournament.location:
        result.suggestions.append("Consider adding tournament location information")

    if not tournament.start_date:
        result.suggestions.append("Consider adding tournament start date")

    return result


def assemble_tournament(pgn_text: str) -> AssemblyResult:
    """Parse and validate in one step, reporting structural failures as errors."""
    try:
        tournament = parse_tournament(pgn_text)
    except TournamentParseError as e:
        return AssemblyResult(tournament=None, validation=ValidationResult(errors=[str(e)]))
    return AssemblyResult(tournament=tournament, validation=validate_tournament(tournament))


def summarize_tournament(tournament: ParsedTournament) -> str:
    """Generate a short text summary of a parsed tournament."""
    lines = [f"Tournament: {tournament.name}"]
    if tournament.location:
        lines.append(f"Location: {tournament.location}")
    if tournament.start_date:
        if tournament.end_date:
            lines.append(f"Date: {tournament.start_date} to {tournament.end_date}")
        else:
            lines.append(f"Date: {tournament.start_date}")
    lines.append(f"Type: {tournament.format.value}")
    lines.append(f"Rounds: {tournament.total_rounds}")
    lines.append(f"Players: {len(tournament.players)}")
    lines.append(f"Games: {len(tournament.games)}")
    if tournament.time_control:
        lines.append(f"Time Control: {tournament.time_control}")
    return "\n".join(lines)
