"""
Store tournament_core structures as database objects.

This module provides the Django implementation of the tournament_core
repository interface, plus a helper that stores a whole PGN import in one
transaction and analyses its games once that transaction has committed.
"""

from decimal import Decimal
from typing import List, Optional
import logging

from django.db import transaction

from pgntour.tournament.db_to_structure import games_from_db, players_from_db
from pgntour.tournament_core.importer import (
    GameAnalyzer,
    ImportResult,
    TournamentImporter,
)
from pgntour.tournament_core.scoring import STANDARD_SCORING, ScoringSystem
from pgntour.tournament_core.standings import Standing, compute_standings
from pgntour.tournament_core.structure import (
    GameResult,
    ParsedTournament,
    RosterPlayer,
    TournamentGame as CoreTournamentGame,
)

logger = logging.getLogger(__name__)


class DjangoTournamentRepository:
    """TournamentRepository backed by the pgntour.tournament models."""

    def __init__(self, scoring: ScoringSystem = STANDARD_SCORING, imported_by: str = ""):
        self.scoring = scoring
        self.imported_by = imported_by

    def create_tournament(self, tournament: ParsedTournament) -> int:
        from django.utils import timezone
        from pgntour.tournament.models import Tournament

        obj = Tournament.objects.create(
            name=tournament.name,
            location=tournament.location or "",
            start_date=tournament.start_date or timezone.now().strftime("%Y.%m.%d"),
            end_date=tournament.end_date or "",
            tournament_type=tournament.format.value,
            total_rounds=tournament.total_rounds,
            time_control=tournament.time_control or "",
            country_code=tournament.country_code or "",
            metadata={
                "imported_at": timezone.now().isoformat(),
                "imported_by": self.imported_by,
                "game_count": len(tournament.games),
                "format_source": tournament.format_source,
            },
        )
        return obj.pk

    def upsert_player(self, player: RosterPlayer) -> None:
        from pgntour.tournament.models import Player

        defaults = {"full_name": player.name}
        if player.title:
            defaults["title"] = player.title
        Player.objects.update_or_create(fide_id=player.fide_id, defaults=defaults)

    def add_player_to_tournament(
        self, tournament_id: int, fide_id: str, rating: Optional[int]
    ) -> None:
        from pgntour.tournament.models import Player, TournamentPlayer

        player = Player.objects.get(fide_id=fide_id)
        seed_number = TournamentPlayer.objects.filter(tournament_id=tournament_id).count() + 1
        TournamentPlayer.objects.update_or_create(
            tournament_id=tournament_id,
            player=player,
            defaults={"starting_rating": rating},
            create_defaults={"starting_rating": rating, "seed_number": seed_number},
        )

    def create_round(self, tournament_id: int, round_number: int) -> int:
        from pgntour.tournament.models import TournamentRound

        round_obj, _ = TournamentRound.objects.get_or_create(
            tournament_id=tournament_id, round_number=round_number
        )
        return round_obj.pk

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
        from pgntour.tournament.models import TournamentGame

        game = TournamentGame.objects.create(
            tournament_id=tournament_id,
            round_id=round_id,
            white_fide_id=white_fide_id,
            black_fide_id=black_fide_id,
            result=result.value,
            board_number=board_number,
            game_date=game_date or "",
            pgn=pgn,
        )
        return game.pk

    def record_analysis(self, game_id: int, analysis_id: str) -> None:
        from pgntour.tournament.models import TournamentGame

        TournamentGame.objects.filter(pk=game_id).update(analysis_id=analysis_id)

    def _tournament(self, tournament_id: int):
        from pgntour.tournament.models import Tournament

        return Tournament.objects.get(pk=tournament_id)

    def load_players(self, tournament_id: int) -> List[RosterPlayer]:
        return players_from_db(self._tournament(tournament_id))

    def load_games(self, tournament_id: int) -> List[CoreTournamentGame]:
        return games_from_db(self._tournament(tournament_id))

    def compute_standings(self, tournament_id: int) -> List[Standing]:
        """Compute standings and store final score and rank on each entrant."""
        from pgntour.tournament.models import TournamentPlayer

        tournament = self._tournament(tournament_id)
        standings = compute_standings(
            players_from_db(tournament), games_from_db(tournament), self.scoring
        )
        entrants = {
            entrant.player.fide_id: entrant
            for entrant in TournamentPlayer.objects.filter(
                tournament=tournament
            ).select_related("player")
        }
        for standing in standings:
            entrant = entrants[standing.fide_id]
            entrant.final_score = Decimal(str(standing.score))
            entrant.final_rank = standing.rank
            entrant.save(update_fields=["final_score", "final_rank", "date_modified"])
        return standings


def structure_to_db(
    pgn_text: str,
    analyzer: Optional[GameAnalyzer] = None,
    imported_by: str = "",
) -> ImportResult:
    """Import PGN text into the database.

    The tournament, its roster, rounds and games are stored in a single
    transaction. Engine analysis runs after that transaction commits, so a
    slow analysis service never holds it open; analysis ids are recorded one
    game at a time.

    Raises:
        TournamentImportError: if the text is rejected; nothing is stored
    """
    repository = DjangoTournamentRepository(imported_by=imported_by)
    importer = TournamentImporter(repository, analyzer)
    with transaction.atomic():
        result = importer.store_pgn(pgn_text)
    importer.analyze_games(result)
    logger.info(
        "Stored tournament %s (%d games linked, %d needing analysis)",
        result.tournament_id,
        result.games_linked,
        len(result.games_needing_analysis),
    )
    return result
