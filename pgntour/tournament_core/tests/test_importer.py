"""
Tests for the import pipeline against the in-memory repository.
"""

import unittest
from unittest.mock import Mock, patch

from pgntour.tournament_core.assembler import validate_tournament
from pgntour.tournament_core.builder import PGNBuilder
from pgntour.tournament_core.importer import (
    AnalysisError,
    TournamentImportError,
    TournamentImporter,
)
from pgntour.tournament_core.repository import InMemoryTournamentRepository
from pgntour.tournament_core.structure import GameResult
from pgntour.tournament_core.tests.test_utils import (
    SAMPLE_GAME,
    create_round_robin_pgn,
    create_three_player_pgn,
    three_player_builder,
)


class TournamentImporterTests(unittest.TestCase):
    """Test parse -> validate -> persist -> analyse -> standings."""

    def setUp(self):
        self.repo = InMemoryTournamentRepository()

    def test_import_three_player_tournament(self):
        result = TournamentImporter(self.repo).import_pgn(create_three_player_pgn())

        self.assertEqual(result.players_imported, 3)
        self.assertEqual(result.rounds_created, 3)
        self.assertEqual(result.games_linked, 3)
        self.assertEqual(result.games_analyzed, 0)
        self.assertEqual(result.games_needing_analysis, [])
        self.assertEqual(result.warnings, [])
        self.assertEqual([s.name for s in result.standings], ["A", "B", "C"])
        self.assertEqual([s.rank for s in result.standings], [1, 2, 2])

        stored = self.repo.tournaments[result.tournament_id]
        self.assertEqual(stored.tournament.name, "Three Player Test")
        self.assertEqual(len(stored.games), 3)
        self.assertEqual(stored.standings, result.standings)

    def test_games_linked_in_order_with_board_numbers(self):
        result = TournamentImporter(self.repo).import_pgn(create_round_robin_pgn(4))

        games = self.repo.load_games(result.tournament_id)

        self.assertEqual([g.board_number for g in games], [1, 2, 3, 4, 5, 6])
        self.assertEqual([g.round_number for g in games], [1, 1, 2, 2, 3, 3])

    def test_pgn_text_is_stored_per_game(self):
        result = TournamentImporter(self.repo).import_pgn(SAMPLE_GAME)

        game = self.repo.load_games(result.tournament_id)[0]

        self.assertEqual(self.repo.pgn[game.game_id], SAMPLE_GAME)
        self.assertEqual(game.result, GameResult.DRAW)

    def test_rounds_without_games_are_created(self):
        builder = three_player_builder()
        builder.metadata.event_rounds = 5

        result = TournamentImporter(self.repo).import_pgn(builder.build())

        self.assertEqual(result.rounds_created, 5)
        self.assertEqual(len(self.repo.tournaments[result.tournament_id].rounds), 5)
        self.assertIn(
            "Expected 5 rounds but found 3 unique rounds in games", result.warnings
        )

    def test_players_keep_starting_rating(self):
        result = TournamentImporter(self.repo).import_pgn(SAMPLE_GAME)

        players = self.repo.load_players(result.tournament_id)

        self.assertEqual(
            {p.fide_id: p.rating for p in players}, {"1503014": 2830, "2016192": 2800}
        )

    def test_unidentified_games_are_not_linked(self):
        builder = three_player_builder()
        builder.player("Guest", auto_fide_id=False)
        builder.round(3).game("Guest", "B", "1-0")

        result = TournamentImporter(self.repo).import_pgn(builder.build())

        self.assertEqual(result.games_linked, 3)
        self.assertEqual(len(result.tournament.games), 4)

    def test_structural_failure_stores_nothing(self):
        with self.assertRaises(TournamentImportError) as ctx:
            TournamentImporter(self.repo).import_pgn("\n  \n")

        self.assertIn("no valid games found", str(ctx.exception))
        self.assertEqual(self.repo.tournaments, {})

    def test_no_fide_ids_stores_nothing(self):
        pgn = SAMPLE_GAME.replace('[BlackFideId "2016192"]\n', "")

        with self.assertRaises(TournamentImportError) as ctx:
            TournamentImporter(self.repo).import_pgn(pgn)

        self.assertIn("no players with FIDE identifiers", str(ctx.exception))
        self.assertEqual(self.repo.tournaments, {})
        self.assertEqual(self.repo.players, {})

    def test_validation_errors_store_nothing(self):
        builder = PGNBuilder().event("Self Play")
        builder.player("A", fide_id="1").player("A again", fide_id="1")
        builder.round(1).game("A", "A again", "1-0")

        with self.assertRaises(TournamentImportError) as ctx:
            TournamentImporter(self.repo).import_pgn(builder.build())

        self.assertIn(
            "Tournament must have at least 2 players", ctx.exception.validation.errors
        )
        self.assertEqual(self.repo.tournaments, {})

    def test_prepare_does_not_store(self):
        tournament, validation = TournamentImporter(self.repo).prepare(
            create_three_player_pgn()
        )

        self.assertEqual(len(tournament.players), 3)
        self.assertTrue(validation.is_valid)
        self.assertEqual(self.repo.tournaments, {})

    def test_import_validates_once(self):
        pgn = create_three_player_pgn().replace('[Site "Testville"]\n', "")

        with patch(
            "pgntour.tournament_core.importer.validate_tournament",
            wraps=validate_tournament,
        ) as validate:
            result = TournamentImporter(self.repo).import_pgn(pgn)

        validate.assert_called_once()
        self.assertIn(
            "Consider adding tournament location information", result.suggestions
        )

    def test_store_then_analyze(self):
        analyzer = Mock()
        analyzer.analyze.return_value = "an"
        importer = TournamentImporter(self.repo, analyzer)

        result = importer.store_pgn(create_three_player_pgn())

        analyzer.analyze.assert_not_called()
        self.assertEqual(result.games_linked, 3)
        self.assertEqual(len(self.repo.pgn), 3)

        importer.analyze_games(result)

        self.assertEqual(analyzer.analyze.call_count, 3)
        self.assertEqual(result.games_analyzed, 3)

    def test_analysis_references_are_recorded(self):
        analyzer = Mock()
        analyzer.analyze.side_effect = ["an-1", "an-2", "an-3"]

        result = TournamentImporter(self.repo, analyzer).import_pgn(
            create_three_player_pgn()
        )

        self.assertEqual(result.games_analyzed, 3)
        self.assertEqual(analyzer.analyze.call_count, 3)
        self.assertEqual(sorted(self.repo.analyses.values()), ["an-1", "an-2", "an-3"])

    def test_analysis_failures_keep_games_linked(self):
        analyzer = Mock()
        analyzer.analyze.side_effect = ["an-1", AnalysisError("engine down"), "an-3"]

        result = TournamentImporter(self.repo, analyzer).import_pgn(
            create_three_player_pgn()
        )

        self.assertEqual(result.games_linked, 3)
        self.assertEqual(result.games_analyzed, 2)
        self.assertEqual(result.games_needing_analysis, ["Round 2: B vs C"])
        self.assertIn("1 game(s) failed to analyze", result.warnings)
        self.assertEqual(len(self.repo.analyses), 2)
        # standings do not depend on analysis
        self.assertEqual(result.standings[0].score, 2.0)

    def test_reimport_updates_players(self):
        importer = TournamentImporter(self.repo)
        importer.import_pgn(SAMPLE_GAME)
        second = importer.import_pgn(SAMPLE_GAME.replace("Carlsen, Magnus", "Carlsen, M."))

        self.assertEqual(len(self.repo.tournaments), 2)
        self.assertEqual(len(self.repo.players), 2)
        self.assertEqual(self.repo.players["1503014"].name, "Carlsen, M.")
        self.assertEqual(second.players_imported, 2)


if __name__ == "__main__":
    unittest.main()
