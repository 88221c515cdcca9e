"""
Tests for converting stored tournaments back to tournament_core structures.
"""

from django.test import TestCase

from pgntour.tournament.db_to_structure import (
    games_from_db,
    players_from_db,
    tournament_crosstable,
    tournament_standings,
)
from pgntour.tournament.models import (
    Player,
    Tournament,
    TournamentGame,
    TournamentPlayer,
    TournamentRound,
)
from pgntour.tournament.structure_to_db import structure_to_db
from pgntour.tournament_core.assertions import assert_standings
from pgntour.tournament_core.scoring import THREE_ONE_ZERO_SCORING
from pgntour.tournament_core.structure import GameResult
from pgntour.tournament_core.tests.test_utils import create_three_player_pgn


class DbToStructureTests(TestCase):
    """Test rebuilding rosters, games and derived views from the database."""

    def setUp(self):
        self.result = structure_to_db(create_three_player_pgn())
        self.tournament = Tournament.objects.get(pk=self.result.tournament_id)

    def test_players_in_registration_order(self):
        players = players_from_db(self.tournament)

        self.assertEqual([p.fide_id for p in players], ["100", "200", "300"])
        self.assertEqual([p.name for p in players], ["A", "B", "C"])

    def test_games_in_playing_order(self):
        games = games_from_db(self.tournament)

        self.assertEqual([g.round_number for g in games], [1, 2, 3])
        self.assertEqual(
            [g.result for g in games],
            [GameResult.WHITE_WIN, GameResult.DRAW, GameResult.BLACK_WIN],
        )

    def test_standings(self):
        standings = tournament_standings(self.tournament)

        assert_standings(standings).order("A", "B", "C").ranks(1, 2, 2)
        assert_standings(standings).player("A").score(2.0)

    def test_standings_match_import_result(self):
        self.assertEqual(tournament_standings(self.tournament), self.result.standings)

    def test_standings_with_other_scoring(self):
        standings = tournament_standings(self.tournament, THREE_ONE_ZERO_SCORING)

        self.assertEqual([s.score for s in standings], [6.0, 1.0, 1.0])

    def test_crosstable(self):
        crosstable = tournament_crosstable(self.tournament)
        game_ab = TournamentGame.objects.get(
            tournament=self.tournament, white_fide_id="100", black_fide_id="200"
        )

        self.assertEqual(crosstable.cell("100", "200").symbol, "1")
        self.assertEqual(crosstable.cell("100", "200").game_id, game_ab.pk)
        self.assertEqual(crosstable.cell("200", "100").symbol, "0")
        self.assertEqual(crosstable.cell("200", "100").game_id, game_ab.pk)
        self.assertEqual(crosstable.cell("300", "200").symbol, "½")

    def test_crosstable_rematch_uses_later_round(self):
        round_four = TournamentRound.objects.create(
            tournament=self.tournament, round_number=4
        )
        rematch = TournamentGame.objects.create(
            tournament=self.tournament,
            round=round_four,
            white_fide_id="200",
            black_fide_id="100",
            result="1-0",
        )

        crosstable = tournament_crosstable(self.tournament)

        self.assertEqual(crosstable.cell("100", "200").symbol, "0")
        self.assertEqual(crosstable.cell("200", "100").game_id, rematch.pk)

    def test_unknown_stored_result_is_unfinished(self):
        TournamentGame.objects.filter(tournament=self.tournament).update(result="+/-")

        games = games_from_db(self.tournament)

        self.assertTrue(all(g.result is GameResult.UNFINISHED for g in games))

    def test_games_against_unregistered_players_are_ignored(self):
        outsider = Player.objects.create(fide_id="999", full_name="Outsider")
        TournamentGame.objects.create(
            tournament=self.tournament,
            round=TournamentRound.objects.get(tournament=self.tournament, round_number=1),
            white_fide_id=outsider.fide_id,
            black_fide_id="300",
            result="0-1",
        )

        standings = tournament_standings(self.tournament)

        self.assertEqual(len(standings), 3)
        assert_standings(standings).player("C").score(1.5)
        self.assertFalse(
            TournamentPlayer.objects.filter(player=outsider).exists()
        )
