"""
Tests for the crosstable builder.
"""

import unittest

from pgntour.tournament_core.assembler import parse_tournament
from pgntour.tournament_core.assertions import assert_standings
from pgntour.tournament_core.crosstable import NO_GAME_SYMBOL, build_crosstable
from pgntour.tournament_core.standings import compute_standings, players_by_rank
from pgntour.tournament_core.structure import (
    GameResult,
    RosterPlayer,
    TournamentGame,
    tournament_games,
)
from pgntour.tournament_core.tests.test_utils import create_three_player_pgn


A = RosterPlayer("1", "A")
B = RosterPlayer("2", "B")
C = RosterPlayer("3", "C")


class CrosstableTests(unittest.TestCase):
    """Test the pairwise result grid."""

    def test_three_player_grid(self):
        tournament = parse_tournament(create_three_player_pgn())
        crosstable = build_crosstable(tournament.players, tournament_games(tournament))

        self.assertEqual(crosstable.cell("100", "200").symbol, "1")
        self.assertEqual(crosstable.cell("200", "100").symbol, "0")
        self.assertEqual(
            crosstable.cell("100", "200").game_id, crosstable.cell("200", "100").game_id
        )
        self.assertEqual(crosstable.cell("200", "300").symbol, "½")
        self.assertEqual(crosstable.cell("300", "200").symbol, "½")
        self.assertEqual(crosstable.cell("100", "300").symbol, "1")
        self.assertEqual(crosstable.cell("300", "100").symbol, "0")

    def test_symbols_are_complementary(self):
        games = [
            TournamentGame(1, 1, "1", "2", GameResult.WHITE_WIN),
            TournamentGame(2, 2, "3", "1", GameResult.WHITE_WIN),
            TournamentGame(3, 3, "2", "3", GameResult.DRAW),
        ]
        crosstable = build_crosstable([A, B, C], games)
        complement = {"1": "0", "0": "1", "½": "½", "*": "*"}

        for row in (A, B, C):
            for col in (A, B, C):
                if row is col:
                    continue
                self.assertEqual(
                    crosstable.cell(col.fide_id, row.fide_id).symbol,
                    complement[crosstable.cell(row.fide_id, col.fide_id).symbol],
                )

    def test_no_diagonal(self):
        crosstable = build_crosstable([A, B], [])

        with self.assertRaises(KeyError):
            crosstable.cell("1", "1")
        self.assertEqual(crosstable.row("1"), [None, crosstable.cell("1", "2")])

    def test_unplayed_pairing(self):
        crosstable = build_crosstable([A, B], [])
        cell = crosstable.cell("1", "2")

        self.assertEqual(cell.symbol, NO_GAME_SYMBOL)
        self.assertIsNone(cell.game_id)
        self.assertFalse(cell.played)

    def test_unfinished_game_keeps_reference(self):
        games = [TournamentGame(7, 1, "1", "2", GameResult.UNFINISHED)]
        cell = build_crosstable([A, B], games).cell("2", "1")

        self.assertEqual(cell.symbol, "*")
        self.assertEqual(cell.game_id, 7)
        self.assertTrue(cell.played)

    def test_rematch_last_game_wins(self):
        games = [
            TournamentGame(1, 1, "1", "2", GameResult.WHITE_WIN),
            TournamentGame(2, 2, "2", "1", GameResult.WHITE_WIN),
        ]
        crosstable = build_crosstable([A, B], games)

        self.assertEqual(crosstable.cell("1", "2").symbol, "0")
        self.assertEqual(crosstable.cell("2", "1").symbol, "1")
        self.assertEqual(crosstable.cell("1", "2").game_id, 2)
        self.assertEqual(crosstable.cell("2", "1").game_id, 2)

    def test_games_outside_roster_are_skipped(self):
        games = [
            TournamentGame(1, 1, "1", "99", GameResult.WHITE_WIN),
            TournamentGame(2, 1, "1", "1", GameResult.DRAW),
        ]
        crosstable = build_crosstable([A, B], games)

        self.assertEqual(set(crosstable.cells), {("1", "2"), ("2", "1")})
        self.assertFalse(crosstable.cell("1", "2").played)

    def test_to_dict(self):
        games = [TournamentGame(5, 1, "1", "2", GameResult.DRAW)]

        grid = build_crosstable([A, B], games).to_dict()

        self.assertEqual(
            grid,
            {
                "1": {"2": {"result": "½", "game_id": 5}},
                "2": {"1": {"result": "½", "game_id": 5}},
            },
        )

    def test_ranked_crosstable_with_assertions(self):
        tournament = parse_tournament(create_three_player_pgn())
        games = tournament_games(tournament)
        standings = compute_standings(tournament.players, games)
        crosstable = build_crosstable(players_by_rank(tournament.players, standings), games)

        self.assertEqual([p.name for p in crosstable.players], ["A", "B", "C"])
        assert_standings(standings, crosstable).player("A").against("B", "1").against(
            "C", "1"
        )
        assert_standings(standings, crosstable).player("C").against("B", "½")


if __name__ == "__main__":
    unittest.main()
