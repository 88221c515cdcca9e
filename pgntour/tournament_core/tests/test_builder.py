"""
Tests for the PGN builder and the fluent standings assertions.
"""

import unittest

from pgntour.tournament_core.assertions import assert_standings
from pgntour.tournament_core.builder import PGNBuilder, round_robin_pairings
from pgntour.tournament_core.pgn import parse_tags, split_records
from pgntour.tournament_core.standings import Standing


class PGNBuilderTests(unittest.TestCase):
    """Test the fluent PGN builder."""

    def test_game_tags(self):
        builder = PGNBuilder().event("Built", site="Somewhere", event_type="swiss")
        builder.player("A", fide_id="11", rating=2100, title="FM").player("B")
        builder.round(2).game("A", "B", "0-1")

        records = split_records(builder.build())
        tags = parse_tags(records[0])

        self.assertEqual(len(records), 1)
        self.assertEqual(tags["Event"], "Built")
        self.assertEqual(tags["Site"], "Somewhere")
        self.assertEqual(tags["Round"], "2")
        self.assertEqual(tags["WhiteFideId"], "11")
        self.assertEqual(tags["WhiteElo"], "2100")
        self.assertEqual(tags["WhiteTitle"], "FM")
        self.assertEqual(tags["BlackFideId"], "1000001")
        self.assertEqual(tags["EventType"], "swiss")
        self.assertNotIn("BlackElo", tags)
        self.assertTrue(records[0].endswith("0-1"))

    def test_values_are_escaped(self):
        builder = PGNBuilder().event('The "Quoted" Cup')
        builder.round(1).game("A", "B", "1-0")

        tags = parse_tags(builder.build())

        self.assertEqual(tags["Event"], 'The "Quoted" Cup')

    def test_game_requires_round(self):
        with self.assertRaises(ValueError):
            PGNBuilder().game("A", "B", "1-0")

    def test_extra_tags(self):
        builder = PGNBuilder().event("Extra")
        builder.round(1).game("A", "B", "1-0", Annotator="Someone")

        self.assertEqual(parse_tags(builder.build())["Annotator"], "Someone")

    def test_round_robin_pairings_even(self):
        names = ["A", "B", "C", "D"]
        schedule = round_robin_pairings(names)

        self.assertEqual(len(schedule), 3)
        met = {frozenset(pair) for pairs in schedule for pair in pairs}
        self.assertEqual(len(met), 6)
        for pairs in schedule:
            seated = [name for pair in pairs for name in pair]
            self.assertEqual(sorted(seated), names)

    def test_round_robin_pairings_odd(self):
        schedule = round_robin_pairings(["A", "B", "C"])

        self.assertEqual(len(schedule), 3)
        self.assertTrue(all(len(pairs) == 1 for pairs in schedule))


class StandingsAssertionTests(unittest.TestCase):
    """Test the fluent assertion helpers themselves."""

    def setUp(self):
        self.standings = [
            Standing("1", "A", 2.0, 1, wins=2),
            Standing("2", "B", 1.0, 2, wins=1, losses=1),
        ]

    def test_passing_assertions(self):
        assert_standings(self.standings).order("A", "B").ranks(1, 2)
        assert_standings(self.standings).player("B").score(1).rank(2).record(1, 0, 1)

    def test_failing_assertions(self):
        with self.assertRaises(AssertionError):
            assert_standings(self.standings).order("B", "A")
        with self.assertRaises(AssertionError):
            assert_standings(self.standings).player("A").score(1.5)
        with self.assertRaises(AssertionError):
            assert_standings(self.standings).player("Nobody")
        with self.assertRaises(AssertionError):
            assert_standings(self.standings).player("A").against("B", "1")


if __name__ == "__main__":
    unittest.main()
