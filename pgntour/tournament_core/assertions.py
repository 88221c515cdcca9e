"""
Fluent assertion interface for testing tournament standings.

This module provides a clean, fluent way to assert standings and crosstable
cells in tests. It works with the pure tournament_core structures.
"""

from typing import Dict, List, Optional, Sequence, Union
from dataclasses import dataclass

from pgntour.tournament_core.crosstable import Crosstable
from pgntour.tournament_core.standings import Standing


# Use the built-in AssertionError for proper test framework integration


@dataclass
class StandingsAssertion:
    """Fluent interface for asserting tournament standings."""

    standings: Sequence[Standing]
    crosstable: Optional[Crosstable] = None
    _by_name: Optional[Dict[str, Standing]] = None

    def __post_init__(self):
        if self._by_name is None:
            self._by_name = {standing.name: standing for standing in self.standings}

    def player(self, name: str) -> "PlayerAssertion":
        """Select a player by display name for assertions."""
        if name not in self._by_name:
            raise AssertionError(f"Player '{name}' not found in standings")
        return PlayerAssertion(
            standings=self.standings,
            crosstable=self.crosstable,
            _by_name=self._by_name,
            selected=self._by_name[name],
        )

    def order(self, *names: str) -> "StandingsAssertion":
        """Assert the players appear in exactly this order."""
        actual = [standing.name for standing in self.standings]
        if actual != list(names):
            raise AssertionError(f"Expected standings order {list(names)}, got {actual}")
        return self

    def ranks(self, *expected: int) -> "StandingsAssertion":
        """Assert the rank column from top to bottom."""
        actual = [standing.rank for standing in self.standings]
        if actual != list(expected):
            raise AssertionError(f"Expected ranks {list(expected)}, got {actual}")
        return self


@dataclass
class PlayerAssertion(StandingsAssertion):
    """Assertions for one player's standing."""

    selected: Optional[Standing] = None

    def score(self, expected: Union[int, float]) -> "PlayerAssertion":
        """Assert the total score."""
        # Allow small floating point differences
        if abs(self.selected.score - expected) > 0.0001:
            raise AssertionError(
                f"{self.selected.name} expected score {expected}, got {self.selected.score}"
            )
        return self

    def rank(self, expected: int) -> "PlayerAssertion":
        """Assert the rank."""
        if self.selected.rank != expected:
            raise AssertionError(
                f"{self.selected.name} expected rank {expected}, got {self.selected.rank}"
            )
        return self

    def record(self, wins: int, draws: int, losses: int) -> "PlayerAssertion":
        """Assert the win/draw/loss record."""
        actual = (self.selected.wins, self.selected.draws, self.selected.losses)
        if actual != (wins, draws, losses):
            raise AssertionError(
                f"{self.selected.name} expected +{wins}={draws}-{losses}, "
                f"got +{actual[0]}={actual[1]}-{actual[2]}"
            )
        return self

    def against(self, opponent: str, symbol: str) -> "PlayerAssertion":
        """Assert the crosstable symbol against an opponent."""
        if self.crosstable is None:
            raise AssertionError("No crosstable given to assert against")
        if opponent not in self._by_name:
            raise AssertionError(f"Player '{opponent}' not found in standings")
        cell = self.crosstable.cell(
            self.selected.fide_id, self._by_name[opponent].fide_id
        )
        if cell.symbol != symbol:
            raise AssertionError(
                f"{self.selected.name} vs {opponent} expected '{symbol}', got '{cell.symbol}'"
            )
        return self


def assert_standings(
    standings: List[Standing], crosstable: Optional[Crosstable] = None
) -> StandingsAssertion:
    """Entry point: ``assert_standings(s).player("A").score(2).rank(1)``."""
    return StandingsAssertion(standings=standings, crosstable=crosstable)
