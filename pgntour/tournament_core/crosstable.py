"""
Crosstable (pairwise result grid) for individual tournaments.
"""

from typing import Dict, Iterable, List, Optional, Sequence, Tuple
from dataclasses import dataclass

from pgntour.tournament_core.structure import RosterPlayer, TournamentGame


NO_GAME_SYMBOL = "*"


@dataclass(frozen=True)
class CrosstableCell:
    """Result of one pairing from the row player's point of view."""

    symbol: str = NO_GAME_SYMBOL
    game_id: Optional[object] = None

    @property
    def played(self) -> bool:
        return self.game_id is not None


@dataclass
class Crosstable:
    """N x N grid of results; the diagonal has no cells."""

    players: List[RosterPlayer]
    cells: Dict[Tuple[str, str], CrosstableCell]

    def cell(self, fide_id: str, opponent_fide_id: str) -> CrosstableCell:
        """Return the cell for a pairing.

        Raises:
            KeyError: for the diagonal or for players outside the roster
        """
        return self.cells[(fide_id, opponent_fide_id)]

    def row(self, fide_id: str) -> List[Optional[CrosstableCell]]:
        """One row in roster order, with None on the diagonal."""
        return [
            None if opponent.fide_id == fide_id else self.cell(fide_id, opponent.fide_id)
            for opponent in self.players
        ]

    def to_dict(self) -> Dict[str, Dict[str, Dict[str, object]]]:
        """Nested {player: {opponent: {"result", "game_id"}}} mapping."""
        grid: Dict[str, Dict[str, Dict[str, object]]] = {}
        for player in self.players:
            grid[player.fide_id] = {}
            for opponent in self.players:
                if opponent.fide_id == player.fide_id:
                    continue
                cell = self.cell(player.fide_id, opponent.fide_id)
                grid[player.fide_id][opponent.fide_id] = {
                    "result": cell.symbol,
                    "game_id": cell.game_id,
                }
        return grid


def build_crosstable(
    players: Sequence[RosterPlayer], games: Iterable[TournamentGame]
) -> Crosstable:
    """
    Build the crosstable for a roster.

    Args:
        players: Roster in display order (normally sorted by rank)
        games: Linked games in playing order; when two players met more than
            once, the later game replaces the earlier one in both cells

    Returns:
        The filled-in Crosstable
    """
    cells: Dict[Tuple[str, str], CrosstableCell] = {}
    for player in players:
        for opponent in players:
            if player.fide_id != opponent.fide_id:
                cells[(player.fide_id, opponent.fide_id)] = CrosstableCell()

    for game in games:
        white, black = game.white_fide_id, game.black_fide_id
        if (white, black) not in cells:
            continue
        cells[(white, black)] = CrosstableCell(game.result.symbol(as_white=True), game.game_id)
        cells[(black, white)] = CrosstableCell(game.result.symbol(as_white=False), game.game_id)

    return Crosstable(players=list(players), cells=cells)
