"""
Configurable scoring systems for tournaments.

This module defines how a single game result is converted to points for
each side.
"""

from typing import Tuple
from dataclasses import dataclass


@dataclass(frozen=True)
class ScoringSystem:
    """Defines how games are scored in a tournament."""

    game_win_points: float = 1.0
    game_draw_points: float = 0.5
    game_loss_points: float = 0.0

    # Games still in progress ("*") score nothing for either side
    unfinished_points: float = 0.0

    def result_points(self, result: str) -> Tuple[float, float]:
        """
        Determine (white_points, black_points) for a result token.

        Args:
            result: One of "1-0", "0-1", "1/2-1/2" or "*"

        Returns:
            Tuple of (white_points, black_points)
        """
        if result == "1-0":
            return (self.game_win_points, self.game_loss_points)
        elif result == "0-1":
            return (self.game_loss_points, self.game_win_points)
        elif result == "1/2-1/2":
            return (self.game_draw_points, self.game_draw_points)
        else:
            return (self.unfinished_points, self.unfinished_points)


# Pre-defined scoring systems
STANDARD_SCORING = ScoringSystem()

# Some events award 3 points for a win and 1 for a draw
THREE_ONE_ZERO_SCORING = ScoringSystem(
    game_win_points=3.0,
    game_draw_points=1.0,
    game_loss_points=0.0,
)
