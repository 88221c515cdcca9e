"""
Database seeders for generating test data.

Tournaments are generated as PGN text and imported through the regular
import pipeline.
"""

from .pgn_seeder import generate_round_robin_pgn, seed_random_tournament

__all__ = [
    "generate_round_robin_pgn",
    "seed_random_tournament",
]
