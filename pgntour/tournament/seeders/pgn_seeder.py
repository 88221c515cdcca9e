"""
Random PGN tournament seeder.

This module generates a round-robin tournament with Faker-made players and
random results, and imports it like any uploaded PGN.
"""

import random
from typing import Optional

from faker import Faker

from pgntour.tournament.structure_to_db import structure_to_db
from pgntour.tournament_core.builder import PGNBuilder, round_robin_pairings
from pgntour.tournament_core.importer import ImportResult


TITLES = ["GM", "IM", "FM", None, None, None]

# Weights for white win, draw, black win
RESULT_WEIGHTS = (("1-0", 0.38), ("1/2-1/2", 0.34), ("0-1", 0.28))


def generate_round_robin_pgn(
    num_players: int = 6,
    double: bool = False,
    seed: Optional[int] = None,
    event_name: Optional[str] = None,
) -> str:
    """Build the PGN text of a random single or double round robin."""
    rng = random.Random(seed)
    fake = Faker()
    if seed is not None:
        fake.seed_instance(seed)

    builder = PGNBuilder()
    builder.event(
        event_name or f"{fake.city()} Invitational",
        site=f"{fake.city()}, {fake.country_code()}",
        event_date=fake.date_this_decade().strftime("%Y.%m.%d"),
        event_type="double round robin" if double else "round robin",
        time_control="5400+30",
        country=fake.country_code(),
    )

    names = []
    while len(names) < num_players:
        name = f"{fake.last_name()}, {fake.first_name()}"
        if name not in names:
            names.append(name)

    fide_ids = rng.sample(range(1000000, 99999999), num_players)
    for name, fide_id in zip(names, fide_ids):
        builder.player(
            name,
            fide_id=str(fide_id),
            rating=rng.randint(2200, 2750),
            title=rng.choice(TITLES),
        )

    schedule = round_robin_pairings(names)
    if double:
        schedule = schedule + [[(b, w) for w, b in pairs] for pairs in schedule]

    results = [result for result, _ in RESULT_WEIGHTS]
    weights = [weight for _, weight in RESULT_WEIGHTS]
    for round_number, pairs in enumerate(schedule, 1):
        builder.round(round_number)
        for white, black in pairs:
            builder.game(white, black, rng.choices(results, weights)[0])

    return builder.build()


def seed_random_tournament(
    num_players: int = 6, double: bool = False, seed: Optional[int] = None
) -> ImportResult:
    """Generate a random round robin and store it."""
    pgn_text = generate_round_robin_pgn(num_players, double=double, seed=seed)
    return structure_to_db(pgn_text, imported_by="seeder")
