"""
Django management command to seed a random round-robin tournament.
"""

from django.core.management.base import BaseCommand, CommandError

from pgntour.tournament.seeders import generate_round_robin_pgn, seed_random_tournament
from pgntour.tournament_core.importer import TournamentImportError


class Command(BaseCommand):
    help = "Generate a random round-robin tournament and import it"

    def add_arguments(self, parser):
        parser.add_argument(
            "--players",
            type=int,
            default=6,
            help="Number of players",
        )
        parser.add_argument(
            "--double",
            action="store_true",
            help="Play a double round robin",
        )
        parser.add_argument(
            "--seed",
            type=int,
            default=None,
            help="Random seed for reproducible tournaments",
        )
        parser.add_argument(
            "--print-pgn",
            action="store_true",
            help="Print the generated PGN instead of importing it",
        )

    def handle(self, *args, **options):
        if options["players"] < 2:
            raise CommandError("A round robin needs at least 2 players")

        if options["print_pgn"]:
            self.stdout.write(
                generate_round_robin_pgn(
                    options["players"], double=options["double"], seed=options["seed"]
                )
            )
            return

        self.stdout.write(f"Seeding round robin with {options['players']} players...")
        try:
            result = seed_random_tournament(
                options["players"], double=options["double"], seed=options["seed"]
            )
        except TournamentImportError as e:
            raise CommandError(str(e))
        self.stdout.write(
            self.style.SUCCESS(
                f"Created tournament {result.tournament_id} "
                f"({result.tournament.format.value}, {result.games_linked} games)"
            )
        )
