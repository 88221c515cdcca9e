"""
Django management command to import a tournament from a PGN file.

This command parses a multi-game PGN export, validates it and stores the
tournament, its players, rounds and games, then prints the standings.
"""

import os
from django.core.management.base import BaseCommand, CommandError

from pgntour.tournament.analysis import EngineAnalysisClient
from pgntour.tournament.structure_to_db import structure_to_db
from pgntour.tournament_core.assembler import (
    assemble_tournament,
    summarize_tournament,
)
from pgntour.tournament_core.importer import TournamentImportError


class Command(BaseCommand):
    help = "Import tournament data from a PGN file"

    def add_arguments(self, parser):
        parser.add_argument("pgn_file", type=str, help="Path to PGN file to import")
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Parse and validate without creating database objects",
        )
        parser.add_argument(
            "--analyze",
            action="store_true",
            help="Send every linked game to the engine analysis service",
        )
        parser.add_argument(
            "--imported-by",
            type=str,
            default="",
            help="Recorded in the tournament metadata",
        )

    def handle(self, *args, **options):
        pgn_path = options["pgn_file"]

        if not os.path.exists(pgn_path):
            raise CommandError(f"PGN file not found: {pgn_path}")

        try:
            with open(pgn_path, "r", encoding="utf-8-sig") as f:
                pgn_text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise CommandError(f"Error reading PGN file: {e}")

        self.stdout.write("Parsing PGN file...")
        assembly = assemble_tournament(pgn_text)
        validation = assembly.validation

        if assembly.tournament is not None:
            self.stdout.write(summarize_tournament(assembly.tournament))
        self._print_messages(validation)

        if not assembly.is_valid:
            raise CommandError(
                "Tournament validation failed: " + "; ".join(validation.errors)
            )

        if options["dry_run"]:
            self.stdout.write(self.style.SUCCESS("Dry run - no database changes made"))
            return

        analyzer = EngineAnalysisClient() if options["analyze"] else None
        try:
            result = structure_to_db(
                pgn_text, analyzer=analyzer, imported_by=options["imported_by"]
            )
        except TournamentImportError as e:
            raise CommandError(str(e))

        self.stdout.write(
            self.style.SUCCESS(
                f"Created tournament {result.tournament_id} with "
                f"{result.players_imported} players, {result.rounds_created} rounds "
                f"and {result.games_linked} games"
            )
        )

        for description in result.games_needing_analysis:
            self.stdout.write(self.style.WARNING(f"  Needs analysis: {description}"))

        self.stdout.write("\nStandings:")
        for standing in result.standings:
            self.stdout.write(
                f"  {standing.rank:3d}. {standing.name:30s} {standing.score:4.1f}"
            )

    def _print_messages(self, validation):
        for error in validation.errors:
            self.stdout.write(self.style.ERROR(f"Error: {error}"))
        for warning in validation.warnings:
            self.stdout.write(self.style.WARNING(f"Warning: {warning}"))
        for suggestion in validation.suggestions:
            self.stdout.write(f"Suggestion: {suggestion}")
