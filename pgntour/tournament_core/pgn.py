"""
PGN (Portable Game Notation) parser for tournament imports.

This module provides parsing capabilities for multi-game PGN text, breaking
the parsing into modular components that can be used independently:
- ``parse_tags`` reads the tag section of one record
- ``split_records`` cuts a multi-game text into single records
- ``parse_game`` turns one record into a StructuredGame
"""

from typing import Dict, Iterable, List, Optional, Tuple
import re

from pgntour.tournament_core.fields import (
    parse_optional,
    parse_rating,
    parse_result,
    parse_round,
)
from pgntour.tournament_core.structure import StructuredGame, UNKNOWN_PLAYER_NAME


TAG_LINE_RE = re.compile(r'^\s*\[\s*([A-Za-z0-9_]+)\s+"((?:[^"\\]|\\.)*)"\s*\]\s*$')

_ESCAPE_RE = re.compile(r"\\(.)")


def _unescape(value: str) -> str:
    return _ESCAPE_RE.sub(r"\1", value)


def _match_tag(line: str) -> Optional[Tuple[str, str]]:
    match = TAG_LINE_RE.match(line)
    if match is None:
        return None
    return match.group(1), _unescape(match.group(2))


def fold_tags_last_wins(pairs: Iterable[Tuple[str, str]]) -> Dict[str, str]:
    """Fold tag pairs into a tag set; a repeated tag name keeps its last value."""
    tags: Dict[str, str] = {}
    for name, value in pairs:
        tags[name] = value
    return tags


def _leading_tag_pairs(record: str) -> List[Tuple[str, str]]:
    pairs = []
    seen_tag = False
    for line in record.splitlines():
        if not seen_tag and not line.strip():
            continue
        tag = _match_tag(line)
        if tag is None:
            break
        seen_tag = True
        pairs.append(tag)
    return pairs


def parse_tags(record: str) -> Dict[str, str]:
    """Parse the tag section at the top of one PGN record.

    Scanning stops at the first line that is not a tag line, normally the
    blank line before the movetext. Input without tags gives an empty dict.
    """
    return fold_tags_last_wins(_leading_tag_pairs(record))


def split_records(pgn_text: str) -> List[str]:
    """Split multi-game PGN text into one string per game record.

    A new record begins at a tag line that follows either movetext or the
    blank line closing the previous tag section. Anything before the first
    tag line (a byte order mark, "%" escape lines, comments) is dropped.
    """
    pgn_text = pgn_text.lstrip("\ufeff")
    records: List[str] = []
    current: List[str] = []
    # "empty" -> nothing yet, "tags" -> inside a tag section,
    # "closed" -> tag section ended by a blank line, "moves" -> in movetext
    state = "empty"

    for line in pgn_text.splitlines():
        is_tag = _match_tag(line) is not None
        is_blank = not line.strip()

        if not current and not is_tag:
            continue

        if is_tag and state in ("closed", "moves"):
            records.append("\n".join(current))
            current = []
            state = "empty"

        current.append(line)

        if is_tag:
            state = "tags"
        elif is_blank:
            if state == "tags":
                state = "closed"
        else:
            state = "moves"

    records.append("\n".join(current))
    return [record.strip() for record in records if record.strip()]


def parse_game(record: str) -> StructuredGame:
    """Parse a single PGN record into a StructuredGame.

    Missing or malformed tags fall back to defaults; this never raises.
    """
    tags = parse_tags(record)

    return StructuredGame(
        tags=tags,
        raw_text=record,
        round=parse_round(tags.get("Round")),
        white_name=parse_optional(tags.get("White")) or UNKNOWN_PLAYER_NAME,
        black_name=parse_optional(tags.get("Black")) or UNKNOWN_PLAYER_NAME,
        white_rating=parse_rating(tags.get("WhiteElo")),
        black_rating=parse_rating(tags.get("BlackElo")),
        white_fide_id=parse_optional(tags.get("WhiteFideId")),
        black_fide_id=parse_optional(tags.get("BlackFideId")),
        white_title=parse_optional(tags.get("WhiteTitle")),
        black_title=parse_optional(tags.get("BlackTitle")),
        result=parse_result(tags.get("Result")),
        date=parse_optional(tags.get("Date")) or parse_optional(tags.get("EventDate")),
    )


class PGNParser:
    """Parser for multi-game PGN tournament exports."""

    def __init__(self, content: str):
        """Initialize parser with PGN content."""
        self.content = content
        self.records: List[str] = []
        self.games: List[StructuredGame] = []

    def parse_records(self) -> List[str]:
        """Split the content into individual game records."""
        self.records = split_records(self.content)
        return self.records

    def parse_games(self) -> List[StructuredGame]:
        """Parse every record into a structured game, in input order."""
        if not self.records:
            self.parse_records()
        self.games = [parse_game(record) for record in self.records]
        return self.games
