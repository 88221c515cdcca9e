"""
Builder for creating PGN tournament text with a fluent API.

This module provides a builder that writes multi-game PGN exports from a
short description of players and results. It is used by tests and by the
seeding command, and needs no database.
"""

from typing import Dict, List, Optional, Tuple
from dataclasses import dataclass, field


DEFAULT_MOVETEXT = {
    "1-0": "1. e4 e5 2. Qh5 Nc6 3. Bc4 Nf6 4. Qxf7#",
    "0-1": "1. f3 e5 2. g4 Qh4#",
    "1/2-1/2": "1. e4 e5 2. Nf3 Nc6",
    "*": "1. d4 d5",
}


def _escape(value: object) -> str:
    return str(value).replace("\\", "\\\\").replace('"', '\\"')


@dataclass
class EventMetadata:
    """Tags shared by every game of the event."""

    name: str = ""
    site: Optional[str] = None
    date: Optional[str] = None
    event_date: Optional[str] = None
    event_type: Optional[str] = None
    event_rounds: Optional[int] = None
    time_control: Optional[str] = None
    country: Optional[str] = None


@dataclass
class PlayerEntry:
    name: str
    fide_id: Optional[str] = None
    rating: Optional[int] = None
    title: Optional[str] = None


@dataclass
class GameEntry:
    round_label: str
    white: str
    black: str
    result: str
    moves: str = ""
    extra_tags: Dict[str, str] = field(default_factory=dict)


class PGNBuilder:
    """Builder for multi-game PGN text."""

    def __init__(self):
        self.metadata = EventMetadata()
        self.players: Dict[str, PlayerEntry] = {}
        self.games: List[GameEntry] = []
        self.current_round: Optional[str] = None
        self._next_fide_id = 1000001

    def event(self, name: str, **kwargs) -> "PGNBuilder":
        """Define event tags (site, date, event_date, event_type, ...)."""
        self.metadata = EventMetadata(name=name, **kwargs)
        return self

    def player(
        self,
        name: str,
        fide_id: Optional[str] = None,
        rating: Optional[int] = None,
        title: Optional[str] = None,
        auto_fide_id: bool = True,
    ) -> "PGNBuilder":
        """Add a player. A FIDE ID is generated unless given or disabled."""
        if fide_id is None and auto_fide_id:
            fide_id = str(self._next_fide_id)
            self._next_fide_id += 1
        self.players[name] = PlayerEntry(name, fide_id, rating, title)
        return self

    def round(self, label) -> "PGNBuilder":
        """Start a round; games added afterwards carry this Round tag."""
        self.current_round = str(label)
        return self

    def game(
        self,
        white: str,
        black: str,
        result: str,
        moves: Optional[str] = None,
        **extra_tags: str,
    ) -> "PGNBuilder":
        """Add a game between two players registered with ``player``."""
        if self.current_round is None:
            raise ValueError("Call round() before adding games")
        for name in (white, black):
            if name not in self.players:
                self.player(name)
        self.games.append(
            GameEntry(
                self.current_round,
                white,
                black,
                result,
                moves if moves is not None else DEFAULT_MOVETEXT.get(result, ""),
                extra_tags,
            )
        )
        return self

    def _tags(self, entry: GameEntry) -> List[Tuple[str, object]]:
        meta = self.metadata
        white = self.players[entry.white]
        black = self.players[entry.black]
        tags = [
            ("Event", meta.name),
            ("Site", meta.site),
            ("Date", meta.date),
            ("Round", entry.round_label),
            ("White", white.name),
            ("Black", black.name),
            ("Result", entry.result),
            ("WhiteElo", white.rating),
            ("BlackElo", black.rating),
            ("WhiteTitle", white.title),
            ("BlackTitle", black.title),
            ("WhiteFideId", white.fide_id),
            ("BlackFideId", black.fide_id),
            ("EventDate", meta.event_date),
            ("EventType", meta.event_type),
            ("EventRounds", meta.event_rounds),
            ("EventCountry", meta.country),
            ("TimeControl", meta.time_control),
        ]
        tags.extend(entry.extra_tags.items())
        return [(name, value) for name, value in tags if value is not None]

    def build_game(self, entry: GameEntry) -> str:
        lines = [f'[{name} "{_escape(value)}"]' for name, value in self._tags(entry)]
        movetext = f"{entry.moves} {entry.result}".strip()
        return "\n".join(lines) + "\n\n" + movetext

    def build(self) -> str:
        """Return the PGN text of all games, separated by blank lines."""
        return "\n\n".join(self.build_game(entry) for entry in self.games) + "\n"


def round_robin_pairings(names: List[str]) -> List[List[Tuple[str, str]]]:
    """Circle-method pairings; with an odd field one player sits out each round."""
    seats = list(names)
    if len(seats) % 2 == 1:
        seats.append(None)
    rounds = []
    for round_index in range(len(seats) - 1):
        pairs = []
        for i in range(len(seats) // 2):
            white, black = seats[i], seats[len(seats) - 1 - i]
            if white is None or black is None:
                continue
            if round_index % 2 == 1:
                white, black = black, white
            pairs.append((white, black))
        rounds.append(pairs)
        seats = [seats[0]] + [seats[-1]] + seats[1:-1]
    return rounds
