"""
Tournament format inference.

The format is decided by a fixed, ordered list of strategies. Each strategy
either classifies the evidence or passes. The first classification wins.

Knockout events are only recognized through an explicit EventType tag: there
is no bracket-elimination heuristic.
"""

from typing import Callable, Optional, Sequence, Tuple
from dataclasses import dataclass

from pgntour.tournament_core.structure import StructuredGame, TournamentFormat


# A field where the average player got fewer games than this fraction of the
# n - 1 games a single round robin needs is classified as swiss.
SWISS_MAX_ROUND_ROBIN_FRACTION = 0.75

EVENT_TYPE_TAG = "EventType"

# Checked in order; "swiss" comes first so "Swiss, 9 rounds" is not a round robin.
# Each entry is (format, substrings, whole values).
_EVENT_TYPE_KEYWORDS: Tuple[Tuple[TournamentFormat, Tuple[str, ...], Tuple[str, ...]], ...] = (
    (TournamentFormat.SWISS, ("swiss",), ()),
    (
        TournamentFormat.KNOCKOUT,
        ("knockout", "knock-out", "k.o.", "elimination"),
        ("ko",),
    ),
    (TournamentFormat.ROUND_ROBIN, ("robin",), ("tourn", "rr")),
)


@dataclass(frozen=True)
class FormatEvidence:
    """Aggregate statistics used to classify a tournament."""

    game_count: int
    player_count: int
    hint: Optional[str] = None


@dataclass(frozen=True)
class FormatInference:
    """The inferred format and the strategy that decided it."""

    format: TournamentFormat
    source: str


def format_from_hint(hint: Optional[str]) -> Optional[TournamentFormat]:
    """Map an EventType value to a canonical format, or None if unrecognized."""
    if not hint:
        return None
    value = hint.strip().lower()
    for tournament_format, substrings, whole_values in _EVENT_TYPE_KEYWORDS:
        if value in whole_values or any(part in value for part in substrings):
            return tournament_format
    return None


def from_explicit_tag(evidence: FormatEvidence) -> Optional[TournamentFormat]:
    return format_from_hint(evidence.hint)


def from_empty_field(evidence: FormatEvidence) -> Optional[TournamentFormat]:
    if evidence.game_count == 0 or evidence.player_count == 0:
        return TournamentFormat.OTHER
    return None


def from_round_robin_signature(evidence: FormatEvidence) -> Optional[TournamentFormat]:
    """Exact game counts of a single or double round robin."""
    players = evidence.player_count
    if players < 2:
        return None
    single = players * (players - 1) // 2
    double = players * (players - 1)
    if evidence.game_count in (single, double):
        return TournamentFormat.ROUND_ROBIN
    return None


def from_swiss_coverage(evidence: FormatEvidence) -> Optional[TournamentFormat]:
    """Players met noticeably fewer opponents than a round robin would need."""
    players = evidence.player_count
    if players < 2:
        return None
    games_per_player = 2.0 * evidence.game_count / players
    if games_per_player < SWISS_MAX_ROUND_ROBIN_FRACTION * (players - 1):
        return TournamentFormat.SWISS
    return None


InferenceStrategy = Callable[[FormatEvidence], Optional[TournamentFormat]]

INFERENCE_STRATEGIES: Sequence[Tuple[str, InferenceStrategy]] = (
    ("explicit_tag", from_explicit_tag),
    ("empty_field", from_empty_field),
    ("round_robin_signature", from_round_robin_signature),
    ("swiss_coverage", from_swiss_coverage),
)


def infer_format(evidence: FormatEvidence) -> FormatInference:
    """Run the strategies in order and return the first classification."""
    for name, strategy in INFERENCE_STRATEGIES:
        tournament_format = strategy(evidence)
        if tournament_format is not None:
            return FormatInference(tournament_format, name)
    return FormatInference(TournamentFormat.OTHER, "default")


def find_format_hint(games: Sequence[StructuredGame]) -> Optional[str]:
    """Return the first EventType value carried by any game."""
    for game in games:
        hint = game.tags.get(EVENT_TYPE_TAG)
        if hint and hint.strip():
            return hint
    return None
