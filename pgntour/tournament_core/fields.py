"""
Field coercion for PGN tag values.

Every tag value is a string. Each function here turns one kind of value into
the type the structured game needs, and degrades to a documented default
instead of raising.
"""

from typing import Optional
import re

from pgntour.tournament_core.structure import GameResult


DEFAULT_ROUND = 1

_DIGITS_RE = re.compile(r"\d+")
_LEADING_INT_RE = re.compile(r"^\s*(\d+)")

_RESULTS = {result.value: result for result in GameResult}


def parse_optional(value: Optional[str]) -> Optional[str]:
    """Strip a tag value; missing or blank values become None."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def parse_round(value: Optional[str]) -> int:
    """
    Extract the round number from a Round tag.

    The first run of digits anywhere in the value is used, so "5", "Round 3"
    and "2.1" give 5, 3 and 2. Missing values, values without digits and
    round 0 all give DEFAULT_ROUND.
    """
    if not value:
        return DEFAULT_ROUND
    match = _DIGITS_RE.search(value)
    if match is None:
        return DEFAULT_ROUND
    return max(int(match.group(0)), DEFAULT_ROUND)


def parse_result(value: Optional[str]) -> GameResult:
    """Match a Result tag exactly; anything unrecognized is UNFINISHED."""
    if value is None:
        return GameResult.UNFINISHED
    return _RESULTS.get(value.strip(), GameResult.UNFINISHED)


def parse_rating(value: Optional[str]) -> Optional[int]:
    """Read the leading integer of an Elo tag, or None when there is none."""
    if not value:
        return None
    match = _LEADING_INT_RE.match(value)
    if match is None:
        return None
    return int(match.group(1))


def parse_positive_int(value: Optional[str]) -> Optional[int]:
    """Read a positive integer such as EventRounds, or None."""
    rating = parse_rating(value)
    if rating is None or rating < 1:
        return None
    return rating
