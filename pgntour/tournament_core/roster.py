"""
Roster extraction from structured games.

Players are identified by FIDE ID only. The same player usually appears in
many games, sometimes with different spellings or ratings; the first game
that mentions a value wins.
"""

from typing import Dict, Iterable, List, Optional

from pgntour.tournament_core.structure import RosterPlayer, StructuredGame


def fold_player_first_wins(
    existing: Optional[RosterPlayer], mention: RosterPlayer
) -> RosterPlayer:
    """Merge a new mention into an existing roster entry.

    Attributes already set are never overwritten; a later mention can only
    fill in a value that is still missing.
    """
    if existing is None:
        return mention
    return RosterPlayer(
        fide_id=existing.fide_id,
        name=existing.name,
        rating=existing.rating if existing.rating is not None else mention.rating,
        title=existing.title if existing.title is not None else mention.title,
    )


def _mentions(game: StructuredGame) -> List[RosterPlayer]:
    return [
        RosterPlayer(
            fide_id=game.white_fide_id,
            name=game.white_name,
            rating=game.white_rating,
            title=game.white_title,
        ),
        RosterPlayer(
            fide_id=game.black_fide_id,
            name=game.black_name,
            rating=game.black_rating,
            title=game.black_title,
        ),
    ]


def build_roster(games: Iterable[StructuredGame]) -> List[RosterPlayer]:
    """Build the deduplicated player list in first-seen order.

    Only games with a FIDE ID on both sides contribute. Games missing one stay
    in the game list but add nobody to the roster.
    """
    roster: Dict[str, RosterPlayer] = {}

    for game in games:
        if not game.has_fide_ids:
            continue
        for mention in _mentions(game):
            roster[mention.fide_id] = fold_player_first_wins(
                roster.get(mention.fide_id), mention
            )

    # dicts keep insertion order, so this is first-seen order
    return list(roster.values())
