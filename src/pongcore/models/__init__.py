"""Data models shared by the bracket and rating engines."""

from pongcore.models.ladder import MMRChange, MMRMatch
from pongcore.models.player import BYE_PLAYER, Player, is_real_player
from pongcore.models.tournament import (
    Match,
    MatchScore,
    Tournament,
    match_id,
    parse_match_id,
)

__all__ = [
    "Player",
    "BYE_PLAYER",
    "is_real_player",
    "Match",
    "MatchScore",
    "Tournament",
    "match_id",
    "parse_match_id",
    "MMRChange",
    "MMRMatch",
]
