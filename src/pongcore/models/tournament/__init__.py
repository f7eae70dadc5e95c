from pongcore.models.tournament.match import Match, MatchScore, match_id, parse_match_id
from pongcore.models.tournament.tournament import Tournament

__all__ = [
    "Match",
    "MatchScore",
    "Tournament",
    "match_id",
    "parse_match_id",
]
