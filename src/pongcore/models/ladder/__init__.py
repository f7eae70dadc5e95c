from pongcore.models.ladder.mmr_match import MMRChange, MMRMatch

__all__ = [
    "MMRChange",
    "MMRMatch",
]
