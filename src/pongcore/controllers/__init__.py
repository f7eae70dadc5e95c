"""Stateful controllers that compose the engines for the UI shell."""

from pongcore.controllers.ladder import LadderController
from pongcore.controllers.roster import (
    create_player,
    normalize_player,
    remove_player,
    replace_players,
)
from pongcore.controllers.tournament import TournamentManager

__all__ = [
    "TournamentManager",
    "LadderController",
    "create_player",
    "normalize_player",
    "remove_player",
    "replace_players",
]
