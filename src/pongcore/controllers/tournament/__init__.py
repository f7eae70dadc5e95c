from pongcore.controllers.tournament.tournament_manager import TournamentManager

__all__ = ["TournamentManager"]
