"""Tournament management for a group.

This module handles starting, advancing and resetting a group's
single-elimination tournaments while keeping at most one of them active.
"""

# Pong Core
# Copyright (C) 2025  Pong Core developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from dataclasses import replace
from typing import Iterable, List, Optional, Sequence

from pongcore.bracket import (
    generate_bracket,
    next_playable_match,
    record_tournament_result,
)
from pongcore.constants import MIN_TOURNAMENT_PLAYERS, VIEW_NEXT_MATCH
from pongcore.exceptions import (
    InsufficientPlayersException,
    PongCoreException,
    TournamentStateException,
)
from pongcore.models.player import Player
from pongcore.models.tournament import Match, MatchScore, Tournament
from pongcore.type_hints import MaybeClock, MaybeRandom, TournamentView
from pongcore.utils import generate_id, resolve_now, setup_logger

logger = setup_logger(__name__)


class TournamentManager:
    """Manages the tournaments of one group.

    This class is responsible for:
    - Starting a tournament from the current roster
    - Recording results and completing the tournament
    - Enforcing that at most one tournament is active
    - Keeping the group's tournament history
    """

    def __init__(
        self,
        players: Sequence[Player],
        tournaments: Iterable[Tournament] = (),
        clock: MaybeClock = None,
        rng: MaybeRandom = None,
    ):
        """Initialize the tournament manager.

        Args:
            players: The group's current roster
            tournaments: Previously stored tournaments, oldest first
            clock: Time source for ids and timestamps
            rng: Random source for bracket seeding
        """
        self.players: List[Player] = list(players)
        self.tournaments: List[Tournament] = list(tournaments)
        self.clock = clock
        self.rng = rng

        active = [t for t in self.tournaments if t.is_active]
        if len(active) > 1:
            raise TournamentStateException(
                f"Found {len(active)} active tournaments, at most one is allowed"
            )

    @property
    def active_tournament(self) -> Optional[Tournament]:
        """The tournament currently being played, or None."""
        for tournament in self.tournaments:
            if tournament.is_active:
                return tournament
        return None

    @property
    def completed_tournaments(self) -> List[Tournament]:
        return [t for t in self.tournaments if t.is_completed]

    def _require_active(self) -> Tournament:
        tournament = self.active_tournament
        if tournament is None:
            raise TournamentStateException("No tournament is in progress")
        return tournament

    def _store(self, tournament: Tournament) -> None:
        self.tournaments = [
            tournament if t.id == tournament.id else t for t in self.tournaments
        ]

    def start_tournament(self) -> Tournament:
        """Seed a new bracket from the roster and make it the active tournament.

        Returns:
            The new tournament

        Raises:
            TournamentStateException: If a tournament is already active
            InsufficientPlayersException: If the roster has fewer than two players
        """
        current = self.active_tournament
        if current is not None:
            logger.warning(f"Refusing to start a tournament while {current.id} is active")
            raise TournamentStateException(f"Tournament {current.id} is still active")

        if len(self.players) < MIN_TOURNAMENT_PLAYERS:
            raise InsufficientPlayersException(
                f"Need at least {MIN_TOURNAMENT_PLAYERS} players to start, "
                f"have {len(self.players)}"
            )

        now = resolve_now(self.clock)
        tournament = Tournament(
            id=generate_id(clock=lambda: now),
            players=tuple(self.players),
            matches=tuple(generate_bracket(self.players, rng=self.rng, clock=lambda: now)),
            created_at=now,
            current_view=VIEW_NEXT_MATCH,
        )
        self.tournaments.append(tournament)

        logger.info(
            f"Started tournament {tournament.id} with {len(self.players)} players "
            f"and {len(tournament.matches)} matches"
        )
        return tournament

    def record_result(self, match_id: str, score1: int, score2: int) -> Tournament:
        """Record the score of a match in the active tournament.

        Args:
            match_id: Match being recorded
            score1: Points for the match's player1
            score2: Points for the match's player2

        Returns:
            The updated tournament (completed if this was the last match)
        """
        tournament = self._require_active()
        try:
            updated = record_tournament_result(
                tournament,
                match_id,
                MatchScore(player1_score=score1, player2_score=score2),
                clock=self.clock,
            )
        except PongCoreException as e:
            logger.error(f"Could not record {match_id} in {tournament.id}: {e}")
            raise

        self._store(updated)
        logger.debug(f"Recorded {match_id}: {score1}-{score2}")
        if updated.is_completed:
            logger.info(f"Tournament {updated.id} won by {updated.winner.name}")
        return updated

    def next_match(self) -> Optional[Match]:
        """The next match ready to be played in the active tournament."""
        tournament = self.active_tournament
        if tournament is None:
            return None
        return next_playable_match(tournament.matches)

    def set_view(self, view: TournamentView = VIEW_NEXT_MATCH) -> Tournament:
        """Remember which view the UI shell shows for the active tournament."""
        updated = replace(self._require_active(), current_view=view)
        self._store(updated)
        return updated

    def reset(self) -> Optional[Tournament]:
        """Abandon the active tournament, returning it (or None if there was none)."""
        tournament = self.active_tournament
        if tournament is None:
            logger.warning("Cannot reset: no tournament is in progress")
            return None

        self.tournaments = [t for t in self.tournaments if t.id != tournament.id]
        logger.info(f"Abandoned tournament {tournament.id}")
        return tournament
