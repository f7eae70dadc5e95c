"""MMR ladder recording, correction and deletion.

This module keeps a room's roster and ladder match log consistent while
matches are recorded, edited and deleted.
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

from typing import Iterable, List, Optional, Sequence

from pongcore.constants import DEFAULT_K_FACTOR
from pongcore.controllers.roster import replace_players
from pongcore.exceptions import MatchNotFoundException, PlayerNotFoundException
from pongcore.models.ladder import MMRMatch
from pongcore.models.player import Player
from pongcore.rating import (
    apply_match_edit,
    leaderboard,
    recalculate_match,
    record_match,
    revert_match,
)
from pongcore.type_hints import MaybeClock
from pongcore.utils import setup_logger

logger = setup_logger(__name__)


class LadderController:
    """Handles ladder matches for one room.

    This class is responsible for:
    - Recording matches and updating both players' ratings and records
    - Applying corrections to a recorded match
    - Deleting matches and reverting their effect on the roster
    - Producing the leaderboard
    """

    def __init__(
        self,
        players: Sequence[Player],
        matches: Iterable[MMRMatch] = (),
        room_id: Optional[str] = None,
        clock: MaybeClock = None,
        k_factor: int = DEFAULT_K_FACTOR,
    ):
        self.players: List[Player] = list(players)
        self.matches: List[MMRMatch] = list(matches)
        self.room_id = room_id
        self.clock = clock
        self.k_factor = k_factor

    def get_player(self, player_id: str) -> Player:
        for player in self.players:
            if player.id == player_id:
                return player
        raise PlayerNotFoundException(f"Player {player_id} is not on the roster")

    def get_match(self, match_id: str) -> MMRMatch:
        for match in self.matches:
            if match.id == match_id:
                return match
        raise MatchNotFoundException(f"Ladder match {match_id} not found")

    def record(
        self, player1_id: str, player2_id: str, score1: int, score2: int
    ) -> MMRMatch:
        """Record a ladder match between two roster players.

        Returns:
            The stored match record
        """
        player1 = self.get_player(player1_id)
        player2 = self.get_player(player2_id)

        recorded = record_match(
            player1,
            player2,
            score1,
            score2,
            k_factor=self.k_factor,
            clock=self.clock,
            room_id=self.room_id,
        )
        self.players = replace_players(
            self.players, recorded.updated_player1, recorded.updated_player2
        )
        self.matches.append(recorded.match)

        change = recorded.match.mmr_change
        logger.info(
            f"Recorded {player1.name} {score1}-{score2} {player2.name} "
            f"({change.player1_change:+d} / {change.player2_change:+d})"
        )
        return recorded.match

    def edit(
        self, match_id: str, winner_id: str, score1: int, score2: int
    ) -> MMRMatch:
        """Correct the winner and score of a recorded match.

        Only this match's deltas are recomputed; later matches keep theirs.
        """
        original = self.get_match(match_id)
        updated = recalculate_match(
            original, self.players, winner_id, score1, score2, k_factor=self.k_factor
        )
        self.players = apply_match_edit(self.players, original, updated)
        self.matches = [updated if m.id == match_id else m for m in self.matches]

        logger.info(
            f"Edited {match_id}: winner {updated.winner.name}, {score1}-{score2}"
        )
        return updated

    def delete(self, match_id: str) -> MMRMatch:
        """Remove a match and revert its effect on both players."""
        match = self.get_match(match_id)
        self.players = revert_match(self.players, match)
        self.matches = [m for m in self.matches if m.id != match_id]

        logger.info(f"Deleted ladder match {match_id}")
        return match

    def leaderboard(self) -> List[Player]:
        return leaderboard(self.players)

    def history_for(self, player_id: str) -> List[MMRMatch]:
        """Matches involving ``player_id``, most recent first."""
        involved = [
            m for m in self.matches if player_id in (m.player1.id, m.player2.id)
        ]
        return sorted(involved, key=lambda m: m.completed_at, reverse=True)
