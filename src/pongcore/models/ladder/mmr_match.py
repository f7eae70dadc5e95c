"""Ladder match records."""

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

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from pongcore.constants import MMR_FLOOR
from pongcore.exceptions import PlayerNotFoundException
from pongcore.models.player import Player
from pongcore.models.tournament.match import MatchScore
from pongcore.utils.timestamps import normalize_timestamp, serialize_timestamp


@dataclass(frozen=True)
class MMRChange:
    """Rating deltas produced by one ladder match.

    The deltas are the raw Elo changes; the new ratings are floored at zero,
    so ``new_mmr`` may differ from ``old + change`` for players near zero.
    """

    player1_change: int
    player2_change: int
    player1_new_mmr: int
    player2_new_mmr: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player1Change": self.player1_change,
            "player2Change": self.player2_change,
            "player1NewMmr": self.player1_new_mmr,
            "player2NewMmr": self.player2_new_mmr,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MMRChange":
        return cls(
            player1_change=data["player1Change"],
            player2_change=data["player2Change"],
            player1_new_mmr=data["player1NewMmr"],
            player2_new_mmr=data["player2NewMmr"],
        )


@dataclass(frozen=True)
class MMRMatch:
    """A recorded ladder match.

    ``player1`` and ``player2`` are snapshots taken before the match was
    applied. The ladder log is append-only apart from explicit edits and
    deletions.
    """

    id: str
    player1: Player
    player2: Player
    winner: Player
    score: MatchScore
    mmr_change: MMRChange
    completed_at: datetime
    room_id: Optional[str] = None

    @property
    def loser(self) -> Player:
        return self.player2 if self.winner.id == self.player1.id else self.player1

    def change_for(self, player_id: str) -> int:
        """Raw Elo delta computed for ``player_id``, before the floor.

        Raises:
            PlayerNotFoundException: If the player did not take part
        """
        if player_id == self.player1.id:
            return self.mmr_change.player1_change
        if player_id == self.player2.id:
            return self.mmr_change.player2_change
        raise PlayerNotFoundException(f"Player {player_id} did not play in match {self.id}")

    def applied_change_for(self, player_id: str) -> int:
        """Rating delta that actually reached ``player_id``.

        Equal to :meth:`change_for` unless the floor clamped the new rating,
        in which case the player only lost what they had before the match.
        """
        change = self.change_for(player_id)
        if player_id == self.player1.id:
            new_mmr, before = self.mmr_change.player1_new_mmr, self.player1.mmr
        else:
            new_mmr, before = self.mmr_change.player2_new_mmr, self.player2.mmr
        if new_mmr > MMR_FLOOR:
            return change
        return max(change, MMR_FLOOR - before)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the stored ladder match shape."""
        data: Dict[str, Any] = {
            "id": self.id,
            "player1": self.player1.to_dict(),
            "player2": self.player2.to_dict(),
            "winner": self.winner.to_dict(),
            "score": self.score.to_dict(),
            "mmrChange": self.mmr_change.to_dict(),
            "completedAt": serialize_timestamp(self.completed_at),
        }
        if self.room_id is not None:
            data["roomId"] = self.room_id
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MMRMatch":
        return cls(
            id=data["id"],
            player1=Player.from_dict(data["player1"]),
            player2=Player.from_dict(data["player2"]),
            winner=Player.from_dict(data["winner"]),
            score=MatchScore.from_dict(data["score"]),
            mmr_change=MMRChange.from_dict(data["mmrChange"]),
            completed_at=normalize_timestamp(data["completedAt"]),
            room_id=data.get("roomId"),
        )
