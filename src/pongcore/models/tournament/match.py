"""Tournament match and score data classes."""

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

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from pongcore.constants import (
    MATCH_COMPLETED,
    MATCH_ID_FORMAT,
    MATCH_ID_PATTERN,
    MATCH_PENDING,
    MATCH_STATUSES,
)
from pongcore.exceptions import InvalidMatchStateException, UnknownMatchException
from pongcore.models.player import Player, is_real_player
from pongcore.type_hints import MatchStatus
from pongcore.utils.timestamps import normalize_optional_timestamp, serialize_timestamp

_MATCH_ID_RE = re.compile(MATCH_ID_PATTERN)


def match_id(round_number: int, slot: int) -> str:
    """Build the id of the match at ``slot`` (0-based) in ``round_number`` (1-based)."""
    return MATCH_ID_FORMAT.format(round=round_number, slot=slot)


def parse_match_id(value: str) -> Tuple[int, int]:
    """Split a match id into ``(round_number, slot)``.

    Raises:
        UnknownMatchException: If the id does not follow the bracket scheme
    """
    found = _MATCH_ID_RE.match(value) if isinstance(value, str) else None
    if found is None:
        raise UnknownMatchException(f"Not a bracket match id: {value!r}")
    return int(found.group(1)), int(found.group(2))


@dataclass(frozen=True)
class MatchScore:
    """Points scored by each side of a match.

    Attributes:
        player1_score: Points for the player in slot 1
        player2_score: Points for the player in slot 2
    """

    player1_score: int
    player2_score: int

    @property
    def player1_won(self) -> bool:
        return self.player1_score > self.player2_score

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player1Score": self.player1_score,
            "player2Score": self.player2_score,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchScore":
        return cls(
            player1_score=data["player1Score"],
            player2_score=data["player2Score"],
        )


def _player_from_dict(data: Optional[Dict[str, Any]]) -> Optional[Player]:
    return Player.from_dict(data) if data is not None else None


def _player_to_dict(player: Optional[Player]) -> Optional[Dict[str, Any]]:
    return player.to_dict() if player is not None else None


@dataclass(frozen=True)
class Match:
    """A single slot in a single-elimination bracket.

    Attributes:
        id: ``round-<R>-match-<I>``, see :func:`match_id`
        round: Round number, 1-based
        player1: Player in slot 1, or None until a feeder match is decided
        player2: Player in slot 2, or None until a feeder match is decided
        status: "pending" or "completed"
        winner: Winner once completed
        score: Final score once completed (None for walkovers)
        completed_at: When the match was completed
    """

    id: str
    round: int
    player1: Optional[Player] = None
    player2: Optional[Player] = None
    status: MatchStatus = MATCH_PENDING
    winner: Optional[Player] = None
    score: Optional[MatchScore] = None
    completed_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        if self.status not in MATCH_STATUSES:
            raise InvalidMatchStateException(f"Unknown match status: {self.status!r}")
        if isinstance(self.round, bool) or not isinstance(self.round, int) or self.round < 1:
            raise InvalidMatchStateException(f"Round must be a positive integer, got {self.round!r}")

    @property
    def slot(self) -> int:
        """0-based position of this match within its round."""
        return parse_match_id(self.id)[1]

    @property
    def is_completed(self) -> bool:
        return self.status == MATCH_COMPLETED

    @property
    def is_pending(self) -> bool:
        return self.status == MATCH_PENDING

    @property
    def has_bye(self) -> bool:
        return any(p is not None and p.is_bye for p in (self.player1, self.player2))

    @property
    def is_playable(self) -> bool:
        """Pending with two real players, i.e. ready to be recorded by a user."""
        return (
            self.is_pending
            and is_real_player(self.player1)
            and is_real_player(self.player2)
        )

    @property
    def is_walkover(self) -> bool:
        """Completed without play because the opponent was the BYE."""
        return self.is_completed and self.has_bye

    def participants(self) -> Tuple[Player, ...]:
        """Real players currently seated in this match."""
        return tuple(p for p in (self.player1, self.player2) if is_real_player(p))

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the stored tournament match shape."""
        data: Dict[str, Any] = {
            "id": self.id,
            "player1": _player_to_dict(self.player1),
            "player2": _player_to_dict(self.player2),
            "status": self.status,
            "round": self.round,
        }
        if self.winner is not None:
            data["winner"] = self.winner.to_dict()
        if self.score is not None:
            data["score"] = self.score.to_dict()
        if self.completed_at is not None:
            data["completedAt"] = serialize_timestamp(self.completed_at)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Match":
        """Deserialize a stored match, normalizing its timestamp."""
        score = data.get("score")
        return cls(
            id=data["id"],
            round=data["round"],
            player1=_player_from_dict(data.get("player1")),
            player2=_player_from_dict(data.get("player2")),
            status=data.get("status", MATCH_PENDING),
            winner=_player_from_dict(data.get("winner")),
            score=MatchScore.from_dict(score) if score is not None else None,
            completed_at=normalize_optional_timestamp(data.get("completedAt")),
        )
