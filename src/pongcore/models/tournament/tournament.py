"""Tournament data class."""

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

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from pongcore.constants import (
    TOURNAMENT_ACTIVE,
    TOURNAMENT_COMPLETED,
    TOURNAMENT_STATUSES,
    TOURNAMENT_VIEWS,
)
from pongcore.exceptions import TournamentStateException
from pongcore.models.player import Player
from pongcore.models.tournament.match import Match
from pongcore.type_hints import TournamentStatus, TournamentView
from pongcore.utils.timestamps import (
    normalize_optional_timestamp,
    normalize_timestamp,
    serialize_timestamp,
)


@dataclass(frozen=True)
class Tournament:
    """A single-elimination tournament run by a group.

    Attributes
    ----------
    id : str
        Tournament id.
    players : tuple of Player
        Roster snapshot taken at creation; win/loss counts accrue here.
    matches : tuple of Match
        All bracket matches in generation order.
    status : str
        "active" until every match is completed, then "completed".
    winner : Player or None
        Overall champion, set on completion.
    created_at : datetime
        Creation time.
    completed_at : datetime or None
        Completion time.
    current_view : str or None
        Last view the UI shell showed for this tournament.
    """

    id: str
    players: Tuple[Player, ...]
    matches: Tuple[Match, ...]
    created_at: datetime
    status: TournamentStatus = TOURNAMENT_ACTIVE
    winner: Optional[Player] = None
    completed_at: Optional[datetime] = None
    current_view: Optional[TournamentView] = field(default=None)

    def __post_init__(self) -> None:
        if self.status not in TOURNAMENT_STATUSES:
            raise TournamentStateException(f"Unknown tournament status: {self.status!r}")
        if self.current_view is not None and self.current_view not in TOURNAMENT_VIEWS:
            raise TournamentStateException(f"Unknown tournament view: {self.current_view!r}")
        # Accept lists from callers but store immutable tuples
        object.__setattr__(self, "players", tuple(self.players))
        object.__setattr__(self, "matches", tuple(self.matches))

    @property
    def is_active(self) -> bool:
        return self.status == TOURNAMENT_ACTIVE

    @property
    def is_completed(self) -> bool:
        return self.status == TOURNAMENT_COMPLETED

    @property
    def completed_match_count(self) -> int:
        return sum(1 for match in self.matches if match.is_completed)

    def get_match(self, match_id: str) -> Optional[Match]:
        for match in self.matches:
            if match.id == match_id:
                return match
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the stored tournament shape."""
        data: Dict[str, Any] = {
            "id": self.id,
            "players": [p.to_dict() for p in self.players],
            "matches": [m.to_dict() for m in self.matches],
            "status": self.status,
            "createdAt": serialize_timestamp(self.created_at),
        }
        if self.winner is not None:
            data["winner"] = self.winner.to_dict()
        if self.completed_at is not None:
            data["completedAt"] = serialize_timestamp(self.completed_at)
        if self.current_view is not None:
            data["currentView"] = self.current_view
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Tournament":
        """Deserialize a stored tournament, normalizing its timestamps."""
        winner = data.get("winner")
        return cls(
            id=data["id"],
            players=tuple(Player.from_dict(p) for p in data.get("players", [])),
            matches=tuple(Match.from_dict(m) for m in data.get("matches", [])),
            status=data.get("status", TOURNAMENT_ACTIVE),
            winner=Player.from_dict(winner) if winner is not None else None,
            created_at=normalize_timestamp(data["createdAt"]),
            completed_at=normalize_optional_timestamp(data.get("completedAt")),
            current_view=data.get("currentView"),
        )
