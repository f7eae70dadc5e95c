"""A table tennis player on a group's roster."""

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

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

from pongcore.constants import (
    BYE_PLAYER_ID,
    BYE_PLAYER_NAME,
    DEFAULT_MMR,
    MMR_FLOOR,
)
from pongcore.exceptions import InvalidPlayerDataException


def _require_count(value: Any, field_name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidPlayerDataException(
            f"{field_name} must be a non-negative integer, got {value!r}"
        )


@dataclass(frozen=True)
class Player:
    """Represents a player in a group.

    Players are immutable; the engines return updated copies.

    Attributes:
        id: Stable identifier, unique within a group
        name: Display name, unique (ignoring case) within the active roster
        wins: Matches won
        losses: Matches lost
        mmr: Current Elo-style rating
        peak_mmr: Highest rating ever reached, never below ``mmr``;
            defaults to ``mmr``
        avatar: Optional avatar URL supplied by the identity provider
    """

    id: str
    name: str
    wins: int = 0
    losses: int = 0
    mmr: int = DEFAULT_MMR
    peak_mmr: Optional[int] = None
    avatar: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not self.id:
            raise InvalidPlayerDataException(f"Player id must be a non-empty string, got {self.id!r}")
        if not isinstance(self.name, str):
            raise InvalidPlayerDataException(f"Player name must be a string, got {self.name!r}")
        _require_count(self.wins, "wins")
        _require_count(self.losses, "losses")
        _require_count(self.mmr, "mmr")
        if self.peak_mmr is None:
            object.__setattr__(self, "peak_mmr", self.mmr)
        _require_count(self.peak_mmr, "peakMmr")
        if self.peak_mmr < self.mmr:
            raise InvalidPlayerDataException(
                f"peakMmr ({self.peak_mmr}) is below mmr ({self.mmr}) for {self.name}"
            )

    @property
    def is_bye(self) -> bool:
        """Whether this is the BYE sentinel used to pad odd brackets."""
        return self.id == BYE_PLAYER_ID

    @property
    def matches_played(self) -> int:
        return self.wins + self.losses

    def with_rating(self, new_mmr: int) -> "Player":
        """Return a copy at ``new_mmr`` (floored at zero) with the peak tracked."""
        new_mmr = max(MMR_FLOOR, new_mmr)
        return replace(self, mmr=new_mmr, peak_mmr=max(self.peak_mmr, new_mmr))

    def with_win(self) -> "Player":
        return replace(self, wins=self.wins + 1)

    def with_loss(self) -> "Player":
        return replace(self, losses=self.losses + 1)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the stored player shape."""
        data: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "wins": self.wins,
            "losses": self.losses,
            "mmr": self.mmr,
            "peakMmr": self.peak_mmr,
        }
        if self.avatar is not None:
            data["avatar"] = self.avatar
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Player":
        """Create a Player from a stored document.

        Missing stats default to a fresh player. A stored peak below the
        current rating is raised to the rating.

        Raises:
            InvalidPlayerDataException: If required fields are missing or malformed
        """
        if not isinstance(data, dict):
            raise InvalidPlayerDataException(f"Player data must be a mapping, got {data!r}")
        try:
            player_id = data["id"]
            name = data["name"]
        except KeyError as e:
            raise InvalidPlayerDataException(f"Player data is missing {e.args[0]!r}") from e

        mmr = data.get("mmr", DEFAULT_MMR)
        peak = data.get("peakMmr", mmr)
        if isinstance(mmr, int) and isinstance(peak, int):
            peak = max(peak, mmr)

        return cls(
            id=player_id,
            name=name,
            wins=data.get("wins", 0),
            losses=data.get("losses", 0),
            mmr=mmr,
            peak_mmr=peak,
            avatar=data.get("avatar"),
        )

    def __str__(self) -> str:
        return f"{self.name} ({self.mmr})"


BYE_PLAYER = Player(
    id=BYE_PLAYER_ID,
    name=BYE_PLAYER_NAME,
    mmr=DEFAULT_MMR,
    peak_mmr=DEFAULT_MMR,
)


def is_real_player(player: Optional[Player]) -> bool:
    """True for a resolved, non-BYE player."""
    return player is not None and not player.is_bye
