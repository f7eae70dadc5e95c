"""Named rank tiers and the MMR leaderboard."""

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
from typing import Iterable, List, Optional

from pongcore.constants import RANK_TIERS
from pongcore.models.player import Player, is_real_player


@dataclass(frozen=True)
class Rank:
    """A rank tier covering ``min_mmr`` to ``max_mmr`` inclusive.

    ``max_mmr`` is None for the open-ended top tier.
    """

    name: str
    icon: str
    min_mmr: int
    max_mmr: Optional[int]

    def contains(self, mmr: int) -> bool:
        return mmr >= self.min_mmr and (self.max_mmr is None or mmr <= self.max_mmr)


@dataclass(frozen=True)
class RankProgress:
    current: Rank
    progress: int
    next_rank: Optional[Rank]


RANKS: List[Rank] = [Rank(*tier) for tier in RANK_TIERS]


def get_rank_by_mmr(mmr: int) -> Rank:
    """Tier containing ``mmr``, falling back to the lowest tier."""
    for rank in RANKS:
        if rank.contains(mmr):
            return rank
    return RANKS[0]


def get_rank_progress(mmr: int) -> RankProgress:
    """How far ``mmr`` has climbed through its tier, as a 0-100 percentage.

    The open-ended top tier always reports 100.
    """
    current = get_rank_by_mmr(mmr)
    index = RANKS.index(current)
    next_rank = RANKS[index + 1] if index + 1 < len(RANKS) else None

    if current.max_mmr is None:
        progress = 100.0
    else:
        span = current.max_mmr - current.min_mmr
        progress = min(100.0, max(0.0, (mmr - current.min_mmr) / span * 100))

    return RankProgress(current=current, progress=int(progress + 0.5), next_rank=next_rank)


def format_rank_display(rank: Rank) -> str:
    return f"{rank.icon} {rank.name}"


def leaderboard(players: Iterable[Player]) -> List[Player]:
    """Players ordered by MMR, highest first; equal ratings keep roster order."""
    return sorted(
        (p for p in players if is_real_player(p)), key=lambda p: p.mmr, reverse=True
    )
