"""Elo-style MMR rating engine and rank tiers."""

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

from pongcore.rating.elo import (
    RecordedMatch,
    apply_match_edit,
    compute_rating_change,
    expected_score,
    recalculate_match,
    record_match,
    revert_match,
)
from pongcore.rating.ranks import (
    RANKS,
    Rank,
    RankProgress,
    format_rank_display,
    get_rank_by_mmr,
    get_rank_progress,
    leaderboard,
)

__all__ = [
    "compute_rating_change",
    "expected_score",
    "record_match",
    "recalculate_match",
    "apply_match_edit",
    "revert_match",
    "RecordedMatch",
    "RANKS",
    "Rank",
    "RankProgress",
    "get_rank_by_mmr",
    "get_rank_progress",
    "format_rank_display",
    "leaderboard",
]
