"""Single-elimination bracket engine.

Builds randomly seeded brackets, advances them one result at a time and
decides the overall champion.
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

from pongcore.bracket.single_elimination import (
    advance,
    apply_result_to_roster,
    final_match,
    generate_bracket,
    is_complete,
    next_playable_match,
    overall_winner,
    playable_matches,
    record_tournament_result,
    rounds,
)

__all__ = [
    "generate_bracket",
    "advance",
    "apply_result_to_roster",
    "overall_winner",
    "is_complete",
    "record_tournament_result",
    "next_playable_match",
    "playable_matches",
    "rounds",
    "final_match",
]
