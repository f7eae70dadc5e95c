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

# --- Rating ---
DEFAULT_MMR = 1000
DEFAULT_K_FACTOR = 32
MMR_FLOOR = 0
ELO_SCALE = 400

# Match outcome values for the Elo formula (no draws in table tennis)
WIN_RESULT = 1
LOSS_RESULT = 0

# --- Bracket ---
BYE_PLAYER_ID = "bye"
BYE_PLAYER_NAME = "BYE"
MIN_TOURNAMENT_PLAYERS = 2

# Match ids look like "round-2-match-0" (1-based round, 0-based slot)
MATCH_ID_FORMAT = "round-{round}-match-{slot}"
MATCH_ID_PATTERN = r"^round-(\d+)-match-(\d+)$"

# Ladder match ids look like "mmr-1718000000000"
MMR_MATCH_ID_PREFIX = "mmr"

# Match status values
MATCH_PENDING = "pending"
MATCH_IN_PROGRESS = "in-progress"  # Reserved by the stored format, never produced
MATCH_COMPLETED = "completed"
MATCH_STATUSES = (MATCH_PENDING, MATCH_IN_PROGRESS, MATCH_COMPLETED)

# Tournament status values
TOURNAMENT_ACTIVE = "active"
TOURNAMENT_COMPLETED = "completed"
TOURNAMENT_STATUSES = (TOURNAMENT_ACTIVE, TOURNAMENT_COMPLETED)

# Tournament views remembered by the UI shell
VIEW_NEXT_MATCH = "next-match"
VIEW_PENDING_MATCHES = "pending-matches"
TOURNAMENT_VIEWS = (VIEW_NEXT_MATCH, VIEW_PENDING_MATCHES)

# --- Rank tiers ---
# (name, icon, min_mmr, max_mmr); max of None means unbounded
RANK_TIERS = [
    ("Iron", "\U0001f529", 0, 599),
    ("Bronze", "\U0001f949", 600, 799),
    ("Silver", "\U0001f948", 800, 999),
    ("Gold", "\U0001f947", 1000, 1199),
    ("Platinum", "\U0001f4bf", 1200, 1399),
    ("Diamond", "\U0001f48e", 1400, 1599),
    ("Master", "\U0001f451", 1600, None),
]

# --- Logging ---
LOG_LEVEL_ENV_VAR = "PONGCORE_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
