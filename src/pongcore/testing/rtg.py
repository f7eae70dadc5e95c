"""Random Tournament Generator.

Builds random rosters and plays out complete tournaments and ladder seasons
through the public controllers. Used by the test suite and the testing CLI.
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

import json
import random
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Dict, List, Optional, Tuple

from dateutil import tz

from pongcore.constants import MIN_TOURNAMENT_PLAYERS
from pongcore.controllers import LadderController, TournamentManager
from pongcore.exceptions import InsufficientPlayersException
from pongcore.models.player import Player
from pongcore.models.tournament import Tournament
from pongcore.rating import expected_score
from pongcore.utils import setup_logger

logger = setup_logger(__name__)

GAME_POINTS = 11


class RatingDistribution(Enum):
    """Rating distribution patterns for generated rosters."""

    FLAT = "flat"
    UNIFORM = "uniform"
    NORMAL = "normal"
    CLUB = "club"


class ResultPattern(Enum):
    """Result generation patterns for simulated games."""

    REALISTIC = "realistic"
    PREDICTABLE = "predictable"
    RANDOM = "random"


@dataclass
class RTGConfig:
    """Configuration for Random Tournament Generator."""

    num_players: int
    num_ladder_matches: int = 0
    rating_distribution: RatingDistribution = RatingDistribution.FLAT
    rating_range: Tuple[int, int] = (600, 1600)
    result_pattern: ResultPattern = ResultPattern.REALISTIC
    seed: Optional[int] = None


class SimulatedClock:
    """Deterministic clock that ticks one minute per reading."""

    def __init__(self, start: Optional[datetime] = None):
        self.current = start or datetime(2025, 1, 1, 12, 0, tzinfo=tz.UTC)

    def __call__(self) -> datetime:
        self.current += timedelta(minutes=1)
        return self.current


class PlayerFactory:
    """Factory for creating random rosters."""

    def __init__(self, config: RTGConfig, rng: random.Random):
        self.config = config
        self.random = rng

    def create_players(self) -> List[Player]:
        players = []
        for i in range(self.config.num_players):
            rating = self._generate_rating()
            players.append(
                Player(
                    id=f"player-{i + 1:03d}",
                    name=f"Player {i + 1:03d}",
                    mmr=rating,
                    peak_mmr=rating,
                )
            )

        logger.info(
            "Created %s players with %s distribution",
            len(players),
            self.config.rating_distribution.value,
        )
        return players

    def _generate_rating(self) -> int:
        min_rating, max_rating = self.config.rating_range
        distribution = self.config.rating_distribution
        if distribution == RatingDistribution.FLAT:
            return 1000
        if distribution == RatingDistribution.UNIFORM:
            return self.random.randint(min_rating, max_rating)
        if distribution == RatingDistribution.NORMAL:
            mean = (min_rating + max_rating) / 2
            std_dev = (max_rating - min_rating) / 6
            rating = int(self.random.gauss(mean, std_dev))
            return max(min_rating, min(max_rating, rating))
        if distribution == RatingDistribution.CLUB:
            base = self.random.choice([800, 1000, 1200, 1400])
            return self.random.randint(base - 100, base + 100)
        return self.random.randint(min_rating, max_rating)


class ResultSimulator:
    """Simulates table tennis game scores."""

    def __init__(self, config: RTGConfig, rng: random.Random):
        self.config = config
        self.random = rng

    def player1_wins(self, player1: Player, player2: Player) -> bool:
        pattern = self.config.result_pattern
        if pattern == ResultPattern.PREDICTABLE and player1.mmr != player2.mmr:
            return player1.mmr > player2.mmr
        if pattern == ResultPattern.REALISTIC:
            return self.random.random() < expected_score(player1.mmr, player2.mmr)
        return self.random.random() < 0.5

    def simulate_score(self, player1: Player, player2: Player) -> Tuple[int, int]:
        """Score of one game to 11, with deuce games won by two."""
        loser_points = self.random.randint(0, GAME_POINTS + 3)
        if loser_points >= GAME_POINTS - 1:
            winner_points = loser_points + 2
        else:
            winner_points = GAME_POINTS
        if self.player1_wins(player1, player2):
            return winner_points, loser_points
        return loser_points, winner_points


class RandomTournamentGenerator:
    """Plays out random tournaments and ladder seasons."""

    def __init__(self, config: RTGConfig):
        self.config = config
        self.random = (
            random.Random(config.seed) if config.seed is not None else random.Random()
        )
        self.clock = SimulatedClock()
        self.player_factory = PlayerFactory(config, self.random)
        self.result_simulator = ResultSimulator(config, self.random)

    def generate_complete_tournament(
        self, players: Optional[List[Player]] = None
    ) -> Tournament:
        """Seed a bracket and record every match until a champion emerges."""
        roster = players if players is not None else self.player_factory.create_players()
        manager = TournamentManager(roster, clock=self.clock, rng=self.random)
        tournament = manager.start_tournament()

        match = manager.next_match()
        while match is not None:
            score1, score2 = self.result_simulator.simulate_score(
                match.player1, match.player2
            )
            tournament = manager.record_result(match.id, score1, score2)
            match = manager.next_match()

        logger.info(
            "Tournament %s finished: %s (%s)",
            tournament.id,
            tournament.winner.name if tournament.winner else "no winner",
            tournament.status,
        )
        return tournament

    def generate_ladder(
        self, players: Optional[List[Player]] = None
    ) -> LadderController:
        """Record ``num_ladder_matches`` random pairings on a fresh ladder."""
        roster = players if players is not None else self.player_factory.create_players()
        if len(roster) < MIN_TOURNAMENT_PLAYERS:
            raise InsufficientPlayersException(
                f"A ladder needs at least {MIN_TOURNAMENT_PLAYERS} players, got {len(roster)}"
            )
        ladder = LadderController(roster, clock=self.clock)

        for _ in range(self.config.num_ladder_matches):
            first, second = self.random.sample(ladder.players, 2)
            score1, score2 = self.result_simulator.simulate_score(first, second)
            ladder.record(first.id, second.id, score1, score2)

        return ladder

    def export_json_format(self, tournament: Tournament) -> str:
        return json.dumps(tournament.to_dict(), indent=2, ensure_ascii=False)


def summarize_tournament(tournament: Tournament) -> Dict[str, object]:
    """Short summary used by the CLI."""
    walkovers = sum(1 for m in tournament.matches if m.is_walkover)
    return {
        "id": tournament.id,
        "status": tournament.status,
        "players": len(tournament.players),
        "matches": len(tournament.matches),
        "walkovers": walkovers,
        "rounds": max((m.round for m in tournament.matches), default=0),
        "winner": tournament.winner.name if tournament.winner else None,
    }
