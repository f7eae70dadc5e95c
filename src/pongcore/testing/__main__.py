"""Testing CLI for Pong Core.

Plays random tournaments and ladder seasons from the command line::

    python -m pongcore.testing simulate --players 12 --seed 7
    python -m pongcore.testing ladder --players 8 --matches 40
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

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from pongcore.exceptions import PongCoreException
from pongcore.rating import format_rank_display, get_rank_by_mmr
from pongcore.testing.rtg import (
    RandomTournamentGenerator,
    RatingDistribution,
    ResultPattern,
    RTGConfig,
    summarize_tournament,
)
from pongcore.utils import setup_logger

logger = setup_logger(__name__)


# ANSI color codes for terminal output
class Colors:
    OKGREEN = "\033[92m"
    WARNING = "\033[93m"
    FAIL = "\033[91m"
    ENDC = "\033[0m"
    BOLD = "\033[1m"


def _build_config(args: argparse.Namespace) -> RTGConfig:
    return RTGConfig(
        num_players=args.players,
        num_ladder_matches=getattr(args, "matches", 0),
        rating_distribution=RatingDistribution[args.distribution.upper()],
        result_pattern=ResultPattern[args.pattern.upper()],
        seed=args.seed,
    )


def run_simulate_command(args: argparse.Namespace) -> int:
    """Play one random tournament to completion."""
    rtg = RandomTournamentGenerator(_build_config(args))
    tournament = rtg.generate_complete_tournament()

    if args.output:
        output_path = Path(args.output)
        output_path.write_text(rtg.export_json_format(tournament), encoding="utf-8")
        print(f"{Colors.OKGREEN}Tournament saved to: {output_path}{Colors.ENDC}")

    summary = summarize_tournament(tournament)
    print(f"\n{Colors.BOLD}Tournament {summary['id']}:{Colors.ENDC}")
    print(f"  Players: {summary['players']}")
    print(f"  Rounds: {summary['rounds']}")
    print(f"  Matches: {summary['matches']} ({summary['walkovers']} walkovers)")
    print(f"  Champion: {Colors.OKGREEN}{summary['winner']}{Colors.ENDC}")
    return 0


def run_ladder_command(args: argparse.Namespace) -> int:
    """Play a random ladder season and print the leaderboard."""
    rtg = RandomTournamentGenerator(_build_config(args))
    ladder = rtg.generate_ladder()

    print(f"\n{Colors.BOLD}Leaderboard after {len(ladder.matches)} matches:{Colors.ENDC}")
    for position, player in enumerate(ladder.leaderboard(), start=1):
        rank = format_rank_display(get_rank_by_mmr(player.mmr))
        print(
            f"  {position:3d}. {player.name:20} {player.mmr:5d} "
            f"(peak {player.peak_mmr}, {player.wins}W-{player.losses}L) {rank}"
        )
    return 0


def _add_common_arguments(parser: argparse.ArgumentParser, players: int) -> None:
    parser.add_argument("--players", type=int, default=players, help="Number of players")
    parser.add_argument(
        "--distribution",
        choices=[d.value for d in RatingDistribution],
        default=RatingDistribution.FLAT.value,
        help="Rating distribution",
    )
    parser.add_argument(
        "--pattern",
        choices=[p.value for p in ResultPattern],
        default=ResultPattern.REALISTIC.value,
        help="Result pattern",
    )
    parser.add_argument("--seed", type=int, help="Random seed")


def create_main_parser() -> argparse.ArgumentParser:
    """Create main argument parser."""
    parser = argparse.ArgumentParser(
        prog="pongcore-test",
        description="Random tournament and ladder simulator for Pong Core",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    sim_parser = subparsers.add_parser("simulate", help="Play a random tournament")
    _add_common_arguments(sim_parser, players=8)
    sim_parser.add_argument("--output", help="Write the tournament JSON here")
    sim_parser.set_defaults(func=run_simulate_command)

    ladder_parser = subparsers.add_parser("ladder", help="Play a random ladder season")
    _add_common_arguments(ladder_parser, players=8)
    ladder_parser.add_argument(
        "--matches", type=int, default=30, help="Number of ladder matches"
    )
    ladder_parser.set_defaults(func=run_ladder_command)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for pongcore-test CLI."""
    parser = create_main_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 0

    try:
        return args.func(args)
    except PongCoreException as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
