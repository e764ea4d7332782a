"""Testing CLI for Dune Tournament.

Generates simulated tournaments and inspects saved tournament files.
"""

# Dune Tournament
# Copyright (C) 2025  Dune Tournament developers
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

from dunetournament.constants import (
    DEFAULT_QUALIFYING_ROUNDS,
    DEFAULT_TOP_CUT,
    SUPPORTED_TOP_CUTS,
)
from dunetournament.exceptions import DuneTournamentException
from dunetournament.leaders import leader_stats
from dunetournament.models.tournament import TournamentState
from dunetournament.tournament.final_standings import final_standings
from dunetournament.utils import setup_logger

logger = setup_logger(__name__)


# ANSI color codes for terminal output
class Colors:
    HEADER = "\033[95m"
    OKBLUE = "\033[94m"
    OKGREEN = "\033[92m"
    WARNING = "\033[93m"
    FAIL = "\033[91m"
    ENDC = "\033[0m"
    BOLD = "\033[1m"


def print_final_standings(state: TournamentState, limit: Optional[int] = None) -> None:
    """Print the final standings of ``state``."""
    ranking = final_standings(state)
    if limit is not None:
        ranking = ranking[:limit]

    print(f"\n{Colors.BOLD}{state.name} - {state.phase}{Colors.ENDC}")
    print(f"  {'#':>3}  {'Player':24} {'Pts':>4} {'VP':>4} {'Eff':>4}")
    for rank, player in enumerate(ranking, 1):
        print(
            f"  {rank:>3}  {player.name:24} {player.points:>4} "
            f"{player.total_vp:>4} {player.efficiency:>4}"
        )
    print()


def print_leader_stats(state: TournamentState) -> None:
    """Print per-leader statistics of ``state``."""
    stats = leader_stats(state.rounds)
    if not stats:
        print(f"{Colors.WARNING}No leaders were recorded{Colors.ENDC}")
        return

    print(f"\n{Colors.BOLD}Leader statistics{Colors.ENDC}")
    print(f"  {'Leader':32} {'Tier':>4} {'Plays':>5} {'Wins':>4} {'Win%':>6} {'AvgPos':>6}")
    for stat in stats:
        print(
            f"  {stat.leader:32} {stat.tier:>4} {stat.plays:>5} {stat.wins:>4} "
            f"{stat.win_rate:>6} {stat.avg_position:>6}"
        )
    print()


def load_state(path: str) -> TournamentState:
    return TournamentState.from_json(Path(path).read_text(encoding="utf-8"))


def run_generate_command(args: argparse.Namespace) -> int:
    """Run the generate (RTG) command."""
    from dunetournament.testing.rtg import (
        RandomTournamentGenerator,
        ResultPattern,
        RTGConfig,
    )

    print(f"\n{Colors.BOLD}Generating tournament...{Colors.ENDC}")

    config = RTGConfig(
        num_players=args.players,
        num_rounds=args.rounds,
        top_cut=args.top_cut,
        play_top_cut=not args.no_top_cut,
        result_pattern=ResultPattern[args.pattern.upper()],
        assign_leaders=not args.no_leaders,
        seed=args.seed,
    )
    state = RandomTournamentGenerator(config).generate_complete_tournament()

    if args.output:
        output_path = Path(args.output)
        output_path.write_text(state.to_json(), encoding="utf-8")
        print(f"{Colors.OKGREEN}Tournament saved to: {output_path}{Colors.ENDC}")

    print(f"\n{Colors.BOLD}Tournament Generated:{Colors.ENDC}")
    print(f"  Players: {len(state.players)}")
    print(f"  Rounds: {len(state.rounds)}")
    print_final_standings(state, limit=args.show)
    return 0


def run_standings_command(args: argparse.Namespace) -> int:
    """Print the final standings of a saved tournament."""
    print_final_standings(load_state(args.file), limit=args.show)
    return 0


def run_leaders_command(args: argparse.Namespace) -> int:
    """Print leader statistics of a saved tournament."""
    print_leader_stats(load_state(args.file))
    return 0


def create_main_parser() -> argparse.ArgumentParser:
    """Create main argument parser."""
    parser = argparse.ArgumentParser(
        prog="python -m dunetournament.testing",
        description="Testing CLI for Dune Tournament",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Simulate a 24 player tournament with a top 16
  python -m dunetournament.testing generate --players 24 --seed 7

  # Save it and inspect it later
  python -m dunetournament.testing generate --players 40 --output t.json
  python -m dunetournament.testing standings --file t.json
  python -m dunetournament.testing leaders --file t.json
        """,
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    gen_parser = subparsers.add_parser("generate", help="Generate a random tournament")
    gen_parser.add_argument("--players", type=int, default=24, help="Number of players")
    gen_parser.add_argument(
        "--rounds",
        type=int,
        default=DEFAULT_QUALIFYING_ROUNDS,
        help="Number of qualifying rounds",
    )
    gen_parser.add_argument(
        "--top-cut",
        type=int,
        choices=SUPPORTED_TOP_CUTS,
        default=DEFAULT_TOP_CUT,
        help="Top cut size",
    )
    gen_parser.add_argument(
        "--no-top-cut", action="store_true", help="Stop after qualifying"
    )
    gen_parser.add_argument(
        "--pattern",
        choices=["random", "skilled"],
        default="random",
        help="Result pattern",
    )
    gen_parser.add_argument(
        "--no-leaders", action="store_true", help="Do not record leaders"
    )
    gen_parser.add_argument("--seed", type=int, help="Random seed")
    gen_parser.add_argument("--output", help="Output file path (JSON)")
    gen_parser.add_argument("--show", type=int, help="Only print the top N players")
    gen_parser.set_defaults(func=run_generate_command)

    standings_parser = subparsers.add_parser(
        "standings", help="Print final standings of a saved tournament"
    )
    standings_parser.add_argument("--file", required=True, help="Tournament file (JSON)")
    standings_parser.add_argument("--show", type=int, help="Only print the top N players")
    standings_parser.set_defaults(func=run_standings_command)

    leaders_parser = subparsers.add_parser(
        "leaders", help="Print leader statistics of a saved tournament"
    )
    leaders_parser.add_argument("--file", required=True, help="Tournament file (JSON)")
    leaders_parser.set_defaults(func=run_leaders_command)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the testing CLI."""
    parser = create_main_parser()
    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        return args.func(args)
    except (DuneTournamentException, ValueError, OSError) as e:
        logger.error("%s failed: %s", args.command, e)
        print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
