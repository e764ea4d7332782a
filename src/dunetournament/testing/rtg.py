"""Random Tournament Generator (RTG) - end to end simulation of the engine.

Registers players, plays every qualifying round and the top cut with
seeded random results, driving the same lifecycle functions an organizer
would use.
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

import random
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from dunetournament.constants import (
    DEFAULT_QUALIFYING_ROUNDS,
    DEFAULT_TOP_CUT,
    PHASE_TOP_CUT,
    SUPPORTED_TOP_CUTS,
)
from dunetournament.leaders import LEADERS
from dunetournament.models.tournament import (
    Table,
    TableResult,
    TournamentSettings,
    TournamentState,
)
from dunetournament.tournament.lifecycle import (
    add_player,
    generate_round,
    generate_top_cut_round,
    new_tournament,
    start_top_cut,
    start_tournament,
    submit_table_results,
)
from dunetournament.utils import setup_logger

logger = setup_logger(__name__)

WINNING_VP_RANGE = (10, 13)
MIN_VP = 2


class ResultPattern(Enum):
    """Result generation patterns for tournaments."""

    RANDOM = "random"
    SKILLED = "skilled"


@dataclass
class RTGConfig:
    """Configuration for Random Tournament Generator."""

    num_players: int
    num_rounds: int = DEFAULT_QUALIFYING_ROUNDS
    top_cut: int = DEFAULT_TOP_CUT
    play_top_cut: bool = True
    result_pattern: ResultPattern = ResultPattern.RANDOM
    assign_leaders: bool = True
    seed: Optional[int] = None
    tournament_name: str = "Simulated Tournament"


class ResultSimulator:
    """Simulates finishing positions and victory points for a table."""

    def __init__(self, config: RTGConfig, rng: random.Random):
        self.config = config
        self.random = rng
        self.skills: Dict[str, float] = {}

    def _skill(self, player_id: str) -> float:
        if player_id not in self.skills:
            self.skills[player_id] = self.random.gauss(0.0, 1.0)
        return self.skills[player_id]

    def finishing_order(self, table: Table) -> List[str]:
        order = list(table.player_ids)
        if self.config.result_pattern == ResultPattern.SKILLED:
            noisy = {pid: self._skill(pid) + self.random.gauss(0.0, 1.0) for pid in order}
            order.sort(key=lambda pid: noisy[pid], reverse=True)
        else:
            self.random.shuffle(order)
        return order

    def simulate_table(self, table: Table) -> List[TableResult]:
        """Produce a complete, valid result list for ``table``.

        Victory points never increase with position; ties below the winner
        are allowed, as in a real game decided on tiebreakers.
        """
        order = self.finishing_order(table)
        winning_vp = self.random.randint(*WINNING_VP_RANGE)
        other_vp = sorted(
            (self.random.randint(MIN_VP, winning_vp) for _ in order[1:]), reverse=True
        )
        vps = [winning_vp] + other_vp

        leaders: List[Optional[str]] = [None] * len(order)
        if self.config.assign_leaders:
            leaders = list(self.random.sample(LEADERS, len(order)))

        return [
            TableResult(player_id=pid, position=position, vp=vp, leader=leader)
            for position, (pid, vp, leader) in enumerate(zip(order, vps, leaders), 1)
        ]


class RandomTournamentGenerator:
    """Main tournament generator orchestrating registration and results."""

    def __init__(self, config: RTGConfig):
        self.config = config
        self.random = (
            random.Random(config.seed) if config.seed is not None else random.Random()
        )
        self.result_simulator = ResultSimulator(config, self.random)

    def _check_config(self) -> None:
        if self.config.num_rounds < 1:
            raise ValueError("At least one qualifying round is required")
        if self.config.top_cut not in SUPPORTED_TOP_CUTS:
            raise ValueError(f"Unsupported top cut: {self.config.top_cut}")
        if self.config.play_top_cut and self.config.num_players < self.config.top_cut:
            raise ValueError(
                f"A top {self.config.top_cut} needs at least "
                f"{self.config.top_cut} players, got {self.config.num_players}"
            )

    def create_tournament(self) -> TournamentState:
        """Register the simulated players and start qualifying."""
        settings = TournamentSettings(
            total_qualifying_rounds=self.config.num_rounds,
            top_cut=self.config.top_cut,
        )
        state = new_tournament(self.config.tournament_name, settings)
        width = len(str(self.config.num_players))
        for number in range(1, self.config.num_players + 1):
            state = add_player(state, f"Player {number:0{width}d}")
        return start_tournament(state)

    def play_current_round(self, state: TournamentState) -> TournamentState:
        """Submit simulated results for every table of the latest round."""
        round_index = len(state.rounds) - 1
        for table in state.rounds[round_index].tables:
            results = self.result_simulator.simulate_table(table)
            state = submit_table_results(state, round_index, table.id, results)
        return state

    def generate_complete_tournament(self) -> TournamentState:
        """Generate a complete tournament, through the grand final if enabled."""
        self._check_config()
        logger.info(
            "Generating tournament: %s players, %s rounds, top %s",
            self.config.num_players,
            self.config.num_rounds,
            self.config.top_cut,
        )

        state = self.create_tournament()
        for _ in range(self.config.num_rounds):
            state = generate_round(state, self.random)
            state = self.play_current_round(state)

        if not self.config.play_top_cut:
            logger.info("Tournament generation complete (qualifying only)")
            return state

        state = self.play_current_round(start_top_cut(state))
        while state.phase == PHASE_TOP_CUT:
            state = generate_top_cut_round(state)
            if state.phase == PHASE_TOP_CUT:
                state = self.play_current_round(state)

        logger.info("Tournament generation complete")
        return state
