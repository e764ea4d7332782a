"""Final standings that respect the elimination bracket.

Once the grand final is complete the ranking is assembled in tiers:

1. grand final players, in grand final finishing order;
2. players knocked out in a stage ranked by placement (the top 16
   redemption round), by their finishing position there and then by
   cumulative standings;
3. the rest of the top cut, by cumulative standings;
4. everyone outside the top cut, by cumulative standings.

Before that, the final standings are the plain cumulative standings.
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

from typing import Dict, List, Optional, Set, Tuple

from dunetournament.bracket.engine import bracket_rounds
from dunetournament.bracket.template import BracketTemplate, get_template
from dunetournament.constants import ROUND_GRAND_FINAL
from dunetournament.models.player import Player
from dunetournament.models.tournament import Round, TournamentState
from dunetournament.tournament.standings import rank_players, standings_key
from dunetournament.utils import setup_logger

logger = setup_logger(__name__)


def _completed_grand_final(state: TournamentState) -> Optional[Round]:
    grand_finals = state.rounds_of_type(ROUND_GRAND_FINAL)
    if grand_finals and grand_finals[-1].is_complete:
        return grand_finals[-1]
    return None


def _placement_tiers(
    template: BracketTemplate,
    stage_rounds: List[Round],
    players: Dict[str, Player],
    placed: Set[str],
) -> List[Player]:
    """Players knocked out in stages ranked by placement, latest stage first."""
    ranked: List[Player] = []
    for stage in range(template.final_stage - 1, 0, -1):
        if stage >= len(stage_rounds):
            continue
        if not template.stages[stage - 1].ranked_by_placement:
            continue
        round_ = stage_rounds[stage]
        if not round_.is_complete:
            continue

        knocked_out: List[Tuple[int, Player]] = []
        for table_index, table in enumerate(round_.tables):
            eliminated = template.eliminated_positions(stage, table_index)
            for result in table.results:
                if result.position in eliminated and result.player_id not in placed:
                    knocked_out.append((result.position, players[result.player_id]))

        knocked_out.sort(key=lambda entry: (entry[0],) + standings_key(entry[1]))
        for _position, player in knocked_out:
            ranked.append(player)
            placed.add(player.id)
    return ranked


def final_standings(state: TournamentState) -> List[Player]:
    """Rank every player, merging bracket placement with cumulative stats.

    Args:
        state: Tournament state; it is not modified

    Returns:
        Every player exactly once, champion first once the grand final is
        complete, otherwise the cumulative standings
    """
    grand_final = _completed_grand_final(state)
    if grand_final is None:
        return rank_players(state.players)

    template = get_template(state.settings.top_cut)
    players = state.player_map
    stage_rounds = bracket_rounds(state.rounds)

    placed: Set[str] = set()
    finalists: List[Player] = []
    for table in grand_final.tables:
        for result in table.results_by_position():
            finalists.append(players[result.player_id])
            placed.add(result.player_id)

    knocked_out = _placement_tiers(template, stage_rounds, players, placed)

    top_cut_ids = {pid for round_ in stage_rounds for pid in round_.player_ids}
    rest_of_cut = rank_players(
        p for p in state.players if p.id in top_cut_ids and p.id not in placed
    )
    everyone_else = rank_players(p for p in state.players if p.id not in top_cut_ids)

    logger.debug(
        "Final standings tiers: %s finalists, %s by placement, %s top cut, %s others",
        len(finalists),
        len(knocked_out),
        len(rest_of_cut),
        len(everyone_else),
    )
    return finalists + knocked_out + rest_of_cut + everyone_else
