"""Result scoring for tournaments.

This module turns a completed table's placements into player stat changes
and takes them back out again. Reverting is the exact inverse of applying,
so an edited table is scored by reverting the old results and applying
the new ones.
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

from typing import List

from dunetournament.constants import POINTS_BY_POSITION
from dunetournament.models.player import Player
from dunetournament.models.tournament import Table, TournamentState
from dunetournament.utils import setup_logger
from dunetournament.utils.validation import validate_table_result_strict

logger = setup_logger(__name__)


def position_points(position: int, table_size: int) -> int:
    """Tournament points for a finishing position at a table of ``table_size``.

    3-player tables award 5/3/2; the position-4 point only exists at
    tables of 4.
    """
    if position > table_size:
        return 0
    return POINTS_BY_POSITION.get(position, 0)


def _is_scorable(table: Table) -> bool:
    return table.is_complete and bool(table.results)


def _score_table(state: TournamentState, table: Table, revert: bool) -> TournamentState:
    """Apply (or revert) one table's results to the seated players."""
    validate_table_result_strict(table.results, table.size)

    updated: List[Player] = []
    for result in table.results:
        player = state.get_player(result.player_id)
        points = position_points(result.position, table.size)
        if revert:
            player = player.without_game(points, result.vp, result.position, table.player_ids)
        else:
            player = player.with_game(points, result.vp, result.position, table.player_ids)
        updated.append(player)
        logger.debug(
            "%s %s: position %s, %+d points, %s VP",
            "Reverted" if revert else "Scored",
            player.name,
            result.position,
            -points if revert else points,
            result.vp,
        )
    return state.replace_players(updated)


def apply_table_results(
    state: TournamentState, round_index: int, table_id: int
) -> TournamentState:
    """Add one completed table's results to the players' stats.

    Each seated player gains position points, their VP, their position
    (efficiency) and the other seated players as opponents. A table that
    is not complete leaves the state unchanged.

    Args:
        state: Current tournament state; it is not modified
        round_index: 0-based index of the round
        table_id: Id of the table within the round

    Returns:
        New tournament state

    Raises:
        RoundNotFoundException: If the round does not exist
        TableNotFoundException: If the table does not exist
        InvalidResultException: If the stored results are malformed
    """
    table = state.get_round(round_index).get_table(table_id)
    if not _is_scorable(table):
        logger.debug("Round index %s table %s has no results to apply", round_index, table_id)
        return state
    return _score_table(state, table, revert=False)


def revert_table_results(
    state: TournamentState, round_index: int, table_id: int
) -> TournamentState:
    """Remove one previously applied table's results from the players' stats.

    The exact inverse of :func:`apply_table_results`.

    Raises:
        RoundNotFoundException: If the round does not exist
        TableNotFoundException: If the table does not exist
        InvalidResultException: If the stored results are malformed
    """
    table = state.get_round(round_index).get_table(table_id)
    if not _is_scorable(table):
        logger.debug("Round index %s table %s has no results to revert", round_index, table_id)
        return state
    return _score_table(state, table, revert=True)


def apply_round_results(state: TournamentState, round_index: int) -> TournamentState:
    """Apply every completed table of a round."""
    for table in state.get_round(round_index).tables:
        state = apply_table_results(state, round_index, table.id)
    return state

