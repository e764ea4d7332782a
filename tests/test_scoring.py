from dataclasses import replace

import pytest

from dunetournament.exceptions import InvalidResultException, TableNotFoundException
from dunetournament.models.player import Player
from dunetournament.models.tournament import Round, Table, TableResult, TournamentState
from dunetournament.scoring.result_recorder import (
    apply_round_results,
    apply_table_results,
    position_points,
    revert_table_results,
)


def _state(player_count, tables):
    players = tuple(Player(id=str(i), name=f"Player {i}") for i in range(1, player_count + 1))
    return TournamentState(
        players=players,
        rounds=(Round(number=1, type="qualifying", tables=tuple(tables)),),
    )


def _completed_table(table_id, results):
    """``results`` is a list of (player_id, position, vp)."""
    return Table(
        id=table_id,
        player_ids=tuple(pid for pid, _, _ in results),
        results=tuple(TableResult(pid, pos, vp) for pid, pos, vp in results),
        is_complete=True,
    )


FOUR_PLAYER_TABLE = _completed_table(
    1, [("1", 1, 12), ("2", 2, 9), ("3", 3, 7), ("4", 4, 5)]
)


def test_position_points():
    assert [position_points(p, 4) for p in (1, 2, 3, 4)] == [5, 3, 2, 1]
    assert [position_points(p, 3) for p in (1, 2, 3)] == [5, 3, 2]
    assert position_points(4, 3) == 0


def test_apply_table_results():
    state = apply_table_results(_state(4, [FOUR_PLAYER_TABLE]), 0, 1)
    first = state.get_player("1")
    assert (first.points, first.total_vp, first.efficiency) == (5, 12, 1)
    assert first.opponents == {"2", "3", "4"}
    last = state.get_player("4")
    assert (last.points, last.total_vp, last.efficiency) == (1, 5, 4)
    assert last.opponents == {"1", "2", "3"}


def test_three_player_table():
    table = _completed_table(1, [("1", 2, 8), ("2", 1, 11), ("3", 3, 4)])
    state = apply_table_results(_state(3, [table]), 0, 1)
    assert [p.points for p in state.players] == [3, 5, 2]
    assert [p.efficiency for p in state.players] == [2, 1, 3]


def test_revert_is_exact_inverse():
    before = _state(4, [FOUR_PLAYER_TABLE])
    veteran = replace(
        before.get_player("1"), points=7, total_vp=20, efficiency=3, opponent_history=("2",)
    )
    before = before.replace_players([veteran])
    applied = apply_table_results(before, 0, 1)
    assert applied.get_player("1").opponent_history == ("2", "2", "3", "4")

    reverted = revert_table_results(applied, 0, 1)
    assert reverted.players == before.players


def test_apply_does_not_modify_input():
    state = _state(4, [FOUR_PLAYER_TABLE])
    players = state.players
    apply_table_results(state, 0, 1)
    assert state.players is players
    assert all(p.points == 0 and not p.opponent_history for p in state.players)


def test_incomplete_table_is_a_no_op():
    table = Table.create(1, ["1", "2", "3", "4"])
    state = _state(4, [table])
    assert apply_table_results(state, 0, 1) is state
    assert revert_table_results(state, 0, 1) is state


def test_unknown_table():
    with pytest.raises(TableNotFoundException):
        apply_table_results(_state(4, [FOUR_PLAYER_TABLE]), 0, 2)


def test_malformed_stored_results_are_rejected():
    table = _completed_table(1, [("1", 1, 12), ("2", 1, 9), ("3", 3, 7), ("4", 4, 5)])
    with pytest.raises(InvalidResultException):
        apply_table_results(_state(4, [table]), 0, 1)


def test_apply_round_results():
    second = _completed_table(2, [("5", 1, 10), ("6", 2, 8), ("7", 3, 6)])
    pending = Table.create(3, ["8", "9", "10"])
    state = apply_round_results(_state(10, [FOUR_PLAYER_TABLE, second, pending]), 0)
    assert [p.points for p in state.players] == [5, 3, 2, 1, 5, 3, 2, 0, 0, 0]
