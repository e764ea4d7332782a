"""Cumulative standings for tournaments.

Players are ranked by tournament points (descending), then total victory
points (descending), then efficiency (ascending, since it is a sum of
finishing positions). Players equal on all three keys keep their input
order.
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

from dataclasses import dataclass
from typing import Iterable, List, Tuple

from dunetournament.exceptions import InsufficientPlayersException
from dunetournament.models.player import Player


def standings_key(player: Player) -> Tuple[int, int, int]:
    """Sort key placing the best player first."""
    return (-player.points, -player.total_vp, player.efficiency)


def compare_players(p1: Player, p2: Player) -> int:
    """Compare two players for standings order.

    Returns:
        1 if p1 ranks higher, -1 if p2 ranks higher, 0 if tied
    """
    k1, k2 = standings_key(p1), standings_key(p2)
    if k1 == k2:
        return 0
    return 1 if k1 < k2 else -1


def rank_players(players: Iterable[Player]) -> List[Player]:
    """Get players in standings order (best to worst).

    ``sorted`` is stable, so exact ties stay in input order.
    """
    return sorted(players, key=standings_key)


def top_cut(players: Iterable[Player], size: int) -> List[Player]:
    """Get the ``size`` best players, seed 1 first.

    Raises:
        InsufficientPlayersException: If fewer than ``size`` players exist
    """
    ranked = rank_players(players)
    if len(ranked) < size:
        raise InsufficientPlayersException(
            f"Top {size} requires {size} players, only {len(ranked)} registered"
        )
    return ranked[:size]


@dataclass(frozen=True)
class StandingEntry:
    """One line of the standings table."""

    rank: int
    player: Player
    tied: bool


def standings_table(players: Iterable[Player]) -> List[StandingEntry]:
    """Ranked standings with shared ranks for exact ties.

    Tied players share the rank of the first of them (1, 2, 2, 4).
    """
    ranked = rank_players(players)
    entries: List[StandingEntry] = []
    rank = 1
    for i, player in enumerate(ranked):
        key = standings_key(player)
        tied_prev = i > 0 and standings_key(ranked[i - 1]) == key
        tied_next = i + 1 < len(ranked) and standings_key(ranked[i + 1]) == key
        if not tied_prev:
            rank = i + 1
        entries.append(StandingEntry(rank=rank, player=player, tied=tied_prev or tied_next))
    return entries
