"""Swiss-style table pairing for qualifying rounds.

Players are grouped into point brackets and seated greedily at the open
table where they have already met the fewest opponents. The greedy pass
never backtracks: when no conflict-free seat exists a repeat matchup is
accepted and logged.
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
from itertools import combinations, groupby
from typing import Dict, List, Optional, Sequence

from dunetournament.constants import (
    DESCENT_TABLE_SIZE,
    DESCENT_TABLES_BY_REMAINDER,
    MIN_PLAYERS,
    TABLE_SIZE,
)
from dunetournament.exceptions import InvalidPairingException
from dunetournament.models.player import Player
from dunetournament.models.tournament import Table, TournamentState
from dunetournament.tournament.standings import rank_players
from dunetournament.type_hints import RoundSeatings, Shuffler
from dunetournament.utils import setup_logger

logger = setup_logger(__name__)


def table_sizes(player_count: int) -> List[int]:
    """Compute the table sizes for ``player_count`` players.

    Tables of 4 come first, followed by the 3-player descent tables
    (3, 2 or 1 of them for a remainder of 1, 2 or 3 players).

    Raises:
        InvalidPairingException: With fewer than 4 players, or with 5
            players (which would need three descent tables)
    """
    if player_count < MIN_PLAYERS:
        raise InvalidPairingException(
            f"At least {MIN_PLAYERS} players are required, got {player_count}"
        )

    descent_tables = DESCENT_TABLES_BY_REMAINDER[player_count % TABLE_SIZE]
    remaining = player_count - descent_tables * DESCENT_TABLE_SIZE
    if remaining < 0:
        raise InvalidPairingException(
            f"{player_count} players cannot be split into tables of 3 and 4"
        )

    return [TABLE_SIZE] * (remaining // TABLE_SIZE) + [DESCENT_TABLE_SIZE] * descent_tables


def pairing_order(
    players: Sequence[Player], round_number: int, rng: Shuffler
) -> List[Player]:
    """Order in which players are seated.

    Round 1 is a full shuffle. Later rounds walk the point brackets from
    the highest down, shuffling only inside each bracket.
    """
    if round_number <= 1:
        order = list(players)
        rng.shuffle(order)
        return order

    order: List[Player] = []
    ranked = rank_players(players)
    for _points, bracket in groupby(ranked, key=lambda p: p.points):
        bracket_players = list(bracket)
        rng.shuffle(bracket_players)
        order.extend(bracket_players)
    return order


def seat_players(ordered: Sequence[Player], sizes: Sequence[int]) -> RoundSeatings:
    """Greedily seat players at the table with the fewest previous opponents.

    Ties between equally good tables go to the first one. Full tables
    stop accepting players.
    """
    tables: List[List[Player]] = [[] for _ in sizes]

    for player in ordered:
        best_table = -1
        best_conflicts = None
        for index, seated in enumerate(tables):
            if len(seated) >= sizes[index]:
                continue
            conflicts = sum(1 for other in seated if player.has_faced(other.id))
            if best_conflicts is None or conflicts < best_conflicts:
                best_conflicts = conflicts
                best_table = index
        if best_table < 0:
            raise InvalidPairingException(
                f"No open seat left for player {player.id}"
            )
        tables[best_table].append(player)

    return [tuple(p.id for p in seated) for seated in tables]


def count_repeat_pairings(
    seatings: RoundSeatings, players: Dict[str, Player]
) -> int:
    """Count pairs of co-seated players who have already met."""
    repeats = 0
    for seating in seatings:
        for a, b in combinations(seating, 2):
            if players[a].has_faced(b):
                repeats += 1
    return repeats


def create_tables(
    players: Sequence[Player],
    round_number: int,
    rng: Optional[Shuffler] = None,
) -> List[Table]:
    """Create the tables of one qualifying round.

    Args:
        players: Every participating player with current stats
        round_number: Qualifying round being paired (1-indexed)
        rng: Random source, ``random.Random()`` when omitted

    Returns:
        Tables with ids 1..k, empty results and not complete
    """
    if rng is None:
        rng = random.Random()

    sizes = table_sizes(len(players))
    ordered = pairing_order(players, round_number, rng)
    seatings = seat_players(ordered, sizes)

    repeats = count_repeat_pairings(seatings, {p.id: p for p in players})
    if repeats:
        logger.warning(
            "Round %s pairing repeats %s previous matchup(s); "
            "no conflict-free seating was found",
            round_number,
            repeats,
        )

    logger.info(
        "Paired round %s: %s players at %s tables (%s of 3)",
        round_number,
        len(players),
        len(sizes),
        sizes.count(DESCENT_TABLE_SIZE),
    )
    return [Table.create(index + 1, seating) for index, seating in enumerate(seatings)]


def generate_qualifying_round(
    state: TournamentState, rng: Optional[Shuffler] = None
) -> List[Table]:
    """Generate the tables for the next qualifying round of ``state``.

    Args:
        state: Current tournament state; it is not modified
        rng: Random source, ``random.Random()`` when omitted

    Returns:
        Tables with ids 1..k, empty results and not complete
    """
    round_number = len(state.qualifying_rounds) + 1
    return create_tables(state.players, round_number, rng)
