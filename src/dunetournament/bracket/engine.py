"""Elimination round generation for the top cut.

Every function here is pure: given the same completed prior rounds it
returns the same tables. Preconditions that are not met raise a
:class:`~dunetournament.exceptions.BracketException` subclass, never an
empty result.
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

from typing import Iterable, List, Sequence

from dunetournament.bracket.template import (
    SEMIFINAL_STAGE,
    BracketTemplate,
    get_template,
)
from dunetournament.constants import DEFAULT_TOP_CUT, ROUND_SEMIFINAL
from dunetournament.exceptions import (
    BracketException,
    RoundIncompleteException,
    TournamentStateException,
)
from dunetournament.models.player import Player
from dunetournament.models.tournament import Round, Table
from dunetournament.tournament.standings import top_cut
from dunetournament.utils import setup_logger

logger = setup_logger(__name__)


def generate_semifinals(
    players: Iterable[Player], cut_size: int = DEFAULT_TOP_CUT
) -> List[Table]:
    """Seat the top cut at the semifinal tables.

    Seeds follow standings order, not roster or id order. For the top 16:
    Elite A = seeds 1/4/5/8, Elite B = 2/3/6/7, Challenger C = 9-12 and
    Challenger D = 13-16.

    Raises:
        InsufficientPlayersException: If fewer than ``cut_size`` players exist
    """
    template = get_template(cut_size)
    seeded = top_cut(players, template.cut_size)

    tables = [
        Table.create(
            index + 1,
            (seeded[seed - 1].id for seed in seed_table.seeds),
            label=seed_table.label,
        )
        for index, seed_table in enumerate(template.seed_tables)
    ]
    logger.info(
        "Seeded top %s: %s",
        cut_size,
        ", ".join(f"{t.label} {list(t.player_ids)}" for t in tables),
    )
    return tables


def generate_stage(
    template: BracketTemplate, stage: int, stage_rounds: Sequence[Round]
) -> List[Table]:
    """Build the tables of a post-semifinal stage from earlier results.

    Args:
        template: Bracket template of the top cut
        stage: Stage to build (1 = round after the semifinal)
        stage_rounds: Rounds of stages 0..stage-1, in order

    Raises:
        RoundIncompleteException: If an earlier stage round is missing or
            not complete
        BracketException: If an earlier round does not match the template
    """
    if not 1 <= stage < template.stage_count:
        raise BracketException(f"Top {template.cut_size} has no stage {stage}")
    if len(stage_rounds) < stage:
        raise RoundIncompleteException(
            f"Stage {stage} needs {stage} earlier bracket round(s), "
            f"got {len(stage_rounds)}"
        )

    for index in range(stage):
        round_ = stage_rounds[index]
        expected_type = template.round_type(index)
        if round_.type != expected_type:
            raise BracketException(
                f"Round {round_.number} is a {round_.type} round, "
                f"expected {expected_type}"
            )
        if len(round_.tables) != template.table_count(index):
            raise BracketException(
                f"Round {round_.number} has {len(round_.tables)} tables, "
                f"expected {template.table_count(index)}"
            )
        if not round_.is_complete:
            raise RoundIncompleteException(
                f"Round {round_.number} ({round_.type}) is not complete"
            )

    tables = []
    for index, stage_table in enumerate(template.stages[stage - 1].tables):
        player_ids = []
        for source in stage_table.sources:
            source_table = stage_rounds[source.stage].tables[source.table]
            for position in source.positions:
                try:
                    player_ids.append(source_table.player_at(position))
                except KeyError as e:
                    raise BracketException(
                        f"{source_table.label or f'Table {source_table.id}'} "
                        f"has no finisher in position {position}"
                    ) from e
        tables.append(Table.create(index + 1, player_ids, label=stage_table.label))
    return tables


def generate_redemption_round(
    semifinal_round: Round, cut_size: int = DEFAULT_TOP_CUT
) -> List[Table]:
    """Build the round after the semifinal.

    For the top 16 this is the redemption round: Redemption 1 holds
    2nd-4th of Elite A plus the winner of Challenger C, Redemption 2 holds
    2nd-4th of Elite B plus the winner of Challenger D. For the top 8 it
    is the winners final (top two of each semifinal) and the losers final
    (bottom two of each).
    """
    return generate_stage(get_template(cut_size), 1, [semifinal_round])


def generate_grand_final(
    semifinal_round: Round, redemption_round: Round, cut_size: int = DEFAULT_TOP_CUT
) -> Table:
    """Build the single grand final table.

    For the top 16: winners of Elite A and Elite B plus the winners of
    both redemption tables.
    """
    template = get_template(cut_size)
    tables = generate_stage(template, template.final_stage, [semifinal_round, redemption_round])
    return tables[0]


def bracket_rounds(rounds: Sequence[Round]) -> List[Round]:
    """The current top cut's rounds, starting at its semifinal."""
    start = None
    for index, round_ in enumerate(rounds):
        if round_.type == ROUND_SEMIFINAL:
            start = index
    if start is None:
        return []
    return [r for r in rounds[start:] if r.is_elimination]


def generate_elimination_round(
    prior_rounds: Sequence[Round],
    cut_size: int = DEFAULT_TOP_CUT,
    players: Iterable[Player] = (),
) -> Round:
    """Generate the next elimination round after ``prior_rounds``.

    Without a semifinal in ``prior_rounds`` the semifinal is seeded from
    ``players``. Otherwise the next stage of the bracket is built from
    the completed stage rounds.

    Returns:
        New round (type depends on the bracket stage), numbered after the
        last prior round

    Raises:
        InsufficientPlayersException: If the semifinal cannot be seeded
        RoundIncompleteException: If the previous stage is not complete
        TournamentStateException: If the grand final already exists
    """
    template = get_template(cut_size)
    number = prior_rounds[-1].number + 1 if prior_rounds else 1
    stage_rounds = bracket_rounds(prior_rounds)

    if not stage_rounds:
        tables = generate_semifinals(players, cut_size)
        return Round(number=number, type=ROUND_SEMIFINAL, tables=tuple(tables))

    stage = len(stage_rounds)
    if stage >= template.stage_count:
        raise TournamentStateException("The grand final has already been generated")

    tables = generate_stage(template, stage, stage_rounds)
    round_type = template.round_type(stage)
    logger.info(
        "Generated %s round %s: %s",
        round_type,
        number,
        ", ".join(f"{t.label} {list(t.player_ids)}" for t in tables),
    )
    return Round(number=number, type=round_type, tables=tuple(tables))
