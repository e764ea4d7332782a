"""Declarative elimination bracket templates.

A template describes the whole top cut as data:

* ``seed_tables`` - which standings seeds sit at each semifinal table;
* ``stages`` - every later round, each table listing which finishing
  positions of which earlier table feed into it;
* the elimination rule, derived from the stages: any finishing position
  that no later table draws from is terminal.

Both supported cut sizes are instances of the same template type, so a new
cut size (e.g. 32) only needs a new instance.
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
from typing import Dict, List, Set, Tuple

from dunetournament.constants import (
    DESCENT_TABLE_SIZE,
    ROUND_GRAND_FINAL,
    ROUND_REDEMPTION,
    ROUND_SEMIFINAL,
    TABLE_SIZE,
    TOP_CUT_8,
    TOP_CUT_16,
)
from dunetournament.exceptions import InvalidConfigurationException
from dunetournament.type_hints import RoundType

SEMIFINAL_STAGE = 0


@dataclass(frozen=True)
class SeedTable:
    """A semifinal table filled from standings seeds (1 = best)."""

    label: str
    seeds: Tuple[int, ...]


@dataclass(frozen=True)
class Advancement:
    """Finishing ``positions`` of ``table`` in ``stage`` move on.

    ``stage`` 0 is the semifinal; ``table`` is the 0-based table index
    within that stage's round.
    """

    stage: int
    table: int
    positions: Tuple[int, ...]


@dataclass(frozen=True)
class StageTable:
    """A table of a later stage, filled from earlier finishing positions."""

    label: str
    sources: Tuple[Advancement, ...]

    @property
    def size(self) -> int:
        return sum(len(source.positions) for source in self.sources)


@dataclass(frozen=True)
class Stage:
    """One elimination round after the semifinal.

    Attributes
    ----------
    round_type : str
        Type tag of the generated round.
    tables : tuple of StageTable
        Tables of the round, in table id order.
    ranked_by_placement : bool
        Whether players knocked out here are ranked by their finishing
        position in this round in the final standings (otherwise by
        cumulative standings).
    """

    round_type: RoundType
    tables: Tuple[StageTable, ...]
    ranked_by_placement: bool = False


@dataclass(frozen=True)
class BracketTemplate:
    """A complete elimination bracket for one top cut size."""

    cut_size: int
    seed_tables: Tuple[SeedTable, ...]
    stages: Tuple[Stage, ...]

    def __post_init__(self) -> None:
        self.check()

    @property
    def stage_count(self) -> int:
        """Number of rounds in the bracket, semifinal included."""
        return len(self.stages) + 1

    @property
    def final_stage(self) -> int:
        return self.stage_count - 1

    def round_type(self, stage: int) -> RoundType:
        if stage == SEMIFINAL_STAGE:
            return ROUND_SEMIFINAL
        return self.stages[stage - 1].round_type

    def table_count(self, stage: int) -> int:
        if stage == SEMIFINAL_STAGE:
            return len(self.seed_tables)
        return len(self.stages[stage - 1].tables)

    def table_labels(self, stage: int) -> List[str]:
        if stage == SEMIFINAL_STAGE:
            return [t.label for t in self.seed_tables]
        return [t.label for t in self.stages[stage - 1].tables]

    def table_size(self, stage: int, table: int) -> int:
        if stage == SEMIFINAL_STAGE:
            return len(self.seed_tables[table].seeds)
        return self.stages[stage - 1].tables[table].size

    def advancing_positions(self, stage: int, table: int) -> Set[int]:
        """Finishing positions of a table that some later table draws from."""
        advancing: Set[int] = set()
        for later in self.stages:
            for stage_table in later.tables:
                for source in stage_table.sources:
                    if source.stage == stage and source.table == table:
                        advancing.update(source.positions)
        return advancing

    def eliminated_positions(self, stage: int, table: int) -> List[int]:
        """Finishing positions of a table that are knocked out.

        Every position of the final stage is terminal.
        """
        size = self.table_size(stage, table)
        advancing = self.advancing_positions(stage, table)
        return [p for p in range(1, size + 1) if p not in advancing]

    def check(self) -> None:
        """Validate the template.

        Raises:
            InvalidConfigurationException: If seeds do not cover 1..cut_size exactly
                once, a source points forward or is reused, a table has an
                unsupported size, or the bracket does not end in a single
                grand final table
        """
        seeds = [s for table in self.seed_tables for s in table.seeds]
        if sorted(seeds) != list(range(1, self.cut_size + 1)):
            raise InvalidConfigurationException(
                f"Top {self.cut_size} seed tables must cover seeds 1-{self.cut_size} once"
            )

        used: Dict[Tuple[int, int, int], str] = {}
        for index, stage in enumerate(self.stages, start=1):
            for stage_table in stage.tables:
                if stage_table.size not in (DESCENT_TABLE_SIZE, TABLE_SIZE):
                    raise InvalidConfigurationException(
                        f"{stage_table.label} seats {stage_table.size} players"
                    )
                for source in stage_table.sources:
                    if not 0 <= source.stage < index:
                        raise InvalidConfigurationException(
                            f"{stage_table.label} draws from stage {source.stage}"
                        )
                    if not 0 <= source.table < self.table_count(source.stage):
                        raise InvalidConfigurationException(
                            f"{stage_table.label} draws from missing table {source.table}"
                        )
                    for position in source.positions:
                        key = (source.stage, source.table, position)
                        if key in used:
                            raise InvalidConfigurationException(
                                f"{stage_table.label} and {used[key]} both draw "
                                f"position {position} of stage {source.stage} "
                                f"table {source.table}"
                            )
                        used[key] = stage_table.label

        if not self.stages or self.stages[-1].round_type != ROUND_GRAND_FINAL:
            raise InvalidConfigurationException("A bracket must end with the grand final")
        if len(self.stages[-1].tables) != 1:
            raise InvalidConfigurationException("The grand final is a single table")


def _top(stage: int, table: int, *positions: int) -> Advancement:
    return Advancement(stage=stage, table=table, positions=positions)


# Top 16: elite seeds get a second chance through the redemption round,
# challenger seeds only advance by winning their semifinal table.
TOP_16_TEMPLATE = BracketTemplate(
    cut_size=TOP_CUT_16,
    seed_tables=(
        SeedTable("Elite Table A", (1, 4, 5, 8)),
        SeedTable("Elite Table B", (2, 3, 6, 7)),
        SeedTable("Challenger Table C", (9, 10, 11, 12)),
        SeedTable("Challenger Table D", (13, 14, 15, 16)),
    ),
    stages=(
        Stage(
            round_type=ROUND_REDEMPTION,
            tables=(
                StageTable("Redemption 1", (_top(0, 0, 2, 3, 4), _top(0, 2, 1))),
                StageTable("Redemption 2", (_top(0, 1, 2, 3, 4), _top(0, 3, 1))),
            ),
            ranked_by_placement=True,
        ),
        Stage(
            round_type=ROUND_GRAND_FINAL,
            tables=(
                StageTable(
                    "Grand Final",
                    (_top(0, 0, 1), _top(0, 1, 1), _top(1, 0, 1), _top(1, 1, 1)),
                ),
            ),
        ),
    ),
)

# Top 8: both semifinal tables split into a winners final (top two) and a
# losers final (bottom two); the top two of each reach the grand final.
TOP_8_TEMPLATE = BracketTemplate(
    cut_size=TOP_CUT_8,
    seed_tables=(
        SeedTable("Semifinal A", (1, 4, 5, 8)),
        SeedTable("Semifinal B", (2, 3, 6, 7)),
    ),
    stages=(
        Stage(
            round_type=ROUND_REDEMPTION,
            tables=(
                StageTable("Winners Final", (_top(0, 0, 1, 2), _top(0, 1, 1, 2))),
                StageTable("Losers Final", (_top(0, 0, 3, 4), _top(0, 1, 3, 4))),
            ),
        ),
        Stage(
            round_type=ROUND_GRAND_FINAL,
            tables=(
                StageTable("Grand Final", (_top(1, 0, 1, 2), _top(1, 1, 1, 2))),
            ),
        ),
    ),
)

TEMPLATES = {
    TOP_CUT_8: TOP_8_TEMPLATE,
    TOP_CUT_16: TOP_16_TEMPLATE,
}


def get_template(cut_size: int) -> BracketTemplate:
    """Look up the bracket template for a top cut size.

    Raises:
        InvalidConfigurationException: If the cut size is not supported
    """
    try:
        return TEMPLATES[cut_size]
    except KeyError:
        raise InvalidConfigurationException(
            f"No bracket for a top {cut_size}; supported: {sorted(TEMPLATES)}"
        ) from None
