"""Data model for tournament round."""

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

from dataclasses import dataclass, replace
from typing import Any, Dict, Tuple

from dunetournament.constants import ELIMINATION_ROUND_TYPES, ROUND_TYPES
from dunetournament.exceptions import InvalidStateException, TableNotFoundException
from dunetournament.models.serialization import (
    require_int,
    require_list,
    require_mapping,
    require_str,
)
from dunetournament.models.tournament.table import Table
from dunetournament.type_hints import RoundType


@dataclass(frozen=True)
class Round:
    """Container for all tables played simultaneously in one round.

    Attributes
    ----------
    number : int
        Round number (1-indexed), unique and increasing within a tournament.
    type : str
        One of "qualifying", "semifinal", "winners-final" (redemption),
        "losers-final" or "grand-final".
    tables : tuple of Table
        Tables of the round, ids 1..k.
    """

    number: int
    type: RoundType
    tables: Tuple[Table, ...] = ()

    @property
    def is_complete(self) -> bool:
        """True once every table of the round has its results."""
        return bool(self.tables) and all(t.is_complete for t in self.tables)

    @property
    def is_elimination(self) -> bool:
        return self.type in ELIMINATION_ROUND_TYPES

    @property
    def player_ids(self) -> Tuple[str, ...]:
        return tuple(pid for table in self.tables for pid in table.player_ids)

    def get_table(self, table_id: int) -> Table:
        """Get a table by id.

        Raises:
            TableNotFoundException: If the round has no such table
        """
        for table in self.tables:
            if table.id == table_id:
                return table
        raise TableNotFoundException(
            f"Round {self.number} has no table {table_id}"
        )

    def replace_table(self, table: Table) -> "Round":
        """Return a copy with the table of the same id replaced."""
        self.get_table(table.id)
        return replace(
            self,
            tables=tuple(table if t.id == table.id else t for t in self.tables),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize round data to dictionary."""
        return {
            "number": self.number,
            "type": self.type,
            "tables": [t.to_dict() for t in self.tables],
            "isComplete": self.is_complete,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Round":
        """Deserialize round data from dictionary.

        ``isComplete`` is derived from the tables and not read back.
        """
        data = require_mapping(data, "round")
        round_type = require_str(data, "type", "round", default="qualifying")
        if round_type not in ROUND_TYPES:
            raise InvalidStateException(f"Unknown round type: {round_type!r}")
        tables = tuple(Table.from_dict(t) for t in require_list(data, "tables", "round"))
        table_ids = [t.id for t in tables]
        if len(set(table_ids)) != len(table_ids):
            raise InvalidStateException("round.tables contains duplicate table ids")
        return cls(
            number=require_int(data, "number", "round"),
            type=round_type,
            tables=tables,
        )
