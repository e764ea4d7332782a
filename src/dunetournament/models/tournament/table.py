"""Data model for a single game table."""

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
from typing import Any, Dict, Iterable, Optional, Tuple

from dunetournament.exceptions import InvalidStateException
from dunetournament.models.serialization import (
    require_bool,
    require_int,
    require_list,
    require_mapping,
)
from dunetournament.models.tournament.table_result import TableResult


@dataclass(frozen=True)
class Table:
    """A group of 3 or 4 players assigned to play one game together.

    Attributes
    ----------
    id : int
        Table number, unique within its round (1-indexed).
    player_ids : tuple of str
        Seated players, in seat order.
    results : tuple of TableResult
        Reported results. Empty until the organizer enters them.
    is_complete : bool
        Whether the results have been entered and scored.
    label : str or None
        Bracket name of the table (e.g. "Elite Table A"); None for
        qualifying tables.
    """

    id: int
    player_ids: Tuple[str, ...]
    results: Tuple[TableResult, ...] = ()
    is_complete: bool = False
    label: Optional[str] = None

    @classmethod
    def create(
        cls, table_id: int, player_ids: Iterable[str], label: Optional[str] = None
    ) -> "Table":
        """Create an empty table awaiting results."""
        return cls(id=table_id, player_ids=tuple(player_ids), label=label)

    @property
    def size(self) -> int:
        return len(self.player_ids)

    def results_by_position(self) -> Tuple[TableResult, ...]:
        """Results sorted by finishing position (1st first)."""
        return tuple(sorted(self.results, key=lambda r: r.position))

    def player_at(self, position: int) -> str:
        """Return the id of the player who finished at ``position``."""
        for result in self.results:
            if result.position == position:
                return result.player_id
        raise KeyError(f"Table {self.id} has no result for position {position}")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize table to dictionary."""
        data: Dict[str, Any] = {
            "id": self.id,
            "playerIds": list(self.player_ids),
            "results": [r.to_dict() for r in self.results],
            "isComplete": self.is_complete,
        }
        if self.label is not None:
            data["label"] = self.label
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Table":
        """Deserialize table from dictionary."""
        data = require_mapping(data, "table")
        player_ids = require_list(data, "playerIds", "table")
        if not all(isinstance(pid, str) for pid in player_ids):
            raise InvalidStateException("table.playerIds must only contain player ids")
        if len(set(player_ids)) != len(player_ids):
            raise InvalidStateException("table.playerIds contains a player twice")
        label = data.get("label")
        return cls(
            id=require_int(data, "id", "table"),
            player_ids=tuple(player_ids),
            results=tuple(
                TableResult.from_dict(r)
                for r in require_list(data, "results", "table", default=[])
            ),
            is_complete=require_bool(data, "isComplete", "table", default=False),
            label=label if isinstance(label, str) else None,
        )
