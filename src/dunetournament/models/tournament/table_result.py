"""Table result data class."""

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
from typing import Any, Dict, Optional

from dunetournament.models.serialization import (
    drop_none,
    require_int,
    require_mapping,
    require_str,
)


@dataclass(frozen=True)
class TableResult:
    """Represents one player's result at a single table.

    Attributes
    ----------
    player_id : str
        ID of the player.
    position : int
        Finishing position, 1-based and unique within the table.
    vp : int
        Raw victory point score reached in the game.
    leader : str or None
        Leader played, kept as metadata only.
    """

    player_id: str
    position: int
    vp: int
    leader: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize table result to dictionary."""
        return drop_none(
            {
                "playerId": self.player_id,
                "position": self.position,
                "vp": self.vp,
                "leader": self.leader,
            }
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TableResult":
        """Deserialize table result from dictionary."""
        data = require_mapping(data, "result")
        leader = data.get("leader")
        return cls(
            player_id=require_str(data, "playerId", "result"),
            position=require_int(data, "position", "result"),
            vp=require_int(data, "vp", "result"),
            leader=leader if isinstance(leader, str) and leader else None,
        )
