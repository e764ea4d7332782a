"""A player registered in a Dune Imperium tournament."""

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

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, FrozenSet, Iterable, List, Tuple

from dunetournament.exceptions import InvalidStateException
from dunetournament.models.serialization import (
    require_int,
    require_list,
    require_mapping,
    require_str,
)


@dataclass(frozen=True)
class Player:
    """Represents a player in the tournament.

    Players are immutable; scoring produces new instances through
    :meth:`with_game` and :meth:`without_game`.

    Attributes
    ----------
    id : str
        Unique identifier for the player.
    name : str
        Display name.
    points : int
        Tournament points accrued (5/3/2/1 per finishing position).
    total_vp : int
        Sum of in-game victory points.
    efficiency : int
        Sum of finishing positions across all games; lower is better.
    opponent_history : tuple of str
        One entry per co-seated player per game, in the order games were
        scored. Kept with multiplicity so a scored game can be removed again.
    """

    id: str
    name: str
    points: int = 0
    total_vp: int = 0
    efficiency: int = 0
    opponent_history: Tuple[str, ...] = ()

    @property
    def opponents(self) -> FrozenSet[str]:
        """Ids of every player already faced."""
        return frozenset(self.opponent_history)

    def has_faced(self, player_id: str) -> bool:
        """Check if this player has already shared a table with ``player_id``."""
        return player_id in self.opponent_history

    def with_game(
        self, points: int, vp: int, position: int, co_player_ids: Iterable[str]
    ) -> "Player":
        """Return a copy with one scored game added."""
        others = tuple(pid for pid in co_player_ids if pid != self.id)
        return replace(
            self,
            points=self.points + points,
            total_vp=self.total_vp + vp,
            efficiency=self.efficiency + position,
            opponent_history=self.opponent_history + others,
        )

    def without_game(
        self, points: int, vp: int, position: int, co_player_ids: Iterable[str]
    ) -> "Player":
        """Return a copy with one scored game removed (inverse of :meth:`with_game`)."""
        history: List[str] = list(self.opponent_history)
        for pid in co_player_ids:
            if pid == self.id:
                continue
            # drop the most recent occurrence
            for i in range(len(history) - 1, -1, -1):
                if history[i] == pid:
                    del history[i]
                    break
        return replace(
            self,
            points=self.points - points,
            total_vp=self.total_vp - vp,
            efficiency=self.efficiency - position,
            opponent_history=tuple(history),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize player to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "points": self.points,
            "totalVP": self.total_vp,
            "efficiency": self.efficiency,
            "opponents": list(dict.fromkeys(self.opponent_history)),
            "opponentHistory": list(self.opponent_history),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Player":
        """Deserialize player from dictionary.

        Files written by older versions only carry ``opponents``; it is used
        as the history in that case.
        """
        data = require_mapping(data, "player")
        if "opponentHistory" in data:
            history = require_list(data, "opponentHistory", "player")
        else:
            history = require_list(data, "opponents", "player", default=[])
        if not all(isinstance(pid, str) for pid in history):
            raise InvalidStateException("player.opponents must only contain player ids")
        return cls(
            id=require_str(data, "id", "player"),
            name=require_str(data, "name", "player"),
            points=require_int(data, "points", "player", default=0),
            total_vp=require_int(data, "totalVP", "player", default=0),
            efficiency=require_int(data, "efficiency", "player", default=0),
            opponent_history=tuple(history),
        )
