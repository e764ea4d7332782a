"""TournamentState - the aggregate root of the engine.

Every engine operation takes a TournamentState and returns a new one; the
input is never modified. Records are replaced by id rather than copied as
a whole tree, so unchanged players, rounds and tables are shared between
the old and the new snapshot.
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

import json
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, Optional, Tuple

from dunetournament.constants import (
    LEGACY_PHASE_ALIASES,
    PHASE_ORDER,
    PHASE_REGISTRATION,
    ROUND_QUALIFYING,
)
from dunetournament.exceptions import (
    InvalidStateException,
    PlayerNotFoundException,
    RoundNotFoundException,
)
from dunetournament.models.player import Player
from dunetournament.models.serialization import (
    require_list,
    require_mapping,
    require_str,
)
from dunetournament.models.tournament.round_data import Round
from dunetournament.models.tournament.tournament_config import (
    TournamentMetadata,
    TournamentSettings,
)
from dunetournament.type_hints import Phase
from dunetournament.utils.validation import validate_table_result


@dataclass(frozen=True)
class TournamentState:
    """Full state of one tournament.

    Attributes
    ----------
    metadata : TournamentMetadata
        Name, timestamp and format version.
    players : tuple of Player
        Full roster in registration order.
    rounds : tuple of Round
        Rounds in play order, qualifying rounds first.
    phase : str
        "registration", "qualifying", "top-cut" or "finished".
    settings : TournamentSettings
        Number of qualifying rounds and top cut size.
    """

    metadata: TournamentMetadata = field(default_factory=TournamentMetadata)
    players: Tuple[Player, ...] = ()
    rounds: Tuple[Round, ...] = ()
    phase: Phase = PHASE_REGISTRATION
    settings: TournamentSettings = field(default_factory=TournamentSettings)

    # ========== Lookups ==========

    @property
    def name(self) -> str:
        return self.metadata.tournament_name

    @property
    def current_round(self) -> int:
        """Number of the latest round, or 0 before the first round."""
        return self.rounds[-1].number if self.rounds else 0

    @property
    def last_round(self) -> Optional[Round]:
        return self.rounds[-1] if self.rounds else None

    @property
    def player_map(self) -> Dict[str, Player]:
        return {p.id: p for p in self.players}

    def get_player(self, player_id: str) -> Player:
        """Get a player by id.

        Raises:
            PlayerNotFoundException: If no such player is registered
        """
        for player in self.players:
            if player.id == player_id:
                return player
        raise PlayerNotFoundException(f"Unknown player id: {player_id}")

    def get_round(self, round_index: int) -> Round:
        """Get a round by its 0-based index.

        Raises:
            RoundNotFoundException: If the index is out of range
        """
        if 0 <= round_index < len(self.rounds):
            return self.rounds[round_index]
        raise RoundNotFoundException(
            f"Round index {round_index} does not exist "
            f"({len(self.rounds)} rounds played)"
        )

    def rounds_of_type(self, *round_types: str) -> List[Round]:
        return [r for r in self.rounds if r.type in round_types]

    @property
    def qualifying_rounds(self) -> List[Round]:
        return self.rounds_of_type(ROUND_QUALIFYING)

    # ========== Record replacement ==========

    def replace_players(self, players: Iterable[Player]) -> "TournamentState":
        """Return a copy with several players replaced, keeping roster order."""
        updates = {p.id: p for p in players}
        missing = set(updates) - {p.id for p in self.players}
        if missing:
            raise PlayerNotFoundException(f"Unknown player ids: {sorted(missing)}")
        return replace(
            self, players=tuple(updates.get(p.id, p) for p in self.players)
        )

    def replace_round(self, round_index: int, round_: Round) -> "TournamentState":
        """Return a copy with the round at ``round_index`` replaced."""
        self.get_round(round_index)
        rounds = list(self.rounds)
        rounds[round_index] = round_
        return replace(self, rounds=tuple(rounds))

    def with_round(self, round_: Round) -> "TournamentState":
        """Return a copy with ``round_`` appended."""
        if round_.number <= self.current_round:
            raise InvalidStateException(
                f"Round {round_.number} must come after round {self.current_round}"
            )
        return replace(self, rounds=self.rounds + (round_,))

    # ========== Serialization ==========

    def to_dict(self) -> Dict[str, Any]:
        """Serialize tournament state to dictionary.

        Returns:
            Dictionary in the persisted JSON shape
        """
        return {
            "metadata": self.metadata.to_dict(),
            "players": [p.to_dict() for p in self.players],
            "rounds": [r.to_dict() for r in self.rounds],
            "phase": self.phase,
            "currentRound": self.current_round,
            "settings": self.settings.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentState":
        """Deserialize tournament state from dictionary.

        Args:
            data: Dictionary in the persisted JSON shape

        Returns:
            Reconstructed TournamentState

        Raises:
            InvalidStateException: If the data is structurally invalid
        """
        data = require_mapping(data, "tournament")
        for key in ("metadata", "players", "settings"):
            if key not in data:
                raise InvalidStateException(f"tournament is missing '{key}'")

        phase = require_str(data, "phase", "tournament", default=PHASE_REGISTRATION)
        phase = LEGACY_PHASE_ALIASES.get(phase, phase)
        if phase not in PHASE_ORDER:
            raise InvalidStateException(f"Unknown tournament phase: {phase!r}")

        players = tuple(
            Player.from_dict(p) for p in require_list(data, "players", "tournament")
        )
        rounds = tuple(
            Round.from_dict(r)
            for r in require_list(data, "rounds", "tournament", default=[])
        )
        state = cls(
            metadata=TournamentMetadata.from_dict(data["metadata"]),
            players=players,
            rounds=rounds,
            phase=phase,
            settings=TournamentSettings.from_dict(data["settings"]),
        )
        state.check_integrity()
        return state

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_json(cls, text: str) -> "TournamentState":
        """Parse a JSON document produced by :meth:`to_json`."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise InvalidStateException(f"Tournament file is not valid JSON: {e}") from e
        return cls.from_dict(data)

    def check_integrity(self) -> None:
        """Check cross-record invariants.

        Raises:
            InvalidStateException: On duplicate ids, unknown players,
                non-increasing round numbers or malformed table results
        """
        ids = [p.id for p in self.players]
        if len(set(ids)) != len(ids):
            raise InvalidStateException("Duplicate player ids in roster")
        known = set(ids)

        previous = 0
        for round_ in self.rounds:
            if round_.number <= previous:
                raise InvalidStateException(
                    f"Round numbers must increase (round {round_.number} "
                    f"after round {previous})"
                )
            previous = round_.number

            seated = round_.player_ids
            if len(set(seated)) != len(seated):
                raise InvalidStateException(
                    f"A player is seated twice in round {round_.number}"
                )
            unknown = set(seated) - known
            if unknown:
                raise InvalidStateException(
                    f"Round {round_.number} seats unknown players: {sorted(unknown)}"
                )
            for table in round_.tables:
                where = f"Round {round_.number} table {table.id}"
                if not table.results:
                    if table.is_complete:
                        raise InvalidStateException(
                            f"{where} is complete without results"
                        )
                    continue
                check = validate_table_result(table.results, table.size)
                if not check:
                    raise InvalidStateException(f"{where}: {check.error_message}")
                reported = {r.player_id for r in table.results}
                if reported != set(table.player_ids):
                    raise InvalidStateException(
                        f"{where} results must cover exactly the seated players"
                    )
