"""TournamentSettings and TournamentMetadata data classes."""

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

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict

from dateutil import parser as date_parser

from dunetournament.constants import (
    DEFAULT_QUALIFYING_ROUNDS,
    DEFAULT_TOP_CUT,
    DEFAULT_TOURNAMENT_NAME,
    STATE_VERSION,
    SUPPORTED_TOP_CUTS,
)
from dunetournament.exceptions import InvalidStateException
from dunetournament.models.serialization import (
    require_bool,
    require_int,
    require_mapping,
    require_str,
)


def utc_now() -> str:
    """Current time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class TournamentSettings:
    """Tournament configuration settings.

    Attributes
    ----------
    total_qualifying_rounds : int
        Number of Swiss qualifying rounds before the top cut.
    top_cut : int
        Size of the elimination bracket, 8 or 16.
    dramatic_reveal : bool
        Display hint for the UI; not used by the engine.
    """

    total_qualifying_rounds: int = DEFAULT_QUALIFYING_ROUNDS
    top_cut: int = DEFAULT_TOP_CUT
    dramatic_reveal: bool = False

    def __post_init__(self) -> None:
        if self.top_cut not in SUPPORTED_TOP_CUTS:
            raise InvalidStateException(
                f"Top cut must be one of {SUPPORTED_TOP_CUTS}, not {self.top_cut}"
            )
        if self.total_qualifying_rounds < 1:
            raise InvalidStateException("At least one qualifying round is required")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize settings to dictionary."""
        return {
            "totalQualifyingRounds": self.total_qualifying_rounds,
            "topCut": self.top_cut,
            "dramaticReveal": self.dramatic_reveal,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentSettings":
        """Deserialize settings from dictionary."""
        data = require_mapping(data, "settings")
        return cls(
            total_qualifying_rounds=require_int(
                data, "totalQualifyingRounds", "settings", DEFAULT_QUALIFYING_ROUNDS
            ),
            top_cut=require_int(data, "topCut", "settings", DEFAULT_TOP_CUT),
            dramatic_reveal=require_bool(data, "dramaticReveal", "settings", False),
        )


@dataclass(frozen=True)
class TournamentMetadata:
    """Descriptive data about a tournament."""

    tournament_name: str = DEFAULT_TOURNAMENT_NAME
    timestamp: str = field(default_factory=utc_now)
    version: str = STATE_VERSION

    @property
    def timestamp_datetime(self) -> datetime:
        return date_parser.isoparse(self.timestamp)

    def touched(self) -> "TournamentMetadata":
        """Return a copy with a fresh timestamp."""
        return TournamentMetadata(
            tournament_name=self.tournament_name,
            timestamp=utc_now(),
            version=self.version,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize metadata to dictionary."""
        return {
            "version": self.version,
            "timestamp": self.timestamp,
            "tournamentName": self.tournament_name,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentMetadata":
        """Deserialize metadata from dictionary.

        Raises:
            InvalidStateException: If the timestamp is not ISO-8601
        """
        data = require_mapping(data, "metadata")
        timestamp = require_str(data, "timestamp", "metadata", default="")
        if timestamp:
            try:
                date_parser.isoparse(timestamp)
            except ValueError as e:
                raise InvalidStateException(
                    f"metadata.timestamp is not an ISO-8601 date: {timestamp!r}"
                ) from e
        else:
            timestamp = utc_now()
        return cls(
            tournament_name=require_str(
                data, "tournamentName", "metadata", DEFAULT_TOURNAMENT_NAME
            ),
            timestamp=timestamp,
            version=require_str(data, "version", "metadata", STATE_VERSION),
        )
