"""Immutable data models for players, tables, rounds and tournament state."""

from dunetournament.models.player import Player
from dunetournament.models.tournament import (
    Round,
    Table,
    TableResult,
    TournamentMetadata,
    TournamentSettings,
    TournamentState,
)

__all__ = [
    "Player",
    "Round",
    "Table",
    "TableResult",
    "TournamentMetadata",
    "TournamentSettings",
    "TournamentState",
]
