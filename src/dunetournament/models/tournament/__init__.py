from dunetournament.models.tournament.round_data import Round
from dunetournament.models.tournament.table import Table
from dunetournament.models.tournament.table_result import TableResult
from dunetournament.models.tournament.tournament_config import (
    TournamentMetadata,
    TournamentSettings,
)
from dunetournament.models.tournament.tournament_state import TournamentState

__all__ = [
    "Round",
    "Table",
    "TableResult",
    "TournamentMetadata",
    "TournamentSettings",
    "TournamentState",
]
