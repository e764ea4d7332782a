from dunetournament.pairing.swiss_tables import (
    count_repeat_pairings,
    create_tables,
    generate_qualifying_round,
    table_sizes,
)

__all__ = [
    "count_repeat_pairings",
    "create_tables",
    "generate_qualifying_round",
    "table_sizes",
]
