from dunetournament.scoring.result_recorder import (
    apply_round_results,
    apply_table_results,
    position_points,
    revert_table_results,
)

__all__ = [
    "apply_round_results",
    "apply_table_results",
    "position_points",
    "revert_table_results",
]
