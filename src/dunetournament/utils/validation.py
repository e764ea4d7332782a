"""Validation utilities for Dune Tournament.

This module provides reusable validation functions with consistent error handling.
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

from typing import TYPE_CHECKING, Iterable, Optional, Sequence

from dunetournament.constants import DESCENT_TABLE_SIZE, TABLE_SIZE
from dunetournament.exceptions import (
    InvalidResultException,
    PlayerNameValidationException,
)

if TYPE_CHECKING:
    from dunetournament.models.tournament import TableResult


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable error message if invalid
        sanitized_value: Cleaned/normalized value if valid
    """

    def __init__(
        self,
        is_valid: bool,
        error_message: Optional[str] = None,
        sanitized_value: Optional[str] = None,
    ):
        self.is_valid = is_valid
        self.error_message = error_message
        self.sanitized_value = sanitized_value

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return f"ValidationResult(VALID, {self.sanitized_value!r})"
        return f"ValidationResult(INVALID, {self.error_message!r})"


# ========== Table Result Validation ==========


def validate_table_result(
    results: Sequence["TableResult"], table_size: int
) -> ValidationResult:
    """Validate the reported results of one table.

    Every position 1..table_size must be present exactly once, each player
    may only appear once and no victory point score may be negative.

    Args:
        results: Reported results, one per seated player
        table_size: Number of players seated at the table (3 or 4)

    Returns:
        ValidationResult with validation status

    Example:
        >>> result = validate_table_result(results, 4)
        >>> if not result:
        ...     print(result.error_message)
    """
    if table_size not in (DESCENT_TABLE_SIZE, TABLE_SIZE):
        return ValidationResult(
            is_valid=False,
            error_message=f"Tables seat 3 or 4 players, not {table_size}",
        )

    if len(results) != table_size:
        return ValidationResult(
            is_valid=False,
            error_message=(
                f"Each table must have exactly {table_size} results, "
                f"got {len(results)}"
            ),
        )

    player_ids = [r.player_id for r in results]
    if len(set(player_ids)) != len(player_ids):
        return ValidationResult(
            is_valid=False,
            error_message="A player can only have one result per table",
        )

    positions = [r.position for r in results]
    if len(set(positions)) != len(positions):
        return ValidationResult(
            is_valid=False,
            error_message="All positions must be unique",
        )

    expected = set(range(1, table_size + 1))
    if set(positions) != expected:
        return ValidationResult(
            is_valid=False,
            error_message=f"Must have one player in each position (1-{table_size})",
        )

    for result in results:
        if result.vp < 0:
            return ValidationResult(
                is_valid=False,
                error_message=f"Victory points cannot be negative ({result.player_id})",
            )

    return ValidationResult(is_valid=True)


def validate_table_result_strict(
    results: Sequence["TableResult"], table_size: int
) -> None:
    """Validate table results and raise exception if invalid.

    Raises:
        InvalidResultException: If the results are invalid
    """
    result = validate_table_result(results, table_size)
    if not result.is_valid:
        raise InvalidResultException(result.error_message)


# ========== Player Name Validation ==========


def validate_player_name(
    name: Optional[str], existing_names: Iterable[str] = ()
) -> ValidationResult:
    """Validate a player name for registration.

    Names are trimmed; they must not be empty and must be unique
    (case-insensitive) among the already registered names.
    """
    if not name or not name.strip():
        return ValidationResult(
            is_valid=False,
            error_message="Player names cannot be empty",
        )

    name = name.strip()
    taken = {n.strip().lower() for n in existing_names}
    if name.lower() in taken:
        return ValidationResult(
            is_valid=False,
            error_message=f"Player name already registered: {name}",
        )

    return ValidationResult(is_valid=True, sanitized_value=name)


def validate_player_name_strict(
    name: Optional[str], existing_names: Iterable[str] = ()
) -> str:
    """Validate a player name and return its sanitized form.

    Raises:
        PlayerNameValidationException: If the name is invalid
    """
    result = validate_player_name(name, existing_names)
    if not result.is_valid:
        raise PlayerNameValidationException(result.error_message)
    return result.sanitized_value
