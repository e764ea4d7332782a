"""Exceptions for use in Dune Tournament"""

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


# ========== Base Application Exception ==========


class DuneTournamentException(Exception):
    """Base exception for all Dune Tournament errors.

    All engine errors inherit from this class, so a caller can catch every
    recoverable engine failure with a single except clause and re-prompt
    the organizer.
    """

    pass


# ========== Pairing Exceptions ==========


class PairingException(DuneTournamentException):
    """Base exception for pairing-related errors."""

    pass


class InvalidPairingException(PairingException):
    """Raised when the players cannot be split into 3 and 4 player tables."""

    pass


# ========== Tournament Exceptions ==========


class TournamentException(DuneTournamentException):
    """Base exception for tournament-related errors."""

    pass


class TournamentStateException(TournamentException):
    """Raised when tournament is in an invalid state for the requested operation."""

    pass


class InvalidStateException(TournamentException):
    """Raised when a serialized tournament state is structurally invalid."""

    pass


class RoundNotFoundException(TournamentException):
    """Raised when a requested round does not exist."""

    pass


class TableNotFoundException(TournamentException):
    """Raised when a requested table does not exist in its round."""

    pass


# ========== Bracket Exceptions ==========


class BracketException(DuneTournamentException):
    """Base exception for elimination bracket errors."""

    pass


class InsufficientPlayersException(BracketException):
    """Raised when fewer players than the top cut requires are available."""

    pass


class RoundIncompleteException(BracketException):
    """Raised when the prerequisite round of a bracket stage is not complete."""

    pass


# ========== Player Exceptions ==========


class PlayerException(DuneTournamentException):
    """Base exception for player-related errors."""

    pass


class PlayerNotFoundException(PlayerException):
    """Raised when a requested player cannot be found."""

    pass


# ========== Result Exceptions ==========


class ResultException(DuneTournamentException):
    """Base exception for result recording errors."""

    pass


class InvalidResultException(ResultException):
    """Raised when a table result is invalid (e.g., duplicate positions)."""

    pass


# ========== Validation Exceptions ==========


class ValidationException(DuneTournamentException):
    """Base exception for validation errors."""

    pass


class PlayerNameValidationException(ValidationException):
    """Raised when a player name is empty or already registered."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(DuneTournamentException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when a bracket template or setting is invalid."""

    pass
