"""Shared helpers for Dune Tournament."""

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

import logging
import os
from typing import Iterable

from dunetournament.constants import DEFAULT_LOG_LEVEL, LOG_LEVEL_ENV_VAR

_PACKAGE_LOGGER = "dunetournament"
_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _configure_package_logger() -> None:
    """Attach a single stream handler to the package logger."""
    package_logger = logging.getLogger(_PACKAGE_LOGGER)
    if package_logger.handlers:
        return

    level_name = os.environ.get(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.WARNING

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    package_logger.addHandler(handler)
    package_logger.setLevel(level)


def setup_logger(name: str) -> logging.Logger:
    """Return the logger for a module, configuring the package logger once.

    Args:
        name: Module name, usually ``__name__``

    Returns:
        Logger that propagates to the ``dunetournament`` package logger
    """
    _configure_package_logger()
    return logging.getLogger(name)


def next_player_id(existing_ids: Iterable[str]) -> str:
    """Return the next sequential player id.

    Ids are numeric strings; non-numeric ids (e.g. from imported files)
    are ignored when looking for the highest one.
    """
    highest = 0
    for player_id in existing_ids:
        if player_id.isdigit():
            highest = max(highest, int(player_id))
    return str(highest + 1)
