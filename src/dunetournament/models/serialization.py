"""Helpers for reading persisted tournament data."""

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

from typing import Any, Dict, List, Mapping

from dunetournament.exceptions import InvalidStateException

_MISSING = object()


def require_mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise InvalidStateException(f"{what} must be an object, got {type(data).__name__}")
    return data


def require_list(data: Mapping[str, Any], key: str, what: str, default: Any = _MISSING) -> List[Any]:
    value = data.get(key, default)
    if value is _MISSING:
        raise InvalidStateException(f"{what} is missing '{key}'")
    if not isinstance(value, (list, tuple)):
        raise InvalidStateException(f"{what}.{key} must be a list")
    return list(value)


def require_str(data: Mapping[str, Any], key: str, what: str, default: Any = _MISSING) -> str:
    value = data.get(key, default)
    if value is _MISSING:
        raise InvalidStateException(f"{what} is missing '{key}'")
    if not isinstance(value, str):
        raise InvalidStateException(f"{what}.{key} must be a string")
    return value


def require_int(data: Mapping[str, Any], key: str, what: str, default: Any = _MISSING) -> int:
    value = data.get(key, default)
    if value is _MISSING:
        raise InvalidStateException(f"{what} is missing '{key}'")
    # bool is an int subclass, but never a valid count or score
    if isinstance(value, bool) or not isinstance(value, int):
        if isinstance(value, float) and value.is_integer():
            return int(value)
        raise InvalidStateException(f"{what}.{key} must be an integer")
    return value


def require_bool(data: Mapping[str, Any], key: str, what: str, default: Any = _MISSING) -> bool:
    value = data.get(key, default)
    if value is _MISSING:
        raise InvalidStateException(f"{what} is missing '{key}'")
    if not isinstance(value, bool):
        raise InvalidStateException(f"{what}.{key} must be a boolean")
    return value


def drop_none(data: Dict[str, Any]) -> Dict[str, Any]:
    """Remove optional keys that are unset."""
    return {k: v for k, v in data.items() if v is not None}
