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

# --- Constants ---
SAVE_FILE_EXTENSION = ".json"
STATE_VERSION = "1.0.0"
DEFAULT_TOURNAMENT_NAME = "Dune Bloodlines Open"

# Tournament points awarded per finishing position.
# 3-player tables only use positions 1-3, so no position-4 point exists there.
POINTS_BY_POSITION = {
    1: 5,
    2: 3,
    3: 2,
    4: 1,
}

# Table sizes
TABLE_SIZE = 4
DESCENT_TABLE_SIZE = 3
MIN_PLAYERS = 4

# Number of 3-player tables used for each remainder of N mod 4
DESCENT_TABLES_BY_REMAINDER = {
    0: 0,
    1: 3,
    2: 2,
    3: 1,
}

# Tournament phases (forward-only, except via reset)
PHASE_REGISTRATION = "registration"
PHASE_QUALIFYING = "qualifying"
PHASE_TOP_CUT = "top-cut"
PHASE_FINISHED = "finished"

PHASE_ORDER = [
    PHASE_REGISTRATION,
    PHASE_QUALIFYING,
    PHASE_TOP_CUT,
    PHASE_FINISHED,
]

# Older saves stored the top-cut phase as "top8"
LEGACY_PHASE_ALIASES = {"top8": PHASE_TOP_CUT}

# Round types
ROUND_QUALIFYING = "qualifying"
ROUND_SEMIFINAL = "semifinal"
ROUND_REDEMPTION = "winners-final"  # Redemption round, stored as winners-final
ROUND_LOSERS_FINAL = "losers-final"
ROUND_GRAND_FINAL = "grand-final"

ROUND_TYPES = [
    ROUND_QUALIFYING,
    ROUND_SEMIFINAL,
    ROUND_REDEMPTION,
    ROUND_LOSERS_FINAL,
    ROUND_GRAND_FINAL,
]

ELIMINATION_ROUND_TYPES = [
    ROUND_SEMIFINAL,
    ROUND_REDEMPTION,
    ROUND_LOSERS_FINAL,
    ROUND_GRAND_FINAL,
]

# Settings defaults
DEFAULT_QUALIFYING_ROUNDS = 4
TOP_CUT_8 = 8
TOP_CUT_16 = 16
SUPPORTED_TOP_CUTS = [TOP_CUT_8, TOP_CUT_16]
DEFAULT_TOP_CUT = TOP_CUT_16

# Logging
LOG_LEVEL_ENV_VAR = "DUNETOURNAMENT_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
