"""Tournament lifecycle operations.

Each organizer action is a pure function from one TournamentState to the
next. The phase only moves forward (registration, qualifying, top cut,
finished); :func:`reset_tournament` is the only way back.
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

from dataclasses import replace
from typing import Optional, Sequence

from dunetournament.bracket.engine import generate_elimination_round
from dunetournament.constants import (
    DEFAULT_TOURNAMENT_NAME,
    PHASE_FINISHED,
    PHASE_ORDER,
    PHASE_QUALIFYING,
    PHASE_REGISTRATION,
    PHASE_TOP_CUT,
    ROUND_GRAND_FINAL,
    ROUND_QUALIFYING,
)
from dunetournament.exceptions import (
    InvalidResultException,
    RoundIncompleteException,
    TournamentStateException,
)
from dunetournament.models.player import Player
from dunetournament.models.tournament import (
    Round,
    TableResult,
    TournamentMetadata,
    TournamentSettings,
    TournamentState,
)
from dunetournament.pairing.swiss_tables import generate_qualifying_round, table_sizes
from dunetournament.scoring.result_recorder import (
    apply_table_results,
    revert_table_results,
)
from dunetournament.type_hints import Phase, Shuffler
from dunetournament.utils import next_player_id, setup_logger
from dunetournament.utils.validation import (
    validate_player_name_strict,
    validate_table_result_strict,
)

logger = setup_logger(__name__)


# ========== Helpers ==========


def _require_phase(state: TournamentState, *phases: Phase) -> None:
    if state.phase not in phases:
        raise TournamentStateException(
            f"Not allowed in the {state.phase} phase (needs {' or '.join(phases)})"
        )


def _advance_phase(state: TournamentState, phase: Phase) -> TournamentState:
    if PHASE_ORDER.index(phase) <= PHASE_ORDER.index(state.phase):
        raise TournamentStateException(
            f"Cannot move from {state.phase} back to {phase}"
        )
    logger.info("Tournament %r: %s -> %s", state.name, state.phase, phase)
    return replace(state, phase=phase)


def _touch(state: TournamentState) -> TournamentState:
    return replace(state, metadata=state.metadata.touched())


# ========== Registration ==========


def new_tournament(
    name: str = DEFAULT_TOURNAMENT_NAME,
    settings: Optional[TournamentSettings] = None,
) -> TournamentState:
    """Create an empty tournament in the registration phase."""
    return TournamentState(
        metadata=TournamentMetadata(
            tournament_name=name.strip() or DEFAULT_TOURNAMENT_NAME
        ),
        settings=settings or TournamentSettings(),
    )


def set_tournament_name(state: TournamentState, name: str) -> TournamentState:
    metadata = replace(state.metadata, tournament_name=name.strip() or state.name)
    return _touch(replace(state, metadata=metadata))


def add_player(state: TournamentState, name: str) -> TournamentState:
    """Register a new player with all stats at zero.

    Raises:
        TournamentStateException: Outside the registration phase
        PlayerNameValidationException: If the name is empty or taken
    """
    _require_phase(state, PHASE_REGISTRATION)
    name = validate_player_name_strict(name, (p.name for p in state.players))
    player = Player(id=next_player_id(p.id for p in state.players), name=name)
    logger.info("Added player: %s (%s)", player.name, player.id)
    return _touch(replace(state, players=state.players + (player,)))


def remove_player(state: TournamentState, player_id: str) -> TournamentState:
    """Remove a player before the tournament starts.

    Raises:
        TournamentStateException: Outside the registration phase
        PlayerNotFoundException: If the player is unknown
    """
    _require_phase(state, PHASE_REGISTRATION)
    player = state.get_player(player_id)
    logger.info("Removed player: %s (%s)", player.name, player_id)
    return _touch(
        replace(state, players=tuple(p for p in state.players if p.id != player_id))
    )


def start_tournament(state: TournamentState) -> TournamentState:
    """Close registration and enter the qualifying phase.

    Raises:
        TournamentStateException: Outside the registration phase
        InvalidPairingException: If the roster cannot be seated at tables
            of 3 and 4
    """
    _require_phase(state, PHASE_REGISTRATION)
    table_sizes(len(state.players))
    return _touch(_advance_phase(state, PHASE_QUALIFYING))


# ========== Qualifying ==========


def can_generate_round(state: TournamentState) -> bool:
    """Whether :func:`generate_round` would succeed."""
    if state.phase != PHASE_QUALIFYING:
        return False
    if state.last_round is not None and not state.last_round.is_complete:
        return False
    return len(state.qualifying_rounds) < state.settings.total_qualifying_rounds


def generate_round(
    state: TournamentState, rng: Optional[Shuffler] = None
) -> TournamentState:
    """Pair and append the next qualifying round.

    Args:
        state: Current tournament state; it is not modified
        rng: Random source for the in-bracket shuffles

    Raises:
        TournamentStateException: Outside the qualifying phase or when all
            qualifying rounds have been paired
        RoundIncompleteException: If the previous round is still open
    """
    _require_phase(state, PHASE_QUALIFYING)
    if state.last_round is not None and not state.last_round.is_complete:
        raise RoundIncompleteException(
            f"Round {state.last_round.number} is not complete yet"
        )
    if len(state.qualifying_rounds) >= state.settings.total_qualifying_rounds:
        raise TournamentStateException(
            f"All {state.settings.total_qualifying_rounds} qualifying rounds "
            "have been paired"
        )

    tables = generate_qualifying_round(state, rng)
    round_ = Round(
        number=state.current_round + 1, type=ROUND_QUALIFYING, tables=tuple(tables)
    )
    logger.info(
        "Created qualifying round %s with %s tables", round_.number, len(tables)
    )
    return _touch(state.with_round(round_))


# ========== Results ==========


def submit_table_results(
    state: TournamentState,
    round_index: int,
    table_id: int,
    results: Sequence[TableResult],
) -> TournamentState:
    """Record (or correct) the results of one table and score them.

    A table that was already scored is reverted first, so editing never
    double-counts. Results of a round can only be changed while it is the
    latest round.

    Raises:
        TournamentStateException: Outside the qualifying and top cut phases,
            or when a later round already exists
        RoundNotFoundException: If the round does not exist
        TableNotFoundException: If the table does not exist
        InvalidResultException: If the results are malformed or do not
            match the seated players
    """
    _require_phase(state, PHASE_QUALIFYING, PHASE_TOP_CUT)
    round_ = state.get_round(round_index)
    if round_index != len(state.rounds) - 1:
        raise TournamentStateException(
            f"Round {round_.number} is closed; a later round has been generated"
        )
    table = round_.get_table(table_id)

    results = tuple(results)
    validate_table_result_strict(results, table.size)
    reported = {r.player_id for r in results}
    if reported != set(table.player_ids):
        raise InvalidResultException(
            f"Results must cover exactly the players at table {table_id}: "
            f"{sorted(table.player_ids)}"
        )

    if table.is_complete and table.results:
        logger.info("Editing results of round %s table %s", round_.number, table_id)
        state = revert_table_results(state, round_index, table_id)

    completed = replace(table, results=results, is_complete=True)
    state = state.replace_round(round_index, round_.replace_table(completed))
    state = apply_table_results(state, round_index, table_id)

    if state.get_round(round_index).is_complete:
        logger.info("Round %s is complete", round_.number)
    return _touch(state)


# ========== Top cut ==========


def can_start_top_cut(state: TournamentState) -> bool:
    """Whether :func:`start_top_cut` would succeed."""
    completed = [r for r in state.qualifying_rounds if r.is_complete]
    return (
        state.phase == PHASE_QUALIFYING
        and len(completed) >= state.settings.total_qualifying_rounds
        and len(state.players) >= state.settings.top_cut
    )


def start_top_cut(state: TournamentState) -> TournamentState:
    """Finish qualifying, seed the top cut and append the semifinal.

    Raises:
        TournamentStateException: Outside the qualifying phase or before
            every qualifying round is complete
        InsufficientPlayersException: With fewer players than the top cut
    """
    _require_phase(state, PHASE_QUALIFYING)
    completed = [r for r in state.qualifying_rounds if r.is_complete]
    if len(completed) < state.settings.total_qualifying_rounds:
        raise TournamentStateException(
            f"Only {len(completed)} of {state.settings.total_qualifying_rounds} "
            "qualifying rounds are complete"
        )

    semifinal = generate_elimination_round(
        state.rounds, state.settings.top_cut, state.players
    )
    state = _advance_phase(state, PHASE_TOP_CUT)
    return _touch(state.with_round(semifinal))


def generate_top_cut_round(state: TournamentState) -> TournamentState:
    """Append the next bracket round, or finish after the grand final.

    Raises:
        TournamentStateException: Outside the top cut phase
        RoundIncompleteException: If the latest round is still open
    """
    _require_phase(state, PHASE_TOP_CUT)
    last = state.last_round
    if last is None or not last.is_complete:
        raise RoundIncompleteException("The current bracket round is not complete")

    if last.type == ROUND_GRAND_FINAL:
        return finish_tournament(state)

    round_ = generate_elimination_round(
        state.rounds, state.settings.top_cut, state.players
    )
    return _touch(state.with_round(round_))


def finish_tournament(state: TournamentState) -> TournamentState:
    """Mark the tournament finished once the grand final is complete.

    Raises:
        TournamentStateException: Without a completed grand final
    """
    _require_phase(state, PHASE_TOP_CUT)
    grand_finals = state.rounds_of_type(ROUND_GRAND_FINAL)
    if not grand_finals or not grand_finals[-1].is_complete:
        raise TournamentStateException("The grand final has not been completed")
    return _touch(_advance_phase(state, PHASE_FINISHED))


def reset_tournament(state: Optional[TournamentState] = None) -> TournamentState:
    """Start over with an empty tournament.

    The settings of ``state`` are kept when given.
    """
    if state is not None:
        logger.info("Resetting tournament %r", state.name)
        return new_tournament(settings=state.settings)
    return new_tournament()


