"""Main entry point for game action processing.

This module provides the primary interface for processing game actions:
- process_action(): Validates and processes any game action
- advance(): Runs the automatic turn phases until input is needed
- Returns ProcessResult with new state and events
"""

import logging
import random
from collections.abc import Callable

logger = logging.getLogger(__name__)

from vexation.schemas.game_engine import (
    PLAYER_ORDER,
    GameState,
    Player,
    PowerUp,
    TurnPhase,
)

from .actions import (
    AnimationDoneAction,
    ClickAction,
    DoneAction,
    GameAction,
    MoveAction,
    PowerUpAction,
    StartGameAction,
)
from .board import is_home_index
from .captures import resolve_capture
from .computer import choose_computer_move
from .events import (
    AnyGameEvent,
    AwaitingChoice,
    DiceRolled,
    GameEnded,
    GameStarted,
    MarbleSelected,
    SelectionCleared,
    TurnEnded,
    TurnStarted,
)
from .legal_moves import get_legal_moves
from .movement import execute_move
from .power import activate_power_up, end_of_turn, process_move_power
from .rolling import create_new_turn, get_next_turn_player, roll_for_turn
from .validation import ProcessResult, validate_action

# Phases that wait for an action from the UI or the animation layer
INPUT_PHASES = frozenset(
    {
        TurnPhase.NOT_STARTED,
        TurnPhase.HUMAN_TURN,
        TurnPhase.WAIT_FOR_ANIMATION,
        TurnPhase.GAME_END,
    }
)


def process_action(
    state: GameState,
    action: GameAction,
    rng: random.Random | None = None,
) -> ProcessResult:
    """Process a game action and return the result.

    This is the main entry point for all game actions. It:
    1. Validates the action is legal given current state
    2. Applies the action to a copy of the state
    3. Advances through the automatic phases until input is needed again
    4. Assigns sequence numbers to events

    Args:
        state: Current game state. Never mutated.
        action: The action to process.
        rng: Source of dice rolls, drafts and computer choices.

    Returns:
        ProcessResult containing:
        - success: Whether the action was processed successfully
        - state: The new game state (if successful)
        - events: List of events that occurred (with seq numbers)
        - error_code/error_message: Error details (if failed)

    Example:
        >>> result = process_action(state, MoveAction(move_index=0), rng)
        >>> if result.success:
        ...     state = result.state
        ...     for event in result.events:
        ...         render(event)  # event.seq is set
        ... else:
        ...     show_error(result.error_code, result.error_message)
    """
    action_type = type(action).__name__
    logger.info("Processing action: type=%s, phase=%s", action_type, state.phase.value)
    logger.debug("Action details: %s", action)

    validation = validate_action(state, action)
    if not validation.is_valid:
        logger.warning(
            "Action validation failed: code=%s, message=%s, action=%s",
            validation.error_code,
            validation.error_message,
            action_type,
        )
        return ProcessResult.failure(
            validation.error_code or "VALIDATION_ERROR",
            validation.error_message or "Invalid action",
        )

    if rng is None:
        rng = random.Random()
    working = state.model_copy(deep=True)
    events: list[AnyGameEvent] = []

    if isinstance(action, StartGameAction):
        _start_game(working, events)

    elif isinstance(action, ClickAction):
        _handle_click(working, action.index, events)

    elif isinstance(action, MoveAction):
        _commit_move(working, action.move_index, events)

    elif isinstance(action, PowerUpAction):
        _handle_power_up(working, action, events)

    elif isinstance(action, DoneAction):
        _handle_done(working)

    elif isinstance(action, AnimationDoneAction):
        logger.debug("Animation finished: marble=%d", action.marble_id)
        working.phase = TurnPhase.PROCESS_MOVE

    else:
        logger.error("Unknown action type received: %s", action_type)
        return ProcessResult.failure("UNKNOWN_ACTION", f"Unknown action type: {action_type}")

    advance(working, rng, events)

    result = _assign_event_sequences(ProcessResult.ok(working, events))
    logger.info(
        "Action processed successfully: type=%s, phase=%s, events_generated=%d",
        action_type,
        working.phase.value,
        len(result.events),
    )
    logger.debug("Generated events: %s", [type(e).__name__ for e in result.events])
    return result


def advance(state: GameState, rng: random.Random, events: list[AnyGameEvent]) -> None:
    """Run automatic phases in place until the game needs external input."""
    while state.phase not in INPUT_PHASES:
        handler = _PHASE_HANDLERS[state.phase]
        previous = state.phase
        handler(state, rng, events)
        logger.debug("Phase transition: %s -> %s", previous.value, state.phase.value)


def _assign_event_sequences(result: ProcessResult) -> ProcessResult:
    """Assign monotonically increasing sequence numbers to events.

    Updates each event's seq field and advances the state's event_seq counter.
    """
    if result.state is None or not result.events:
        return result

    current_seq = result.state.event_seq
    for event in result.events:
        event.seq = current_seq
        current_seq += 1

    result.state.event_seq = current_seq
    return result


def _start_game(state: GameState, events: list[AnyGameEvent]) -> None:
    """Transition the game from NOT_STARTED to the first player's dice roll."""
    first_player = state.first_player
    logger.info(
        "Starting game: first_player=%s, humans=%s",
        first_player.value,
        [p.value for p in state.human_players],
    )

    state.current_turn = create_new_turn(first_player)
    state.turn_number = 1
    state.phase = TurnPhase.DICE_ROLL

    events.append(
        GameStarted(
            player_order=list(PLAYER_ORDER),
            first_player=first_player,
            human_players=list(state.human_players),
        )
    )
    events.append(TurnStarted(player=first_player, turn_number=1))


# Automatic phase handlers


def _next_player(state: GameState, rng: random.Random, events: list[AnyGameEvent]) -> None:
    player = get_next_turn_player(state.current_turn.player)
    state.current_turn = create_new_turn(player)
    state.turn_number += 1
    state.phase = TurnPhase.DICE_ROLL
    events.append(TurnStarted(player=player, turn_number=state.turn_number))
    logger.info("Turn started: player=%s, turn_number=%d", player.value, state.turn_number)


def _dice_roll(state: GameState, rng: random.Random, events: list[AnyGameEvent]) -> None:
    turn = state.current_turn
    rerolls = roll_for_turn(state, rng)
    turn.selected_marble = None
    turn.selected_move_index = None
    events.append(
        DiceRolled(
            player=turn.player,
            one=state.dice.one,
            two=state.dice.two,
            doubles=state.dice.doubles,
            multiplier=state.dice.multiplier,
            rerolls=rerolls,
        )
    )
    state.phase = TurnPhase.TURN_SETUP


def _turn_setup(state: GameState, rng: random.Random, events: list[AnyGameEvent]) -> None:
    turn = state.current_turn
    player = turn.player
    moves = get_legal_moves(state, player)
    turn.possible_moves = moves
    turn.selected_move_index = None
    state.players[player].turn_move_count += len(moves)

    if turn.selected_marble is not None and not turn.get_moves(turn.selected_marble):
        turn.selected_marble = None

    if not moves:
        if state.dice.doubles:
            logger.info("No legal moves on doubles, rolling again: player=%s", player.value)
            state.phase = TurnPhase.DICE_ROLL
        else:
            logger.info("No legal moves, ending turn: player=%s", player.value)
            turn.end_reason = "no_legal_moves"
            state.phase = TurnPhase.END_TURN
        return

    if player in state.human_players:
        state.phase = TurnPhase.HUMAN_TURN
        events.append(AwaitingChoice(player=player, legal_moves=list(moves)))
    else:
        state.phase = TurnPhase.COMPUTER_TURN


def _computer_turn(state: GameState, rng: random.Random, events: list[AnyGameEvent]) -> None:
    move_index = choose_computer_move(state.current_turn, rng)
    _commit_move(state, move_index, events)


def _process_move(state: GameState, rng: random.Random, events: list[AnyGameEvent]) -> None:
    turn = state.current_turn
    move = turn.last_move
    marble = state.marbles[move.marble_id]

    resolve_capture(state, rng, events)
    if move.power_up != PowerUp.HOME_RUN:
        process_move_power(state, marble, rng, events)

    winner = check_win_condition(state)
    if winner is not None:
        state.winner = winner
        state.phase = TurnPhase.GAME_END
        events.append(GameEnded(winner=winner))
        logger.info("Game ended: winner=%s, turns=%d", winner.value, state.turn_number)
    elif not state.dice.is_empty():
        state.phase = TurnPhase.TURN_SETUP
    elif state.dice.doubles:
        state.phase = TurnPhase.DICE_ROLL
    else:
        turn.end_reason = "dice_used"
        state.phase = TurnPhase.END_TURN


def _end_turn(state: GameState, rng: random.Random, events: list[AnyGameEvent]) -> None:
    turn = state.current_turn
    player = turn.player
    end_of_turn(state, player)
    # Double Dice never outlives the turn it was spent in
    state.dice.multiplier = 1

    upcoming = get_next_turn_player(player)
    events.append(TurnEnded(player=player, reason=turn.end_reason, next_player=upcoming))
    logger.info("Turn ended: player=%s, reason=%s", player.value, turn.end_reason)

    state.current_turn = create_new_turn(player)
    state.phase = TurnPhase.NEXT_PLAYER


_PHASE_HANDLERS: dict[TurnPhase, Callable[[GameState, random.Random, list[AnyGameEvent]], None]] = {
    TurnPhase.NEXT_PLAYER: _next_player,
    TurnPhase.DICE_ROLL: _dice_roll,
    TurnPhase.TURN_SETUP: _turn_setup,
    TurnPhase.COMPUTER_TURN: _computer_turn,
    TurnPhase.PROCESS_MOVE: _process_move,
    TurnPhase.END_TURN: _end_turn,
}


# Human input handlers


def _commit_move(state: GameState, move_index: int, events: list[AnyGameEvent]) -> None:
    turn = state.current_turn
    move = turn.possible_moves[move_index]
    turn.selected_marble = move.marble_id
    turn.selected_move_index = move_index
    execute_move(state, move, events)
    state.phase = TurnPhase.WAIT_FOR_ANIMATION


def _handle_click(state: GameState, index: int, events: list[AnyGameEvent]) -> None:
    """Resolve a board click during a human turn.

    Clicking one of the player's marbles that can move selects it. With a
    marble selected, clicking one of its destinations commits the first move
    that ends there; clicking anywhere else clears the selection.
    """
    turn = state.current_turn
    player = turn.player

    clicked = next(
        (
            m
            for m in state.player_marbles(player)
            if m.index == index and turn.get_moves(m.marble_id)
        ),
        None,
    )
    if clicked is not None:
        if clicked.marble_id == turn.selected_marble:
            return
        turn.selected_marble = clicked.marble_id
        destinations = sorted({m.destination for m in turn.get_moves(clicked.marble_id)})
        events.append(
            MarbleSelected(player=player, marble_id=clicked.marble_id, destinations=destinations)
        )
        logger.debug("Marble selected: player=%s, marble=%d", player.value, clicked.marble_id)
        return

    if turn.selected_marble is None:
        return

    for move_index, move in enumerate(turn.possible_moves):
        if move.marble_id == turn.selected_marble and move.destination == index:
            _commit_move(state, move_index, events)
            return

    turn.selected_marble = None
    events.append(SelectionCleared(player=player))


def _handle_power_up(state: GameState, action: PowerUpAction, events: list[AnyGameEvent]) -> None:
    next_phase = activate_power_up(state, action.player, action.slot, events)
    if next_phase is None:
        return
    state.current_turn.selected_marble = None
    state.phase = next_phase


def _handle_done(state: GameState) -> None:
    turn = state.current_turn
    logger.info("Player done: player=%s, doubles=%s", turn.player.value, state.dice.doubles)
    if state.dice.doubles:
        state.phase = TurnPhase.DICE_ROLL
    else:
        turn.end_reason = "done"
        state.phase = TurnPhase.END_TURN


def check_win_condition(state: GameState) -> Player | None:
    """Check if any player has won the game.

    A player wins when all their marbles are in their home row.

    Args:
        state: Current game state.

    Returns:
        The winning player, or None if no winner yet.
    """
    for player in PLAYER_ORDER:
        marbles = state.player_marbles(player)
        marbles_home = sum(1 for m in marbles if is_home_index(m.index))
        logger.debug("Win check: player=%s, marbles_home=%d/%d", player.value, marbles_home, len(marbles))
        if marbles and marbles_home == len(marbles):
            logger.info("Winner detected: player=%s", player.value)
            return player
    return None
