"""Validation layer for game actions and ProcessResult pattern.

Separates validation from processing logic:
- validate_action() checks if an action is valid given current state
- ProcessResult replaces exceptions for control flow
"""

import logging
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

from vexation.schemas.game_engine import GameState, TurnPhase

from .actions import (
    AnimationDoneAction,
    ClickAction,
    DoneAction,
    GameAction,
    MoveAction,
    PowerUpAction,
    StartGameAction,
)
from .events import AnyGameEvent


@dataclass
class ProcessResult:
    """Result of processing a game action.

    Replaces exceptions for control flow, providing explicit success/failure
    with error codes the UI can map to messages.
    """

    state: GameState | None = None
    events: list[AnyGameEvent] = field(default_factory=list)
    success: bool = True
    error_code: str | None = None
    error_message: str | None = None

    @classmethod
    def ok(
        cls,
        state: GameState,
        events: list[AnyGameEvent] | None = None,
    ) -> "ProcessResult":
        """Create a successful result with new state and events."""
        return cls(
            state=state,
            events=events or [],
            success=True,
        )

    @classmethod
    def failure(cls, code: str, message: str) -> "ProcessResult":
        """Create a failure result with error details."""
        return cls(
            state=None,
            events=[],
            success=False,
            error_code=code,
            error_message=message,
        )


@dataclass
class ValidationResult:
    """Result of validating an action before processing."""

    is_valid: bool = True
    error_code: str | None = None
    error_message: str | None = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        """Create a successful validation result."""
        return cls(is_valid=True)

    @classmethod
    def error(cls, code: str, message: str) -> "ValidationResult":
        """Create a validation failure with error details."""
        return cls(
            is_valid=False,
            error_code=code,
            error_message=message,
        )


def validate_action(state: GameState, action: GameAction) -> ValidationResult:
    """Validate an action before processing.

    Checks:
    - Game phase allows this action
    - Human input only arrives while a human player is on turn
    - Chosen move index exists in the legal move set
    - Activated power-up slot belongs to the player on turn and is occupied
    - Animation signals refer to the marble that just moved

    Args:
        state: Current game state.
        action: The action to validate.

    Returns:
        ValidationResult indicating success or failure with error details.
    """
    action_type = type(action).__name__
    logger.debug("Validating action: type=%s, phase=%s", action_type, state.phase.value)

    if isinstance(action, StartGameAction):
        if state.phase != TurnPhase.NOT_STARTED:
            logger.warning(
                "Validation failed: GAME_ALREADY_STARTED, current_phase=%s",
                state.phase.value,
            )
            return ValidationResult.error(
                "GAME_ALREADY_STARTED",
                "Game has already started",
            )
        return ValidationResult.ok()

    # For all other actions, game must be in progress
    if state.phase == TurnPhase.NOT_STARTED:
        logger.warning("Validation failed: GAME_NOT_STARTED")
        return ValidationResult.error("GAME_NOT_STARTED", "Game has not started yet")

    if state.phase == TurnPhase.GAME_END:
        logger.warning("Validation failed: GAME_FINISHED")
        return ValidationResult.error("GAME_FINISHED", "Game has already finished")

    turn = state.current_turn
    if turn is None:
        logger.warning("Validation failed: NO_ACTIVE_TURN")
        return ValidationResult.error("NO_ACTIVE_TURN", "No active turn")

    if isinstance(action, AnimationDoneAction):
        if state.phase != TurnPhase.WAIT_FOR_ANIMATION:
            logger.warning(
                "Validation failed: INVALID_ACTION (animation_done), phase=%s",
                state.phase.value,
            )
            return ValidationResult.error(
                "INVALID_ACTION",
                "No marble animation is pending",
            )
        if action.marble_id != turn.moved_marble:
            logger.warning(
                "Validation failed: WRONG_MARBLE, moved=%s, reported=%d",
                turn.moved_marble,
                action.marble_id,
            )
            return ValidationResult.error(
                "WRONG_MARBLE",
                f"Marble {action.marble_id} is not the marble being moved",
            )
        return ValidationResult.ok()

    # Everything else is human input, only accepted during a human turn
    if isinstance(action, PowerUpAction):
        if action.player not in state.human_players:
            logger.warning("Validation failed: NOT_HUMAN_PLAYER, player=%s", action.player.value)
            return ValidationResult.error(
                "NOT_HUMAN_PLAYER",
                f"{action.player.value} is controlled by the computer",
            )
        if action.player != turn.player:
            logger.warning(
                "Validation failed: NOT_YOUR_TURN, current=%s, attempted=%s",
                turn.player.value,
                action.player.value,
            )
            return ValidationResult.error("NOT_YOUR_TURN", "It's not your turn")

    if state.phase != TurnPhase.HUMAN_TURN:
        logger.warning(
            "Validation failed: INVALID_ACTION (%s), expected=%s, got=%s",
            action_type,
            TurnPhase.HUMAN_TURN.value,
            state.phase.value,
        )
        return ValidationResult.error(
            "INVALID_ACTION",
            "Waiting for a different action",
        )

    if isinstance(action, MoveAction):
        if action.move_index >= len(turn.possible_moves):
            logger.warning(
                "Validation failed: ILLEGAL_MOVE, requested=%d, legal_moves=%d",
                action.move_index,
                len(turn.possible_moves),
            )
            return ValidationResult.error(
                "ILLEGAL_MOVE",
                f"Move {action.move_index} is not a legal move",
            )

    elif isinstance(action, PowerUpAction):
        if state.players[action.player].power_ups[action.slot] is None:
            logger.warning(
                "Validation failed: EMPTY_POWER_UP_SLOT, player=%s, slot=%d",
                action.player.value,
                action.slot,
            )
            return ValidationResult.error(
                "EMPTY_POWER_UP_SLOT",
                f"Power-up slot {action.slot} is empty",
            )

    elif not isinstance(action, (ClickAction, DoneAction)):
        logger.error("Unknown action type received: %s", action_type)
        return ValidationResult.error("UNKNOWN_ACTION", f"Unknown action type: {action_type}")

    logger.debug("Action validated successfully: type=%s", action_type)
    return ValidationResult.ok()
