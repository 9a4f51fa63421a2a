"""Game engine module - rules engine for a four-player Vexation game.

This module provides the core game engine with:
- Action types for UI and animation inputs
- Event types for rendering and animation
- ProcessResult pattern for error handling
- Modular processing logic (moves, captures, power economy, turn phases)

Usage:
    from vexation.services.game.engine import (
        process_action,
        ProcessResult,
        StartGameAction,
        AnimationDoneAction,
    )

    # Process an action
    result = process_action(state, StartGameAction(), rng)

    if result.success:
        new_state = result.state
        events = result.events  # Hand these to the renderer
    else:
        # Handle error
        print(f"Error: {result.error_code} - {result.error_message}")
"""

# Actions - UI and animation inputs
from .actions import (
    AnimationDoneAction,
    ClickAction,
    DoneAction,
    GameAction,
    MoveAction,
    PowerUpAction,
    StartGameAction,
    build_action_from_payload,
)

# Board geometry
from .board import is_same_index, shift_index, world_position

# Events - for rendering and animation
from .events import (
    AnyGameEvent,
    AwaitingChoice,
    DiceRolled,
    DiceUsed,
    GameEnded,
    GameEvent,
    GameStarted,
    MarbleCaptured,
    MarbleMoved,
    MarbleSelected,
    PowerChanged,
    PowerUpActivated,
    PowerUpDrafted,
    SelectionCleared,
    TurnEnded,
    TurnStarted,
)

# Legal moves
from .legal_moves import get_legal_moves, has_any_legal_moves

# Main processing
from .process import advance, check_win_condition, process_action

# Result types
from .validation import ProcessResult, ValidationResult, validate_action

__all__ = [
    # Actions
    "GameAction",
    "StartGameAction",
    "ClickAction",
    "MoveAction",
    "PowerUpAction",
    "DoneAction",
    "AnimationDoneAction",
    "build_action_from_payload",
    # Board
    "shift_index",
    "is_same_index",
    "world_position",
    # Events
    "GameEvent",
    "AnyGameEvent",
    "GameStarted",
    "TurnStarted",
    "DiceRolled",
    "AwaitingChoice",
    "MarbleSelected",
    "SelectionCleared",
    "MarbleMoved",
    "DiceUsed",
    "MarbleCaptured",
    "PowerChanged",
    "PowerUpDrafted",
    "PowerUpActivated",
    "TurnEnded",
    "GameEnded",
    # Processing
    "process_action",
    "advance",
    "check_win_condition",
    # Validation
    "ProcessResult",
    "ValidationResult",
    "validate_action",
    # Legal moves
    "get_legal_moves",
    "has_any_legal_moves",
]
