"""Game event types - emitted during state transitions for the UI layer.

Events describe what happened while processing an action, enabling:
- Marble animations (target world positions, capture send-backs)
- Move highlighting (legal destinations of the selected marble)
- Dice dimming and power-bar / power-up slot updates
"""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

from vexation.schemas.game_engine import MarbleMove, Player, PowerUp, WhichDie


class GameEvent(BaseModel):
    """Base class for all game events."""

    event_type: str
    seq: int = 0  # Sequence number assigned during processing


class GameStarted(GameEvent):
    """Game has transitioned from NOT_STARTED to the first dice roll."""

    event_type: Literal["game_started"] = "game_started"
    player_order: list[Player] = Field(..., description="Players in turn order")
    first_player: Player
    human_players: list[Player]


class TurnStarted(GameEvent):
    """A new turn has begun."""

    event_type: Literal["turn_started"] = "turn_started"
    player: Player
    turn_number: int


class DiceRolled(GameEvent):
    """The player on turn rolled both dice."""

    event_type: Literal["dice_rolled"] = "dice_rolled"
    player: Player
    one: int = Field(..., ge=1, le=6)
    two: int = Field(..., ge=1, le=6)
    doubles: bool
    multiplier: int
    rerolls: int = Field(0, description="Forced rerolls after consecutive empty turns")


class AwaitingChoice(GameEvent):
    """Game is waiting for a human player to choose a move."""

    event_type: Literal["awaiting_choice"] = "awaiting_choice"
    player: Player
    legal_moves: list[MarbleMove]


class MarbleSelected(GameEvent):
    """A human player selected one of their marbles."""

    event_type: Literal["marble_selected"] = "marble_selected"
    player: Player
    marble_id: int
    destinations: list[int] = Field(..., description="Indexes to highlight")


class SelectionCleared(GameEvent):
    """The selected marble was deselected."""

    event_type: Literal["selection_cleared"] = "selection_cleared"
    player: Player


class MarbleMoved(GameEvent):
    """A marble was moved and needs to animate to its new position."""

    event_type: Literal["marble_moved"] = "marble_moved"
    player: Player
    marble_id: int
    from_index: int
    to_index: int
    path: list[int]
    which: WhichDie
    power_up: PowerUp | None = None
    target: tuple[float, float] = Field(..., description="World tile coordinates")


class DiceUsed(GameEvent):
    """One or both dice were consumed by a move."""

    event_type: Literal["dice_used"] = "dice_used"
    player: Player
    which: WhichDie
    one: int | None
    two: int | None


class MarbleCaptured(GameEvent):
    """An opponent marble was captured and sent back to its base."""

    event_type: Literal["marble_captured"] = "marble_captured"
    captor: Player
    captor_marble_id: int
    captive: Player
    captive_marble_id: int
    index: int = Field(..., description="Captive's local index where the capture occurred")
    origin: tuple[float, float] = Field(..., description="World position of the captive's base slot")


class PowerChanged(GameEvent):
    """A player's power bar changed."""

    event_type: Literal["power_changed"] = "power_changed"
    player: Player
    delta: float
    power: float
    power_up_count: int


class PowerUpDrafted(GameEvent):
    """A power-up was drafted into one of the player's slots."""

    event_type: Literal["power_up_drafted"] = "power_up_drafted"
    player: Player
    slot: int
    power_up: PowerUp


class PowerUpActivated(GameEvent):
    """A player used one of their drafted power-ups."""

    event_type: Literal["power_up_activated"] = "power_up_activated"
    player: Player
    slot: int
    power_up: PowerUp


class TurnEnded(GameEvent):
    """A player's turn has ended."""

    event_type: Literal["turn_ended"] = "turn_ended"
    player: Player
    reason: str = Field(
        ...,
        description="Why turn ended: 'dice_used', 'no_legal_moves', 'done'",
    )
    next_player: Player


class GameEnded(GameEvent):
    """The game has finished."""

    event_type: Literal["game_ended"] = "game_ended"
    winner: Player


# Union of all event types for type checking
AnyGameEvent = Annotated[
    GameStarted
    | TurnStarted
    | DiceRolled
    | AwaitingChoice
    | MarbleSelected
    | SelectionCleared
    | MarbleMoved
    | DiceUsed
    | MarbleCaptured
    | PowerChanged
    | PowerUpDrafted
    | PowerUpActivated
    | TurnEnded
    | GameEnded,
    Field(discriminator="event_type"),
]
