"""Game action types - discrete inputs fed back by the UI and animation layers."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

from vexation.schemas.game_engine import Player

from .board import BASE_INDEX, MARBLES_PER_PLAYER


class StartGameAction(BaseModel):
    """Start the game once seats have been chosen."""

    action_type: Literal["start_game"] = "start_game"


class ClickAction(BaseModel):
    """A click already resolved to a board index in the current player's frame."""

    action_type: Literal["click"] = "click"
    index: int = Field(
        ..., ge=0, le=BASE_INDEX, description="Local board index, or BASE for the base area"
    )


class MoveAction(BaseModel):
    """Player picks one of the legal moves directly."""

    action_type: Literal["move"] = "move"
    move_index: int = Field(..., ge=0, description="Index into the legal move list")


class PowerUpAction(BaseModel):
    """Player activates a drafted power-up."""

    action_type: Literal["power_up"] = "power_up"
    player: Player
    slot: int = Field(..., ge=0, le=2, description="Power-up slot (0-2)")


class DoneAction(BaseModel):
    """Player ends their turn early."""

    action_type: Literal["done"] = "done"


class AnimationDoneAction(BaseModel):
    """The animation layer finished moving a marble."""

    action_type: Literal["animation_done"] = "animation_done"
    marble_id: int = Field(..., ge=0, lt=4 * MARBLES_PER_PLAYER)


# Union type for all game actions
GameAction = Annotated[
    StartGameAction
    | ClickAction
    | MoveAction
    | PowerUpAction
    | DoneAction
    | AnimationDoneAction,
    Field(discriminator="action_type"),
]

_ACTION_TYPES: dict[str, type[BaseModel]] = {
    "start_game": StartGameAction,
    "click": ClickAction,
    "move": MoveAction,
    "power_up": PowerUpAction,
    "done": DoneAction,
    "animation_done": AnimationDoneAction,
}


def build_action_from_payload(payload: dict) -> GameAction:
    """Build a typed action from a raw payload dict.

    Args:
        payload: Dict with 'action_type' key and action-specific fields.

    Returns:
        The appropriate GameAction subtype.

    Raises:
        ValueError: If action_type is missing or unknown.
    """
    action_type = payload.get("action_type")
    action_cls = _ACTION_TYPES.get(action_type)
    if action_cls is None:
        raise ValueError(f"Unknown action type: {action_type}")
    return action_cls.model_validate(payload)
