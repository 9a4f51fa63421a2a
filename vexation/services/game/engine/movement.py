"""Move execution - commits a selected move to the game state."""

import logging

logger = logging.getLogger(__name__)

from vexation.schemas.game_engine import GameState, MarbleMove, PowerUp, WhichDie

from .board import world_position
from .events import AnyGameEvent, DiceUsed, MarbleMoved


def execute_move(state: GameState, move: MarbleMove, events: list[AnyGameEvent]) -> None:
    """Commit a validated move for the player on turn.

    Updates the marble's index, consumes the dice (or the one-shot power-up)
    the move was generated from and records the marble for the capture and
    power systems. The caller is responsible for waiting on the animation.
    """
    turn = state.current_turn
    marble = state.marbles[move.marble_id]
    from_index = marble.index

    marble.prev_index = marble.index
    marble.index = move.destination
    state.dice.use_die(move.which)
    turn.last_move = move

    status = state.players[marble.player].power_up_status
    if move.power_up == PowerUp.CAPTURE_NEAREST:
        status.capture_nearest = False
    elif move.power_up == PowerUp.HOME_RUN:
        status.home_run = False

    events.append(
        MarbleMoved(
            player=marble.player,
            marble_id=marble.marble_id,
            from_index=from_index,
            to_index=marble.index,
            path=move.path,
            which=move.which,
            power_up=move.power_up,
            target=world_position(marble.player, marble.index),
        )
    )
    if move.which != WhichDie.NEITHER:
        events.append(
            DiceUsed(
                player=marble.player,
                which=move.which,
                one=state.dice.one,
                two=state.dice.two,
            )
        )

    logger.info(
        "Marble moved: player=%s, marble=%d, from=%d, to=%d, die=%s",
        marble.player.value,
        marble.marble_id,
        from_index,
        marble.index,
        move.which.value,
    )
