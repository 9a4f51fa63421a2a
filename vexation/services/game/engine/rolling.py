"""Dice roll processing logic."""

import logging
import random

logger = logging.getLogger(__name__)

from vexation.schemas.game_engine import Dice, GameState, Player, TurnContext

from .board import next_player
from .legal_moves import has_any_legal_moves

# Consecutive turns without a legal move before rolls are forced to be useful
FORCED_REROLL_THRESHOLD = 2


def roll_die(rng: random.Random) -> int:
    return rng.randint(1, 6)


def roll_dice(dice: Dice, rng: random.Random) -> tuple[int, int]:
    """Roll both dice. The multiplier is left untouched."""
    one, two = roll_die(rng), roll_die(rng)
    dice.one = one
    dice.two = two
    dice.doubles = one == two
    return one, two


def roll_for_turn(state: GameState, rng: random.Random) -> int:
    """Roll the dice for the player on turn.

    After two turns in a row without a single legal move, the player keeps
    rerolling until a 1 shows up or the roll produces a legal move.

    Returns:
        The number of forced rerolls.
    """
    player = state.current_turn.player
    progress = state.players[player]
    roll_dice(state.dice, rng)

    rerolls = 0
    if progress.consecutive_empty_turns >= FORCED_REROLL_THRESHOLD:
        while 1 not in state.dice.sides() and not has_any_legal_moves(state, player):
            rerolls += 1
            roll_dice(state.dice, rng)
        if rerolls:
            logger.info(
                "Forced rerolls: player=%s, empty_turns=%d, rerolls=%d",
                player.value,
                progress.consecutive_empty_turns,
                rerolls,
            )

    logger.debug(
        "Dice rolled: player=%s, dice=%s, doubles=%s, multiplier=%d",
        player.value,
        state.dice.sides(),
        state.dice.doubles,
        state.dice.multiplier,
    )
    return rerolls


def create_new_turn(player: Player) -> TurnContext:
    """Create a fresh turn context for the given player."""
    logger.debug("Creating new turn: player=%s", player.value)
    return TurnContext(player=player)


def get_next_turn_player(current: Player) -> Player:
    """Calculate the next player in clockwise order."""
    upcoming = next_player(current)
    logger.debug("Turn order calculation: current=%s, next=%s", current.value, upcoming.value)
    return upcoming
