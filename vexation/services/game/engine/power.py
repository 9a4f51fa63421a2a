"""Power economy: power-bar accrual, power-up drafting, activation and expiry.

Every capture and every completed move feeds a player's power bar. Each time
the bar fills, one power-up is drafted at random into the player's next open
slot; a player holds at most three. Using a power-up frees its slot and costs
one full bar.
"""

import logging
import random

logger = logging.getLogger(__name__)

from vexation.schemas.game_engine import (
    GameState,
    Marble,
    Player,
    PlayerProgress,
    PowerBar,
    PowerUp,
    TurnPhase,
)

from .board import BASE_INDEX, CENTER_ENTRANCE_INDEXES, CENTER_EXIT_INDEX, CENTER_INDEX, is_home_index
from .events import AnyGameEvent, PowerChanged, PowerUpActivated, PowerUpDrafted

MAX_POWER = 10.0
MAX_POWER_UPS = 3
CAPTURE_POWER = 3.0
MOVE_POWER_SCALE = 10.0 / 48.0
HOME_ROW_POWER_FACTOR = 2.0
BASE_TO_CENTER_DISTANCE = 7

EVADE_CAPTURE_TURNS = 4
SELF_JUMP_TURNS = 4

POWER_UP_WEIGHTS: dict[PowerUp, int] = {
    PowerUp.ROLL_AGAIN: 4,
    PowerUp.DOUBLE_DICE: 4,
    PowerUp.EVADE_CAPTURE: 3,
    PowerUp.SELF_JUMP: 2,
    PowerUp.CAPTURE_NEAREST: 1,
    PowerUp.HOME_RUN: 1,
}


def update_power_bar(bar: PowerBar, delta: float) -> bool:
    """Apply a power change to a bar.

    Power never drops below zero. Filling the bar raises the power-up count
    and carries the excess over; the third power-up resets the bar instead,
    after which it stays frozen until a power-up is spent.

    Returns:
        True if a new power-up was earned.
    """
    new_power = max(bar.power + delta, 0.0)
    if new_power >= MAX_POWER:
        if bar.power_up_count < MAX_POWER_UPS - 1:
            bar.power = new_power - MAX_POWER  # carry over
            bar.power_up_count += 1
            return True
        if bar.power_up_count == MAX_POWER_UPS - 1:
            bar.power = 0.0
            bar.power_up_count += 1
            return True
        return False

    if bar.power_up_count < MAX_POWER_UPS:
        bar.power = new_power
    return False


def path_length(prev_index: int, index: int) -> int:
    """Number of cells travelled from prev_index to index."""
    if index == CENTER_INDEX:
        if prev_index == BASE_INDEX:
            return BASE_TO_CENTER_DISTANCE
        entrance = next((e for e in CENTER_ENTRANCE_INDEXES if e >= prev_index), None)
        if entrance is None:
            raise ValueError(f"The center cannot be reached from index {prev_index}")
        return entrance - prev_index + 1

    if prev_index == BASE_INDEX:
        return index + 1
    if prev_index == CENTER_INDEX:
        return index + 1 - CENTER_EXIT_INDEX
    return index - prev_index


def move_power(prev_index: int, index: int) -> float:
    """Power earned by a move; moves ending in the home row are worth double."""
    factor = HOME_ROW_POWER_FACTOR if is_home_index(index) else 1.0
    return factor * MOVE_POWER_SCALE * path_length(prev_index, index)


def draft_power_up(progress: PlayerProgress, rng: random.Random) -> tuple[int, PowerUp]:
    """Draw a weighted random power-up into the player's next open slot."""
    slot = progress.power_ups.index(None)
    power_up = rng.choices(list(POWER_UP_WEIGHTS), weights=list(POWER_UP_WEIGHTS.values()))[0]
    progress.power_ups[slot] = power_up
    return slot, power_up


def add_power(
    state: GameState,
    player: Player,
    delta: float,
    rng: random.Random,
    events: list[AnyGameEvent],
) -> None:
    """Change a player's power and draft a power-up if the bar filled."""
    progress = state.players[player]
    earned = update_power_bar(progress.power_bar, delta)
    events.append(
        PowerChanged(
            player=player,
            delta=delta,
            power=progress.power_bar.power,
            power_up_count=progress.power_bar.power_up_count,
        )
    )
    logger.debug(
        "Power changed: player=%s, delta=%.2f, power=%.2f, count=%d",
        player.value,
        delta,
        progress.power_bar.power,
        progress.power_bar.power_up_count,
    )

    if earned:
        slot, power_up = draft_power_up(progress, rng)
        events.append(PowerUpDrafted(player=player, slot=slot, power_up=power_up))
        logger.info(
            "Power-up drafted: player=%s, slot=%d, power_up=%s",
            player.value,
            slot,
            power_up.value,
        )


def process_capture_power(
    state: GameState,
    captor: Player,
    captive: Player,
    rng: random.Random,
    events: list[AnyGameEvent],
) -> None:
    add_power(state, captor, CAPTURE_POWER, rng, events)
    add_power(state, captive, -CAPTURE_POWER, rng, events)


def process_move_power(
    state: GameState,
    marble: Marble,
    rng: random.Random,
    events: list[AnyGameEvent],
) -> None:
    add_power(state, marble.player, move_power(marble.prev_index, marble.index), rng, events)


def activate_power_up(
    state: GameState,
    player: Player,
    slot: int,
    events: list[AnyGameEvent],
) -> TurnPhase | None:
    """Spend a drafted power-up and apply its effect.

    Returns:
        The phase the turn should jump to, or None to stay in the current phase.
    """
    progress = state.players[player]
    power_up = progress.power_ups[slot]
    if power_up is None:
        raise ValueError(f"Power-up slot {slot} of {player.value} is empty")

    progress.power_ups[slot] = None
    progress.power_bar.power_up_count -= 1
    events.append(PowerUpActivated(player=player, slot=slot, power_up=power_up))
    logger.info("Activating power-up: player=%s, power_up=%s", player.value, power_up.value)

    status = progress.power_up_status
    if power_up == PowerUp.ROLL_AGAIN:
        return TurnPhase.DICE_ROLL

    if power_up == PowerUp.DOUBLE_DICE:
        state.dice.multiplier = 2
        return TurnPhase.TURN_SETUP

    if power_up == PowerUp.EVADE_CAPTURE:
        status.evade_capture_turns = EVADE_CAPTURE_TURNS
        state.evading.update(m.marble_id for m in state.player_marbles(player))
        return None

    if power_up == PowerUp.SELF_JUMP:
        status.jump_self_turns = SELF_JUMP_TURNS
    elif power_up == PowerUp.CAPTURE_NEAREST:
        status.capture_nearest = True
    elif power_up == PowerUp.HOME_RUN:
        status.home_run = True
    return TurnPhase.TURN_SETUP


def end_of_turn(state: GameState, player: Player) -> bool:
    """Run the end-of-turn bookkeeping for a player.

    Returns:
        True if a timed power-up ran out this turn.
    """
    progress = state.players[player]
    status = progress.power_up_status
    was_evading = status.evade_capture_turns > 0
    was_jumping = status.jump_self_turns > 0

    status.evade_capture_turns = max(status.evade_capture_turns - 1, 0)
    status.jump_self_turns = max(status.jump_self_turns - 1, 0)
    status.capture_nearest = False
    status.home_run = False

    if status.evade_capture_turns == 0:
        state.evading.difference_update(m.marble_id for m in state.player_marbles(player))

    if progress.turn_move_count == 0:
        progress.consecutive_empty_turns += 1
    else:
        progress.consecutive_empty_turns = 0
    progress.turn_move_count = 0

    expired = (was_evading and status.evade_capture_turns == 0) or (
        was_jumping and status.jump_self_turns == 0
    )
    if expired:
        logger.info("Timed power-up expired: player=%s", player.value)
    return expired
