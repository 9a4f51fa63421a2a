"""Capture detection and resolution logic."""

import logging
import random

logger = logging.getLogger(__name__)

from vexation.schemas.game_engine import GameState, Marble

from .board import BASE_INDEX, is_home_index, is_same_index
from .events import AnyGameEvent, MarbleCaptured
from .filtering import is_evading
from .power import process_capture_power


def detect_capture(state: GameState, mover: Marble) -> Marble | None:
    """Find the opponent marble sharing the mover's cell.

    Only opponents on the shared track or the center are considered; marbles
    at their base or in their home row can never be captured. At most one
    marble can occupy a shared cell, so there is at most one match.
    """
    if is_home_index(mover.index):
        return None

    for opp in state.marbles:
        if opp.player == mover.player:
            continue
        if opp.index == BASE_INDEX or is_home_index(opp.index):
            continue
        if is_same_index(mover.player, mover.index, opp.player, opp.index):
            logger.debug(
                "Capture candidate found: mover=%d, opponent=%d, index=%d",
                mover.marble_id,
                opp.marble_id,
                opp.index,
            )
            return opp
    return None


def resolve_capture(
    state: GameState,
    rng: random.Random,
    events: list[AnyGameEvent],
) -> Marble | None:
    """Resolve a capture for the marble moved this step.

    The captured marble is sent back to its base and both players' power
    bars are adjusted. Evading marbles are left in place.

    Returns:
        The captured marble, or None if nothing was captured.
    """
    turn = state.current_turn
    mover = state.marbles[turn.moved_marble]

    captive = detect_capture(state, mover)
    if captive is None:
        return None

    if is_evading(state, captive):
        logger.warning(
            "Capture blocked by evading marble: mover=%d, opponent=%d",
            mover.marble_id,
            captive.marble_id,
        )
        return None

    captured_at = captive.index
    captive.index = BASE_INDEX
    events.append(
        MarbleCaptured(
            captor=mover.player,
            captor_marble_id=mover.marble_id,
            captive=captive.player,
            captive_marble_id=captive.marble_id,
            index=captured_at,
            origin=captive.origin,
        )
    )
    logger.info(
        "Marble captured: captor=%s marble=%d, captive=%s marble=%d, at=%d",
        mover.player.value,
        mover.marble_id,
        captive.player.value,
        captive.marble_id,
        captured_at,
    )

    process_capture_power(state, mover.player, captive.player, rng, events)
    return captive
