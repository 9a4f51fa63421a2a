"""Move filtering - removes candidates that break the self-hop and evasion rules."""

import logging

logger = logging.getLogger(__name__)

from vexation.schemas.game_engine import GameState, Marble, MarbleMove, Player

from .board import BASE_INDEX, CENTER_INDEX, is_home_index, is_same_index


def is_evading(state: GameState, marble: Marble) -> bool:
    return marble.marble_id in state.evading


def violates_self_rules(move: MarbleMove, others: list[Marble], jump_self: bool) -> bool:
    """Check the move against the player's other marbles.

    - marbles of the same color cannot land on each other
    - marbles of the same color cannot jump over each other, unless the
      self-jump power-up is active (the center is never passed through)
    """
    occupied = {m.index for m in others}
    if move.destination in occupied:
        return True
    if jump_self:
        return False
    return any(i in occupied for i in move.path[:-1] if i != CENTER_INDEX)


def lands_on_evading_opponent(state: GameState, player: Player, move: MarbleMove) -> bool:
    """Check whether the move lands on an opponent marble that cannot be captured."""
    if is_home_index(move.destination):
        return False
    return any(
        is_same_index(player, move.destination, opp.player, opp.index)
        for opp in state.marbles
        if opp.player != player
        and is_evading(state, opp)
        and opp.index != BASE_INDEX
        and not is_home_index(opp.index)
    )


def filter_moves(state: GameState, player: Player, moves: list[MarbleMove]) -> list[MarbleMove]:
    """Reduce candidate moves to the legal move set.

    Args:
        state: Current game state.
        player: The player on turn.
        moves: Candidates from the move generator.

    Returns:
        Candidates that survive the self-collision, self-jump and evasion checks.
    """
    marbles = state.player_marbles(player)
    jump_self = state.players[player].power_up_status.jump_self_turns > 0

    legal: list[MarbleMove] = []
    for move in moves:
        others = [m for m in marbles if m.marble_id != move.marble_id]
        if violates_self_rules(move, others, jump_self):
            continue
        if lands_on_evading_opponent(state, player, move):
            logger.debug(
                "Filtered move onto evading opponent: marble=%d, destination=%d",
                move.marble_id,
                move.destination,
            )
            continue
        legal.append(move)
    return legal
