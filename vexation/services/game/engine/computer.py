"""Computer player move selection."""

import random

from vexation.schemas.game_engine import TurnContext


def choose_computer_move(turn: TurnContext, rng: random.Random) -> int:
    """Pick a legal move uniformly at random.

    If a marble is already selected, only that marble's moves are considered.

    Returns:
        Index into turn.possible_moves.
    """
    if turn.selected_marble is not None:
        candidates = [
            i for i, move in enumerate(turn.possible_moves) if move.marble_id == turn.selected_marble
        ]
        if candidates:
            return rng.choice(candidates)
    return rng.randrange(len(turn.possible_moves))
