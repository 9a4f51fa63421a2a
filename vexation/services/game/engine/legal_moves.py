"""Legal move calculation for the marbles of the player on turn."""

import logging

logger = logging.getLogger(__name__)

from vexation.schemas.game_engine import (
    Dice,
    GameState,
    Marble,
    MarbleMove,
    Player,
    PowerUp,
    WhichDie,
)

from .board import (
    BASE_INDEX,
    CENTER_ENTRANCE_INDEXES,
    CENTER_EXIT_INDEX,
    CENTER_INDEX,
    FIRST_HOME_INDEX,
    LAST_HOME_INDEX,
    START_INDEX,
    is_home_index,
    is_outer_index,
    shift_index,
)
from .filtering import filter_moves

# Literal die faces that let a marble leave its base
BASE_EXIT_FACES = (1, 6)
CENTER_EXIT_FACE = 1


def _move(
    marble_id: int,
    path: list[int],
    which: WhichDie,
    power_up: PowerUp | None = None,
) -> MarbleMove:
    return MarbleMove(
        marble_id=marble_id,
        destination=path[-1],
        path=path,
        which=which,
        power_up=power_up,
    )


def enter_center_path(first: int, end: int) -> list[int] | None:
    """Path that turns into the center instead of landing on `end`.

    Returns None unless the cell before `end` is a center entrance. The path
    covers `first` up to that entrance and then finishes on CENTER.
    """
    if end - 1 not in CENTER_ENTRANCE_INDEXES:
        return None
    return [*range(first, end), CENTER_INDEX]


def _other_die(dice: Dice, which: WhichDie) -> int | None:
    return dice.two if which == WhichDie.ONE else dice.one


def base_exit_rules(dice: Dice, marble_id: int) -> list[MarbleMove]:
    """Moves for a marble still in its base.

    Only a literal face of 1 or 6 takes a marble out; the other die may then
    carry it further along the track in the same move.
    """
    moves: list[MarbleMove] = []
    for face, which in ((dice.one, WhichDie.ONE), (dice.two, WhichDie.TWO)):
        if face not in BASE_EXIT_FACES:
            continue
        moves.append(_move(marble_id, [START_INDEX], which))

        other = _other_die(dice, which)
        if other is None:
            continue
        dest = START_INDEX + other * dice.multiplier
        moves.append(_move(marble_id, list(range(START_INDEX, dest + 1)), WhichDie.BOTH))
        center_path = enter_center_path(START_INDEX, dest)
        if center_path is not None:
            moves.append(_move(marble_id, center_path, WhichDie.BOTH))
    return moves


def center_exit_rules(dice: Dice, marble_id: int) -> list[MarbleMove]:
    """Moves for a marble sitting on the center space.

    A face of 1 moves it to the center exit; the other die may extend the move.
    """
    moves: list[MarbleMove] = []
    for face, which in ((dice.one, WhichDie.ONE), (dice.two, WhichDie.TWO)):
        if face != CENTER_EXIT_FACE:
            continue
        moves.append(_move(marble_id, [CENTER_EXIT_INDEX], which))

        other = _other_die(dice, which)
        if other is None:
            continue
        dest = CENTER_EXIT_INDEX + other * dice.multiplier
        if dest <= LAST_HOME_INDEX:
            moves.append(
                _move(marble_id, list(range(CENTER_EXIT_INDEX, dest + 1)), WhichDie.BOTH)
            )
    return moves


def _is_valid_basic_path(start: int, path: list[int]) -> bool:
    dest = path[-1]
    if dest <= LAST_HOME_INDEX:
        return True
    # the center is okay as long as the marble did not start in the home row
    # and the path does not run through the home row
    return (
        dest == CENTER_INDEX
        and not is_home_index(start)
        and not any(is_home_index(i) for i in path)
    )


def basic_rules(dice: Dice, marble: Marble) -> list[MarbleMove]:
    """Moves for a marble on the track or in its home row."""
    moves: list[MarbleMove] = []
    for value, which in dice.values():
        dest = marble.index + value
        moves.append(_move(marble.marble_id, list(range(marble.index + 1, dest + 1)), which))

        # turning into the center takes both dice
        if which != WhichDie.BOTH:
            continue
        center_path = enter_center_path(marble.index + 1, dest)
        if center_path is not None:
            moves.append(_move(marble.marble_id, center_path, which))

    return [m for m in moves if _is_valid_basic_path(marble.index, m.path)]


def home_run_moves(state: GameState, player: Player) -> list[MarbleMove]:
    """Home Run: any marble outside the home row may jump to an open home slot."""
    marbles = state.player_marbles(player)
    occupied = {m.index for m in marbles if is_home_index(m.index)}
    open_slots = [i for i in range(FIRST_HOME_INDEX, LAST_HOME_INDEX + 1) if i not in occupied]

    return [
        _move(marble.marble_id, [slot], WhichDie.NEITHER, PowerUp.HOME_RUN)
        for marble in marbles
        if not is_home_index(marble.index)
        for slot in open_slots
    ]


def _distance_to(mover_index: int, target: int) -> int | None:
    """Forward distance from a mover to a target in the mover's frame, if reachable."""
    if target == CENTER_INDEX:
        if mover_index == CENTER_INDEX:
            return None
        entrance = next((e for e in CENTER_ENTRANCE_INDEXES if e >= mover_index), None)
        if entrance is None:
            return None
        return entrance - mover_index + 1

    if mover_index == CENTER_INDEX:
        if target < CENTER_EXIT_INDEX:
            return None
        return target - CENTER_EXIT_INDEX + 1

    if target <= mover_index:
        return None
    return target - mover_index


def capture_nearest_moves(state: GameState, player: Player) -> list[MarbleMove]:
    """Capture Nearest: each marble may land on the closest opponent ahead of it."""
    targets = [
        shift_index(opp.index, opp.player, player)
        for opp in state.marbles
        if opp.player != player
        and (is_outer_index(opp.index) or opp.index == CENTER_INDEX)
        and opp.marble_id not in state.evading
    ]

    moves: list[MarbleMove] = []
    for marble in state.player_marbles(player):
        if not (is_outer_index(marble.index) or marble.index == CENTER_INDEX):
            continue

        reachable: list[tuple[int, int]] = []
        for target in targets:
            distance = _distance_to(marble.index, target)
            if distance is not None:
                reachable.append((distance, target))
        if not reachable:
            continue
        _, target = min(reachable)
        moves.append(_move(marble.marble_id, [target], WhichDie.NEITHER, PowerUp.CAPTURE_NEAREST))
    return moves


def generate_moves(state: GameState, player: Player) -> list[MarbleMove]:
    """Enumerate every candidate move before filtering.

    Duplicate (marble, path, die) candidates are collapsed and the result is
    ordered by marble, then path, then die.
    """
    unique: dict[tuple, MarbleMove] = {}
    dice = state.dice

    if not dice.is_empty():
        for marble in state.player_marbles(player):
            if marble.index == BASE_INDEX:
                candidates = base_exit_rules(dice, marble.marble_id)
            elif marble.index == CENTER_INDEX:
                candidates = center_exit_rules(dice, marble.marble_id)
            else:
                candidates = basic_rules(dice, marble)
            for move in candidates:
                unique.setdefault(move.key(), move)

    status = state.players[player].power_up_status
    if status.home_run:
        for move in home_run_moves(state, player):
            unique.setdefault(move.key(), move)
    if status.capture_nearest:
        for move in capture_nearest_moves(state, player):
            unique.setdefault(move.key(), move)

    return sorted(unique.values(), key=MarbleMove.key)


def get_legal_moves(state: GameState, player: Player) -> list[MarbleMove]:
    """Determine the legal moves for a player given the current dice and power-ups.

    Args:
        state: Current game state.
        player: The player whose marbles to check.

    Returns:
        The filtered, authoritative legal move set.
    """
    candidates = generate_moves(state, player)
    legal_moves = filter_moves(state, player, candidates)
    logger.debug(
        "Legal moves: player=%s, dice=%s, candidates=%d, legal=%d",
        player.value,
        state.dice.sides(),
        len(candidates),
        len(legal_moves),
    )
    return legal_moves


def has_any_legal_moves(state: GameState, player: Player) -> bool:
    """Quick check if the player has any legal move with the current dice."""
    return bool(get_legal_moves(state, player))
