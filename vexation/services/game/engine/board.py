"""Board topology and per-player coordinate frames.

Every player numbers the track from its own start cell. Two marbles of
different players are compared by shifting one player's local index into
the other's frame; see shift_index() and is_same_index().

Main board cell indexes (red frame, rotated clockwise for each color):

                   10 11 12
                    9 -- 13
                    8 -- 14
                    7 -- 15
    red             6 -- 16          green
     0  1  2  3  4  5 -- 17 18 19 20 21 22
    47 48 49 50 51 52 53 -- -- -- -- -- 23
    46 45 44 43 42 41 -- 29 28 27 26 25 24
    yellow         40 -- 30           blue
                   39 -- 31
                   38 -- 32
                   37 -- 33
                   36 35 34
"""

from vexation.schemas.game_engine import PLAYER_ORDER, Player

START_INDEX = 0
CENTER_INDEX = 53
FIRST_HOME_INDEX = 48
LAST_HOME_INDEX = 52
CENTER_ENTRANCE_INDEXES = (5, 17, 29)
CENTER_EXIT_INDEX = 41
OUTER_TRACK_LENGTH = 48

BOARD: list[tuple[int, int]] = [
    (-6, 1),  # 0: start
    (-5, 1),
    (-4, 1),
    (-3, 1),
    (-2, 1),
    (-1, 1),  # 5: center entrance
    (-1, 2),
    (-1, 3),
    (-1, 4),
    (-1, 5),
    (-1, 6),
    (0, 6),
    (1, 6),
    (1, 5),
    (1, 4),
    (1, 3),
    (1, 2),
    (1, 1),  # 17: center entrance
    (2, 1),
    (3, 1),
    (4, 1),
    (5, 1),
    (6, 1),
    (6, 0),
    (6, -1),
    (5, -1),
    (4, -1),
    (3, -1),
    (2, -1),
    (1, -1),  # 29: center entrance
    (1, -2),
    (1, -3),
    (1, -4),
    (1, -5),
    (1, -6),
    (0, -6),
    (-1, -6),
    (-1, -5),
    (-1, -4),
    (-1, -3),
    (-1, -2),
    (-1, -1),  # 41: center exit
    (-2, -1),
    (-3, -1),
    (-4, -1),
    (-5, -1),
    (-6, -1),
    (-6, 0),  # 47: home entrance
    (-5, 0),  # 48-52: home
    (-4, 0),
    (-3, 0),
    (-2, 0),
    (-1, 0),
    (0, 0),  # 53: center
]

BASE_INDEX = len(BOARD)

# Base slots in the red frame, one per marble
BASE_SLOTS: list[tuple[float, float]] = [
    (-3.5, 3.0),
    (-4.5, 3.0),
    (-3.0, 4.0),
    (-4.0, 4.0),
    (-5.0, 4.0),
]

MARBLES_PER_PLAYER = len(BASE_SLOTS)


def is_home_index(index: int) -> bool:
    return FIRST_HOME_INDEX <= index <= LAST_HOME_INDEX


def is_outer_index(index: int) -> bool:
    return 0 <= index < OUTER_TRACK_LENGTH


def next_player(player: Player) -> Player:
    """Move clockwise to the next player."""
    return PLAYER_ORDER[(player.ordinal + 1) % len(PLAYER_ORDER)]


def rotate_coords(player: Player, coords: tuple[float, float]) -> tuple[float, float]:
    """Rotate red-frame board coordinates into the given player's frame."""
    col, row = coords
    if player == Player.RED:
        return col, row
    if player == Player.GREEN:
        return row, -col
    if player == Player.BLUE:
        return -col, -row
    return -row, col


def shift_index(index: int, from_player: Player, to_player: Player) -> int:
    """Map a local track index of one player into another player's frame.

    BASE and CENTER are shared by every frame and map to themselves. Home-row
    indices have no counterpart in another frame, so callers must filter
    them out first.

    Raises:
        ValueError: If index is a home-row index or not a board index.
    """
    if index in (BASE_INDEX, CENTER_INDEX):
        return index
    if not is_outer_index(index):
        raise ValueError(f"Cannot shift index {index} between player frames")

    quarter_turns = (4 - from_player.ordinal) % 4 + to_player.ordinal
    return (index + quarter_turns * 36) % OUTER_TRACK_LENGTH


def is_same_index(player_1: Player, index_1: int, player_2: Player, index_2: int) -> bool:
    """Check whether two local indices of (possibly) different players are the same cell."""
    if index_1 == CENTER_INDEX and index_2 == CENTER_INDEX:
        return True
    if index_1 == CENTER_INDEX or index_2 == CENTER_INDEX:
        return False
    return shift_index(index_1, player_1, player_2) == index_2


def world_position(player: Player, index: int) -> tuple[float, float]:
    """World tile coordinates of a player's local board index."""
    col, row = BOARD[index]
    return rotate_coords(player, (float(col), float(row)))


def base_origin(player: Player, slot: int) -> tuple[float, float]:
    """World tile coordinates of a marble's slot in its player's base."""
    return rotate_coords(player, BASE_SLOTS[slot])
