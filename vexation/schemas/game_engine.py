from enum import Enum

from pydantic import BaseModel, Field


# Players in fixed clockwise turn order
class Player(str, Enum):
    RED = "red"
    GREEN = "green"
    BLUE = "blue"
    YELLOW = "yellow"

    @property
    def ordinal(self) -> int:
        return PLAYER_ORDER.index(self)


PLAYER_ORDER: list[Player] = [Player.RED, Player.GREEN, Player.BLUE, Player.YELLOW]


# Turn phases
class TurnPhase(str, Enum):
    NOT_STARTED = "not_started"
    NEXT_PLAYER = "next_player"
    DICE_ROLL = "dice_roll"
    TURN_SETUP = "turn_setup"
    HUMAN_TURN = "human_turn"
    COMPUTER_TURN = "computer_turn"
    WAIT_FOR_ANIMATION = "wait_for_animation"
    PROCESS_MOVE = "process_move"
    END_TURN = "end_turn"
    GAME_END = "game_end"


class WhichDie(str, Enum):
    ONE = "one"
    TWO = "two"
    BOTH = "both"
    NEITHER = "neither"  # power-up sourced moves


class PowerUp(str, Enum):
    ROLL_AGAIN = "roll_again"
    DOUBLE_DICE = "double_dice"
    EVADE_CAPTURE = "evade_capture"
    SELF_JUMP = "self_jump"
    CAPTURE_NEAREST = "capture_nearest"
    HOME_RUN = "home_run"


class Marble(BaseModel):
    marble_id: int
    player: Player
    index: int
    prev_index: int
    origin: tuple[float, float]


class Dice(BaseModel):
    """Two dice, each face cleared to None once it has been used."""

    one: int | None = None
    two: int | None = None
    doubles: bool = False
    multiplier: int = 1

    def sides(self) -> tuple[int | None, int | None]:
        return self.one, self.two

    def use_die(self, which: WhichDie) -> None:
        if which == WhichDie.ONE:
            self.one = None
        elif which == WhichDie.TWO:
            self.two = None
        elif which == WhichDie.BOTH:
            self.one = None
            self.two = None

        if self.is_empty():
            self.multiplier = 1

    def did_use_any(self) -> bool:
        return self.one is None or self.two is None

    def is_empty(self) -> bool:
        return self.one is None and self.two is None

    def values(self) -> list[tuple[int, WhichDie]]:
        """Working set of move distances, already scaled by the multiplier."""
        values: list[tuple[int, WhichDie]] = []
        if self.one is not None:
            values.append((self.one * self.multiplier, WhichDie.ONE))
        if self.two is not None:
            values.append((self.two * self.multiplier, WhichDie.TWO))
        if self.one is not None and self.two is not None:
            values.append(((self.one + self.two) * self.multiplier, WhichDie.BOTH))
        return values


class MarbleMove(BaseModel):
    marble_id: int
    destination: int
    path: list[int]
    which: WhichDie
    power_up: PowerUp | None = None

    def key(self) -> tuple:
        return (self.marble_id, tuple(self.path), WHICH_DIE_ORDER[self.which])


WHICH_DIE_ORDER: dict[WhichDie, int] = {
    WhichDie.ONE: 0,
    WhichDie.TWO: 1,
    WhichDie.BOTH: 2,
    WhichDie.NEITHER: 3,
}


class PowerUpStatus(BaseModel):
    evade_capture_turns: int = 0
    jump_self_turns: int = 0
    capture_nearest: bool = False
    home_run: bool = False


class PowerBar(BaseModel):
    power: float = 0.0
    power_up_count: int = 0


class PlayerProgress(BaseModel):
    player: Player
    turn_move_count: int = 0
    consecutive_empty_turns: int = 0
    power_ups: list[PowerUp | None] = Field(default_factory=lambda: [None, None, None])
    power_up_status: PowerUpStatus = Field(default_factory=PowerUpStatus)
    power_bar: PowerBar = Field(default_factory=PowerBar)


class TurnContext(BaseModel):
    player: Player
    possible_moves: list[MarbleMove] = []
    selected_marble: int | None = None
    selected_move_index: int | None = None
    last_move: MarbleMove | None = None
    end_reason: str = "dice_used"

    @property
    def moved_marble(self) -> int | None:
        return self.last_move.marble_id if self.last_move else None

    def get_moves(self, marble_id: int) -> list[MarbleMove]:
        return [m for m in self.possible_moves if m.marble_id == marble_id]

    def get_selected_move(self) -> MarbleMove | None:
        if self.selected_move_index is None:
            return None
        return self.possible_moves[self.selected_move_index]


class GameSettings(BaseModel):
    human_players: list[Player] = [Player.RED]
    first_player: Player | None = None


# Game state for the turn phase controller
class GameState(BaseModel):
    """Complete engine state.

    Per-turn data lives in current_turn and is passed through the phase
    handlers explicitly; process_action works on a deep copy of this model.
    """

    phase: TurnPhase
    first_player: Player = Player.RED
    marbles: list[Marble]
    dice: Dice = Field(default_factory=Dice)
    players: dict[Player, PlayerProgress]
    human_players: list[Player] = []
    current_turn: TurnContext | None = None
    evading: set[int] = Field(default_factory=set)
    winner: Player | None = None
    turn_number: int = 0
    event_seq: int = 0  # Next sequence number for events (monotonically increasing)

    def player_marbles(self, player: Player) -> list[Marble]:
        return [m for m in self.marbles if m.player == player]
