"""Shared fixtures for game engine tests."""

import random

import pytest

from vexation.schemas.game_engine import (
    Dice,
    GameSettings,
    GameState,
    Marble,
    Player,
    TurnContext,
    TurnPhase,
)
from vexation.services.game import initialize_game
from vexation.services.game.engine.process import advance


class ScriptedRandom(random.Random):
    """Seeded random source whose die rolls are taken from a script.

    Once the script runs out, rolls fall back to the seeded generator.
    Choices and draws other than randint() are never scripted.
    """

    def __init__(self, seed: int = 0, *, rolls: list[int] | None = None):
        super().__init__(seed)
        self.rolls = list(rolls or [])

    def randint(self, a: int, b: int) -> int:
        if self.rolls:
            return self.rolls.pop(0)
        return super().randint(a, b)


def scripted_rng(*rolls: int, seed: int = 0) -> ScriptedRandom:
    """Helper to create a random source that rolls the given faces in order."""
    return ScriptedRandom(seed, rolls=list(rolls))


def create_game(
    human_players: list[Player] | None = None,
    first_player: Player = Player.RED,
) -> GameState:
    """Fresh game in NOT_STARTED phase with every marble at its base."""
    settings = GameSettings(
        human_players=human_players if human_players is not None else [],
        first_player=first_player,
    )
    return initialize_game(settings, random.Random(0))


def place_marbles(state: GameState, player: Player, indexes: list[int]) -> None:
    """Move the player's first marbles onto the given local indexes."""
    for marble, index in zip(state.player_marbles(player), indexes):
        marble.index = index
        marble.prev_index = index


def create_turn_state(
    player: Player = Player.RED,
    positions: dict[Player, list[int]] | None = None,
    dice: tuple[int | None, int | None] | None = None,
    phase: TurnPhase = TurnPhase.TURN_SETUP,
    human_players: list[Player] | None = None,
) -> GameState:
    """Game in progress with the given player on turn."""
    state = create_game(human_players=human_players, first_player=player)
    for owner, indexes in (positions or {}).items():
        place_marbles(state, owner, indexes)

    state.phase = phase
    state.current_turn = TurnContext(player=player)
    state.turn_number = 1
    if dice is not None:
        one, two = dice
        state.dice = Dice(one=one, two=two, doubles=one is not None and one == two)
    return state


def start_human_turn(state: GameState) -> GameState:
    """Run turn setup so the human on turn is offered their legal moves."""
    advance(state, random.Random(0), [])
    assert state.phase == TurnPhase.HUMAN_TURN
    return state


def marble_of(state: GameState, player: Player, k: int = 0) -> Marble:
    """Helper to get a player's k-th marble."""
    return state.player_marbles(player)[k]


def event_types(events: list) -> list[str]:
    return [e.event_type for e in events]


@pytest.fixture
def new_game() -> GameState:
    """Four computer players, red to start."""
    return create_game()


@pytest.fixture
def human_red_game() -> GameState:
    """Red is human, everyone else is a computer player."""
    return create_game(human_players=[Player.RED])


@pytest.fixture
def red_marble_on_track() -> GameState:
    """Human red on turn with marble 0 at index 10 and dice (2, 3)."""
    state = create_turn_state(
        positions={Player.RED: [10]},
        dice=(2, 3),
        human_players=[Player.RED],
    )
    return start_human_turn(state)
