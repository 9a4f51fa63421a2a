import random

from vexation.schemas.game_engine import (
    PLAYER_ORDER,
    GameSettings,
    GameState,
    Marble,
    PlayerProgress,
    TurnPhase,
)

from .engine.board import BASE_INDEX, MARBLES_PER_PLAYER, base_origin


def validate_game_settings(game_settings: GameSettings) -> None:
    """Validate game settings before initializing a game."""
    seen = set()
    for player in game_settings.human_players:
        if player in seen:
            raise ValueError(f"Duplicate human player found: {player.value}")
        seen.add(player)


def _initialize_marbles() -> list[Marble]:
    """Create every player's marbles in their base, ids grouped by player."""
    marbles = []
    for player in PLAYER_ORDER:
        for slot in range(MARBLES_PER_PLAYER):
            marbles.append(
                Marble(
                    marble_id=player.ordinal * MARBLES_PER_PLAYER + slot,
                    player=player,
                    index=BASE_INDEX,
                    prev_index=BASE_INDEX,
                    origin=base_origin(player, slot),
                )
            )
    return marbles


def initialize_game(game_settings: GameSettings, rng: random.Random | None = None) -> GameState:
    """Initialize the game state based on the provided game settings."""
    validate_game_settings(game_settings)
    if rng is None:
        rng = random.Random()

    first_player = game_settings.first_player or rng.choice(PLAYER_ORDER)

    return GameState(
        phase=TurnPhase.NOT_STARTED,
        first_player=first_player,
        marbles=_initialize_marbles(),
        players={player: PlayerProgress(player=player) for player in PLAYER_ORDER},
        human_players=list(game_settings.human_players),
        current_turn=None,
    )
