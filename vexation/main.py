import logging
import random

from vexation.config import Settings, get_settings
from vexation.schemas.game_engine import GameSettings, GameState, TurnPhase
from vexation.services.game import (
    AnimationDoneAction,
    GameAction,
    MoveAction,
    StartGameAction,
    initialize_game,
    process_action,
)

logger = logging.getLogger(__name__)


def _next_action(state: GameState) -> GameAction:
    """Action a headless driver feeds back for the current phase."""
    if state.phase == TurnPhase.NOT_STARTED:
        return StartGameAction()
    if state.phase == TurnPhase.WAIT_FOR_ANIMATION:
        return AnimationDoneAction(marble_id=state.current_turn.moved_marble)
    # Human seats take the first legal move
    return MoveAction(move_index=0)


def run_simulation(settings: Settings, rng: random.Random | None = None) -> GameState:
    """Play a complete game without a UI.

    Computer seats play themselves, marble animations are acknowledged
    immediately and human seats always pick the first legal move.

    Raises:
        RuntimeError: If the game has not ended within MAX_SIMULATION_STEPS
            actions, or an action is rejected.
    """
    if rng is None:
        rng = random.Random(settings.RNG_SEED)

    game_settings = GameSettings(
        human_players=settings.HUMAN_PLAYERS,
        first_player=settings.FIRST_PLAYER,
    )
    state = initialize_game(game_settings, rng)
    logger.info(
        "Starting simulation: first_player=%s, humans=%s",
        state.first_player.value,
        [p.value for p in state.human_players],
    )

    for step in range(1, settings.MAX_SIMULATION_STEPS + 1):
        result = process_action(state, _next_action(state), rng)
        if not result.success:
            raise RuntimeError(f"Simulation action rejected: {result.error_code} - {result.error_message}")
        state = result.state

        if state.phase == TurnPhase.GAME_END:
            logger.info(
                "Simulation finished: winner=%s, turns=%d, actions=%d",
                state.winner.value,
                state.turn_number,
                step,
            )
            return state

    raise RuntimeError(f"Game did not finish within {settings.MAX_SIMULATION_STEPS} actions")


def main() -> None:
    settings = get_settings()
    state = run_simulation(settings)
    print(f"Winner: {state.winner.value} after {state.turn_number} turns")


if __name__ == "__main__":
    main()
