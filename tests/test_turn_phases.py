"""Tests for the turn phase controller.

Critical scenarios tested:
- Starting the game rolls for the first player
- Turns without legal moves are skipped in order
- Human selection by click and commit by destination
- Remaining dice loop back to move selection
- Doubles roll again
- Done ends the turn early
- Computer turns run until the animation signal
"""

import random

import pytest

from vexation.schemas.game_engine import Player, TurnPhase
from vexation.services.game.engine import (
    AnimationDoneAction,
    ClickAction,
    DoneAction,
    MoveAction,
    StartGameAction,
    process_action,
)
from vexation.services.game.engine.board import BASE_INDEX
from vexation.services.game.engine.events import TurnEnded, TurnStarted
from vexation.services.game.engine.process import advance

from .conftest import create_turn_state, event_types, scripted_rng, start_human_turn


class TestStartGame:
    """Test the start of the game."""

    def test_computer_first_player_moves_right_away(self, new_game):
        result = process_action(new_game, StartGameAction(), scripted_rng(1, 2))

        assert result.success
        state = result.state
        assert state.phase == TurnPhase.WAIT_FOR_ANIMATION
        assert state.current_turn.player == Player.RED
        assert state.marbles[state.current_turn.moved_marble].player == Player.RED
        assert event_types(result.events)[:3] == ["game_started", "turn_started", "dice_rolled"]
        assert "marble_moved" in event_types(result.events)

    def test_empty_turns_are_skipped_in_order(self, human_red_game):
        rng = scripted_rng(3, 4, 2, 3, 4, 5, 2, 4, 1, 3)

        result = process_action(human_red_game, StartGameAction(), rng)

        assert result.success
        state = result.state
        assert state.phase == TurnPhase.HUMAN_TURN
        assert state.current_turn.player == Player.RED
        assert state.turn_number == 5

        ended = [e for e in result.events if isinstance(e, TurnEnded)]
        assert [e.player for e in ended] == [Player.RED, Player.GREEN, Player.BLUE, Player.YELLOW]
        assert all(e.reason == "no_legal_moves" for e in ended)
        started = [e.player for e in result.events if isinstance(e, TurnStarted)]
        assert started == [Player.RED, Player.GREEN, Player.BLUE, Player.YELLOW, Player.RED]

        for player in (Player.GREEN, Player.BLUE, Player.YELLOW):
            assert state.players[player].consecutive_empty_turns == 1
        # one base exit and one combined move for each of the five marbles
        assert len(state.current_turn.possible_moves) == 10
        assert event_types(result.events)[-1] == "awaiting_choice"

    def test_input_is_not_mutated(self, human_red_game):
        before = human_red_game.model_copy(deep=True)
        process_action(human_red_game, StartGameAction(), scripted_rng(1, 3))
        assert human_red_game == before


class TestHumanTurn:
    """Test click handling during a human turn."""

    def test_click_selects_marble(self, red_marble_on_track):
        result = process_action(red_marble_on_track, ClickAction(index=10), random.Random(0))

        assert result.success
        assert result.state.phase == TurnPhase.HUMAN_TURN
        assert result.state.current_turn.selected_marble == 0
        assert event_types(result.events) == ["marble_selected"]
        assert result.events[0].destinations == [12, 13, 15]

    def test_clicking_selected_marble_again_does_nothing(self, red_marble_on_track):
        selected = process_action(red_marble_on_track, ClickAction(index=10)).state

        result = process_action(selected, ClickAction(index=10))

        assert result.success
        assert result.events == []
        assert result.state.current_turn.selected_marble == 0

    def test_click_destination_commits_move(self, red_marble_on_track):
        selected = process_action(red_marble_on_track, ClickAction(index=10)).state

        result = process_action(selected, ClickAction(index=13))

        assert result.success
        state = result.state
        assert state.phase == TurnPhase.WAIT_FOR_ANIMATION
        assert state.marbles[0].index == 13
        assert state.marbles[0].prev_index == 10
        assert state.dice.sides() == (2, None)
        assert event_types(result.events) == ["marble_moved", "dice_used"]
        assert result.events[0].target == (1.0, 5.0)

    def test_click_elsewhere_clears_selection(self, red_marble_on_track):
        selected = process_action(red_marble_on_track, ClickAction(index=10)).state

        result = process_action(selected, ClickAction(index=30))

        assert result.success
        assert result.state.current_turn.selected_marble is None
        assert event_types(result.events) == ["selection_cleared"]

    def test_click_without_selection_is_ignored(self, red_marble_on_track):
        result = process_action(red_marble_on_track, ClickAction(index=BASE_INDEX))

        assert result.success
        assert result.events == []
        assert result.state.phase == TurnPhase.HUMAN_TURN

    def test_click_base_selects_first_marble_that_can_leave(self):
        state = create_turn_state(dice=(6, 2), human_players=[Player.RED])
        start_human_turn(state)

        result = process_action(state, ClickAction(index=BASE_INDEX))

        assert result.state.current_turn.selected_marble == 0
        assert result.events[0].destinations == [0, 2]


class TestMoveProcessing:
    """Test what happens after a marble finished moving."""

    def test_remaining_die_returns_to_move_selection(self, red_marble_on_track):
        moved = process_action(red_marble_on_track, MoveAction(move_index=1)).state

        result = process_action(moved, AnimationDoneAction(marble_id=0), random.Random(0))

        assert result.success
        state = result.state
        assert state.phase == TurnPhase.HUMAN_TURN
        assert state.players[Player.RED].power_bar.power == pytest.approx(30.0 / 48.0)
        assert [m.path for m in state.current_turn.possible_moves] == [[14, 15]]
        assert state.current_turn.selected_marble == 0
        assert event_types(result.events) == ["power_changed", "awaiting_choice"]

    def test_used_dice_end_the_turn(self, red_marble_on_track):
        moved = process_action(red_marble_on_track, MoveAction(move_index=2)).state
        rng = scripted_rng(2, 3, 4, 5, 2, 4, 5, 4)

        result = process_action(moved, AnimationDoneAction(marble_id=0), rng)

        assert result.success
        ended = [e for e in result.events if isinstance(e, TurnEnded)]
        assert ended[0].player == Player.RED
        assert ended[0].reason == "dice_used"
        assert ended[0].next_player == Player.GREEN
        assert result.state.current_turn.player == Player.RED
        assert result.state.turn_number == 5
        assert result.state.players[Player.RED].consecutive_empty_turns == 0

    def test_doubles_roll_again(self):
        state = create_turn_state(
            positions={Player.RED: [10]},
            dice=(2, 2),
            human_players=[Player.RED],
        )
        start_human_turn(state)
        moved = process_action(state, MoveAction(move_index=2)).state
        assert moved.dice.is_empty()

        result = process_action(moved, AnimationDoneAction(marble_id=0), scripted_rng(3, 5))

        assert result.success
        assert result.state.phase == TurnPhase.HUMAN_TURN
        assert result.state.current_turn.player == Player.RED
        assert result.state.dice.sides() == (3, 5)
        assert "turn_ended" not in event_types(result.events)
        assert "dice_rolled" in event_types(result.events)

    def test_no_moves_on_doubles_rolls_again(self):
        state = create_turn_state(dice=(3, 3), human_players=[Player.RED])
        rng = scripted_rng(1, 4)
        events = []

        advance(state, rng, events)

        assert state.phase == TurnPhase.HUMAN_TURN
        assert state.dice.sides() == (1, 4)
        assert event_types(events) == ["dice_rolled", "awaiting_choice"]


class TestDone:
    """Test ending a human turn early."""

    def test_done_ends_turn(self, red_marble_on_track):
        rng = scripted_rng(2, 3, 4, 5, 2, 4, 2, 3)

        result = process_action(red_marble_on_track, DoneAction(), rng)

        assert result.success
        ended = [e for e in result.events if isinstance(e, TurnEnded)]
        assert ended[0].player == Player.RED
        assert ended[0].reason == "done"
        assert result.state.phase == TurnPhase.HUMAN_TURN
        assert result.state.current_turn.player == Player.RED
        assert result.state.turn_number == 5

    def test_done_on_doubles_rolls_again(self):
        state = create_turn_state(
            positions={Player.RED: [10]},
            dice=(2, 2),
            human_players=[Player.RED],
        )
        start_human_turn(state)

        result = process_action(state, DoneAction(), scripted_rng(3, 5))

        assert result.success
        assert result.state.current_turn.player == Player.RED
        assert "turn_ended" not in event_types(result.events)
        assert result.state.dice.sides() == (3, 5)
