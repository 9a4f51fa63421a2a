"""Tests for capture scenarios.

Critical scenarios tested:
- Landing on an opponent sends it back to its base
- Captures on the center
- Evading marbles are not captured
- No captures inside the home row
- Capture power transfer
"""

import random

import pytest

from vexation.schemas.game_engine import MarbleMove, Player, WhichDie
from vexation.services.game.engine import AnimationDoneAction, MoveAction, process_action
from vexation.services.game.engine.board import BASE_INDEX, CENTER_INDEX, shift_index
from vexation.services.game.engine.captures import detect_capture, resolve_capture
from vexation.services.game.engine.events import MarbleCaptured

from .conftest import create_turn_state, event_types, marble_of, start_human_turn


def moved_to(state, player: Player, index: int):
    """Record that the player's first marble just moved to index."""
    marble = marble_of(state, player)
    marble.index = index
    state.current_turn.last_move = MarbleMove(
        marble_id=marble.marble_id,
        destination=index,
        path=[index],
        which=WhichDie.ONE,
    )
    return marble


class TestBasicCapture:
    """Test basic capture mechanics."""

    def test_landing_on_opponent_sends_it_to_base(self):
        state = create_turn_state(
            positions={Player.RED: [10], Player.GREEN: [shift_index(12, Player.RED, Player.GREEN)]}
        )
        mover = moved_to(state, Player.RED, 12)
        victim = marble_of(state, Player.GREEN)
        events = []

        captured = resolve_capture(state, random.Random(0), events)

        assert captured is not None
        assert captured.marble_id == victim.marble_id
        assert victim.index == BASE_INDEX
        assert mover.index == 12

        capture_events = [e for e in events if isinstance(e, MarbleCaptured)]
        assert len(capture_events) == 1
        assert capture_events[0].captor == Player.RED
        assert capture_events[0].captive == Player.GREEN
        assert capture_events[0].origin == victim.origin

    def test_capture_on_center(self):
        state = create_turn_state(positions={Player.BLUE: [CENTER_INDEX]})
        moved_to(state, Player.RED, CENTER_INDEX)

        captured = resolve_capture(state, random.Random(0), [])

        assert captured is not None
        assert captured.player == Player.BLUE
        assert captured.index == BASE_INDEX

    def test_no_capture_on_empty_cell(self):
        state = create_turn_state(positions={Player.GREEN: [5]})
        moved_to(state, Player.RED, 12)
        events = []

        assert resolve_capture(state, random.Random(0), events) is None
        assert events == []

    def test_capture_power_transfer(self):
        state = create_turn_state(
            positions={Player.RED: [10], Player.YELLOW: [shift_index(20, Player.RED, Player.YELLOW)]}
        )
        state.players[Player.YELLOW].power_bar.power = 5.0
        moved_to(state, Player.RED, 20)

        resolve_capture(state, random.Random(0), [])

        assert state.players[Player.RED].power_bar.power == pytest.approx(3.0)
        assert state.players[Player.YELLOW].power_bar.power == pytest.approx(2.0)


class TestCaptureImmunity:
    """Test cases where nothing is captured."""

    def test_evading_marble_is_not_captured(self):
        state = create_turn_state(
            positions={Player.GREEN: [shift_index(12, Player.RED, Player.GREEN)]}
        )
        victim = marble_of(state, Player.GREEN)
        state.evading.add(victim.marble_id)
        moved_to(state, Player.RED, 12)

        assert resolve_capture(state, random.Random(0), []) is None
        assert victim.index != BASE_INDEX

    def test_no_capture_in_home_row(self):
        state = create_turn_state(positions={Player.GREEN: [50]})
        moved_to(state, Player.RED, 50)

        assert resolve_capture(state, random.Random(0), []) is None
        assert marble_of(state, Player.GREEN).index == 50

    def test_opponent_home_row_is_ignored(self):
        state = create_turn_state(positions={Player.GREEN: [49]})
        mover = moved_to(state, Player.RED, 2)

        assert detect_capture(state, mover) is None

    def test_own_marbles_are_never_captured(self):
        state = create_turn_state(positions={Player.RED: [12, 12]})
        mover = moved_to(state, Player.RED, 12)

        assert detect_capture(state, mover) is None


class TestCaptureFlow:
    """Test captures through the action pipeline."""

    def test_move_then_animation_captures(self):
        state = create_turn_state(
            positions={Player.RED: [10], Player.GREEN: [shift_index(12, Player.RED, Player.GREEN)]},
            dice=(2, 3),
            human_players=[Player.RED],
        )
        start_human_turn(state)
        victim_id = marble_of(state, Player.GREEN).marble_id
        move_index = next(
            i for i, m in enumerate(state.current_turn.possible_moves) if m.destination == 12
        )

        moved = process_action(state, MoveAction(move_index=move_index), random.Random(0))
        assert moved.success
        assert moved.state.marbles[victim_id].index != BASE_INDEX

        result = process_action(
            moved.state, AnimationDoneAction(marble_id=0), random.Random(0)
        )

        assert result.success
        assert result.state.marbles[victim_id].index == BASE_INDEX
        assert result.state.marbles[0].index == 12
        types = event_types(result.events)
        assert types.index("marble_captured") < types.index("power_changed")
        # capture bonus plus move power for two cells
        assert result.state.players[Player.RED].power_bar.power == pytest.approx(3.0 + 20.0 / 48.0)
        assert result.state.players[Player.GREEN].power_bar.power == 0.0
