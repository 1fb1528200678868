from __future__ import annotations

import pytest
from hypothesis import given, strategies as st

from bingo_duel.game import GameController
from bingo_duel.grid import PlayerId
from bingo_duel.rng import FixedLayoutSource

from conftest import identity_layout, latin_layout


def _controller(*layouts, listeners=()):
    if not layouts:
        layouts = (identity_layout(), latin_layout())
    return GameController(FixedLayoutSource(layouts), listeners=listeners)


def _snapshot(state):
    return (
        state.current_turn,
        state.is_over,
        state.winner,
        {p: [c.marked for c in g.cells] for p, g in state.grids.items()},
    )


def test_start_game_fresh_state(recorder):
    controller = _controller(listeners=[recorder])
    state = controller.start_game()
    assert state.current_turn is PlayerId.PLAYER_1
    assert state.is_over is False
    assert state.winner is None
    assert set(state.grids) == {PlayerId.PLAYER_1, PlayerId.PLAYER_2}
    assert state.grid(PlayerId.PLAYER_1).numbers() == identity_layout()
    assert state.grid(PlayerId.PLAYER_2).numbers() == latin_layout()
    assert recorder.events == [("reset",), ("turn", PlayerId.PLAYER_1)]


def test_call_before_start_is_a_programming_error():
    with pytest.raises(RuntimeError):
        _controller().call_number(1)


def test_call_marks_both_boards():
    controller = _controller()
    state = controller.start_game()
    controller.call_number(13)
    assert state.grid(PlayerId.PLAYER_1).marked_numbers() == [13]
    assert state.grid(PlayerId.PLAYER_2).marked_numbers() == [13]
    assert state.calls == [13]


def test_row_zero_of_player_one_only(recorder):
    controller = _controller(listeners=[recorder])
    controller.start_game()
    for n in (5, 3, 1, 4, 2):
        result = controller.call_number(n)
    assert (result.p1_lines, result.p2_lines) == (1, 0)
    assert result.state.is_over is False
    assert result.accepted is True
    assert recorder.events[-2] == ("score", 1, 0)


def test_turn_alternates_on_non_winning_calls(recorder):
    controller = _controller(listeners=[recorder])
    state = controller.start_game()
    seen = []
    for n in (1, 2, 3, 4):
        controller.call_number(n)
        seen.append(state.current_turn)
    assert seen == [PlayerId.PLAYER_2, PlayerId.PLAYER_1, PlayerId.PLAYER_2, PlayerId.PLAYER_1]
    turns = [e[1] for e in recorder.events if e[0] == "turn"]
    assert turns == [PlayerId.PLAYER_1] + seen


@pytest.mark.parametrize("number", [0, 26])
def test_out_of_range_call_changes_nothing_but_still_reports(recorder, number):
    controller = _controller(listeners=[recorder])
    state = controller.start_game()
    before = {p: [c.marked for c in g.cells] for p, g in state.grids.items()}
    result = controller.on_number_called(number)
    after = {p: [c.marked for c in g.cells] for p, g in state.grids.items()}
    assert before == after
    assert state.calls == []
    assert (result.p1_lines, result.p2_lines) == (0, 0)
    assert ("score", 0, 0) in recorder.events
    assert state.is_over is False


def test_repeat_call_is_a_no_op_on_the_boards():
    controller = _controller()
    state = controller.start_game()
    controller.call_number(9)
    marks = {p: [c.marked for c in g.cells] for p, g in state.grids.items()}
    result = controller.call_number(9)
    assert {p: [c.marked for c in g.cells] for p, g in state.grids.items()} == marks
    assert result.accepted is True
    assert state.current_turn is PlayerId.PLAYER_1


def test_player_one_bingo_by_rows_then_game_is_frozen(recorder):
    controller = _controller(listeners=[recorder])
    state = controller.start_game()
    result = None
    for n in range(1, 26):
        result = controller.call_number(n)
        if state.is_over:
            break
    # four full rows plus the first cell of row 4 completes column 0
    assert len(state.calls) == 21
    assert result.p1_lines == 5
    # the same 21 numbers fill row 0 and column 4 of the latin board
    assert result.p2_lines == 2
    assert state.is_over is True
    assert state.winner is PlayerId.PLAYER_1
    # 21 calls flip the turn 20 times; the winning call does not flip it
    assert state.current_turn is PlayerId.PLAYER_1
    assert recorder.events[-1] == ("over", PlayerId.PLAYER_1)

    frozen = _snapshot(state)
    events = len(recorder.events)
    late = controller.call_number(22)
    assert late.accepted is False
    assert _snapshot(state) == frozen
    assert state.calls[-1] == 21
    assert len(recorder.events) == events


def test_player_two_wins_when_only_they_reach_five():
    controller = _controller(latin_layout(), identity_layout())
    state = controller.start_game()
    for n in range(1, 26):
        controller.call_number(n)
        if state.is_over:
            break
    assert state.winner is PlayerId.PLAYER_2


def test_simultaneous_bingo_goes_to_player_one(recorder):
    controller = _controller(identity_layout(), identity_layout(), listeners=[recorder])
    state = controller.start_game()
    for n in range(1, 22):
        result = controller.call_number(n)
    assert (result.p1_lines, result.p2_lines) == (5, 5)
    assert state.winner is PlayerId.PLAYER_1
    assert ("over", PlayerId.PLAYER_2) not in recorder.events


def test_scores_reported_to_listeners_are_clamped(recorder):
    controller = _controller(identity_layout(), identity_layout(), listeners=[recorder])
    controller.start_game()
    for n in range(1, 22):
        result = controller.call_number(n)
    assert result.p1_lines == 5
    scores = [e for e in recorder.events if e[0] == "score"]
    assert all(0 <= p1 <= 5 and 0 <= p2 <= 5 for _, p1, p2 in scores)


def test_restart_discards_previous_game(recorder):
    controller = _controller(listeners=[recorder])
    first = controller.start_game()
    for n in range(1, 22):
        controller.call_number(n)
    assert first.is_over

    second = controller.restart()
    assert second is not first
    assert second.is_over is False
    assert second.winner is None
    assert second.current_turn is PlayerId.PLAYER_1
    assert second.calls == []
    assert all(not c.marked for g in second.grids.values() for c in g.cells)
    assert second.game_index == first.game_index + 1
    assert recorder.events[-2:] == [("reset",), ("turn", PlayerId.PLAYER_1)]


def test_seeded_controllers_replay_the_same_layouts():
    a = GameController(seed=99).start_game()
    b = GameController(seed=99).start_game()
    c = GameController(seed=100).start_game()
    for player in PlayerId:
        assert a.grid(player).numbers() == b.grid(player).numbers()
    assert a.grid(PlayerId.PLAYER_1).numbers() != c.grid(PlayerId.PLAYER_1).numbers()
    assert a.grid(PlayerId.PLAYER_1).numbers() != a.grid(PlayerId.PLAYER_2).numbers()


def test_unseeded_controller_records_drawn_seed():
    controller = GameController()
    state = controller.start_game()
    assert controller.seed is not None
    assert state.seed == controller.seed


@given(
    seed=st.integers(min_value=0, max_value=10_000),
    calls=st.lists(st.integers(min_value=0, max_value=26), max_size=80),
)
def test_turn_flips_until_win_then_sticks(seed, calls):
    controller = GameController(seed=seed)
    state = controller.start_game()
    for n in calls:
        was_over = state.is_over
        turn_before = state.current_turn
        result = controller.call_number(n)
        if was_over:
            assert result.accepted is False
            assert state.current_turn is turn_before
        elif state.is_over:
            assert state.current_turn is turn_before
            assert max(result.p1_lines, result.p2_lines) >= 5
            if result.p1_lines >= 5:
                assert state.winner is PlayerId.PLAYER_1
            else:
                assert state.winner is PlayerId.PLAYER_2
        else:
            assert state.current_turn is turn_before.other()
            assert result.p1_lines < 5 and result.p2_lines < 5


def test_call_history_skips_calls_that_mark_nothing():
    controller = _controller()
    state = controller.start_game()
    for n in (0, 4, 26, 4, True, 9):
        controller.call_number(n)
    assert state.calls == [4, 9]
    # every one of the six calls was accepted and flipped the turn
    assert state.current_turn is PlayerId.PLAYER_1
