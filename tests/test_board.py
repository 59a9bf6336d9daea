import random

import pytest

from conftest import (
    BLUE, CIRCLE, HEART, MISSES, RED, SCENARIO_A, SQUARE,
    RecordingSound, fill_row, index_of, set_solution,
)
from game.board import Board
from game.ruleset import DEFAULT_RULES, ConfigurationError
from game.shape import CORRECT, EXISTS, NORMAL


def row_states(board, row):
    return [s.state if s else None for s in board.grid.row(row)]


# --- Placement and removal ---

def test_new_board_is_editing_first_row(board):
    assert board.current_row == 0
    assert board.active_col == 0
    assert board.checked_rows == [False] * 10
    assert not board.is_over
    assert board.remaining_attempts() == 10


def test_select_places_copy_and_moves_active_col(board, sound):
    result = board.select_shape(index_of(board, HEART, RED))
    assert result.accepted
    placed = board.grid.get(0, 0)
    assert placed.same_identity(board.inventory[index_of(board, HEART, RED)])
    assert placed is not board.inventory[index_of(board, HEART, RED)]
    assert board.active_col == 1
    assert board.inventory.selected_index is None
    assert sound.cues == ["pop"]


def test_same_shape_twice_in_row_is_a_no_op(board):
    i = index_of(board, HEART, RED)
    board.select_shape(i)
    result = board.select_shape(i)
    assert not result.accepted
    assert board.grid.get(0, 1) is None
    assert board.active_col == 1


def test_select_on_full_row_is_a_no_op(board):
    fill_row(board, MISSES)
    result = board.select_shape(index_of(board, HEART, RED))
    assert not result.accepted
    assert board.active_col == -1
    assert board.inventory.is_clicked_by_index(index_of(board, HEART, RED))


def test_remove_last_frees_column_and_usage(board, sound):
    fill_row(board, MISSES[:3])
    i = index_of(board, *MISSES[2])
    assert board.inventory.is_clicked_by_index(i)

    result = board.remove_last()
    assert result.accepted
    assert board.grid.get(0, 2) is None
    assert board.active_col == 2
    assert not board.inventory.is_clicked_by_index(i)
    assert sound.cues[-1] == "remove"


def test_remove_on_empty_row_is_rejected(board):
    assert not board.remove_last().accepted


def test_confirm_requires_full_row(board):
    fill_row(board, MISSES[:4])
    result = board.confirm_row()
    assert not result.accepted
    assert board.checked_rows[0] is False


# --- Scoring and progression ---

def test_exact_guess_wins(board, sound, notices):
    fill_row(board, SCENARIO_A)
    result = board.confirm_row()
    assert result.accepted
    assert board.is_over and board.is_won
    assert row_states(board, 0) == [CORRECT] * 5
    assert board.checked_rows[0]
    assert result.notice.kind == "win"
    assert notices[-1].message == "You found the answer in 1 step!"
    assert sound.cues[-2:] == ["check", "win"]


def test_non_winning_row_advances(board):
    fill_row(board, [(SQUARE, RED), (HEART, RED)] + MISSES[1:4])
    assert board.confirm_row().accepted
    assert row_states(board, 0) == [NORMAL, EXISTS, NORMAL, NORMAL, NORMAL]
    assert board.current_row == 1
    assert board.active_col == 0
    assert board.checked_rows[:2] == [True, False]
    assert board.remaining_attempts() == 9


def test_checked_row_is_immutable(board):
    fill_row(board, MISSES)
    board.confirm_row()
    assert board.current_row == 1
    # Edits now go to row 1 only
    board.select_shape(index_of(board, HEART, RED))
    assert board.grid.get(1, 0) is not None
    assert board.grid.get(0, 0).same_identity(board.inventory[index_of(board, *MISSES[0])])


def test_correct_slots_are_carried_forward(board):
    fill_row(board, [(HEART, RED)] + MISSES[:4])
    board.confirm_row()

    carried = board.grid.get(1, 0)
    original = board.grid.get(0, 0)
    assert carried.state == CORRECT
    assert carried.same_identity(original)
    assert carried.number == original.number
    assert carried is not original
    assert board.active_col == 1

    # The carried column cannot be removed or reused
    assert not board.remove_last().accepted
    assert not board.select_shape(index_of(board, HEART, RED)).accepted


def test_carry_forward_violation_shows_tip(board, sound, notices):
    fill_row(board, [(CIRCLE, BLUE)] + MISSES[:4])
    board.confirm_row()
    assert board.grid.get(0, 0).state == EXISTS

    fill_row(board, MISSES)
    result = board.confirm_row()
    assert not result.accepted
    assert result.notice.kind == "tip"
    assert notices[-1].title == "Tips"
    assert sound.cues[-1] == "wrong"
    assert board.current_row == 1
    assert board.checked_rows[1] is False
    assert row_states(board, 1) == [NORMAL] * 5

    # Reusing the marked shape anywhere unblocks the check
    board.remove_last()
    board.select_shape(index_of(board, CIRCLE, BLUE))
    assert board.confirm_row().accepted
    assert board.grid.get(1, 4).state == EXISTS


def test_ten_failed_rows_lose(board, sound, notices):
    for _ in range(10):
        fill_row(board, MISSES)
        assert board.confirm_row().accepted

    assert board.is_over and not board.is_won
    assert board.current_row == 9
    assert all(board.checked_rows)
    assert notices[-1].kind == "loss"
    assert [(e["type"], e["color"]) for e in notices[-1].solution] == SCENARIO_A
    assert sound.cues[-1] == "lose"
    assert board.get_current_state().solution is not None
    assert board.share_text() == "Challenge failed in Shap10r!"


def test_no_actions_after_game_over(board):
    fill_row(board, SCENARIO_A)
    board.confirm_row()
    calls = []
    board.subscribe(lambda: calls.append(1))

    assert not board.select_shape(index_of(board, *MISSES[0])).accepted
    assert not board.remove_last().accepted
    assert not board.confirm_row().accepted
    assert calls == []
    assert board.inventory.is_clicked_by_index(index_of(board, *MISSES[0]))


def test_win_in_later_row_counts_steps(board, notices):
    fill_row(board, [(HEART, RED)] + MISSES[:4])
    board.confirm_row()
    fill_row(board, SCENARIO_A[1:])
    assert board.confirm_row().accepted
    assert board.is_won
    assert board.steps == 2
    assert notices[-1].message == "You found the answer in 2 steps!"
    assert board.share_text("https://example.org") == (
        "I found the answer in 2 steps in Shap10r! Try it: https://example.org"
    )


# --- Reset, observers, collaborators ---

def test_reset_starts_fresh_game(board):
    fill_row(board, MISSES)
    board.confirm_row()
    old_inventory = board.inventory
    result = board.reset()
    assert result.accepted
    assert board.current_row == 0
    assert board.active_col == 0
    assert board.checked_rows == [False] * 10
    assert board.grid.row(0) == [None] * 5
    assert board.inventory is not old_inventory
    assert not board.inventory.clicked
    assert len(board.solution) == 5


def test_win_notice_restart_resets(board, notices):
    fill_row(board, SCENARIO_A)
    board.confirm_row()
    notices[-1].on_restart()
    assert not board.is_over
    assert board.current_row == 0


def test_observers_are_notified_on_changes_only(board):
    calls = []
    unsubscribe = board.subscribe(lambda: calls.append(1))
    board.select_shape(index_of(board, HEART, RED))
    board.select_shape(index_of(board, HEART, RED))
    board.remove_last()
    assert len(calls) == 2
    unsubscribe()
    board.select_shape(index_of(board, HEART, RED))
    assert len(calls) == 2


def test_sound_failures_do_not_affect_state():
    class BrokenSound:
        def play(self, cue):
            raise RuntimeError("no audio device")

    b = Board(rng=random.Random(1), sound=BrokenSound())
    set_solution(b, SCENARIO_A)
    fill_row(b, SCENARIO_A)
    assert b.grid.is_row_full(0)
    assert b.confirm_row().accepted
    assert b.is_won


def test_share_plays_click(board, sound):
    fill_row(board, SCENARIO_A)
    board.confirm_row()
    assert board.share() == "I found the answer in 1 step in Shap10r!"
    assert sound.cues[-1] == "click"


def test_snapshot_hides_solution_until_over(board):
    board.select_shape(index_of(board, HEART, RED))
    state = board.get_current_state()
    assert state.solution is None
    assert state.target_number == board.solution.target_number
    assert state.is_active_cell(0, 1)
    assert state.cell(0, 0)["type"] == HEART
    assert board.get_current_state(reveal=True).solution == board.solution.to_list()
    data = state.to_dict()
    assert data["current_row"] == 0
    assert data["checked_rows"] == [False] * 10


def test_feedback_history(board):
    fill_row(board, [(HEART, RED), (SQUARE, RED), (CIRCLE, BLUE), MISSES[1], MISSES[2]])
    board.confirm_row()
    history = board.get_feedback_history()
    assert len(history) == 1
    assert history[0][1] == (1, 1)


def test_invalid_rules_abort_start():
    rules = dict(DEFAULT_RULES, max_number=20)
    with pytest.raises(ConfigurationError):
        Board(rules=rules)


def test_render_prints_grid(board, capsys):
    board.select_shape(index_of(board, HEART, RED))
    board.render()
    out = capsys.readouterr().out
    assert "Shap10r" in out
    assert "♥R" in out
    assert str(board.target_number) in out


# --- Shape panel ---

def test_fresh_board_offers_every_shape(board):
    assert board.shape_states() == {}
    assert not any(board.is_shape_disabled(i) for i in range(len(board.inventory)))


def test_correct_shape_from_earlier_row_is_disabled(board):
    fill_row(board, [(HEART, RED)] + MISSES[:4])
    board.confirm_row()
    assert board.shape_states()[HEART + "-" + RED] == CORRECT
    assert board.is_shape_disabled(index_of(board, HEART, RED))


def test_clicked_exists_shape_stays_enabled(board):
    fill_row(board, [(CIRCLE, BLUE)] + MISSES[:4])
    board.confirm_row()
    assert board.shape_states() == {CIRCLE + "-" + BLUE: EXISTS}
    assert board.inventory.is_clicked_by_index(index_of(board, CIRCLE, BLUE))
    assert not board.is_shape_disabled(index_of(board, CIRCLE, BLUE))


def test_clicked_normal_shape_is_disabled_unless_selected(board):
    fill_row(board, MISSES)
    board.confirm_row()
    i = index_of(board, *MISSES[0])
    assert board.is_shape_disabled(i)
    board.inventory.selected_index = i
    assert not board.is_shape_disabled(i)
    # Never clicked shapes stay available
    assert not board.is_shape_disabled(index_of(board, HEART, RED))


def test_correct_wins_over_exists(board):
    fill_row(board, [(CIRCLE, BLUE)] + MISSES[:4])
    board.confirm_row()
    fill_row(board, [MISSES[0], (CIRCLE, BLUE)] + MISSES[1:4])
    board.confirm_row()
    assert board.shape_states()[CIRCLE + "-" + BLUE] == CORRECT


def test_everything_disabled_on_full_or_checked_row(board):
    fill_row(board, MISSES)
    assert all(board.is_shape_disabled(i) for i in range(len(board.inventory)))

    board.reset()
    set_solution(board, SCENARIO_A)
    fill_row(board, SCENARIO_A)
    board.confirm_row()
    assert board.checked_rows[board.current_row]
    assert all(board.is_shape_disabled(i) for i in range(len(board.inventory)))


def test_tip_notice_button_only_dismisses(board):
    fill_row(board, [(CIRCLE, BLUE)] + MISSES[:4])
    board.confirm_row()
    fill_row(board, MISSES)
    notice = board.confirm_row().notice
    assert notice.button_text == "OK"
    assert notice.show_restart
    assert notice.on_restart is None
    assert not notice.show_share
