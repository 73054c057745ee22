import random

import pytest

from tictactoe.board import Cell
from tictactoe.history import NoOperationAvailable
from tictactoe.rules import GameStatus, IllegalPlacement
from tictactoe.state import GameState

DRAW_SEQUENCE = [(0, 0), (0, 1), (0, 2), (1, 1), (1, 0), (1, 2), (2, 1), (2, 0), (2, 2)]
TOP_ROW_WIN = [(0, 0), (1, 1), (0, 1), (2, 2), (0, 2)]


def snapshot(state: GameState):
    return state.board.to_dict(), state.player_x_turn


def play(state: GameState, moves):
    for row, col in moves:
        state.place(row, col)


def random_game(seed: int) -> list[tuple[int, int]]:
    """A valid move sequence that stops once the game is over."""
    rng = random.Random(seed)
    state = GameState.new_game()
    moves = []
    while not state.is_game_over():
        move = rng.choice(state.board.empty_cells())
        state.place(*move)
        moves.append(move)
    return moves


def test_new_game_is_empty_and_x_to_move():
    state = GameState.new_game()
    assert state.is_player_x_turn()
    assert not state.is_player_o_turn()
    assert all(state.is_space_empty(r, c) for r in range(3) for c in range(3))
    assert not state.is_game_over()
    assert state.status() == GameStatus.IN_PROGRESS


def test_place_x_then_o():
    state = GameState.new_game()
    state.place_x(1, 2)
    assert state.is_space_x(1, 2)
    assert state.is_player_o_turn()
    state.place_o(2, 1)
    assert state.is_space_o(2, 1)
    assert state.is_player_x_turn()


def test_place_out_of_turn_is_a_contract_violation():
    state = GameState.new_game()
    with pytest.raises(IllegalPlacement):
        state.place_o(0, 0)
    assert state.is_space_empty(0, 0)
    assert not state.can_undo()


def test_place_on_filled_space_is_a_contract_violation():
    state = GameState.new_game()
    state.place_x(0, 0)
    with pytest.raises(AssertionError):
        state.place_o(0, 0)
    assert state.is_space_x(0, 0)
    assert state.is_player_o_turn()


def test_top_row_win_scenario():
    state = GameState.new_game()
    play(state, TOP_ROW_WIN)
    assert state.has_player_x_won()
    assert not state.has_player_o_won()
    assert state.is_game_over()
    assert state.is_player_o_turn()
    assert state.winner() == Cell.X


def test_undoing_winning_move_reopens_the_game():
    state = GameState.new_game()
    play(state, TOP_ROW_WIN)
    state.undo()
    assert state.is_space_empty(0, 2)
    assert not state.is_game_over()
    assert state.is_player_x_turn()


def test_draw_scenario():
    state = GameState.new_game()
    play(state, DRAW_SEQUENCE)
    assert state.is_game_over()
    assert not state.has_player_x_won()
    assert not state.has_player_o_won()
    assert state.status() == GameStatus.DRAW


def test_fresh_game_undo_fails():
    state = GameState.new_game()
    assert not state.can_undo()
    with pytest.raises(NoOperationAvailable):
        state.undo()


def test_fresh_game_redo_fails():
    state = GameState.new_game()
    assert not state.can_redo()
    with pytest.raises(NoOperationAvailable):
        state.redo()


@pytest.mark.parametrize("seed", range(20))
def test_undo_all_returns_to_initial_state(seed):
    initial = snapshot(GameState.new_game())
    state = GameState.new_game()
    play(state, random_game(seed))
    while state.can_undo():
        state.undo()
    assert snapshot(state) == initial


@pytest.mark.parametrize("seed", range(20))
def test_undo_redo_round_trip(seed):
    moves = random_game(seed)
    state = GameState.new_game()
    play(state, moves)
    after = snapshot(state)

    for _ in moves:
        state.undo()
    for _ in moves:
        state.redo()
    assert snapshot(state) == after
    assert not state.can_redo()


@pytest.mark.parametrize("seed", range(20))
def test_new_move_after_undo_discards_redo(seed):
    moves = random_game(seed)
    state = GameState.new_game()
    play(state, moves)

    undone = min(2, len(moves))
    for _ in range(undone):
        state.undo()
    assert state.can_redo()

    row, col = state.board.empty_cells()[0]
    state.place(row, col)
    assert not state.can_redo()


@pytest.mark.parametrize("seed", range(50))
def test_both_players_never_win_together(seed):
    state = GameState.new_game()
    for move in random_game(seed):
        state.place(*move)
        assert not (state.has_player_x_won() and state.has_player_o_won())


@pytest.mark.parametrize("seed", range(20))
def test_game_over_iff_win_or_full(seed):
    state = GameState.new_game()
    for move in random_game(seed):
        state.place(*move)
        expected = state.has_player_x_won() or state.has_player_o_won() or state.board.is_full()
        assert state.is_game_over() == expected


def test_partial_undo_leaves_earlier_moves():
    state = GameState.new_game()
    play(state, [(0, 0), (1, 1), (2, 2)])
    state.undo()
    assert state.is_space_x(0, 0)
    assert state.is_space_o(1, 1)
    assert state.is_space_empty(2, 2)
    assert state.is_player_x_turn()


def test_to_dict_reports_live_status():
    state = GameState.new_game()
    play(state, TOP_ROW_WIN)
    data = state.to_dict()
    assert data["status"] == "x_won"
    assert data["winner"] == "x"
    assert data["current_player"] == "o"
    assert data["can_undo"] is True
    assert data["can_redo"] is False
