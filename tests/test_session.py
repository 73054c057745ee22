from tictactoe.config import GameConfig, PlayerConfig
from tictactoe.session import GameSession


def place(session, row, col, **extra):
    return session.submit_action({"type": "place", "row": row, "col": col, **extra})


def test_place_reports_progress():
    session = GameSession()
    result = place(session, 0, 0)
    assert result["success"]
    assert result["status"] == "in_progress"
    assert result["operation"]["type"] == "place_x"
    assert session.game_state.is_player_o_turn()


def test_rejects_filled_space_without_raising():
    session = GameSession()
    place(session, 0, 0)
    result = place(session, 0, 0)
    assert not result["success"]
    assert result["message"] == "That space is already filled"


def test_rejects_wrong_mark():
    session = GameSession()
    result = place(session, 1, 1, mark="o")
    assert not result["success"]
    assert "O player's turn" in result["message"]


def test_rejects_bad_coordinates():
    session = GameSession()
    assert not place(session, 3, 0)["success"]
    assert not place(session, "a", 0)["success"]


def test_rejects_moves_after_game_over():
    session = GameSession()
    for row, col in [(0, 0), (1, 1), (0, 1), (2, 2), (0, 2)]:
        result = place(session, row, col)
    assert result["status"] == "victory"
    assert result["winner"] == "x"
    assert result["winner_name"] == "Player X"
    assert place(session, 2, 0)["message"] == "The game is over"


def test_undo_and_redo_unavailable_messages():
    session = GameSession()
    undo = session.submit_action({"type": "undo"})
    redo = session.submit_action({"type": "redo"})
    assert not undo["success"]
    assert undo["message"] == "You can't undo any more moves"
    assert not redo["success"]


def test_undo_then_redo():
    session = GameSession()
    place(session, 2, 2)
    assert session.submit_action({"type": "undo"})["success"]
    assert session.game_state.is_space_empty(2, 2)
    assert session.submit_action({"type": "redo"})["success"]
    assert session.game_state.is_space_x(2, 2)


def test_restart_replaces_state_and_history():
    session = GameSession()
    place(session, 0, 0)
    old_state = session.game_state
    session.submit_action({"type": "restart"})
    assert session.game_state is not old_state
    assert not session.game_state.can_undo()
    assert session.game_state.is_space_empty(0, 0)


def test_unknown_action():
    result = GameSession().submit_action({"type": "resign"})
    assert not result["success"]


def test_player_names_come_from_config():
    config = GameConfig(player_x=PlayerConfig("Ada"), player_o=PlayerConfig("Bo"))
    session = GameSession(config)
    assert session.to_dict()["current_player_name"] == "Ada"
    place(session, 0, 0)
    assert session.to_dict()["current_player_name"] == "Bo"


def test_history_listing():
    session = GameSession()
    place(session, 0, 0)
    place(session, 1, 1)
    session.submit_action({"type": "undo"})
    history = session.get_history()
    assert [entry["applied"] for entry in history] == [True, False]


def test_rejects_non_integer_and_bool_coordinates():
    session = GameSession()
    assert not place(session, True, False)["success"]
    assert not place(session, 0, 1.0)["success"]
    assert session.game_state.is_space_empty(1, 0)
    assert not session.game_state.can_undo()


def test_rejects_non_string_mark():
    session = GameSession()
    result = place(session, 0, 0, mark=1)
    assert not result["success"]
    assert result["message"] == "Invalid mark: 1"
    assert session.game_state.is_space_empty(0, 0)
