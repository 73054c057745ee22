"""Game session that owns the current game state and handles restarts."""
from __future__ import annotations
import logging

from .board import Cell
from .config import GameConfig
from .history import NoOperationAvailable
from .rules import GameStatus
from .state import GameState

logger = logging.getLogger(__name__)


class GameSession:
    """Owns one GameState at a time and translates collaborator actions.

    Every mutation is checked against the query surface before it reaches
    the game state, so contract violations never escape from here.
    """

    def __init__(self, config: GameConfig | None = None):
        self.config = config or GameConfig()
        self.game_state = GameState.new_game()

    def restart(self) -> GameState:
        """Replace the game state and its history wholesale."""
        self.game_state = GameState.new_game()
        logger.info("New game started")
        return self.game_state

    def player_name(self, mark: Cell) -> str:
        if mark == Cell.X:
            return self.config.player_x.name
        if mark == Cell.O:
            return self.config.player_o.name
        raise ValueError(f"No player for {mark}")

    def submit_action(self, action: dict) -> dict:
        """Process an action from a collaborator.

        Args:
            action: {"type": "place"|"undo"|"redo"|"restart", ...params}

        Returns:
            {"success": bool, "message": str, ...}
        """
        action_type = action.get("type")

        if action_type == "place":
            return self._place(action.get("row"), action.get("col"), action.get("mark"))
        elif action_type == "undo":
            return self._undo()
        elif action_type == "redo":
            return self._redo()
        elif action_type == "restart":
            self.restart()
            return {"success": True, "message": "New game started"}
        return {"success": False, "message": f"Unknown action: {action_type}"}

    def _place(self, row, col, mark: str | None = None) -> dict:
        state = self.game_state
        for value in (row, col):
            if isinstance(value, bool) or not isinstance(value, int):
                return {"success": False, "message": "Row and column must be integers"}
        if state.is_game_over():
            return {"success": False, "message": "The game is over"}
        if mark is not None:
            if not isinstance(mark, str):
                return {"success": False, "message": f"Invalid mark: {mark}"}
            try:
                requested = Cell(mark.lower())
            except ValueError:
                return {"success": False, "message": f"Invalid mark: {mark}"}
            if requested != state.current_mark:
                return {"success": False,
                        "message": f"It isn't the {requested.symbol} player's turn"}
        if not (0 <= row < 3 and 0 <= col < 3):
            return {"success": False, "message": f"Coordinates out of range: ({row}, {col})"}
        if not state.is_space_empty(row, col):
            return {"success": False, "message": "That space is already filled"}

        operation = state.place(row, col)
        result = {
            "success": True,
            "message": f"{operation.mark.symbol} placed at ({row}, {col})",
            "operation": operation.to_dict(),
        }
        result.update(self.check_status())
        if state.is_game_over():
            logger.info("Game finished: %s", result["status"])
        return result

    def _undo(self) -> dict:
        try:
            operation = self.game_state.undo()
        except NoOperationAvailable:
            return {"success": False, "message": "You can't undo any more moves"}
        return {
            "success": True,
            "message": "The most recent move has been undone",
            "operation": operation.to_dict(),
        }

    def _redo(self) -> dict:
        try:
            operation = self.game_state.redo()
        except NoOperationAvailable:
            return {"success": False, "message": "You can't redo any more moves"}
        return {
            "success": True,
            "message": "The most recent undo has been redone",
            "operation": operation.to_dict(),
        }

    def check_status(self) -> dict:
        """Report whether the game is in progress, won or drawn."""
        status = self.game_state.status()
        if status == GameStatus.X_WON:
            return {"status": "victory", "winner": Cell.X.value,
                    "winner_name": self.player_name(Cell.X)}
        if status == GameStatus.O_WON:
            return {"status": "victory", "winner": Cell.O.value,
                    "winner_name": self.player_name(Cell.O)}
        if status == GameStatus.DRAW:
            return {"status": "draw", "winner": None}
        return {"status": "in_progress", "winner": None}

    def get_history(self) -> list[dict]:
        return self.game_state.history.get_operations()

    def to_dict(self) -> dict:
        return {
            "config": self.config.to_dict(),
            "game_state": self.game_state.to_dict(),
            "current_player_name": self.player_name(self.game_state.current_mark),
            "result": self.check_status(),
        }
