from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from .board import Cell, in_bounds

if TYPE_CHECKING:
    from .board import Board


class IllegalPlacement(AssertionError):
    """A placement was requested without checking the query surface first."""


class GameStatus(Enum):
    IN_PROGRESS = "in_progress"
    X_WON = "x_won"
    O_WON = "o_won"
    DRAW = "draw"


@dataclass
class PlacementCheck:
    success: bool
    message: str


class GameRules:
    """Validates placements and evaluates win/draw conditions."""

    def __init__(self, board: Board):
        self.board = board

    def check_placement(self, mark: Cell, row: int, col: int,
                        player_x_turn: bool) -> PlacementCheck:
        """Check whether `mark` may be placed at (row, col) right now."""
        if mark == Cell.EMPTY:
            return PlacementCheck(False, "Cannot place an empty mark")
        if (mark == Cell.X) != player_x_turn:
            return PlacementCheck(False, f"It isn't the {mark.symbol} player's turn")
        if not in_bounds(row, col):
            return PlacementCheck(False, f"Coordinates out of range: ({row}, {col})")
        if self.board.get(row, col) != Cell.EMPTY:
            return PlacementCheck(False, "That space is already filled")
        return PlacementCheck(True, "ok")

    def has_won(self, mark: Cell) -> bool:
        """True if any line is uniformly occupied by `mark`."""
        return any(all(cell == mark for cell in line) for line in self.board.lines())

    def winner(self) -> Cell | None:
        if self.has_won(Cell.X):
            return Cell.X
        if self.has_won(Cell.O):
            return Cell.O
        return None

    def is_game_over(self) -> bool:
        return self.winner() is not None or self.board.is_full()

    def status(self) -> GameStatus:
        # A full board can also be won; the win is what gets reported
        winner = self.winner()
        if winner == Cell.X:
            return GameStatus.X_WON
        if winner == Cell.O:
            return GameStatus.O_WON
        if self.board.is_full():
            return GameStatus.DRAW
        return GameStatus.IN_PROGRESS
