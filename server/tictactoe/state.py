from __future__ import annotations
from dataclasses import dataclass, field
import logging

from .board import Board, Cell
from .history import HistoryManager, Operation, OperationType
from .rules import GameRules, GameStatus, IllegalPlacement

logger = logging.getLogger(__name__)


@dataclass
class GameState:
    board: Board = field(default_factory=Board)
    player_x_turn: bool = True
    history: HistoryManager = field(default_factory=HistoryManager)
    rules: GameRules = field(init=False)

    def __post_init__(self):
        self.rules = GameRules(self.board)

    @classmethod
    def new_game(cls) -> GameState:
        """Empty grid, X to move, empty history."""
        return cls()

    # ==================== Turn ====================

    def is_player_x_turn(self) -> bool:
        return self.player_x_turn

    def is_player_o_turn(self) -> bool:
        return not self.player_x_turn

    @property
    def current_mark(self) -> Cell:
        return Cell.X if self.player_x_turn else Cell.O

    # ==================== Placement ====================

    def place_x(self, row: int, col: int) -> Operation:
        """Place an X at (row, col).

        Preconditions: it is X's turn and the space is empty. Callers are
        expected to check is_player_x_turn() and is_space_empty() first;
        a violation raises IllegalPlacement.
        """
        return self._place(OperationType.PLACE_X, Cell.X, row, col)

    def place_o(self, row: int, col: int) -> Operation:
        """Place an O at (row, col). Same preconditions as place_x."""
        return self._place(OperationType.PLACE_O, Cell.O, row, col)

    def place(self, row: int, col: int) -> Operation:
        """Place the current player's mark."""
        if self.player_x_turn:
            return self.place_x(row, col)
        return self.place_o(row, col)

    def _place(self, kind: OperationType, mark: Cell, row: int, col: int) -> Operation:
        check = self.rules.check_placement(mark, row, col, self.player_x_turn)
        if not check.success:
            raise IllegalPlacement(check.message)
        operation = Operation.capture(kind, self, row, col, self.history.next_sequence())
        self.history.execute(operation, self)
        logger.debug("%s placed at (%d, %d)", mark.symbol, row, col)
        return operation

    # ==================== Grid queries ====================

    def is_space_empty(self, row: int, col: int) -> bool:
        return self.board.get(row, col) == Cell.EMPTY

    def is_space_x(self, row: int, col: int) -> bool:
        return self.board.get(row, col) == Cell.X

    def is_space_o(self, row: int, col: int) -> bool:
        return self.board.get(row, col) == Cell.O

    def has_player_x_won(self) -> bool:
        return self.rules.has_won(Cell.X)

    def has_player_o_won(self) -> bool:
        return self.rules.has_won(Cell.O)

    def is_game_over(self) -> bool:
        return self.rules.is_game_over()

    def winner(self) -> Cell | None:
        return self.rules.winner()

    def status(self) -> GameStatus:
        return self.rules.status()

    # ==================== Undo / redo ====================

    def can_undo(self) -> bool:
        return self.history.can_undo()

    def undo(self) -> Operation:
        return self.history.undo(self)

    def can_redo(self) -> bool:
        return self.history.can_redo()

    def redo(self) -> Operation:
        return self.history.redo(self)

    # ==================== Serialization ====================

    def to_dict(self) -> dict:
        winner = self.winner()
        return {
            "board": self.board.to_dict(),
            "current_player": self.current_mark.value,
            "status": self.status().value,
            "winner": winner.value if winner else None,
            "game_over": self.is_game_over(),
            "can_undo": self.can_undo(),
            "can_redo": self.can_redo(),
        }
