"""Reversible grid operations."""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING
import time

from ..board import Cell

if TYPE_CHECKING:
    from ..state import GameState


class OperationType(Enum):
    PLACE_X = "place_x"
    PLACE_O = "place_o"


# kind -> (mark written forward, turn flag after apply)
_EFFECTS: dict[OperationType, tuple[Cell, bool]] = {
    OperationType.PLACE_X: (Cell.X, False),
    OperationType.PLACE_O: (Cell.O, True),
}


@dataclass(frozen=True)
class Operation:
    """Immutable record of one placement and the state it replaced.

    The operation does not hold the game state; it is handed the state to
    mutate on every apply/reverse.
    """
    kind: OperationType
    row: int
    col: int
    previous: Cell
    previous_x_turn: bool
    sequence: int = 0
    timestamp: float = field(default_factory=time.time)

    @classmethod
    def capture(cls, kind: OperationType, state: GameState,
                row: int, col: int, sequence: int = 0) -> Operation:
        """Build an operation, recording the current cell and turn flag."""
        return cls(
            kind=kind,
            row=row,
            col=col,
            previous=state.board.get(row, col),
            previous_x_turn=state.player_x_turn,
            sequence=sequence,
        )

    @property
    def mark(self) -> Cell:
        return _EFFECTS[self.kind][0]

    def apply(self, state: GameState):
        mark, next_x_turn = _EFFECTS[self.kind]
        state.board.set(self.row, self.col, mark)
        state.player_x_turn = next_x_turn

    def reverse(self, state: GameState):
        state.board.set(self.row, self.col, self.previous)
        state.player_x_turn = self.previous_x_turn

    def to_dict(self) -> dict:
        return {
            "type": self.kind.value,
            "row": self.row,
            "col": self.col,
            "previous": self.previous.value,
            "previous_x_turn": self.previous_x_turn,
            "seq": self.sequence,
            "ts": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Operation:
        return cls(
            kind=OperationType(data["type"]),
            row=data["row"],
            col=data["col"],
            previous=Cell(data["previous"]),
            previous_x_turn=data["previous_x_turn"],
            sequence=data.get("seq", 0),
            timestamp=data.get("ts", 0),
        )
