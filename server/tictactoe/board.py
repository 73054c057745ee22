from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator


class Cell(Enum):
    EMPTY = "empty"
    X = "x"
    O = "o"

    @property
    def symbol(self) -> str:
        return {Cell.EMPTY: " ", Cell.X: "X", Cell.O: "O"}[self]


SIZE = 3

# The 8 winning triples, (row, col) addressing
LINES: tuple[tuple[tuple[int, int], ...], ...] = (
    # rows
    ((0, 0), (0, 1), (0, 2)),
    ((1, 0), (1, 1), (1, 2)),
    ((2, 0), (2, 1), (2, 2)),
    # columns
    ((0, 0), (1, 0), (2, 0)),
    ((0, 1), (1, 1), (2, 1)),
    ((0, 2), (1, 2), (2, 2)),
    # diagonals
    ((0, 0), (1, 1), (2, 2)),
    ((0, 2), (1, 1), (2, 0)),
)


def in_bounds(row: int, col: int) -> bool:
    return 0 <= row < SIZE and 0 <= col < SIZE


@dataclass
class Board:
    cells: dict[tuple[int, int], Cell] = field(default_factory=dict)

    def __post_init__(self):
        if not self.cells:
            self._generate_empty_board()

    def _generate_empty_board(self):
        for row in range(SIZE):
            for col in range(SIZE):
                self.cells[(row, col)] = Cell.EMPTY

    def _check(self, row: int, col: int):
        if not in_bounds(row, col):
            raise ValueError(f"Coordinates out of range: ({row}, {col})")

    def get(self, row: int, col: int) -> Cell:
        self._check(row, col)
        return self.cells[(row, col)]

    def set(self, row: int, col: int, cell: Cell):
        self._check(row, col)
        self.cells[(row, col)] = cell

    def __iter__(self) -> Iterator[tuple[tuple[int, int], Cell]]:
        return iter(self.cells.items())

    def lines(self) -> Iterator[tuple[Cell, Cell, Cell]]:
        """Yield the cell values along each of the 8 lines."""
        for line in LINES:
            yield tuple(self.cells[pos] for pos in line)

    def is_full(self) -> bool:
        return all(cell != Cell.EMPTY for cell in self.cells.values())

    def empty_cells(self) -> list[tuple[int, int]]:
        return [pos for pos, cell in self.cells.items() if cell == Cell.EMPTY]

    def to_dict(self) -> dict:
        return {
            "size": SIZE,
            "cells": [
                [self.cells[(row, col)].value for col in range(SIZE)]
                for row in range(SIZE)
            ],
        }

    @classmethod
    def from_dict(cls, data: dict) -> Board:
        board = cls()
        for row, values in enumerate(data["cells"]):
            for col, value in enumerate(values):
                board.set(row, col, Cell(value))
        return board

    def to_ascii(self) -> str:
        """Grid as printed by the text interface."""
        rows = []
        for row in range(SIZE):
            rows.append(" " + " | ".join(
                self.cells[(row, col)].symbol for col in range(SIZE)
            ))
        return "\n-----------\n".join(rows)
