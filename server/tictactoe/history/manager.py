"""History manager for executing, undoing and redoing operations."""
from __future__ import annotations
from typing import TYPE_CHECKING
import logging

from .operation import Operation

if TYPE_CHECKING:
    from ..state import GameState

logger = logging.getLogger(__name__)


class NoOperationAvailable(LookupError):
    """Raised by undo/redo when there is nothing to undo or redo."""


class HistoryManager:
    """Linear list of executed operations with an undo/redo cursor.

    Operations at indices below the cursor are applied; those at or past it
    form the redo tail, which is dropped as soon as a new operation is
    executed.
    """

    def __init__(self):
        self.operations: list[Operation] = []
        self.cursor = 0

    def __len__(self) -> int:
        return len(self.operations)

    def next_sequence(self) -> int:
        """Sequence number for the next executed operation.

        Execution truncates the log to the cursor, so the next operation
        always lands at index `cursor`.
        """
        return self.cursor

    def execute(self, operation: Operation, state: GameState):
        """Apply an operation and record it, discarding any redo tail."""
        operation.apply(state)
        dropped = len(self.operations) - self.cursor
        if dropped:
            logger.debug("Discarding %d redoable operation(s)", dropped)
        del self.operations[self.cursor:]
        self.operations.append(operation)
        self.cursor += 1
        logger.debug("Executed %s at (%d, %d), cursor=%d",
                     operation.kind.value, operation.row, operation.col, self.cursor)

    def undo(self, state: GameState) -> Operation:
        """Reverse the most recently applied operation."""
        if not self.can_undo():
            raise NoOperationAvailable("Nothing to undo")
        self.cursor -= 1
        operation = self.operations[self.cursor]
        operation.reverse(state)
        logger.debug("Undid %s at (%d, %d), cursor=%d",
                     operation.kind.value, operation.row, operation.col, self.cursor)
        return operation

    def redo(self, state: GameState) -> Operation:
        """Re-apply the earliest undone operation."""
        if not self.can_redo():
            raise NoOperationAvailable("Nothing to redo")
        operation = self.operations[self.cursor]
        operation.apply(state)
        self.cursor += 1
        logger.debug("Redid %s at (%d, %d), cursor=%d",
                     operation.kind.value, operation.row, operation.col, self.cursor)
        return operation

    def can_undo(self) -> bool:
        return self.cursor > 0

    def can_redo(self) -> bool:
        return self.cursor < len(self.operations)

    @property
    def applied(self) -> list[Operation]:
        return self.operations[:self.cursor]

    @property
    def redo_tail(self) -> list[Operation]:
        return self.operations[self.cursor:]

    def get_operations(self) -> list[dict]:
        """Operation log, each entry flagged with whether it is applied."""
        return [
            {**op.to_dict(), "applied": i < self.cursor}
            for i, op in enumerate(self.operations)
        ]
