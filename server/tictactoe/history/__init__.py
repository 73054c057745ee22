"""Reversible move history."""
from .operation import Operation, OperationType
from .manager import HistoryManager, NoOperationAvailable

__all__ = [
    "Operation",
    "OperationType",
    "HistoryManager",
    "NoOperationAvailable",
]
