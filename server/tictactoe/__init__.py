from .board import Board, Cell
from .rules import GameRules, GameStatus, IllegalPlacement
from .history import HistoryManager, NoOperationAvailable, Operation, OperationType
from .state import GameState
from .config import GameConfig, PlayerConfig, ServerConfig
from .session import GameSession
