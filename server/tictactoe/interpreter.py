"""Line-oriented text interface for playing a game session."""
from __future__ import annotations
from enum import Enum
from typing import TextIO
import logging
import sys

from .board import Cell
from .config import GameConfig
from .session import GameSession

logger = logging.getLogger(__name__)

COMMANDS = (
    "x row col - Put an X on the grid at the specified row and column",
    "o row col - Put an O on the grid at the specified row and column",
    "u - Undo the last move",
    "r - Redo the last undone move",
    "n - Start a new game",
)


class ParseState(Enum):
    START = "start"
    PLAYING = "playing"
    DONE = "done"


class CommandInterpreter:
    """Parses one command per line and prints the resulting grid."""

    def __init__(self, session: GameSession | None = None, out: TextIO | None = None):
        self.session = session or GameSession()
        self.out = out or sys.stdout
        self.state = ParseState.START

    def _print(self, text: str = ""):
        print(text, file=self.out)

    def introduction(self):
        self._print("Tic-Tac-Toe Command-Line Game")
        self._print("-----------------------------")
        self._print("Enter '?' to repeat the following list of commands.")
        self._print()
        self.list_commands()
        self._print()
        self.show_grid()
        self.state = ParseState.PLAYING

    def list_commands(self):
        for line in COMMANDS:
            self._print(line)
        self._print()

    def parse_command(self, command: str):
        command = command.strip()
        if not command:
            return
        if command == "?":
            self.list_commands()
            return
        if self.state == ParseState.START:
            self.introduction()
        self._parse_gameplay_command(command)

    def _parse_gameplay_command(self, command: str):
        tokens = command.split()
        command_type = tokens[0].lower()

        if command_type in ("x", "o"):
            self._place(command_type, tokens[1:])
        elif command_type == "u":
            self._history_step("undo")
        elif command_type == "r":
            self._history_step("redo")
        elif command_type == "n":
            self.session.restart()
            self._print("A new game has started.")
            self._print()
            self.state = ParseState.PLAYING
            self.show_grid()
        else:
            self._message("Invalid command. Enter '?' to see the possible commands.")

    def _place(self, mark: str, args: list[str]):
        game = self.session.game_state
        if self.state == ParseState.DONE:
            self._message("The game is over. Enter 'u' to undo or 'n' to start a new game.")
            return
        if Cell(mark) != game.current_mark:
            self._message(f"It isn't the {mark.upper()} player's turn.")
            return
        try:
            row, col = int(args[0]), int(args[1])
        except (IndexError, ValueError):
            self._message("Invalid command input.")
            return

        result = self.session.submit_action(
            {"type": "place", "mark": mark, "row": row, "col": col}
        )
        if not result["success"]:
            logger.info("Rejected placement: %s", result["message"])
            self._message(result["message"] + ".")
            return
        self._after_change()

    def _history_step(self, step: str):
        result = self.session.submit_action({"type": step})
        self._message(result["message"] + ".")
        if result["success"]:
            self._after_change()

    def _after_change(self):
        if self.session.game_state.is_game_over():
            self.end_game()
        else:
            self.state = ParseState.PLAYING
            self.show_grid()

    def _message(self, text: str):
        self._print(text)
        self._print()

    def show_grid(self):
        game = self.session.game_state
        self._print(game.board.to_ascii())
        self._print()
        self._message(f"It is currently the {game.current_mark.symbol} player's turn. Enter a command:")

    def end_game(self):
        game = self.session.game_state
        self._print(game.board.to_ascii())
        self._print()
        if game.has_player_x_won():
            self._message("The X player won. Enter 'n' to play again or 'u' to undo.")
        elif game.has_player_o_won():
            self._message("The O player won. Enter 'n' to play again or 'u' to undo.")
        else:
            self._message("Cat's game. Enter 'n' to play again or 'u' to undo.")
        self.state = ParseState.DONE

    def run(self, lines: TextIO):
        """Read commands until end of input."""
        self.introduction()
        for line in lines:
            self.parse_command(line)


def main(argv: list[str] | None = None):
    import argparse
    from .config import configure_logging

    parser = argparse.ArgumentParser(description="Play tic-tac-toe on the command line.")
    parser.add_argument("--config", default=None, help="Path to a JSON game config")
    parser.add_argument("--log-level", default=None, help="Logging level (default from config)")
    args = parser.parse_args(argv)

    config = GameConfig.load(args.config)
    configure_logging(args.log_level or config.log_level)

    interpreter = CommandInterpreter(GameSession(config))
    interpreter.run(sys.stdin)
