"""
cli.py - Console interface for the gridfour game

This module asks both players for their names and then runs the turn loop:
show the board, read a 'row col' move, validate it, place the token and check
for a win or a full board. Console input and output are injected so the loop
can be driven by tests or by another front end.
"""

import argparse
import sys
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Dict, List, Optional

from gridfour.debug import debug, DebugLevel
from gridfour.game.rules import GridFourGame
from gridfour.utils import (ROWS, COLS, GameResult, Player, is_valid_player_name,
                            parse_move)

InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]

INSTRUCTIONS = ("Instructions: The first player to align four of their tokens "
                "vertically or horizontally wins the game!")
INVALID_NAME = ("Invalid name.Please enter a valid name with only letters "
                "(no numbers or special characters)")
INVALID_INPUT = "Invalid input, try again."
INVALID_MOVE = "Invalid move. Try again."
DRAW = "It's a draw!"


@dataclass(frozen=True)
class PlayerProfile:
    """A seat at the table and the name typed for it."""
    player: Player
    name: str


class TurnState(Enum):
    AWAITING_MOVE = auto()
    WON = auto()
    DRAWN = auto()


def get_player_name(player: Player, input_fn: InputFn = input,
                    output_fn: OutputFn = print) -> str:
    """
    Ask for a player's name until a valid one is entered.

    Args:
        player: The seat being named, shown as 'Player 1' or 'Player 2'
        input_fn: Reads one line after writing the given prompt
        output_fn: Writes one line

    Returns:
        The accepted name
    """
    while True:
        name = input_fn(f"Enter {player.label}'s name:")
        if is_valid_player_name(name):
            debug.debug(f"{player.label} is {name!r}", "cli")
            return name
        output_fn(INVALID_NAME)


class TurnController:
    """
    Runs one game between two named players.

    The loop stays in AWAITING_MOVE until a move wins or fills the board.
    Bad input and invalid moves are reported and the same player is asked
    again with the same board.
    """

    def __init__(self, profiles: List[PlayerProfile], rows: int = ROWS, cols: int = COLS,
                 input_fn: InputFn = input, output_fn: OutputFn = print):
        self.profiles: Dict[Player, PlayerProfile] = {p.player: p for p in profiles}
        if set(self.profiles) != set(Player):
            raise ValueError("Both players need a profile")

        self.game = GridFourGame(rows, cols)
        self.state = TurnState.AWAITING_MOVE
        self.input_fn = input_fn
        self.output_fn = output_fn

    def current_profile(self) -> PlayerProfile:
        return self.profiles[self.game.get_current_player()]

    def show_board(self) -> None:
        for line in self.game.board.render():
            self.output_fn(line)

    def play_turn(self) -> TurnState:
        """
        Run a single pass of the loop: one prompt, one line of input.

        Returns:
            The state after the pass
        """
        profile = self.current_profile()
        self.show_board()

        text = self.input_fn(f"{profile.name}, enter your move (row col):")
        position = parse_move(text)
        if position is None:
            self.output_fn(INVALID_INPUT)
            return self.state

        row, col = position
        if not self.game.make_move(row, col):
            debug.debug(f"{profile.name} tried ({row}, {col})", "cli")
            self.output_fn(INVALID_MOVE)
            return self.state

        if self.game.get_winner() is not None:
            self.state = TurnState.WON
            self.show_board()
            self.output_fn(f"{profile.name} wins!")
        elif self.game.game_result == GameResult.DRAW:
            self.state = TurnState.DRAWN
            self.show_board()
            self.output_fn(DRAW)

        return self.state

    def play(self) -> GameResult:
        """Play until the game reaches a terminal state."""
        while self.state == TurnState.AWAITING_MOVE:
            self.play_turn()

        debug.info(f"Game finished: {self.game.game_result.name} "
                   f"after {len(self.game.moves_made)} moves", "cli")
        return self.game.game_result


def run_game(rows: int = ROWS, cols: int = COLS, input_fn: InputFn = input,
             output_fn: OutputFn = print) -> GameResult:
    """Show the banner, collect both names and play one game."""
    output_fn(f"Welcome to Connect 4 ({rows}x{cols} grid)")
    output_fn(INSTRUCTIONS)

    profiles = [PlayerProfile(player, get_player_name(player, input_fn, output_fn))
                for player in Player]
    return TurnController(profiles, rows, cols, input_fn, output_fn).play()


def positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description='Two-player four-in-a-line grid game')
    parser.add_argument('--rows', type=positive_int, default=ROWS,
                        help=f'Number of board rows (default: {ROWS})')
    parser.add_argument('--cols', type=positive_int, default=COLS,
                        help=f'Number of board columns (default: {COLS})')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    parser.add_argument('--debug-level', default='warning',
                        choices=[level.name.lower() for level in DebugLevel],
                        help='Logging level (default: warning)')
    parser.add_argument('--log-file', help='Also write log records to this file')
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the console game."""
    args = parse_args(argv)

    if args.debug:
        debug.configure(level=DebugLevel.DEBUG)
    else:
        debug.set_from_string(args.debug_level)
    if args.log_file:
        debug.configure(log_file=args.log_file)

    try:
        run_game(args.rows, args.cols, input_fn=input, output_fn=print)
    except (EOFError, KeyboardInterrupt):
        print()
        print("Game aborted.")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
