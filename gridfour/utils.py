"""
utils.py - Constants, enumerations and helpers for the gridfour game

This module holds the pieces shared by the board, the rules and the
interfaces: cell and player identities, game results, coordinate checks,
player-name validation and move-input parsing.
"""

import re
from enum import Enum, auto
from typing import NamedTuple, Optional, Tuple

from gridfour.debug import debug

# Game constants
ROWS = 5
COLS = 5
LINE_LENGTH = 4  # Tokens in a single row or column needed to win

INTEGER_PATTERN = re.compile(r"-?[0-9]+")


class Cell(Enum):
    """Contents of a board cell."""
    EMPTY = 0
    O = 1
    C = 2

    def __str__(self):
        if self == Cell.EMPTY:
            return " "
        return self.name


class Player(Enum):
    """The two sides of a game."""
    ONE = 1
    TWO = 2

    @property
    def token(self) -> Cell:
        """The token this player places on the board."""
        return Cell.O if self == Player.ONE else Cell.C

    @property
    def label(self) -> str:
        """Human-readable seat name, e.g. 'Player 1'."""
        return f"Player {self.value}"

    def other(self) -> 'Player':
        """Get the other player."""
        return Player.TWO if self == Player.ONE else Player.ONE


class GameResult(Enum):
    """Enumeration representing the game outcome."""
    IN_PROGRESS = auto()
    PLAYER_ONE_WIN = auto()
    PLAYER_TWO_WIN = auto()
    DRAW = auto()

    def is_game_over(self) -> bool:
        """Check if the game is over."""
        return self != GameResult.IN_PROGRESS

    @staticmethod
    def win_for(player: Player) -> 'GameResult':
        return GameResult.PLAYER_ONE_WIN if player == Player.ONE else GameResult.PLAYER_TWO_WIN


class Direction(Enum):
    """Lines examined for a win. Diagonals never count."""
    HORIZONTAL = auto()
    VERTICAL = auto()


class Move(NamedTuple):
    """A single placement; lives only as long as it is validated and applied."""
    row: int
    col: int
    token: Cell


def is_valid_position(row: int, col: int, rows: int = ROWS, cols: int = COLS) -> bool:
    """
    Check if a position is within the board boundaries.

    Args:
        row: Row index
        col: Column index
        rows: Number of rows on the board
        cols: Number of columns on the board

    Returns:
        True if position is valid, False otherwise
    """
    return 0 <= row < rows and 0 <= col < cols


def is_valid_player_name(name: str) -> bool:
    """
    Check that a player name is made of letters only.

    The empty string is accepted: no character fails the test.
    """
    return all(ch.isalpha() for ch in name)


def parse_move(text: str) -> Optional[Tuple[int, int]]:
    """
    Parse a 'row col' line typed by a player.

    Returns:
        (row, col) when the line holds exactly two whitespace-separated
        integers, None otherwise. Range checks are left to the board.
    """
    parts = text.split()
    if len(parts) != 2:
        debug.debug(f"Rejected move input {text!r}: expected 2 values, got {len(parts)}", "cli")
        return None

    # int() alone would also take '+1', '1_0' and non-ASCII digits
    if not all(INTEGER_PATTERN.fullmatch(part) for part in parts):
        debug.debug(f"Rejected move input {text!r}: not integers", "cli")
        return None

    return int(parts[0]), int(parts[1])
