"""
board.py - Board representation for the gridfour game

This module implements the Board class: a fixed-size grid of cells with
bounds- and occupancy-checked placement and a text rendering.
"""

from typing import Iterator, List, Tuple

import numpy as np

from gridfour.debug import debug
from gridfour.utils import ROWS, COLS, Cell, is_valid_position


class InvalidMoveError(ValueError):
    """Raised when a token is placed outside the board or on an occupied cell."""


class Board:
    """
    A rows x cols grid of cells.

    Boards are treated as values: placing a token returns a new board and
    leaves the original untouched.
    """

    def __init__(self, rows: int = ROWS, cols: int = COLS):
        """
        Create an empty board.

        Args:
            rows: Number of rows, must be positive
            cols: Number of columns, must be positive
        """
        if rows <= 0 or cols <= 0:
            raise ValueError(f"Board dimensions must be positive, got {rows}x{cols}")

        debug.trace(f"Initializing new {rows}x{cols} Board", "board")
        self._rows = rows
        self._cols = cols
        self.grid = np.full((rows, cols), Cell.EMPTY.value, dtype=np.int8)

    @property
    def rows(self) -> int:
        """Number of rows."""
        return self._rows

    @property
    def cols(self) -> int:
        """Number of columns."""
        return self._cols

    def copy(self) -> 'Board':
        """
        Create a deep copy of the current board.

        Returns:
            A new Board instance with the same cells
        """
        new_board = Board(self._rows, self._cols)
        new_board.grid = self.grid.copy()
        return new_board

    def cell(self, row: int, col: int) -> Cell:
        """Get the contents of a cell. Raises IndexError outside the board."""
        if not is_valid_position(row, col, self._rows, self._cols):
            raise IndexError(f"Position ({row}, {col}) is outside a {self._rows}x{self._cols} board")
        return Cell(int(self.grid[row, col]))

    def row_line(self, row: int) -> List[Cell]:
        """Get the cells of a row, left to right. Raises IndexError outside the board."""
        if not 0 <= row < self._rows:
            raise IndexError(f"Row {row} is outside a {self._rows}x{self._cols} board")
        return [Cell(int(value)) for value in self.grid[row, :]]

    def column_line(self, col: int) -> List[Cell]:
        """Get the cells of a column, top to bottom. Raises IndexError outside the board."""
        if not 0 <= col < self._cols:
            raise IndexError(f"Column {col} is outside a {self._rows}x{self._cols} board")
        return [Cell(int(value)) for value in self.grid[:, col]]

    def is_valid_move(self, row: int, col: int) -> bool:
        """
        Check if a token may be placed at (row, col).

        Args:
            row: Row index (0-indexed)
            col: Column index (0-indexed)

        Returns:
            True if the position is on the board and the cell is empty
        """
        if not is_valid_position(row, col, self._rows, self._cols):
            debug.debug(f"Invalid move: ({row}, {col}) out of bounds", "board")
            return False

        if self.grid[row, col] != Cell.EMPTY.value:
            debug.debug(f"Invalid move: ({row}, {col}) is occupied", "board")
            return False

        return True

    def place_token(self, row: int, col: int, token: Cell) -> 'Board':
        """
        Place a token and return the resulting board.

        Args:
            row: Row index (0-indexed)
            col: Column index (0-indexed)
            token: Cell.O or Cell.C

        Returns:
            A new Board identical to this one except at (row, col)

        Raises:
            InvalidMoveError: if the move is not valid or the token is EMPTY
        """
        if token == Cell.EMPTY:
            raise InvalidMoveError("Cannot place an empty token")
        if not self.is_valid_move(row, col):
            raise InvalidMoveError(f"Cannot place {token} at ({row}, {col})")

        debug.trace(f"Placing {token} at ({row}, {col})", "board")
        new_board = self.copy()
        new_board.grid[row, col] = token.value
        return new_board

    def empty_positions(self) -> List[Tuple[int, int]]:
        """All empty (row, col) positions in row-major order."""
        rows, cols = np.nonzero(self.grid == Cell.EMPTY.value)
        return list(zip(rows.tolist(), cols.tolist()))

    def is_full(self) -> bool:
        """Check if no empty cell is left."""
        return not np.any(self.grid == Cell.EMPTY.value)

    def get_state(self) -> np.ndarray:
        """
        Get the current board state as a numpy array.

        Returns:
            2D numpy array of cell values
        """
        return self.grid.copy()

    def render(self) -> Iterator[str]:
        """
        Render the board line by line.

        Each cell is drawn as ' X |'. Rows are separated by a dash line as
        wide as a rendered row; nothing follows the last row.
        """
        dash_line = "-" * (4 * self._cols)
        for row in range(self._rows):
            if row:
                yield dash_line
            yield "".join(f" {cell} |" for cell in self.row_line(row))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.grid.shape == other.grid.shape and bool(np.array_equal(self.grid, other.grid))

    __hash__ = None

    def __str__(self) -> str:
        """String representation of the board."""
        return "\n".join(self.render())

    def __repr__(self) -> str:
        return f"Board(rows={self._rows}, cols={self._cols})"
