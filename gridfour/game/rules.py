"""
rules.py - Win detection, game state management and a Gymnasium environment

This module provides:
1. The win rule: a row or column holding exactly four of a player's tokens
2. GridFourGame, which applies moves and tracks turns and results
3. GridFourEnv, a gymnasium-compatible environment over the same game
"""

from typing import Dict, List, Optional, Sequence, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from gridfour.debug import debug
from gridfour.game.board import Board
from gridfour.utils import (ROWS, COLS, LINE_LENGTH, Cell, Direction, GameResult,
                            Move, Player)


def check_line(line: Sequence[Cell], token: Cell) -> bool:
    """
    Check a single row or column for a win.

    The whole line is counted and the tokens need not be adjacent. Exactly
    LINE_LENGTH is required: a full line of five does not win on a 5-wide board.
    """
    return sum(1 for cell in line if cell == token) == LINE_LENGTH


def check_winner(board: Board, row: int, col: int, token: Cell) -> bool:
    """
    Check whether the token just placed at (row, col) won the game.

    Only the row and the column through the last move are examined; no
    other line can have changed.
    """
    debug.start_timer("win_check")
    won = (check_line(board.row_line(row), token)
           or check_line(board.column_line(col), token))
    debug.end_timer("win_check", "rules")
    return won


def get_winning_line(board: Board, row: int, col: int, token: Cell) -> List[Tuple[int, int]]:
    """
    Get the positions of the winning tokens through (row, col).

    Returns:
        List of (row, col) positions, or an empty list if there is no win
    """
    lines = {
        Direction.HORIZONTAL: [(row, c) for c in range(board.cols)],
        Direction.VERTICAL: [(r, col) for r in range(board.rows)],
    }
    for direction, positions in lines.items():
        cells = [board.cell(r, c) for r, c in positions]
        if check_line(cells, token):
            debug.trace(f"Winning {direction.name.lower()} line through ({row}, {col})", "rules")
            return [pos for pos, cell in zip(positions, cells) if cell == token]

    return []


class GridFourGame:
    """
    High-level game manager.

    Owns the board, whose turn it is and the result, so that every front end
    applies the same rules.
    """

    def __init__(self, rows: int = ROWS, cols: int = COLS):
        debug.debug(f"Initializing {rows}x{cols} GridFourGame", "game")
        self.rows = rows
        self.cols = cols
        self.reset()

    def reset(self) -> None:
        """Reset the game to its initial state."""
        self.board = Board(self.rows, self.cols)
        self.current_player = Player.ONE
        self.game_result = GameResult.IN_PROGRESS
        self.moves_made: List[Move] = []

    @property
    def last_move(self) -> Optional[Move]:
        """The most recent move, or None before the first one."""
        return self.moves_made[-1] if self.moves_made else None

    def is_valid_move(self, row: int, col: int) -> bool:
        """Check if the current player may place a token at (row, col)."""
        if self.game_result.is_game_over():
            debug.debug(f"Invalid move: game is over (result: {self.game_result.name})", "game")
            return False
        return self.board.is_valid_move(row, col)

    def make_move(self, row: int, col: int) -> bool:
        """
        Place the current player's token at (row, col).

        Returns:
            True if the move was applied, False otherwise
        """
        if not self.is_valid_move(row, col):
            return False

        player = self.current_player
        move = Move(row, col, player.token)
        self.board = self.board.place_token(move.row, move.col, move.token)
        self.moves_made.append(move)
        debug.debug(f"{player.label} placed {move.token} at ({row}, {col})", "game")

        if check_winner(self.board, row, col, move.token):
            self.game_result = GameResult.win_for(player)
            debug.info(f"{player.label} wins after move at ({row}, {col})", "game")
        elif self.board.is_full():
            self.game_result = GameResult.DRAW
            debug.info("Game ends in a draw", "game")
        else:
            self.current_player = player.other()

        return True

    def get_valid_moves(self) -> List[Tuple[int, int]]:
        """List every (row, col) the current player may take."""
        if self.game_result.is_game_over():
            return []
        return self.board.empty_positions()

    def is_game_over(self) -> bool:
        """Check if the game is over."""
        return self.game_result.is_game_over()

    def get_winner(self) -> Optional[Player]:
        """
        Get the winner of the game.

        Returns:
            The winning player, or None if no winner yet or draw
        """
        if self.game_result == GameResult.PLAYER_ONE_WIN:
            return Player.ONE
        elif self.game_result == GameResult.PLAYER_TWO_WIN:
            return Player.TWO
        return None

    def get_current_player(self) -> Player:
        """Get the player whose turn it is."""
        return self.current_player

    def get_winning_line(self) -> List[Tuple[int, int]]:
        """Positions of the winning tokens, or an empty list if nobody won."""
        if self.get_winner() is None:
            return []
        move = self.last_move
        return get_winning_line(self.board, move.row, move.col, move.token)

    def render(self) -> str:
        """String representation of the board."""
        return str(self.board)


class GridFourEnv(gym.Env):
    """
    Gymnasium environment over GridFourGame.

    An action picks a cell: action = row * cols + col. Both sides are played
    through the same step() call, alternating as in the console game.

    Rewards are the game outcome for the player who moved: 1 for a win,
    0 for a draw or an ordinary move, -1 for a rejected action. They carry
    no shaping since no agent is tuned against them.
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, render_mode: Optional[str] = None, rows: int = ROWS, cols: int = COLS):
        """
        Initialize the environment.

        Args:
            render_mode: 'ascii', 'human' or None
            rows: Board rows
            cols: Board columns
        """
        if render_mode is not None and render_mode not in self.metadata['render_modes']:
            raise ValueError(f"Unsupported render mode: {render_mode}")

        debug.debug("Initializing GridFourEnv", "env")
        self.game = GridFourGame(rows, cols)
        self.render_mode = render_mode

        self.action_space = spaces.Discrete(rows * cols)
        self.observation_space = spaces.Box(
            low=0, high=2, shape=(rows, cols), dtype=np.int8
        )

        self.reward_win = 1.0
        self.reward_draw = 0.0
        self.reward_invalid_move = -1.0
        self.reward_step = 0.0

    def action_to_position(self, action: int) -> Tuple[int, int]:
        """Map an action index to its (row, col) cell."""
        return divmod(int(action), self.game.cols)

    def position_to_action(self, row: int, col: int) -> int:
        """Map a (row, col) cell to its action index."""
        return row * self.game.cols + col

    def reset(self, seed: Optional[int] = None,
              options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        super().reset(seed=seed)
        debug.debug("Resetting environment", "env")
        self.game.reset()

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Play the current player's token on the cell chosen by action.

        The reward is from the point of view of the player who moved.
        """
        row, col = self.action_to_position(action)
        if not self.action_space.contains(int(action)) or not self.game.make_move(row, col):
            debug.warning(f"Invalid action: {action}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        reward = self.reward_step
        terminated = self.game.is_game_over()
        if self.game.get_winner() is not None:
            reward = self.reward_win
        elif terminated:
            reward = self.reward_draw

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), reward, terminated, False, self._get_info()

    def render(self) -> Optional[str]:
        """Return the board text in ascii mode, print it in human mode."""
        if self.render_mode == "ascii":
            return self.game.render()
        if self.render_mode == "human":
            print(self.game.render())
        return None

    def _get_observation(self) -> np.ndarray:
        return self.game.board.get_state()

    def _get_info(self) -> Dict:
        valid_moves = self.game.get_valid_moves()
        return {
            'valid_actions': [self.position_to_action(r, c) for r, c in valid_moves],
            'current_player': self.game.current_player.value,
            'game_result': self.game.game_result.name,
            'moves_made': len(self.game.moves_made),
            'winning_line': self.game.get_winning_line(),
            'last_move': self.game.last_move,
        }
