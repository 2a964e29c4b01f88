"""
gridfour.game - Core game mechanics

This package contains the board representation, the win rule and the
game state management shared by every interface.
"""

from gridfour.game.board import Board, InvalidMoveError
from gridfour.game.rules import GridFourGame, GridFourEnv, check_line, check_winner

__all__ = ['Board', 'InvalidMoveError', 'GridFourGame', 'GridFourEnv',
           'check_line', 'check_winner']
