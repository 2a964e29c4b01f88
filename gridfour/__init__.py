"""
gridfour - A two-player four-in-a-line game on a small grid

Players take turns placing tokens on any empty cell of a 5x5 board. The
first to hold exactly four tokens in the row or column of their latest
move wins.
"""

# Version number
__version__ = '0.1.0'
