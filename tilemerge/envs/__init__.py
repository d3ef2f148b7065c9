"""
Python implementation of the 2048 game.

This module provides the `TwentyFortyEight` class, which holds a game and applies moves, undo and snapshots.
"""

from .twentyfortyeight import Phase, TwentyFortyEight

__all__ = ["Phase", "TwentyFortyEight"]
