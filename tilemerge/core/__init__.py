"""
This module provides the rules of the merge game.

It includes functions for orienting the board, sliding and merging tiles with move provenance,
spawning new tiles, checking the end of the game, and the undo history.
"""

from .gameboard import (
    TARGET_TILE,
    TILE_SPAWN_PROBS,
    apply_move,
    compute_move,
    empty_board,
    fill_cells,
    has_target,
    is_done,
    merge_row,
    slide_and_merge,
    spawn_tile,
)
from .history import History
from .orientation import denormalize, denormalize_cell, mirror, normalize, rotate_left, rotate_right
from .types import Cell, Direction, GameState, MoveResult, TileMove

__all__ = [
    "TARGET_TILE",
    "TILE_SPAWN_PROBS",
    "apply_move",
    "compute_move",
    "empty_board",
    "fill_cells",
    "has_target",
    "is_done",
    "merge_row",
    "slide_and_merge",
    "spawn_tile",
    "History",
    "denormalize",
    "denormalize_cell",
    "mirror",
    "normalize",
    "rotate_left",
    "rotate_right",
    "Cell",
    "Direction",
    "GameState",
    "MoveResult",
    "TileMove",
]
