"""
Conversion between game states and their persistable form.

A snapshot is a plain mapping ``{'board': N x N list of ints, 'score': int, 'best': int}`` that a
storage collaborator can serialize as it sees fit.
"""

import logging
from collections.abc import Mapping
from numbers import Integral
from typing import Any

from numpy import array, iinfo, int64

from tilemerge.core.gameboard import TARGET_TILE, has_target, is_done
from tilemerge.core.types import GameState

logger = logging.getLogger(__name__)


def to_snapshot(state: GameState) -> dict[str, Any]:
    """
    Convert a game state into its persistable form.

    Parameters
    ----------
    state : GameState
        The game state.

    Returns
    -------
    dict
        The snapshot, made only of built-in types.
    """
    return {'board': state.board.tolist(), 'score': int(state.score), 'best': int(state.best)}


# ##>: Largest value a board cell can hold.
_MAX_TILE = int(iinfo(int64).max)


def _is_count(value: Any) -> bool:
    """Check that a value is a non-negative integer."""
    return isinstance(value, Integral) and not isinstance(value, bool) and value >= 0


def _is_tile(value: Any) -> bool:
    """Check that a cell is empty or holds a power of two >= 2 that fits on the board."""
    if not _is_count(value) or value > _MAX_TILE:
        return False
    value = int(value)
    return value == 0 or (value >= 2 and value & (value - 1) == 0)


def _valid_board(board: Any, size: int) -> bool:
    """Check that a board is a size x size grid of valid cells."""
    if not isinstance(board, (list, tuple)) or len(board) != size:
        return False
    for row in board:
        if not isinstance(row, (list, tuple)) or len(row) != size:
            return False
        if not all(_is_tile(value) for value in row):
            return False
    return True


def from_snapshot(data: Any, size: int = 4, target: int = TARGET_TILE) -> GameState | None:
    """
    Rebuild a game state from its persistable form.

    Parameters
    ----------
    data : Any
        The loaded snapshot.
    size : int, optional
        Expected size of the board (default is 4).
    target : int, optional
        Winning tile value, used to derive the won flag (default is 2048).

    Returns
    -------
    GameState or None
        The game state, or None if the snapshot is absent or malformed.

    Notes
    -----
    - A missing or invalid score or best falls back to 0.
    - The won and over flags are derived from the board.
    """
    if not isinstance(data, Mapping):
        logger.warning('Snapshot ignored: expected a mapping, got %s', type(data).__name__)
        return None

    board = data.get('board')
    if not _valid_board(board, size):
        logger.warning('Snapshot ignored: board is missing or is not a %dx%d grid of tiles', size, size)
        return None

    score = data.get('score', 0)
    best = data.get('best', 0)
    score = int(score) if _is_count(score) else 0
    best = int(best) if _is_count(best) else 0

    state = array(board, dtype=int64)
    return GameState(
        board=state,
        score=score,
        best=max(best, score),
        won=has_target(state, target),
        over=is_done(state),
    )
