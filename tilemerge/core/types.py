"""
Types shared by the merge engine: directions, tile moves, move results and game state.
"""

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple

from numpy import ndarray

# ##: A board coordinate as (row, col).
Cell = tuple[int, int]


class Direction(str, Enum):
    """Direction of a move."""

    LEFT = 'left'
    UP = 'up'
    RIGHT = 'right'
    DOWN = 'down'


class TileMove(NamedTuple):
    """
    Displacement of one tile during a single move.

    Only used to drive animation: the board returned alongside is authoritative.
    """

    origin: Cell
    destination: Cell
    value: int
    merged: bool = False
    second_origin: Cell | None = None

    def to_dict(self) -> dict:
        """
        Serialize the move for an animation collaborator.

        Returns
        -------
        dict
            ``{'from': [r, c], 'from2': [r, c] | None, 'to': [r, c], 'value': int, 'merged': bool}``.
        """
        return {
            'from': list(self.origin),
            'from2': list(self.second_origin) if self.second_origin is not None else None,
            'to': list(self.destination),
            'value': self.value,
            'merged': self.merged,
        }


class MoveResult(NamedTuple):
    """
    Outcome of a move.

    ``score`` is the sum of the values created by merges, ``moved`` tells whether the board
    changed and ``spawned`` holds the cell of the tile added after the move, if any.
    """

    board: ndarray
    score: int
    moved: bool
    moves: tuple[TileMove, ...] = ()
    spawned: Cell | None = None


@dataclass
class GameState:
    """Full state of a game: board, score, best score and the two end flags."""

    board: ndarray
    score: int = 0
    best: int = 0
    won: bool = False
    over: bool = False

    def copy(self) -> 'GameState':
        """Deep copy of the state, the board is never shared."""
        return GameState(
            board=self.board.copy(), score=self.score, best=self.best, won=self.won, over=self.over
        )
