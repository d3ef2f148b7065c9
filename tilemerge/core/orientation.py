"""
Board orientation helpers.

Every direction is computed as a single leftward slide: the board is first turned so the
requested direction points towards column 0, then the result (and the coordinates of every
tile move) is turned back.
"""

from typing import Callable

from numpy import fliplr, ndarray, rot90

from tilemerge.core.types import Cell, Direction


def mirror(board: ndarray) -> ndarray:
    """Reverse each row of the board. Self-inverse."""
    return fliplr(board).copy()


def rotate_left(board: ndarray) -> ndarray:
    """
    Rotate the board a quarter turn counter-clockwise.

    Cell (r, c) moves to (N-1-c, r).
    """
    return rot90(board, k=1).copy()


def rotate_right(board: ndarray) -> ndarray:
    """
    Rotate the board a quarter turn clockwise, inverse of ``rotate_left``.

    Cell (r, c) moves to (c, N-1-r).
    """
    return rot90(board, k=-1).copy()


def identity(board: ndarray) -> ndarray:
    """Return a copy of the board."""
    return board.copy()


def mirror_cell(cell: Cell, size: int) -> Cell:
    """Coordinate form of ``mirror``."""
    row, col = cell
    return row, size - 1 - col


def rotate_left_cell(cell: Cell, size: int) -> Cell:
    """Coordinate form of ``rotate_left``."""
    row, col = cell
    return size - 1 - col, row


def rotate_right_cell(cell: Cell, size: int) -> Cell:
    """Coordinate form of ``rotate_right``."""
    row, col = cell
    return col, size - 1 - row


def identity_cell(cell: Cell, size: int) -> Cell:  # noqa: ARG001
    """Coordinate form of ``identity``."""
    return cell


# ##>: Direction -> (pre-transform, post-transform, post-transform on coordinates).
_TRANSFORMS: dict[Direction, tuple[Callable, Callable, Callable]] = {
    Direction.LEFT: (identity, identity, identity_cell),
    Direction.RIGHT: (mirror, mirror, mirror_cell),
    Direction.UP: (rotate_left, rotate_right, rotate_right_cell),
    Direction.DOWN: (rotate_right, rotate_left, rotate_left_cell),
}


def normalize(board: ndarray, direction: Direction | str) -> ndarray:
    """
    Turn the board so that ``direction`` points towards column 0.

    Parameters
    ----------
    board : ndarray
        The game board.
    direction : Direction or str
        The requested direction.

    Returns
    -------
    ndarray
        A new, normalized board.
    """
    pre, _, _ = _TRANSFORMS[Direction(direction)]
    return pre(board)


def denormalize(board: ndarray, direction: Direction | str) -> ndarray:
    """Restore the original orientation of a board produced by ``normalize``."""
    _, post, _ = _TRANSFORMS[Direction(direction)]
    return post(board)


def denormalize_cell(cell: Cell, direction: Direction | str, size: int) -> Cell:
    """
    Map a coordinate of the normalized board back to the original board.

    Parameters
    ----------
    cell : Cell
        Coordinate (row, col) in the normalized board.
    direction : Direction or str
        The direction used for normalization.
    size : int
        Size of the square board.

    Returns
    -------
    Cell
        The same cell in original board space.
    """
    _, _, post_cell = _TRANSFORMS[Direction(direction)]
    row, col = post_cell(cell, size)
    return int(row), int(col)
