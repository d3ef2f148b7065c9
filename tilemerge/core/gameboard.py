"""
Core functionality of the merge engine: sliding and merging rows, tile spawning and end-of-game checks.
"""

import logging

from numpy import any as np_any
from numpy import argwhere, array_equal, int64, ndarray, zeros, zeros_like
from numpy.random import Generator, default_rng

from tilemerge.core.orientation import denormalize, denormalize_cell, normalize
from tilemerge.core.types import Cell, Direction, GameState, MoveResult, TileMove

logger = logging.getLogger(__name__)

# ##>: Tile spawn probabilities (90% for 2, 10% for 4).
TILE_SPAWN_PROBS: dict[int, float] = {2: 0.9, 4: 0.1}

# ##>: Default winning tile.
TARGET_TILE = 2048

_TILE_VALUES = list(TILE_SPAWN_PROBS)
_TILE_PROBS = list(TILE_SPAWN_PROBS.values())

# ##>: Module-level generator, used when the caller does not provide one.
_GENERATOR = default_rng()


def empty_board(size: int = 4) -> ndarray:
    """Create a board without any tile."""
    return zeros((size, size), dtype=int64)


def merge_row(row: ndarray, row_index: int = 0) -> tuple[int, ndarray, list[TileMove]]:
    """
    Slide a row towards column 0, merge adjacent equal values and record every tile move.

    Parameters
    ----------
    row : ndarray
        A 1D array representing one row of the game board.
    row_index : int, optional
        Index of the row in its board, used for the recorded coordinates (default is 0).

    Returns
    -------
    score : int
        The total value created by merges.
    merged_row : ndarray
        The new row, padded with zeros, same length as ``row``.
    moves : list[TileMove]
        One record per resulting tile, in row order.

    Notes
    -----
    - Zeros (empty cells) are removed before merging.
    - Merging occurs from column 0 towards the end of the row.
    - A tile created by a merge is never merged again in the same call.
    """
    # ##: Compaction, keeping the original column of each tile.
    tiles = [(col, int(value)) for col, value in enumerate(row) if value != 0]

    result = zeros_like(row)
    moves = []
    score = 0

    # ##: Single left-to-right scan.
    i, position = 0, 0
    while i < len(tiles):
        col, value = tiles[i]
        if i + 1 < len(tiles) and tiles[i + 1][1] == value:
            merged = value * 2
            result[position] = merged
            score += merged
            moves.append(
                TileMove(
                    origin=(row_index, col),
                    second_origin=(row_index, tiles[i + 1][0]),
                    destination=(row_index, position),
                    value=merged,
                    merged=True,
                )
            )
            i += 2
        else:
            result[position] = value
            moves.append(TileMove(origin=(row_index, col), destination=(row_index, position), value=value))
            i += 1
        position += 1

    return score, result, moves


def slide_and_merge(board: ndarray) -> MoveResult:
    """
    Slide the game board to the left, merge adjacent cells, and compute the score.

    Parameters
    ----------
    board : ndarray
        The game board represented as a 2D NumPy array.

    Returns
    -------
    MoveResult
        The updated board, the score, whether any row changed and the tile moves.

    Notes
    -----
    - Rows are processed independently.
    - For other directions, normalize the board before calling this function.
    - Coordinates of the tile moves are those of ``board``.
    """
    result = zeros_like(board)
    moves: list[TileMove] = []
    score = 0
    moved = False

    for i, row in enumerate(board):
        score_row, merged_row, row_moves = merge_row(row, row_index=i)
        score += score_row
        moves.extend(row_moves)
        result[i] = merged_row
        if not array_equal(row, merged_row):
            moved = True

    return MoveResult(board=result, score=score, moved=moved, moves=tuple(moves))


def compute_move(board: ndarray, direction: Direction | str) -> MoveResult:
    """
    Compute a move in any direction, without adding a new tile.

    Parameters
    ----------
    board : ndarray
        The current game board. Not modified.
    direction : Direction or str
        The direction of the move.

    Returns
    -------
    MoveResult
        The result, with the board and every tile move expressed in original board space.
    """
    direction = Direction(direction)
    size = board.shape[0]
    result = slide_and_merge(normalize(board, direction))

    moves = tuple(
        move._replace(
            origin=denormalize_cell(move.origin, direction, size),
            destination=denormalize_cell(move.destination, direction, size),
            second_origin=(
                denormalize_cell(move.second_origin, direction, size) if move.second_origin is not None else None
            ),
        )
        for move in result.moves
    )
    return result._replace(board=denormalize(result.board, direction), moves=moves)


def fill_cells(state: ndarray, number_tile: int, generator: Generator | None = None) -> ndarray:
    """
    Fill empty cells with new tiles (2 or 4).

    Parameters
    ----------
    state : ndarray
        The current state of the game board. **Modified in-place.**
    number_tile : int
        Number of new tiles to add.
    generator : Generator, optional
        Random generator, the module-level one is used by default.

    Returns
    -------
    ndarray
        The same array reference with new tiles added.

    Notes
    -----
    - If there are fewer empty cells than requested, it fills all available cells.
    """
    rng = generator if generator is not None else _GENERATOR

    available_cells = argwhere(state == 0)
    number_tile = min(number_tile, len(available_cells))
    if number_tile:
        values = rng.choice(_TILE_VALUES, size=number_tile, p=_TILE_PROBS)
        chosen_indices = rng.choice(len(available_cells), size=number_tile, replace=False)
        state[tuple(available_cells[chosen_indices].T)] = values
    return state


def spawn_tile(board: ndarray, generator: Generator | None = None) -> tuple[ndarray, Cell | None]:
    """
    Add one tile to a random empty cell.

    Parameters
    ----------
    board : ndarray
        The game board. Not modified.
    generator : Generator, optional
        Random generator, the module-level one is used by default.

    Returns
    -------
    new_board : ndarray
        A copy of the board with the new tile.
    cell : Cell or None
        Where the tile was added, None when the board has no empty cell.
    """
    rng = generator if generator is not None else _GENERATOR
    new_board = board.copy()

    available_cells = argwhere(board == 0)
    if len(available_cells) == 0:
        return new_board, None

    row, col = available_cells[rng.integers(len(available_cells))]
    new_board[row, col] = 2 if rng.random() < TILE_SPAWN_PROBS[2] else 4
    return new_board, (int(row), int(col))


def has_target(board: ndarray, target: int = TARGET_TILE) -> bool:
    """Check whether any tile reached the target value."""
    return bool(np_any(board == target))


def is_done(state: ndarray) -> bool:
    """
    Check if the game has ended by determining if any moves are possible.

    Parameters
    ----------
    state : ndarray
        The current state of the game board.

    Returns
    -------
    bool
        True if the game is over (no moves possible), False otherwise.

    Notes
    -----
    The board is full and none of the four directions would change it. The probes are
    never committed.
    """
    if not state.all():
        return False

    for direction in Direction:
        if slide_and_merge(normalize(state, direction)).moved:
            return False
    return True


def apply_move(
    state: GameState, direction: Direction | str, generator: Generator | None = None, target: int = TARGET_TILE
) -> tuple[GameState, MoveResult]:
    """
    Compute the next game state after applying a move.

    Parameters
    ----------
    state : GameState
        The current game state. Not modified.
    direction : Direction or str
        The direction of the move.
    generator : Generator, optional
        Random generator used to spawn the new tile.
    target : int, optional
        The winning tile value (default is 2048).

    Returns
    -------
    new_state : GameState
        The next state. When the board did not move it is a copy of ``state``.
    result : MoveResult
        The move result, its board includes the spawned tile.

    Notes
    -----
    - The won flag is sticky: once set it is never cleared by a move.
    - The over flag is recomputed after every effective move.
    """
    result = compute_move(state.board, direction)
    if not result.moved:
        return state.copy(), result

    board, spawned = spawn_tile(result.board, generator=generator)
    score = state.score + result.score
    new_state = GameState(
        board=board,
        score=score,
        best=max(state.best, score),
        won=state.won or has_target(board, target),
        over=is_done(board),
    )
    logger.debug('Move %s: +%d points, spawned at %s', Direction(direction).value, result.score, spawned)
    return new_state, result._replace(board=board.copy(), spawned=spawned)
