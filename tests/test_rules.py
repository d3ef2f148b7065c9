"""
Tests for tile spawning, end-of-game detection and state transitions.
"""

from unittest import TestCase, main

import numpy as np
from numpy.random import default_rng

from tilemerge.core.gameboard import apply_move, fill_cells, has_target, is_done, spawn_tile
from tilemerge.core.types import GameState

FULL_BOARD = np.array([[2, 4, 8, 16], [32, 64, 128, 256], [512, 1024, 2048, 4096], [8192, 16384, 32768, 65536]])


class TestSpawn(TestCase):
    """Random tiles."""

    def test_full_board(self):
        """Nothing is spawned on a full board."""
        board, cell = spawn_tile(FULL_BOARD)

        self.assertIsNone(cell)
        np.testing.assert_array_equal(board, FULL_BOARD)

    def test_single_empty_cell(self):
        """The only empty cell receives a 2 or a 4."""
        board = FULL_BOARD.copy()
        board[2, 1] = 0
        new_board, cell = spawn_tile(board)

        self.assertEqual(cell, (2, 1))
        self.assertIn(new_board[2, 1], (2, 4))
        self.assertEqual(board[2, 1], 0)

    def test_seed_reproducibility(self):
        """Same seed gives the same spawn."""
        board = np.zeros((4, 4), dtype=np.int64)
        first = spawn_tile(board, generator=default_rng(7))
        second = spawn_tile(board, generator=default_rng(7))

        self.assertEqual(first[1], second[1])
        np.testing.assert_array_equal(first[0], second[0])

    def test_value_distribution(self):
        """Roughly one tile out of ten is a 4."""
        rng = default_rng(0)
        board = np.zeros((4, 4), dtype=np.int64)
        values = [spawn_tile(board, generator=rng)[0].sum() for _ in range(2000)]

        ratio = values.count(4) / len(values)
        self.assertGreater(ratio, 0.07)
        self.assertLess(ratio, 0.13)

    def test_fill_cells(self):
        """Fill adds the requested number of tiles, at most the empty cells."""
        board = fill_cells(np.zeros((4, 4), dtype=np.int64), number_tile=2, generator=default_rng(1))
        self.assertEqual(np.count_nonzero(board), 2)

        board = FULL_BOARD.copy()
        board[0, 0] = 0
        fill_cells(board, number_tile=3)
        self.assertEqual(np.count_nonzero(board), 16)


class TestEndOfGame(TestCase):
    """Win and game over detection."""

    def test_has_target(self):
        """The target tile is detected."""
        self.assertTrue(has_target(FULL_BOARD))
        self.assertFalse(has_target(np.array([[2, 4], [8, 16]])))
        self.assertTrue(has_target(np.array([[2, 4], [8, 16]]), target=16))

    def test_full_board_without_merges(self):
        """A full board without equal neighbours is done."""
        self.assertTrue(is_done(FULL_BOARD))

    def test_empty_cell(self):
        """A board with an empty cell is never done."""
        board = FULL_BOARD.copy()
        board[3, 3] = 0
        self.assertFalse(is_done(board))

    def test_vertical_merge(self):
        """A vertical pair keeps the game going."""
        board = FULL_BOARD.copy()
        board[1, 0] = 2
        self.assertFalse(is_done(board))

    def test_horizontal_merge(self):
        """A horizontal pair keeps the game going."""
        board = FULL_BOARD.copy()
        board[3, 2] = 65536
        self.assertFalse(is_done(board))


class TestApplyMove(TestCase):
    """Explicit state transitions."""

    def test_effective_move(self):
        """Score, best and board are updated, a tile is spawned."""
        board = np.zeros((4, 4), dtype=np.int64)
        board[0, :2] = 2
        state = GameState(board=board, score=10, best=12)

        new_state, result = apply_move(state, 'left', generator=default_rng(5))

        self.assertTrue(result.moved)
        self.assertEqual(result.score, 4)
        self.assertEqual(new_state.score, 14)
        self.assertEqual(new_state.best, 14)
        self.assertEqual(new_state.board[0, 0], 4)
        self.assertEqual(np.count_nonzero(new_state.board), 2)
        self.assertIsNotNone(result.spawned)
        self.assertIn(new_state.board[result.spawned], (2, 4))
        np.testing.assert_array_equal(result.board, new_state.board)

        # ##>: The previous state is untouched.
        self.assertEqual(state.score, 10)
        np.testing.assert_array_equal(state.board[0], [2, 2, 0, 0])

    def test_best_not_lowered(self):
        """Best only grows."""
        board = np.zeros((4, 4), dtype=np.int64)
        board[0, :2] = 2
        new_state, _ = apply_move(GameState(board=board, best=100), 'left')
        self.assertEqual(new_state.best, 100)

    def test_no_move(self):
        """A move that changes nothing returns an equal state and spawns nothing."""
        board = np.zeros((4, 4), dtype=np.int64)
        board[0, 0] = 2
        state = GameState(board=board, score=6, best=6)

        new_state, result = apply_move(state, 'left')

        self.assertFalse(result.moved)
        self.assertIsNone(result.spawned)
        self.assertIsNot(new_state.board, state.board)
        np.testing.assert_array_equal(new_state.board, board)
        self.assertEqual(new_state.score, 6)

    def test_win(self):
        """Reaching the target sets the won flag."""
        board = np.zeros((4, 4), dtype=np.int64)
        board[0, :2] = 1024
        new_state, result = apply_move(GameState(board=board), 'left')

        self.assertTrue(new_state.won)
        self.assertEqual(result.score, 2048)

    def test_won_is_sticky(self):
        """The won flag survives moves that do not show the target."""
        board = np.zeros((4, 4), dtype=np.int64)
        board[0, :2] = 2
        new_state, _ = apply_move(GameState(board=board, won=True), 'left')
        self.assertTrue(new_state.won)

    def test_game_over(self):
        """The last free cell filled without merges ends the game."""
        board = np.array(
            [[2, 2, 8, 16], [32, 64, 128, 256], [512, 1024, 4096, 8192], [16384, 32768, 65536, 131072]]
        )
        new_state, result = apply_move(GameState(board=board), 'left')

        self.assertEqual(result.spawned, (0, 3))
        self.assertTrue(new_state.over)
        self.assertFalse(new_state.won)


if __name__ == '__main__':
    main()
