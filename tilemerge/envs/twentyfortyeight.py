"""2048 game driven by a caller: moves, undo, snapshots and the animation gate."""

import logging
from enum import Enum
from typing import Any

from numpy import ndarray
from numpy.random import Generator, default_rng

from tilemerge.config import GameConfig
from tilemerge.core.gameboard import apply_move, empty_board, fill_cells
from tilemerge.core.history import History
from tilemerge.core.types import Direction, GameState, MoveResult
from tilemerge.utils.snapshot import from_snapshot, to_snapshot

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    """
    Presentation phase of the game.

    IDLE: ready for the next move.
    ANIMATING: a move was committed and the caller has not acknowledged its presentation yet.
    """

    IDLE = 'idle'
    ANIMATING = 'animating'


class TwentyFortyEight:
    """
    2048 game.

    This class holds the live game state and exposes the operations a user interface needs:
    starting a game, moving, undoing the last move, and saving or restoring the game.
    """

    def __init__(self, config: GameConfig | None = None, seed: int | None = None):
        """
        Initialize the game and start a new one.

        Parameters
        ----------
        config : GameConfig, optional
            Game configuration (default is a 4x4 board played to 2048).
        seed : int, optional
            Random seed for reproducibility.
        """
        self.config = config if config is not None else GameConfig()
        self._history = History(depth=self.config.history_depth)
        self._generator: Generator = default_rng(seed)
        self._phase = Phase.IDLE
        self._state = GameState(board=empty_board(self.config.size))

        self.reset()

    @property
    def state(self) -> GameState:
        """Copy of the current game state."""
        return self._state.copy()

    @property
    def board(self) -> ndarray:
        """Copy of the current game board."""
        return self._state.board.copy()

    @property
    def score(self) -> int:
        """Score of the current game."""
        return self._state.score

    @property
    def best(self) -> int:
        """Best score ever reached, across games."""
        return self._state.best

    @property
    def won(self) -> bool:
        """Whether a tile reached the target."""
        return self._state.won

    @property
    def over(self) -> bool:
        """Whether no move can change the board."""
        return self._state.over

    @property
    def is_finished(self) -> bool:
        """
        Check if the game accepts no more moves.

        Returns
        -------
        bool
            True once the game is won or lost.
        """
        return self._state.won or self._state.over

    @property
    def phase(self) -> Phase:
        """Current presentation phase."""
        return self._phase

    @property
    def can_undo(self) -> bool:
        """Whether a move can be undone."""
        return self._history.can_undo

    def reset(self, seed: int | None = None) -> ndarray:
        """
        Start a new game with two random tiles.

        The best score is kept and the undo history is cleared.

        Parameters
        ----------
        seed : int, optional
            Random seed for reproducibility.

        Returns
        -------
        ndarray
            The new game board.
        """
        if seed is not None:
            self._generator = default_rng(seed)

        board = fill_cells(empty_board(self.config.size), number_tile=2, generator=self._generator)
        self._state = GameState(board=board, best=self._state.best)
        self._history.clear()
        self._phase = Phase.IDLE
        logger.debug('New game, best score %d', self._state.best)
        return self.board

    def move(self, direction: Direction | str) -> MoveResult:
        """
        Apply a move to the board.

        Parameters
        ----------
        direction : Direction or str
            The direction of the move.

        Returns
        -------
        MoveResult
            The board after the move (including the spawned tile), the points earned, whether the
            board changed, the tile moves to animate, and where the new tile was spawned.

        Notes
        -----
        - A move is rejected while the previous one is being animated or once the game is won or over.
          A rejected move returns the current board with ``moved`` set to False.
        - Only effective moves are recorded in the undo history.
        """
        direction = Direction(direction)
        if self._phase is Phase.ANIMATING or self.is_finished:
            logger.debug(
                'Move %s rejected (phase=%s, won=%s, over=%s)', direction.value, self._phase.value, self.won, self.over
            )
            return MoveResult(board=self.board, score=0, moved=False)

        self._history.capture(self._state)
        new_state, result = apply_move(self._state, direction, generator=self._generator, target=self.config.target)
        if not result.moved:
            self._history.discard()
            return result

        self._history.commit()
        self._state = new_state
        if self.config.await_acknowledge:
            self._phase = Phase.ANIMATING

        if new_state.won:
            logger.info('Target %d reached with score %d', self.config.target, new_state.score)
        elif new_state.over:
            logger.info('Game over with score %d', new_state.score)
        return result

    def acknowledge(self) -> None:
        """Signal that the last move has been presented, the game accepts moves again."""
        self._phase = Phase.IDLE

    def undo(self) -> None:
        """
        Restore the state from before the last effective move.

        Does nothing when there is no history or while a move is being animated.
        """
        if self._phase is Phase.ANIMATING:
            logger.debug('Undo ignored while animating')
            return

        previous = self._history.undo()
        if previous is not None:
            self._state = previous

    def step(self, direction: Direction | str) -> tuple[ndarray, int, bool]:
        """
        Apply a move and return the new board, the reward and whether the game is finished.

        Parameters
        ----------
        direction : Direction or str
            The direction of the move.

        Returns
        -------
        tuple[ndarray, int, bool]
            The updated game board, the points earned and the finished flag.
        """
        result = self.move(direction)
        return self.board, result.score, self.is_finished

    def snapshot(self) -> dict[str, Any]:
        """Persistable form of the current game."""
        return to_snapshot(self._state)

    def load(self, data: Any) -> bool:
        """
        Restore a game from its persistable form.

        Parameters
        ----------
        data : Any
            A snapshot produced by ``snapshot()``.

        Returns
        -------
        bool
            False when the snapshot is absent or malformed, the current game is then left untouched
            and the caller is expected to start a new one.
        """
        state = from_snapshot(data, size=self.config.size, target=self.config.target)
        if state is None:
            return False

        state.best = max(state.best, self._state.best)
        self._state = state
        self._history.clear()
        self._phase = Phase.IDLE
        return True

    def render(self) -> None:
        """
        Render the game board. This method prints the current state of the game board to the console.
        """
        for row in self._state.board.tolist():
            print(' \t'.join(map(str, row)))
