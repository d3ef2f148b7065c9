"""
Undo history for the merge engine.
"""

import logging
from collections import deque

from tilemerge.core.types import GameState

logger = logging.getLogger(__name__)


class History:
    """
    Bounded stack of game state snapshots.

    A snapshot is captured before every move attempt and only kept once the move proves
    effective, so moves that leave the board unchanged never touch the history.

    Parameters
    ----------
    depth : int
        Maximum number of snapshots kept (default is 1, a single undo).
    """

    def __init__(self, depth: int = 1):
        if depth < 1:
            raise ValueError(f'depth must be >= 1, got {depth}')
        self._snapshots: deque[GameState] = deque(maxlen=depth)
        self._candidate: GameState | None = None

    def __len__(self) -> int:
        return len(self._snapshots)

    @property
    def can_undo(self) -> bool:
        """Check whether a snapshot is available."""
        return bool(self._snapshots)

    def capture(self, state: GameState) -> None:
        """Store a copy of the state taken just before a move."""
        self._candidate = state.copy()

    def commit(self) -> None:
        """Keep the captured snapshot, dropping the oldest one when full."""
        if self._candidate is not None:
            self._snapshots.append(self._candidate)
            self._candidate = None

    def discard(self) -> None:
        """Forget the captured snapshot."""
        self._candidate = None

    def undo(self) -> GameState | None:
        """
        Pop the latest snapshot.

        Returns
        -------
        GameState or None
            The state before the last effective move, None when the history is empty.
        """
        if not self._snapshots:
            return None
        logger.debug('Undo, %d snapshot(s) left', len(self._snapshots) - 1)
        return self._snapshots.pop()

    def clear(self) -> None:
        """Remove every snapshot."""
        self._snapshots.clear()
        self._candidate = None
