"""
Game configuration.
"""

from dataclasses import dataclass

from tilemerge.core.gameboard import TARGET_TILE


@dataclass
class GameConfig:
    """
    Configuration of a game.

    Attributes
    ----------
    size : int
        Size of the square board.
    target : int
        Tile value that wins the game.
    await_acknowledge : bool
        Whether an effective move locks the game until ``acknowledge()`` is called,
        letting a caller play the move animation before accepting the next one.
    history_depth : int
        Number of moves that can be undone.
    """

    size: int = 4
    target: int = TARGET_TILE
    await_acknowledge: bool = False
    history_depth: int = 1
