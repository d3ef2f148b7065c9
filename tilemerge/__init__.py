"""Rules engine for the 2048 sliding-tile game."""

from .config import GameConfig
from .core import Direction, GameState, MoveResult, TileMove
from .envs import Phase, TwentyFortyEight

__all__ = ["GameConfig", "Direction", "GameState", "MoveResult", "TileMove", "Phase", "TwentyFortyEight"]
