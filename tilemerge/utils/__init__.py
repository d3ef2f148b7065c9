"""
This module provides utilities for saving and restoring game states.
"""

from .snapshot import from_snapshot, to_snapshot

__all__ = ["from_snapshot", "to_snapshot"]
