"""Lottery draws over the session roster."""

from .animation import DrawAnimation
from .engine import READY_TEXT, LotteryEngine, LotteryState
from .pool import compute_remaining_pool

__all__ = [
    "DrawAnimation",
    "LotteryEngine",
    "LotteryState",
    "READY_TEXT",
    "compute_remaining_pool",
]
