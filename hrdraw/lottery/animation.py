"""Time-sliced "spinning names" shown while a draw is running."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import AsyncIterator, Callable, Optional, Sequence

from ..config import Settings
from ..entities import Participant


@dataclass(frozen=True)
class DrawAnimation:
    """Fixed-length sequence of display-only random picks.

    Attributes
    ----------
    ticks : int
        Number of frames produced before the draw is finalized.
    interval : float
        Seconds awaited before each frame.
    """

    ticks: int = 21
    interval: float = 0.08

    def __post_init__(self) -> None:
        if self.ticks < 0:
            raise ValueError("ticks must not be negative")
        if self.interval < 0:
            raise ValueError("interval must not be negative")

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "DrawAnimation":
        settings = settings or Settings.from_env()
        return cls(ticks=settings.animation_ticks, interval=settings.animation_interval)

    async def frames(
        self,
        pool: Sequence[Participant],
        pick: Callable[[int], int],
    ) -> AsyncIterator[Participant]:
        """Yield one randomly picked participant per tick.

        ``pick(n)`` must return an index in ``[0, n)``. The sleep between
        frames yields to the event loop, so cancelling the consuming task
        stops the sequence without scheduling further frames.
        """
        if not pool:
            return
        for _ in range(self.ticks):
            await asyncio.sleep(self.interval)
            yield pool[pick(len(pool))]


__all__ = ["DrawAnimation"]
