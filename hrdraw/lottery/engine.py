"""Single-winner lottery with an animated reveal."""

from __future__ import annotations

import enum
import logging
import random
from typing import Callable, Optional

from sqlalchemy.orm import Session

from ..config import Settings
from ..entities import Participant
from ..errors import DrawInProgress, PoolExhausted
from ..models import RosterEntry, WinRecord
from ..shuffle import random_index
from .animation import DrawAnimation
from .pool import compute_remaining_pool

logger = logging.getLogger(__name__)

READY_TEXT = "Ready to draw"


class LotteryState(str, enum.Enum):
    IDLE = "idle"
    DRAWING = "drawing"


class LotteryEngine:
    """Draw winners one at a time from the roster of a session store.

    The engine never caches the remaining pool: it is derived from the
    roster, the win history and the repeat flag whenever it is needed, so
    roster edits between draws are always honoured.
    """

    def __init__(
        self,
        session: Session,
        *,
        allow_repeats: bool = False,
        animation: Optional[DrawAnimation] = None,
        rng: Optional[random.Random] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        """Create a lottery engine bound to a SQLAlchemy session.

        Parameters
        ----------
        session : Session
            Session whose database holds the roster and the win history.
        allow_repeats : bool, default: False
            Whether previous winners stay eligible.
        animation : Optional[DrawAnimation], default: None
            Reveal animation. Built from ``settings`` when omitted.
        rng : Optional[random.Random], default: None
            Random source for the animation and the final pick. The
            ``secrets`` module is used when omitted.
        settings : Optional[Settings], default: None
            Settings used to build the default animation.
        """
        self._session = session
        self._allow_repeats = bool(allow_repeats)
        self._animation = animation or DrawAnimation.from_settings(settings)
        self._rng = rng
        self._state = LotteryState.IDLE
        self._current_winner: Optional[Participant] = None
        self._display = READY_TEXT

    # -------- state --------
    @property
    def state(self) -> LotteryState:
        return self._state

    @property
    def is_drawing(self) -> bool:
        return self._state is LotteryState.DRAWING

    @property
    def current_winner(self) -> Optional[Participant]:
        """Winner of the last completed draw, ``None`` while drawing or after reset."""
        return self._current_winner

    @property
    def display(self) -> str:
        """Text currently shown on the draw stage."""
        return self._display

    @property
    def allow_repeats(self) -> bool:
        return self._allow_repeats

    @allow_repeats.setter
    def allow_repeats(self, value: bool) -> None:
        self.set_allow_repeats(value)

    def set_allow_repeats(self, value: bool) -> None:
        """Toggle whether previous winners may win again. History is untouched."""
        self._allow_repeats = bool(value)
        logger.debug(f"allow_repeats set to {self._allow_repeats}")

    def history(self) -> list[Participant]:
        """Past winners, most recent first."""
        return [record.to_participant() for record in WinRecord.most_recent_first(self._session)]

    def remaining_pool(self) -> list[Participant]:
        """Participants currently eligible to win."""
        roster = [entry.to_participant() for entry in RosterEntry.ordered(self._session)]
        return compute_remaining_pool(roster, self.history(), self._allow_repeats)

    # -------- drawing --------
    async def draw(
        self,
        on_tick: Optional[Callable[[Participant], None]] = None,
        *,
        raise_if_busy: bool = False,
    ) -> Optional[Participant]:
        """Run one animated draw and return the winner.

        The animation frames are for display only. Once they are done the
        pool is recomputed and the winner is picked from it with a fresh,
        independent uniform draw.

        Parameters
        ----------
        on_tick : Optional[Callable[[Participant], None]], default: None
            Called with the participant shown on each animation frame.
        raise_if_busy : bool, default: False
            Raise :class:`DrawInProgress` instead of silently returning
            ``None`` when another draw is running.

        Returns
        -------
        Optional[Participant]
            The winner, or ``None`` if the request was ignored because a draw
            was already running.

        Raises
        ------
        PoolExhausted
            If nobody is eligible when the draw starts or when it is finalized.
            No winner is recorded in that case.
        """
        pool = self._begin(raise_if_busy)
        if pool is None:
            return None
        try:
            async for frame in self._animation.frames(pool, self._pick):
                self._display = frame.name
                if on_tick is not None:
                    on_tick(frame)
            return self._finalize()
        finally:
            self._state = LotteryState.IDLE

    def draw_now(self, *, raise_if_busy: bool = False) -> Optional[Participant]:
        """Draw a winner immediately, without animation frames."""
        if self._begin(raise_if_busy) is None:
            return None
        try:
            return self._finalize()
        finally:
            self._state = LotteryState.IDLE

    def reset(self) -> int:
        """Forget every past winner and return how many records were removed.

        Raises
        ------
        DrawInProgress
            If called while a draw is running.
        """
        if self.is_drawing:
            raise DrawInProgress()
        removed = WinRecord.clear(self._session)
        self._current_winner = None
        self._display = READY_TEXT
        logger.info(f"Lottery history reset ({removed} winners cleared)")
        return removed

    def _pick(self, n: int) -> int:
        return random_index(n, self._rng)

    def _begin(self, raise_if_busy: bool) -> Optional[list[Participant]]:
        """Move to DRAWING and return the starting pool, or ``None`` when busy."""
        if self._state is LotteryState.DRAWING:
            if raise_if_busy:
                raise DrawInProgress()
            logger.debug("Draw requested while another is running; ignored")
            return None

        pool = self.remaining_pool()
        if not pool:
            raise PoolExhausted()

        self._state = LotteryState.DRAWING
        self._current_winner = None
        return pool

    def _finalize(self) -> Participant:
        pool = self.remaining_pool()
        if not pool:
            raise PoolExhausted("Nobody was left in the pool when the draw finished")

        winner = pool[self._pick(len(pool))]
        WinRecord.record(self._session, winner)
        self._current_winner = winner
        self._display = winner.name
        logger.info(f"Drew participant {winner.id} from a pool of {len(pool)}")
        return winner


__all__ = ["LotteryEngine", "LotteryState", "READY_TEXT"]
