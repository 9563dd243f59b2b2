"""Session-level compositions of the roster, lottery and grouping engines."""

from __future__ import annotations

import logging
from os import PathLike
from typing import Callable, Iterable, Optional, Union

from sqlalchemy.orm import Session

from .config import Settings
from .entities import Group, Participant
from .errors import PoolExhausted
from .grouping import GroupingEngine, clamp_group_size
from .lottery import DrawAnimation, LotteryEngine
from .roster import RosterManager

logger = logging.getLogger(__name__)


def reset_session(session: Session) -> None:
    """Empty the roster, the win history and the stored grouping.

    A session starts from nothing even when the store is backed by a file
    that still holds rows from an earlier run.
    """
    roster = RosterManager(session, settings=Settings())
    removed = roster.clear()
    winners = LotteryEngine(session, animation=DrawAnimation(ticks=0, interval=0.0)).reset()
    groups = GroupingEngine(session).clear()
    if removed or winners or groups:
        logger.info(
            f"Discarded previous session state ({removed} participants, "
            f"{winners} winners, {groups} group slots)"
        )


def build_roster(
    session: Session,
    *,
    texts: Iterable[str] = (),
    files: Iterable[Union[str, PathLike]] = (),
    demo: bool = False,
    dedupe: bool = False,
    settings: Optional[Settings] = None,
) -> RosterManager:
    """Populate the session roster from every supplied source.

    Sources are applied in order: pasted ``texts``, then ``files``, then the
    demo names. Duplicates are removed last when ``dedupe`` is set.

    Parameters
    ----------
    session : Session
        Active session backing the roster.
    texts : Iterable[str]
        Free text with names separated by newlines or commas.
    files : Iterable[str | PathLike]
        Paths to one-name-per-line files (first CSV column is used).
    demo : bool, default: False
        Append the built-in sample names.
    dedupe : bool, default: False
        Keep only the first participant for each name.
    settings : Optional[Settings], default: None
        Settings forwarded to :class:`RosterManager`.

    Returns
    -------
    RosterManager
        Manager bound to ``session``.

    Raises
    ------
    EncodingUnrecognized
        If one of the files cannot be decoded. Sources ingested before it
        stay on the roster.
    """
    roster = RosterManager(session, settings=settings)
    for text in texts:
        roster.ingest_text(text)
    for path in files:
        roster.ingest_file(path)
    if demo:
        roster.load_demo()
    if dedupe:
        roster.remove_duplicates()
    return roster


async def run_draws(
    session: Session,
    count: int,
    *,
    allow_repeats: bool = False,
    animation: Optional[DrawAnimation] = None,
    on_tick: Optional[Callable[[Participant], None]] = None,
    on_winner: Optional[Callable[[int, Participant], None]] = None,
    engine: Optional[LotteryEngine] = None,
) -> list[Participant]:
    """Run ``count`` consecutive draws and return the winners in draw order.

    Drawing stops early, without raising, once the pool is exhausted after at
    least one winner; an empty pool on the first draw raises
    :class:`PoolExhausted` so callers can tell "nobody to draw" apart.
    """
    if count < 1:
        raise ValueError("count must be a positive integer")

    engine = engine or LotteryEngine(session, allow_repeats=allow_repeats, animation=animation)
    winners: list[Participant] = []
    for round_no in range(1, count + 1):
        try:
            winner = await engine.draw(on_tick)
        except PoolExhausted:
            if not winners:
                raise
            logger.info(f"Pool exhausted after {len(winners)} of {count} draws")
            break
        if winner is None:
            continue
        winners.append(winner)
        if on_winner is not None:
            on_winner(round_no, winner)
    return winners


def generate_groups(session: Session, size: object) -> list[Group]:
    """Generate a grouping from user-supplied ``size``, clamped to the roster.

    An empty roster produces no groups.
    """
    roster = RosterManager(session)
    roster_size = len(roster)
    if roster_size == 0:
        return []
    return GroupingEngine(session).generate(clamp_group_size(size, roster_size))


__all__ = ["reset_session", "build_roster", "run_draws", "generate_groups"]
