"""Random partition of the roster into fixed-size groups."""

from __future__ import annotations

import logging
import random
import re
from typing import Optional, Sequence

from sqlalchemy.orm import Session

from ..entities import Group, Participant
from ..errors import InvalidGroupSize
from ..models import GroupMember, RosterEntry
from ..shuffle import chunked, shuffled

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _validate_size(size: object) -> int:
    # bool is an int subclass but never a meaningful group size
    if isinstance(size, bool) or not isinstance(size, int) or size < 1:
        raise InvalidGroupSize(size)
    return size


def partition_into_groups(
    participants: Sequence[Participant],
    size: int,
    rng: Optional[random.Random] = None,
) -> list[Group]:
    """Shuffle ``participants`` and cut the permutation into groups of ``size``.

    The final group keeps whatever remains when the roster length is not a
    multiple of ``size``; members are not redistributed.

    Raises
    ------
    InvalidGroupSize
        If ``size`` is not an integer of at least 1.
    """
    size = _validate_size(size)
    chunks = chunked(shuffled(participants, rng), size)
    return [Group(id=index, members=tuple(chunk)) for index, chunk in enumerate(chunks, start=1)]


def clamp_group_size(raw: object, roster_size: int) -> int:
    """Coerce user input into a usable group size.

    Leading digits are read the way a browser number field does ("4 people"
    is 4); input without them becomes 1. The result is clamped to
    ``[1, max(roster_size, 1)]``.
    """
    if isinstance(raw, int) and not isinstance(raw, bool):
        value = raw
    else:
        match = _LEADING_INT.match(str(raw))
        value = int(match.group(1)) if match else 1
    return max(1, min(value, max(roster_size, 1)))


class GroupingEngine:
    """Generate and hold the current grouping for a session store."""

    def __init__(self, session: Session, *, rng: Optional[random.Random] = None) -> None:
        self._session = session
        self._rng = rng

    def generate(self, size: int) -> list[Group]:
        """Partition the whole roster afresh and replace the stored grouping."""
        size = _validate_size(size)
        roster = [entry.to_participant() for entry in RosterEntry.ordered(self._session)]
        groups = partition_into_groups(roster, size, self._rng)
        GroupMember.replace_groups(self._session, groups)
        logger.info(
            f"Generated {len(groups)} groups of up to {size} from {len(roster)} participants"
        )
        return groups

    def groups(self) -> list[Group]:
        """Return the stored grouping; empty if none was generated since the last roster change."""
        return GroupMember.load_groups(self._session)

    def clear(self) -> int:
        return GroupMember.clear(self._session)


__all__ = ["GroupingEngine", "partition_into_groups", "clamp_group_size"]
