"""Derivation of the remaining draw pool."""

from __future__ import annotations

from typing import Iterable, Sequence

from ..entities import Participant


def compute_remaining_pool(
    roster: Sequence[Participant],
    history: Iterable[Participant],
    allow_repeats: bool,
) -> list[Participant]:
    """Return the participants still eligible to win.

    With ``allow_repeats`` the whole roster is eligible. Otherwise any
    participant whose id appears in ``history`` is excluded; names play no
    part, so two people sharing a name are tracked separately.
    """
    if allow_repeats:
        return list(roster)
    won = {p.id for p in history}
    return [p for p in roster if p.id not in won]


__all__ = ["compute_remaining_pool"]
