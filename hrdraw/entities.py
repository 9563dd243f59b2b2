"""Value objects passed between the roster, lottery and grouping engines."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Participant:
    """A person on the roster.

    Attributes
    ----------
    id : str
        Opaque identifier assigned at ingestion. Identity comparisons (win
        history, pool exclusion) always use this value.
    name : str
        Trimmed display name. Names are not unique.
    """

    id: str
    name: str

    def to_json(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name}


@dataclass(frozen=True)
class Group:
    """One chunk of a shuffled roster.

    Attributes
    ----------
    id : int
        1-based position of the group in the generated output.
    members : tuple[Participant, ...]
        Members in shuffled order.
    """

    id: int
    members: tuple[Participant, ...]

    def __len__(self) -> int:
        return len(self.members)

    def to_json(self) -> dict[str, Any]:
        return {"id": self.id, "members": [m.to_json() for m in self.members]}


__all__ = ["Participant", "Group"]
