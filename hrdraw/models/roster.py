"""Database rows backing the session roster."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import DateTime, Integer, String, UniqueConstraint, func, select
from sqlalchemy.orm import Mapped, Session, mapped_column

from ..db.utils import dt_iso
from ..entities import Participant
from .base import Base
from .utils import PARTICIPANT_ID_LENGTH


class RosterEntry(Base):
    """A participant on the roster, ordered by ``position``."""

    __tablename__ = "roster_entries"

    id: Mapped[str] = mapped_column(String(PARTICIPANT_ID_LENGTH * 2), primary_key=True)
    """Opaque participant identifier."""

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    """Trimmed display name; not unique."""

    position: Mapped[int] = mapped_column(Integer, nullable=False)
    """Insertion order. Gaps are allowed, order is what matters."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    """Timestamp when the participant was ingested."""

    __table_args__ = (UniqueConstraint("position"),)

    def __init__(
        self,
        *,
        id: str,
        name: str,
        position: int,
        created_at: Optional[datetime] = None,
    ) -> None:
        if not name or not name.strip():
            raise ValueError("Roster entries need a non-empty name")
        self.id = id
        self.name = name
        self.position = position
        if created_at is not None:
            self.created_at = created_at

    def __repr__(self) -> str:  # pragma: no cover - repr is trivial
        return "<RosterEntry(id={id}, name={name!r}, position={pos})>".format(
            id=self.id, name=self.name, pos=self.position
        )

    def to_participant(self) -> Participant:
        return Participant(id=self.id, name=self.name)

    def to_json(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "position": self.position,
            "created_at": dt_iso(self.created_at),
        }

    @classmethod
    def ordered(cls, session: Session) -> list["RosterEntry"]:
        """Return every entry in insertion order."""
        return list(session.scalars(select(cls).order_by(cls.position.asc())).all())

    @classmethod
    def next_position(cls, session: Session) -> int:
        """Return the position following the current last entry."""
        current = session.scalar(select(func.max(cls.position)))
        return 0 if current is None else current + 1
