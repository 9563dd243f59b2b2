"""Database rows recording lottery winners."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import DateTime, Integer, String, delete, func, select
from sqlalchemy.orm import Mapped, Session, mapped_column

from ..db.utils import dt_iso
from ..entities import Participant
from .base import Base
from .utils import PARTICIPANT_ID_LENGTH


class WinRecord(Base):
    """One entry of the win history.

    ``participant_id`` references the roster by identifier only; the record
    stays in history if the participant is later removed from the roster.
    """

    __tablename__ = "win_records"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    """Primary key."""

    sequence: Mapped[int] = mapped_column(Integer, nullable=False, unique=True)
    """Monotonic draw counter; the highest value is the most recent win."""

    participant_id: Mapped[str] = mapped_column(
        String(PARTICIPANT_ID_LENGTH * 2), nullable=False, index=True
    )
    """Identifier of the winning participant."""

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    """Display name at the time of the draw."""

    drawn_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    """Timestamp when the winner was finalized."""

    def __init__(
        self,
        *,
        sequence: int,
        participant_id: str,
        name: str,
        drawn_at: Optional[datetime] = None,
    ) -> None:
        self.sequence = sequence
        self.participant_id = participant_id
        self.name = name
        if drawn_at is not None:
            self.drawn_at = drawn_at

    def __repr__(self) -> str:  # pragma: no cover - repr is trivial
        return "<WinRecord(sequence={seq}, participant_id={pid})>".format(
            seq=self.sequence, pid=self.participant_id
        )

    def to_participant(self) -> Participant:
        return Participant(id=self.participant_id, name=self.name)

    def to_json(self) -> dict[str, Any]:
        return {
            "sequence": self.sequence,
            "participant_id": self.participant_id,
            "name": self.name,
            "drawn_at": dt_iso(self.drawn_at),
        }

    @classmethod
    def most_recent_first(cls, session: Session) -> list["WinRecord"]:
        return list(session.scalars(select(cls).order_by(cls.sequence.desc())).all())

    @classmethod
    def record(cls, session: Session, participant: Participant) -> "WinRecord":
        """Append ``participant`` as the newest winner and flush."""
        current = session.scalar(select(func.max(cls.sequence)))
        record = cls(
            sequence=1 if current is None else current + 1,
            participant_id=participant.id,
            name=participant.name,
        )
        session.add(record)
        session.flush()
        return record

    @classmethod
    def clear(cls, session: Session) -> int:
        """Delete the whole history and return how many rows were removed."""
        result = session.execute(delete(cls))
        session.flush()
        return result.rowcount or 0
