"""Database rows holding the most recent grouping."""

from __future__ import annotations

from typing import Any, Iterable

from sqlalchemy import Integer, String, UniqueConstraint, delete, select
from sqlalchemy.orm import Mapped, Session, mapped_column

from ..entities import Group, Participant
from .base import Base
from .utils import PARTICIPANT_ID_LENGTH


class GroupMember(Base):
    """Membership of one participant in one generated group."""

    __tablename__ = "group_members"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    group_no: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    participant_id: Mapped[str] = mapped_column(
        String(PARTICIPANT_ID_LENGTH * 2), nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    __table_args__ = (
        UniqueConstraint("group_no", "position", name="group_members_slot_key"),
        UniqueConstraint("participant_id"),
    )

    def __init__(self, *, group_no: int, position: int, participant_id: str, name: str) -> None:
        self.group_no = group_no
        self.position = position
        self.participant_id = participant_id
        self.name = name

    def to_json(self) -> dict[str, Any]:
        return {
            "group_no": self.group_no,
            "position": self.position,
            "participant_id": self.participant_id,
            "name": self.name,
        }

    @classmethod
    def load_groups(cls, session: Session) -> list[Group]:
        """Rebuild the stored grouping as :class:`Group` values."""
        rows = session.scalars(
            select(cls).order_by(cls.group_no.asc(), cls.position.asc())
        ).all()
        grouped: dict[int, list[Participant]] = {}
        for row in rows:
            grouped.setdefault(row.group_no, []).append(
                Participant(id=row.participant_id, name=row.name)
            )
        return [Group(id=no, members=tuple(members)) for no, members in grouped.items()]

    @classmethod
    def replace_groups(cls, session: Session, groups: Iterable[Group]) -> None:
        """Discard the stored grouping and persist ``groups`` instead."""
        cls.clear(session)
        session.add_all(
            cls(
                group_no=group.id,
                position=position,
                participant_id=member.id,
                name=member.name,
            )
            for group in groups
            for position, member in enumerate(group.members)
        )
        session.flush()

    @classmethod
    def clear(cls, session: Session) -> int:
        result = session.execute(delete(cls))
        session.flush()
        return result.rowcount or 0
