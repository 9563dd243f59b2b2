"""Roster manager: the canonical, ordered participant list of a session."""

from __future__ import annotations

import logging
from os import PathLike
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from ..config import Settings
from ..demo import DEMO_NAMES
from ..entities import Participant
from ..models import GroupMember, RosterEntry, generate_participant_id
from .parsing import (
    count_names,
    decode_roster_bytes,
    drop_duplicate_names,
    names_from_rows,
    split_names,
)

logger = logging.getLogger(__name__)


class RosterManager:
    """Ingest, inspect and prune the roster held in a session store.

    Every mutation that changes the roster also discards any stored grouping,
    since a grouping is only meaningful for the roster it was generated from.
    Lottery state needs no such hook because the remaining pool is recomputed
    from the roster on every read.
    """

    def __init__(self, session: Session, *, settings: Optional[Settings] = None) -> None:
        """Create a roster manager bound to a SQLAlchemy session.

        Parameters
        ----------
        session : Session
            Session whose database holds the roster tables.
        settings : Optional[Settings], default: None
            Settings providing the legacy fallback encoding. Loaded from the
            environment when omitted.
        """
        self._session = session
        self._settings = settings or Settings.from_env()

    # -------- reads --------
    def participants(self) -> list[Participant]:
        """Return the roster in insertion order."""
        return [entry.to_participant() for entry in RosterEntry.ordered(self._session)]

    def __len__(self) -> int:
        return self._session.scalar(select(func.count()).select_from(RosterEntry)) or 0

    def __iter__(self) -> Iterator[Participant]:
        return iter(self.participants())

    def name_counts(self) -> dict[str, int]:
        """Map each name to its number of occurrences in the current roster."""
        return count_names(p.name for p in self.participants())

    def has_duplicates(self) -> bool:
        return any(count > 1 for count in self.name_counts().values())

    def duplicate_names(self) -> list[str]:
        """Names appearing more than once, in first-seen order."""
        return [name for name, count in self.name_counts().items() if count > 1]

    # -------- ingestion --------
    def ingest_names(self, names: Iterable[str]) -> list[Participant]:
        """Append already-tokenized names, assigning a fresh id to each.

        Names are trimmed and empty ones dropped; no deduplication happens here.
        """
        cleaned = [name.strip() for name in names if name and name.strip()]
        if not cleaned:
            return []

        start = RosterEntry.next_position(self._session)
        added: list[Participant] = []
        for offset, name in enumerate(cleaned):
            entry = RosterEntry(
                id=generate_participant_id(self._session),
                name=name,
                position=start + offset,
            )
            self._session.add(entry)
            added.append(entry.to_participant())

        self._discard_groups()
        self._session.flush()
        logger.info(f"Added {len(added)} participants to the roster")
        return added

    def ingest_text(self, text: str) -> list[Participant]:
        """Add names pasted as free text, separated by newlines and/or commas."""
        return self.ingest_names(split_names(text))

    def ingest_bytes(self, data: bytes) -> list[Participant]:
        """Add names from uploaded file bytes, one per line (first CSV column).

        Raises
        ------
        EncodingUnrecognized
            If the bytes are neither UTF-8 nor the configured legacy code page.
            The roster is left unchanged.
        """
        text = decode_roster_bytes(data, self._settings.fallback_encoding)
        return self.ingest_names(names_from_rows(text))

    def ingest_file(self, path: Union[str, PathLike]) -> list[Participant]:
        """Read ``path`` and ingest its bytes via :meth:`ingest_bytes`."""
        data = Path(path).read_bytes()
        logger.debug(f"Read {len(data)} bytes from {path}")
        return self.ingest_bytes(data)

    def load_demo(self) -> list[Participant]:
        """Append the built-in sample names."""
        return self.ingest_names(DEMO_NAMES)

    # -------- destructive operations --------
    def clear(self) -> int:
        """Remove every participant immediately; return how many were removed.

        Confirmation is left to the caller.
        """
        result = self._session.execute(delete(RosterEntry))
        removed = result.rowcount or 0
        if removed:
            self._discard_groups()
        self._session.flush()
        logger.info(f"Cleared roster ({removed} participants removed)")
        return removed

    def remove_duplicates(self) -> int:
        """Keep the first participant for each name; return how many were dropped."""
        entries = RosterEntry.ordered(self._session)
        keep = {entry.id for entry in drop_duplicate_names(entries)}
        dropped = [entry for entry in entries if entry.id not in keep]
        for entry in dropped:
            self._session.delete(entry)
        if dropped:
            self._discard_groups()
        self._session.flush()
        logger.info(f"Removed {len(dropped)} duplicate participants")
        return len(dropped)

    def _discard_groups(self) -> None:
        removed = GroupMember.clear(self._session)
        if removed:
            logger.debug("Roster changed; discarded the previous grouping")


__all__ = ["RosterManager"]
