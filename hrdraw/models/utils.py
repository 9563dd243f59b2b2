"""Utility helpers for the models package."""

from __future__ import annotations

import secrets
import string
from typing import Optional
from sqlalchemy.orm import Session

BASE62_ALPHABET = string.digits + string.ascii_uppercase + string.ascii_lowercase
PARTICIPANT_ID_LENGTH = 12


def generate_participant_id(
    session: Optional[Session] = None,
    length: int = PARTICIPANT_ID_LENGTH,
    max_attempts: int = 32,
) -> str:
    """Return an opaque participant identifier made of base62 random characters.

    When a session is provided, the helper retries if the generated value is
    already present (or pending) in ``RosterEntry.id``. Twelve base62
    characters give about 71 bits, so a retry is practically never needed.
    """

    if length < 1:
        raise ValueError("length must be positive")

    entry_cls = None
    if session is not None:
        from .roster import RosterEntry

        entry_cls = RosterEntry

    attempts = 0
    while attempts < max_attempts:
        candidate = "".join(secrets.choice(BASE62_ALPHABET) for _ in range(length))

        if session is not None and entry_cls is not None:
            pending = any(
                isinstance(obj, entry_cls) and obj.id == candidate for obj in session.new
            )
            if pending or session.get(entry_cls, candidate) is not None:
                attempts += 1
                continue

        return candidate

    raise RuntimeError(
        "Unable to generate a unique participant identifier after multiple attempts"
    )
