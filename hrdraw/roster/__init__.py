"""Roster ingestion and duplicate management."""

from .manager import RosterManager
from .parsing import (
    count_names,
    decode_roster_bytes,
    drop_duplicate_names,
    has_duplicate_names,
    names_from_rows,
    split_names,
)

__all__ = [
    "RosterManager",
    "count_names",
    "decode_roster_bytes",
    "drop_duplicate_names",
    "has_duplicate_names",
    "names_from_rows",
    "split_names",
]
