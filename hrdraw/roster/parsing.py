"""Pure helpers turning pasted text or uploaded bytes into names.

Nothing here touches the session store; :class:`~hrdraw.roster.manager.RosterManager`
wraps these functions and persists the result.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, Hashable, Iterable, Sequence, TypeVar

from ..config import DEFAULT_FALLBACK_ENCODING
from ..errors import EncodingUnrecognized

logger = logging.getLogger(__name__)

_TEXT_SEPARATORS = re.compile(r"[\n,]+")
_LINE_BREAKS = re.compile(r"[\r\n]+")

# "utf-8-sig" is strict UTF-8 that also drops a leading byte-order mark,
# which spreadsheet tools add when saving "CSV UTF-8".
PRIMARY_ENCODING = "utf-8-sig"

T = TypeVar("T")


def split_names(text: str) -> list[str]:
    """Split free text on runs of newlines/commas, trimming and dropping empties.

    >>> split_names("A,B\\nC")
    ['A', 'B', 'C']
    >>> split_names(" , ,A")
    ['A']
    """
    if not isinstance(text, str):
        raise TypeError("text must be a string")
    return [token.strip() for token in _TEXT_SEPARATORS.split(text) if token.strip()]


def decode_roster_bytes(data: bytes, fallback_encoding: str = DEFAULT_FALLBACK_ENCODING) -> str:
    """Decode uploaded bytes as strict UTF-8, falling back to a legacy code page.

    Parameters
    ----------
    data : bytes
        Raw file contents.
    fallback_encoding : str, default: ``"cp950"``
        Code page tried when the bytes are not valid UTF-8. The default is
        the Big5 variant written by spreadsheet tools on Traditional Chinese
        Windows.

    Returns
    -------
    str
        Decoded text.

    Raises
    ------
    EncodingUnrecognized
        If neither decode succeeds.
    """
    try:
        return bytes(data).decode(PRIMARY_ENCODING)
    except UnicodeDecodeError:
        logger.debug(f"Input is not valid UTF-8, retrying as {fallback_encoding}")

    try:
        return bytes(data).decode(fallback_encoding)
    except (UnicodeDecodeError, LookupError) as exc:
        raise EncodingUnrecognized(("utf-8", fallback_encoding)) from exc


def names_from_rows(text: str) -> list[str]:
    """Return the first comma-separated column of each non-empty line."""
    names = []
    for line in _LINE_BREAKS.split(text):
        name = line.split(",", 1)[0].strip()
        if name:
            names.append(name)
    return names


def count_names(names: Iterable[str]) -> dict[str, int]:
    """Map each distinct name to its number of occurrences, in first-seen order."""
    counts: dict[str, int] = {}
    for name in names:
        counts[name] = counts.get(name, 0) + 1
    return counts


def has_duplicate_names(names: Iterable[str]) -> bool:
    return any(count > 1 for count in count_names(names).values())


def drop_duplicate_names(
    items: Sequence[T], key: Callable[[T], Hashable] = lambda item: item.name
) -> list[T]:
    """Keep the first item for each distinct ``key(item)``, preserving order."""
    seen: set[Hashable] = set()
    unique: list[T] = []
    for item in items:
        k = key(item)
        if k in seen:
            continue
        seen.add(k)
        unique.append(item)
    return unique


__all__ = [
    "split_names",
    "decode_roster_bytes",
    "names_from_rows",
    "count_names",
    "has_duplicate_names",
    "drop_duplicate_names",
]
