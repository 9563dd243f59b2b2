"""Spreadsheet-friendly CSV export of a grouping."""

from __future__ import annotations

import csv
import io
import logging
from datetime import date
from os import PathLike
from pathlib import Path
from typing import Iterable, Optional, Sequence, Union

from .entities import Group

logger = logging.getLogger(__name__)

UTF8_BOM = "\ufeff"
DEFAULT_HEADER: tuple[str, str] = ("組別", "姓名")
DEFAULT_GROUP_LABEL = "第 {id} 組"
FILENAME_TEMPLATE = "分組結果_{day}.csv"


def groups_to_csv(
    groups: Iterable[Group],
    *,
    header: Sequence[str] = DEFAULT_HEADER,
    group_label: str = DEFAULT_GROUP_LABEL,
) -> str:
    """Render one ``(group label, member name)`` row per member after a header row.

    ``group_label`` is formatted with the group's ``id``.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(header)
    for group in groups:
        label = group_label.format(id=group.id)
        for member in group.members:
            writer.writerow((label, member.name))
    return buffer.getvalue()


def encode_csv(text: str) -> bytes:
    """Encode as UTF-8 with a byte-order mark so spreadsheet tools detect it."""
    return (UTF8_BOM + text).encode("utf-8")


def export_filename(day: Optional[date] = None) -> str:
    day = day or date.today()
    return FILENAME_TEMPLATE.format(day=day.isoformat())


def write_groups_csv(groups: Sequence[Group], path: Union[str, PathLike]) -> Path:
    """Write the encoded export to ``path``; a directory gets the dated default name."""
    target = Path(path)
    if target.is_dir():
        target = target / export_filename()
    target.write_bytes(encode_csv(groups_to_csv(groups)))
    logger.info(f"Wrote {len(groups)} groups to {target}")
    return target


__all__ = [
    "groups_to_csv",
    "encode_csv",
    "export_filename",
    "write_groups_csv",
]
