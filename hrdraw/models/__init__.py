from .base import Base

# import models so metadata.create_all sees every table
from .roster import RosterEntry  # noqa: F401
from .lottery import WinRecord  # noqa: F401
from .grouping import GroupMember  # noqa: F401
from .utils import generate_participant_id  # noqa: F401

__all__ = [
    "Base",
    "RosterEntry",
    "WinRecord",
    "GroupMember",
    "generate_participant_id",
]
