"""Roster management, animated lucky draws and random grouping."""

from .config import Settings
from .entities import Group, Participant
from .errors import (
    DrawInProgress,
    EncodingUnrecognized,
    HrDrawError,
    InvalidGroupSize,
    PoolExhausted,
)
from .grouping import GroupingEngine, clamp_group_size, partition_into_groups
from .lottery import DrawAnimation, LotteryEngine, LotteryState, compute_remaining_pool
from .roster import RosterManager

__all__ = [
    "Settings",
    "Group",
    "Participant",
    "DrawInProgress",
    "EncodingUnrecognized",
    "HrDrawError",
    "InvalidGroupSize",
    "PoolExhausted",
    "GroupingEngine",
    "clamp_group_size",
    "partition_into_groups",
    "DrawAnimation",
    "LotteryEngine",
    "LotteryState",
    "compute_remaining_pool",
    "RosterManager",
]
