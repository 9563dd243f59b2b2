"""Shuffle-then-chunk grouping of the session roster."""

from .engine import GroupingEngine, clamp_group_size, partition_into_groups

__all__ = ["GroupingEngine", "clamp_group_size", "partition_into_groups"]
