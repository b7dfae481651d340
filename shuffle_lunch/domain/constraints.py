"""Validation rules for a grouping run."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class GroupingConfig:
    group_size: int
    random_seed: Optional[int] = None

    @property
    def max_group_size(self) -> int:
        # leftovers from the floor division are spread one per group
        return self.group_size + 1


def validate_grouping_config(config: GroupingConfig) -> None:
    if config.group_size <= 0:
        raise ValueError("group_size must be > 0")
    if config.random_seed is not None and config.random_seed < 0:
        raise ValueError("random_seed must be >= 0")
