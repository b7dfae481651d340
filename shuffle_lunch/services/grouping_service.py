"""Greedy lunch group allocation.

Members are placed one at a time, most constrained first. Each member goes to
a group that keeps at least one shared weekday, preferring groups that are
still below their minimum size and then groups where the member adds the
fewest same-department pairs. Ties are broken by shuffling candidate groups
with an injected ``random.Random``.
"""

from __future__ import annotations

import random
from collections import Counter
from typing import Iterable, Optional, Sequence

from shuffle_lunch.domain.constraints import GroupingConfig, validate_grouping_config
from shuffle_lunch.domain.models import LunchGroup, Member, ShuffleResult
from shuffle_lunch.utils.config import Settings, get_settings
from shuffle_lunch.utils.logger import get_logger


logger = get_logger(__name__)


class GroupingError(Exception):
    """Base failure for a grouping run; the run produces no groups."""


class InsufficientMembersError(GroupingError):
    """Raised when the roster cannot fill a single group."""


class NoEligibleGroupError(GroupingError):
    """Raised when no group can take a member without losing every shared day."""

    def __init__(self, member: Member) -> None:
        super().__init__(
            f"No eligible group for member {member.member_id} "
            f"(available days: {len(member.available_days)})"
        )
        self.member = member


class AllocationInvariantError(GroupingError):
    """Raised when a member passed candidate filtering but no group accepted it."""


def count_department_members(members: Iterable[Member]) -> Counter:
    """Return the number of members belonging to each department."""
    headcounts: Counter = Counter()
    for member in members:
        headcounts.update(member.departments)
    return headcounts


def member_order_key(member: Member, headcounts: Counter) -> tuple[int, int]:
    """Sort key placing members with fewer days, then less crowded departments, first."""
    crowding = sum(headcounts[department] for department in member.departments)
    return (len(member.available_days), crowding)


def order_members(members: Sequence[Member]) -> list[Member]:
    headcounts = count_department_members(members)
    return sorted(members, key=lambda member: member_order_key(member, headcounts))


def create_groups(member_count: int, group_size: int) -> list[LunchGroup]:
    group_count = member_count // group_size
    if group_count == 0:
        raise InsufficientMembersError(
            f"{member_count} members cannot fill a group of {group_size}"
        )
    max_size = GroupingConfig(group_size=group_size).max_group_size
    return [LunchGroup(min_size=group_size, max_size=max_size) for _ in range(group_count)]


def _candidate_rank(group: LunchGroup, member: Member) -> tuple[int, int]:
    return (1 if group.is_at_or_above_min() else 0, group.pair_count_if_added(member))


def place_member(member: Member, groups: Sequence[LunchGroup], rng: random.Random) -> LunchGroup:
    """Commit ``member`` to the best eligible group and return it."""
    candidates = [group for group in groups if group.available_days_if_added(member)]
    if not candidates:
        raise NoEligibleGroupError(member)

    rng.shuffle(candidates)
    candidates.sort(key=lambda group: _candidate_rank(group, member))
    for group in candidates:
        if group.try_add(member):
            return group

    raise AllocationInvariantError(
        f"Member {member.member_id} matched {len(candidates)} candidate group(s) "
        "but every one of them rejected the member"
    )


def allocate_groups(
    members: Sequence[Member],
    group_size: int,
    rng: random.Random,
) -> list[LunchGroup]:
    groups = create_groups(len(members), group_size)
    logger.info(
        "Allocation started | members=%s | group_size=%s | groups=%s",
        len(members),
        group_size,
        len(groups),
    )
    for member in order_members(members):
        try:
            group = place_member(member, groups, rng)
        except NoEligibleGroupError:
            logger.warning(
                "Allocation infeasible | member_id=%s | available_days=%s",
                member.member_id,
                len(member.available_days),
            )
            raise
        logger.debug(
            "Member placed | member_id=%s | group_index=%s | group_members=%s",
            member.member_id,
            groups.index(group),
            len(group.members),
        )
    return groups


class LunchShuffleService:
    """Runs one allocation pass with settings-backed defaults."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings or get_settings()

    def shuffle(
        self,
        members: Sequence[Member],
        *,
        group_size: Optional[int] = None,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> ShuffleResult:
        config = GroupingConfig(
            group_size=group_size if group_size is not None else self._settings.group_size,
            random_seed=seed if seed is not None else self._settings.random_seed,
        )
        validate_grouping_config(config)

        groups = allocate_groups(
            members,
            config.group_size,
            rng or random.Random(config.random_seed),
        )
        total_pairs = sum(group.same_department_pair_count for group in groups)
        logger.info(
            "Allocation completed | groups=%s | sizes=%s | same_department_pairs=%s",
            len(groups),
            [len(group.members) for group in groups],
            total_pairs,
        )
        return ShuffleResult(groups=groups, group_size=config.group_size, seed=config.random_seed)
