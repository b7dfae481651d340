"""Domain models for lunch group shuffling."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from itertools import combinations
from typing import Optional


class Weekday(str, Enum):
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"

    @property
    def label(self) -> str:
        return self.value.capitalize()


WEEKDAYS: tuple[Weekday, ...] = tuple(Weekday)
ALL_WEEKDAYS: frozenset[Weekday] = frozenset(WEEKDAYS)

_DEPARTMENT_SEPARATOR = re.compile(r"\s*[,|\r\n]\s*")


class MemberValidationError(Exception):
    """Raised when a roster row cannot form a valid member."""


def split_departments(department_text: str) -> frozenset[str]:
    """Split raw department text on comma, pipe and line breaks."""
    parts = _DEPARTMENT_SEPARATOR.split(department_text or "")
    return frozenset(part.strip() for part in parts if part.strip())


def sort_weekdays(days) -> list[Weekday]:
    return [day for day in WEEKDAYS if day in days]


@dataclass(frozen=True)
class Member:
    member_id: str
    contact_handle: str
    departments: frozenset[str]
    available_days: frozenset[Weekday]
    joined_date: Optional[date] = None

    @classmethod
    def from_attributes(
        cls,
        *,
        member_id: str,
        contact_handle: str,
        department_text: str,
        every_weekday: bool,
        monday: bool = False,
        tuesday: bool = False,
        wednesday: bool = False,
        thursday: bool = False,
        friday: bool = False,
        joined_date: Optional[date] = None,
    ) -> "Member":
        member_id = str(member_id).strip()
        if not member_id:
            raise MemberValidationError("member id must be non-empty")
        departments = split_departments(department_text)
        if not departments:
            raise MemberValidationError(f"member {member_id} has no department")

        if every_weekday:
            available_days = ALL_WEEKDAYS
        else:
            flags = {
                Weekday.MONDAY: monday,
                Weekday.TUESDAY: tuesday,
                Weekday.WEDNESDAY: wednesday,
                Weekday.THURSDAY: thursday,
                Weekday.FRIDAY: friday,
            }
            available_days = frozenset(day for day, flag in flags.items() if flag)

        return cls(
            member_id=member_id,
            contact_handle=contact_handle,
            departments=departments,
            available_days=available_days,
            joined_date=joined_date,
        )

    def shares_department(self, other: "Member") -> bool:
        return not self.departments.isdisjoint(other.departments)


@dataclass(eq=False)
class LunchGroup:
    """Mutable group of members that must keep at least one shared weekday.

    Derived metrics are recomputed from ``members`` on every call.
    """

    min_size: int
    max_size: int
    members: list[Member] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.min_size < 0 or self.min_size > self.max_size:
            raise ValueError("min_size must be between 0 and max_size")

    @property
    def common_available_days(self) -> frozenset[Weekday]:
        days = ALL_WEEKDAYS
        for member in self.members:
            days = days & member.available_days
        return days

    @property
    def same_department_pairs(self) -> list[tuple[Member, Member]]:
        return [
            (first, second)
            for first, second in combinations(self.members, 2)
            if first.shares_department(second)
        ]

    @property
    def same_department_pair_count(self) -> int:
        return len(self.same_department_pairs)

    @property
    def contact_handles(self) -> list[str]:
        return [member.contact_handle for member in self.members]

    def available_days_if_added(self, member: Member) -> frozenset[Weekday]:
        return self.common_available_days & member.available_days

    def pair_count_if_added(self, member: Member) -> int:
        return self.same_department_pair_count + sum(
            1 for existing in self.members if existing.shares_department(member)
        )

    def is_at_or_above_min(self) -> bool:
        return len(self.members) >= self.min_size

    def try_add(self, member: Member) -> bool:
        """Append ``member`` unless it would overflow or empty the shared days."""
        if len(self.members) >= self.max_size:
            return False
        if not self.available_days_if_added(member):
            return False
        self.members.append(member)
        return True


@dataclass(frozen=True)
class ShuffleResult:
    groups: list[LunchGroup]
    group_size: int
    seed: Optional[int]
