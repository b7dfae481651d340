"""Human-readable rendering of finished lunch groups."""

from __future__ import annotations

from typing import Any, Sequence

from shuffle_lunch.domain.models import LunchGroup, sort_weekdays


DAY_SEPARATOR = " / "


def format_available_days(group: LunchGroup) -> str:
    return DAY_SEPARATOR.join(day.label for day in sort_weekdays(group.common_available_days))


def render_group(group: LunchGroup, index: int) -> list[str]:
    lines = [f"====== Shuffle lunch group {index} ======", format_available_days(group)]
    pairs = group.same_department_pairs
    if pairs:
        lines.append(f"* {len(pairs)} pair(s) in this group share a department")
        lines.extend(
            f"  - {first.contact_handle} & {second.contact_handle}" for first, second in pairs
        )
    lines.append(" ".join(group.contact_handles))
    return lines


def render_report(groups: Sequence[LunchGroup]) -> str:
    lines: list[str] = []
    for index, group in enumerate(groups, start=1):
        lines.extend(render_group(group, index))
        lines.append("")
    return "\n".join(lines).rstrip("\n") + "\n"


def summarize_group(group: LunchGroup) -> dict[str, Any]:
    return {
        "available_days": [day.value for day in sort_weekdays(group.common_available_days)],
        "same_department_pair_count": group.same_department_pair_count,
        "same_department_pairs": [
            [first.member_id, second.member_id] for first, second in group.same_department_pairs
        ],
        "member_ids": [member.member_id for member in group.members],
        "slack_ids": group.contact_handles,
    }
