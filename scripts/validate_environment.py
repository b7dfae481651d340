#!/usr/bin/env python3
"""Validate local shuffle-lunch environment readiness."""

from __future__ import annotations

import importlib
import random
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from shuffle_lunch.domain.models import Member
from shuffle_lunch.services.grouping_service import LunchShuffleService
from shuffle_lunch.utils.config import get_settings

SEPARATOR_LINE = "=" * 44
DEMO_DEPARTMENTS = ("Engineering", "Sales", "Design", "Corporate")


def _print_result(name: str, success: bool, detail: str = "") -> tuple[bool, str]:
    if success:
        return True, f"[PASS] {name}{detail}"
    return False, f"[FAIL] {name}: {detail}"


def _demo_roster(size: int, seed: int) -> list[Member]:
    rng = random.Random(seed)
    return [
        Member.from_attributes(
            member_id=str(index),
            contact_handle=f"@member{index}",
            department_text=rng.choice(DEMO_DEPARTMENTS),
            every_weekday=index % 3 != 0,
            monday=True,
            wednesday=rng.random() < 0.5,
            friday=rng.random() < 0.5,
        )
        for index in range(1, size + 1)
    ]


def main() -> int:
    results: list[str] = []
    all_passed = True

    # CHECK 1 — Python version >= 3.10
    if sys.version_info >= (3, 10):
        ok, line = _print_result("Python " + sys.version.split()[0], True)
    else:
        ok, line = _print_result(
            "Python version >= 3.10",
            False,
            f"found {sys.version.split()[0]}",
        )
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 2 — Required packages importable
    package_names = ["fastapi", "uvicorn", "pydantic", "pandas", "requests", "httpx", "pytest"]
    import_errors: list[str] = []
    for module_name in package_names:
        try:
            importlib.import_module(module_name)
        except ImportError as exc:
            import_errors.append(f"{module_name} ({exc})")
    if import_errors:
        ok, line = _print_result(
            "Required packages",
            False,
            "missing/unimportable -> " + "; ".join(import_errors),
        )
    else:
        ok, line = _print_result("Required packages: all importable", True)
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 3 — Demo shuffle on a synthetic roster
    try:
        roster = _demo_roster(size=23, seed=7)
        result = LunchShuffleService(get_settings()).shuffle(roster, group_size=5, seed=7)
        placed = sum(len(group.members) for group in result.groups)
        if placed != len(roster):
            raise RuntimeError(f"expected {len(roster)} placed members, got {placed}")
        ok, line = _print_result(
            "Demo shuffle",
            True,
            f": sizes={[len(group.members) for group in result.groups]}",
        )
    except Exception as exc:
        ok, line = _print_result("Demo shuffle", False, str(exc))
    results.append(line)
    all_passed = all_passed and ok

    print(SEPARATOR_LINE)
    print(" Shuffle Lunch Environment Validation")
    print(SEPARATOR_LINE)
    for line in results:
        print(f" {line}")
    print(SEPARATOR_LINE)
    if all_passed:
        print(" All checks passed. Environment is ready.")
        print(SEPARATOR_LINE)
        return 0
    print(" One or more checks failed.")
    print(SEPARATOR_LINE)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
