from __future__ import annotations

from pathlib import Path

import pytest


ROSTER_HEADER = "id,slack_id,department,joined_date,every_weekday,monday,tuesday,wednesday,thursday,friday\n"


@pytest.fixture
def write_roster(tmp_path):
    """Write CSV rows under the standard roster header and return the path."""

    def _write(rows: list[str], filename: str = "members.csv", header: str = ROSTER_HEADER) -> Path:
        path = tmp_path / filename
        path.write_text(header + "\n".join(rows) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def everyday_rows():
    return [f"{index},@user{index},dept_{index},2020-01-{index:02d},1,0,0,0,0,0" for index in range(1, 11)]
