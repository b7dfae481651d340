"""CSV roster loading."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

import pandas as pd

from shuffle_lunch.domain.models import WEEKDAYS, Member, MemberValidationError
from shuffle_lunch.utils.config import Settings, get_settings
from shuffle_lunch.utils.logger import get_logger


logger = get_logger(__name__)

FLAG_COLUMNS = ("every_weekday",) + tuple(day.value for day in WEEKDAYS)
REQUIRED_COLUMNS = ("id", "slack_id", "department", "joined_date") + FLAG_COLUMNS


class RosterValidationError(Exception):
    """Raised when the roster file is missing or malformed."""


def _parse_flag(member_id: str, column: str, value: str) -> bool:
    flag = value.strip()
    if flag not in ("", "0", "1"):
        raise RosterValidationError(
            f"Invalid {column} flag {value!r} for member {member_id}: expected 1, 0 or blank"
        )
    return flag == "1"


class RosterRepository:
    """Reads the member roster so services never touch the file format."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings or get_settings()

    def load_members(self, path: Optional[Union[str, Path]] = None) -> list[Member]:
        csv_path = Path(path) if path is not None else self._settings.roster_csv_path
        if not csv_path.is_file():
            raise RosterValidationError(f"Roster file not found: {csv_path}")

        frame = pd.read_csv(csv_path, dtype=str, keep_default_na=False)
        members = self.members_from_frame(frame)
        logger.info("Roster loaded | path=%s | members=%s", csv_path, len(members))
        return members

    def members_from_frame(self, frame: pd.DataFrame) -> list[Member]:
        missing = [column for column in REQUIRED_COLUMNS if column not in frame.columns]
        if missing:
            raise RosterValidationError(f"Roster is missing columns: {', '.join(missing)}")

        joined_dates = pd.to_datetime(frame["joined_date"], errors="coerce", format="mixed")
        invalid_rows = frame.loc[joined_dates.isna(), "id"].tolist()
        if invalid_rows:
            raise RosterValidationError(
                f"Unparseable joined_date for member(s): {', '.join(map(str, invalid_rows))}"
            )

        members: list[Member] = []
        for row, joined_at in zip(frame.to_dict(orient="records"), joined_dates):
            flags = {
                column: _parse_flag(str(row["id"]), column, str(row[column]))
                for column in FLAG_COLUMNS
            }
            try:
                members.append(
                    Member.from_attributes(
                        member_id=str(row["id"]),
                        contact_handle=str(row["slack_id"]).strip(),
                        department_text=str(row["department"]),
                        joined_date=joined_at.date(),
                        **flags,
                    )
                )
            except MemberValidationError as exc:
                raise RosterValidationError(str(exc)) from exc
        return members
