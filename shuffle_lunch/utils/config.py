"""Environment-driven application settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional


def _read_int(name: str, default: Optional[int]) -> Optional[int]:
    raw_value = os.getenv(name)
    if raw_value is None or not raw_value.strip():
        return default
    try:
        return int(raw_value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw_value!r}") from exc


def _read_float(name: str, default: float) -> float:
    raw_value = os.getenv(name)
    if raw_value is None or not raw_value.strip():
        return default
    try:
        return float(raw_value)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw_value!r}") from exc


@dataclass(frozen=True)
class Settings:
    app_name: str
    app_version: str
    log_level: str
    log_format: str
    roster_csv_path: Path
    group_size: int
    random_seed: Optional[int]
    slack_webhook_url: Optional[str]
    slack_timeout_seconds: float
    host: str
    port: int


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Build settings once per process; call ``cache_clear`` to reload."""
    return Settings(
        app_name=os.getenv("SHUFFLE_LUNCH_APP_NAME", "Shuffle Lunch"),
        app_version=os.getenv("SHUFFLE_LUNCH_APP_VERSION", "1.0.0"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_format=os.getenv(
            "SHUFFLE_LUNCH_LOG_FORMAT",
            "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        ),
        roster_csv_path=Path(
            os.getenv("SHUFFLE_LUNCH_ROSTER_CSV", "data/shuffle_lunch_members.csv")
        ),
        group_size=_read_int("SHUFFLE_LUNCH_GROUP_SIZE", 5),
        random_seed=_read_int("SHUFFLE_LUNCH_RANDOM_SEED", None),
        slack_webhook_url=os.getenv("SHUFFLE_LUNCH_SLACK_WEBHOOK_URL") or None,
        slack_timeout_seconds=_read_float("SHUFFLE_LUNCH_SLACK_TIMEOUT_SECONDS", 10.0),
        host=os.getenv("SHUFFLE_LUNCH_HOST", "127.0.0.1"),
        port=_read_int("SHUFFLE_LUNCH_PORT", 8000),
    )
