"""FastAPI application bootstrap and service wiring."""

from __future__ import annotations

from typing import Optional

from fastapi import FastAPI

from shuffle_lunch.controllers.grouping_controller import router as shuffle_router
from shuffle_lunch.repository.roster_repository import RosterRepository
from shuffle_lunch.services.grouping_service import LunchShuffleService
from shuffle_lunch.services.notification_service import SlackNotifier
from shuffle_lunch.utils.config import Settings, get_settings
from shuffle_lunch.utils.logger import get_logger


logger = get_logger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the app with every service attached to ``app.state``."""
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
    )
    app.include_router(shuffle_router)

    app.state.settings = settings
    app.state.roster_repository = RosterRepository(settings)
    app.state.shuffle_service = LunchShuffleService(settings)
    app.state.notifier = SlackNotifier(settings)

    logger.info("Application created | group_size=%s", settings.group_size)
    return app


app = create_app()
