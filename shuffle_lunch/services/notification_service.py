"""Posts shuffle results to a Slack incoming webhook."""

from __future__ import annotations

from typing import Optional

import requests

from shuffle_lunch.utils.config import Settings, get_settings
from shuffle_lunch.utils.logger import get_logger


logger = get_logger(__name__)


class NotificationError(Exception):
    """Raised when the chat webhook rejects or fails a post."""


class SlackNotifier:
    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings or get_settings()

    @property
    def enabled(self) -> bool:
        return bool(self._settings.slack_webhook_url)

    def post_report(self, text: str) -> bool:
        """Send ``text`` to the webhook. Returns False when no webhook is configured."""
        if not self.enabled:
            logger.info("Slack notification skipped | reason=webhook_not_configured")
            return False

        try:
            response = requests.post(
                self._settings.slack_webhook_url,
                json={"text": text},
                timeout=self._settings.slack_timeout_seconds,
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as exc:
            logger.error("Slack notification failed | error=%s", exc)
            raise NotificationError(f"Slack webhook post failed: {exc}") from exc

        logger.info("Slack notification sent | characters=%s", len(text))
        return True
