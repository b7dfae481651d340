from __future__ import annotations

from dataclasses import replace

import pytest
import requests

from shuffle_lunch.services.notification_service import NotificationError, SlackNotifier
from shuffle_lunch.utils.config import get_settings


class _FakeResponse:
    def __init__(self, status_code: int) -> None:
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} error")


def _notifier(webhook_url):
    return SlackNotifier(
        replace(get_settings(), slack_webhook_url=webhook_url, slack_timeout_seconds=3.0)
    )


def test_post_report_sends_text_payload(monkeypatch):
    calls = []

    def fake_post(url, json, timeout):
        calls.append((url, json, timeout))
        return _FakeResponse(200)

    monkeypatch.setattr("shuffle_lunch.services.notification_service.requests.post", fake_post)

    assert _notifier("https://hooks.example.test/abc").post_report("hello") is True
    assert calls == [("https://hooks.example.test/abc", {"text": "hello"}, 3.0)]


def test_post_report_is_skipped_without_webhook(monkeypatch):
    def fail_post(*args, **kwargs):
        raise AssertionError("webhook must not be called")

    monkeypatch.setattr("shuffle_lunch.services.notification_service.requests.post", fail_post)

    notifier = _notifier(None)
    assert not notifier.enabled
    assert notifier.post_report("hello") is False


def test_http_error_status_raises_notification_error(monkeypatch):
    monkeypatch.setattr(
        "shuffle_lunch.services.notification_service.requests.post",
        lambda url, json, timeout: _FakeResponse(500),
    )
    with pytest.raises(NotificationError):
        _notifier("https://hooks.example.test/abc").post_report("hello")


def test_connection_failure_raises_notification_error(monkeypatch):
    def broken_post(url, json, timeout):
        raise requests.exceptions.ConnectionError("connection refused")

    monkeypatch.setattr("shuffle_lunch.services.notification_service.requests.post", broken_post)

    with pytest.raises(NotificationError) as exc_info:
        _notifier("https://hooks.example.test/abc").post_report("hello")
    assert isinstance(exc_info.value.__cause__, requests.exceptions.ConnectionError)
