"""Shared fixtures: settings, registry and a fake quickview upstream."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

import pytest

from irrigation_calendar.accounts import AccountRegistry
from irrigation_calendar.config import Settings


class DummyResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, text: Optional[str] = None, reason: str = "OK"):
        self.status_code = status_code
        self.reason = reason
        self._payload = payload
        self._text = text

    def json(self) -> Any:
        if self._text is not None:
            return json.loads(self._text)
        return self._payload


class DummySession:
    """Answers quickview GETs from a dict keyed by account id."""

    def __init__(self, responses: Dict[str, DummyResponse]):
        self.responses = responses
        self.requested: List[str] = []
        self.closed = False

    def get(self, url: str, **_: Any) -> DummyResponse:
        self.requested.append(url)
        account_id = url.rstrip("/").split("/")[-2]
        return self.responses.get(account_id, DummyResponse(404, reason="Not Found"))

    def close(self) -> None:
        self.closed = True


def quickview_payload(**overrides: Any) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "id": "X",
        "orderStatus": "Scheduled",
        "irrigationNotice": "Gates open at the scheduled time.",
        "displayFirstAccountScheduleDetail": {"address": "1 Main St"},
        "onDateTime": "2024-05-01T06:00:00",
        "offDateTime": "2024-05-01T07:00:00",
    }
    payload.update(overrides)
    return payload


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        port=3000,
        account_ids=["12345", "67890"],
        account_names=["Home", "Pasture"],
        tz_offset="-07:00",
        host="127.0.0.1",
    )


@pytest.fixture()
def registry(settings: Settings) -> AccountRegistry:
    return AccountRegistry.from_settings(settings)


@pytest.fixture()
def upstream(monkeypatch) -> Dict[str, DummyResponse]:
    """Route quickview requests to canned responses; fill the returned dict per test."""
    responses: Dict[str, DummyResponse] = {}

    def _factory(settings: Settings) -> DummySession:
        return DummySession(responses)

    monkeypatch.setattr("irrigation_calendar.core.fetcher.create_requests_session", _factory)
    return responses
