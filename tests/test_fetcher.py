"""Tests for quickview fetching and per-account failure isolation."""

from __future__ import annotations

import asyncio
from typing import List

import pytest
import requests

from irrigation_calendar.core.fetcher import fetch_schedule, fetch_schedules
from irrigation_calendar.models import ResolvedAccount

from conftest import DummyResponse, DummySession, quickview_payload

HOME = ResolvedAccount(id="12345", name="Home")
PASTURE = ResolvedAccount(id="67890", name="Pasture")


@pytest.fixture()
def opened_sessions(monkeypatch, upstream) -> List[DummySession]:
    """Record every session the fetcher opens against the canned upstream."""
    sessions: List[DummySession] = []

    def _factory(settings) -> DummySession:
        session = DummySession(upstream)
        sessions.append(session)
        return session

    monkeypatch.setattr("irrigation_calendar.core.fetcher.create_requests_session", _factory)
    return sessions


def test_fetch_schedule_success(settings, upstream, opened_sessions) -> None:
    upstream["12345"] = DummyResponse(payload=quickview_payload())

    result = fetch_schedule(HOME, settings)

    assert result.success is True
    assert result.account == HOME
    assert result.snapshot.order_status == "Scheduled"
    assert result.snapshot.address == "1 Main St"
    assert opened_sessions[0].requested == ["https://water.gateway.srpnet.com/schedule/account/12345/quickview"]


def test_fetch_schedule_non_2xx_is_failure(settings, upstream) -> None:
    upstream["12345"] = DummyResponse(503, reason="Service Unavailable")

    result = fetch_schedule(HOME, settings)

    assert result.success is False
    assert result.snapshot is None
    assert "503 Service Unavailable" in result.error


def test_fetch_schedule_invalid_json_is_failure(settings, upstream) -> None:
    upstream["12345"] = DummyResponse(text="<html>maintenance</html>")

    result = fetch_schedule(HOME, settings)

    assert result.success is False
    assert "Unreadable" in result.error


def test_fetch_schedule_missing_fields_is_failure(settings, upstream) -> None:
    payload = quickview_payload()
    del payload["offDateTime"]
    upstream["12345"] = DummyResponse(payload=payload)

    assert fetch_schedule(HOME, settings).success is False


def test_fetch_schedule_unparsable_timestamp_is_failure(settings, upstream) -> None:
    upstream["12345"] = DummyResponse(payload=quickview_payload(onDateTime="tomorrow"))

    assert fetch_schedule(HOME, settings).success is False


def test_fetch_schedule_transport_error_is_failure(settings, monkeypatch) -> None:
    class _BrokenSession:
        closed = False

        def get(self, url, **kwargs):
            raise requests.exceptions.ConnectionError("connection refused")

        def close(self):
            self.closed = True

    broken = _BrokenSession()
    monkeypatch.setattr("irrigation_calendar.core.fetcher.create_requests_session", lambda settings: broken)

    result = fetch_schedule(HOME, settings)

    assert result.success is False
    assert "connection refused" in result.error
    assert broken.closed is True


def test_fetch_schedule_accepts_numeric_id_and_null_notice(settings, upstream) -> None:
    upstream["12345"] = DummyResponse(payload=quickview_payload(id=42, irrigationNotice=None))

    result = fetch_schedule(HOME, settings)

    assert result.success is True
    assert result.snapshot.id == "42"
    assert result.snapshot.notice == ""


def test_fetch_schedules_isolates_failures_and_keeps_order(settings, upstream) -> None:
    upstream["12345"] = DummyResponse(503, reason="Service Unavailable")
    upstream["67890"] = DummyResponse(payload=quickview_payload(id="Y"))

    results = asyncio.run(fetch_schedules([HOME, PASTURE], settings))

    assert [result.account.id for result in results] == ["12345", "67890"]
    assert [result.success for result in results] == [False, True]
    assert results[1].snapshot.id == "Y"


def test_fetch_schedules_uses_one_session_per_account(settings, upstream, opened_sessions) -> None:
    upstream["12345"] = DummyResponse(payload=quickview_payload(id="X"))
    upstream["67890"] = DummyResponse(payload=quickview_payload(id="Y"))

    asyncio.run(fetch_schedules([HOME, PASTURE], settings))

    assert len(opened_sessions) == 2
    assert sorted(len(session.requested) for session in opened_sessions) == [1, 1]
    assert all(session.closed for session in opened_sessions)
