"""Utility functions used across modules."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

import requests
from requests import Session

from .config import Settings


def create_requests_session(settings: Settings) -> Session:
    """Create a requests session with proxy support and no retries."""
    session = requests.Session()
    proxies = {key: value for key, value in settings.proxies.items() if value}

    if proxies:
        session.proxies.update(proxies)
    else:
        session.proxies = {"http": None, "https": None}

    # Quickview calls are fire-once.
    adapter = requests.adapters.HTTPAdapter(max_retries=0)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


def format_local_datetime(value: datetime) -> str:
    """Format a datetime like a browser's en-US toLocaleString, e.g. ``5/1/2024, 6:00:00 AM``."""
    hour = value.hour % 12 or 12
    meridiem = "AM" if value.hour < 12 else "PM"
    return f"{value.month}/{value.day}/{value.year}, {hour}:{value:%M:%S} {meridiem}"


def format_render_time(value: Optional[datetime] = None) -> str:
    value = value or datetime.now().astimezone()
    return value.strftime("%a %b %d %Y %H:%M:%S %z")


def log_debug(settings: Settings, message: str) -> None:
    """Log message only if DEBUG_MODE is enabled."""
    if settings.debug_mode:
        print(f"[DEBUG] {message}")


def log_error(kind: str, message: str, account_id: Optional[str] = None, exception: Optional[BaseException] = None) -> None:
    """Centralized error logging with context."""
    account_str = account_id if account_id is not None else "N/A"
    exception_str = f" | Exception: {exception}" if exception else ""
    print(f"[ERROR] Type: {kind} | Account: {account_str} | {message}{exception_str}")
