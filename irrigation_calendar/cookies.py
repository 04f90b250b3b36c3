"""Client-side memory of recently viewed accounts."""

from __future__ import annotations

import json
from typing import List, Optional, Sequence

from fastapi import Response

from .errors import MalformedCookie
from .models import ResolvedAccount
from .utils import log_error

SAVED_ACCOUNTS_COOKIE = "savedAccounts"
LAST_ACCOUNT_COOKIE = "lastAccount"

MAX_SAVED_ACCOUNTS = 10
COOKIE_MAX_AGE = 365 * 24 * 60 * 60


def decode_saved_accounts(raw: str) -> List[str]:
    """Decode the savedAccounts cookie, raising MalformedCookie on bad input."""
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise MalformedCookie(f"savedAccounts is not JSON: {exc}") from exc
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise MalformedCookie("savedAccounts must be a JSON array of strings")
    return value


def parse_saved_accounts(raw: Optional[str]) -> List[str]:
    """Return the remembered account ids, treating anything unreadable as empty."""
    if not raw:
        return []
    try:
        return decode_saved_accounts(raw)
    except MalformedCookie as exc:
        log_error("malformed_cookie", "Ignoring savedAccounts cookie", exception=exc)
        return []


def remember_accounts(saved: Sequence[str], accounts: Sequence[ResolvedAccount]) -> List[str]:
    """Move each requested account to the front, dropping duplicates, capped at MAX_SAVED_ACCOUNTS."""
    updated: List[str] = []
    for account_id in saved:
        if account_id not in updated:
            updated.append(account_id)
    for account in accounts:
        updated = [account_id for account_id in updated if account_id != account.id]
        updated.insert(0, account.id)
    return updated[:MAX_SAVED_ACCOUNTS]


def write_session_cookies(response: Response, saved: Sequence[str], last_account: str) -> None:
    response.set_cookie(
        SAVED_ACCOUNTS_COOKIE,
        json.dumps(list(saved), separators=(",", ":")),
        max_age=COOKIE_MAX_AGE,
    )
    response.set_cookie(LAST_ACCOUNT_COOKIE, last_account, max_age=COOKIE_MAX_AGE)
