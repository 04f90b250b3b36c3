"""Exception types raised across the gateway."""

from __future__ import annotations

from typing import List, Optional


class ConfigError(Exception):
    """Environment configuration is missing or inconsistent."""

    def __init__(self, message: str, missing: Optional[List[str]] = None):
        super().__init__(message)
        self.missing = missing or []


class RegistryUnavailable(Exception):
    """No account registry is attached to the running application."""


class UnknownAccount(Exception):
    """A requested account id is not configured."""

    def __init__(self, account_id: str):
        super().__init__(f"Invalid account requested: {account_id!r}")
        self.account_id = account_id


class NoAccountsResolved(Exception):
    """None of the requested account ids are configured."""

    def __init__(self, raw: str):
        super().__init__(f"No configured accounts in request {raw!r}")
        self.raw = raw


class UpstreamFetchError(Exception):
    """The quickview endpoint returned a non-2xx status or an unusable body."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedCookie(ValueError):
    """A session cookie could not be decoded."""
