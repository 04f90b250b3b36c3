"""Configured account registry and request-to-account resolution."""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from .config import Settings
from .errors import ConfigError, NoAccountsResolved, RegistryUnavailable, UnknownAccount
from .models import ResolvedAccount
from .utils import log_error


class AccountRegistry:
    """Immutable, ordered mapping of account id to display name.

    Entries are expected to come from validated Settings, which reject
    duplicate ids.
    """

    __slots__ = ("_entries", "_names")

    def __init__(self, entries: Sequence[Tuple[str, str]]):
        if not entries:
            raise ConfigError("Account registry cannot be empty")
        self._entries = tuple((account_id, name) for account_id, name in entries)
        self._names: Dict[str, str] = dict(self._entries)

    @classmethod
    def from_settings(cls, settings: Settings) -> "AccountRegistry":
        return cls(list(zip(settings.account_ids, settings.account_names)))

    def __contains__(self, account_id: object) -> bool:
        return account_id in self._names

    def __iter__(self) -> Iterator[str]:
        return (account_id for account_id, _ in self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"AccountRegistry({list(self._entries)!r})"

    def name_for(self, account_id: str) -> Optional[str]:
        return self._names.get(account_id)

    def get(self, account_id: str) -> Optional[ResolvedAccount]:
        name = self._names.get(account_id)
        if name is None:
            return None
        return ResolvedAccount(id=account_id, name=name)

    @property
    def names(self) -> List[str]:
        return [name for _, name in self._entries]


def parse_account_request(raw: str) -> List[str]:
    """Split a path parameter into trimmed ids, keeping the first occurrence of each."""
    requested: List[str] = []
    for token in raw.split(","):
        token = token.strip()
        if token not in requested:
            requested.append(token)
    return requested


def resolve_accounts(raw: str, registry: Optional[AccountRegistry]) -> List[ResolvedAccount]:
    """
    Resolve a raw ``acct`` path parameter against the registry.

    Unknown ids are logged and dropped. Raises NoAccountsResolved when nothing
    is left and RegistryUnavailable when no registry is configured.
    """
    if registry is None:
        log_error("config_error", "Account registry is not configured")
        raise RegistryUnavailable("Account registry is not configured")

    resolved: List[ResolvedAccount] = []
    for account_id in parse_account_request(raw):
        account = registry.get(account_id)
        if account is None:
            log_error("unknown_account", str(UnknownAccount(account_id)), account_id=account_id)
            continue
        resolved.append(account)

    if not resolved:
        raise NoAccountsResolved(raw)
    return resolved
