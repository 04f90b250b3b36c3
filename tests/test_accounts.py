"""Tests for the account registry and request resolution."""

from __future__ import annotations

import pytest

from irrigation_calendar.accounts import AccountRegistry, parse_account_request, resolve_accounts
from irrigation_calendar.errors import ConfigError, NoAccountsResolved, RegistryUnavailable
from irrigation_calendar.models import ResolvedAccount


def test_registry_preserves_configuration_order(registry) -> None:
    assert list(registry) == ["12345", "67890"]
    assert registry.names == ["Home", "Pasture"]
    assert registry.name_for("67890") == "Pasture"
    assert registry.name_for("99999") is None
    assert "12345" in registry


def test_registry_rejects_empty_entries() -> None:
    with pytest.raises(ConfigError):
        AccountRegistry([])


def test_parse_account_request_trims_and_dedupes() -> None:
    assert parse_account_request(" 67890 ,12345,67890") == ["67890", "12345"]


def test_resolve_single_account(registry) -> None:
    assert resolve_accounts("12345", registry) == [ResolvedAccount(id="12345", name="Home")]


def test_resolve_keeps_request_order(registry) -> None:
    resolved = resolve_accounts("67890,12345", registry)
    assert [account.id for account in resolved] == ["67890", "12345"]


def test_resolve_drops_unknown_accounts(registry, capsys) -> None:
    resolved = resolve_accounts("12345,99999", registry)
    assert [account.id for account in resolved] == ["12345"]
    assert "99999" in capsys.readouterr().out


def test_resolve_never_introduces_duplicates(registry) -> None:
    resolved = resolve_accounts("12345,12345, 12345", registry)
    assert [account.id for account in resolved] == ["12345"]


def test_resolve_all_unknown_raises(registry) -> None:
    with pytest.raises(NoAccountsResolved):
        resolve_accounts("99999,,00000", registry)


def test_resolve_without_registry_raises() -> None:
    with pytest.raises(RegistryUnavailable):
        resolve_accounts("12345", None)
