"""Common FastAPI dependencies."""

from __future__ import annotations

from typing import Optional

from fastapi import Request

from .accounts import AccountRegistry
from .config import Settings


def get_settings(request: Request) -> Settings:  # pragma: no cover - trivial accessor
    return request.app.state.settings  # type: ignore[attr-defined]


def get_registry(request: Request) -> Optional[AccountRegistry]:
    return getattr(request.app.state, "registry", None)
