"""Routes serving the status page, the calendar feed and the root redirect."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Cookie, Depends, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse, Response

from ..accounts import AccountRegistry, resolve_accounts
from ..config import Settings
from ..cookies import (
    LAST_ACCOUNT_COOKIE,
    SAVED_ACCOUNTS_COOKIE,
    parse_saved_accounts,
    remember_accounts,
    write_session_cookies,
)
from ..core.calendar import build_calendar
from ..core.fetcher import fetch_schedules
from ..core.page import render_page
from ..dependencies import get_registry, get_settings
from ..utils import log_debug

router = APIRouter()

PLACEHOLDER_BODY = "Hi."


@router.get("/", response_model=None)
async def root(last_account: Optional[str] = Cookie(default=None, alias=LAST_ACCOUNT_COOKIE)) -> Response:
    """Send returning visitors back to the account(s) they last viewed."""
    if last_account:
        return RedirectResponse(f"/{last_account}", status_code=302)
    return PlainTextResponse(PLACEHOLDER_BODY)


@router.get("/{acct}.ics", response_model=None)
async def account_calendar(
    acct: str,
    request: Request,
    settings: Settings = Depends(get_settings),
    registry: Optional[AccountRegistry] = Depends(get_registry),
) -> Response:
    """iCalendar feed for one or more comma-separated accounts."""
    accounts = resolve_accounts(acct, registry)
    results = await fetch_schedules(accounts, settings)
    body = build_calendar(results, accounts, settings, url=str(request.url))
    log_debug(settings, f"Serving calendar for {acct} with {sum(r.success for r in results)} event(s)")
    return Response(
        content=body,
        media_type="text/calendar",
        headers={"Cache-Control": "no-cache"},
    )


@router.get("/{acct}", response_model=None)
async def account_page(
    acct: str,
    settings: Settings = Depends(get_settings),
    registry: Optional[AccountRegistry] = Depends(get_registry),
    saved_accounts: Optional[str] = Cookie(default=None, alias=SAVED_ACCOUNTS_COOKIE),
) -> Response:
    """Status page for one or more comma-separated accounts."""
    accounts = resolve_accounts(acct, registry)
    saved = remember_accounts(parse_saved_accounts(saved_accounts), accounts)

    results = await fetch_schedules(accounts, settings)
    response = HTMLResponse(render_page(results, accounts, saved, registry, settings))
    write_session_cookies(response, saved, acct)
    return response
