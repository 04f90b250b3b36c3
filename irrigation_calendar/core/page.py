"""HTML status page rendering."""

from __future__ import annotations

from html import escape
from typing import List, Sequence

from ..accounts import AccountRegistry
from ..config import Settings
from ..models import FetchResult, ResolvedAccount
from ..utils import format_local_datetime

FETCH_ERROR_MARKER = "Unable to fetch irrigation data"

PAGE_STYLE = """
        body {
            font-family: Arial, sans-serif;
            max-width: 800px;
            margin: 50px auto;
            padding: 20px;
            background-color: #f5f5f5;
        }
        .container {
            background-color: white;
            padding: 30px;
            border-radius: 10px;
            box-shadow: 0 2px 5px rgba(0,0,0,0.1);
        }
        h1 {
            color: #2c3e50;
            margin-bottom: 20px;
        }
        h2 {
            color: #34495e;
            margin-top: 0;
            margin-bottom: 15px;
            font-size: 22px;
        }
        .schedule-section {
            margin-bottom: 20px;
        }
        .schedule-separator {
            padding-top: 30px;
            border-top: 2px solid #ecf0f1;
        }
        .account-switcher {
            margin-bottom: 20px;
            padding-bottom: 20px;
            border-bottom: 2px solid #ecf0f1;
        }
        .account-switcher label {
            display: block;
            margin-bottom: 8px;
            font-weight: bold;
            color: #2c3e50;
        }
        .account-switcher select {
            width: 100%;
            padding: 10px;
            font-size: 16px;
            border: 1px solid #bdc3c7;
            border-radius: 5px;
            background-color: white;
            cursor: pointer;
        }
        .date {
            font-size: 24px;
            color: #27ae60;
            font-weight: bold;
            margin: 20px 0;
        }
        .info {
            margin: 10px 0;
            color: #555;
        }
        .label {
            font-weight: bold;
            color: #2c3e50;
        }
        .error {
            color: #e74c3c;
            padding: 10px;
            background-color: #fadbd8;
            border-radius: 5px;
            margin: 10px 0;
        }
        a {
            display: inline-block;
            margin-top: 20px;
            padding: 10px 20px;
            background-color: #3498db;
            color: white;
            text-decoration: none;
            border-radius: 5px;
        }
        a:hover {
            background-color: #2980b9;
        }
"""


def _option(value: str, label: str, selected: bool) -> str:
    marker = " selected" if selected else ""
    return f'<option value="{escape(value)}"{marker}>{escape(label)}</option>'


def render_account_switcher(saved_accounts: Sequence[str], registry: AccountRegistry, requested: Sequence[str]) -> str:
    """Build the <select> of remembered accounts; empty when nothing is remembered.

    "View All" is selected when the request covers exactly the remembered ids,
    in any order; a single account is selected only when it alone was requested.
    """
    if not saved_accounts:
        return ""

    requested_ids = set(requested)
    single = requested[0] if len(requested_ids) == 1 else None

    options: List[str] = []
    if len(saved_accounts) > 1:
        view_all = len(requested_ids) > 1 and requested_ids == set(saved_accounts)
        options.append(_option(",".join(saved_accounts), "View All", view_all))
    for account_id in saved_accounts:
        name = registry.name_for(account_id)
        if name is not None:
            options.append(_option(account_id, name, account_id == single))

    return (
        '<div class="account-switcher">'
        '<label for="account-select">Switch Account:</label>'
        "<select id=\"account-select\" onchange=\"window.location.href='/'+this.value\">"
        + "".join(options)
        + "</select></div>"
    )


def render_section(result: FetchResult, index: int, settings: Settings) -> str:
    css_class = "schedule-section schedule-separator" if index > 0 else "schedule-section"
    account = result.account

    if not result.success:
        return f"""
        <div class="{css_class}">
            <h2>{escape(account.name)}</h2>
            <div class="error">{FETCH_ERROR_MARKER}</div>
        </div>"""

    snapshot = result.snapshot
    next_date = format_local_datetime(snapshot.starts_at(settings.tz_offset))
    return f"""
        <div class="{css_class}">
            <h2>{escape(account.name)}</h2>
            <div class="info"><span class="label">Status:</span> {escape(snapshot.order_status)}</div>
            <div class="info"><span class="label">Next Irrigation Date:</span></div>
            <div class="date">{escape(next_date)}</div>
            <div class="info"><span class="label">Location:</span> {escape(snapshot.address)}</div>
            <div class="info">{escape(snapshot.notice)}</div>
            <a href="/{escape(account.id)}.ics">Download Calendar (.ics)</a>
        </div>"""


def render_page(
    results: Sequence[FetchResult],
    accounts: Sequence[ResolvedAccount],
    saved_accounts: Sequence[str],
    registry: AccountRegistry,
    settings: Settings,
) -> str:
    """Render the status page; fetch failures show up inline in their section."""
    multiple = len(accounts) > 1
    page_title = "Irrigation Schedules" if multiple else f"Irrigation Schedule - {accounts[0].name}"
    heading = "Irrigation Schedules" if multiple else "Irrigation Schedule"

    requested = [account.id for account in accounts]
    switcher = render_account_switcher(saved_accounts, registry, requested)
    sections = "".join(render_section(result, index, settings) for index, result in enumerate(results))

    return f"""<!DOCTYPE html>
<html>
<head>
    <title>{escape(page_title)}</title>
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <style>{PAGE_STYLE}    </style>
</head>
<body>
    <div class="container">
        <h1>{heading}</h1>
        {switcher}
        {sections}
    </div>
</body>
</html>
"""
