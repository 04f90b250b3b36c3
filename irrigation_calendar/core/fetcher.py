"""Concurrent quickview fetches with per-account failure isolation."""

from __future__ import annotations

import asyncio
from datetime import datetime
from typing import List, Sequence

import requests
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from ..config import Settings
from ..errors import UpstreamFetchError
from ..models import FetchResult, ResolvedAccount, ScheduleSnapshot
from ..utils import create_requests_session, log_debug, log_error


def fetch_schedule(account: ResolvedAccount, settings: Settings) -> FetchResult:
    """Fetch one account's quickview and validate it into a ScheduleSnapshot.

    Each call opens and closes its own session so worker threads never share one.
    Never raises for upstream problems; they come back as a failed FetchResult.
    """
    url = settings.quickview_url(account.id)
    print(f"{datetime.now()} Requesting data for account number {account.id} from {url}")

    session = create_requests_session(settings)
    try:
        response = session.get(url)
        if not 200 <= response.status_code < 300:
            raise UpstreamFetchError(
                f"Error fetching account data: {response.status_code} {response.reason}",
                status_code=response.status_code,
            )
        payload = response.json()
        snapshot = ScheduleSnapshot.model_validate(payload)
        # Both timestamps must be usable once the offset is appended.
        snapshot.starts_at(settings.tz_offset)
        snapshot.ends_at(settings.tz_offset)
    except UpstreamFetchError as exc:
        log_error("upstream_status", "Fetch Error", account_id=account.id, exception=exc)
        return FetchResult.failed(account, str(exc))
    except requests.exceptions.JSONDecodeError as exc:
        log_error("parse_error", "Quickview body is not JSON", account_id=account.id, exception=exc)
        return FetchResult.failed(account, f"Unreadable quickview payload: {exc}")
    except requests.exceptions.RequestException as exc:
        log_error("network_error", "Fetch Error", account_id=account.id, exception=exc)
        return FetchResult.failed(account, f"Error fetching account data: {exc}")
    except ValidationError as exc:
        log_error("schema_error", "Unexpected quickview payload", account_id=account.id, exception=exc)
        return FetchResult.failed(account, f"Unexpected quickview payload: {exc.error_count()} error(s)")
    except ValueError as exc:
        # JSON decode errors and unparsable timestamps
        log_error("parse_error", "Unreadable quickview payload", account_id=account.id, exception=exc)
        return FetchResult.failed(account, f"Unreadable quickview payload: {exc}")
    finally:
        session.close()

    log_debug(settings, f"Account {account.id} status: {snapshot.order_status}")
    return FetchResult.ok(account, snapshot)


async def fetch_schedules(accounts: Sequence[ResolvedAccount], settings: Settings) -> List[FetchResult]:
    """Fetch every account concurrently and wait for all of them to settle.

    Results keep the order of ``accounts``.
    """
    results = await asyncio.gather(
        *(run_in_threadpool(fetch_schedule, account, settings) for account in accounts)
    )

    failed = sum(1 for result in results if not result.success)
    log_debug(settings, f"Fetched {len(results)} account(s), {failed} failed")
    return list(results)
