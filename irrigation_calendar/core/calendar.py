"""Build the iCalendar feed for one or more irrigation accounts."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional, Sequence

from icalendar import Alarm, Calendar, Event, vDDDTypes

from ..config import Settings
from ..models import FetchResult, ResolvedAccount
from ..utils import format_render_time

PRODID = "-//Irrigation Calendar//Irrigation Schedule Feed//EN"

DISPLAY_ALARM_LEAD = timedelta(seconds=300)
AUDIO_ALARM_LEAD = timedelta(seconds=1)


def calendar_name(accounts: Sequence[ResolvedAccount]) -> str:
    if len(accounts) > 1:
        return "Irrigation - Multiple Accounts"
    return f"Irrigation {accounts[0].name}"


def _alarm(action: str, trigger, description: Optional[str] = None) -> Alarm:
    alarm = Alarm()
    alarm.add("action", action)
    if isinstance(trigger, datetime):
        alarm.add("trigger", vDDDTypes(trigger), parameters={"VALUE": "DATE-TIME"})
    else:
        alarm.add("trigger", trigger)
    if description is not None:
        alarm.add("description", description)
    return alarm


def build_event(result: FetchResult, settings: Settings, rendered_at: datetime) -> Event:
    """Create the VEVENT for a successful fetch, including its three alarms."""
    account = result.account
    snapshot = result.snapshot
    start = snapshot.starts_at(settings.tz_offset).astimezone(timezone.utc)
    end = snapshot.ends_at(settings.tz_offset).astimezone(timezone.utc)
    summary = f"Irrigation - {account.name}: {snapshot.order_status}"

    event = Event()
    event.add("uid", f"{snapshot.id}-{account.id}")
    event.add("dtstamp", rendered_at.astimezone(timezone.utc))
    event.add("dtstart", start)
    event.add("dtend", end)
    event.add("summary", summary)
    event.add("description", f"{snapshot.notice}\nUpdated: {format_render_time(rendered_at)}")
    event.add("location", snapshot.address)

    event.add_component(_alarm("DISPLAY", -DISPLAY_ALARM_LEAD, description=summary))
    event.add_component(_alarm("AUDIO", -AUDIO_ALARM_LEAD))

    # Fires at the absolute end of the irrigation window, not before it.
    event.add_component(_alarm("AUDIO", end))
    return event


def build_calendar(
    results: Sequence[FetchResult],
    accounts: Sequence[ResolvedAccount],
    settings: Settings,
    url: Optional[str] = None,
    now: Optional[datetime] = None,
) -> str:
    """Serialize one calendar holding an event per successful fetch; failures are omitted."""
    rendered_at = now or datetime.now().astimezone()
    name = calendar_name(accounts)

    cal = Calendar()
    cal.add("prodid", PRODID)
    cal.add("version", "2.0")
    cal.add("name", name)
    cal.add("x-wr-calname", name)
    if url:
        cal.add("url", url)

    for result in results:
        if result.success:
            cal.add_component(build_event(result, settings, rendered_at))

    return cal.to_ical().decode("utf-8")
