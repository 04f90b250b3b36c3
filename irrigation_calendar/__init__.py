"""Irrigation schedule gateway serving HTML status pages and iCalendar feeds."""
