"""Date arithmetic for yearly recurring records and the daily reminder window."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Optional
from zoneinfo import ZoneInfo


def parse_iso_date(value: str) -> dt.date:
    """Parse a stored ``YYYY-MM-DD`` value (a full ISO datetime is truncated).

    Raises ``ValueError`` for anything else.
    """
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"invalid date: {value!r}")
    value = value.strip()
    if len(value) > 10 and value[10] in ("T", " "):
        return dt.datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    return dt.date.fromisoformat(value)


def add_years(value: dt.date, years: int) -> dt.date:
    """Shift ``value`` by whole years, clamping Feb 29 to Feb 28."""
    try:
        return value.replace(year=value.year + years)
    except ValueError:
        return value.replace(year=value.year + years, day=28)


def next_occurrence(occurs_on: dt.date, recurring: bool, today: dt.date) -> dt.date:
    if not recurring or occurs_on >= today:
        return occurs_on
    years = today.year - occurs_on.year
    candidate = add_years(occurs_on, years)
    if candidate < today:
        years += 1
        candidate = add_years(occurs_on, years)
    return candidate


def local_today(timezone: Optional[str] = None) -> dt.date:
    if timezone:
        return dt.datetime.now(ZoneInfo(timezone)).date()
    return dt.date.today()


@dataclass(frozen=True)
class ReminderWindow:
    today: dt.date
    tomorrow: dt.date

    @classmethod
    def starting(cls, today: dt.date) -> "ReminderWindow":
        return cls(today=today, tomorrow=today + dt.timedelta(days=1))

    def days_until(self, occurrence: dt.date) -> Optional[int]:
        """Return 0 for today, 1 for tomorrow, None outside the window."""
        if occurrence == self.today:
            return 0
        if occurrence == self.tomorrow:
            return 1
        return None
