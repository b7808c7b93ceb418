from datetime import date, datetime, timedelta
from typing import List, Optional

from hrtime.schemas.timesheet import WeekRange


def parse_date(value) -> Optional[date]:
    """
    Coerce a date-like value into a calendar date.

    Accepts date and datetime objects and ISO strings ("YYYY-MM-DD", optionally
    followed by a time component such as "2025-09-01T00:00:00"). Anything else,
    including empty strings, yields None so the caller can drop the record.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if len(text) < 10:
            return None
        try:
            return datetime.strptime(text[:10], "%Y-%m-%d").date()
        except ValueError:
            return None
    return None


def week_start_of(day: date) -> date:
    """Monday of the week containing day. Sunday maps back six days."""
    # (weekday + 6) % 7 with Sunday=0 is Python's Monday=0 weekday()
    return day - timedelta(days=day.weekday())


def days_in_range(start: date, end: date) -> List[date]:
    """
    Build the ordered list of dates from start to end, both inclusive.

    An end before the start yields an empty list.
    """
    if end < start:
        return []
    return [start + timedelta(days=offset) for offset in range((end - start).days + 1)]


def week_range(any_date: date) -> WeekRange:
    """Monday to Sunday window containing any_date."""
    monday = week_start_of(any_date)
    sunday = monday + timedelta(days=6)
    return WeekRange(week_start=monday, week_end=sunday, days=days_in_range(monday, sunday))


def submission_range(week_start: date, week_end: Optional[date] = None, custom: bool = False) -> List[date]:
    """
    Dates covered by a weekly submission form.

    Without a custom range the start is snapped back to its Monday and the
    range covers that Monday to Sunday week. With a custom range both ends are
    taken as given and week_end is required.
    """
    if custom:
        if week_end is None:
            return []
        return days_in_range(week_start, week_end)
    return week_range(week_start).days
