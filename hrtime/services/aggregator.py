"""
Week aggregation of day entries.
"""

from datetime import timedelta
from typing import Dict, Iterable, List, Sequence, Tuple

from hrtime.schemas.timesheet import DayEntry, HoursSummaryRow, TimesheetStatus, WeekBucket
from hrtime.utils.weeks import week_start_of


def overall_status(days: Sequence[DayEntry]) -> TimesheetStatus:
    """
    Derive the approval state of a week from its populated days.

    Any rejected day rejects the week; the week is approved only when it has
    at least one populated day and all of them are approved. Everything else,
    including an empty week, is pending.
    """
    statuses = [day.status for day in days if day.is_populated]
    if any(status == TimesheetStatus.REJECTED for status in statuses):
        return TimesheetStatus.REJECTED
    if statuses and all(status == TimesheetStatus.APPROVED for status in statuses):
        return TimesheetStatus.APPROVED
    return TimesheetStatus.PENDING


def deduplicate(entries: Iterable[DayEntry]) -> List[DayEntry]:
    """Keep the last entry per (employee, project, date), in first-seen order."""
    latest: Dict[Tuple[str, str, object], DayEntry] = {}
    for entry in entries:
        latest[(str(entry.employee_id), str(entry.project_id), entry.date)] = entry
    return list(latest.values())


def aggregate(entries: Iterable[DayEntry]) -> List[WeekBucket]:
    """
    Bucket day entries by employee, project and Monday-start week.

    Only populated days are kept in a bucket's days, sorted by date. Buckets
    are returned ordered by week start, then employee id, then project id, so
    the result does not depend on input order.
    """
    groups: Dict[Tuple[str, str, object], List[DayEntry]] = {}
    for entry in deduplicate(entries):
        key = (str(entry.employee_id), str(entry.project_id), week_start_of(entry.date))
        groups.setdefault(key, []).append(entry)

    buckets = []
    for (_, _, monday), members in groups.items():
        members.sort(key=lambda e: e.date)
        days = [e for e in members if e.is_populated]
        sample = members[-1]
        buckets.append(
            WeekBucket(
                employee_id=sample.employee_id,
                employee_name=_last_name(members, "employee_name"),
                project_id=sample.project_id,
                project_name=_last_name(members, "project_name"),
                week_start=monday,
                week_end=monday + timedelta(days=6),
                days=days,
                total_hours=sum(e.hours or 0 for e in days),
                overall_status=overall_status(days),
            )
        )

    buckets.sort(key=lambda b: (b.week_start, str(b.employee_id), str(b.project_id)))
    return buckets


def _last_name(members: List[DayEntry], attr: str):
    names = [getattr(m, attr) for m in members if getattr(m, attr)]
    return names[-1] if names else None


def find_bucket(buckets: Iterable[WeekBucket], entry: DayEntry):
    """Return the bucket that owns entry, or None when it is not populated."""
    monday = week_start_of(entry.date)
    for bucket in buckets:
        if (
            bucket.week_start == monday
            and str(bucket.employee_id) == str(entry.employee_id)
            and str(bucket.project_id) == str(entry.project_id)
        ):
            return bucket
    return None


def summarize_hours(entries: Iterable[DayEntry]) -> List[HoursSummaryRow]:
    """Total populated hours per project and employee."""
    rows: Dict[Tuple[str, str], dict] = {}
    for entry in deduplicate(entries):
        if not entry.is_populated:
            continue
        key = (str(entry.project_id), str(entry.employee_id))
        row = rows.setdefault(
            key,
            {
                "project_id": entry.project_id,
                "project_name": entry.project_name,
                "employee_id": entry.employee_id,
                "employee_name": entry.employee_name,
                "total_hours": 0.0,
                "entry_count": 0,
            },
        )
        row["total_hours"] += entry.hours
        row["entry_count"] += 1
        row["project_name"] = entry.project_name or row["project_name"]
        row["employee_name"] = entry.employee_name or row["employee_name"]

    ordered = sorted(rows.items(), key=lambda item: item[0])
    return [HoursSummaryRow(**row) for _, row in ordered]
