import random
from datetime import date, timedelta

from hrtime.schemas.timesheet import DayEntry, TimesheetStatus
from hrtime.services.aggregator import aggregate, find_bucket, overall_status, summarize_hours

MONDAY = date(2025, 9, 1)


def day(id, offset=0, hours=8.0, status=TimesheetStatus.PENDING, employee=1, project=5, **kwargs):
    return DayEntry(
        id=id,
        date=MONDAY + timedelta(days=offset),
        hours=hours,
        status=status,
        employee_id=employee,
        project_id=project,
        **kwargs,
    )


def test_overall_status_scenarios():
    P, A, R = TimesheetStatus.PENDING, TimesheetStatus.APPROVED, TimesheetStatus.REJECTED
    assert overall_status([]) == P
    assert overall_status([day(1, status=P)]) == P
    assert overall_status([day(1, status=A), day(2, 1, status=A)]) == A
    assert overall_status([day(1, status=A), day(2, 1, status=R)]) == R
    assert overall_status([day(1, status=A), day(2, 1, status=P)]) == P


def test_overall_status_ignores_unpopulated_days():
    days = [day(1, status=TimesheetStatus.APPROVED), day(2, 1, hours=None, status=TimesheetStatus.REJECTED)]
    assert overall_status(days) == TimesheetStatus.APPROVED


def test_full_week_with_two_missing_days():
    hours = [8, 8, 8, 8, 8, None, None]
    entries = [day(i + 1, i, hours=h) for i, h in enumerate(hours)]
    buckets = aggregate(entries)
    assert len(buckets) == 1
    bucket = buckets[0]
    assert bucket.total_hours == 32
    assert bucket.overall_status == TimesheetStatus.PENDING
    assert len(bucket.days) == 5
    assert bucket.week_start == MONDAY
    assert bucket.week_end == MONDAY + timedelta(days=6)


def test_zero_hours_count_as_missing():
    entries = [day(i + 1, i, hours=h) for i, h in enumerate([8, 8, 8, 8, 8, 0, 0])]
    bucket = aggregate(entries)[0]
    assert len(bucket.days) == 5
    assert bucket.total_hours == 32


def test_days_sorted_ascending_within_bucket():
    entries = [day(3, 4), day(1, 0), day(2, 2)]
    bucket = aggregate(entries)[0]
    assert [d.id for d in bucket.days] == [1, 2, 3]


def test_aggregate_is_order_independent_and_idempotent():
    entries = [
        day(1, 0),
        day(2, 1, status=TimesheetStatus.APPROVED),
        day(3, 7, employee=2),
        day(4, 8, project=6, status=TimesheetStatus.REJECTED),
        day(5, 13, hours=4.5),
        day(6, -1, employee=3),
    ]
    expected = aggregate(entries)
    assert aggregate(entries) == expected
    rng = random.Random(7)
    for _ in range(10):
        shuffled = entries[:]
        rng.shuffle(shuffled)
        assert aggregate(shuffled) == expected


def test_buckets_split_by_week_employee_and_project():
    entries = [
        day(1, 6),  # Sunday
        day(2, 7),  # next Monday
        day(3, 0, project=6),
        day(4, 0, employee=2),
    ]
    buckets = aggregate(entries)
    keys = [(b.week_start, b.employee_id, b.project_id) for b in buckets]
    assert keys == [
        (MONDAY, 1, 5),
        (MONDAY, 1, 6),
        (MONDAY, 2, 5),
        (MONDAY + timedelta(days=7), 1, 5),
    ]


def test_duplicates_keep_last_occurrence():
    entries = [day(1, 0, hours=8), day(2, 0, hours=3, notes="corrected")]
    bucket = aggregate(entries)[0]
    assert len(bucket.days) == 1
    assert bucket.days[0].id == 2
    assert bucket.total_hours == 3


def test_aggregate_does_not_mutate_input():
    entries = [day(2, 1), day(1, 0)]
    snapshot = list(entries)
    aggregate(entries)
    assert entries == snapshot


def test_bucket_names_come_from_entries():
    entries = [day(1, 0, employee_name="Ann Lee", project_name="Apollo"), day(2, 1)]
    bucket = aggregate(entries)[0]
    assert bucket.employee_name == "Ann Lee"
    assert bucket.project_name == "Apollo"


def test_find_bucket_for_entry():
    entries = [day(1, 0), day(2, 7)]
    buckets = aggregate(entries)
    assert find_bucket(buckets, entries[1]).week_start == MONDAY + timedelta(days=7)
    assert find_bucket(buckets, day(9, 0, employee=99)) is None


def test_summarize_hours_per_project_and_employee():
    entries = [
        day(1, 0, hours=8, project_name="Apollo", employee_name="Ann"),
        day(2, 1, hours=4),
        day(3, 0, hours=6, employee=2),
        day(4, 2, hours=None),
    ]
    rows = summarize_hours(entries)
    assert [(r.project_id, r.employee_id, r.total_hours, r.entry_count) for r in rows] == [
        (5, 1, 12.0, 2),
        (5, 2, 6.0, 1),
    ]
    assert rows[0].project_name == "Apollo"
