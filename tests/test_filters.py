from datetime import date, timedelta

from hrtime.schemas.timesheet import DayEntry, FilterCriteria, TimesheetStatus
from hrtime.services.aggregator import aggregate
from hrtime.services.filters import filter_view

MONDAY = date(2025, 9, 1)


def day(id, offset=0, status=TimesheetStatus.PENDING, employee=1, project=5):
    return DayEntry(
        id=id,
        date=MONDAY + timedelta(days=offset),
        hours=8,
        status=status,
        employee_id=employee,
        project_id=project,
    )


def sample_entries():
    return [
        day(1, 0, project=7),
        day(2, 1, project=7, status=TimesheetStatus.APPROVED),
        day(3, 0, project=5, status=TimesheetStatus.APPROVED),
        day(4, 8, project=7, employee=2, status=TimesheetStatus.REJECTED),
    ]


def test_no_criteria_returns_everything_in_order():
    entries = sample_entries()
    assert filter_view(entries, FilterCriteria()) == entries
    assert filter_view(entries) == entries
    buckets = aggregate(entries)
    assert filter_view(buckets, FilterCriteria()) == buckets


def test_project_filter_on_buckets_and_days():
    entries = sample_entries()
    buckets = filter_view(aggregate(entries), FilterCriteria(project_id=7))
    assert buckets and all(b.project_id == 7 for b in buckets)
    days = filter_view(entries, FilterCriteria(projectId=7))
    assert [d.id for d in days] == [1, 2, 4]


def test_ids_compare_as_strings():
    days = filter_view(sample_entries(), FilterCriteria(employee_id="2"))
    assert [d.id for d in days] == [4]


def test_status_uses_overall_status_for_buckets():
    buckets = aggregate(sample_entries())
    approved = filter_view(buckets, FilterCriteria(status=TimesheetStatus.APPROVED))
    # project 7 week one mixes PENDING and APPROVED, so only project 5 is approved overall
    assert [(b.project_id, b.overall_status) for b in approved] == [(5, TimesheetStatus.APPROVED)]

    days = filter_view(sample_entries(), FilterCriteria(status=TimesheetStatus.APPROVED))
    assert [d.id for d in days] == [2, 3]


def test_bucket_matches_when_any_day_is_in_range():
    buckets = aggregate(sample_entries())
    criteria = FilterCriteria(date_from=MONDAY + timedelta(days=1), date_to=MONDAY + timedelta(days=1))
    matched = filter_view(buckets, criteria)
    assert [(b.project_id, b.week_start) for b in matched] == [(7, MONDAY)]


def test_day_range_is_inclusive():
    criteria = FilterCriteria(dateFrom=MONDAY, dateTo=MONDAY + timedelta(days=1))
    assert [d.id for d in filter_view(sample_entries(), criteria)] == [1, 2, 3]


def test_criteria_are_anded():
    criteria = FilterCriteria(project_id=7, employee_id=1, status=TimesheetStatus.PENDING)
    assert [d.id for d in filter_view(sample_entries(), criteria)] == [1]


def test_filter_does_not_modify_input():
    entries = sample_entries()
    before = list(entries)
    filter_view(entries, FilterCriteria(project_id=5))
    assert entries == before
