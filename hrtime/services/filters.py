"""
View filters over week buckets or flat day entries.
"""

from typing import List, Optional, Sequence, TypeVar, Union

from hrtime.schemas.timesheet import DayEntry, FilterCriteria, WeekBucket

Item = TypeVar("Item", DayEntry, WeekBucket)


def _blank(value) -> bool:
    return value is None or value == ""


def _same_id(actual, wanted) -> bool:
    return actual is not None and str(actual) == str(wanted)


def _in_range(day, date_from, date_to) -> bool:
    if date_from is not None and day < date_from:
        return False
    if date_to is not None and day > date_to:
        return False
    return True


def matches(item: Union[DayEntry, WeekBucket], criteria: FilterCriteria) -> bool:
    """Check a single bucket or day entry against every set criterion."""
    if not _blank(criteria.project_id) and not _same_id(item.project_id, criteria.project_id):
        return False
    if not _blank(criteria.employee_id) and not _same_id(item.employee_id, criteria.employee_id):
        return False

    if isinstance(item, WeekBucket):
        if criteria.status is not None and item.overall_status != criteria.status:
            return False
        if criteria.date_from is not None or criteria.date_to is not None:
            if not any(_in_range(d.date, criteria.date_from, criteria.date_to) for d in item.days):
                return False
        return True

    if criteria.status is not None and item.status != criteria.status:
        return False
    return _in_range(item.date, criteria.date_from, criteria.date_to)


def filter_view(collection: Sequence[Item], criteria: Optional[FilterCriteria] = None) -> List[Item]:
    """
    Keep the items matching all criteria, preserving input order.

    Unset criteria match everything, so an empty FilterCriteria returns the
    whole collection.
    """
    if criteria is None or criteria.is_empty():
        return list(collection)
    return [item for item in collection if matches(item, criteria)]
