"""
Normalization of upstream timesheet records into canonical day entries.

The upstream API answers in two shapes: flat records with one day each, and
week groups carrying a "days" list. Both are resolved here, once, so that the
rest of the application only ever sees DayEntry objects.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Union

from hrtime.core.exceptions import MalformedRecordError
from hrtime.core.logging import logger
from hrtime.schemas.timesheet import DayEntry, TimesheetStatus
from hrtime.utils.weeks import parse_date


@dataclass
class FlatDay:
    record: Dict[str, Any]


@dataclass
class GroupedWeek:
    record: Dict[str, Any]
    days: List[Dict[str, Any]]


RawRecord = Union[FlatDay, GroupedWeek]


@dataclass
class NormalizationResult:
    entries: List[DayEntry] = field(default_factory=list)
    dropped: int = 0


def classify(raw: Dict[str, Any]) -> RawRecord:
    """Tag a raw record as a flat day or a grouped week."""
    days = raw.get("days")
    if isinstance(days, list):
        return GroupedWeek(record=raw, days=days)
    return FlatDay(record=raw)


def _first_present(*values):
    for value in values:
        if value is not None and value != "":
            return value
    return None


def _nested(raw: Dict[str, Any], key: str, attr: str):
    value = raw.get(key)
    if isinstance(value, dict):
        return value.get(attr)
    return None


def is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_hours(value) -> Optional[float]:
    """
    Convert an hours value to float.
    Missing, empty, non-numeric or non-finite values (nan, inf) return None.
    """
    if is_blank(value) or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        hours = float(value)
    elif isinstance(value, str):
        try:
            hours = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return hours if math.isfinite(hours) else None


def parse_status(value) -> TimesheetStatus:
    if value is None or value == "":
        return TimesheetStatus.PENDING
    try:
        return TimesheetStatus(str(value).strip().upper())
    except ValueError:
        raise MalformedRecordError(f"Unknown timesheet status '{value}'")


def _identity_fields(raw: Dict[str, Any]) -> Dict[str, Any]:
    project = raw.get("project")
    return {
        "employee_id": _first_present(
            raw.get("employeeId"), _nested(raw, "user", "id"), _nested(raw, "employee", "id")
        ),
        "employee_name": _first_present(
            raw.get("employeeName"), _nested(raw, "user", "name"), _nested(raw, "employee", "name")
        ),
        "project_id": _first_present(raw.get("projectId"), _nested(raw, "project", "id")),
        "project_name": _first_present(
            raw.get("projectName"),
            _nested(raw, "project", "name"),
            project if isinstance(project, str) else None,
        ),
    }


def normalize_day(raw: Dict[str, Any], parent: Optional[Dict[str, Any]] = None) -> DayEntry:
    """
    Build a DayEntry from a single-day record.

    Identity fields missing on the day are inherited from parent, the
    enclosing week group. Raises MalformedRecordError when no usable date is
    present.
    """
    if not isinstance(raw, dict):
        raise MalformedRecordError(f"Expected a mapping, got {type(raw).__name__}")

    day = parse_date(raw.get("date"))
    if day is None:
        raise MalformedRecordError(f"Record {raw.get('id')!r} has no usable date")

    own = _identity_fields(raw)
    inherited = _identity_fields(parent) if parent else {}
    ids = {key: _first_present(value, inherited.get(key)) for key, value in own.items()}

    status = parse_status(raw.get("status"))
    reason = None
    if status == TimesheetStatus.REJECTED:
        reason = _first_present(raw.get("rejectionReason"), raw.get("comments"), raw.get("comment"))

    return DayEntry(
        id=raw.get("id"),
        date=day,
        hours=parse_hours(_first_present(raw.get("hours"), raw.get("hoursWorked"))),
        status=status,
        notes=_first_present(raw.get("notes"), raw.get("description")),
        rejection_reason=reason,
        **ids,
    )


def normalize(raw: Dict[str, Any]) -> List[DayEntry]:
    """Normalize one raw record, flat or grouped, into its day entries."""
    tagged = classify(raw)
    if isinstance(tagged, GroupedWeek):
        return [normalize_day(day, parent=tagged.record) for day in tagged.days]
    return [normalize_day(tagged.record)]


def normalize_records(raws: Iterable[Dict[str, Any]]) -> NormalizationResult:
    """
    Normalize a fetched collection, dropping records that cannot be used.

    Grouped records are normalized day by day so one bad day does not discard
    the rest of its week. Every dropped record is counted and logged.
    """
    result = NormalizationResult()
    for raw in raws or []:
        tagged = classify(raw) if isinstance(raw, dict) else FlatDay(record=raw)
        if isinstance(tagged, GroupedWeek):
            candidates = [(day, tagged.record) for day in tagged.days]
        else:
            candidates = [(tagged.record, None)]

        for day, parent in candidates:
            try:
                result.entries.append(normalize_day(day, parent=parent))
            except MalformedRecordError as e:
                result.dropped += 1
                logger.warning(f"Dropping timesheet record: {e}")

    if result.dropped:
        logger.warning(f"Dropped {result.dropped} malformed timesheet record(s)")
    return result
