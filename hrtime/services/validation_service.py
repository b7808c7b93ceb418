"""
Service for validating weekly timesheet submissions before they are sent upstream.
"""

from typing import Any, Dict, List, Optional, Tuple

from hrtime.core.config import settings
from hrtime.core.exceptions import SubmissionValidationError
from hrtime.core.logging import logger
from hrtime.schemas.timesheet import WeeklySubmission
from hrtime.services.normalizer import is_blank, parse_hours
from hrtime.utils.weeks import submission_range


def _lookup(values: Dict[str, Any], iso_day: str, weekday: str):
    # The form may key entries by ISO date or by lowercase weekday name
    if iso_day in values:
        return values[iso_day]
    return values.get(weekday)


def collect_day_hours(submission: WeeklySubmission) -> Tuple[List[Dict[str, Any]], List[str]]:
    """
    Walk the submission's date range and pair each date with its entered hours.

    Returns the populated days and the list of problems found. Blank hours
    mean "no entry" and are skipped; anything else must be a finite number.
    """
    problems: List[str] = []
    days: List[Dict[str, Any]] = []

    dates = submission_range(submission.week_start, submission.week_end, submission.use_custom_range)
    if submission.use_custom_range and not dates:
        problems.append("Please choose a valid date range")

    for day in dates:
        iso_day = day.isoformat()
        weekday = day.strftime("%A")
        raw = _lookup(submission.hours, iso_day, weekday.lower())
        if is_blank(raw):
            continue
        hours = parse_hours(raw)
        if hours is None:
            problems.append(f"Hours for {weekday} must be a number")
            continue
        if hours < settings.MIN_DAY_HOURS or hours > settings.MAX_DAY_HOURS:
            problems.append(
                f"Hours for {weekday} must be between {settings.MIN_DAY_HOURS:g} and {settings.MAX_DAY_HOURS:g}"
            )
            continue
        description = _lookup(submission.descriptions, iso_day, weekday.lower()) or ""
        days.append({"date": iso_day, "hours": hours, "description": description})

    return days, problems


def validate_weekly_submission(submission: WeeklySubmission) -> List[Dict[str, Any]]:
    """
    Validate a weekly submission and build the upstream payloads.

    One payload is produced per populated day, in chronological order, each
    carrying the project id, ISO date, hours and the description duplicated
    as notes.

    Raises:
        SubmissionValidationError: no project, hours out of bounds or not a
            number, or no day with hours entered.
    """
    problems: List[str] = []
    project_id = _coerce_project_id(submission.project_id)
    if project_id is None:
        problems.append("Please select a project")

    days, day_problems = collect_day_hours(submission)
    problems.extend(day_problems)

    if not days and not day_problems:
        problems.append("Please enter hours for at least one day")

    if problems:
        logger.warning(f"Rejected weekly submission: {problems}")
        raise SubmissionValidationError(problems)

    return [
        {
            "projectId": project_id,
            "date": day["date"],
            "hours": day["hours"],
            "description": day["description"],
            "notes": day["description"],
        }
        for day in days
    ]


def _coerce_project_id(value) -> Optional[Any]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return value
