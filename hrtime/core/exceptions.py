"""
Domain exceptions raised by the timesheet core and the upstream client.
"""

from typing import List, Optional


class HRTimeError(Exception):
    """Base class for application errors."""


class MalformedRecordError(HRTimeError):
    """A raw timesheet record cannot be turned into a day entry."""


class EntryNotFoundError(HRTimeError):
    """No day entry with the requested id exists in the current entries."""

    def __init__(self, day_id):
        self.day_id = day_id
        super().__init__(f"Timesheet entry {day_id} not found")


class SubmissionValidationError(HRTimeError):
    """A weekly submission failed validation before reaching the upstream API."""

    def __init__(self, problems: List[str]):
        self.problems = problems
        super().__init__("; ".join(problems))


class UpstreamAPIError(HRTimeError):
    """The upstream HR API failed or answered with an error status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)
