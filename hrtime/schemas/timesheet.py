"""
Pydantic models for timesheet entries, week views and requests.
"""

import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import AliasChoices, BaseModel, Field

EntryId = Union[int, str]


class TimesheetStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class DayEntry(BaseModel):
    """One employee's reported hours for one project on one calendar date."""
    id: Optional[EntryId] = None
    date: datetime.date
    hours: Optional[float] = Field(None, description="None means no entry for this day")
    status: TimesheetStatus = TimesheetStatus.PENDING
    notes: Optional[str] = None
    employee_id: Optional[EntryId] = Field(None, alias="employeeId")
    employee_name: Optional[str] = Field(None, alias="employeeName")
    project_id: Optional[EntryId] = Field(None, alias="projectId")
    project_name: Optional[str] = Field(None, alias="projectName")
    rejection_reason: Optional[str] = Field(None, alias="rejectionReason")

    class Config:
        """Pydantic config."""
        populate_by_name = True
        frozen = True

    @property
    def is_populated(self) -> bool:
        return self.hours is not None and self.hours > 0


class WeekBucket(BaseModel):
    """Monday-start week of day entries for one employee/project pair."""
    employee_id: Optional[EntryId] = Field(None, alias="employeeId")
    employee_name: Optional[str] = Field(None, alias="employeeName")
    project_id: Optional[EntryId] = Field(None, alias="projectId")
    project_name: Optional[str] = Field(None, alias="projectName")
    week_start: datetime.date = Field(..., alias="weekStart")
    week_end: datetime.date = Field(..., alias="weekEnd")
    days: List[DayEntry] = Field(default_factory=list)
    total_hours: float = Field(0.0, alias="totalHours")
    overall_status: TimesheetStatus = Field(TimesheetStatus.PENDING, alias="overallStatus")

    class Config:
        """Pydantic config."""
        populate_by_name = True
        frozen = True


class WeekRange(BaseModel):
    """Monday to Sunday window containing a date."""
    week_start: datetime.date = Field(..., alias="weekStart")
    week_end: datetime.date = Field(..., alias="weekEnd")
    days: List[datetime.date]

    class Config:
        """Pydantic config."""
        populate_by_name = True


class FilterCriteria(BaseModel):
    """User-selected view filters. Unset fields match everything."""
    project_id: Optional[EntryId] = Field(None, alias="projectId")
    employee_id: Optional[EntryId] = Field(None, alias="employeeId")
    status: Optional[TimesheetStatus] = None
    date_from: Optional[datetime.date] = Field(None, alias="dateFrom")
    date_to: Optional[datetime.date] = Field(None, alias="dateTo")

    class Config:
        """Pydantic config."""
        populate_by_name = True

    def is_empty(self) -> bool:
        return all(
            value in (None, "")
            for value in (self.project_id, self.employee_id, self.status, self.date_from, self.date_to)
        )


class StatusChangeRequest(BaseModel):
    """Approve or reject a single day entry."""
    status: TimesheetStatus
    comment: Optional[str] = Field(None, validation_alias=AliasChoices("comment", "comments"))


class RejectRequest(BaseModel):
    comment: str = Field(..., validation_alias=AliasChoices("comment", "comments", "reason"))


class WeeklySubmission(BaseModel):
    """Hours entered on the weekly form, keyed by ISO date."""
    project_id: Optional[EntryId] = Field(None, alias="projectId")
    week_start: datetime.date = Field(..., alias="weekStart")
    week_end: Optional[datetime.date] = Field(None, alias="weekEnd")
    use_custom_range: bool = Field(False, alias="useCustomRange")
    hours: Dict[str, Union[float, str, None]] = Field(default_factory=dict)
    descriptions: Dict[str, str] = Field(default_factory=dict)

    class Config:
        """Pydantic config."""
        populate_by_name = True


class WeekListResponse(BaseModel):
    message: str
    weeks: List[WeekBucket] = Field(default_factory=list)
    total_count: int = Field(0, alias="totalCount")
    dropped: int = 0

    class Config:
        populate_by_name = True


class DayListResponse(BaseModel):
    message: str
    days: List[DayEntry] = Field(default_factory=list)
    total_count: int = Field(0, alias="totalCount")
    dropped: int = 0

    class Config:
        populate_by_name = True


class StatusChangeResponse(BaseModel):
    message: str
    entry: DayEntry
    week: Optional[WeekBucket] = None


class SubmissionResponse(BaseModel):
    message: str
    submitted: int
    results: List[Dict[str, Any]] = Field(default_factory=list)


class HoursSummaryRow(BaseModel):
    """Hours per project and employee."""
    project_id: Optional[EntryId] = Field(None, alias="projectId")
    project_name: Optional[str] = Field(None, alias="projectName")
    employee_id: Optional[EntryId] = Field(None, alias="employeeId")
    employee_name: Optional[str] = Field(None, alias="employeeName")
    total_hours: float = Field(0.0, alias="totalHours")
    entry_count: int = Field(0, alias="entryCount")

    class Config:
        populate_by_name = True


class DashboardStats(BaseModel):
    total_users: Optional[int] = Field(None, alias="totalUsers")
    total_projects: Optional[int] = Field(None, alias="totalProjects")
    total_timesheets: int = Field(0, alias="totalTimesheets")
    pending_timesheets: int = Field(0, alias="pendingTimesheets")

    class Config:
        populate_by_name = True
