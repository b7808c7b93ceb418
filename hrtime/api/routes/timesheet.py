"""
API routes for timesheet views and weekly submission.
"""

import asyncio
import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from hrtime.core.exceptions import SubmissionValidationError, UpstreamAPIError
from hrtime.core.logging import logger
from hrtime.core.security import get_api_client, get_current_session, upstream_http_error
from hrtime.schemas.timesheet import (
    DashboardStats,
    DayListResponse,
    FilterCriteria,
    SubmissionResponse,
    TimesheetStatus,
    WeeklySubmission,
    WeekListResponse,
    WeekRange,
)
from hrtime.services.validation_service import validate_weekly_submission
from hrtime.utils.weeks import week_range

router = APIRouter()


def get_filter_criteria(
    project_id: Optional[str] = Query(None, alias="projectId"),
    employee_id: Optional[str] = Query(None, alias="employeeId"),
    status_filter: Optional[TimesheetStatus] = Query(None, alias="status"),
    date_from: Optional[datetime.date] = Query(None, alias="dateFrom"),
    date_to: Optional[datetime.date] = Query(None, alias="dateTo"),
) -> FilterCriteria:
    return FilterCriteria(
        project_id=project_id or None,
        employee_id=employee_id or None,
        status=status_filter,
        date_from=date_from,
        date_to=date_to,
    )


async def refresh_board(session, client) -> None:
    """Reload the session board with the timesheets visible to the user's role."""
    raws = await client.list_timesheets(session.user, session.token)
    session.board.load(raws)
    logger.info(
        f"Loaded {len(session.board.entries)} timesheet entries for user {session.user.id}"
        f" ({session.board.dropped} dropped)"
    )


@router.get("/weeks", response_model=WeekListResponse)
async def get_weeks(
    criteria: FilterCriteria = Depends(get_filter_criteria),
    refresh: bool = Query(True, description="Refetch from the HR backend before building the view"),
    session=Depends(get_current_session),
    client=Depends(get_api_client),
):
    """Week buckets of the user's visible timesheets, filtered by the query criteria."""
    try:
        if refresh or not session.board.loaded:
            await refresh_board(session, client)
    except UpstreamAPIError as e:
        raise upstream_http_error(e)

    weeks = session.board.weeks(criteria)
    return WeekListResponse(
        message="Weekly timesheets retrieved successfully",
        weeks=weeks,
        total_count=len(weeks),
        dropped=session.board.dropped,
    )


@router.get("/days", response_model=DayListResponse)
async def get_days(
    criteria: FilterCriteria = Depends(get_filter_criteria),
    refresh: bool = Query(True),
    session=Depends(get_current_session),
    client=Depends(get_api_client),
):
    """Flat day entries, oldest first."""
    try:
        if refresh or not session.board.loaded:
            await refresh_board(session, client)
    except UpstreamAPIError as e:
        raise upstream_http_error(e)

    days = session.board.days(criteria)
    return DayListResponse(
        message="Timesheets retrieved successfully",
        days=days,
        total_count=len(days),
        dropped=session.board.dropped,
    )


@router.get("/projects")
async def get_assigned_projects(session=Depends(get_current_session), client=Depends(get_api_client)):
    """Projects the signed-in employee can log hours against."""
    try:
        projects = await client.list_assigned_projects(session.token)
    except UpstreamAPIError as e:
        raise upstream_http_error(e)
    return {"message": "Assigned projects retrieved successfully", "projects": projects}


@router.get("/week-range", response_model=WeekRange)
async def get_week_range(date: Optional[datetime.date] = Query(None, description="Any date in the week; defaults to today")):
    return week_range(date or datetime.date.today())


@router.post("/weekly", response_model=SubmissionResponse, status_code=status.HTTP_201_CREATED)
async def submit_weekly(
    submission: WeeklySubmission,
    session=Depends(get_current_session),
    client=Depends(get_api_client),
):
    """
    Submit a week of hours.

    The form is validated first; nothing is sent upstream when any day is
    out of bounds. Valid days are then posted as one entry each, oldest
    first.
    """
    try:
        payloads = validate_weekly_submission(submission)
    except SubmissionValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.problems)

    try:
        results = await asyncio.gather(*(client.submit_entry(session.token, p) for p in payloads))
    except UpstreamAPIError as e:
        logger.error(f"Weekly submission for user {session.user.id} failed: {e.message}")
        raise upstream_http_error(e)

    session.board.loaded = False
    logger.info(f"User {session.user.id} submitted {len(payloads)} timesheet entries")
    return SubmissionResponse(
        message=f"Successfully submitted {len(payloads)} timesheet entries for the selected period",
        submitted=len(payloads),
        results=list(results),
    )


@router.get("/dashboard", response_model=DashboardStats)
async def get_dashboard(session=Depends(get_current_session), client=Depends(get_api_client)):
    """Counts shown on the landing page, depending on the user's role."""
    user = session.user
    try:
        await refresh_board(session, client)
        entries = session.board.entries
        stats = DashboardStats(
            total_timesheets=len(entries),
            pending_timesheets=sum(1 for e in entries if e.status == TimesheetStatus.PENDING),
        )
        if user.is_admin() or user.is_hr():
            stats.total_projects = len(await client.list_projects(user, session.token))
        if user.is_admin():
            stats.total_users = len(await client.list_users(user, session.token))
    except UpstreamAPIError as e:
        raise upstream_http_error(e)
    return stats
