"""
API routes for managers: pending weeks, approvals and summaries.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, Query, status

from hrtime.core.exceptions import EntryNotFoundError, UpstreamAPIError
from hrtime.core.logging import logger
from hrtime.core.security import get_api_client, get_current_session, upstream_http_error
from hrtime.schemas.timesheet import (
    FilterCriteria,
    HoursSummaryRow,
    RejectRequest,
    StatusChangeRequest,
    StatusChangeResponse,
    TimesheetStatus,
    WeekListResponse,
)
from hrtime.services.aggregator import summarize_hours
from hrtime.api.routes.timesheet import get_filter_criteria, refresh_board

router = APIRouter()


@router.get("/pending/weeks", response_model=WeekListResponse)
async def get_pending_weeks(
    criteria: FilterCriteria = Depends(get_filter_criteria),
    session=Depends(get_current_session),
    client=Depends(get_api_client),
):
    """Pending week groups of the manager's team, loaded onto the session board."""
    try:
        raws = await client.list_pending_grouped(session.token)
    except UpstreamAPIError as e:
        raise upstream_http_error(e)

    session.board.load(raws)
    weeks = session.board.weeks(criteria)
    return WeekListResponse(
        message="Pending weekly timesheets retrieved successfully",
        weeks=weeks,
        total_count=len(weeks),
        dropped=session.board.dropped,
    )


async def _change_status(session, client, timesheet_id: str, new_status: TimesheetStatus, comment=None):
    if new_status == TimesheetStatus.REJECTED:
        comment = (comment or "").strip()
        if not comment:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Please provide a reason for rejection",
            )
    else:
        comment = None

    try:
        if not session.board.loaded:
            await refresh_board(session, client)
        entry = await session.board.change_status(client, session.token, timesheet_id, new_status, comment)
    except EntryNotFoundError as e:
        logger.warning(f"Status change for unknown entry {timesheet_id}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except UpstreamAPIError as e:
        raise upstream_http_error(e)

    return StatusChangeResponse(
        message="Status updated",
        entry=entry,
        week=session.board.week_of(entry),
    )


@router.put("/timesheets/{timesheet_id}/status", response_model=StatusChangeResponse)
async def change_timesheet_status(
    timesheet_id: str,
    body: StatusChangeRequest,
    session=Depends(get_current_session),
    client=Depends(get_api_client),
):
    """Set a day entry's status and return it with its recomputed week."""
    return await _change_status(session, client, timesheet_id, body.status, body.comment)


@router.put("/timesheets/{timesheet_id}/approve", response_model=StatusChangeResponse)
async def approve_timesheet(
    timesheet_id: str,
    session=Depends(get_current_session),
    client=Depends(get_api_client),
):
    return await _change_status(session, client, timesheet_id, TimesheetStatus.APPROVED)


@router.put("/timesheets/{timesheet_id}/reject", response_model=StatusChangeResponse)
async def reject_timesheet(
    timesheet_id: str,
    body: RejectRequest,
    session=Depends(get_current_session),
    client=Depends(get_api_client),
):
    return await _change_status(session, client, timesheet_id, TimesheetStatus.REJECTED, body.comment)


@router.get("/summary", response_model=List[HoursSummaryRow])
async def get_summary(
    refresh: bool = Query(False),
    session=Depends(get_current_session),
    client=Depends(get_api_client),
):
    """Hours per project and employee over the loaded entries."""
    try:
        if refresh or not session.board.loaded:
            await refresh_board(session, client)
    except UpstreamAPIError as e:
        raise upstream_http_error(e)
    return summarize_hours(session.board.entries)


def _derived_options(entries, id_attr: str, name_attr: str) -> List[Dict[str, Any]]:
    seen: Dict[str, Dict[str, Any]] = {}
    for entry in entries:
        value = getattr(entry, id_attr)
        if value is None:
            continue
        seen[str(value)] = {"id": value, "name": getattr(entry, name_attr)}
    return list(seen.values())


@router.get("/projects")
async def get_managed_projects(session=Depends(get_current_session), client=Depends(get_api_client)):
    """Projects for the filter dropdown; derived from loaded entries when the backend lists none."""
    try:
        projects = await client.list_managed_projects(session.token)
    except UpstreamAPIError as e:
        logger.warning(f"Failed to fetch manager projects: {e.message}")
        projects = []
    if not projects:
        projects = _derived_options(session.board.entries, "project_id", "project_name")
    return {"message": "Managed projects retrieved successfully", "projects": projects}


@router.get("/employees")
async def get_managed_employees(session=Depends(get_current_session), client=Depends(get_api_client)):
    """Employees for the filter dropdown; derived from loaded entries when the backend lists none."""
    try:
        employees = await client.list_managed_employees(session.token)
    except UpstreamAPIError as e:
        logger.warning(f"Failed to fetch manager employees: {e.message}")
        employees = []
    if not employees:
        employees = _derived_options(session.board.entries, "employee_id", "employee_name")
    return {"message": "Managed employees retrieved successfully", "employees": employees}
