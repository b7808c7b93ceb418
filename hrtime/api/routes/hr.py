"""
API routes for HR: projects, assignments and reporting lines.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from hrtime.core.exceptions import UpstreamAPIError
from hrtime.core.logging import logger
from hrtime.core.security import get_api_client, get_current_session, upstream_http_error
from hrtime.schemas.hr import AssignmentCreate, ManagerAssignment, ProjectCreate

router = APIRouter()


def _assigned_employee_id(assignment):
    employee = assignment.get("employee") if isinstance(assignment, dict) else None
    if isinstance(employee, dict):
        return employee.get("id")
    return assignment.get("employeeId") if isinstance(assignment, dict) else None


@router.get("/projects")
async def list_projects(session=Depends(get_current_session), client=Depends(get_api_client)):
    try:
        projects = await client.list_projects(session.user, session.token)
    except UpstreamAPIError as e:
        raise upstream_http_error(e)
    return {"message": "Projects retrieved successfully", "projects": projects}


@router.post("/projects", status_code=status.HTTP_201_CREATED)
async def create_project(project: ProjectCreate, session=Depends(get_current_session), client=Depends(get_api_client)):
    try:
        created = await client.create_project(session.token, project.model_dump(mode="json", by_alias=True))
    except UpstreamAPIError as e:
        raise upstream_http_error(e)
    logger.info(f"Project {project.code} created by user {session.user.id}")
    return {"message": "Project created successfully", "project": created}


@router.get("/assignments/project/{project_id}")
async def list_assignments(project_id: int, session=Depends(get_current_session), client=Depends(get_api_client)):
    try:
        assignments = await client.list_project_assignments(session.token, project_id)
    except UpstreamAPIError as e:
        raise upstream_http_error(e)
    return {"message": "Assignments retrieved successfully", "assignments": assignments}


@router.post("/assignments", status_code=status.HTTP_201_CREATED)
async def assign_employee(
    assignment: AssignmentCreate,
    session=Depends(get_current_session),
    client=Depends(get_api_client),
):
    """Assign an employee to a project unless they are already on it."""
    try:
        current = await client.list_project_assignments(session.token, assignment.project_id)
        if any(str(_assigned_employee_id(a)) == str(assignment.employee_id) for a in current):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="This user is already assigned to the selected project",
            )
        created = await client.create_assignment(session.token, assignment.project_id, assignment.employee_id)
    except UpstreamAPIError as e:
        raise upstream_http_error(e)
    return {"message": "Team member assigned to project successfully", "assignment": created}


@router.delete("/assignments/project/{project_id}/employee/{employee_id}")
async def unassign_employee(
    project_id: int,
    employee_id: int,
    session=Depends(get_current_session),
    client=Depends(get_api_client),
):
    try:
        await client.delete_assignment(session.token, project_id, employee_id)
    except UpstreamAPIError as e:
        raise upstream_http_error(e)
    return {"message": "Team member removed from project successfully"}


@router.get("/users")
async def list_users(session=Depends(get_current_session), client=Depends(get_api_client)):
    try:
        users = await client.list_users(session.user, session.token)
    except UpstreamAPIError as e:
        raise upstream_http_error(e)
    return {"message": "Users retrieved successfully", "users": users}


@router.put("/users/{employee_id}/manager")
async def assign_manager(
    employee_id: int,
    body: ManagerAssignment,
    session=Depends(get_current_session),
    client=Depends(get_api_client),
):
    if employee_id == body.manager_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="An employee cannot be their own manager",
        )
    try:
        await client.assign_manager(session.token, employee_id, body.manager_id)
    except UpstreamAPIError as e:
        raise upstream_http_error(e)
    return {"message": "Manager assigned successfully"}
