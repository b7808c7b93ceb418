"""
API routes for admin user management.
"""

from fastapi import APIRouter, Depends, status

from hrtime.core.exceptions import UpstreamAPIError
from hrtime.core.logging import logger
from hrtime.core.security import get_api_client, get_current_session, upstream_http_error
from hrtime.schemas.hr import UserCreate

router = APIRouter()


@router.get("/users")
async def get_all_users(session=Depends(get_current_session), client=Depends(get_api_client)):
    """Get all users"""
    try:
        users = await client.list_users(session.user, session.token)
    except UpstreamAPIError as e:
        raise upstream_http_error(e)
    return {"message": "Users retrieved successfully", "users": users}


@router.post("/users", status_code=status.HTTP_201_CREATED)
async def create_user(user: UserCreate, session=Depends(get_current_session), client=Depends(get_api_client)):
    try:
        created = await client.create_user(session.token, user.model_dump())
    except UpstreamAPIError as e:
        raise upstream_http_error(e)
    logger.info(f"User {user.email} created by user {session.user.id}")
    return {"message": "User created successfully", "user": created}


@router.delete("/users/{user_id}")
async def delete_user(user_id: int, session=Depends(get_current_session), client=Depends(get_api_client)):
    try:
        await client.delete_user(session.token, user_id)
    except UpstreamAPIError as e:
        raise upstream_http_error(e)
    logger.info(f"User {user_id} deleted by user {session.user.id}")
    return {"message": "User deleted successfully"}
