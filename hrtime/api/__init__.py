"""
API routes and endpoints.
"""

from fastapi import APIRouter
from hrtime.api.routes.auth import router as auth_router
from hrtime.api.routes.timesheet import router as timesheet_router
from hrtime.api.routes.manager import router as manager_router
from hrtime.api.routes.hr import router as hr_router
from hrtime.api.routes.users import router as users_router

# Main API router
api_router = APIRouter()

# Include routers for different endpoints
api_router.include_router(auth_router, prefix="/auth", tags=["Authentication"])
api_router.include_router(timesheet_router, prefix="/timesheets", tags=["Timesheet"])
api_router.include_router(manager_router, prefix="/manager", tags=["Manager"])
api_router.include_router(hr_router, prefix="/hr", tags=["HR"])
api_router.include_router(users_router, prefix="/admin", tags=["Admin"])
