"""
Schemas for HR and admin management screens.
"""

import datetime
import re
from typing import Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator

from hrtime.core.config import settings
from hrtime.schemas.auth import UserRole

PROJECT_CODE_PATTERN = re.compile(r"^[A-Z0-9_-]+$")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class ProjectCreate(BaseModel):
    name: str = Field(..., min_length=1)
    code: str
    description: Optional[str] = ""
    start_date: datetime.date = Field(..., alias="startDate")
    end_date: datetime.date = Field(..., alias="endDate")
    status: str = "ACTIVE"
    priority: str = "MEDIUM"
    project_manager_id: Optional[Union[int, str]] = Field(None, alias="projectManagerId")

    class Config:
        populate_by_name = True

    @field_validator("code")
    @classmethod
    def check_code(cls, value: str) -> str:
        if not PROJECT_CODE_PATTERN.match(value or ""):
            raise ValueError(
                "Project code must contain only uppercase letters, numbers, underscores, and hyphens"
            )
        return value

    @model_validator(mode="after")
    def check_dates(self):
        if self.start_date >= self.end_date:
            raise ValueError("End date must be after start date")
        return self


class AssignmentCreate(BaseModel):
    project_id: int = Field(..., alias="projectId")
    employee_id: int = Field(..., alias="employeeId")

    class Config:
        populate_by_name = True


class ManagerAssignment(BaseModel):
    manager_id: int = Field(..., alias="managerId")

    class Config:
        populate_by_name = True


class UserCreate(BaseModel):
    """Admin user creation schema."""
    name: str = Field(..., min_length=1)
    email: str
    password: str = Field(..., min_length=settings.PASSWORD_MIN_LENGTH)
    role: UserRole = UserRole.EMPLOYEE

    class Config:
        use_enum_values = True

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        if not EMAIL_PATTERN.match(value or ""):
            raise ValueError("Please enter a valid email address")
        return value
