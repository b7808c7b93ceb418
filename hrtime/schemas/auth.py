"""
Authentication schemas for request/response validation.
"""

from typing import Optional, Union
from enum import Enum
from pydantic import BaseModel, Field


class UserRole(str, Enum):
    ADMIN = "ADMIN"
    HR = "HR"
    MANAGER = "MANAGER"
    EMPLOYEE = "EMPLOYEE"


class Identity(BaseModel):
    """The signed-in user as reported by the upstream API."""
    id: Union[int, str]
    name: Optional[str] = None
    email: Optional[str] = None
    role: str = UserRole.EMPLOYEE.value

    def has_role(self, role) -> bool:
        value = role.value if isinstance(role, UserRole) else str(role)
        return (self.role or "").upper() == value.upper()

    def is_admin(self) -> bool:
        return self.has_role(UserRole.ADMIN)

    def is_hr(self) -> bool:
        return self.has_role(UserRole.HR)

    def is_manager(self) -> bool:
        return self.has_role(UserRole.MANAGER)

    def is_employee(self) -> bool:
        return self.has_role(UserRole.EMPLOYEE)


class UserLogin(BaseModel):
    """User login schema."""
    email: str
    password: str


class UserRegister(BaseModel):
    """Self-registration schema, forwarded as-is to the upstream API."""
    name: str = Field(..., min_length=1)
    email: str
    password: str
    role: Optional[UserRole] = UserRole.EMPLOYEE

    class Config:
        use_enum_values = True


class Token(BaseModel):
    """Token response schema."""
    access_token: str
    token_type: str = "bearer"
    user: Identity
