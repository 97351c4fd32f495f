"""Request/response schemas for auth endpoints and the resolved principal."""

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from fleetdesk.core.security import EMAIL_MAX_LEN, PASSWORD_MAX_LEN

Role = Literal["user", "admin"]


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str = Field(..., min_length=1, max_length=EMAIL_MAX_LEN, description="Login email")
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN, description="Password")

    @field_validator("email")
    @classmethod
    def strip_email(cls, v: str) -> str:
        return v.strip()


class UserProfile(BaseModel):
    """Public profile returned after login (never the password hash)."""

    model_config = {"from_attributes": True}

    id: int
    full_name: str
    email: str
    role: Role


class LoginResponse(BaseModel):
    """Login result; the session itself travels in cookies."""

    message: str = "Login successful"
    user: UserProfile


class Principal(BaseModel):
    """
    Live identity and permission set for the current request.

    Built fresh from the users table on every authenticated request, so edits
    to role or flags apply on the caller's next request.
    """

    model_config = {"from_attributes": True, "frozen": True}

    id: int
    full_name: str
    email: str
    role: Role
    can_view_expenses: bool
    can_view_external_expenses: bool
    can_view_vehicles: bool
    can_view_users: bool

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


class MessageResponse(BaseModel):
    """Plain acknowledgement body."""

    message: str
