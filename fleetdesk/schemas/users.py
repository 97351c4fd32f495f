"""Schemas for user administration (admin only)."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from fleetdesk.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN
from fleetdesk.schemas.auth import Role


def _validate_full_name(value: str) -> str:
    name = value.strip()
    if not name:
        raise ValueError("full_name must be non-empty")
    return name


class UserCreate(BaseModel):
    """New user account. View flags default the same way the users table does."""

    full_name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)
    role: Role = "user"
    can_view_expenses: bool = True
    can_view_external_expenses: bool = True
    can_view_vehicles: bool = True
    can_view_users: bool = False

    @field_validator("full_name")
    @classmethod
    def validate_full_name(cls, v: str) -> str:
        return _validate_full_name(v)


class UserUpdate(BaseModel):
    """
    Partial edit of a user account.

    Omitted fields are left unchanged. An omitted or empty password keeps the
    existing hash.
    """

    full_name: str | None = Field(default=None, min_length=1, max_length=255)
    email: EmailStr | None = None
    password: str | None = Field(default=None, max_length=PASSWORD_MAX_LEN)
    role: Role | None = None
    can_view_expenses: bool | None = None
    can_view_external_expenses: bool | None = None
    can_view_vehicles: bool | None = None
    can_view_users: bool | None = None

    @field_validator("full_name")
    @classmethod
    def validate_full_name(cls, v: str | None) -> str | None:
        return None if v is None else _validate_full_name(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str | None) -> str | None:
        if not v:
            return None
        if len(v) < PASSWORD_MIN_LEN:
            raise ValueError(f"password must be at least {PASSWORD_MIN_LEN} characters")
        return v


class UserRecord(BaseModel):
    """User entry for admin endpoints (no password hash)."""

    model_config = {"from_attributes": True}

    id: int
    full_name: str
    email: str
    role: Role
    can_view_expenses: bool
    can_view_external_expenses: bool
    can_view_vehicles: bool
    can_view_users: bool
    created_at: datetime | None = None
