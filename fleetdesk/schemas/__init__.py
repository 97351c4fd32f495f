"""Pydantic request/response schemas."""

from fleetdesk.schemas.auth import LoginRequest, LoginResponse, MessageResponse, Principal, UserProfile
from fleetdesk.schemas.expenses import (
    ExpenseRecord,
    ExpenseWrite,
    ExternalExpenseRecord,
    ExternalExpenseWrite,
)
from fleetdesk.schemas.health import HealthResponse
from fleetdesk.schemas.pages import LoginPage, NavigationItem, PageState
from fleetdesk.schemas.users import UserCreate, UserRecord, UserUpdate
from fleetdesk.schemas.vehicles import VehicleRecord, VehicleSummary, VehicleWrite

__all__ = [
    "ExpenseRecord",
    "ExpenseWrite",
    "ExternalExpenseRecord",
    "ExternalExpenseWrite",
    "HealthResponse",
    "LoginPage",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "NavigationItem",
    "PageState",
    "Principal",
    "UserCreate",
    "UserProfile",
    "UserRecord",
    "UserUpdate",
    "VehicleRecord",
    "VehicleSummary",
    "VehicleWrite",
]
