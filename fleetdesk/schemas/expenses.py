"""Schemas for internal (per-vehicle) and external expenses."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from fleetdesk.schemas.vehicles import VehicleSummary

OPTIONAL_EXPENSE_FIELDS = (
    "folio",
    "company_name",
    "bank",
    "card",
    "supplier",
    "reference",
    "document",
    "project",
    "responsible",
    "transfer",
    "expense_type",
)


class ExpenseFields(BaseModel):
    """Fields shared by both expense kinds. Only concept is required."""

    model_config = {"extra": "ignore"}

    concept: str = Field(..., description="What the expense was for")
    folio: str | None = Field(default=None, max_length=255)
    date: datetime | None = None
    company_name: str | None = Field(default=None, max_length=255)
    bank: str | None = Field(default=None, max_length=255)
    card: str | None = Field(default=None, max_length=255)
    supplier: str | None = Field(default=None, max_length=255)
    reference: str | None = Field(default=None, max_length=255)
    document: str | None = Field(default=None, max_length=255)
    project: str | None = Field(default=None, max_length=255)
    responsible: str | None = Field(
        default=None,
        max_length=255,
        description="Responsible party; defaults to the caller's display name on create.",
    )
    transfer: str | None = Field(default=None, max_length=255)
    expense_type: str | None = Field(default=None, max_length=255)

    @field_validator("concept")
    @classmethod
    def require_concept(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("concept is required")
        return v.strip()

    @field_validator(*OPTIONAL_EXPENSE_FIELDS)
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None


class ExpenseWrite(ExpenseFields):
    """Internal expense body; plate must match a registered vehicle."""

    plate: str = Field(..., max_length=64)

    @field_validator("plate")
    @classmethod
    def require_plate(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("plate is required")
        return v.strip()


class ExternalExpenseWrite(ExpenseFields):
    """External expense body."""


class _ExpenseRecordFields(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    concept: str
    folio: str | None = None
    date: datetime | None = None
    company_name: str | None = None
    bank: str | None = None
    card: str | None = None
    supplier: str | None = None
    reference: str | None = None
    document: str | None = None
    project: str | None = None
    responsible: str | None = None
    transfer: str | None = None
    expense_type: str | None = None
    created_at: datetime | None = None


class ExpenseRecord(_ExpenseRecordFields):
    """Internal expense with the vehicle it is charged to."""

    plate: str
    vehicle: VehicleSummary | None = None


class ExternalExpenseRecord(_ExpenseRecordFields):
    """External expense as returned by the API."""
