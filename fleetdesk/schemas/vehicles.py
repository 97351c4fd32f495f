"""Schemas for vehicle registration and listing."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

OPTIONAL_VEHICLE_FIELDS = (
    "vehicle_type",
    "color",
    "model",
    "location",
    "engine",
    "eco",
    "contract",
    "status",
    "agency",
    "project",
)


class VehicleWrite(BaseModel):
    """Vehicle body for create and full update. Blank optional fields are stored as null."""

    model_config = {"extra": "ignore"}

    brand: str = Field(..., max_length=255)
    plates: str = Field(..., max_length=64)
    serial_number: str = Field(..., max_length=255)
    vehicle_type: str | None = Field(default=None, max_length=255)
    color: str | None = Field(default=None, max_length=255)
    model: str | None = Field(default=None, max_length=255)
    location: str | None = Field(default=None, max_length=255)
    engine: str | None = Field(default=None, max_length=255)
    eco: str | None = Field(default=None, max_length=255)
    contract: str | None = Field(default=None, max_length=255)
    status: str | None = Field(default=None, max_length=255)
    agency: str | None = Field(default=None, max_length=255)
    project: str | None = Field(default=None, max_length=255)

    @field_validator("brand", "plates", "serial_number")
    @classmethod
    def require_non_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("brand, plates and serial_number are required")
        return v.strip()

    @field_validator(*OPTIONAL_VEHICLE_FIELDS)
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None


class VehicleRecord(BaseModel):
    """Vehicle as returned by the API."""

    model_config = {"from_attributes": True}

    id: int
    brand: str
    plates: str
    serial_number: str
    vehicle_type: str | None = None
    color: str | None = None
    model: str | None = None
    location: str | None = None
    engine: str | None = None
    eco: str | None = None
    contract: str | None = None
    status: str | None = None
    agency: str | None = None
    project: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class VehicleSummary(BaseModel):
    """Vehicle reference embedded in expense records."""

    model_config = {"from_attributes": True}

    id: int
    brand: str
    model: str | None = None
    plates: str
