"""Vehicle endpoints, gated by the vehicles view flag."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from fleetdesk.api.deps import require_capability
from fleetdesk.core.database import get_db
from fleetdesk.core.errors import DuplicateIdentifierError, RecordNotFoundError
from fleetdesk.schemas.auth import MessageResponse, Principal
from fleetdesk.schemas.vehicles import VehicleRecord, VehicleWrite
from fleetdesk.services import vehicles as vehicle_service
from fleetdesk.services.capabilities import Resource

router = APIRouter()

CanViewVehicles = Annotated[Principal, Depends(require_capability(Resource.VEHICLES))]


@router.get("", response_model=list[VehicleRecord])
def list_vehicles(
    _user: CanViewVehicles,
    db: Annotated[Session, Depends(get_db)],
) -> list[VehicleRecord]:
    return [VehicleRecord.model_validate(v) for v in vehicle_service.list_vehicles(db)]


@router.post("", response_model=VehicleRecord, status_code=status.HTTP_201_CREATED)
def create_vehicle(
    body: VehicleWrite,
    _user: CanViewVehicles,
    db: Annotated[Session, Depends(get_db)],
) -> VehicleRecord:
    """Register a vehicle. Plates and serial number must be unused (409 otherwise)."""
    try:
        vehicle = vehicle_service.create_vehicle(db, body)
    except DuplicateIdentifierError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message) from e
    return VehicleRecord.model_validate(vehicle)


@router.get("/{vehicle_id}", response_model=VehicleRecord)
def get_vehicle(
    vehicle_id: int,
    _user: CanViewVehicles,
    db: Annotated[Session, Depends(get_db)],
) -> VehicleRecord:
    try:
        vehicle = vehicle_service.get_vehicle(db, vehicle_id)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    return VehicleRecord.model_validate(vehicle)


@router.put("/{vehicle_id}", response_model=VehicleRecord)
def update_vehicle(
    vehicle_id: int,
    body: VehicleWrite,
    _user: CanViewVehicles,
    db: Annotated[Session, Depends(get_db)],
) -> VehicleRecord:
    try:
        vehicle = vehicle_service.update_vehicle(db, vehicle_id, body)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    except DuplicateIdentifierError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message) from e
    return VehicleRecord.model_validate(vehicle)


@router.delete("/{vehicle_id}", response_model=MessageResponse)
def delete_vehicle(
    vehicle_id: int,
    _user: CanViewVehicles,
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """Delete a vehicle and the expenses charged to it."""
    try:
        vehicle_service.delete_vehicle(db, vehicle_id)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    return MessageResponse(message="Vehicle deleted")
