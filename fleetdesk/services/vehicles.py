"""Vehicle registry: CRUD with unique plates and serial numbers."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from fleetdesk.core.errors import DuplicateIdentifierError, RecordNotFoundError
from fleetdesk.models import Expense, Vehicle
from fleetdesk.schemas.vehicles import VehicleWrite

DUPLICATE_PLATES_MESSAGE = "Plates are already registered."
DUPLICATE_SERIAL_MESSAGE = "Serial number is already registered."
DUPLICATE_VEHICLE_MESSAGE = "Plates or serial number are already registered."
VEHICLE_NOT_FOUND_MESSAGE = "Vehicle not found."


def _check_unique(db: Session, data: VehicleWrite, exclude_id: int | None = None) -> None:
    for column, value, message in (
        (Vehicle.plates, data.plates, DUPLICATE_PLATES_MESSAGE),
        (Vehicle.serial_number, data.serial_number, DUPLICATE_SERIAL_MESSAGE),
    ):
        query = db.query(Vehicle.id).filter(column == value)
        if exclude_id is not None:
            query = query.filter(Vehicle.id != exclude_id)
        if query.first() is not None:
            raise DuplicateIdentifierError(message)


def _commit(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise DuplicateIdentifierError(DUPLICATE_VEHICLE_MESSAGE) from e


def list_vehicles(db: Session) -> list[Vehicle]:
    return db.query(Vehicle).order_by(Vehicle.id).all()


def get_vehicle(db: Session, vehicle_id: int) -> Vehicle:
    vehicle = db.query(Vehicle).filter(Vehicle.id == vehicle_id).first()
    if vehicle is None:
        raise RecordNotFoundError(VEHICLE_NOT_FOUND_MESSAGE)
    return vehicle


def create_vehicle(db: Session, data: VehicleWrite) -> Vehicle:
    _check_unique(db, data)
    vehicle = Vehicle(**data.model_dump())
    db.add(vehicle)
    _commit(db)
    db.refresh(vehicle)
    return vehicle


def update_vehicle(db: Session, vehicle_id: int, data: VehicleWrite) -> Vehicle:
    """Replace every field of a vehicle. Expenses follow a plates change."""
    vehicle = get_vehicle(db, vehicle_id)
    _check_unique(db, data, exclude_id=vehicle_id)
    old_plates = vehicle.plates
    for field, value in data.model_dump().items():
        setattr(vehicle, field, value)
    try:
        # Flush first so the new plates exist before expenses point at them.
        db.flush()
        if data.plates != old_plates:
            db.query(Expense).filter(Expense.plate == old_plates).update(
                {Expense.plate: data.plates}, synchronize_session=False
            )
    except IntegrityError as e:
        db.rollback()
        raise DuplicateIdentifierError(DUPLICATE_VEHICLE_MESSAGE) from e
    _commit(db)
    db.refresh(vehicle)
    return vehicle


def delete_vehicle(db: Session, vehicle_id: int) -> None:
    """Delete a vehicle together with the expenses charged to it."""
    vehicle = get_vehicle(db, vehicle_id)
    db.query(Expense).filter(Expense.plate == vehicle.plates).delete(synchronize_session=False)
    db.delete(vehicle)
    db.commit()
