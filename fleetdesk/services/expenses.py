"""Internal (per-vehicle) and external expense records."""

from sqlalchemy.orm import Session

from fleetdesk.core.errors import RecordNotFoundError
from fleetdesk.models import Expense, ExternalExpense, Vehicle
from fleetdesk.schemas.auth import Principal
from fleetdesk.schemas.expenses import ExpenseWrite, ExternalExpenseWrite
from fleetdesk.services.vehicles import VEHICLE_NOT_FOUND_MESSAGE, get_vehicle

EXPENSE_NOT_FOUND_MESSAGE = "Expense not found."
EXTERNAL_EXPENSE_NOT_FOUND_MESSAGE = "External expense not found."


def _fill_responsible(values: dict, principal: Principal) -> dict:
    """Default the responsible party to the caller's display name."""
    if not values.get("responsible"):
        values["responsible"] = principal.full_name
    return values


def _require_plate(db: Session, plate: str) -> None:
    if db.query(Vehicle.id).filter(Vehicle.plates == plate).first() is None:
        raise RecordNotFoundError(VEHICLE_NOT_FOUND_MESSAGE)


def list_expenses(db: Session, vehicle_id: int | None = None) -> list[Expense]:
    """All internal expenses, newest first; or only those of one vehicle."""
    query = db.query(Expense)
    if vehicle_id is not None:
        vehicle = get_vehicle(db, vehicle_id)
        query = query.filter(Expense.plate == vehicle.plates)
    return query.order_by(Expense.date.desc().nulls_last(), Expense.id.desc()).all()


def get_expense(db: Session, expense_id: int) -> Expense:
    expense = db.query(Expense).filter(Expense.id == expense_id).first()
    if expense is None:
        raise RecordNotFoundError(EXPENSE_NOT_FOUND_MESSAGE)
    return expense


def create_expense(db: Session, data: ExpenseWrite, principal: Principal) -> Expense:
    _require_plate(db, data.plate)
    expense = Expense(**_fill_responsible(data.model_dump(), principal))
    db.add(expense)
    db.commit()
    db.refresh(expense)
    return expense


def update_expense(db: Session, expense_id: int, data: ExpenseWrite) -> Expense:
    expense = get_expense(db, expense_id)
    _require_plate(db, data.plate)
    for field, value in data.model_dump().items():
        setattr(expense, field, value)
    db.commit()
    db.refresh(expense)
    return expense


def delete_expense(db: Session, expense_id: int) -> None:
    expense = get_expense(db, expense_id)
    db.delete(expense)
    db.commit()


def list_external_expenses(db: Session) -> list[ExternalExpense]:
    return (
        db.query(ExternalExpense)
        .order_by(ExternalExpense.date.desc().nulls_last(), ExternalExpense.id.desc())
        .all()
    )


def get_external_expense(db: Session, expense_id: int) -> ExternalExpense:
    expense = db.query(ExternalExpense).filter(ExternalExpense.id == expense_id).first()
    if expense is None:
        raise RecordNotFoundError(EXTERNAL_EXPENSE_NOT_FOUND_MESSAGE)
    return expense


def create_external_expense(
    db: Session, data: ExternalExpenseWrite, principal: Principal
) -> ExternalExpense:
    expense = ExternalExpense(**_fill_responsible(data.model_dump(), principal))
    db.add(expense)
    db.commit()
    db.refresh(expense)
    return expense


def update_external_expense(
    db: Session, expense_id: int, data: ExternalExpenseWrite
) -> ExternalExpense:
    expense = get_external_expense(db, expense_id)
    for field, value in data.model_dump().items():
        setattr(expense, field, value)
    db.commit()
    db.refresh(expense)
    return expense


def delete_external_expense(db: Session, expense_id: int) -> None:
    expense = get_external_expense(db, expense_id)
    db.delete(expense)
    db.commit()
