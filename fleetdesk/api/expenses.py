"""Internal expense endpoints, gated by the expenses view flag."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from fleetdesk.api.deps import require_capability
from fleetdesk.core.database import get_db
from fleetdesk.core.errors import RecordNotFoundError
from fleetdesk.schemas.auth import MessageResponse, Principal
from fleetdesk.schemas.expenses import ExpenseRecord, ExpenseWrite
from fleetdesk.services import expenses as expense_service
from fleetdesk.services.capabilities import Resource

router = APIRouter()

CanViewExpenses = Annotated[Principal, Depends(require_capability(Resource.EXPENSES))]


@router.get("", response_model=list[ExpenseRecord])
def list_expenses(
    _user: CanViewExpenses,
    db: Annotated[Session, Depends(get_db)],
    vehicle_id: Annotated[int | None, Query(description="Only expenses of this vehicle")] = None,
) -> list[ExpenseRecord]:
    """List expenses newest first, optionally for one vehicle (404 if it does not exist)."""
    try:
        expenses = expense_service.list_expenses(db, vehicle_id=vehicle_id)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    return [ExpenseRecord.model_validate(x) for x in expenses]


@router.post("", response_model=ExpenseRecord, status_code=status.HTTP_201_CREATED)
def create_expense(
    body: ExpenseWrite,
    user: CanViewExpenses,
    db: Annotated[Session, Depends(get_db)],
) -> ExpenseRecord:
    """
    Record an expense against the vehicle with the given plate.

    When responsible is omitted it is filled with the caller's display name.
    """
    try:
        expense = expense_service.create_expense(db, body, user)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    return ExpenseRecord.model_validate(expense)


@router.get("/{expense_id}", response_model=ExpenseRecord)
def get_expense(
    expense_id: int,
    _user: CanViewExpenses,
    db: Annotated[Session, Depends(get_db)],
) -> ExpenseRecord:
    try:
        expense = expense_service.get_expense(db, expense_id)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    return ExpenseRecord.model_validate(expense)


@router.put("/{expense_id}", response_model=ExpenseRecord)
def update_expense(
    expense_id: int,
    body: ExpenseWrite,
    _user: CanViewExpenses,
    db: Annotated[Session, Depends(get_db)],
) -> ExpenseRecord:
    try:
        expense = expense_service.update_expense(db, expense_id, body)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    return ExpenseRecord.model_validate(expense)


@router.delete("/{expense_id}", response_model=MessageResponse)
def delete_expense(
    expense_id: int,
    _user: CanViewExpenses,
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    try:
        expense_service.delete_expense(db, expense_id)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    return MessageResponse(message="Expense deleted")
