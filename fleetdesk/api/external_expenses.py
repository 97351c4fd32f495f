"""External expense endpoints, gated by the external-expenses view flag."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from fleetdesk.api.deps import require_capability
from fleetdesk.core.database import get_db
from fleetdesk.core.errors import RecordNotFoundError
from fleetdesk.schemas.auth import MessageResponse, Principal
from fleetdesk.schemas.expenses import ExternalExpenseRecord, ExternalExpenseWrite
from fleetdesk.services import expenses as expense_service
from fleetdesk.services.capabilities import Resource

router = APIRouter()

CanViewExternalExpenses = Annotated[
    Principal, Depends(require_capability(Resource.EXTERNAL_EXPENSES))
]


@router.get("", response_model=list[ExternalExpenseRecord])
def list_external_expenses(
    _user: CanViewExternalExpenses,
    db: Annotated[Session, Depends(get_db)],
) -> list[ExternalExpenseRecord]:
    return [
        ExternalExpenseRecord.model_validate(x)
        for x in expense_service.list_external_expenses(db)
    ]


@router.post("", response_model=ExternalExpenseRecord, status_code=status.HTTP_201_CREATED)
def create_external_expense(
    body: ExternalExpenseWrite,
    user: CanViewExternalExpenses,
    db: Annotated[Session, Depends(get_db)],
) -> ExternalExpenseRecord:
    expense = expense_service.create_external_expense(db, body, user)
    return ExternalExpenseRecord.model_validate(expense)


@router.get("/{expense_id}", response_model=ExternalExpenseRecord)
def get_external_expense(
    expense_id: int,
    _user: CanViewExternalExpenses,
    db: Annotated[Session, Depends(get_db)],
) -> ExternalExpenseRecord:
    try:
        expense = expense_service.get_external_expense(db, expense_id)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    return ExternalExpenseRecord.model_validate(expense)


@router.put("/{expense_id}", response_model=ExternalExpenseRecord)
def update_external_expense(
    expense_id: int,
    body: ExternalExpenseWrite,
    _user: CanViewExternalExpenses,
    db: Annotated[Session, Depends(get_db)],
) -> ExternalExpenseRecord:
    try:
        expense = expense_service.update_external_expense(db, expense_id, body)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    return ExternalExpenseRecord.model_validate(expense)


@router.delete("/{expense_id}", response_model=MessageResponse)
def delete_external_expense(
    expense_id: int,
    _user: CanViewExternalExpenses,
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    try:
        expense_service.delete_external_expense(db, expense_id)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    return MessageResponse(message="External expense deleted")
