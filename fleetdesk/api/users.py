"""User administration endpoints (admin role required)."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from fleetdesk.api.deps import require_admin
from fleetdesk.core.database import get_db
from fleetdesk.core.errors import DuplicateIdentifierError, RecordNotFoundError
from fleetdesk.core.results import Err
from fleetdesk.schemas.auth import MessageResponse, Principal
from fleetdesk.schemas.users import UserCreate, UserRecord, UserUpdate
from fleetdesk.services import users as user_service
from fleetdesk.services.capabilities import check_can_delete_user

logger = logging.getLogger(__name__)

router = APIRouter()

SELF_DELETE_MESSAGE = "You cannot delete your own account."


@router.get("", response_model=list[UserRecord])
def list_users(
    _admin: Annotated[Principal, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> list[UserRecord]:
    """List all users without password hashes."""
    return [UserRecord.model_validate(u) for u in user_service.list_users(db)]


@router.post("", response_model=UserRecord, status_code=status.HTTP_201_CREATED)
def create_user(
    body: UserCreate,
    admin: Annotated[Principal, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> UserRecord:
    """Create a user. Returns 409 when the email is already registered."""
    try:
        user = user_service.create_user(db, body)
    except DuplicateIdentifierError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message) from e
    logger.info("User created: actor_id=%s user_id=%s", admin.id, user.id)
    return UserRecord.model_validate(user)


@router.put("/{user_id}", response_model=UserRecord)
def update_user(
    user_id: int,
    body: UserUpdate,
    admin: Annotated[Principal, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> UserRecord:
    """Edit a user. Omitting the password keeps the current one."""
    try:
        user = user_service.update_user(db, user_id, body)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    except DuplicateIdentifierError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message) from e
    logger.info("User updated: actor_id=%s user_id=%s", admin.id, user_id)
    return UserRecord.model_validate(user)


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: int,
    admin: Annotated[Principal, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """Delete a user. An admin cannot delete their own account."""
    allowed = check_can_delete_user(admin, user_id)
    if isinstance(allowed, Err):
        logger.warning("Self-delete rejected: user_id=%s", admin.id)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=SELF_DELETE_MESSAGE)
    try:
        user_service.delete_user(db, allowed.value)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    logger.info("User deleted: actor_id=%s user_id=%s", admin.id, user_id)
    return MessageResponse(message="User deleted")
