"""User account administration: list, create, update, delete."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from fleetdesk.core.errors import DuplicateIdentifierError, RecordNotFoundError
from fleetdesk.core.security import hash_password
from fleetdesk.models import User
from fleetdesk.schemas.users import UserCreate, UserUpdate

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "Email is already registered."
USER_NOT_FOUND_MESSAGE = "User not found."


def _email_taken(db: Session, email: str, exclude_id: int | None = None) -> bool:
    query = db.query(User.id).filter(User.email == email)
    if exclude_id is not None:
        query = query.filter(User.id != exclude_id)
    return query.first() is not None


def _commit_or_duplicate(db: Session) -> None:
    """Commit; a unique violation that slipped past the pre-check becomes DuplicateIdentifierError."""
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning("Email uniqueness enforced by the database: %s", e.orig)
        raise DuplicateIdentifierError(DUPLICATE_EMAIL_MESSAGE) from e


def list_users(db: Session) -> list[User]:
    return db.query(User).order_by(User.id).all()


def get_user(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise RecordNotFoundError(USER_NOT_FOUND_MESSAGE)
    return user


def create_user(db: Session, data: UserCreate) -> User:
    """Create a user with a freshly hashed password. Raises DuplicateIdentifierError on a taken email."""
    if _email_taken(db, data.email):
        raise DuplicateIdentifierError(DUPLICATE_EMAIL_MESSAGE)
    user = User(
        full_name=data.full_name,
        email=data.email,
        password_hash=hash_password(data.password),
        role=data.role,
        can_view_expenses=data.can_view_expenses,
        can_view_external_expenses=data.can_view_external_expenses,
        can_view_vehicles=data.can_view_vehicles,
        can_view_users=data.can_view_users,
    )
    db.add(user)
    _commit_or_duplicate(db)
    db.refresh(user)
    return user


def update_user(db: Session, user_id: int, data: UserUpdate) -> User:
    """
    Apply the fields present in data. The password hash changes only when a
    new password is supplied.
    """
    user = get_user(db, user_id)
    changes = data.model_dump(exclude_unset=True, exclude_none=True)
    password = changes.pop("password", None)

    if "email" in changes and _email_taken(db, changes["email"], exclude_id=user_id):
        raise DuplicateIdentifierError(DUPLICATE_EMAIL_MESSAGE)

    for field, value in changes.items():
        setattr(user, field, value)
    if password:
        user.password_hash = hash_password(password)

    _commit_or_duplicate(db)
    db.refresh(user)
    return user


def delete_user(db: Session, user_id: int) -> None:
    """Delete a user row. Self-deletion is rejected by the caller before this runs."""
    user = get_user(db, user_id)
    db.delete(user)
    db.commit()
