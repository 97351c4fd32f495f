"""Resolve the caller's live principal from the signed session token."""

import logging

from sqlalchemy.orm import Session

from fleetdesk.core.errors import AuthFailure
from fleetdesk.core.results import Err, Ok, Result
from fleetdesk.core.security import verify_session_token
from fleetdesk.models import User
from fleetdesk.schemas.auth import Principal

logger = logging.getLogger(__name__)


def load_principal(db: Session, user_id: int) -> Principal | None:
    """Read the user's current row and project it to a Principal (no password hash)."""
    row = (
        db.query(
            User.id,
            User.full_name,
            User.email,
            User.role,
            User.can_view_expenses,
            User.can_view_external_expenses,
            User.can_view_vehicles,
            User.can_view_users,
        )
        .filter(User.id == user_id)
        .first()
    )
    if row is None:
        return None
    return Principal.model_validate(row._asdict())


def resolve_principal(db: Session, token: str | None) -> Result[Principal, AuthFailure]:
    """
    Verify the session token and return the principal it names.

    Nothing about the user is taken from the token except the id, so role and
    flag changes or account deletion apply to the very next call.
    """
    if not token:
        return Err(AuthFailure.MISSING_TOKEN)

    verified = verify_session_token(token)
    if isinstance(verified, Err):
        return verified

    principal = load_principal(db, verified.value)
    if principal is None:
        logger.info("Session token subject no longer exists: user_id=%s", verified.value)
        return Err(AuthFailure.TOKEN_SUBJECT_NOT_FOUND)
    return Ok(principal)
