"""Login, logout and current-principal endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.orm import Session

from fleetdesk.api.deps import get_current_principal, request_is_secure
from fleetdesk.core.database import get_db
from fleetdesk.core.results import Err
from fleetdesk.schemas.auth import LoginRequest, LoginResponse, MessageResponse, Principal
from fleetdesk.services.sessions import (
    apply_session_cookies,
    authenticate,
    clear_session_cookies,
    issue_session,
)

logger = logging.getLogger(__name__)

router = APIRouter()

INVALID_CREDENTIALS = "Invalid email or password."


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    request: Request,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
) -> LoginResponse:
    """
    Authenticate with email and password.

    On success sets two cookies valid for 24 hours: the `auth` presence flag
    used by the page gate and the signed `auth-token` session token.
    """
    authenticated = authenticate(db, body.email, body.password)
    if isinstance(authenticated, Err):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=INVALID_CREDENTIALS,
        )
    session = issue_session(authenticated.value, secure=request_is_secure(request))
    apply_session_cookies(response, session)
    logger.info("Login succeeded: user_id=%s", session.profile.id)
    return LoginResponse(user=session.profile)


@router.post("/logout", response_model=MessageResponse)
def logout(request: Request, response: Response) -> MessageResponse:
    """Clear both session cookies. The token itself stays valid until it expires."""
    clear_session_cookies(response, secure=request_is_secure(request))
    return MessageResponse(message="Logged out")


@router.get("/user", response_model=Principal)
def current_user(
    principal: Annotated[Principal, Depends(get_current_principal)],
) -> Principal:
    """Return the caller's live identity and view flags."""
    return principal
