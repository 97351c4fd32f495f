"""
Dashboard page routes.

The request gate only looks at the unsigned flag cookie, so every page except
the login page resolves the principal from the signed token as well. A flag
cookie without a valid token gets both cookies cleared and a redirect to login.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from fleetdesk.api.deps import request_is_secure
from fleetdesk.core.config import settings
from fleetdesk.core.database import get_db
from fleetdesk.core.results import Err
from fleetdesk.schemas.pages import LoginPage, PageState
from fleetdesk.services.capabilities import Resource, can_view, visible_navigation
from fleetdesk.services.identity import resolve_principal
from fleetdesk.services.sessions import SESSION_COOKIE, clear_session_cookies

logger = logging.getLogger(__name__)

router = APIRouter()


def _page_state(
    page: str,
    resource: Resource | None,
    request: Request,
    db: Session,
) -> PageState | RedirectResponse:
    resolved = resolve_principal(db, request.cookies.get(SESSION_COOKIE))
    if isinstance(resolved, Err):
        logger.info("Page %s: session rejected (%s)", page, resolved.error.value)
        response = RedirectResponse(url=settings.LOGIN_PATH, status_code=307)
        clear_session_cookies(response, secure=request_is_secure(request))
        return response
    principal = resolved.value
    return PageState(
        page=page,
        permitted=resource is None or can_view(principal, resource),
        principal=principal,
        navigation=visible_navigation(principal),
    )


@router.get(settings.LOGIN_PATH, response_model=LoginPage)
def login_page() -> LoginPage:
    return LoginPage(login_url=f"{settings.API_PREFIX}/login")


@router.get(settings.HOME_PATH, response_model=None)
def home_page(
    request: Request, db: Annotated[Session, Depends(get_db)]
) -> PageState | RedirectResponse:
    return _page_state("dashboard", None, request, db)


@router.get("/vehicles", response_model=None)
def vehicles_page(
    request: Request, db: Annotated[Session, Depends(get_db)]
) -> PageState | RedirectResponse:
    return _page_state("vehicles", Resource.VEHICLES, request, db)


@router.get("/expenses", response_model=None)
def expenses_page(
    request: Request, db: Annotated[Session, Depends(get_db)]
) -> PageState | RedirectResponse:
    return _page_state("expenses", Resource.EXPENSES, request, db)


@router.get("/external-expenses", response_model=None)
def external_expenses_page(
    request: Request, db: Annotated[Session, Depends(get_db)]
) -> PageState | RedirectResponse:
    return _page_state("external-expenses", Resource.EXTERNAL_EXPENSES, request, db)


@router.get("/users", response_model=None)
def users_page(
    request: Request, db: Annotated[Session, Depends(get_db)]
) -> PageState | RedirectResponse:
    return _page_state("users", Resource.USERS, request, db)
