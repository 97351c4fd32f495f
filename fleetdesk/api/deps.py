"""Auth dependencies shared by API routes: current principal, admin and capability guards."""

import logging
from collections.abc import Callable
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from fleetdesk.core.database import get_db
from fleetdesk.core.results import Err
from fleetdesk.schemas.auth import Principal
from fleetdesk.services.capabilities import Resource, check_admin, check_capability
from fleetdesk.services.identity import resolve_principal
from fleetdesk.services.sessions import SESSION_COOKIE

logger = logging.getLogger(__name__)

NOT_AUTHENTICATED = "Not authenticated"
FORBIDDEN = "Forbidden"


def request_is_secure(request: Request) -> bool:
    """True when the request arrived over https; session cookies get the secure flag."""
    return request.url.scheme == "https"


def get_current_principal(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
) -> Principal:
    """Dependency: require a valid session cookie and return the live principal. Raises 401 otherwise."""
    resolved = resolve_principal(db, request.cookies.get(SESSION_COOKIE))
    if isinstance(resolved, Err):
        logger.info("Authentication failed on %s: %s", request.url.path, resolved.error.value)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=NOT_AUTHENTICATED,
        )
    return resolved.value


def require_admin(
    principal: Annotated[Principal, Depends(get_current_principal)],
) -> Principal:
    """Dependency: require role 'admin'. Raises 403 for everyone else."""
    checked = check_admin(principal)
    if isinstance(checked, Err):
        logger.warning("Admin access denied: user_id=%s", principal.id)
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=FORBIDDEN)
    return checked.value


def require_capability(resource: Resource) -> Callable[[Principal], Principal]:
    """Build a dependency that requires the principal's view flag for resource."""

    def dependency(
        principal: Annotated[Principal, Depends(get_current_principal)],
    ) -> Principal:
        checked = check_capability(principal, resource)
        if isinstance(checked, Err):
            logger.warning(
                "Capability denied: user_id=%s resource=%s", principal.id, resource.value
            )
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=FORBIDDEN)
        return checked.value

    return dependency
