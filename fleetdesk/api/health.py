"""Unauthenticated health probe for load balancers."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from fleetdesk.core.config import settings
from fleetdesk.core.database import check_db_connected, get_db
from fleetdesk.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def get_health(db: Annotated[Session, Depends(get_db)]) -> HealthResponse:
    """Degraded when the store is unreachable, since no session can be resolved then."""
    connected = check_db_connected(db)
    return HealthResponse(
        status="ok" if connected else "degraded",
        environment=settings.APP_ENV,
        database="connected" if connected else "disconnected",
    )
