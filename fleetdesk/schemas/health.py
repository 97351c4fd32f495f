"""Health probe body."""

from typing import Literal

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Liveness plus store connectivity, which every session lookup depends on."""

    status: Literal["ok", "degraded"]
    environment: str
    database: Literal["connected", "disconnected"]
