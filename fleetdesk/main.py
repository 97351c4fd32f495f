"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

from dotenv import load_dotenv

load_dotenv()

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fleetdesk.api import router as api_router
from fleetdesk.core.config import DEFAULT_JWT_SECRET, settings
from fleetdesk.middleware.request_gate import RequestGateMiddleware
from fleetdesk.web.pages import router as pages_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)

logger = logging.getLogger(__name__)

if settings.JWT_SECRET.get_secret_value() == DEFAULT_JWT_SECRET:
    logger.warning(
        "JWT_SECRET is the built-in placeholder. Set a private value before exposing the API."
    )

app = FastAPI(
    title="Fleetdesk API",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Registered first so CORS stays the outermost layer.
app.add_middleware(
    RequestGateMiddleware,
    api_prefix=settings.API_PREFIX,
    login_path=settings.LOGIN_PATH,
    home_path=settings.HOME_PATH,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.APP_ENV == "dev" else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix=settings.API_PREFIX)
app.include_router(pages_router, tags=["pages"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "fleetdesk.main:app",
        host="0.0.0.0",
        port=8000,
        log_level=settings.LOG_LEVEL.lower(),
    )
