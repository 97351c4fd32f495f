"""
Coarse page gate: redirect on the unsigned `auth` flag cookie before any page handler runs.

This is a perimeter shortcut, not the security boundary. It never checks the
token signature or touches the database; API routes and page handlers resolve
the principal themselves.
"""

import logging

from starlette.requests import HTTPConnection
from starlette.responses import RedirectResponse
from starlette.types import ASGIApp, Receive, Scope, Send

from fleetdesk.services.sessions import AUTH_FLAG_COOKIE, AUTH_FLAG_VALUE

logger = logging.getLogger(__name__)

# Framework assets and docs never pass through the gate.
EXEMPT_PATHS = frozenset({"/docs", "/redoc", "/openapi.json", "/favicon.ico"})
EXEMPT_PREFIXES = ("/static/", "/docs/")


def is_exempt(path: str, api_prefix: str) -> bool:
    """True for API routes and framework assets; they enforce their own checks."""
    if path in EXEMPT_PATHS or path.startswith(EXEMPT_PREFIXES):
        return True
    return path == api_prefix or path.startswith(api_prefix.rstrip("/") + "/")


def gate_decision(
    path: str,
    flag_value: str | None,
    login_path: str,
    home_path: str,
) -> str | None:
    """
    Return where to redirect, or None to let the request through.

    Logged out and not on the login page -> login page.
    Logged in and on the login page -> home page.
    """
    logged_in = flag_value == AUTH_FLAG_VALUE
    on_login_page = path == login_path
    if not logged_in and not on_login_page:
        return login_path
    if logged_in and on_login_page:
        return home_path
    return None


class RequestGateMiddleware:
    """Raw ASGI middleware applying gate_decision to every non-exempt HTTP request."""

    def __init__(
        self,
        app: ASGIApp,
        api_prefix: str,
        login_path: str,
        home_path: str,
    ) -> None:
        self.app = app
        self.api_prefix = api_prefix
        self.login_path = login_path
        self.home_path = home_path

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return
        path = scope.get("path") or "/"
        if is_exempt(path, self.api_prefix):
            await self.app(scope, receive, send)
            return
        connection = HTTPConnection(scope)
        target = gate_decision(
            path,
            connection.cookies.get(AUTH_FLAG_COOKIE),
            self.login_path,
            self.home_path,
        )
        if target is None:
            await self.app(scope, receive, send)
            return
        logger.debug("Request gate redirect: %s -> %s", path, target)
        response = RedirectResponse(url=target, status_code=307)
        await response(scope, receive, send)
