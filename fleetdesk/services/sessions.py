"""Login: verify credentials, mint a session token, and describe the session cookies."""

import logging
from dataclasses import dataclass
from functools import lru_cache

from fastapi import Response
from sqlalchemy.orm import Session

from fleetdesk.core.errors import AuthFailure
from fleetdesk.core.results import Err, Ok, Result
from fleetdesk.core.security import (
    SESSION_TTL,
    hash_password,
    issue_session_token,
    verify_password,
)
from fleetdesk.models import User
from fleetdesk.schemas.auth import UserProfile

logger = logging.getLogger(__name__)

# Unsigned presence marker read by the request gate only.
AUTH_FLAG_COOKIE = "auth"
AUTH_FLAG_VALUE = "true"
# Signed session token read by the identity resolver only.
SESSION_COOKIE = "auth-token"

COOKIE_PATH = "/"
COOKIE_SAMESITE = "lax"
COOKIE_MAX_AGE = int(SESSION_TTL.total_seconds())


@dataclass(frozen=True)
class CookieSpec:
    """One Set-Cookie instruction."""

    name: str
    value: str
    secure: bool
    max_age: int = COOKIE_MAX_AGE
    path: str = COOKIE_PATH
    httponly: bool = True
    samesite: str = COOKIE_SAMESITE


@dataclass(frozen=True)
class IssuedSession:
    """Successful login: the public profile plus the cookies to set."""

    profile: UserProfile
    cookies: tuple[CookieSpec, ...]


@lru_cache
def _dummy_password_hash() -> str:
    # Verified against when the email is unknown so both failure paths cost one bcrypt check.
    return hash_password("fleetdesk-unknown-user-placeholder")


def authenticate(db: Session, email: str, password: str) -> Result[User, AuthFailure]:
    """
    Check credentials. Unknown email and wrong password give the same failure.
    """
    user = db.query(User).filter(User.email == email).first()
    if user is None:
        verify_password(password, _dummy_password_hash())
        logger.info("Login rejected: no account for the submitted email")
        return Err(AuthFailure.INVALID_CREDENTIALS)
    if not verify_password(password, user.password_hash):
        logger.info("Login rejected: wrong password for user_id=%s", user.id)
        return Err(AuthFailure.INVALID_CREDENTIALS)
    return Ok(user)


def issue_session(user: User, secure: bool) -> IssuedSession:
    """Mint a token for user and build the flag and token cookies."""
    token = issue_session_token(user.id)
    return IssuedSession(
        profile=UserProfile.model_validate(user),
        cookies=(
            CookieSpec(name=AUTH_FLAG_COOKIE, value=AUTH_FLAG_VALUE, secure=secure),
            CookieSpec(name=SESSION_COOKIE, value=token, secure=secure),
        ),
    )


def apply_session_cookies(response: Response, session: IssuedSession) -> None:
    for cookie in session.cookies:
        response.set_cookie(
            key=cookie.name,
            value=cookie.value,
            max_age=cookie.max_age,
            path=cookie.path,
            secure=cookie.secure,
            httponly=cookie.httponly,
            samesite=cookie.samesite,
        )


def clear_session_cookies(response: Response, secure: bool = False) -> None:
    """Expire both session cookies (logout, or a stale flag cookie on a page request)."""
    for name in (AUTH_FLAG_COOKIE, SESSION_COOKIE):
        response.delete_cookie(
            key=name,
            path=COOKIE_PATH,
            secure=secure,
            httponly=True,
            samesite=COOKIE_SAMESITE,
        )
