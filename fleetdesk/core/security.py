"""Password hashing and signed session tokens."""

import hmac
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt
from jwt.algorithms import get_default_algorithms
from jwt.utils import base64url_encode

from fleetdesk.core.config import settings
from fleetdesk.core.errors import AuthFailure
from fleetdesk.core.results import Err, Ok, Result

# Session lifetime: token expiry and both cookies' max age.
SESSION_TTL = timedelta(hours=24)

# Min/max lengths for login input validation.
EMAIL_MAX_LEN = 255
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(pw_bytes, salt).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def issue_session_token(user_id: int, now: datetime | None = None) -> str:
    """
    Create a signed session token for user_id, expiring SESSION_TTL after now.

    The token carries nothing but the subject id and the expiry; roles and
    capability flags are re-read from the database on every request.
    """
    issued_at = now or datetime.now(UTC)
    payload: dict[str, Any] = {
        "sub": str(user_id),
        "exp": issued_at + SESSION_TTL,
    }
    return jwt.encode(
        payload,
        settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
    )


def _expected_signature(signing_input: bytes) -> bytes:
    algorithm = get_default_algorithms()[settings.JWT_ALGORITHM]
    key = algorithm.prepare_key(settings.JWT_SECRET.get_secret_value())
    return base64url_encode(algorithm.sign(signing_input, key))


def verify_session_token(token: str) -> Result[int, AuthFailure]:
    """
    Verify a session token and return the subject user id.

    The signature segment is compared as text against the signature recomputed
    over header and payload, so altering any character of the token (including
    base64 padding bits that decoders ignore) is reported as INVALID_SIGNATURE.
    """
    parts = token.split(".")
    if len(parts) != 3 or not all(parts):
        return Err(AuthFailure.MALFORMED_TOKEN)

    header_b64, payload_b64, signature_b64 = parts
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    if not hmac.compare_digest(
        _expected_signature(signing_input), signature_b64.encode("utf-8")
    ):
        return Err(AuthFailure.INVALID_SIGNATURE)

    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET.get_secret_value(),
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError:
        return Err(AuthFailure.EXPIRED_TOKEN)
    except jwt.PyJWTError:
        return Err(AuthFailure.MALFORMED_TOKEN)

    try:
        return Ok(int(payload["sub"]))
    except (TypeError, ValueError):
        return Err(AuthFailure.MALFORMED_TOKEN)
