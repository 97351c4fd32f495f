"""Failure reasons and service exceptions shared across the API."""

from enum import Enum


class AuthFailure(str, Enum):
    """
    Why a caller could not be authenticated.

    Only ever logged. Clients see one generic 401 whatever the reason.
    """

    INVALID_CREDENTIALS = "invalid_credentials"
    MISSING_TOKEN = "missing_token"
    MALFORMED_TOKEN = "malformed_token"
    INVALID_SIGNATURE = "invalid_signature"
    EXPIRED_TOKEN = "expired_token"
    TOKEN_SUBJECT_NOT_FOUND = "token_subject_not_found"


class AccessDenied(str, Enum):
    """Why an authenticated principal may not perform an action."""

    INSUFFICIENT_ROLE = "insufficient_role"
    MISSING_CAPABILITY = "missing_capability"
    SELF_DELETE_FORBIDDEN = "self_delete_forbidden"


class DuplicateIdentifierError(Exception):
    """Raised when a unique field (email, plates, serial number) is already taken."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class RecordNotFoundError(Exception):
    """Raised when a referenced row does not exist."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)
