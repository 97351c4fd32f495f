"""Unit tests for fleetdesk.services.sessions and fleetdesk.services.identity with a mocked store."""

import unittest
from unittest.mock import MagicMock, patch

from fleetdesk.core.errors import AuthFailure
from fleetdesk.core.results import Err, Ok
from fleetdesk.core.security import issue_session_token
from fleetdesk.schemas.auth import Principal
from fleetdesk.services.identity import resolve_principal
from fleetdesk.services.sessions import (
    AUTH_FLAG_COOKIE,
    COOKIE_MAX_AGE,
    SESSION_COOKIE,
    authenticate,
    issue_session,
)


def _user(**kwargs: object) -> MagicMock:
    user = MagicMock()
    user.id = kwargs.get("id", 5)
    user.full_name = kwargs.get("full_name", "Dana Driver")
    user.email = kwargs.get("email", "dana@example.com")
    user.role = kwargs.get("role", "user")
    user.password_hash = kwargs.get("password_hash", "$2b$04$hash")
    return user


class TestAuthenticate(unittest.TestCase):
    """Unknown email and wrong password fail identically."""

    def test_unknown_email_still_runs_one_password_check(self) -> None:
        db = MagicMock()
        db.query.return_value.filter.return_value.first.return_value = None
        with patch("fleetdesk.services.sessions.verify_password", return_value=False) as vp, patch(
            "fleetdesk.services.sessions._dummy_password_hash", return_value="$2b$04$dummy"
        ):
            result = authenticate(db, "nobody@example.com", "whatever-password")
        self.assertEqual(result, Err(AuthFailure.INVALID_CREDENTIALS))
        vp.assert_called_once_with("whatever-password", "$2b$04$dummy")

    def test_wrong_password(self) -> None:
        db = MagicMock()
        db.query.return_value.filter.return_value.first.return_value = _user()
        with patch("fleetdesk.services.sessions.verify_password", return_value=False):
            result = authenticate(db, "dana@example.com", "wrong")
        self.assertEqual(result, Err(AuthFailure.INVALID_CREDENTIALS))

    def test_correct_password(self) -> None:
        user = _user()
        db = MagicMock()
        db.query.return_value.filter.return_value.first.return_value = user
        with patch("fleetdesk.services.sessions.verify_password", return_value=True):
            result = authenticate(db, "dana@example.com", "right")
        self.assertEqual(result, Ok(user))


class TestIssueSession(unittest.TestCase):
    """issue_session builds the profile and the two cookie instructions."""

    def test_profile_has_no_password_hash(self) -> None:
        session = issue_session(_user(), secure=False)
        dumped = session.profile.model_dump()
        self.assertEqual(set(dumped), {"id", "full_name", "email", "role"})
        self.assertEqual(dumped["id"], 5)

    def test_two_cookies_with_shared_attributes(self) -> None:
        session = issue_session(_user(), secure=False)
        names = [c.name for c in session.cookies]
        self.assertEqual(names, [AUTH_FLAG_COOKIE, SESSION_COOKIE])
        for cookie in session.cookies:
            self.assertEqual(cookie.path, "/")
            self.assertTrue(cookie.httponly)
            self.assertEqual(cookie.max_age, COOKIE_MAX_AGE)
            self.assertEqual(cookie.max_age, 24 * 60 * 60)
            self.assertFalse(cookie.secure)
        self.assertEqual(session.cookies[0].value, "true")

    def test_secure_flag_follows_transport(self) -> None:
        session = issue_session(_user(), secure=True)
        self.assertTrue(all(c.secure for c in session.cookies))


class TestResolvePrincipal(unittest.TestCase):
    """resolve_principal maps every failure to an AuthFailure and re-reads the user."""

    def test_missing_token(self) -> None:
        db = MagicMock()
        self.assertEqual(resolve_principal(db, None), Err(AuthFailure.MISSING_TOKEN))
        self.assertEqual(resolve_principal(db, ""), Err(AuthFailure.MISSING_TOKEN))
        db.query.assert_not_called()

    def test_bad_token_does_not_touch_store(self) -> None:
        db = MagicMock()
        self.assertEqual(resolve_principal(db, "garbage"), Err(AuthFailure.MALFORMED_TOKEN))
        db.query.assert_not_called()

    def test_deleted_subject(self) -> None:
        db = MagicMock()
        with patch("fleetdesk.services.identity.load_principal", return_value=None):
            result = resolve_principal(db, issue_session_token(99))
        self.assertEqual(result, Err(AuthFailure.TOKEN_SUBJECT_NOT_FOUND))

    def test_valid_token_returns_loaded_principal(self) -> None:
        principal = Principal(
            id=99,
            full_name="Dana Driver",
            email="dana@example.com",
            role="user",
            can_view_expenses=True,
            can_view_external_expenses=True,
            can_view_vehicles=False,
            can_view_users=False,
        )
        db = MagicMock()
        with patch(
            "fleetdesk.services.identity.load_principal", return_value=principal
        ) as loader:
            result = resolve_principal(db, issue_session_token(99))
        self.assertEqual(result, Ok(principal))
        loader.assert_called_once_with(db, 99)


if __name__ == "__main__":
    unittest.main()
