"""Endpoint tests for user administration: admin role, secrets never returned, self-delete rule."""

import unittest

from fleetdesk.models import User

from support import PASSWORD, ApiTestCase


class UsersApiTestCase(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.admin_id = self.add_user("admin@example.com", role="admin", can_view_users=True)
        self.user_id = self.add_user("driver@example.com")

    def login_admin(self) -> None:
        self.assertEqual(self.login("admin@example.com").status_code, 200)

    def stored_hash(self, user_id: int) -> str:
        db = self.session_factory()
        try:
            return db.query(User.password_hash).filter(User.id == user_id).scalar()
        finally:
            db.close()


class TestNonAdminIsForbidden(UsersApiTestCase):
    """Every admin endpoint answers 403 with no user data to a non-admin."""

    def test_all_endpoints(self) -> None:
        self.login("driver@example.com")
        calls = [
            self.client.get(self.api("/users")),
            self.client.post(
                self.api("/users"),
                json={"full_name": "X", "email": "x@example.com", "password": "password123"},
            ),
            self.client.put(self.api(f"/users/{self.admin_id}"), json={"role": "user"}),
            self.client.delete(self.api(f"/users/{self.admin_id}")),
        ]
        for res in calls:
            self.assertEqual(res.status_code, 403)
            self.assertEqual(res.json(), {"detail": "Forbidden"})
        # Nothing was created or changed.
        db = self.session_factory()
        try:
            self.assertEqual(db.query(User).count(), 2)
            self.assertEqual(db.query(User.role).filter(User.id == self.admin_id).scalar(), "admin")
        finally:
            db.close()

    def test_users_view_flag_does_not_grant_administration(self) -> None:
        self.set_user_fields(self.user_id, can_view_users=True)
        self.login("driver@example.com")
        self.assertEqual(self.client.get(self.api("/users")).status_code, 403)

    def test_anonymous_is_unauthenticated(self) -> None:
        self.assertEqual(self.client.get(self.api("/users")).status_code, 401)


class TestListUsers(UsersApiTestCase):
    def test_lists_public_fields_only(self) -> None:
        self.login_admin()
        res = self.client.get(self.api("/users"))
        self.assertEqual(res.status_code, 200, res.text)
        users = res.json()
        self.assertEqual([u["email"] for u in users], ["admin@example.com", "driver@example.com"])
        for u in users:
            self.assertNotIn("password_hash", u)
            self.assertIn("created_at", u)


class TestCreateUser(UsersApiTestCase):
    def test_create_with_default_flags(self) -> None:
        self.login_admin()
        res = self.client.post(
            self.api("/users"),
            json={"full_name": "New Hire", "email": "new@example.com", "password": "password123"},
        )
        self.assertEqual(res.status_code, 201, res.text)
        body = res.json()
        self.assertEqual(body["role"], "user")
        self.assertTrue(body["can_view_expenses"])
        self.assertTrue(body["can_view_external_expenses"])
        self.assertTrue(body["can_view_vehicles"])
        self.assertFalse(body["can_view_users"])
        self.assertNotIn("password", body)
        self.assertNotEqual(self.stored_hash(body["id"]), "password123")

        other = self.new_client()
        self.assertEqual(self.login("new@example.com", "password123", client=other).status_code, 200)

    def test_duplicate_email(self) -> None:
        self.login_admin()
        res = self.client.post(
            self.api("/users"),
            json={"full_name": "Dup", "email": "driver@example.com", "password": "password123"},
        )
        self.assertEqual(res.status_code, 409)
        self.assertEqual(res.json(), {"detail": "Email is already registered."})

    def test_short_password_rejected(self) -> None:
        self.login_admin()
        res = self.client.post(
            self.api("/users"),
            json={"full_name": "Short", "email": "short@example.com", "password": "short"},
        )
        self.assertEqual(res.status_code, 422)

    def test_malformed_emails_rejected(self) -> None:
        self.login_admin()
        for email in ("not-an-email", "a@b@c", "x@@y", "a@b", "user@", "@x"):
            with self.subTest(email=email):
                res = self.client.post(
                    self.api("/users"),
                    json={"full_name": "Bad", "email": email, "password": "password123"},
                )
                self.assertEqual(res.status_code, 422)
        emails = [u["email"] for u in self.client.get(self.api("/users")).json()]
        self.assertEqual(emails, ["admin@example.com", "driver@example.com"])


class TestUpdateUser(UsersApiTestCase):
    def test_omitted_password_keeps_hash(self) -> None:
        self.login_admin()
        before = self.stored_hash(self.user_id)
        res = self.client.put(
            self.api(f"/users/{self.user_id}"),
            json={"full_name": "Renamed Driver", "can_view_expenses": False, "password": ""},
        )
        self.assertEqual(res.status_code, 200, res.text)
        self.assertEqual(res.json()["full_name"], "Renamed Driver")
        self.assertFalse(res.json()["can_view_expenses"])
        self.assertEqual(self.stored_hash(self.user_id), before)
        other = self.new_client()
        self.assertEqual(self.login("driver@example.com", PASSWORD, client=other).status_code, 200)

    def test_new_password_replaces_hash(self) -> None:
        self.login_admin()
        res = self.client.put(
            self.api(f"/users/{self.user_id}"), json={"password": "brand-new-password"}
        )
        self.assertEqual(res.status_code, 200, res.text)
        other = self.new_client()
        self.assertEqual(self.login("driver@example.com", PASSWORD, client=other).status_code, 401)
        self.assertEqual(
            self.login("driver@example.com", "brand-new-password", client=other).status_code, 200
        )

    def test_email_taken_by_other_user(self) -> None:
        self.login_admin()
        res = self.client.put(
            self.api(f"/users/{self.user_id}"), json={"email": "admin@example.com"}
        )
        self.assertEqual(res.status_code, 409)

    def test_malformed_email_rejected(self) -> None:
        self.login_admin()
        res = self.client.put(self.api(f"/users/{self.user_id}"), json={"email": "a@b@c"})
        self.assertEqual(res.status_code, 422)

    def test_unknown_user(self) -> None:
        self.login_admin()
        res = self.client.put(self.api("/users/9999"), json={"full_name": "Nobody"})
        self.assertEqual(res.status_code, 404)

    def test_revoked_flag_applies_to_existing_session(self) -> None:
        driver = self.new_client()
        self.login("driver@example.com", client=driver)
        self.assertEqual(driver.get(self.api("/vehicles")).status_code, 200)

        self.login_admin()
        self.client.put(self.api(f"/users/{self.user_id}"), json={"can_view_vehicles": False})

        self.assertEqual(driver.get(self.api("/vehicles")).status_code, 403)


class TestDeleteUser(UsersApiTestCase):
    def test_admin_cannot_delete_self(self) -> None:
        self.login_admin()
        res = self.client.delete(self.api(f"/users/{self.admin_id}"))
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json(), {"detail": "You cannot delete your own account."})
        self.assertEqual(self.client.get(self.api("/user")).status_code, 200)

    def test_delete_other_user_ends_their_session(self) -> None:
        driver = self.new_client()
        self.login("driver@example.com", client=driver)
        self.assertEqual(driver.get(self.api("/user")).status_code, 200)

        self.login_admin()
        res = self.client.delete(self.api(f"/users/{self.user_id}"))
        self.assertEqual(res.status_code, 200, res.text)

        self.assertEqual(driver.get(self.api("/user")).status_code, 401)
        emails = [u["email"] for u in self.client.get(self.api("/users")).json()]
        self.assertNotIn("driver@example.com", emails)

    def test_unknown_user(self) -> None:
        self.login_admin()
        self.assertEqual(self.client.delete(self.api("/users/9999")).status_code, 404)


if __name__ == "__main__":
    unittest.main()
