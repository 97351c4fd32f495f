"""Shared helpers for endpoint tests: the app bound to a throwaway in-memory SQLite database."""

import unittest
from functools import lru_cache

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from fleetdesk.core.config import settings
from fleetdesk.core.database import get_db
from fleetdesk.core.security import hash_password
from fleetdesk.main import app
from fleetdesk.models import Base, User

# Cheap bcrypt cost for test hashes; verification cost follows the stored hash.
settings.BCRYPT_ROUNDS = 4

PASSWORD = "correct-horse-battery"


@lru_cache
def password_hash() -> str:
    return hash_password(PASSWORD)


class ApiTestCase(unittest.TestCase):
    """Fresh schema and TestClient per test; get_db is overridden to the in-memory engine."""

    def setUp(self) -> None:
        self.engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(self.engine)
        self.session_factory = sessionmaker(bind=self.engine, autocommit=False, autoflush=False)

        def override_get_db():
            db = self.session_factory()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(app)

    def tearDown(self) -> None:
        self.client.close()
        app.dependency_overrides.clear()
        Base.metadata.drop_all(self.engine)
        self.engine.dispose()

    def new_client(self) -> TestClient:
        """A second browser with its own cookie jar."""
        client = TestClient(app)
        self.addCleanup(client.close)
        return client

    def add_user(
        self,
        email: str,
        role: str = "user",
        full_name: str | None = None,
        **flags: bool,
    ) -> int:
        """Insert a user with PASSWORD and return its id."""
        db = self.session_factory()
        try:
            user = User(
                email=email,
                password_hash=password_hash(),
                full_name=full_name or email.split("@")[0].title(),
                role=role,
                **flags,
            )
            db.add(user)
            db.commit()
            return user.id
        finally:
            db.close()

    def set_user_fields(self, user_id: int, **fields: object) -> None:
        """Edit a user row directly, bypassing the API."""
        db = self.session_factory()
        try:
            db.query(User).filter(User.id == user_id).update(fields)
            db.commit()
        finally:
            db.close()

    def login(self, email: str, password: str = PASSWORD, client: TestClient | None = None):
        return (client or self.client).post(
            f"{settings.API_PREFIX}/login",
            json={"email": email, "password": password},
        )

    def api(self, path: str) -> str:
        return f"{settings.API_PREFIX}{path}"
