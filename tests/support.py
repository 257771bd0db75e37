"""Shared helpers: an in-memory SQLite app client and user factories."""

import unittest
from unittest.mock import MagicMock

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from hrdesk.core.database import get_db
from hrdesk.core.security import hash_password
from hrdesk.main import app
from hrdesk.models import Base, User, UserRole, UserStatus
from hrdesk.services.notifications import get_recovery_notifier

API = "/api/v1"


class ApiTestCase(unittest.TestCase):
    """Runs the FastAPI app against a fresh in-memory database per test."""

    raise_server_exceptions = True

    def setUp(self) -> None:
        self.engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(self.engine)
        self.Session = sessionmaker(bind=self.engine, autocommit=False, autoflush=False)

        def override_get_db():
            db = self.Session()
            try:
                yield db
            finally:
                db.close()

        self.notifier = MagicMock()
        app.dependency_overrides[get_db] = override_get_db
        app.dependency_overrides[get_recovery_notifier] = lambda: self.notifier
        self.client = TestClient(app, raise_server_exceptions=self.raise_server_exceptions)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()
        self.engine.dispose()

    def add_user(
        self,
        username: str,
        password: str = "Secret123!",
        role: UserRole = UserRole.STANDARD,
        status: UserStatus = UserStatus.ACTIVE,
        display_name: str | None = None,
    ) -> None:
        """Insert a user directly, bypassing the register route."""
        with self.Session() as db:
            db.add(
                User(
                    username=username,
                    password_hash=hash_password(password),
                    display_name=display_name or username.title(),
                    role=role,
                    status=status,
                    access_count=0,
                )
            )
            db.commit()

    def get_user(self, username: str) -> User | None:
        with self.Session() as db:
            user = db.query(User).filter(User.username == username).first()
            if user is not None:
                db.expunge(user)
            return user

    def register(self, username: str, password: str, display_name: str, role: str):
        return self.client.post(
            f"{API}/auth/register",
            json={
                "username": username,
                "password": password,
                "display_name": display_name,
                "role": role,
            },
        )

    def login(self, username: str, password: str):
        return self.client.post(
            f"{API}/auth/login", json={"username": username, "password": password}
        )

    def token_for(self, username: str, password: str = "Secret123!") -> dict[str, str]:
        """Log in and return an Authorization header."""
        resp = self.login(username, password)
        self.assertEqual(resp.status_code, 200, resp.text)
        return {"Authorization": f"Bearer {resp.json()['access_token']}"}
