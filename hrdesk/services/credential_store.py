"""Credential store: persistence of user records behind the auth operations."""

import logging

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from hrdesk.core.errors import ConflictError, NotFoundError
from hrdesk.models.user import User, UserRole, UserStatus

logger = logging.getLogger(__name__)


class CredentialStore:
    """
    Single-record reads and writes against the users table.

    Every write commits on its own, so a failed call leaves nothing behind.
    Username uniqueness is enforced by the unique index, not by this class.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def find_by_username(self, username: str) -> User | None:
        return self.db.query(User).filter(User.username == username).first()

    def create(
        self,
        username: str,
        password_hash: str,
        display_name: str,
        role: UserRole,
    ) -> User:
        """Insert a new active user. Raises ConflictError if the username is taken."""
        user = User(
            username=username,
            password_hash=password_hash,
            display_name=display_name,
            role=role,
            status=UserStatus.ACTIVE,
            access_count=0,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.info("Duplicate username rejected by unique index", extra={"username": username})
            raise ConflictError("User already exists") from e
        self.db.refresh(user)
        return user

    def update_password_hash(self, username: str, new_hash: str) -> None:
        self._update_one(username, password_hash=new_hash)

    def increment_access_count(self, username: str) -> None:
        """Atomic access_count + 1 in a single UPDATE statement."""
        self._update_one(username, access_count=User.access_count + 1)

    def set_status(self, username: str, status: UserStatus) -> User:
        self._update_one(username, status=status)
        user = self.find_by_username(username)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def list_users(self) -> list[User]:
        return self.db.query(User).order_by(User.id).all()

    def _update_one(self, username: str, **values: object) -> None:
        try:
            result = self.db.execute(
                update(User)
                .where(User.username == username)
                .values(**values)
                .execution_options(synchronize_session="fetch")
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        if result.rowcount == 0:
            raise NotFoundError("User not found")
