"""Credential store backed by the central user registry."""

import logging

from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.orm import Session

from tenant_accounts.errors import DuplicateEmail, StoreUnavailable
from tenant_accounts.models.user import User

logger = logging.getLogger(__name__)


class CredentialStore:
    """Reads and writes registered-user records."""

    def __init__(self, db: Session):
        self.db = db

    def find_by_email(self, email: str) -> User | None:
        """Get a user by exact email match."""
        try:
            return self.db.query(User).filter(User.email == email).first()
        except DBAPIError as e:
            logger.error(f"Registry lookup failed: {e}")
            raise StoreUnavailable() from e

    def insert(
        self,
        firstname: str,
        lastname: str,
        email: str,
        password_hash: str,
        storage_pointer: str,
    ) -> User:
        """Insert a new user.

        Uniqueness is enforced by the ``users.email`` unique constraint, so of
        two concurrent inserts for one email exactly one commits.
        """
        user = User(
            firstname=firstname,
            lastname=lastname,
            email=email,
            password_hash=password_hash,
            storage_pointer=storage_pointer,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateEmail() from e
        except DBAPIError as e:
            self.db.rollback()
            logger.error(f"Registry insert failed: {e}")
            raise StoreUnavailable() from e
        self.db.refresh(user)
        return user

    def count(self) -> int:
        """Number of registered users."""
        try:
            return self.db.query(User).count()
        except DBAPIError as e:
            logger.error(f"Registry count failed: {e}")
            raise StoreUnavailable() from e
