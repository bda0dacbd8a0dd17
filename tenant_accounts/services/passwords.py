"""Password hashing and verification."""

from passlib.context import CryptContext

# Compared against when the account does not exist, so that an unknown email
# costs the same bcrypt work as a wrong password.
_DUMMY_PASSWORD = "not-a-real-password-0"


class PasswordHasher:
    """Salted bcrypt hashing with a tunable work factor."""

    def __init__(self, rounds: int = 12):
        self.context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)
        self._dummy_hash = self.context.hash(_DUMMY_PASSWORD)

    def hash(self, password: str) -> str:
        """Hash a password. The salt is embedded in the returned digest."""
        return self.context.hash(password)

    def verify(self, password: str, hashed_password: str) -> bool:
        """Verify a password against its hash."""
        try:
            return self.context.verify(password, hashed_password)
        except (ValueError, TypeError):
            # Unrecognised or corrupt digest
            return False

    def dummy_verify(self, password: str) -> None:
        self.context.verify(password, self._dummy_hash)
