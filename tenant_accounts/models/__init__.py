"""SQLAlchemy models."""

from tenant_accounts.models.tenant import Transaction
from tenant_accounts.models.user import User

__all__ = [
    "User",
    "Transaction",
]
