"""User model."""

from sqlalchemy import Column, Integer, String

from tenant_accounts.database import Base
from tenant_accounts.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """Registered identity in the central registry."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    firstname = Column(String(255), nullable=False)
    lastname = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    storage_pointer = Column(String(512), nullable=False)
