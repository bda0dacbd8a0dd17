"""Identity use cases: register, login, guest login and storage resolution."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import pydantic
from sqlalchemy.orm import Session

from tenant_accounts.context import ServiceContext
from tenant_accounts.errors import (
    BadCredentials,
    DuplicateEmail,
    MissingFields,
    UnknownIdentity,
    ValidationError,
)
from tenant_accounts.schemas.auth import UserLogin, UserRegister
from tenant_accounts.services.credentials import CredentialStore
from tenant_accounts.services.provisioning import new_guest_name
from tenant_accounts.services.tokens import SessionClaims

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthResult:
    """Outcome of a successful registration or login."""

    email: str
    access_token: str


@dataclass(frozen=True)
class GuestSession:
    guest_name: str
    access_token: str


def _parse(model: type[pydantic.BaseModel], data: Any) -> Any:
    """Validate raw input against a schema, raising our ValidationError."""
    try:
        return model.model_validate(data)
    except pydantic.ValidationError as e:
        errors = e.errors(include_url=False, include_input=False, include_context=False)
        first = errors[0] if errors else {}
        field = ".".join(str(part) for part in first.get("loc", ())) or "input"
        raise ValidationError(f"{field}: {first.get('msg', 'invalid value')}", errors) from e


class IdentityService:
    """Composes the credential store, password hasher, provisioner and tokens."""

    def __init__(self, db: Session, context: ServiceContext):
        self.credentials = CredentialStore(db)
        self.passwords = context.passwords
        self.provisioner = context.provisioner
        self.tokens = context.tokens

    def register(self, data: Mapping[str, Any]) -> AuthResult:
        """Register a new user and provision their tenant storage.

        Raises:
            ValidationError: malformed input.
            DuplicateEmail: the email is already registered.
            StoreUnavailable, ProvisioningFailed: infrastructure failures.
        """
        request = _parse(UserRegister, data)

        # Fast path; the unique constraint still decides concurrent races
        if self.credentials.find_by_email(request.email) is not None:
            raise DuplicateEmail()

        password_hash = self.passwords.hash(request.password)
        storage_pointer = self.provisioner.provision(request.email)
        user = self.credentials.insert(
            firstname=request.firstname,
            lastname=request.lastname,
            email=request.email,
            password_hash=password_hash,
            storage_pointer=storage_pointer,
        )
        logger.info(f"Registered user {user.id}")

        token = self.tokens.issue(SessionClaims(tenant=user.email, storage_pointer=storage_pointer))
        return AuthResult(email=user.email, access_token=token)

    def login(self, data: Mapping[str, Any]) -> AuthResult:
        """Authenticate by email and password and issue a session token.

        Raises:
            MissingFields: email or password absent.
            ValidationError: the email is malformed.
            UnknownIdentity: no account for the email.
            BadCredentials: the password does not match.
        """
        if not isinstance(data, Mapping) or not data.get("email") or not data.get("password"):
            raise MissingFields()
        credentials = _parse(UserLogin, data)

        user = self.credentials.find_by_email(credentials.email)
        if user is None:
            self.passwords.dummy_verify(credentials.password)
            raise UnknownIdentity()
        if not self.passwords.verify(credentials.password, user.password_hash):
            logger.info(f"Failed login for user {user.id}")
            raise BadCredentials()

        token = self.tokens.issue(
            SessionClaims(tenant=user.email, storage_pointer=user.storage_pointer)
        )
        return AuthResult(email=user.email, access_token=token)

    def guest_login(self) -> GuestSession:
        """Create a throwaway guest tenant with its own storage."""
        guest_name = new_guest_name()
        storage_pointer = self.provisioner.provision(guest_name)
        token = self.tokens.issue(
            SessionClaims(tenant=guest_name, storage_pointer=storage_pointer, guest=True)
        )
        logger.info(f"Started guest session {guest_name}")
        return GuestSession(guest_name=guest_name, access_token=token)

    def resolve_storage(self, token: str) -> SessionClaims:
        """Validate a session token and return its claims, storage pointer included."""
        return self.tokens.validate(token)
