"""Error taxonomy for the account service.

Every failure a use case can produce is one of these exceptions. Each carries
a machine-readable ``kind`` and the HTTP status the API layer answers with.
"""

from fastapi import status


class AccountServiceError(Exception):
    """Base class for all account service failures."""

    kind = "account_service_error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Account service error"

    # What callers outside the service see, when it must differ from kind/message
    public_kind: str | None = None
    public_message: str | None = None

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, str]:
        """Return the (kind, message) pair handed to callers."""
        return {
            "kind": self.public_kind or self.kind,
            "detail": self.public_message or self.message,
        }


class ValidationError(AccountServiceError):
    """Malformed input; the caller can fix it and retry."""

    kind = "validation_error"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"

    def __init__(self, message: str | None = None, errors: list[dict] | None = None):
        super().__init__(message)
        self.errors = errors or []


class MissingFields(ValidationError):
    """One or more required fields were absent."""

    kind = "missing_fields"
    default_message = "Email and password are required"


class DuplicateEmail(AccountServiceError):
    """An account with this email already exists."""

    kind = "duplicate_email"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Email already registered"


class AuthenticationFailed(AccountServiceError):
    """Caller could not be authenticated."""

    kind = "authentication_failed"
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication failed"


class CredentialsRejected(AuthenticationFailed):
    """Login failed. Unknown email and wrong password look the same to callers."""

    public_kind = "invalid_credentials"
    public_message = "Incorrect email or password"


class UnknownIdentity(CredentialsRejected):
    kind = "unknown_identity"
    default_message = "No account for this email"


class BadCredentials(CredentialsRejected):
    kind = "bad_credentials"
    default_message = "Password does not match"


class TokenRejected(AuthenticationFailed):
    """Session token unusable. Tampered and expired tokens look the same to callers."""

    public_kind = "invalid_token"
    public_message = "Invalid authentication credentials"


class InvalidToken(TokenRejected):
    kind = "invalid_token"
    default_message = "Token signature or structure is invalid"


class TokenExpired(TokenRejected):
    kind = "token_expired"
    default_message = "Token has expired"


class StoreUnavailable(AccountServiceError):
    """The central registry could not be reached."""

    kind = "store_unavailable"
    default_message = "User registry is unavailable"


class ProvisioningFailed(AccountServiceError):
    """Tenant storage could not be created or opened."""

    kind = "provisioning_failed"
    default_message = "Tenant storage could not be provisioned"
