"""Session token issuing and validation using signed JWTs."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import ExpiredSignatureError, JWTError, jwt

from tenant_accounts.errors import InvalidToken, TokenExpired

logger = logging.getLogger(__name__)

DEFAULT_TTL = timedelta(hours=1)


@dataclass(frozen=True)
class SessionClaims:
    """What a session token says about its bearer."""

    tenant: str
    storage_pointer: str
    guest: bool = False


class SessionTokens:
    """Issues and validates HMAC-signed, time-bounded session tokens.

    Tokens are self-contained: the server keeps no session table and there is
    no revocation. A token is valid from issuance until ``iat + ttl``.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", ttl: timedelta = DEFAULT_TTL):
        if not secret:
            raise ValueError("A signing secret is required")
        self.secret = secret
        self.algorithm = algorithm
        self.ttl = ttl

    def issue(self, claims: SessionClaims, ttl: timedelta | None = None) -> str:
        """Create a signed token embedding the claims and an expiry."""
        issued_at = datetime.now(UTC)
        expire = issued_at + (ttl if ttl is not None else self.ttl)
        to_encode = {
            "sub": claims.tenant,
            "storage": claims.storage_pointer,
            "guest": claims.guest,
            "iat": issued_at,
            "exp": expire,
        }
        return jwt.encode(to_encode, self.secret, algorithm=self.algorithm)

    def validate(self, token: str) -> SessionClaims:
        """Verify signature, then expiry, and return the embedded claims.

        Raises:
            InvalidToken: signature mismatch, malformed token or missing claims.
            TokenExpired: well-formed and correctly signed, but past its expiry.
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require_exp": True, "require_iat": True, "require_sub": True},
            )
        except ExpiredSignatureError as e:
            logger.info("Rejected expired session token")
            raise TokenExpired() from e
        except JWTError as e:
            logger.info(f"Rejected invalid session token: {e}")
            raise InvalidToken() from e

        tenant = payload.get("sub")
        storage_pointer = payload.get("storage")
        if not isinstance(tenant, str) or not isinstance(storage_pointer, str):
            logger.info("Rejected session token with missing claims")
            raise InvalidToken()

        return SessionClaims(
            tenant=tenant,
            storage_pointer=storage_pointer,
            guest=bool(payload.get("guest", False)),
        )
