"""JWT token service.

Issues signed access tokens and opaque refresh tokens, and validates
access tokens for authentication.
"""

import secrets
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import jwt

from snapdi_identity.exceptions import InvalidTokenError
from snapdi_identity.schemas import AccessTokenClaims


class JWTService:
    """Service for access token creation and verification.

    Access tokens are short-lived, stateless HS256 JWTs. Refresh tokens are
    opaque random strings that carry no claims; they are only meaningful
    when matched against the credential store.

    Examples
    --------
    >>> service = JWTService(secret_key="x" * 32, issuer="snapdi", audience="app")
    >>> token = service.issue_access_token(1, "Jane", "jane@example.com", "customer")
    >>> claims = service.validate_access_token(token)
    >>> claims.email
    'jane@example.com'
    """

    DEFAULT_ACCESS_EXPIRE_HOURS = 1
    MIN_SECRET_BYTES = 32
    REFRESH_TOKEN_BYTES = 32
    ALGORITHM = "HS256"

    def __init__(
        self,
        secret_key: str,
        issuer: str,
        audience: str,
        access_token_expire_hours: int = DEFAULT_ACCESS_EXPIRE_HOURS,
    ):
        """Initialize the JWT service.

        Parameters
        ----------
        secret_key
            Shared symmetric secret for signing tokens (at least 32 bytes).
        issuer
            Value written to and required in the ``iss`` claim.
        audience
            Value written to and required in the ``aud`` claim.
        access_token_expire_hours
            Hours until an access token expires (default 1)
        """
        if not secret_key:
            msg = "JWT secret key cannot be empty"
            raise ValueError(msg)
        if len(secret_key.encode("utf-8")) < self.MIN_SECRET_BYTES:
            msg = f"JWT secret key must be at least {self.MIN_SECRET_BYTES} bytes"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._issuer = issuer
        self._audience = audience
        self._access_expire = timedelta(hours=access_token_expire_hours)

    @property
    def access_token_lifetime(self) -> timedelta:
        return self._access_expire

    def issue_access_token(
        self,
        subject_id: int,
        name: str,
        email: str,
        role: str,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create a signed, short-lived access token.

        Parameters
        ----------
        subject_id
            The account's unique identifier
        name
            The account's display name
        email
            The account's email address
        role
            The account's role name
        expires_delta
            Custom expiration time (optional)

        Returns
        -------
        The encoded JWT token string
        """
        now = datetime.now(tz=timezone.utc)
        expire = now + (expires_delta or self._access_expire)

        payload = {
            "sub": str(subject_id),
            "unique_name": name,
            "email": email,
            "role": role,
            "jti": uuid4().hex,
            "iss": self._issuer,
            "aud": self._audience,
            "iat": now,
            "exp": expire,
        }

        return jwt.encode(payload, self._secret_key, algorithm=self.ALGORITHM)

    def issue_refresh_token(self) -> str:
        """Create an opaque refresh token with 256 bits of entropy."""
        return secrets.token_urlsafe(self.REFRESH_TOKEN_BYTES)

    def decode_access_token(self, token: str) -> AccessTokenClaims:
        """Verify and decode an access token.

        Parameters
        ----------
        token
            The JWT token string to verify

        Returns
        -------
        AccessTokenClaims containing the decoded data

        Raises
        ------
        InvalidTokenError
            If signature, issuer, audience or expiry check fails, or the
            token is malformed
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.ALGORITHM],
                audience=self._audience,
                issuer=self._issuer,
                options={"require": ["exp", "iat", "sub", "iss", "aud"]},
            )

            return AccessTokenClaims(
                account_id=int(payload["sub"]),
                name=payload.get("unique_name", ""),
                email=payload["email"],
                role=payload["role"],
                token_id=payload.get("jti", ""),
                issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
                expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            )

        except jwt.ExpiredSignatureError as e:
            raise InvalidTokenError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}") from e
        except (KeyError, ValueError, TypeError) as e:
            raise InvalidTokenError(f"Malformed token payload: {e}") from e

    def validate_access_token(self, token: str | None) -> AccessTokenClaims | None:
        """Return the decoded claims, or None for any invalid input."""
        if not token:
            return None
        try:
            return self.decode_access_token(token)
        except InvalidTokenError:
            return None
