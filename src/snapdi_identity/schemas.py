"""Identity schemas and data structures.

These are simple data classes used for transferring identity
data between components.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from snapdi_identity.domain.account import Account


@dataclass(frozen=True)
class AccessTokenClaims:
    """Decoded access token payload.

    This represents the data extracted from a verified JWT access token.

    Attributes
    ----------
    account_id
        The unique identifier of the account (``sub`` claim)
    name
        Display name (``unique_name`` claim)
    email
        The account's email address
    role
        Role name as issued (``role`` claim)
    token_id
        Unique token id (``jti`` claim)
    issued_at
        Issue timestamp
    expires_at
        Expiration timestamp
    """

    account_id: int
    name: str
    email: str
    role: str
    token_id: str
    issued_at: datetime
    expires_at: datetime

    def is_expired(self) -> bool:
        """Check if the token has expired."""
        return datetime.now(tz=self.expires_at.tzinfo) > self.expires_at


@dataclass(frozen=True)
class LoginResult:
    """Outcome of a successful login or refresh.

    Attributes
    ----------
    access_token
        Signed, short-lived JWT
    refresh_token
        Raw opaque refresh token (only its hash is persisted)
    expires_in
        Access token lifetime in seconds
    account
        The authenticated account
    """

    access_token: str
    refresh_token: str
    expires_in: int
    account: "Account"
