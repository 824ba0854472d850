"""Account aggregate: identity, credentials and one-time token slots."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Union

from snapdi.domain.shared.time import ensure_tz_aware, utc_now
from snapdi_identity.domain.account.value_objects import (
    Email,
    UserRole,
    normalize_phone,
)

# Logout moves the refresh expiry this far into the past.
REVOKED_TOKEN_BACKDATE = timedelta(days=1)


class Account:
    """
    Account aggregate root.

    Holds the credential store of a platform user. The session refresh token
    and the email verification token live in separate slots, each with its
    own expiry, so neither workflow can overwrite the other. Only token
    hashes are held here; raw tokens never reach persistence.
    """

    def __init__(  # noqa: PLR0913
        self,
        name: str,
        email: Union[str, Email],
        password_hash: str,
        role: Union[str, UserRole] = UserRole.CUSTOMER,
        phone: str | None = None,
        id: int | None = None,
        is_active: bool = True,
        is_verified: bool = False,
        location_address: str | None = None,
        location_city: str | None = None,
        avatar_url: str | None = None,
        refresh_token_hash: str | None = None,
        refresh_token_expires_at: datetime | None = None,
        email_verification_token_hash: str | None = None,
        email_verification_token_expires_at: datetime | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ):
        self._id = id
        self._name = name
        self._email = email if isinstance(email, Email) else Email(email)
        self._phone = normalize_phone(phone) or None
        self._password_hash = password_hash
        self._role = UserRole.parse(role)
        self._is_active = is_active
        self._is_verified = is_verified
        self._location_address = location_address
        self._location_city = location_city
        self._avatar_url = avatar_url
        self._refresh_token_hash = refresh_token_hash
        self._refresh_token_expires_at = refresh_token_expires_at
        self._email_verification_token_hash = email_verification_token_hash
        self._email_verification_token_expires_at = (
            email_verification_token_expires_at
        )
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or self._created_at

    @property
    def id(self) -> int | None:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def email(self) -> str:
        return self._email.value

    @property
    def phone(self) -> str | None:
        return self._phone

    @property
    def password_hash(self) -> str:
        return self._password_hash

    @property
    def role(self) -> UserRole:
        return self._role

    @property
    def is_admin(self) -> bool:
        return self._role == UserRole.ADMIN

    @property
    def is_active(self) -> bool:
        return self._is_active

    @property
    def is_verified(self) -> bool:
        return self._is_verified

    @property
    def location_address(self) -> str | None:
        return self._location_address

    @property
    def location_city(self) -> str | None:
        return self._location_city

    @property
    def avatar_url(self) -> str | None:
        return self._avatar_url

    @property
    def refresh_token_hash(self) -> str | None:
        return self._refresh_token_hash

    @property
    def refresh_token_expires_at(self) -> datetime | None:
        return self._refresh_token_expires_at

    @property
    def email_verification_token_hash(self) -> str | None:
        return self._email_verification_token_hash

    @property
    def email_verification_token_expires_at(self) -> datetime | None:
        return self._email_verification_token_expires_at

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def assign_id(self, account_id: int) -> None:
        """Set the database-generated identity after the first insert."""
        self._id = account_id

    def has_active_refresh_token(self, now: datetime | None = None) -> bool:
        if not self._refresh_token_hash or self._refresh_token_expires_at is None:
            return False
        now = now or utc_now()
        return now <= ensure_tz_aware(self._refresh_token_expires_at)

    def start_session(self, refresh_token_hash: str, expires_at: datetime) -> None:
        """Store a new refresh token, replacing any previous one."""
        self._refresh_token_hash = refresh_token_hash
        self._refresh_token_expires_at = expires_at
        self._touch()

    def end_session(self, now: datetime | None = None) -> None:
        """Clear the refresh token and move its expiry into the past."""
        now = now or utc_now()
        self._refresh_token_hash = ""
        self._refresh_token_expires_at = now - REVOKED_TOKEN_BACKDATE
        self._touch()

    def issue_email_verification(self, token_hash: str, expires_at: datetime) -> None:
        self._email_verification_token_hash = token_hash
        self._email_verification_token_expires_at = expires_at
        self._touch()

    def mark_email_verified(self) -> None:
        """Flip the account to verified and discard the verification token."""
        self._is_verified = True
        self._email_verification_token_hash = None
        self._email_verification_token_expires_at = None
        self._touch()

    def change_password_hash(self, password_hash: str) -> None:
        self._password_hash = password_hash
        self._touch()

    def activate(self) -> None:
        self._is_active = True
        self._touch()

    def deactivate(self) -> None:
        self._is_active = False
        self._touch()

    def change_role(self, role: Union[str, UserRole]) -> None:
        self._role = UserRole.parse(role)
        self._touch()

    def update_profile(  # noqa: PLR0913
        self,
        name: str | None = None,
        email: Union[str, Email, None] = None,
        phone: str | None = None,
        location_address: str | None = None,
        location_city: str | None = None,
        avatar_url: str | None = None,
    ) -> None:
        """Apply a partial profile update; ``None`` leaves a field unchanged."""
        if name is not None:
            self._name = name
        if email is not None:
            self._email = email if isinstance(email, Email) else Email(email)
        if phone is not None:
            self._phone = normalize_phone(phone) or None
        if location_address is not None:
            self._location_address = location_address
        if location_city is not None:
            self._location_city = location_city
        if avatar_url is not None:
            self._avatar_url = avatar_url
        self._touch()

    def _touch(self) -> None:
        self._updated_at = utc_now()

    @classmethod
    def create(  # noqa: PLR0913
        cls,
        name: str,
        email: Union[str, Email],
        password_hash: str,
        role: Union[str, UserRole] = UserRole.CUSTOMER,
        phone: str | None = None,
        location_address: str | None = None,
        location_city: str | None = None,
        avatar_url: str | None = None,
    ) -> Account:
        """Create a new, active and not yet verified account."""
        return cls(
            name=name,
            email=email,
            password_hash=password_hash,
            role=role,
            phone=phone,
            is_active=True,
            is_verified=False,
            location_address=location_address,
            location_city=location_city,
            avatar_url=avatar_url,
        )

    @classmethod
    def reconstitute(cls, **fields) -> Account:
        """Rebuild an account from persisted state."""
        return cls(**fields)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Account):
            return NotImplemented
        if self._id is None or other._id is None:
            return self is other
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id) if self._id is not None else id(self)

    def __repr__(self) -> str:
        return f"Account(id={self._id}, email={self._email.value})"


def account_has_role(account: Account | None, required_role: Union[str, UserRole]) -> bool:
    """Central authorization predicate.

    Role names are compared case-insensitively, so legacy spellings such as
    "ADMIN" and "Admin" both resolve to UserRole.ADMIN. Inactive accounts
    hold no roles.
    """
    if account is None or not account.is_active:
        return False
    try:
        role = UserRole.parse(required_role)
    except ValueError:
        return False
    return account.role == role
