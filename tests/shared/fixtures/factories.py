"""
Test data factories for creating deterministic test entities.

Usage:
    from tests.shared.fixtures.factories import TestAccountFactory

    def test_something():
        account = TestAccountFactory.verified_customer()
"""

from dataclasses import dataclass
from functools import lru_cache

from snapdi_identity import Account, PasswordHashingService, UserRole

# Lowest work factor the hashing service accepts; keeps tests fast
TEST_BCRYPT_ROUNDS = 10


@lru_cache(maxsize=None)
def hashed(password: str) -> str:
    """bcrypt hash of ``password``, computed once per test session."""
    return PasswordHashingService(rounds=TEST_BCRYPT_ROUNDS).hash(password)


@dataclass(frozen=True)
class TestAccountFactory:
    """Factory for accounts with predictable emails and passwords."""

    __test__ = False  # Not a test class despite the name

    PASSWORD = "correct-horse-battery"

    CUSTOMER_EMAIL = "customer@example.com"
    CUSTOMER_PHONE = "+84912345678"

    PHOTOGRAPHER_EMAIL = "photographer@example.com"
    ADMIN_EMAIL = "admin@example.com"

    @classmethod
    def account(  # noqa: PLR0913
        cls,
        email: str = CUSTOMER_EMAIL,
        name: str = "Test Customer",
        role: UserRole = UserRole.CUSTOMER,
        phone: str | None = None,
        is_active: bool = True,
        is_verified: bool = True,
        password: str = PASSWORD,
        location_city: str | None = None,
    ) -> Account:
        """Build an unsaved account with a real password hash."""
        return Account(
            name=name,
            email=email,
            password_hash=hashed(password),
            role=role,
            phone=phone,
            is_active=is_active,
            is_verified=is_verified,
            location_city=location_city,
        )

    @classmethod
    def verified_customer(cls) -> Account:
        return cls.account(phone=cls.CUSTOMER_PHONE)

    @classmethod
    def unverified_customer(cls) -> Account:
        return cls.account(is_verified=False)

    @classmethod
    def photographer(cls) -> Account:
        return cls.account(
            email=cls.PHOTOGRAPHER_EMAIL,
            name="Test Photographer",
            role=UserRole.PHOTOGRAPHER,
        )

    @classmethod
    def admin(cls) -> Account:
        return cls.account(email=cls.ADMIN_EMAIL, name="Test Admin", role=UserRole.ADMIN)
