"""
Pytest configuration for snapdi_identity tests.

Provides accounts in the common states and a recording email dispatcher.
"""

import pytest

from snapdi_identity import Account
from tests.shared.fixtures.email import RecordingEmailDispatcher
from tests.shared.fixtures.factories import TestAccountFactory


@pytest.fixture
def verified_customer() -> Account:
    return TestAccountFactory.verified_customer()


@pytest.fixture
def unverified_customer() -> Account:
    return TestAccountFactory.unverified_customer()


@pytest.fixture
def admin_account() -> Account:
    return TestAccountFactory.admin()


@pytest.fixture
def email_dispatcher() -> RecordingEmailDispatcher:
    return RecordingEmailDispatcher()
