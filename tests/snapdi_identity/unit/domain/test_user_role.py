"""Unit tests for UserRole and the authorization predicate."""

import pytest

from snapdi_identity import UserRole, account_has_role
from tests.shared.fixtures.factories import TestAccountFactory


class TestUserRoleParse:
    @pytest.mark.parametrize("value", ["admin", "ADMIN", "Admin", " admin "])
    def test_case_insensitive(self, value):
        assert UserRole.parse(value) is UserRole.ADMIN

    def test_passes_through_enum(self):
        assert UserRole.parse(UserRole.PHOTOGRAPHER) is UserRole.PHOTOGRAPHER

    def test_unknown_role_raises(self):
        with pytest.raises(ValueError, match="Unknown role"):
            UserRole.parse("superuser")

    def test_values_are_lowercase_names(self):
        assert [role.value for role in UserRole] == ["customer", "photographer", "admin"]


class TestAccountHasRole:
    """account_has_role is the single authorization predicate."""

    def test_admin_has_admin_role_in_any_spelling(self):
        admin = TestAccountFactory.admin()

        assert account_has_role(admin, UserRole.ADMIN)
        assert account_has_role(admin, "ADMIN")
        assert account_has_role(admin, "Admin")

    def test_customer_is_not_admin(self):
        customer = TestAccountFactory.verified_customer()

        assert not account_has_role(customer, UserRole.ADMIN)
        assert account_has_role(customer, UserRole.CUSTOMER)

    def test_inactive_account_holds_no_roles(self):
        admin = TestAccountFactory.admin()
        admin.deactivate()

        assert not account_has_role(admin, UserRole.ADMIN)

    def test_missing_account_or_unknown_role(self):
        assert not account_has_role(None, UserRole.ADMIN)
        assert not account_has_role(TestAccountFactory.admin(), "root")
