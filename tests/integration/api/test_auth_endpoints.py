"""API tests for the authentication endpoints."""

import pytest

from tests.shared.fixtures.factories import TestAccountFactory

PASSWORD = TestAccountFactory.PASSWORD
NEW_PASSWORD = "a-much-better-secret"


def _register(client, prefix, **overrides):
    payload = {
        "name": "Jane Doe",
        "email": "jane@example.com",
        "password": PASSWORD,
        **overrides,
    }
    return client.post(f"{prefix}/auth/register", json=payload)


@pytest.mark.integration
class TestRegister:
    def test_register_returns_public_user(
        self,
        test_client,
        api_v1_prefix,
        email_dispatcher,
    ):
        response = _register(
            test_client,
            api_v1_prefix,
            phone="+84 912 345 678",
            role="photographer",
            location_city="Hanoi",
        )

        assert response.status_code == 201
        data = response.json()
        assert data["email"] == "jane@example.com"
        assert data["phone"] == "+84912345678"
        assert data["role"] == "photographer"
        assert data["is_active"] is True
        assert data["is_verified"] is False
        assert "password" not in data
        assert "password_hash" not in data
        assert [e.kind for e in email_dispatcher.sent] == ["verification"]

    def test_default_role_is_customer(self, test_client, api_v1_prefix):
        response = _register(test_client, api_v1_prefix)

        assert response.json()["role"] == "customer"

    def test_admin_role_cannot_be_self_assigned(self, test_client, api_v1_prefix):
        response = _register(test_client, api_v1_prefix, role="admin")

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_ROLE"

    def test_unknown_role(self, test_client, api_v1_prefix):
        response = _register(test_client, api_v1_prefix, role="wizard")

        assert response.status_code == 400

    def test_duplicate_email_ignores_case(self, test_client, api_v1_prefix):
        _register(test_client, api_v1_prefix)

        response = _register(test_client, api_v1_prefix, email="JANE@example.com")

        assert response.status_code == 409
        assert response.json()["code"] == "EMAIL_ALREADY_EXISTS"

    def test_duplicate_phone(self, test_client, api_v1_prefix):
        _register(test_client, api_v1_prefix, phone="+84912345678")

        response = _register(
            test_client,
            api_v1_prefix,
            email="other@example.com",
            phone="+84 912-345-678",
        )

        assert response.status_code == 409
        assert response.json()["code"] == "PHONE_ALREADY_EXISTS"

    def test_short_password_rejected(self, test_client, api_v1_prefix):
        response = _register(test_client, api_v1_prefix, password="short")

        assert response.status_code == 422

    def test_invalid_email_rejected(self, test_client, api_v1_prefix):
        response = _register(test_client, api_v1_prefix, email="not-an-email")

        assert response.status_code == 422


@pytest.mark.integration
class TestLogin:
    def test_unverified_account_cannot_log_in(
        self,
        test_client,
        api_v1_prefix,
    ):
        _register(test_client, api_v1_prefix)

        response = test_client.post(
            f"{api_v1_prefix}/auth/login",
            json={"email_or_phone": "jane@example.com", "password": PASSWORD},
        )

        assert response.status_code == 401
        assert response.json()["code"] == "EMAIL_NOT_VERIFIED"

    def test_login_returns_token_pair(self, customer):
        body = customer.body

        assert body["token_type"] == "bearer"
        assert body["expires_in"] == 3600
        assert body["user"]["email"] == "customer@example.com"
        assert body["user"]["is_verified"] is True
        assert body["access_token"] != body["refresh_token"]

    def test_login_with_phone(self, customer, login):
        body = login("+84 912 345 678")

        assert body["user"]["id"] == customer.id

    @pytest.mark.parametrize(
        ("identifier", "password"),
        [
            ("customer@example.com", "wrong-password"),
            ("nobody@example.com", PASSWORD),
            ("+84999999999", PASSWORD),
            ("not an identifier", PASSWORD),
        ],
    )
    def test_bad_credentials_look_the_same(
        self,
        test_client,
        api_v1_prefix,
        customer,
        identifier,
        password,
    ):
        response = test_client.post(
            f"{api_v1_prefix}/auth/login",
            json={"email_or_phone": identifier, "password": password},
        )

        assert response.status_code == 401
        assert response.json()["code"] == "INVALID_CREDENTIALS"
        assert response.headers["www-authenticate"] == "Bearer"


@pytest.mark.integration
class TestSession:
    def test_me(self, test_client, api_v1_prefix, customer):
        response = test_client.get(f"{api_v1_prefix}/auth/me", headers=customer.headers)

        assert response.status_code == 200
        assert response.json()["id"] == customer.id

    def test_me_requires_token(self, test_client, api_v1_prefix):
        response = test_client.get(f"{api_v1_prefix}/auth/me")

        assert response.status_code == 401
        assert response.json()["detail"] == "Authentication required"

    def test_me_rejects_garbage_token(self, test_client, api_v1_prefix):
        response = test_client.get(
            f"{api_v1_prefix}/auth/me",
            headers={"Authorization": "Bearer not.a.jwt"},
        )

        assert response.status_code == 401

    def test_refresh_rotates(self, test_client, api_v1_prefix, customer):
        first = test_client.post(
            f"{api_v1_prefix}/auth/refresh-token",
            json={"refresh_token": customer.refresh_token},
        )
        assert first.status_code == 200
        assert first.json()["refresh_token"] != customer.refresh_token

        replay = test_client.post(
            f"{api_v1_prefix}/auth/refresh-token",
            json={"refresh_token": customer.refresh_token},
        )
        assert replay.status_code == 401
        assert replay.json()["code"] == "INVALID_REFRESH_TOKEN"

    def test_logout_revokes_refresh_token(self, test_client, api_v1_prefix, customer):
        response = test_client.post(
            f"{api_v1_prefix}/auth/logout",
            json={"refresh_token": customer.refresh_token},
        )
        assert response.status_code == 200
        assert response.json()["message"] == "Logged out successfully"

        refresh = test_client.post(
            f"{api_v1_prefix}/auth/refresh-token",
            json={"refresh_token": customer.refresh_token},
        )
        assert refresh.status_code == 401

    def test_logout_with_unknown_token_succeeds(self, test_client, api_v1_prefix):
        response = test_client.post(
            f"{api_v1_prefix}/auth/logout",
            json={"refresh_token": "unknown"},
        )

        assert response.status_code == 200

    def test_validate_token(self, test_client, api_v1_prefix, photographer):
        response = test_client.post(
            f"{api_v1_prefix}/auth/validate-token",
            json={"token": photographer.access_token},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["valid"] is True
        assert data["user_id"] == photographer.id
        assert data["email"] == photographer.email
        assert data["role"] == "photographer"
        assert data["expires_at"] is not None

    def test_validate_invalid_token(self, test_client, api_v1_prefix):
        response = test_client.post(
            f"{api_v1_prefix}/auth/validate-token",
            json={"token": "garbage"},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid token"


@pytest.mark.integration
class TestEmailVerification:
    def test_verify_by_post(self, test_client, api_v1_prefix, email_dispatcher):
        _register(test_client, api_v1_prefix)
        token = email_dispatcher.last_token("verification")

        response = test_client.post(
            f"{api_v1_prefix}/auth/verify-email",
            json={"token": token},
        )

        assert response.status_code == 200
        assert response.json()["message"].startswith("Email verified successfully")
        assert email_dispatcher.sent[-1].kind == "welcome"

    def test_invalid_token(self, test_client, api_v1_prefix):
        response = test_client.get(
            f"{api_v1_prefix}/auth/verify-email",
            params={"token": "nope"},
        )

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_missing_token(self, test_client, api_v1_prefix):
        response = test_client.get(f"{api_v1_prefix}/auth/verify-email")

        assert response.status_code == 400

    def test_resend_replaces_token(self, test_client, api_v1_prefix, email_dispatcher):
        _register(test_client, api_v1_prefix)
        old_token = email_dispatcher.last_token("verification")

        response = test_client.post(
            f"{api_v1_prefix}/auth/resend-verification",
            json={"email": "jane@example.com"},
        )
        assert response.status_code == 200

        stale = test_client.get(
            f"{api_v1_prefix}/auth/verify-email",
            params={"token": old_token},
        )
        assert stale.status_code == 400

        fresh = test_client.get(
            f"{api_v1_prefix}/auth/verify-email",
            params={"token": email_dispatcher.last_token("verification")},
        )
        assert fresh.status_code == 200

    def test_send_to_unknown_email(self, test_client, api_v1_prefix):
        response = test_client.post(
            f"{api_v1_prefix}/auth/send-verification",
            json={"email": "ghost@example.com"},
        )

        assert response.status_code == 404

    def test_send_to_verified_account(self, test_client, api_v1_prefix, customer):
        response = test_client.post(
            f"{api_v1_prefix}/auth/send-verification",
            json={"email": customer.email},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Email is already verified"

    def test_failed_send_still_issues_token(
        self,
        test_client,
        api_v1_prefix,
        email_dispatcher,
    ):
        _register(test_client, api_v1_prefix)
        email_dispatcher.fail = True

        response = test_client.post(
            f"{api_v1_prefix}/auth/send-verification",
            json={"email": "jane@example.com"},
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Failed to send verification email"

        email_dispatcher.fail = False
        verified = test_client.get(
            f"{api_v1_prefix}/auth/verify-email",
            params={"token": email_dispatcher.last_token("verification")},
        )
        assert verified.status_code == 200


@pytest.mark.integration
class TestPasswords:
    def test_change_password(self, test_client, api_v1_prefix, customer, login):
        response = test_client.post(
            f"{api_v1_prefix}/auth/change-password",
            json={"current_password": PASSWORD, "new_password": NEW_PASSWORD},
            headers=customer.headers,
        )

        assert response.status_code == 200
        assert login(customer.email, NEW_PASSWORD)["user"]["id"] == customer.id

    def test_change_password_wrong_current(self, test_client, api_v1_prefix, customer):
        response = test_client.post(
            f"{api_v1_prefix}/auth/change-password",
            json={"current_password": "not-my-password", "new_password": NEW_PASSWORD},
            headers=customer.headers,
        )

        assert response.status_code == 401
        assert response.json()["code"] == "INVALID_CREDENTIALS"

    def test_forgot_password_does_not_reveal_accounts(
        self,
        test_client,
        api_v1_prefix,
        customer,
        email_dispatcher,
    ):
        known = test_client.post(
            f"{api_v1_prefix}/auth/forgot-password",
            json={"email": customer.email},
        )
        unknown = test_client.post(
            f"{api_v1_prefix}/auth/forgot-password",
            json={"email": "ghost@example.com"},
        )

        assert known.status_code == unknown.status_code == 200
        assert known.json() == unknown.json()
        resets = [e for e in email_dispatcher.sent if e.kind == "password_reset"]
        assert [e.to_email for e in resets] == [customer.email]

    def test_reset_password_flow(
        self,
        test_client,
        api_v1_prefix,
        customer,
        email_dispatcher,
        login,
    ):
        test_client.post(
            f"{api_v1_prefix}/auth/forgot-password",
            json={"email": customer.email},
        )
        token = email_dispatcher.last_token("password_reset", customer.email)

        response = test_client.post(
            f"{api_v1_prefix}/auth/reset-password",
            json={"token": token, "new_password": NEW_PASSWORD},
        )
        assert response.status_code == 200

        # The session that existed before the reset is gone
        refresh = test_client.post(
            f"{api_v1_prefix}/auth/refresh-token",
            json={"refresh_token": customer.refresh_token},
        )
        assert refresh.status_code == 401
        assert login(customer.email, NEW_PASSWORD)

        replay = test_client.post(
            f"{api_v1_prefix}/auth/reset-password",
            json={"token": token, "new_password": "yet-another-secret"},
        )
        assert replay.status_code == 400
        assert replay.json()["code"] == "INVALID_RESET_TOKEN"

    def test_reset_with_unknown_token(self, test_client, api_v1_prefix):
        response = test_client.post(
            f"{api_v1_prefix}/auth/reset-password",
            json={"token": "bogus", "new_password": NEW_PASSWORD},
        )

        assert response.status_code == 400
