"""Unit tests for JWTService."""

from datetime import timedelta

import jwt
import pytest

from snapdi_identity import InvalidTokenError, JWTService

SECRET = "test-secret-key-with-at-least-32-bytes!"
ISSUER = "snapdi"
AUDIENCE = "snapdi-clients"


def _service(**overrides) -> JWTService:
    params = {"secret_key": SECRET, "issuer": ISSUER, "audience": AUDIENCE}
    params.update(overrides)
    return JWTService(**params)


class TestJWTServiceInit:
    """Tests for JWTService initialization."""

    def test_init_with_valid_secret(self):
        """Service initializes with a 32-byte secret."""
        service = _service()
        assert service.access_token_lifetime == timedelta(hours=1)

    def test_init_with_empty_secret_raises(self):
        """Empty secret raises ValueError."""
        with pytest.raises(ValueError, match="cannot be empty"):
            _service(secret_key="")

    def test_init_with_short_secret_raises(self):
        """Secrets shorter than 32 bytes are rejected."""
        with pytest.raises(ValueError, match="at least 32 bytes"):
            _service(secret_key="too-short")

    def test_custom_access_lifetime(self):
        service = _service(access_token_expire_hours=3)
        assert service.access_token_lifetime == timedelta(hours=3)


class TestAccessTokens:
    """Tests for access token creation and verification."""

    def setup_method(self):
        """Set up test fixtures."""
        self.service = _service()

    def _issue(self, **overrides) -> str:
        params = {
            "subject_id": 42,
            "name": "Jane Doe",
            "email": "jane@example.com",
            "role": "photographer",
        }
        params.update(overrides)
        return self.service.issue_access_token(**params)

    def test_round_trip_claims(self):
        """Decoded claims carry the subject, identity and role."""
        claims = self.service.decode_access_token(self._issue())

        assert claims.account_id == 42
        assert claims.name == "Jane Doe"
        assert claims.email == "jane@example.com"
        assert claims.role == "photographer"
        assert claims.token_id
        assert claims.expires_at > claims.issued_at
        assert not claims.is_expired()

    def test_token_carries_issuer_and_audience(self):
        """The raw payload names the configured issuer and audience."""
        payload = jwt.decode(
            self._issue(),
            SECRET,
            algorithms=["HS256"],
            audience=AUDIENCE,
        )

        assert payload["iss"] == ISSUER
        assert payload["aud"] == AUDIENCE
        assert payload["sub"] == "42"

    def test_each_token_has_unique_id(self):
        first = self.service.decode_access_token(self._issue())
        second = self.service.decode_access_token(self._issue())

        assert first.token_id != second.token_id

    def test_expired_token_raises(self):
        """Expired token raises InvalidTokenError."""
        token = self._issue(expires_delta=timedelta(seconds=-1))

        with pytest.raises(InvalidTokenError, match="expired"):
            self.service.decode_access_token(token)

    def test_token_signed_with_other_secret_raises(self):
        other = _service(secret_key="another-secret-key-also-32-bytes-long")
        token = other.issue_access_token(1, "Eve", "eve@example.com", "admin")

        with pytest.raises(InvalidTokenError):
            self.service.decode_access_token(token)

    def test_wrong_audience_raises(self):
        other = _service(audience="someone-else")
        token = other.issue_access_token(1, "Eve", "eve@example.com", "admin")

        with pytest.raises(InvalidTokenError):
            self.service.decode_access_token(token)

    def test_wrong_issuer_raises(self):
        other = _service(issuer="not-snapdi")
        token = other.issue_access_token(1, "Eve", "eve@example.com", "admin")

        with pytest.raises(InvalidTokenError):
            self.service.decode_access_token(token)

    def test_garbage_raises(self):
        with pytest.raises(InvalidTokenError):
            self.service.decode_access_token("not.a.jwt")

    def test_validate_returns_none_for_invalid_input(self):
        """validate_access_token never raises."""
        assert self.service.validate_access_token(None) is None
        assert self.service.validate_access_token("") is None
        assert self.service.validate_access_token("garbage") is None

    def test_validate_returns_claims_for_valid_token(self):
        claims = self.service.validate_access_token(self._issue())

        assert claims is not None
        assert claims.account_id == 42


class TestRefreshTokens:
    """Refresh tokens are opaque random strings."""

    def test_refresh_tokens_are_unique(self):
        service = _service()
        tokens = {service.issue_refresh_token() for _ in range(50)}

        assert len(tokens) == 50

    def test_refresh_token_is_not_a_jwt(self):
        service = _service()
        token = service.issue_refresh_token()

        assert token.count(".") == 0
        assert len(token) >= 43  # 32 bytes, url-safe base64
