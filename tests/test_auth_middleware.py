"""Tests for bearer header parsing and the required/optional auth dependencies."""

import uuid
from unittest.mock import patch

import pytest

from bloghub.core.auth import authenticate, authenticate_optional, extract_bearer_token
from bloghub.core.config import Settings
from bloghub.core.errors import AuthenticationError, ConfigurationError
from bloghub.core.security import create_access_token


@pytest.fixture
def configured():
    return Settings(jwt_secret="secret")


@pytest.fixture
def unconfigured():
    return Settings(jwt_secret=None)


@pytest.fixture
def token():
    return create_access_token(uuid.UUID(int=42), "a@example.com", "secret")


class TestExtractBearerToken:
    def test_bearer_header(self):
        assert extract_bearer_token("Bearer abc.def.ghi") == "abc.def.ghi"

    @pytest.mark.parametrize("header", [None, "", "Bearer", "Basic abc", "bearer abc", "Token abc"])
    def test_missing_or_malformed(self, header):
        assert extract_bearer_token(header) is None

    def test_empty_bearer_token_is_kept(self):
        assert extract_bearer_token("Bearer ") == ""
        assert extract_bearer_token("Bearer    ") == ""


class TestAuthenticate:
    def test_valid_token(self, configured, token):
        identity = authenticate(f"Bearer {token}", configured)
        assert identity.user_id == uuid.UUID(int=42)
        assert identity.email == "a@example.com"

    def test_missing_header(self, configured):
        with pytest.raises(AuthenticationError) as exc_info:
            authenticate(None, configured)
        assert exc_info.value.message == "Missing or malformed Authorization header"

    def test_malformed_header(self, configured, token):
        with pytest.raises(AuthenticationError) as exc_info:
            authenticate(token, configured)
        assert exc_info.value.message == "Missing or malformed Authorization header"

    def test_invalid_token(self, configured):
        with pytest.raises(AuthenticationError) as exc_info:
            authenticate("Bearer nope", configured)
        assert exc_info.value.message == "Invalid or expired token"

    def test_empty_bearer_token_is_invalid(self, configured):
        with pytest.raises(AuthenticationError) as exc_info:
            authenticate("Bearer ", configured)
        assert exc_info.value.message == "Invalid or expired token"

    def test_header_checked_before_secret(self, unconfigured):
        with pytest.raises(AuthenticationError):
            authenticate(None, unconfigured)

    def test_missing_secret(self, unconfigured, token):
        with pytest.raises(ConfigurationError):
            authenticate(f"Bearer {token}", unconfigured)


class TestAuthenticateOptional:
    def test_valid_token(self, configured, token):
        identity = authenticate_optional(f"Bearer {token}", configured)
        assert identity is not None
        assert identity.user_id == uuid.UUID(int=42)

    @pytest.mark.parametrize("header", [None, "", "Basic abc", "Bearer ", "Bearer nope"])
    def test_failures_are_anonymous(self, configured, header):
        assert authenticate_optional(header, configured) is None

    def test_missing_secret_is_anonymous(self, unconfigured, token):
        with patch("bloghub.core.auth.logging") as mock_logging:
            assert authenticate_optional(f"Bearer {token}", unconfigured) is None
        mock_logging.warning.assert_called_once()
