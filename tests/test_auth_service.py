# =============================================================================
# tests/test_auth_service.py - Login Action Tests
# =============================================================================
# Tests for AuthService.authenticate error mapping:
# - Malformed input never reaches the provider
# - Provider credential errors and other provider errors map to fixed strings
# - Errors outside the provider taxonomy propagate
# =============================================================================

from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest
from supabase import AuthApiError, AuthInvalidCredentialsError

from core.models.auth import AuthSession
from core.services.auth_service import (
    INVALID_CREDENTIALS,
    INVALID_INPUT,
    SOMETHING_WENT_WRONG,
    AuthService,
    SupabaseCredentialsProvider,
    is_credentials_error,
)
from core.validation import PAYLOAD_TOO_LARGE_MESSAGE

EMAIL = "user@nextmail.com"
PASSWORD = "123456"


@pytest.fixture
def provider():
    """Fake credentials provider that signs everyone in."""
    fake = MagicMock()
    fake.sign_in.return_value = AuthSession(access_token="token-abc", user_id="user-1", email=EMAIL)
    return fake


@pytest.fixture
def service(provider):
    return AuthService(provider=provider, log=MagicMock(), max_payload_bytes=1024)


# =============================================================================
# Input Validation
# =============================================================================

class TestInputValidation:
    """Shape checks happen before the provider is contacted."""

    def test_empty_email(self, service, provider):
        result = service.authenticate({"email": "", "password": PASSWORD})

        assert result.message == INVALID_INPUT
        assert result.session is None
        provider.sign_in.assert_not_called()

    def test_short_password(self, service, provider):
        result = service.authenticate({"email": EMAIL, "password": "12345"})

        assert result.message == INVALID_INPUT
        provider.sign_in.assert_not_called()

    def test_missing_fields(self, service, provider):
        result = service.authenticate({})

        assert result.message == INVALID_INPUT
        provider.sign_in.assert_not_called()

    def test_oversized_payload(self, service, provider):
        result = service.authenticate({"email": EMAIL, "password": "x" * 2000})

        assert result.message == PAYLOAD_TOO_LARGE_MESSAGE
        assert result.session is None
        provider.sign_in.assert_not_called()

    def test_oversized_payload_wins_over_bad_shape(self, service, provider):
        result = service.authenticate({"email": "", "password": "x" * 2000})

        assert result.message == "Payload too large."


# =============================================================================
# Provider Outcomes
# =============================================================================

class TestProviderOutcomes:
    """Mapping of provider results to login results."""

    def test_success_returns_session(self, service, provider):
        result = service.authenticate({"email": EMAIL, "password": PASSWORD})

        assert result.ok
        assert result.message is None
        assert result.session.access_token == "token-abc"
        provider.sign_in.assert_called_once_with(EMAIL, PASSWORD)

    def test_wrong_password(self, service, provider):
        provider.sign_in.side_effect = AuthApiError(
            "Invalid login credentials", 400, "invalid_credentials"
        )

        result = service.authenticate({"email": EMAIL, "password": "wrong-password"})

        assert result.message == "Invalid credentials."
        assert not result.ok

    def test_other_provider_error(self, service, provider):
        provider.sign_in.side_effect = AuthApiError(
            "Email not confirmed", 400, "email_not_confirmed"
        )

        result = service.authenticate({"email": EMAIL, "password": PASSWORD})

        assert result.message == SOMETHING_WENT_WRONG

    def test_unclassified_error_propagates(self, service, provider):
        provider.sign_in.side_effect = RuntimeError("socket closed")

        with pytest.raises(RuntimeError, match="socket closed"):
            service.authenticate({"email": EMAIL, "password": PASSWORD})


# =============================================================================
# Credentials Error Classification
# =============================================================================

class TestIsCredentialsError:
    """Tests for is_credentials_error."""

    def test_invalid_credentials_code(self):
        assert is_credentials_error(AuthApiError("whatever", 400, "invalid_credentials"))

    def test_legacy_message_without_code(self):
        assert is_credentials_error(AuthApiError("Invalid login credentials", 400, None))

    def test_client_side_invalid_credentials(self):
        assert is_credentials_error(AuthInvalidCredentialsError("missing email or phone"))

    def test_other_api_error(self):
        assert not is_credentials_error(AuthApiError("User banned", 400, "user_banned"))

    def test_constants(self):
        assert INVALID_CREDENTIALS == "Invalid credentials."
        assert INVALID_INPUT == "Invalid input format."


# =============================================================================
# Supabase Provider
# =============================================================================

class TestSupabaseCredentialsProvider:
    """Tests for the Supabase-backed provider."""

    def test_sign_in_maps_session(self):
        response = SimpleNamespace(
            session=SimpleNamespace(access_token="jwt", refresh_token="refresh", expires_in=3600),
            user=SimpleNamespace(id="410544b2-4001-4271-9855-fec4b6a6442a", email=EMAIL),
        )

        with patch("core.services.auth_service.SupabaseClient") as mock_client:
            mock_client.sign_in_with_password.return_value = response
            session = SupabaseCredentialsProvider().sign_in(EMAIL, PASSWORD)

        mock_client.sign_in_with_password.assert_called_once_with(EMAIL, PASSWORD)
        assert session.access_token == "jwt"
        assert session.refresh_token == "refresh"
        assert session.expires_in == 3600
        assert session.email == EMAIL

    def test_sign_in_lets_provider_errors_through(self):
        with patch("core.services.auth_service.SupabaseClient") as mock_client:
            mock_client.sign_in_with_password.side_effect = AuthApiError(
                "Invalid login credentials", 400, "invalid_credentials"
            )
            with pytest.raises(AuthApiError):
                SupabaseCredentialsProvider().sign_in(EMAIL, "wrong-password")
