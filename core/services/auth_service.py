# =============================================================================
# core/services/auth_service.py - Login Action
# =============================================================================
# Checks the shape of submitted credentials, then hands them to a
# credentials provider (Supabase Auth password sign-in).
#
# Error mapping:
# - oversized submission           -> "Payload too large." (provider not called)
# - bad shape                      -> "Invalid input format." (provider not called)
# - provider says bad credentials  -> "Invalid credentials."
# - any other provider auth error  -> "Something went wrong."
# - anything else                  -> propagates to the caller
# =============================================================================

import logging
from typing import Any, Mapping, Protocol

from supabase import AuthApiError, AuthError, AuthInvalidCredentialsError

from app.config import settings
from core.models.auth import AuthSession, LoginCredentials, LoginResult
from core.validation import validate_submission
from lib.monitoring import with_monitoring
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)

INVALID_INPUT = "Invalid input format."
INVALID_CREDENTIALS = "Invalid credentials."
SOMETHING_WENT_WRONG = "Something went wrong."

# Error codes GoTrue uses for a wrong email/password pair
CREDENTIALS_ERROR_CODES = {"invalid_credentials", "invalid_grant"}


class CredentialsProvider(Protocol):
    """Verifies an email/password pair and returns a session."""

    def sign_in(self, email: str, password: str) -> AuthSession: ...


class SupabaseCredentialsProvider:
    """CredentialsProvider backed by Supabase Auth."""

    def sign_in(self, email: str, password: str) -> AuthSession:
        response = SupabaseClient.sign_in_with_password(email, password)
        session = response.session
        user = response.user
        return AuthSession(
            access_token=session.access_token,
            refresh_token=session.refresh_token,
            expires_in=session.expires_in,
            user_id=str(user.id) if user else None,
            email=user.email if user else None,
        )


def is_credentials_error(error: AuthError) -> bool:
    """True if the provider rejected the email/password pair itself."""
    if isinstance(error, AuthInvalidCredentialsError):
        return True
    if isinstance(error, AuthApiError):
        code = getattr(error, "code", None)
        if code in CREDENTIALS_ERROR_CODES:
            return True
        return "invalid login credentials" in str(error.message).lower()
    return False


class AuthService:
    """
    Service for the login form.

    Example:
        result = AuthService().authenticate({"email": "user@nextmail.com", "password": "123456"})
        if result.ok:
            token = result.session.access_token
    """

    def __init__(
        self,
        provider: CredentialsProvider | None = None,
        log: logging.Logger | None = None,
        max_payload_bytes: int | None = None,
    ):
        self.provider = provider or SupabaseCredentialsProvider()
        self.log = log or logger
        self.max_payload_bytes = max_payload_bytes or settings.max_payload_size_bytes

    @with_monitoring("authenticate")
    def authenticate(self, form: Mapping[str, Any]) -> LoginResult:
        """
        Sign a user in with the submitted email and password.

        Args:
            form: Raw fields email, password

        Returns:
            LoginResult with a session on success, or a fixed message

        Raises:
            Exception: Anything the provider raises outside its AuthError taxonomy
        """
        result = validate_submission(LoginCredentials, form, self.max_payload_bytes)
        if not result.success:
            return LoginResult(message=result.message or INVALID_INPUT)

        credentials = result.data

        try:
            session = self.provider.sign_in(credentials.email, credentials.password)
        except AuthError as e:
            if is_credentials_error(e):
                self.log.info(f"Rejected credentials for {credentials.email}")
                return LoginResult(message=INVALID_CREDENTIALS)
            self.log.warning(f"Sign-in failed for {credentials.email}: {e}")
            return LoginResult(message=SOMETHING_WENT_WRONG)

        self.log.info(f"Signed in {credentials.email}")
        return LoginResult(session=session)
