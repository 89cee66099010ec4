# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Login form handling and session helpers.
#
# POST /login verifies the email/password with Supabase Auth and stores the
# access token in an HTTP-only cookie, then redirects to the dashboard.
# =============================================================================

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, RedirectResponse

from app.auth.dependencies import get_current_user
from app.auth.models import AuthUser
from app.config import settings
from app.dependencies import AuthServiceDep, FormDep
from core.services.auth_service import INVALID_INPUT
from core.validation import PAYLOAD_TOO_LARGE_MESSAGE

router = APIRouter()


def _status_for(message: str | None) -> int:
    """HTTP status for a failed login."""
    if message == PAYLOAD_TOO_LARGE_MESSAGE:
        return status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
    if message == INVALID_INPUT:
        return status.HTTP_422_UNPROCESSABLE_ENTITY
    return status.HTTP_401_UNAUTHORIZED


@router.post("/login")
async def login(form: FormDep, service: AuthServiceDep):
    """
    Authenticate with form fields email and password.

    Returns:
        303 redirect to the dashboard with the session cookie set,
        413 for an oversized submission, 422 for malformed input,
        401 for rejected credentials

    Errors outside the provider's auth taxonomy are not caught here and
    surface as a 500.
    """
    result = service.authenticate(form)

    if not result.ok:
        return JSONResponse(
            status_code=_status_for(result.message),
            content={"message": result.message},
        )

    response = RedirectResponse(settings.DASHBOARD_ROUTE, status_code=status.HTTP_303_SEE_OTHER)
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=result.session.access_token,
        max_age=result.session.expires_in,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )
    return response


@router.post("/logout")
async def logout():
    """Drop the session cookie and send the user back to the login form."""
    response = RedirectResponse("/login", status_code=status.HTTP_303_SEE_OTHER)
    response.delete_cookie(settings.AUTH_COOKIE_NAME)
    return response


@router.get("/auth/verify")
async def verify_token(
    user: AuthUser = Depends(get_current_user)
) -> dict:
    """
    Verify that the current token is valid.

    Raises:
        401: If token is invalid or expired
    """
    return {
        "valid": True,
        "user_id": str(user.id),
        "email": user.email
    }
