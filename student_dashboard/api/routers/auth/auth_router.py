"""
Auth API endpoints.

Routes:
- POST /auth/login - Sign in with email and password
- POST /auth/register - Register a new account (email confirmation required)
- POST /auth/logout - Revoke the caller's session

Dependencies: student_dashboard.boundary.auth, student_dashboard.models.auth
System role: Authentication HTTP API
"""

import logging
from dataclasses import asdict

from fastapi import APIRouter, Depends

from student_dashboard.api.deps.dependencies import (
    get_auth_provider,
    get_bearer_token,
    get_settings_dependency,
    get_sign_in_provider,
)
from student_dashboard.api.routers.error_handling import domain_error_handler
from student_dashboard.boundary.auth import AuthProvider
from student_dashboard.configs import Settings
from student_dashboard.core.exceptions import AuthenticationRequiredError, RemoteError
from student_dashboard.models.auth import (
    LoginRequest,
    RegisterRequest,
    RegisterResponse,
    SessionResponse,
    UserResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

handle_auth_errors = domain_error_handler("auth")

REJECTED_CREDENTIAL_STATUSES = {400, 401}


@router.post("/login", response_model=SessionResponse)
@handle_auth_errors
async def login(
    request: LoginRequest,
    provider: AuthProvider = Depends(get_sign_in_provider),
    settings: Settings = Depends(get_settings_dependency),
) -> SessionResponse:
    """
    Sign in with email and password.

    Returns:
        SessionResponse: Tokens, user, and the route to continue to

    Raises:
        HTTPException(401): Credentials rejected
        HTTPException(502): Provider call failed
    """
    try:
        session = await provider.sign_in_with_password(request.email, request.password)
    except RemoteError as e:
        if e.details.get("status") not in REJECTED_CREDENTIAL_STATUSES:
            raise
        raise AuthenticationRequiredError(
            "Invalid email or password",
            redirect_to=settings.routes.login,
        ) from e
    return SessionResponse(
        access_token=session.access_token,
        refresh_token=session.refresh_token,
        expires_at=session.expires_at,
        user=UserResponse(**asdict(session.user)),
        redirect_to=settings.routes.home,
    )


@router.post("/register", response_model=RegisterResponse, status_code=201)
@handle_auth_errors
async def register(
    request: RegisterRequest,
    provider: AuthProvider = Depends(get_sign_in_provider),
    settings: Settings = Depends(get_settings_dependency),
) -> RegisterResponse:
    """
    Register a new account.

    The provider emails a confirmation link that returns to the dashboard home.
    """
    user = await provider.sign_up(request.email, request.password, full_name=request.full_name)

    logger.info("Registration submitted", extra={"user_id": user.id if user else None})

    return RegisterResponse(
        user=UserResponse(**asdict(user)) if user else None,
        message="Registration successful. Check your email to confirm your account.",
        email_redirect_to=settings.email_redirect_url,
    )


@router.post("/logout", status_code=204)
@handle_auth_errors
async def logout(
    token: str | None = Depends(get_bearer_token),
    provider: AuthProvider = Depends(get_auth_provider),
    settings: Settings = Depends(get_settings_dependency),
) -> None:
    """
    Revoke the caller's session.

    Raises:
        HTTPException(401): No bearer token supplied
    """
    if not token:
        raise AuthenticationRequiredError(
            "Authentication required",
            redirect_to=settings.routes.login,
        )
    await provider.sign_out(token)
