"""Authentication router: registration, sessions, verification, passwords."""

import logging

from fastapi import APIRouter, HTTPException, Query, status

from snapdi.domain.shared.exceptions import ValidationError
from snapdi.presentation.api.dependencies import (
    AuthService,
    CurrentAccount,
    ResetService,
    UoW,
    UserServiceDep,
)
from snapdi.presentation.api.schemas import (
    ChangePasswordRequest,
    EmailRequest,
    LoginRequest,
    LoginResponse,
    LogoutRequest,
    MessageResponse,
    RefreshRequest,
    RegisterRequest,
    ResetPasswordRequest,
    TokenValidationRequest,
    TokenValidationResponse,
    UserResponse,
    VerifyEmailRequest,
)
from snapdi_identity import AccountNotFoundError, LoginResult, UserRole
from snapdi_identity.domain.account import InvalidRoleError

logger = logging.getLogger(__name__)

router = APIRouter()

# Roles a visitor may pick for themselves
SELF_SERVICE_ROLES = frozenset({UserRole.CUSTOMER, UserRole.PHOTOGRAPHER})

EMAIL_VERIFIED_MESSAGE = "Email verified successfully! You can now log in to your account."
VERIFICATION_SENT_MESSAGE = "Verification email sent. Please check your inbox."


def _login_response(result: LoginResult) -> LoginResponse:
    return LoginResponse(
        access_token=result.access_token,
        refresh_token=result.refresh_token,
        expires_in=result.expires_in,
        user=UserResponse.from_account(result.account),
    )


def _parse_self_service_role(value: str) -> UserRole:
    try:
        role = UserRole.parse(value)
    except ValueError as e:
        raise InvalidRoleError(value) from e
    if role not in SELF_SERVICE_ROLES:
        raise InvalidRoleError(value)
    return role


# -----------------------------------------------------------------------------
# Registration & Sessions
# -----------------------------------------------------------------------------


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    summary="Register a new account",
    responses={
        201: {"description": "Account created; verification email sent"},
        400: {"description": "Invalid input (weak password, unknown role)"},
        409: {"description": "Email or phone already registered"},
    },
)
async def register(request: RegisterRequest, auth_service: AuthService) -> UserResponse:
    """
    Create an account. The account can log in once its email is verified.
    """
    account = await auth_service.register(
        name=request.name,
        email=request.email,
        password=request.password,
        phone=request.phone,
        role=_parse_self_service_role(request.role),
        location_address=request.location_address,
        location_city=request.location_city,
        avatar_url=request.avatar_url,
    )
    return UserResponse.from_account(account)


@router.post(
    "/login",
    summary="Authenticate with email or phone",
    responses={
        200: {"description": "Login successful"},
        401: {"description": "Invalid credentials, inactive or unverified"},
    },
)
async def login(request: LoginRequest, auth_service: AuthService) -> LoginResponse:
    result = await auth_service.login(request.email_or_phone, request.password)
    return _login_response(result)


@router.post(
    "/refresh-token",
    summary="Rotate the refresh token",
    responses={
        200: {"description": "New token pair issued"},
        401: {"description": "Invalid, expired or already used refresh token"},
    },
)
async def refresh_token(
    request: RefreshRequest,
    auth_service: AuthService,
) -> LoginResponse:
    """
    Exchange a refresh token for a new access/refresh pair.

    The presented refresh token is unusable afterwards.
    """
    result = await auth_service.refresh(request.refresh_token)
    return _login_response(result)


@router.post("/logout", summary="End the current session")
async def logout(request: LogoutRequest, auth_service: AuthService) -> MessageResponse:
    await auth_service.logout(request.refresh_token)
    return MessageResponse(message="Logged out successfully")


@router.post("/validate-token", summary="Check an access token")
async def validate_token(
    request: TokenValidationRequest,
    auth_service: AuthService,
) -> TokenValidationResponse:
    claims = auth_service.validate_access_token(request.token)
    if claims is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid token",
        )
    return TokenValidationResponse(
        valid=True,
        user_id=claims.account_id,
        email=claims.email,
        role=claims.role,
        expires_at=claims.expires_at,
    )


@router.get("/me", summary="Get the current account")
async def get_me(current_account: CurrentAccount) -> UserResponse:
    return UserResponse.from_account(current_account)


# -----------------------------------------------------------------------------
# Email Verification
# -----------------------------------------------------------------------------


async def _verify(token: str, auth_service: AuthService) -> MessageResponse:
    if not token:
        msg = "Verification token is required"
        raise ValidationError(msg)
    if not await auth_service.verify_email(token):
        msg = "Invalid or expired verification token"
        raise ValidationError(msg)
    return MessageResponse(message=EMAIL_VERIFIED_MESSAGE)


@router.get(
    "/verify-email",
    summary="Verify an email address (link target)",
    responses={400: {"description": "Invalid or expired verification token"}},
)
async def verify_email_link(
    auth_service: AuthService,
    token: str = Query(default=""),
) -> MessageResponse:
    return await _verify(token, auth_service)


@router.post(
    "/verify-email",
    summary="Verify an email address",
    responses={400: {"description": "Invalid or expired verification token"}},
)
async def verify_email(
    request: VerifyEmailRequest,
    auth_service: AuthService,
) -> MessageResponse:
    return await _verify(request.token, auth_service)


async def _send_verification(
    email: str,
    auth_service: AuthService,
    user_service: UserServiceDep,
    uow: UoW,
) -> MessageResponse:
    account = await user_service.get_by_email(email)
    if account is None:
        raise AccountNotFoundError(email)
    if account.is_verified:
        msg = "Email is already verified"
        raise ValidationError(msg)

    if not await auth_service.send_email_verification(email):
        # The issued token is kept even though sending failed
        await uow.commit()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Failed to send verification email",
        )
    return MessageResponse(message=VERIFICATION_SENT_MESSAGE)


@router.post(
    "/send-verification",
    summary="Send a verification email",
    responses={
        400: {"description": "Already verified, or sending failed"},
        404: {"description": "No account with this email"},
    },
)
async def send_verification(
    request: EmailRequest,
    auth_service: AuthService,
    user_service: UserServiceDep,
    uow: UoW,
) -> MessageResponse:
    return await _send_verification(request.email, auth_service, user_service, uow)


@router.post(
    "/resend-verification",
    summary="Resend the verification email",
    responses={
        400: {"description": "Already verified, or sending failed"},
        404: {"description": "No account with this email"},
    },
)
async def resend_verification(
    request: EmailRequest,
    auth_service: AuthService,
    user_service: UserServiceDep,
    uow: UoW,
) -> MessageResponse:
    """Issue a fresh link; earlier links stop working."""
    return await _send_verification(request.email, auth_service, user_service, uow)


# -----------------------------------------------------------------------------
# Passwords
# -----------------------------------------------------------------------------


@router.post(
    "/change-password",
    summary="Change the current account's password",
    responses={
        400: {"description": "New password too weak"},
        401: {"description": "Current password incorrect"},
    },
)
async def change_password(
    request: ChangePasswordRequest,
    current_account: CurrentAccount,
    auth_service: AuthService,
) -> MessageResponse:
    await auth_service.change_password(
        account_id=current_account.id,  # type: ignore[arg-type]
        current_password=request.current_password,
        new_password=request.new_password,
    )
    return MessageResponse(message="Password changed successfully")


@router.post("/forgot-password", summary="Request a password reset email")
async def forgot_password(
    request: EmailRequest,
    reset_service: ResetService,
) -> MessageResponse:
    """
    Always answers the same way, whether or not the email is registered.
    """
    await reset_service.request_reset(request.email)
    return MessageResponse(
        message="If an account exists for this email, a reset link has been sent.",
    )


@router.post(
    "/reset-password",
    summary="Set a new password with a reset token",
    responses={400: {"description": "Invalid or expired reset token"}},
)
async def reset_password(
    request: ResetPasswordRequest,
    reset_service: ResetService,
) -> MessageResponse:
    await reset_service.reset_password(request.token, request.new_password)
    return MessageResponse(message="Password has been reset. Please log in again.")
