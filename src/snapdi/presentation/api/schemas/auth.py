"""Authentication schemas for request/response models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from snapdi.presentation.api.schemas.users import UserResponse


class RegisterRequest(BaseModel):
    """Request schema for account registration."""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr = Field(..., description="Account email address")
    password: str = Field(
        ...,
        min_length=8,
        max_length=128,
        description="Password (8-128 characters)",
    )
    phone: str | None = Field(default=None, max_length=20)
    role: str = Field(
        default="customer",
        description="customer or photographer",
    )
    location_address: str | None = None
    location_city: str | None = None
    avatar_url: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Jane Doe",
                "email": "jane@example.com",
                "password": "securepassword123",
                "phone": "+84 912 345 678",
                "role": "photographer",
            },
        },
    )


class LoginRequest(BaseModel):
    """Login with either an email address or a phone number."""

    email_or_phone: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email_or_phone": "jane@example.com",
                "password": "securepassword123",
            },
        },
    )


class RefreshRequest(BaseModel):
    refresh_token: str = Field(..., min_length=1)


class LogoutRequest(BaseModel):
    refresh_token: str | None = None


class TokenValidationRequest(BaseModel):
    token: str


class VerifyEmailRequest(BaseModel):
    token: str = Field(..., min_length=1)


class EmailRequest(BaseModel):
    """Request schema carrying only an email address."""

    email: EmailStr


class ChangePasswordRequest(BaseModel):
    """Request schema for changing the current account's password."""

    current_password: str
    new_password: str = Field(..., min_length=8, max_length=128)


class ResetPasswordRequest(BaseModel):
    """Request schema for resetting a password with a token."""

    token: str
    new_password: str = Field(..., min_length=8, max_length=128)


class LoginResponse(BaseModel):
    """Token pair plus the authenticated account."""

    access_token: str
    refresh_token: str
    token_type: str = Field(default="bearer")
    expires_in: int = Field(..., description="Access token lifetime in seconds")
    user: UserResponse


class TokenValidationResponse(BaseModel):
    valid: bool
    user_id: int | None = None
    email: str | None = None
    role: str | None = None
    expires_at: datetime | None = None
