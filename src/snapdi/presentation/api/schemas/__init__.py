"""Pydantic request and response models for the API."""

from snapdi.presentation.api.schemas.auth import (
    ChangePasswordRequest,
    EmailRequest,
    LoginRequest,
    LoginResponse,
    LogoutRequest,
    RefreshRequest,
    RegisterRequest,
    ResetPasswordRequest,
    TokenValidationRequest,
    TokenValidationResponse,
    VerifyEmailRequest,
)
from snapdi.presentation.api.schemas.blogs import (
    BlogResponse,
    CreateBlogRequest,
    KeywordIdsRequest,
    KeywordNamesRequest,
    UpdateBlogRequest,
)
from snapdi.presentation.api.schemas.common import (
    AssociationResponse,
    ErrorResponse,
    HealthResponse,
    MessageResponse,
    PagedResponse,
)
from snapdi.presentation.api.schemas.keywords import (
    CreateKeywordRequest,
    KeywordResponse,
    UpdateKeywordRequest,
)
from snapdi.presentation.api.schemas.users import (
    ExistsResponse,
    PhotographerProfileResponse,
    UpdateStatusRequest,
    UpdateUserRequest,
    UserFilterParams,
    UserResponse,
    UserWithPhotographerProfileResponse,
)

__all__ = [
    "AssociationResponse",
    "BlogResponse",
    "ChangePasswordRequest",
    "CreateBlogRequest",
    "CreateKeywordRequest",
    "EmailRequest",
    "ErrorResponse",
    "ExistsResponse",
    "HealthResponse",
    "KeywordIdsRequest",
    "KeywordNamesRequest",
    "KeywordResponse",
    "LoginRequest",
    "LoginResponse",
    "LogoutRequest",
    "MessageResponse",
    "PagedResponse",
    "PhotographerProfileResponse",
    "RefreshRequest",
    "RegisterRequest",
    "ResetPasswordRequest",
    "TokenValidationRequest",
    "TokenValidationResponse",
    "UpdateBlogRequest",
    "UpdateKeywordRequest",
    "UpdateStatusRequest",
    "UpdateUserRequest",
    "UserFilterParams",
    "UserResponse",
    "UserWithPhotographerProfileResponse",
    "VerifyEmailRequest",
]
