"""User schemas for request/response models."""

from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from snapdi.application.dtos import PhotographerProfileDTO, UserWithPhotographerProfile
from snapdi_identity.domain.account import Account


class UserResponse(BaseModel):
    """Public view of an account (no credentials or token data)."""

    id: int
    name: str
    email: str
    phone: str | None = None
    role: str
    is_active: bool
    is_verified: bool
    location_address: str | None = None
    location_city: str | None = None
    avatar_url: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_account(cls, account: Account) -> "UserResponse":
        return cls(
            id=account.id,  # type: ignore[arg-type]
            name=account.name,
            email=account.email,
            phone=account.phone,
            role=account.role.value,
            is_active=account.is_active,
            is_verified=account.is_verified,
            location_address=account.location_address,
            location_city=account.location_city,
            avatar_url=account.avatar_url,
            created_at=account.created_at,
            updated_at=account.updated_at,
        )


class UpdateUserRequest(BaseModel):
    """Partial profile update. Role and status changes need an admin."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=20)
    location_address: str | None = None
    location_city: str | None = None
    avatar_url: str | None = None
    role: str | None = None
    is_active: bool | None = None


class UpdateStatusRequest(BaseModel):
    is_active: bool


class UserFilterParams(BaseModel):
    """Query parameters for the filtered user listing."""

    search_term: str | None = None
    role: str | None = None
    is_active: bool | None = None
    is_verified: bool | None = None
    location_city: str | None = None
    created_from: datetime | None = None
    created_to: datetime | None = None
    sort_by: str | None = None
    sort_direction: Literal["asc", "desc"] = "asc"
    page_number: int = 1
    page_size: int = 10


class ExistsResponse(BaseModel):
    exists: bool


class PhotographerProfileResponse(BaseModel):
    user_id: int
    years_of_experience: int | None = None
    avg_rating: Decimal | None = None
    is_available: bool
    description: str | None = None

    @classmethod
    def from_dto(cls, dto: PhotographerProfileDTO) -> "PhotographerProfileResponse":
        return cls(
            user_id=dto.user_id,
            years_of_experience=dto.years_of_experience,
            avg_rating=dto.avg_rating,
            is_available=dto.is_available,
            description=dto.description,
        )


class UserWithPhotographerProfileResponse(BaseModel):
    user: UserResponse
    photographer_profile: PhotographerProfileResponse | None = None

    @classmethod
    def from_dto(
        cls,
        dto: UserWithPhotographerProfile,
    ) -> "UserWithPhotographerProfileResponse":
        return cls(
            user=UserResponse.from_account(dto.account),
            photographer_profile=(
                PhotographerProfileResponse.from_dto(dto.profile)
                if dto.profile
                else None
            ),
        )
