"""User management router."""

import logging
from typing import Annotated

from fastapi import APIRouter, Query, status

from snapdi.domain.shared.exceptions import ForbiddenError
from snapdi.domain.shared.pagination import PageRequest
from snapdi.presentation.api.dependencies import (
    AdminAccount,
    CurrentAccount,
    PhotographerServiceDep,
    UserServiceDep,
    ensure_self_or_admin,
)
from snapdi.presentation.api.schemas import (
    ExistsResponse,
    PagedResponse,
    UpdateStatusRequest,
    UpdateUserRequest,
    UserFilterParams,
    UserResponse,
    UserWithPhotographerProfileResponse,
)
from snapdi_identity import UserFilter, UserRole, account_has_role
from snapdi_identity.application.services import UpdateAccount
from snapdi_identity.domain.account import InvalidRoleError

logger = logging.getLogger(__name__)

router = APIRouter()


def _parse_role(value: str | None) -> UserRole | None:
    if value is None or not value.strip():
        return None
    try:
        return UserRole.parse(value)
    except ValueError as e:
        raise InvalidRoleError(value) from e


@router.get(
    "",
    summary="List users with filters",
    responses={403: {"description": "Admin access required"}},
)
async def list_users(
    _admin: AdminAccount,
    user_service: UserServiceDep,
    params: Annotated[UserFilterParams, Query()],
) -> PagedResponse[UserResponse]:
    """
    Filter by search term (name or email), role, status, city and creation
    date. Sort by ``name``, ``email`` or ``created_at``; default order is id.
    """
    user_filter = UserFilter(
        search_term=params.search_term,
        role=_parse_role(params.role),
        is_active=params.is_active,
        is_verified=params.is_verified,
        location_city=params.location_city,
        created_from=params.created_from,
        created_to=params.created_to,
        sort_by=params.sort_by,
        sort_direction=params.sort_direction,
        page=PageRequest.create(params.page_number, params.page_size),
    )
    result = await user_service.list_users_filtered(user_filter)
    return PagedResponse[UserResponse].from_result(result, UserResponse.from_account)


@router.get("/check-email", summary="Check whether an email is registered")
async def check_email(email: str, user_service: UserServiceDep) -> ExistsResponse:
    return ExistsResponse(exists=await user_service.email_exists(email))


@router.get("/check-phone", summary="Check whether a phone number is registered")
async def check_phone(phone: str, user_service: UserServiceDep) -> ExistsResponse:
    return ExistsResponse(exists=await user_service.phone_exists(phone))


@router.get(
    "/{user_id}",
    summary="Get a user",
    responses={404: {"description": "User not found"}},
)
async def get_user(
    user_id: int,
    _account: CurrentAccount,
    user_service: UserServiceDep,
) -> UserResponse:
    return UserResponse.from_account(await user_service.get_user(user_id))


@router.get(
    "/{user_id}/photographer-profile",
    summary="Get a user together with their photographer profile",
    responses={404: {"description": "User not found"}},
)
async def get_user_with_photographer_profile(
    user_id: int,
    photographer_service: PhotographerServiceDep,
) -> UserWithPhotographerProfileResponse:
    result = await photographer_service.get_user_with_photographer_profile(user_id)
    return UserWithPhotographerProfileResponse.from_dto(result)


@router.put(
    "/{user_id}",
    summary="Update a user",
    responses={
        403: {"description": "Not your account, or role/status change by non-admin"},
        404: {"description": "User not found"},
        409: {"description": "Email or phone already registered"},
    },
)
async def update_user(
    user_id: int,
    request: UpdateUserRequest,
    current_account: CurrentAccount,
    user_service: UserServiceDep,
) -> UserResponse:
    """Update your own profile. Admins may update anyone, including role and status."""
    ensure_self_or_admin(current_account, user_id)

    is_admin = account_has_role(current_account, UserRole.ADMIN)
    if not is_admin and (request.role is not None or request.is_active is not None):
        msg = "Only administrators can change role or status"
        raise ForbiddenError(msg)

    account = await user_service.update_user(
        user_id,
        UpdateAccount(
            name=request.name,
            email=request.email,
            phone=request.phone,
            location_address=request.location_address,
            location_city=request.location_city,
            avatar_url=request.avatar_url,
            role=_parse_role(request.role),
            is_active=request.is_active,
        ),
    )
    return UserResponse.from_account(account)


@router.patch(
    "/{user_id}/status",
    summary="Activate or deactivate a user",
    responses={
        403: {"description": "Admin access required"},
        404: {"description": "User not found"},
    },
)
async def update_user_status(
    user_id: int,
    request: UpdateStatusRequest,
    _admin: AdminAccount,
    user_service: UserServiceDep,
) -> UserResponse:
    account = await user_service.update_status(user_id, request.is_active)
    return UserResponse.from_account(account)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a user",
    responses={
        403: {"description": "Admin access required"},
        404: {"description": "User not found"},
    },
)
async def delete_user(
    user_id: int,
    admin: AdminAccount,
    user_service: UserServiceDep,
) -> None:
    if admin.id == user_id:
        msg = "Administrators cannot delete their own account"
        raise ForbiddenError(msg)
    await user_service.delete_user(user_id)
    logger.info("User %s deleted by admin %s", user_id, admin.id)
