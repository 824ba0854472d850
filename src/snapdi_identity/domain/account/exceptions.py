"""Validation and rule violations raised by the account aggregate."""

from snapdi.domain.shared.exceptions import (
    ConflictError,
    EntityNotFoundError,
    ErrorCode,
    ValidationError,
)


class InvalidEmailError(ValidationError):
    default_code = ErrorCode.INVALID_EMAIL


class InvalidRoleError(ValidationError):
    """Role name outside the known set, or not allowed in this context."""

    default_code = ErrorCode.INVALID_ROLE

    def __init__(self, role: str) -> None:
        self.role = role
        super().__init__(f"Unknown role: {role}")


class EmailAlreadyExistsError(ConflictError):
    default_code = ErrorCode.EMAIL_ALREADY_EXISTS

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(f"Email already registered: {email}")


class PhoneAlreadyExistsError(ConflictError):
    default_code = ErrorCode.PHONE_ALREADY_EXISTS

    def __init__(self, phone: str) -> None:
        self.phone = phone
        super().__init__(f"Phone number already registered: {phone}")


class AccountNotFoundError(EntityNotFoundError):
    default_code = ErrorCode.USER_NOT_FOUND

    def __init__(self, account_id: int | str) -> None:
        self.account_id = account_id
        super().__init__(f"User not found: {account_id}")
