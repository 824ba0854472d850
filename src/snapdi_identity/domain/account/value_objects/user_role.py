from enum import Enum


class UserRole(str, Enum):
    """Roles an account can hold on the platform."""

    CUSTOMER = "customer"
    PHOTOGRAPHER = "photographer"
    ADMIN = "admin"

    @classmethod
    def parse(cls, value: "str | UserRole") -> "UserRole":
        """Parse a role name case-insensitively ("ADMIN", "Admin", "admin").

        Raises
        ------
        ValueError
            If the name does not match any role
        """
        if isinstance(value, UserRole):
            return value
        normalized = value.strip().lower()
        for role in cls:
            if role.value == normalized:
                return role
        msg = f"Unknown role: {value}"
        raise ValueError(msg)
