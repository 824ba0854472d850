"""Email-or-phone login identifier classification.

The rules are a deliberately loose heuristic shared with existing clients,
not strict validation: anything containing both "@" and "." is an email
(so "a@b." qualifies), and anything that reduces to 7-15 digits once
spaces, dashes, parentheses and plus signs are removed is a phone number.
"""

import re
from dataclasses import dataclass
from enum import Enum

_PHONE_SEPARATORS = re.compile(r"[\s\-\(\)\+]")
_PHONE_DIGITS = re.compile(r"^\d{7,15}$")
_NOT_PHONE_CHAR = re.compile(r"[^\d+]")


class IdentifierKind(str, Enum):
    EMAIL = "email"
    PHONE = "phone"
    UNKNOWN = "unknown"


def is_email(identifier: str | None) -> bool:
    if not identifier or not identifier.strip():
        return False
    return "@" in identifier and "." in identifier


def is_phone(identifier: str | None) -> bool:
    if not identifier or not identifier.strip():
        return False
    digits = _PHONE_SEPARATORS.sub("", identifier)
    return bool(_PHONE_DIGITS.match(digits))


def normalize_phone(phone: str | None) -> str:
    """Reduce a phone number to digits, keeping a single leading "+".

    >>> normalize_phone("+1 (555) 123-4567")
    '+15551234567'
    >>> normalize_phone("555+123+4567")
    '5551234567'
    """
    if not phone:
        return ""
    cleaned = _NOT_PHONE_CHAR.sub("", phone)
    if cleaned.startswith("+"):
        return "+" + cleaned[1:].replace("+", "")
    return cleaned.replace("+", "")


@dataclass(frozen=True)
class LoginIdentifier:
    """A classified login identifier with its lookup value."""

    kind: IdentifierKind
    value: str
    raw: str

    @classmethod
    def classify(cls, identifier: str) -> "LoginIdentifier":
        raw = identifier or ""
        if is_email(raw):
            return cls(IdentifierKind.EMAIL, raw.strip().lower(), raw)
        if is_phone(raw):
            return cls(IdentifierKind.PHONE, normalize_phone(raw), raw)
        return cls(IdentifierKind.UNKNOWN, raw.strip(), raw)

    @property
    def is_email(self) -> bool:
        return self.kind is IdentifierKind.EMAIL

    @property
    def is_phone(self) -> bool:
        return self.kind is IdentifierKind.PHONE
