"""Email value object."""

from dataclasses import dataclass

from email_validator import EmailNotValidError, validate_email

from snapdi_identity.domain.account.exceptions import InvalidEmailError


@dataclass(frozen=True)
class Email:
    """A syntactically valid, lower-cased email address.

    Comparison is case-insensitive because the stored value is normalized.
    """

    value: str

    def __post_init__(self) -> None:
        raw = (self.value or "").strip()
        try:
            validated = validate_email(raw, check_deliverability=False)
        except EmailNotValidError as e:
            raise InvalidEmailError(str(e)) from e
        object.__setattr__(self, "value", validated.normalized.lower())

    def __str__(self) -> str:
        return self.value
