"""Email dispatcher contract used by the identity services."""

from abc import ABC, abstractmethod


class EmailDispatcher(ABC):
    """Sends account emails.

    Every method reports delivery as a boolean and must not raise: callers
    treat a failed send as a soft failure and never retry.
    """

    @abstractmethod
    def send_verification(self, to_email: str, name: str, token: str) -> bool:
        """Send the email-address confirmation link carrying ``token``."""

    @abstractmethod
    def send_welcome(self, to_email: str, name: str) -> bool:
        """Send the welcome message after a successful verification."""

    @abstractmethod
    def send_password_reset(self, to_email: str, name: str, token: str) -> bool:
        """Send the password reset link carrying ``token``."""
