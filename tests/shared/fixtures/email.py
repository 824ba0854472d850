"""In-memory email dispatcher that records what would have been sent."""

from dataclasses import dataclass, field

from snapdi_identity.infrastructure.email import EmailDispatcher


@dataclass
class SentEmail:
    kind: str
    to_email: str
    name: str
    token: str | None = None


@dataclass
class RecordingEmailDispatcher(EmailDispatcher):
    """Keeps every email in ``sent``.

    With ``fail=True`` each send is still recorded but reports failure, the
    way an SMTP outage looks to the services."""

    fail: bool = False
    sent: list[SentEmail] = field(default_factory=list)

    def send_verification(self, to_email: str, name: str, token: str) -> bool:
        return self._record(SentEmail("verification", to_email, name, token))

    def send_welcome(self, to_email: str, name: str) -> bool:
        return self._record(SentEmail("welcome", to_email, name))

    def send_password_reset(self, to_email: str, name: str, token: str) -> bool:
        return self._record(SentEmail("password_reset", to_email, name, token))

    def last_token(self, kind: str, to_email: str | None = None) -> str:
        """Token of the most recent email of ``kind`` (optionally to one address)."""
        for email in reversed(self.sent):
            if email.kind == kind and (to_email is None or email.to_email == to_email):
                assert email.token is not None
                return email.token
        msg = f"No {kind} email recorded"
        raise AssertionError(msg)

    def _record(self, email: SentEmail) -> bool:
        self.sent.append(email)
        return not self.fail
