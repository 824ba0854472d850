from snapdi_identity.infrastructure.email.dispatcher import EmailDispatcher
from snapdi_identity.infrastructure.email.email_service import SmtpEmailDispatcher

__all__ = ["EmailDispatcher", "SmtpEmailDispatcher"]
