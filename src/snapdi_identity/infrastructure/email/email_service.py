import html
import logging
import smtplib
import ssl
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from urllib.parse import quote

from snapdi_config.settings import Settings
from snapdi_identity.infrastructure.email import templates
from snapdi_identity.infrastructure.email.dispatcher import EmailDispatcher

logger = logging.getLogger(__name__)

VERIFY_EMAIL_PATH = "/api/v1/auth/verify-email"
RESET_PASSWORD_PATH = "/reset-password"


class SmtpEmailDispatcher(EmailDispatcher):
    def __init__(self, settings: Settings):
        self._settings = settings

    def verification_link(self, token: str) -> str:
        base = self._settings.app_base_url.rstrip("/")
        return f"{base}{VERIFY_EMAIL_PATH}?token={quote(token)}"

    def reset_link(self, token: str) -> str:
        base = self._settings.frontend_base_url.rstrip("/")
        return f"{base}{RESET_PASSWORD_PATH}?token={quote(token)}"

    def send_verification(self, to_email: str, name: str, token: str) -> bool:
        link = self.verification_link(token)
        hours = self._settings.email_verification_token_expire_hours
        return self._deliver(
            to_email=to_email,
            subject=templates.VERIFICATION_SUBJECT,
            text_body=templates.VERIFICATION_TEXT.format(
                name=name,
                link=link,
                hours=hours,
            ),
            html_body=templates.VERIFICATION_HTML.format(
                name=html.escape(name),
                link=html.escape(link),
                hours=hours,
            ),
        )

    def send_welcome(self, to_email: str, name: str) -> bool:
        return self._deliver(
            to_email=to_email,
            subject=templates.WELCOME_SUBJECT,
            text_body=templates.WELCOME_TEXT.format(name=name),
            html_body=templates.WELCOME_HTML.format(name=html.escape(name)),
        )

    def send_password_reset(self, to_email: str, name: str, token: str) -> bool:
        link = self.reset_link(token)
        hours = self._settings.password_reset_token_expire_hours
        return self._deliver(
            to_email=to_email,
            subject=templates.PASSWORD_RESET_SUBJECT,
            text_body=templates.PASSWORD_RESET_TEXT.format(
                name=name,
                link=link,
                hours=hours,
            ),
            html_body=templates.PASSWORD_RESET_HTML.format(
                name=html.escape(name),
                link=html.escape(link),
                hours=hours,
            ),
        )

    def _deliver(
        self,
        to_email: str,
        subject: str,
        text_body: str,
        html_body: str | None,
    ) -> bool:
        if not self._settings.smtp_enabled:
            logger.warning("SMTP disabled, email '%s' not sent to %s", subject, to_email)
            return False

        message = self._create_message(
            to_email=to_email,
            subject=subject,
            text_body=text_body,
            html_body=html_body,
        )
        try:
            self._send_email(to_email, message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Failed to send email to %s: %s", to_email, e)
            return False
        return True

    def _create_message(
        self,
        to_email: str,
        subject: str,
        text_body: str,
        html_body: str | None = None,
    ) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = f"{self._settings.smtp_from_name} <{self._settings.smtp_from_email}>"
        msg["To"] = to_email

        msg.attach(MIMEText(text_body, "plain"))
        if html_body:
            msg.attach(MIMEText(html_body, "html"))

        return msg

    def _send_email(self, to_email: str, message: MIMEMultipart) -> None:
        if not self._settings.smtp_host:
            msg = "SMTP host not configured"
            raise smtplib.SMTPException(msg)

        smtp_password = (
            self._settings.smtp_password.get_secret_value()
            if self._settings.smtp_password
            else ""
        )
        timeout = self._settings.smtp_timeout_seconds

        if self._settings.smtp_use_tls and not self._settings.smtp_starttls:
            # Implicit TLS (port 465)
            context = ssl.create_default_context()
            with smtplib.SMTP_SSL(
                self._settings.smtp_host,
                self._settings.smtp_port,
                context=context,
                timeout=timeout,
            ) as server:
                if self._settings.smtp_user:
                    server.login(self._settings.smtp_user, smtp_password)
                server.send_message(message)
        else:
            # STARTTLS (port 587) or plain
            with smtplib.SMTP(
                self._settings.smtp_host,
                self._settings.smtp_port,
                timeout=timeout,
            ) as server:
                if self._settings.smtp_starttls:
                    context = ssl.create_default_context()
                    server.starttls(context=context)
                if self._settings.smtp_user:
                    server.login(self._settings.smtp_user, smtp_password)
                server.send_message(message)

        logger.info("Email sent to %s", to_email)
