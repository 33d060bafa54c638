"""SMTP mail transport"""

import smtplib
import ssl
from email.message import EmailMessage
from typing import Protocol
from guarantee_quote.config import MailSettings
from guarantee_quote.domain.exceptions import MailTransportError


class MailTransport(Protocol):
    def send(self, message: EmailMessage) -> None:
        """Deliver a message. Raises MailTransportError on failure."""
        ...


class SmtpTransport:
    """Authenticated STARTTLS SMTP client, one connection per message"""

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        timeout: float = 30.0,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.timeout = timeout

    @classmethod
    def from_settings(cls, mail_settings: MailSettings) -> "SmtpTransport":
        return cls(
            host=mail_settings.smtp_host,
            port=mail_settings.smtp_port,
            username=mail_settings.email_user,
            password=mail_settings.email_pass,
            timeout=mail_settings.smtp_socket_timeout_seconds,
        )

    def send(self, message: EmailMessage) -> None:
        """
        Connect, upgrade to TLS, authenticate and send.

        Raises:
            MailTransportError: On connection, TLS, auth or delivery failures,
                including credentials SMTP cannot encode
        """
        context = ssl.create_default_context()
        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
                server.starttls(context=context)
                server.login(self.username, self.password)
                server.send_message(message)
        except (smtplib.SMTPException, OSError, ValueError) as e:
            raise MailTransportError(str(e) or e.__class__.__name__) from e
