"""Quote email dispatch with a hard delivery deadline"""

import logging
import time
from concurrent.futures import Future, ThreadPoolExecutor, wait
from email.message import EmailMessage
from email.utils import formataddr, parseaddr
from typing import Callable, Optional, Tuple

from email_validator import validate_email, EmailNotValidError
from pydantic import ValidationError

from guarantee_quote.config import MailSettings, get_mail_settings, settings
from guarantee_quote.domain.exceptions import (
    AddressValidationError,
    MailConfigurationError,
    MailDispatchTimeout,
    MailTransportError,
    NotificationValidationError,
)
from guarantee_quote.domain.models import ContactDetails, DeliveryOutcome, DeliveryStatus
from guarantee_quote.infrastructure.mail.transport import MailTransport, SmtpTransport
from guarantee_quote.infrastructure.observability.metrics import record_dispatch, email_dispatch_latency_histogram
from guarantee_quote.utils.numbers import parse_int

SENDER_DISPLAY_NAME = "Guarantee Quotes"
QUOTE_SUBJECT = "Guarantee Quote"

# Shared by all dispatchers; sends abandoned after a timeout keep their worker
# until the SMTP socket timeout releases it.
_executor = ThreadPoolExecutor(max_workers=8, thread_name_prefix="mail-dispatch")


def parse_address(label: str, raw: str) -> str:
    """
    Validate a mailbox ("user@host" or "Name <user@host>") and return its address.

    Raises:
        AddressValidationError: Empty value or invalid mailbox syntax
    """
    value = (raw or "").strip()
    if not value:
        raise AddressValidationError(f"{label} is empty")

    _, address = parseaddr(value)
    if not address:
        raise AddressValidationError(f"{label} is invalid (no mailbox found)")

    try:
        validate_email(address, check_deliverability=False)
    except EmailNotValidError as e:
        raise AddressValidationError(f"{label} is invalid ({e})") from e
    return address


def validate_mail_settings(mail_settings: MailSettings) -> Tuple[str, str]:
    """
    Check transport configuration in the order an operator should fix it.

    Returns:
        (sender, admin) addresses
    """
    try:
        sender = parse_address("EMAIL_FROM", mail_settings.email_from)
    except AddressValidationError as e:
        raise MailConfigurationError(f"Set EMAIL_FROM to a valid sender address. {e}") from e

    if not mail_settings.email_user:
        raise MailConfigurationError("Set EMAIL_USER to the SMTP login user.")
    if not mail_settings.email_pass:
        raise MailConfigurationError("Set EMAIL_PASS to the SMTP app password.")

    try:
        admin = parse_address("EMAIL_ADMIN", mail_settings.email_admin)
    except AddressValidationError as e:
        raise MailConfigurationError(f"Set EMAIL_ADMIN to a valid address. {e}") from e

    return sender, admin


def build_quote_message(
    sender: str,
    recipient: str,
    admin: str,
    cost: int,
    plan: str,
    contact: ContactDetails,
) -> EmailMessage:
    """Plain-text quote summary addressed to the prospect with the admin as second recipient"""
    body = (
        f"Client: {contact.name} {contact.surname}\n"
        f"Phone: {contact.phone}\n"
        f"Email: {recipient}\n"
        f"\n"
        f"Quote: total cost ${cost}. Selected plan: {plan}."
    )

    message = EmailMessage()
    message["From"] = formataddr((SENDER_DISPLAY_NAME, sender))
    message["To"] = ", ".join([recipient, admin])
    message["Subject"] = QUOTE_SUBJECT
    message.set_content(body)
    return message


def is_empty_submission(cost: str, plan: str, contact: ContactDetails) -> bool:
    """True when every submitted field is blank (typically a duplicate front-end request)"""
    fields = [contact.email, cost, plan, contact.name, contact.surname, contact.phone]
    return all(not (field or "").strip() for field in fields)


def _log_abandoned_send(future: Future) -> None:
    """Report how a send that already timed out for its caller eventually ended"""
    error = future.exception()
    if error is None:
        logging.warning("Abandoned email send completed after deadline")
    else:
        logging.warning(f"Abandoned email send failed after deadline: {error}")


class NotificationDispatcher:
    """Validates and sends finalized quotes to the prospect and the admin"""

    def __init__(
        self,
        timeout: float | None = None,
        settings_provider: Callable[[], MailSettings] = get_mail_settings,
        transport_factory: Callable[[MailSettings], MailTransport] = SmtpTransport.from_settings,
        executor: Optional[ThreadPoolExecutor] = None,
    ):
        self.timeout = timeout if timeout is not None else settings.email_send_timeout_seconds
        self.settings_provider = settings_provider
        self.transport_factory = transport_factory
        self.executor = executor or _executor

    def send(self, cost: str, plan: str, contact: ContactDetails) -> DeliveryOutcome:
        """
        Email a quote.

        Flow:
        1. Skip empty submissions without touching the transport
        2. Validate configuration (read fresh each call) and the recipient
        3. Send with a hard deadline; a timeout returns immediately and
           leaves the in-flight send running in the background

        Never raises; every failure is reported as a DeliveryOutcome.
        """
        if is_empty_submission(cost, plan, contact):
            logging.info("Empty form submission detected, skipping")
            outcome = DeliveryOutcome(status=DeliveryStatus.SKIPPED)
            record_dispatch(outcome.status)
            return outcome

        contact = ContactDetails(
            email=(contact.email or "").strip(),
            name=(contact.name or "").strip(),
            surname=(contact.surname or "").strip(),
            phone=(contact.phone or "").strip(),
        )
        email = contact.email
        plan = (plan or "").strip()
        logging.info("Processing quote email", extra={"recipient": email, "plan": plan, "cost": cost})

        try:
            mail_settings = self._load_settings()
            sender, admin = validate_mail_settings(mail_settings)
            try:
                recipient = parse_address("email (recipient)", email)
            except AddressValidationError as e:
                raise AddressValidationError(f"The client email is invalid. {e}") from e
        except NotificationValidationError as e:
            logging.warning(f"Quote email validation failed: {e}")
            outcome = DeliveryOutcome(status=DeliveryStatus.VALIDATION_ERROR, email=email, error=str(e))
            record_dispatch(outcome.status)
            return outcome

        message = build_quote_message(sender, recipient, admin, parse_int(cost), plan, contact)

        start_time = time.time()
        try:
            self._dispatch(self.transport_factory(mail_settings), message)
            logging.info("Email sent successfully", extra={"recipient": recipient})
            outcome = DeliveryOutcome(status=DeliveryStatus.SENT, email=email)
        except MailDispatchTimeout as e:
            logging.error(f"Email send timeout: {e}", extra={"recipient": recipient})
            outcome = DeliveryOutcome(status=DeliveryStatus.TIMEOUT, email=email, error="Timeout sending email")
        except MailTransportError as e:
            logging.error(f"Email send error: {e}", extra={"recipient": recipient})
            outcome = DeliveryOutcome(
                status=DeliveryStatus.TRANSPORT_ERROR,
                email=email,
                error=f"Error sending email: {e}",
            )

        email_dispatch_latency_histogram.observe(time.time() - start_time)
        record_dispatch(outcome.status)
        return outcome

    def _dispatch(self, transport: MailTransport, message: EmailMessage) -> None:
        """
        Race the transport against the deadline.

        Raises:
            MailDispatchTimeout: Deadline elapsed first
            MailTransportError: Transport failed within the deadline
        """
        future = self.executor.submit(transport.send, message)
        done, _ = wait([future], timeout=self.timeout)
        if not done:
            # A send still queued behind stuck workers is dropped, not delivered late
            if future.cancel():
                logging.warning("Queued email send cancelled at deadline")
            else:
                future.add_done_callback(_log_abandoned_send)
            raise MailDispatchTimeout(f"no response from mail transport after {self.timeout}s")

        try:
            future.result()
        except MailTransportError:
            raise
        except Exception as e:
            raise MailTransportError(str(e) or e.__class__.__name__) from e

    def _load_settings(self) -> MailSettings:
        try:
            return self.settings_provider()
        except ValidationError as e:
            raise MailConfigurationError(f"Mail settings are malformed: {e}") from e
