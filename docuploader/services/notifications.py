"""
E-mail notifications: message builders, mail transports and a queue-backed dispatcher.

Workflows build EmailMessage objects after their transaction commits and hand
them to the dispatcher. A single worker thread drains the queue and sends via
the configured transport, so a slow or failing mail server never affects the
HTTP response.
"""

from __future__ import annotations

import logging
import queue
import smtplib
import threading
from dataclasses import dataclass
from email.mime.text import MIMEText
from typing import TYPE_CHECKING, Protocol

from docuploader.core.config import get_settings

if TYPE_CHECKING:
    from docuploader.core.config import Settings
    from docuploader.models import Account

logger = logging.getLogger(__name__)

CONFIRM_ACCOUNT_SUBJECT = "Confirm Your Account"
CONFIRM_ACCOUNT_MESSAGE = "Thank you for registering! Click the link below to activate your account:\n"
RESET_PASSWORD_SUBJECT = "Reset Your Password"
RESET_PASSWORD_MESSAGE = "A password reset was requested for your account. Click the link below to choose a new password:\n"
FILE_ADDED_SUBJECT = "A File Has Been Added To One Of Your Accounts"
FILE_REMOVED_SUBJECT = "A File Has Been Removed From One Of Your Accounts"

# Sentinel that tells the worker to exit.
_STOP = object()


@dataclass(frozen=True)
class EmailMessage:
    to: str
    subject: str
    body: str


def confirmation_email(to: str, token: str, base_url: str, settings: Settings | None = None) -> EmailMessage:
    settings = settings or get_settings()
    link = f"{base_url.rstrip('/')}{settings.CONFIRM_ACCOUNT_PATH}{token}"
    return EmailMessage(to=to, subject=CONFIRM_ACCOUNT_SUBJECT, body=CONFIRM_ACCOUNT_MESSAGE + link)


def password_reset_email(to: str, token: str, base_url: str, settings: Settings | None = None) -> EmailMessage:
    settings = settings or get_settings()
    link = f"{base_url.rstrip('/')}{settings.RESET_PASSWORD_PATH}{token}"
    return EmailMessage(to=to, subject=RESET_PASSWORD_SUBJECT, body=RESET_PASSWORD_MESSAGE + link)


def document_event_emails(
    document_name: str,
    account: Account,
    added: bool,
    base_url: str,
) -> list[EmailMessage]:
    """One message per current member of account announcing the added or removed document."""
    subject = FILE_ADDED_SUBJECT if added else FILE_REMOVED_SUBJECT
    action = "has been added to" if added else "has been removed from"
    body = (
        f'A file named "{document_name}" {action} the account named "{account.name}"\n'
        f"Click {base_url.rstrip('/')}/login to login to the application and view your account!"
    )
    return [EmailMessage(to=user.email, subject=subject, body=body) for user in account.users]


class MailTransport(Protocol):
    def send(self, message: EmailMessage) -> None: ...


class SmtpMailTransport:
    """Send plain-text mail through an SMTP server (STARTTLS + login when configured)."""

    def __init__(self, settings: Settings) -> None:
        self.host = settings.SMTP_HOST
        self.port = settings.SMTP_PORT
        self.username = settings.SMTP_USERNAME
        self.password = (
            settings.SMTP_PASSWORD.get_secret_value() if settings.SMTP_PASSWORD else None
        )
        self.use_tls = settings.SMTP_USE_TLS
        self.timeout = settings.SMTP_TIMEOUT_SEC
        self.sender = settings.MAIL_FROM

    def send(self, message: EmailMessage) -> None:
        msg = MIMEText(message.body, "plain", "utf-8")
        msg["From"] = self.sender
        msg["To"] = message.to
        msg["Subject"] = message.subject
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
            if self.use_tls:
                server.starttls()
            if self.username and self.password:
                server.login(self.username, self.password)
            server.send_message(msg)


class LoggingMailTransport:
    """Transport used when MAIL_ENABLED is false: logs instead of sending."""

    def send(self, message: EmailMessage) -> None:
        logger.info(
            "Mail disabled; would send to=%s subject=%r body=%r",
            message.to,
            message.subject,
            message.body,
        )


def build_transport(settings: Settings) -> MailTransport:
    if settings.MAIL_ENABLED:
        return SmtpMailTransport(settings)
    return LoggingMailTransport()


class NotificationDispatcher:
    """Bounded queue of outgoing e-mails consumed by one dedicated worker thread."""

    def __init__(self, transport: MailTransport, maxsize: int = 1000) -> None:
        self.transport = transport
        self._queue: queue.Queue = queue.Queue(maxsize=maxsize)
        self._thread: threading.Thread | None = None
        self._lock = threading.Lock()

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        with self._lock:
            if self.running:
                return
            self._thread = threading.Thread(
                target=self._run,
                name="notification-worker",
                daemon=True,
            )
            self._thread.start()
        logger.info("Notification worker started.")

    def stop(self, timeout: float = 10.0) -> None:
        """Send whatever is queued, then stop the worker."""
        with self._lock:
            thread = self._thread
            if thread is None:
                return
            self._queue.put(_STOP)
            thread.join(timeout)
            self._thread = None
        logger.info("Notification worker stopped.")

    def submit(self, message: EmailMessage) -> bool:
        """Queue message for sending without blocking. Returns False if it was dropped."""
        try:
            self._queue.put_nowait(message)
        except queue.Full:
            logger.error(
                "Notification queue full; dropping e-mail to=%s subject=%r",
                message.to,
                message.subject,
            )
            return False
        logger.debug("Queued e-mail to=%s subject=%r", message.to, message.subject)
        return True

    def submit_all(self, messages: list[EmailMessage]) -> int:
        return sum(1 for m in messages if self.submit(m))

    def join(self) -> None:
        """Block until every queued message has been processed."""
        self._queue.join()

    def _run(self) -> None:
        while True:
            item = self._queue.get()
            try:
                if item is _STOP:
                    return
                self._deliver(item)
            finally:
                self._queue.task_done()

    def _deliver(self, message: EmailMessage) -> None:
        try:
            self.transport.send(message)
        except Exception:
            logger.exception(
                "Failed to send e-mail to=%s subject=%r", message.to, message.subject
            )
            return
        logger.info("Sent e-mail to=%s subject=%r", message.to, message.subject)


_dispatcher: NotificationDispatcher | None = None


def get_dispatcher() -> NotificationDispatcher:
    """Dependency: the process-wide dispatcher, created from settings on first use."""
    global _dispatcher
    if _dispatcher is None:
        settings = get_settings()
        _dispatcher = NotificationDispatcher(
            build_transport(settings),
            maxsize=settings.NOTIFICATION_QUEUE_SIZE,
        )
    return _dispatcher
